"""HTTP API for the subtitle converter (FastAPI)."""
