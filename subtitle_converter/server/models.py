"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for response serialization
and automatic OpenAPI documentation. Pydantic models enforce field types
at runtime and generate JSON Schema that appears in the /docs UI.

HOW: Each endpoint has its own response model. Enums for formats and
granularity presets are reused from the core IR so the API accepts
exactly what the converter accepts.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Response models never expose internal implementation details
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class PreviewCue(BaseModel):
    """One cue of the conversion preview."""

    index: int = Field(description="1-based cue index.")
    start_ms: int = Field(description="Cue start in milliseconds.")
    end_ms: int = Field(description="Cue end in milliseconds.")
    text: str = Field(description="Cue text; lines separated by '\\n'.")


class ConversionResponse(BaseModel):
    """Result of converting an uploaded SRT transcript.

    RULES:
    - content is the complete subtitle file text
    - karaoke is always false for srt output
    - overlong_cues lists indices longer than the granularity preset allows
    """

    filename: str = Field(description="Suggested output filename.")
    format: str = Field(description="Output subtitle format ('srt' or 'ass').")
    karaoke: bool = Field(description="Whether karaoke word tags were emitted.")
    granularity: str = Field(description="Resolved granularity preset.")
    cue_count: int = Field(description="Number of cues in the converted document.")
    content: str = Field(description="The serialized subtitle file.")
    preview: List[PreviewCue] = Field(description="First cues of the document.")
    overlong_cues: List[int] = Field(
        default_factory=list,
        description="Indices of cues exceeding the preset's caption length.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "filename": "interview.srt",
                "format": "srt",
                "karaoke": False,
                "granularity": "MEDIUM",
                "cue_count": 1,
                "content": "1\n00:00:00,320 --> 00:00:03,120\nHello world\n",
                "preview": [
                    {"index": 1, "start_ms": 320, "end_ms": 3120, "text": "Hello world"}
                ],
                "overlong_cues": [],
            }
        ]
    }}


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '.srt').")


class GranularityInfo(BaseModel):
    """One granularity preset and the engine arguments it maps to."""

    preset: str = Field(description="Preset name.")
    max_caption_chars: Optional[int] = Field(
        default=None,
        description="Maximum characters per caption; null means unbounded.",
    )
    split_on_word: bool = Field(description="Engine splits only on word boundaries.")
    engine_arguments: List[str] = Field(description="whisper.cpp CLI flags for this preset.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
