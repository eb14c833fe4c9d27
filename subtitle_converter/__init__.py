"""Subtitle Converter: speech-recognition SRT to SRT/ASS subtitle files.

WHY: The transcription engine (whisper.cpp) writes a plain SRT transcript.
Editors and players need clean SRT, styled ASS, or karaoke ASS with
per-word highlight timing. This package parses the engine output leniently
and serializes it to those formats with exact integer timing.

HOW: Three-stage pipeline: parse (core.parser → Cue IR), optionally
segment words (core.karaoke), format (pluggable formatters). The converter
module adds file I/O, the CLI and HTTP server sit on top.

RULES:
- All formatters consume the same Cue IR
- Adding a new output format = one new formatter module, no core changes
- Times are integer milliseconds end to end
"""

__version__ = "0.1.0"
