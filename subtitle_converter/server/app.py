"""FastAPI application exposing the conversion pipeline over HTTP.

WHY: The presentation layer (desktop shell, scripts, n8n, curl) hands the
converter an engine SRT plus a format selector, a karaoke flag and the
granularity preset, and wants back the serialized document and a bounded
preview. FastAPI provides request validation and OpenAPI docs for free.

HOW: POST /conversions accepts a multipart SRT upload with form fields
and returns a ConversionResponse as JSON. POST /conversions/download runs
the same conversion and returns the file itself as an attachment. Read-only
endpoints list formats, granularity presets and health.

RULES:
- Conversions are pure and in-memory; nothing is written to disk here
- Error responses use a consistent ErrorResponse schema
- Unsupported upload types and unknown formats → 400; non-UTF-8 → 422
- Unknown granularity names fall back to MEDIUM (never an error)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, List, Optional, Tuple
from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from subtitle_converter import __version__
from subtitle_converter.config import PREVIEW_LIMIT, SUPPORTED_INPUT_SUFFIXES
from subtitle_converter.converter import convert_text
from subtitle_converter.core.granularity import (
    GRANULARITY_PRESETS,
    check_caption_lengths,
    engine_arguments,
    resolve_granularity,
)
from subtitle_converter.core.ir import SubtitleDocument, SubtitleFormat
from subtitle_converter.core.preview import build_preview
from subtitle_converter.formatters import FORMATTERS, get_formatter
from subtitle_converter.output import sanitize_base_name
from subtitle_converter.server.models import (
    ConversionResponse,
    ErrorResponse,
    FormatInfo,
    GranularityInfo,
    HealthResponse,
    PreviewCue,
)

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_STEM = "subtitles"

app = FastAPI(
    title="Subtitle Converter API",
    description=(
        "Convert speech-recognition SRT transcripts into SRT or ASS subtitles, "
        "with optional karaoke word timing, and get a preview of the result."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_upload_name(filename: str) -> str:
    """Return the bare filename, raising HTTPException for unsupported types."""
    name = Path(filename).name
    ext = Path(name).suffix.lower()
    if ext not in SUPPORTED_INPUT_SUFFIXES:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(SUPPORTED_INPUT_SUFFIXES))
            ),
        )
    return name


def _parse_format(value: str) -> SubtitleFormat:
    try:
        return SubtitleFormat(value.strip().lower())
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="Unknown subtitle format '{}'. Available: {}".format(
                value, ", ".join(f.value for f in SubtitleFormat)
            ),
        )


async def _read_upload(file: UploadFile) -> Tuple[str, str]:
    """Read and decode an uploaded transcript, returning (filename, text)."""
    filename = _validate_upload_name(file.filename or "upload.srt")
    raw = await file.read()
    try:
        return filename, raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail="Transcript is not valid UTF-8 text")


def _convert(filename: str, content: str, fmt: SubtitleFormat, karaoke: bool) -> Tuple[SubtitleDocument, str]:
    """Run the pure conversion, turning unexpected failures into a 500."""
    try:
        return convert_text(content, fmt, karaoke)
    except Exception:
        logger.exception("Conversion failed for %s", filename)
        raise HTTPException(status_code=500, detail="Conversion failed for {}".format(filename))


def _output_filename(source_name: str, subtitle_format: SubtitleFormat, base_name: Optional[str]) -> str:
    stem = sanitize_base_name(base_name) if base_name else ""
    if not stem:
        stem = sanitize_base_name(Path(source_name).stem) or DEFAULT_DOWNLOAD_STEM
    return "{}{}".format(stem, get_formatter(subtitle_format).suffix)


def _content_disposition(filename: str) -> str:
    """Build an attachment header that survives non-Latin-1 filenames.

    RULES:
    - ``filename`` carries an ASCII-only fallback for old clients
    - ``filename*`` carries the exact UTF-8 name, percent-encoded (RFC 5987)
    """
    path = Path(filename)
    ascii_stem = " ".join(path.stem.encode("ascii", "ignore").decode("ascii").split())
    fallback = "{}{}".format(ascii_stem or DEFAULT_DOWNLOAD_STEM, path.suffix)
    return "attachment; filename=\"{}\"; filename*=UTF-8''{}".format(
        fallback, quote(filename, safe="")
    )


# ---------------------------------------------------------------------------
# Endpoints: Conversions
# ---------------------------------------------------------------------------


@app.post(
    "/conversions",
    response_model=ConversionResponse,
    tags=["conversions"],
    summary="Convert an SRT transcript",
    description=(
        "Upload the SRT written by the transcription engine. Returns the "
        "serialized subtitle file, a bounded preview and the granularity "
        "consistency report."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid file type or format"},
        422: {"model": ErrorResponse, "description": "Transcript is not UTF-8 text"},
    },
)
async def create_conversion(
    file: Annotated[
        UploadFile,
        File(description="SRT transcript produced by the transcription engine."),
    ],
    format: Annotated[
        str,
        Form(description="Output format: 'srt' or 'ass'."),
    ] = "srt",
    karaoke: Annotated[
        bool,
        Form(description="Emit per-word karaoke tags (ASS only)."),
    ] = False,
    granularity: Annotated[
        Optional[str],
        Form(description="Granularity preset used upstream (LOW, MEDIUM, HIGH, ULTRA)."),
    ] = None,
    preview_limit: Annotated[
        int,
        Form(description="Maximum number of preview cues."),
    ] = PREVIEW_LIMIT,
    base_name: Annotated[
        Optional[str],
        Form(description="Base name for the suggested output filename."),
    ] = None,
) -> ConversionResponse:
    filename, content = await _read_upload(file)
    fmt = _parse_format(format)
    preset = resolve_granularity(granularity)

    document, serialized = _convert(filename, content, fmt, karaoke)
    logger.info("Converted %s: %d cues to %s", filename, len(document.cues), fmt.value)

    preview = [
        PreviewCue(**item.to_dict())
        for item in build_preview(document.cues, max(preview_limit, 0))
    ]
    return ConversionResponse(
        filename=_output_filename(filename, fmt, base_name),
        format=fmt.value,
        karaoke=document.karaoke,
        granularity=preset.value,
        cue_count=len(document.cues),
        content=serialized,
        preview=preview,
        overlong_cues=[c.index for c in check_caption_lengths(document.cues, preset)],
    )


@app.post(
    "/conversions/download",
    tags=["conversions"],
    summary="Convert an SRT transcript and download the file",
    description="Same conversion as POST /conversions, returned as a file attachment.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid file type or format"},
        422: {"model": ErrorResponse, "description": "Transcript is not UTF-8 text"},
    },
)
async def download_conversion(
    file: Annotated[
        UploadFile,
        File(description="SRT transcript produced by the transcription engine."),
    ],
    format: Annotated[
        str,
        Form(description="Output format: 'srt' or 'ass'."),
    ] = "srt",
    karaoke: Annotated[
        bool,
        Form(description="Emit per-word karaoke tags (ASS only)."),
    ] = False,
    base_name: Annotated[
        Optional[str],
        Form(description="Base name for the downloaded file."),
    ] = None,
) -> Response:
    filename, content = await _read_upload(file)
    fmt = _parse_format(format)
    document, serialized = _convert(filename, content, fmt, karaoke)
    formatter = get_formatter(fmt, document.karaoke)
    out_name = _output_filename(filename, fmt, base_name)

    return Response(
        content=serialized.encode("utf-8"),
        media_type="{}; charset=utf-8".format(formatter.media_type),
        headers={"Content-Disposition": _content_disposition(out_name)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Reference data
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in FORMATTERS.items():
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


@app.get(
    "/granularity-presets",
    response_model=List[GranularityInfo],
    tags=["formats"],
    summary="List granularity presets",
    description="The preset table and the whisper.cpp flags each preset maps to.",
)
async def list_granularity_presets() -> List[GranularityInfo]:
    return [
        GranularityInfo(
            preset=preset.value,
            max_caption_chars=settings.max_caption_chars,
            split_on_word=settings.split_on_word,
            engine_arguments=engine_arguments(preset),
        )
        for preset, settings in GRANULARITY_PRESETS.items()
    ]


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Entry point for the subtitle-converter-api console script."""
    import uvicorn

    from subtitle_converter.cli import configure_logging

    configure_logging()
    uvicorn.run(app, host=host, port=port)
