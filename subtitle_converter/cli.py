"""Command-line interface for the subtitle converter.

WHY: Users and batch scripts need to turn the transcription engine's SRT
output into SRT or ASS (optionally karaoke) files from the terminal,
without the desktop app.

HOW: Uses argparse to accept the SRT path, output format, karaoke flag,
granularity preset and output location, then delegates to
converter.convert_file(). Status messages go to stderr; the preview is
printed to stdout.

RULES:
- Positional argument: the engine's SRT file (required unless --serve)
- --output wins over --output-dir/--name; otherwise a free name is chosen
  next to the input (or in --output-dir)
- Exit codes: 0 = success, 1 = conversion error
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from subtitle_converter.config import (
    DEFAULT_GRANULARITY,
    DEFAULT_OUTPUT_FORMAT,
    LOG_LEVEL,
    PREVIEW_LIMIT,
)
from subtitle_converter.converter import ConversionRequest, ConversionResult, convert_file
from subtitle_converter.core.granularity import GranularityPreset, engine_arguments
from subtitle_converter.core.ir import SubtitleFormat
from subtitle_converter.core.timecodes import ms_to_srt_time
from subtitle_converter.errors import ConversionError

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _print_preview(result: ConversionResult) -> None:
    for item in result.preview:
        print("{:>4}  {} --> {}  {}".format(
            item.index,
            ms_to_srt_time(item.start_ms),
            ms_to_srt_time(item.end_ms),
            item.text.replace("\n", " / "),
        ))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separated from main() so tests can inspect the parser without running
    a conversion.
    """
    parser = argparse.ArgumentParser(
        prog="subtitle_converter",
        description="Convert a speech-recognition SRT transcript into SRT or "
                    "ASS subtitles (optionally with karaoke word timing).",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        help="Path to the SRT file written by the transcription engine.",
    )

    parser.add_argument(
        "--format",
        dest="subtitle_format",
        choices=[f.value for f in SubtitleFormat],
        default=DEFAULT_OUTPUT_FORMAT,
        help="Output subtitle format (default: %(default)s).",
    )

    parser.add_argument(
        "--karaoke",
        action="store_true",
        help="Add per-word karaoke timing tags (ASS only).",
    )

    parser.add_argument(
        "--granularity",
        type=str.upper,
        choices=[p.value for p in GranularityPreset],
        default=DEFAULT_GRANULARITY,
        help="Granularity preset the engine was run with (default: %(default)s).",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Exact output file path. Overrides --output-dir and --name.",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save the output file (default: same as input file).",
    )

    parser.add_argument(
        "--name",
        default=None,
        help="Base name for the output file (default: input file stem).",
    )

    parser.add_argument(
        "--preview",
        type=int,
        default=PREVIEW_LIMIT,
        help="Number of cues to print after converting; 0 disables (default: %(default)s).",
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the HTTP API instead of converting a file.",
    )

    return parser


def run(args: argparse.Namespace) -> int:
    """Run one conversion from parsed arguments and return the exit code."""
    input_path = Path(args.input_file).resolve()

    output_dir = None
    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
        if not output_dir.is_dir():
            _status("Error: Output directory does not exist: {}".format(output_dir))
            return 1

    request = ConversionRequest(
        srt_path=input_path,
        output_path=Path(args.output).resolve() if args.output else None,
        format=SubtitleFormat(args.subtitle_format),
        karaoke=args.karaoke,
        granularity=args.granularity,
        output_dir=output_dir,
        base_name=args.name,
    )

    _status("Converting {} to {}...".format(input_path.name, request.format.value))
    _status("  Granularity: {} (engine args: {})".format(
        args.granularity, " ".join(engine_arguments(args.granularity)) or "none"
    ))
    if args.karaoke and request.format is not SubtitleFormat.ass:
        _status("  Note: --karaoke only applies to ASS output; ignoring.")

    try:
        result = convert_file(request, preview_limit=max(args.preview, 0))
    except ConversionError as e:
        logger.debug("Conversion failed: %s", e.to_dict())
        _status("Error: {}".format(e.message))
        if e.details:
            _status("  {}".format(e.details))
        return 1

    _status("  {} cues".format(result.cue_count))
    if result.overlong_cues:
        _status("  Warning: {} cue(s) longer than the {} preset allows".format(
            len(result.overlong_cues), result.granularity.value
        ))
    _status("Saved: {}".format(result.output_path))

    _print_preview(result)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - --serve starts the HTTP API; the input file is then optional
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.serve:
        from subtitle_converter.server.app import run_api

        run_api()
        return

    if args.input_file is None:
        parser.error("the following arguments are required: input_file")

    configure_logging()
    sys.exit(run(args))


if __name__ == "__main__":
    main()
