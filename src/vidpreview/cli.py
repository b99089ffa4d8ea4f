#!/usr/bin/env python3
"""
vidpreview CLI - generate preview artifacts for video files.

Usage:
    vidpreview generate video.mp4 --id clip42
    vidpreview generate video.mp4 --count 9 --contact-sheet --quality high
    vidpreview show clip42
    vidpreview sweep --max-age-days 7
    vidpreview validate-config
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from vidpreview.config.loader import get_config
from vidpreview.config.quality import CLIP_QUALITY_LADDER
from vidpreview.exceptions import ProbeError, ToolNotFoundError
from vidpreview.models.options import PreviewOptions, ThumbnailSize
from vidpreview.operations.processor import PreviewGenerator
from vidpreview.operations.retention import sweep_old_artifacts
from vidpreview.storage.layout import OutputLayout
from vidpreview.storage.records import find_latest_bundle
from vidpreview.tools.ffmpeg import FFmpegTool
from vidpreview.tools.ffprobe import FFprobeTool
from vidpreview.utils.formatting import format_duration, format_size

logger = logging.getLogger(__name__)


def _require_tools() -> None:
    """Fail fast without ffprobe; warn when ffmpeg is missing."""
    ffprobe = FFprobeTool()
    if not ffprobe.is_available():
        raise ToolNotFoundError("ffprobe")
    if not FFmpegTool().is_available():
        logger.warning("ffmpeg not found: previews will contain no artifacts")


def _layout(args) -> OutputLayout:
    base = getattr(args, "output", None)
    if base:
        return OutputLayout(base / "previews", base / "thumbnails")
    return OutputLayout.from_config(get_config())


def _cmd_generate(args):
    """Handle the generate subcommand."""
    try:
        options = PreviewOptions(
            thumbnail_count=args.count,
            thumbnail_size=ThumbnailSize.parse(args.size),
            clip_duration_seconds=args.clip_duration,
            clip_quality=args.quality,
            generate_loop=not args.no_loop,
            generate_contact_sheet=args.contact_sheet,
        )
    except (ValidationError, ValueError) as e:
        print(f"ERROR: invalid options: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        _require_tools()
    except ToolNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    source_id = args.id or args.source.stem
    generator = PreviewGenerator(_layout(args))
    try:
        bundle = generator.generate(args.source, source_id, options)
    except ProbeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(bundle.to_dict(), indent=2))
        return

    print("\n=== PREVIEW ===")
    print(f"Bundle: {bundle.id}")
    print(
        f"Source: {bundle.source_path} "
        f"({format_duration(bundle.metadata.duration_seconds)}, "
        f"{bundle.metadata.resolution}, {format_size(bundle.metadata.file_size_bytes)})"
    )
    print(f"Thumbnails: {len(bundle.thumbnails)}/{bundle.metadata.thumbnail_count}")
    for thumb in bundle.thumbnails:
        print(f"  {thumb.time_offset_seconds:>7.1f}s  {thumb.file_path}")
    for label, path in (
        ("Clip", bundle.preview_clip_path),
        ("Loop", bundle.loop_path),
        ("Contact sheet", bundle.contact_sheet_path),
    ):
        if path:
            print(f"{label}: {path}")
    for stage, error in bundle.stage_errors.items():
        print(f"Failed {stage}: {error}")


def _cmd_show(args):
    """Handle the show subcommand."""
    layout = _layout(args)
    bundle = find_latest_bundle(args.source_id, layout.records_dir)
    if bundle is None:
        print(f"No preview recorded for '{args.source_id}'", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(bundle.to_dict(), indent=2))


def _cmd_sweep(args):
    """Handle the sweep subcommand."""
    days = args.max_age_days if args.max_age_days is not None else get_config().retention_days
    report = sweep_old_artifacts(days, _layout(args))
    print(json.dumps(report.to_dict(), indent=2))
    if report.errors:
        sys.exit(1)


def _cmd_validate_config(args):
    """Handle the validate-config subcommand."""
    config = get_config()
    result = config.to_dict()
    result["ffmpeg"] = FFmpegTool().is_available()
    result["ffprobe"] = FFprobeTool().is_available()
    print(json.dumps(result, indent=2))
    if not result["ffprobe"]:
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(
        description="Generate preview artifacts for video files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s generate video.mp4
    %(prog)s generate video.mp4 --id clip42 --count 9 --contact-sheet
    %(prog)s generate video.mp4 --quality high --clip-duration 20 --json
    %(prog)s show clip42
    %(prog)s sweep --max-age-days 3
    %(prog)s validate-config
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser("generate", help="Generate a preview bundle")
    gen_parser.add_argument("source", type=Path, help="Source video file")
    gen_parser.add_argument("--id", help="Source identifier (default: file stem)")
    gen_parser.add_argument(
        "--count", type=int, default=6, help="Number of thumbnails (default: 6)"
    )
    gen_parser.add_argument(
        "--size", default="320x240", help="Thumbnail size WxH (default: 320x240)"
    )
    gen_parser.add_argument(
        "--clip-duration", type=int, default=10,
        help="Preview clip length in seconds (default: 10)",
    )
    gen_parser.add_argument(
        "--quality", choices=CLIP_QUALITY_LADDER, default="medium",
        help="Preview clip quality (default: medium)",
    )
    gen_parser.add_argument("--no-loop", action="store_true", help="Skip the animated loop")
    gen_parser.add_argument(
        "--contact-sheet", action="store_true", help="Tile thumbnails into a contact sheet"
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the bundle as JSON")
    gen_parser.add_argument("-o", "--output", type=Path, help="Output base directory")

    show_parser = subparsers.add_parser("show", help="Show the latest recorded bundle")
    show_parser.add_argument("source_id", help="Source identifier")
    show_parser.add_argument("-o", "--output", type=Path, help="Output base directory")

    sweep_parser = subparsers.add_parser("sweep", help="Delete old preview files")
    sweep_parser.add_argument(
        "--max-age-days", type=int, default=None,
        help="Delete files older than this (default: configured retention_days)",
    )
    sweep_parser.add_argument("-o", "--output", type=Path, help="Output base directory")

    subparsers.add_parser("validate-config", help="Show resolved configuration")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    if args.command == "generate":
        _cmd_generate(args)
    elif args.command == "show":
        _cmd_show(args)
    elif args.command == "sweep":
        _cmd_sweep(args)
    elif args.command == "validate-config":
        _cmd_validate_config(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
