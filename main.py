#!/usr/bin/env python3
"""
Trim Silence CLI
Remove leading and trailing silence from MP3, WAV and OGG files with ffmpeg.

Usage:
    python main.py song.mp3
    python main.py song.wav --threshold -50 --stop 0.5
    python main.py --all
    python main.py --all --in-place --no-backup
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from tqdm import tqdm

from application.dto.trim_dto import TrimOptions, TrimResult, TrimStatus
from infrastructure.process import SubprocessRunner
from trimmer.core import find_supported_files, trim_file, trim_files
from trimmer.printer import OutputPrinter
from trimmer.tools import resolve_tools
from trimmer.utils import (
    DEFAULT_OPTIONS,
    DEFAULT_SUFFIX,
    VERSION,
    validate_duration,
    validate_threshold,
)

EXIT_OK: int = 0
EXIT_USAGE: int = 1
EXIT_SKIPPED: int = 2
EXIT_FAILED: int = 3


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="trim-silence",
        description="Trim leading/trailing silence from MP3, WAV, and OGG files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  trim-silence "file.mp3"
  trim-silence --all
  trim-silence --all --in-place [--no-backup]
  trim-silence "file.mp3" --threshold -45 --start 0.05 --stop 0.20

Notes:
  MP3: libmp3lame (source bitrate if detectable; else VBR -q:a 2).
  WAV: PCM (16/24/32-bit chosen to match source).
  OGG: libvorbis (source bitrate if detectable; else VBR -q:a 5).
  Set FFMPEG_BINARY / FFPROBE_BINARY to use specific executables.
        """,
    )

    parser.add_argument(
        "file",
        metavar="FILE",
        nargs="?",
        default=None,
        help="Audio file to trim (.mp3, .wav, .ogg).",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Process all .mp3/.wav/.ogg files in the current directory.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    # Silence detection
    det_group = parser.add_argument_group("Silence Detection")
    det_group.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_OPTIONS["threshold"],
        metavar="N",
        help=f"Silence threshold in dB, negative (default: {DEFAULT_OPTIONS['threshold']:g}).",
    )
    det_group.add_argument(
        "--start",
        type=float,
        default=DEFAULT_OPTIONS["start"],
        metavar="SEC",
        help=f"Min leading silence to trim in seconds (default: {DEFAULT_OPTIONS['start']:g}).",
    )
    det_group.add_argument(
        "--stop",
        type=float,
        default=DEFAULT_OPTIONS["stop"],
        metavar="SEC",
        help=f"Min trailing silence to trim in seconds (default: {DEFAULT_OPTIONS['stop']:g}).",
    )

    # Output options
    out_group = parser.add_argument_group("Output Options")
    out_group.add_argument(
        "--in-place",
        action="store_true",
        help="Overwrite originals (creates a .bak backup unless --no-backup).",
    )
    out_group.add_argument(
        "--no-backup",
        action="store_true",
        help="Skip creating .bak files when using --in-place.",
    )
    out_group.add_argument(
        "--suffix",
        type=str,
        default=DEFAULT_SUFFIX,
        metavar="TEXT",
        help=f"Suffix for outputs when not in-place (default: {DEFAULT_SUFFIX}).",
    )
    out_group.add_argument(
        "--verbose",
        action="store_true",
        help="Log ffmpeg commands and failure details to stderr.",
    )
    out_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all output except errors.",
    )
    out_group.add_argument(
        "--no-color",
        "-n",
        action="store_true",
        help="Disable colored output (also auto-disabled when NO_COLOR env var is set).",
    )

    return parser


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def options_from_args(args: argparse.Namespace) -> TrimOptions:
    """Validate parsed flags and build TrimOptions. Raises ValueError."""
    validate_threshold(args.threshold)
    validate_duration(args.start, "start")
    validate_duration(args.stop, "stop")
    return TrimOptions(
        threshold_db=args.threshold,
        start_seconds=args.start,
        stop_seconds=args.stop,
        in_place=args.in_place,
        no_backup=args.no_backup,
        suffix=args.suffix,
        verbose=args.verbose,
    )


def describe_settings(options: TrimOptions) -> str:
    settings: str = (
        f"threshold={options.threshold_db:g}dB, "
        f"start>={options.start_seconds:g}s, stop>={options.stop_seconds:g}s"
    )
    if options.in_place:
        return settings + (", mode=in-place, no-backup" if options.no_backup
                           else ", mode=in-place, with-backup")
    return settings + f", suffix='{options.suffix}'"


def run_all(options: TrimOptions, printer: OutputPrinter, quiet: bool) -> int:
    targets: List[str] = find_supported_files(os.getcwd())
    if not targets:
        printer.info("No .mp3, .wav, or .ogg files found in current directory.")
        return EXIT_OK

    count: int = len(targets)
    printer.info(f"Trimming silence from {count} file{'' if count == 1 else 's'}")
    printer.detail(describe_settings(options))

    tools = resolve_tools()
    runner = SubprocessRunner()

    if quiet:
        summary = trim_files(targets, options, tools, runner)
    else:
        with tqdm(total=count, desc="Trimming", unit="file", leave=False) as pbar:

            def cli_callback(index: int, total: int, path: str, result: TrimResult) -> None:
                pbar.set_postfix_str(os.path.basename(path))
                pbar.update(1)

            summary = trim_files(targets, options, tools, runner, progress_callback=cli_callback)

    for status, line in summary.lines:
        if status is TrimStatus.OK:
            printer.item_ok(line)
        else:
            printer.item_failed(line)

    printer.summary(summary.ok, summary.errors, summary.skipped)
    if options.in_place and not options.no_backup:
        printer.detail("Backups created with .bak suffix next to originals.")
    return EXIT_OK


def run_single(path: str, options: TrimOptions, printer: OutputPrinter) -> int:
    input_path: str = os.path.abspath(path)
    result = trim_file(input_path, options, resolve_tools(), SubprocessRunner())

    if result.status is TrimStatus.OK:
        if options.in_place:
            printer.item_ok(f"Trimmed in-place: {input_path}")
        else:
            printer.item_ok(f"Wrote: {result.output_path}")
        return EXIT_OK

    if result.status is TrimStatus.SKIPPED:
        printer.info("Nothing to do.")
        return EXIT_SKIPPED

    printer.error("Failed.", hint=None if options.verbose else "Re-run with --verbose for details.")
    return EXIT_FAILED


def main(argv: Optional[List[str]] = None) -> int:
    parser: argparse.ArgumentParser = build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    printer: OutputPrinter = OutputPrinter(
        quiet=args.quiet,
        no_color=args.no_color,
    )
    setup_logging(args.verbose)

    if not args.all and not args.file:
        parser.print_help()
        return EXIT_USAGE

    try:
        options: TrimOptions = options_from_args(args)
    except ValueError as exc:
        printer.error(str(exc))
        return EXIT_USAGE

    try:
        if args.all:
            return run_all(options, printer, args.quiet)
        return run_single(args.file, options, printer)
    except KeyboardInterrupt:
        printer.warning("Cancelled.", hint="Files already processed were kept.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
