"""
KMP Updater CLI — upgrade DMDC course files to the canonical layout.

Commands:
  kmp-updater convert - Convert one or more course files (writes <name>.new.kmp)
  kmp-updater info    - Show header fields and decoded sections of a course file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _setup_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def cmd_convert(args: argparse.Namespace) -> None:
    """Convert each existing input file; missing paths are skipped."""
    from kmp.convert import convert_files, load_config

    config = load_config(Path(args.config) if args.config else None)
    _setup_logging(config["log_level"], args.verbose)

    strict = config["strict"] and not args.lenient
    suffix = args.suffix or config["output_suffix"]

    results = convert_files(args.paths, strict=strict, suffix=suffix)
    failed = 0
    for result in results:
        if result.ok:
            print(f"Converted file: {result.output}")
            for diag in result.diagnostics:
                print(f"  warning: {diag}")
        else:
            failed += 1
            print(f"Error: {result.source}: {result.detail}", file=sys.stderr)

    if failed:
        sys.exit(1)


def cmd_info(args: argparse.Namespace) -> None:
    """Show header fields and decoded sections of a course file."""
    from kmp._format.errors import KMPFormatError
    from kmp._format.reader import KMPReader

    _setup_logging("WARNING", args.verbose)

    try:
        doc = KMPReader.read(args.path, strict=not args.lenient)
    except (KMPFormatError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"{args.path}")
    print(f"  version:     0x{doc.version:X}")
    print(f"  header size: 0x{doc.header_size:X}")
    print(f"  total size:  {doc.total_size}")
    print(f"  sections:    {len(doc.sections)}\n")
    for section in doc.sections.values():
        print(
            f"  {section.tag}  entries={section.entry_count:<5d} "
            f"extra=0x{section.extra:04X}  bytes={section.payload_size}"
        )
    if doc.diagnostics:
        print()
        for diag in doc.diagnostics:
            print(f"  warning: {diag}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="kmp-updater",
        description="KMP Updater — upgrade DMDC course files to the canonical layout.",
    )
    from kmp import __version__
    parser.add_argument("--version", action="version", version=f"kmp-updater {__version__}")
    sub = parser.add_subparsers(dest="command")

    # convert
    p_conv = sub.add_parser("convert", help="Convert course files to the canonical layout")
    p_conv.add_argument("paths", nargs="+", help="Course files to convert")
    p_conv.add_argument("--config", help="Path to updater.toml (default: ~/.kmp/updater.toml)")
    p_conv.add_argument("--suffix", help="Output file suffix (default: .new.kmp)")
    p_conv.add_argument(
        "--lenient", action="store_true",
        help="Drop truncated sections instead of failing the file",
    )
    p_conv.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    # info
    p_info = sub.add_parser("info", help="Show decoded sections of a course file")
    p_info.add_argument("path", help="Course file")
    p_info.add_argument("--lenient", action="store_true", help="Tolerate truncated sections")
    p_info.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    if not args.command:
        print("KMP Updater — DMDC course file upgrade")
        print()
        print("Usage:")
        print("  kmp-updater convert course.kmp [more.kmp ...] [--lenient] [--suffix .new.kmp]")
        print("  kmp-updater info course.kmp")
        print()
        print("Run 'kmp-updater <command> --help' for details on any command.")
        sys.exit(0)

    commands = {
        "convert": cmd_convert,
        "info": cmd_info,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
