"""
Command-line interface for cycloscan.

Each source file is analyzed as its own translation unit: a fresh
complexity map, one remark per function on stderr, and a report file.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from cycloscan import __version__
from cycloscan.core.config import Config, create_default_config, find_config
from cycloscan.core.engine import AnalysisEngine
from cycloscan.core.errors import CycloscanError
from cycloscan.frontend import FRONTEND_NAMES
from cycloscan.reporting.formatters import get_formatter
from cycloscan.utils.files import iter_translation_units


CONFIG_FILE = ".cycloscan.yaml"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cycloscan",
        description="Per-function cyclomatic complexity for C and C++ sources.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cycloscan analyze main.c                       # Report to ./results.cy
  cycloscan analyze src/ -r "reports/{stem}.cy"  # One report per unit
  cycloscan analyze main.i                       # Preprocessed input
  cycloscan analyze main.cpp --frontend clang    # Full translation unit
  cycloscan init                                 # Create config file
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser("analyze", help="Compute cyclomatic complexity")
    analyze_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Source files or directories (default: current directory)",
    )
    analyze_parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    analyze_parser.add_argument(
        "--frontend",
        choices=FRONTEND_NAMES,
        help="Source frontend (overrides config)",
    )
    analyze_parser.add_argument(
        "--clang-arg",
        action="append",
        dest="clang_args",
        help="Extra compiler argument for the clang frontend (repeatable)",
    )
    analyze_parser.add_argument(
        "-r", "--report",
        help="Report file path; {stem} expands to the unit's file stem",
    )
    analyze_parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        help="Summary format (overrides config)",
    )
    analyze_parser.add_argument(
        "-o", "--output",
        help="Write the summary to a file instead of stdout",
    )
    analyze_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print a summary",
    )
    analyze_parser.add_argument(
        "--no-diagnostics",
        action="store_true",
        help="Do not print per-function remarks",
    )
    analyze_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored remarks",
    )
    analyze_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose logging",
    )

    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(args: argparse.Namespace) -> Config:
    config_path = args.config or find_config(args.paths[0] if args.paths else ".")
    config = Config.load(config_path)

    overrides = {}
    if args.frontend:
        overrides.setdefault("frontend", {})["name"] = args.frontend
    if args.clang_args:
        overrides.setdefault("frontend", {})["clang_args"] = args.clang_args
    if args.report:
        overrides["report"] = {"path": args.report}
    if args.no_diagnostics:
        overrides.setdefault("diagnostics", {})["enabled"] = False
    if args.no_color:
        overrides.setdefault("diagnostics", {})["color"] = False
    if args.format:
        overrides["output"] = {"format": args.format}
    return config.with_overrides(overrides)


def cmd_analyze(args: argparse.Namespace) -> int:
    """Execute the analyze command."""
    config = _load_config(args)

    units: List[str] = []
    for path in args.paths:
        if not os.path.exists(path):
            raise FileNotFoundError(f"No such file or directory: {path}")
        units.extend(iter_translation_units(path, config.header_extensions()))

    engine = AnalysisEngine(config)
    results = engine.analyze_paths(units)

    if not args.quiet:
        output = get_formatter(config.output_format())(results)
        if args.output:
            Path(args.output).write_text(output, encoding="utf-8")
        else:
            print(output, end="")

    return 0 if all(result.ok for result in results) else 1


def cmd_init(args: argparse.Namespace) -> int:
    """Execute the init command."""
    if os.path.exists(CONFIG_FILE) and not args.force:
        print(f"Configuration file {CONFIG_FILE} already exists.")
        print("Use --force to overwrite.")
        return 1

    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        f.write(create_default_config())

    print(f"Created configuration file: {CONFIG_FILE}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(getattr(args, "verbose", False))

    try:
        if args.command == "analyze":
            return cmd_analyze(args)
        elif args.command == "init":
            return cmd_init(args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\nAnalysis interrupted.")
        return 130
    except (CycloscanError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
