"""
Heckel Diff Entry Point
=======================

Command-line interface: reads the two inputs, runs the engine and prints one
line per diff operation as `<kind> <old> -> <new>`, with -1 for a missing side.

Usage:
    python -m heckel_diff <source_a> [source_b] [--edits-only]
"""
import argparse
import logging
import sys
from .engine import HeckelEngine
from .errors import ReadError
from .input_controller import InputController

# Default Configuration
DEFAULT_CONFIG = {
    "ENCODING": "utf-8",
    "IGNORE_WHITESPACE": False,
    "IGNORE_CASE": False,
    "INCLUDE_UNCHANGED": True,
}


def build_config(args) -> dict:
    """Overlays command line flags on DEFAULT_CONFIG."""
    config = dict(DEFAULT_CONFIG)
    if args.encoding: config["ENCODING"] = args.encoding
    if args.ignore_whitespace: config["IGNORE_WHITESPACE"] = True
    if args.ignore_case: config["IGNORE_CASE"] = True
    if args.edits_only: config["INCLUDE_UNCHANGED"] = False
    return config


def main(argv=None):
    """
    Main execution function.

    1. Parses command line arguments.
    2. Reads the old and new lines.
    3. Runs the engine.
    4. Prints the operations to stdout.
    """
    parser = argparse.ArgumentParser(description="Heckel Diff: line-level symbol table diff")
    parser.add_argument("source_a", help="Old file, or a single combined file")
    parser.add_argument("source_b", nargs="?", help="New file (optional)")
    parser.add_argument("--edits-only", action="store_true", help="Omit unchanged lines")
    parser.add_argument("--ignore-whitespace", action="store_true", help="Collapse runs of whitespace before comparing")
    parser.add_argument("--ignore-case", action="store_true", help="Compare lines case-insensitively")
    parser.add_argument("--encoding", help="Input encoding (default: utf-8)")
    parser.add_argument("--verbose", action="store_true", help="Log pass statistics to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    config = build_config(args)

    # 1. Read Input
    controller = InputController(config["ENCODING"], config["IGNORE_WHITESPACE"], config["IGNORE_CASE"])
    try:
        lines_old, lines_new = controller.parse(args.source_a, args.source_b)
    except ReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # 2. Run Diff
    operations = HeckelEngine(lines_old, lines_new).run(config["INCLUDE_UNCHANGED"])

    # 3. Output Results
    for op in operations:
        old, new = op.as_mapping()
        print(f"{op.kind} {old} -> {new}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
