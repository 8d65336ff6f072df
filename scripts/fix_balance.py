#!/usr/bin/env python3
"""Rise of Nations: Extended Edition OBJ_MASK bug workaround.

Rebuilds balance.xml so every unit/meta pair carries its full combined
modifier, and category (OBJ_MASK) rows and columns are reset to 100.

Usage:
    python scripts/fix_balance.py [balance file or data directory]
    python scripts/fix_balance.py Data/balance.xml --output balance_out.xml

unitrules.xml is read from the same directory as the balance file unless
--unit-rules is given. Without --output the new table goes to stdout.
"""

import argparse
import io
import logging
import sys
from pathlib import Path

from ron_balance_util.errors import BalanceToolError
from ron_balance_util.pipeline import repair_balance, resolve_sources
from ron_balance_util.table_writer import write_balance_table
from ron_balance_util.unit_index import UNIT_IGNORE_LIST


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fix_balance",
        description="Rise of Nations: Extended Edition OBJ_MASK bug workaround",
    )
    parser.add_argument("path", nargs="?", type=Path,
                        help="balance.xml, or the game data directory holding it")
    parser.add_argument("--unit-rules", type=Path, default=None,
                        help="unitrules.xml path (default: next to the balance file)")
    parser.add_argument("--output", type=Path, default=None,
                        help="Output file path (default: stdout)")
    parser.add_argument("--ignore", action="append", default=[], metavar="NAME",
                        help="Extra unit name to leave out (repeatable)")
    parser.add_argument("--verify", action="store_true",
                        help="Verify mode: compare generated vs --output, don't write")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every processing step")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.path is None:
        parser.print_help(sys.stderr)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if args.verify and args.output is None:
        print("Error: --verify needs --output to compare against", file=sys.stderr)
        return 1

    balance_path, unit_rules_path = resolve_sources(args.path, args.unit_rules)
    print(f"Processing {unit_rules_path}", file=sys.stderr)
    print(f"Processing {balance_path}", file=sys.stderr)

    try:
        result = repair_balance(balance_path, unit_rules_path,
                                ignore=[*UNIT_IGNORE_LIST, *args.ignore])
        print(f"  {len(result.index)} units, {len(result.modifiers)} balance entries",
              file=sys.stderr)

        if args.verify:
            generated = io.BytesIO()
            write_balance_table(result.table, generated)
            existing = args.output.read_bytes() if args.output.exists() else b""
            if existing == generated.getvalue():
                print(f"Generated table matches {args.output}", file=sys.stderr)
                return 0
            print(f"Generated table DIFFERS from {args.output}", file=sys.stderr)
            return 1

        print("Writing new balance.xml", file=sys.stderr)
        if args.output is None:
            write_balance_table(result.table, sys.stdout.buffer)
            sys.stdout.buffer.flush()
        else:
            write_balance_table(result.table, args.output)
    except BalanceToolError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.diagnostics.has_warnings:
        print(f"  {len(result.diagnostics)} warning(s)", file=sys.stderr)
    print("Complete", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
