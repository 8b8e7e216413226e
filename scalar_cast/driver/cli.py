"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from scalar_cast.backend.casts import CastEvaluator
from scalar_cast.config import CastConfig
from scalar_cast.driver.pipeline import render_cast_table, run_source
from scalar_cast.internals import errors as er
from scalar_cast.internals.exceptions import ConfigError
from scalar_cast.internals.report import Reporter
from scalar_cast.internals.version import print_banner, version_line
from scalar_cast.semantics.catalog import TypeCatalog
from scalar_cast.semantics.typesys import ScalarKind


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="scast", description="Checked machine scalar casts")

    ap.add_argument("source", nargs='?', help="File of cast expressions, one per line (.cast)")
    ap.add_argument("-e", "--expr", action="append", default=[], metavar="EXPR",
                    help="Evaluate EXPR, e.g. '256i16 as u8' (repeatable)")
    ap.add_argument("--pointer-width", type=int, choices=[32, 64],
                    help="Pointer width that isize/usize resolve against")
    ap.add_argument("--target", metavar="TRIPLE",
                    help="Derive the pointer width from an LLVM target triple")
    ap.add_argument("--table", action="store_true",
                    help="Print the classification of every kind pair and exit")
    ap.add_argument("--classify", nargs=2, metavar=("SRC", "DST"),
                    help="Print the cast category of one kind pair and exit")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("--no-banner", action="store_true", help="Do not print the version banner")
    ap.add_argument("--dump-parse", action="store_true", help="Print raw Lark trees")
    ap.add_argument("--dump-ast", action="store_true", help="Print AST nodes")
    return ap


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        0 on success, 1 if only warnings were reported, 2 on errors.
    """
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.version:
        print(version_line())
        return 0

    if not args.no_banner:
        print_banner()

    try:
        config = CastConfig.resolve(pointer_width=args.pointer_width, target=args.target)
    except ConfigError as e:
        reporter = Reporter(filename="scast")
        er.emit(reporter, er.ERR[e.code], None, **e.details)
        reporter.print()
        return reporter.exit_code

    evaluator = CastEvaluator(TypeCatalog.from_config(config))

    if args.table:
        print(render_cast_table(evaluator))
        return 0

    if args.classify:
        return _classify(evaluator, *args.classify)

    if args.source:
        path = Path(args.source)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            print(f"Error: cannot read {path}: {e.strerror}", file=sys.stderr)
            return 2
        filename = str(path)
    elif args.expr:
        source = "\n".join(args.expr)
        filename = "<expr>"
    else:
        ap.error("nothing to do: pass a source file, -e EXPR, --table or --classify")

    reporter = Reporter(source, filename=filename)
    run_source(source, reporter, evaluator, dump_parse=args.dump_parse, dump_ast=args.dump_ast)
    reporter.print()
    return reporter.exit_code


def _classify(evaluator: CastEvaluator, src_name: str, dst_name: str) -> int:
    reporter = Reporter(filename="scast")
    kinds = []
    for name in (src_name, dst_name):
        kind = ScalarKind.from_name(name)
        if kind is None:
            er.emit(reporter, er.ERR.CE1002, None, name=name)
        kinds.append(kind)

    if reporter.has_errors:
        reporter.print()
        return reporter.exit_code

    src, dst = kinds
    print(f"{src} -> {dst}: {evaluator.classify(src, dst)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
