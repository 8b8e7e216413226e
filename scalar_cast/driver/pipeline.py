"""Evaluation pipeline: source text -> per-line results and diagnostics."""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from lark import UnexpectedInput

from scalar_cast.backend.casts import CastEvaluator
from scalar_cast.backend.scalar import Scalar
from scalar_cast.internals import errors as er
from scalar_cast.internals.parser import describe_parse_error, parse_expression
from scalar_cast.internals.report import Reporter, Span
from scalar_cast.semantics.ast_builder import ASTBuilder, BuildError
from scalar_cast.semantics.categories import CastCategory, pairs_by_category
from scalar_cast.semantics.interpreter import CastInterpreter
from scalar_cast.semantics.type_predicates import ALL_KINDS


@dataclass
class LineResult:
    line: int              # 1-based source line
    text: str              # Expression text without comment
    value: Optional[Scalar]

    @property
    def ok(self) -> bool:
        return self.value is not None


def strip_comment(line: str) -> str:
    return line.split("#", 1)[0].strip()


def run_source(source: str, reporter: Reporter, evaluator: CastEvaluator,
               out: Optional[TextIO] = None, dump_parse: bool = False,
               dump_ast: bool = False) -> List[LineResult]:
    """Evaluate every non-blank line of `source`, printing results to `out`.

    Diagnostics go to `reporter`; a bad line does not stop later lines.
    """
    out = out or sys.stdout
    interpreter = CastInterpreter(reporter, evaluator)
    results: List[LineResult] = []

    for index, raw in enumerate(source.splitlines()):
        text = strip_comment(raw)
        if not text:
            continue
        line_no = index + 1

        try:
            tree = parse_expression(raw, dump_parse=dump_parse)
        except UnexpectedInput as e:
            span = Span(line_no, e.column, line_no, e.column) if e.column and e.column > 0 else None
            er.emit(reporter, er.ERR.CE1001, span, detail=describe_parse_error(e))
            results.append(LineResult(line_no, text, None))
            continue

        try:
            expr = ASTBuilder(line_offset=index).build(tree)
        except BuildError as e:
            er.emit(reporter, er.ERR[e.code], e.span, **e.details)
            results.append(LineResult(line_no, text, None))
            continue

        if dump_ast:
            print(expr, file=out)

        value = interpreter.evaluate(expr)
        if value is not None:
            print(f"{text} = {value}", file=out)
        results.append(LineResult(line_no, text, value))

    return results


_CATEGORY_ABBREVIATIONS = {
    CastCategory.PROMOTION: "P",
    CastCategory.HALF_PROMOTION: "H",
    CastCategory.NARROW_FROM_UNSIGNED: "NU",
    CastCategory.NARROW_FROM_SIGNED: "NS",
    CastCategory.FROM_FLOAT: "FF",
    CastCategory.FLOAT_NARROW: "FN",
}


def render_cast_table(evaluator: CastEvaluator) -> str:
    """Render the classification of all 144 ordered kind pairs as a grid.

    The legend counts the fixed-width pairs in each category.
    """
    catalog = evaluator.catalog
    native = ", ".join(f"{k} = {v}" for k, v in catalog.native_mapping.items())
    lines = [f"pointer width: {catalog.pointer_width} ({native})", ""]

    width = 6
    lines.append("src\\dst".ljust(width + 2) + "".join(str(k).ljust(width) for k in ALL_KINDS).rstrip())
    for src in ALL_KINDS:
        cells = "".join(_CATEGORY_ABBREVIATIONS[evaluator.classify(src, dst)].ljust(width) for dst in ALL_KINDS)
        lines.append(str(src).ljust(width + 2) + cells.rstrip())

    lines.append("")
    grouped = pairs_by_category()
    for category, abbreviation in _CATEGORY_ABBREVIATIONS.items():
        lines.append(f"{abbreviation.ljust(3)}{str(category).ljust(22)}{len(grouped[category])} fixed-width pairs")
    return "\n".join(lines)
