# semantics/interpreter.py
"""Cast expression evaluator.

Walks the AST of one expression with a CastEvaluator, producing a typed
Scalar or reporting why it could not.

Design:
- Stateless evaluation: all catalog knowledge comes from the evaluator
- Returns a Scalar, or None after emitting an error diagnostic
- A failed cast ends the chain; the error points at the failing 'as' target
- Lossy-but-legal conversions (rounding int -> float, truncating float -> int)
  succeed with a warning
"""
from __future__ import annotations
import math
from typing import Optional

from scalar_cast.backend.casts import CastEvaluator
from scalar_cast.backend.float32 import round_to_f32
from scalar_cast.backend.results import CastErrorKind, CastResult
from scalar_cast.backend.scalar import Scalar, format_value
from scalar_cast.internals import errors as er
from scalar_cast.internals.report import Reporter
from scalar_cast.semantics.ast import CastExpr, ConstRef, Expr, FloatLit, IntLit
from scalar_cast.semantics.typesys import ScalarKind


class CastInterpreter:
    """Evaluates cast expressions to Scalars.

    Emits:
        CE1003: Unknown associated constant
        CE1004: Literal out of range for its type
        CE2001-CE2004: Cast failures
        CW4001: Integer -> float cast rounded the value
        CW4002: Float -> integer cast dropped a fractional part
    """

    def __init__(self, reporter: Reporter, evaluator: CastEvaluator):
        self.reporter = reporter
        self.evaluator = evaluator
        self.catalog = evaluator.catalog

    def evaluate(self, expr: Expr) -> Optional[Scalar]:
        if isinstance(expr, IntLit):
            return self._evaluate_int_lit(expr)
        elif isinstance(expr, FloatLit):
            return self._evaluate_float_lit(expr)
        elif isinstance(expr, ConstRef):
            return self._evaluate_const(expr)
        elif isinstance(expr, CastExpr):
            return self._evaluate_cast(expr)
        er.raise_internal_error("CE0003", node=type(expr).__name__)

    def _evaluate_int_lit(self, expr: IntLit) -> Optional[Scalar]:
        if not self.catalog.contains(expr.kind, expr.value):
            er.emit(self.reporter, er.ERR.CE1004, expr.loc, literal=expr.text, kind=str(expr.kind))
            return None
        return Scalar(expr.kind, expr.value, self.catalog)

    def _evaluate_float_lit(self, expr: FloatLit) -> Optional[Scalar]:
        value = expr.value
        if expr.kind is ScalarKind.F32 and not math.isinf(value):
            try:
                value = round_to_f32(value)
            except OverflowError:
                value = math.inf
        # Decimal text too large for the kind parses (or rounds) to infinity.
        if math.isinf(value):
            er.emit(self.reporter, er.ERR.CE1004, expr.loc, literal=expr.text, kind=str(expr.kind))
            return None
        return Scalar(expr.kind, value, self.catalog)

    def _evaluate_const(self, expr: ConstRef) -> Optional[Scalar]:
        value = self.catalog.constant(expr.kind, expr.name)
        if value is None:
            er.emit(self.reporter, er.ERR.CE1003, expr.loc, kind=str(expr.kind), name=expr.name)
            return None
        return Scalar(expr.kind, value, self.catalog)

    def _evaluate_cast(self, expr: CastExpr) -> Optional[Scalar]:
        source = self.evaluate(expr.expr)
        if source is None:
            return None

        result = self.evaluator.try_cast(source.value, source.kind, expr.target)
        if result.is_err:
            self._report_failure(result, expr)
            return None

        converted = result.unwrap()
        self._warn_if_lossy(source, converted, expr)
        return Scalar(expr.target, converted, self.catalog)

    def _report_failure(self, result: CastResult, expr: CastExpr) -> None:
        src, dst = str(result.src), str(result.dst)
        value = format_value(result.source)
        bounds = self.catalog.range_of(result.dst)
        span = expr.target_loc or expr.loc

        if result.error is CastErrorKind.OVERFLOW:
            er.emit(self.reporter, er.ERR.CE2001, span, value=value, src=src, dst=dst,
                    bound=format_value(bounds.max))
        elif result.error is CastErrorKind.UNDERFLOW:
            er.emit(self.reporter, er.ERR.CE2002, span, value=value, src=src, dst=dst,
                    bound=format_value(bounds.min))
        elif result.error is CastErrorKind.NAN:
            er.emit(self.reporter, er.ERR.CE2003, span, src=src, dst=dst)
        else:
            er.emit(self.reporter, er.ERR.CE2004, span, value=value, src=src, dst=dst)

    def _warn_if_lossy(self, source: Scalar, converted, expr: CastExpr) -> None:
        span = expr.target_loc or expr.loc
        if source.kind.is_integer and expr.target.is_float:
            if converted != source.value:
                er.emit(self.reporter, er.ERR.CW4001, span, value=format_value(source.value),
                        src=str(source.kind), dst=str(expr.target), result=format_value(converted))
        elif source.kind.is_float and expr.target.is_integer:
            if converted != source.value:
                er.emit(self.reporter, er.ERR.CW4002, span, value=format_value(source.value),
                        src=str(source.kind), dst=str(expr.target))
