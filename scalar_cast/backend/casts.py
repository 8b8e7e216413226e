"""
Checked scalar casts.

The evaluator resolves native-width kinds through its catalog, looks up the
pair's category and runs that category's check. Each check is a small pure
function from (value, source kind, destination kind) to a CastResult; the
dispatch table below maps categories to checks.
"""
from __future__ import annotations
import math
from typing import Callable, Dict, Optional, Union

from scalar_cast.backend.float32 import int_to_f32, round_to_f32
from scalar_cast.backend.results import CastErrorKind, CastResult
from scalar_cast.internals.exceptions import InvalidScalarError
from scalar_cast.semantics.catalog import RANGES, TypeCatalog, default_catalog
from scalar_cast.semantics.categories import CastCategory, classify_concrete
from scalar_cast.semantics.typesys import ScalarKind

Number = Union[int, float]
Check = Callable[[Number, ScalarKind, ScalarKind], CastResult]


def convert_lossless(value: Number, src: ScalarKind, dst: ScalarKind) -> Number:
    """Widen `value` to `dst` for a promotion.

    Integer -> float rounds to nearest-even at the destination precision;
    everything else is exact.
    """
    if dst is ScalarKind.F32:
        return int_to_f32(value) if src.is_integer else value
    if dst is ScalarKind.F64:
        return float(value)
    return value


def check_promotion(value: Number, src: ScalarKind, dst: ScalarKind) -> CastResult:
    return CastResult.ok(convert_lossless(value, src, dst), src, dst)


def check_half_promotion(value: int, src: ScalarKind, dst: ScalarKind) -> CastResult:
    if value < 0:
        return CastResult.err(CastErrorKind.UNDERFLOW, value, src, dst)
    return CastResult.ok(value, src, dst)


def check_narrow_from_unsigned(value: int, src: ScalarKind, dst: ScalarKind) -> CastResult:
    if value > RANGES[dst].max:
        return CastResult.err(CastErrorKind.OVERFLOW, value, src, dst)
    return CastResult.ok(value, src, dst)


def check_narrow_from_signed(value: int, src: ScalarKind, dst: ScalarKind) -> CastResult:
    bounds = RANGES[dst]
    # Underflow is reported before overflow.
    if value < bounds.min:
        return CastResult.err(CastErrorKind.UNDERFLOW, value, src, dst)
    if value > bounds.max:
        return CastResult.err(CastErrorKind.OVERFLOW, value, src, dst)
    return CastResult.ok(value, src, dst)


def check_from_float(value: float, src: ScalarKind, dst: ScalarKind) -> CastResult:
    # float/int comparisons below are exact in Python, no rounding of the bounds.
    bounds = RANGES[dst]
    if math.isnan(value):
        return CastResult.err(CastErrorKind.NAN, value, src, dst)
    if math.isinf(value):
        return CastResult.err(CastErrorKind.INFINITE, value, src, dst)
    if value < bounds.min:
        return CastResult.err(CastErrorKind.UNDERFLOW, value, src, dst)
    if value > bounds.max:
        return CastResult.err(CastErrorKind.OVERFLOW, value, src, dst)
    return CastResult.ok(math.trunc(value), src, dst)


def check_float_narrow(value: float, src: ScalarKind, dst: ScalarKind) -> CastResult:
    if math.isnan(value) or math.isinf(value):
        return CastResult.ok(value, src, dst)
    bounds = RANGES[dst]
    if value < bounds.min:
        return CastResult.err(CastErrorKind.UNDERFLOW, value, src, dst)
    if value > bounds.max:
        return CastResult.err(CastErrorKind.OVERFLOW, value, src, dst)
    return CastResult.ok(round_to_f32(value), src, dst)


CHECKS: Dict[CastCategory, Check] = {
    CastCategory.PROMOTION: check_promotion,
    CastCategory.HALF_PROMOTION: check_half_promotion,
    CastCategory.NARROW_FROM_UNSIGNED: check_narrow_from_unsigned,
    CastCategory.NARROW_FROM_SIGNED: check_narrow_from_signed,
    CastCategory.FROM_FLOAT: check_from_float,
    CastCategory.FLOAT_NARROW: check_float_narrow,
}


class CastEvaluator:
    """Runs checked casts against one TypeCatalog.

    Stateless apart from the (immutable) catalog, so one instance can be
    shared freely between threads.
    """

    def __init__(self, catalog: Optional[TypeCatalog] = None):
        self.catalog = catalog if catalog is not None else default_catalog()

    def classify(self, src: ScalarKind, dst: ScalarKind) -> CastCategory:
        return classify_concrete(self.catalog.resolve(src), self.catalog.resolve(dst))

    def is_infallible(self, src: ScalarKind, dst: ScalarKind) -> bool:
        return not self.classify(src, dst).is_fallible

    def try_cast(self, value: Number, src: ScalarKind, dst: ScalarKind) -> CastResult:
        """Convert `value` from `src` to `dst`, always returning a CastResult.

        Raises:
            InvalidScalarError: If `value` is not a legal `src` value.
        """
        reason = self.catalog.validate(src, value)
        if reason is not None:
            raise InvalidScalarError(value, src, reason)

        concrete_src = self.catalog.resolve(src)
        concrete_dst = self.catalog.resolve(dst)
        category = classify_concrete(concrete_src, concrete_dst)
        result = CHECKS[category](value, concrete_src, concrete_dst)
        # Report the kinds as the caller spelled them (isize, not i64).
        if result.is_err:
            return CastResult.err(result.error, value, src, dst)
        return CastResult.ok(result.unwrap(), src, dst)

    def cast(self, value: Number, src: ScalarKind, dst: ScalarKind) -> Union[Number, CastResult]:
        """Convert `value`, shaping the outcome by category.

        Promotions cannot fail and return the bare converted value; every
        other category returns a CastResult.
        """
        result = self.try_cast(value, src, dst)
        if self.is_infallible(src, dst):
            return result.unwrap()
        return result


def classify(src: ScalarKind, dst: ScalarKind) -> CastCategory:
    """Category of (src, dst) under the process-wide catalog."""
    return CastEvaluator().classify(src, dst)


def try_cast(value: Number, src: ScalarKind, dst: ScalarKind) -> CastResult:
    """``CastEvaluator.try_cast`` under the process-wide catalog."""
    return CastEvaluator().try_cast(value, src, dst)


def cast(value: Number, src: ScalarKind, dst: ScalarKind) -> Union[Number, CastResult]:
    """``CastEvaluator.cast`` under the process-wide catalog."""
    return CastEvaluator().cast(value, src, dst)
