"""Typed scalar values with ``.to(kind)`` conversion."""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Optional, Union

from scalar_cast.backend.casts import CastEvaluator
from scalar_cast.backend.float32 import is_f32_exact
from scalar_cast.backend.results import CastResult
from scalar_cast.internals.exceptions import InvalidScalarError
from scalar_cast.semantics.catalog import TypeCatalog, default_catalog
from scalar_cast.semantics.typesys import ScalarKind

Number = Union[int, float]


@dataclass(frozen=True)
class Scalar:
    """A value tagged with its scalar kind.

    Construct with ``Scalar.of`` to have the value validated (and ints
    accepted for float kinds when the conversion is exact); the plain
    constructor validates without coercion.
    """
    kind: ScalarKind
    value: Number
    catalog: TypeCatalog = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.catalog is None:
            object.__setattr__(self, "catalog", default_catalog())
        reason = self.catalog.validate(self.kind, self.value)
        if reason is not None:
            raise InvalidScalarError(self.value, self.kind, reason)

    @classmethod
    def of(cls, kind: ScalarKind, value: Number, catalog: Optional[TypeCatalog] = None) -> "Scalar":
        if kind.is_float and isinstance(value, int) and not isinstance(value, bool):
            try:
                as_float = float(value)
            except OverflowError:
                raise InvalidScalarError(value, kind, "not exactly representable") from None
            if as_float != value or (kind is ScalarKind.F32 and not is_f32_exact(as_float)):
                raise InvalidScalarError(value, kind, "not exactly representable")
            value = as_float
        return cls(kind, value, catalog)

    def to(self, dst: ScalarKind) -> Union["Scalar", CastResult["Scalar"]]:
        """Cast to `dst`.

        Returns a Scalar for promotions and a CastResult wrapping a Scalar for
        every fallible category, mirroring the shape of ``CastEvaluator.cast``.
        """
        evaluator = CastEvaluator(self.catalog)
        result = evaluator.try_cast(self.value, self.kind, dst).map(
            lambda converted: Scalar(dst, converted, self.catalog)
        )
        if evaluator.is_infallible(self.kind, dst):
            return result.unwrap()
        return result

    @property
    def is_nan(self) -> bool:
        return isinstance(self.value, float) and math.isnan(self.value)

    def __str__(self) -> str:
        return f"{format_value(self.value)}: {self.kind}"


def format_value(value: Number) -> str:
    """Render a value the way the command line prints it."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return repr(value)
    return str(value)
