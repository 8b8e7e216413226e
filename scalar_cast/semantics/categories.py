# semantics/categories.py
"""
Cast classification.

Every ordered pair of concrete scalar kinds falls into exactly one of six
categories. The category depends only on the two kinds, never on the value,
so the whole 10x10 table is computed once at import time and classification
is a dictionary lookup.

| Category             | Pairs                                                   |
|----------------------|---------------------------------------------------------|
| PROMOTION            | same kind; integer -> float; f32 -> f64; widening within |
|                      | a signedness; unsigned -> strictly wider signed          |
| HALF_PROMOTION       | signed -> unsigned of equal or greater width             |
| NARROW_FROM_UNSIGNED | unsigned -> narrower unsigned, or signed of <= width     |
| NARROW_FROM_SIGNED   | signed -> narrower integer of either signedness          |
| FROM_FLOAT           | float -> any integer                                     |
| FLOAT_NARROW         | f64 -> f32                                               |

Integer -> float is a promotion even when the float's mantissa cannot hold
every source value (e.g. i64 -> f64); the converted value is rounded.
"""
from __future__ import annotations
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from scalar_cast.internals.errors import raise_internal_error
from scalar_cast.semantics.typesys import ScalarKind
from scalar_cast.semantics.type_predicates import CONCRETE_KINDS, is_native_kind


class CastCategory(Enum):
    PROMOTION = "promotion"
    HALF_PROMOTION = "half-promotion"
    NARROW_FROM_UNSIGNED = "narrow-from-unsigned"
    NARROW_FROM_SIGNED = "narrow-from-signed"
    FROM_FLOAT = "from-float"
    FLOAT_NARROW = "float-narrow"

    def __str__(self) -> str:
        return self.value

    @property
    def is_fallible(self) -> bool:
        """Whether casts in this category return a result rather than a bare value."""
        return self is not CastCategory.PROMOTION


def _derive_category(src: ScalarKind, dst: ScalarKind) -> CastCategory:
    """Apply the classification rules to two concrete kinds."""
    if src is dst:
        return CastCategory.PROMOTION

    if dst.is_float:
        if src.is_integer or src.bit_width <= dst.bit_width:
            return CastCategory.PROMOTION
        return CastCategory.FLOAT_NARROW

    # dst is an integer from here on
    if src.is_float:
        return CastCategory.FROM_FLOAT

    widening = dst.bit_width >= src.bit_width
    if src.is_signed:
        if not widening:
            return CastCategory.NARROW_FROM_SIGNED
        return CastCategory.PROMOTION if dst.is_signed else CastCategory.HALF_PROMOTION

    # unsigned source
    if dst.is_unsigned:
        return CastCategory.PROMOTION if widening else CastCategory.NARROW_FROM_UNSIGNED
    if dst.bit_width > src.bit_width:
        return CastCategory.PROMOTION
    return CastCategory.NARROW_FROM_UNSIGNED


CAST_TABLE: Mapping[Tuple[ScalarKind, ScalarKind], CastCategory] = MappingProxyType({
    (src, dst): _derive_category(src, dst)
    for src in CONCRETE_KINDS
    for dst in CONCRETE_KINDS
})


def classify_concrete(src: ScalarKind, dst: ScalarKind) -> CastCategory:
    """Category of a pair of already-resolved kinds.

    Raises:
        RuntimeError: CE0001 if either kind is still a native-width kind.
    """
    for kind in (src, dst):
        if is_native_kind(kind):
            raise_internal_error("CE0001", kind=str(kind))
    try:
        return CAST_TABLE[(src, dst)]
    except KeyError:
        raise_internal_error("CE0002", src=str(src), dst=str(dst))


def pairs_by_category() -> Dict[CastCategory, list]:
    """Group the fixed-width pairs by category (the cast table legend counts them)."""
    grouped: Dict[CastCategory, list] = {category: [] for category in CastCategory}
    for pair, category in CAST_TABLE.items():
        grouped[category].append(pair)
    return grouped
