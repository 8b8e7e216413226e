"""Scalar kind sets and predicates.

Centralizes the kind groupings used by the classifier, the catalog and the
expression language so none of them re-derive them from bit widths.
"""

from typing import FrozenSet, Tuple
from scalar_cast.semantics.typesys import ScalarKind


# === Kind Sets ===

SIGNED_KINDS: FrozenSet[ScalarKind] = frozenset({
    ScalarKind.I8, ScalarKind.I16, ScalarKind.I32, ScalarKind.I64
})

UNSIGNED_KINDS: FrozenSet[ScalarKind] = frozenset({
    ScalarKind.U8, ScalarKind.U16, ScalarKind.U32, ScalarKind.U64
})

NATIVE_KINDS: FrozenSet[ScalarKind] = frozenset({
    ScalarKind.ISIZE, ScalarKind.USIZE
})

FIXED_INTEGER_KINDS: FrozenSet[ScalarKind] = SIGNED_KINDS | UNSIGNED_KINDS

INTEGER_KINDS: FrozenSet[ScalarKind] = FIXED_INTEGER_KINDS | NATIVE_KINDS

FLOAT_KINDS: FrozenSet[ScalarKind] = frozenset({
    ScalarKind.F32, ScalarKind.F64
})

CONCRETE_KINDS: FrozenSet[ScalarKind] = FIXED_INTEGER_KINDS | FLOAT_KINDS

# Display order used by tables and sweeps: signed, unsigned, float, native.
ALL_KINDS: Tuple[ScalarKind, ...] = (
    ScalarKind.I8, ScalarKind.I16, ScalarKind.I32, ScalarKind.I64,
    ScalarKind.U8, ScalarKind.U16, ScalarKind.U32, ScalarKind.U64,
    ScalarKind.F32, ScalarKind.F64,
    ScalarKind.ISIZE, ScalarKind.USIZE,
)


# === Kind Predicates ===

def is_native_kind(kind: ScalarKind) -> bool:
    """Check if a kind's width depends on the target pointer width.

    Examples:
        >>> is_native_kind(ScalarKind.USIZE)
        True
        >>> is_native_kind(ScalarKind.U64)
        False
    """
    return kind in NATIVE_KINDS

