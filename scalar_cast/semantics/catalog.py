"""Type catalog: widths, ranges and native-kind resolution.

A TypeCatalog is built for one pointer width and never changes afterwards;
every use of ``isize``/``usize`` through it behaves as exactly one
fixed-width kind.
"""
from __future__ import annotations
import functools
import math
import sys
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union, TYPE_CHECKING

from scalar_cast.backend.float32 import F32_EPSILON, F32_MAX, F32_MIN_POSITIVE, is_f32_exact
from scalar_cast.internals.errors import message_text
from scalar_cast.internals.exceptions import ConfigError
from scalar_cast.semantics.typesys import ScalarKind

if TYPE_CHECKING:
    from scalar_cast.config import CastConfig

Number = Union[int, float]


@dataclass(frozen=True)
class ScalarRange:
    """Finite bounds of a kind; NaN and infinities are never members."""
    min: Number
    max: Number

    def __contains__(self, value: Number) -> bool:
        return self.min <= value <= self.max


def _int_range(bits: int, signed: bool) -> ScalarRange:
    if signed:
        return ScalarRange(-(1 << (bits - 1)), (1 << (bits - 1)) - 1)
    return ScalarRange(0, (1 << bits) - 1)


RANGES: Mapping[ScalarKind, ScalarRange] = MappingProxyType({
    ScalarKind.I8: _int_range(8, True),
    ScalarKind.I16: _int_range(16, True),
    ScalarKind.I32: _int_range(32, True),
    ScalarKind.I64: _int_range(64, True),
    ScalarKind.U8: _int_range(8, False),
    ScalarKind.U16: _int_range(16, False),
    ScalarKind.U32: _int_range(32, False),
    ScalarKind.U64: _int_range(64, False),
    ScalarKind.F32: ScalarRange(-F32_MAX, F32_MAX),
    ScalarKind.F64: ScalarRange(-sys.float_info.max, sys.float_info.max),
})

_FLOAT_CONSTANTS = {
    ScalarKind.F32: {
        "NAN": math.nan,
        "INFINITY": math.inf,
        "NEG_INFINITY": -math.inf,
        "EPSILON": F32_EPSILON,
        "MIN_POSITIVE": F32_MIN_POSITIVE,
    },
    ScalarKind.F64: {
        "NAN": math.nan,
        "INFINITY": math.inf,
        "NEG_INFINITY": -math.inf,
        "EPSILON": sys.float_info.epsilon,
        "MIN_POSITIVE": sys.float_info.min,
    },
}

_NATIVE_BY_WIDTH = {
    32: {ScalarKind.ISIZE: ScalarKind.I32, ScalarKind.USIZE: ScalarKind.U32},
    64: {ScalarKind.ISIZE: ScalarKind.I64, ScalarKind.USIZE: ScalarKind.U64},
}


class TypeCatalog:
    """Kind metadata for one pointer width."""

    def __init__(self, pointer_width: int):
        if pointer_width not in _NATIVE_BY_WIDTH:
            raise ConfigError(
                "CE3001", message_text("CE3001", width=pointer_width),
                width=pointer_width,
            )
        self._pointer_width = pointer_width
        self._native: Mapping[ScalarKind, ScalarKind] = MappingProxyType(
            dict(_NATIVE_BY_WIDTH[pointer_width])
        )

    @classmethod
    def from_config(cls, config: 'CastConfig') -> "TypeCatalog":
        return cls(config.pointer_width)

    @property
    def pointer_width(self) -> int:
        return self._pointer_width

    @property
    def native_mapping(self) -> Mapping[ScalarKind, ScalarKind]:
        """Read-only ``{ISIZE: ..., USIZE: ...}`` mapping."""
        return self._native

    def resolve(self, kind: ScalarKind) -> ScalarKind:
        """Map a native-width kind to its fixed-width alias; identity otherwise."""
        return self._native.get(kind, kind)

    def bit_width(self, kind: ScalarKind) -> int:
        return self.resolve(kind).bit_width

    def range_of(self, kind: ScalarKind) -> ScalarRange:
        return RANGES[self.resolve(kind)]

    def contains(self, kind: ScalarKind, value: object) -> bool:
        """Whether `value` is a legal Python value of `kind`."""
        return self.validate(kind, value) is None

    def validate(self, kind: ScalarKind, value: object) -> Optional[str]:
        """Return why `value` is not a legal value of `kind`, or None if it is."""
        concrete = self.resolve(kind)
        if concrete.is_integer:
            if isinstance(value, bool) or not isinstance(value, int):
                return f"expected int, got {type(value).__name__}"
            if value not in RANGES[concrete]:
                return f"outside [{RANGES[concrete].min}, {RANGES[concrete].max}]"
            return None

        if isinstance(value, bool) or not isinstance(value, float):
            return f"expected float, got {type(value).__name__}"
        if math.isnan(value) or math.isinf(value):
            return None
        if concrete is ScalarKind.F32 and not is_f32_exact(value):
            return "not exactly representable in binary32"
        return None

    def constant(self, kind: ScalarKind, name: str) -> Optional[Number]:
        """Value of an associated constant such as ``u8::MAX`` or ``f32::NAN``.

        Returns None if `kind` has no constant called `name`.
        """
        concrete = self.resolve(kind)
        if name == "MIN":
            return RANGES[concrete].min
        if name == "MAX":
            return RANGES[concrete].max
        if concrete.is_float:
            return _FLOAT_CONSTANTS[concrete].get(name)
        return None

    def __repr__(self) -> str:
        return f"TypeCatalog(pointer_width={self._pointer_width})"


@functools.lru_cache(maxsize=None)
def default_catalog() -> TypeCatalog:
    """Catalog for this process, resolved once from the environment / host."""
    from scalar_cast.config import CastConfig
    return TypeCatalog.from_config(CastConfig.from_env())
