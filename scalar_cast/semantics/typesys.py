from __future__ import annotations
from enum import Enum
from typing import Optional


class Signedness(Enum):
    SIGNED = "signed"
    UNSIGNED = "unsigned"
    FLOAT = "float"

    def __str__(self) -> str:
        return self.value


class ScalarKind(Enum):
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    ISIZE = "isize"   # native-width signed, resolved by the catalog
    USIZE = "usize"   # native-width unsigned, resolved by the catalog

    def __str__(self) -> str:
        return self.value

    @property
    def signedness(self) -> Signedness:
        return _SIGNEDNESS[self]

    @property
    def bit_width(self) -> Optional[int]:
        """Width in bits, or None for the native-width kinds."""
        return _BIT_WIDTHS.get(self)

    @property
    def is_native(self) -> bool:
        return self in (ScalarKind.ISIZE, ScalarKind.USIZE)

    @property
    def is_float(self) -> bool:
        return self.signedness is Signedness.FLOAT

    @property
    def is_integer(self) -> bool:
        return not self.is_float

    @property
    def is_signed(self) -> bool:
        return self.signedness is Signedness.SIGNED

    @property
    def is_unsigned(self) -> bool:
        return self.signedness is Signedness.UNSIGNED

    @classmethod
    def from_name(cls, name: str) -> Optional["ScalarKind"]:
        """Look up a kind by its textual name (``"u8"``, ``"isize"``...)."""
        try:
            return cls(name)
        except ValueError:
            return None


_SIGNEDNESS = {
    ScalarKind.I8: Signedness.SIGNED,
    ScalarKind.I16: Signedness.SIGNED,
    ScalarKind.I32: Signedness.SIGNED,
    ScalarKind.I64: Signedness.SIGNED,
    ScalarKind.ISIZE: Signedness.SIGNED,
    ScalarKind.U8: Signedness.UNSIGNED,
    ScalarKind.U16: Signedness.UNSIGNED,
    ScalarKind.U32: Signedness.UNSIGNED,
    ScalarKind.U64: Signedness.UNSIGNED,
    ScalarKind.USIZE: Signedness.UNSIGNED,
    ScalarKind.F32: Signedness.FLOAT,
    ScalarKind.F64: Signedness.FLOAT,
}

_BIT_WIDTHS = {
    ScalarKind.I8: 8,
    ScalarKind.I16: 16,
    ScalarKind.I32: 32,
    ScalarKind.I64: 64,
    ScalarKind.U8: 8,
    ScalarKind.U16: 16,
    ScalarKind.U32: 32,
    ScalarKind.U64: 64,
    ScalarKind.F32: 32,
    ScalarKind.F64: 64,
}
