"""
Cast outcomes.

A fallible cast produces a CastResult: either ``Ok(value)`` or
``Err(kind)`` with exactly one CastErrorKind. Errors are values; nothing is
raised unless the caller asks for it through ``unwrap()``.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from scalar_cast.semantics.typesys import ScalarKind

T = TypeVar("T")
U = TypeVar("U")


class CastErrorKind(Enum):
    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"
    NAN = "nan"
    INFINITE = "infinite"

    def __str__(self) -> str:
        return self.value

    @property
    def code(self) -> str:
        """Diagnostic code reported for this failure."""
        return _ERROR_CODES[self]


_ERROR_CODES = {
    CastErrorKind.OVERFLOW: "CE2001",
    CastErrorKind.UNDERFLOW: "CE2002",
    CastErrorKind.NAN: "CE2003",
    CastErrorKind.INFINITE: "CE2004",
}


class CastError(ArithmeticError):
    """Raised by ``CastResult.unwrap()`` on a failed cast."""
    def __init__(self, kind: CastErrorKind, value: Any = None,
                 src: Optional['ScalarKind'] = None, dst: Optional['ScalarKind'] = None):
        if src is not None and dst is not None:
            message = f"{kind}: cannot cast {value!r} from {src} to {dst}"
        else:
            message = str(kind)
        super().__init__(message)
        self.kind = kind
        self.value = value
        self.src = src
        self.dst = dst


@dataclass(frozen=True)
class CastResult(Generic[T]):
    """Either a converted value or the reason the conversion failed."""
    _value: Optional[T] = None
    error: Optional[CastErrorKind] = None
    # Context for error messages only; not part of equality.
    source: Any = None
    src: Optional['ScalarKind'] = None
    dst: Optional['ScalarKind'] = None

    @classmethod
    def ok(cls, value: T, src: Optional['ScalarKind'] = None,
           dst: Optional['ScalarKind'] = None) -> "CastResult[T]":
        return cls(_value=value, src=src, dst=dst)

    @classmethod
    def err(cls, error: CastErrorKind, source: Any = None,
            src: Optional['ScalarKind'] = None, dst: Optional['ScalarKind'] = None) -> "CastResult[T]":
        return cls(error=error, source=source, src=src, dst=dst)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    @property
    def value(self) -> T:
        """The converted value; raises CastError on a failed cast."""
        return self.unwrap()

    def unwrap(self) -> T:
        if self.error is not None:
            raise CastError(self.error, self.source, self.src, self.dst)
        return self._value

    def unwrap_or(self, default: U) -> T | U:
        return default if self.error is not None else self._value

    def ok_value(self) -> Optional[T]:
        """Collapse to ``Optional``: the value, or None on failure."""
        return None if self.error is not None else self._value

    def map(self, fn: Callable[[T], U]) -> "CastResult[U]":
        if self.error is not None:
            return self  # type: ignore[return-value]
        return CastResult(_value=fn(self._value), src=self.src, dst=self.dst)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CastResult):
            return NotImplemented
        if self.error is not None or other.error is not None:
            return self.error == other.error
        return _same_value(self._value, other._value)

    def __hash__(self) -> int:
        if self.error is not None:
            return hash((self.error, None))
        value = self._value
        # hash(nan) depends on object identity; equal NaN results must collide.
        if isinstance(value, float) and value != value:
            return hash((None, "nan"))
        return hash((None, value))

    def __repr__(self) -> str:
        if self.error is not None:
            return f"Err({self.error.name})"
        return f"Ok({self._value!r})"


def _same_value(a: Any, b: Any) -> bool:
    # NaN results compare equal to each other so Ok(nan) == Ok(nan).
    if isinstance(a, float) and isinstance(b, float) and a != a and b != b:
        return True
    return a == b
