"""Exceptions raised across the public API."""
from __future__ import annotations
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from scalar_cast.semantics.typesys import ScalarKind


class ConfigError(ValueError):
    """Raised when the pointer width or target cannot be resolved.

    Carries the diagnostic code and its format arguments so the command line
    can report it through the error catalog.
    """
    def __init__(self, code: str, message: str, **details: Any):
        super().__init__(message)
        self.code = code
        self.details = details


class InvalidScalarError(ValueError):
    """Raised when a value is not a legal value of its declared kind.

    This is the Python counterpart of handing the engine an invalid bit
    pattern: e.g. ``300`` as an ``u8``, a float tagged as ``i32``, or a
    float tagged ``f32`` that binary32 cannot hold exactly.
    """
    def __init__(self, value: Any, kind: 'ScalarKind', reason: Optional[str] = None):
        message = f"{value!r} is not a valid {kind} value"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.value = value
        self.kind = kind
