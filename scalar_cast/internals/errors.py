# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from scalar_cast.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL   = "general"
    SYNTAX    = "syntax"
    NAME      = "name"
    LITERAL   = "literal"
    CAST      = "cast"
    CONFIG    = "config"
    INTERNAL  = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span)
    else:
        r.warn(em.code, text, span)

def message_text(code: str, **kwargs) -> str:
    """Format the catalog text of `code` without reporting it."""
    return _fmt(code, **kwargs)

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal errors.

    Internal errors (CE0xxx codes) indicate bugs in the cast engine itself,
    never a problem with the value being converted.

    Args:
        code: Error code (e.g., "CE0001")
        **kwargs: Format parameters for the error message

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal errors (engine bugs) - CE0xxx range
_add(ErrorMessage("CE0001", Severity.ERROR,
    "unresolved native kind '{kind}' reached the classifier",
    Category.INTERNAL, "Native-width kinds must be resolved through the catalog before classification."))

_add(ErrorMessage("CE0002", Severity.ERROR,
    "no cast category for '{src}' -> '{dst}'",
    Category.INTERNAL, "The classification table is total; reaching this is a bug."))

_add(ErrorMessage("CE0003", Severity.ERROR,
    "unknown AST node '{node}'",
    Category.INTERNAL, "The interpreter met a node type the AST builder never produces."))

_add(ErrorMessage("CE0004", Severity.ERROR,
    "unexpected parse node '{node}'",
    Category.INTERNAL, "The AST builder met a parse tree shape the grammar never produces."))

# Syntax and names - CE1xxx range
_add(ErrorMessage("CE1001", Severity.ERROR,
    "syntax error: {detail}",
    Category.SYNTAX, "The expression could not be parsed."))

_add(ErrorMessage("CE1002", Severity.ERROR,
    "unknown type '{name}'",
    Category.NAME, "Type names are i8, i16, i32, i64, isize, u8, u16, u32, u64, usize, f32 and f64."))

_add(ErrorMessage("CE1003", Severity.ERROR,
    "'{kind}' has no constant named '{name}'",
    Category.NAME, "Every type has MIN and MAX; floats also have NAN, INFINITY, NEG_INFINITY, EPSILON and MIN_POSITIVE."))

_add(ErrorMessage("CE1004", Severity.ERROR,
    "literal '{literal}' out of range for {kind}",
    Category.LITERAL, "The literal cannot be represented by its (suffixed or default) type."))

_add(ErrorMessage("CE1005", Severity.ERROR,
    "invalid suffix '{suffix}' for literal '{literal}'",
    Category.LITERAL, "Integer suffixes are only valid on integer literals; float suffixes only on decimal literals."))

_add(ErrorMessage("CE1006", Severity.ERROR,
    "C-style octal literal '{literal}' is not supported; use the '0o' prefix",
    Category.LITERAL, "Leading zeros are ambiguous, spell octal literals explicitly."))

# Cast failures - CE2xxx range
_add(ErrorMessage("CE2001", Severity.ERROR,
    "overflow: {value} ({src}) does not fit in {dst} (max {bound})",
    Category.CAST, "The source value is above the destination's largest representable value."))

_add(ErrorMessage("CE2002", Severity.ERROR,
    "underflow: {value} ({src}) does not fit in {dst} (min {bound})",
    Category.CAST, "The source value is below the destination's smallest representable value."))

_add(ErrorMessage("CE2003", Severity.ERROR,
    "NaN ({src}) cannot be represented in {dst}",
    Category.CAST, "Integer kinds have no not-a-number value."))

_add(ErrorMessage("CE2004", Severity.ERROR,
    "{value} ({src}) cannot be represented in {dst}",
    Category.CAST, "Integer kinds have no infinite values."))

# Configuration - CE3xxx range
_add(ErrorMessage("CE3001", Severity.ERROR,
    "unsupported pointer width {width}; expected 32 or 64",
    Category.CONFIG, "Native-width kinds can only alias 32- or 64-bit integers."))

_add(ErrorMessage("CE3002", Severity.ERROR,
    "cannot determine pointer width for target '{triple}' (architecture '{arch}')",
    Category.CONFIG, "Pass an explicit pointer width for targets this tool does not know."))

# Warnings - CW4xxx range
_add(ErrorMessage("CW4001", Severity.WARNING,
    "{value} ({src}) is not exactly representable in {dst}; rounded to {result}",
    Category.CAST, "Integer to float casts always succeed but may round large magnitudes."))

_add(ErrorMessage("CW4002", Severity.WARNING,
    "fractional part of {value} ({src}) discarded by cast to {dst}",
    Category.CAST, "Float to integer casts truncate toward zero."))
