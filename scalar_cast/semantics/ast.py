# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from scalar_cast.internals.report import Span
from scalar_cast.semantics.typesys import ScalarKind

# === Core node base ===

@dataclass
class Node:
    loc: Optional[Span]

# === Expressions ===

@dataclass
class IntLit(Node):
    value: int                 # Already negated if the literal had a leading '-'
    kind: ScalarKind           # Suffix kind, or i32 when unsuffixed
    text: str                  # Source spelling, e.g. "-0x80i8"

@dataclass
class FloatLit(Node):
    value: float               # Parsed as binary64; f32 literals are rounded on evaluation
    kind: ScalarKind           # f32 or f64 (f64 when unsuffixed)
    text: str

@dataclass
class ConstRef(Node):
    """Associated constant: ``u8::MAX``, ``f64::NAN``."""
    kind: ScalarKind
    name: str

    @property
    def text(self) -> str:
        return f"{self.kind}::{self.name}"

@dataclass
class CastExpr(Node):
    expr: "Expr"               # The expression being cast
    target: ScalarKind         # The kind after 'as'
    target_loc: Optional[Span] = None

Expr = Union[IntLit, FloatLit, ConstRef, CastExpr]


def expr_text(expr: Expr) -> str:
    """Reconstruct a canonical spelling of an expression."""
    if isinstance(expr, CastExpr):
        inner = expr_text(expr.expr)
        return f"{inner} as {expr.target}"
    return expr.text


__all__ = ["Node", "IntLit", "FloatLit", "ConstRef", "CastExpr", "Expr", "expr_text"]
