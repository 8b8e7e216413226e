"""Build the cast-expression AST from a Lark parse tree."""
from __future__ import annotations
import re
from typing import Any, Optional

from lark import Token, Tree

from scalar_cast.internals import errors as er
from scalar_cast.internals.report import Span, span_of
from scalar_cast.semantics.ast import CastExpr, ConstRef, Expr, FloatLit, IntLit
from scalar_cast.semantics.typesys import ScalarKind


class BuildError(Exception):
    """Raised when a well-formed parse tree still makes no sense.

    Carries the diagnostic code and its format arguments; the pipeline
    reports it through the error catalog.
    """
    def __init__(self, code: str, span: Optional[Span] = None, **details: Any):
        super().__init__(code)
        self.code = code
        self.span = span
        self.details = details


_RADIX = {"HEX_INT": 16, "OCT_INT": 8, "BIN_INT": 2}

_PREFIXED_RE = re.compile(r"^0[xob](?P<body>[0-9a-fA-F_]+?)(?P<suffix>[iu](?:8|16|32|64|size))?$")
_INT_RE = re.compile(r"^(?P<body>[0-9][0-9_]*)(?P<suffix>[a-z][a-z0-9]*)?$")
_FLOAT_RE = re.compile(
    r"^(?P<body>[0-9][0-9_]*(?:\.[0-9][0-9_]*(?:[eE][+-]?[0-9][0-9_]*)?|[eE][+-]?[0-9][0-9_]*))"
    r"(?P<suffix>[a-z][a-z0-9]*)?$"
)


class ASTBuilder:
    """Turns one parsed line into an Expr.

    Spans are shifted by `line_offset` so that diagnostics point into the
    full source rather than the single line that was parsed.
    """

    def __init__(self, line_offset: int = 0):
        self.line_offset = line_offset

    def build(self, tree: Tree | Token) -> Expr:
        if isinstance(tree, Tree):
            if tree.data == "cast":
                return self._build_cast(tree)
            if tree.data == "literal":
                return self._build_literal(tree)
            if tree.data == "const_ref":
                return self._build_const_ref(tree)
        er.raise_internal_error("CE0004", node=str(getattr(tree, "data", tree)))

    def _span(self, node: Tree | Token) -> Optional[Span]:
        span = span_of(node)
        return span.shifted(self.line_offset) if span is not None else None

    def _kind(self, tok: Token) -> ScalarKind:
        kind = ScalarKind.from_name(str(tok))
        if kind is None:
            raise BuildError("CE1002", self._span(tok), name=str(tok))
        return kind

    def _build_cast(self, tree: Tree) -> CastExpr:
        inner, target = tree.children
        return CastExpr(
            loc=self._span(tree),
            expr=self.build(inner),
            target=self._kind(target),
            target_loc=self._span(target),
        )

    def _build_const_ref(self, tree: Tree) -> ConstRef:
        kind_tok, name_tok = tree.children
        return ConstRef(loc=self._span(tree), kind=self._kind(kind_tok), name=str(name_tok))

    def _build_literal(self, tree: Tree) -> Expr:
        negative = len(tree.children) == 2
        tok: Token = tree.children[-1]
        text = ("-" if negative else "") + str(tok)
        span = self._span(tree)

        if tok.type in _RADIX:
            match = _PREFIXED_RE.match(str(tok))
            digits = match.group("body").replace("_", "") if match else ""
            if not digits:
                raise BuildError("CE1001", span, detail=f"invalid literal '{text}'")
            value = int(digits, _RADIX[tok.type])
            kind = self._suffix_kind(match.group("suffix"), ScalarKind.I32, text, span)
            return IntLit(loc=span, value=-value if negative else value, kind=kind, text=text)

        if tok.type == "FLOAT":
            match = _FLOAT_RE.match(str(tok))
            kind = self._suffix_kind(match.group("suffix"), ScalarKind.F64, text, span)
            if kind.is_integer:
                raise BuildError("CE1005", span, suffix=match.group("suffix"), literal=text)
            value = float(match.group("body").replace("_", ""))
            return FloatLit(loc=span, value=-value if negative else value, kind=kind, text=text)

        match = _INT_RE.match(str(tok))
        body = match.group("body")
        if len(body) > 1 and body[0] == "0" and body[1].isdigit():
            raise BuildError("CE1006", span, literal=text)
        kind = self._suffix_kind(match.group("suffix"), ScalarKind.I32, text, span)
        digits = body.replace("_", "")
        if kind.is_float:
            # 1f32: a decimal integer spelling with a float suffix; too many
            # digits parse to infinity and are rejected on evaluation
            as_float = float(digits)
            return FloatLit(loc=span, value=-as_float if negative else as_float, kind=kind, text=text)
        try:
            value = int(digits)
        except ValueError:
            # More digits than int() will convert; no kind holds such a value
            raise BuildError("CE1004", span, literal=text, kind=str(kind)) from None
        return IntLit(loc=span, value=-value if negative else value, kind=kind, text=text)

    def _suffix_kind(self, suffix: Optional[str], default: ScalarKind, text: str,
                     span: Optional[Span]) -> ScalarKind:
        if suffix is None:
            return default
        kind = ScalarKind.from_name(suffix)
        if kind is None:
            raise BuildError("CE1005", span, suffix=suffix, literal=text)
        return kind
