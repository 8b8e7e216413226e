"""Lark parser setup for cast expressions."""
from __future__ import annotations

import functools
from pathlib import Path

from lark import Lark, Tree, UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"

# Human-readable names for the grammar's terminals in error messages.
_TERMINAL_NAMES = {
    "AS": "'as'",
    "NAME": "a type name",
    "LPAR": "'('",
    "RPAR": "')'",
    "MINUS": "'-'",
    "_DCOLON": "'::'",
    "HEX_INT": "a literal",
    "OCT_INT": "a literal",
    "BIN_INT": "a literal",
    "FLOAT": "a literal",
    "INT": "a literal",
    "$END": "end of line",
}


@functools.lru_cache(maxsize=1)
def get_parser() -> Lark:
    """Build the LALR parser once; it holds no per-parse state."""
    return Lark.open(
        str(GRAMMAR_PATH),
        parser="lalr",
        lexer="basic",
        propagate_positions=True,
        maybe_placeholders=False,
    )


def parse_expression(src: str, dump_parse: bool = False) -> Tree:
    """Parse a single cast expression.

    Raises:
        UnexpectedInput: On syntax errors; see describe_parse_error().
    """
    tree = get_parser().parse(src)
    if dump_parse:
        print(tree.pretty())
    return tree


def describe_parse_error(e: UnexpectedInput) -> str:
    """Turn a Lark error into a one-line message."""
    if isinstance(e, UnexpectedCharacters):
        return f"unexpected character {e.char!r}"
    if isinstance(e, UnexpectedEOF):
        return "unexpected end of expression"
    if isinstance(e, UnexpectedToken):
        if e.token.type == "$END":
            found = "end of line"
        else:
            found = repr(str(e.token))
        expected = sorted({_TERMINAL_NAMES.get(name, name) for name in e.expected})
        if expected:
            return f"unexpected {found}, expected {' or '.join(expected)}"
        return f"unexpected {found}"
    return str(e)
