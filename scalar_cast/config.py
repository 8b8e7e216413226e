"""Pointer width configuration.

The only external input the cast engine consumes is the native pointer width.
It is chosen, in order of precedence, from:

1. arguments: a width (``--pointer-width``), then a triple (``--target``),
2. the environment: ``SCALAR_CAST_POINTER_WIDTH``, then ``SCALAR_CAST_TARGET``,
3. the host triple reported by LLVM.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from scalar_cast.backend.platform_detect import get_current_platform, parse_triple
from scalar_cast.internals.errors import message_text
from scalar_cast.internals.exceptions import ConfigError

POINTER_WIDTH_ENV = "SCALAR_CAST_POINTER_WIDTH"
TARGET_ENV = "SCALAR_CAST_TARGET"

SUPPORTED_POINTER_WIDTHS = (32, 64)


@dataclass(frozen=True)
class CastConfig:
    pointer_width: int
    target: Optional[str] = None   # triple the width was derived from, if any

    def __post_init__(self):
        if self.pointer_width not in SUPPORTED_POINTER_WIDTHS:
            raise ConfigError(
                "CE3001", message_text("CE3001", width=self.pointer_width),
                width=self.pointer_width,
            )

    @classmethod
    def for_target(cls, triple: str) -> "CastConfig":
        platform = parse_triple(triple)
        return cls(pointer_width=platform.pointer_width, target=platform.triple)

    @classmethod
    def for_host(cls) -> "CastConfig":
        platform = get_current_platform()
        return cls(pointer_width=platform.pointer_width, target=platform.triple)

    @classmethod
    def resolve(cls, pointer_width: Optional[int] = None, target: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> "CastConfig":
        """Build a config from explicit arguments, falling back to the environment.

        Explicit arguments win over environment variables; a width wins over a
        triple.
        """
        if pointer_width is not None:
            return cls(pointer_width=pointer_width, target=target)
        if target is not None:
            return cls.for_target(target)

        env = os.environ if environ is None else environ
        raw = env.get(POINTER_WIDTH_ENV, "").strip()
        if raw:
            return cls(pointer_width=_parse_width(raw))
        target = env.get(TARGET_ENV, "").strip()
        if target:
            return cls.for_target(target)

        return cls.for_host()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CastConfig":
        return cls.resolve(environ=environ)


def _parse_width(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigError("CE3001", message_text("CE3001", width=raw), width=raw) from None
