"""
Platform detection and target triple parsing.

Provides the pointer width indicator that decides which fixed-width integer
kinds ``isize`` and ``usize`` stand for.
"""
from __future__ import annotations
from dataclasses import dataclass
from llvmlite import binding as llvm

from scalar_cast.internals.exceptions import ConfigError
from scalar_cast.internals.errors import message_text


# Architecture component of a triple -> pointer width in bits.
_ARCH_POINTER_WIDTHS = {
    'x86': 32, 'i386': 32, 'i486': 32, 'i586': 32, 'i686': 32,
    'arm': 32, 'armeb': 32, 'thumb': 32, 'thumbeb': 32,
    'wasm32': 32, 'riscv32': 32, 'mips': 32, 'mipsel': 32,
    'powerpc': 32, 'ppc': 32, 'sparc': 32, 'hexagon': 32, 'xtensa': 32,
    'x86_64': 64, 'amd64': 64, 'aarch64': 64, 'aarch64_be': 64, 'arm64': 64,
    'wasm64': 64, 'riscv64': 64, 'mips64': 64, 'mips64el': 64,
    'powerpc64': 64, 'powerpc64le': 64, 'ppc64': 64, 'ppc64le': 64,
    's390x': 64, 'sparc64': 64, 'sparcv9': 64, 'loongarch64': 64,
}

# ABIs that run a 64-bit instruction set with 32-bit pointers.
_ILP32_ABIS = {'gnux32', 'muslx32', 'ilp32', 'gnu_ilp32'}


@dataclass
class TargetPlatform:
    """Represents a compilation target platform."""
    arch: str      # arm64, x86_64, riscv64, etc.
    vendor: str    # apple, pc, unknown, etc.
    os: str        # darwin, linux, windows, etc.
    abi: str       # (empty), gnu, musl, etc.

    @property
    def triple(self) -> str:
        """Reconstruct the target triple string."""
        parts = [self.arch, self.vendor, self.os]
        if self.abi:
            parts.append(self.abi)
        return '-'.join(parts)

    @property
    def pointer_width(self) -> int:
        """Native pointer width in bits (32 or 64).

        Raises:
            ConfigError: If the architecture is not known.
        """
        if self.abi in _ILP32_ABIS:
            return 32
        arch = self.arch.lower()
        width = _ARCH_POINTER_WIDTHS.get(arch)
        if width is None and arch.startswith(('armv', 'thumbv')):
            # armv7, armv7a, thumbv7em, ... (armv8+ 64-bit spells itself aarch64)
            width = 32
        if width is None:
            raise ConfigError(
                "CE3002", message_text("CE3002", triple=self.triple, arch=self.arch),
                triple=self.triple, arch=self.arch,
            )
        return width


def parse_triple(triple: str) -> TargetPlatform:
    """
    Parse an LLVM target triple into components.

    Examples:
        arm64-apple-darwin25.0.0 -> TargetPlatform(arm64, apple, darwin, '')
        x86_64-pc-linux-gnu -> TargetPlatform(x86_64, pc, linux, gnu)
        i686-pc-windows-msvc -> TargetPlatform(i686, pc, windows, msvc)
    """
    parts = triple.strip().split('-')

    # Handle version numbers in OS (e.g., darwin25.0.0)
    os_part = parts[2] if len(parts) > 2 else 'unknown'
    if '.' in os_part:
        os_part = os_part.split('.')[0]  # darwin25.0.0 -> darwin25
    if os_part.startswith('darwin'):
        os_part = 'darwin'

    return TargetPlatform(
        arch=parts[0] if len(parts) > 0 and parts[0] else 'unknown',
        vendor=parts[1] if len(parts) > 1 else 'unknown',
        os=os_part,
        abi=parts[3] if len(parts) > 3 else '',
    )


def get_current_platform() -> TargetPlatform:
    """Get the platform of the running host."""
    return parse_triple(llvm.get_default_triple())
