from __future__ import annotations
import sys, platform

from scalar_cast import __version__ as app_ver, __dev__ as is_dev

def _ensure_utf8_stdout() -> None:
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(encoding="utf-8")

def _get_versions() -> dict[str, str]:
    from llvmlite import binding as llvm
    import llvmlite

    llvm_info = getattr(llvm, "llvm_version_info", None) or ()
    return {
        "app": app_ver,
        "python": platform.python_version(),
        "llvmlite": getattr(llvmlite, "__version__", "unknown"),
        "llvm": ".".join(map(str, llvm_info)) or "unknown",
    }

def version_line() -> str:
    v = _get_versions()
    dev_marker = " (dev)" if is_dev else ""
    return f"scast {v['app']}{dev_marker}"

def print_banner() -> None:
    _ensure_utf8_stdout()
    v = _get_versions()

    # Only use ANSI styling if stdout is a TTY (interactive terminal)
    if sys.stdout.isatty():
        BOLD, DIM, RESET = "\x1b[1m", "\x1b[2m", "\x1b[0m"
    else:
        BOLD, DIM, RESET = "", "", ""

    print(
        f"{BOLD}{version_line()}{RESET} • checked scalar casts\n"
        f"{DIM}Python {v['python']} • llvmlite {v['llvmlite']} • LLVM {v['llvm']}{RESET}\n"
    )
