"""scalar-cast - checked conversions between machine scalar types."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("scalar-cast")
    __dev__ = False
except PackageNotFoundError:
    # Development mode - read from pyproject.toml
    import tomllib
    from pathlib import Path
    try:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            __version__ = tomllib.load(f).get("project", {}).get("version", "unknown")
    except OSError:
        __version__ = "unknown"
    __dev__ = True

from scalar_cast.semantics.typesys import ScalarKind, Signedness
from scalar_cast.semantics.catalog import ScalarRange, TypeCatalog, default_catalog
from scalar_cast.semantics.categories import CastCategory
from scalar_cast.backend.results import CastError, CastErrorKind, CastResult
from scalar_cast.backend.casts import CastEvaluator, cast, classify, try_cast
from scalar_cast.backend.scalar import Scalar
from scalar_cast.config import CastConfig
from scalar_cast.internals.exceptions import ConfigError, InvalidScalarError

__all__ = [
    "ScalarKind", "Signedness", "ScalarRange", "TypeCatalog", "default_catalog",
    "CastCategory", "CastError", "CastErrorKind", "CastResult",
    "CastEvaluator", "cast", "classify", "try_cast", "Scalar",
    "CastConfig", "ConfigError", "InvalidScalarError",
]
