import pytest

from scalar_cast.backend.casts import CastEvaluator
from scalar_cast.config import POINTER_WIDTH_ENV, TARGET_ENV
from scalar_cast.semantics.catalog import TypeCatalog, default_catalog


@pytest.fixture(autouse=True)
def pinned_pointer_width(monkeypatch):
    """Pin the process-wide catalog to 64 bits so no test depends on the host."""
    monkeypatch.setenv(POINTER_WIDTH_ENV, "64")
    monkeypatch.delenv(TARGET_ENV, raising=False)
    default_catalog.cache_clear()
    yield
    default_catalog.cache_clear()


@pytest.fixture
def catalog32():
    return TypeCatalog(32)


@pytest.fixture
def catalog64():
    return TypeCatalog(64)


@pytest.fixture(params=[32, 64], ids=["ptr32", "ptr64"])
def evaluator(request):
    """A CastEvaluator for each supported pointer width."""
    return CastEvaluator(TypeCatalog(request.param))


@pytest.fixture
def evaluator32(catalog32):
    return CastEvaluator(catalog32)


@pytest.fixture
def evaluator64(catalog64):
    return CastEvaluator(catalog64)
