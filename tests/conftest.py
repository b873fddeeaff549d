import pytest

from domain.catalog import Catalog
from domain.engine import PersonaEngine
from services.repository import Repository


@pytest.fixture
def catalog() -> Catalog:
    return Repository().load_catalog()


@pytest.fixture
def engine(catalog) -> PersonaEngine:
    return PersonaEngine(catalog=catalog)
