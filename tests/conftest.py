from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from querytpl.api.deps import get_database
from querytpl.engines.sql import Database
from querytpl.main import app


def _identity(s: str) -> str:
    return s


@pytest.fixture
def db() -> Database:
    """Database with pass-through escaping, so expected SQL stays readable."""
    return Database(escape=_identity)


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_database] = lambda: Database()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
