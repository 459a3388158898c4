from __future__ import annotations
import pytest

from hackathon.main import app
from hackathon.store import EventStore, get_store


@pytest.fixture(autouse=True)
def store():
    """Each test gets its own empty store, also behind the API dependency."""
    s = EventStore()
    app.dependency_overrides[get_store] = lambda: s
    yield s
    app.dependency_overrides.pop(get_store, None)
