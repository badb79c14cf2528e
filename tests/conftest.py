import pytest
from fastapi.testclient import TestClient

from neon_ttt import config
from neon_ttt.controller import GameController
from neon_ttt.main import create_app
from neon_ttt.models import SessionRecord
from neon_ttt.session import SessionStore
from neon_ttt.store import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(store):
    s = SessionStore(store)
    s.load()
    return s


@pytest.fixture
def controller(session):
    return GameController(session)


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as c:
        yield c


def _saved_record(store) -> SessionRecord:
    return SessionRecord.model_validate_json(store.load(config.STORAGE_KEY))


def _play(ctrl, *indices):
    outcome = None
    for i in indices:
        outcome = ctrl.select_cell(i)
    return outcome


@pytest.fixture
def saved_record():
    """Parse the session record a store currently holds."""
    return _saved_record


@pytest.fixture
def play():
    """Select cells on a controller in order; returns the last outcome."""
    return _play
