"""
Shared pytest fixtures: every test gets its own data file seeded with the baseline dataset.
"""
import pytest
from fastapi.testclient import TestClient

from main import app
from repositories import FireStationRepository, MedicalRecordRepository, PersonRepository
from seed import seed_document
from store import DataStore, set_store


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture
def store(data_file):
    """Fresh store on a tmp file holding the baseline dataset, bound as the app's store."""
    data_store = DataStore(data_file, seed_document())
    data_store.flush()
    set_store(data_store)
    return data_store


@pytest.fixture
def persons(store):
    return PersonRepository(store)


@pytest.fixture
def records(store):
    return MedicalRecordRepository(store)


@pytest.fixture
def stations(store):
    return FireStationRepository(store)


@pytest.fixture
def client(store):
    """FastAPI TestClient bound to the per-test store."""
    return TestClient(app)


@pytest.fixture
def no_store_reads(store, monkeypatch):
    """Fail the test if anything reads or writes a collection."""

    def forbidden(*args, **kwargs):
        raise AssertionError("store must not be touched")

    monkeypatch.setattr(store, "snapshot", forbidden)
    monkeypatch.setattr(store, "update", forbidden)
    return store
