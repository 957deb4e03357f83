import os
import sys
from datetime import datetime

import pytest

# ensure project root is on sys.path when running from tests/ folder
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from azizi_pos.app_container import AppContainer
from azizi_pos.repositories import (
    JsonFileStorage,
    KeyValueStore,
    MemoryStorage,
    ProductRepository,
    RecordCollections,
)
from azizi_pos.services import InvoiceSequencer, Seeder


class FixedClock:
    """Reloj controlable: retorna siempre `now` hasta que se avance."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, *args) -> None:
        self.now = datetime(*args)


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 9, 14, 10, 30, 5))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def file_storage(tmp_path):
    return JsonFileStorage(str(tmp_path / 'data'))


@pytest.fixture
def store(storage):
    return KeyValueStore(storage)


@pytest.fixture
def collections(store, clock):
    return RecordCollections(store, clock=clock)


@pytest.fixture
def products(collections, clock):
    return ProductRepository(collections, clock=clock)


@pytest.fixture
def sequencer(collections, clock):
    return InvoiceSequencer(collections, clock=clock)


@pytest.fixture
def seeder(collections, clock):
    return Seeder(collections, clock=clock)


@pytest.fixture
def container(storage, clock):
    AppContainer.reset_instance()
    yield AppContainer(storage=storage, key_prefix='az_pos_', clock=clock)
    AppContainer.reset_instance()
