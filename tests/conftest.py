from datetime import datetime, timezone

import pytest

from menu_services.catalog import CatalogStore
from menu_services.storage import MemoryStorage
from menu_services.utils import IdentifierGenerator, UtcClock


class FrozenClock(UtcClock):
    """Clock stuck at one instant; tick() must still move forward."""

    def __init__(self, moment=None):
        self.moment = moment or datetime(2026, 10, 19, 10, 0, 0, tzinfo=timezone.utc)

    def now(self):
        return self.moment


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def id_generator():
    return IdentifierGenerator(salt="t")


@pytest.fixture
def gateway():
    return MemoryStorage()


@pytest.fixture
def store(gateway, id_generator, clock):
    return CatalogStore("biz-1", gateway, id_generator=id_generator, clock=clock)


@pytest.fixture
def loaded_store(store):
    store.load()
    store.create_catalog("Cafe Luna's Menu")
    return store
