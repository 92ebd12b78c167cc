import threading

import pytest

from menu_services.catalog import AddSection, CatalogStore, CreateCatalog, StoreRegistry, normalize_catalog
from menu_services.errors import (
    MutationInProgressError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from menu_services.repositories import ItemFields
from menu_services.storage import LocalStorage, MemoryStorage
from menu_services.utils import parse_timestamp


def test_load_without_stored_menu_leaves_state_empty(store, gateway):
    assert store.load() is None
    assert store.current_state() is None
    assert gateway.replace_calls == []


def test_load_reads_and_normalizes_stored_menu(gateway, id_generator, clock):
    gateway.documents["biz-9"] = {
        "id": "menu-1",
        "business_id": "biz-9",
        "name": "Old Menu",
        "sections": [{"id": "s1", "name": "Drinks", "items": [{"id": "p1", "name": "Cola", "price": 2}]}],
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-02T00:00:00.000Z",
    }
    store = CatalogStore("biz-9", gateway, id_generator=id_generator, clock=clock)

    catalog = store.load()

    assert catalog.owner_id == "biz-9"
    assert catalog.sections[0].items[0].price == "2"
    assert store.current_state() is catalog


def test_load_failure_propagates_and_keeps_state(loaded_store, gateway):
    before = loaded_store.current_state()
    gateway.fail_next_fetch()
    with pytest.raises(PersistenceError):
        loaded_store.load()
    assert loaded_store.current_state() is before


def test_create_catalog_persists_whole_document(loaded_store, gateway):
    catalog = loaded_store.current_state()
    assert gateway.documents["biz-1"] == catalog.to_dict()
    assert gateway.documents["biz-1"]["businessId"] == "biz-1"


def test_mutation_before_create_is_not_found(store, gateway):
    store.load()
    with pytest.raises(NotFoundError) as exc:
        store.add_section("Drinks")
    assert exc.value.id == "biz-1"
    assert gateway.replace_calls == []


def test_create_for_another_owner_is_rejected(store):
    with pytest.raises(ValidationError):
        store.apply_mutation(CreateCatalog("someone-else", "Menu"))
    assert store.current_state() is None


def test_drinks_and_cola_round_trip(loaded_store, gateway):
    section = loaded_store.add_section("Drinks")
    item = loaded_store.add_item(section.id, ItemFields(name="Cola", price="2.00"))

    state = loaded_store.current_state()
    assert [s.name for s in state.sections] == ["Drinks"]
    assert [(i.name, i.price) for i in state.sections[0].items] == [("Cola", "2.00")]
    assert state.sections[0].items[0].id == item.id
    assert normalize_catalog(gateway.documents["biz-1"]) == state


def test_failed_replace_during_add_item_rolls_back(loaded_store, gateway):
    section = loaded_store.add_section("Drinks")
    before = loaded_store.current_state()
    stored_before = dict(gateway.documents["biz-1"])

    gateway.fail_next_replace(PersistenceError("network down"))
    with pytest.raises(PersistenceError) as exc:
        loaded_store.add_item(section.id, ItemFields(name="Cola", price="2.00"))

    assert str(exc.value) == "network down"
    assert loaded_store.current_state() == before
    assert loaded_store.current_state() is before
    assert gateway.documents["biz-1"] == stored_before


def test_store_is_usable_after_failure(loaded_store, gateway):
    gateway.fail_next_replace()
    with pytest.raises(PersistenceError):
        loaded_store.add_section("Drinks")
    section = loaded_store.add_section("Drinks")
    assert loaded_store.current_state().sections == (section,)


def test_validation_error_skips_persistence(loaded_store, gateway):
    calls = len(gateway.replace_calls)
    with pytest.raises(ValidationError):
        loaded_store.add_section("  ")
    assert len(gateway.replace_calls) == calls


def test_sequential_mutations_increase_updated_at(loaded_store):
    first = loaded_store.apply_mutation(AddSection("A"))
    second = loaded_store.apply_mutation(AddSection("B"))
    assert parse_timestamp(second.updated_at) > parse_timestamp(first.updated_at)


def test_remove_wrappers(loaded_store):
    section = loaded_store.add_section("Drinks")
    item = loaded_store.add_item(section.id, ItemFields(name="Cola", price="2"))
    loaded_store.rename_section(section.id, "Cold Drinks")
    loaded_store.remove_item(section.id, item.id)
    assert loaded_store.current_state().sections[0].items == ()
    loaded_store.remove_section(section.id)
    assert loaded_store.current_state().sections == ()


class BlockingStorage(MemoryStorage):
    """Holds replace_document until released."""

    def __init__(self):
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def replace_document(self, key, document):
        if document.get("sections"):
            self.entered.set()
            self.release.wait(timeout=5)
        super().replace_document(key, document)


def _start_blocked_mutation(store):
    errors = []

    def run():
        try:
            store.add_section("Slow")
        except Exception as e:  # pragma: no cover - surfaced through errors list
            errors.append(e)

    worker = threading.Thread(target=run)
    worker.start()
    assert store.gateway.entered.wait(timeout=5)
    return worker, errors


def test_concurrent_mutation_is_rejected_when_not_waiting(id_generator, clock):
    store = CatalogStore("biz-1", BlockingStorage(), id_generator=id_generator, clock=clock)
    store.create_catalog("Menu")
    worker, errors = _start_blocked_mutation(store)

    assert store.is_busy()
    with pytest.raises(MutationInProgressError):
        store.apply_mutation(AddSection("Fast"), wait=False)

    store.gateway.release.set()
    worker.join(timeout=5)
    assert errors == []
    assert [s.name for s in store.current_state().sections] == ["Slow"]


def test_concurrent_mutation_queues_by_default(id_generator, clock):
    store = CatalogStore("biz-1", BlockingStorage(), id_generator=id_generator, clock=clock)
    store.create_catalog("Menu")
    worker, errors = _start_blocked_mutation(store)

    second = threading.Thread(target=lambda: store.add_section("Queued"))
    second.start()
    store.gateway.release.set()
    worker.join(timeout=5)
    second.join(timeout=5)

    assert errors == []
    names = [s.name for s in store.current_state().sections]
    assert names == ["Slow", "Queued"]
    assert store.gateway.documents["biz-1"] == store.current_state().to_dict()


def test_registry_returns_one_store_per_owner(gateway):
    registry = StoreRegistry(gateway)
    a = registry.get("biz-a")
    assert registry.get("biz-a") is a
    b = registry.get("biz-b")
    assert b is not a

    a.create_catalog("A's Menu")
    assert b.current_state() is None
    assert sorted(registry.owners()) == ["biz-a", "biz-b"]


def test_store_requires_owner_key(gateway):
    with pytest.raises(ValidationError):
        CatalogStore(" ", gateway)


def test_failed_write_is_logged(loaded_store, gateway, caplog):
    gateway.fail_next_replace()
    with caplog.at_level("WARNING", logger="menu_services.catalog.store"):
        with pytest.raises(PersistenceError):
            loaded_store.add_section("Drinks")
    assert "not persisted" in caplog.text


def test_owner_keys_that_slugify_alike_stay_independent(tmp_path, id_generator, clock):
    storage = LocalStorage(tmp_path)
    first = CatalogStore("Biz-1", storage, id_generator=id_generator, clock=clock)
    first.load()
    first.create_catalog("First")
    first.add_section("A only")

    second = CatalogStore("biz_1", storage, id_generator=id_generator, clock=clock)

    assert second.load() is None
    second.create_catalog("Second")
    assert first.load().sections[0].name == "A only"


def test_load_rejects_menu_of_another_owner(gateway, id_generator, clock):
    gateway.documents["biz-2"] = {
        "id": "menu-1",
        "businessId": "biz-1",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }
    store = CatalogStore("biz-2", gateway, id_generator=id_generator, clock=clock)

    with pytest.raises(PersistenceError):
        store.load()
    assert store.current_state() is None


def test_load_rejects_corrupt_timestamp(gateway, id_generator, clock):
    gateway.documents["biz-1"] = {
        "id": "menu-1",
        "businessId": "biz-1",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "not-a-date",
    }
    store = CatalogStore("biz-1", gateway, id_generator=id_generator, clock=clock)

    with pytest.raises(PersistenceError):
        store.load()
    assert store.current_state() is None


def test_create_catalog_defaults_name_from_business(store):
    store.load()
    assert store.create_catalog(business_name="Cafe Luna").name == "Cafe Luna's Menu"
