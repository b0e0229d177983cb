"""Unit tests for housetab.store: MemoryStore lifecycle guards and seeding."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

import pytest

from housetab.entities import (
    Appliance,
    EntityKind,
    Incident,
    LookupKind,
    MaintenanceItem,
    Project,
    ProjectStatus,
    Quote,
    Vendor,
)
from housetab.store import (
    GuardViolationError,
    MemoryStore,
    RecordNotFoundError,
    SeedError,
    Store,
    StoreIOError,
    load_seed_file,
    load_seed_text,
)


def _project(store: MemoryStore, title: str = "Kitchen") -> int:
    type_id = store.add_lookup(LookupKind.PROJECT_TYPE, "Remodel")
    return store.create(Project(id=0, title=title, project_type_id=type_id))


def _quote(store: MemoryStore, project_id: int, vendor_id: int) -> int:
    return store.create(Quote(id=0, project_id=project_id, vendor_id=vendor_id, total_cents=100))


# ===========================================================================
# Basic CRUD
# ===========================================================================


class TestMemoryStoreBasics:
    def test_satisfies_store_protocol(self, store: MemoryStore) -> None:
        assert isinstance(store, Store)

    def test_create_assigns_sequential_ids(self, store: MemoryStore) -> None:
        first = store.create(Vendor(id=0, name="Acme"))
        second = store.create(Vendor(id=99, name="Bolt"))
        assert (first, second) == (1, 2)
        assert store.get(EntityKind.VENDOR, 2).name == "Bolt"

    def test_list_is_primary_key_ascending(self, store: MemoryStore) -> None:
        for name in ("c", "a", "b"):
            store.create(Vendor(id=0, name=name))
        assert [v.id for v in store.list(EntityKind.VENDOR)] == [1, 2, 3]

    def test_list_hides_deleted_unless_asked(self, store: MemoryStore) -> None:
        store.create(Vendor(id=0, name="Acme"))
        store.soft_delete(EntityKind.VENDOR, 1)
        assert store.list(EntityKind.VENDOR) == []
        assert len(store.list(EntityKind.VENDOR, include_deleted=True)) == 1

    def test_soft_delete_stamps_clock(self, store: MemoryStore, fixed_now: datetime) -> None:
        store.create(Vendor(id=0, name="Acme"))
        store.soft_delete(EntityKind.VENDOR, 1)
        assert store.get(EntityKind.VENDOR, 1).deleted_at == fixed_now

    def test_get_missing_raises(self, store: MemoryStore) -> None:
        with pytest.raises(RecordNotFoundError):
            store.get(EntityKind.PROJECT, 42)

    def test_update_replaces_every_field(self, store: MemoryStore) -> None:
        project_id = _project(store)
        record = store.get(EntityKind.PROJECT, project_id)
        store.update(replace(record, status=ProjectStatus.UNDERWAY, budget_cents=5000))
        updated = store.get(EntityKind.PROJECT, project_id)
        assert updated.status is ProjectStatus.UNDERWAY
        assert updated.budget_cents == 5000

    def test_update_missing_raises(self, store: MemoryStore) -> None:
        with pytest.raises(RecordNotFoundError):
            store.update(Vendor(id=7, name="Ghost"))

    def test_lookup_sorted_by_name(self, store: MemoryStore) -> None:
        store.add_lookup(LookupKind.PROJECT_TYPE, "Roof")
        store.add_lookup(LookupKind.PROJECT_TYPE, "HVAC")
        assert [v.name for v in store.lookup(LookupKind.PROJECT_TYPE)] == ["HVAC", "Roof"]

    def test_unknown_lookup_is_rejected(self, store: MemoryStore) -> None:
        with pytest.raises(GuardViolationError, match="project type 9 does not exist"):
            store.create(Project(id=0, title="X", project_type_id=9))


# ===========================================================================
# Lifecycle guards
# ===========================================================================


class TestMemoryStoreGuards:
    def test_cannot_delete_project_with_active_quotes(self, store: MemoryStore) -> None:
        project_id = _project(store)
        vendor_id = store.create(Vendor(id=0, name="Acme"))
        _quote(store, project_id, vendor_id)
        with pytest.raises(GuardViolationError, match="has 1 active quote"):
            store.soft_delete(EntityKind.PROJECT, project_id)

    def test_can_delete_project_after_quotes_deleted(self, store: MemoryStore) -> None:
        project_id = _project(store)
        vendor_id = store.create(Vendor(id=0, name="Acme"))
        quote_id = _quote(store, project_id, vendor_id)
        store.soft_delete(EntityKind.QUOTE, quote_id)
        store.soft_delete(EntityKind.PROJECT, project_id)
        assert store.get(EntityKind.PROJECT, project_id).deleted_at is not None

    def test_cannot_delete_appliance_with_maintenance(self, store: MemoryStore) -> None:
        appliance_id = store.create(Appliance(id=0, name="Furnace"))
        category = store.add_lookup(LookupKind.MAINTENANCE_CATEGORY, "HVAC")
        store.create(
            MaintenanceItem(id=0, name="Filter", category_id=category, appliance_id=appliance_id)
        )
        with pytest.raises(GuardViolationError, match="active maintenance item"):
            store.soft_delete(EntityKind.APPLIANCE, appliance_id)

    def test_cannot_delete_vendor_with_incidents(self, store: MemoryStore) -> None:
        vendor_id = store.create(Vendor(id=0, name="Acme"))
        store.create(Incident(id=0, title="Leak", date_noticed=date(2025, 1, 1), vendor_id=vendor_id))
        with pytest.raises(GuardViolationError, match="active incident"):
            store.soft_delete(EntityKind.VENDOR, vendor_id)

    def test_restore_requires_live_parent(self, store: MemoryStore) -> None:
        project_id = _project(store)
        vendor_id = store.create(Vendor(id=0, name="Acme"))
        quote_id = _quote(store, project_id, vendor_id)
        store.soft_delete(EntityKind.QUOTE, quote_id)
        store.soft_delete(EntityKind.PROJECT, project_id)
        with pytest.raises(GuardViolationError, match="project is deleted; restore it first"):
            store.restore(EntityKind.QUOTE, quote_id)

    def test_create_with_missing_parent(self, store: MemoryStore) -> None:
        with pytest.raises(GuardViolationError, match="project no longer exists"):
            _quote(store, 5, 5)

    def test_update_back_to_life_checks_parents(self, store: MemoryStore) -> None:
        project_id = _project(store)
        vendor_id = store.create(Vendor(id=0, name="Acme"))
        quote_id = _quote(store, project_id, vendor_id)
        live = store.get(EntityKind.QUOTE, quote_id)
        store.soft_delete(EntityKind.QUOTE, quote_id)
        store.soft_delete(EntityKind.VENDOR, vendor_id)
        with pytest.raises(GuardViolationError, match="vendor is deleted"):
            store.update(live)

    def test_update_to_deleted_checks_children(
        self, store: MemoryStore, fixed_now: datetime
    ) -> None:
        project_id = _project(store)
        vendor_id = store.create(Vendor(id=0, name="Acme"))
        _quote(store, project_id, vendor_id)
        project = store.get(EntityKind.PROJECT, project_id)
        with pytest.raises(GuardViolationError, match="delete them first"):
            store.update(replace(project, deleted_at=fixed_now))

    def test_double_delete_is_not_found(self, store: MemoryStore) -> None:
        store.create(Vendor(id=0, name="Acme"))
        store.soft_delete(EntityKind.VENDOR, 1)
        with pytest.raises(RecordNotFoundError, match="already deleted"):
            store.soft_delete(EntityKind.VENDOR, 1)

    def test_restore_live_is_not_found(self, store: MemoryStore) -> None:
        store.create(Vendor(id=0, name="Acme"))
        with pytest.raises(RecordNotFoundError, match="is not deleted"):
            store.restore(EntityKind.VENDOR, 1)


# ===========================================================================
# Seeding
# ===========================================================================


class TestSeed:
    def test_demo_store_counts(self, demo: MemoryStore) -> None:
        assert len(demo.list(EntityKind.PROJECT)) == 4
        assert len(demo.list(EntityKind.QUOTE)) == 2
        assert len(demo.list(EntityKind.VENDOR)) == 3
        assert len(demo.list(EntityKind.MAINTENANCE)) == 3
        assert len(demo.lookup(LookupKind.PROJECT_TYPE)) == 6

    def test_lookup_names_resolved(self, demo: MemoryStore) -> None:
        kitchen = demo.get(EntityKind.PROJECT, 1)
        assert demo.lookup_name(LookupKind.PROJECT_TYPE, kitchen.project_type_id) == "Remodel"
        assert kitchen.budget_cents == 2500000

    def test_deleted_flag_soft_deletes(self, store: MemoryStore, fixed_now: datetime) -> None:
        counts = load_seed_text("vendors:\n  - name: Gone\n    deleted: true\n", store)
        assert counts["vendors"] == 1
        assert store.list(EntityKind.VENDOR) == []
        assert store.get(EntityKind.VENDOR, 1).deleted_at == fixed_now

    def test_deleted_parent_with_deleted_child(self, store: MemoryStore) -> None:
        text = (
            "vendors:\n"
            "  - name: Acme\n"
            "projects:\n"
            "  - title: Old deck\n"
            "    type: Exterior\n"
            "    deleted: true\n"
            "quotes:\n"
            "  - project_id: 1\n"
            "    vendor_id: 1\n"
            "    total_cents: 5000\n"
            "    deleted: true\n"
        )
        counts = load_seed_text(text, store)
        assert counts == {
            "vendors": 1,
            "projects": 1,
            "quotes": 1,
            "appliances": 0,
            "maintenance": 0,
            "incidents": 0,
        }
        assert store.list(EntityKind.PROJECT) == []
        assert store.list(EntityKind.QUOTE) == []
        assert store.get(EntityKind.QUOTE, 1).deleted_at is not None
        assert store.list(EntityKind.VENDOR)[0].name == "Acme"

    def test_deleted_parent_with_live_child_rejected(self, store: MemoryStore) -> None:
        text = (
            "vendors:\n"
            "  - name: Acme\n"
            "projects:\n"
            "  - title: Old deck\n"
            "    type: Exterior\n"
            "    deleted: true\n"
            "quotes:\n"
            "  - project_id: 1\n"
            "    vendor_id: 1\n"
            "    total_cents: 5000\n"
        )
        with pytest.raises(SeedError) as excinfo:
            load_seed_text(text, store)
        assert excinfo.value.section == "projects"
        assert excinfo.value.index == 0

    def test_unknown_section_rejected(self, store: MemoryStore) -> None:
        with pytest.raises(SeedError, match="unknown section"):
            load_seed_text("garages: []\n", store)

    def test_bad_field_reports_location(self, store: MemoryStore) -> None:
        with pytest.raises(SeedError) as excinfo:
            load_seed_text("vendors:\n  - name: A\n  - name: B\n    colour: red\n", store)
        assert excinfo.value.section == "vendors"
        assert excinfo.value.index == 1
        assert str(excinfo.value).startswith("vendors[1]: ")

    def test_guard_violation_becomes_seed_error(self, store: MemoryStore) -> None:
        text = "quotes:\n  - project_id: 1\n    vendor_id: 1\n    total_cents: 5\n"
        with pytest.raises(SeedError, match="no longer exists"):
            load_seed_text(text, store)

    def test_invalid_yaml(self, store: MemoryStore) -> None:
        with pytest.raises(SeedError, match="invalid YAML"):
            load_seed_text("vendors: [unclosed\n", store)

    def test_empty_document(self, store: MemoryStore) -> None:
        assert load_seed_text("", store) == {}

    def test_missing_file_is_io_error(self, store: MemoryStore, tmp_path: Path) -> None:
        with pytest.raises(StoreIOError):
            load_seed_file(tmp_path / "nope.yaml", store)

    def test_seed_file(self, store: MemoryStore, tmp_path: Path) -> None:
        path = tmp_path / "seed.yaml"
        path.write_text("project_types: [Roof]\nprojects:\n  - title: Gutters\n    type: Roof\n")
        counts = load_seed_file(path, store)
        assert counts["projects"] == 1
        assert store.get(EntityKind.PROJECT, 1).title == "Gutters"
