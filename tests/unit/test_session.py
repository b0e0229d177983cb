"""Unit tests for housetab.app.session: user actions and their status lines."""
from __future__ import annotations

import pytest

from housetab.app.session import KEEP_ONE_VISIBLE, Session, StatusKind
from housetab.app.tabs import SortDirection, SortSpec, Tab
from housetab.entities import EntityKind, TabKind
from housetab.handlers import FormKind
from housetab.store import MemoryStore


def _status(session: Session) -> tuple[StatusKind, str]:
    assert session.status is not None
    return session.status.kind, session.status.text


# ===========================================================================
# Tabs
# ===========================================================================


class TestTabs:
    def test_tab_order_follows_registry(self, session: Session) -> None:
        assert [tab.name for tab in session.tabs] == [
            "Projects",
            "Quotes",
            "Maintenance",
            "Appliances",
            "Vendors",
            "Incidents",
        ]

    def test_tabs_loaded_on_start(self, session: Session) -> None:
        assert len(session.tab(TabKind.PROJECTS).rows) == 4
        assert len(session.tab("Vendors").rows) == 3

    def test_unknown_tab(self, session: Session) -> None:
        with pytest.raises(KeyError):
            session.tab("garages")

    def test_switch_tab(self, session: Session) -> None:
        tab = session.switch_tab("quotes")
        assert session.active_tab is tab
        assert session.active == 1


# ===========================================================================
# Column visibility
# ===========================================================================


class TestColumns:
    def test_hide_by_title(self, session: Session) -> None:
        tab = session.tab("projects")
        assert session.hide_column(tab, "Budget")
        assert tab.columns.hidden_titles() == ["Budget"]
        assert _status(session) == (StatusKind.INFO, "hid Budget")

    def test_hide_unknown_column(self, session: Session) -> None:
        assert not session.hide_column(session.tab("projects"), "Nope")
        assert _status(session) == (StatusKind.ERROR, "hide: no column 'Nope'")

    def test_hide_negative_index(self, session: Session) -> None:
        tab = session.tab("projects")
        assert not session.hide_column(tab, -1)
        assert _status(session) == (StatusKind.ERROR, "hide: no column -1")
        assert tab.columns.hidden_titles() == []

    def test_hide_index_past_end(self, session: Session) -> None:
        tab = session.tab("projects")
        assert not session.hide_column(tab, len(tab.columns))
        assert _status(session)[0] is StatusKind.ERROR

    def test_hide_twice(self, session: Session) -> None:
        tab = session.tab("projects")
        session.hide_column(tab, 1)
        assert not session.hide_column(tab, 1)
        assert _status(session) == (StatusKind.INFO, "Type is already hidden")

    def test_last_visible_column_is_kept(self, session: Session) -> None:
        tab = session.tab("vendors")
        for index in range(len(tab.columns) - 1):
            assert session.hide_column(tab, index)
        assert not session.hide_column(tab, len(tab.columns) - 1)
        assert _status(session) == (StatusKind.ERROR, KEEP_ONE_VISIBLE)
        assert tab.columns.visibility() == (len(tab.columns) - 1,)

    def test_show_all(self, session: Session) -> None:
        tab = session.tab("projects")
        session.hide_column(tab, "Budget")
        session.hide_column(tab, "Actual")
        assert session.show_all_columns(tab) == 2
        assert tab.columns.hidden_titles() == []
        assert session.show_all_columns(tab) == 0
        assert _status(session) == (StatusKind.INFO, "all columns visible")


# ===========================================================================
# Sorting
# ===========================================================================


def _ids(tab: Tab) -> list[int]:
    return [meta.id for meta in tab.meta]


class TestSort:
    def test_cycle_asc_desc_off(self, session: Session) -> None:
        tab = session.tab("projects")
        assert session.sort(tab, "Budget")
        assert _ids(tab) == [2, 4, 1, 3]
        assert _status(session) == (StatusKind.INFO, "sorted by Budget (asc)")
        assert session.sort(tab, "budget")
        assert _ids(tab) == [1, 4, 2, 3]
        assert _status(session) == (StatusKind.INFO, "sorted by Budget (desc)")
        assert session.sort(tab, "Budget")
        assert tab.sort is None
        assert _ids(tab) == [1, 2, 3, 4]
        assert _status(session) == (StatusKind.INFO, "sort cleared")

    def test_rows_follow_meta(self, session: Session) -> None:
        tab = session.tab("projects")
        session.sort(tab, "Title")
        assert _ids(tab) == [3, 1, 4, 2]
        assert [row[2].plain for row in tab.rows] == [
            "Attic insulation",
            "Kitchen remodel",
            "Re-shingle garage",
            "Replace water heater",
        ]

    def test_other_column_restarts_ascending(self, session: Session) -> None:
        tab = session.tab("projects")
        session.sort(tab, "Budget")
        session.sort(tab, "Budget")
        session.sort(tab, 0)
        assert tab.sort == SortSpec(0, SortDirection.ASC)
        assert _ids(tab) == [1, 2, 3, 4]

    def test_unknown_column(self, session: Session) -> None:
        tab = session.tab("projects")
        assert not session.sort(tab, "Nope")
        assert _status(session) == (StatusKind.ERROR, "sort: no column 'Nope'")
        assert not session.sort(tab, -1)
        assert tab.sort is None

    def test_sort_survives_reload(self, session: Session) -> None:
        tab = session.tab("projects")
        session.sort(tab, "Budget")
        assert session.delete(tab, 4)
        assert _ids(tab) == [2, 1, 3]

    def test_header_shows_direction(self, session: Session) -> None:
        tab = session.tab("projects")
        session.sort(tab, "Budget")
        header = session.frame(tab)[0].plain
        assert "Budget ↑" in header
        session.sort(tab, "Budget")
        assert "Budget ↓" in session.frame(tab)[0].plain


# ===========================================================================
# Mutations
# ===========================================================================


class TestMutations:
    def test_guarded_delete_sets_error(self, session: Session) -> None:
        assert not session.delete(session.tab("projects"), 1)
        kind, text = _status(session)
        assert kind is StatusKind.ERROR
        assert text == "delete: project 1 has 1 active quote(s); delete them first"

    def test_delete_status_and_reload(self, session: Session) -> None:
        tab = session.tab("projects")
        assert session.delete(tab, 4)
        assert _status(session) == (StatusKind.INFO, "deleted project 'Re-shingle garage'")
        assert [meta.id for meta in tab.meta] == [1, 2, 3]

    def test_delete_missing_row(self, session: Session) -> None:
        assert not session.delete(session.tab("vendors"), 99)
        assert _status(session) == (StatusKind.ERROR, "delete: vendor 99 not found or already deleted")

    def test_restore_from_session(self, session: Session) -> None:
        tab = session.tab("incidents")
        session.delete(tab, 2)
        assert session.restore(tab, 2)
        assert _status(session) == (StatusKind.INFO, "restored incident 'Cracked driveway'")
        assert session.undo_stack.descriptions() == [
            "incident 'Cracked driveway'",
            "incident 'Cracked driveway'",
        ]

    def test_toggle_deleted(self, session: Session) -> None:
        tab = session.tab("incidents")
        session.delete(tab, 2)
        assert not tab.is_deleted(2)
        session.toggle_deleted(tab)
        assert tab.show_deleted
        assert tab.is_deleted(2)
        assert _status(session) == (StatusKind.INFO, "showing deleted rows")

    def test_undo_empty(self, session: Session) -> None:
        assert not session.undo()
        assert _status(session) == (StatusKind.INFO, "nothing to undo")

    def test_undo_restores_and_reports(self, session: Session) -> None:
        tab = session.tab("vendors")
        session.delete(tab, 3)
        assert session.undo()
        assert _status(session) == (StatusKind.INFO, "undo: restored vendor 'Cool Air HVAC'")
        assert tab.row_index(3) == 2


# ===========================================================================
# Forms
# ===========================================================================


class TestForms:
    def test_submit_without_form(self, session: Session) -> None:
        assert session.submit_form() is None
        assert _status(session) == (StatusKind.ERROR, "save: no open form")

    def test_add_vendor(self, session: Session, demo: MemoryStore) -> None:
        form = session.start_add(session.tab("vendors"))
        assert form is not None and form.kind is FormKind.VENDOR
        form.set("name", "Sparks Electric")
        assert session.submit_form() == 4
        assert _status(session) == (StatusKind.INFO, "saved vendor 4")
        assert len(session.tab("vendors").rows) == 4
        assert demo.get(EntityKind.VENDOR, 4).name == "Sparks Electric"

    def test_invalid_form_stays_open(self, session: Session) -> None:
        form = session.start_add(session.tab("incidents"))
        assert form is not None
        form.set("title", "Squeaky door")
        assert session.submit_form() is None
        assert _status(session)[0] is StatusKind.ERROR
        assert session.form is form

    def test_edit_missing_record(self, session: Session) -> None:
        assert session.start_edit(session.tab("vendors"), 99) is None
        assert _status(session) == (StatusKind.ERROR, "edit: vendor 99 not found")

    def test_inline_edit_read_only(self, session: Session) -> None:
        assert session.inline_edit(session.tab("maintenance"), 1, 5) is None
        assert _status(session) == (StatusKind.ERROR, "edit: column is read-only")

    def test_inline_edit_focus(self, session: Session) -> None:
        form = session.inline_edit(session.tab("quotes"), 1, 3)
        assert form is not None
        assert form.focus == "total"
        assert form.values["total"] == "23000.00"


# ===========================================================================
# Rendering
# ===========================================================================


class TestFrame:
    def test_frame_fits_width(self, session: Session) -> None:
        tab = session.tab("projects")
        session.hide_column(tab, "Budget")
        lines = session.frame(tab, width=60)
        assert all(line.cell_len <= 60 for line in lines)
        assert "Budget" in "".join(line.plain for line in lines)

    def test_frame_without_width_is_natural(self, session: Session) -> None:
        tab = session.tab("vendors")
        layout = session.layout(tab)
        lines = session.frame(tab)
        assert lines[0].cell_len == layout.total_width
        assert len(lines) == 2 + len(tab.rows)

    def test_all_hidden_is_unreachable_through_session(self, session: Session) -> None:
        tab = session.tab("quotes")
        for index in range(len(tab.columns)):
            session.hide_column(tab, index)
        assert not session.layout(tab).is_empty
