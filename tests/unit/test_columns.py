"""Unit tests for housetab.columns.spec: ColumnSpec and ColumnModel."""
from __future__ import annotations

import pytest

from housetab.columns import ColumnModel, ColumnSpec, LinkKind
from housetab.entities import TabKind
from housetab.layout import LayoutError


# ===========================================================================
# ColumnSpec
# ===========================================================================


class TestColumnSpec:
    def test_visible_by_default(self) -> None:
        assert ColumnSpec("Title", 10).hidden is False

    def test_positive_order_is_hidden(self) -> None:
        assert ColumnSpec("Title", 10, hide_order=3).hidden is True

    def test_natural_width_uses_title(self) -> None:
        assert ColumnSpec("Description", 4).natural_width == 11

    def test_natural_width_uses_fixed_values(self) -> None:
        spec = ColumnSpec("Type", 4, fixed_values=("HVAC", "Landscaping"))
        assert spec.natural_width == 11

    def test_link_defaults_to_many_to_one(self) -> None:
        spec = ColumnSpec("Project", 10, link=LinkKind(TabKind.PROJECTS))
        assert spec.link is not None
        assert spec.link.relation == "m:1"
        assert spec.link.target is TabKind.PROJECTS


# ===========================================================================
# ColumnModel
# ===========================================================================


class TestColumnModel:
    def test_rejects_invalid_specs(self) -> None:
        with pytest.raises(LayoutError):
            ColumnModel([ColumnSpec("A", 0)])

    def test_hide_assigns_increasing_orders(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        assert model.hide(2)
        assert model.hide(0)
        assert model[2].hide_order == 1
        assert model[0].hide_order == 2

    def test_hide_twice_is_refused(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        assert model.hide(1)
        assert not model.hide(1)
        assert model[1].hide_order == 1

    def test_last_visible_column_cannot_be_hidden(self) -> None:
        model = ColumnModel([ColumnSpec("A", 4), ColumnSpec("B", 4)])
        assert model.hide(0)
        assert not model.hide(1)
        assert model.visibility() == (1,)

    @pytest.mark.parametrize("index", [-1, -5, 5])
    def test_out_of_range_index_rejected(self, five_specs: list[ColumnSpec], index: int) -> None:
        model = ColumnModel(five_specs)
        with pytest.raises(IndexError, match="out of range"):
            model.hide(index)
        with pytest.raises(IndexError):
            model.show(index)
        with pytest.raises(IndexError):
            model[index]
        assert model.hidden_titles() == []

    def test_show_resets_order(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        model.hide(3)
        assert model.show(3)
        assert model[3].hide_order == 0
        assert not model.show(3)

    def test_order_reflects_recency_after_reshow(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        model.hide(1)
        model.hide(2)
        model.show(1)
        model.hide(1)
        assert model[1].hide_order > model[2].hide_order

    def test_show_all_counts_hidden(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        model.hide(1)
        model.hide(4)
        assert model.show_all() == 2
        assert model.visibility() == (0, 1, 2, 3, 4)
        assert model.show_all() == 0

    def test_hidden_titles_in_display_order(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        model.hide(4)
        model.hide(2)
        assert model.hidden_titles() == ["Type", "Start"]

    def test_index_of_is_case_insensitive(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        assert model.index_of("status") == 3
        with pytest.raises(KeyError):
            model.index_of("Missing")

    def test_set_fixed_values(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        model.set_fixed_values("Type", ["Electrical", "Landscaping"])
        assert model[2].fixed_values == ("Electrical", "Landscaping")
        assert model.natural_width(2) == 11

    def test_set_fixed_values_ignores_unknown_title(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        model.set_fixed_values("Nope", ["x"])
        assert model.specs == tuple(five_specs)

    def test_specs_is_a_snapshot(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        before = model.specs
        model.hide(0)
        assert before[0].hide_order == 0
        assert model.specs[0].hide_order == 1

    def test_repr_marks_hidden(self, five_specs: list[ColumnSpec]) -> None:
        model = ColumnModel(five_specs)
        model.hide(0)
        assert "ID*" in repr(model)
