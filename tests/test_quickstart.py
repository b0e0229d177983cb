"""Test that the quickstart API from the package docstring works."""
from __future__ import annotations

from pathlib import Path


def test_quickstart_imports() -> None:
    import housetab

    assert callable(housetab.layout)
    assert callable(housetab.open_session)


def test_quickstart_version(expected_version: str) -> None:
    import housetab

    assert housetab.__version__ == expected_version


def test_quickstart_layout() -> None:
    import housetab
    from housetab.columns import ColumnSpec

    specs = [ColumnSpec("Name", 10), ColumnSpec("Cost", 8, hide_order=1), ColumnSpec("Due", 10)]
    layout = housetab.layout(specs, width=80)
    assert [column.title for column in layout.columns] == ["Name", "Due"]
    assert len(layout.stacks) == 1


def test_quickstart_session_round_trip() -> None:
    import housetab

    session = housetab.open_session()
    quotes = session.tab("quotes")
    assert session.delete(quotes, 1)
    assert len(quotes.rows) == 1
    assert session.undo()
    assert len(quotes.rows) == 2
    lines = session.frame(quotes, width=100)
    assert all(line.cell_len <= 100 for line in lines)


def test_quickstart_session_from_seed(tmp_path: Path) -> None:
    import housetab

    seed = tmp_path / "seed.yaml"
    seed.write_text("vendors:\n  - name: Acme\n")
    session = housetab.open_session(seed, undo_limit=3)
    assert session.undo_stack.limit == 3
    assert len(session.tab("vendors").rows) == 1
