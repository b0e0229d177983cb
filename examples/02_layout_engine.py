#!/usr/bin/env python3
"""Example: housetab layout engine

Drives the pure layout function directly: which columns stay visible,
where the collapsed stacks land, and how columns narrow to fit a width.

Usage:
    python examples/02_layout_engine.py

Requirements:
    pip install housetab
"""
from __future__ import annotations

import housetab
from housetab.columns import ColumnSpec

SPECS = [
    ColumnSpec("ID", 4, hide_order=3),
    ColumnSpec("Title", 16),
    ColumnSpec("Type", 8, hide_order=1),
    ColumnSpec("Status", 8, hide_order=2),
    ColumnSpec("Start", 10),
]


def main() -> None:
    for width in (None, 40, 20):
        layout = housetab.layout(SPECS, width=width)
        print(f"\nwidth={width}: total={layout.total_width}")
        for column in layout.columns:
            print(f"  column {column.title:<8} width={column.width}")
        for stack in layout.stacks:
            kind = "edge" if stack.edge else "interior"
            print(f"  {kind} stack at {stack.offset} (w={stack.width}): {stack.titles}")


if __name__ == "__main__":
    main()
