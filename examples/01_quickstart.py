#!/usr/bin/env python3
"""Example: housetab quickstart

Minimal working example: open a session over the demo household, hide a
couple of columns, delete a row and undo the delete.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install housetab
"""
from __future__ import annotations

from rich.console import Console

import housetab


def main() -> None:
    console = Console()
    console.print(f"housetab version: {housetab.__version__}")

    # Step 1: Open a session over the built-in demo data
    session = housetab.open_session()
    projects = session.tab("projects")
    print(f"Loaded {len(projects.rows)} projects")

    # Step 2: Hide two columns; they collapse into badges under the table
    session.hide_column(projects, "Type")
    session.hide_column(projects, "Budget")
    for line in session.frame(projects, width=90):
        console.print(line, no_wrap=True, crop=False)

    # Step 3: Delete a quote, then undo it
    quotes = session.tab("quotes")
    session.delete(quotes, 1)
    print(f"After delete: {len(quotes.rows)} quote(s); status: {session.status.text}")
    session.undo()
    print(f"After undo:   {len(quotes.rows)} quote(s); status: {session.status.text}")

    # Step 4: A guarded delete reports why it was refused
    session.delete(projects, 1)
    print(f"Guarded delete: {session.status.text}")


if __name__ == "__main__":
    main()
