"""CLI package.

The ``cli`` sub-package contains the Click application.  Commands build a
:class:`~housetab.app.session.Session` and print its frames; they hold no
table logic of their own.
"""
from __future__ import annotations
