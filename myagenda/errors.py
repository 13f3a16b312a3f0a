"""
Error types shared by the engine, the catalog loader and the CLI.
"""

from __future__ import annotations


class MyAgendaError(Exception):
    """Base class for all errors raised by myagenda."""


class InvalidArgumentError(MyAgendaError, ValueError):
    """
    Raised for arguments outside the allowed set:
    unknown dimension names, navigation directions other than +1/-1,
    visible ranges that end before they start.
    """


class CatalogError(MyAgendaError):
    """Raised when catalog or range data cannot be loaded."""
