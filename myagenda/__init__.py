"""
MyAgenda: browse, filter and step through a conference program.
"""

from myagenda.catalog import Catalog, load_range
from myagenda.engine import CommandResult, Engine
from myagenda.errors import CatalogError, InvalidArgumentError, MyAgendaError
from myagenda.model import DIMENSIONS, Event, FilterState, FilterValue, VisibleRange

__all__ = [
    "Catalog",
    "CatalogError",
    "CommandResult",
    "DIMENSIONS",
    "Engine",
    "Event",
    "FilterState",
    "FilterValue",
    "InvalidArgumentError",
    "MyAgendaError",
    "VisibleRange",
    "load_range",
]
