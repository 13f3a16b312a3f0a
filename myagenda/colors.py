"""
Color assignment for the "color by" dimension.

Colors are taken from a fixed palette in sorted-value order and cycle
when a dimension has more values than the palette has colors.
The same sorted values always get the same colors, so toggling
unrelated filters never reshuffles them.
"""

from __future__ import annotations

from typing import Sequence

from myagenda.filters import check_dimension
from myagenda.model import FilterState

PALETTE: tuple[str, ...] = (
    "#1f77b4",  # blue
    "#ff7f0e",  # orange
    "#2ca02c",  # green
    "#d62728",  # red
    "#9467bd",  # purple
    "#8c564b",  # brown
    "#e377c2",  # pink
    "#7f7f7f",  # gray
    "#bcbd22",  # olive
    "#17becf",  # cyan
)


def assign_colors(dimension: str, values: Sequence[str], palette: Sequence[str] = PALETTE) -> dict[str, str]:
    check_dimension(dimension)
    return {value: palette[i % len(palette)] for i, value in enumerate(values)}


def apply_colors(state: FilterState) -> None:
    """
    Populate colors for state.color_by and clear them everywhere else.
    """
    for dim, by_value in state.dimensions.items():
        if dim == state.color_by:
            colors = assign_colors(dim, sorted(by_value))
            for value, fv in by_value.items():
                fv.color = colors[value]
        else:
            for fv in by_value.values():
                fv.color = None
