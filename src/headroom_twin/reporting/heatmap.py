"""Rack heatmap plotting.

Draws the hall as a row x column grid coloured by headroom category,
optionally outlining racks whose category changed in a simulation.
"""

from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Patch, Rectangle

from headroom_twin.telemetry.rack import Rack
from headroom_twin.thermal.categories import CATEGORY_COLORS, CATEGORY_ORDER


def plot_rack_heatmap(
    racks: Sequence[Rack],
    ax: Optional[plt.Axes] = None,
    highlight_changed: bool = False,
    title: Optional[str] = None,
):
    """Plot racks on their grid positions.

    Args:
        racks: Rack or ProjectedRack records
        ax: Axes to draw on (a new figure is created when omitted)
        highlight_changed: Outline racks with ``changed`` set
        title: Optional axes title

    Returns:
        The matplotlib Figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))
    else:
        fig = ax.figure

    rows = sorted({rack.row for rack in racks})
    columns = sorted({rack.col for rack in racks})
    row_pos = {row: i for i, row in enumerate(rows)}
    col_pos = {col: i for i, col in enumerate(columns)}

    for rack in racks:
        x = col_pos[rack.col]
        y = len(rows) - 1 - row_pos[rack.row]
        outline = highlight_changed and getattr(rack, "changed", False)
        ax.add_patch(Rectangle(
            (x + 0.05, y + 0.05), 0.9, 0.9,
            facecolor=CATEGORY_COLORS[rack.category],
            edgecolor="black" if outline else "white",
            linewidth=3 if outline else 1,
        ))
        ax.text(x + 0.5, y + 0.55, rack.id, ha="center", va="center",
                color="white", fontsize=9, fontweight="bold")
        ax.text(x + 0.5, y + 0.3, f"{rack.inlet_temp:.1f}C", ha="center",
                va="center", color="white", fontsize=7)

    ax.set_xlim(0, max(len(columns), 1))
    ax.set_ylim(0, max(len(rows), 1))
    ax.set_xticks([i + 0.5 for i in range(len(columns))])
    ax.set_xticklabels([str(col) for col in columns])
    ax.set_yticks([i + 0.5 for i in range(len(rows))])
    ax.set_yticklabels(list(reversed(rows)))
    ax.set_aspect("equal")
    ax.legend(
        handles=[Patch(color=CATEGORY_COLORS[c], label=c.value) for c in CATEGORY_ORDER],
        loc="upper left", bbox_to_anchor=(1.01, 1.0),
    )
    if title:
        ax.set_title(title)
    return fig
