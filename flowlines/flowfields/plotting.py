import logging
from typing import Iterable, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from ..geometry import Vector2
from .flow_field import FlowField
from .sampling import SeedProbe

logger = logging.getLogger(__name__)


def plot_flow_field(
    flow_field: FlowField,
    lines: Optional[Iterable[Sequence[Vector2]]] = None,
    ax=None,
    show_cells: bool = False,
    probes: Optional[Iterable[SeedProbe]] = None,
    figsize: Tuple[int, int] = (10, 10),
):
    """
    Preview of a sampled flow field.

    Draws the given polylines, or every sample as a dot when lines is None,
    optionally the grid cells and the seed probes of a debug run (accepted
    probes in green, rejected ones in red).
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if show_cells:
        for i in range(1, flow_field.nx):
            ax.axvline(i * flow_field.cell_size, color="0.85", lw=0.5)
        for j in range(1, flow_field.ny):
            ax.axhline(j * flow_field.cell_size, color="0.85", lw=0.5)

    if lines is None:
        ax.scatter(
            [s.x for s in flow_field.samples],
            [s.y for s in flow_field.samples],
            s=[s.width for s in flow_field.samples],
            color="black",
        )
    else:
        for line in lines:
            if len(line) >= 2:
                ax.plot([p.x for p in line], [p.y for p in line], color="black", lw=1.0)

    for probe in probes or ():
        color = "green" if probe.accepted else "red"
        ax.plot([probe.origin.x, probe.position.x], [probe.origin.y, probe.position.y], color=color, lw=0.5)
        ax.plot(probe.position.x, probe.position.y, "o", color=color, ms=2)

    ax.set_xlim(0, flow_field.width)
    ax.set_ylim(flow_field.height, 0)  # canvas coordinates, y pointing down
    ax.set_aspect("equal", adjustable="box")
    return fig, ax


def write_svg(
    file,
    lines: Iterable[Sequence[Vector2]],
    width: float,
    height: float,
    stroke_widths: Optional[Sequence[float]] = None,
    colors: Optional[Sequence[str]] = None,
    background: Optional[str] = None,
):
    """
    Export polylines to SVG, one path per line, in flow field coordinates.

    stroke_widths and colors are per line and default to 1 and black.
    """
    lines = list(lines)
    logger.info("Writing %d lines to %s", len(lines), file)

    with open(file, "w", encoding="utf-8") as f:
        f.write(
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{width}" height="{height}" viewBox="0 0 {width} {height}">\n'
        )
        if background is not None:
            f.write(f'<rect width="{width}" height="{height}" fill="{background}" />\n')

        for k, line in enumerate(lines):
            if len(line) < 2:
                continue
            stroke = colors[k] if colors is not None else "black"
            stroke_width = stroke_widths[k] if stroke_widths is not None else 1
            parts = [f"M {line[0].x:.6g} {line[0].y:.6g}"]
            parts.extend(f"L {p.x:.6g} {p.y:.6g}" for p in line[1:])
            f.write(
                f'  <path d="{" ".join(parts)}" fill="none" stroke="{stroke}" '
                f'stroke-width="{stroke_width:.6g}" stroke-linecap="round" />\n'
            )

        f.write("</svg>\n")
