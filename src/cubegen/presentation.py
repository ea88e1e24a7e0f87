"""
Text rendering of structures and search reports.

Structures are drawn as a top-down height map: one row per occupied y
(south to north), one two-character cell per x (west to east). A cell shows
the height of its tallest column (max z + 1): blank when empty, 1-9 as
digits, 10 and above as letters starting at A.
"""
from typing import List

import numpy as np

from cubegen.contracts import SolveResult
from cubegen.geometry import Structure

BOX_WIDTH = 50


def height_symbol(height: int) -> str:
    if height <= 0:
        return " "
    if height <= 9:
        return str(height)
    return chr(ord("A") + height - 10)


def visualize(structure: Structure) -> str:
    """Render ``structure`` as a height map, prefixed by a newline."""
    if structure.is_empty():
        return "\n"

    pts = structure.positions()
    lo, hi = structure.bounds()
    min_x, max_x = int(lo[0]), int(hi[0])

    rows: List[str] = []
    for y in np.unique(pts[:, 1]):
        row_pts = pts[pts[:, 1] == y]
        heights = np.zeros(max_x - min_x + 1, dtype=np.int64)
        np.maximum.at(heights, row_pts[:, 0] - min_x, row_pts[:, 2] + 1)
        rows.append("".join(height_symbol(int(h)) + " " for h in heights))
    return "\n" + "\n".join(rows)


def _boxed(text: str) -> str:
    gap = max(0, BOX_WIDTH - len(text))
    padding = " " * (gap // 2)
    border = "═" * BOX_WIDTH
    return (
        f"╔{border}╗\n"
        f"║{padding}{text}{padding}{' ' * (gap % 2)}║\n"
        f"╚{border}╝\n"
    )


def format_header(title: str, n: int, m: int, k: int) -> str:
    """Boxed, centred title line with the run parameters."""
    return _boxed(f" {title} using n={n} m={m} k={k} ")


def format_footer(title: str) -> str:
    return "\n" + _boxed(f" End {title} ")


def render_report(result: SolveResult, title: str, n: int, m: int, k: int) -> str:
    """Full console report: header, best/worst structures, totals, footer."""
    parts = [format_header(title, n, m, k)]

    best, worst = result.best, result.worst
    if best is not None:
        parts.append(f"\nBest Solution (Score: {best.score}):\n")
        parts.append(visualize(best) + "\n")
        if worst != best:
            parts.append(f"\nWorst Solution (Score: {worst.score}):\n")
            parts.append(visualize(worst) + "\n")
        parts.append(
            f"\n{result.evaluated} Structures evaluated in {result.elapsed_s:.3f} seconds.\n"
        )
    else:
        parts.append(
            "\nNo solutions for the given parameters found. \n"
            "Try again (solver tries to add cubes in random directions)!\n"
        )

    parts.append(format_footer(title))
    return "".join(parts)
