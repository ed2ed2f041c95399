"""
Plain-text rendering of board observations.
"""
from typing import List

import numpy as np

from .cell import FLAGGED_VALUE, HIDDEN_VALUE, MINE_VALUE


_SYMBOLS = {
    HIDDEN_VALUE: ".",
    FLAGGED_VALUE: "F",
    MINE_VALUE: "*",
    0: " ",
}


def render_text(observation: np.ndarray, coordinates: bool = False) -> str:
    """
    Render an observation array as text.

    Args:
        observation: Array of shape (height, width) from get_observation().
        coordinates: Add x labels above and y labels beside the grid.

    Returns:
        One line per row, cells separated by spaces.
    """
    height, width = observation.shape
    label_width = len(str(height - 1))
    lines: List[str] = []

    if coordinates:
        header = " ".join(str(x % 10) for x in range(width))
        lines.append(" " * (label_width + 1) + header)

    for y in range(height):
        row_str = " ".join(
            _SYMBOLS.get(int(value), str(int(value)))
            for value in observation[y]
        )
        if coordinates:
            row_str = f"{y:>{label_width}} {row_str}"
        lines.append(row_str)

    return "\n".join(lines)
