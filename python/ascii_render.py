"""
ASCII rendering for pipe mazes.

Draws the grid inside a titled box, with the loop in box-drawing glyphs,
the start highlighted and enclosed cells marked.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from pipe_maze import LoopTrace
from pipe_parser import BACKGROUND
from pipe_types import Coord, PipeGrid, Tile

logger = logging.getLogger(__name__)

BOX_GLYPHS: dict[Tile, str] = {
    Tile.START: "S",
    Tile.VERTICAL: "│",
    Tile.HORIZONTAL: "─",
    Tile.NORTH_EAST: "└",
    Tile.NORTH_WEST: "┘",
    Tile.SOUTH_WEST: "┐",
    Tile.SOUTH_EAST: "┌",
}

ENCLOSED_MARK = "I"


def _plain(s: str) -> str:
    return s


def render_pipes(
    grid: PipeGrid,
    trace: LoopTrace | None = None,
    enclosed: frozenset[Coord] | set[Coord] | None = None,
    title: str = "",
    box_chars: bool = True,
    color: bool = True,
) -> list[str]:
    """
    Render a pipe maze as lines of text.

    Args:
        grid: The maze to render
        trace: Optional loop; loop tiles are drawn bright, others dimmed
        enclosed: Optional enclosed cells, drawn as 'I'
        title: Text centred in the top border
        box_chars: Draw tiles with box-drawing glyphs instead of puzzle characters
        color: Apply ANSI colours

    Returns:
        List of strings, one per output line
    """
    members = trace.members if trace is not None else frozenset()
    start = trace.start if trace is not None else None
    inside = enclosed if enclosed is not None else frozenset()

    def paint(fn: Callable[[str], str]) -> Callable[[str], str]:
        return fn if color else _plain

    border = paint(chalk.blue)
    on_loop = paint(chalk.greenBright)
    off_loop = paint(chalk.white)
    marked = paint(chalk.yellowBright)
    highlight = paint(chalk.bgWhite.black)

    inner_width = grid.width
    label = f" {title} " if title else ""

    # Top border with title
    if label and len(label) <= inner_width:
        title_start = (inner_width - len(label)) // 2
        top = "┌" + "─" * title_start + label + "─" * (inner_width - title_start - len(label)) + "┐"
    else:
        top = "┌" + "─" * inner_width + "┐"
    lines = [border(top)]

    for y in range(grid.height):
        parts = [border("│")]
        for x in range(grid.width):
            coord = (x, y)
            tile = grid.tile_at(coord)

            if coord in inside:
                parts.append(marked(ENCLOSED_MARK))
                continue
            if tile is None:
                parts.append(off_loop(BACKGROUND))
                continue

            char = BOX_GLYPHS[tile] if box_chars else tile.value
            if coord == start:
                parts.append(highlight(char))
            elif coord in members:
                parts.append(on_loop(char))
            else:
                parts.append(off_loop(char))
        parts.append(border("│"))
        lines.append("".join(parts))

    lines.append(border("└" + "─" * inner_width + "┘"))

    logger.debug(
        "render_pipes: %dx%d, loop=%d, enclosed=%d", grid.width, grid.height, len(members), len(inside)
    )
    return lines
