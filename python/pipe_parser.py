"""
Pipe maze parsing utilities.

Input is one row per line, one character per cell:
    S | - L J 7 F   tiles (see pipe_types.Tile)
    .               background, omitted from the grid
"""

from __future__ import annotations

import logging

from pipe_types import Coord, PipeGrid, Tile

__all__ = ["BACKGROUND", "parse_pipes", "format_pipes"]

logger = logging.getLogger(__name__)

BACKGROUND = "."

_TILE_CODES: dict[str, Tile] = {tile.value: tile for tile in Tile}


def parse_pipes(text: str) -> PipeGrid:
    """
    Parse a pipe maze from its text form.

    Surrounding whitespace on the block and on each row is ignored. Rows are
    not required to share a length; `max_x` comes from the longest row.

    Example:
        \"\"\"
        .....
        .S-7.
        .|.|.
        .L-J.
        .....
        \"\"\"

        Creates a grid with 8 tiles, max_x=4, max_y=4.

    Args:
        text: The maze, rows separated by newlines

    Returns:
        PipeGrid with every non-background cell

    Raises:
        ValueError: If the text is empty, a row is empty, or a character is
            outside the tile alphabet
    """
    rows = [line.strip() for line in text.strip().splitlines()]
    if not rows:
        raise ValueError("Empty pipe maze: expected at least one row")

    tiles: dict[Coord, Tile] = {}
    max_x = 0

    for y, row in enumerate(rows):
        if not row:
            raise ValueError(
                f"Empty row in pipe maze\n"
                f"  Row {y} has no cells\n"
                f"  Blank lines are only allowed before the first and after the last row"
            )
        max_x = max(max_x, len(row) - 1)

        for x, char in enumerate(row):
            if char == BACKGROUND:
                continue
            tile = _TILE_CODES.get(char)
            if tile is None:
                raise ValueError(
                    f"Invalid character '{char}' in pipe maze\n"
                    f"  Row {y}: \"{row}\"\n"
                    f"  Position: column {x}\n"
                    f"  Valid characters: {' '.join(_TILE_CODES)} and '{BACKGROUND}' for background"
                )
            tiles[(x, y)] = tile

    grid = PipeGrid(tiles, max_x=max_x, max_y=len(rows) - 1)
    logger.debug(
        "parse_pipes: %d tiles, max_x=%d, max_y=%d", len(grid.tiles), grid.max_x, grid.max_y
    )
    return grid


def format_pipes(grid: PipeGrid) -> str:
    """Render a grid back to its text form, background cells as '.'."""
    lines: list[str] = []
    for y in range(grid.height):
        chars: list[str] = []
        for x in range(grid.width):
            tile = grid.tile_at((x, y))
            chars.append(BACKGROUND if tile is None else tile.value)
        lines.append("".join(chars))
    return "\n".join(lines)
