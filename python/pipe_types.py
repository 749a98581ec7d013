"""
Shared type definitions for the pipe maze system.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing y)
    S = "S"  # Down (increasing y)
    E = "E"  # Right (increasing x)
    W = "W"  # Left (decreasing x)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) for one step in this direction."""
        return _DELTAS[self]


_OPPOSITES = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}

_DELTAS = {
    Direction.N: (0, -1),
    Direction.S: (0, 1),
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
}


class Tile(Enum):
    """A connector tile. The value is the character used in puzzle input."""

    START = "S"
    VERTICAL = "|"
    HORIZONTAL = "-"
    NORTH_EAST = "L"
    NORTH_WEST = "J"
    SOUTH_WEST = "7"
    SOUTH_EAST = "F"

    @property
    def openings(self) -> frozenset[Direction]:
        """Directions this tile connects to. Empty for START, which is discovered."""
        return _OPENINGS[self]

    @property
    def opens_south(self) -> bool:
        return Direction.S in _OPENINGS[self]

    @classmethod
    def from_openings(cls, openings: frozenset[Direction]) -> Tile:
        for tile, dirs in _OPENINGS.items():
            if tile is not cls.START and dirs == openings:
                return tile
        names = ", ".join(sorted(d.value for d in openings)) or "none"
        raise ValueError(f"No tile connects exactly these directions: {names}")


_OPENINGS: dict[Tile, frozenset[Direction]] = {
    Tile.START: frozenset(),
    Tile.VERTICAL: frozenset({Direction.N, Direction.S}),
    Tile.HORIZONTAL: frozenset({Direction.E, Direction.W}),
    Tile.NORTH_EAST: frozenset({Direction.N, Direction.E}),
    Tile.NORTH_WEST: frozenset({Direction.N, Direction.W}),
    Tile.SOUTH_WEST: frozenset({Direction.S, Direction.W}),
    Tile.SOUTH_EAST: frozenset({Direction.S, Direction.E}),
}


# (x, y): x is the column, y is the row
Coord = tuple[int, int]


@dataclass(frozen=True)
class PipeGrid:
    """
    A sparse grid of pipe tiles.

    Background cells are absent from `tiles`. `max_x` and `max_y` are the
    largest column and row index seen, not counts.
    """

    tiles: Mapping[Coord, Tile] = field(hash=False)
    max_x: int
    max_y: int

    def __post_init__(self) -> None:
        if self.max_x < 0 or self.max_y < 0:
            raise ValueError(
                f"Degenerate grid: max_x={self.max_x}, max_y={self.max_y}\n"
                f"  A grid needs at least one row and one column"
            )
        # Freeze the mapping so nothing can add or remove tiles later
        object.__setattr__(self, "tiles", MappingProxyType(dict(self.tiles)))

    @property
    def width(self) -> int:
        return self.max_x + 1

    @property
    def height(self) -> int:
        return self.max_y + 1

    def tile_at(self, coord: Coord) -> Tile | None:
        return self.tiles.get(coord)

    def step(self, coord: Coord, direction: Direction) -> Coord:
        """
        Move one cell, saturating at 0 and clamping at max_x / max_y.

        A move off the edge returns `coord` itself; callers treat that as
        "no neighbour in this direction".
        """
        dx, dy = direction.delta
        x, y = coord
        return (
            min(max(x + dx, 0), self.max_x),
            min(max(y + dy, 0), self.max_y),
        )

    @property
    def start(self) -> Coord:
        """Coordinate of the single START tile."""
        starts = sorted(c for c, t in self.tiles.items() if t is Tile.START)
        if not starts:
            raise ValueError("Grid has no start tile ('S')")
        if len(starts) > 1:
            raise ValueError(
                f"Grid has {len(starts)} start tiles, expected exactly one\n"
                f"  Positions (x, y): {', '.join(map(str, starts))}"
            )
        return starts[0]
