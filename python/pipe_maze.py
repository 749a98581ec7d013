"""
Closed-loop analysis for pipe mazes.
Two phases: trace (walks the loop from the start tile) -> scan (counts enclosed cells).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pipe_types import Coord, Direction, PipeGrid, Tile

logger = logging.getLogger(__name__)


class LoopError(ValueError):
    """The grid does not contain a closed loop through the start tile."""


class ScanBounds(Enum):
    """How far the enclosure scan reaches along each row and column."""

    MAX_INDEX_EXCLUSIVE = "max_index_exclusive"  # Stop before max_x / max_y
    FULL = "full"  # Include the last row and column


@dataclass(frozen=True)
class AnalysisRules:
    """Rules governing loop analysis."""

    scan_bounds: ScanBounds = ScanBounds.MAX_INDEX_EXCLUSIVE
    # Let the start tile toggle the scan as the shape its loop neighbours imply
    resolve_start: bool = False
    # Order candidate directions are pushed onto the work stack
    direction_order: tuple[Direction, ...] = (Direction.N, Direction.S, Direction.W, Direction.E)

    def __post_init__(self) -> None:
        if sorted(d.value for d in self.direction_order) != sorted(d.value for d in Direction):
            raise ValueError(
                f"direction_order must name each direction exactly once, "
                f"got {[d.value for d in self.direction_order]}"
            )


# =============================================================================
# Data Structures: Analysis Results
# =============================================================================


@dataclass(frozen=True)
class LoopTrace:
    """The loop through the start tile."""

    start: Coord
    path: tuple[Coord, ...]  # Visitation order, path[0] == start
    members: frozenset[Coord]

    @property
    def length(self) -> int:
        return len(self.path)

    @property
    def farthest_distance(self) -> int:
        """Steps from the start to the opposite point of the loop."""
        return self.length // 2


@dataclass(frozen=True)
class LoopAnalysis:
    """Both answers for one grid."""

    distance: int
    enclosed: int
    trace: LoopTrace


# =============================================================================
# Phase 1: Trace
# =============================================================================


def accepts(tile: Tile, direction: Direction) -> bool:
    """True if `tile` can be entered by moving in `direction` (it opens back toward the mover)."""
    return direction.opposite in tile.openings


def compatible_neighbors(
    grid: PipeGrid,
    coord: Coord,
    tile: Tile,
    visited: set[Coord] | frozenset[Coord] = frozenset(),
    order: tuple[Direction, ...] = tuple(Direction),
) -> list[tuple[Coord, Tile]]:
    """
    Neighbours reachable from `coord` in one step.

    A START tile offers every direction; any other tile offers only its two
    openings. A candidate is dropped when the move falls off the grid, lands
    on a visited cell or background, or lands on a tile that does not open
    back toward `coord`.
    """
    directions = order if tile is Tile.START else [d for d in order if d in tile.openings]

    found: list[tuple[Coord, Tile]] = []
    for direction in directions:
        neighbor = grid.step(coord, direction)
        if neighbor == coord:
            # Clamp absorbed the move
            continue
        if neighbor in visited:
            continue
        neighbor_tile = grid.tile_at(neighbor)
        if neighbor_tile is None or not accepts(neighbor_tile, direction):
            continue
        found.append((neighbor, neighbor_tile))
    return found


def _returns_to_start(grid: PipeGrid, start: Coord, first: Coord, direction: Direction) -> bool:
    """
    Follow the pipe chain entered by moving `direction` into `first`.

    True if the chain leads back into the start, False if it dead-ends on an
    edge, background, a misaligned tile or a cell already walked.
    """
    coord, entered = first, direction
    walked: set[Coord] = set()

    while True:
        walked.add(coord)
        # A tile reached via accepts() has exactly one other opening
        (out,) = grid.tiles[coord].openings - {entered.opposite}
        neighbor = grid.step(coord, out)
        if neighbor == start:
            return True
        if neighbor == coord or neighbor in walked:
            return False
        neighbor_tile = grid.tile_at(neighbor)
        if neighbor_tile is None or not accepts(neighbor_tile, out):
            return False
        coord, entered = neighbor, out


def loop_exits(
    grid: PipeGrid,
    start: Coord,
    order: tuple[Direction, ...] = tuple(Direction),
) -> list[tuple[Coord, Tile]]:
    """
    The start's compatible neighbours whose pipe chain closes back on the start.

    Stray pipes that open onto the start but dead-end elsewhere are left out.
    """
    exits: list[tuple[Coord, Tile]] = []
    for direction in order:
        found = compatible_neighbors(grid, start, Tile.START, order=(direction,))
        if found and _returns_to_start(grid, start, found[0][0], direction):
            exits.append(found[0])
    return exits


def trace_loop(grid: PipeGrid, rules: AnalysisRules | None = None) -> LoopTrace:
    """
    Walk the loop that passes through the start tile.

    The start's exits are first narrowed to those whose pipe chain closes back
    on it, so a stray pipe pointing at the start is never followed. The walk
    then uses an explicit work stack with a visited guard, so loop size is not
    limited by recursion depth. On a simple loop every tile has exactly two
    compatible neighbours, so the walk covers the loop and nothing else.

    Args:
        grid: The pipe maze
        rules: Only `direction_order` is used here

    Returns:
        LoopTrace with the loop's coordinates in visitation order

    Raises:
        LoopError: If there is no start tile, fewer than two of the start's
            exits close back on it, or the walk does not close on the start
    """
    if rules is None:
        rules = AnalysisRules()

    try:
        start = grid.start
    except ValueError as e:
        raise LoopError(str(e)) from e

    neighbors = compatible_neighbors(grid, start, Tile.START, order=rules.direction_order)
    exits = loop_exits(grid, start, rules.direction_order)
    if len(exits) < 2:
        raise LoopError(
            f"Start tile at {start} is not on a loop\n"
            f"  Compatible neighbours: {len(neighbors)} ({', '.join(str(c) for c, _ in neighbors) or 'none'})\n"
            f"  Of those, {len(exits)} lead back to the start; a loop needs two"
        )

    visited: set[Coord] = {start}
    path: list[Coord] = [start]
    stack: list[tuple[Coord, Tile]] = list(exits)

    while stack:
        coord, tile = stack.pop()
        if coord in visited:
            continue
        visited.add(coord)
        path.append(coord)

        for neighbor, neighbor_tile in compatible_neighbors(
            grid, coord, tile, visited, rules.direction_order
        ):
            stack.append((neighbor, neighbor_tile))

    last = path[-1]
    if last not in {c for c, _ in exits} or len(path) % 2 != 0:
        raise LoopError(
            f"Walk from start {start} did not close into a loop\n"
            f"  Visited {len(path)} tiles, last tile {last} ({grid.tiles[last].value})\n"
            f"  The last tile of a closed loop connects back to the start"
        )

    logger.debug("trace_loop: start=%s, length=%d, last=%s", start, len(path), last)
    return LoopTrace(start, tuple(path), frozenset(visited))


def resolve_start_tile(grid: PipeGrid, trace: LoopTrace) -> Tile:
    """
    The concrete tile the start stands for: the one whose openings point at
    the start's two loop neighbours.
    """
    openings: set[Direction] = set()
    for direction in Direction:
        neighbor = grid.step(trace.start, direction)
        if neighbor == trace.start or neighbor not in trace.members:
            continue
        if accepts(grid.tiles[neighbor], direction):
            openings.add(direction)

    try:
        return Tile.from_openings(frozenset(openings))
    except ValueError as e:
        raise LoopError(f"Cannot resolve start tile at {trace.start}: {e}") from e


def farthest_distance(grid: PipeGrid, rules: AnalysisRules | None = None) -> int:
    """
    Steps along the loop from the start to the farthest point.

    Convenience entry for the first answer when the enclosed count is not
    needed; `analyze` returns both from a single trace.
    """
    return trace_loop(grid, rules).farthest_distance


# =============================================================================
# Phase 2: Scan
# =============================================================================


def enclosed_cells(
    grid: PipeGrid,
    trace: LoopTrace,
    rules: AnalysisRules | None = None,
) -> frozenset[Coord]:
    """
    Cells inside the loop, by row-wise parity scan.

    Each row is scanned left to right with an `inside` flag that flips on loop
    tiles opening south (|, 7, F). Horizontal runs and north-opening corners
    leave it alone, so an L-7 or F-J pair counts as one crossing and an L-J or
    F-7 pair as none. Off-loop cells (background or stray pipes) seen while
    inside are enclosed.

    With the default rules the scan stops before max_x / max_y and the start
    tile never flips the flag.

    Args:
        grid: The pipe maze
        trace: The loop, from trace_loop
        rules: Scan bounds and start handling

    Returns:
        Coordinates of the enclosed cells
    """
    if rules is None:
        rules = AnalysisRules()

    match rules.scan_bounds:
        case ScanBounds.MAX_INDEX_EXCLUSIVE:
            x_end, y_end = grid.max_x, grid.max_y
        case ScanBounds.FULL:
            x_end, y_end = grid.max_x + 1, grid.max_y + 1

    start_tile = resolve_start_tile(grid, trace) if rules.resolve_start else Tile.START

    inside_cells: set[Coord] = set()
    for y in range(y_end):
        inside = False
        for x in range(x_end):
            coord = (x, y)
            if coord in trace.members:
                tile = start_tile if coord == trace.start else grid.tiles[coord]
                if tile.opens_south:
                    inside = not inside
            elif inside:
                inside_cells.add(coord)

    return frozenset(inside_cells)


def count_enclosed(
    grid: PipeGrid,
    trace: LoopTrace | None = None,
    rules: AnalysisRules | None = None,
) -> int:
    """Number of cells inside the loop. Traces the loop if `trace` is not given."""
    if trace is None:
        trace = trace_loop(grid, rules)
    return len(enclosed_cells(grid, trace, rules))


def analyze(grid: PipeGrid, rules: AnalysisRules | None = None) -> LoopAnalysis:
    """Trace the loop once and derive both answers from it."""
    if rules is None:
        rules = AnalysisRules()

    trace = trace_loop(grid, rules)
    enclosed = count_enclosed(grid, trace, rules)

    logger.info(
        "analyze: loop_length=%d, distance=%d, enclosed=%d, scan_bounds=%s, resolve_start=%s",
        trace.length,
        trace.farthest_distance,
        enclosed,
        rules.scan_bounds.value,
        rules.resolve_start,
    )
    return LoopAnalysis(trace.farthest_distance, enclosed, trace)
