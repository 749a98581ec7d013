"""Tests for pipe_parser module."""

import pytest

from pipe_examples import SIMPLE_SQUARE, WINDING
from pipe_parser import format_pipes, parse_pipes
from pipe_types import Direction, PipeGrid, Tile


class TestParsePipes:
    """Tests for building a grid from text."""

    def test_simple_square(self) -> None:
        """Parse the small square loop into a sparse tile map."""
        grid = parse_pipes(SIMPLE_SQUARE.text)

        assert grid == PipeGrid(
            {
                (1, 1): Tile.START,
                (2, 1): Tile.HORIZONTAL,
                (3, 1): Tile.SOUTH_WEST,
                (1, 2): Tile.VERTICAL,
                (3, 2): Tile.VERTICAL,
                (1, 3): Tile.NORTH_EAST,
                (2, 3): Tile.HORIZONTAL,
                (3, 3): Tile.NORTH_WEST,
            },
            max_x=4,
            max_y=4,
        )

    def test_winding_loop(self) -> None:
        """Parse a loop that touches the left edge."""
        grid = parse_pipes(WINDING.text)

        assert grid.max_x == 4
        assert grid.max_y == 4
        assert len(grid.tiles) == 16
        assert grid.tiles[(0, 2)] is Tile.START
        assert grid.tiles[(2, 0)] is Tile.SOUTH_EAST
        assert grid.tiles[(3, 0)] is Tile.SOUTH_WEST
        assert grid.tiles[(1, 4)] is Tile.NORTH_WEST
        assert (2, 2) not in grid.tiles

    def test_background_is_absent(self) -> None:
        """Background cells are not stored."""
        grid = parse_pipes("...|\n.S-J")

        assert grid.tile_at((0, 0)) is None
        assert grid.tile_at((3, 0)) is Tile.VERTICAL
        assert set(grid.tiles) == {(3, 0), (1, 1), (2, 1), (3, 1)}

    def test_max_x_from_longest_row(self) -> None:
        """Ragged rows take max_x from the longest one."""
        grid = parse_pipes("S-7\n|.|..\nL-J")

        assert grid.max_x == 4
        assert grid.max_y == 2

    def test_whitespace_handling(self) -> None:
        """Indentation and surrounding blank lines are ignored."""
        definition = """

            .S7.
            .LJ.

        """
        grid = parse_pipes(definition)

        assert grid.max_x == 3
        assert grid.max_y == 1
        assert grid.tiles[(1, 0)] is Tile.START

    def test_single_cell(self) -> None:
        """A one-cell grid has both bounds at zero."""
        grid = parse_pipes("S")

        assert grid.max_x == 0
        assert grid.max_y == 0
        assert grid.width == 1
        assert grid.height == 1

    def test_error_invalid_character(self) -> None:
        """Characters outside the tile alphabet fail fast."""
        with pytest.raises(ValueError, match="Invalid character 'X'"):
            parse_pipes(".S-7.\n.|X|.\n.L-J.")

    def test_error_message_has_position(self) -> None:
        """The error names the row and column."""
        with pytest.raises(ValueError) as exc_info:
            parse_pipes("S-7\n|.|\nL-#")

        message = str(exc_info.value)
        assert "Row 2" in message
        assert "column 2" in message

    def test_error_empty_text(self) -> None:
        """No rows at all is a degenerate grid."""
        with pytest.raises(ValueError, match="Empty pipe maze"):
            parse_pipes("  \n\n ")

    def test_error_blank_row(self) -> None:
        """A blank line between rows is a degenerate row."""
        with pytest.raises(ValueError, match="Empty row"):
            parse_pipes("S-7\n\nL-J")


class TestFormatPipes:
    """Tests for rendering a grid back to text."""

    def test_matches_input(self) -> None:
        """Formatting a parsed rectangular maze gives the original rows."""
        grid = parse_pipes(SIMPLE_SQUARE.text)

        assert format_pipes(grid) == SIMPLE_SQUARE.text.strip()

    def test_ragged_rows_padded(self) -> None:
        """Short rows are padded with background."""
        grid = parse_pipes("S-7\n|.|..\nL-J")

        assert format_pipes(grid) == "S-7..\n|.|..\nL-J.."


class TestPipeGrid:
    """Tests for the grid model."""

    def test_tiles_read_only(self) -> None:
        """Tiles cannot be added after construction."""
        grid = parse_pipes(SIMPLE_SQUARE.text)

        with pytest.raises(TypeError):
            grid.tiles[(0, 0)] = Tile.VERTICAL  # type: ignore[index]

    def test_source_mapping_copied(self) -> None:
        """Mutating the dict the grid was built from does not change the grid."""
        tiles = {(0, 0): Tile.START}
        grid = PipeGrid(tiles, max_x=0, max_y=0)
        tiles[(0, 0)] = Tile.VERTICAL

        assert grid.tiles[(0, 0)] is Tile.START

    def test_step_inside(self) -> None:
        """A step away from the edges moves one cell."""
        grid = PipeGrid({}, max_x=4, max_y=4)

        assert grid.step((2, 2), Direction.N) == (2, 1)
        assert grid.step((2, 2), Direction.S) == (2, 3)
        assert grid.step((2, 2), Direction.E) == (3, 2)
        assert grid.step((2, 2), Direction.W) == (1, 2)

    def test_step_clamps_at_edges(self) -> None:
        """A step off any edge stays in place."""
        grid = PipeGrid({}, max_x=4, max_y=3)

        assert grid.step((0, 0), Direction.N) == (0, 0)
        assert grid.step((0, 0), Direction.W) == (0, 0)
        assert grid.step((4, 3), Direction.E) == (4, 3)
        assert grid.step((4, 3), Direction.S) == (4, 3)

    def test_start(self) -> None:
        """The start property finds the S tile."""
        assert parse_pipes(WINDING.text).start == (0, 2)

    def test_error_no_start(self) -> None:
        """A grid with no S tile has no start."""
        with pytest.raises(ValueError, match="no start tile"):
            parse_pipes("F7\nLJ").start

    def test_error_two_starts(self) -> None:
        """More than one S tile is ambiguous."""
        with pytest.raises(ValueError, match="2 start tiles"):
            parse_pipes("S7\nLS").start

    def test_error_negative_bounds(self) -> None:
        """A grid needs at least one cell."""
        with pytest.raises(ValueError, match="Degenerate grid"):
            PipeGrid({}, max_x=-1, max_y=0)


class TestTile:
    """Tests for tile connectivity."""

    def test_every_shape_has_two_openings(self) -> None:
        """Each non-start tile connects exactly two directions."""
        for tile in Tile:
            if tile is Tile.START:
                assert tile.openings == frozenset()
            else:
                assert len(tile.openings) == 2

    def test_south_opening_tiles(self) -> None:
        """Only |, 7 and F open south."""
        south = {tile for tile in Tile if tile.opens_south}

        assert south == {Tile.VERTICAL, Tile.SOUTH_WEST, Tile.SOUTH_EAST}

    def test_from_openings(self) -> None:
        """Tiles can be looked up by their openings."""
        assert Tile.from_openings(frozenset({Direction.S, Direction.E})) is Tile.SOUTH_EAST
        assert Tile.from_openings(frozenset({Direction.N, Direction.S})) is Tile.VERTICAL

    def test_from_openings_error(self) -> None:
        """Three openings match no tile."""
        with pytest.raises(ValueError, match="No tile connects"):
            Tile.from_openings(frozenset({Direction.N, Direction.S, Direction.E}))

    def test_opposites(self) -> None:
        """Opposite directions pair up."""
        for direction in Direction:
            assert direction.opposite.opposite is direction
            dx, dy = direction.delta
            odx, ody = direction.opposite.delta
            assert (dx + odx, dy + ody) == (0, 0)
