"""
Worked pipe maze examples with their known answers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Example:
    """A maze and the answers it should produce under the default rules."""

    name: str
    text: str
    distance: int | None = None
    enclosed: int | None = None


SIMPLE_SQUARE = Example(
    name="simple square",
    text="""
.....
.S-7.
.|.|.
.L-J.
.....
""",
    distance=4,
    enclosed=1,
)

WINDING = Example(
    name="winding loop",
    text="""
..F7.
.FJ|.
SJ.L7
|F--J
LJ...
""",
    distance=8,
)

NESTED_CHANNELS = Example(
    name="nested channels",
    text="""
...........
.S-------7.
.|F-----7|.
.||.....||.
.||.....||.
.|L-7.F-J|.
.|..|.|..|.
.L--J.L--J.
...........
""",
    distance=23,
    enclosed=4,
)

PINCH_POINTS = Example(
    name="pinch points",
    text="""
.F----7F7F7F7F-7....
.|F--7||||||||FJ....
.||.FJ||||||||L7....
FJL7L7LJLJ||LJ.L-7..
L--J.L7...LJS7F-7L7.
....F-J..F7FJ|L7L7L7
....L7.F7||L7|.L7L7|
.....|FJLJ|FJ|F7|.LJ
....FJL-7.||.||||...
....L---J.LJ.LJLJ...
""",
    enclosed=8,
)

SQUEEZE = Example(
    name="squeeze",
    text="""
FF7FSF7F7F7F7F7F---7
L|LJ||||||||||||F--J
FL-7LJLJ||||||LJL-77
F--JF--7||LJLJ7F7FJ-
L---JF-JLJ.||-FJLJJ7
|F|F-JF---7F7-L7L|7|
|FFJF7L7F-JF7|JL---7
7-L-JL7||F7|L7F-7F7|
L.L7LFJ|||||FJL7||LJ
L7JLJL-JLJLJL--JLJ.L
""",
    enclosed=10,
)

ALL_EXAMPLES = (SIMPLE_SQUARE, WINDING, NESTED_CHANNELS, PINCH_POINTS, SQUEEZE)
