"""
Demonstration of loop analysis on the worked pipe maze examples.

Usage:
    python demo.py               # all worked examples
    python demo.py squeeze       # one example, by name (spaces as underscores)
    python demo.py maze.txt      # a maze read from a file
    python demo.py verbose ...   # same, with INFO logging
"""

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_pipes
from pipe_examples import ALL_EXAMPLES, Example
from pipe_maze import AnalysisRules, ScanBounds, analyze, enclosed_cells
from pipe_parser import parse_pipes

EXAMPLES = {example.name.replace(" ", "_"): example for example in ALL_EXAMPLES}

EXACT_RULES = AnalysisRules(scan_bounds=ScanBounds.FULL, resolve_start=True)


def example_panel(example: Example) -> Panel:
    """Analyse one maze and lay out the picture and both answers."""
    try:
        grid = parse_pipes(example.text)
        result = analyze(grid)
    except ValueError as e:
        # Bad characters from the parser, or a LoopError from the tracer
        return Panel(Text(str(e), style="red"), title=example.name, border_style="red")

    exact = analyze(grid, EXACT_RULES)
    picture = render_pipes(
        grid, result.trace, enclosed_cells(grid, result.trace), title=example.name
    )

    body = Text.from_ansi("\n".join(picture))
    body.append("\n\n")
    body.append("Farthest distance: ", style="bold")
    body.append(f"{result.distance}\n")
    body.append("Enclosed cells:    ", style="bold")
    body.append(f"{result.enclosed}")
    if exact.enclosed != result.enclosed:
        body.append(f"  (full scan with resolved start: {exact.enclosed})", style="yellow")
    if example.enclosed is not None and example.enclosed != result.enclosed:
        body.append(f"\nExpected {example.enclosed}", style="bold red")

    return Panel(body, title=f"Loop {example.name}", border_style="green", expand=False)


def main(examples: list[Example]) -> None:
    console = Console()
    for example in examples:
        console.print(example_panel(example))


if __name__ == "__main__":
    args = sys.argv[1:]
    if args and args[0] == "verbose":
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
        args = args[1:]

    if not args:
        main(list(ALL_EXAMPLES))
    elif args[0] in EXAMPLES:
        main([EXAMPLES[args[0]]])
    else:
        path = Path(args[0])
        main([Example(name=path.stem, text=path.read_text())])
