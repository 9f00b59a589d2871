"""CLI entry point for cell-layout."""

import json
import logging
import sys

import click

from cell_layout.config import LayoutOptions, parse_rank_direction
from cell_layout.ir.loader import diagram_from_dict
from cell_layout.layout.engine import LayoutEngine
from cell_layout.renderers import JsonRenderer, Renderer, SvgRenderer

RENDERERS: dict[str, type] = {"json": JsonRenderer, "svg": SvgRenderer}


def _read_json(path: str | None, what: str):
    try:
        if path is None or path == "-":
            text = sys.stdin.read()
        else:
            with open(path, encoding="utf-8") as f:
                text = f.read()
    except OSError as e:
        click.echo(f"error: cannot read '{path}': {e}", err=True)
        sys.exit(1)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        click.echo(f"error: {what} is not valid JSON (line {e.lineno}, column {e.colno}): {e.msg}", err=True)
        sys.exit(1)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(sorted(RENDERERS)),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option("--direction", "-d", "direction", type=str, default=None, help="Rank direction inside cells (TB, BT, LR, RL)")
@click.option("--node-spacing", type=float, default=None, help="Gap between nodes in a rank and between cells")
@click.option("--rank-spacing", type=float, default=None, help="Gap between ranks inside a cell")
@click.option("--options", "options_file", type=click.Path(exists=True, dir_okay=False), default=None, help="JSON file of layout options")
@click.option("--verbose", "-v", is_flag=True, help="Log layout passes to stderr")
def main(
    input: str | None,
    output: str | None,
    fmt: str,
    direction: str | None,
    node_spacing: float | None,
    rank_spacing: float | None,
    options_file: str | None,
    verbose: bool,
) -> None:
    """Compute the layout of a cell diagram given as JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    data = _read_json(input, "input")

    try:
        options = LayoutOptions.from_mapping(_read_json(options_file, "options file")) if options_file else LayoutOptions()
        changes: dict[str, object] = {}
        if direction is not None:
            changes["rank_direction"] = parse_rank_direction(direction)
        if node_spacing is not None:
            changes["node_spacing"] = node_spacing
        if rank_spacing is not None:
            changes["rank_spacing"] = rank_spacing
        if changes:
            options = options.with_options(**changes)
    except (TypeError, ValueError) as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    try:
        diagram = diagram_from_dict(data)
        result = LayoutEngine(options).layout(diagram)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    renderer: Renderer = RENDERERS[fmt]()
    rendered = renderer.render(result)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
