"""CLI entry point for pi-menu. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from pi.menu.process import choose
from pi.menu.terminal import COLORS, color_code


def _run(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _stdin_is_terminal() -> bool:
    return sys.stdin.isatty()


def _parse_color(ctx, param, value: str) -> str | int:
    color = int(value) if value.isdigit() else value
    try:
        color_code(color, background=False)
    except ValueError as e:
        raise click.BadParameter(str(e)) from None
    return color


@click.command()
@click.argument("labels", nargs=-1, required=True)
@click.option("--width", type=int, default=50, show_default=True, help="Label column width")
@click.option("--padding", type=int, default=None, help="Padding on every side")
@click.option("--selected", type=int, default=0, help="Initially selected index")
@click.option("--fg", default="white", show_default=True, callback=_parse_color, help=f"Foreground: {', '.join(COLORS)} or 0-255")
@click.option("--bg", default="blue", show_default=True, callback=_parse_color, help="Background color")
@click.option("--print-index", is_flag=True, help="Print the index instead of the label")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr")
def main(labels, width, padding, selected, fg, bg, print_index, verbose):
    """Pick one of LABELS with the arrow keys (or j/k) and Enter.

    Prints the chosen label and exits 0; exits 1 when cancelled with q or
    Ctrl-C.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if not _stdin_is_terminal():
        raise click.UsageError("stdin must be a terminal")

    options = {
        "width": width,
        "selected": selected,
        "fg": fg,
        "bg": bg,
    }
    if padding is not None:
        options["padding"] = padding

    choice = _run(choose(labels, options))
    if choice is None:
        sys.exit(1)

    label, index = choice
    click.echo(index if print_index else label)


if __name__ == "__main__":
    main()
