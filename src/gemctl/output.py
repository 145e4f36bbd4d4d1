"""Deliver response text to a file or standard output."""

from __future__ import annotations

from pathlib import Path

import click

from gemctl.errors import IOFailure


def write_response(text: str, output_path: Path | str | None = None) -> Path | None:
    """Write *text* to *output_path*, or echo it to stdout when no path is given.

    The file is overwritten with exactly *text*. Returns the path written, if any.

    Raises:
        IOFailure: The file could not be written.
    """
    if output_path is None:
        click.echo(text)
        return None

    path = Path(output_path).expanduser()
    try:
        with path.open("w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        raise IOFailure(f"Cannot write response to {path}: {exc}", path=str(path)) from exc
    return path
