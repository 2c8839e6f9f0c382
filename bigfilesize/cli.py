"""Command line interface for bigfilesize."""

import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
import typer

from .arithmetic import MathBackend
from .bigfile import BigFile
from .config import DEFAULT_MATH_BACKEND, SizeConfig
from .errors import FileNotFound, SizeIndeterminate
from .units import SIZE_UNIT_FACTORS

console = Console()
app = typer.Typer(help="bigfilesize - exact sizes of files of any size")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _format_size(file: BigFile, as_float: bool, unit: Optional[str]) -> str:
    if unit is not None:
        return f"{file.size_in(unit):.3f} {unit}"  # type: ignore[arg-type]

    if as_float:
        return repr(file.size(as_float=True))

    return str(file.size())


@app.command()
def main(
    paths: List[Path] = typer.Argument(..., help="Files to measure."),
    as_float: bool = typer.Option(False, "--float", help="Report sizes as (possibly lossy) floats."),
    unit: Optional[str] = typer.Option(None, "--unit", "-u", help="Report sizes in this unit, e.g. MB or GiB."),
    fast: bool = typer.Option(False, "--fast", help="Never fall back to reading the whole file."),
    backend: MathBackend = typer.Option(
        DEFAULT_MATH_BACKEND, "--backend", case_sensitive=False, help="Arithmetic backend for the slow scan."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the exact size of each file."""
    _setup_logging(verbose)

    if unit is not None and unit not in SIZE_UNIT_FACTORS:
        raise typer.BadParameter(f"Invalid size unit: {unit}", param_hint="--unit")

    config = SizeConfig(math_backend=backend, fast_mode=fast)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Size", justify="right", no_wrap=True)
    table.add_column("File")

    failed = 0
    for path in paths:
        try:
            file = BigFile.from_path(path, config=config)
            table.add_row(_format_size(file, as_float, unit), str(path))
        except (FileNotFound, SizeIndeterminate) as e:
            failed += 1
            table.add_row("[red]error[/red]", f"{path}: {e}")

    console.print(table)

    if failed:
        raise typer.Exit(code=1)
