"""CLI UI components (Rich).

Keeps the visual details (tables, error lines, log handler) out of the
command functions.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from core.domain.errors import ProxyConfError
from core.services.pipeline import GenerationResult


def log_level_for(verbose: int, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(console: Console, level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def print_error(console: Console, exc: ProxyConfError) -> None:
    """`<Kind>: <detail>` on a single line, without Rich markup parsing."""

    line = Text.assemble((exc.kind, "bold red"), ": ", exc.detail)
    console.print(line, soft_wrap=True)


def build_mappings_table(result: GenerationResult) -> Table:
    table = Table(title=f"nginx locations ({result.source})")
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Upstream", style="magenta")
    for entry in result.mappings:
        table.add_row(entry.path, entry.target)
    return table


def print_summary(console: Console, result: GenerationResult, *, detailed: bool) -> None:
    if detailed:
        console.print(build_mappings_table(result))
    summary = Text.assemble(
        ("Wrote ", "green"),
        f"{len(result.mappings)} location(s) to ",
        (str(result.conf_path), "bold"),
    )
    console.print(summary, soft_wrap=True)
