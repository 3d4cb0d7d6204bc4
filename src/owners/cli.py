"""
OWNERS Count CLI

Counts the distinct reviewers and approvers of a SIG, WG, or committee.

Usage:
    GITHUB_TOKEN=... python -m src.owners sig-node
    GITHUB_TOKEN=... python -m src.owners sig-node --registry ../community/sigs.yaml --list
"""

from __future__ import annotations

import json
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.common.logging import configure_sanitized_logging
from src.owners.config import load_config
from src.owners.counter import count_group
from src.owners.errors import OwnersCountError
from src.owners.models import AggregateResult

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name="owners-count",
    help="Count the reviewers and approvers of a SIG, WG, or committee",
    no_args_is_help=True,
)


@app.command()
def count(
    group: Annotated[
        str,
        typer.Argument(help="Group directory name, e.g. sig-node, wg-batch, committee-steering"),
    ],
    registry: Annotated[
        Path | None,
        typer.Option("--registry", "-r", help="Path to sigs.yaml"),
    ] = None,
    workdir: Annotated[
        Path | None,
        typer.Option("--workdir", "-w", help="Keep checkouts in this directory"),
    ] = None,
    https: Annotated[
        bool,
        typer.Option("--https", help="Clone over https instead of ssh"),
    ] = False,
    no_clone: Annotated[
        bool,
        typer.Option("--no-clone", help="Use existing checkouts in --workdir"),
    ] = False,
    list_members: Annotated[
        bool,
        typer.Option("--list", "-l", help="List reviewers and approvers"),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (debug, info, warning, error)"),
    ] = None,
) -> None:
    """
    Count the distinct reviewers and approvers of a group.

    Clones every repository holding one of the group's subproject OWNERS
    files, resolves aliases, and validates literal names against GitHub.
    """
    overrides: dict = {}
    if registry:
        overrides["registry_path"] = str(registry)
    if https:
        overrides["use_https_clone"] = True
    if log_level:
        overrides["log_level"] = log_level.upper()

    try:
        config = load_config(**overrides)
    except ValueError as e:
        console.print(f"[red]Error:[/red] invalid configuration: {escape(str(e))}")
        raise typer.Exit(1) from e

    configure_sanitized_logging(config.log_level)

    if no_clone and workdir is None:
        console.print("[red]Error:[/red] --no-clone requires --workdir")
        raise typer.Exit(1)

    checkout_dir = workdir or Path(tempfile.mkdtemp(prefix="ownerscount"))
    try:
        result = count_group(group, config, checkout_dir, clone=not no_clone)
    except OwnersCountError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    finally:
        if workdir is None:
            shutil.rmtree(checkout_dir, ignore_errors=True)

    if as_json:
        typer.echo(json.dumps({"group": group, **result.to_dict()}, indent=2))
        return

    _print_result(result, list_members)


def _print_result(result: AggregateResult, list_members: bool) -> None:
    console.print(f"Reviewers: {len(result.reviewers)}")
    console.print(f"Approvers: {len(result.approvers)}")

    if result.unresolved:
        console.print(
            f"[yellow]Unresolvable entities ({len(result.unresolved)}):[/yellow] "
            + escape(", ".join(result.unresolved))
        )

    if not list_members:
        return

    table = Table(title="Members")
    table.add_column("Account")
    table.add_column("Reviewer", justify="center")
    table.add_column("Approver", justify="center")
    for account in sorted(result.reviewers | result.approvers):
        table.add_row(
            account,
            "x" if account in result.reviewers else "",
            "x" if account in result.approvers else "",
        )
    console.print(table)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
