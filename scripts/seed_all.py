"""Seed the book collection, then run the query walkthrough."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import click
from rich.console import Console

console = Console()


def _connection_args(uri: str | None, database: str | None, collection: str | None) -> list[str]:
    args: list[str] = []
    for flag, value in (("--uri", uri), ("--database", database), ("--collection", collection)):
        if value:
            args.extend([flag, value])
    return args


def run_step(script: Path, args: list[str]) -> int:
    """Run one script with the current interpreter and return its exit code."""
    result = subprocess.run(
        [sys.executable, str(script), *args],
        capture_output=False,
    )
    return result.returncode


@click.command()
@click.option("--uri", type=str, default=None, help="MongoDB connection string (overrides MONGODB_URI)")
@click.option("--database", type=str, default=None, help="Database name (overrides MONGODB_DATABASE)")
@click.option("--collection", type=str, default=None, help="Collection name (overrides MONGODB_COLLECTION)")
@click.option("--skip-queries", is_flag=True, help="Only seed, do not run the queries")
def main(
    uri: str | None,
    database: str | None,
    collection: str | None,
    skip_queries: bool,
) -> None:
    """Seed the book collection, then run the query walkthrough."""
    console.print("[bold blue]Starting bookstore seed...[/bold blue]")
    console.print()

    scripts_dir = Path(__file__).parent
    args = _connection_args(uri, database, collection)
    total = 1 if skip_queries else 2

    console.print(f"[bold cyan]Step 1/{total}: Seeding books...[/bold cyan]")
    if run_step(scripts_dir / "seed_books.py", args) != 0:
        console.print("[bold red]Seeding failed![/bold red]")
        sys.exit(1)
    console.print()

    if not skip_queries:
        console.print("[bold cyan]Step 2/2: Running queries...[/bold cyan]")
        if run_step(scripts_dir / "run_queries.py", args) != 0:
            console.print("[bold red]Queries failed![/bold red]")
            sys.exit(1)
        console.print()

    console.print("[bold green]✓ Bookstore seed complete![/bold green]")


if __name__ == "__main__":
    main()
