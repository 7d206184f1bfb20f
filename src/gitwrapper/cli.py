"""
Command-line interface for gitwrapper
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape as rich_escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gitwrapper.errors import GitError, RefNotFound
from gitwrapper.models import RemoteDescriptor, StashEntry
from gitwrapper.repository import Repository, WorkingTreeRepository

# Create a console instance for all output
console = Console()


def _flag(value: bool) -> str:
    return "[green]yes[/]" if value else "[yellow]no[/]"


def print_summary(repo: Repository) -> None:
    """Print identity, HEAD and state flags in a panel."""
    try:
        head = repo.head().value
    except RefNotFound:
        head = "(no commits yet)"

    summary = Text()
    summary.append("Kind:      ", style="bold")
    summary.append(f"{repo.identity.kind.value}\n", style="cyan bold")
    summary.append("GIT_DIR:   ", style="bold")
    summary.append(f"{repo.git_dir}\n")
    if repo.work_tree is not None:
        summary.append("Work tree: ", style="bold")
        summary.append(f"{repo.work_tree}\n")
    summary.append("HEAD:      ", style="bold")
    summary.append(head, style="green bold")

    console.print(Panel(summary, title="[bold blue]Repository[/]", border_style="blue"))

    if isinstance(repo, WorkingTreeRepository):
        console.print(f"  Clean:   {_flag(repo.is_clean())}")
    console.print(f"  Shallow: {_flag(repo.is_shallow())}")
    console.print(f"  Sparse:  {_flag(repo.is_sparse())}")


def print_remotes(remotes: list[RemoteDescriptor]) -> None:
    """Print configured remotes using a Rich table."""
    console.print()
    if not remotes:
        console.print("[dim]No remotes configured.[/]")
        return

    table = Table(title="Remotes", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Fetch URL")
    table.add_column("Push URL", style="dim")

    for remote in remotes:
        table.add_row(remote.name, rich_escape(remote.fetch_url), rich_escape(remote.push_url))

    console.print(table)


def print_stashes(entries: list[StashEntry]) -> None:
    """Print stash entries, most recent first."""
    console.print()
    if not entries:
        console.print("[dim]Stash is empty.[/]")
        return

    table = Table(title="Stash", show_header=True, header_style="bold magenta")
    table.add_column("Ref", style="cyan")
    table.add_column("Message")

    for entry in entries:
        table.add_row(entry.ref, rich_escape(entry.message))

    console.print(table)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Show what git reports about a repository"
    )
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("."),
        help="Directory inside the repository (default: current directory)"
    )
    parser.add_argument(
        "--stash",
        action="store_true",
        help="Also list stash entries"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every git invocation"
    )

    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        repo = Repository.discover(args.directory)
        print_summary(repo)
        print_remotes(repo.remotes())
        if args.stash and isinstance(repo, WorkingTreeRepository):
            print_stashes(repo.stash.list())
    except GitError as e:
        console.print(f"[bold red]Error:[/] {rich_escape(str(e))}")
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
