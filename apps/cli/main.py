"""CLI application for hexinstall."""

import asyncio
import difflib
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from core.build import run_build_steps
from core.config import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT, Settings
from core.errors import DependencyNotFound
from core.locks import current_locks
from core.mix_exs import apply_selection
from core.models import ManifestUpdate
from core.reconcile import classify, order_candidates
from core.registry import HexRegistry
from core.selector import build_choices, prompt_selection

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def format_diff_output(update: ManifestUpdate) -> str:
    """Format diff-style output showing changes."""
    diff = difflib.unified_diff(
        update.original_content.splitlines(keepends=True),
        update.updated_content.splitlines(keepends=True),
        fromfile=str(update.path),
        tofile=str(update.path),
    )
    return "".join(diff)


def format_change_summary(update: ManifestUpdate) -> str:
    """Summarize which packages were added and upgraded."""
    parts = []
    if update.inserted:
        parts.append(f"Added {', '.join(update.inserted)}")
    if update.upgraded:
        parts.append(f"Upgraded {', '.join(update.upgraded)}")
    return "; ".join(parts)


app = typer.Typer(
    name="hexinstall",
    help="hexinstall - Search hex.pm and add or upgrade dependencies in mix.exs",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """hexinstall - Search hex.pm and add or upgrade dependencies in mix.exs."""


@app.command()
def install(
    query: str = typer.Argument(help="Search term for hex.pm packages"),
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-C", envvar="HEXINSTALL_PROJECT_DIR", help="Mix project directory"
    ),
    registry_url: str = typer.Option(
        DEFAULT_REGISTRY_URL, "--registry-url", envvar="HEX_API_URL", help="Registry API base URL"
    ),
    timeout: float = typer.Option(DEFAULT_TIMEOUT, "--timeout", help="Registry request timeout in seconds"),
    mix_command: str = typer.Option("mix", "--mix", envvar="HEXINSTALL_MIX", help="Mix executable"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show changes without applying"),
    no_build: bool = typer.Option(False, "--no-build", help="Skip mix deps.get and mix format"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Search for packages matching QUERY and install or upgrade the selected ones."""
    configure_logging(verbose)
    settings = Settings(
        project_dir=project_dir,
        registry_url=registry_url,
        timeout=timeout,
        mix_command=mix_command,
    )

    try:
        registry = HexRegistry(base_url=settings.registry_url, timeout=settings.timeout)
        packages = asyncio.run(registry.search(query))
        if not packages:
            console.print("No packages found.")
            raise typer.Exit(0)

        locks = current_locks(settings)
        ordered = order_candidates(classify(packages, locks), query)

        selected = prompt_selection(build_choices(ordered))
        if not selected:
            console.print("No packages selected.")
            raise typer.Exit(0)

        update = apply_selection(settings.manifest_path, selected, write=not dry_run)
        for name in update.missing:
            console.print(f"Warning: {DependencyNotFound(name)}", style="yellow")

        if dry_run:
            console.print(format_diff_output(update), markup=False, highlight=False)
            raise typer.Exit(0)

        if not update.has_changes:
            console.print(f"No changes made to {settings.manifest_name}")
            raise typer.Exit(0)

        console.print(f"Dependencies updated in {settings.manifest_name}")
        console.print(format_change_summary(update))

        if no_build:
            raise typer.Exit(0)

        failures = [step for step in run_build_steps(settings) if not step.ok]
        for step in failures:
            console.print(
                f"Warning: `{' '.join(step.command)}` failed: {step.error}", style="yellow"
            )
        if not failures:
            console.print("Dependencies installed successfully.")

    except typer.Exit:
        raise
    except Exception as e:
        err_console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
