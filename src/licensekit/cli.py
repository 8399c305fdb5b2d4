"""licensekit CLI - Command Line Interface."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Iterator, List, NoReturn, Optional, Tuple

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from licensekit.bundled import load_bundled_catalog
from licensekit.cache import LicenseCache
from licensekit.config import Settings, parse_manifest_value
from licensekit.detect import ExistingLicenseDetector
from licensekit.engine import LicenseEngine, Selection
from licensekit.errors import (
    AmbiguousIdentifierError,
    CatalogLoadError,
    ConfigError,
    ProjectError,
)
from licensekit.log import configure_logging, get_logger
from licensekit.models import (
    ALL_CATEGORIES,
    ExistingLicenseSignal,
    LicenseCategory,
    LicenseEntry,
    LicenseText,
)
from licensekit.project import ProjectSnapshot, probe_project, write_license
from licensekit.spdx import SpdxClient, load_spdx_catalog

app = typer.Typer(
    name="licensekit",
    help="📜 licensekit - Add an open source license to your project",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)
log = get_logger(__name__)

EXIT_ERROR = 1
EXIT_FATAL = 2
CUSTOM_CHOICE = "c"


def die(message: str, code: int = EXIT_ERROR) -> NoReturn:
    """Print an error and exit."""
    err_console.print(f"[red]✖ {message}[/red]")
    raise typer.Exit(code)


def get_settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


@contextmanager
def open_engine(settings: Settings) -> Iterator[LicenseEngine]:
    """Load the catalog and yield an engine; the SPDX client stays open meanwhile."""
    if settings.offline:
        try:
            index = load_bundled_catalog()
        except CatalogLoadError as e:
            die(str(e), code=EXIT_FATAL)
        yield LicenseEngine(index)
        return
    
    cache = LicenseCache(settings.cache_dir, ttl_hours=settings.cache_ttl_hours)
    with SpdxClient(timeout=settings.timeout, base_url=settings.spdx_url, cache=cache) as client:
        try:
            index = load_spdx_catalog(client)
        except CatalogLoadError as e:
            die(f"{e} (use --offline for the bundled catalog)", code=EXIT_FATAL)
        yield LicenseEngine(index)


@app.callback()
def main(
    ctx: typer.Context,
    offline: Optional[bool] = typer.Option(
        None, "--offline/--online", help="Use the bundled license catalog instead of SPDX"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """Choose and apply an open source license."""
    if verbose:
        configure_logging(logging.DEBUG)
    elif quiet:
        configure_logging(logging.ERROR)
    else:
        configure_logging(logging.WARNING)
    
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        die(str(e), code=EXIT_FATAL)
    
    if offline is not None:
        settings = replace(settings, offline=offline)
    ctx.obj = {"settings": settings}


def _normalize_category(category: str) -> str:
    """Accept category names case-insensitively on the command line."""
    if category.lower() == ALL_CATEGORIES.lower():
        return ALL_CATEGORIES
    try:
        return LicenseCategory.parse(category).value
    except ValueError:
        die(f"Unknown category: {category}")


def _license_table(entries: List[LicenseEntry], numbered: bool = False) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    if numbered:
        table.add_column("#", justify="right")
    table.add_column("Key", style="bold")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("")
    
    for i, entry in enumerate(entries, 1):
        row = [entry.identifier, entry.name, entry.category.value,
               "[yellow]★ Popular[/yellow]" if entry.popular else ""]
        if numbered:
            row.insert(0, str(i))
        table.add_row(*row)
    return table


def _report_failure(selection: Selection) -> None:
    """Fatal failures exit; recoverable ones are printed."""
    if isinstance(selection.error, AmbiguousIdentifierError):
        die(selection.message, code=EXIT_FATAL)
    err_console.print(f"[red]✖ Failed to get license: {selection.message}[/red]")


def _prompt_for_license(engine: LicenseEngine) -> LicenseText:
    """Interactive selection; stays on the selection step until a license resolves."""
    popular = engine.popular()
    console.print("No license found. Select a license to add:")
    console.print(_license_table(popular, numbered=True))
    
    while True:
        choice = Prompt.ask(
            f"Number, or [cyan]{CUSTOM_CHOICE}[/cyan] to enter a custom license key",
            console=console,
        ).strip()
        
        if choice.lower() == CUSTOM_CHOICE:
            raw = Prompt.ask("Enter a license key (e.g. MIT, Apache-2.0)", console=console)
        elif choice.isdigit() and 1 <= int(choice) <= len(popular):
            raw = popular[int(choice) - 1].identifier
        else:
            raw = choice
        
        selection = engine.select(raw)
        if selection.ok:
            return selection.text
        _report_failure(selection)


def _detect(path: Path) -> Tuple[ProjectSnapshot, ExistingLicenseSignal]:
    """Probe the project and run detection; needs no catalog."""
    try:
        snapshot = probe_project(path)
    except ProjectError as e:
        die(str(e))
    
    detector = ExistingLicenseDetector(manifest_name=snapshot.manifest_name)
    return snapshot, detector.detect(snapshot.files, snapshot.manifest_license)


@app.command()
def check(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Project directory"),
):
    """Check whether a project already has a license."""
    _, signal = _detect(path)
    
    if signal.needs_license:
        console.print(f"[yellow]⚠️ {signal.description} in {path}[/yellow]")
        raise typer.Exit(EXIT_ERROR)
    console.print(f"[green]✔ License already exists[/green]\n{signal.description}")


@app.command("list")
def list_licenses(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Search term"),
    category: str = typer.Option(ALL_CATEGORIES, "--category", "-c", help="Category filter"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=0, help="Maximum rows to show"
    ),
):
    """List available licenses, popular ones first."""
    category = _normalize_category(category)
    
    with open_engine(get_settings(ctx)) as engine:
        entries = engine.candidates(search, category)
    
    if not entries:
        console.print("[yellow]No licenses found matching your criteria[/yellow]")
        return
    
    shown = entries[:limit] if limit is not None else entries
    console.print(_license_table(shown))
    console.print(f"Available Licenses ({len(entries)})")


@app.command()
def show(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="License key, e.g. MIT"),
):
    """Print the full text of a license."""
    with open_engine(get_settings(ctx)) as engine:
        selection = engine.select(key)
    
    if not selection.ok:
        _report_failure(selection)
        raise typer.Exit(EXIT_ERROR)
    typer.echo(selection.text.body, nl=False)


@app.command()
def add(
    ctx: typer.Context,
    key: Optional[str] = typer.Argument(None, help="License key; prompts when omitted"),
    path: Path = typer.Option(Path("."), "--path", "-p", help="Project directory"),
    force: bool = typer.Option(False, "--force", "-f", help="Add even if a license exists"),
    manifest_value: Optional[str] = typer.Option(
        None, "--manifest-value", "-m",
        help="Write the license 'name' or 'identifier' into package.json",
    ),
):
    """Add a LICENSE file to a project."""
    settings = get_settings(ctx)
    try:
        chosen_value = (
            parse_manifest_value(manifest_value) if manifest_value else settings.manifest_value
        )
    except ConfigError as e:
        die(str(e))
    
    _, signal = _detect(path)
    if not signal.needs_license and not force:
        console.print(Panel.fit(
            f"[green]✔ License already exists[/green]\n{signal.description}\n\n"
            "No action needed.",
            border_style="green",
        ))
        return
    
    with open_engine(settings) as engine:
        if key is None:
            text = _prompt_for_license(engine)
        else:
            selection = engine.select(key)
            if not selection.ok:
                _report_failure(selection)
                raise typer.Exit(EXIT_ERROR)
            text = selection.text
    
    try:
        result = write_license(path, text, chosen_value, overwrite=force)
    except ProjectError as e:
        die(f"Failed to write license file: {e}")
    
    console.print(f"[green]✔ License added successfully![/green] ({text.name})")
    if result.manifest_path is not None:
        console.print(f"Updated {result.manifest_path.name}: license = {result.manifest_license}")
    console.print(
        "[yellow]ℹ Note: Remember to customize the license with your "
        "copyright information.[/yellow]"
    )


@app.command("cache-clear")
def cache_clear(ctx: typer.Context):
    """Remove cached SPDX data."""
    settings = get_settings(ctx)
    cache = LicenseCache(settings.cache_dir, ttl_hours=settings.cache_ttl_hours)
    count = cache.clear()
    console.print(f"Cleared {count} cached entries")


@app.command()
def version():
    """Show version information."""
    from licensekit import __version__
    console.print(f"licensekit v{__version__}")


if __name__ == "__main__":
    app()
