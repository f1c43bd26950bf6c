"""
CLI Main Application - Typer app entry point.

This module provides the anisources command: extract summaries, episodes
and details from pages saved to disk (or piped on stdin), list the
supported sources, and print the URLs a fetcher should request.
"""

import sys
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

import click
import typer
from rich.traceback import install as install_rich_traceback

from anisources import __version__
from anisources.core import ConfigManager, DocumentKind, Extractor, ParseResult, SourceRegistry
from anisources.core.exceptions import AniSourcesError, UnknownSourceError, UnsupportedOperationError
from anisources.sources.base import FilterOption
from anisources.ui import UIComponents, display_info, display_warning, get_console, handle_error, setup_console
from anisources.cli.context import (
    get_config_manager,
    get_extractor,
    set_config_manager,
    set_extractor,
)


logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_UNKNOWN_SOURCE = 2
EXIT_INTERRUPTED = 130


# Create main Typer application
app = typer.Typer(
    name="anisources",
    help="🎌 Extract anime listings, episodes and details from saved source pages",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        get_console().print(f"[bold blue]anisources[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version information and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory path",
        file_okay=False,
        dir_okay=True,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
    ),
) -> None:
    """
    🎌 anisources - Turn saved anime site pages into typed records.
    
    Fetch a page yourself, then hand the file (or '-' for stdin) to one
    of the extraction commands together with the source it came from.
    """
    try:
        _initialize_application(config_dir=config_dir, debug=debug)
    except AniSourcesError as e:
        handle_error(e, "During application initialization", show_traceback=debug)
        raise typer.Exit(EXIT_FAILED)


def _initialize_application(config_dir: Optional[Path] = None, debug: bool = False) -> None:
    """
    Load configuration, configure logging and build the extractor.
    
    Args:
        config_dir: Configuration directory override
        debug: Enable debug mode
    """
    config_manager = ConfigManager(config_dir or Path("config"))
    set_config_manager(config_manager)
    
    _setup_logging(debug, config_manager.settings.logging.level, config_manager.settings.logging.format)
    
    if debug:
        install_rich_traceback(show_locals=True)
    
    setup_console()
    
    set_extractor(Extractor(SourceRegistry(config_manager)))
    logger.debug(f"Initialized with configuration from {config_manager.config_dir}")


def _setup_logging(debug: bool = False, level_name: str = "WARNING", log_format: Optional[str] = None) -> None:
    """
    Set up application logging.
    
    Args:
        debug: Enable debug logging
        level_name: Level from settings, used when not debugging
        log_format: Record format from settings
    """
    level = logging.DEBUG if debug else getattr(logging, level_name, logging.WARNING)
    
    logging.basicConfig(
        level=level,
        format=log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )
    
    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("bs4").setLevel(logging.WARNING)


def _ui() -> UIComponents:
    ui_settings = get_config_manager().settings.ui
    return UIComponents(
        table_style=ui_settings.table_style,
        show_images=ui_settings.show_images,
        max_title_width=ui_settings.max_title_width,
    )


def _read_document(file: str) -> str:
    """Read a document from a path, or from stdin when the path is '-'."""
    if file == "-":
        return sys.stdin.read()
    
    path = Path(file)
    if not path.is_file():
        get_console().print(f"[error]File not found:[/error] {file}")
        raise typer.Exit(EXIT_FAILED)
    
    return path.read_text(encoding="utf-8", errors="replace")


def _check_source(source: str) -> None:
    """Exit with the unknown-source code when the source cannot be resolved."""
    try:
        get_extractor().registry.resolve(source)
    except UnknownSourceError as e:
        handle_error(e)
        raise typer.Exit(EXIT_UNKNOWN_SOURCE)


def _render(result: ParseResult, kind: DocumentKind, source: str, as_json: bool) -> None:
    """Print a result and exit non-zero when it failed."""
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    elif result.is_ok:
        ui = _ui()
        title = f"{source} · {kind.value}"
        if kind == DocumentKind.DETAIL:
            ui.console.print(ui.create_detail_panel(result.value))
            if result.value.episodes:
                ui.console.print(ui.create_episodes_table(result.value.episodes))
        elif kind == DocumentKind.EPISODES:
            ui.console.print(ui.create_episodes_table(result.value, title=title))
        else:
            ui.console.print(ui.create_summaries_table(result.value, title=title))
    else:
        _ui().print_result_status(result)
    
    if result.is_failed:
        raise typer.Exit(EXIT_FAILED)


@app.command(name="featured")
def featured(
    source: str = typer.Argument(..., help="Source name, e.g. AnimeWorld"),
    file: str = typer.Argument(..., help="Saved listing page, or '-' for stdin"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """⭐ Extract featured anime from a listing page."""
    _check_source(source)
    raw = _read_document(file)
    result = get_extractor().extract_featured(source, raw)
    _render(result, DocumentKind.FEATURED, source, as_json)


@app.command(name="search")
def search(
    source: str = typer.Argument(..., help="Source name, e.g. GoGoAnime"),
    file: str = typer.Argument(..., help="Saved search results, or '-' for stdin"),
    query: str = typer.Option("", "--query", "-q", help="Query the results were fetched for"),
    filter_option: FilterOption = typer.Option(
        FilterOption.ALL,
        "--filter",
        "-f",
        help="Keep only dubbed, subbed or Italian results",
        case_sensitive=False,
    ),
    no_fuzzy: bool = typer.Option(
        False,
        "--no-fuzzy",
        help="Keep results whose titles do not match the query",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """🔍 Extract search results."""
    _check_source(source)
    adapter = get_extractor().registry.resolve(source)
    if filter_option != FilterOption.ALL and filter_option not in adapter.metadata.filter_options and not as_json:
        display_warning(
            f"{adapter.metadata.name} does not offer a '{filter_option.value}' filter; "
            f"matching titles anyway"
        )
    
    raw = _read_document(file)
    result = get_extractor().extract_search(
        source,
        raw,
        query=query,
        filter_option=filter_option,
        fuzzy=False if no_fuzzy else None,
    )
    _render(result, DocumentKind.SEARCH, source, as_json)


@app.command(name="episodes")
def episodes(
    source: str = typer.Argument(..., help="Source name"),
    file: str = typer.Argument(..., help="Saved detail or episode-list page, or '-' for stdin"),
    href: str = typer.Option("", "--href", help="Href the page was fetched for"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """📺 Extract the episode list."""
    _check_source(source)
    raw = _read_document(file)
    result = get_extractor().extract_episodes(source, raw, href=href)
    _render(result, DocumentKind.EPISODES, source, as_json)


@app.command(name="detail")
def detail(
    source: str = typer.Argument(..., help="Source name"),
    file: str = typer.Argument(..., help="Saved detail page, or '-' for stdin"),
    href: str = typer.Option("", "--href", help="Href the page was fetched for"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """📋 Extract aliases, synopsis, air date and rating."""
    _check_source(source)
    raw = _read_document(file)
    result = get_extractor().extract_detail(source, raw, href=href)
    _render(result, DocumentKind.DETAIL, source, as_json)


@app.command(name="search-url")
def search_url(
    source: str = typer.Argument(..., help="Source name"),
    query: str = typer.Argument(..., help="Search terms"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Results page"),
    as_json: bool = typer.Option(False, "--json", help="Print the request as JSON"),
) -> None:
    """🔗 Print the search request to fetch for a query."""
    _check_source(source)
    adapter = get_extractor().registry.resolve(source)
    
    try:
        request = adapter.search_request(query, page=page)
    except UnsupportedOperationError as e:
        handle_error(e)
        raise typer.Exit(EXIT_FAILED)
    
    if as_json:
        typer.echo(request.model_dump_json(indent=2))
        return
    
    url = f"{request.url}?{urlencode(request.params)}" if request.params else request.url
    typer.echo(url)
    
    if query.strip() and request == adapter.search_request("", page=page):
        display_info(
            f"{adapter.metadata.name} has no server-side search. Fetch this page and pass "
            f"--query to the search command to filter it."
        )


@app.command(name="sources")
def list_sources() -> None:
    """🔌 List supported sources and the documents they understand."""
    registry = get_extractor().registry
    enabled = [source.metadata.name for source in registry.enabled_sources()]
    ui = _ui()
    ui.console.print(ui.create_sources_table(registry.available_sources(), enabled))


@app.command(name="info")
def show_info() -> None:
    """📋 Show version, configuration paths and settings."""
    config_manager = get_config_manager()
    registry = get_extractor().registry
    settings = config_manager.settings
    console = get_console()
    
    console.print(f"[title]anisources[/title] [green]{__version__}[/green]")
    console.print(f"[bold]Config directory:[/bold] {config_manager.config_dir.resolve()}")
    console.print(f"[bold]Default source:[/bold] {settings.extraction.default_source}")
    console.print(f"[bold]Fallback to default:[/bold] {settings.extraction.fallback_to_default}")
    console.print(f"[bold]Max results:[/bold] {settings.extraction.max_results or 'unlimited'}")
    console.print(f"[bold]Fuzzy search:[/bold] {settings.extraction.fuzzy_search}")
    console.print(f"[bold]Log level:[/bold] {settings.logging.level}")
    console.print(
        f"[bold]Sources:[/bold] {len(registry.enabled_sources())} enabled "
        f"of {len(registry.available_sources())}"
    )


def cli_main() -> None:
    """
    Main CLI entry point for the anisources command.
    
    This function is called when the user runs 'anisources' from the command line.
    """
    try:
        exit_code = app(standalone_mode=False)
    except (KeyboardInterrupt, click.exceptions.Abort):
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(EXIT_INTERRUPTED)
    except click.exceptions.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(EXIT_FAILED)
    
    sys.exit(exit_code if isinstance(exit_code, int) else 0)


# Export main components
__all__ = [
    "app",
    "cli_main",
]
