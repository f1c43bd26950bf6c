"""
UI Components - Rich tables and panels for extraction results.

This module renders summaries, episode lists, detail records and the
source catalogue with consistent styling.
"""

from typing import List, Optional

from rich.box import MINIMAL, ROUNDED, SIMPLE, SQUARE
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, ParseResult
from anisources.sources.base import BaseSource
from anisources.ui.console import get_console, get_palette


TABLE_BOXES = {
    "rounded": ROUNDED,
    "simple": SIMPLE,
    "grid": SQUARE,
    "minimal": MINIMAL,
}


class UIComponents:
    """Collection of standardized UI components with consistent styling."""
    
    def __init__(self, table_style: str = "rounded", show_images: bool = False, max_title_width: int = 60):
        self.palette = get_palette()
        self.box = TABLE_BOXES.get(table_style, ROUNDED)
        self.show_images = show_images
        self.max_title_width = max_title_width
    
    @property
    def console(self):
        return get_console()
    
    def _table(self, title: Optional[str] = None) -> Table:
        return Table(
            title=title,
            box=self.box,
            show_header=True,
            header_style=f"bold {self.palette.secondary}",
            border_style=self.palette.border_secondary,
        )
    
    def create_summaries_table(self, summaries: List[AnimeSummary], title: Optional[str] = None) -> Table:
        """
        Create a table of anime summaries.
        
        Args:
            summaries: Summaries to display
            title: Table title
        """
        table = self._table(title)
        table.add_column("#", justify="right", style="dim", width=4)
        table.add_column("Title", style="bold", max_width=self.max_title_width)
        table.add_column("Ep", justify="center", style=self.palette.accent)
        table.add_column("Href", style=self.palette.secondary, overflow="fold")
        if self.show_images:
            table.add_column("Image", style="dim", overflow="fold")
        
        for index, summary in enumerate(summaries, 1):
            row = [str(index), escape(summary.title), escape(summary.episode_label or ""), escape(summary.href)]
            if self.show_images:
                row.append(escape(summary.image_url))
            table.add_row(*row)
        
        return table
    
    def create_episodes_table(self, episodes: List[EpisodeRef], title: Optional[str] = None) -> Table:
        """Create a table of episode references."""
        table = self._table(title)
        table.add_column("Episode", justify="right", style=self.palette.accent)
        table.add_column("Href", style=self.palette.secondary, overflow="fold")
        table.add_column("Download", style="dim", overflow="fold")
        
        for episode in episodes:
            table.add_row(escape(episode.number), escape(episode.href), escape(episode.download_url))
        
        return table
    
    def create_detail_panel(self, detail: AnimeDetail, title: str = "📺 Anime Details") -> Panel:
        """Create a panel showing a detail record."""
        lines = []
        if detail.aliases:
            lines.append(f"[bold]Aliases:[/bold] {escape(detail.aliases)}")
        if detail.airdate:
            lines.append(f"[bold]Aired:[/bold] {escape(detail.airdate)}")
        if detail.rating:
            lines.append(f"[bold]Rating:[/bold] {escape(detail.rating)}")
        lines.append(f"[bold]Episodes:[/bold] {len(detail.episodes)}")
        if detail.synopsis:
            lines.append("")
            lines.append(escape(detail.synopsis))
        
        return Panel(
            "\n".join(lines),
            title=title,
            border_style=self.palette.border_primary,
            padding=(1, 2)
        )
    
    def create_sources_table(self, sources: List[BaseSource], enabled: List[str]) -> Table:
        """
        Create the source catalogue table.
        
        Args:
            sources: Every registered adapter
            enabled: Names of enabled sources
        """
        table = self._table("🔌 Sources")
        table.add_column("Source", style="bold")
        table.add_column("Lang", justify="center")
        table.add_column("Status", justify="center")
        table.add_column("Documents")
        table.add_column("Filters")
        table.add_column("Description", style="dim")
        
        for source in sources:
            kinds = ", ".join(
                f"{kind.value} ({source.payload_format(kind).value})"
                for kind in source.capabilities
            )
            filters = ", ".join(option.value for option in source.metadata.filter_options)
            status = (
                "[status.enabled]enabled[/status.enabled]"
                if source.metadata.name in enabled
                else "[status.disabled]disabled[/status.disabled]"
            )
            table.add_row(
                source.metadata.name,
                source.metadata.language,
                status,
                kinds,
                filters or "-",
                escape(source.metadata.description),
            )
        
        return table
    
    def print_result_status(self, result: ParseResult) -> None:
        """Print a one-line notice for an empty or failed result."""
        reason = result.reason.value if result.reason else "unknown"
        if result.is_empty:
            self.console.print(f"[warning]No results[/warning] [dim]({reason})[/dim] {escape(result.message)}")
        elif result.is_failed:
            retry = " [dim](retryable)[/dim]" if result.retryable else ""
            self.console.print(f"[error]Extraction failed[/error] [dim]({reason})[/dim] {escape(result.message)}{retry}")


# Export UI components
__all__ = ["UIComponents", "TABLE_BOXES"]
