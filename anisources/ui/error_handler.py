"""
Error Handler - Error panels with context and suggestions.

This module renders anisources exceptions as Rich panels, each with a
short list of actionable suggestions for the kind of failure.
"""

import traceback
from typing import List, Optional

from rich.markup import escape
from rich.panel import Panel

from anisources.core.exceptions import (
    AniSourcesError,
    ConfigurationError,
    MalformedJsonError,
    MalformedMarkupError,
    SelectorMissError,
    UnknownSourceError,
    UnsupportedOperationError,
)
from anisources.core.models import SourceId
from anisources.ui.console import get_console, get_palette


class ErrorHandler:
    """Renders exceptions and notices as Rich panels."""
    
    def __init__(self):
        self.palette = get_palette()
    
    @property
    def console(self):
        return get_console()
    
    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Print an error panel.
        
        Args:
            error: The exception, anisources or otherwise
            context: What the CLI was doing when it failed
            show_traceback: Append details and the current traceback
        """
        if isinstance(error, AniSourcesError):
            title, lines, suggestions = self._describe(error)
        else:
            title = "💥 Unexpected Error"
            lines = [f"[{self.palette.error}]{error.__class__.__name__}: {escape(str(error))}[/{self.palette.error}]"]
            suggestions = [
                "Check the command syntax and arguments",
                "Run again with [cyan]--debug[/cyan] for detailed logs",
                "Report this issue if it persists",
            ]
        
        if context:
            lines.append(f"\n[dim]Context:[/dim] {context}")
        
        if suggestions:
            lines.append(f"\n\n[{self.palette.info}]💡 Suggestions:[/{self.palette.info}]")
            lines.extend(f"• {suggestion}" for suggestion in suggestions)
        
        if show_traceback:
            details = getattr(error, "details", None)
            if details:
                lines.append(f"\n\n[dim]Details:[/dim]\n{escape(str(details))}")
            lines.append(f"\n\n[dim]Traceback:[/dim]\n{escape(traceback.format_exc())}")
        
        self.console.print(Panel(
            "\n".join(lines),
            title=title,
            border_style=self.palette.error,
            padding=(1, 2)
        ))
    
    def _describe(self, error: AniSourcesError):
        """Title, body lines and suggestions for an anisources error."""
        lines = [f"[{self.palette.error}]{escape(error.message)}[/{self.palette.error}]"]
        suggestions: List[str] = []
        
        if isinstance(error, UnknownSourceError):
            title = "🔌 Unknown Source"
            known = ", ".join(source.value for source in SourceId)
            suggestions = [
                f"Use one of: {known}",
                "List sources with [cyan]anisources sources[/cyan]",
            ]
        elif isinstance(error, ConfigurationError):
            title = "⚙️  Configuration Error"
            if error.config_path:
                lines.append(f"\n[dim]Configuration file:[/dim] [cyan]{escape(error.config_path)}[/cyan]")
            suggestions = [
                "Check configuration file syntax and format",
                "Delete the file to regenerate defaults",
            ]
        elif isinstance(error, UnsupportedOperationError):
            title = "🚫 Unsupported Document"
            suggestions = ["Check the capabilities with [cyan]anisources sources[/cyan]"]
        elif isinstance(error, (MalformedMarkupError, MalformedJsonError)):
            title = "📄 Malformed Document"
            suggestions = [
                "Fetch the page again; it may have been truncated",
                "Make sure the file matches the source's expected format",
            ]
        elif isinstance(error, SelectorMissError):
            title = "🔍 Layout Changed"
            if error.selector:
                lines.append(f"\n[dim]Selector:[/dim] [cyan]{escape(error.selector)}[/cyan]")
            suggestions = ["The site layout may have changed"]
        else:
            title = "❌ Error"
            if error.details:
                lines.append(f"\n[dim]Details:[/dim] {escape(str(error.details))}")
        
        return title, lines, suggestions
    
    def _notice(self, message: str, title: str, color: str) -> None:
        self.console.print(Panel(
            f"[{color}]{escape(message)}[/{color}]",
            title=f"[{color}]{title}[/{color}]",
            border_style=color,
            padding=(0, 1)
        ))
    
    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        self._notice(message, title, self.palette.warning)
    
    def display_info(self, message: str, title: str = "ℹ️  Note") -> None:
        self._notice(message, title, self.palette.info)


_error_handler = ErrorHandler()


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """Render an error panel on the shared console."""
    _error_handler.handle_error(error, context, show_traceback)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    _error_handler.display_warning(message, title)


def display_info(message: str, title: str = "ℹ️  Note") -> None:
    _error_handler.display_info(message, title)


# Export error handling functions
__all__ = [
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
]
