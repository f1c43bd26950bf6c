"""
Console - The shared Rich console and its theme.

This module provides the shared Rich console, its color palette and
the theme used by tables and panels across the CLI.
"""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.theme import Theme


@dataclass
class ColorPalette:
    """Color palette used by UI components."""
    
    primary: str = "blue"
    secondary: str = "cyan"
    accent: str = "magenta"
    
    success: str = "green"
    warning: str = "yellow"
    error: str = "red"
    info: str = "blue"
    
    text_muted: str = "dim white"
    
    border_primary: str = "blue"
    border_secondary: str = "bright_black"


PALETTE = ColorPalette()

_console: Optional[Console] = None


def create_rich_theme(palette: ColorPalette = PALETTE) -> Theme:
    """Create a Rich Theme from a color palette."""
    return Theme({
        "success": palette.success,
        "warning": palette.warning,
        "error": palette.error,
        "info": palette.info,
        "muted": palette.text_muted,
        "title": f"bold {palette.primary}",
        "highlight": f"bold {palette.accent}",
        "status.enabled": palette.success,
        "status.disabled": palette.text_muted,
    })


def setup_console(
    force_terminal: Optional[bool] = None,
    width: Optional[int] = None,
    no_color: bool = False
) -> Console:
    """
    Replace the shared console.
    
    Output goes to stdout; --json output bypasses the console entirely.
    
    Args:
        force_terminal: Override terminal detection
        width: Fixed width instead of the detected one
        no_color: Plain output without styles
    """
    global _console
    
    console_kwargs = {
        "theme": create_rich_theme(),
        "stderr": False,
        "force_terminal": force_terminal,
        "color_system": None if no_color else "auto",
        "legacy_windows": False,
    }
    
    if width is not None:
        console_kwargs["width"] = width
    
    _console = Console(**console_kwargs)
    return _console


def get_console() -> Console:
    """Shared console, built with defaults on first use."""
    global _console
    if _console is None:
        _console = setup_console()
    return _console


def get_palette() -> ColorPalette:
    return PALETTE


# Export console management functions
__all__ = [
    "ColorPalette",
    "setup_console",
    "get_console",
    "get_palette",
    "create_rich_theme",
]
