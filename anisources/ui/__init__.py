"""
UI Layer - Rich console, components and error display.

This module contains the Rich console setup, result tables and the error
panels used by the CLI.
"""

from anisources.ui.console import get_console, get_palette, setup_console
from anisources.ui.components import UIComponents
from anisources.ui.error_handler import ErrorHandler, display_info, display_warning, handle_error

__all__ = [
    "UIComponents",
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
    "get_console",
    "get_palette",
    "setup_console",
]
