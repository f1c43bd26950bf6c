"""
CLI Context - Global application context and state management.

This module holds the configuration manager and extractor built by the
CLI callback so that commands can reach them without circular imports.
"""

from typing import Optional

from anisources.core import ConfigManager, Extractor


# Global application state
_config_manager: Optional[ConfigManager] = None
_extractor: Optional[Extractor] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    if _config_manager is None:
        raise RuntimeError("Configuration manager not initialized")
    return _config_manager


def set_config_manager(config_manager: ConfigManager) -> None:
    """Set the global configuration manager instance."""
    global _config_manager
    _config_manager = config_manager


def get_extractor() -> Extractor:
    """Get the global extractor instance."""
    if _extractor is None:
        raise RuntimeError("Extractor not initialized")
    return _extractor


def set_extractor(extractor: Extractor) -> None:
    """Set the global extractor instance."""
    global _extractor
    _extractor = extractor


# Export context functions
__all__ = [
    "get_config_manager",
    "set_config_manager",
    "get_extractor",
    "set_extractor",
]
