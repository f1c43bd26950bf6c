"""
Configuration Defaults - Default configuration templates.

Every known source is enabled by default, ordered as declared in
SourceId.
"""

from anisources.core.config_schemas import AppSettings, SourceConfig, SourcesConfig
from anisources.core.models import SourceId


def get_default_settings() -> AppSettings:
    """
    Get default application settings.
    
    Returns:
        AppSettings instance with sensible defaults
    """
    return AppSettings()


def get_default_sources() -> SourcesConfig:
    """
    Get default sources configuration with every source enabled.
    
    Returns:
        SourcesConfig instance with one entry per SourceId
    """
    return SourcesConfig(sources={
        source.value: SourceConfig(enabled=True, priority=index)
        for index, source in enumerate(SourceId, start=1)
    })


__all__ = ["get_default_settings", "get_default_sources"]
