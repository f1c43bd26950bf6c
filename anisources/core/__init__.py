"""
Core Layer - Models, configuration and the extraction boundary.

This module contains the data models, exceptions, configuration handling,
source registry and extractor that the source adapters plug into.
"""

from anisources.core.config_manager import ConfigManager
from anisources.core.config_schemas import AppSettings, ExtractionSettings, SourceConfig, SourcesConfig
from anisources.core.config_defaults import get_default_settings, get_default_sources
from anisources.core.exceptions import (
    AniSourcesError,
    ConfigurationError,
    MalformedJsonError,
    MalformedMarkupError,
    SelectorMissError,
    UnknownSourceError,
    UnsupportedOperationError,
)
from anisources.core.models import (
    AnimeDetail,
    AnimeSummary,
    DocumentKind,
    EpisodeRef,
    ParseResult,
    ResultReason,
    ResultStatus,
    ScoreBucket,
    SourceId,
)
from anisources.core.registry import SourceRegistry
from anisources.core.extractor import Extractor

__all__ = [
    # Data Models
    "AnimeSummary",
    "EpisodeRef",
    "AnimeDetail",
    "ScoreBucket",
    "ParseResult",
    "SourceId",
    "DocumentKind",
    "ResultStatus",
    "ResultReason",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    "ExtractionSettings",
    "SourcesConfig",
    "SourceConfig",
    "get_default_settings",
    "get_default_sources",
    # Extraction
    "SourceRegistry",
    "Extractor",
    # Exceptions
    "AniSourcesError",
    "ConfigurationError",
    "MalformedJsonError",
    "MalformedMarkupError",
    "SelectorMissError",
    "UnknownSourceError",
    "UnsupportedOperationError",
]
