"""
anisources - Source adapters that turn anime site pages into typed records.

Feed the HTML or JSON you fetched from a supported anime site to an
Extractor and get back anime summaries, episode lists and detail records
wrapped in a ParseResult. Fetching is left to the caller.
"""

__version__ = "0.1.0"

# Package metadata
__title__ = "anisources"
__description__ = "Source adapters that turn anime site pages into typed records"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

# Export main components for easy importing
from anisources.core.exceptions import (
    AniSourcesError,
    ConfigurationError,
    MalformedJsonError,
    MalformedMarkupError,
    SelectorMissError,
    UnknownSourceError,
    UnsupportedOperationError,
)
from anisources.core.extractor import Extractor
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

__all__ = [
    "__version__",
    "Extractor",
    "SourceRegistry",
    "SourceId",
    "DocumentKind",
    "ParseResult",
    "ResultStatus",
    "ResultReason",
    "AnimeSummary",
    "EpisodeRef",
    "AnimeDetail",
    "ScoreBucket",
    "AniSourcesError",
    "ConfigurationError",
    "MalformedJsonError",
    "MalformedMarkupError",
    "SelectorMissError",
    "UnknownSourceError",
    "UnsupportedOperationError",
]
