"""
Configuration Schemas - Validated shapes of settings.json and sources.json.

Unknown source names, out-of-range limits and unsupported table styles
are rejected here, before anything reaches the registry or the CLI.
"""

import logging
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from anisources.core.exceptions import UnknownSourceError
from anisources.core.models import SourceId


logger = logging.getLogger(__name__)


class ExtractionSettings(BaseModel):
    """Extraction and source selection settings."""
    
    default_source: str = Field(
        default=SourceId.ANIMEWORLD.value,
        description="Source used when no preference is stored"
    )
    fallback_to_default: bool = Field(
        default=False,
        description="Fall back to the default source when a stored preference is unknown"
    )
    max_results: int = Field(
        default=0,
        ge=0,
        le=1000,
        description="Maximum summaries returned per document (0 = unlimited)"
    )
    fuzzy_search: bool = Field(
        default=True,
        description="Filter search results by fuzzy title matching"
    )
    
    @field_validator('default_source')
    @classmethod
    def validate_default_source(cls, v: str) -> str:
        """Ensure the default source names a known adapter."""
        try:
            return SourceId.parse(v).value
        except UnknownSourceError as e:
            raise ValueError(str(e))


class UISettings(BaseModel):
    """How the CLI renders tables."""
    
    table_style: Literal["rounded", "simple", "grid", "minimal"] = Field(
        default="rounded",
        description="Style for data tables"
    )
    show_images: bool = Field(
        default=False,
        description="Show image URLs in result tables"
    )
    max_title_width: int = Field(
        default=60,
        ge=10,
        le=200,
        description="Maximum width of the title column"
    )


class LoggingSettings(BaseModel):
    """Root logger level and record format."""
    
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format"
    )
    
    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v


class AppSettings(BaseModel):
    """Contents of settings.json."""
    
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class SourceConfig(BaseModel):
    """One entry of sources.json."""
    
    enabled: bool = Field(
        default=True,
        description="Listed by 'anisources sources' as enabled and returned by enabled_sources()"
    )
    priority: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Ordering of enabled sources, 1 first"
    )
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Options passed to the adapter constructor, e.g. api_base"
    )


class SourcesConfig(BaseModel):
    """Contents of sources.json, keyed by source display name."""
    
    sources: Dict[str, SourceConfig] = Field(
        default_factory=dict,
        description="Entry per source display name"
    )
    
    @model_validator(mode='after')
    def warn_on_shared_priorities(self) -> 'SourcesConfig':
        """Warn when sources share a priority; such sources keep file order."""
        seen: Dict[int, str] = {}
        for name, entry in self.sources.items():
            other = seen.setdefault(entry.priority, name)
            if other != name:
                logger.warning(f"{name} and {other} share priority {entry.priority}")
        return self
    
    def get_enabled_sources(self) -> Dict[str, SourceConfig]:
        """Enabled entries, lowest priority number first."""
        ordered = sorted(self.sources.items(), key=lambda item: item[1].priority)
        return {name: entry for name, entry in ordered if entry.enabled}
    
    def get_source(self, name: str) -> Optional[SourceConfig]:
        """Entry for a source name, matched case-insensitively."""
        if name in self.sources:
            return self.sources[name]
        wanted = name.lower()
        return next(
            (entry for key, entry in self.sources.items() if key.lower() == wanted),
            None
        )


# Export all configuration models
__all__ = [
    "ExtractionSettings",
    "UISettings",
    "LoggingSettings",
    "AppSettings",
    "SourceConfig",
    "SourcesConfig",
]
