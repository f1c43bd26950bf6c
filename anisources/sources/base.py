"""
Base Source Interface - Abstract base class for source adapters.

This module defines the interface every source adapter implements: the
URLs a caller should fetch, and the extraction functions that turn the
fetched documents into summaries, episode lists and detail records.
Adapters never perform I/O themselves.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from anisources.core.exceptions import SelectorMissError, UnsupportedOperationError
from anisources.core.models import AnimeDetail, AnimeSummary, DocumentKind, EpisodeRef, SourceId
from anisources.sources.common.utils import URLHelper


logger = logging.getLogger(__name__)

T = TypeVar("T")


class PayloadFormat(str, Enum):
    """How a document must be decoded before extraction."""

    HTML = "html"
    JSON = "json"


class FilterOption(str, Enum):
    """Title-based search result filters."""

    ALL = "all"
    DUB = "dub"
    SUB = "sub"
    ITA = "ita"


class SourceMetadata(BaseModel):
    """Static description of a source and its endpoints."""

    source_id: SourceId = Field(..., description="Identifier of the source")
    language: str = Field(..., description="Primary content language (ISO 639-1)")
    description: str = Field(default="", description="Short description of the source")
    listing_url: str = Field(..., description="URL of the featured/latest listing page")
    search_url: Optional[str] = Field(None, description="Search endpoint, None when search is unsupported")
    detail_base: str = Field(default="", description="Prefix joined with an href to build the detail URL")
    browse_base: str = Field(default="", description="Prefix joined with an href to build a browser URL")
    origin: str = Field(default="", description="Scheme and host used to absolutize relative URLs")
    mirrors: List[str] = Field(default_factory=list, description="Alternative API hosts")
    dub_marker: Optional[str] = Field(None, description="Title marker identifying dubbed entries")
    dub_ignore_case: bool = Field(default=False, description="Match the dub marker case-insensitively")
    filter_options: List[FilterOption] = Field(
        default_factory=list,
        description="Search filters the source offers besides 'all'"
    )

    @property
    def name(self) -> str:
        return self.source_id.value


class FieldPolicy(BaseModel):
    """
    Which summary fields are critical for one adapter.

    A missing critical field drops the item; a missing optional field
    is kept as an empty string. The title is always critical.
    """

    model_config = ConfigDict(frozen=True)

    require_href: bool = True
    require_image: bool = False


class SearchRequest(BaseModel):
    """URL and query parameters a caller should fetch for a search."""

    url: str
    params: Dict[str, Any] = Field(default_factory=dict)


class BaseSource(ABC):
    """
    Abstract base class for source adapters.

    Subclasses provide metadata and override the parse_* methods for
    the document kinds the site offers. Unimplemented list extractors
    raise UnsupportedOperationError; parse_detail falls back to an
    empty detail record.
    """

    summary_policy: FieldPolicy = FieldPolicy()

    # Kinds whose payload is JSON rather than HTML
    json_kinds: frozenset = frozenset()

    # Query parameter name for search; None when the query goes in the path
    search_param: Optional[str] = "keyword"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the adapter with configuration.

        Args:
            config: Adapter-specific configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def metadata(self) -> SourceMetadata:
        """Get source metadata information."""
        pass

    @property
    def source_id(self) -> SourceId:
        return self.metadata.source_id

    @property
    def capabilities(self) -> List[DocumentKind]:
        """Document kinds this adapter actually implements."""
        methods = {
            DocumentKind.FEATURED: "parse_featured",
            DocumentKind.SEARCH: "parse_search_results",
            DocumentKind.EPISODES: "parse_episodes",
            DocumentKind.DETAIL: "parse_detail",
        }
        return [
            kind for kind, method in methods.items()
            if getattr(type(self), method) is not getattr(BaseSource, method)
        ]

    def supports(self, kind: DocumentKind) -> bool:
        return kind in self.capabilities

    def payload_format(self, kind: DocumentKind) -> PayloadFormat:
        return PayloadFormat.JSON if kind in self.json_kinds else PayloadFormat.HTML

    # URL builders

    def search_request(self, query: str, page: int = 1) -> SearchRequest:
        """
        Build the search request for a query.

        Raises:
            UnsupportedOperationError: If the source has no search endpoint
        """
        if not self.metadata.search_url:
            raise UnsupportedOperationError(self.source_id, DocumentKind.SEARCH)

        params = {self.search_param: query} if self.search_param else {}
        return SearchRequest(url=self.metadata.search_url, params=params)

    def detail_url(self, href: str) -> str:
        """URL of the detail page for an href produced by this adapter."""
        return URLHelper.prefix_origin(href, self.metadata.detail_base)

    def episodes_url(self, href: str) -> str:
        """URL of the page listing episodes; the detail page for most sources."""
        return self.detail_url(href)

    def browser_url(self, href: str) -> str:
        """URL a person would open in a browser for an href."""
        return URLHelper.prefix_origin(href, self.metadata.browse_base or self.metadata.origin)

    def absolute(self, url: str) -> str:
        """Absolutize a URL against the source origin."""
        return URLHelper.prefix_origin(url, self.metadata.origin)

    # Extraction

    def parse_featured(self, doc: Any) -> List[AnimeSummary]:
        """Extract summaries from the listing page."""
        raise UnsupportedOperationError(self.source_id, DocumentKind.FEATURED)

    def parse_search_results(self, doc: Any, query: str = "") -> List[AnimeSummary]:
        """Extract summaries from a search results page."""
        raise UnsupportedOperationError(self.source_id, DocumentKind.SEARCH)

    def parse_episodes(self, doc: Any, href: str = "") -> List[EpisodeRef]:
        """Extract the episode list from a detail page."""
        raise UnsupportedOperationError(self.source_id, DocumentKind.EPISODES)

    def parse_detail(self, doc: Any, href: str = "") -> AnimeDetail:
        """Extract detail information; sources without detail pages return an empty record."""
        return AnimeDetail()

    def filter_results(self, results: List[AnimeSummary], option: FilterOption) -> List[AnimeSummary]:
        """
        Filter search results by title markers.

        DUB keeps titles carrying the source's dub marker (everything
        when the source has none), SUB drops '(dub)' titles and ITA keeps
        titles containing 'ITA'.
        """
        option = FilterOption(option)

        if option == FilterOption.DUB:
            marker = self.metadata.dub_marker
            if not marker:
                return list(results)
            if self.metadata.dub_ignore_case:
                return [r for r in results if marker.lower() in r.title.lower()]
            return [r for r in results if marker in r.title]

        if option == FilterOption.SUB:
            return [r for r in results if "(dub)" not in r.title.lower()]

        if option == FilterOption.ITA:
            return [r for r in results if "ITA" in r.title]

        return list(results)

    # Helpers for subclasses

    def _summary(
        self,
        title: str,
        image_url: str = "",
        href: str = "",
        episode_label: Optional[str] = None,
    ) -> AnimeSummary:
        """
        Build a summary, enforcing the adapter's field policy.

        Raises:
            SelectorMissError: If a critical field is empty
        """
        title = (title or "").strip()
        if not title:
            raise SelectorMissError(f"{self.source_id}: item has no title", field_name="title")

        if self.summary_policy.require_href and not href:
            raise SelectorMissError(f"{self.source_id}: '{title}' has no link", field_name="href")

        if self.summary_policy.require_image and not image_url:
            raise SelectorMissError(f"{self.source_id}: '{title}' has no image", field_name="image_url")

        return AnimeSummary(
            title=title,
            image_url=image_url or "",
            href=href or "",
            source=self.source_id,
            episode_label=episode_label or None,
        )

    def _collect(self, items: Iterable[Any], build: Callable[[Any], T]) -> List[T]:
        """Build one record per item, skipping items with missing critical fields."""
        records = []
        for item in items:
            try:
                records.append(build(item))
            except SelectorMissError as e:
                self.logger.debug(f"Skipping item: {e}")
                continue
        return records

    def _require(self, doc: Any, selector: str) -> Any:
        """
        Select a page-level container that must exist.

        Raises:
            SelectorMissError: If the container is absent
        """
        container = doc.select_one(selector)
        if container is None:
            raise SelectorMissError(
                f"{self.source_id}: container '{selector}' not found",
                selector=selector
            )
        return container

    def __str__(self) -> str:
        return self.metadata.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(source='{self.metadata.name}')"


# Export base source class and metadata
__all__ = [
    "BaseSource",
    "SourceMetadata",
    "FieldPolicy",
    "SearchRequest",
    "PayloadFormat",
    "FilterOption",
]
