"""
Extractor - The extraction boundary between raw documents and records.

The Extractor resolves an adapter, decodes the raw document in the
format the adapter expects for that kind, runs the adapter, and reduces
every recoverable failure to a tagged ParseResult. Only an unknown
source identifier escapes as an exception.
"""

import logging
from typing import Any, Callable, List, Optional, Union

from anisources.core.exceptions import (
    MalformedJsonError,
    MalformedMarkupError,
    SelectorMissError,
    UnsupportedOperationError,
)
from anisources.core.models import (
    AnimeDetail,
    AnimeSummary,
    DocumentKind,
    EpisodeRef,
    ParseResult,
    ResultReason,
    SourceId,
)
from anisources.core.registry import SourceRegistry
from anisources.core.utils import filter_results, fuzzy_filter, limit_results
from anisources.sources.base import BaseSource, FilterOption, PayloadFormat
from anisources.sources.common.document import parse_html, parse_json


logger = logging.getLogger(__name__)

RawDocument = Union[str, bytes]


class Extractor:
    """
    Runs source adapters over raw documents.
    
    Extraction is synchronous and side-effect free apart from logging;
    one Extractor can be shared across threads.
    """
    
    def __init__(self, registry: Optional[SourceRegistry] = None):
        """
        Initialize the extractor.
        
        Args:
            registry: Source registry; a default registry is built when omitted
        """
        self.registry = registry or SourceRegistry()
    
    @property
    def _extraction_settings(self) -> Any:
        config_manager = self.registry.config_manager
        return config_manager.settings.extraction if config_manager else None
    
    def extract(
        self,
        source: Union[str, SourceId],
        raw: RawDocument,
        kind: DocumentKind,
        href: str = "",
        query: str = "",
    ) -> ParseResult:
        """
        Extract records of one kind from a raw document.
        
        Args:
            source: Source identifier
            raw: Document text or bytes as fetched
            kind: Which kind of document raw is
            href: Href the document was fetched for (episodes and detail)
            query: Search query (search only)
            
        Returns:
            ParseResult tagged ok, empty or failed
            
        Raises:
            UnknownSourceError: If the source identifier is unknown
        """
        adapter = self.registry.resolve(source)
        kind = DocumentKind(kind)
        
        # Detail always has a fallback; the others must be implemented
        if kind != DocumentKind.DETAIL and not adapter.supports(kind):
            logger.debug(f"{adapter.source_id} does not support {kind}")
            return ParseResult.failed(
                ResultReason.UNSUPPORTED,
                f"{adapter.source_id} does not support {kind} documents"
            )
        
        if self._is_blank(raw):
            return ParseResult.empty(ResultReason.NO_CONTENT, "Document is empty")
        
        try:
            doc = self._decode(adapter, kind, raw)
        except MalformedJsonError as e:
            logger.warning(f"{adapter.source_id} {kind}: {e}")
            return ParseResult.failed(ResultReason.MALFORMED_JSON, e.message)
        except MalformedMarkupError as e:
            logger.warning(f"{adapter.source_id} {kind}: {e}")
            return ParseResult.failed(ResultReason.MALFORMED_MARKUP, e.message)
        
        operation = self._operation(adapter, kind, href, query)
        
        try:
            value = operation(doc)
        except SelectorMissError as e:
            logger.info(f"{adapter.source_id} {kind}: {e}")
            return ParseResult.empty(ResultReason.SELECTOR_NOT_FOUND, e.message)
        except MalformedJsonError as e:
            logger.warning(f"{adapter.source_id} {kind}: {e}")
            return ParseResult.failed(ResultReason.MALFORMED_JSON, e.message)
        except UnsupportedOperationError as e:
            return ParseResult.failed(ResultReason.UNSUPPORTED, e.message)
        except Exception as e:
            logger.exception(f"{adapter.source_id} {kind} extraction failed")
            return ParseResult.failed(ResultReason.EXTRACTION_ERROR, f"{type(e).__name__}: {e}")
        
        if isinstance(value, AnimeDetail):
            if value.is_empty:
                return ParseResult.empty(ResultReason.NO_ITEMS, "Detail page yielded no information")
            return ParseResult.ok(value)
        
        if not value:
            return ParseResult.empty(ResultReason.NO_ITEMS, f"No {kind} items found")
        
        logger.debug(f"{adapter.source_id} {kind}: {len(value)} items")
        return ParseResult.ok(value)
    
    @staticmethod
    def _is_blank(raw: Any) -> bool:
        if isinstance(raw, (str, bytes)):
            return not raw.strip()
        return False
    
    @staticmethod
    def _decode(adapter: BaseSource, kind: DocumentKind, raw: RawDocument) -> Any:
        if adapter.payload_format(kind) == PayloadFormat.JSON:
            return parse_json(raw)
        return parse_html(raw)
    
    @staticmethod
    def _operation(adapter: BaseSource, kind: DocumentKind, href: str, query: str) -> Callable[[Any], Any]:
        if kind == DocumentKind.FEATURED:
            return adapter.parse_featured
        if kind == DocumentKind.SEARCH:
            return lambda doc: adapter.parse_search_results(doc, query=query)
        if kind == DocumentKind.EPISODES:
            return lambda doc: adapter.parse_episodes(doc, href=href)
        return lambda doc: adapter.parse_detail(doc, href=href)
    
    def _limit(self, result: ParseResult) -> ParseResult:
        settings = self._extraction_settings
        if result.is_ok and settings is not None and settings.max_results:
            return ParseResult.ok(limit_results(result.value, settings.max_results))
        return result
    
    def extract_featured(self, source: Union[str, SourceId], raw: RawDocument) -> ParseResult[List[AnimeSummary]]:
        """Extract featured summaries from a listing page."""
        return self._limit(self.extract(source, raw, DocumentKind.FEATURED))
    
    def extract_search(
        self,
        source: Union[str, SourceId],
        raw: RawDocument,
        query: str = "",
        filter_option: Union[str, FilterOption] = FilterOption.ALL,
        fuzzy: Optional[bool] = None,
    ) -> ParseResult[List[AnimeSummary]]:
        """
        Extract search results, then apply the title filter and fuzzy matching.
        
        Args:
            source: Source identifier
            raw: Search results document
            query: Query the page was fetched for
            filter_option: all, dub, sub or ita
            fuzzy: Override extraction.fuzzy_search; only applies with a query
        """
        result = self.extract(source, raw, DocumentKind.SEARCH, query=query)
        if not result.is_ok:
            return result
        
        adapter = self.registry.resolve(source)
        results = filter_results(result.value, filter_option, adapter)
        
        if fuzzy is None:
            settings = self._extraction_settings
            fuzzy = settings.fuzzy_search if settings is not None else False
        if fuzzy and query.strip():
            results = fuzzy_filter(query, results)
        
        if not results:
            return ParseResult.empty(ResultReason.NO_ITEMS, "No results left after filtering")
        
        return self._limit(ParseResult.ok(results))
    
    def extract_episodes(
        self,
        source: Union[str, SourceId],
        raw: RawDocument,
        href: str = "",
    ) -> ParseResult[List[EpisodeRef]]:
        """Extract the episode list from a detail or episode-list document."""
        return self.extract(source, raw, DocumentKind.EPISODES, href=href)
    
    def extract_detail(
        self,
        source: Union[str, SourceId],
        raw: RawDocument,
        href: str = "",
    ) -> ParseResult[AnimeDetail]:
        """Extract detail information from a detail document."""
        return self.extract(source, raw, DocumentKind.DETAIL, href=href)


# Export extractor
__all__ = ["Extractor", "RawDocument"]
