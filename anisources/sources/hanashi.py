"""
Hanashi Source - Adapter for the hanashi.to API (German).

Only search is exposed. Requests need a bearer token obtained by the
caller; this adapter never handles credentials.
"""

import logging
from typing import Any, List

from anisources.core.exceptions import SelectorMissError
from anisources.core.models import AnimeSummary, DocumentKind, SourceId
from anisources.sources.base import BaseSource, FieldPolicy, SearchRequest, SourceMetadata
from anisources.sources.common.utils import dig


logger = logging.getLogger(__name__)

IMAGE_BASE = "https://api.hanashi.to/public/"


source_metadata = SourceMetadata(
    source_id=SourceId.HANASHI,
    language="de",
    description="German anime catalogue API",
    listing_url="https://api.hanashi.to/api/item/search",
    search_url="https://api.hanashi.to/api/item/search",
    origin="https://hanashi.to",
)


def localized_name(names: List[Any], locale: str = "de-DE") -> str:
    """Name for the locale, falling back to the first entry."""
    for entry in names:
        if dig(entry, "locale") == locale and isinstance(dig(entry, "name"), str):
            return entry["name"]
    first = dig(names, 0, "name")
    return first if isinstance(first, str) else ""


class HanashiSource(BaseSource):
    """
    Adapter for Hanashi.

    Entries need a string id, a name list and cover images.
    """

    summary_policy = FieldPolicy(require_href=True, require_image=True)
    json_kinds = frozenset({DocumentKind.SEARCH})

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def search_request(self, query: str, page: int = 1) -> SearchRequest:
        return SearchRequest(
            url=self.metadata.search_url,
            params={"q": query, "limit": self.config.get("limit", 25)},
        )

    def parse_search_results(self, doc: Any, query: str = "") -> List[AnimeSummary]:
        if not isinstance(doc, list):
            return []

        def build(item: Any) -> AnimeSummary:
            item_id = dig(item, "id")
            names = dig(item, "name")
            covers = dig(item, "images", "cover")
            if not isinstance(item_id, str) or not isinstance(names, list) or not isinstance(covers, list):
                raise SelectorMissError("Hanashi: entry lacks id, name or images", selector="[]")

            png = next((c for c in covers if dig(c, "format") == "png"), None)
            source = dig(png, "source", default="")
            return self._summary(
                title=localized_name(names),
                image_url=f"{IMAGE_BASE}{source}" if isinstance(source, str) and source else "",
                href=item_id,
            )

        return self._collect(doc, build)


__all__ = ["HanashiSource", "source_metadata", "localized_name", "IMAGE_BASE"]
