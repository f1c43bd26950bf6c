"""
AnimeUnity Source - Adapter for animeunity.to (Italian).

The home page renders its latest-episode layout client side from a
JSON blob stored, HTML-escaped, in an items-json attribute.
"""

import logging
from typing import Any, List

from anisources.core.exceptions import SelectorMissError
from anisources.core.models import AnimeSummary, SourceId
from anisources.sources.base import BaseSource, FieldPolicy, SourceMetadata
from anisources.sources.common.document import HTMLDocument, parse_json
from anisources.sources.common.hrefs import animeunity_anime
from anisources.sources.common.utils import dig


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ANIMEUNITY,
    language="it",
    description="Italian subbed and dubbed anime",
    listing_url="https://www.animeunity.to/",
    detail_base="https://www.animeunity.to/anime/",
    origin="https://www.animeunity.to",
)


class AnimeUnitySource(BaseSource):
    """
    Adapter for AnimeUnity.

    A record is kept only when its anime has a title, image URL,
    integer id and slug.
    """

    summary_policy = FieldPolicy(require_href=True, require_image=True)

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        holder = self._require(doc, "[items-json]")

        payload = parse_json(holder.attr("items-json"))

        records = dig(payload, "data")
        if not isinstance(records, list):
            return []

        def build(record: Any) -> AnimeSummary:
            anime = dig(record, "anime")
            anime_id = dig(anime, "id")
            slug = dig(anime, "slug")
            if not isinstance(anime_id, int) or isinstance(anime_id, bool) or not isinstance(slug, str):
                raise SelectorMissError("AnimeUnity: record lacks id or slug", selector="data[].anime")
            title = next(
                (value for value in (dig(anime, "title"), dig(anime, "title_eng")) if isinstance(value, str) and value),
                None
            )
            if title is None:
                raise SelectorMissError("AnimeUnity: record has no title", selector="data[].anime", field_name="title")
            image = dig(anime, "imageurl")
            return self._summary(
                title=title,
                image_url=image if isinstance(image, str) else "",
                href=animeunity_anime(anime_id, slug, self.metadata.detail_base),
            )

        return self._collect(records, build)


__all__ = ["AnimeUnitySource", "source_metadata"]
