"""
AniVibe Source - Adapter for anivibe.net (English).

Listing thumbnails point at a "small" rendition; the "default" one is
used instead.
"""

import logging
from typing import List

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ANIVIBE,
    language="en",
    description="English subbed anime",
    listing_url="https://anivibe.net/newest",
    origin="https://anivibe.net",
)


class AniVibeSource(BaseSource):
    """Adapter for AniVibe."""

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            link = item.select_one("a")
            return self._summary(
                title=item.select_text("div.tt span"),
                image_url=item.select_attr("img", "src").replace("small", "default"),
                href=self.absolute(link.attr("href")) if link else "",
            )

        return self._collect(doc.select("div.listupd article"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        episodes = []
        for a in doc.select("div.eplister ul li a"):
            number = a.select_text("div.epl-num")
            if not number or not a.attr("href"):
                continue
            episodes.append(EpisodeRef(number=number, href=self.absolute(a.attr("href"))))
        return episodes

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        return AnimeDetail(
            aliases=doc.select_text("span.alter"),
            synopsis=doc.select_text("div.synp div.entry-content"),
            airdate=doc.select_text("div.split"),
            rating="N/A",
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["AniVibeSource", "source_metadata"]
