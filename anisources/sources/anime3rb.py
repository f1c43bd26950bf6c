"""
Anime3rb Source - Adapter for anime3rb.com (Arabic).
"""

import logging
from typing import List

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ANIME3RB,
    language="ar",
    description="Arabic subbed anime",
    listing_url="https://anime3rb.com/titles/list?status[0]=upcomming&status[1]=finished&sort_by=addition_date",
    search_url="https://anime3rb.com/search",
    origin="https://anime3rb.com",
)


class Anime3rbSource(BaseSource):
    """Adapter for Anime3rb."""

    search_param = "q"

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=item.select_text("h2.text-ellipsis"),
                image_url=item.select_attr("img", "src"),
                href=item.select_attr("a", "href"),
            )

        return self._collect(doc.select("div.flex.flex-wrap.justify-center div.my-2"), build)

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            link = item.select_one("a")
            return self._summary(
                title=item.select_text("h2.pt-1"),
                image_url=item.select_attr("img", "src"),
                href=link.attr("href") if link else "",
            )

        return self._collect(doc.select("section div.my-2"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        episodes = []
        for anchor in doc.select("div.absolute.overflow-hidden div a.gap-3"):
            label = anchor.select_one("div.video-metadata span")
            number = label.text().replace("الحلقة ", "").strip() if label else ""
            if number and anchor.attr("href"):
                episodes.append(EpisodeRef(number=number, href=anchor.attr("href")))
        return episodes

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        rating = doc.select_one("p.text-lg.leading-relaxed")
        return AnimeDetail(
            synopsis=doc.select_text("p.leading-loose"),
            airdate=doc.select_attr("td[title]", "title"),
            rating=rating.text() if rating else "",
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["Anime3rbSource", "source_metadata"]
