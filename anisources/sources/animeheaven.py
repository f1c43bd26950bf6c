"""
AnimeHeaven Source - Adapter for animeheaven.me (English).
"""

import logging
from typing import List

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ANIMEHEAVEN,
    language="en",
    description="English subbed anime",
    listing_url="https://animeheaven.me/new.php",
    search_url="https://animeheaven.me/search.php",
    detail_base="https://animeheaven.me/",
    browse_base="https://animeheaven.me/",
    origin="https://animeheaven.me",
)


class AnimeHeavenSource(BaseSource):
    """Adapter for AnimeHeaven; image paths are relative to the site root."""

    search_param = "s"

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=item.select_text("div.chartinfo a.c"),
                image_url=self.absolute(item.select_attr("div.chartimg img", "src")),
                href=item.select_attr("div.chartimg a", "href"),
                episode_label=item.select_text("div.chartep"),
            )

        return self._collect(doc.select("div.boldtext div.chart.bc1"), build)

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            link = item.select_one("a")
            return self._summary(
                title=item.select_text("div.similarname a.c"),
                image_url=self.absolute(link.select_attr("img", "src")) if link else "",
                href=link.attr("href") if link else "",
            )

        return self._collect(doc.select("div.info3.bc1 div.similarimg"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        episodes = []
        for anchor in doc.select("a[href^='episode.php']"):
            number = anchor.select_one("div.watch2.bc")
            if number is None or not number.text():
                continue
            episodes.append(EpisodeRef(number=number.text(), href=anchor.attr("href")))
        return episodes

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        info = doc.select("div.infoyear div.c2")
        return AnimeDetail(
            aliases=doc.select_text("div.infodiv div.infotitlejp"),
            synopsis=doc.select_text("div.infodiv div.infodes"),
            airdate=info[1].text() if len(info) > 1 else "",
            rating=info[-1].text() if info else "",
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["AnimeHeavenSource", "source_metadata"]
