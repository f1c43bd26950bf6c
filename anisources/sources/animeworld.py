"""
AnimeWorld Source - Adapter for animeworld.so (Italian).

Featured cards live inside the "all" tab of the home page; search
results use the film-list layout. Detail pages carry the original
title in a data attribute.
"""

import logging
from typing import List

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, FilterOption, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.utils import TextCleaner


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ANIMEWORLD,
    language="it",
    description="Italian subbed and dubbed anime",
    listing_url="https://www.animeworld.so",
    search_url="https://animeworld.so/search",
    detail_base="https://animeworld.so",
    browse_base="https://animeworld.so",
    origin="https://animeworld.so",
    filter_options=[FilterOption.ITA],
)


class AnimeWorldSource(BaseSource):
    """Adapter for AnimeWorld."""

    search_param = "keyword"

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        content = self._require(doc, "div.content[data-name=all]")

        def build(item: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=item.select_text("a.name"),
                image_url=item.select_attr("img", "src"),
                href=item.select_attr("a.poster", "href"),
                episode_label=TextCleaner.remove_prefix(item.select_text("div.ep"), "Ep "),
            )

        return self._collect(content.select("div.item"), build)

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=item.select_text("a.name"),
                image_url=item.select_attr("a.poster img", "src"),
                href=item.select_attr("a.poster", "href"),
            )

        return self._collect(doc.select(".film-list .item"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        return [
            EpisodeRef(number=a.text(), href=a.attr("href"))
            for a in doc.select("div.server.active ul.episodes li.episode a")
            if a.text() and a.attr("href")
        ]

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        airdate = doc.select_one('div.row dl.meta dt:-soup-contains("Data di Uscita") + dd')
        return AnimeDetail(
            aliases=doc.select_attr("div.widget-title h1", "data-jtitle"),
            synopsis=doc.select_text("div.info div.desc"),
            airdate=airdate.text() if airdate else "",
            rating=doc.select_text("dd.rating span"),
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["AnimeWorldSource", "source_metadata"]
