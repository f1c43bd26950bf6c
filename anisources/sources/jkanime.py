"""
JKanime Source - Adapter for jkanime.net (Spanish).

Episode pages are paginated as "1 - 12" anchors; each range expands to
zero-padded episode links appended to the anime URL.
"""

import logging
from typing import List
from urllib.parse import quote

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, SearchRequest, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.hrefs import jkanime_anime
from anisources.sources.common.utils import expand_episode_range


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.JKANIME,
    language="es",
    description="Spanish subbed anime",
    listing_url="https://jkanime.net/",
    search_url="https://jkanime.net/buscar/",
    origin="https://jkanime.net",
)


class JKanimeSource(BaseSource):
    """Adapter for JKanime."""

    search_param = None

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def search_request(self, query: str, page: int = 1) -> SearchRequest:
        """Search results are split over pages appended as '/N'."""
        url = f"{self.metadata.search_url}{quote(query)}"
        if page > 1:
            url = f"{url}/{page}"
        return SearchRequest(url=url)

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            raw_href = item.attr("href") or item.select_attr("a", "href")
            return self._summary(
                title=item.select_text("div.anime__sidebar__comment__item__text h5"),
                image_url=item.select_attr("img", "src"),
                href=jkanime_anime(raw_href),
                episode_label=item.select_text("div.anime__sidebar__comment__item__text h6")
                .replace("Episodio ", "").strip(),
            )

        return self._collect(doc.select("div.listadoanime-home div.anime_programing a.bloqq"), build)

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=item.select_text("h5"),
                image_url=item.select_attr("div.anime__item__pic", "data-setbg"),
                href=item.select_attr("a", "href"),
            )

        return self._collect(doc.select("div.anime__page__content div.row div.col-lg-2"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        episodes = []
        for anchor in doc.select("div.anime__pagination a.numbers"):
            episodes.extend(expand_episode_range(anchor.text(), lambda n: f"{href}{n:02d}"))
        return episodes

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        aired = doc.select_one('li:-soup-contains("Emitido:")')
        return AnimeDetail(
            aliases=doc.select_text("div.anime__details__title span"),
            synopsis=doc.select_text("p.tab.sinopsis"),
            airdate=aired.text().replace("Emitido: ", "") if aired else "",
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["JKanimeSource", "source_metadata"]
