"""
AniWorld Source - Adapter for aniworld.to (German).

Search has no server-side endpoint: the full catalogue page is fetched
and filtered by title. Episodes are listed one season per page; season
pages are discovered from the detail page navigation and episode
numbers carry the season ("S1E05", or "FE01" for films).
"""

import logging
import re
from typing import Dict, List, Tuple

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, SearchRequest, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.utils import DEFAULT_POSTER


logger = logging.getLogger(__name__)

FILM_SEASON = "F"


source_metadata = SourceMetadata(
    source_id=SourceId.ANIWORLD,
    language="de",
    description="German dubbed and subbed anime",
    listing_url="https://aniworld.to/neu",
    search_url="https://aniworld.to/animes",
    origin="https://aniworld.to",
)


def season_from_href(href: str) -> str:
    """'/anime/stream/x/staffel-2' -> 'S2', '/anime/stream/x/filme' -> 'F', otherwise 'S1'."""
    if "/filme" in href:
        return FILM_SEASON
    match = re.search(r"/staffel-(\d+)", href)
    return f"S{match.group(1)}" if match else "S1"


def _season_order(season: str) -> Tuple[int, int]:
    if season == FILM_SEASON:
        return (1, 0)
    digits = season[1:]
    return (0, int(digits) if digits.isdigit() else 0)


def _episode_part(number: str) -> int:
    _, _, episode = number.partition("E")
    return int(episode) if episode.isdigit() else 0


class AniWorldSource(BaseSource):
    """Adapter for AniWorld."""

    search_param = None

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def search_request(self, query: str, page: int = 1) -> SearchRequest:
        return SearchRequest(url=self.metadata.search_url)

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            link = item.select_one("a")
            return self._summary(
                title=item.select_text("h3"),
                image_url=self.absolute(item.select_attr("img", "data-src")),
                href=self.absolute(link.attr("href")) if link else "",
            )

        return self._collect(doc.select("div.seriesListSection div.seriesListContainer div"), build)

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        """Catalogue entries whose title contains the query, sorted by title."""
        needle = query.lower()

        def build(anchor: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=anchor.text(),
                image_url=DEFAULT_POSTER,
                href=self.absolute(anchor.attr("href")),
            )

        anchors = [a for a in doc.select("div.genre a") if needle in a.text().lower()]
        results = self._collect(anchors, build)
        return sorted(results, key=lambda r: r.title.lower())

    def parse_season_urls(self, doc: HTMLDocument) -> List[Tuple[str, str]]:
        """
        Season pages linked from a detail page as (season, url) pairs.

        Numbered seasons come first in ascending order, films last.
        """
        seasons = []
        for anchor in doc.select("div.hosterSiteDirectNav a[title]"):
            title = anchor.attr("title")
            url = self.absolute(anchor.attr("href"))
            if "Filme" in title:
                seasons.append((FILM_SEASON, url))
            elif "Staffel" in title:
                seasons.append((f"S{title.split(' ')[-1]}", url))

        return sorted(seasons, key=lambda pair: _season_order(pair[0]))

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        season = season_from_href(href)

        episodes: Dict[str, EpisodeRef] = {}
        for anchor in doc.select("table.seasonEpisodesList td a"):
            number = next((token for token in anchor.text().split(" ") if token.isdigit()), None)
            link = anchor.attr("href")
            if number is None or not link:
                continue
            label = f"{season}E{int(number):02d}"
            episodes.setdefault(label, EpisodeRef(number=label, href=self.absolute(link)))

        return sorted(episodes.values(), key=lambda e: _episode_part(e.number))

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        return AnimeDetail(
            synopsis=doc.select_text("p.seri_des"),
            airdate="N/A",
            rating="N/A",
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["AniWorldSource", "source_metadata", "season_from_href", "FILM_SEASON"]
