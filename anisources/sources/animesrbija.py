"""
AnimeSRBIJA Source - Adapter for animesrbija.com (Serbian).

Posters are served through a srcset; the largest candidate (the last
one) is used. All links are root-relative.
"""

import logging
from typing import List

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.utils import TextCleaner


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ANIMESRBIJA,
    language="sr",
    description="Serbian subbed anime",
    listing_url="https://www.animesrbija.com/filter?sort=new",
    search_url="https://www.animesrbija.com/filter",
    origin="https://www.animesrbija.com",
)


def largest_srcset_candidate(srcset: str) -> str:
    """'/a.webp 1x, /b.webp 2x' -> '/b.webp'."""
    if not srcset:
        return ""
    return srcset.split(", ")[-1].split(" ")[0]


class AnimeSRBIJASource(BaseSource):
    """Adapter for AnimeSRBIJA."""

    search_param = "search"

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def _card(self, item: HTMLElement) -> AnimeSummary:
        link = item.select_one("a")
        return self._summary(
            title=item.select_text("h3.ani-title"),
            image_url=self.absolute(largest_srcset_candidate(item.select_attr("img", "srcset"))),
            href=self.absolute(link.attr("href")) if link else "",
        )

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        return self._collect(doc.select("div.ani-wrap div.ani-item"), self._card)

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        return self._collect(doc.select("div.ani-wrap div.ani-item"), self._card)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        """
        Episodes in page order, sorted numerically only when every
        number is an integer.
        """
        episodes = []
        for item in doc.select("ul.anime-episodes-holder li.anime-episode-item"):
            number = item.select_text("span.anime-episode-num").replace("Epizoda ", "").strip()
            link = item.select_attr("a.anime-episode-link", "href")
            if not number or not link:
                continue
            episodes.append(EpisodeRef(number=number, href=self.absolute(link)))

        if all(episode.number.isdigit() for episode in episodes):
            episodes.sort(key=lambda e: int(e.number))
        return episodes

    def _info_value(self, doc: HTMLDocument, label: str) -> str:
        row = doc.select_one(f'div.anime-information-col div:-soup-contains("{label}")')
        if row is None:
            return ""
        return row.text().split(":")[-1].strip()

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        return AnimeDetail(
            aliases=doc.select_text("h3.anime-eng-name"),
            synopsis=TextCleaner.strip_tags(doc.select_text("div.anime-description")),
            airdate=self._info_value(doc, "Datum:").split("to")[0].strip(),
            rating=self._info_value(doc, "MAL Ocena:"),
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["AnimeSRBIJASource", "source_metadata", "largest_srcset_candidate"]
