"""
TokyoInsider Source - Adapter for tokyoinsider.com (English).

A download index rather than a streaming site: there is no search
endpoint and cards have no posters.
"""

import logging
import re
from typing import List

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.hrefs import tokyoinsider_anime
from anisources.sources.common.utils import DEFAULT_POSTER


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.TOKYOINSIDER,
    language="en",
    description="Anime episode download index",
    listing_url="https://www.tokyoinsider.com/new",
    origin="https://www.tokyoinsider.com",
)


def strip_episode_suffix(title: str) -> str:
    """'Naruto (TV) episode 12' -> 'Naruto (TV)'."""
    match = re.search(r"\s*(episode|special)", title)
    if match:
        return title[:match.start()].strip()
    return title


class TokyoInsiderSource(BaseSource):
    """Adapter for TokyoInsider."""

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            link = item.select_one("a")
            raw_href = link.attr("href") if link else ""
            return self._summary(
                title=strip_episode_suffix(item.select_text("a")),
                image_url=DEFAULT_POSTER,
                href=self.absolute(tokyoinsider_anime(raw_href)),
            )

        return self._collect(doc.select("div#inner_page div.c_h2b, div#inner_page div.c_h2"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        episodes = []
        for item in doc.select("div.episode"):
            link = item.select_attr("a.download-link", "href")
            number = item.select_text("strong")
            if not number or "/episode/" not in link:
                continue
            episodes.append(EpisodeRef(number=number, href=self.absolute(link)))
        return episodes

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        vintage = doc.select_one('tr.c_h2:-soup-contains("Vintage:")')
        return AnimeDetail(
            synopsis=doc.select_text("td[style*='border-bottom: 0']"),
            airdate=vintage.select_text("td:not(:has(b))") if vintage else "",
            rating="N/A",
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["TokyoInsiderSource", "source_metadata", "strip_episode_suffix"]
