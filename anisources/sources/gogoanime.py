"""
GoGoAnime Source - Adapter for gogoanime / anitaku (English).

Listing cards link to the newest episode and are rewritten to the
anime's category page. Episode lists are published as pagination
ranges ("1-100") that expand into one reference per episode.
"""

import logging
from typing import Dict, List

from anisources.core.exceptions import SelectorMissError
from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, FilterOption, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.hrefs import gogo_category
from anisources.sources.common.utils import expand_episode_range


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.GOGOANIME,
    language="en",
    description="English subbed and dubbed anime",
    listing_url="https://gogoanime3.cc/home.html",
    search_url="https://anitaku.pe/search.html",
    detail_base="https://anitaku.bz",
    browse_base="https://anitaku.pe",
    origin="https://anitaku.pe",
    dub_marker="(dub)",
    dub_ignore_case=True,
    filter_options=[FilterOption.DUB, FilterOption.SUB],
)


class GoGoAnimeSource(BaseSource):
    """
    Adapter for GoGoAnime.

    Items without a link are dropped on both listing and search pages;
    search items also need a title from the link, its image or the
    name paragraph.
    """

    search_param = "keyword"

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            raw_href = item.select_attr("div.img a", "href")
            return self._summary(
                title=item.select_text("p.name a"),
                image_url=item.select_attr("div.img img", "src"),
                href=gogo_category(raw_href) if raw_href else "",
                episode_label=item.select_text("p.episode").replace("Episode ", "").strip(),
            )

        return self._collect(doc.select("div.last_episodes li"), build)

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            link = item.select_one("a")
            if link is None:
                raise SelectorMissError("GoGoAnime: search item has no link", selector="a", field_name="href")

            title = (
                link.attr("title")
                or link.select_attr("img", "alt")
                or item.select_text("p.name > a")
            )
            return self._summary(
                title=title.strip('"'),
                image_url=link.select_attr("img", "src"),
                href=link.attr("href"),
            )

        return self._collect(doc.select("ul.items li"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        """
        Expand every pagination anchor into episode references.

        Only the anchor text is read; text that is not a range, such as
        "TBA", contributes nothing. Episodes are returned unique and in
        ascending order.
        """
        def href_for(n: int) -> str:
            return f"{href}-episode-{n}"

        episodes: Dict[int, EpisodeRef] = {}
        for anchor in doc.select("ul#episode_page a"):
            for episode in expand_episode_range(anchor.text(), href_for):
                episodes.setdefault(episode.episode_number, episode)

        return [episodes[n] for n in sorted(episodes)]

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        released = doc.select_one('p.type:-soup-contains("Released:")')
        return AnimeDetail(
            aliases=doc.select_text("div.anime_info_body_bg p.other-name a"),
            synopsis=doc.select_text("div.anime_info_body_bg div.description"),
            airdate=released.text().replace("Released: ", "") if released else "",
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["GoGoAnimeSource", "source_metadata"]
