"""
Kuramanime Source - Adapter for kuramanime (Indonesian).

The episode list is embedded as escaped HTML in the data-content
attribute of the follow button and is parsed as a second document.
"""

import logging
import re
from typing import List

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, FilterOption, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement, parse_html
from anisources.sources.common.hrefs import kuramanime_anime


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.KURAMANIME,
    language="id",
    description="Indonesian subbed anime",
    listing_url="https://kuramanime.red/quick/ongoing?order_by=updated",
    search_url="https://kuramanime.dad/anime",
    origin="https://kuramanime.dad",
    dub_marker="(Dub ID)",
    filter_options=[FilterOption.DUB],
)


class KuramanimeSource(BaseSource):
    """Adapter for Kuramanime."""

    search_param = "search"

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            label = re.match(r"^Ep (\d+)", item.select_text("div.ep span"))
            return self._summary(
                title=item.select_text("h5 a"),
                image_url=item.select_attr("div.product__item__pic", "data-setbg"),
                href=kuramanime_anime(item.select_attr("a", "href")),
                episode_label=label.group(1) if label else None,
            )

        return self._collect(
            doc.select("div.product__page__content div#animeList div.col-lg-4"), build
        )

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=item.select_text("div.product__item__text h5 a"),
                image_url=item.select_attr("div.product__item__pic", "data-setbg"),
                href=item.select_attr("div.product__item a", "href"),
            )

        return self._collect(doc.select("div#animeList div.col-lg-4"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        content = doc.select_attr("div#episodeListsSection a.follow-btn", "data-content")
        if not content:
            return []

        episodes = []
        for anchor in parse_html(content).select("a.btn"):
            number = anchor.text().replace("Ep ", "").strip()
            if not number.isdigit() or not anchor.attr("href"):
                logger.debug(f"Invalid episode number: {anchor.text()!r}")
                continue
            episodes.append(EpisodeRef(number=number, href=anchor.attr("href")))
        return episodes

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        titles = doc.select("div.anime__details__title span")
        widget = doc.select("div.anime__details__widget ul li div.col-9")
        airdate = widget[3].text().split("s/d")[0].strip() if len(widget) > 3 else ""

        rating = ""
        for row in doc.select("div.anime__details__widget div.row div.col-lg-6 ul li"):
            rating = row.select_text('div:-soup-contains("Skor:") ~ div.col-9')
            if rating:
                break

        return AnimeDetail(
            aliases=titles[-1].text() if titles else "",
            synopsis=doc.select_text("div.anime__details__text p"),
            airdate=airdate,
            rating=rating,
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["KuramanimeSource", "source_metadata"]
