"""
AnimeFire Source - Adapter for animefire.plus (Portuguese).

Listing cards point at a single episode ("/anime/12") and are rewritten
to the anime's "-todos-os-episodios" page. Films on a detail page are
numbered with their own counter.
"""

import logging
import re
from typing import List
from urllib.parse import quote

from anisources.core.models import AnimeDetail, AnimeSummary, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, FieldPolicy, FilterOption, SearchRequest, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.hrefs import animefire_all_episodes
from anisources.sources.common.utils import DEFAULT_POSTER


logger = logging.getLogger(__name__)


source_metadata = SourceMetadata(
    source_id=SourceId.ANIMEFIRE,
    language="pt",
    description="Brazilian Portuguese subbed and dubbed anime",
    listing_url="https://animefire.plus/",
    search_url="https://animefire.plus/pesquisar/",
    origin="https://animefire.plus",
    dub_marker="(Dublado)",
    filter_options=[FilterOption.DUB],
)


class AnimeFireSource(BaseSource):
    """
    Adapter for AnimeFire.

    Search cards are only kept when title, lazy-loaded image and link
    are all present; listing cards fall back to a placeholder poster.
    """

    summary_policy = FieldPolicy(require_href=True, require_image=True)
    search_param = None

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def search_request(self, query: str, page: int = 1) -> SearchRequest:
        slug = quote(query.lower().replace(" ", "-"))
        return SearchRequest(url=f"{self.metadata.search_url}{slug}")

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            title = re.sub(r"- Episódio \d+", "", item.select_text("h3.animeTitle"), count=1)
            raw_href = item.select_attr("article.card a", "href")
            return self._summary(
                title=title,
                image_url=item.select_attr("article.card img", "src") or DEFAULT_POSTER,
                href=animefire_all_episodes(raw_href),
                episode_label=item.select_text("span.numEp").replace("Episódio ", "").strip(),
            )

        return self._collect(doc.select("div.container.eps div.card-group div.col-12"), build)

    def parse_search_results(self, doc: HTMLDocument, query: str = "") -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            title = item.select_one("div.text-block h3.animeTitle")
            image = item.select_one("article.card a img")
            link = item.select_one("article.card a")
            return self._summary(
                title=title.text() if title else "",
                image_url=image.attr("data-src") if image else "",
                href=link.attr("href") if link else "",
            )

        return self._collect(doc.select("div.card-group div.row div.divCardUltimosEps"), build)

    def parse_episodes(self, doc: HTMLDocument, href: str = "") -> List[EpisodeRef]:
        episodes = []
        film_count = 0
        for anchor in doc.select("div.div_video_list a"):
            text = anchor.text()
            link = anchor.attr("href")
            if not link:
                continue

            if "Filme" in text:
                film_count += 1
                episodes.append(EpisodeRef(number=str(film_count), href=link))
                continue

            number = text.split("Episódio ")[-1].split(" - ")[0].strip()
            if number:
                episodes.append(EpisodeRef(number=number, href=link))

        return episodes

    def parse_detail(self, doc: HTMLDocument, href: str = "") -> AnimeDetail:
        info = doc.select("div.divAnimePageInfo div.animeInfo span.spanAnimeInfo")
        return AnimeDetail(
            aliases=doc.select_text("div.mr-2 h6.text-gray"),
            synopsis=doc.select_text("div.divSinopse span.spanAnimeInfo"),
            airdate=info[-1].text() if info else "",
            rating=doc.select_text("div.div_anime_score h4.text-white"),
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["AnimeFireSource", "source_metadata"]
