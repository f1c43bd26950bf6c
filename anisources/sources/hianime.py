"""
HiAnime Source - Adapter for hianime.to and its aniwatch API mirrors.

The home page is scraped as HTML; search, episode lists and anime info
come from a JSON API. Episode hrefs point at the API's episode-srcs
endpoint and carry the anime id, which detail_url recovers.
"""

import logging
from typing import Any, List, Optional

from anisources.core.exceptions import SelectorMissError
from anisources.core.models import AnimeDetail, AnimeSummary, DocumentKind, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, SourceMetadata
from anisources.sources.common.document import HTMLDocument, HTMLElement
from anisources.sources.common.hrefs import hianime_watch_id
from anisources.sources.common.utils import TextCleaner, dig


logger = logging.getLogger(__name__)

API_MIRRORS = [
    "https://aniwatch-api-dusky.vercel.app",
    "https://aniwatch-api-cranci.vercel.app",
]


source_metadata = SourceMetadata(
    source_id=SourceId.HIANIME,
    language="en",
    description="English subbed and dubbed anime via the aniwatch API",
    listing_url="https://hianime.to/home",
    search_url=f"{API_MIRRORS[0]}/anime/search",
    detail_base=f"{API_MIRRORS[0]}/anime/info?id=",
    browse_base="https://hianime.to/watch/",
    origin="https://hianime.to",
    mirrors=API_MIRRORS,
)


def extract_anime_id(href: str) -> Optional[str]:
    """
    Recover the anime id from an episode-srcs URL.

    'https://.../anime/episode-srcs?id=one-piece-100?ep=2142' -> 'one-piece-100'
    """
    if "id=" not in href:
        return None
    tail = href.split("id=", 1)[1]
    for marker in ("?ep=", "&ep="):
        if marker in tail:
            return tail.split(marker, 1)[0]
    return None


class HiAnimeSource(BaseSource):
    """Adapter for HiAnime."""

    json_kinds = frozenset({DocumentKind.SEARCH, DocumentKind.EPISODES, DocumentKind.DETAIL})
    search_param = "q"

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    @property
    def api_base(self) -> str:
        return self.config.get("api_base", API_MIRRORS[0])

    def _anime_id(self, href: str) -> str:
        if "https" not in href:
            return href
        anime_id = extract_anime_id(href)
        if anime_id is None:
            raise ValueError(f"Invalid HiAnime URL format: {href}")
        return anime_id

    def detail_url(self, href: str) -> str:
        return f"{self.api_base}/anime/info?id={self._anime_id(href)}"

    def episodes_url(self, href: str) -> str:
        return f"{self.api_base}/anime/episodes/{self._anime_id(href)}"

    def episode_sources_url(self, episode_id: str) -> str:
        return f"{self.api_base}/anime/episode-srcs?id={episode_id}"

    def parse_featured(self, doc: HTMLDocument) -> List[AnimeSummary]:
        def build(item: HTMLElement) -> AnimeSummary:
            return self._summary(
                title=item.select_text("h3.film-name a"),
                image_url=item.select_attr("img", "data-src"),
                href=hianime_watch_id(item.select_attr("a.film-poster-ahref", "href")),
            )

        return self._collect(
            doc.select("section.block_area.block_area_home div.film_list-wrap div.flw-item"), build
        )

    def parse_search_results(self, doc: Any, query: str = "") -> List[AnimeSummary]:
        animes = dig(doc, "animes")
        if not isinstance(animes, list):
            return []

        def build(anime: Any) -> AnimeSummary:
            if not isinstance(anime, dict):
                raise SelectorMissError("HiAnime: search entry is not an object", selector="animes[]")
            name = anime.get("name")
            return self._summary(
                title=name if isinstance(name, str) and name.strip() else "Unknown Title",
                image_url=anime.get("poster") if isinstance(anime.get("poster"), str) else "",
                href=anime.get("id") if isinstance(anime.get("id"), str) else "",
            )

        return self._collect(animes, build)

    def parse_episodes(self, doc: Any, href: str = "") -> List[EpisodeRef]:
        episodes = dig(doc, "episodes")
        if not isinstance(episodes, list):
            return []

        refs = []
        for entry in episodes:
            episode_id = dig(entry, "episodeId")
            number = dig(entry, "number")
            # bool is an int subclass
            if not isinstance(episode_id, str) or not isinstance(number, int) or isinstance(number, bool):
                continue
            refs.append(EpisodeRef(number=str(number), href=self.episode_sources_url(episode_id)))
        return refs

    def parse_detail(self, doc: Any, href: str = "") -> AnimeDetail:
        """Parse the anime/info payload; episodes come from a separate request."""
        anime = dig(doc, "anime")
        if not isinstance(anime, dict):
            return AnimeDetail()

        def text(*path: str) -> str:
            value = dig(anime, *path, default="")
            return value if isinstance(value, str) else ""

        return AnimeDetail(
            aliases=text("info", "name"),
            synopsis=TextCleaner.clean_synopsis(text("info", "description")),
            airdate=text("moreInfo", "premiered"),
            rating=text("moreInfo", "malscore"),
        )


__all__ = ["HiAnimeSource", "source_metadata", "extract_anime_id", "API_MIRRORS"]
