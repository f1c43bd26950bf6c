"""
AniLibria Source - Adapter for the AniLibria v3 API (Russian).

Every document is JSON. Titles are identified by their numeric id;
episode hrefs are HLS playlists on the libria cache host, from which
detail_url can recover the title id again.
"""

import logging
import re
from typing import Any, Dict, List

from anisources.core.exceptions import SelectorMissError
from anisources.core.models import AnimeDetail, AnimeSummary, DocumentKind, EpisodeRef, SourceId
from anisources.sources.base import BaseSource, FieldPolicy, SearchRequest, SourceMetadata
from anisources.sources.common.utils import TextCleaner, URLHelper, dig


logger = logging.getLogger(__name__)

CACHE_HOST = "https://cache.libria.fun"
CACHE_PREFIX = f"{CACHE_HOST}/videos/media/ts/"


source_metadata = SourceMetadata(
    source_id=SourceId.ANILIBRIA,
    language="ru",
    description="Russian dubbed anime",
    listing_url="https://api.anilibria.tv/v3/title/updates?filter=posters,id,names&limit=20",
    search_url="https://api.anilibria.tv/v3/title/search",
    detail_base="https://api.anilibria.tv/v3/title?id=",
    browse_base="https://anilibria.tv/release/",
    origin="https://anilibria.tv",
)


def _int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class AniLibriaSource(BaseSource):
    """
    Adapter for AniLibria.

    Entries need an integer id and a medium poster; entries missing
    either are dropped.
    """

    summary_policy = FieldPolicy(require_href=True, require_image=True)
    json_kinds = frozenset(DocumentKind)

    @property
    def metadata(self) -> SourceMetadata:
        return source_metadata

    def search_request(self, query: str, page: int = 1) -> SearchRequest:
        return SearchRequest(
            url=self.metadata.search_url,
            params={"search": query, "filter": "id,names,posters"},
        )

    def detail_url(self, href: str) -> str:
        """Build the title URL, accepting either an id or a cached playlist URL."""
        if href.startswith(CACHE_PREFIX):
            tail = href[len(CACHE_PREFIX):]
            match = re.match(r"\d*", tail)
            return f"{self.metadata.detail_base}{match.group(0)}"
        return f"{self.metadata.detail_base}{href}"

    def _poster(self, entry: Dict[str, Any]) -> str:
        url = dig(entry, "posters", "medium", "url")
        return URLHelper.prefix_origin(url, self.metadata.origin) if isinstance(url, str) else ""

    def _entries(self, doc: Any) -> List[Any]:
        entries = dig(doc, "list")
        return entries if isinstance(entries, list) else []

    def parse_featured(self, doc: Any) -> List[AnimeSummary]:
        def build(entry: Any) -> AnimeSummary:
            anime_id = dig(entry, "id")
            title = dig(entry, "names", "ru")
            if not _int(anime_id) or not isinstance(title, str):
                raise SelectorMissError("AniLibria: entry lacks id or russian name", selector="list[]")
            return self._summary(title=title, image_url=self._poster(entry), href=str(anime_id))

        return self._collect(self._entries(doc), build)

    def parse_search_results(self, doc: Any, query: str = "") -> List[AnimeSummary]:
        def build(entry: Any) -> AnimeSummary:
            anime_id = dig(entry, "id")
            if not _int(anime_id) or not isinstance(dig(entry, "names"), dict):
                raise SelectorMissError("AniLibria: entry lacks id or names", selector="list[]")
            title = dig(entry, "names", "ru") or dig(entry, "names", "en") or "Unknown Title"
            return self._summary(title=str(title), image_url=self._poster(entry), href=str(anime_id))

        return self._collect(self._entries(doc), build)

    def parse_episodes(self, doc: Any, href: str = "") -> List[EpisodeRef]:
        """
        Map the player list to stream URLs, preferring fhd, then hd, then sd.

        The list is either an object keyed by episode number or an array
        of objects carrying an "episode" field.
        """
        playlist = dig(doc, "player", "list")
        if isinstance(playlist, dict):
            items = list(playlist.items())
        elif isinstance(playlist, list):
            items = [(str(dig(entry, "episode", default="")), entry) for entry in playlist]
        else:
            return []

        episodes = []
        for number, entry in items:
            hls = dig(entry, "hls", default={})
            stream = next(
                (dig(hls, quality) for quality in ("fhd", "hd", "sd") if isinstance(dig(hls, quality), str)),
                None
            )
            if not number or not stream:
                continue
            episodes.append(EpisodeRef(number=str(number), href=f"{CACHE_HOST}{stream}"))

        return sorted(episodes, key=lambda e: int(e.number) if e.number.isdigit() else 0)

    def parse_detail(self, doc: Any, href: str = "") -> AnimeDetail:
        if not isinstance(doc, dict):
            return AnimeDetail()

        year = dig(doc, "season", "year")
        season = dig(doc, "season", "string")
        favorites = dig(doc, "in_favorites")
        description = dig(doc, "description")
        english = dig(doc, "names", "en")

        return AnimeDetail(
            aliases=english if isinstance(english, str) else "",
            synopsis=TextCleaner.clean_synopsis(description) if isinstance(description, str) else "",
            airdate=f"{year} {season}" if year is not None and season is not None else "",
            rating=str(favorites) if favorites is not None else "",
            episodes=self.parse_episodes(doc, href),
        )


__all__ = ["AniLibriaSource", "source_metadata", "CACHE_HOST"]
