"""
Href Normalizers - Per-source rewrites from card links to detail paths.

Listing pages usually link to the latest episode rather than to the
anime itself. Each function here rewrites such a link into the
canonical detail-page path for one source. Inputs that do not match a
rewrite pass through unchanged.
"""

import re


def gogo_category(href: str) -> str:
    """'/naruto-episode-12' -> '/category/naruto'."""
    href = re.sub(r"-episode-\d+", "", href, count=1)
    if href.startswith("/category"):
        return href
    return "/category" + href


def animefire_all_episodes(href: str) -> str:
    """'.../naruto/12' -> '.../naruto-todos-os-episodios'; idempotent."""
    return re.sub(r"/\d+$", "-todos-os-episodios", href)


def hianime_watch_id(href: str) -> str:
    """'/watch/one-piece-100?ep=2142' -> 'one-piece-100'."""
    if href.startswith("/watch/"):
        href = href[len("/watch/"):]
    return href.split("?", 1)[0]


def kuramanime_anime(href: str) -> str:
    """Drop the '/episode/N' segment from an episode link."""
    return re.sub(r"/episode/\d+", "", href, count=1)


def jkanime_anime(href: str) -> str:
    """Drop the first '/N' episode segment from an episode link."""
    return re.sub(r"/\d+", "", href, count=1)


def animeflv_anime(href: str) -> str:
    """
    '/ver/one-piece-1100' -> '/anime/one-piece'.

    The trailing hyphen segment is the episode number; links without
    a hyphen keep their path.
    """
    if "-" in href:
        href = href.rsplit("-", 1)[0]
    return href.replace("/ver/", "/anime/")


def tokyoinsider_anime(href: str) -> str:
    """Cut everything after the first ')' of '/anime/X/Title_(TV)/episode/1'."""
    if ")" not in href:
        return href
    return href.split(")", 1)[0] + ")"


def animeunity_anime(anime_id: int, slug: str, base: str = "https://www.animeunity.to/anime/") -> str:
    return f"{base}{anime_id}-{slug}"


# Export href normalizers
__all__ = [
    "gogo_category",
    "animefire_all_episodes",
    "hianime_watch_id",
    "kuramanime_anime",
    "jkanime_anime",
    "animeflv_anime",
    "tokyoinsider_anime",
    "animeunity_anime",
]
