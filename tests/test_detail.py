import json

import pytest

from anisources.core.models import ResultReason, ScoreBucket, SourceId
from anisources.core.utils import average_score, average_score_label


def test_average_score_weights_buckets():
    buckets = [ScoreBucket(score=70, amount=1), ScoreBucket(score=90, amount=1)]

    assert average_score(buckets) == 80.0
    assert average_score_label(buckets) == "80.0"


def test_average_score_accepts_dicts():
    assert average_score([{"score": 10, "amount": 3}, {"score": 100, "amount": 1}]) == 32.5


def test_average_score_without_votes():
    assert average_score([]) is None
    assert average_score_label([{"score": 50, "amount": 0}]) == "N/A"


def test_gogoanime_detail(extractor):
    page = """
        <div class="anime_info_body_bg">
          <p class="other-name"><a>ナルト</a></p>
          <div class="description">A ninja story.</div>
        </div>
        <p class="type"><span>Released: </span>2002</p>
        <ul id="episode_page"><li><a href="#">0-3</a></li></ul>
    """
    result = extractor.extract_detail(SourceId.GOGOANIME, page, href="/naruto")

    assert result.is_ok
    detail = result.value
    assert detail.aliases == "ナルト"
    assert detail.synopsis == "A ninja story."
    assert detail.airdate == "2002"
    assert len(detail.episodes) == 3


def test_animeworld_detail(extractor):
    page = """
        <div class="widget-title"><h1 data-jtitle="Naruto JP">Naruto</h1></div>
        <div class="info"><div class="desc">Trama.</div></div>
        <div class="row"><dl class="meta">
          <dt>Data di Uscita:</dt><dd>03 Ottobre 2002</dd>
          <dd class="rating"><span>8.2</span></dd>
        </dl></div>
    """
    detail = extractor.extract_detail(SourceId.ANIMEWORLD, page).value

    assert detail.aliases == "Naruto JP"
    assert detail.synopsis == "Trama."
    assert detail.airdate == "03 Ottobre 2002"
    assert detail.rating == "8.2"
    assert detail.episodes == []


def test_hianime_detail_cleans_synopsis(extractor):
    page = json.dumps({"anime": {
        "info": {"name": "One Piece", "description": "Pirates<br>at <i>sea</i>."},
        "moreInfo": {"premiered": "Fall 1999", "malscore": "8.7"},
    }})
    detail = extractor.extract_detail(SourceId.HIANIME, page).value

    assert detail.aliases == "One Piece"
    assert detail.synopsis == "Piratesat sea."
    assert detail.airdate == "Fall 1999"
    assert detail.rating == "8.7"


def test_anilibria_detail(extractor):
    page = json.dumps({
        "names": {"ru": "Наруто", "en": "Naruto"},
        "description": "Ниндзя<br>история",
        "season": {"year": 2002, "string": "осень"},
        "in_favorites": 1234,
        "player": {"list": {"1": {"hls": {"hd": "/videos/media/ts/9000/1/720/a.m3u8"}}}},
    })
    detail = extractor.extract_detail(SourceId.ANILIBRIA, page).value

    assert detail.aliases == "Naruto"
    assert detail.synopsis == "Ниндзяистория"
    assert detail.airdate == "2002 осень"
    assert detail.rating == "1234"
    assert len(detail.episodes) == 1


def test_animesrbija_detail(extractor):
    page = """
        <h3 class="anime-eng-name">Naruto</h3>
        <div class="anime-description">Prica <b>o</b> nindzi.</div>
        <div class="anime-information-col">
          <div>Datum: Oct 3, 2002 to Feb 8, 2007</div>
          <div>MAL Ocena: 8.0</div>
        </div>
    """
    detail = extractor.extract_detail(SourceId.ANIMESRBIJA, page).value

    assert detail.aliases == "Naruto"
    assert detail.synopsis == "Prica o nindzi."
    assert detail.airdate == "Oct 3, 2002"
    assert detail.rating == "8.0"


def test_aniworld_detail_placeholders_alone_are_empty(extractor):
    result = extractor.extract_detail(SourceId.ANIWORLD, "<html><body></body></html>")

    assert result.is_empty
    assert result.reason == ResultReason.NO_ITEMS


def test_aniworld_detail(extractor):
    page = """
        <p class="seri_des">Eine Geschichte.</p>
        <table class="seasonEpisodesList"><tr><td><a href="/anime/stream/x/staffel-1/episode-1">Folge 1</a></td></tr></table>
    """
    detail = extractor.extract_detail(SourceId.ANIWORLD, page, href="/anime/stream/x/staffel-1").value

    assert detail.synopsis == "Eine Geschichte."
    assert detail.rating == "N/A"
    assert [e.number for e in detail.episodes] == ["S1E01"]


@pytest.mark.parametrize("source", [SourceId.ZOROTV, SourceId.ANIMEUNITY])
def test_sources_without_detail_pages_are_empty(extractor, source):
    result = extractor.extract_detail(source, "<html><body><p>page</p></body></html>")

    assert result.is_empty
    assert result.reason == ResultReason.NO_ITEMS


def test_anilibria_detail_url_from_playlist(registry):
    adapter = registry.resolve(SourceId.ANILIBRIA)

    assert adapter.detail_url("https://cache.libria.fun/videos/media/ts/9000/1/720/a.m3u8") == (
        "https://api.anilibria.tv/v3/title?id=9000"
    )
    assert adapter.detail_url("9000") == "https://api.anilibria.tv/v3/title?id=9000"


def test_hianime_detail_url(registry):
    adapter = registry.resolve(SourceId.HIANIME)

    episode = "https://aniwatch-api-dusky.vercel.app/anime/episode-srcs?id=one-piece-100?ep=2142"
    assert adapter.detail_url(episode) == "https://aniwatch-api-dusky.vercel.app/anime/info?id=one-piece-100"
    assert adapter.detail_url("one-piece-100") == "https://aniwatch-api-dusky.vercel.app/anime/info?id=one-piece-100"
    assert adapter.episodes_url("one-piece-100") == (
        "https://aniwatch-api-dusky.vercel.app/anime/episodes/one-piece-100"
    )


def test_hianime_detail_url_rejects_unknown_urls(registry):
    with pytest.raises(ValueError):
        registry.resolve(SourceId.HIANIME).detail_url("https://hianime.to/one-piece-100")


def test_gogoanime_urls(registry):
    adapter = registry.resolve(SourceId.GOGOANIME)

    assert adapter.detail_url("/category/naruto") == "https://anitaku.bz/category/naruto"
    assert adapter.browser_url("/category/naruto") == "https://anitaku.pe/category/naruto"
    assert adapter.detail_url("https://example.com/x") == "https://example.com/x"
