import pytest

from anisources.core.models import AnimeSummary, DocumentKind, ResultReason, SourceId
from anisources.sources.common.document import parse_html
from anisources.sources.common.utils import DEFAULT_POSTER

from pages import FEATURED_PAGES, irrelevant_document


@pytest.mark.parametrize("source", list(FEATURED_PAGES))
def test_featured_extracts_every_item(extractor, source):
    result = extractor.extract_featured(source, FEATURED_PAGES[source])

    assert result.is_ok, result.message
    assert len(result.value) == 2
    for summary in result.value:
        assert summary.source == source
        assert summary.title
        assert summary.href


@pytest.mark.parametrize("source", [s for s in SourceId if s != SourceId.HANASHI])
def test_featured_irrelevant_document_is_empty(extractor, source):
    result = extractor.extract_featured(source, irrelevant_document(source, "featured"))

    assert result.is_empty
    assert result.reason in (ResultReason.NO_ITEMS, ResultReason.SELECTOR_NOT_FOUND)


def test_featured_unsupported_source_fails(extractor):
    result = extractor.extract_featured(SourceId.HANASHI, "[]")

    assert result.is_failed
    assert result.reason == ResultReason.UNSUPPORTED
    assert not result.retryable


def titles_and_hrefs(extractor, source):
    result = extractor.extract_featured(source, FEATURED_PAGES[source])
    return [(s.title, s.href) for s in result.value], result.value


def test_animeworld_featured(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.ANIMEWORLD)
    assert pairs == [("Naruto", "/play/naruto.Abc12"), ("Bleach ITA", "/play/bleach.Xy9")]
    assert [s.episode_label for s in summaries] == ["12", "3"]
    assert summaries[0].image_url == "https://img.animeworld.so/naruto.jpg"


def test_animeworld_featured_requires_the_all_tab(extractor):
    page = '<div class="content" data-name="ongoing"><div class="item"><a class="name">X</a></div></div>'
    result = extractor.extract_featured(SourceId.ANIMEWORLD, page)

    assert result.is_empty
    assert result.reason == ResultReason.SELECTOR_NOT_FOUND


def test_gogoanime_featured_links_to_category(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.GOGOANIME)
    assert pairs == [("Naruto", "/category/naruto"), ("Bleach (Dub)", "/category/bleach-dub")]
    assert [s.episode_label for s in summaries] == ["12", "3"]


def test_gogoanime_featured_drops_items_without_link(registry):
    page = """
        <div class="last_episodes"><ul>
          <li><div class="img"><img src="a.png"></div><p class="name"><a>No Link</a></p></li>
          <li><div class="img"><a href="/x-episode-1"><img src="b.png"></a></div><p class="name"><a>Kept</a></p></li>
        </ul></div>
    """
    summaries = registry.resolve("GoGoAnime").parse_featured(parse_html(page))
    assert [s.title for s in summaries] == ["Kept"]


def test_animeheaven_featured_absolutizes_images(extractor):
    _, summaries = titles_and_hrefs(extractor, SourceId.ANIMEHEAVEN)
    assert summaries[0].image_url == "https://animeheaven.me/image.php?op1"
    assert summaries[0].href == "anime.php?op1"
    assert summaries[0].episode_label == "1100"


def test_animefire_featured(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.ANIMEFIRE)
    assert pairs[0] == ("Naruto", "https://animefire.plus/animes/naruto-todos-os-episodios")
    assert pairs[1][0] == "Bleach (Dublado)"
    assert summaries[0].episode_label == "12"


def test_animefire_featured_falls_back_to_placeholder_poster(registry):
    page = """
        <div class="container eps"><div class="card-group"><div class="col-12">
          <article class="card"><a href="https://animefire.plus/animes/x/1"></a></article>
          <h3 class="animeTitle">X - Episódio 1</h3>
        </div></div></div>
    """
    summaries = registry.resolve(SourceId.ANIMEFIRE).parse_featured(parse_html(page))
    assert summaries[0].image_url == DEFAULT_POSTER


def test_kuramanime_featured(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.KURAMANIME)
    assert pairs[0] == ("Naruto", "https://kuramanime.dad/anime/123/naruto")
    assert summaries[0].episode_label == "5"
    assert summaries[0].image_url == "https://kuramanime.dad/img/naruto.jpg"


def test_jkanime_featured(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.JKANIME)
    assert pairs == [("One Piece", "https://jkanime.net/one-piece/"), ("Bleach", "https://jkanime.net/bleach/")]
    assert [s.episode_label for s in summaries] == ["1100", "3"]


def test_hianime_featured_uses_watch_ids(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.HIANIME)
    assert pairs == [("One Piece", "one-piece-100"), ("Bleach", "bleach-806")]
    assert summaries[0].image_url == "https://img.flawlessfiles.com/one-piece.jpg"


def test_anilibria_featured(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.ANILIBRIA)
    assert pairs == [("Ван-Пис", "9000"), ("Блич", "9001")]
    assert summaries[0].image_url == "https://anilibria.tv/storage/releases/posters/9000/medium.jpg"


def test_anilibria_featured_drops_entries_without_poster(registry):
    doc = {"list": [
        {"id": 1, "names": {"ru": "A"}},
        {"id": "2", "names": {"ru": "B"}, "posters": {"medium": {"url": "/b.jpg"}}},
        {"id": 3, "names": {"ru": "C"}, "posters": {"medium": {"url": "/c.jpg"}}},
    ]}
    summaries = registry.resolve(SourceId.ANILIBRIA).parse_featured(doc)
    assert [s.title for s in summaries] == ["C"]


def test_animesrbija_featured_picks_largest_image(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.ANIMESRBIJA)
    assert pairs[0] == ("Naruto", "https://www.animesrbija.com/anime/naruto")
    assert summaries[0].image_url == "https://www.animesrbija.com/img/naruto-large.webp"


def test_aniworld_featured(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.ANIWORLD)
    assert pairs[0] == ("Naruto", "https://aniworld.to/anime/stream/naruto")
    assert summaries[0].image_url == "https://aniworld.to/public/img/cover/naruto.jpg"


def test_tokyoinsider_featured(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.TOKYOINSIDER)
    assert pairs == [
        ("Naruto (TV)", "https://www.tokyoinsider.com/anime/N/Naruto_(TV)"),
        ("Bleach (TV)", "https://www.tokyoinsider.com/anime/B/Bleach_(TV)"),
    ]
    assert summaries[0].image_url == DEFAULT_POSTER


def test_anivibe_featured_uses_default_size_images(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.ANIVIBE)
    assert pairs[0] == ("Naruto", "https://anivibe.net/series/naruto/")
    assert summaries[0].image_url == "https://anivibe.net/default/naruto.jpg"


def test_animeunity_featured(extractor):
    pairs, _ = titles_and_hrefs(extractor, SourceId.ANIMEUNITY)
    assert pairs == [
        ("Naruto", "https://www.animeunity.to/anime/1-naruto"),
        ("Bleach", "https://www.animeunity.to/anime/2-bleach"),
    ]


def test_animeunity_featured_skips_records_without_string_title(extractor):
    page = """
        <layout-items items-json='{"data": [
          {"anime": {"id": 1, "slug": "numbered", "title": 5, "title_eng": ["x"], "imageurl": "https://img.animeunity.to/n.jpg"}},
          {"anime": {"id": 2, "slug": "good", "title": "Good", "imageurl": "https://img.animeunity.to/good.jpg"}}
        ]}'></layout-items>
    """
    result = extractor.extract_featured(SourceId.ANIMEUNITY, page)

    assert result.is_ok, result.message
    assert [s.title for s in result.value] == ["Good"]


def test_animeunity_featured_with_broken_json_fails(extractor):
    result = extractor.extract_featured(SourceId.ANIMEUNITY, "<layout-items items-json='{not json'></layout-items>")

    assert result.is_failed
    assert result.reason == ResultReason.MALFORMED_JSON
    assert result.retryable


def test_animeflv_featured(extractor):
    pairs, summaries = titles_and_hrefs(extractor, SourceId.ANIMEFLV)
    assert pairs == [
        ("One Piece", "https://www3.animeflv.net/anime/one-piece"),
        ("Bleach", "https://www3.animeflv.net/anime/bleach"),
    ]
    assert summaries[0].image_url == "https://www3.animeflv.net/uploads/one-piece.jpg"


def test_featured_summaries_round_trip(extractor):
    for source, page in FEATURED_PAGES.items():
        for summary in extractor.extract(source, page, DocumentKind.FEATURED).value:
            assert AnimeSummary.model_validate_json(summary.model_dump_json()) == summary
