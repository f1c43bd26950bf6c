import pytest
from pydantic import ValidationError

from anisources.core.exceptions import UnknownSourceError
from anisources.core.models import (
    AnimeDetail,
    AnimeSummary,
    EpisodeRef,
    ParseResult,
    ResultReason,
    ScoreBucket,
    SourceId,
)


def test_source_id_parses_display_value_and_member_name():
    assert SourceId.parse("GoGoAnime") is SourceId.GOGOANIME
    assert SourceId.parse("gogoanime") is SourceId.GOGOANIME
    assert SourceId.parse("ANIMESRBIJA") is SourceId.ANIMESRBIJA
    assert SourceId.parse(" AniWorld ") is SourceId.ANIWORLD
    assert SourceId.parse(SourceId.HANASHI) is SourceId.HANASHI


def test_source_id_rejects_unknown_names():
    with pytest.raises(UnknownSourceError) as exc_info:
        SourceId.parse("Crunchyroll")
    assert exc_info.value.source_id == "Crunchyroll"
    assert "Crunchyroll" in str(exc_info.value)

    with pytest.raises(UnknownSourceError):
        SourceId.parse(42)


def test_source_id_has_seventeen_members():
    assert len(SourceId) == 17
    assert str(SourceId.JKANIME) == "JKanime"


def test_summary_title_is_trimmed_and_required():
    summary = AnimeSummary(title="  Naruto  ", source=SourceId.ANIMEWORLD)
    assert summary.title == "Naruto"
    assert summary.image_url == ""
    assert summary.episode_label is None

    with pytest.raises(ValidationError):
        AnimeSummary(title="   ", source=SourceId.ANIMEWORLD)


def test_summary_round_trips_through_json():
    summary = AnimeSummary(
        title="Bleach",
        image_url="https://img.example/bleach.jpg",
        href="/category/bleach",
        source=SourceId.GOGOANIME,
        episode_label="3",
    )
    restored = AnimeSummary.model_validate_json(summary.model_dump_json())
    assert restored == summary


def test_detail_round_trips_with_episodes():
    detail = AnimeDetail(
        aliases="ナルト",
        synopsis="A ninja story",
        airdate="2002",
        rating="8.0",
        episodes=[EpisodeRef(number="1", href="/naruto-episode-1")],
    )
    assert AnimeDetail.model_validate_json(detail.model_dump_json()) == detail


def test_episode_number_derivation():
    assert EpisodeRef(number="12", href="/e/12").episode_number == 12
    assert EpisodeRef(number="Ep 7", href="/e/7").episode_number == 7
    assert EpisodeRef(number="OVA", href="/e/ova").episode_number == 0


def test_episode_requires_href():
    with pytest.raises(ValidationError):
        EpisodeRef(number="1", href="")


def test_detail_is_empty_only_without_useful_fields():
    assert AnimeDetail().is_empty
    assert AnimeDetail(airdate="N/A", rating="N/A").is_empty
    assert not AnimeDetail(synopsis="Something").is_empty
    assert not AnimeDetail(episodes=[EpisodeRef(number="1", href="/1")]).is_empty


def test_score_bucket_rejects_negative_amounts():
    with pytest.raises(ValidationError):
        ScoreBucket(score=80, amount=-1)


def test_parse_result_tags():
    ok = ParseResult.ok([1, 2])
    assert ok.is_ok and not ok.is_empty and not ok.is_failed
    assert ok.items == [1, 2]
    assert str(ok) == "ok (2)"

    empty = ParseResult.empty()
    assert empty.is_empty
    assert empty.reason == ResultReason.NO_ITEMS
    assert empty.items == []
    assert not empty.retryable

    failed = ParseResult.failed(ResultReason.MALFORMED_JSON, "bad")
    assert failed.is_failed
    assert failed.retryable
    assert str(failed) == "failed (malformed_json)"

    assert not ParseResult.failed(ResultReason.UNSUPPORTED).retryable
