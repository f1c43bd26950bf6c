import pytest

from anisources.core.exceptions import AniSourcesError, UnknownSourceError
from anisources.core.models import DocumentKind, SourceId
from anisources.core.registry import SourceRegistry, discover_source_classes
from anisources.sources.base import PayloadFormat
from anisources.sources.gogoanime import GoGoAnimeSource


def test_every_source_has_an_adapter(registry):
    assert len(registry) == len(SourceId)
    for source_id in SourceId:
        assert registry.resolve(source_id).source_id == source_id


def test_discovery_finds_one_class_per_source():
    classes = discover_source_classes()
    assert len(classes) == len(SourceId)


@pytest.mark.parametrize("name", ["GoGoAnime", "gogoanime", "GOGOANIME", " GoGoAnime "])
def test_resolve_by_name(registry, name):
    assert registry.resolve(name).source_id == SourceId.GOGOANIME


def test_resolve_unknown_source(registry):
    with pytest.raises(UnknownSourceError):
        registry.resolve("Crunchyroll")

    assert "Crunchyroll" not in registry
    assert "hianime" in registry


def test_missing_adapters_are_rejected():
    with pytest.raises(AniSourcesError, match="No adapter registered"):
        SourceRegistry(source_classes=[GoGoAnimeSource])


def test_duplicate_adapters_are_rejected():
    with pytest.raises(AniSourcesError, match="Duplicate adapter"):
        SourceRegistry(source_classes=[GoGoAnimeSource, GoGoAnimeSource])


def test_resolve_preference_defaults(registry):
    assert registry.resolve_preference(None).source_id == SourceId.ANIMEWORLD
    assert registry.resolve_preference("  ").source_id == SourceId.ANIMEWORLD
    assert registry.resolve_preference("AniWorld").source_id == SourceId.ANIWORLD


def test_resolve_preference_unknown_raises(registry):
    with pytest.raises(UnknownSourceError):
        registry.resolve_preference("Crunchyroll")


def test_resolve_preference_fallback(config_manager):
    config_manager.update_setting("extraction.default_source", "HiAnime")
    config_manager.update_setting("extraction.fallback_to_default", True)
    registry = SourceRegistry(config_manager)

    assert registry.default_source == SourceId.HIANIME
    assert registry.resolve_preference("Crunchyroll").source_id == SourceId.HIANIME


def test_capabilities(registry):
    assert registry.resolve(SourceId.HANASHI).capabilities == [DocumentKind.SEARCH]
    assert registry.resolve(SourceId.HIANIME).capabilities == list(DocumentKind)
    assert registry.resolve(SourceId.ZOROTV).capabilities == [DocumentKind.FEATURED]
    assert not registry.resolve(SourceId.ANIMEFLV).supports(DocumentKind.SEARCH)


def test_payload_format(registry):
    hianime = registry.resolve(SourceId.HIANIME)
    assert hianime.payload_format(DocumentKind.FEATURED) == PayloadFormat.HTML
    assert hianime.payload_format(DocumentKind.SEARCH) == PayloadFormat.JSON
    assert registry.resolve(SourceId.ANILIBRIA).payload_format(DocumentKind.FEATURED) == PayloadFormat.JSON
    assert registry.resolve(SourceId.GOGOANIME).payload_format(DocumentKind.DETAIL) == PayloadFormat.HTML


def test_enabled_sources_follow_configuration(config_manager):
    config_manager.disable_source("GoGoAnime")
    config_manager.update_source_config("AniWorld", {"priority": 1})
    config_manager.update_source_config("AnimeWorld", {"priority": 2})
    registry = SourceRegistry(config_manager)

    enabled = [adapter.source_id for adapter in registry.enabled_sources()]
    assert SourceId.GOGOANIME not in enabled
    assert enabled[:2] == [SourceId.ANIWORLD, SourceId.ANIMEWORLD]
    assert len(enabled) == len(SourceId) - 1


def test_enabled_sources_without_configuration(registry):
    assert registry.enabled_sources() == registry.available_sources()


def test_adapters_receive_source_config(config_manager):
    config_manager.update_source_config("HiAnime", {"config": {"api_base": "https://mirror.example"}})
    registry = SourceRegistry(config_manager)

    assert registry.resolve(SourceId.HIANIME).detail_url("x-1") == "https://mirror.example/anime/info?id=x-1"
