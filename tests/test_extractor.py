import json

import pytest

from anisources.core.exceptions import UnknownSourceError
from anisources.core.models import DocumentKind, ResultReason, ResultStatus, SourceId

from pages import FEATURED_PAGES, IRRELEVANT_HTML


@pytest.mark.parametrize("raw", ["", "   \n\t", b"", b"  "])
def test_blank_documents_have_no_content(extractor, raw):
    result = extractor.extract_featured(SourceId.ANIMEWORLD, raw)

    assert result.status == ResultStatus.EMPTY
    assert result.reason == ResultReason.NO_CONTENT


def test_malformed_json_fails(extractor):
    result = extractor.extract_search(SourceId.HIANIME, "{not json", query="x")

    assert result.is_failed
    assert result.reason == ResultReason.MALFORMED_JSON
    assert result.retryable


def test_unknown_source_raises(extractor):
    with pytest.raises(UnknownSourceError):
        extractor.extract_featured("Crunchyroll", IRRELEVANT_HTML)


def test_missing_container_is_selector_not_found(extractor):
    result = extractor.extract_featured(SourceId.ANIMEWORLD, IRRELEVANT_HTML)

    assert result.is_empty
    assert result.reason == ResultReason.SELECTOR_NOT_FOUND
    assert not result.retryable


def test_adapter_errors_become_extraction_errors(extractor, registry, monkeypatch):
    def explode(doc):
        raise RuntimeError("boom")

    monkeypatch.setattr(registry.resolve(SourceId.GOGOANIME), "parse_featured", explode)
    result = extractor.extract_featured(SourceId.GOGOANIME, FEATURED_PAGES[SourceId.GOGOANIME])

    assert result.is_failed
    assert result.reason == ResultReason.EXTRACTION_ERROR
    assert "boom" in result.message


def test_bytes_documents(extractor):
    raw = FEATURED_PAGES[SourceId.GOGOANIME].encode("utf-8")
    result = extractor.extract_featured(SourceId.GOGOANIME, raw)

    assert result.is_ok
    assert len(result.items) == 2


def test_extract_dispatches_on_kind(extractor):
    result = extractor.extract("gogoanime", FEATURED_PAGES[SourceId.GOGOANIME], "featured")

    assert result.is_ok
    assert result.value[0].source == SourceId.GOGOANIME


def test_detail_skips_capability_check(extractor):
    result = extractor.extract(SourceId.HANASHI, IRRELEVANT_HTML, DocumentKind.DETAIL)

    assert result.is_empty
    assert result.reason == ResultReason.NO_ITEMS


def test_max_results_from_settings(config_manager, configured_extractor):
    config_manager.update_setting("extraction.max_results", 1)
    result = configured_extractor.extract_featured(SourceId.GOGOANIME, FEATURED_PAGES[SourceId.GOGOANIME])

    assert len(result.items) == 1
    assert result.items[0].title == "Naruto"


def test_results_serialize(extractor):
    result = extractor.extract_featured(SourceId.GOGOANIME, FEATURED_PAGES[SourceId.GOGOANIME])
    payload = json.loads(result.model_dump_json())

    assert payload["status"] == "ok"
    assert payload["value"][0]["source"] == "GoGoAnime"
    assert payload["reason"] is None
