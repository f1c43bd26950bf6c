import json

import pytest
from typer.testing import CliRunner

from anisources import __version__
from anisources.cli.main import EXIT_FAILED, EXIT_UNKNOWN_SOURCE, app
from anisources.core.models import SourceId

from pages import FEATURED_PAGES, SEARCH_PAGES


runner = CliRunner()


@pytest.fixture
def invoke(tmp_path):
    config_dir = tmp_path / "config"

    def run(*args, input=None):
        return runner.invoke(
            app,
            ["--config-dir", str(config_dir), *args],
            input=input,
            env={"COLUMNS": "200"},
        )

    return run


@pytest.fixture
def featured_file(tmp_path):
    path = tmp_path / "featured.html"
    path.write_text(FEATURED_PAGES[SourceId.GOGOANIME], encoding="utf-8")
    return path


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_featured_table(invoke, featured_file):
    result = invoke("featured", "GoGoAnime", str(featured_file))

    assert result.exit_code == 0
    assert "Naruto" in result.stdout
    assert "Bleach (Dub)" in result.stdout


def test_featured_json(invoke, featured_file):
    result = invoke("featured", "gogoanime", str(featured_file), "--json")

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["status"] == "ok"
    assert [item["title"] for item in payload["value"]] == ["Naruto", "Bleach (Dub)"]


def test_featured_from_stdin(invoke):
    result = invoke("featured", "GoGoAnime", "-", "--json", input=FEATURED_PAGES[SourceId.GOGOANIME])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["value"][0]["href"] == "/category/naruto"


def test_unknown_source(invoke, featured_file):
    result = invoke("featured", "Crunchyroll", str(featured_file))

    assert result.exit_code == EXIT_UNKNOWN_SOURCE


def test_missing_file(invoke, tmp_path):
    result = invoke("featured", "GoGoAnime", str(tmp_path / "missing.html"))

    assert result.exit_code == EXIT_FAILED


def test_failed_result_exits_non_zero(invoke, tmp_path):
    path = tmp_path / "search.json"
    path.write_text("<html>not json</html>", encoding="utf-8")

    result = invoke("search", "HiAnime", str(path), "--json")

    assert result.exit_code == EXIT_FAILED
    assert '"malformed_json"' in result.stdout


def test_empty_result_exits_zero(invoke, tmp_path):
    path = tmp_path / "featured.html"
    path.write_text("<html><body></body></html>", encoding="utf-8")

    result = invoke("featured", "GoGoAnime", str(path))

    assert result.exit_code == 0


def test_search_with_filter(invoke, tmp_path):
    path = tmp_path / "search.html"
    path.write_text(SEARCH_PAGES[SourceId.GOGOANIME], encoding="utf-8")

    result = invoke("search", "GoGoAnime", str(path), "--filter", "dub", "--json")

    assert result.exit_code == 0
    assert [item["title"] for item in json.loads(result.stdout)["value"]] == ["Naruto (Dub)"]


def test_episodes(invoke, tmp_path):
    path = tmp_path / "detail.html"
    path.write_text('<ul id="episode_page"><li><a href="#">0-2</a></li></ul>', encoding="utf-8")

    result = invoke("episodes", "GoGoAnime", str(path), "--href", "/naruto", "--json")

    assert result.exit_code == 0
    assert [e["href"] for e in json.loads(result.stdout)["value"]] == [
        "/naruto-episode-1",
        "/naruto-episode-2",
    ]


def test_search_url(invoke):
    result = invoke("search-url", "GoGoAnime", "one piece")

    assert result.exit_code == 0
    assert result.stdout.strip() == "https://anitaku.pe/search.html?keyword=one+piece"


def test_search_url_unsupported(invoke):
    result = invoke("search-url", "ZoroTv", "naruto")

    assert result.exit_code == EXIT_FAILED


def test_sources(invoke):
    result = invoke("sources")

    assert result.exit_code == 0
    for source_id in SourceId:
        assert source_id.value in result.stdout


def test_info(invoke, tmp_path):
    result = invoke("info")

    assert result.exit_code == 0
    assert "AnimeWorld" in result.stdout
    assert (tmp_path / "config" / "settings.json").exists()


def test_search_url_for_catalogue_sources(invoke):
    result = invoke("search-url", "AniWorld", "naruto")

    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == "https://aniworld.to/animes"
    assert "no server-side search" in result.stdout


def test_search_warns_about_unoffered_filter(invoke, tmp_path):
    path = tmp_path / "search.html"
    path.write_text(SEARCH_PAGES[SourceId.GOGOANIME], encoding="utf-8")

    result = invoke("search", "GoGoAnime", str(path), "--filter", "ita")

    assert result.exit_code == 0
    assert "does not offer" in result.stdout
