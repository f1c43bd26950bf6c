import json

import pytest

from anisources.core.config_manager import ConfigManager
from anisources.core.exceptions import ConfigurationError
from anisources.core.models import SourceId


def test_defaults_are_written(config_manager):
    assert (config_manager.config_dir / "settings.json").exists()
    assert (config_manager.config_dir / "sources.json").exists()

    settings = config_manager.settings
    assert settings.extraction.default_source == "AnimeWorld"
    assert settings.extraction.fallback_to_default is False
    assert settings.extraction.max_results == 0
    assert settings.logging.level == "WARNING"
    assert len(config_manager.get_enabled_sources()) == len(SourceId)


def test_update_setting_persists(config_manager):
    config_manager.update_setting("ui.table_style", "grid")

    reloaded = ConfigManager(config_manager.config_dir)
    assert reloaded.settings.ui.table_style == "grid"
    assert reloaded.get_setting("ui.table_style") == "grid"


def test_update_setting_rejects_unknown_keys(config_manager):
    with pytest.raises(ConfigurationError):
        config_manager.update_setting("ui.colour", "red")
    with pytest.raises(ConfigurationError):
        config_manager.update_setting("nothing.here", 1)


def test_update_setting_rejects_invalid_values(config_manager):
    with pytest.raises(ConfigurationError):
        config_manager.update_setting("extraction.max_results", -1)
    with pytest.raises(ConfigurationError):
        config_manager.update_setting("extraction.default_source", "Crunchyroll")

    assert config_manager.settings.extraction.max_results == 0


def test_default_source_is_normalized(config_manager):
    config_manager.update_setting("extraction.default_source", "hianime")
    assert config_manager.settings.extraction.default_source == "HiAnime"


def test_logging_level_is_upper_cased(config_manager):
    config_manager.update_setting("logging.level", "debug")
    assert config_manager.settings.logging.level == "DEBUG"


def test_get_setting_default(config_manager):
    assert config_manager.get_setting("extraction.missing", "fallback") == "fallback"
    assert config_manager.get_setting("extraction.fuzzy_search") is True


def test_corrupted_file_is_backed_up(tmp_path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.json").write_text("{not json", encoding="utf-8")

    manager = ConfigManager(config_dir)

    assert (config_dir / "settings.json.backup").read_text(encoding="utf-8") == "{not json"
    assert manager.settings.extraction.default_source == "AnimeWorld"
    assert json.loads((config_dir / "settings.json").read_text(encoding="utf-8"))["ui"]["show_images"] is False


def test_invalid_values_in_file_are_backed_up(tmp_path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.json").write_text(
        json.dumps({"extraction": {"default_source": "Crunchyroll"}}), encoding="utf-8"
    )

    manager = ConfigManager(config_dir)

    assert (config_dir / "settings.json.backup").exists()
    assert manager.settings.extraction.default_source == "AnimeWorld"


def test_enable_and_disable_sources(config_manager):
    config_manager.disable_source("ZoroTv")
    assert "ZoroTv" not in config_manager.get_enabled_sources()

    config_manager.enable_source("ZoroTv")
    assert "ZoroTv" in config_manager.get_enabled_sources()


def test_invalid_source_config(config_manager):
    with pytest.raises(ConfigurationError):
        config_manager.update_source_config("ZoroTv", {"priority": 0})


def test_get_source_config(config_manager):
    assert config_manager.get_source_config("HiAnime") == {}
    config_manager.update_source_config("HiAnime", {"config": {"api_base": "https://mirror.example"}})
    assert config_manager.get_source_config("HiAnime") == {"api_base": "https://mirror.example"}
    assert config_manager.get_source_config("Crunchyroll") == {}


def test_reset_and_reload(config_manager):
    config_manager.update_setting("extraction.max_results", 5)
    config_manager.disable_source("GoGoAnime")

    config_manager.reset_to_defaults()
    assert config_manager.settings.extraction.max_results == 0
    assert "GoGoAnime" in config_manager.get_enabled_sources()

    config_manager.update_setting("ui.show_images", True)
    config_manager.reload_configuration()
    assert config_manager.settings.ui.show_images is True


def test_source_names_match_case_insensitively(config_manager):
    config_manager.disable_source("gogoanime")

    assert "gogoanime" not in config_manager.sources.sources
    assert config_manager.sources.get_source("GOGOANIME").enabled is False
