import pytest

from anisources.core.config_manager import ConfigManager
from anisources.core.extractor import Extractor
from anisources.core.registry import SourceRegistry


@pytest.fixture(scope="session")
def registry():
    return SourceRegistry()


@pytest.fixture
def extractor(registry):
    return Extractor(registry)


@pytest.fixture
def config_manager(tmp_path):
    return ConfigManager(tmp_path / "config")


@pytest.fixture
def configured_extractor(config_manager):
    return Extractor(SourceRegistry(config_manager))
