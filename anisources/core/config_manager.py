"""
Configuration Manager - JSON persistence for settings and source tables.

Two files live in the configuration directory: settings.json holds the
extraction, display and logging preferences, sources.json holds the
per-source enable flag, priority and adapter options. Both are validated
with pydantic on every load and every change.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from anisources.core.config_defaults import get_default_settings, get_default_sources
from anisources.core.config_schemas import AppSettings, SourceConfig, SourcesConfig
from anisources.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def _parent_of(data: Dict[str, Any], key_path: str) -> tuple:
    """
    Walk a dotted path down to the dictionary holding its last key.

    Returns:
        (parent dict, final key)

    Raises:
        ConfigurationError: If any segment of the path does not exist
    """
    keys: List[str] = key_path.split('.')
    node: Any = data
    for key in keys[:-1]:
        if not isinstance(node, dict) or key not in node:
            raise ConfigurationError(f"Invalid setting path: {key_path}")
        node = node[key]

    if not isinstance(node, dict) or keys[-1] not in node:
        raise ConfigurationError(f"Invalid setting key: {keys[-1]}")
    return node, keys[-1]


class ConfigManager:
    """
    Loads, validates and saves the two configuration files.

    Reads and writes go through a lock. A file that fails to parse or
    validate is moved aside to *.json.backup and recreated from defaults.
    """

    SETTINGS_FILE = "settings.json"
    SOURCES_FILE = "sources.json"

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            config_dir: Where settings.json and sources.json live; './config' when omitted
        """
        self.config_dir = Path(config_dir or "config")
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._settings_file = self.config_dir / self.SETTINGS_FILE
        self._sources_file = self.config_dir / self.SOURCES_FILE

        self._lock = Lock()
        self._settings: Optional[AppSettings] = None
        self._sources: Optional[SourcesConfig] = None

        self._load_configurations()

    def _load_configurations(self) -> None:
        try:
            self._settings = self._load_file(self._settings_file, AppSettings, get_default_settings)
            self._sources = self._load_file(self._sources_file, SourcesConfig, get_default_sources)
        except OSError as e:
            logger.error(f"Cannot read configuration in {self.config_dir}: {e}")
            raise ConfigurationError(
                f"Configuration loading failed: {e}",
                config_path=str(self.config_dir)
            ) from e
        logger.info(f"Configuration loaded from {self.config_dir}")

    def _load_file(self, path: Path, model: Type[BaseModel], default_factory: Callable[[], BaseModel]) -> Any:
        """Validate one file, writing defaults when it is missing or unusable."""
        if not path.exists():
            logger.info(f"Creating default {path.name}")
            value = default_factory()
            self._save_file(path, value)
            return value

        try:
            with open(path, 'r', encoding='utf-8') as f:
                return model.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            backup_path = path.with_suffix('.json.backup')
            logger.warning(f"{path.name} is invalid, moved to {backup_path.name}: {e}")
            path.replace(backup_path)

        value = default_factory()
        self._save_file(path, value)
        return value

    def _save_file(self, path: Path, value: BaseModel) -> None:
        """Atomic write through a .tmp sibling."""
        temp_file = path.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(value.model_dump(mode='json'), f, indent=2, ensure_ascii=False)
            temp_file.replace(path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise ConfigurationError(f"Failed to save {path.name}: {e}", config_path=str(path)) from e
        logger.debug(f"Wrote {path}")

    @property
    def settings(self) -> AppSettings:
        with self._lock:
            if self._settings is None:
                self._settings = self._load_file(self._settings_file, AppSettings, get_default_settings)
            return self._settings

    @property
    def sources(self) -> SourcesConfig:
        with self._lock:
            if self._sources is None:
                self._sources = self._load_file(self._sources_file, SourcesConfig, get_default_sources)
            return self._sources

    def update_setting(self, key_path: str, value: Any) -> None:
        """
        Change one setting addressed as 'section.key' and persist it.

        Raises:
            ConfigurationError: If the path does not exist or the value fails validation
        """
        with self._lock:
            if self._settings is None:
                raise ConfigurationError("Settings not loaded")

            data = self._settings.model_dump()
            parent, key = _parent_of(data, key_path)
            parent[key] = value

            try:
                updated = AppSettings.model_validate(data)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid setting value for {key_path}: {value!r}",
                    config_path=str(self._settings_file),
                    details=str(e)
                ) from e

            self._save_file(self._settings_file, updated)
            self._settings = updated
            logger.info(f"{key_path} set to {value!r}")

    def get_setting(self, key_path: str, default: Any = None) -> Any:
        """Value of a 'section.key' setting, or default when the path does not exist."""
        with self._lock:
            if self._settings is None:
                return default
            try:
                parent, key = _parent_of(self._settings.model_dump(), key_path)
            except ConfigurationError:
                return default
            return parent[key]

    def update_source_config(self, source_name: str, config: Dict[str, Any]) -> None:
        """
        Merge fields into a source entry and persist the table.

        Args:
            source_name: Source display name, e.g. 'GoGoAnime'
            config: Any of 'enabled', 'priority' and 'config'

        Raises:
            ConfigurationError: If the merged entry fails validation
        """
        with self._lock:
            if self._sources is None:
                raise ConfigurationError("Sources configuration not loaded")

            data = self._sources.model_dump()
            source_name = next(
                (key for key in data['sources'] if key.lower() == source_name.lower()),
                source_name
            )
            data['sources'].setdefault(source_name, {}).update(config)

            try:
                updated = SourcesConfig.model_validate(data)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid source configuration for {source_name}",
                    config_path=str(self._sources_file),
                    details=str(e)
                ) from e

            self._save_file(self._sources_file, updated)
            self._sources = updated
            logger.info(f"Updated source entry {source_name}: {config}")

    def enable_source(self, source_name: str) -> None:
        self.update_source_config(source_name, {"enabled": True})

    def disable_source(self, source_name: str) -> None:
        self.update_source_config(source_name, {"enabled": False})

    def get_source_config(self, source_name: str) -> Dict[str, Any]:
        """Adapter options of a source; empty for unknown sources."""
        entry = self.sources.get_source(source_name)
        return dict(entry.config) if entry else {}

    def get_enabled_sources(self) -> Dict[str, SourceConfig]:
        """Enabled source entries, lowest priority number first."""
        return self.sources.get_enabled_sources()

    def reload_configuration(self) -> None:
        """Drop the cached models and read both files again."""
        with self._lock:
            self._settings = None
            self._sources = None
            self._load_configurations()

    def reset_to_defaults(self) -> None:
        """Overwrite both files with defaults."""
        with self._lock:
            logger.warning(f"Resetting configuration in {self.config_dir}")
            self._settings = get_default_settings()
            self._sources = get_default_sources()
            self._save_file(self._settings_file, self._settings)
            self._save_file(self._sources_file, self._sources)


# Export configuration manager
__all__ = ["ConfigManager"]
