"""
Source Registry - Discovery and resolution of source adapters.

This module discovers every BaseSource subclass in the anisources.sources
package, instantiates one adapter per SourceId with its configuration,
and resolves identifiers and stored preferences to adapters.
"""

import importlib
import inspect
import logging
import pkgutil
from typing import Dict, List, Optional, Type, Union

from anisources.core.config_manager import ConfigManager
from anisources.core.exceptions import AniSourcesError, UnknownSourceError
from anisources.core.models import SourceId
from anisources.sources.base import BaseSource


logger = logging.getLogger(__name__)

SOURCES_PACKAGE = "anisources.sources"

# Modules of the sources package that hold no adapters
NON_ADAPTER_MODULES = {"base", "common"}


def discover_source_classes(package: str = SOURCES_PACKAGE) -> List[Type[BaseSource]]:
    """
    Import every adapter module in a package and collect its BaseSource subclasses.
    
    Args:
        package: Dotted name of the package to scan
        
    Returns:
        Concrete adapter classes in module order
    """
    root = importlib.import_module(package)
    classes: List[Type[BaseSource]] = []
    
    for module_info in sorted(pkgutil.iter_modules(root.__path__), key=lambda m: m.name):
        if module_info.name in NON_ADAPTER_MODULES or module_info.name.startswith("_"):
            continue
        
        module = importlib.import_module(f"{package}.{module_info.name}")
        
        for name, obj in inspect.getmembers(module, inspect.isclass):
            if (issubclass(obj, BaseSource) and
                obj is not BaseSource and
                obj.__module__ == module.__name__ and
                not inspect.isabstract(obj)):
                
                classes.append(obj)
                logger.debug(f"Discovered source: {module_info.name} ({obj.__name__})")
    
    return classes


class SourceRegistry:
    """
    Maps every SourceId to exactly one adapter instance.
    
    Adapters are built once at construction and never mutated, so a
    registry can be shared freely.
    """
    
    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        source_classes: Optional[List[Type[BaseSource]]] = None
    ):
        """
        Initialize the registry.
        
        Args:
            config_manager: Supplies per-source config and preferences.
                            Built-in defaults apply when omitted.
            source_classes: Adapter classes to register instead of discovering them
            
        Raises:
            AniSourcesError: If a SourceId has no adapter or two adapters claim one
        """
        self.config_manager = config_manager
        self._adapters: Dict[SourceId, BaseSource] = {}
        
        classes = source_classes if source_classes is not None else discover_source_classes()
        
        for source_class in classes:
            adapter = source_class()
            source_id = adapter.source_id
            
            if source_id in self._adapters:
                raise AniSourcesError(
                    f"Duplicate adapter for {source_id}: "
                    f"{self._adapters[source_id].__class__.__name__} and {source_class.__name__}"
                )
            
            if config_manager is not None:
                adapter = source_class(config_manager.get_source_config(source_id.value))
            
            self._adapters[source_id] = adapter
        
        missing = [source_id.value for source_id in SourceId if source_id not in self._adapters]
        if missing:
            raise AniSourcesError(
                f"No adapter registered for: {', '.join(missing)}",
                details=missing
            )
        
        logger.debug(f"Registered {len(self._adapters)} sources")
    
    def resolve(self, source_id: Union[str, SourceId]) -> BaseSource:
        """
        Get the adapter for a source identifier.
        
        Raises:
            UnknownSourceError: If the identifier names no source
        """
        return self._adapters[SourceId.parse(source_id)]
    
    @property
    def default_source(self) -> SourceId:
        """Configured default source."""
        if self.config_manager is None:
            return SourceId.ANIMEWORLD
        return SourceId.parse(self.config_manager.settings.extraction.default_source)
    
    def resolve_preference(self, stored: Optional[str]) -> BaseSource:
        """
        Resolve a stored source preference.
        
        A missing or blank preference resolves to the default source. An
        unknown name raises unless extraction.fallback_to_default is set,
        in which case it falls back to the default with a warning.
        
        Raises:
            UnknownSourceError: If the preference names no source
        """
        if stored is None or not str(stored).strip():
            return self.resolve(self.default_source)
        
        try:
            return self.resolve(stored)
        except UnknownSourceError:
            if not self._fallback_enabled():
                raise
            logger.warning(f"Unknown source preference {stored!r}, falling back to {self.default_source}")
            return self.resolve(self.default_source)
    
    def _fallback_enabled(self) -> bool:
        if self.config_manager is None:
            return False
        return self.config_manager.settings.extraction.fallback_to_default
    
    def available_sources(self) -> List[BaseSource]:
        """All adapters, in SourceId declaration order."""
        return [self._adapters[source_id] for source_id in SourceId]
    
    def enabled_sources(self) -> List[BaseSource]:
        """Adapters enabled in the sources configuration, ordered by priority."""
        if self.config_manager is None:
            return self.available_sources()
        
        enabled = []
        for name in self.config_manager.get_enabled_sources():
            try:
                enabled.append(self.resolve(name))
            except UnknownSourceError:
                logger.warning(f"Ignoring unknown source in configuration: {name!r}")
        return enabled
    
    def __contains__(self, source_id: object) -> bool:
        try:
            SourceId.parse(source_id)
        except UnknownSourceError:
            return False
        return True
    
    def __len__(self) -> int:
        return len(self._adapters)


# Export registry
__all__ = ["SourceRegistry", "discover_source_classes"]
