"""
Language Registry -- Routes files to language-specific configurations.

Maps file extensions and editor language ids to LanguageConfig instances.
Enables adding stylesheet dialects without modifying the scanner.

Usage:
    registry = LanguageRegistry()
    registry.register(SASS_CONFIG)

    language_id = registry.language_for(Path("theme/_colors.sass"))
    config = registry.get_config_by_id(language_id)
    # Returns SASS_CONFIG
"""

from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from .config import LanguageConfig


class LanguageRegistry:
    """
    Registry of language configurations.

    Maps file extensions and language ids to LanguageConfig instances.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._configs: Dict[str, LanguageConfig] = {}  # language_id -> config
        self._extension_map: Dict[str, str] = {}  # ext -> language_id

    def register(self, config: LanguageConfig) -> None:
        """
        Register a language configuration.

        Args:
            config: LanguageConfig to register

        Raises:
            ValueError: If extension already registered to different config
        """
        for ext in config.extensions:
            existing = self._extension_map.get(ext.lower())
            if existing is not None and existing != config.language_id:
                raise ValueError(
                    f"Extension {ext} already registered to {existing}, "
                    f"cannot register to {config.language_id}"
                )

        self._configs[config.language_id] = config
        for ext in config.extensions:
            self._extension_map[ext.lower()] = config.language_id

    def language_for(self, file_path: Union[str, Path]) -> Optional[str]:
        """Language id for a file based on its extension."""
        return self._extension_map.get(Path(file_path).suffix.lower())

    def get_config_by_id(self, language_id: str) -> Optional[LanguageConfig]:
        return self._configs.get(language_id)

    def extensions_for(self, language_ids: List[str]) -> Set[str]:
        """Extensions belonging to the given language ids."""
        return {
            ext for ext, language_id in self._extension_map.items()
            if language_id in language_ids
        }


def create_default_registry() -> LanguageRegistry:
    """Registry with the built-in stylesheet dialects."""
    from .languages import SASS_CONFIG, SCSS_CONFIG

    registry = LanguageRegistry()
    registry.register(SASS_CONFIG)
    registry.register(SCSS_CONFIG)
    return registry
