"""
Configuration -- Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. Project config (.sassindex/config.yaml)
  3. User config (~/.sassindex/config.yaml)
  4. Defaults

Example config.yaml:
    index:
      languages: [sass, scss]
      reconcile: exact
      evict_unmatched: true
    store:
      backend: file
      path: .sassindex/symbols
"""

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List


RECONCILE_MODES = ("exact", "substring")
STORE_BACKENDS = ("file", "memory")
DISPLAY_FORMATS = ("table", "json")
KNOWN_LANGUAGES = ("sass", "scss")

DEFAULT_LANGUAGES = ["sass"]
DEFAULT_STORE_PATH = ".sassindex/symbols"

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    return value.lower() in ('true', '1', 'yes')


def _parse_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """A config section, or {} when it is missing or not a mapping."""
    value = data.get(name)
    return value if isinstance(value, dict) else {}


@dataclass
class IndexConfig:
    """Indexing behavior."""
    languages: List[str] = field(default_factory=lambda: list(DEFAULT_LANGUAGES))
    reconcile: str = "exact"  # "exact" | "substring"
    evict_unmatched: bool = True  # Drop entries of lines edited into non-declarations

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.reconcile not in RECONCILE_MODES:
            return f"Unknown reconcile mode '{self.reconcile}'. Valid: {', '.join(RECONCILE_MODES)}"

        if not self.languages:
            return "At least one language must be indexed"

        unknown = [lang for lang in self.languages if lang not in KNOWN_LANGUAGES]
        if unknown:
            return f"Unknown language '{unknown[0]}'. Valid: {', '.join(KNOWN_LANGUAGES)}"
        return None


@dataclass
class StoreConfig:
    """Symbol table persistence."""
    backend: str = "file"  # "file" | "memory"
    path: Optional[str] = DEFAULT_STORE_PATH  # Relative to project dir

    def resolve_path(self, project_dir: Path) -> Path:
        path = Path(self.path).expanduser()
        return path if path.is_absolute() else Path(project_dir) / path

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.backend not in STORE_BACKENDS:
            return f"Unknown store backend '{self.backend}'. Valid: {', '.join(STORE_BACKENDS)}"
        if not self.path:
            return "Store path cannot be empty"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    format: str = "table"  # "table" | "json"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.format not in DISPLAY_FORMATS:
            return f"Unknown format '{self.format}'. Valid: {', '.join(DISPLAY_FORMATS)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    index: IndexConfig = field(default_factory=IndexConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def validate(self) -> Optional[str]:
        for section in (self.index, self.store, self.display):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "index": {
                "languages": list(self.index.languages),
                "reconcile": self.index.reconcile,
                "evict_unmatched": self.index.evict_unmatched,
            },
            "store": {
                "backend": self.store.backend,
                "path": self.store.path,
            },
            "display": {
                "format": self.display.format,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """
        Create from dictionary.

        Values of the wrong type are not coerced into something plausible:
        they come back as values validate() rejects.
        """
        if not isinstance(data, dict):
            data = {}
        index_data = _section(data, "index")
        store_data = _section(data, "store")
        display_data = _section(data, "display")

        languages = index_data.get("languages", DEFAULT_LANGUAGES)
        if isinstance(languages, str):
            languages = _parse_list(languages)
        elif isinstance(languages, list):
            languages = [str(language) for language in languages]
        else:
            languages = []

        evict = index_data.get("evict_unmatched", True)
        if isinstance(evict, str):
            evict = _parse_bool(evict)

        path = store_data.get("path", DEFAULT_STORE_PATH)

        return cls(
            index=IndexConfig(
                languages=languages,
                reconcile=index_data.get("reconcile", "exact"),
                evict_unmatched=bool(evict),
            ),
            store=StoreConfig(
                backend=store_data.get("backend", "file"),
                path=path if isinstance(path, str) else None,
            ),
            display=DisplayConfig(
                format=display_data.get("format", "table"),
            ),
        )


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment (SASSINDEX_LANGUAGES, SASSINDEX_RECONCILE, SASSINDEX_STORE)
      2. Project config (.sassindex/config.yaml)
      3. User config (~/.sassindex/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".sassindex"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".sassindex"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            return {}  # Ignore malformed config
        return data if isinstance(data, dict) else {}

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        if self.user_config_path.exists():
            config_data = self._merge(config_data, self._read_yaml(self.user_config_path))

        # Layer 2: Project config (higher priority)
        if self.project_config_path.exists():
            config_data = self._merge(config_data, self._read_yaml(self.project_config_path))

        # Layer 3: Environment overrides
        env_data: Dict[str, Any] = {"index": {}, "store": {}}
        if os.environ.get("SASSINDEX_LANGUAGES"):
            env_data["index"]["languages"] = _parse_list(os.environ["SASSINDEX_LANGUAGES"])
        if os.environ.get("SASSINDEX_RECONCILE"):
            env_data["index"]["reconcile"] = os.environ["SASSINDEX_RECONCILE"]
        if os.environ.get("SASSINDEX_STORE"):
            env_data["store"]["backend"] = os.environ["SASSINDEX_STORE"]
        config_data = self._merge(config_data, {k: v for k, v in env_data.items() if v})

        try:
            config = Config.from_dict(config_data)
            error = config.validate()
        except (TypeError, AttributeError, ValueError) as e:
            error = str(e)

        if error:
            # Invalid values fall back to defaults
            logger.warning(f"Ignoring invalid configuration: {error}")
            config = Config()

        self._config = config
        return self._config

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self.user_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.user_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "index.reconcile")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'index.reconcile')"

        section, setting = parts

        if section == "index":
            if setting == "languages":
                config.index.languages = _parse_list(value)
            elif setting == "reconcile":
                config.index.reconcile = value
            elif setting == "evict_unmatched":
                config.index.evict_unmatched = _parse_bool(value)
            else:
                return f"Unknown index setting: {setting}. Valid: languages, reconcile, evict_unmatched"
            error = config.index.validate()

        elif section == "store":
            if setting == "backend":
                config.store.backend = value
            elif setting == "path":
                config.store.path = value
            else:
                return f"Unknown store setting: {setting}. Valid: backend, path"
            error = config.store.validate()

        elif section == "display":
            if setting == "format":
                config.display.format = value
            else:
                return f"Unknown display setting: {setting}. Valid: format"
            error = config.display.validate()

        else:
            return f"Unknown section: {section}. Valid: index, store, display"

        if error:
            # Do not keep an invalid value in the cached config
            self._config = None
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts
        data = config.to_dict().get(section, {})
        if setting not in data:
            return None

        value = data[setting]
        if isinstance(value, list):
            return ", ".join(value)
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()

        lines = [
            "Configuration:",
            "",
            "Index:",
            f"  Languages: {', '.join(config.index.languages)}",
            f"  Reconcile: {config.index.reconcile}",
            f"  Evict unmatched: {config.index.evict_unmatched}",
            "",
            "Store:",
            f"  Backend: {config.store.backend}",
            f"  Path: {config.store.resolve_path(self.project_dir)}",
            "",
            "Display:",
            f"  Format: {config.display.format}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ]

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
