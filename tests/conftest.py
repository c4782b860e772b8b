"""
Shared pytest fixtures for the sassindex test suite.

Every test runs against an isolated user config (no ~/.sassindex) and
with the SASSINDEX_* environment cleared, so results never depend on the
machine running them.

Usage in tests:
    def test_something(scanner, make_document):
        document = make_document("$primary: #fff\\n")
        scanner.scan_file(document)
"""

import pytest

from sassindex.config import ConfigManager
from sassindex.core.documents import TextDocument
from sassindex.core.store import MemoryStore
from sassindex.services.scanner import Scanner


SAMPLE = (
    "$primary-color: #fff;\n"
    "$spacing: 4px\n"
    "\n"
    "@mixin button($color, $size)\n"
    "  color: $color\n"
    "\n"
    "$border: 1px solid\n"
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user config at a temp dir and clear config env vars."""
    user_dir = tmp_path / "home" / ".sassindex"
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", user_dir)
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", user_dir / "config.yaml")

    for name in ("SASSINDEX_LANGUAGES", "SASSINDEX_RECONCILE", "SASSINDEX_STORE", "SASSINDEX_PROJECT_PATH"):
        monkeypatch.delenv(name, raising=False)

    return user_dir


@pytest.fixture
def store():
    """Empty in-memory symbol table store."""
    return MemoryStore()


@pytest.fixture
def scanner(store):
    """Scanner with default config (sass only, exact reconcile)."""
    return Scanner(store)


@pytest.fixture
def make_document(tmp_path):
    """
    Factory for documents living under tmp_path.

    Example:
        document = make_document("$a: 1\\n", name="_theme.sass")
    """
    def _make(text: str = "", name: str = "_theme.sass", language_id=None) -> TextDocument:
        return TextDocument(str(tmp_path / name), text, language_id)
    return _make


@pytest.fixture
def sample_document(make_document):
    """Document with three variables and one mixin."""
    return make_document(SAMPLE)
