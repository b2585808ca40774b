"""Shared fixtures: temporary vaults, configuration and an in-memory link graph."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest
import yaml

from vault_navigator.config import get_vault_configuration
from vault_navigator.constants import CONFIG_ENV_VAR
from vault_navigator.data_models import NoteCache, VaultMetadata


def write_note(root: Path, relative: str, text: str) -> Path:
    """Write ``text`` to ``root/relative``, creating folders as needed."""
    target = root / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    return target


class FakeLinkGraph:
    """Link graph over plain adjacency lists; link tokens are note paths."""

    def __init__(self, edges: dict[str, list[str]]) -> None:
        self.edges = edges

    def get_file_cache(self, path: str) -> Optional[NoteCache]:
        if path not in self.edges:
            return None
        return NoteCache(links=list(self.edges[path]))

    def resolve_link(self, token: str, source_path: str) -> Optional[str]:
        return token if token in self.edges else None

    def backlink_sources(self, path: str) -> list[str]:
        return sorted(source for source, targets in self.edges.items() if path in targets)


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    path = tmp_path / "vault"
    path.mkdir()
    return path.resolve()


@pytest.fixture
def vault(vault_path: Path) -> VaultMetadata:
    return VaultMetadata(
        name="test",
        path=vault_path,
        description="Test vault",
        exists=True,
    )


@pytest.fixture
def configured_vault(vault: VaultMetadata, tmp_path: Path, monkeypatch):
    """Point the server configuration at ``vault`` for tool-level tests."""
    config_path = tmp_path / "vaults.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "default": "test",
                "vaults": {"test": {"path": str(vault.path), "description": "Test vault"}},
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_path))
    get_vault_configuration.cache_clear()
    yield vault
    get_vault_configuration.cache_clear()


@pytest.fixture
def make_graph():
    return FakeLinkGraph
