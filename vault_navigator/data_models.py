"""Data models for vault configuration, note metadata and tool results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from vault_navigator.errors import InvalidParameterError


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool


@dataclass(frozen=True)
class ServerSettings:
    """Transport settings for the MCP server."""

    transport: str
    host: str
    port: int


class VaultConfiguration:
    """Holds vault metadata and default resolution helpers.

    Loaded lazily from vaults.yaml.
    Provides vault lookup by name and the server transport settings.
    """

    def __init__(
        self,
        default_vault: str,
        vaults: dict[str, VaultMetadata],
        server: ServerSettings,
    ) -> None:
        self.default_vault = default_vault
        self.vaults = vaults
        self.server = server

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Args:
            name: The name of the vault to retrieve.

        Returns:
            VaultMetadata for the requested vault.

        Raises:
            InvalidParameterError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.vaults))
            raise InvalidParameterError(f"Unknown vault '{name}'. Available vaults: {available}") from exc


class EntryKind(Enum):
    """What a vault-relative path currently points at."""

    FILE = "file"
    FOLDER = "folder"
    MISSING = "missing"


@dataclass
class NoteCache:
    """Parsed metadata for a single note.

    ``links`` and ``embeds`` hold raw link tokens in discovery order; they are
    resolved to vault paths by the index that produced the cache.
    """

    tags: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)
    embeds: list[str] = field(default_factory=list)
    headings: list[dict[str, Any]] = field(default_factory=list)
    frontmatter: dict[str, Any] = field(default_factory=dict)

    def as_payload(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RelatedNote:
    path: str
    title: str
    snippet: Optional[str] = None

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"path": self.path, "title": self.title}
        if self.snippet is not None:
            payload["snippet"] = self.snippet
        return payload


@dataclass
class SearchResult:
    """A ranked search hit. ``score`` never leaves the ranker."""

    path: str
    title: str
    snippet: str
    created: str
    modified: str
    size: int
    score: int = 0

    def as_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        payload.pop("score")
        return payload
