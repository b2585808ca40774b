"""Reading note content and handling frontmatter blocks."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import frontmatter
import yaml

from vault_navigator.core.vault_operations import (
    classify_entry,
    find_similar_paths,
    resolve_note_path,
)
from vault_navigator.data_models import EntryKind, VaultMetadata
from vault_navigator.errors import NoteNotFoundError, NoteReadError, PathIsFolderError

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"^---\n([\s\S]*?)\n---\n")


# ==============================================================================
# FRONTMATTER
# ==============================================================================


def extract_frontmatter(text: str) -> Optional[str]:
    """Return the raw YAML between a leading ``---`` line and the next ``---`` line."""
    match = FRONTMATTER_PATTERN.match(text)
    return match.group(1) if match else None


def remove_frontmatter(text: str) -> str:
    """Strip a leading frontmatter block; text without one is returned unchanged."""
    return FRONTMATTER_PATTERN.sub("", text, count=1)


def parse_frontmatter(text: str) -> dict[str, Any]:
    """Parse the frontmatter block of ``text`` into a dictionary.

    Invalid YAML is not an error for read paths: the note simply has no
    usable frontmatter.
    """
    if not text or not text.startswith("---"):
        return {}

    try:
        post = frontmatter.loads(text)
    except (yaml.YAMLError, ValueError) as exc:
        logger.debug("Ignoring unparsable frontmatter: %s", exc)
        return {}

    def _convert(value: Any) -> Any:
        if isinstance(value, Mapping):
            return {str(k): _convert(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_convert(item) for item in value]
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return value

    return {str(key): _convert(value) for key, value in dict(post.metadata or {}).items()}


# ==============================================================================
# FILE ACCESS
# ==============================================================================


def format_size(size: int) -> str:
    """Render a byte count as ``B``/``KB``/``MB`` with 1024 thresholds."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _isoformat(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def note_stats(note_path: Path) -> dict[str, Any]:
    """Extract filesystem metadata for a note in a cross-platform friendly way.

    Args:
        note_path: Absolute path to the markdown file.

    Returns:
        A dictionary with ``created`` and ``modified`` ISO timestamps (UTC) and
        the file ``size`` in bytes.
    """
    stat = note_path.stat()
    created = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return {
        "created": _isoformat(created),
        "modified": _isoformat(stat.st_mtime),
        "size": stat.st_size,
    }


def require_note(vault: VaultMetadata, path: str) -> Path:
    """Return the absolute path of an existing note or raise a descriptive error.

    Raises:
        NoteNotFoundError: Nothing exists at ``path``; carries similar paths.
        PathIsFolderError: ``path`` names a folder.
    """
    kind = classify_entry(vault, path)
    if kind is EntryKind.MISSING:
        raise NoteNotFoundError(
            f"Note not found: \"{path}\"",
            suggestions=find_similar_paths(vault, path),
        )
    if kind is EntryKind.FOLDER:
        raise PathIsFolderError(f"Path is a folder, not a note: \"{path}\"")
    return resolve_note_path(vault, path)


def read_note_text(vault: VaultMetadata, path: str) -> str:
    """Read the raw text of a note.

    Args:
        vault: Vault metadata.
        path: Vault-relative note path including the extension.

    Returns:
        The complete file contents.

    Raises:
        NoteNotFoundError: If the vault has no note at ``path``.
        PathIsFolderError: If ``path`` is a folder.
        NoteReadError: If the file exists but cannot be read or decoded.
    """
    note_path = require_note(vault, path)
    try:
        return note_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise NoteReadError(f"Failed to read note \"{path}\": {exc}") from exc
