"""Core business logic for reading, creating and appending to notes."""

from __future__ import annotations

import logging
import webbrowser
from pathlib import PurePosixPath
from typing import Any, Optional
from urllib.parse import quote

from vault_navigator.constants import APPEND_POSITIONS, APPEND_PREVIEW_LENGTH, PREVIEW_LENGTH
from vault_navigator.core.content import (
    FRONTMATTER_PATTERN,
    format_size,
    note_stats,
    read_note_text,
    require_note,
)
from vault_navigator.core.vault_index import parse_note
from vault_navigator.core.vault_operations import (
    classify_entry,
    ensure_folder,
    ensure_note_extension,
    ensure_vault_ready,
    resolve_note_path,
    validate_vault_path,
)
from vault_navigator.data_models import EntryKind, VaultMetadata
from vault_navigator.errors import InvalidParameterError, NoteExistsError, PathIsFolderError

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _combine_with_newline(left: str, right: str) -> str:
    """Concatenate two strings, inserting a single newline between them when needed.

    Args:
        left: Text that comes first.
        right: Text that comes second.

    Returns:
        The combined text with at most one inserted newline separating the segments.
    """
    if not left:
        return right
    if not right:
        return left
    if not left.endswith("\n") and not right.startswith("\n"):
        return f"{left}\n{right}"
    return left + right


def _join(left: str, right: str, ensure_newline: bool) -> str:
    return _combine_with_newline(left, right) if ensure_newline else left + right


def splice_content(existing: str, content: str, position: str, ensure_newline: bool = True) -> str:
    """Insert ``content`` into ``existing`` at ``position``.

    ``after_frontmatter`` places the content directly below a leading
    frontmatter block, or at the very start when the note has none.
    """
    if position == "end":
        return _join(existing, content, ensure_newline)
    if position == "start":
        return _join(content, existing, ensure_newline)
    if position == "after_frontmatter":
        match = FRONTMATTER_PATTERN.match(existing)
        if match is None:
            return _join(content, existing, ensure_newline)
        head, body = existing[: match.end()], existing[match.end():]
        return head + _join(content, body, ensure_newline)
    raise InvalidParameterError(
        f"Invalid position '{position}'. Expected one of: {', '.join(APPEND_POSITIONS)}"
    )


def _open_in_obsidian(vault: VaultMetadata, path: str) -> bool:
    uri = f"obsidian://open?vault={quote(vault.path.name)}&file={quote(path)}"
    try:
        return webbrowser.open(uri)
    except webbrowser.Error as exc:
        logger.warning("Could not open '%s' in Obsidian: %s", path, exc)
        return False


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


def get_note(
    vault: VaultMetadata,
    path: str,
    preview: bool = False,
    include_metadata: bool = True,
) -> dict[str, Any]:
    """Read a note together with its file statistics and parsed metadata.

    Args:
        vault: Vault metadata.
        path: Vault-relative note path including the ``.md`` extension.
        preview: Return only the first 500 characters of the content.
        include_metadata: Attach tags, links, embeds, headings and frontmatter.

    Returns:
        A dictionary with the path, names, content, size and timestamps, plus
        ``truncated``/``total_length`` in preview mode and ``metadata`` when requested.

    Raises:
        NoteNotFoundError: If the note does not exist.
        PathIsFolderError: If ``path`` is a folder.
        NoteReadError: If the file cannot be read.
    """
    ensure_vault_ready(vault)
    content = read_note_text(vault, path)
    stats = note_stats(resolve_note_path(vault, path))
    name = PurePosixPath(path).name

    payload: dict[str, Any] = {
        "path": path,
        "name": name,
        "title": PurePosixPath(path).stem,
        "content": content,
        "size": stats["size"],
        "size_formatted": format_size(stats["size"]),
        "created": stats["created"],
        "modified": stats["modified"],
    }

    if preview:
        truncated = len(content) > PREVIEW_LENGTH
        payload["content"] = content[:PREVIEW_LENGTH] + ("..." if truncated else "")
        payload["truncated"] = truncated
        payload["total_length"] = len(content)

    if include_metadata:
        payload["metadata"] = parse_note(content).as_payload()

    return payload


def create_note(
    vault: VaultMetadata,
    filename: str,
    content: str,
    folder: Optional[str] = None,
    open_after: bool = False,
    overwrite: bool = False,
) -> dict[str, Any]:
    """Create a markdown note, optionally inside a folder.

    Args:
        vault: Vault metadata describing where the note should reside.
        filename: Note file name; ``.md`` is appended when missing.
        content: Markdown body to write (may be empty).
        folder: Folder relative to the vault root; created when missing.
        open_after: Open the note in Obsidian once written.
        overwrite: Replace an existing note instead of failing.

    Returns:
        A dictionary describing the written note.

    Raises:
        InvalidPathError: If the composed path is absolute or attempts traversal.
        NoteExistsError: If something already exists at the path and ``overwrite`` is off.
        PathIsFolderError: If ``overwrite`` is set and the path is a folder.
        FolderCreateError: If the parent folder cannot be created.
    """
    ensure_vault_ready(vault)
    folder_name = (folder or "").strip().rstrip("/")
    name = ensure_note_extension(filename.strip())
    full_path = validate_vault_path(f"{folder_name}/{name}" if folder_name else name)

    kind = classify_entry(vault, full_path)
    if kind is not EntryKind.MISSING and not overwrite:
        raise NoteExistsError(
            f"File already exists: \"{full_path}\"",
            suggestions=["Set overwrite=true to replace existing file", "Use a different filename"],
        )
    if kind is EntryKind.FOLDER:
        raise PathIsFolderError(
            f"Path exists but is a folder: \"{full_path}\"",
            suggestions=["Use a different filename"],
        )

    parent = PurePosixPath(full_path).parent.as_posix()
    if parent != ".":
        ensure_folder(vault, parent)

    target_path = resolve_note_path(vault, full_path)
    target_path.write_text(content, encoding="utf-8")
    overwritten = kind is EntryKind.FILE
    logger.info(
        "%s note '%s' in vault '%s'",
        "Overwrote" if overwritten else "Created",
        full_path,
        vault.name,
    )

    opened = _open_in_obsidian(vault, full_path) if open_after else False
    stats = note_stats(target_path)
    basename = PurePosixPath(full_path).stem

    payload: dict[str, Any] = {
        "path": full_path,
        "name": PurePosixPath(full_path).name,
        "basename": basename,
        "folder": parent if parent != "." else "(root)",
        "size": stats["size"],
        "created": stats["created"],
        "opened": opened,
        "wikilink": f"[[{basename}]]",
    }
    if overwritten:
        payload["overwritten"] = True
    return payload


def append_to_note(
    vault: VaultMetadata,
    path: str,
    content: str,
    position: str = "end",
    ensure_newline: bool = True,
) -> dict[str, Any]:
    """Insert content into an existing note and write the full file back.

    Args:
        vault: Vault metadata.
        path: Vault-relative note path.
        content: Markdown fragment to insert.
        position: ``"end"``, ``"start"`` or ``"after_frontmatter"``.
        ensure_newline: Separate the pieces with a newline when neither supplies one.

    Returns:
        A dictionary with the lengths before and after plus a preview of the
        inserted content.

    Raises:
        NoteNotFoundError: If the note does not exist.
        PathIsFolderError: If ``path`` is a folder.
        InvalidParameterError: If ``position`` is not supported.
    """
    ensure_vault_ready(vault)
    if position not in APPEND_POSITIONS:
        raise InvalidParameterError(
            f"Invalid position '{position}'. Expected one of: {', '.join(APPEND_POSITIONS)}"
        )

    target_path = require_note(vault, path)
    existing = read_note_text(vault, path)
    updated = splice_content(existing, content, position, ensure_newline)
    target_path.write_text(updated, encoding="utf-8")
    logger.info("Inserted content at %s of note '%s' in vault '%s'", position, path, vault.name)

    preview = content[:APPEND_PREVIEW_LENGTH]
    if len(content) > APPEND_PREVIEW_LENGTH:
        preview += "..."

    return {
        "path": path,
        "position": position,
        "appended_length": len(content),
        "original_length": len(existing),
        "new_length": len(updated),
        "content_preview": preview,
    }
