"""Note MCP tools.

This module provides MCP tool wrappers for note operations:
- Read a note with metadata
- Create new notes
- Insert content into existing notes

All tools delegate to core operations in vault_navigator.core.note_operations
and return the shared response envelope.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from vault_navigator.config import resolve_vault
from vault_navigator.core.note_operations import (
    append_to_note as append_to_note_core,
    create_note as create_note_core,
    get_note as get_note_core,
)
from vault_navigator.models import AppendNoteInput, CreateNoteInput, GetNoteInput
from vault_navigator.responses import run_tool
from vault_navigator.server import mcp

logger = logging.getLogger(__name__)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================


@mcp.tool()
async def get_note(
    path: str,
    preview: bool = False,
    include_metadata: bool = True,
    vault: Optional[str] = None,
) -> dict[str, Any]:
    """Read a note's content together with file stats and parsed metadata.

    Args:
        path: Vault-relative note path including .md (e.g. "Projects/Roadmap.md")
        preview: If True, return only the first 500 characters
        include_metadata: If True, include tags, links, embeds, headings, frontmatter
        vault: Vault name (omit to use the default vault)

    Returns:
        Envelope whose data is:
        {
            "path": str,
            "name": str,           # file name with extension
            "title": str,          # file name without extension
            "content": str,
            "size": int,
            "size_formatted": str, # e.g. "1.2 KB"
            "created": str,        # ISO timestamp
            "modified": str,       # ISO timestamp
            "truncated": bool,     # preview only
            "total_length": int,   # preview only
            "metadata": {...}      # when include_metadata
        }

    Examples:
        - Use when: Need to read a note found through search_notes()
        - Use when: Checking a note's tags or outgoing links
        - Don't use: Looking for notes by keyword → Use search_notes()

    Error Handling:
        - MISSING_PARAMETER / INVALID_PATH: Empty, absolute or traversal path
        - NOTE_NOT_FOUND: Includes up to 3 similar paths as suggestions
        - PATH_IS_FOLDER: The path names a folder
        - READ_ERROR: File could not be read
    """

    def operation() -> dict[str, Any]:
        params = GetNoteInput(
            path=path,
            preview=preview,
            include_metadata=include_metadata,
            vault=vault,
        )
        metadata = resolve_vault(params.vault)
        return get_note_core(
            metadata,
            params.path,
            preview=params.preview,
            include_metadata=params.include_metadata,
        )

    return run_tool("get_note", "READ_ERROR", operation)


# ==============================================================================
# CREATE OPERATIONS
# ==============================================================================


@mcp.tool()
async def create_note(
    filename: str,
    content: str,
    folder: Optional[str] = None,
    open_after: bool = False,
    overwrite: bool = False,
    vault: Optional[str] = None,
) -> dict[str, Any]:
    """Create a new note (fails if it exists unless overwrite is set).

    Appends .md to the filename when missing and creates the folder if needed.

    Args:
        filename: Note name, e.g. "Roadmap" or "Meeting 2025-01-15.md"
        content: Full markdown content (can be empty)
        folder: Folder relative to the vault root (omit for the root)
        open_after: If True, open the note in Obsidian afterwards
        overwrite: If True, replace an existing note
        vault: Vault name (omit to use the default vault)

    Returns:
        Envelope whose data is:
        {
            "path": str, "name": str, "basename": str, "folder": str,
            "size": int, "created": str, "opened": bool,
            "wikilink": str,       # e.g. "[[Roadmap]]"
            "overwritten": bool    # only when an existing note was replaced
        }

    Examples:
        - Use when: User asks to "create", "make" or "start" a note
        - Don't use: Adding to an existing note → Use append_to_note()

    Error Handling:
        - MISSING_PARAMETER / INVALID_PATH: Empty filename or unsafe folder/filename
        - FILE_EXISTS: Something already exists at the path and overwrite is False
        - PATH_IS_FOLDER: overwrite targets a folder
        - FOLDER_CREATE_ERROR: Folder could not be created
        - CREATE_ERROR: Unexpected failure while writing
    """

    def operation() -> dict[str, Any]:
        params = CreateNoteInput(
            filename=filename,
            content=content,
            folder=folder,
            open_after=open_after,
            overwrite=overwrite,
            vault=vault,
        )
        metadata = resolve_vault(params.vault)
        result = create_note_core(
            metadata,
            params.filename,
            params.content,
            folder=params.folder,
            open_after=params.open_after,
            overwrite=params.overwrite,
        )
        logger.info("create_note wrote '%s'", result["path"])
        return result

    return run_tool("create_note", "CREATE_ERROR", operation)


# ==============================================================================
# UPDATE OPERATIONS
# ==============================================================================


@mcp.tool()
async def append_to_note(
    path: str,
    content: str,
    position: str = "end",
    ensure_newline: bool = True,
    vault: Optional[str] = None,
) -> dict[str, Any]:
    """Insert content into an existing note without rewriting it by hand.

    Args:
        path: Vault-relative note path including .md
        content: Markdown to insert (must not be empty)
        position: "end" (default), "start" or "after_frontmatter"
        ensure_newline: If True, separate the pieces with a newline when needed
        vault: Vault name (omit to use the default vault)

    Returns:
        Envelope whose data is:
        {
            "path": str,
            "position": str,
            "appended_length": int,
            "original_length": int,
            "new_length": int,
            "content_preview": str   # first 200 characters of the inserted text
        }

    Examples:
        - Use when: Logging an entry at the bottom of a daily note
        - Use when: Adding a summary right below the frontmatter
        - Don't use: Creating a note → Use create_note()

    Error Handling:
        - MISSING_PARAMETER / INVALID_PATH / INVALID_PARAMETER: Bad input
        - NOTE_NOT_FOUND: Includes up to 3 similar paths as suggestions
        - APPEND_ERROR: Unexpected failure while writing
    """

    def operation() -> dict[str, Any]:
        params = AppendNoteInput(
            path=path,
            content=content,
            position=position,
            ensure_newline=ensure_newline,
            vault=vault,
        )
        metadata = resolve_vault(params.vault)
        return append_to_note_core(
            metadata,
            params.path,
            params.content,
            position=params.position,
            ensure_newline=params.ensure_newline,
        )

    return run_tool("append_to_note", "APPEND_ERROR", operation)
