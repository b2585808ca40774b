"""Search tools for vault operations.

- search_notes: Relevance-ranked search over note titles and contents
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from vault_navigator.config import resolve_vault
from vault_navigator.constants import DEFAULT_SEARCH_LIMIT
from vault_navigator.core.search_operations import search_notes as search_notes_core
from vault_navigator.models import SearchNotesInput
from vault_navigator.responses import run_tool
from vault_navigator.server import mcp

logger = logging.getLogger(__name__)

# ==============================================================================
# DISCOVERY & SEARCH TOOLS
# ==============================================================================


@mcp.tool()
async def search_notes(
    query: str,
    folder: Optional[str] = None,
    tag: Optional[str] = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
    sort_by: str = "relevance",
    vault: Optional[str] = None,
) -> dict[str, Any]:
    """Search notes by title and content, ranked by relevance.

    Title matches score highest (exact > partial > word), then each content
    occurrence adds to the score. Every hit includes a snippet with the query
    highlighted in **bold**.

    Args:
        query: Search string (case-insensitive)
        folder: Only notes whose path starts with this prefix, e.g. "Projects/"
        tag: Only notes with this tag, e.g. "project" or "#project"
        limit: Maximum results (default 10)
        sort_by: "relevance" (default), "modified", "created" or "title"
        vault: Vault name (omit to use the default vault)

    Returns:
        Envelope whose data is:
        {
            "query": str,
            "filters": {"folder": str | None, "tag": str | None, "sort_by": str},
            "total_matches": int,
            "returned_count": int,
            "results": [
                {"path", "title", "snippet", "created", "modified", "size"},
                ...
            ]
        }

    Examples:
        - Use when: Finding notes about a topic before reading them
        - Workflow: search_notes() → get_note() → get_related_notes()
        - Don't use: You already know the exact path → Use get_note()

    Error Handling:
        - MISSING_PARAMETER: Empty query
        - INVALID_PARAMETER: Unknown sort_by or limit below 1
        - SEARCH_ERROR: Unexpected failure; unreadable notes are skipped, not fatal
    """

    def operation() -> dict[str, Any]:
        params = SearchNotesInput(
            query=query,
            folder=folder,
            tag=tag,
            limit=limit,
            sort_by=sort_by,
            vault=vault,
        )
        metadata = resolve_vault(params.vault)
        result = search_notes_core(
            metadata,
            params.query,
            folder=params.folder,
            tag=params.tag,
            limit=params.limit,
            sort_by=params.sort_by,
        )
        logger.info(
            "search_notes '%s' returned %d of %d match(es)",
            params.query,
            result["returned_count"],
            result["total_matches"],
        )
        return result

    return run_tool("search_notes", "SEARCH_ERROR", operation)
