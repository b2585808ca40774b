"""Link graph tools.

- get_related_notes: Direct and transitive outlinks/backlinks of a note
"""
from __future__ import annotations

from typing import Any, Optional

from vault_navigator.config import resolve_vault
from vault_navigator.constants import DEFAULT_RELATED_SNIPPET_LENGTH
from vault_navigator.core.graph_operations import get_related_notes as get_related_notes_core
from vault_navigator.models import RelatedNotesInput
from vault_navigator.responses import run_tool
from vault_navigator.server import mcp


@mcp.tool()
async def get_related_notes(
    path: str,
    depth: int = 1,
    include_snippets: bool = False,
    max_snippet_length: int = DEFAULT_RELATED_SNIPPET_LENGTH,
    vault: Optional[str] = None,
) -> dict[str, Any]:
    """Find notes connected to a note through links and embeds.

    Outlinks are notes this note links to; backlinks are notes linking to it.
    With depth 2 or 3 the search continues through neighbors of neighbors.
    Every related note appears once: transitive results never repeat a direct
    neighbor or each other.

    Args:
        path: Vault-relative note path including .md
        depth: Link hops to follow, 1 to 3 (default 1)
        include_snippets: If True, attach the beginning of each related note
        max_snippet_length: Snippet length in characters (default 150)
        vault: Vault name (omit to use the default vault)

    Returns:
        Envelope whose data is:
        {
            "path": str,
            "depth": int,
            "direct_outlinks": [{"path", "title", "snippet"?}, ...],
            "direct_backlinks": [...],
            "transitive_outlinks": [...],   # depth > 1 only
            "transitive_backlinks": [...],  # depth > 1 only
            "total_related": int            # distinct related notes
        }

    Examples:
        - Use when: Exploring context around a note
        - Use when: Finding which notes reference a topic note
        - Don't use: Keyword lookup → Use search_notes()

    Error Handling:
        - INVALID_PARAMETER: depth outside 1-3 (checked before reading the vault)
        - NOTE_NOT_FOUND: Includes up to 3 similar paths as suggestions
        - RELATED_NOTES_ERROR: Unexpected failure
    """

    def operation() -> dict[str, Any]:
        params = RelatedNotesInput(
            path=path,
            depth=depth,
            include_snippets=include_snippets,
            max_snippet_length=max_snippet_length,
            vault=vault,
        )
        metadata = resolve_vault(params.vault)
        return get_related_notes_core(
            metadata,
            params.path,
            depth=params.depth,
            include_snippets=params.include_snippets,
            max_snippet_length=params.max_snippet_length,
        )

    return run_tool("get_related_notes", "RELATED_NOTES_ERROR", operation)
