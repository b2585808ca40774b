"""Relevance-scored full-text search over the notes of a vault."""

from __future__ import annotations

import logging
from typing import Any, Optional

from vault_navigator.constants import DEFAULT_SEARCH_LIMIT, SEARCH_SNIPPET_LENGTH, SORT_OPTIONS
from vault_navigator.core.content import note_stats
from vault_navigator.core.snippets import extract_snippet, leading_snippet
from vault_navigator.core.vault_index import normalize_tag, note_tags
from vault_navigator.core.vault_operations import (
    ensure_vault_ready,
    list_markdown_files,
    note_title,
    resolve_note_path,
)
from vault_navigator.data_models import SearchResult, VaultMetadata
from vault_navigator.errors import InvalidParameterError, InvalidPathError

logger = logging.getLogger(__name__)


# ==============================================================================
# SCORING
# ==============================================================================


def score_title(title: str, query: str) -> int:
    """Score how well a note title matches ``query`` (both compared case-insensitively).

    Returns 100 for an exact match, 50 when the title contains the query, 25
    when one of its whitespace-separated words does, and 0 otherwise.
    """
    title_lower = title.lower()
    query_lower = query.lower()
    if title_lower == query_lower:
        return 100
    if query_lower in title_lower:
        return 50
    if any(query_lower in word for word in title_lower.split()):
        return 25
    return 0


def count_occurrences(text: str, query: str) -> int:
    """Count non-overlapping case-insensitive occurrences of ``query`` in ``text``."""
    if not query:
        return 0
    return text.lower().count(query.lower())


def _matches_tag(text: str, tag: str) -> bool:
    wanted = normalize_tag(tag).lower()
    return any(existing.lower() == wanted for existing in note_tags(text))


def _sort_results(results: list[SearchResult], sort_by: str) -> None:
    if sort_by == "modified":
        results.sort(key=lambda item: item.modified, reverse=True)
    elif sort_by == "created":
        results.sort(key=lambda item: item.created, reverse=True)
    elif sort_by == "title":
        results.sort(key=lambda item: item.title.casefold())
    else:
        results.sort(key=lambda item: item.score, reverse=True)


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def search_notes(
    vault: VaultMetadata,
    query: str,
    folder: Optional[str] = None,
    tag: Optional[str] = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
    sort_by: str = "relevance",
) -> dict[str, Any]:
    """Search note titles and contents for ``query``.

    Args:
        vault: Vault metadata.
        query: Search string (case-insensitive).
        folder: Only consider notes whose path starts with this prefix.
        tag: Only consider notes carrying this tag (with or without ``#``).
        limit: Maximum number of results returned after sorting.
        sort_by: ``"relevance"``, ``"modified"``, ``"created"`` or ``"title"``.

    Returns:
        A dictionary with the query, the applied filters, the number of matching
        notes and the limited list of results.

    Raises:
        InvalidParameterError: If ``sort_by`` is not a supported option.
    """
    if sort_by not in SORT_OPTIONS:
        raise InvalidParameterError(
            f"Invalid sort_by '{sort_by}'. Expected one of: {', '.join(SORT_OPTIONS)}"
        )
    ensure_vault_ready(vault)

    results: list[SearchResult] = []
    for path in list_markdown_files(vault):
        if folder and not path.startswith(folder):
            continue

        try:
            note_path = resolve_note_path(vault, path)
            text = note_path.read_text(encoding="utf-8")
            stats = note_stats(note_path)
        except (OSError, UnicodeDecodeError, InvalidPathError) as exc:
            logger.warning(
                "Skipping file '%s' in vault '%s' due to read error: %s",
                path,
                vault.name,
                exc,
            )
            continue

        if tag and not _matches_tag(text, tag):
            continue

        title = note_title(path)
        score = score_title(title, query)
        occurrences = count_occurrences(text, query)
        if occurrences:
            score += min(occurrences * 5, 50)
            snippet = extract_snippet(text, query, SEARCH_SNIPPET_LENGTH)
        elif score > 0:
            snippet = leading_snippet(text, SEARCH_SNIPPET_LENGTH)
        else:
            continue

        results.append(
            SearchResult(
                path=path,
                title=title,
                snippet=snippet,
                created=stats["created"],
                modified=stats["modified"],
                size=stats["size"],
                score=score,
            )
        )

    _sort_results(results, sort_by)
    limited = results[:limit]
    logger.debug("Search '%s' matched %d note(s) in vault '%s'", query, len(results), vault.name)

    return {
        "query": query,
        "filters": {"folder": folder, "tag": tag, "sort_by": sort_by},
        "total_matches": len(results),
        "returned_count": len(limited),
        "results": [result.as_payload() for result in limited],
    }
