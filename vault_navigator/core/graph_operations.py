"""Traversal of the note link graph: direct and transitive neighbors."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Optional

from vault_navigator.constants import (
    DEFAULT_RELATED_SNIPPET_LENGTH,
    MAX_DEPTH,
    MIN_DEPTH,
    SNIPPET_PLACEHOLDER,
)
from vault_navigator.core.content import read_note_text, remove_frontmatter, require_note
from vault_navigator.core.snippets import leading_snippet
from vault_navigator.core.vault_index import LinkGraph, VaultIndex
from vault_navigator.core.vault_operations import ensure_vault_ready, note_title
from vault_navigator.data_models import RelatedNote, VaultMetadata
from vault_navigator.errors import InvalidParameterError, InvalidPathError

logger = logging.getLogger(__name__)

Neighbors = Callable[[LinkGraph, str], list[str]]


def validate_depth(depth: int) -> None:
    if not MIN_DEPTH <= depth <= MAX_DEPTH:
        raise InvalidParameterError(f"Depth must be between {MIN_DEPTH} and {MAX_DEPTH}, got {depth}")


def direct_outlinks(graph: LinkGraph, path: str) -> list[str]:
    """Notes that ``path`` links to or embeds, in discovery order.

    Links are followed before embeds; unresolvable tokens, duplicates and the
    note itself are dropped.
    """
    cache = graph.get_file_cache(path)
    if cache is None:
        return []

    destinations: list[str] = []
    for token in [*cache.links, *cache.embeds]:
        destination = graph.resolve_link(token, path)
        if destination is None or destination == path or destination in destinations:
            continue
        destinations.append(destination)
    return destinations


def direct_backlinks(graph: LinkGraph, path: str) -> list[str]:
    """Notes linking to ``path``, excluding ``path`` itself."""
    sources: list[str] = []
    for source in graph.backlink_sources(path):
        if source != path and source not in sources:
            sources.append(source)
    return sources


def _expand(
    graph: LinkGraph,
    frontier: Iterable[str],
    neighbors: Neighbors,
    visited: set[str],
    levels: int,
) -> list[str]:
    """Breadth-first expansion of ``frontier`` for up to ``levels`` levels.

    ``visited`` is shared with the caller and updated in place; a node already
    in it is neither expanded nor returned.
    """
    discovered: list[str] = []
    current = list(frontier)
    for _ in range(levels):
        next_level: list[str] = []
        for node in current:
            for neighbor in neighbors(graph, node):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                next_level.append(neighbor)
        if not next_level:
            break
        discovered.extend(next_level)
        current = next_level
    return discovered


def _snippet_for(
    path: str,
    read_text: Callable[[str], str],
    max_length: int,
) -> str:
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError, InvalidPathError) as exc:
        logger.warning("Unable to read '%s' for snippet: %s", path, exc)
        return SNIPPET_PLACEHOLDER
    return leading_snippet(remove_frontmatter(text), max_length)


def find_related_notes(
    graph: LinkGraph,
    path: str,
    depth: int = MIN_DEPTH,
    include_snippets: bool = False,
    max_snippet_length: int = DEFAULT_RELATED_SNIPPET_LENGTH,
    read_text: Optional[Callable[[str], str]] = None,
) -> dict[str, list[dict[str, Any]]]:
    """Collect the neighbors of ``path`` in both link directions.

    Args:
        graph: Link structure to traverse.
        path: Vault-relative path of the origin note.
        depth: Number of link hops to follow, between 1 and 3.
        include_snippets: Attach a content snippet to every neighbor.
        max_snippet_length: Snippet length before truncation.
        read_text: Reads a note's raw text; required when ``include_snippets``.

    Returns:
        ``direct_outlinks`` and ``direct_backlinks``, plus
        ``transitive_outlinks`` and ``transitive_backlinks`` when ``depth > 1``.
        No path appears more than once across the lists.

    Raises:
        InvalidParameterError: If ``depth`` is out of range.
    """
    validate_depth(depth)
    if include_snippets and read_text is None:
        raise ValueError("read_text is required when include_snippets is set")

    def describe(paths: list[str]) -> list[dict[str, Any]]:
        notes = []
        for note_path in paths:
            snippet = _snippet_for(note_path, read_text, max_snippet_length) if include_snippets else None
            notes.append(RelatedNote(path=note_path, title=note_title(note_path), snippet=snippet).as_payload())
        return notes

    outlinks = direct_outlinks(graph, path)
    backlinks = direct_backlinks(graph, path)
    # a mutually linked note is reported once, as an outlink
    related = {
        "direct_outlinks": describe(outlinks),
        "direct_backlinks": describe([note for note in backlinks if note not in outlinks]),
    }

    if depth > 1:
        visited = {path, *outlinks, *backlinks}
        transitive_outlinks = _expand(graph, outlinks, direct_outlinks, visited, depth - 1)
        transitive_backlinks = _expand(graph, backlinks, direct_backlinks, visited, depth - 1)
        related["transitive_outlinks"] = describe(transitive_outlinks)
        related["transitive_backlinks"] = describe(transitive_backlinks)

    return related


def get_related_notes(
    vault: VaultMetadata,
    path: str,
    depth: int = MIN_DEPTH,
    include_snippets: bool = False,
    max_snippet_length: int = DEFAULT_RELATED_SNIPPET_LENGTH,
) -> dict[str, Any]:
    """Find the notes related to ``path`` through links and embeds.

    Raises:
        NoteNotFoundError: If no note exists at ``path`` (with suggestions).
        PathIsFolderError: If ``path`` is a folder.
        InvalidParameterError: If ``depth`` is out of range.
    """
    validate_depth(depth)
    ensure_vault_ready(vault)
    require_note(vault, path)

    index = VaultIndex(vault)
    related = find_related_notes(
        index,
        path,
        depth=depth,
        include_snippets=include_snippets,
        max_snippet_length=max_snippet_length,
        read_text=lambda note_path: read_note_text(vault, note_path),
    )

    distinct = {note["path"] for notes in related.values() for note in notes}
    logger.info(
        "Found %d outlink(s) and %d backlink(s) for '%s' (depth %d)",
        len(related["direct_outlinks"]),
        len(related["direct_backlinks"]),
        path,
        depth,
    )
    return {"path": path, "depth": depth, **related, "total_related": len(distinct)}
