"""Per-call metadata cache and link table for a vault.

The index reads markdown files straight from disk and extracts the facts the
traversal engine and ranker need: tags, wikilinks, embeds, markdown links,
headings and frontmatter. Nothing is persisted; build a new index for every
request.
"""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Any, Optional, Protocol
from urllib.parse import unquote

from vault_navigator.constants import NOTE_EXTENSION
from vault_navigator.core.content import parse_frontmatter, remove_frontmatter
from vault_navigator.core.vault_operations import list_markdown_files, resolve_note_path
from vault_navigator.data_models import NoteCache, VaultMetadata
from vault_navigator.errors import InvalidPathError

logger = logging.getLogger(__name__)

WIKILINK_PATTERN = re.compile(r"(!?)\[\[([^\[\]]+?)\]\]")
MARKDOWN_LINK_PATTERN = re.compile(r"(!?)\[([^\[\]]*)\]\(\s*(<[^>]+>|[^)\s]+)(?:\s+\"[^\"]*\")?\s*\)")
URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
INLINE_TAG_PATTERN = re.compile(r"(?<![\w/#&\[])#([\w\-/]+)")
HEADING_PATTERN = re.compile(r"^(?P<hashes>#{1,6})\s+(?P<title>.+?)\s*$", re.MULTILINE)
FENCED_CODE_PATTERN = re.compile(r"^(?P<fence>```|~~~).*?(?:^(?P=fence)[^\n]*$|\Z)", re.MULTILINE | re.DOTALL)
INLINE_CODE_PATTERN = re.compile(r"`[^`\n]+`")


class LinkGraph(Protocol):
    """Read-only view of the vault's link structure used by the traversal engine."""

    def get_file_cache(self, path: str) -> Optional[NoteCache]:
        ...

    def resolve_link(self, token: str, source_path: str) -> Optional[str]:
        ...

    def backlink_sources(self, path: str) -> list[str]:
        ...


# ==============================================================================
# PARSING
# ==============================================================================


def _strip_code(body: str) -> str:
    """Blank out fenced and inline code so links and tags inside them are ignored."""
    body = FENCED_CODE_PATTERN.sub("", body)
    return INLINE_CODE_PATTERN.sub("", body)


def normalize_tag(tag: str) -> str:
    """Return ``tag`` with exactly one leading ``#``."""
    return f"#{tag.strip().lstrip('#')}"


def _frontmatter_tags(metadata: dict[str, Any]) -> list[str]:
    raw = metadata.get("tags", metadata.get("tag"))
    if raw is None:
        return []
    if isinstance(raw, str):
        values = re.split(r"[,\s]+", raw)
    elif isinstance(raw, list):
        values = [str(item) for item in raw if item is not None]
    else:
        values = [str(raw)]
    return [normalize_tag(value) for value in values if value.strip().lstrip("#")]


def _inline_tags(body: str) -> list[str]:
    # link syntax may contain '#heading' fragments that are not tags
    text = WIKILINK_PATTERN.sub(" ", body)
    text = MARKDOWN_LINK_PATTERN.sub(" ", text)
    return [
        normalize_tag(match.group(1))
        for match in INLINE_TAG_PATTERN.finditer(text)
        if not match.group(1).isdigit()
    ]


def _link_tokens(body: str) -> tuple[list[str], list[str]]:
    """Return ``(links, embeds)`` in the order they appear in ``body``."""
    found: list[tuple[int, bool, str]] = []

    for match in WIKILINK_PATTERN.finditer(body):
        found.append((match.start(), bool(match.group(1)), match.group(2).strip()))

    for match in MARKDOWN_LINK_PATTERN.finditer(body):
        target = match.group(3).strip("<>").strip()
        if not target or target.startswith("#") or URL_SCHEME_PATTERN.match(target):
            continue
        found.append((match.start(), bool(match.group(1)), target))

    found.sort(key=lambda item: item[0])
    links = [token for _, is_embed, token in found if not is_embed]
    embeds = [token for _, is_embed, token in found if is_embed]
    return links, embeds


def parse_note(text: str) -> NoteCache:
    """Build the metadata cache for a note from its raw text."""
    metadata = parse_frontmatter(text)
    body = _strip_code(remove_frontmatter(text))
    links, embeds = _link_tokens(body)

    tags: list[str] = []
    for tag in [*_frontmatter_tags(metadata), *_inline_tags(body)]:
        if tag.lower() not in {existing.lower() for existing in tags}:
            tags.append(tag)

    headings = [
        {"level": len(match.group("hashes")), "heading": match.group("title")}
        for match in HEADING_PATTERN.finditer(body)
    ]

    return NoteCache(
        tags=tags,
        links=links,
        embeds=embeds,
        headings=headings,
        frontmatter=metadata,
    )


def note_tags(text: str) -> list[str]:
    """Tags of a note, frontmatter and inline, each normalized to ``#tag``."""
    return parse_note(text).tags


# ==============================================================================
# INDEX
# ==============================================================================


class VaultIndex:
    """Filesystem-backed :class:`LinkGraph` for a single vault.

    File caches and the resolved link table are computed lazily and kept only
    for the lifetime of the instance.
    """

    def __init__(self, vault: VaultMetadata) -> None:
        self.vault = vault
        self.markdown_files = list_markdown_files(vault)
        self._paths = set(self.markdown_files)
        self._by_name: dict[str, list[str]] = {}
        for path in self.markdown_files:
            self._by_name.setdefault(posixpath.basename(path).lower(), []).append(path)
        self._caches: dict[str, Optional[NoteCache]] = {}
        self._resolved: Optional[dict[str, set[str]]] = None

    def get_file_cache(self, path: str) -> Optional[NoteCache]:
        """Return parsed metadata for ``path``, or ``None`` for unknown or unreadable notes."""
        if path not in self._paths:
            return None
        if path not in self._caches:
            try:
                text = resolve_note_path(self.vault, path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError, InvalidPathError) as exc:
                logger.warning("Skipping unreadable note '%s': %s", path, exc)
                self._caches[path] = None
            else:
                self._caches[path] = parse_note(text)
        return self._caches[path]

    def resolve_link(self, token: str, source_path: str) -> Optional[str]:
        """Resolve a link token written in ``source_path`` to a note path.

        Aliases (``|alias``) and subpaths (``#heading``, ``#^block``) are
        dropped and the token is URL-decoded. The token is tried relative to
        the source folder, then from the vault root, and finally matched by
        basename (case-insensitive, as a path suffix) preferring the source's
        folder, then the shallowest path.
        """
        target = unquote(token.split("|", 1)[0].split("#", 1)[0]).strip().replace("\\", "/")
        if not target:
            return None
        if not target.lower().endswith(NOTE_EXTENSION):
            target = f"{target}{NOTE_EXTENSION}"

        source_dir = posixpath.dirname(source_path)
        candidates = [target.lstrip("/")]
        if not target.startswith("/"):
            candidates.insert(0, posixpath.join(source_dir, target))

        for candidate in candidates:
            normalized = posixpath.normpath(candidate)
            if normalized == ".." or normalized.startswith("../"):
                continue
            if normalized in self._paths:
                return normalized

        suffix = "/" + posixpath.normpath(target.lstrip("/")).lower()
        matches = [
            path
            for path in self._by_name.get(posixpath.basename(target).lower(), [])
            if ("/" + path.lower()).endswith(suffix)
        ]
        if not matches:
            return None
        return min(
            matches,
            key=lambda path: (posixpath.dirname(path) != source_dir, path.count("/"), path),
        )

    def outlinks(self, path: str) -> list[str]:
        """Resolved destinations of ``path`` in discovery order, without duplicates."""
        cache = self.get_file_cache(path)
        if cache is None:
            return []
        destinations: list[str] = []
        for token in [*cache.links, *cache.embeds]:
            destination = self.resolve_link(token, path)
            if destination is not None and destination not in destinations:
                destinations.append(destination)
        return destinations

    @property
    def resolved_links(self) -> dict[str, set[str]]:
        """Mapping of every note to the set of notes it links to."""
        if self._resolved is None:
            self._resolved = {path: set(self.outlinks(path)) for path in self.markdown_files}
        return self._resolved

    def backlink_sources(self, path: str) -> list[str]:
        """Notes whose resolved links include ``path``, sorted."""
        return sorted(source for source, destinations in self.resolved_links.items() if path in destinations)
