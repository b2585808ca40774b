"""Bounded excerpts of note content."""

from __future__ import annotations

import re
from typing import Optional

ELLIPSIS = "..."


def leading_snippet(text: str, max_length: int) -> str:
    """Return the first ``max_length`` characters, trimmed, marking truncation."""
    if not text or max_length <= 0:
        return ""
    snippet = text[:max_length].strip()
    if len(text) > max_length:
        snippet += ELLIPSIS
    return snippet


def extract_snippet(
    text: str,
    term: Optional[str],
    max_length: int = 200,
    highlight: bool = True,
) -> str:
    """Extract an excerpt of ``text`` centred on the first match of ``term``.

    The match is case-insensitive. When found, a window of ``max_length``
    characters starting ``max_length // 2`` before the match is returned with
    ``...`` on each truncated side, and every occurrence of ``term`` inside the
    window wrapped in ``**bold**`` when ``highlight`` is set. Without a match
    (or without a term) the beginning of the text is returned instead.

    Never raises; empty input or a non-positive ``max_length`` gives ``""``.
    """
    if not text or max_length <= 0:
        return ""
    if not term:
        return leading_snippet(text, max_length)

    index = text.lower().find(term.lower())
    if index == -1:
        return leading_snippet(text, max_length)

    start = max(0, index - max_length // 2)
    end = min(len(text), start + max_length)
    snippet = text[start:end]

    if highlight:
        pattern = re.compile(f"({re.escape(term)})", re.IGNORECASE)
        snippet = pattern.sub(r"**\1**", snippet)

    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(text):
        snippet += ELLIPSIS

    return snippet.strip()
