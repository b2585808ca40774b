"""Pydantic input models for link graph operations."""

from __future__ import annotations

from pydantic import Field, field_validator

from vault_navigator.constants import DEFAULT_RELATED_SNIPPET_LENGTH, MAX_DEPTH, MIN_DEPTH

from .base import BaseNoteInput, invalid_parameter


class RelatedNotesInput(BaseNoteInput):
    """Input model for get_related_notes tool.

    Examples:
        >>> RelatedNotesInput(path="Projects/Roadmap.md")
        >>> RelatedNotesInput(path="Index.md", depth=2, include_snippets=True)
    """

    depth: int = Field(
        MIN_DEPTH,
        description=f"How many link hops to follow ({MIN_DEPTH}-{MAX_DEPTH}).",
    )

    include_snippets: bool = Field(
        False,
        description="Attach the beginning of each related note's content."
    )

    max_snippet_length: int = Field(
        DEFAULT_RELATED_SNIPPET_LENGTH,
        description="Snippet length in characters before truncation."
    )

    @field_validator('depth')
    @classmethod
    def validate_depth(cls, v: int) -> int:
        if not MIN_DEPTH <= v <= MAX_DEPTH:
            raise invalid_parameter(f"Depth must be between {MIN_DEPTH} and {MAX_DEPTH}, got {v}")
        return v

    @field_validator('max_snippet_length')
    @classmethod
    def validate_max_snippet_length(cls, v: int) -> int:
        if v < 1:
            raise invalid_parameter(f"max_snippet_length must be a positive integer, got {v}")
        return v

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Roadmap.md"},
                {"path": "Index.md", "depth": 2, "include_snippets": True, "max_snippet_length": 100},
            ]
        }
