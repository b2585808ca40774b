"""Pydantic input models for search and discovery operations."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from vault_navigator.constants import DEFAULT_SEARCH_LIMIT, SORT_OPTIONS

from .base import VaultInput, invalid_parameter, missing_parameter


class SearchNotesInput(VaultInput):
    """Input model for search_notes tool.

    Case-insensitive search across note titles and contents, ranked by
    relevance unless another sort order is requested.

    Examples:
        >>> SearchNotesInput(query="roadmap")
        >>> SearchNotesInput(query="meeting", folder="Work/", tag="#project", sort_by="modified")
    """

    query: str = Field(
        description=(
            "Search string (case-insensitive). "
            "Matched against note titles and contents. "
            "Examples: 'roadmap', 'API design'"
        )
    )

    folder: Optional[str] = Field(
        None,
        description="Only search notes whose path starts with this folder prefix."
    )

    tag: Optional[str] = Field(
        None,
        description="Only search notes carrying this tag ('project' or '#project')."
    )

    limit: int = Field(
        DEFAULT_SEARCH_LIMIT,
        ge=1,
        description="Maximum number of results to return."
    )

    sort_by: str = Field(
        "relevance",
        description="Sort by 'relevance', 'modified', 'created' or 'title'."
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Validate search query is not empty."""
        if not v.strip():
            raise missing_parameter("Query parameter is required")
        return v.strip()

    @field_validator('folder', 'tag')
    @classmethod
    def validate_filter(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip().replace("\\", "/") or None

    @field_validator('sort_by')
    @classmethod
    def validate_sort_by(cls, v: str) -> str:
        """Validate sort_by is one of the allowed values."""
        cleaned = v.strip().lower()
        if cleaned not in SORT_OPTIONS:
            raise invalid_parameter(
                f"sort_by must be one of: {', '.join(SORT_OPTIONS)}. Got: '{v}'"
            )
        return cleaned

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "roadmap", "vault": None},
                {
                    "query": "meeting",
                    "folder": "Work/",
                    "tag": "#project",
                    "limit": 5,
                    "sort_by": "modified",
                },
            ]
        }
