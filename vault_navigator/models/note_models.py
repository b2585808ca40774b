"""Pydantic input models for note operations.

This module defines input models for the note tools:
- Read a note with metadata
- Create new notes
- Insert content into existing notes
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator, model_validator

from vault_navigator.constants import APPEND_POSITIONS, NOTE_EXTENSION
from vault_navigator.core.vault_operations import ensure_note_extension

from .base import BaseNoteInput, VaultInput, checked_path, invalid_parameter, missing_parameter


class GetNoteInput(BaseNoteInput):
    """Input model for get_note tool.

    Examples:
        >>> GetNoteInput(path="Projects/Roadmap.md")
        >>> GetNoteInput(path="Daily/2025-01-15.md", preview=True, include_metadata=False)
    """

    preview: bool = Field(
        False,
        description="Return only the first 500 characters of the content."
    )

    include_metadata: bool = Field(
        True,
        description="Include tags, links, embeds, headings and frontmatter."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Roadmap.md", "vault": None},
                {"path": "Daily/2025-01-15.md", "preview": True, "include_metadata": False},
            ]
        }


class CreateNoteInput(VaultInput):
    """Input model for create_note tool.

    The filename is normalized to end in ``.md`` and combined with the
    optional folder; the combined path must be a safe vault-relative path.

    Examples:
        >>> CreateNoteInput(filename="Roadmap", content="# Roadmap", folder="Projects")
        >>> CreateNoteInput(filename="Scratch.md", content="", overwrite=True)
    """

    filename: str = Field(
        description=(
            "Name of the note to create. '.md' is appended when missing. "
            "Examples: 'Roadmap', 'Meeting 2025-01-15.md'."
        )
    )

    content: str = Field(
        description=(
            "Full markdown content for the note. "
            "Can be empty string to create a blank note."
        )
    )

    folder: Optional[str] = Field(
        None,
        description="Folder relative to the vault root (created when missing). Omit for the root."
    )

    open_after: bool = Field(
        False,
        description="Open the note in Obsidian after writing it."
    )

    overwrite: bool = Field(
        False,
        description="Replace an existing note instead of failing with FILE_EXISTS."
    )

    @field_validator('filename')
    @classmethod
    def validate_filename(cls, v: str) -> str:
        cleaned = v.strip().replace("\\", "/")
        if not cleaned or cleaned == NOTE_EXTENSION:
            raise missing_parameter("Filename parameter is required")
        return cleaned

    @field_validator('folder')
    @classmethod
    def validate_folder(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        cleaned = v.strip().replace("\\", "/").rstrip("/")
        return cleaned or None

    @property
    def note_path(self) -> str:
        """Vault-relative path the note will be written to."""
        name = ensure_note_extension(self.filename)
        return f"{self.folder}/{name}" if self.folder else name

    @model_validator(mode="after")
    def validate_composed_path(self) -> "CreateNoteInput":
        checked_path(self.note_path)
        return self

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "filename": "Roadmap",
                    "content": "# Roadmap\n\n- [ ] Ship v1",
                    "folder": "Projects",
                },
                {
                    "filename": "Scratch.md",
                    "content": "",
                    "overwrite": True,
                    "vault": "personal",
                },
            ]
        }


class AppendNoteInput(BaseNoteInput):
    """Input model for append_to_note tool.

    Inserts content at the end, at the start, or right after the frontmatter
    block of an existing note.

    Examples:
        >>> AppendNoteInput(path="Daily/2025-01-15.md", content="- 15:00 review")
        >>> AppendNoteInput(path="Inbox.md", content="Top item", position="start")
    """

    content: str = Field(
        description=(
            "Markdown content to insert. "
            "Newline separator is added automatically if needed. "
            "Must not be empty."
        )
    )

    position: str = Field(
        "end",
        description="Where to insert: 'end', 'start' or 'after_frontmatter'."
    )

    ensure_newline: bool = Field(
        True,
        description="Separate existing and new content with a newline when neither side has one."
    )

    @field_validator('content')
    @classmethod
    def validate_content_not_empty(cls, v: str) -> str:
        """Validate that content is not empty.

        Raises:
            PydanticCustomError: If content is an empty string
        """
        if not v:
            raise missing_parameter("Content parameter is required")
        return v

    @field_validator('position')
    @classmethod
    def validate_position(cls, v: str) -> str:
        cleaned = v.strip().lower()
        if cleaned not in APPEND_POSITIONS:
            raise invalid_parameter(
                f"Invalid position '{v}'. Expected one of: {', '.join(APPEND_POSITIONS)}"
            )
        return cleaned

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "path": "Daily/2025-01-15.md",
                    "content": "## Evening\n\n- Completed project review",
                },
                {
                    "path": "Ideas.md",
                    "content": "New idea",
                    "position": "after_frontmatter",
                    "ensure_newline": False,
                },
            ]
        }
