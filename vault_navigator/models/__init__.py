"""Pydantic input models for MCP tool validation.

Each model represents the arguments of one tool, with field-level
validation and descriptive error messages. Validation runs before any
vault access.

Architecture:
- base: VaultInput and BaseNoteInput with shared vault/path validation
- note_models: get_note, create_note and append_to_note
- search_models: search_notes
- graph_models: get_related_notes
"""

from .base import BaseNoteInput, VaultInput
from .note_models import AppendNoteInput, CreateNoteInput, GetNoteInput
from .search_models import SearchNotesInput
from .graph_models import RelatedNotesInput

__all__ = [
    "VaultInput",
    "BaseNoteInput",
    "GetNoteInput",
    "CreateNoteInput",
    "AppendNoteInput",
    "SearchNotesInput",
    "RelatedNotesInput",
]
