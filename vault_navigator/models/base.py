"""Base Pydantic models for MCP tool input validation.

This module defines base models that provide common validation patterns
shared by every tool. Other input models inherit from these bases.

Base Models:
- VaultInput: Optional vault selection
- BaseNoteInput: Adds a validated vault-relative note path

Validation failures are raised as ``PydanticCustomError`` with the types
``missing_parameter``, ``invalid_path`` or ``invalid_parameter`` so the
response layer can report the matching error code.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from vault_navigator.core.vault_operations import validate_vault_path
from vault_navigator.errors import InvalidPathError, MissingParameterError


def missing_parameter(message: str) -> PydanticCustomError:
    return PydanticCustomError("missing_parameter", "{reason}", {"reason": message})


def invalid_parameter(message: str) -> PydanticCustomError:
    return PydanticCustomError("invalid_parameter", "{reason}", {"reason": message})


def checked_path(value: str, name: str = "Path") -> str:
    """Run :func:`validate_vault_path` and re-raise failures as pydantic errors."""
    try:
        return validate_vault_path(value)
    except MissingParameterError as exc:
        raise missing_parameter(f"{name} parameter is required") from exc
    except InvalidPathError as exc:
        raise PydanticCustomError("invalid_path", "{reason}", {"reason": exc.message}) from exc


class VaultInput(BaseModel):
    """Base model for every tool: selects the vault to operate on."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name from vaults.yaml (omit to use the default vault)."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Validate vault name format.

        Args:
            v: The vault name to validate

        Returns:
            The stripped vault name or None

        Raises:
            PydanticCustomError: If vault name is an empty string
        """
        if v is not None and not v.strip():
            raise invalid_parameter(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the default vault, "
                "or provide a vault name from vaults.yaml."
            )

        return v.strip() if v else None


class BaseNoteInput(VaultInput):
    """Base model for operations on an existing note.

    Provides standard validation for note paths. The path is vault-relative,
    uses forward slashes and includes the ``.md`` extension.
    """

    path: str = Field(
        description=(
            "Vault-relative path to the note, including the .md extension. "
            "Examples: 'Projects/Roadmap.md', 'Daily/2025-01-15.md'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Projects/Roadmap.md", "Daily/2025-01-15.md", "README.md"]
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate the note path for safety and format.

        Enforces:
        - Non-empty path
        - No path traversal attempts (.., .)
        - Relative path only (no leading '/', no drive letter)

        Backslashes are normalized to forward slashes.
        """
        return checked_path(v)
