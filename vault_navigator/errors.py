"""Exception types raised by core operations.

Each error carries the response ``code`` reported to the caller and optional
suggestions. The classes also derive from the closest builtin exception so
callers can keep catching ``FileNotFoundError``, ``ValueError`` and friends.
"""

from __future__ import annotations

from typing import Optional


class VaultToolError(Exception):
    """Base class for errors that map onto a response error code."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, suggestions: Optional[list[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestions = suggestions or None


class MissingParameterError(VaultToolError, ValueError):
    code = "MISSING_PARAMETER"


class InvalidPathError(VaultToolError, ValueError):
    code = "INVALID_PATH"


class InvalidParameterError(VaultToolError, ValueError):
    code = "INVALID_PARAMETER"


class NoteNotFoundError(VaultToolError, FileNotFoundError):
    code = "NOTE_NOT_FOUND"


class NoteExistsError(VaultToolError, FileExistsError):
    code = "FILE_EXISTS"


class PathIsFolderError(VaultToolError, IsADirectoryError):
    code = "PATH_IS_FOLDER"


class FolderCreateError(VaultToolError, OSError):
    code = "FOLDER_CREATE_ERROR"


class NoteReadError(VaultToolError, OSError):
    code = "READ_ERROR"
