"""Core vault operations and path validation."""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath

from vault_navigator.constants import MAX_SUGGESTIONS, NOTE_EXTENSION
from vault_navigator.data_models import EntryKind, VaultMetadata
from vault_navigator.errors import FolderCreateError, InvalidPathError, MissingParameterError

logger = logging.getLogger(__name__)

DRIVE_LETTER_PATTERN = re.compile(r"^[A-Za-z]:")


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Args:
        vault: Metadata describing the vault to use.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def validate_vault_path(path: str) -> str:
    """Validate a vault-relative path supplied by a caller.

    Backslashes are normalized to forward slashes. The path must be relative
    (no leading ``/`` and no drive letter) and must not contain ``.`` or ``..``
    segments.

    Args:
        path: Raw path from the caller.

    Returns:
        The normalized path.

    Raises:
        MissingParameterError: If ``path`` is empty.
        InvalidPathError: If ``path`` is absolute or attempts traversal.
    """
    cleaned = (path or "").strip().replace("\\", "/")
    if not cleaned:
        raise MissingParameterError("Path parameter is required")

    if cleaned.startswith("/") or DRIVE_LETTER_PATTERN.match(cleaned):
        raise InvalidPathError(
            f"Absolute paths are not allowed. Use vault-relative paths: \"{cleaned}\""
        )

    if any(part in {".", ".."} for part in cleaned.split("/")):
        raise InvalidPathError(f"Directory traversal (..) is not allowed: \"{cleaned}\"")

    return cleaned


def ensure_note_extension(filename: str) -> str:
    """Append ``.md`` unless the name already ends with it."""
    return filename if filename.lower().endswith(NOTE_EXTENSION) else f"{filename}{NOTE_EXTENSION}"


def resolve_note_path(vault: VaultMetadata, path: str) -> Path:
    """Resolve a validated vault-relative path to an absolute path inside the vault.

    Raises:
        InvalidPathError: If the resolved path escapes the vault root (for example
            through a symlink).
    """
    candidate = (vault.path / PurePosixPath(path)).resolve(strict=False)
    vault_root = vault.path.resolve(strict=False)

    if not candidate.is_relative_to(vault_root):
        raise InvalidPathError(f"Path escapes the configured vault: \"{path}\"")

    return candidate


def classify_entry(vault: VaultMetadata, path: str) -> EntryKind:
    """Report whether ``path`` is a file, a folder or missing."""
    target = resolve_note_path(vault, path)
    if target.is_file():
        return EntryKind.FILE
    if target.is_dir():
        return EntryKind.FOLDER
    return EntryKind.MISSING


def ensure_folder(vault: VaultMetadata, folder: str) -> bool:
    """Create ``folder`` (and parents) when missing.

    Returns:
        ``True`` when the folder had to be created.

    Raises:
        FolderCreateError: If a file occupies the folder path or creation fails.
    """
    kind = classify_entry(vault, folder)
    if kind is EntryKind.FOLDER:
        return False
    if kind is EntryKind.FILE:
        raise FolderCreateError(f"Path exists but is not a folder: \"{folder}\"")

    try:
        resolve_note_path(vault, folder).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FolderCreateError(f"Failed to create folder \"{folder}\": {exc}") from exc

    logger.info("Created folder '%s' in vault '%s'", folder, vault.name)
    return True


def note_title(path: str) -> str:
    """Basename of a note path without its extension."""
    return PurePosixPath(path).stem


def list_markdown_files(vault: VaultMetadata) -> list[str]:
    """List vault-relative paths of every markdown note, sorted.

    Hidden directories such as ``.obsidian`` and ``.trash`` are skipped.
    Notes that resolve outside the vault (symlinks to elsewhere) are skipped.
    """
    ensure_vault_ready(vault)
    root = vault.path.resolve(strict=False)

    notes: list[str] = []
    for path in root.rglob(f"*{NOTE_EXTENSION}"):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if not path.is_file():
            continue
        if not path.resolve(strict=False).is_relative_to(root):
            logger.warning("Skipping '%s': it resolves outside vault '%s'", relative.as_posix(), vault.name)
            continue
        notes.append(relative.as_posix())

    notes.sort()
    return notes


def find_similar_paths(
    vault: VaultMetadata,
    target: str,
    max_results: int = MAX_SUGGESTIONS,
) -> list[str]:
    """Suggest existing note paths resembling ``target``.

    Each note scores 100 for an exact (case-insensitive) match, 50 when its
    path contains the target, 30 when its basename contains it, plus one point
    per character of the target that appears anywhere in the path.
    """
    target_lower = target.lower()
    if not target_lower:
        return []

    try:
        candidates = list_markdown_files(vault)
    except OSError as exc:
        logger.warning("Could not list notes for suggestions in vault '%s': %s", vault.name, exc)
        return []

    scored: list[tuple[int, str]] = []
    for candidate in candidates:
        path_lower = candidate.lower()
        score = 0
        if path_lower == target_lower:
            score += 100
        if target_lower in path_lower:
            score += 50
        if target_lower in note_title(candidate).lower():
            score += 30
        score += sum(1 for char in target_lower if char in path_lower)
        if score > 0:
            scored.append((score, candidate))

    scored.sort(key=lambda item: (-item[0], item[1]))
    return [path for _, path in scored[:max_results]]
