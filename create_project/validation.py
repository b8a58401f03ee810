"""Project name validation and destination path resolution."""

from __future__ import annotations

import os
import re
from pathlib import Path

from pydantic import BaseModel

MAX_NAME_LENGTH = 214

# Doubles as the package.json "name" constraint, so uppercase is rejected
# everywhere, including after a scope prefix.
_NAME_PATTERN = re.compile(r"^[@a-z0-9\-~][a-z0-9\-._~]*$")

RESERVED_NAMES: frozenset[str] = frozenset(
    {"node_modules", "favicon.ico", ".git", ".github", ".claude"}
)


class ValidationResult(BaseModel):
    """Outcome of :func:`validate_project_name`."""

    valid: bool
    error: str | None = None


def validate_project_name(name: str | None) -> ValidationResult:
    """Check *name* against the project naming rules.

    Rules are applied in order and the first failure wins: required, at most
    214 characters, allowed characters only, not a reserved name.
    """
    if not name or not name.strip():
        return ValidationResult(valid=False, error="Project name is required")

    if len(name) > MAX_NAME_LENGTH:
        return ValidationResult(
            valid=False,
            error=f"Project name must be less than {MAX_NAME_LENGTH} characters",
        )

    if not _NAME_PATTERN.fullmatch(name):
        return ValidationResult(
            valid=False,
            error=(
                "Project name can only contain lowercase letters, numbers, "
                "hyphens, and underscores"
            ),
        )

    if name in RESERVED_NAMES:
        return ValidationResult(valid=False, error=f'"{name}" is a reserved name')

    return ValidationResult(valid=True)


def resolve_project_path(name: str, cwd: str | Path | None = None) -> Path:
    """Return the absolute destination for *name*.

    Pure path arithmetic against *cwd* (default: the process working
    directory); nothing is read from or written to disk.
    """
    base = Path(cwd) if cwd is not None else Path(os.getcwd())
    return Path(os.path.normpath(os.path.join(os.path.abspath(base), name)))


def is_directory_empty(path: str | Path) -> bool:
    """Return ``True`` if *path* is missing or contains no entries."""
    try:
        return not any(Path(path).iterdir())
    except FileNotFoundError:
        return True
    except NotADirectoryError:
        return False
