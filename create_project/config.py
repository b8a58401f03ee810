"""create-project settings.

Tool-level knobs for the scaffolder: where the bundled base files live,
which package manager installs dependencies, and the initial commit message.
All settings use a Pydantic v2 model so they are validated at construction
time and can be overridden from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from create_project.utils import INSTALL_COMMANDS, get_package_manager

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "base"

DEFAULT_BASE_FILES: tuple[str, ...] = (".claude/", ".gitignore", "README.md")

DEFAULT_COMMIT_MESSAGE = "Initial commit from create-claude-project"


class Settings(BaseModel):
    """Global create-project settings.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and handed to the scaffolder.
    """

    template_dir: Path = Field(
        default=DEFAULT_TEMPLATE_DIR,
        description="Directory the base files are copied from",
    )
    base_files: tuple[str, ...] = Field(
        default=DEFAULT_BASE_FILES,
        description="Files/directories copied into every project when present",
    )
    package_manager: str = Field(
        default_factory=get_package_manager,
        description="Package manager used for dependency installation",
    )
    commit_message: str = Field(default=DEFAULT_COMMIT_MESSAGE, min_length=1)

    @field_validator("package_manager")
    @classmethod
    def _known_package_manager(cls, value: str) -> str:
        if value not in INSTALL_COMMANDS:
            known = ", ".join(INSTALL_COMMANDS)
            raise ValueError(f"Unknown package manager '{value}' (expected one of: {known})")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            CREATE_PROJECT_TEMPLATE_DIR, CREATE_PROJECT_PACKAGE_MANAGER,
            CREATE_PROJECT_COMMIT_MESSAGE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_PROJECT_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["CREATE_PROJECT_TEMPLATE_DIR"])
        if os.environ.get("CREATE_PROJECT_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["CREATE_PROJECT_PACKAGE_MANAGER"]
        if os.environ.get("CREATE_PROJECT_COMMIT_MESSAGE"):
            kwargs["commit_message"] = os.environ["CREATE_PROJECT_COMMIT_MESSAGE"]
        return cls(**kwargs)
