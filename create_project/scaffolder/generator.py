"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest`` and materialises the project directory: base
files, ``PROJECT_STARTER.md``, ``package.json``, ``.env.example``, then an
optional git bootstrap and an optional dependency install.  Steps run
strictly one after another; nothing is rolled back on failure.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from create_project.config import Settings
from create_project.registry import (
    DEFAULT_REGISTRY,
    FeatureDefinition,
    PresetDefinition,
    Registry,
    RegistryError,
)
from create_project.utils import (
    format_command,
    get_install_command,
    print_warning,
    run_command,
    save_json,
)

from .manifest import build_manifest
from .models import GitBootstrapResult, GitStep, ScaffoldRequest, ScaffoldResult
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a mandatory scaffolding step fails."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class InstallError(ScaffoldError):
    """Raised when dependency installation fails."""


# ---------------------------------------------------------------------------
# Starter document constants
# ---------------------------------------------------------------------------

# Rendered as-is; these do not reflect the preset's own toggles.
MASTER_TOGGLES: dict[str, bool] = {
    "MCP Servers": True,
    "Development Hooks": True,
    "Code Quality Rules": True,
    "AI Agents": True,
}

GETTING_STARTED: list[dict[str, str]] = [
    {"title": "Install dependencies", "command": "npm install"},
    {"title": "Start development server", "command": "npm run dev"},
    {"title": "Generate project plan", "command": "/project-planner"},
    {"title": "Generate tasks", "command": "/task-planner"},
    {"title": "Run tasks with AI agents", "command": "/task-runner"},
]


# ---------------------------------------------------------------------------
# Main scaffolder
# ---------------------------------------------------------------------------


class ProjectScaffolder:
    """Scaffolding orchestrator.

    Given a ``ScaffoldRequest``, writes into the destination directory:
    - the base files bundled with the tool (``.claude/``, ``.gitignore``,
      ``README.md``) plus any files the selected features stage
    - ``PROJECT_STARTER.md`` describing the preset and features
    - ``package.json`` with merged preset and feature dependencies
    - ``.env.example`` with the variables the features need

    and then optionally runs ``git init/add/commit`` and the package
    manager's install command.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        settings: Settings | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.registry = registry or DEFAULT_REGISTRY
        self.settings = settings or Settings()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Run every scaffolding step for *request*.

        Returns:
            A successful ``ScaffoldResult`` carrying the project path.

        Raises:
            RegistryError: If the preset or a feature is not registered.
                Raised before anything touches the disk.
            OSError: If the destination directory cannot be created.
            InstallError: If dependency installation was requested and failed.
        """
        preset = self.registry.lookup_preset(request.preset)
        features = [self.registry.lookup_feature(key) for key in request.features]
        root = request.project_path

        # 1. Destination directory
        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)

        # 2. Base files and feature files
        files = await self._copy_base_files(root, features)

        context = self._build_context(request, preset, features)

        # 3. Starter document
        files.append(
            await self.renderer.render_to_file(
                "PROJECT_STARTER.md.j2", root / "PROJECT_STARTER.md", context
            )
        )

        # 4. package.json
        manifest_path = root / "package.json"
        await save_json(
            build_manifest(request.project_name, preset, features), manifest_path
        )
        files.append(manifest_path)

        # 5. Environment template
        files.append(
            await self.renderer.render_to_file(
                ".env.example.j2", root / ".env.example", context
            )
        )

        # 6. Git bootstrap (soft failure)
        git_result = None
        if not request.skip_git:
            git_result = await self._init_git(root)

        # 7. Dependency install (hard failure)
        if not request.skip_install:
            await self._install_dependencies(root)

        return ScaffoldResult(
            success=True, project_path=root, git=git_result, files=files
        )

    async def scaffold(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Like :meth:`generate`, but fatal failures become a failed result.

        Files written before the failure stay on disk.
        """
        try:
            return await self.generate(request)
        except (ScaffoldError, RegistryError, OSError) as exc:
            return ScaffoldResult(success=False, error=str(exc))

    # -- Context building --------------------------------------------------

    def _build_context(
        self,
        request: ScaffoldRequest,
        preset: PresetDefinition,
        features: Sequence[FeatureDefinition],
    ) -> dict[str, Any]:
        """Build the Jinja2 template context."""
        return {
            "project_name": request.project_name,
            "preset": preset,
            "features": list(features),
            "feature_keys": list(request.features),
            "master_toggles": MASTER_TOGGLES,
            "getting_started": GETTING_STARTED,
        }

    # -- Base files --------------------------------------------------------

    async def _copy_base_files(
        self, root: Path, features: Sequence[FeatureDefinition]
    ) -> list[Path]:
        """Copy base and feature files from the template directory.

        Entries missing from the template directory are skipped.
        """
        entries = list(self.settings.base_files)
        for feature in features:
            entries.extend(f for f in feature.files if f not in entries)

        copied: list[Path] = []
        for entry in entries:
            src = self.settings.template_dir / entry
            dest = root / entry
            if not src.exists():
                continue
            await asyncio.to_thread(_copy_entry, src, dest)
            copied.append(dest)
        return copied

    # -- External tools ----------------------------------------------------

    async def _init_git(self, root: Path) -> GitBootstrapResult:
        """Initialise a repository and commit the generated files.

        Stops at the first failing step and reports it as a warning.
        """
        steps = [
            (GitStep.INIT, ["git", "init"]),
            (GitStep.ADD, ["git", "add", "."]),
            (GitStep.COMMIT, ["git", "commit", "-m", self.settings.commit_message]),
        ]
        for step, cmd in steps:
            try:
                returncode, _, stderr = await run_command(cmd, cwd=root)
            except OSError as exc:
                returncode, stderr = -1, str(exc)

            if returncode != 0:
                message = stderr or f"exit code {returncode}"
                print_warning(
                    f"Warning: Could not initialize git repository "
                    f"({format_command(cmd)}: {message})"
                )
                return GitBootstrapResult(ok=False, failed_step=step, message=message)

        return GitBootstrapResult(ok=True)

    async def _install_dependencies(self, root: Path) -> None:
        """Run the package manager's install command in *root*.

        Raises:
            InstallError: If the command cannot be started or exits non-zero.
        """
        cmd = get_install_command(self.settings.package_manager)
        cmd_str = format_command(cmd)
        try:
            returncode, _, stderr = await run_command(cmd, cwd=root)
        except OSError as exc:
            raise InstallError(
                f"Failed to install dependencies: {exc}", command=cmd_str
            ) from exc

        if returncode != 0:
            cause = stderr or f"{cmd_str} exited with code {returncode}"
            raise InstallError(
                f"Failed to install dependencies: {cause}",
                command=cmd_str,
                stderr=stderr,
            )


async def scaffold_project(
    request: ScaffoldRequest,
    *,
    registry: Registry | None = None,
    settings: Settings | None = None,
) -> ScaffoldResult:
    """Scaffold *request* with a fresh :class:`ProjectScaffolder`."""
    scaffolder = ProjectScaffolder(registry=registry, settings=settings)
    return await scaffolder.scaffold(request)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _copy_entry(src: Path, dest: Path) -> None:
    """Copy a file or directory tree, merging into existing directories."""
    if src.is_dir():
        shutil.copytree(src, dest, dirs_exist_ok=True)
    else:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
