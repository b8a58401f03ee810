"""create-project scaffolder -- materialises a new project directory.

Takes a ``ScaffoldRequest`` built by the wizard (or by hand) and writes the
base files, starter document, ``package.json`` and ``.env.example``, then
optionally initialises git and installs dependencies.

Quick usage::

    from pathlib import Path

    from create_project.scaffolder import ProjectScaffolder, ScaffoldRequest

    request = ScaffoldRequest(
        project_name="my-app",
        project_path=Path("/tmp/my-app"),
        preset="astro",
        features=["database"],
        skip_install=True,
    )
    result = await ProjectScaffolder().scaffold(request)
"""

from create_project.scaffolder.generator import (
    InstallError,
    ProjectScaffolder,
    ScaffoldError,
    scaffold_project,
)
from create_project.scaffolder.manifest import build_manifest, merge_dependencies
from create_project.scaffolder.models import (
    GitBootstrapResult,
    GitStep,
    ScaffoldRequest,
    ScaffoldResult,
)
from create_project.scaffolder.templates import TemplateRenderer

__all__ = [
    "GitBootstrapResult",
    "GitStep",
    "InstallError",
    "ProjectScaffolder",
    "ScaffoldError",
    "ScaffoldRequest",
    "ScaffoldResult",
    "TemplateRenderer",
    "build_manifest",
    "merge_dependencies",
    "scaffold_project",
]
