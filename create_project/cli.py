"""Command-line entry point.

Usage::

    create-project
    create-project my-app --preset react --skip-install
    python -m create_project my-app -p static --skip-git
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel

from create_project import __version__
from create_project.config import Settings
from create_project.registry import DEFAULT_REGISTRY
from create_project.scaffolder import ProjectScaffolder, ScaffoldRequest, ScaffoldResult
from create_project.utils import (
    console,
    create_progress,
    format_command,
    format_file_size,
    get_install_command,
    print_error,
    print_note,
    print_success,
    print_summary_table,
    print_warning,
)
from create_project.validation import validate_project_name
from create_project.wizard import ProjectWizard


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``create-project``."""
    presets = "|".join(DEFAULT_REGISTRY.preset_keys())
    parser = argparse.ArgumentParser(
        prog="create-project",
        description="Create a new project with Claude Code Sidekick",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-project\n"
            "  create-project my-app --preset react\n"
            "  create-project my-app -p static --skip-install --skip-git\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        metavar="project-name",
        help="Name of the project (prompted if omitted)",
    )
    parser.add_argument(
        "--preset", "-p",
        default=None,
        help=f"Project preset ({presets})",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Skip dependency installation",
    )
    parser.add_argument(
        "--skip-git",
        action="store_true",
        help="Skip git initialization",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-project`` and ``python -m create_project``.

    Exits with status 0 on success or cancellation and 1 on any fatal error.
    """
    args = build_parser().parse_args(argv)

    console.print(Panel("[bold cyan]Create Claude Project[/bold cyan]", expand=False))

    if args.project_name is not None:
        result = validate_project_name(args.project_name)
        if not result.valid:
            print_error(f"Error: {result.error}")
            sys.exit(1)

    if args.preset is not None and args.preset not in DEFAULT_REGISTRY.preset_keys():
        print_error(
            f"Error: Unknown preset '{args.preset}' "
            f"(expected one of: {', '.join(DEFAULT_REGISTRY.preset_keys())})"
        )
        sys.exit(1)

    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        print_error(f"Error: Invalid settings: {exc}")
        sys.exit(1)

    request = ProjectWizard().run(
        args.project_name,
        args.preset,
        skip_git=args.skip_git,
        skip_install=args.skip_install,
    )
    if request is None:
        print_warning("Operation cancelled")
        return

    scaffolder = ProjectScaffolder(settings=settings)
    with create_progress() as progress:
        progress.add_task("Creating project structure...", total=None)
        outcome = asyncio.run(scaffolder.scaffold(request))

    if not outcome.success:
        print_error("Error creating project")
        print_error(outcome.error or "Unknown error")
        sys.exit(1)

    print_success("Project created successfully!")
    print_summary_table(_summary(request, outcome), title="Project")
    install = format_command(get_install_command(settings.package_manager))
    print_note(
        f"[cyan]cd[/cyan] {escape(request.project_name)}\n[cyan]{escape(install)}[/cyan]\n"
        "[cyan]npm run dev[/cyan]",
        "Next steps",
    )
    print_success("✓ Your project is ready! Start building with Claude.")


def _summary(request: ScaffoldRequest, outcome: ScaffoldResult) -> dict[str, str]:
    preset = DEFAULT_REGISTRY.lookup_preset(request.preset)
    written = [p for p in outcome.files if p.is_file()]
    size = sum(p.stat().st_size for p in written)

    if outcome.git is None:
        git = "skipped"
    elif outcome.git.ok:
        git = "initialized"
    else:
        git = f"failed at '{outcome.git.failed_step.value}'" if outcome.git.failed_step else "failed"

    return {
        "Name": request.project_name,
        "Location": str(outcome.project_path),
        "Preset": preset.name,
        "Features": ", ".join(request.features) or "none",
        "Files": f"{len(written)} ({format_file_size(size)})",
        "Git": git,
        "Dependencies": "skipped" if request.skip_install else "installed",
    }
