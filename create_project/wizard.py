"""Interactive front-end that turns prompt answers into a ``ScaffoldRequest``.

The flow is a small state machine::

    collecting-name -> collecting-preset -> collecting-features -> confirming -> done

Any state may move to ``cancelled`` (Ctrl-C, end of input, or declining the
confirmation).  Cancellation is not an error: :meth:`ProjectWizard.run`
returns ``None`` and the caller exits cleanly.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from create_project.registry import DEFAULT_REGISTRY, PresetKey, Registry
from create_project.scaffolder.models import ScaffoldRequest
from create_project.utils import console as default_console
from create_project.utils import print_error, print_warning
from create_project.validation import (
    is_directory_empty,
    resolve_project_path,
    validate_project_name,
)


class WizardState(str, Enum):
    """States of the prompt flow."""
    COLLECTING_NAME = "collecting-name"
    COLLECTING_PRESET = "collecting-preset"
    COLLECTING_FEATURES = "collecting-features"
    CONFIRMING = "confirming"
    DONE = "done"
    CANCELLED = "cancelled"


DEFAULT_PRESET = PresetKey.ASTRO.value

# (key, label, hint) in menu order.
PRESET_CHOICES: list[tuple[str, str, str]] = [
    ("static", "Static Website", "HTML, Modern CSS, Vanilla JS - Perfect for landing pages"),
    ("astro", "Astro Site", "Astro 5, Modern CSS, Islands - Best for content sites"),
    ("react", "React App", "React, TypeScript, Vite - Modern SPA development"),
    ("nextjs", "Next.js App", "Next.js 15, App Router - Full-stack React framework"),
    ("nuxt", "Vue/Nuxt", "Vue 3, Nuxt, Composition API - Full-stack Vue framework"),
    ("svelte", "SvelteKit", "Svelte 5, SvelteKit, Runes - Modern reactive framework"),
    ("fullstack", "Full Stack", "Complete backend + frontend + database stack"),
]

FEATURE_CHOICES: list[tuple[str, str, str]] = [
    ("database", "Database", "Neon PostgreSQL with Prisma"),
    ("auth", "Authentication", "User authentication system"),
    ("analytics", "Analytics", "Sentry error tracking"),
    ("deployment", "Deployment Config", "Vercel/Cloudflare setup"),
]


class ProjectWizard:
    """Collects a project name, preset and features, then asks to confirm."""

    def __init__(
        self,
        registry: Registry | None = None,
        console: Console | None = None,
        cwd: str | Path | None = None,
    ) -> None:
        self.registry = registry or DEFAULT_REGISTRY
        self.console = console or default_console
        self.cwd = cwd
        self.state = WizardState.COLLECTING_NAME
        self._answers: dict[str, Any] = {}
        self._handlers: dict[WizardState, Callable[[], WizardState]] = {
            WizardState.COLLECTING_NAME: self._collect_name,
            WizardState.COLLECTING_PRESET: self._collect_preset,
            WizardState.COLLECTING_FEATURES: self._collect_features,
            WizardState.CONFIRMING: self._confirm,
        }

    def run(
        self,
        project_name: str | None = None,
        preset: str | None = None,
        *,
        skip_git: bool = False,
        skip_install: bool = False,
    ) -> ScaffoldRequest | None:
        """Drive the prompts and return the request, or ``None`` if cancelled.

        A *project_name* or *preset* given up front skips its prompt; both
        are expected to be valid already.
        """
        self.state = WizardState.COLLECTING_NAME
        self._answers = {"project_name": project_name, "preset": preset}

        try:
            while self.state not in (WizardState.DONE, WizardState.CANCELLED):
                self.state = self._handlers[self.state]()
        except (KeyboardInterrupt, EOFError):
            self.state = WizardState.CANCELLED

        if self.state is WizardState.CANCELLED:
            return None

        name = self._answers["project_name"]
        return ScaffoldRequest(
            project_name=name,
            project_path=resolve_project_path(name, self.cwd),
            preset=self._answers["preset"],
            features=self._answers["features"],
            skip_git=skip_git,
            skip_install=skip_install,
        )

    # -- States ------------------------------------------------------------

    def _collect_name(self) -> WizardState:
        name = self._answers.get("project_name")
        while not name:
            answer = Prompt.ask(
                "What is your project named? [dim](my-awesome-app)[/dim]",
                console=self.console,
                default="",
                show_default=False,
            )
            result = validate_project_name(answer)
            if result.valid:
                name = answer
            else:
                print_error(result.error or "Invalid project name")

        self._answers["project_name"] = name
        destination = resolve_project_path(name, self.cwd)
        if not is_directory_empty(destination):
            print_warning(
                f"{destination} already exists and is not empty; "
                "generated files will overwrite files with the same name."
            )
        return WizardState.COLLECTING_PRESET

    def _collect_preset(self) -> WizardState:
        if self._answers.get("preset"):
            return WizardState.COLLECTING_FEATURES

        self.console.print(_choice_table("Choose your project type", PRESET_CHOICES))
        keys = [key for key, _, _ in PRESET_CHOICES if key in self.registry.preset_keys()]
        self._answers["preset"] = Prompt.ask(
            "Project type",
            console=self.console,
            choices=keys,
            default=DEFAULT_PRESET,
        )
        return WizardState.COLLECTING_FEATURES

    def _collect_features(self) -> WizardState:
        self.console.print(_choice_table("Select additional features", FEATURE_CHOICES))
        while True:
            answer = Prompt.ask(
                "Features [dim](comma-separated names or numbers, blank for none)[/dim]",
                console=self.console,
                default="",
                show_default=False,
            )
            try:
                self._answers["features"] = parse_feature_selection(answer)
            except ValueError as exc:
                print_error(str(exc))
                continue
            return WizardState.CONFIRMING

    def _confirm(self) -> WizardState:
        preset = self.registry.lookup_preset(self._answers["preset"])
        confirmed = Confirm.ask(
            f'Create project "[cyan]{escape(self._answers["project_name"])}[/cyan]" '
            f"with [green]{escape(preset.name)}[/green]?",
            console=self.console,
            default=True,
        )
        return WizardState.DONE if confirmed else WizardState.CANCELLED


def parse_feature_selection(answer: str) -> list[str]:
    """Parse a comma-separated multi-select answer into feature keys.

    Each item may be a feature key or its 1-based menu number.  Order is
    preserved and repeats are dropped.

    Raises:
        ValueError: If an item matches no menu entry.
    """
    keys = [key for key, _, _ in FEATURE_CHOICES]
    selected: list[str] = []
    for raw in answer.split(","):
        item = raw.strip().lower()
        if not item:
            continue
        if item.isdigit() and 1 <= int(item) <= len(keys):
            item = keys[int(item) - 1]
        if item not in keys:
            raise ValueError(f"Unknown feature '{raw.strip()}' (expected one of: {', '.join(keys)})")
        if item not in selected:
            selected.append(item)
    return selected


def _choice_table(title: str, choices: list[tuple[str, str, str]]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Key", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description", style="dim")
    for index, (key, label, hint) in enumerate(choices, start=1):
        table.add_row(str(index), key, label, hint)
    return table
