"""Shared pytest fixtures for the create-project test suite.

Provides reusable fixtures for:
- A template directory holding base and feature files
- Settings pointing at that template directory
- A ``ScaffoldRequest`` factory
- Mock subprocess helpers and a recorder for scaffolder commands
- A buffer capturing the shared Rich console
"""

from __future__ import annotations

import io
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from rich.console import Console

from create_project.config import Settings
from create_project.scaffolder.models import ScaffoldRequest


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary parent directory for generated projects (auto-cleanup)."""
    project_dir = tmp_path / "workspace"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A template directory with every base file and the deployment files."""
    root = tmp_path / "template"
    files: dict[str, str] = {
        ".gitignore": "node_modules/\n.env\n",
        "README.md": "# Starter\n",
        ".claude/settings.json": json.dumps({"hooks": {}}),
        ".claude/agents/reviewer.md": "# Reviewer agent\n",
        "vercel.json": json.dumps({"version": 2}),
        ".cloudflare/wrangler.toml": 'name = "app"\n',
    }
    for rel_path, content in files.items():
        file_path = root / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def empty_template_dir(tmp_path: Path) -> Path:
    """A template directory with nothing in it."""
    root = tmp_path / "empty-template"
    root.mkdir()
    return root


@pytest.fixture
def settings(template_dir: Path) -> Settings:
    """Settings that copy from :func:`template_dir` and install with npm."""
    return Settings(template_dir=template_dir, package_manager="npm")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@pytest.fixture
def make_request(tmp_project_dir: Path) -> Callable[..., ScaffoldRequest]:
    """Factory for ``ScaffoldRequest`` objects rooted in :func:`tmp_project_dir`.

    Git and install are skipped unless asked for.

    Usage:
        def test_x(make_request):
            request = make_request("my-app", preset="react", features=["auth"])
    """
    def factory(
        name: str = "my-app",
        preset: str = "static",
        features: list[str] | tuple[str, ...] = (),
        skip_git: bool = True,
        skip_install: bool = True,
    ) -> ScaffoldRequest:
        return ScaffoldRequest(
            project_name=name,
            project_path=tmp_project_dir / name,
            preset=preset,
            features=features,
            skip_git=skip_git,
            skip_install=skip_install,
        )

    return factory


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def command_recorder():
    """Patch the scaffolder's ``run_command`` and record every call.

    ``results`` maps a command prefix (e.g. ``"git commit"``) to the
    ``(returncode, stdout, stderr)`` tuple or exception returned for it;
    anything unmatched succeeds.

    Usage:
        def test_x(command_recorder):
            recorder = command_recorder({"npm install": (1, "", "boom")})
            with recorder.patch:
                ...
            assert recorder.commands == [["npm", "install"]]
    """
    def factory(results: dict[str, Any] | None = None) -> Any:
        results = results or {}
        recorder = MagicMock()
        recorder.commands = []
        recorder.cwds = []

        async def fake_run_command(cmd: list[str], cwd: Any = None, **kwargs: Any):
            recorder.commands.append(list(cmd))
            recorder.cwds.append(Path(cwd) if cwd else None)
            joined = " ".join(cmd)
            for prefix, outcome in results.items():
                if joined.startswith(prefix):
                    if isinstance(outcome, BaseException):
                        raise outcome
                    return outcome
            return (0, "", "")

        recorder.patch = patch(
            "create_project.scaffolder.generator.run_command",
            side_effect=fake_run_command,
        )
        return recorder

    return factory


# ---------------------------------------------------------------------------
# Console capture
# ---------------------------------------------------------------------------

@pytest.fixture
def captured_console():
    """Route the shared Rich console into a buffer and return the buffer.

    The console is wide enough that messages are never wrapped.
    """
    buffer = io.StringIO()
    wide = Console(file=buffer, width=500, color_system=None)
    with patch("create_project.utils.console", wide):
        yield buffer
