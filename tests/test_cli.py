"""Tests for the command-line entry point (create_project.cli)."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from create_project import __version__
from create_project.cli import build_parser, main

pytestmark = pytest.mark.unit


@pytest.fixture
def npm_env(template_dir):
    """Pin settings read from the environment for each CLI run."""
    env = {
        "CREATE_PROJECT_PACKAGE_MANAGER": "npm",
        "CREATE_PROJECT_TEMPLATE_DIR": str(template_dir),
    }
    with patch.dict("os.environ", env, clear=True):
        yield env


@pytest.fixture
def wizard_returning():
    """Patch ``ProjectWizard`` so ``run`` returns the given request."""
    def factory(request):
        wizard_cls = MagicMock()
        wizard_cls.return_value.run.return_value = request
        return patch("create_project.cli.ProjectWizard", wizard_cls), wizard_cls

    return factory


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.project_name is None
        assert args.preset is None
        assert args.skip_install is False
        assert args.skip_git is False

    def test_all_options(self):
        args = build_parser().parse_args(["my-app", "-p", "react", "--skip-install", "--skip-git"])
        assert args.project_name == "my-app"
        assert args.preset == "react"
        assert args.skip_install is True
        assert args.skip_git is True

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestArgumentErrors:
    def test_invalid_name_exits_1(self, npm_env):
        with patch("create_project.cli.ProjectWizard") as wizard_cls, \
                patch("create_project.cli.print_error") as err:
            with pytest.raises(SystemExit) as exc_info:
                main(["My App"])
        assert exc_info.value.code == 1
        assert "can only contain lowercase" in err.call_args.args[0]
        wizard_cls.assert_not_called()

    def test_unknown_preset_exits_1(self, npm_env):
        with patch("create_project.cli.ProjectWizard") as wizard_cls, \
                patch("create_project.cli.print_error") as err:
            with pytest.raises(SystemExit) as exc_info:
                main(["my-app", "--preset", "angular"])
        assert exc_info.value.code == 1
        assert "Unknown preset 'angular'" in err.call_args.args[0]
        wizard_cls.assert_not_called()

    def test_invalid_settings_exit_1(self):
        with patch.dict("os.environ", {"CREATE_PROJECT_PACKAGE_MANAGER": "cargo"}, clear=True), \
                patch("create_project.cli.print_error"):
            with pytest.raises(SystemExit) as exc_info:
                main(["my-app"])
        assert exc_info.value.code == 1


class TestRun:
    def test_arguments_passed_to_wizard(self, npm_env, wizard_returning):
        patcher, wizard_cls = wizard_returning(None)
        with patcher:
            main(["my-app", "-p", "nuxt", "--skip-git"])
        wizard_cls.return_value.run.assert_called_once_with(
            "my-app", "nuxt", skip_git=True, skip_install=False
        )

    def test_cancelled_returns_normally(self, npm_env, wizard_returning):
        patcher, _ = wizard_returning(None)
        with patcher, patch("create_project.cli.print_warning") as warn:
            assert main([]) is None
        warn.assert_called_once_with("Operation cancelled")

    def test_success(self, npm_env, wizard_returning, make_request):
        request = make_request("my-app", preset="astro", features=["auth"])
        patcher, _ = wizard_returning(request)
        with patcher, patch("create_project.cli.print_success") as ok, \
                patch("create_project.cli.print_summary_table") as summary:
            main(["my-app", "--skip-install", "--skip-git"])

        manifest = json.loads((request.project_path / "package.json").read_text(encoding="utf-8"))
        assert manifest["dependencies"] == {"astro": "^5.0.0", "next-auth": "^5.0.0"}
        assert ok.call_args_list[0].args[0] == "Project created successfully!"
        assert ok.call_args_list[-1].args[0].startswith("✓ Your project is ready!")

        rows = summary.call_args.args[0]
        assert rows["Name"] == "my-app"
        assert rows["Location"] == str(request.project_path)
        assert rows["Preset"] == "Astro Site"
        assert rows["Features"] == "auth"
        assert rows["Git"] == "skipped"
        assert rows["Dependencies"] == "skipped"
        assert rows["Files"].startswith("5 (")

    def test_install_failure_exits_1(self, npm_env, wizard_returning, make_request, command_recorder):
        request = make_request(skip_install=False)
        patcher, _ = wizard_returning(request)
        recorder = command_recorder({"npm install": (1, "", "ERR! 404")})
        with patcher, recorder.patch, patch("create_project.cli.print_error") as err:
            with pytest.raises(SystemExit) as exc_info:
                main([])
        assert exc_info.value.code == 1
        assert [c.args[0] for c in err.call_args_list] == [
            "Error creating project",
            "Failed to install dependencies: ERR! 404",
        ]

    def test_install_error_with_brackets(
        self, npm_env, wizard_returning, make_request, command_recorder, captured_console
    ):
        request = make_request(skip_install=False)
        patcher, _ = wizard_returning(request)
        recorder = command_recorder({"npm install": (1, "", "npm ERR! [/] peer conflict")})
        with patcher, recorder.patch, pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "Failed to install dependencies: npm ERR! [/] peer conflict" in captured_console.getvalue()

    def test_git_failure_still_succeeds(self, npm_env, wizard_returning, make_request, command_recorder):
        request = make_request(skip_git=False)
        patcher, _ = wizard_returning(request)
        recorder = command_recorder({"git add": (1, "", "fatal: not a repository")})
        with patcher, recorder.patch, patch("create_project.scaffolder.generator.print_warning"), \
                patch("create_project.cli.print_summary_table") as summary:
            main([])
        assert summary.call_args.args[0]["Git"] == "failed at 'add'"
