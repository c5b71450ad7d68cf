"""Unit tests for the command-line entry point."""

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from sunrise.cli import check_dependencies, connect, main, parse_args
from sunrise.config import Config
from sunrise.services.base import LauncherExecError, LauncherNotFoundError, StartupDependencyError
from sunrise.state.events import Selection


@pytest.fixture
def selection(make_instance: Any) -> Selection:
    """A selected VM."""
    return Selection(project_id="proj-prod", instance=make_instance("web-1", group="web-fleet"))


@pytest.fixture
def mock_app() -> Any:
    """Patch SunriseApp with a mock that quits without a selection."""
    with patch("sunrise.cli.SunriseApp") as mock_class:
        app = mock_class.return_value
        app.run.return_value = None
        app.return_code = 0
        yield mock_class


@pytest.fixture(autouse=True)
def no_logging_setup() -> Any:
    """Keep the test runner's logging handlers in place."""
    with patch("sunrise.cli.setup_logging") as mock_setup:
        yield mock_setup


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Test parsing without arguments."""
        args = parse_args([])

        assert args.project is None
        assert args.log_level is None
        assert args.log_file is None

    def test_project(self) -> None:
        """Test the short and long project options."""
        assert parse_args(["-p", "proj-prod"]).project == "proj-prod"
        assert parse_args(["--project", "proj-dev"]).project == "proj-dev"

    def test_log_level_case_insensitive(self) -> None:
        """Test that log levels are upper-cased."""
        assert parse_args(["--log-level", "debug"]).log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        """Test that unknown log levels are rejected."""
        with pytest.raises(SystemExit):
            parse_args(["--log-level", "chatty"])


class TestCheckDependencies:
    """Tests for the startup dependency check."""

    def test_gcloud_present(self) -> None:
        """Test that nothing is raised when gcloud is found."""
        with patch("sunrise.cli.shutil.which", return_value="/usr/bin/gcloud") as mock_which:
            check_dependencies(Config())

        mock_which.assert_called_once_with("gcloud")

    def test_gcloud_missing(self) -> None:
        """Test that a missing gcloud is fatal."""
        with (
            patch("sunrise.cli.shutil.which", return_value=None),
            pytest.raises(StartupDependencyError, match="Google Cloud SDK"),
        ):
            check_dependencies(Config())


class TestConnect:
    """Tests for the SSH hand-off wrapper."""

    def test_launcher_called(self, selection: Selection) -> None:
        """Test that the selection is passed to the launcher."""
        with patch("sunrise.cli.SessionLauncher") as mock_launcher:
            assert connect(selection, Config()) == 0

        mock_launcher.return_value.connect.assert_called_once_with(
            "proj-prod", "web-1", selection.instance.zone
        )

    def test_launcher_not_found(
        self, selection: Selection, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a missing launcher gives a non-zero exit."""
        with patch("sunrise.cli.SessionLauncher") as mock_launcher:
            mock_launcher.return_value.connect.side_effect = LauncherNotFoundError(
                "gcloud not found in PATH"
            )
            assert connect(selection, Config()) == 1

        captured = capsys.readouterr()
        assert "Connecting to web-1 in project proj-prod..." in captured.out
        assert "SSH connection failed: gcloud not found in PATH" in captured.err

    def test_exec_failure(self, selection: Selection) -> None:
        """Test that a failed exec gives a non-zero exit."""
        with patch("sunrise.cli.SessionLauncher") as mock_launcher:
            mock_launcher.return_value.connect.side_effect = LauncherExecError("denied")
            assert connect(selection, Config()) == 1


class TestMain:
    """Tests for main()."""

    def test_missing_gcloud_exits_before_ui(
        self, mock_app: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that the UI never starts without gcloud."""
        with patch("sunrise.cli.shutil.which", return_value=None):
            assert main([]) == 1

        mock_app.assert_not_called()
        assert "Error: gcloud CLI is required" in capsys.readouterr().err

    def test_quit_exits_zero(self, mock_app: MagicMock) -> None:
        """Test that quitting without a selection exits cleanly."""
        with (
            patch("sunrise.cli.shutil.which", return_value="/usr/bin/gcloud"),
            patch("sunrise.cli.connect") as mock_connect,
        ):
            assert main([]) == 0

        mock_connect.assert_not_called()
        assert mock_app.call_args.kwargs["project_id"] is None

    def test_project_option_passed_to_app(self, mock_app: MagicMock) -> None:
        """Test that --project skips project selection."""
        with patch("sunrise.cli.shutil.which", return_value="/usr/bin/gcloud"):
            main(["--project", "proj-prod"])

        assert mock_app.call_args.kwargs["project_id"] == "proj-prod"
        assert mock_app.call_args.kwargs["config"].default_project == "proj-prod"

    def test_project_from_environment(
        self, mock_app: MagicMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that SUNRISE_PROJECT is used when --project is absent."""
        monkeypatch.setenv("SUNRISE_PROJECT", "proj-env")
        with patch("sunrise.cli.shutil.which", return_value="/usr/bin/gcloud"):
            main([])

        assert mock_app.call_args.kwargs["project_id"] == "proj-env"

    def test_selection_connects(self, mock_app: MagicMock, selection: Selection) -> None:
        """Test that a selection is handed to the launcher."""
        mock_app.return_value.run.return_value = selection
        with (
            patch("sunrise.cli.shutil.which", return_value="/usr/bin/gcloud"),
            patch("sunrise.cli.connect", return_value=1) as mock_connect,
        ):
            assert main([]) == 1

        assert mock_connect.call_args.args[0] is selection

    def test_event_loop_failure(
        self, mock_app: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that an unexpected UI failure exits non-zero."""
        mock_app.return_value.run.side_effect = RuntimeError("terminal gone")
        with patch("sunrise.cli.shutil.which", return_value="/usr/bin/gcloud"):
            assert main([]) == 1

        assert "Error running program: terminal gone" in capsys.readouterr().err

    def test_app_return_code(self, mock_app: MagicMock) -> None:
        """Test that a non-zero app return code is propagated."""
        mock_app.return_value.return_code = 2
        with patch("sunrise.cli.shutil.which", return_value="/usr/bin/gcloud"):
            assert main([]) == 2

    def test_logging_options(self, mock_app: MagicMock, no_logging_setup: MagicMock) -> None:
        """Test that logging options reach setup_logging."""
        with patch("sunrise.cli.shutil.which", return_value="/usr/bin/gcloud"):
            main(["--log-level", "debug", "--log-file", "/tmp/sunrise.log"])

        no_logging_setup.assert_called_once_with(
            level="DEBUG",
            log_file="/tmp/sunrise.log",
            enable_credential_scrubbing=True,
        )
