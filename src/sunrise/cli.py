"""Command-line interface entry point for Sunrise."""

import argparse
import dataclasses
import shutil
import sys

from sunrise import __version__
from sunrise.app import SunriseApp
from sunrise.config import Config, get_config
from sunrise.services.base import LauncherError, StartupDependencyError
from sunrise.services.launcher import SessionLauncher
from sunrise.state.events import Selection
from sunrise.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="sunrise",
        description="Pick a Compute Engine VM from a terminal tree and SSH into it.",
    )
    parser.add_argument(
        "-p",
        "--project",
        help="GCP project ID to use (skips project selection)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: SUNRISE_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--log-file", help="Write logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def check_dependencies(config: Config) -> None:
    """Make sure the gcloud CLI is installed.

    Raises:
        StartupDependencyError: If the gcloud executable is not on PATH
    """
    if shutil.which(config.gcloud_binary) is None:
        raise StartupDependencyError(
            f"{config.gcloud_binary} CLI is required but not installed. "
            "Please install Google Cloud SDK."
        )


def connect(selection: Selection, config: Config) -> int:
    """Hand off to ``gcloud compute ssh`` for the selected VM.

    Returns only when the hand-off fails.

    Returns:
        Process exit code
    """
    instance = selection.instance
    print(f"Connecting to {instance.instance_name} in project {selection.project_id}...")

    try:
        SessionLauncher(config).connect(
            selection.project_id, instance.instance_name, instance.zone or ""
        )
    except LauncherError as e:
        logger.error(f"SSH hand-off failed: {e}")
        print(f"SSH connection failed: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the Sunrise CLI.

    Returns:
        Process exit code
    """
    args = parse_args(argv)

    config = get_config()
    overrides = {
        key: value
        for key, value in (
            ("log_level", args.log_level),
            ("log_file", args.log_file),
            ("default_project", args.project),
        )
        if value is not None
    }
    config = dataclasses.replace(config, **overrides)

    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        enable_credential_scrubbing=config.enable_credential_scrubbing,
    )

    try:
        check_dependencies(config)
    except StartupDependencyError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = SunriseApp(project_id=config.default_project, config=config)
    try:
        selection = app.run()
    except Exception as e:
        logger.error(f"Error running program: {e}", exc_info=True)
        print(f"Error running program: {e}", file=sys.stderr)
        return 1

    if app.return_code:
        return app.return_code

    if selection is None:
        return 0

    return connect(selection, config)


if __name__ == "__main__":
    sys.exit(main())
