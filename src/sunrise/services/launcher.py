"""Hand-off to ``gcloud compute ssh`` by replacing the current process."""

import os
import shutil

from sunrise.config import Config, get_config
from sunrise.services.base import LauncherExecError, LauncherNotFoundError
from sunrise.utils.logging import get_logger

logger = get_logger(__name__)


class SessionLauncher:
    """Replaces the running process with an SSH session to a VM."""

    def __init__(self, config: Config | None = None) -> None:
        """Initialize the launcher.

        Args:
            config: Configuration to use (defaults to the global config)
        """
        self.config = config or get_config()

    @staticmethod
    def short_zone(zone: str) -> str:
        """Reduce a zone URL to its last path segment."""
        return zone.split("/")[-1]

    def build_command(self, project_id: str, instance_name: str, zone: str) -> list[str]:
        """Build the argv for the SSH session.

        Args:
            project_id: GCP project ID
            instance_name: VM instance name
            zone: Zone name or zone URL

        Returns:
            Argument vector, starting with the gcloud binary name
        """
        return [
            self.config.gcloud_binary,
            "compute",
            "ssh",
            instance_name,
            "--project",
            project_id,
            "--zone",
            self.short_zone(zone),
        ]

    def connect(self, project_id: str, instance_name: str, zone: str) -> None:
        """Replace the current process with ``gcloud compute ssh``.

        Does not return on success.

        Args:
            project_id: GCP project ID
            instance_name: VM instance name
            zone: Zone name or zone URL

        Raises:
            LauncherNotFoundError: If the gcloud executable is not on PATH
            LauncherExecError: If the exec call itself fails
        """
        binary = self.config.gcloud_binary
        path = shutil.which(binary)
        if path is None:
            raise LauncherNotFoundError(f"{binary} not found in PATH")

        args = self.build_command(project_id, instance_name, zone)
        logger.info(f"Handing off to: {' '.join(args)}")

        try:
            os.execve(path, args, os.environ)
        except OSError as e:
            logger.error(f"exec of {path} failed: {e}")
            raise LauncherExecError(f"failed to exec {path}: {e}") from e
