"""Base service class for gcloud CLI interactions.

This module provides the error kinds raised by the inventory and launcher
services and a base class that runs ``gcloud`` subprocesses and parses their
JSON output.
"""

import asyncio
import json
import subprocess
from typing import Any, cast

from sunrise.config import Config, get_config
from sunrise.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryError(Exception):
    """Base class for inventory load failures."""

    pass


class InventoryQueryError(InventoryError):
    """gcloud could not be run or exited with an error."""

    pass


class InventoryParseError(InventoryError):
    """gcloud returned a payload that is not the expected JSON structure."""

    pass


class LauncherError(Exception):
    """Base class for SSH hand-off failures."""

    pass


class LauncherNotFoundError(LauncherError):
    """The launcher executable is not on PATH."""

    pass


class LauncherExecError(LauncherError):
    """Replacing the current process with the launcher failed."""

    pass


class StartupDependencyError(Exception):
    """A required executable is missing at startup."""

    pass


class BaseService:
    """Base class for gcloud-backed services.

    This class provides:
    - Subprocess execution of gcloud with JSON output
    - Error categorization into query and parse failures

    Failures are not retried; the first error is surfaced to the caller.
    """

    def __init__(self, config: Config | None = None) -> None:
        """Initialize the base service.

        Args:
            config: Configuration to use (defaults to the global config)
        """
        self.config = config or get_config()

    async def _run_gcloud_command(self, command: list[str]) -> list[dict[str, Any]]:
        """Run a gcloud command and return parsed JSON output.

        Args:
            command: Command arguments to pass to gcloud, including ``--format``

        Returns:
            List of parsed JSON objects from gcloud output

        Raises:
            InventoryQueryError: If gcloud cannot be started or exits non-zero
            InventoryParseError: If the output is not a JSON list of objects
        """
        binary = self.config.gcloud_binary
        command_line = " ".join([binary, *command])
        logger.debug(f"Running: {command_line}")

        try:
            process = await asyncio.create_subprocess_exec(
                binary,
                *command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except OSError as e:
            logger.error(f"Failed to start gcloud: {e}")
            raise InventoryQueryError(f"failed to run {binary}: {e}") from e

        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip()
            logger.error(f"gcloud command failed ({process.returncode}): {error_msg}")
            if error_msg:
                detail = error_msg.splitlines()[-1]
            else:
                detail = f"exit status {process.returncode}"
            raise InventoryQueryError(f"{command_line} failed: {detail}")

        try:
            result = json.loads(stdout.decode() or "[]")
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Failed to parse gcloud JSON output: {e}")
            raise InventoryParseError(f"invalid JSON from {binary}: {e}") from e

        if not isinstance(result, list) or not all(isinstance(item, dict) for item in result):
            logger.error(f"Unexpected gcloud payload type: {type(result).__name__}")
            raise InventoryParseError(
                f"unexpected payload from {binary}: expected a list of objects"
            )

        return cast("list[dict[str, Any]]", result)
