"""Project and VM inventory via the gcloud CLI."""

from pydantic import ValidationError

from sunrise.config import Config
from sunrise.models.compute import ComputeInstance
from sunrise.models.project import Project
from sunrise.services.base import BaseService, InventoryParseError
from sunrise.utils.logging import get_logger

logger = get_logger(__name__)

PROJECT_FORMAT = "json(projectId,name,lifecycleState)"
INSTANCE_FORMAT = "json(name,zone,status,metadata.items)"


class InventoryService(BaseService):
    """Lists projects and Compute Engine instances through gcloud."""

    async def list_projects(self) -> list[Project]:
        """List active GCP projects.

        Returns:
            Projects whose lifecycle state is ``ACTIVE``, in gcloud order

        Raises:
            InventoryQueryError: If gcloud fails
            InventoryParseError: If the output cannot be parsed
        """
        logger.info("Listing projects")
        items = await self._run_gcloud_command(
            ["projects", "list", f"--format={PROJECT_FORMAT}"]
        )

        try:
            projects = [Project.from_gcloud_response(item) for item in items]
        except ValidationError as e:
            raise InventoryParseError(f"failed to parse project data: {e}") from e

        active = [p for p in projects if p.is_active()]
        logger.info(f"Found {len(active)} active projects ({len(projects)} total)")
        return active

    async def list_instances(self, project_id: str) -> list[ComputeInstance]:
        """List VM instances in a project.

        Args:
            project_id: GCP project ID

        Returns:
            Instances in gcloud order

        Raises:
            InventoryQueryError: If gcloud fails
            InventoryParseError: If the output cannot be parsed
        """
        logger.info(f"Listing instances in project: {project_id}")
        items = await self._run_gcloud_command(
            [
                "compute",
                "instances",
                "list",
                "--project",
                project_id,
                f"--format={INSTANCE_FORMAT}",
            ]
        )

        try:
            instances = [
                ComputeInstance.from_gcloud_response(item, project_id=project_id)
                for item in items
            ]
        except (ValidationError, AttributeError, TypeError) as e:
            raise InventoryParseError(f"failed to parse VM data: {e}") from e

        logger.info(f"Found {len(instances)} instances in {project_id}")
        return instances


# Global service instance
_inventory_service: InventoryService | None = None


def get_inventory_service(config: Config | None = None) -> InventoryService:
    """Get the global inventory service instance.

    Args:
        config: Configuration used when the service is first created

    Returns:
        Initialized InventoryService
    """
    global _inventory_service
    if _inventory_service is None:
        _inventory_service = InventoryService(config)
    return _inventory_service


def reset_inventory_service() -> None:
    """Reset the global inventory service (mainly for testing)."""
    global _inventory_service
    _inventory_service = None
