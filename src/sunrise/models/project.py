"""GCP project model."""

from typing import Any

from pydantic import Field

from sunrise.models.base import BaseModel

ACTIVE_STATE = "ACTIVE"


class Project(BaseModel):
    """Model for a GCP project as listed by ``gcloud projects list``."""

    display_name: str = Field(default="", description="Human readable project name")
    lifecycle_state: str = Field(default="", description="Project lifecycle state")

    @classmethod
    def from_gcloud_response(cls, data: dict[str, Any]) -> "Project":
        """Create Project from gcloud JSON output.

        Args:
            data: One element of ``gcloud projects list --format=json(...)``

        Returns:
            Project instance

        Example gcloud output element:
            {
                "projectId": "my-project",
                "name": "My Project",
                "lifecycleState": "ACTIVE"
            }
        """
        project_id = data.get("projectId", "")
        display_name = data.get("name") or ""

        return cls(
            id=project_id,
            name=display_name or project_id,
            project_id=project_id,
            display_name=display_name,
            lifecycle_state=data.get("lifecycleState") or "",
            raw_data=data.copy(),
        )

    def is_active(self) -> bool:
        """Check if the project is usable.

        Returns:
            True only for the exact ``ACTIVE`` lifecycle state
        """
        return self.lifecycle_state == ACTIVE_STATE

    def label(self) -> str:
        """Row text shown in the project picker."""
        return f"{self.project_id} ({self.display_name})"
