"""Google Compute Engine instance model."""

from enum import Enum
from typing import Any

from pydantic import Field

from sunrise.models.base import BaseModel

CREATED_BY_KEY = "created-by"
GROUP_MANAGER_SEGMENT = "instanceGroupManagers"


class InstanceStatus(str, Enum):
    """Lifecycle states shown in the instance list."""

    RUNNING = "RUNNING"
    TERMINATED = "TERMINATED"
    PROVISIONING = "PROVISIONING"
    STOPPING = "STOPPING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "InstanceStatus":
        """Map a raw status string to a known state, UNKNOWN otherwise."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


def extract_group_name(metadata: dict[str, str]) -> str:
    """Find the managed instance group an instance was created by.

    Managed instances carry a ``created-by`` metadata entry such as
    ``projects/123/zones/us-central1-a/instanceGroupManagers/web-fleet``.

    Args:
        metadata: Instance metadata as a key/value mapping

    Returns:
        Group name, or an empty string for ungrouped instances
    """
    value = metadata.get(CREATED_BY_KEY)
    if not value:
        return ""

    parts = value.split("/")
    try:
        idx = parts.index(GROUP_MANAGER_SEGMENT)
        return parts[idx + 1]
    except (ValueError, IndexError):
        return ""


class ComputeInstance(BaseModel):
    """Model for a Compute Engine VM instance."""

    instance_name: str = Field(..., description="Instance name")
    zone: str | None = Field(None, description="Zone, as returned by gcloud (may be a URL)")
    status: str | None = Field(None, description="Raw instance status")
    metadata: dict[str, str] = Field(default_factory=dict, description="Instance metadata items")

    @classmethod
    def from_gcloud_response(
        cls, data: dict[str, Any], project_id: str | None = None
    ) -> "ComputeInstance":
        """Create ComputeInstance from gcloud JSON output.

        Args:
            data: One element of ``gcloud compute instances list --format=json(...)``
            project_id: Project the listing was made for

        Returns:
            ComputeInstance instance

        Example gcloud output element:
            {
                "name": "web-1",
                "zone": "https://www.googleapis.com/compute/v1/projects/p/zones/us-central1-a",
                "status": "RUNNING",
                "metadata": {
                    "items": [
                        {
                            "key": "created-by",
                            "value": "projects/123/zones/us-central1-a/instanceGroupManagers/web"
                        }
                    ]
                }
            }
        """
        instance_name = data.get("name", "")

        metadata: dict[str, str] = {}
        for item in (data.get("metadata") or {}).get("items") or []:
            key = item.get("key")
            if key and key not in metadata:
                metadata[key] = str(item.get("value", ""))

        return cls(
            id=instance_name,
            name=instance_name,
            project_id=project_id,
            instance_name=instance_name,
            zone=data.get("zone"),
            status=data.get("status"),
            metadata=metadata,
            raw_data=data.copy(),
        )

    @property
    def instance_status(self) -> InstanceStatus:
        """Parsed lifecycle status."""
        return InstanceStatus.parse(self.status)

    @property
    def group_name(self) -> str:
        """Managed instance group this VM belongs to ("" if ungrouped)."""
        return extract_group_name(self.metadata)
