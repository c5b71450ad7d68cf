"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from sunrise.config import reset_config
from sunrise.models.compute import ComputeInstance
from sunrise.services.inventory import reset_inventory_service

MIG_PREFIX = "projects/123456789/zones/us-central1-a/instanceGroupManagers"


def build_instance(
    name: str,
    group: str | None = None,
    status: str = "RUNNING",
    zone: str = "https://www.googleapis.com/compute/v1/projects/test-project/zones/us-central1-a",
) -> ComputeInstance:
    """Build a ComputeInstance as gcloud would return it."""
    items = []
    if group is not None:
        items.append({"key": "created-by", "value": f"{MIG_PREFIX}/{group}"})
    data: dict[str, Any] = {
        "name": name,
        "zone": zone,
        "status": status,
        "metadata": {"items": items},
    }
    return ComputeInstance.from_gcloud_response(data, project_id="test-project")


@pytest.fixture(autouse=True)
def reset_singletons() -> Any:
    """Reset global config and service singletons around each test."""
    reset_config()
    reset_inventory_service()
    yield
    reset_config()
    reset_inventory_service()


@pytest.fixture
def mock_projects_response() -> list[dict[str, Any]]:
    """Mock ``gcloud projects list`` JSON output."""
    return [
        {"projectId": "proj-prod", "name": "Production", "lifecycleState": "ACTIVE"},
        {"projectId": "proj-old", "name": "Old", "lifecycleState": "DELETE_REQUESTED"},
        {"projectId": "proj-dev", "name": "Development", "lifecycleState": "ACTIVE"},
    ]


@pytest.fixture
def mock_instances_response() -> list[dict[str, Any]]:
    """Mock ``gcloud compute instances list`` JSON output."""
    return [
        {
            "name": "web-1",
            "zone": "https://www.googleapis.com/compute/v1/projects/proj-prod/zones/us-central1-a",
            "status": "RUNNING",
            "metadata": {"items": [{"key": "created-by", "value": f"{MIG_PREFIX}/web-fleet"}]},
        },
        {
            "name": "web-2",
            "zone": "https://www.googleapis.com/compute/v1/projects/proj-prod/zones/us-central1-a",
            "status": "STOPPING",
            "metadata": {"items": [{"key": "created-by", "value": f"{MIG_PREFIX}/web-fleet"}]},
        },
        {
            "name": "db-1",
            "zone": "https://www.googleapis.com/compute/v1/projects/proj-prod/zones/us-east1-b",
            "status": "TERMINATED",
            "metadata": {"items": []},
        },
    ]


@pytest.fixture
def make_instance() -> Any:
    """Factory fixture building ComputeInstance records."""
    return build_instance


@pytest.fixture
def sample_instances() -> list[ComputeInstance]:
    """web-1 and web-2 in the web-fleet group, db-1 ungrouped."""
    return [
        build_instance("web-1", group="web-fleet"),
        build_instance("web-2", group="web-fleet"),
        build_instance("db-1"),
    ]
