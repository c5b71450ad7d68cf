"""Unit tests for the inventory service."""

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from sunrise.config import Config
from sunrise.services.base import InventoryParseError, InventoryQueryError
from sunrise.services.inventory import (
    INSTANCE_FORMAT,
    PROJECT_FORMAT,
    InventoryService,
    get_inventory_service,
    reset_inventory_service,
)


@pytest.fixture
def inventory_service() -> InventoryService:
    """Create inventory service instance."""
    return InventoryService(Config())


def gcloud_returning(payload: Any) -> AsyncMock:
    """Mock create_subprocess_exec returning a process that prints ``payload``."""
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(json.dumps(payload).encode(), b""))
    process.returncode = 0
    return AsyncMock(return_value=process)


class TestListProjects:
    """Tests for InventoryService.list_projects."""

    @pytest.mark.asyncio
    async def test_filters_inactive(
        self,
        inventory_service: InventoryService,
        mock_projects_response: list[dict[str, Any]],
    ) -> None:
        """Test that only ACTIVE projects are returned, in gcloud order."""
        mock_exec = gcloud_returning(mock_projects_response)
        with patch("sunrise.services.base.asyncio.create_subprocess_exec", new=mock_exec):
            projects = await inventory_service.list_projects()

        assert [p.project_id for p in projects] == ["proj-prod", "proj-dev"]
        assert projects[0].display_name == "Production"
        assert mock_exec.call_args.args == (
            "gcloud",
            "projects",
            "list",
            f"--format={PROJECT_FORMAT}",
        )

    @pytest.mark.asyncio
    async def test_empty(self, inventory_service: InventoryService) -> None:
        """Test an account without projects."""
        with patch(
            "sunrise.services.base.asyncio.create_subprocess_exec", new=gcloud_returning([])
        ):
            projects = await inventory_service.list_projects()

        assert projects == []

    @pytest.mark.asyncio
    async def test_invalid_field_type(self, inventory_service: InventoryService) -> None:
        """Test that records with wrongly typed fields raise InventoryParseError."""
        payload = [{"projectId": 42, "name": "Bad", "lifecycleState": "ACTIVE"}]
        with (
            patch(
                "sunrise.services.base.asyncio.create_subprocess_exec",
                new=gcloud_returning(payload),
            ),
            pytest.raises(InventoryParseError),
        ):
            await inventory_service.list_projects()

    @pytest.mark.asyncio
    async def test_query_error_propagates(self, inventory_service: InventoryService) -> None:
        """Test that gcloud failures surface as InventoryQueryError."""
        with (
            patch.object(
                inventory_service,
                "_run_gcloud_command",
                new=AsyncMock(side_effect=InventoryQueryError("not logged in")),
            ),
            pytest.raises(InventoryQueryError, match="not logged in"),
        ):
            await inventory_service.list_projects()


class TestListInstances:
    """Tests for InventoryService.list_instances."""

    @pytest.mark.asyncio
    async def test_list_instances(
        self,
        inventory_service: InventoryService,
        mock_instances_response: list[dict[str, Any]],
    ) -> None:
        """Test listing instances with group detection."""
        mock_exec = gcloud_returning(mock_instances_response)
        with patch("sunrise.services.base.asyncio.create_subprocess_exec", new=mock_exec):
            instances = await inventory_service.list_instances("proj-prod")

        assert [i.instance_name for i in instances] == ["web-1", "web-2", "db-1"]
        assert [i.group_name for i in instances] == ["web-fleet", "web-fleet", ""]
        assert all(i.project_id == "proj-prod" for i in instances)
        assert instances[2].zone == (
            "https://www.googleapis.com/compute/v1/projects/proj-prod/zones/us-east1-b"
        )
        assert mock_exec.call_args.args == (
            "gcloud",
            "compute",
            "instances",
            "list",
            "--project",
            "proj-prod",
            f"--format={INSTANCE_FORMAT}",
        )

    @pytest.mark.asyncio
    async def test_malformed_metadata(self, inventory_service: InventoryService) -> None:
        """Test that a metadata block of the wrong shape raises InventoryParseError."""
        payload = [{"name": "vm", "metadata": {"items": ["not-a-dict"]}}]
        with (
            patch(
                "sunrise.services.base.asyncio.create_subprocess_exec",
                new=gcloud_returning(payload),
            ),
            pytest.raises(InventoryParseError, match="failed to parse VM data"),
        ):
            await inventory_service.list_instances("proj-prod")

    @pytest.mark.asyncio
    async def test_empty(self, inventory_service: InventoryService) -> None:
        """Test a project without instances."""
        with patch(
            "sunrise.services.base.asyncio.create_subprocess_exec", new=gcloud_returning([])
        ):
            instances = await inventory_service.list_instances("empty-project")

        assert instances == []


class TestInventoryServiceSingleton:
    """Tests for the global inventory service accessor."""

    def test_get_inventory_service_is_cached(self) -> None:
        """Test that the same instance is returned on repeated calls."""
        first = get_inventory_service()
        second = get_inventory_service()

        assert first is second

    def test_reset_inventory_service(self) -> None:
        """Test that reset creates a new instance on next access."""
        first = get_inventory_service()
        reset_inventory_service()

        assert get_inventory_service() is not first

    def test_uses_given_config(self) -> None:
        """Test that the config passed on first access is kept."""
        config = Config(gcloud_binary="/usr/local/bin/gcloud")

        assert get_inventory_service(config).config is config
