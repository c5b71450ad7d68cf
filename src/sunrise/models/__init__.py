"""Data models for inventory records."""

from sunrise.models.base import BaseModel
from sunrise.models.compute import ComputeInstance, InstanceStatus, extract_group_name
from sunrise.models.project import Project

__all__ = [
    "BaseModel",
    "ComputeInstance",
    "InstanceStatus",
    "Project",
    "extract_group_name",
]
