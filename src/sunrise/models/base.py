"""Base model for inventory records."""

from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field


class BaseModel(PydanticBaseModel):
    """Base class for all inventory records.

    Records are immutable once loaded; a new listing replaces them wholesale.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Display name")
    project_id: str | None = Field(None, description="Owning GCP project")
    raw_data: dict[str, Any] | None = Field(None, description="Record as returned by gcloud")
