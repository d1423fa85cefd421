from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CanonicalStatus(str, Enum):
    EXITED = "exited"
    RUNNING = "running"
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


# --- Raw engine records ---
# The daemon encodes empty slices and unset strings as null.

class ContainerSummary(BaseModel):
    """
    One entry of `GET /containers/json?all=true` (or one `ps` line).
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="Id")
    names: List[str] = Field(default_factory=list, alias="Names")

    @field_validator("names", mode="before")
    @classmethod
    def _null_names(cls, value):
        return [] if value is None else value


class HealthState(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: str = Field(default="", alias="Status")

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value):
        return "" if value is None else value


class ContainerState(BaseModel):
    """
    The `State` object of an inspect call. `health` is None when the
    container has no healthcheck configured. A missing run status reads as
    "", which normalizes to exited.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: str = Field(default="", alias="Status")
    health: Optional[HealthState] = Field(default=None, alias="Health")

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value):
        return "" if value is None else value


# --- API responses ---

StatusReport = Dict[str, CanonicalStatus]


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
