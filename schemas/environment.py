"""
Pydantic schemas for container status reported by the orchestration tool
"""

import json
from typing import List, Optional

from pydantic import BaseModel, Field, validator


class ContainerStatus(BaseModel):
    """
    One row of ``docker compose ps --format json``.

    Compose reports keys in PascalCase; unknown keys are ignored.
    """

    name: str = Field(..., alias="Name")
    service: str = Field("", alias="Service")
    state: str = Field(..., alias="State")
    health: Optional[str] = Field(None, alias="Health")
    exit_code: Optional[int] = Field(None, alias="ExitCode")

    @validator("state", pre=True)
    def normalize_state(cls, v):
        """Lowercase state, e.g. 'Running' -> 'running'"""
        return str(v).strip().lower()

    @validator("health", pre=True)
    def empty_health_is_none(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v).strip().lower()

    @property
    def is_running(self) -> bool:
        return self.state == "running" and self.health in (None, "healthy", "starting")

    class Config:
        populate_by_name = True
        extra = "ignore"


def parse_container_statuses(output: str) -> List[ContainerStatus]:
    """
    Parse ``ps --format json`` output.

    Older compose releases print a single JSON array, newer ones print one
    JSON object per line.
    """
    output = output.strip()
    if not output:
        return []

    if output.startswith("["):
        rows = json.loads(output)
    else:
        rows = [json.loads(line) for line in output.splitlines() if line.strip()]

    return [ContainerStatus(**row) for row in rows]
