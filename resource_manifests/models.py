"""Pydantic models for the custom resources the bundled templates produce.

Only the pieces the renderer needs: a Flink SQL job spec and the
``SqlJob`` custom resource that wraps it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

API_VERSION = "manifests.resource.io/v1alpha1"


class FlinkSqlJobSpec(BaseModel):
    """Flink SQL job spec."""

    sql: List[str] = Field(..., description="Flink SQL statements.")

    def add_sql_item(self, statement: str) -> "FlinkSqlJobSpec":
        self.sql.append(statement)
        return self


class ObjectMeta(BaseModel):
    name: str
    namespace: Optional[str] = None


class SqlJob(BaseModel):
    """A ``SqlJob`` custom resource (apiVersion/kind/metadata/spec)."""

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: str = Field(default="SqlJob")
    metadata: ObjectMeta
    spec: FlinkSqlJobSpec

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def parse_sql_job(text: str) -> SqlJob:
    """Parse a rendered ``SqlJob`` manifest back into a :class:`SqlJob`."""
    return SqlJob.model_validate(yaml.safe_load(text))
