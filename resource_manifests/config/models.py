"""Pydantic models for render plan files.

A render plan is a YAML file describing the environment and the resources
to render::

    manifests:
      environment:
        namespace: kafka
      template_dirs: []
      resources:
        - template: KafkaTopic
          name: orders
          configs:
            retention.ms: 86400000
          properties:
            numPartitions: 4
        - template: SqlJob
          name: orders-sink
          sql:
            - INSERT INTO sink SELECT id FROM orders

``KafkaTopic`` and ``SqlJob`` entries build the matching classes from
:mod:`resource_manifests.resources`; ``configs`` feeds a topic's
``clientConfigs`` and ``sql`` a job's statements.  Any other template id
becomes a plain :class:`~resource_manifests.render.resource.Resource`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ResourceSpec(BaseModel):
    """One resource entry: template id, optional name, static properties."""

    template: str
    name: Optional[str] = None
    properties: Dict[str, str] = Field(default_factory=dict)
    configs: Dict[str, str] = Field(default_factory=dict)
    sql: List[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        if value is None:
            return None
        return normalize(value)

    @field_validator("properties", "configs", mode="before")
    @classmethod
    def _coerce_properties(cls, value: Any) -> Any:
        return normalize_table(value)

    @field_validator("sql", mode="before")
    @classmethod
    def _coerce_sql(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class ManifestsConfig(BaseModel):
    """The ``manifests:`` section of a plan file."""

    environment: Dict[str, str] = Field(default_factory=dict)
    template_dirs: List[str] = Field(default_factory=list)
    resources: List[ResourceSpec] = Field(default_factory=list)

    @field_validator("environment", mode="before")
    @classmethod
    def _coerce_environment(cls, value: Any) -> Any:
        return normalize_table(value)

    @field_validator("template_dirs", "resources", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class PlanFile(BaseModel):
    """Root model wrapping the ``manifests:`` key."""

    manifests: ManifestsConfig = Field(default_factory=ManifestsConfig)

    @field_validator("manifests", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value


# ---------------------------------------------------------------------------
# Normalization helpers
# ---------------------------------------------------------------------------


def normalize(value: Any) -> str:
    """Render a YAML scalar as template text.

    - ``True`` / ``False`` → ``"true"`` / ``"false"``
    - everything else → ``str(value)``
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_table(value: Any) -> Any:
    """Stringify a mapping's values, dropping ``None`` entries."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        return value
    return {str(k): normalize(v) for k, v in value.items() if v is not None}
