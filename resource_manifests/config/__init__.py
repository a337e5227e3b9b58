"""Render plan loading and validation."""

from resource_manifests.config.models import (
    ManifestsConfig,
    PlanFile,
    ResourceSpec,
)
from resource_manifests.config.plans import (
    build_environment,
    build_factory,
    build_resources,
    load_plan,
)

__all__ = [
    "ManifestsConfig",
    "PlanFile",
    "ResourceSpec",
    "build_environment",
    "build_factory",
    "build_resources",
    "load_plan",
]
