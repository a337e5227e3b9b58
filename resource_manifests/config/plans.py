"""Render plan loading and conversion into environments and resources.

- :func:`load_plan` — parse a plan YAML into a :class:`PlanFile`
- :func:`build_environment` — the environment the plan's templates fall back to
- :func:`build_resources` — one :class:`Resource` per plan entry
- :func:`build_factory` — a factory honouring the plan's ``template_dirs``
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from resource_manifests.config.models import PlanFile, ResourceSpec
from resource_manifests.errors import PlanError
from resource_manifests.render.environment import (
    ChainedEnvironment,
    DummyEnvironment,
    Environment,
    ProcessEnvironment,
    SimpleEnvironment,
)
from resource_manifests.render.factory import SimpleTemplateFactory
from resource_manifests.render.resource import Resource
from resource_manifests.resources import KafkaTopic, SqlJobResource

logger = logging.getLogger(__name__)


def load_plan(path: str | Path) -> PlanFile:
    """Load and validate a render plan.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    yaml.YAMLError, pydantic.ValidationError
        If the file is not a valid plan.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Plan not found: {path}")
    with open(path, encoding="utf-8") as fh:
        raw: Dict[str, Any] = yaml.safe_load(fh) or {}
    plan = PlanFile.model_validate(raw)

    # Relative template dirs are relative to the plan file.
    base = path.parent
    plan.manifests.template_dirs = [
        str(d) if Path(d).is_absolute() else str(base / d)
        for d in plan.manifests.template_dirs
    ]
    logger.debug(
        "Loaded plan %s: %d resource(s)", path, len(plan.manifests.resources)
    )
    return plan


def build_environment(
    plan: PlanFile,
    *,
    process: bool = False,
    passthrough: bool = False,
    overrides: Optional[Dict[str, str]] = None,
) -> Environment:
    """Return the fallback environment for *plan*.

    Static plan values (plus *overrides*) always come first.  With
    *process*, unknown keys fall back to :class:`ProcessEnvironment`; with
    *passthrough*, anything still unresolved renders as ``{{key}}``.
    """
    env = SimpleEnvironment(plan.manifests.environment)
    for key, value in (overrides or {}).items():
        env = env.with_value(key, value)

    chain: List[Environment] = [env]
    if process:
        chain.append(ProcessEnvironment())
    if passthrough:
        chain.append(DummyEnvironment())
    if len(chain) == 1:
        return env
    return ChainedEnvironment(*chain)


def _topic(spec: ResourceSpec) -> Resource:
    return KafkaTopic(_require_name(spec), client_configs=spec.configs)


def _sql_job(spec: ResourceSpec) -> Resource:
    if not spec.sql:
        raise PlanError(f"SqlJob resource '{_require_name(spec)}' has no sql statements")
    return SqlJobResource(_require_name(spec), spec.sql)


def _require_name(spec: ResourceSpec) -> str:
    if not spec.name:
        raise PlanError(f"{spec.template} resources need a name")
    return spec.name


#: Template ids backed by a class in :mod:`resource_manifests.resources`.
RESOURCE_BUILDERS: Dict[str, Callable[[ResourceSpec], Resource]] = {
    "KafkaTopic": _topic,
    "SqlJob": _sql_job,
}


def build_resources(plan: PlanFile) -> List[Resource]:
    """One :class:`Resource` per plan entry.

    Known template ids build their resource class; any other id becomes a
    plain :class:`Resource`.  Plan ``properties`` are exported last, in
    order, so they override what the class exports.

    Raises
    ------
    PlanError
        If an entry lacks what its resource class needs.
    """
    resources: List[Resource] = []
    for spec in plan.manifests.resources:
        builder = RESOURCE_BUILDERS.get(spec.template)
        if builder is None:
            resource = Resource(spec.template, name=spec.name)
        else:
            resource = builder(spec)
        for key, value in spec.properties.items():
            resource.export(key, value)
        resources.append(resource)
    return resources


def build_factory(plan: PlanFile, env: Environment) -> SimpleTemplateFactory:
    return SimpleTemplateFactory(env, template_dirs=plan.manifests.template_dirs)
