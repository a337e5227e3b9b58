"""Resource rendering: environments, resources, templates, factories."""

from resource_manifests.render.environment import (
    EMPTY,
    PROCESS,
    ChainedEnvironment,
    DummyEnvironment,
    EmptyEnvironment,
    Environment,
    ProcessEnvironment,
    SimpleEnvironment,
    clear_system_property,
    get_system_property,
    set_system_property,
)
from resource_manifests.render.template import SimpleTemplate, Template, Token, scan
from resource_manifests.render.resource import NO_NAME, Resource
from resource_manifests.render.factory import SimpleTemplateFactory, TemplateFactory
from resource_manifests.render.renderer import (
    DOCUMENT_SEPARATOR,
    manifest_filename,
    render_all,
    write_manifests,
)

__all__ = [
    "ChainedEnvironment",
    "DOCUMENT_SEPARATOR",
    "DummyEnvironment",
    "EMPTY",
    "EmptyEnvironment",
    "Environment",
    "NO_NAME",
    "PROCESS",
    "ProcessEnvironment",
    "Resource",
    "SimpleEnvironment",
    "SimpleTemplate",
    "SimpleTemplateFactory",
    "Template",
    "TemplateFactory",
    "Token",
    "clear_system_property",
    "get_system_property",
    "manifest_filename",
    "render_all",
    "scan",
    "set_system_property",
    "write_manifests",
]
