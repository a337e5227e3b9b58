"""Resources - named bundles of lazily computed template properties.

A :class:`Resource` is anything a deployment needs rendered into YAML: a
Kafka topic, a Flink SQL job, a datastream.  Subclasses call
:meth:`Resource.export` to publish values; a template then references them
as ``{{key}}``.

Properties are zero-argument callables evaluated at render time, so a
resource rendered twice evaluates its suppliers twice.  ``export`` mutates
the resource and is not thread-safe.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, Mapping, Optional, Set, Union

from resource_manifests.errors import MissingVariable
from resource_manifests.render.template import Template

if TYPE_CHECKING:
    from resource_manifests.render.factory import TemplateFactory

logger = logging.getLogger(__name__)

Supplier = Callable[[], Optional[str]]
PropertyValue = Union[str, Supplier, Mapping[str, str], None]

NO_NAME = "(no name)"


def _mapping_supplier(values: Mapping[str, str]) -> Supplier:
    def render_lines() -> str:
        return "\n".join(f"{k}: {v}" for k, v in values.items())

    return render_lines


def _static_supplier(value: Optional[str]) -> Supplier:
    return lambda: value


class Resource:
    """Something a pipeline needs deployed, rendered with a named template.

    Parameters
    ----------
    template:
        Template id; resolved by a factory to ``<template>.yaml.template``.
    name:
        Optional display name, exported as the ``name`` property.
    """

    def __init__(self, template: str, name: Optional[str] = None) -> None:
        self._template = template
        self._properties: Dict[str, Supplier] = {}
        if name is not None:
            self.export("name", name)

    # ── exporting ────────────────────────────────────────────────────

    def export(self, key: str, value: PropertyValue) -> None:
        """Export a value to the template, replacing any previous one.

        *value* may be a static string, a zero-argument callable computed
        at render time, or a mapping rendered as ``k: v`` lines.
        """
        if callable(value):
            supplier = value
        elif isinstance(value, Mapping):
            supplier = _mapping_supplier(value)
        else:
            supplier = _static_supplier(value)
        self._properties[key] = supplier

    # ── lookups ──────────────────────────────────────────────────────

    @property
    def template(self) -> str:
        """The id of the template used to render this resource."""
        return self._template

    @property
    def name(self) -> str:
        return self.get_or_default("name", lambda: NO_NAME)

    def property(self, key: str) -> Optional[str]:
        """Resolved value for *key*, or ``None`` if it was never exported."""
        supplier = self._properties.get(key)
        if supplier is None:
            return None
        return supplier()

    def keys(self) -> Set[str]:
        return set(self._properties)

    def _display_name(self) -> str:
        supplier = self._properties.get("name")
        value = supplier() if supplier is not None else None
        return NO_NAME if value is None else value

    def get_or_default(self, key: str, fallback: Optional[Supplier]) -> str:
        """Resolve *key*, calling *fallback* when it is not exported.

        Raises
        ------
        MissingVariable
            If the resolved value is ``None``.
        """
        supplier = self._properties.get(key)
        if supplier is None:
            logger.debug("Resource %r has no property %r; using fallback", self._template, key)
            supplier = fallback
        computed = supplier() if supplier is not None else None
        if computed is None:
            raise MissingVariable(self._display_name(), key)
        return computed

    # ── rendering ────────────────────────────────────────────────────

    def render(self, source: Union["TemplateFactory", Template]) -> str:
        """Render with a :class:`Template`, or one obtained from a factory."""
        if isinstance(source, Template):
            return source.render(self)
        return source.get(self).render(self)

    def __str__(self) -> str:
        parts = [f"{key}:{supplier()}" for key, supplier in self._properties.items()]
        return "[ " + "".join(p + " " for p in parts) + "]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(template={self._template!r}, keys={sorted(self._properties)!r})"
