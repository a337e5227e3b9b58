"""Environments - the fallback lookup consulted after resource properties.

Four variants share the :class:`Environment` capability ``get(key) -> str``:

* :class:`EmptyEnvironment` - always raises
* :class:`SimpleEnvironment` - immutable key → value table
* :class:`DummyEnvironment` - echoes ``{{key}}`` (previews)
* :class:`ProcessEnvironment` - OS environment, then system properties

Templates never read ``os.environ`` directly; everything goes through an
``Environment`` so tests can swap in deterministic tables.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from resource_manifests.errors import MissingEnvironmentValue

# ── system properties ────────────────────────────────────────────────

#: Process-local configuration properties, consulted by
#: :class:`ProcessEnvironment` when no OS variable of the same name exists.
_SYSTEM_PROPERTIES: Dict[str, str] = {}


def set_system_property(key: str, value: str) -> None:
    """Set a process-local property visible to :data:`PROCESS`."""
    _SYSTEM_PROPERTIES[key] = str(value)


def get_system_property(key: str) -> Optional[str]:
    return _SYSTEM_PROPERTIES.get(key)


def clear_system_property(key: Optional[str] = None) -> None:
    """Remove one property, or all of them when *key* is ``None``."""
    if key is None:
        _SYSTEM_PROPERTIES.clear()
    else:
        _SYSTEM_PROPERTIES.pop(key, None)


# ── environments ─────────────────────────────────────────────────────


class Environment(ABC):
    """Exposes environment variables to templates."""

    @abstractmethod
    def get(self, key: str) -> str:
        """Return the value for *key*.

        Raises
        ------
        MissingEnvironmentValue
            If the environment holds no value for *key*.
        """


class EmptyEnvironment(Environment):
    """An environment with no values at all."""

    def get(self, key: str) -> str:
        raise MissingEnvironmentValue(key)

    def __repr__(self) -> str:
        return "EmptyEnvironment()"


class SimpleEnvironment(Environment):
    """Environment backed by an explicit, immutable table."""

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values or {}))

    @classmethod
    def from_properties(cls, properties: Mapping[Any, Any]) -> "SimpleEnvironment":
        """Build an environment from any mapping, stringifying keys and values."""
        return cls({str(k): str(v) for k, v in properties.items()})

    @property
    def values(self) -> Mapping[str, str]:
        return self._values

    def with_value(self, key: str, value: str) -> "SimpleEnvironment":
        """Return a new environment with *key* set; ``self`` is unchanged."""
        merged = dict(self._values)
        merged[key] = value
        return SimpleEnvironment(merged)

    def get(self, key: str) -> str:
        if key not in self._values:
            raise MissingEnvironmentValue(key)
        return self._values[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleEnvironment):
            return NotImplemented
        return dict(self._values) == dict(other._values)

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"SimpleEnvironment({dict(self._values)!r})"


class DummyEnvironment(Environment):
    """Returns ``{{key}}`` for any key, leaving placeholders unresolved."""

    def get(self, key: str) -> str:
        return "{{" + key + "}}"

    def __repr__(self) -> str:
        return "DummyEnvironment()"


class ProcessEnvironment(Environment):
    """Provides access to the process's environment variables.

    Looks up *key* in the OS environment first, then in the process-local
    system properties.  Both sources can be replaced for tests.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        properties: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._environ = environ
        self._properties = properties

    def get(self, key: str) -> str:
        environ = os.environ if self._environ is None else self._environ
        value = environ.get(key)
        if value is None:
            props = _SYSTEM_PROPERTIES if self._properties is None else self._properties
            value = props.get(key)
        if value is None:
            raise MissingEnvironmentValue(key, f"Missing system property `{key}`")
        return value

    def __repr__(self) -> str:
        return "ProcessEnvironment()"


class ChainedEnvironment(Environment):
    """Tries each environment in order; the first one holding *key* wins."""

    def __init__(self, *environments: Environment) -> None:
        if not environments:
            raise ValueError("ChainedEnvironment needs at least one environment")
        self._environments = environments

    def get(self, key: str) -> str:
        for env in self._environments[:-1]:
            try:
                return env.get(key)
            except MissingEnvironmentValue:
                continue
        return self._environments[-1].get(key)

    def __repr__(self) -> str:
        inner = ", ".join(repr(e) for e in self._environments)
        return f"ChainedEnvironment({inner})"


#: Shared singletons.
EMPTY: Environment = EmptyEnvironment()
PROCESS: Environment = ProcessEnvironment()
