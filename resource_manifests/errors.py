"""Exception types raised while resolving and rendering manifests."""

from __future__ import annotations


class ManifestError(Exception):
    """Base class for every rendering failure."""


class MissingVariable(ManifestError, ValueError):
    """A placeholder has neither a resource property nor an environment value."""

    def __init__(self, resource_name: str, key: str) -> None:
        self.resource_name = resource_name
        self.key = key
        super().__init__(f"Resource '{resource_name}' missing variable '{key}'")


class TemplateNotFound(ManifestError, FileNotFoundError):
    """No ``<id>.yaml.template`` exists for a template id."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"No template '{template}' found")

    def __str__(self) -> str:
        return self.args[0]


class MissingEnvironmentValue(ManifestError, KeyError):
    """An environment was asked for a key it does not hold."""

    def __init__(self, key: str, message: str = "") -> None:
        self.key = key
        super().__init__(message or f"No variable '{key}' found in the environment")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class DuplicateManifest(ManifestError, ValueError):
    """Two resources would be written to the same manifest file."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Duplicate manifest file name: {filename}")


class PlanError(ManifestError, ValueError):
    """A render plan entry cannot be turned into a resource."""
