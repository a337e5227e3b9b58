"""Resource manifests - render YAML deployment manifests from resources.

Resources carry lazily computed string properties and the id of a bundled
``<id>.yaml.template``.  Templates reference properties with ``{{var}}``
placeholders; anything a resource does not export is looked up in an
:class:`~resource_manifests.render.environment.Environment`.
"""

try:
    from importlib.metadata import version

    __version__ = version("resource-manifests")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
