"""Template factories - locate the template text for a resource.

Bundled templates live in the :mod:`resource_manifests.templates` package
as ``<id>.yaml.template`` files and are read with :mod:`importlib.resources`.
Nothing is cached; every :meth:`TemplateFactory.get` re-reads the file.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Union

from resource_manifests.errors import TemplateNotFound
from resource_manifests.render.environment import EMPTY, Environment
from resource_manifests.render.template import SimpleTemplate, Template

if TYPE_CHECKING:
    from resource_manifests.render.resource import Resource

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "resource_manifests.templates"
TEMPLATE_SUFFIX = ".yaml.template"


def template_filename(template: str) -> str:
    return template + TEMPLATE_SUFFIX


def read_lines(source) -> str:
    """Read *source* (a path or traversable) so every line ends with ``\\n``."""
    chunks: List[str] = []
    with source.open("r", encoding="utf-8") as fh:
        for line in fh:
            chunks.append(line if line.endswith("\n") else line + "\n")
    return "".join(chunks)


class TemplateFactory(ABC):
    """Locates a Template for a given Resource."""

    @abstractmethod
    def get(self, resource: "Resource") -> Template:
        """Return the template for *resource*.

        Raises
        ------
        TemplateNotFound
            If no template exists for ``resource.template``.
        """


class SimpleTemplateFactory(TemplateFactory):
    """Finds templates among the bundled ``*.yaml.template`` files.

    Parameters
    ----------
    env:
        Environment bound into every template this factory produces.
    template_dirs:
        Extra directories searched, in order, before the bundled store.
    """

    def __init__(
        self,
        env: Optional[Environment] = None,
        template_dirs: Sequence[Union[str, Path]] = (),
    ) -> None:
        self._env = env if env is not None else EMPTY
        self._template_dirs = [Path(d) for d in template_dirs]

    @property
    def environment(self) -> Environment:
        return self._env

    def _candidates(self, filename: str) -> Iterable:
        for directory in self._template_dirs:
            yield directory / filename
        yield resources.files(TEMPLATE_PACKAGE) / filename

    def load(self, template: str) -> str:
        """Return the raw text of template *template*."""
        filename = template_filename(template)
        for candidate in self._candidates(filename):
            if candidate.is_file():
                logger.debug("Resolved template %r from %s", template, candidate)
                return read_lines(candidate)
        raise TemplateNotFound(template)

    def get(self, resource: "Resource") -> Template:
        return SimpleTemplate(self._env, self.load(resource.template))

    def available_templates(self) -> List[str]:
        """Sorted ids of every template this factory can resolve."""
        found = set()
        roots = list(self._template_dirs) + [resources.files(TEMPLATE_PACKAGE)]
        for root in roots:
            if not root.is_dir():
                continue
            for entry in root.iterdir():
                if entry.is_file() and entry.name.endswith(TEMPLATE_SUFFIX):
                    found.add(entry.name[: -len(TEMPLATE_SUFFIX)])
        return sorted(found)
