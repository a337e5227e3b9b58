"""Multi-resource rendering and manifest write-out.

Renders are all-or-nothing: every resource is rendered before any file is
written, so a missing variable in the last resource leaves no partial
output on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

from resource_manifests.errors import DuplicateManifest
from resource_manifests.render.factory import TemplateFactory
from resource_manifests.render.resource import Resource

logger = logging.getLogger(__name__)

#: YAML document separator placed between rendered resources.
DOCUMENT_SEPARATOR = "---\n"


def render_all(resources: Iterable[Resource], factory: TemplateFactory) -> str:
    """Render *resources* into one multi-document YAML string."""
    docs: List[str] = []
    for resource in resources:
        rendered = resource.render(factory)
        if rendered and not rendered.endswith("\n"):
            rendered += "\n"
        docs.append(rendered)
    return DOCUMENT_SEPARATOR.join(docs)


def manifest_filename(resource: Resource) -> str:
    """File name for *resource*: sanitised display name plus ``.yaml``."""
    name = resource.name
    safe = "".join(c if (c.isalnum() or c in "-_.") else "_" for c in name)
    safe = safe.strip(".") or "unnamed"
    return f"{safe}.yaml"


def write_manifests(
    resources: Iterable[Resource],
    factory: TemplateFactory,
    out_dir: Union[str, Path],
) -> List[Path]:
    """Render each resource to ``<out_dir>/<name>.yaml``.

    Returns
    -------
    list[Path]
        Written paths, in input order.

    Raises
    ------
    ManifestError
        Propagated from rendering; nothing is written in that case.
    DuplicateManifest
        If two resources map to the same file name.
    """
    rendered: Dict[str, str] = {}
    for resource in resources:
        filename = manifest_filename(resource)
        if filename in rendered:
            raise DuplicateManifest(filename)
        rendered[filename] = resource.render(factory)

    dest_dir = Path(out_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for filename, text in rendered.items():
        dest = dest_dir / filename
        dest.write_text(text, encoding="utf-8")
        written.append(dest)
    logger.info("Wrote %d manifest(s) to %s", len(written), dest_dir)
    return written
