"""Compose manifest reader — docker-compose YAML text → ordered ``Node`` list.

Best effort: anything that is not shaped like a services mapping yields no
nodes, and individual malformed service entries are skipped. Only YAML that
cannot be parsed at all is an error.
"""

from __future__ import annotations

from typing import Any

import yaml

from compose_diagram.config.logging import get_logger
from compose_diagram.errors import ManifestError
from compose_diagram.types import Node

log = get_logger(__name__)

DEFAULT_IMAGE = "unknown"


def parse_compose(text: str | None, default_image: str = DEFAULT_IMAGE) -> list[Node]:
    """Read services from compose ``text`` in document order.

    Links come from ``depends_on`` and ``links``. Each may be a list, a
    mapping (keys are the targets) or a single string.
    """
    if text is None or not text.strip():
        return []

    try:
        root = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML format: {exc}") from exc

    if not isinstance(root, dict):
        return []
    services = root.get("services")
    if not isinstance(services, dict):
        return []

    nodes: list[Node] = []
    for name, definition in services.items():
        if not isinstance(definition, dict):
            log.warning("manifest.service_skipped", service=str(name), reason="not a mapping")
            continue

        image = definition.get("image")
        links: set[str] = set()
        _collect_links(definition.get("depends_on"), links)
        _collect_links(definition.get("links"), links, strip_alias=True)

        nodes.append(
            Node(
                id=str(name),
                image=default_image if image is None else str(image),
                links=frozenset(links),
            )
        )

    log.debug("manifest.parsed", services=len(nodes))
    return nodes


def _collect_links(field: Any, links: set[str], strip_alias: bool = False) -> None:
    if field is None:
        return
    if isinstance(field, (list, tuple)):
        targets = [str(item) for item in field]
    elif isinstance(field, dict):
        targets = [str(key) for key in field]
    elif isinstance(field, str):
        targets = [field]
    else:
        return

    for target in targets:
        # Compose ``links`` entries may be written as ``service:alias``.
        if strip_alias:
            target = target.split(":", 1)[0]
        target = target.strip()
        if target:
            links.add(target)
