"""Service graph — validated node set plus resolved links as a networkx DiGraph."""

from __future__ import annotations

from collections.abc import Iterable

import networkx as nx

from compose_diagram.config.logging import get_logger
from compose_diagram.errors import DuplicateNodeError
from compose_diagram.types import Node

log = get_logger(__name__)


def check_unique_ids(nodes: Iterable[Node]) -> None:
    """Raise ``DuplicateNodeError`` on the first id seen twice."""
    seen: set[str] = set()
    for node in nodes:
        if node.id in seen:
            raise DuplicateNodeError(node.id)
        seen.add(node.id)


def build_service_graph(nodes: Iterable[Node]) -> nx.DiGraph:
    """Build a DiGraph of the request: one graph node per service, one edge per link.

    Node attribute ``data`` holds the ``Node``. Links are added in sorted
    target order so ``graph.edges()`` iterates deterministically. Links to
    ids outside the request are dropped; self-links are kept.
    """
    nodes = list(nodes)
    check_unique_ids(nodes)

    graph: nx.DiGraph = nx.DiGraph()
    for node in nodes:
        graph.add_node(node.id, data=node)

    for node in nodes:
        for target in sorted(node.links):
            if target not in graph:
                log.debug("link.unresolved", source=node.id, target=target)
                continue
            graph.add_edge(node.id, target)

    return graph


def service_links(graph: nx.DiGraph) -> list[tuple[str, str]]:
    """Return ``(source, target)`` pairs in graph insertion order."""
    return [(src, tgt) for src, tgt in graph.edges()]
