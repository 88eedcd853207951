"""
Dependency Graph Construction
=============================

Turns the flat list of reported tree nodes into an adjacency map of bare
module names. The package manager reports every installed module at the
top level with its direct dependencies as children; children that carry
their own nested children are folded in as well, so a deep tree produces
the same graph as the equivalent flat one.
"""

from typing import Iterable, List

from shipyard_common.logger import get_logger

from .models import DependencyGraph, RawTreeNode

logger = get_logger("sdk.graph_builder")


def bare_module_name(name: str) -> str:
    """
    Strip the version from a ``name@version`` identifier.

    Splits at the last ``@`` so scoped names keep their leading ``@``.

    Examples:
        >>> bare_module_name("lodash@4.17.21")
        'lodash'
        >>> bare_module_name("@theia/core@1.0.0")
        '@theia/core'
        >>> bare_module_name("@theia/core")
        '@theia/core'
    """
    index = name.rfind("@")
    if index <= 0:
        return name
    return name[:index]


def build_graph(nodes: Iterable[RawTreeNode]) -> DependencyGraph:
    """
    Build a fresh dependency graph from reported nodes.

    A module reported more than once accumulates its children into the
    same entry. Children are unique per module and keep first-seen order.
    """
    graph: DependencyGraph = {}
    for node in nodes:
        _insert_node(node, graph)

    logger.debug("Built dependency graph", modules=len(graph))
    return graph


def _insert_node(node: RawTreeNode, graph: DependencyGraph) -> None:
    dependencies: List[str] = graph.setdefault(bare_module_name(node.name), [])

    for child in node.children:
        child_name = bare_module_name(child.name)
        if child_name not in dependencies:
            dependencies.append(child_name)

        if child.children:
            _insert_node(child, graph)
