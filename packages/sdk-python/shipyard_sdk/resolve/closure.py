"""
Production Closure Resolution
=============================

Computes the modules transitively required by a root module, honouring a
ResolutionPolicy:

- excluded children are dropped (and not traversed) before anything else
- a forbidden child among the remaining ones aborts the whole resolution

The walk keeps a single visited list per call, which is also the result,
so every module appears once and cycles terminate.
"""

from typing import List

from shipyard_common import ForbiddenDependencyError, ModuleNotFoundInGraphError
from shipyard_common.logger import get_logger
from shipyard_schema import ResolutionPolicy

from .models import DependencyGraph

logger = get_logger("sdk.closure")


def resolve_closure(
    root_module: str,
    graph: DependencyGraph,
    policy: ResolutionPolicy,
) -> List[str]:
    """
    Resolve the production closure of ``root_module``.

    The root itself is not part of the result; its direct children are
    taken as-is and every module reached after that is filtered by the
    policy.

    Args:
        root_module: Bare module name to start from
        graph: Adjacency map from build_graph()
        policy: Exclusion and forbidden-package policy

    Returns:
        Module names in first-visited (depth-first, pre-order) order

    Raises:
        ModuleNotFoundInGraphError: If root_module is not in the graph
        ForbiddenDependencyError: If a non-excluded dependency is forbidden

    Examples:
        >>> graph = {"A": ["B", "C"], "B": ["D"], "C": [], "D": []}
        >>> resolve_closure("A", graph, ResolutionPolicy())
        ['B', 'D', 'C']
    """
    if root_module not in graph:
        raise ModuleNotFoundInGraphError(root_module)

    visited: List[str] = []
    seen = set()

    # Explicit stack of iterators keeps deep graphs off the interpreter stack
    stack = [iter(graph[root_module])]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue
        if child in seen:
            continue

        seen.add(child)
        visited.append(child)

        children = _allowed_children(child, graph.get(child, []), policy)
        if children:
            stack.append(iter(children))

    logger.debug("Resolved closure", root_module=root_module, modules=len(visited))
    return visited


def _allowed_children(parent: str, children: List[str], policy: ResolutionPolicy) -> List[str]:
    """Drop excluded children, then fail on any forbidden one."""
    allowed: List[str] = []
    for child in children:
        if policy.is_excluded(child):
            logger.debug("Excluding the dependency", dependency=child, parent=parent)
            continue
        allowed.append(child)

    forbidden = [child for child in allowed if policy.is_forbidden(child)]
    if forbidden:
        raise ForbiddenDependencyError(forbidden, parent=parent, dependencies=allowed)

    return allowed
