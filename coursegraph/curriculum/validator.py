"""
Validator - Check a built graph for dangling references, duplicates and cycles.

All checks run; findings are accumulated so a build can report every
problem in one pass.
"""

import logging
from typing import Iterable

from coursegraph.schemas import GraphIssue, IssueKind, UnitKind

from .builder import DependencyGraph, GraphBuild

logger = logging.getLogger(__name__)

# DFS colors
WHITE, GRAY, BLACK = 0, 1, 2


def canonical_cycle(cycle: list[str]) -> list[str]:
    """Rotate a cycle so its smallest slug comes first, keeping edge direction."""
    start = cycle.index(min(cycle))
    return cycle[start:] + cycle[:start]


def find_cycles(graph: DependencyGraph) -> list[list[str]]:
    """
    Find prerequisite cycles with an iterative three-color DFS.

    Each back edge (edge into a node still on the active path) yields one
    cycle: the path slice from that node to the current one. Roots and
    successors are visited in sorted order so results are reproducible.

    Returns:
        Distinct cycles in canonical rotation, in discovery order
    """
    color = {slug: WHITE for slug in graph.slugs}
    cycles = []
    seen = set()

    for root in graph.slugs:
        if color[root] != WHITE:
            continue

        path = [root]
        on_path = {root: 0}
        stack = [iter(graph.dependents_of(root))]
        color[root] = GRAY

        while stack:
            node = path[-1]
            child = next(stack[-1], None)

            if child is None:
                # All successors explored
                color[node] = BLACK
                stack.pop()
                path.pop()
                del on_path[node]
                continue

            if color[child] == WHITE:
                color[child] = GRAY
                on_path[child] = len(path)
                path.append(child)
                stack.append(iter(graph.dependents_of(child)))
            elif color[child] == GRAY:
                cycle = canonical_cycle(path[on_path[child]:])
                key = tuple(cycle)
                if key not in seen:
                    seen.add(key)
                    cycles.append(cycle)
                    logger.debug(f"Found cycle: {' -> '.join(cycle)}")

    return cycles


def validate_graph(build: GraphBuild, ignore_missing: Iterable[str] = ()) -> list[GraphIssue]:
    """
    Validate a built graph.

    Checks, in order:
    1. Dangling prerequisite references
    2. Duplicate slugs
    3. Cycles
    4. courseSlug references that do not name a course

    Args:
        build: Output of build_graph
        ignore_missing: Slugs already reported upstream (e.g. records
            rejected by the normalizer); dangling edges to them are skipped

    Returns:
        Empty list if the graph is accepted, otherwise every issue found
    """
    ignored = set(ignore_missing)
    issues = []

    for edge in build.dangling:
        if edge.missing in ignored:
            continue
        issues.append(GraphIssue(
            kind=IssueKind.UNRESOLVED_PREREQUISITE,
            slugs=[edge.source, edge.missing],
            message=f"'{edge.source}' requires unknown prerequisite '{edge.missing}'",
        ))

    for slug in build.duplicates:
        issues.append(GraphIssue(
            kind=IssueKind.DUPLICATE_SLUG,
            slugs=[slug],
            message=f"Slug '{slug}' is defined more than once",
        ))

    for cycle in find_cycles(build.graph):
        issues.append(GraphIssue(
            kind=IssueKind.CYCLIC_DEPENDENCY,
            slugs=cycle,
            message=f"Prerequisite cycle: {' -> '.join(cycle + cycle[:1])}",
        ))

    graph = build.graph
    for unit in graph.units():
        if unit.course_slug is None:
            continue
        target = graph.get(unit.course_slug)
        if target is None or target.kind != UnitKind.COURSE:
            issues.append(GraphIssue(
                kind=IssueKind.UNKNOWN_COURSE,
                slugs=[unit.slug, unit.course_slug],
                message=f"'{unit.slug}' belongs to unknown course '{unit.course_slug}'",
            ))

    if issues:
        logger.info(f"Validation found {len(issues)} issues")
    return issues
