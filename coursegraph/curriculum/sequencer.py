"""
Sequencer - Linear lab ordering for each course.

Topological sort over the course's labs only: edges with both endpoints in
the course fix relative position, cross-course prerequisites are left to the
unlock check. Ties between eligible labs are broken by the `order` hint
(labs with a hint first, ascending), then by slug, so unchanged content
always yields the same sequence.
"""

import logging
from typing import Iterable, Optional

import networkx as nx

from coursegraph.schemas import CourseSequence, CyclicDependencyError

from .builder import DependencyGraph
from .validator import canonical_cycle

logger = logging.getLogger(__name__)


def tie_break_key(graph: DependencyGraph, slug: str) -> tuple[int, int, str]:
    """Sort key among simultaneously eligible labs."""
    order = graph.unit(slug).order
    if order is None:
        return (1, 0, slug)
    return (0, order, slug)


def sequence_course(
    graph: DependencyGraph,
    course_slug: str,
    lab_slugs: Optional[Iterable[str]] = None,
) -> CourseSequence:
    """
    Compute the lab sequence for one course.

    Args:
        graph: Validated dependency graph
        course_slug: Course to sequence
        lab_slugs: Labs of the course (default: labs whose courseSlug matches)

    Returns:
        CourseSequence with every lab after all of its in-course prerequisites

    Raises:
        CyclicDependencyError: the course's labs contain a cycle
    """
    if lab_slugs is None:
        labs = graph.labs_for_course(course_slug)
    else:
        labs = sorted({slug for slug in lab_slugs if slug in graph})

    subgraph = graph.subgraph(labs)
    try:
        ordered = list(nx.lexicographical_topological_sort(
            subgraph, key=lambda slug: tie_break_key(graph, slug)
        ))
    except nx.NetworkXUnfeasible:
        cycle = [u for u, _ in nx.find_cycle(subgraph)]
        raise CyclicDependencyError(canonical_cycle(cycle), course_slug=course_slug)

    logger.debug(f"Sequenced course {course_slug}: {len(ordered)} labs")
    return CourseSequence(course_slug=course_slug, slugs=ordered)


def sequence_all(graph: DependencyGraph) -> dict[str, CourseSequence]:
    """Sequence every course in the graph, keyed by course slug (sorted)."""
    return {
        course_slug: sequence_course(graph, course_slug)
        for course_slug in graph.courses()
    }
