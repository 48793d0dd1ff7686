"""
Navigator - Previous/next links and unlock state for content units.

Unlock checks walk every prerequisite reachable from a unit, across course
boundaries, so multi-hop chains are honored. Nothing here mutates the graph
or the sequence; call again with a different completion set per visitor.
"""

from typing import Iterable

from coursegraph.schemas import CourseSequence, NavigationView

from .builder import DependencyGraph


def missing_prerequisites(graph: DependencyGraph, slug: str, completed: Iterable[str]) -> list[str]:
    """Transitive prerequisites of `slug` not in `completed`, sorted."""
    done = set(completed)
    return sorted(graph.transitive_prerequisites(slug) - done)


def unlock_state(graph: DependencyGraph, slug: str, completed: Iterable[str]) -> NavigationView:
    """
    Unlock state for any unit, including ones outside a course sequence.

    Returns a NavigationView with no previous/next links and position 0.
    """
    done = set(completed)
    missing = missing_prerequisites(graph, slug, done)
    return NavigationView(
        slug=slug,
        course_slug=graph.unit(slug).course_slug,
        unlocked=not missing,
        completed=slug in done,
        missing_prerequisites=missing,
    )


def derive_navigation(
    graph: DependencyGraph,
    sequence: CourseSequence,
    completed: Iterable[str],
) -> dict[str, NavigationView]:
    """
    Navigation views for every unit of a course sequence.

    Args:
        graph: Validated dependency graph
        sequence: Course sequence to walk
        completed: Slugs the visitor has completed

    Returns:
        Dict of slug -> NavigationView, in sequence order
    """
    done = set(completed)
    slugs = sequence.slugs
    total = len(slugs)

    views = {}
    for idx, slug in enumerate(slugs):
        missing = missing_prerequisites(graph, slug, done)
        views[slug] = NavigationView(
            slug=slug,
            course_slug=sequence.course_slug,
            previous_slug=slugs[idx - 1] if idx > 0 else None,
            next_slug=slugs[idx + 1] if idx + 1 < total else None,
            unlocked=not missing,
            completed=slug in done,
            missing_prerequisites=missing,
            position=idx + 1,
            total=total,
        )
    return views
