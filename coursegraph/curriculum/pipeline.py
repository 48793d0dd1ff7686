"""
Pipeline - Run the full content graph computation over one corpus.

raw records -> ContentUnits -> graph -> issues -> course sequences

The result is a CourseCatalog holding everything derived from the corpus.
Nothing is cached at module level; build a new catalog when content changes.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional

from coursegraph.schemas import (
    ContentUnit,
    CourseSequence,
    CyclicDependencyError,
    GraphIssue,
    NavigationView,
    UnitAvailability,
)

from .builder import DependencyGraph, build_graph
from .navigator import derive_navigation, unlock_state
from .normalizer import normalize_records, record_slug
from .sequencer import sequence_course
from .validator import validate_graph

logger = logging.getLogger(__name__)


class CourseCatalog:
    """
    Validated content graph plus per-course sequences.

    Sequences are only computed for a graph with no issues; a catalog with
    issues still answers unlock queries so the build can render with
    warnings if it chooses to.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        issues: list[GraphIssue],
        sequences: dict[str, CourseSequence],
    ):
        self.graph = graph
        self.issues = issues
        self.sequences = sequences
        self._course_of = {
            slug: seq.course_slug
            for seq in sequences.values()
            for slug in seq.slugs
        }

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def units(self) -> list[ContentUnit]:
        return self.graph.units()

    def sequence_for(self, course_slug: str) -> Optional[CourseSequence]:
        return self.sequences.get(course_slug)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigation_for(self, course_slug: str, completed: Iterable[str] = ()) -> dict[str, NavigationView]:
        """Navigation views for one course; empty if it has no sequence."""
        sequence = self.sequences.get(course_slug)
        if sequence is None:
            return {}
        return derive_navigation(self.graph, sequence, completed)

    def view_for(self, slug: str, completed: Iterable[str] = ()) -> NavigationView:
        """
        Navigation view for a single unit.

        Labs inside a sequence get previous/next links; any other unit gets
        its unlock state only.

        Raises:
            KeyError: unknown slug
        """
        if slug not in self.graph:
            raise KeyError(slug)
        course_slug = self._course_of.get(slug)
        if course_slug is None:
            return unlock_state(self.graph, slug, completed)
        return self.navigation_for(course_slug, completed)[slug]

    def availability(self, slug: str, completed: Iterable[str] = ()) -> UnitAvailability:
        return self.view_for(slug, completed).availability

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def summary(self) -> dict:
        """Counts for reports and logs."""
        kinds = Counter(unit.kind.value for unit in self.units)
        issue_kinds = Counter(issue.kind.value for issue in self.issues)
        return {
            "total_units": len(self.graph),
            "units_by_kind": dict(sorted(kinds.items())),
            "total_edges": self.graph.nx_graph.number_of_edges(),
            "courses": {
                course_slug: len(seq) for course_slug, seq in self.sequences.items()
            },
            "issues_by_kind": dict(sorted(issue_kinds.items())),
        }

    def to_dict(self, generated_at: Optional[str] = None) -> dict:
        """
        JSON-ready export for the renderer.

        Key order is fixed so unchanged content serializes byte-identically;
        pass `generated_at` only when a timestamp is wanted.
        """
        data = {
            "units": [unit.model_dump(mode="json", by_alias=True) for unit in self.units],
            "sequences": {
                course_slug: seq.slugs for course_slug, seq in sorted(self.sequences.items())
            },
            "issues": [issue.model_dump(mode="json") for issue in self.issues],
            "summary": self.summary(),
        }
        if generated_at is not None:
            data["generated_at"] = generated_at
        return data


def build_catalog(
    records: Iterable[Mapping[str, Any]],
    upstream_issues: Iterable[GraphIssue] = (),
) -> CourseCatalog:
    """
    Run normalize -> build -> validate -> sequence over a corpus.

    Args:
        records: Raw front-matter records for the whole corpus
        upstream_issues: Problems already found while loading the records;
            reported first and, like any other issue, block sequencing

    Returns:
        CourseCatalog; `issues` lists every problem found
    """
    records = list(records)
    units, normalize_issues, rejected = normalize_records(records)
    issues = list(upstream_issues) + normalize_issues

    # Duplicates count every record with a usable slug, rejected ones included
    build = build_graph(units)
    build = replace(build, duplicates=repeated_slugs(records))
    issues.extend(validate_graph(build, ignore_missing=rejected))

    sequences = {}
    if issues:
        for issue in issues:
            logger.warning(str(issue))
        logger.warning(f"Content graph has {len(issues)} issues; skipping course sequencing")
    else:
        for course_slug in build.graph.courses():
            try:
                sequences[course_slug] = sequence_course(build.graph, course_slug)
            except CyclicDependencyError as e:
                issues.append(e.issue)
        logger.info(f"Sequenced {len(sequences)} courses")

    return CourseCatalog(build.graph, issues, sequences)


def repeated_slugs(records: Iterable[Mapping[str, Any]]) -> list[str]:
    """Slugs carried by more than one record, in order of first repeat."""
    seen = set()
    repeated = []
    for raw in records:
        slug = record_slug(raw)
        if slug is None:
            continue
        if slug in seen and slug not in repeated:
            repeated.append(slug)
        seen.add(slug)
    return repeated
