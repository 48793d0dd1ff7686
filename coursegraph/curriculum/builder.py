"""
Graph builder - Assemble normalized units into a prerequisite graph.

Edges run from prerequisite to dependent (A -> B means B lists A).
References to slugs absent from the corpus are kept as dangling edges for
the validator instead of being dropped.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

import networkx as nx

from coursegraph.schemas import ContentUnit, DanglingEdge, UnitKind

logger = logging.getLogger(__name__)


class DependencyGraph:
    """
    Read-only view over a frozen networkx DiGraph keyed by slug.

    Each node carries its ContentUnit under the `unit` attribute.
    """

    def __init__(self, graph: nx.DiGraph):
        self._graph = nx.freeze(graph)

    @property
    def nx_graph(self) -> nx.DiGraph:
        """Underlying frozen graph (mutation raises NetworkXError)."""
        return self._graph

    def __contains__(self, slug: str) -> bool:
        return slug in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __iter__(self) -> Iterator[str]:
        return iter(self.slugs)

    @property
    def slugs(self) -> list[str]:
        """All slugs, sorted."""
        return sorted(self._graph.nodes)

    def unit(self, slug: str) -> ContentUnit:
        return self._graph.nodes[slug]["unit"]

    def get(self, slug: str) -> Optional[ContentUnit]:
        if slug not in self._graph:
            return None
        return self.unit(slug)

    def units(self) -> list[ContentUnit]:
        return [self.unit(slug) for slug in self.slugs]

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def prerequisites_of(self, slug: str) -> list[str]:
        """Direct, resolved prerequisites in declaration order."""
        return [p for p in self.unit(slug).prerequisites if p in self._graph]

    def dependents_of(self, slug: str) -> list[str]:
        """Units that list `slug` directly, sorted."""
        return sorted(self._graph.successors(slug))

    def transitive_prerequisites(self, slug: str) -> set[str]:
        """Every unit reachable backwards along prerequisite edges."""
        return nx.ancestors(self._graph, slug)

    # -------------------------------------------------------------------------
    # Kinds and courses
    # -------------------------------------------------------------------------

    def units_of_kind(self, kind: UnitKind) -> list[ContentUnit]:
        return [unit for unit in self.units() if unit.kind == kind]

    def courses(self) -> list[str]:
        """Slugs of all course units, sorted."""
        return [unit.slug for unit in self.units_of_kind(UnitKind.COURSE)]

    def labs_for_course(self, course_slug: str) -> list[str]:
        """Slugs of labs whose courseSlug points at `course_slug`, sorted."""
        return [
            unit.slug for unit in self.units_of_kind(UnitKind.LAB)
            if unit.course_slug == course_slug
        ]

    def subgraph(self, slugs: Iterable[str]) -> nx.DiGraph:
        """Induced subgraph; only edges with both endpoints in `slugs` survive."""
        return self._graph.subgraph(slugs)


@dataclass(frozen=True)
class GraphBuild:
    """Output of the builder, consumed by the validator."""
    graph: DependencyGraph
    dangling: list[DanglingEdge] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)  # each repeated slug once


def build_graph(units: Iterable[ContentUnit]) -> GraphBuild:
    """
    Build the dependency graph for a full corpus.

    The first unit seen for a slug wins; later units with the same slug are
    recorded as duplicates and otherwise ignored.

    Args:
        units: Every normalized unit of the corpus

    Returns:
        GraphBuild with the frozen graph, dangling edges and duplicate slugs
    """
    G = nx.DiGraph()
    duplicates = []

    for unit in units:
        if unit.slug in G:
            if unit.slug not in duplicates:
                duplicates.append(unit.slug)
            logger.debug(f"Duplicate slug ignored: {unit.slug}")
            continue
        G.add_node(unit.slug, unit=unit)

    dangling = []
    for slug in list(G.nodes):
        unit = G.nodes[slug]["unit"]
        for prereq in unit.prerequisites:
            if prereq in G:
                G.add_edge(prereq, slug)
            else:
                dangling.append(DanglingEdge(source=slug, missing=prereq))

    logger.info(
        f"Built graph with {G.number_of_nodes()} units, {G.number_of_edges()} edges, "
        f"{len(dangling)} dangling, {len(duplicates)} duplicate slugs"
    )
    return GraphBuild(graph=DependencyGraph(G), dangling=dangling, duplicates=duplicates)
