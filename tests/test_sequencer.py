"""Tests for per-course topological sequencing."""

import networkx as nx
import pytest

from coursegraph.curriculum import sequence_all, sequence_course
from coursegraph.curriculum.builder import DependencyGraph
from coursegraph.schemas import CyclicDependencyError, IssueKind

from .helpers import course, graph_of, lab


class TestSequenceCourse:

    def test_linear_chain(self):
        graph = graph_of(course(), lab("lab3", ["lab2"]), lab("lab1"), lab("lab2", ["lab1"]))
        assert sequence_course(graph, "course").slugs == ["lab1", "lab2", "lab3"]

    def test_unrelated_labs_in_slug_order(self):
        graph = graph_of(course(), lab("beta"), lab("alpha"))
        assert sequence_course(graph, "course").slugs == ["alpha", "beta"]

    def test_order_hint_beats_slug(self):
        graph = graph_of(course(), lab("a", order=2), lab("b", order=1))
        assert sequence_course(graph, "course").slugs == ["b", "a"]

    def test_hinted_labs_before_unhinted(self):
        graph = graph_of(course(), lab("a"), lab("z", order=5))
        assert sequence_course(graph, "course").slugs == ["z", "a"]

    def test_tied_order_falls_back_to_slug(self):
        graph = graph_of(course(), lab("m", order=1), lab("c", order=1))
        assert sequence_course(graph, "course").slugs == ["c", "m"]

    def test_prerequisite_beats_order_hint(self):
        graph = graph_of(course(), lab("intro", order=9), lab("next", ["intro"], order=1))
        assert sequence_course(graph, "course").slugs == ["intro", "next"]

    def test_every_lab_after_its_prerequisites(self):
        graph = graph_of(
            course(),
            lab("e", ["b", "d"], order=1),
            lab("d", ["a"]),
            lab("c", order=0),
            lab("b", ["a"], order=3),
            lab("a", order=4),
        )
        slugs = sequence_course(graph, "course").slugs
        assert sorted(slugs) == ["a", "b", "c", "d", "e"]
        for slug in slugs:
            for prereq in graph.prerequisites_of(slug):
                assert slugs.index(prereq) < slugs.index(slug)
        assert slugs == ["c", "a", "b", "d", "e"]

    def test_cross_course_prerequisites_ignored_for_position(self):
        graph = graph_of(
            course("basics"),
            course("advanced"),
            lab("b-1", course="basics"),
            lab("a-2", course="advanced"),
            lab("a-1", ["b-1", "a-2"], course="advanced"),
        )
        assert sequence_course(graph, "advanced").slugs == ["a-2", "a-1"]
        assert sequence_course(graph, "basics").slugs == ["b-1"]

    def test_explicit_lab_slugs(self):
        graph = graph_of(course(), lab("a"), lab("b", ["a"]), lab("c"))
        assert sequence_course(graph, "course", ["b", "a"]).slugs == ["a", "b"]

    def test_empty_course(self):
        graph = graph_of(course())
        assert sequence_course(graph, "course").slugs == []

    def test_cycle_scoped_to_course(self):
        # Unvalidated graph; the sequencer checks on its own
        G = nx.DiGraph()
        for unit in (course(), lab("x", ["y"]), lab("y", ["x"])):
            G.add_node(unit.slug, unit=unit)
        G.add_edge("x", "y")
        G.add_edge("y", "x")
        graph = DependencyGraph(G)
        with pytest.raises(CyclicDependencyError) as exc:
            sequence_course(graph, "course")
        assert exc.value.issue.kind == IssueKind.CYCLIC_DEPENDENCY
        assert exc.value.issue.slugs == ["x", "y"]
        assert exc.value.course_slug == "course"

    def test_deterministic(self):
        units = [course()] + [lab(f"lab{i}", order=i % 3) for i in range(20)]
        first = sequence_course(graph_of(*units), "course")
        second = sequence_course(graph_of(*reversed(units)), "course")
        assert first.model_dump_json() == second.model_dump_json()


class TestSequenceAll:

    def test_every_course_sequenced(self):
        graph = graph_of(
            course("go"), course("rust"),
            lab("go-1", course="go"),
            lab("rust-1", course="rust"), lab("rust-2", ["rust-1"], course="rust"),
        )
        sequences = sequence_all(graph)
        assert list(sequences) == ["go", "rust"]
        assert sequences["rust"].slugs == ["rust-1", "rust-2"]
