"""Shared corpus builders for tests."""

from coursegraph.curriculum import build_graph
from coursegraph.schemas import ContentUnit


def lab(slug, prerequisites=(), course="course", order=None):
    return ContentUnit(
        slug=slug,
        kind="lab",
        prerequisites=list(prerequisites),
        course_slug=course,
        order=order,
    )


def course(slug="course", prerequisites=()):
    return ContentUnit(slug=slug, kind="course", prerequisites=list(prerequisites))


def graph_of(*units):
    return build_graph(units).graph
