"""
coursegraph schemas - Pydantic models for the content graph.

This module exports all schema classes for:
- Content: content units and their kinds
- Issues: diagnostics and the errors that carry them
- Navigation: course sequences and per-unit navigation views
"""

# Content schemas
from .content import (
    UnitKind,
    ContentUnit,
)

# Issue schemas
from .issues import (
    IssueKind,
    GraphIssue,
    DanglingEdge,
    ContentGraphError,
    MalformedRecord,
    SelfDependency,
    CyclicDependencyError,
)

# Navigation schemas
from .navigation import (
    UnitAvailability,
    CourseSequence,
    NavigationView,
)

__all__ = [
    # Content
    'UnitKind',
    'ContentUnit',
    # Issues
    'IssueKind',
    'GraphIssue',
    'DanglingEdge',
    'ContentGraphError',
    'MalformedRecord',
    'SelfDependency',
    'CyclicDependencyError',
    # Navigation
    'UnitAvailability',
    'CourseSequence',
    'NavigationView',
]
