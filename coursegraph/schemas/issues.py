"""
Issue schemas for coursegraph.

Every problem found while assembling the content graph is reported as a
GraphIssue value. The few operations that work on a single record or a
single course raise a ContentGraphError carrying the same issue, which the
pipeline collects instead of aborting.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class IssueKind(str, Enum):
    MALFORMED_RECORD = "MalformedRecord"
    SELF_DEPENDENCY = "SelfDependency"
    DUPLICATE_SLUG = "DuplicateSlug"
    UNRESOLVED_PREREQUISITE = "UnresolvedPrerequisite"
    CYCLIC_DEPENDENCY = "CyclicDependency"
    UNKNOWN_COURSE = "UnknownCourse"


class GraphIssue(BaseModel):
    """One diagnostic, naming the offending slug(s)."""
    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    slugs: list[str]    # for cycles: slugs in cycle order
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class DanglingEdge(BaseModel):
    """Prerequisite reference that did not resolve to any unit."""
    model_config = ConfigDict(frozen=True)

    source: str     # unit listing the prerequisite
    missing: str    # unresolved prerequisite slug


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class ContentGraphError(ValueError):
    """Base error; `issue` holds the structured diagnostic."""

    def __init__(self, issue: GraphIssue):
        super().__init__(issue.message)
        self.issue = issue


class MalformedRecord(ContentGraphError):
    """Raw record is structurally invalid."""

    def __init__(self, message: str, slug: str | None = None):
        super().__init__(GraphIssue(
            kind=IssueKind.MALFORMED_RECORD,
            slugs=[slug] if slug else [],
            message=message,
        ))


class SelfDependency(ContentGraphError):
    """Unit lists itself as a prerequisite."""

    def __init__(self, slug: str):
        super().__init__(GraphIssue(
            kind=IssueKind.SELF_DEPENDENCY,
            slugs=[slug],
            message=f"'{slug}' lists itself as a prerequisite",
        ))


class CyclicDependencyError(ContentGraphError):
    """Prerequisite cycle, optionally scoped to one course."""

    def __init__(self, cycle: list[str], course_slug: str | None = None):
        path = " -> ".join(cycle + cycle[:1])
        scope = f" in course '{course_slug}'" if course_slug else ""
        super().__init__(GraphIssue(
            kind=IssueKind.CYCLIC_DEPENDENCY,
            slugs=list(cycle),
            message=f"Prerequisite cycle{scope}: {path}",
        ))
        self.course_slug = course_slug
