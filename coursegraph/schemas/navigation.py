"""
Navigation schemas for coursegraph.

Defines Pydantic models handed to the rendering layer:
- CourseSequence: ordered lab slugs of one course
- NavigationView: previous/next links and unlock state for one unit
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UnitAvailability(str, Enum):
    """Availability status for sidebar display."""
    LOCKED = "locked"           # Prerequisites not met
    AVAILABLE = "available"     # Can start
    COMPLETED = "completed"     # Finished


class CourseSequence(BaseModel):
    model_config = ConfigDict(frozen=True)

    course_slug: str
    slugs: list[str]

    def __len__(self) -> int:
        return len(self.slugs)

    def index(self, slug: str) -> int:
        return self.slugs.index(slug)


class NavigationView(BaseModel):
    """
    Resolved navigation for one unit, computed against a completion set.

    `unlocked` is true only when every transitive prerequisite is completed.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slug: str
    course_slug: Optional[str] = None
    previous_slug: Optional[str] = Field(default=None, alias="previousSlug")
    next_slug: Optional[str] = Field(default=None, alias="nextSlug")
    unlocked: bool
    completed: bool = False
    missing_prerequisites: list[str] = []  # sorted
    position: int = 0   # 1-based, 0 when outside a sequence
    total: int = 0

    @property
    def availability(self) -> UnitAvailability:
        if self.completed:
            return UnitAvailability.COMPLETED
        if self.unlocked:
            return UnitAvailability.AVAILABLE
        return UnitAvailability.LOCKED

    def status_indicator(self) -> str:
        """
        Status indicator for sidebar display.

        Returns:
            ✓ for completed
            ○ for available
            ◌ for locked
        """
        return {
            UnitAvailability.COMPLETED: "✓",
            UnitAvailability.AVAILABLE: "○",
            UnitAvailability.LOCKED: "◌",
        }[self.availability]
