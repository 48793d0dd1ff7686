"""
Content schemas for coursegraph.

Defines Pydantic models for the learning units found in the site's
front matter:
- Unit kind (lab, course, project)
- ContentUnit with identity, display strings and prerequisite references
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UnitKind(str, Enum):
    LAB = "lab"
    COURSE = "course"
    PROJECT = "project"


class ContentUnit(BaseModel):
    """
    A single learning artifact with a globally unique slug.

    Prerequisites are kept as raw slugs; they are resolved against the
    full corpus by the graph builder, so forward references are legal here.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    slug: str = Field(..., min_length=1)
    kind: UnitKind
    title: str = ""
    description: str = ""
    tags: list[str] = []
    prerequisites: list[str] = []   # slugs, declaration order
    order: Optional[int] = None     # tie-break hint within a course
    course_slug: Optional[str] = Field(default=None, alias="courseSlug")

    @field_validator('slug')
    @classmethod
    def slug_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('slug must not be empty')
        return v

    # Display-only fields: front matter often carries numbers or a bare tag
    @field_validator('title', 'description', mode='before')
    @classmethod
    def display_text(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator('tags', mode='before')
    @classmethod
    def tag_list(cls, v):
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            v = [v]
        return [str(tag).strip() for tag in v if tag is not None and str(tag).strip()]

    @field_validator('prerequisites')
    @classmethod
    def prerequisites_unique(cls, v):
        seen = set()
        result = []
        for slug in v:
            slug = slug.strip()
            if not slug:
                raise ValueError('prerequisite slugs must not be empty')
            if slug not in seen:
                seen.add(slug)
                result.append(slug)
        return result

    @property
    def is_lab(self) -> bool:
        return self.kind == UnitKind.LAB
