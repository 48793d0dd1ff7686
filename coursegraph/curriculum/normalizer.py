"""
Normalizer - Coerce raw front-matter records into ContentUnits.

Resolution of prerequisite slugs is deferred to the graph builder, since a
record may reference units defined in files loaded later. Only checks that
need a single record (shape, kind, self-reference) happen here.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from pydantic import ValidationError

from coursegraph.schemas import (
    ContentGraphError,
    ContentUnit,
    GraphIssue,
    MalformedRecord,
    SelfDependency,
    UnitKind,
)

logger = logging.getLogger(__name__)

VALID_KINDS = {kind.value for kind in UnitKind}


def record_slug(raw: Any) -> str | None:
    """Stripped slug of a raw record, or None if it has no usable slug."""
    if not isinstance(raw, Mapping):
        return None
    slug = raw.get("slug")
    if not isinstance(slug, str) or not slug.strip():
        return None
    return slug.strip()


def _check_slug(raw: Mapping[str, Any]) -> str:
    slug = record_slug(raw)
    if slug is None:
        raise MalformedRecord(f"Record is missing a non-empty 'slug' (got {raw.get('slug')!r})")
    return slug


def _check_prerequisites(slug: str, value: Any) -> list[str]:
    if value is None:
        return []
    # A bare string is a sequence of characters, not of slugs
    if not isinstance(value, (list, tuple)):
        raise MalformedRecord(
            f"'{slug}': prerequisites must be a list of slugs, got {type(value).__name__}",
            slug=slug,
        )
    for item in value:
        if not isinstance(item, str):
            raise MalformedRecord(
                f"'{slug}': prerequisite entries must be strings, got {item!r}",
                slug=slug,
            )
    return list(value)


def _check_order(slug: str, value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedRecord(f"'{slug}': order must be an integer, got {value!r}", slug=slug)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise MalformedRecord(f"'{slug}': order must be an integer, got {value!r}", slug=slug)


def normalize_record(raw: Mapping[str, Any]) -> ContentUnit:
    """
    Validate one raw record and build a ContentUnit.

    Args:
        raw: Untyped key/value data from a file's front matter

    Returns:
        Normalized ContentUnit

    Raises:
        MalformedRecord: missing slug, unknown kind, or badly typed fields
        SelfDependency: the slug appears in its own prerequisites
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecord(f"Record must be a mapping, got {type(raw).__name__}")

    slug = _check_slug(raw)

    kind = raw.get("kind")
    if not isinstance(kind, str) or kind.strip().lower() not in VALID_KINDS:
        raise MalformedRecord(
            f"'{slug}': unrecognized kind {kind!r} (expected one of {sorted(VALID_KINDS)})",
            slug=slug,
        )

    course_slug = raw.get("courseSlug", raw.get("course_slug"))
    if course_slug is not None and not isinstance(course_slug, str):
        raise MalformedRecord(f"'{slug}': courseSlug must be a string, got {course_slug!r}", slug=slug)

    fields = {
        "slug": slug,
        "kind": kind.strip().lower(),
        "title": raw.get("title"),
        "description": raw.get("description"),
        "tags": raw.get("tags"),
        "prerequisites": _check_prerequisites(slug, raw.get("prerequisites")),
        "order": _check_order(slug, raw.get("order")),
        "course_slug": (course_slug.strip() or None) if course_slug else None,
    }

    try:
        unit = ContentUnit(**fields)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "record"
        raise MalformedRecord(f"'{slug}': {field}: {error['msg']}", slug=slug) from e

    if unit.slug in unit.prerequisites:
        raise SelfDependency(unit.slug)

    return unit


def normalize_records(
    records: Iterable[Mapping[str, Any]]
) -> tuple[list[ContentUnit], list[GraphIssue], set[str]]:
    """
    Normalize a batch of records, collecting every failure.

    Returns:
        Tuple of (units, issues, slugs of rejected records)
    """
    units = []
    issues = []
    rejected = set()

    for raw in records:
        try:
            units.append(normalize_record(raw))
        except ContentGraphError as e:
            logger.debug(f"Rejected record: {e}")
            issues.append(e.issue)
            rejected.update(e.issue.slugs)

    logger.info(f"Normalized {len(units)} records, rejected {len(issues)}")
    return units, issues, rejected
