"""
Front-matter loader for coursegraph.

Reads the leading YAML block of .md/.mdx content files. The document body
is never parsed.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from coursegraph.schemas import GraphIssue, MalformedRecord

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.md", "*.mdx")
DELIMITER = "---"


def split_front_matter(text: str) -> tuple[str | None, str]:
    """
    Split a document into (front matter, body).

    Returns (None, text) when the document has no leading `---` block.
    """
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return None, text

    for idx in range(1, len(lines)):
        if lines[idx].strip() == DELIMITER:
            return "".join(lines[1:idx]), "".join(lines[idx + 1:])
    return None, text


def parse_front_matter(text: str, source: str = "<string>") -> dict[str, Any]:
    """
    Parse the front matter of one document into a raw record.

    Raises:
        MalformedRecord: missing block, invalid YAML, or not a mapping
    """
    block, _ = split_front_matter(text)
    if block is None:
        raise MalformedRecord(f"{source}: no front matter block")
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise MalformedRecord(f"{source}: invalid YAML front matter ({e})") from e
    if not isinstance(data, dict):
        raise MalformedRecord(f"{source}: front matter must be a mapping")
    return data


def load_records(
    content_dir: Path,
    patterns: tuple[str, ...] = DEFAULT_PATTERNS,
) -> tuple[list[dict[str, Any]], list[GraphIssue]]:
    """
    Load raw records from every content file under a directory.

    Files are read recursively, sorted by relative path so record order is
    stable between builds.

    Args:
        content_dir: Root of the content tree
        patterns: Glob patterns for content files

    Returns:
        Tuple of (records, issues for files that could not be read)

    Raises:
        FileNotFoundError: If content_dir doesn't exist
    """
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")

    paths = sorted(
        {p for pattern in patterns for p in content_dir.rglob(pattern) if p.is_file()},
        key=lambda p: p.relative_to(content_dir).as_posix(),
    )

    records = []
    issues = []
    for path in paths:
        rel = path.relative_to(content_dir).as_posix()
        try:
            records.append(parse_front_matter(path.read_text(encoding="utf-8"), source=rel))
        except MalformedRecord as e:
            logger.warning(str(e))
            issues.append(e.issue)

    logger.info(f"Loaded {len(records)} records from {content_dir}")
    return records, issues
