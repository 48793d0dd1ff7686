"""coursegraph utilities."""

from .frontmatter import load_records, parse_front_matter, split_front_matter

__all__ = [
    "load_records",
    "parse_front_matter",
    "split_front_matter",
]
