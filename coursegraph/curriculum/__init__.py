"""
coursegraph curriculum - Build-time prerequisite resolution for site content.

This module provides:
- normalize_record / normalize_records: raw front matter to ContentUnit
- build_graph / DependencyGraph: prerequisite graph keyed by slug
- validate_graph / find_cycles: complete diagnostics for a corpus
- sequence_course / sequence_all: deterministic lab order per course
- derive_navigation / unlock_state: previous/next links and unlock state
- build_catalog / CourseCatalog: the whole pipeline in one call
"""

from .normalizer import (
    normalize_record,
    normalize_records,
)

from .builder import (
    DependencyGraph,
    GraphBuild,
    build_graph,
)

from .validator import (
    canonical_cycle,
    find_cycles,
    validate_graph,
)

from .sequencer import (
    sequence_course,
    sequence_all,
)

from .navigator import (
    derive_navigation,
    missing_prerequisites,
    unlock_state,
)

from .pipeline import (
    CourseCatalog,
    build_catalog,
)

__all__ = [
    # Normalizer
    "normalize_record",
    "normalize_records",
    # Builder
    "DependencyGraph",
    "GraphBuild",
    "build_graph",
    # Validator
    "canonical_cycle",
    "find_cycles",
    "validate_graph",
    # Sequencer
    "sequence_course",
    "sequence_all",
    # Navigator
    "derive_navigation",
    "missing_prerequisites",
    "unlock_state",
    # Pipeline
    "CourseCatalog",
    "build_catalog",
]
