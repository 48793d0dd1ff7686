#!/usr/bin/env python3
"""
build_content_graph.py - Validate site content and derive course navigation.

Reads the front matter of every lesson, lab, course and project file,
builds the prerequisite graph, and writes the artifacts the static site
renderer consumes.

Key features:
- Reports every problem in one pass (dangling prerequisites, duplicate
  slugs, cycles, unknown courses, malformed front matter)
- Deterministic lab order per course (order hint, then slug)
- --strict fails the build when any issue is found

Usage:
  python scripts/build_content_graph.py --content-dir content --output-dir build/content
  python scripts/build_content_graph.py --strict
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from coursegraph.curriculum import CourseCatalog, build_catalog
from coursegraph.utils import load_records

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONTENT_DIR = Path(os.environ.get("COURSEGRAPH_CONTENT_DIR", PROJECT_ROOT / "content"))
DEFAULT_OUTPUT_DIR = Path(os.environ.get("COURSEGRAPH_OUTPUT_DIR", PROJECT_ROOT / "data" / "content"))
GRAPH_FILENAME = "content_graph.json"
REPORT_FILENAME = "content_report.md"


# -----------------------------------------------------------------------------
# Report
# -----------------------------------------------------------------------------

def generate_content_report(catalog: CourseCatalog, output_path: Path):
    """Generate human-readable content report."""
    summary = catalog.summary()

    lines = [
        "# Content Graph Report",
        "",
        "## Summary",
        "",
        f"- **Total units**: {summary['total_units']}",
    ]
    for kind, count in summary["units_by_kind"].items():
        lines.append(f"- **{kind.capitalize()}s**: {count}")
    lines.extend([
        f"- **Prerequisite edges**: {summary['total_edges']}",
        f"- **Issues**: {len(catalog.issues)}",
        "",
    ])

    if catalog.issues:
        lines.append("## Issues")
        lines.append("")
        lines.append("| Kind | Slugs | Message |")
        lines.append("|------|-------|---------|")
        for issue in catalog.issues:
            lines.append(f"| {issue.kind.value} | {', '.join(issue.slugs)} | {issue.message} |")
        lines.append("")

    if catalog.sequences:
        lines.append("## Courses")
        lines.append("")

        for course_slug, sequence in sorted(catalog.sequences.items()):
            course = catalog.graph.unit(course_slug)
            lines.append(f"### {course.title or course_slug}")
            lines.append("")
            for position, slug in enumerate(sequence.slugs, start=1):
                prereqs = ", ".join(catalog.graph.prerequisites_of(slug)) or "None"
                lines.append(f"{position}. **{slug}** (prerequisites: {prereqs})")
            lines.append("")

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write("\n".join(lines))


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def build_content_graph(content_dir: Path, output_dir: Path) -> CourseCatalog:
    """Load content, build the catalog, and write both artifacts."""
    logger.info(f"Loading content from {content_dir}...")
    records, load_issues = load_records(content_dir)

    catalog = build_catalog(records, upstream_issues=load_issues)

    output_dir.mkdir(parents=True, exist_ok=True)

    graph_path = output_dir / GRAPH_FILENAME
    with open(graph_path, 'w', encoding='utf-8') as f:
        json.dump(catalog.to_dict(), f, ensure_ascii=False, indent=2)
    logger.info(f"Saved content graph to {graph_path}")

    report_path = output_dir / REPORT_FILENAME
    generate_content_report(catalog, report_path)
    logger.info(f"Saved content report to {report_path}")

    return catalog


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate site content and derive course navigation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/build_content_graph.py --content-dir content --output-dir build/content
  python scripts/build_content_graph.py --strict
        """,
    )
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=DEFAULT_CONTENT_DIR,
        help="Directory with .md/.mdx content files (default: $COURSEGRAPH_CONTENT_DIR or content/)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Output directory for graph artifacts (default: $COURSEGRAPH_OUTPUT_DIR or data/content/)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any issue is found",
    )

    args = parser.parse_args(argv)

    # Validate input
    if not args.content_dir.is_dir():
        print(f"ERROR: Content directory not found: {args.content_dir}")
        return 1

    started = datetime.now()
    catalog = build_content_graph(args.content_dir, args.output_dir)
    elapsed = (datetime.now() - started).total_seconds()

    summary = catalog.summary()
    print(f"\nContent graph written to {args.output_dir}/ in {elapsed:.2f}s")
    print(f"  - Units: {summary['total_units']}")
    print(f"  - Courses sequenced: {len(catalog.sequences)}")
    print(f"  - Issues: {len(catalog.issues)}")

    if catalog.issues and args.strict:
        logger.error(f"Build failed: {len(catalog.issues)} content issues")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
