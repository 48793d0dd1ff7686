"""Tests for raw record normalization."""

import pytest

from coursegraph.curriculum import normalize_record, normalize_records
from coursegraph.schemas import IssueKind, MalformedRecord, SelfDependency, UnitKind


class TestNormalizeRecord:

    def test_minimal_record(self):
        unit = normalize_record({"slug": "lab1", "kind": "lab"})
        assert unit.slug == "lab1"
        assert unit.kind == UnitKind.LAB
        assert unit.prerequisites == []

    def test_full_record(self):
        unit = normalize_record({
            "slug": "goroutines",
            "kind": "Lab",
            "title": "Goroutines",
            "description": "Concurrency basics",
            "tags": ["concurrency"],
            "prerequisites": ["functions", "channels"],
            "order": 3,
            "courseSlug": "go-concurrency",
            "coverImage": "/images/goroutines.png",
        })
        assert unit.kind == UnitKind.LAB
        assert unit.prerequisites == ["functions", "channels"]
        assert unit.order == 3
        assert unit.course_slug == "go-concurrency"
        assert unit.tags == ["concurrency"]

    def test_snake_case_course_slug(self):
        unit = normalize_record({"slug": "a", "kind": "lab", "course_slug": "c"})
        assert unit.course_slug == "c"

    def test_null_prerequisites(self):
        unit = normalize_record({"slug": "a", "kind": "project", "prerequisites": None})
        assert unit.prerequisites == []

    def test_tuple_prerequisites(self):
        unit = normalize_record({"slug": "b", "kind": "lab", "prerequisites": ("a",)})
        assert unit.prerequisites == ["a"]

    def test_order_string_coerced(self):
        assert normalize_record({"slug": "a", "kind": "lab", "order": " 2 "}).order == 2

    @pytest.mark.parametrize("raw", [
        {"kind": "lab"},
        {"slug": "", "kind": "lab"},
        {"slug": "   ", "kind": "lab"},
        {"slug": 42, "kind": "lab"},
    ])
    def test_missing_slug(self, raw):
        with pytest.raises(MalformedRecord):
            normalize_record(raw)

    @pytest.mark.parametrize("kind", [None, "", "tutorial", 3])
    def test_unrecognized_kind(self, kind):
        with pytest.raises(MalformedRecord) as exc:
            normalize_record({"slug": "a", "kind": kind})
        assert exc.value.issue.slugs == ["a"]

    @pytest.mark.parametrize("prereqs", ["lab1", {"lab1": True}, ["lab1", 2], [None]])
    def test_prerequisites_not_string_sequence(self, prereqs):
        with pytest.raises(MalformedRecord):
            normalize_record({"slug": "a", "kind": "lab", "prerequisites": prereqs})

    @pytest.mark.parametrize("order", [True, "first", 1.5])
    def test_bad_order(self, order):
        with pytest.raises(MalformedRecord):
            normalize_record({"slug": "a", "kind": "lab", "order": order})

    def test_bad_course_slug(self):
        with pytest.raises(MalformedRecord):
            normalize_record({"slug": "a", "kind": "lab", "courseSlug": ["c"]})

    def test_numeric_title_coerced(self):
        unit = normalize_record({"slug": "a", "kind": "course", "title": 2024, "description": 1.5})
        assert unit.title == "2024"
        assert unit.description == "1.5"

    def test_bare_tag_wrapped(self):
        assert normalize_record({"slug": "a", "kind": "lab", "tags": "golang"}).tags == ["golang"]

    def test_tags_coerced_to_strings(self):
        unit = normalize_record({"slug": "a", "kind": "lab", "tags": [1, "go", None, " "]})
        assert unit.tags == ["1", "go"]

    @pytest.mark.parametrize("prereqs", [[""], ["lab1", "   "]])
    def test_blank_prerequisite_rejected(self, prereqs):
        with pytest.raises(MalformedRecord) as exc:
            normalize_record({"slug": "a", "kind": "lab", "prerequisites": prereqs})
        assert exc.value.issue.slugs == ["a"]

    def test_validation_message_names_field(self):
        with pytest.raises(MalformedRecord) as exc:
            normalize_record({"slug": "a", "kind": "lab", "prerequisites": ["b", ""]})
        assert "prerequisites" in str(exc.value)
        assert "must not be empty" in str(exc.value)

    def test_not_a_mapping(self):
        with pytest.raises(MalformedRecord):
            normalize_record(["slug", "a"])

    def test_self_dependency(self):
        with pytest.raises(SelfDependency) as exc:
            normalize_record({"slug": "a", "kind": "lab", "prerequisites": ["b", "a"]})
        assert exc.value.issue.kind == IssueKind.SELF_DEPENDENCY
        assert exc.value.issue.slugs == ["a"]

    def test_forward_reference_allowed(self):
        unit = normalize_record({"slug": "a", "kind": "lab", "prerequisites": ["defined-later"]})
        assert unit.prerequisites == ["defined-later"]


class TestNormalizeRecords:

    def test_collects_all_failures(self):
        units, issues, rejected = normalize_records([
            {"slug": "ok", "kind": "lab"},
            {"slug": "self", "kind": "lab", "prerequisites": ["self"]},
            {"slug": "weird", "kind": "video"},
            {"kind": "lab"},
        ])
        assert [u.slug for u in units] == ["ok"]
        assert [i.kind for i in issues] == [
            IssueKind.SELF_DEPENDENCY,
            IssueKind.MALFORMED_RECORD,
            IssueKind.MALFORMED_RECORD,
        ]
        assert rejected == {"self", "weird"}

    def test_exactly_one_self_dependency(self):
        _, issues, _ = normalize_records([
            {"slug": "A", "kind": "lab", "prerequisites": ["A", "A"]},
        ])
        assert len(issues) == 1
        assert issues[0].kind == IssueKind.SELF_DEPENDENCY
        assert issues[0].slugs == ["A"]
