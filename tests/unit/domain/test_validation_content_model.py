"""Unit tests for ValidationContent revisions and source attribution."""

import pytest

from src.domain.errors import InvalidFieldPathError
from src.domain.models.validation_content import (
    REVISABLE_FIELDS,
    AccessLevel,
    SourceType,
    derive_source_attribution,
    normalize_field,
)
from tests.helpers.validation_factories import make_content


class TestNormalizeField:
    def test_camel_case_alias(self) -> None:
        assert normalize_field("aiGeneratedInsight") == "ai_generated_insight"
        assert normalize_field("recommendedActions") == "recommended_actions"

    def test_supporting_data_not_revisable(self) -> None:
        with pytest.raises(InvalidFieldPathError) as exc_info:
            normalize_field("supporting_data")

        assert exc_info.value.field == "supporting_data"
        assert set(exc_info.value.allowed_fields) == set(REVISABLE_FIELDS)

    def test_unknown_field(self) -> None:
        with pytest.raises(InvalidFieldPathError):
            normalize_field("author")


class TestWithChanges:
    def test_string_field(self) -> None:
        content = make_content().with_changes({"title": "Revised"})

        assert content.title == "Revised"

    def test_list_field_from_list(self) -> None:
        content = make_content().with_changes({"limitations": ["small sample", "one term"]})

        assert content.limitations == ("small sample", "one term")

    def test_list_field_rejects_string(self) -> None:
        with pytest.raises(ValueError):
            make_content().with_changes({"assumptions": "just one"})

    def test_string_field_rejects_list(self) -> None:
        with pytest.raises(ValueError):
            make_content().with_changes({"title": ["a", "b"]})

    def test_cultural_context_can_be_cleared(self) -> None:
        content = make_content(cultural_context="seasonal gatherings")

        assert content.with_changes({"culturalContext": None}).cultural_context is None

    def test_invalid_field_applies_nothing(self) -> None:
        content = make_content()

        with pytest.raises(InvalidFieldPathError):
            content.with_changes({"title": "ok", "supporting_data": []})

        assert content.title == "Youth program attendance"


class TestDeriveSourceAttribution:
    def test_mappings_with_names_become_sources(self) -> None:
        content = make_content(
            supporting_data=(
                {"source_name": "Sign-in sheets", "source_type": "database", "reliability": 5},
                {"name": "Coordinator interview", "access_level": "restricted"},
                "free text note",
                {"value": 12},
            )
        )

        sources = derive_source_attribution(content, "pipeline")

        assert [s.source_name for s in sources] == ["Sign-in sheets", "Coordinator interview"]
        assert sources[0].source_type == SourceType.DATABASE
        assert sources[0].reliability == 5
        assert sources[1].access_level == AccessLevel.RESTRICTED
        assert all(s.weight == pytest.approx(0.5) for s in sources)
        assert sources[0].collected_by == "pipeline"

    def test_bad_values_fall_back_to_defaults(self) -> None:
        content = make_content(
            supporting_data=({"source_name": "Survey", "source_type": "carrier pigeon", "reliability": 9},)
        )

        [source] = derive_source_attribution(content)

        assert source.source_type == SourceType.DOCUMENT
        assert source.reliability == 3

    def test_no_sources(self) -> None:
        assert derive_source_attribution(make_content()) == []
