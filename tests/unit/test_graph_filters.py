"""Tests for graph filter normalization."""

import pytest

from servicemap.api.exceptions import ValidationError
from servicemap.topology.filters import GraphFilters, normalize_filters, parse_bool, split_list


class TestSplitList:
    def test_none_and_empty(self):
        assert split_list(None) == frozenset()
        assert split_list("") == frozenset()

    def test_trims_and_drops_blanks(self):
        assert split_list(" net , api,,  ") == frozenset({"net", "api"})

    def test_duplicates_collapse(self):
        assert split_list("a,a,b") == frozenset({"a", "b"})


class TestParseBool:
    @pytest.mark.parametrize("raw", ["true", "TRUE", " True "])
    def test_true_values(self, raw):
        assert parse_bool(raw) is True

    @pytest.mark.parametrize("raw", [None, "", "false", "1", "yes"])
    def test_everything_else_is_false(self, raw):
        assert parse_bool(raw) is False

    def test_passes_through_bool(self):
        assert parse_bool(True) is True


class TestNormalizeFilters:
    def test_defaults(self):
        filters = normalize_filters()
        assert filters == GraphFilters()
        assert not filters.has_severity_filter

    def test_severities_lowercased(self):
        filters = normalize_filters(severities="Critical,FATAL")
        assert filters.severities == frozenset({"critical", "fatal"})
        assert filters.has_severity_filter

    def test_unknown_severity_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_filters(severities="critical,severe")
        err = exc_info.value
        assert err.status_code == 422
        assert err.extra["invalid_severities"] == ["severe"]
        assert "fatal" in err.extra["allowed_severities"]

    def test_blank_search_is_none(self):
        assert normalize_filters(search="   ").search is None
        assert normalize_filters(search=" pay ").search == "pay"

    def test_flags(self):
        filters = normalize_filters(include_dependents="true", show_full_chain="false")
        assert filters.include_dependents is True
        assert filters.show_full_chain is False

    def test_to_response_is_sorted_camel_case(self):
        filters = normalize_filters(namespaces="b,a", tags="z,y", include_dependents="true")
        body = filters.to_response()
        assert body["namespaces"] == ["a", "b"]
        assert body["tags"] == ["y", "z"]
        assert body["includeDependents"] is True
        assert body["showFullChain"] is False
        assert body["search"] is None
