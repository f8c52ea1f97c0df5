"""Tests for the priority-cascade Matcher."""
from __future__ import annotations

import pytest

from logbridge.matcher import Matcher, generate_filter_key

# Every key a (home, GET, 500) request could match, most specific first
CASCADE = [
    "home.GET.500",
    "home.GET.all",
    "home.all.500",
    "all.GET.500",
    "home.all.all",
    "all.all.500",
    "all.GET.all",
    "all.all.all",
]


def _matcher(keys: list[str], default_level: str = "info") -> Matcher:
    return Matcher({k: {"level": k, "options": {"key": k}} for k in keys}, default_level=default_level)


class TestGenerateFilterKey:
    def test_segments_verbatim(self) -> None:
        assert generate_filter_key("home", "GET", 500) == "home.GET.500"

    def test_method_delegates(self) -> None:
        assert Matcher().generate_filter_key("a", "b", "c") == "a.b.c"


class TestPositiveMatcher:
    def test_cascade_order(self) -> None:
        triples = Matcher().get_positive_matcher("home", "GET", 500)
        assert [generate_filter_key(*t) for t in triples] == CASCADE

    def test_eight_tiers(self) -> None:
        assert len(Matcher().get_positive_matcher("r", "m", 200)) == 8


class TestPriority:
    @pytest.mark.parametrize("tier", range(len(CASCADE)))
    def test_most_specific_present_key_wins(self, tier: int) -> None:
        # Table holds this tier and every less specific one, in reverse order
        keys = list(reversed(CASCADE[tier:]))
        matcher = _matcher(keys)
        assert matcher.get_match_filter_key("home", "GET", 500) == CASCADE[tier]
        assert matcher.get_level("home", "GET", 500) == CASCADE[tier]
        assert matcher.get_options("home", "GET", 500) == {"key": CASCADE[tier]}

    def test_route_method_beats_route_status(self) -> None:
        matcher = _matcher(["home.all.500", "home.GET.all"])
        assert matcher.get_match_filter_key("home", "GET", 500) == "home.GET.all"

    def test_route_wildcard_beats_status_wildcard(self) -> None:
        matcher = _matcher(["all.all.500", "home.all.all"])
        assert matcher.get_match_filter_key("home", "GET", 500) == "home.all.all"

    def test_unrelated_keys_do_not_match(self) -> None:
        matcher = _matcher(["other.GET.500", "home.POST.all", "all.all.404"])
        assert matcher.get_match_filter_key("home", "GET", 500) is None

    def test_mutating_returned_options_leaves_table_intact(self) -> None:
        matcher = Matcher({"home.all.all": {"level": "error", "options": {"x": 1}}})
        matcher.get_options("home", "GET", 500)["x"] = 999
        assert matcher.get_options("home", "GET", 500) == {"x": 1}
        assert matcher.get_filters()["home.all.all"]["options"] == {"x": 1}

    def test_string_and_int_status_are_equivalent(self) -> None:
        matcher = _matcher(["home.GET.500"])
        assert matcher.match("home", "GET", "500")
        assert matcher.match("home", "GET", 500)


class TestNoMatch:
    def test_empty_table(self) -> None:
        matcher = Matcher(default_level="notice")
        assert matcher.get_match_filter_key("home", "GET", 500) is None
        assert not matcher.match("home", "GET", 500)
        assert matcher.get_level("home", "GET", 500) == "notice"
        assert matcher.get_options("home", "GET", 500) == {}

    def test_default_level_property(self) -> None:
        assert Matcher().default_level == "info"
        assert Matcher(default_level="debug").default_level == "debug"


class TestTableManagement:
    def test_add_filter_defaults(self) -> None:
        matcher = Matcher(default_level="warning").add_filter("home.all.all")
        assert matcher.get_filters() == {"home.all.all": {"level": "warning", "options": {}}}

    def test_add_filter_first_writer_wins(self) -> None:
        matcher = Matcher()
        matcher.add_filter("k.all.all", "error", {"a": 1})
        matcher.add_filter("k.all.all", "debug", {"b": 2})
        assert matcher.get_filters()["k.all.all"] == {"level": "error", "options": {"a": 1}}

    def test_add_filter_returns_self(self) -> None:
        matcher = Matcher()
        assert matcher.add_filter("a.b.c") is matcher
        assert matcher.has_filter("a.b.c")
        assert "a.b.c" in matcher
        assert len(matcher) == 1

    def test_has_filter_missing(self) -> None:
        assert not Matcher().has_filter("a.b.c")

    def test_set_filters_merge_fills_defaults(self) -> None:
        matcher = Matcher(default_level="notice")
        matcher.set_filters({"a.all.all": {}, "b.all.all": {"level": "error"}})
        assert matcher.get_filters() == {
            "a.all.all": {"level": "notice", "options": {}},
            "b.all.all": {"level": "error", "options": {}},
        }

    def test_set_filters_merge_does_not_overwrite(self) -> None:
        matcher = Matcher().add_filter("a.all.all", "error")
        matcher.set_filters({"a.all.all": {"level": "debug"}, "b.all.all": {"level": "debug"}})
        assert matcher.get_filters()["a.all.all"]["level"] == "error"
        assert matcher.get_filters()["b.all.all"]["level"] == "debug"

    def test_set_filters_overwrite_replaces_table(self) -> None:
        matcher = Matcher().add_filter("a.all.all", "error")
        new = {"b.all.all": {"level": "debug", "options": {}}}
        matcher.set_filters(new, overwrite=True)
        assert matcher.get_filters() == new
        assert not matcher.has_filter("a.all.all")

    def test_round_trip_through_overwrite(self) -> None:
        matcher = _matcher(CASCADE)
        before = {k: dict(v) for k, v in matcher.get_filters().items()}
        matcher.set_filters(matcher.get_filters(), overwrite=True)
        assert matcher.get_filters() == before
        assert list(matcher.get_filters()) == CASCADE

    def test_constructor_merges_entries(self) -> None:
        matcher = Matcher({"a.all.all": {"level": "error"}}, default_level="info")
        assert matcher.get_options("a", "GET", 200) == {}
        assert matcher.get_level("a", "GET", 200) == "error"
