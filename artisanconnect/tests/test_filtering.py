from __future__ import annotations

import pytest

from artisanconnect.ranking.filtering import filter_vendors
from helpers import make_vendor

VENDORS = [
    make_vendor(
        "a",
        businessName="Adeola Kitchens",
        category="Catering & events",
        description="Office catering for 20-80 people",
        address="Lagos, Nigeria",
    ),
    make_vendor(
        "b",
        businessName="Stitch & Style",
        category="Fashion & tailoring",
        description="Bespoke native wear",
        address="Abuja",
    ),
    make_vendor("c", businessName="Mama Put", category="Catering & events", address="Ikeja, LAGOS"),
    make_vendor("d"),  # every optional field missing
]


class TestPassThrough:
    @pytest.mark.parametrize("category, keyword", [
        (None, None),
        ("", ""),
        ("", "   "),
        (None, "\t"),
    ])
    def test_unset_constraints_return_input(self, category, keyword):
        result = filter_vendors(VENDORS, category, keyword)
        assert result == VENDORS

    def test_returns_new_list(self):
        result = filter_vendors(VENDORS)
        assert result is not VENDORS
        result.pop()
        assert len(VENDORS) == 4

    def test_empty_input(self):
        assert filter_vendors([], "Catering & events", "lagos") == []


class TestCategory:
    def test_exact_match(self):
        result = filter_vendors(VENDORS, category="Catering & events")
        assert [v.id for v in result] == ["a", "c"]
        assert all(v.category == "Catering & events" for v in result)

    def test_case_sensitive(self):
        assert filter_vendors(VENDORS, category="catering & events") == []

    def test_unknown_category(self):
        assert filter_vendors(VENDORS, category="Plumbing") == []


class TestKeyword:
    def test_matches_address_case_insensitively(self):
        result = filter_vendors(VENDORS, keyword="lagos")
        assert [v.id for v in result] == ["a", "c"]

    def test_keyword_is_trimmed_and_lowered(self):
        result = filter_vendors(VENDORS, keyword="  KITCHENS ")
        assert [v.id for v in result] == ["a"]

    def test_matches_description(self):
        result = filter_vendors(VENDORS, keyword="native wear")
        assert [v.id for v in result] == ["b"]

    def test_missing_fields_never_match(self):
        result = filter_vendors(VENDORS, keyword="x")
        assert "d" not in [v.id for v in result]


class TestCombined:
    def test_category_and_keyword(self):
        result = filter_vendors(VENDORS, category="Catering & events", keyword="ikeja")
        assert [v.id for v in result] == ["c"]

    def test_no_overlap(self):
        assert filter_vendors(VENDORS, category="Fashion & tailoring", keyword="lagos") == []

    def test_output_is_subset_without_duplicates(self):
        result = filter_vendors(VENDORS, keyword="a")
        ids = [v.id for v in result]
        assert len(ids) == len(set(ids))
        assert set(ids) <= {v.id for v in VENDORS}


@pytest.mark.parametrize("bad", [None, "vendors", 42, {"a": 1}, (v for v in VENDORS)])
def test_non_sequence_raises(bad):
    with pytest.raises(TypeError):
        filter_vendors(bad)
