"""
Tests for mapping Places results to business records.
"""

from business_finder.records import (
    Business,
    build_business,
    map_search_url,
    urgency_for,
    HAS_WEBSITE,
    NO_WEBSITE,
    MAP_SEARCH_PREFIX,
    NOT_CONTACTED,
)


class TestWebsiteStatus:
    """Website presence drives status, urgency and URL."""

    def test_with_website(self, sample_place, sample_details_with_website):
        business = build_business(sample_place, sample_details_with_website)

        assert business.website_status == "Has Website"
        assert business.urgency == "Medium"
        assert business.url == "https://harbourbakery.example"

    def test_without_website(self, sample_place, sample_details_without_website):
        business = build_business(sample_place, sample_details_without_website)

        assert business.website_status == "No Website"
        assert business.urgency == "High"
        assert business.url == MAP_SEARCH_PREFIX + business.address

    def test_empty_website_string_counts_as_missing(self, sample_place):
        business = build_business(sample_place, {"website": "", "formatted_address": "1 Main St"})

        assert business.website_status == NO_WEBSITE
        assert business.url == "https://www.google.com/maps/search/?api=1&query=1 Main St"

    def test_urgency_for(self):
        assert urgency_for(HAS_WEBSITE) == "Medium"
        assert urgency_for(NO_WEBSITE) == "High"


class TestFieldMapping:
    """Name, address, ID and categories."""

    def test_basic_fields(self, sample_place, sample_details_with_website):
        business = build_business(sample_place, sample_details_with_website)

        assert business.name == "Harbour Bakery"
        assert business.place_id == "ChIJ_test_bakery"
        assert business.types == ["bakery", "food", "store"]
        assert business.contacted == NOT_CONTACTED

    def test_address_prefers_details(self, sample_place, sample_details_with_website):
        business = build_business(sample_place, sample_details_with_website)
        assert business.address == "12 Arwenack St, Falmouth TR11 3JA, UK"

    def test_address_falls_back_to_vicinity(self, sample_place):
        business = build_business(sample_place, {})
        assert business.address == "12 Arwenack St, Falmouth"

    def test_address_missing_everywhere(self):
        business = build_business({"place_id": "x", "name": "X"}, {})
        assert business.address == ""
        assert business.url == MAP_SEARCH_PREFIX

    def test_empty_types_default_to_other(self, sample_place):
        sample_place["types"] = []
        business = build_business(sample_place, {})
        assert business.types == ["Other"]

    def test_missing_types_default_to_other(self, sample_place):
        del sample_place["types"]
        business = build_business(sample_place, {})
        assert business.types == ["Other"]

    def test_types_are_copied(self, sample_place):
        business = build_business(sample_place, {})
        business.types.append("extra")
        assert sample_place["types"] == ["bakery", "food", "store"]


def test_map_search_url_concatenates_address():
    assert map_search_url("Market St, Falmouth") == (
        "https://www.google.com/maps/search/?api=1&query=Market St, Falmouth"
    )


def test_business_defaults():
    business = Business(name="A", address="B", place_id="C")
    assert business.types == ["Other"]
    assert business.contacted == "Not Contacted"
