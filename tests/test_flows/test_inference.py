"""
Tests for the inference pattern table.
"""

import pytest

from intake.catalog import ServiceType
from intake.flows.inference import (
    INFERENCE_PATTERNS,
    InferenceRule,
    get_inference_rules,
    match_inference_rules,
)


class TestPatternTable:

    def test_every_service_has_an_entry(self):
        assert set(INFERENCE_PATTERNS) == set(ServiceType)

    def test_pitch_deck_has_no_rules(self):
        assert get_inference_rules("pitch_deck") == ()

    @pytest.mark.parametrize("service_type", list(ServiceType))
    def test_confidence_in_range(self, service_type):
        for rule in INFERENCE_PATTERNS[service_type]:
            assert 0.0 < rule.confidence <= 1.0
            assert rule.triggers
            assert all(t == t.lower() for t in rule.triggers)

    def test_values_split_on_commas(self):
        rule = InferenceRule("platforms", ("students",), "tiktok, reels", 0.8)
        assert rule.values == ["tiktok", "reels"]


class TestMatchInferenceRules:

    def test_case_insensitive_substring(self):
        hits = match_inference_rules("launch_video", "An app for Gen Z STUDENTS")
        assert [r.field for r in hits] == ["platforms"]
        assert hits[0].values == ["tiktok", "reels"]

    def test_multiple_matches_ordered_by_confidence(self):
        hits = match_inference_rules("launch_video", "A professional tool for enterprise teams")
        assert [(r.field, r.value) for r in hits] == [
            ("platforms", "linkedin,youtube"),
            ("recommended_style", "corporate"),
        ]

    def test_highest_confidence_first(self):
        hits = match_inference_rules("video_edit", "Fun clips for TikTok")
        assert hits[0].field == "subtitles"
        assert hits[0].confidence == 0.9
        assert hits[1].field == "music_preference"

    def test_no_match(self):
        assert match_inference_rules("social_ads", "a bakery") == []

    def test_blank_text(self):
        assert match_inference_rules("brand_package", "   ") == []

    def test_brand_package_startup(self):
        hits = match_inference_rules(ServiceType.BRAND_PACKAGE, "We're a new company")
        assert hits[0].values == ["logo", "brand_guidelines"]
