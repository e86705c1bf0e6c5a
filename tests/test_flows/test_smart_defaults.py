"""
Tests for the Smart Defaults Applier.

Covers:
- Per-service rules (runtime, storyline, style, music, format, CTA, cadence)
- Never overwriting user answers
- Idempotence and input immutability
- Injected tables
- Unknown service types
"""

import pytest
from pydantic import ValidationError

from intake.catalog import ServiceType, VideoPlatform
from intake.flows.defaults import SmartDefaults, SmartDefaultsApplier


@pytest.fixture
def applier():
    return SmartDefaultsApplier()


# ---------------------------------------------------------------------------
# Test: Launch video
# ---------------------------------------------------------------------------

class TestLaunchVideoDefaults:

    def test_short_form_length(self, applier):
        out = applier.apply("launch_video", {"platforms": ["youtube", "tiktok"]})
        assert out["recommended_length"] == "30-45s"

    def test_long_form_length(self, applier):
        out = applier.apply("launch_video", {"platforms": ["youtube", "linkedin"]})
        assert out["recommended_length"] == "60-90s"

    def test_no_length_without_platforms(self, applier):
        out = applier.apply("launch_video", {"platforms": []})
        assert "recommended_length" not in out

    def test_storyline_defaults_to_create_for_me(self, applier):
        assert applier.apply("launch_video", {})["storyline_preference"] == "create_for_me"

    def test_storyline_answer_kept(self, applier):
        out = applier.apply("launch_video", {"storyline_preference": "have_ideas"})
        assert out["storyline_preference"] == "have_ideas"

    def test_enum_platforms(self, applier):
        out = applier.apply(ServiceType.LAUNCH_VIDEO, {"platforms": [VideoPlatform.REELS]})
        assert out["recommended_length"] == "30-45s"


# ---------------------------------------------------------------------------
# Test: Video edit
# ---------------------------------------------------------------------------

class TestVideoEditDefaults:

    def test_ugc_on_tiktok(self, applier):
        out = applier.apply("video_edit", {"video_type": "ugc", "platforms": ["tiktok"]})
        assert out["recommended_length"] == "15-30s"
        assert out["subtitles"] is True
        assert out["text_overlays"] is True
        assert out["style_preference"] == "energetic"
        assert out["music_preference"] == "trendy"

    def test_talking_head_on_youtube(self, applier):
        out = applier.apply("video_edit", {"video_type": "talking_head", "platforms": ["youtube"]})
        assert out["recommended_length"] == "60-90s"
        assert out["style_preference"] == "clean"
        assert out["music_preference"] == "calm"

    @pytest.mark.parametrize("video_type,style", [
        ("screen_recording", "clean"),
        ("event", "cinematic"),
        ("podcast_clip", "clean"),
    ])
    def test_style_by_video_type(self, applier, video_type, style):
        assert applier.apply("video_edit", {"video_type": video_type})["style_preference"] == style

    def test_user_style_kept(self, applier):
        out = applier.apply("video_edit", {"video_type": "ugc", "style_preference": "cinematic"})
        assert out["style_preference"] == "cinematic"

    def test_subtitles_off_kept(self, applier):
        out = applier.apply("video_edit", {"subtitles": False, "text_overlays": False})
        assert out["subtitles"] is False
        assert out["text_overlays"] is False


# ---------------------------------------------------------------------------
# Test: Social ads
# ---------------------------------------------------------------------------

class TestSocialAdsDefaults:

    @pytest.mark.parametrize("goal,fmt,cta", [
        ("sales", "carousel", "Shop now"),
        ("signups", "video", "Sign up free"),
        ("awareness", "video", "Learn more"),
        ("leads", "static", "Get quote"),
    ])
    def test_by_goal(self, applier, goal, fmt, cta):
        out = applier.apply("social_ads", {"goal": goal})
        assert out["recommended_format"] == fmt
        assert out["recommended_cta"] == cta

    def test_unmapped_goal_falls_back_to_learn_more(self, applier):
        out = applier.apply("social_ads", {"goal": "retention"})
        assert out["recommended_cta"] == "Learn more"
        assert "recommended_format" not in out

    def test_nothing_without_goal(self, applier):
        out = applier.apply("social_ads", {"platforms": ["instagram"]})
        assert out == {"platforms": ["instagram"]}

    def test_user_cta_kept(self, applier):
        out = applier.apply("social_ads", {"goal": "sales", "recommended_cta": "Grab yours"})
        assert out["recommended_cta"] == "Grab yours"


# ---------------------------------------------------------------------------
# Test: Social content
# ---------------------------------------------------------------------------

class TestSocialContentDefaults:

    @pytest.mark.parametrize("goal,frequency,types", [
        ("authority", "3x_week", ["educational", "storytelling"]),
        ("trust", "3x_week", ["behind_the_scenes", "storytelling"]),
        ("growth", "5x_week", ["memes", "educational", "product"]),
        ("storytelling", "3x_week", ["storytelling", "behind_the_scenes"]),
    ])
    def test_by_goal(self, applier, goal, frequency, types):
        out = applier.apply("social_content", {"goal": goal})
        assert out["recommended_frequency"] == frequency
        assert out["recommended_content_types"] == types


# ---------------------------------------------------------------------------
# Test: General properties
# ---------------------------------------------------------------------------

class TestApplierProperties:

    @pytest.mark.parametrize("service_type", ["pitch_deck", "brand_package"])
    def test_services_without_rules_get_a_copy(self, applier, service_type):
        data = {"has_logo": True}
        out = applier.apply(service_type, data)
        assert out == data
        assert out is not data

    @pytest.mark.parametrize("service_type,data", [
        ("launch_video", {"platforms": ["tiktok"]}),
        ("video_edit", {"video_type": "event", "platforms": ["youtube"]}),
        ("social_ads", {"goal": "leads"}),
        ("social_content", {"goal": "growth"}),
    ])
    def test_idempotent(self, applier, service_type, data):
        once = applier.apply(service_type, data)
        assert applier.apply(service_type, once) == once

    def test_input_not_mutated(self, applier):
        data = {"video_type": "ugc", "platforms": ["tiktok"]}
        applier.apply("video_edit", data)
        assert data == {"video_type": "ugc", "platforms": ["tiktok"]}

    def test_unknown_service_returns_copy(self, applier, caplog):
        data = {"goal": "sales"}
        with caplog.at_level("ERROR", logger="intake.flows.defaults"):
            out = applier.apply("podcast_edit", data)
        assert out == data
        assert out is not data
        assert "smart_defaults_unknown_service" in caplog.text

    def test_injected_tables(self):
        tables = SmartDefaults(ad_cta={"sales": "Buy today"}, fallback_cta="Tap here")
        applier = SmartDefaultsApplier(tables)
        assert applier.apply("social_ads", {"goal": "sales"})["recommended_cta"] == "Buy today"
        assert applier.apply("social_ads", {"goal": "leads"})["recommended_cta"] == "Tap here"

    def test_tables_are_frozen(self):
        with pytest.raises(ValidationError):
            SmartDefaults().fallback_cta = "changed"
