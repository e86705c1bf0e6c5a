"""
Tests for loading flow definitions from YAML.

Covers:
- Round trip: exported built-in flows load back identically
- Partial files with require_all=False
- Malformed files wrapped in FlowConfigurationError
- smart_defaults overrides
- load_engine() source selection (argument, INTAKE_FLOWS_PATH, built-in)
"""

import os
from unittest.mock import patch

import pytest
import yaml

from intake.config.loader import (
    FLOWS_PATH_ENV,
    export_flow_definitions,
    load_engine,
    load_flow_registry,
    load_smart_defaults,
)
from intake.exceptions import FlowConfigurationError
from intake.flows.definitions import BUILTIN_FLOWS


PITCH_DECK_ONLY = {
    "flows": [
        {
            "service_type": "pitch_deck",
            "initial_step": "deck_upload",
            "steps": [
                {
                    "id": "deck_upload",
                    "stage": "context",
                    "question_type": "open",
                    "prompt": "Share your current deck",
                    "required_fields": ["current_deck_link"],
                    "next_step": "notes",
                },
                {
                    "id": "notes",
                    "stage": "details",
                    "question_type": "quick",
                    "prompt": "Anything specific?",
                    "quick_options": [
                        {"label": "Yes", "value": "yes"},
                        {"label": "No", "value": "no"},
                    ],
                    "required_fields": ["has_notes"],
                    "next_step": {
                        "kind": "predicate",
                        "field": "has_notes",
                        "if_true": "review",
                        "if_false": "review",
                    },
                },
                {
                    "id": "review",
                    "stage": "review",
                    "question_type": "confirmation",
                    "is_terminal": True,
                },
            ],
        }
    ],
}


def _write(tmp_path, payload, name="flows.yaml"):
    path = tmp_path / name
    if isinstance(payload, str):
        path.write_text(payload)
    else:
        path.write_text(yaml.safe_dump(payload))
    return path


# ---------------------------------------------------------------------------
# Test: load_flow_registry
# ---------------------------------------------------------------------------

class TestLoadFlowRegistry:

    def test_round_trip_builtin_flows(self, tmp_path):
        path = export_flow_definitions(tmp_path / "builtin.yaml")
        registry = load_flow_registry(path)

        for flow in BUILTIN_FLOWS:
            assert registry.get_flow_config(flow.service_type).model_dump() == flow.model_dump()

    def test_partial_file(self, tmp_path):
        registry = load_flow_registry(_write(tmp_path, PITCH_DECK_ONLY), require_all=False)
        flow = registry.get_flow_config("pitch_deck")
        assert flow.step_ids == ("deck_upload", "notes", "review")
        assert flow.get_step("notes").resolve_next({"has_notes": "no"}) == "review"

    def test_partial_file_rejected_by_default(self, tmp_path):
        path = _write(tmp_path, PITCH_DECK_ONLY)
        with pytest.raises(FlowConfigurationError) as exc_info:
            load_flow_registry(path)
        assert exc_info.value.config_path == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_flow_registry(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        with pytest.raises(FlowConfigurationError, match="empty"):
            load_flow_registry(_write(tmp_path, ""))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(FlowConfigurationError, match="not valid YAML"):
            load_flow_registry(_write(tmp_path, "flows: [unclosed"))

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(FlowConfigurationError, match="mapping"):
            load_flow_registry(_write(tmp_path, "- a\n- b\n"))

    def test_flows_key_required(self, tmp_path):
        with pytest.raises(FlowConfigurationError, match="non-empty list"):
            load_flow_registry(_write(tmp_path, {"smart_defaults": {}}))

    def test_invalid_flow_wraps_validation_error(self, tmp_path):
        payload = yaml.safe_load(yaml.safe_dump(PITCH_DECK_ONLY))
        payload["flows"][0]["steps"][0]["next_step"] = "nowhere"
        path = _write(tmp_path, payload)

        with pytest.raises(FlowConfigurationError) as exc_info:
            load_flow_registry(path, require_all=False)

        err = exc_info.value
        assert err.service_type == "pitch_deck"
        assert err.config_path == str(path)
        assert "nowhere" in str(err)
        assert err.__cause__ is not None


# ---------------------------------------------------------------------------
# Test: smart_defaults section
# ---------------------------------------------------------------------------

class TestLoadSmartDefaults:

    def test_overrides(self, tmp_path):
        payload = dict(PITCH_DECK_ONLY, smart_defaults={"fallback_cta": "Tap here"})
        defaults = load_smart_defaults(_write(tmp_path, payload))
        assert defaults.fallback_cta == "Tap here"
        assert defaults.ad_cta["sales"] == "Shop now"

    def test_absent_section_gives_builtin_tables(self, tmp_path):
        defaults = load_smart_defaults(_write(tmp_path, PITCH_DECK_ONLY))
        assert defaults.launch_video_length == ("30-45s", "60-90s")

    def test_invalid_section(self, tmp_path):
        payload = dict(PITCH_DECK_ONLY, smart_defaults={"launch_video_length": "long"})
        with pytest.raises(FlowConfigurationError):
            load_smart_defaults(_write(tmp_path, payload))


# ---------------------------------------------------------------------------
# Test: load_engine
# ---------------------------------------------------------------------------

class TestLoadEngine:

    def test_builtin_without_path(self):
        with patch.dict(os.environ, {}, clear=True), \
                patch("intake.config.loader.load_dotenv"):
            engine = load_engine()
        assert engine.get_flow_config("brand_package").initial_step == "logo_check"

    def test_explicit_path(self, tmp_path):
        path = export_flow_definitions(tmp_path / "flows.yaml")
        with patch("intake.config.loader.load_dotenv"):
            engine = load_engine(path)
        assert engine.get_next_step("social_ads", "platform_content", {"has_content": True}) == "content_link"

    def test_path_from_environment(self, tmp_path):
        path = export_flow_definitions(tmp_path / "flows.yaml")
        with open(path, "a") as f:
            yaml.safe_dump({"smart_defaults": {"fallback_cta": "Tap here"}}, f)

        with patch.dict(os.environ, {FLOWS_PATH_ENV: str(path)}), \
                patch("intake.config.loader.load_dotenv"):
            engine = load_engine()

        enriched = engine.apply_smart_defaults("social_ads", {"goal": "retention"})
        assert enriched["recommended_cta"] == "Tap here"

    def test_bad_path_from_environment(self, tmp_path):
        with patch.dict(os.environ, {FLOWS_PATH_ENV: str(tmp_path / "missing.yaml")}), \
                patch("intake.config.loader.load_dotenv"):
            with pytest.raises(FileNotFoundError):
                load_engine()

    def test_configure_logs_sets_up_intake_logger(self):
        with patch.dict(os.environ, {}, clear=True), \
                patch("intake.config.loader.load_dotenv"), \
                patch("intake.config.loader.configure_logging") as mock_configure:
            load_engine(configure_logs=True)
        mock_configure.assert_called_once_with()

    def test_logging_left_alone_by_default(self):
        with patch.dict(os.environ, {}, clear=True), \
                patch("intake.config.loader.load_dotenv"), \
                patch("intake.config.loader.configure_logging") as mock_configure:
            load_engine()
        mock_configure.assert_not_called()
