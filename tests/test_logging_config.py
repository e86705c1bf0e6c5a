"""
Tests for intake log rendering.

Validates:
- describe_step() renders service/step -> next, with "done" off the terminal step
- JSONFormatter keeps the engine fields and drops unrelated extras
- DevFormatter shows position, missing answers and config path on one line
- configure_logging() touches only the intake logger and follows INTAKE_ENV
- Engine calls emit step_resolved / step_blocked events end to end
"""

from __future__ import annotations

import json
import logging
import os
import sys
from io import StringIO
from unittest.mock import patch

import pytest

from intake.config.loader import export_flow_definitions, load_flow_registry
from intake.exceptions import FlowConfigurationError
from intake.flows.engine import FlowEngine
from intake.observability.logging_config import (
    DevFormatter,
    JSONFormatter,
    configure_logging,
    describe_step,
)


@pytest.fixture(autouse=True)
def _restore_intake_logger():
    intake_logger = logging.getLogger("intake")
    handlers, level = intake_logger.handlers[:], intake_logger.level
    yield
    intake_logger.handlers[:] = handlers
    intake_logger.setLevel(level)


def _record(event="step_resolved", level=logging.DEBUG, **fields) -> logging.LogRecord:
    record = logging.LogRecord(
        name="intake.flows.engine", level=level, pathname="engine.py",
        lineno=1, msg=event, args=(), exc_info=None,
    )
    for key, value in fields.items():
        setattr(record, key, value)
    return record


def _events(stream: StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


@pytest.fixture
def json_stream():
    intake_logger = configure_logging(env="production", level=logging.DEBUG)
    stream = StringIO()
    intake_logger.handlers[0].stream = stream
    return stream


# ---------------------------------------------------------------------------
# Test: describe_step
# ---------------------------------------------------------------------------

class TestDescribeStep:

    def test_transition(self):
        record = _record(service_type="brand_package", step_id="logo_check", next_step="logo_upload")
        assert describe_step(record) == "brand_package/logo_check -> logo_upload"

    def test_terminal_transition(self):
        record = _record(service_type="pitch_deck", step_id="review", next_step=None)
        assert describe_step(record) == "pitch_deck/review -> done"

    def test_step_without_transition(self):
        record = _record("step_blocked", service_type="social_ads", step_id="platform_content")
        assert describe_step(record) == "social_ads/platform_content"

    def test_service_only(self):
        assert describe_step(_record("smart_defaults_unknown_service", service_type="podcast")) == "podcast"

    def test_no_service(self):
        assert describe_step(_record("flow_definitions_builtin")) == ""


# ---------------------------------------------------------------------------
# Test: JSONFormatter
# ---------------------------------------------------------------------------

class TestJSONFormatter:

    def test_event_line(self):
        parsed = json.loads(JSONFormatter().format(
            _record("step_blocked", service_type="social_ads", missing_fields=["has_content"])
        ))
        assert parsed["event"] == "step_blocked"
        assert parsed["level"] == "DEBUG"
        assert parsed["logger"] == "intake.flows.engine"
        assert parsed["missing_fields"] == ["has_content"]
        assert parsed["ts"].endswith("+00:00")

    def test_terminal_next_step_is_null(self):
        parsed = json.loads(JSONFormatter().format(
            _record(service_type="pitch_deck", step_id="review", next_step=None)
        ))
        assert parsed["next_step"] is None

    def test_unrelated_extras_dropped(self):
        parsed = json.loads(JSONFormatter().format(_record(user_email="a@b.c")))
        assert "user_email" not in parsed

    def test_exception_rendered(self):
        try:
            raise FlowConfigurationError("bad flow", service_type="pitch_deck")
        except FlowConfigurationError:
            record = _record("flow_load_failed", level=logging.ERROR)
            record.exc_info = sys.exc_info()

        parsed = json.loads(JSONFormatter().format(record))
        assert "FlowConfigurationError" in parsed["exception"]


# ---------------------------------------------------------------------------
# Test: DevFormatter
# ---------------------------------------------------------------------------

class TestDevFormatter:

    def test_blocked_step_line(self):
        line = DevFormatter(use_color=False).format(_record(
            "step_blocked",
            service_type="launch_video",
            step_id="platforms",
            missing_fields=["platforms", "goal"],
        ))
        assert line.endswith("DEBUG step_blocked launch_video/platforms missing=platforms,goal")

    def test_config_path_shown(self):
        line = DevFormatter(use_color=False).format(
            _record("flow_definitions_loaded", level=logging.INFO, config_path="flows.yaml", flows=6)
        )
        assert line.endswith("INFO flow_definitions_loaded config=flows.yaml")

    def test_warning_colored(self):
        line = DevFormatter().format(_record("unknown_step", level=logging.WARNING))
        assert line.startswith("\033[33m")
        assert line.endswith(DevFormatter.RESET)

    def test_no_color(self):
        line = DevFormatter(use_color=False).format(_record(level=logging.ERROR))
        assert "\033[" not in line


# ---------------------------------------------------------------------------
# Test: configure_logging
# ---------------------------------------------------------------------------

class TestConfigureLogging:

    def test_production_writes_json_to_stdout(self):
        handler = configure_logging(env="production").handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)
        assert handler.stream is sys.stdout

    def test_development_writes_dev_lines(self):
        handler = configure_logging(env="development").handlers[0]
        assert isinstance(handler.formatter, DevFormatter)

    def test_reads_intake_env(self):
        with patch.dict(os.environ, {"INTAKE_ENV": " Production "}):
            intake_logger = configure_logging()
        assert isinstance(intake_logger.handlers[0].formatter, JSONFormatter)

    def test_single_handler_after_reconfigure(self):
        configure_logging(env="production")
        intake_logger = configure_logging(env="development")
        assert len(intake_logger.handlers) == 1

    def test_root_logger_untouched(self):
        root = logging.getLogger()
        before = root.handlers[:]
        configure_logging(env="production")
        assert root.handlers == before


# ---------------------------------------------------------------------------
# Test: Engine events end to end
# ---------------------------------------------------------------------------

class TestEngineEvents:

    def test_step_resolved(self, json_stream):
        FlowEngine().get_next_step("brand_package", "logo_check", {"has_logo": True})

        resolved = [e for e in _events(json_stream) if e["event"] == "step_resolved"]
        assert resolved[-1]["service_type"] == "brand_package"
        assert resolved[-1]["next_step"] == "logo_upload"

    def test_step_blocked(self, json_stream):
        FlowEngine().advance("social_ads", "platform_content", {"platforms": ["tiktok"]})

        blocked = [e for e in _events(json_stream) if e["event"] == "step_blocked"]
        assert blocked[-1]["missing_fields"] == ["has_content"]

    def test_level_filters_debug_events(self):
        intake_logger = configure_logging(env="production", level=logging.INFO)
        stream = StringIO()
        intake_logger.handlers[0].stream = stream

        FlowEngine().get_next_step("brand_package", "logo_check", {"has_logo": False})

        assert stream.getvalue() == ""

    def test_loader_event(self, json_stream, tmp_path):
        path = export_flow_definitions(tmp_path / "flows.yaml")
        load_flow_registry(path)

        loaded = [e for e in _events(json_stream) if e["event"] == "flow_definitions_loaded"]
        assert loaded[-1]["flows"] == 6
        assert loaded[-1]["config_path"] == str(path)
