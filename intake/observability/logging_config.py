"""
Log rendering for the intake engine.

Engine modules log an event name (``step_resolved``, ``step_blocked``,
``flow_definitions_loaded``...) and put the dialog coordinates in
``extra``. This module renders those records, one line per event:

    production    {"ts": "...", "level": "DEBUG", "event": "step_blocked",
                   "service_type": "social_ads", "step_id": "platform_content",
                   "missing_fields": ["has_content"]}                  -> stdout
    otherwise     12:00:01 DEBUG step_blocked social_ads/platform_content
                   missing=has_content                                  -> stderr

Only the ``intake`` logger is configured. The host application's root
logger and handlers are left alone.

Usage:
    from intake.config.loader import load_engine

    engine = load_engine(configure_logs=True)   # honours INTAKE_ENV
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional

LOG_ENV = "INTAKE_ENV"
LOGGER_NAME = "intake"

# Attributes the engine modules attach through ``extra``.
ENGINE_FIELDS = (
    "service_type", "step_id", "next_step", "missing_fields",
    "config_path", "flows", "services",
)


def describe_step(record: logging.LogRecord) -> str:
    """
    Render a record's dialog position as ``service/step -> next``.

    A record that carries ``next_step=None`` is a transition off the
    confirmation step and renders as ``-> done``. Records without a
    service give an empty string.
    """
    service = getattr(record, "service_type", None)
    if service is None:
        return ""
    step = getattr(record, "step_id", None)
    text = str(service) if step is None else f"{service}/{step}"
    if hasattr(record, "next_step"):
        text += f" -> {record.next_step or 'done'}"
    return text


class JSONFormatter(logging.Formatter):
    """One JSON object per event, engine fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        for key in ENGINE_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class DevFormatter(logging.Formatter):
    """
    Terminal lines for following a dialog turn by turn.

    Format: HH:MM:SS LEVEL event service/step -> next [missing=a,b] [config=path]
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[2m",      # Dim
        logging.WARNING: "\033[33m",   # Yellow
        logging.ERROR: "\033[31m",     # Red
        logging.CRITICAL: "\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            self.formatTime(record, "%H:%M:%S"),
            record.levelname,
            record.getMessage(),
        ]
        position = describe_step(record)
        if position:
            parts.append(position)

        missing = getattr(record, "missing_fields", None)
        if missing:
            parts.append("missing=" + ",".join(missing))
        config_path = getattr(record, "config_path", None)
        if config_path:
            parts.append(f"config={config_path}")

        line = " ".join(parts)
        color = self.LEVEL_COLORS.get(record.levelno)
        if self.use_color and color:
            line = f"{color}{line}{self.RESET}"

        if record.exc_info and record.exc_info[1]:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(
    env: Optional[str] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Attach a single handler to the ``intake`` logger.

    Args:
        env: Override environment. If None, reads INTAKE_ENV
             (defaults to "development").
        level: Level for the intake logger tree.

    Returns:
        The configured ``intake`` logger.
    """
    env = (env or os.environ.get(LOG_ENV, "development")).lower().strip()

    intake_logger = logging.getLogger(LOGGER_NAME)
    intake_logger.setLevel(level)
    for handler in intake_logger.handlers[:]:
        intake_logger.removeHandler(handler)

    if env == "production":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(DevFormatter(use_color=sys.stderr.isatty()))

    intake_logger.addHandler(handler)
    return intake_logger
