"""
Configuration loader for intake flow definitions.

Flows can be overridden from a YAML file instead of the built-in
definitions. The file is validated against the same Pydantic models the
built-in flows use, so a malformed flow fails at start-up rather than
mid-dialog.

File layout:

    flows:
      - service_type: pitch_deck
        initial_step: deck_upload
        steps:
          - id: deck_upload
            stage: context
            question_type: open
            prompt: "Share your current deck"
            required_fields: [current_deck_link]
            next_step: review          # shorthand for a static edge
          - id: review
            stage: review
            question_type: confirmation
            is_terminal: true
    smart_defaults:                    # optional, overrides table entries
      fallback_cta: "Learn more"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from intake.exceptions import FlowConfigurationError
from intake.flows.defaults import SmartDefaults, SmartDefaultsApplier
from intake.flows.definitions import BUILTIN_FLOWS
from intake.flows.engine import FlowEngine
from intake.flows.models import FlowConfig
from intake.flows.registry import FlowRegistry
from intake.observability.logging_config import configure_logging

logger = logging.getLogger(__name__)

FLOWS_PATH_ENV = "INTAKE_FLOWS_PATH"


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Flow definitions not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise FlowConfigurationError(
            f"Flow definitions are not valid YAML: {config_path}\n{e}",
            config_path=str(config_path),
        ) from e

    if raw is None:
        raise FlowConfigurationError(
            f"Flow definitions file is empty: {config_path}",
            config_path=str(config_path),
        )
    if not isinstance(raw, dict):
        raise FlowConfigurationError(
            f"Flow definitions must be a mapping, got {type(raw).__name__}",
            config_path=str(config_path),
        )
    return raw


def load_flow_registry(
    config_path: str | Path,
    *,
    require_all: bool = True,
) -> FlowRegistry:
    """
    Load and validate flow definitions from a YAML file.

    Args:
        config_path: Path to the YAML file.
        require_all: Require a flow for every service type.

    Returns:
        A FlowRegistry over the loaded flows.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        FlowConfigurationError: If the file or any flow in it is invalid.
    """
    config_path = Path(config_path)
    raw = _read_yaml(config_path)

    entries = raw.get("flows")
    if not isinstance(entries, list) or not entries:
        raise FlowConfigurationError(
            f"'flows' must be a non-empty list in {config_path}",
            config_path=str(config_path),
        )

    flows: list[FlowConfig] = []
    for position, entry in enumerate(entries):
        service = entry.get("service_type") if isinstance(entry, dict) else None
        try:
            flows.append(FlowConfig.model_validate(entry))
        except ValidationError as e:
            raise FlowConfigurationError(
                f"Invalid flow #{position} ({service or 'unknown service'}) "
                f"in {config_path}:\n{e}",
                service_type=service,
                config_path=str(config_path),
            ) from e

    try:
        registry = FlowRegistry(flows, require_all=require_all)
    except FlowConfigurationError as e:
        e.config_path = str(config_path)
        raise

    logger.info(
        "flow_definitions_loaded",
        extra={"config_path": str(config_path), "flows": len(flows)},
    )
    return registry


def load_smart_defaults(config_path: str | Path) -> SmartDefaults:
    """
    Load the optional ``smart_defaults`` section of a flow file.

    Keys that are not given keep their built-in values.
    """
    config_path = Path(config_path)
    overrides = _read_yaml(config_path).get("smart_defaults") or {}
    try:
        return SmartDefaults(**overrides)
    except (TypeError, ValidationError) as e:
        raise FlowConfigurationError(
            f"Invalid smart_defaults in {config_path}:\n{e}",
            config_path=str(config_path),
        ) from e


def load_engine(
    flows_path: Optional[str | Path] = None,
    *,
    configure_logs: bool = False,
) -> FlowEngine:
    """
    Build a FlowEngine for the running process.

    Uses ``flows_path`` if given, else ``INTAKE_FLOWS_PATH`` (a ``.env``
    file in the working directory is honoured), else the built-in flows.
    With ``configure_logs`` the intake logger is set up from ``INTAKE_ENV``
    before the flows are read, so load errors are rendered too.
    """
    load_dotenv()
    if configure_logs:
        configure_logging()
    flows_path = flows_path or os.environ.get(FLOWS_PATH_ENV)
    if not flows_path:
        logger.debug("flow_definitions_builtin")
        return FlowEngine()

    return FlowEngine(
        registry=load_flow_registry(flows_path),
        defaults_applier=SmartDefaultsApplier(load_smart_defaults(flows_path)),
    )


def export_flow_definitions(
    config_path: str | Path,
    flows: Iterable[FlowConfig] = BUILTIN_FLOWS,
) -> Path:
    """Write flows to a YAML file in the layout load_flow_registry reads."""
    config_path = Path(config_path)
    payload = {
        "flows": [flow.model_dump(mode="json", exclude_none=True) for flow in flows],
    }
    yaml_str = yaml.safe_dump(
        payload,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=120,
    )
    config_path.write_text(yaml_str, encoding="utf-8")
    return config_path
