"""
Creative Intake — guided requirement gathering for creative services.

A client picks a service (launch video, video edit, pitch deck, brand
package, social ads or social content) and is walked through a short,
service-specific dialog. This package decides which question comes next,
what must be answered before moving on, which values can be filled in
without asking, and how far along the client is.

Usage:
    from intake import FlowEngine, build_intake_summary

    engine = FlowEngine()
    step = engine.get_flow_config("social_ads").initial_step
    ...
    summary = build_intake_summary("social_ads", data)
"""

from intake.catalog import SERVICE_DEFINITIONS, ServiceType, get_service_definition
from intake.exceptions import (
    FlowConfigurationError,
    IntakeError,
    UnknownServiceTypeError,
    UnknownStepError,
)
from intake.flows.engine import (
    FlowEngine,
    FlowProgress,
    advance,
    apply_smart_defaults,
    calculate_flow_progress,
    get_flow_config,
    get_flow_step,
    get_next_step,
    validate_step,
)
from intake.flows.registry import FlowRegistry
from intake.flows.summary import build_intake_summary, calculate_intake_completion

__all__ = [
    "SERVICE_DEFINITIONS",
    "FlowConfigurationError",
    "FlowEngine",
    "FlowProgress",
    "FlowRegistry",
    "IntakeError",
    "ServiceType",
    "UnknownServiceTypeError",
    "UnknownStepError",
    "advance",
    "apply_smart_defaults",
    "build_intake_summary",
    "calculate_flow_progress",
    "calculate_intake_completion",
    "get_flow_config",
    "get_flow_step",
    "get_next_step",
    "get_service_definition",
    "validate_step",
]
