"""
Custom exception hierarchy for the Creative Intake Flow Engine.

Structured error handling with clear categories:
- Configuration errors (caught at startup / flow load time)
- Lookup errors for values outside the closed service catalog
- Lookup errors for step ids that no flow defines

Missing answers are NOT errors. The validator reports them as
``missing_fields`` and the dialog driver re-prompts.

Usage:
    from intake.exceptions import FlowConfigurationError

    try:
        registry = load_flow_registry("flows.yaml")
    except FlowConfigurationError as e:
        logger.error("bad flow file", extra={"config_path": e.config_path})
        raise
"""

from __future__ import annotations

from typing import Optional


class IntakeError(Exception):
    """
    Base exception for all intake engine errors.

    All custom exceptions inherit from this, so you can catch
    `IntakeError` to handle any engine-specific error.
    """

    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


# ── Configuration Errors ──────────────────────────────────────────


class FlowConfigurationError(IntakeError):
    """
    Raised when a flow definition or the flow registry is malformed.

    Examples:
    - Two steps share an id
    - A transition points at a step that does not exist
    - No terminal step, or more than one
    - A service type in the catalog has no flow
    """

    def __init__(
        self,
        message: str,
        *,
        service_type: Optional[str] = None,
        step_id: Optional[str] = None,
        config_path: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.service_type = service_type
        self.step_id = step_id
        self.config_path = config_path


# ── Lookup Errors ─────────────────────────────────────────────────


class UnknownServiceTypeError(IntakeError):
    """
    Raised when a value outside the service catalog is used as a
    service type. Callers should never hit this with catalog values.
    """

    def __init__(
        self,
        message: str,
        *,
        service_type: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.service_type = service_type


class UnknownStepError(IntakeError):
    """
    Raised by ``advance()`` when the current step id is not part of
    the service's flow.
    """

    def __init__(
        self,
        message: str,
        *,
        service_type: Optional[str] = None,
        step_id: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.service_type = service_type
        self.step_id = step_id
