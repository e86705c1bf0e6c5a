"""
Intake Flow Engine — step resolution, validation, progress and defaults.

The engine answers four questions for the dialog driver on every turn:

1. Is the current step satisfied?         validate_step()
2. Where does the dialog go next?         get_next_step() / advance()
3. How far along is the user?             calculate_flow_progress()
4. What can we fill in without asking?    apply_smart_defaults()

Design principles:
- Declarative: flows are data (see definitions.py); the engine holds no
  per-service control flow.
- Pure: every call reads its arguments and the frozen registry and
  returns a fresh value. No I/O, no mutation, no hidden counters.
- Forgiving on input, strict on config: incomplete answers are reported,
  never raised; a malformed flow fails when the registry is built.

Usage:
    engine = FlowEngine()
    step_id = engine.get_flow_config("brand_package").initial_step
    while step_id is not None:
        # ... render engine.get_flow_step(service, step_id), collect answers ...
        result = engine.advance(service, step_id, data)
        if not result.advanced:
            # ... re-ask result.missing_fields ...
            continue
        step_id = result.next_step_id

    data = engine.apply_smart_defaults(service, data)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Mapping, Optional

from intake.catalog import ServiceType, coerce_service_type
from intake.exceptions import UnknownStepError
from intake.flows.defaults import SmartDefaultsApplier
from intake.flows.models import (
    FlowConfig,
    FlowStep,
    IntakeStage,
    StepAdvance,
    StepValidation,
    field_has_value,
)
from intake.flows.registry import FlowRegistry, build_default_registry

logger = logging.getLogger(__name__)


@dataclass
class FlowProgress:
    """Snapshot of where a dialog stands in its flow."""
    service_type: ServiceType
    current_step_id: str
    percentage: int
    stage: Optional[IntakeStage]
    is_terminal: bool
    steps_total: int
    missing_fields: list[str] = field(default_factory=list)
    path_taken: list[str] = field(default_factory=list)
    remaining_steps: list[str] = field(default_factory=list)


class FlowEngine:
    """
    Drives per-service intake flows.

    Thread-safe: all dialog state is passed in by the caller; the engine
    only holds the immutable registry and default tables.
    """

    def __init__(
        self,
        registry: Optional[FlowRegistry] = None,
        defaults_applier: Optional[SmartDefaultsApplier] = None,
    ):
        """
        Args:
            registry: Flow registry to resolve against. Defaults to the
                six built-in flows.
            defaults_applier: Smart-default rules. Defaults to the
                built-in tables.
        """
        self.registry = registry or build_default_registry()
        self.defaults_applier = defaults_applier or SmartDefaultsApplier()

    # ── Registry lookups ─────────────────────────────────────────

    def get_flow_config(self, service_type: ServiceType | str) -> FlowConfig:
        return self.registry.get_flow_config(service_type)

    def get_flow_step(
        self, service_type: ServiceType | str, step_id: str
    ) -> Optional[FlowStep]:
        return self.registry.get_flow_step(service_type, step_id)

    # ── Core API ─────────────────────────────────────────────────

    def get_next_step(
        self,
        service_type: ServiceType | str,
        current_step_id: str,
        data: Mapping[str, Any],
    ) -> Optional[str]:
        """
        Resolve the step that follows ``current_step_id``.

        Predicate transitions are evaluated against whatever has been
        collected so far; an unanswered deciding field takes the branch's
        ``when_absent`` target.

        Returns:
            The next step id, or None when the current step is the
            confirmation step or is not part of the flow.
        """
        st = coerce_service_type(service_type)
        step = self.get_flow_step(st, current_step_id)
        if step is None:
            logger.warning(
                "unknown_step",
                extra={"service_type": st.value, "step_id": current_step_id},
            )
            return None

        next_id = step.resolve_next(data)
        logger.debug(
            "step_resolved",
            extra={
                "service_type": st.value,
                "step_id": current_step_id,
                "next_step": next_id,
            },
        )
        return next_id

    def validate_step(
        self,
        service_type: ServiceType | str,
        step_id: str,
        data: Mapping[str, Any],
    ) -> StepValidation:
        """
        Check that every required field of a step has a value.

        Blank strings and empty lists count as missing; False and 0 do
        not. A step the flow does not define has nothing to check and is
        reported valid (and logged).
        """
        st = coerce_service_type(service_type)
        step = self.get_flow_step(st, step_id)
        if step is None:
            logger.warning(
                "validate_unknown_step",
                extra={"service_type": st.value, "step_id": step_id},
            )
            return StepValidation(valid=True)
        return self._check_required(step, data)

    def advance(
        self,
        service_type: ServiceType | str,
        step_id: str,
        data: Mapping[str, Any],
    ) -> StepAdvance:
        """
        Validate the current step and, only if it is satisfied, resolve
        the next one.

        Raises:
            UnknownStepError: If ``step_id`` is not part of the flow.
        """
        st = coerce_service_type(service_type)
        step = self.get_flow_step(st, step_id)
        if step is None:
            logger.error(
                "advance_unknown_step",
                extra={"service_type": st.value, "step_id": step_id},
            )
            raise UnknownStepError(
                f"Step '{step_id}' is not part of the {st.value} flow",
                service_type=st.value,
                step_id=step_id,
            )

        validation = self._check_required(step, data)
        if not validation.valid:
            logger.debug(
                "step_blocked",
                extra={
                    "service_type": st.value,
                    "step_id": step_id,
                    "missing_fields": validation.missing_fields,
                },
            )
            return StepAdvance(
                advanced=False,
                current_step_id=step_id,
                missing_fields=validation.missing_fields,
            )

        next_id = step.resolve_next(data)
        logger.debug(
            "step_advanced",
            extra={"service_type": st.value, "step_id": step_id, "next_step": next_id},
        )
        return StepAdvance(advanced=True, current_step_id=step_id, next_step_id=next_id)

    def apply_smart_defaults(
        self, service_type: ServiceType | str, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Return a copy of ``data`` with unset derived fields filled in."""
        return self.defaults_applier.apply(service_type, data)

    # ── Progress ─────────────────────────────────────────────────

    def calculate_flow_progress(
        self, service_type: ServiceType | str, current_step_id: str
    ) -> int:
        """
        Completion percentage (0-100) from the step's position in the flow.

        Unknown step ids give 0. Halves round up.
        """
        flow = self.get_flow_config(service_type)
        index = flow.index_of(current_step_id)
        if index == -1:
            return 0
        total = len(flow.steps)
        return (200 * (index + 1) + total) // (2 * total)

    def get_path(
        self,
        service_type: ServiceType | str,
        data: Mapping[str, Any],
        start_step_id: Optional[str] = None,
    ) -> list[str]:
        """
        Walk the flow from ``start_step_id`` (default: the initial step)
        to the terminal step, resolving each transition with ``data``.

        The walk stops early if a step would repeat.
        """
        flow = self.get_flow_config(service_type)
        current: Optional[str] = start_step_id or flow.initial_step
        path: list[str] = []
        while current is not None and current not in path:
            step = flow.get_step(current)
            if step is None:
                break
            path.append(current)
            current = step.resolve_next(data)
        if current is not None and current in path:
            logger.warning(
                "flow_path_cycle",
                extra={"service_type": flow.service_type.value, "step_id": current},
            )
        return path

    def get_progress(
        self,
        service_type: ServiceType | str,
        current_step_id: str,
        data: Mapping[str, Any],
    ) -> FlowProgress:
        """Get a complete progress snapshot for the current step."""
        st = coerce_service_type(service_type)
        flow = self.get_flow_config(st)
        step = flow.get_step(current_step_id)

        missing: list[str] = []
        taken: list[str] = []
        remaining: list[str] = []
        if step is not None:
            missing = self._check_required(step, data).missing_fields
            walked = self.get_path(st, data)
            if current_step_id in walked:
                position = walked.index(current_step_id)
                taken = walked[: position + 1]
                remaining = walked[position + 1 :]
            else:
                # Off the path the answers describe; walk on from here.
                taken = [current_step_id]
                remaining = self.get_path(st, data, current_step_id)[1:]

        return FlowProgress(
            service_type=st,
            current_step_id=current_step_id,
            percentage=self.calculate_flow_progress(st, current_step_id),
            stage=step.stage if step else None,
            is_terminal=bool(step and step.is_terminal),
            steps_total=len(flow.steps),
            missing_fields=missing,
            path_taken=taken,
            remaining_steps=remaining,
        )

    # ── Private Helpers ──────────────────────────────────────────

    @staticmethod
    def _check_required(step: FlowStep, data: Mapping[str, Any]) -> StepValidation:
        missing = [f for f in step.required_fields if not field_has_value(data, f)]
        return StepValidation(valid=not missing, missing_fields=missing)


# ---------------------------------------------------------------------------
# Default engine and module-level shortcuts
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_default_engine() -> FlowEngine:
    """Engine over the built-in flows and default tables."""
    return FlowEngine()


def get_flow_config(service_type: ServiceType | str) -> FlowConfig:
    return get_default_engine().get_flow_config(service_type)


def get_flow_step(service_type: ServiceType | str, step_id: str) -> Optional[FlowStep]:
    return get_default_engine().get_flow_step(service_type, step_id)


def get_next_step(
    service_type: ServiceType | str, current_step_id: str, data: Mapping[str, Any]
) -> Optional[str]:
    return get_default_engine().get_next_step(service_type, current_step_id, data)


def validate_step(
    service_type: ServiceType | str, step_id: str, data: Mapping[str, Any]
) -> StepValidation:
    return get_default_engine().validate_step(service_type, step_id, data)


def advance(
    service_type: ServiceType | str, step_id: str, data: Mapping[str, Any]
) -> StepAdvance:
    return get_default_engine().advance(service_type, step_id, data)


def calculate_flow_progress(service_type: ServiceType | str, current_step_id: str) -> int:
    return get_default_engine().calculate_flow_progress(service_type, current_step_id)


def apply_smart_defaults(
    service_type: ServiceType | str, data: Mapping[str, Any]
) -> dict[str, Any]:
    return get_default_engine().apply_smart_defaults(service_type, data)
