"""
Flow Registry — read-only lookup from service type to flow.

The registry is built once (from the built-in flows or a YAML file) and
injected into the engine. It never changes after construction, so any
number of dialog sessions can read it concurrently.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from intake.catalog import ServiceType, coerce_service_type
from intake.exceptions import FlowConfigurationError, UnknownServiceTypeError
from intake.flows.definitions import BUILTIN_FLOWS
from intake.flows.models import FlowConfig, FlowStep

logger = logging.getLogger(__name__)


class FlowRegistry:
    """
    Immutable mapping of ServiceType → FlowConfig.

    Args:
        flows: The flow configs to register, one per service type.
        require_all: When True (the default), every ServiceType in the
            catalog must have a flow. Tests pass False to build a
            registry with a subset of services.

    Raises:
        FlowConfigurationError: On duplicate or missing services.
    """

    def __init__(self, flows: Iterable[FlowConfig], *, require_all: bool = True):
        by_service: dict[ServiceType, FlowConfig] = {}
        for flow in flows:
            if flow.service_type in by_service:
                raise FlowConfigurationError(
                    f"Flow for '{flow.service_type.value}' registered twice",
                    service_type=flow.service_type.value,
                )
            by_service[flow.service_type] = flow

        if require_all:
            missing = [st.value for st in ServiceType if st not in by_service]
            if missing:
                raise FlowConfigurationError(
                    f"No flow defined for service types: {', '.join(missing)}",
                    details={"missing": missing},
                )

        self._flows = MappingProxyType(by_service)
        logger.debug(
            "flow_registry_built",
            extra={"services": [st.value for st in by_service]},
        )

    # ── Lookup ───────────────────────────────────────────────────

    def get_flow_config(self, service_type: ServiceType | str) -> FlowConfig:
        """
        Return the flow for a service.

        Raises:
            UnknownServiceTypeError: If the service is outside the catalog
                or this registry has no flow for it.
        """
        st = coerce_service_type(service_type)
        flow = self._flows.get(st)
        if flow is None:
            raise UnknownServiceTypeError(
                f"No flow registered for '{st.value}'",
                service_type=st.value,
            )
        return flow

    def get_flow_step(
        self, service_type: ServiceType | str, step_id: str
    ) -> Optional[FlowStep]:
        """Return a step of a service's flow, or None if the flow has no such step."""
        return self.get_flow_config(service_type).get_step(step_id)

    @property
    def service_types(self) -> tuple[ServiceType, ...]:
        return tuple(self._flows)

    # ── Container protocol ───────────────────────────────────────

    def __contains__(self, service_type: object) -> bool:
        try:
            return coerce_service_type(service_type) in self._flows
        except UnknownServiceTypeError:
            return False

    def __iter__(self) -> Iterator[FlowConfig]:
        return iter(self._flows.values())

    def __len__(self) -> int:
        return len(self._flows)


def build_default_registry() -> FlowRegistry:
    """Registry of the six built-in flows."""
    return FlowRegistry(BUILTIN_FLOWS)
