"""
Intake Flows — the declarative per-service dialog engine.

Each service type has a flow: an ordered list of steps, each asking one
open, grouped, quick-option or confirmation question and naming the
data fields it must collect before the dialog moves on. The engine
resolves transitions (static or decided by a yes/no answer), validates
required fields, reports progress and fills in smart defaults.

Usage:
    from intake.flows import FlowEngine

    engine = FlowEngine()
    result = engine.advance("brand_package", "logo_check", {"has_logo": True})
    result.next_step_id  # "logo_upload"
"""

from intake.flows.engine import FlowEngine, FlowProgress
from intake.flows.models import FlowConfig, FlowStep, IntakeStage, QuestionType
from intake.flows.registry import FlowRegistry, build_default_registry

__all__ = [
    "FlowConfig",
    "FlowEngine",
    "FlowProgress",
    "FlowRegistry",
    "FlowStep",
    "IntakeStage",
    "QuestionType",
    "build_default_registry",
]
