"""
Intake data model — flow structure, per-service intake data, dialog state.

Pydantic models for everything the engine reads or returns:

1. Flow structure: FlowStep, FlowConfig and the transition sum type
   (StaticEdge | PredicateEdge). Validated at construction time, so a
   malformed flow cannot exist past start-up.
2. Per-service intake data: one model per ServiceType, joined into the
   IntakeData discriminated union. Used to validate a finished intake.
3. Dialog state: IntakeState / IntakeMessage / IntakeSummary. Owned by
   the external dialog driver; modelled here so the driver and the UI
   share one shape.

During the dialog the engine works on plain partial ``dict`` data and
only checks presence (see ``has_value``). The typed models come into
play once the driver wants a complete, typed record.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)

from intake.catalog import (
    AdFormat,
    AdGoal,
    BrandItem,
    ContentGoal,
    LaunchAsset,
    MusicPreference,
    PostingFrequency,
    ServiceType,
    SocialContentType,
    SocialPlatform,
    StorylinePreference,
    VideoGoal,
    VideoPlatform,
    VideoStyle,
    VideoType,
    coerce_service_type,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class IntakeStage(str, Enum):
    """Lifecycle stages of an intake dialog."""
    SERVICE_SELECT = "service_select"
    CONTEXT = "context"
    DETAILS = "details"
    REVIEW = "review"
    COMPLETE = "complete"


# Stages a flow step may be tagged with
STEP_STAGES: frozenset[IntakeStage] = frozenset({
    IntakeStage.CONTEXT,
    IntakeStage.DETAILS,
    IntakeStage.REVIEW,
})


class QuestionType(str, Enum):
    """How a step's question is rendered."""
    OPEN = "open"                  # Free-text prompt
    GROUPED = "grouped"            # Several fields in one card
    QUICK = "quick"                # Binary / short choice buttons
    CONFIRMATION = "confirmation"  # Summary + confirm (terminal)


class InputKind(str, Enum):
    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"
    TEXT = "text"
    LINK = "link"


class ItemSource(str, Enum):
    """Where a summary value came from."""
    USER = "user"
    INFERRED = "inferred"
    DEFAULT = "default"


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

_AFFIRMATIVE = frozenset({"yes", "y", "true", "1"})


def has_value(value: Any) -> bool:
    """
    Check if a collected value counts as answered.

    None, blank strings and empty collections are unanswered.
    False and 0 are real answers.
    """
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    if isinstance(value, (list, tuple, set, frozenset)) and len(value) == 0:
        return False
    return True


def field_has_value(data: Mapping[str, Any], field_name: str) -> bool:
    """Check if a data field has a meaningful value."""
    return has_value(data.get(field_name))


def is_affirmative(value: Any) -> bool:
    """
    Read a collected answer as a yes/no.

    Quick-option buttons submit "yes" / "no" strings while parsed
    answers arrive as booleans; both read the same way here.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _AFFIRMATIVE
    return bool(value)


def split_list_answer(answer: str) -> list[str]:
    """
    Split a free-text multi-value answer into items.

    Handles newline-, semicolon- and comma-separated lists, with
    optional bullets or numbering.
    """
    answer = re.sub(r"^\s*[-*•]\s*", "", answer, flags=re.MULTILINE)
    answer = re.sub(r"^\s*\d+[.)]\s*", "", answer, flags=re.MULTILINE)

    if "\n" in answer:
        items = answer.split("\n")
    elif ";" in answer:
        items = answer.split(";")
    else:
        items = answer.split(",")

    return [item.strip() for item in items if item.strip()]


# ---------------------------------------------------------------------------
# Question payloads
# ---------------------------------------------------------------------------

class SelectOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    description: Optional[str] = None
    recommended: bool = False


class GroupedQuestion(BaseModel):
    """One field inside a grouped question card."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Data field this input fills")
    label: str
    kind: InputKind
    options: tuple[SelectOption, ...] = ()
    placeholder: Optional[str] = None
    required: bool = False
    recommendation: Optional[str] = Field(
        None, description="Human-readable recommendation shown with the input",
    )

    @model_validator(mode="after")
    def check_options(self) -> GroupedQuestion:
        if self.kind in (InputKind.SINGLE_SELECT, InputKind.MULTI_SELECT):
            if not self.options:
                raise ValueError(f"Select question '{self.id}' needs options")
        return self


class QuickOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    recommended: bool = False


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

class StaticEdge(BaseModel):
    """Unconditional transition to a fixed step."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["static"] = "static"
    target: str = Field(..., min_length=1)

    def resolve(self, data: Mapping[str, Any]) -> str:
        return self.target

    def targets(self) -> tuple[str, ...]:
        return (self.target,)


class PredicateEdge(BaseModel):
    """
    Transition decided by one yes/no field of the collected data.

    Attributes:
        field: Data field holding the deciding answer.
        if_true: Target when the answer reads as yes.
        if_false: Target when the answer reads as no.
        when_absent: Target when the field is not answered yet.
            Defaults to ``if_false``.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["predicate"] = "predicate"
    field: str = Field(..., min_length=1)
    if_true: str = Field(..., min_length=1)
    if_false: str = Field(..., min_length=1)
    when_absent: Optional[str] = None

    @property
    def absent_target(self) -> str:
        return self.when_absent or self.if_false

    def resolve(self, data: Mapping[str, Any]) -> str:
        value = data.get(self.field)
        if not has_value(value):
            return self.absent_target
        return self.if_true if is_affirmative(value) else self.if_false

    def targets(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys((self.if_true, self.if_false, self.absent_target)))


Transition = Annotated[Union[StaticEdge, PredicateEdge], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Flow structure
# ---------------------------------------------------------------------------

class FlowStep(BaseModel):
    """
    One node of a service's intake flow.

    ``next_step`` accepts a bare step id as shorthand for a StaticEdge.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    stage: IntakeStage
    question_type: QuestionType
    prompt: Optional[str] = Field(
        None, description="Open question text, or the prompt above quick options",
    )
    grouped_questions: tuple[GroupedQuestion, ...] = ()
    quick_options: tuple[QuickOption, ...] = ()
    required_fields: tuple[str, ...] = ()
    next_step: Optional[Transition] = None
    is_terminal: bool = False

    @field_validator("next_step", mode="before")
    @classmethod
    def expand_static_shorthand(cls, v: Any) -> Any:
        if isinstance(v, str):
            return {"kind": "static", "target": v}
        return v

    @field_validator("stage")
    @classmethod
    def check_stage(cls, v: IntakeStage) -> IntakeStage:
        if v not in STEP_STAGES:
            raise ValueError(f"Step stage must be context, details or review, got '{v.value}'")
        return v

    @model_validator(mode="after")
    def check_shape(self) -> FlowStep:
        if self.is_terminal != (self.question_type == QuestionType.CONFIRMATION):
            raise ValueError(
                f"Step '{self.id}': only the confirmation step may be terminal"
            )
        if self.is_terminal and self.next_step is not None:
            raise ValueError(f"Terminal step '{self.id}' cannot have a next_step")
        if not self.is_terminal and self.next_step is None:
            raise ValueError(f"Step '{self.id}' has no next_step")

        if self.question_type == QuestionType.OPEN and not self.prompt:
            raise ValueError(f"Open step '{self.id}' needs a prompt")
        if self.question_type == QuestionType.GROUPED and not self.grouped_questions:
            raise ValueError(f"Grouped step '{self.id}' needs grouped_questions")
        if self.question_type == QuestionType.QUICK and not self.quick_options:
            raise ValueError(f"Quick step '{self.id}' needs quick_options")
        return self

    def resolve_next(self, data: Mapping[str, Any]) -> Optional[str]:
        """Return the next step id for this data, or None when terminal."""
        if self.is_terminal or self.next_step is None:
            return None
        return self.next_step.resolve(data)

    def transition_targets(self) -> tuple[str, ...]:
        if self.next_step is None:
            return ()
        return self.next_step.targets()


class FlowConfig(BaseModel):
    """
    The complete flow for one service type.

    Integrity is checked at construction: unique step ids, exactly one
    terminal step, an existing initial step, transitions that only point
    at steps of this flow, and every step reachable from the start.
    """
    model_config = ConfigDict(frozen=True)

    service_type: ServiceType
    initial_step: str
    steps: tuple[FlowStep, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_integrity(self) -> FlowConfig:
        ids = [s.id for s in self.steps]
        duplicates = sorted({x for x in ids if ids.count(x) > 1})
        if duplicates:
            raise ValueError(f"Duplicate step ids: {duplicates}")

        terminals = [s.id for s in self.steps if s.is_terminal]
        if len(terminals) != 1:
            raise ValueError(
                f"Flow must have exactly one terminal step, found {terminals}"
            )

        known = set(ids)
        if self.initial_step not in known:
            raise ValueError(f"initial_step '{self.initial_step}' is not a step")

        for step in self.steps:
            for target in step.transition_targets():
                if target not in known:
                    raise ValueError(
                        f"Step '{step.id}' transitions to unknown step '{target}'"
                    )

        by_id = {s.id: s for s in self.steps}
        reached: set[str] = set()
        pending = [self.initial_step]
        while pending:
            current = pending.pop()
            if current in reached:
                continue
            reached.add(current)
            pending.extend(by_id[current].transition_targets())
        unreachable = [i for i in ids if i not in reached]
        if unreachable:
            raise ValueError(f"Steps unreachable from '{self.initial_step}': {unreachable}")

        return self

    @property
    def step_ids(self) -> tuple[str, ...]:
        return tuple(s.id for s in self.steps)

    @property
    def terminal_step(self) -> FlowStep:
        return next(s for s in self.steps if s.is_terminal)

    def get_step(self, step_id: str) -> Optional[FlowStep]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def index_of(self, step_id: str) -> int:
        """Position of a step in the flow, -1 if absent."""
        for i, step in enumerate(self.steps):
            if step.id == step_id:
                return i
        return -1


# ---------------------------------------------------------------------------
# Engine results
# ---------------------------------------------------------------------------

class StepValidation(BaseModel):
    """Outcome of checking a step's required fields."""
    valid: bool
    missing_fields: list[str] = Field(default_factory=list)


class StepAdvance(BaseModel):
    """
    Outcome of trying to leave a step.

    Either the step was satisfied (``advanced``; ``next_step_id`` is the
    resolved target, or None when the step was the confirmation) or it
    was not, and ``missing_fields`` names what to ask for again.
    """
    advanced: bool
    current_step_id: str
    next_step_id: Optional[str] = None
    missing_fields: list[str] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.advanced and self.next_step_id is None


# ---------------------------------------------------------------------------
# Per-service intake data
# ---------------------------------------------------------------------------

class _IntakeBase(BaseModel):
    """Shared behavior for the per-service intake models."""

    @field_validator(
        "topics", "style_examples", "competitor_examples",
        mode="before", check_fields=False,
    )
    @classmethod
    def split_text_lists(cls, v: Any) -> Any:
        if isinstance(v, str):
            return split_list_answer(v)
        return v


class LaunchVideoIntake(_IntakeBase):
    service_type: Literal["launch_video"] = "launch_video"
    product_description: str = Field(..., min_length=1)
    key_message: str = Field(..., min_length=1)
    platforms: list[VideoPlatform] = Field(..., min_length=1)
    assets_available: list[LaunchAsset] = Field(..., min_length=1)
    storyline_preference: StorylinePreference = StorylinePreference.CREATE_FOR_ME
    storyline_notes: Optional[str] = None
    cta: Optional[str] = None
    recommended_length: Optional[str] = None
    recommended_style: Optional[VideoStyle] = None


class VideoEditIntake(_IntakeBase):
    service_type: Literal["video_edit"] = "video_edit"
    video_type: VideoType
    platforms: list[VideoPlatform] = Field(..., min_length=1)
    goal: VideoGoal
    footage_link: str = Field(..., min_length=1)
    brand_assets_link: Optional[str] = None
    style_preference: Optional[VideoStyle] = None
    style_reference_link: Optional[str] = None
    recommended_length: Optional[str] = None
    subtitles: bool = True
    text_overlays: bool = True
    music_preference: Optional[MusicPreference] = None
    cta: Optional[str] = None


class PitchDeckIntake(_IntakeBase):
    service_type: Literal["pitch_deck"] = "pitch_deck"
    current_deck_link: str = Field(..., min_length=1)
    additional_notes: Optional[str] = None


class BrandPackageIntake(_IntakeBase):
    service_type: Literal["brand_package"] = "brand_package"
    has_logo: bool
    logo_link: Optional[str] = None
    includes_items: list[BrandItem] = Field(..., min_length=1)
    industry_description: Optional[str] = None
    competitor_examples: list[str] = Field(default_factory=list)
    style_preferences: Optional[str] = None

    @model_validator(mode="after")
    def check_logo_link(self) -> BrandPackageIntake:
        if self.has_logo and not has_value(self.logo_link):
            raise ValueError("logo_link is required when has_logo is true")
        return self


class SocialAdsIntake(_IntakeBase):
    service_type: Literal["social_ads"] = "social_ads"
    platforms: list[SocialPlatform] = Field(..., min_length=1)
    goal: AdGoal
    product_or_offer: str = Field(..., min_length=1)
    has_content: bool
    content_link: Optional[str] = None
    key_message: Optional[str] = None
    style_reference: Optional[str] = None
    recommended_format: Optional[AdFormat] = None
    recommended_cta: Optional[str] = None

    @model_validator(mode="after")
    def check_content_link(self) -> SocialAdsIntake:
        if self.has_content and not has_value(self.content_link):
            raise ValueError("content_link is required when has_content is true")
        return self


class SocialContentIntake(_IntakeBase):
    service_type: Literal["social_content"] = "social_content"
    platforms: list[SocialPlatform] = Field(..., min_length=1)
    goal: ContentGoal
    topics: list[str] = Field(..., min_length=1)
    style_examples: list[str] = Field(default_factory=list)
    recommended_frequency: Optional[PostingFrequency] = None
    recommended_content_types: list[SocialContentType] = Field(default_factory=list)


IntakeData = Annotated[
    Union[
        LaunchVideoIntake,
        VideoEditIntake,
        PitchDeckIntake,
        BrandPackageIntake,
        SocialAdsIntake,
        SocialContentIntake,
    ],
    Field(discriminator="service_type"),
]

INTAKE_MODELS: dict[ServiceType, type[BaseModel]] = {
    ServiceType.LAUNCH_VIDEO: LaunchVideoIntake,
    ServiceType.VIDEO_EDIT: VideoEditIntake,
    ServiceType.PITCH_DECK: PitchDeckIntake,
    ServiceType.BRAND_PACKAGE: BrandPackageIntake,
    ServiceType.SOCIAL_ADS: SocialAdsIntake,
    ServiceType.SOCIAL_CONTENT: SocialContentIntake,
}

_INTAKE_ADAPTER: TypeAdapter = TypeAdapter(IntakeData)


def parse_intake_data(service_type: ServiceType | str, data: Mapping[str, Any]) -> BaseModel:
    """
    Validate collected data as a complete intake for a service.

    Raises:
        UnknownServiceTypeError: If the service type is not in the catalog.
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    st = coerce_service_type(service_type)
    payload = {**data, "service_type": st.value}
    return _INTAKE_ADAPTER.validate_python(payload)


# ---------------------------------------------------------------------------
# Dialog state (owned by the dialog driver)
# ---------------------------------------------------------------------------

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SummaryItem(BaseModel):
    label: str
    value: Union[str, list[str]]
    source: ItemSource = ItemSource.USER
    editable: bool = False


class IntakeSummary(BaseModel):
    """Confirmation card shown at the review step."""
    service_type: ServiceType
    title: str
    items: list[SummaryItem] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    ready_to_submit: bool = False


class IntakeMessage(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    role: Literal["user", "assistant", "system"]
    content: str
    timestamp: datetime = Field(default_factory=_utc_now)
    question_type: Optional[QuestionType] = None
    grouped_questions: list[GroupedQuestion] = Field(default_factory=list)
    quick_options: list[QuickOption] = Field(default_factory=list)
    summary: Optional[IntakeSummary] = None


class IntakeState(BaseModel):
    """
    A dialog session as the driver holds it.

    Created empty (no service chosen), gains a service type once the
    user picks one, accumulates ``data`` turn by turn and ends at
    ``complete`` once the confirmation step is accepted.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    service_type: Optional[ServiceType] = None
    stage: IntakeStage = IntakeStage.SERVICE_SELECT
    messages: list[IntakeMessage] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    completion_percentage: int = Field(0, ge=0, le=100)
    started_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)


def create_empty_intake_state(state_id: Optional[str] = None) -> IntakeState:
    """Start a new dialog with no service selected."""
    if state_id is None:
        return IntakeState()
    return IntakeState(id=state_id)
