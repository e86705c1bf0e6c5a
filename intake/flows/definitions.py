"""
Built-in intake flows — one hand-authored FlowConfig per service type.

Each flow is plain data: ordered steps, the fields each step must
collect, and a transition per step. The only decision points are
PredicateEdge transitions on a single yes/no answer, so every flow can
be audited by reading it top to bottom.

Flows at a glance:
    launch_video:   context → details → storyline → review
    video_edit:     video_type → platform_goal → style → review
    pitch_deck:     deck_upload → review
    brand_package:  logo_check ─yes→ logo_upload → package_options → review
                               └no──────────────→ package_options
    social_ads:     product_goal → platform_content ─yes→ content_link → review
                                                    └no──────────────→ review
    social_content: platform_goal → topics → review
"""

from __future__ import annotations

from intake.catalog import (
    CONTENT_GOAL_LABELS,
    LAUNCH_ASSET_LABELS,
    PLATFORM_LABELS,
    SHORT_FORM_PLATFORMS,
    VIDEO_GOAL_LABELS,
    VIDEO_STYLE_LABELS,
    VIDEO_TYPE_LABELS,
    ServiceType,
    VideoPlatform,
)
from intake.flows.models import (
    FlowConfig,
    FlowStep,
    GroupedQuestion,
    InputKind,
    IntakeStage,
    PredicateEdge,
    QuestionType,
    QuickOption,
    SelectOption,
)


def _options(labels: dict) -> tuple[SelectOption, ...]:
    return tuple(SelectOption(value=k.value, label=v) for k, v in labels.items())


def _review_step() -> FlowStep:
    return FlowStep(
        id="review",
        stage=IntakeStage.REVIEW,
        question_type=QuestionType.CONFIRMATION,
        is_terminal=True,
    )


_VIDEO_PLATFORM_OPTIONS: tuple[SelectOption, ...] = tuple(
    SelectOption(value=p.value, label=PLATFORM_LABELS.get(p.value, p.value))
    for p in VideoPlatform
)


# ---------------------------------------------------------------------------
# Launch video
# ---------------------------------------------------------------------------

LAUNCH_VIDEO_FLOW = FlowConfig(
    service_type=ServiceType.LAUNCH_VIDEO,
    initial_step="context",
    steps=(
        FlowStep(
            id="context",
            stage=IntakeStage.CONTEXT,
            question_type=QuestionType.OPEN,
            prompt=(
                "Tell me about your launch - what are you launching, and what's "
                "the ONE thing you want viewers to walk away understanding?"
            ),
            required_fields=("product_description", "key_message"),
            next_step="details",
        ),
        FlowStep(
            id="details",
            stage=IntakeStage.DETAILS,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="platforms",
                    label="Platform(s)",
                    kind=InputKind.MULTI_SELECT,
                    options=tuple(
                        SelectOption(
                            value=p.value,
                            label=PLATFORM_LABELS.get(p.value, p.value),
                            recommended=p.value in ("tiktok", "reels"),
                        )
                        for p in VideoPlatform
                    ),
                    recommendation="We recommend TikTok + Reels for maximum reach",
                    required=True,
                ),
                GroupedQuestion(
                    id="assets_available",
                    label="What do you have ready?",
                    kind=InputKind.MULTI_SELECT,
                    options=_options(LAUNCH_ASSET_LABELS),
                    required=True,
                ),
            ),
            required_fields=("platforms", "assets_available"),
            next_step="storyline",
        ),
        FlowStep(
            id="storyline",
            stage=IntakeStage.DETAILS,
            question_type=QuestionType.QUICK,
            prompt="For the storyline:",
            quick_options=(
                QuickOption(label="I have ideas", value="have_ideas"),
                QuickOption(label="Create one for me", value="create_for_me", recommended=True),
            ),
            required_fields=("storyline_preference",),
            next_step="review",
        ),
        _review_step(),
    ),
)


# ---------------------------------------------------------------------------
# Video edit
# ---------------------------------------------------------------------------

VIDEO_EDIT_FLOW = FlowConfig(
    service_type=ServiceType.VIDEO_EDIT,
    initial_step="video_type",
    steps=(
        FlowStep(
            id="video_type",
            stage=IntakeStage.CONTEXT,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="video_type",
                    label="What type of video?",
                    kind=InputKind.SINGLE_SELECT,
                    options=_options(VIDEO_TYPE_LABELS),
                    required=True,
                ),
            ),
            required_fields=("video_type",),
            next_step="platform_goal",
        ),
        FlowStep(
            id="platform_goal",
            stage=IntakeStage.DETAILS,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="platforms",
                    label="Platform(s)",
                    kind=InputKind.MULTI_SELECT,
                    options=_VIDEO_PLATFORM_OPTIONS,
                    recommendation=(
                        "Short-form platforms ("
                        + ", ".join(PLATFORM_LABELS[p] for p in sorted(SHORT_FORM_PLATFORMS))
                        + ") get a 15-30s cut"
                    ),
                    required=True,
                ),
                GroupedQuestion(
                    id="goal",
                    label="Goal",
                    kind=InputKind.SINGLE_SELECT,
                    options=_options(VIDEO_GOAL_LABELS),
                    required=True,
                ),
                GroupedQuestion(
                    id="footage_link",
                    label="Raw footage link",
                    kind=InputKind.LINK,
                    placeholder="Drive, Dropbox, or WeTransfer link",
                    required=True,
                ),
            ),
            required_fields=("platforms", "goal", "footage_link"),
            next_step="style",
        ),
        FlowStep(
            id="style",
            stage=IntakeStage.DETAILS,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="style_preference",
                    label="Style preference (optional)",
                    kind=InputKind.SINGLE_SELECT,
                    options=_options(VIDEO_STYLE_LABELS),
                ),
                GroupedQuestion(
                    id="brand_assets_link",
                    label="Brand assets (optional)",
                    kind=InputKind.LINK,
                    placeholder="Logo, fonts, brand guidelines",
                ),
            ),
            next_step="review",
        ),
        _review_step(),
    ),
)


# ---------------------------------------------------------------------------
# Pitch deck
# ---------------------------------------------------------------------------

PITCH_DECK_FLOW = FlowConfig(
    service_type=ServiceType.PITCH_DECK,
    initial_step="deck_upload",
    steps=(
        FlowStep(
            id="deck_upload",
            stage=IntakeStage.CONTEXT,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="current_deck_link",
                    label="Current deck",
                    kind=InputKind.LINK,
                    placeholder="Google Slides, Figma, PDF, or PPT link",
                    required=True,
                ),
                GroupedQuestion(
                    id="additional_notes",
                    label="Any context? (upcoming pitch, specific issues)",
                    kind=InputKind.TEXT,
                    placeholder="Optional - investor meeting next week, slide 5 needs work, etc.",
                ),
            ),
            required_fields=("current_deck_link",),
            next_step="review",
        ),
        _review_step(),
    ),
)


# ---------------------------------------------------------------------------
# Brand package
# ---------------------------------------------------------------------------

BRAND_PACKAGE_FLOW = FlowConfig(
    service_type=ServiceType.BRAND_PACKAGE,
    initial_step="logo_check",
    steps=(
        FlowStep(
            id="logo_check",
            stage=IntakeStage.CONTEXT,
            question_type=QuestionType.QUICK,
            prompt="Do you already have a logo?",
            quick_options=(
                QuickOption(label="Yes, I have a logo", value="yes"),
                QuickOption(label="No, I need one created", value="no"),
            ),
            required_fields=("has_logo",),
            # Unanswered: skip the upload, logo creation is then part of the package
            next_step=PredicateEdge(
                field="has_logo",
                if_true="logo_upload",
                if_false="package_options",
                when_absent="package_options",
            ),
        ),
        FlowStep(
            id="logo_upload",
            stage=IntakeStage.CONTEXT,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="logo_link",
                    label="Logo file",
                    kind=InputKind.LINK,
                    placeholder="Drive or Dropbox link to logo files",
                    required=True,
                ),
            ),
            required_fields=("logo_link",),
            next_step="package_options",
        ),
        FlowStep(
            id="package_options",
            stage=IntakeStage.DETAILS,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="includes_items",
                    label="What should be included?",
                    kind=InputKind.MULTI_SELECT,
                    options=(
                        SelectOption(value="logo", label="Logo Design", recommended=True),
                        SelectOption(value="brand_guidelines", label="Brand Guidelines", recommended=True),
                        SelectOption(value="social_templates", label="Social Media Templates", recommended=True),
                        SelectOption(value="business_cards", label="Business Cards"),
                        SelectOption(value="presentations", label="Presentation Templates"),
                    ),
                    recommendation="We recommend: Logo, Brand Guidelines, Social Templates",
                    required=True,
                ),
                GroupedQuestion(
                    id="style_preferences",
                    label="Style direction (optional)",
                    kind=InputKind.TEXT,
                    placeholder="Modern, classic, bold, minimal, etc.",
                ),
            ),
            required_fields=("includes_items",),
            next_step="review",
        ),
        _review_step(),
    ),
)


# ---------------------------------------------------------------------------
# Social ads
# ---------------------------------------------------------------------------

SOCIAL_ADS_FLOW = FlowConfig(
    service_type=ServiceType.SOCIAL_ADS,
    initial_step="product_goal",
    steps=(
        FlowStep(
            id="product_goal",
            stage=IntakeStage.CONTEXT,
            question_type=QuestionType.OPEN,
            prompt=(
                "What are you promoting with these ads, and what's your main goal - "
                "driving sales, getting sign-ups, building awareness, or capturing leads?"
            ),
            required_fields=("product_or_offer", "goal"),
            next_step="platform_content",
        ),
        FlowStep(
            id="platform_content",
            stage=IntakeStage.DETAILS,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="platforms",
                    label="Platform(s)",
                    kind=InputKind.MULTI_SELECT,
                    options=(
                        SelectOption(value="instagram", label="Instagram", recommended=True),
                        SelectOption(value="facebook", label="Facebook", recommended=True),
                        SelectOption(value="linkedin", label="LinkedIn"),
                        SelectOption(value="tiktok", label="TikTok"),
                        SelectOption(value="snapchat", label="Snapchat"),
                    ),
                    required=True,
                ),
                GroupedQuestion(
                    id="has_content",
                    label="Do you have content ready?",
                    kind=InputKind.SINGLE_SELECT,
                    options=(
                        SelectOption(value="yes", label="Yes, I have photos/videos"),
                        SelectOption(value="no", label="No, I need content created"),
                    ),
                    required=True,
                ),
            ),
            required_fields=("platforms", "has_content"),
            # Unanswered: go to review, content gets produced by the team
            next_step=PredicateEdge(
                field="has_content",
                if_true="content_link",
                if_false="review",
                when_absent="review",
            ),
        ),
        FlowStep(
            id="content_link",
            stage=IntakeStage.DETAILS,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="content_link",
                    label="Content link",
                    kind=InputKind.LINK,
                    placeholder="Drive or Dropbox link to your photos/videos",
                    required=True,
                ),
            ),
            required_fields=("content_link",),
            next_step="review",
        ),
        _review_step(),
    ),
)


# ---------------------------------------------------------------------------
# Social content
# ---------------------------------------------------------------------------

SOCIAL_CONTENT_FLOW = FlowConfig(
    service_type=ServiceType.SOCIAL_CONTENT,
    initial_step="platform_goal",
    steps=(
        FlowStep(
            id="platform_goal",
            stage=IntakeStage.CONTEXT,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="platforms",
                    label="Platform(s)",
                    kind=InputKind.MULTI_SELECT,
                    options=(
                        SelectOption(value="instagram", label="Instagram", recommended=True),
                        SelectOption(value="linkedin", label="LinkedIn", recommended=True),
                        SelectOption(value="tiktok", label="TikTok"),
                        SelectOption(value="facebook", label="Facebook"),
                        SelectOption(value="twitter", label="Twitter/X"),
                    ),
                    required=True,
                ),
                GroupedQuestion(
                    id="goal",
                    label="Main goal",
                    kind=InputKind.SINGLE_SELECT,
                    options=_options(CONTENT_GOAL_LABELS),
                    required=True,
                ),
            ),
            required_fields=("platforms", "goal"),
            next_step="topics",
        ),
        FlowStep(
            id="topics",
            stage=IntakeStage.DETAILS,
            question_type=QuestionType.GROUPED,
            grouped_questions=(
                GroupedQuestion(
                    id="topics",
                    label="Topics/themes to cover",
                    kind=InputKind.TEXT,
                    placeholder=(
                        "What topics matter to your audience? (e.g., industry tips, "
                        "behind the scenes, product features)"
                    ),
                    required=True,
                ),
                GroupedQuestion(
                    id="style_examples",
                    label="Any accounts you love? (optional)",
                    kind=InputKind.TEXT,
                    placeholder="@ handles or links to content you admire",
                ),
            ),
            required_fields=("topics",),
            next_step="review",
        ),
        _review_step(),
    ),
)


BUILTIN_FLOWS: tuple[FlowConfig, ...] = (
    LAUNCH_VIDEO_FLOW,
    VIDEO_EDIT_FLOW,
    PITCH_DECK_FLOW,
    BRAND_PACKAGE_FLOW,
    SOCIAL_ADS_FLOW,
    SOCIAL_CONTENT_FLOW,
)
