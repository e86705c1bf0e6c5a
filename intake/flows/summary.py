"""
Intake Summary — the confirmation card shown at the review step.

Turns collected intake data into labelled summary items plus a few
service-specific recommendations. Smart defaults are applied first, so
derived values (length, CTA, cadence) appear on the card; each item
records whether the user gave it or the engine filled it in.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from intake.catalog import ServiceType, coerce_service_type, get_service_definition
from intake.flows.defaults import SmartDefaultsApplier
from intake.flows.models import (
    IntakeSummary,
    ItemSource,
    SummaryItem,
    field_has_value,
    is_affirmative,
)

logger = logging.getLogger(__name__)


# Fields a brief cannot go out without, per service.
CORE_FIELDS: dict[ServiceType, tuple[str, ...]] = {
    ServiceType.LAUNCH_VIDEO: ("product_description", "key_message", "platforms", "assets_available"),
    ServiceType.VIDEO_EDIT: ("video_type", "platforms", "goal", "footage_link"),
    ServiceType.PITCH_DECK: ("current_deck_link",),
    ServiceType.BRAND_PACKAGE: ("has_logo", "includes_items"),
    ServiceType.SOCIAL_ADS: ("platforms", "goal", "product_or_offer", "has_content"),
    ServiceType.SOCIAL_CONTENT: ("platforms", "goal", "topics"),
}


def _text(value: Any) -> Any:
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(getattr(v, "value", v)) for v in value]
    return str(getattr(value, "value", value))


class _ItemCollector:
    """Accumulates summary items, tagging derived values by origin."""

    def __init__(self, answered: Mapping[str, Any], data: Mapping[str, Any]):
        self.answered = answered
        self.data = data
        self.items: list[SummaryItem] = []

    def user(self, field_name: str, label: str, *, editable: bool = False, display: Any = None) -> None:
        if field_has_value(self.data, field_name):
            value = display if display is not None else _text(self.data[field_name])
            self.items.append(
                SummaryItem(label=label, value=value, source=ItemSource.USER, editable=editable)
            )

    def derived(self, field_name: str, label: str, *, editable: bool = False, display: Any = None) -> None:
        if not field_has_value(self.data, field_name):
            return
        source = ItemSource.USER if field_has_value(self.answered, field_name) else ItemSource.DEFAULT
        value = display if display is not None else _text(self.data[field_name])
        self.items.append(SummaryItem(label=label, value=value, source=source, editable=editable))

    def fixed(self, label: str, value: str, source: ItemSource) -> None:
        self.items.append(SummaryItem(label=label, value=value, source=source))


# ---------------------------------------------------------------------------
# Summary items
# ---------------------------------------------------------------------------

def _launch_video_items(c: _ItemCollector) -> None:
    c.user("product_description", "Product", editable=True)
    c.user("key_message", "Key Message", editable=True)
    c.user("platforms", "Platforms")
    c.derived("recommended_length", "Length")
    if field_has_value(c.data, "storyline_preference"):
        storyline = _text(c.data["storyline_preference"])
        c.derived(
            "storyline_preference",
            "Storyline",
            display="We'll create one" if storyline == "create_for_me" else "You have ideas",
        )


def _video_edit_items(c: _ItemCollector) -> None:
    c.user("video_type", "Video Type")
    c.user("platforms", "Platforms")
    c.user("goal", "Goal")
    c.user("footage_link", "Footage", display="Provided ✓")
    c.derived("recommended_length", "Length")
    c.derived("style_preference", "Style")
    if "subtitles" in c.data:
        c.derived("subtitles", "Subtitles", display="Yes" if is_affirmative(c.data["subtitles"]) else "No")


def _pitch_deck_items(c: _ItemCollector) -> None:
    c.user("current_deck_link", "Current Deck", display="Provided ✓")
    c.user("additional_notes", "Notes", editable=True)


def _brand_package_items(c: _ItemCollector) -> None:
    has_logo = is_affirmative(c.data.get("has_logo"))
    c.fixed("Logo", "Has logo" if has_logo else "Need logo created", ItemSource.USER)
    c.user("includes_items", "Includes")


def _social_ads_items(c: _ItemCollector) -> None:
    c.user("platforms", "Platforms")
    c.user("goal", "Goal")
    c.user("product_or_offer", "Promoting", editable=True)
    c.derived("recommended_format", "Format")
    c.derived("recommended_cta", "CTA", editable=True)


def _social_content_items(c: _ItemCollector) -> None:
    c.user("platforms", "Platforms")
    c.user("goal", "Goal")
    c.user("topics", "Topics", editable=True)
    c.derived("recommended_frequency", "Frequency")
    c.derived("recommended_content_types", "Content Types")


_ITEM_BUILDERS: dict[ServiceType, Callable[[_ItemCollector], None]] = {
    ServiceType.LAUNCH_VIDEO: _launch_video_items,
    ServiceType.VIDEO_EDIT: _video_edit_items,
    ServiceType.PITCH_DECK: _pitch_deck_items,
    ServiceType.BRAND_PACKAGE: _brand_package_items,
    ServiceType.SOCIAL_ADS: _social_ads_items,
    ServiceType.SOCIAL_CONTENT: _social_content_items,
}


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

def generate_recommendations(service_type: ServiceType | str, data: Mapping[str, Any]) -> list[str]:
    """Service-specific production notes for the summary card."""
    st = coerce_service_type(service_type)
    recs: list[str] = []
    goal = _text(data["goal"]) if field_has_value(data, "goal") else None

    if st == ServiceType.LAUNCH_VIDEO:
        platforms = _text(data.get("platforms") or [])
        if "tiktok" in platforms or "reels" in platforms:
            recs.append("Hook viewers in the first 3 seconds")
        if field_has_value(data, "key_message"):
            recs.append(f'Lead with your key differentiator: "{data["key_message"]}"')

    elif st == ServiceType.VIDEO_EDIT:
        recs.append("We'll add dynamic text overlays for key points")
        if field_has_value(data, "video_type") and _text(data["video_type"]) == "talking_head":
            recs.append("Consider B-roll footage to break up talking sections")

    elif st == ServiceType.PITCH_DECK:
        recs.append("We'll maintain your brand consistency throughout")
        recs.append("Focus on visual storytelling over text-heavy slides")

    elif st == ServiceType.BRAND_PACKAGE:
        recs.append("We'll create versatile assets that work across all platforms")

    elif st == ServiceType.SOCIAL_ADS:
        if goal == "sales":
            recs.append("Show social proof and urgency in the creative")
        elif goal == "awareness":
            recs.append("Focus on brand storytelling over direct selling")

    elif st == ServiceType.SOCIAL_CONTENT:
        recs.append("Mix educational and entertaining content for best engagement")
        if goal == "authority":
            recs.append("Share unique insights and data from your expertise")

    return recs


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_intake_summary(
    service_type: ServiceType | str,
    data: Mapping[str, Any],
    applier: Optional[SmartDefaultsApplier] = None,
) -> IntakeSummary:
    """
    Build the confirmation summary for a finished intake.

    Args:
        service_type: The service being briefed.
        data: The answers collected so far (not modified).
        applier: Smart-default rules to fill derived fields with.
            Defaults to the built-in tables.

    Returns:
        IntakeSummary titled "<service label> Brief", ready to submit
        once every core field is present.
    """
    st = coerce_service_type(service_type)
    applier = applier or SmartDefaultsApplier()
    final = applier.apply(st, data)

    collector = _ItemCollector(answered=data, data=final)
    _ITEM_BUILDERS[st](collector)

    missing = [f for f in CORE_FIELDS[st] if not field_has_value(final, f)]
    if missing:
        logger.debug(
            "summary_incomplete",
            extra={"service_type": st.value, "missing_fields": missing},
        )

    return IntakeSummary(
        service_type=st,
        title=f"{get_service_definition(st).label} Brief",
        items=collector.items,
        recommendations=generate_recommendations(st, final),
        ready_to_submit=not missing,
    )


def calculate_intake_completion(service_type: ServiceType | str, data: Mapping[str, Any]) -> int:
    """Percentage (0-100) of the service's core fields that have a value."""
    fields = CORE_FIELDS[coerce_service_type(service_type)]
    have = sum(1 for f in fields if field_has_value(data, f))
    return (200 * have + len(fields)) // (2 * len(fields))
