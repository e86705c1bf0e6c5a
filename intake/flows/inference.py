"""
Inference Patterns — trigger phrases that hint at a field value.

A small, non-binding lookup table: when a user's free text mentions one
of a rule's trigger phrases, the rule's value is a reasonable suggestion
for its field. The language layer uses these hints to phrase
recommendations ("We recommend TikTok + Reels"); the step resolver and
validator never read them.
"""

from __future__ import annotations

from dataclasses import dataclass

from intake.catalog import ServiceType, coerce_service_type


@dataclass(frozen=True)
class InferenceRule:
    """One trigger → value hint."""
    field: str
    triggers: tuple[str, ...]
    value: str
    confidence: float

    @property
    def values(self) -> list[str]:
        """The suggested value split into items (multi-valued fields use commas)."""
        return [v.strip() for v in self.value.split(",") if v.strip()]

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        return any(trigger in lowered for trigger in self.triggers)


INFERENCE_PATTERNS: dict[ServiceType, tuple[InferenceRule, ...]] = {
    ServiceType.LAUNCH_VIDEO: (
        InferenceRule("platforms", ("students", "gen z", "young"), "tiktok,reels", 0.8),
        InferenceRule("platforms", ("b2b", "professional", "enterprise"), "linkedin,youtube", 0.8),
        InferenceRule("recommended_style", ("serious", "professional"), "corporate", 0.7),
        InferenceRule("recommended_style", ("fun", "playful", "casual"), "energetic", 0.7),
    ),
    ServiceType.VIDEO_EDIT: (
        InferenceRule("subtitles", ("tiktok", "reels", "social"), "true", 0.9),
        InferenceRule("music_preference", ("corporate", "professional"), "calm", 0.7),
        InferenceRule("music_preference", ("energetic", "fun", "trending"), "trendy", 0.7),
    ),
    ServiceType.PITCH_DECK: (),
    ServiceType.BRAND_PACKAGE: (
        InferenceRule("includes_items", ("startup", "new company"), "logo,brand_guidelines", 0.8),
    ),
    ServiceType.SOCIAL_ADS: (
        InferenceRule("recommended_format", ("e-commerce", "product"), "carousel", 0.7),
        InferenceRule("recommended_format", ("app", "saas", "software"), "video", 0.7),
    ),
    ServiceType.SOCIAL_CONTENT: (
        InferenceRule("recommended_frequency", ("aggressive", "growth", "fast"), "5x_week", 0.7),
        InferenceRule(
            "recommended_content_types",
            ("thought leader", "expert"),
            "educational,storytelling",
            0.8,
        ),
    ),
}


def get_inference_rules(service_type: ServiceType | str) -> tuple[InferenceRule, ...]:
    return INFERENCE_PATTERNS.get(coerce_service_type(service_type), ())


def match_inference_rules(service_type: ServiceType | str, text: str) -> list[InferenceRule]:
    """
    Find the rules whose triggers appear in ``text``.

    Matching is a case-insensitive substring test. Results are ordered
    by confidence, highest first; rules of equal confidence keep table
    order.
    """
    if not text or not text.strip():
        return []
    hits = [rule for rule in get_inference_rules(service_type) if rule.matches(text)]
    return sorted(hits, key=lambda rule: rule.confidence, reverse=True)
