"""
Smart Defaults — derived values the intake fills in instead of asking.

Every rule reads already-collected fields and writes a field that is
still unset. Nothing the user answered is ever replaced, which also
makes applying the rules twice a no-op.

The lookup tables live in a frozen SmartDefaults model that is handed to
SmartDefaultsApplier, so alternative tables can be injected in tests
without touching module state.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from intake.catalog import SHORT_FORM_PLATFORMS, ServiceType, coerce_service_type
from intake.exceptions import UnknownServiceTypeError
from intake.flows.models import field_has_value

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

class SmartDefaults(BaseModel):
    """Lookup tables behind the default rules."""
    model_config = ConfigDict(frozen=True)

    short_form_platforms: frozenset[str] = SHORT_FORM_PLATFORMS

    # Runtime bands: (short-form, long-form)
    launch_video_length: tuple[str, str] = ("30-45s", "60-90s")
    video_edit_length: tuple[str, str] = ("15-30s", "60-90s")

    # video_type → style / music
    video_style: dict[str, str] = Field(default_factory=lambda: {
        "ugc": "energetic",
        "talking_head": "clean",
        "screen_recording": "clean",
        "event": "cinematic",
        "podcast_clip": "clean",
    })
    music: dict[str, str] = Field(default_factory=lambda: {
        "ugc": "trendy",
        "talking_head": "calm",
        "screen_recording": "calm",
        "event": "upbeat",
        "podcast_clip": "none",
    })

    # ad goal → format / call to action
    ad_format: dict[str, str] = Field(default_factory=lambda: {
        "sales": "carousel",
        "signups": "video",
        "awareness": "video",
        "leads": "static",
    })
    ad_cta: dict[str, str] = Field(default_factory=lambda: {
        "sales": "Shop now",
        "signups": "Sign up free",
        "awareness": "Learn more",
        "leads": "Get quote",
    })
    fallback_cta: str = "Learn more"

    # content goal → cadence / content mix
    posting_frequency: dict[str, str] = Field(default_factory=lambda: {
        "authority": "3x_week",
        "trust": "3x_week",
        "growth": "5x_week",
        "storytelling": "3x_week",
    })
    content_types: dict[str, tuple[str, ...]] = Field(default_factory=lambda: {
        "authority": ("educational", "storytelling"),
        "trust": ("behind_the_scenes", "storytelling"),
        "growth": ("memes", "educational", "product"),
        "storytelling": ("storytelling", "behind_the_scenes"),
    })

    default_storyline: str = "create_for_me"

    def has_short_form(self, platforms: Any) -> bool:
        if not isinstance(platforms, (list, tuple, set, frozenset)):
            return False
        return any(str(getattr(p, "value", p)) in self.short_form_platforms for p in platforms)


DEFAULT_SMART_DEFAULTS = SmartDefaults()


def _key(value: Any) -> Any:
    return getattr(value, "value", value)


def _fill(data: dict[str, Any], field_name: str, value: Any) -> None:
    if value is not None and not field_has_value(data, field_name):
        data[field_name] = value


# ---------------------------------------------------------------------------
# Applier
# ---------------------------------------------------------------------------

class SmartDefaultsApplier:
    """
    Applies the per-service default rules to collected intake data.

    Thread-safe: holds only the frozen tables; every call works on a copy.
    """

    def __init__(self, defaults: SmartDefaults = DEFAULT_SMART_DEFAULTS):
        self.defaults = defaults
        self._rules: dict[ServiceType, Callable[[dict[str, Any]], None]] = {
            ServiceType.LAUNCH_VIDEO: self._launch_video,
            ServiceType.VIDEO_EDIT: self._video_edit,
            ServiceType.SOCIAL_ADS: self._social_ads,
            ServiceType.SOCIAL_CONTENT: self._social_content,
        }

    def apply(
        self, service_type: ServiceType | str, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        """
        Return a copy of ``data`` with derived fields filled in.

        Services without rules (pitch_deck, brand_package) get a plain
        copy. An unknown service type is logged and the copy is returned
        untouched.
        """
        enriched = dict(data)
        try:
            st = coerce_service_type(service_type)
        except UnknownServiceTypeError:
            logger.error(
                "smart_defaults_unknown_service",
                extra={"service_type": str(service_type)},
            )
            return enriched

        rule = self._rules.get(st)
        if rule is not None:
            rule(enriched)
        return enriched

    # ── Per-service rules ────────────────────────────────────────

    def _launch_video(self, data: dict[str, Any]) -> None:
        d = self.defaults
        if field_has_value(data, "platforms"):
            short, long = d.launch_video_length
            _fill(data, "recommended_length", short if d.has_short_form(data["platforms"]) else long)
        _fill(data, "storyline_preference", d.default_storyline)

    def _video_edit(self, data: dict[str, Any]) -> None:
        d = self.defaults
        if field_has_value(data, "platforms"):
            short, long = d.video_edit_length
            _fill(data, "recommended_length", short if d.has_short_form(data["platforms"]) else long)
        # An explicit False from the user is kept; only unset flags are turned on.
        _fill(data, "subtitles", True)
        _fill(data, "text_overlays", True)
        if field_has_value(data, "video_type"):
            video_type = _key(data["video_type"])
            _fill(data, "style_preference", d.video_style.get(video_type))
            _fill(data, "music_preference", d.music.get(video_type))

    def _social_ads(self, data: dict[str, Any]) -> None:
        d = self.defaults
        if not field_has_value(data, "goal"):
            return
        goal = _key(data["goal"])
        _fill(data, "recommended_format", d.ad_format.get(goal))
        _fill(data, "recommended_cta", d.ad_cta.get(goal, d.fallback_cta))

    def _social_content(self, data: dict[str, Any]) -> None:
        d = self.defaults
        if not field_has_value(data, "goal"):
            return
        goal = _key(data["goal"])
        _fill(data, "recommended_frequency", d.posting_frequency.get(goal))
        content_types = d.content_types.get(goal)
        if content_types is not None:
            _fill(data, "recommended_content_types", list(content_types))

