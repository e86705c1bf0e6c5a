"""
Service Catalog — the closed set of creative services the intake covers.

Pure data: service definitions, the option vocabularies used by the
flows and data models, and their display labels. Nothing here has
behavior beyond lookup.

Adding a service means adding a ServiceType member here, a flow in
``intake.flows.definitions`` and an IntakeData model in
``intake.flows.models``. The flow registry refuses to build while a
service has no flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from intake.exceptions import UnknownServiceTypeError


# ---------------------------------------------------------------------------
# Service types
# ---------------------------------------------------------------------------

class ServiceType(str, Enum):
    """The services a client can request through the intake."""
    LAUNCH_VIDEO = "launch_video"
    VIDEO_EDIT = "video_edit"
    PITCH_DECK = "pitch_deck"
    BRAND_PACKAGE = "brand_package"
    SOCIAL_ADS = "social_ads"
    SOCIAL_CONTENT = "social_content"


class ServiceCategory(str, Enum):
    VIDEO = "video"
    DESIGN = "design"
    BRAND = "brand"
    SOCIAL = "social"


@dataclass(frozen=True)
class ServiceDefinition:
    """
    Display metadata for one service.

    Attributes:
        id: The service type this entry describes.
        label: Full name shown on the service selector.
        short_label: Compact name for chips and breadcrumbs.
        description: One-line pitch shown under the label.
        icon: Lucide icon name used by the UI.
        estimated_questions: Rough number of turns the intake takes.
        category: Coarse grouping for the selector.
    """
    id: ServiceType
    label: str
    short_label: str
    description: str
    icon: str
    estimated_questions: int
    category: ServiceCategory


SERVICE_DEFINITIONS: dict[ServiceType, ServiceDefinition] = {
    ServiceType.LAUNCH_VIDEO: ServiceDefinition(
        id=ServiceType.LAUNCH_VIDEO,
        label="Launch Video",
        short_label="Launch",
        description="Launching something new? Get a video that captures attention.",
        icon="Rocket",
        estimated_questions=4,
        category=ServiceCategory.VIDEO,
    ),
    ServiceType.VIDEO_EDIT: ServiceDefinition(
        id=ServiceType.VIDEO_EDIT,
        label="Video Edit",
        short_label="Edit",
        description="Have footage? We'll turn it into something polished.",
        icon="Film",
        estimated_questions=4,
        category=ServiceCategory.VIDEO,
    ),
    ServiceType.PITCH_DECK: ServiceDefinition(
        id=ServiceType.PITCH_DECK,
        label="Pitch Deck",
        short_label="Deck",
        description="Make your pitch deck look professional and compelling.",
        icon="Presentation",
        estimated_questions=2,
        category=ServiceCategory.DESIGN,
    ),
    ServiceType.BRAND_PACKAGE: ServiceDefinition(
        id=ServiceType.BRAND_PACKAGE,
        label="Brand Package",
        short_label="Brand",
        description="Full brand identity: logo, colors, guidelines, and more.",
        icon="Palette",
        estimated_questions=3,
        category=ServiceCategory.BRAND,
    ),
    ServiceType.SOCIAL_ADS: ServiceDefinition(
        id=ServiceType.SOCIAL_ADS,
        label="Social Media Ads",
        short_label="Ads",
        description="Paid ads that convert across all platforms.",
        icon="Target",
        estimated_questions=3,
        category=ServiceCategory.SOCIAL,
    ),
    ServiceType.SOCIAL_CONTENT: ServiceDefinition(
        id=ServiceType.SOCIAL_CONTENT,
        label="Social Content",
        short_label="Content",
        description="Organic content that builds your audience and authority.",
        icon="Share2",
        estimated_questions=3,
        category=ServiceCategory.SOCIAL,
    ),
}


# Opening question for each service, asked right after selection
INITIAL_MESSAGES: dict[ServiceType, str] = {
    ServiceType.LAUNCH_VIDEO: (
        "Tell me about your launch - what are you launching, and what's the "
        "ONE thing you want viewers to walk away understanding?"
    ),
    ServiceType.VIDEO_EDIT: (
        "What type of video are we editing? Is this UGC, a talking head video, "
        "screen recording, event footage, or a podcast clip?"
    ),
    ServiceType.PITCH_DECK: (
        "Share your current deck (Drive, Dropbox, or Figma link works). Any "
        "specific pain points with it, or an upcoming presentation you're "
        "preparing for?"
    ),
    ServiceType.BRAND_PACKAGE: (
        "Let's build your brand package. First - do you already have a logo, "
        "or do you need one created?"
    ),
    ServiceType.SOCIAL_ADS: (
        "What are you promoting with these ads, and what's your main goal - "
        "driving sales, getting sign-ups, building awareness, or capturing leads?"
    ),
    ServiceType.SOCIAL_CONTENT: (
        "What platforms are you focusing on, and what's your main goal - "
        "building authority, growing your audience, or something else?"
    ),
}


# ---------------------------------------------------------------------------
# Option vocabularies
# ---------------------------------------------------------------------------

class VideoPlatform(str, Enum):
    TIKTOK = "tiktok"
    REELS = "reels"
    LINKEDIN = "linkedin"
    YOUTUBE = "youtube"
    SNAPCHAT = "snapchat"


class SocialPlatform(str, Enum):
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"
    SNAPCHAT = "snapchat"
    TWITTER = "twitter"


# Vertical, sub-minute platforms. Drives the runtime recommendation.
SHORT_FORM_PLATFORMS: frozenset[str] = frozenset({"tiktok", "reels", "snapchat"})


class VideoType(str, Enum):
    UGC = "ugc"
    TALKING_HEAD = "talking_head"
    SCREEN_RECORDING = "screen_recording"
    EVENT = "event"
    PODCAST_CLIP = "podcast_clip"


class VideoGoal(str, Enum):
    ENGAGEMENT = "engagement"
    CLARITY = "clarity"
    PROMOTION = "promotion"
    EDUCATION = "education"


class AdGoal(str, Enum):
    SALES = "sales"
    SIGNUPS = "signups"
    AWARENESS = "awareness"
    LEADS = "leads"


class AdFormat(str, Enum):
    STATIC = "static"
    VIDEO = "video"
    CAROUSEL = "carousel"


class ContentGoal(str, Enum):
    AUTHORITY = "authority"
    TRUST = "trust"
    GROWTH = "growth"
    STORYTELLING = "storytelling"


class SocialContentType(str, Enum):
    EDUCATIONAL = "educational"
    BEHIND_THE_SCENES = "behind_the_scenes"
    PRODUCT = "product"
    MEMES = "memes"
    STORYTELLING = "storytelling"


class PostingFrequency(str, Enum):
    THREE_PER_WEEK = "3x_week"
    FIVE_PER_WEEK = "5x_week"
    DAILY = "daily"


class VideoStyle(str, Enum):
    CLEAN = "clean"
    ENERGETIC = "energetic"
    CINEMATIC = "cinematic"
    MEME = "meme"
    CORPORATE = "corporate"


class MusicPreference(str, Enum):
    UPBEAT = "upbeat"
    CALM = "calm"
    TRENDY = "trendy"
    NONE = "none"


class LaunchAsset(str, Enum):
    LOGO = "logo"
    PRODUCT_PHOTOS = "product_photos"
    UI_SCREENSHOTS = "ui_screenshots"
    FIGMA = "figma"
    WEBSITE = "website"


class BrandItem(str, Enum):
    LOGO = "logo"
    SOCIAL_TEMPLATES = "social_templates"
    BRAND_GUIDELINES = "brand_guidelines"
    BUSINESS_CARDS = "business_cards"
    PRESENTATIONS = "presentations"


class StorylinePreference(str, Enum):
    HAVE_IDEAS = "have_ideas"
    CREATE_FOR_ME = "create_for_me"


# ---------------------------------------------------------------------------
# Display labels
# ---------------------------------------------------------------------------

PLATFORM_LABELS: dict[str, str] = {
    "tiktok": "TikTok",
    "reels": "Instagram Reels",
    "instagram": "Instagram",
    "linkedin": "LinkedIn",
    "youtube": "YouTube",
    "snapchat": "Snapchat",
    "facebook": "Facebook",
    "twitter": "Twitter/X",
}

VIDEO_TYPE_LABELS: dict[VideoType, str] = {
    VideoType.UGC: "UGC (User Generated Content)",
    VideoType.TALKING_HEAD: "Talking Head",
    VideoType.SCREEN_RECORDING: "Screen Recording",
    VideoType.EVENT: "Event Footage",
    VideoType.PODCAST_CLIP: "Podcast Clip",
}

VIDEO_GOAL_LABELS: dict[VideoGoal, str] = {
    VideoGoal.ENGAGEMENT: "Engagement (likes, comments, shares)",
    VideoGoal.CLARITY: "Clarity (explain something clearly)",
    VideoGoal.PROMOTION: "Promotion (drive action)",
    VideoGoal.EDUCATION: "Education (teach something)",
}

AD_GOAL_LABELS: dict[AdGoal, str] = {
    AdGoal.SALES: "Sales (drive purchases)",
    AdGoal.SIGNUPS: "Sign-ups (get registrations)",
    AdGoal.AWARENESS: "Awareness (reach new people)",
    AdGoal.LEADS: "Leads (capture contact info)",
}

CONTENT_GOAL_LABELS: dict[ContentGoal, str] = {
    ContentGoal.AUTHORITY: "Authority (establish expertise)",
    ContentGoal.TRUST: "Trust (build relationships)",
    ContentGoal.GROWTH: "Growth (gain followers)",
    ContentGoal.STORYTELLING: "Storytelling (share your journey)",
}

CONTENT_TYPE_LABELS: dict[SocialContentType, str] = {
    SocialContentType.EDUCATIONAL: "Educational (tips, how-tos)",
    SocialContentType.BEHIND_THE_SCENES: "Behind the Scenes",
    SocialContentType.PRODUCT: "Product Focused",
    SocialContentType.MEMES: "Memes & Trends",
    SocialContentType.STORYTELLING: "Storytelling",
}

POSTING_FREQUENCY_LABELS: dict[PostingFrequency, str] = {
    PostingFrequency.THREE_PER_WEEK: "3x per week",
    PostingFrequency.FIVE_PER_WEEK: "5x per week",
    PostingFrequency.DAILY: "Daily",
}

VIDEO_STYLE_LABELS: dict[VideoStyle, str] = {
    VideoStyle.CLEAN: "Clean & Minimal",
    VideoStyle.ENERGETIC: "Energetic & Fast-paced",
    VideoStyle.CINEMATIC: "Cinematic & Polished",
    VideoStyle.MEME: "Meme & Trendy",
    VideoStyle.CORPORATE: "Corporate & Professional",
}

LAUNCH_ASSET_LABELS: dict[LaunchAsset, str] = {
    LaunchAsset.LOGO: "Logo",
    LaunchAsset.PRODUCT_PHOTOS: "Product Photos",
    LaunchAsset.UI_SCREENSHOTS: "UI/Screenshots",
    LaunchAsset.FIGMA: "Figma Files",
    LaunchAsset.WEBSITE: "Website (we can pull from)",
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def coerce_service_type(value: Any) -> ServiceType:
    """
    Turn a raw value into a ServiceType.

    Raises:
        UnknownServiceTypeError: If the value is not in the catalog.
    """
    if isinstance(value, ServiceType):
        return value
    try:
        return ServiceType(value)
    except ValueError as e:
        raise UnknownServiceTypeError(
            f"Unknown service type: {value!r}",
            service_type=str(value),
        ) from e


def get_service_definition(service_type: ServiceType | str) -> ServiceDefinition:
    """Return the catalog entry for a service."""
    return SERVICE_DEFINITIONS[coerce_service_type(service_type)]


def get_initial_message(service_type: ServiceType | str) -> str:
    """Return the opening question asked once a service is chosen."""
    return INITIAL_MESSAGES[coerce_service_type(service_type)]
