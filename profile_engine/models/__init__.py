"""Value objects produced by the website profile engine."""

from profile_engine.models.profile import (
    AnchorTextCount,
    Category,
    ContactInfo,
    ContentMetrics,
    KeywordDensity,
    LinkMetrics,
    LocalSeoSignals,
    PageMetadata,
    ReadingLevel,
    SocialLinks,
    TechnicalSeo,
    WebsiteProfile,
)

__all__ = [
    "AnchorTextCount",
    "Category",
    "ContactInfo",
    "ContentMetrics",
    "KeywordDensity",
    "LinkMetrics",
    "LocalSeoSignals",
    "PageMetadata",
    "ReadingLevel",
    "SocialLinks",
    "TechnicalSeo",
    "WebsiteProfile",
]
