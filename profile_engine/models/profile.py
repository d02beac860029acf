"""Immutable value objects describing a single analysed webpage.

Every facet carries an ``empty()`` constructor so the profiler can always
return a fully-populated :class:`WebsiteProfile`, and ``to_dict()`` renders
the camelCase JSON-like shape consumed by the service layer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import Any, Optional


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _plain(value: Any) -> Any:
    if isinstance(value, _Serialisable):
        return value.to_dict()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (tuple, list)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    return value


class _Serialisable:
    """Mixin rendering a dataclass as a camelCase dict."""

    def to_dict(self) -> dict[str, Any]:
        return {_camel(f.name): _plain(getattr(self, f.name)) for f in fields(self)}


class Category(str, enum.Enum):
    """Closed set of business categories the classifier can assign."""

    ECOMMERCE = "ecommerce"
    SAAS = "saas"
    LOCAL_BUSINESS = "local_business"
    BLOG_MEDIA = "blog_media"
    PROFESSIONAL_SERVICES = "professional_services"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    EDUCATION = "education"
    REAL_ESTATE = "real_estate"
    HOSPITALITY = "hospitality"
    NONPROFIT = "nonprofit"
    TECHNOLOGY = "technology"
    OTHER = "other"


class ReadingLevel(str, enum.Enum):
    EASY = "Easy"
    STANDARD = "Standard"
    DIFFICULT = "Difficult"


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SocialLinks(_Serialisable):
    """Profile URLs for the fixed set of social platforms."""
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None
    youtube: Optional[str] = None
    tiktok: Optional[str] = None

    @classmethod
    def empty(cls) -> "SocialLinks":
        return cls()


@dataclass(frozen=True)
class ContactInfo(_Serialisable):
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def empty(cls) -> "ContactInfo":
        return cls()


@dataclass(frozen=True)
class PageMetadata(_Serialisable):
    """Intermediate result of the metadata extractor."""
    title: Optional[str] = None
    description: Optional[str] = None
    favicon_url: Optional[str] = None
    logo_url: Optional[str] = None
    social_links: SocialLinks = field(default_factory=SocialLinks)
    contact_info: ContactInfo = field(default_factory=ContactInfo)

    @classmethod
    def empty(cls) -> "PageMetadata":
        return cls()


# ---------------------------------------------------------------------------
# Technical SEO
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TechnicalSeo(_Serialisable):
    """Presence/absence checks for on-page technical SEO."""

    has_title: bool = False
    title_length: int = 0
    has_meta_description: bool = False
    description_length: int = 0
    has_canonical: bool = False
    canonical_url: Optional[str] = None
    has_viewport: bool = False
    has_robots_meta: bool = False
    robots_content: Optional[str] = None

    has_og_title: bool = False
    has_og_description: bool = False
    has_og_image: bool = False
    has_og_url: bool = False
    has_open_graph: bool = False
    has_twitter_card: bool = False

    h1_count: int = 0
    h1_text: tuple[str, ...] = ()
    h2_count: int = 0
    h3_count: int = 0
    has_proper_heading_hierarchy: bool = False

    total_images: int = 0
    images_with_alt: int = 0
    images_without_alt: int = 0
    alt_coverage: int = 0

    has_schema_markup: bool = False
    schema_types: tuple[str, ...] = ()

    internal_links: int = 0
    external_links: int = 0

    is_https: bool = False
    has_sitemap_link: bool = False
    has_lang_attribute: bool = False
    lang_value: Optional[str] = None

    @classmethod
    def empty(cls, is_https: bool = False) -> "TechnicalSeo":
        return cls(is_https=is_https)


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KeywordDensity(_Serialisable):
    keyword: str
    count: int
    percentage: float


@dataclass(frozen=True)
class ContentMetrics(_Serialisable):
    """Word, sentence and readability statistics of the visible text."""

    word_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    avg_words_per_sentence: float = 0.0
    avg_sentences_per_paragraph: float = 0.0
    flesch_kincaid_score: float = 0.0
    reading_level: ReadingLevel = ReadingLevel.DIFFICULT
    reading_grade: str = "College Level"
    keyword_density: tuple[KeywordDensity, ...] = ()
    long_sentences: int = 0
    short_sentences: int = 0
    thin_content: bool = False
    reading_time_minutes: int = 0

    @classmethod
    def empty(cls) -> "ContentMetrics":
        return cls()


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnchorTextCount(_Serialisable):
    text: str
    count: int


@dataclass(frozen=True)
class LinkMetrics(_Serialisable):
    """Internal/external link structure of the page."""

    total_internal_links: int = 0
    total_external_links: int = 0
    unique_internal_links: int = 0
    unique_external_links: int = 0
    broken_link_candidates: tuple[str, ...] = ()
    anchor_text_distribution: tuple[AnchorTextCount, ...] = ()
    links_per_section: float = 0.0
    has_navigation_links: bool = False
    has_footer_links: bool = False
    max_link_depth: int = 0
    orphan_risk: bool = False
    link_equity_score: int = 0

    @classmethod
    def empty(cls) -> "LinkMetrics":
        return cls()


# ---------------------------------------------------------------------------
# Local SEO
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LocalSeoSignals(_Serialisable):
    """Local-business signals found on the page.

    ``nap_consistent`` only means that *an* address and *a* phone number were
    both found somewhere on the page. It does not verify that they belong to
    the same listing.
    """

    has_address: bool = False
    address_text: Optional[str] = None
    has_phone: bool = False
    phone_text: Optional[str] = None
    has_business_hours: bool = False
    hours_text: Optional[str] = None
    has_local_schema: bool = False
    local_schema_type: Optional[str] = None
    has_google_maps_embed: bool = False
    has_service_area: bool = False
    service_area_text: Optional[str] = None
    nap_consistent: bool = False
    has_reviews_section: bool = False
    has_gmb_link: bool = False
    gmb_url: Optional[str] = None
    local_keywords: tuple[str, ...] = ()
    overall_score: int = 0

    @classmethod
    def empty(cls) -> "LocalSeoSignals":
        return cls()


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WebsiteProfile(_Serialisable):
    """Complete structured profile of one webpage."""

    title: Optional[str] = None
    description: Optional[str] = None
    favicon_url: Optional[str] = None
    logo_url: Optional[str] = None
    social_links: SocialLinks = field(default_factory=SocialLinks)
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    detected_category: Category = Category.OTHER
    summary: str = ""
    technical_seo: TechnicalSeo = field(default_factory=TechnicalSeo)
    content_metrics: ContentMetrics = field(default_factory=ContentMetrics)
    link_metrics: LinkMetrics = field(default_factory=LinkMetrics)
    local_seo_signals: LocalSeoSignals = field(default_factory=LocalSeoSignals)
