"""Website profiler orchestrating every page analyser into a WebsiteProfile.

The profiler is a pure, synchronous transformation of ``(url, html)``.
Fetching is delegated to :class:`~profile_engine.integrations.page_fetcher.PageFetcher`
and a failed fetch maps to a fully-shaped neutral profile, so callers never
need to special-case the failure path.
"""

import logging
import time
from dataclasses import replace
from typing import Callable, Optional, TypeVar

from profile_engine.integrations.page_fetcher import FetchResult, PageFetcher
from profile_engine.models import (
    Category,
    ContentMetrics,
    LinkMetrics,
    LocalSeoSignals,
    PageMetadata,
    TechnicalSeo,
    WebsiteProfile,
)
from profile_engine.modules.content.classifier import CategoryClassifier
from profile_engine.modules.content.readability import ContentReadabilityAnalyzer
from profile_engine.modules.content.summary import SummaryGenerator
from profile_engine.modules.link_graph.analyzer import LinkGraphAnalyzer
from profile_engine.modules.local_seo.signals import LocalSEOSignalDetector
from profile_engine.modules.site_profile.metadata import MetadataExtractor
from profile_engine.modules.technical_audit.auditor import TechnicalSEOAuditor
from profile_engine.utils.helpers import normalise_input_url, origin_of, site_domain
from profile_engine.utils.text_processing import normalize_text, parse_html

logger = logging.getLogger(__name__)

FAILED_SUMMARY = "Unable to analyze this website."

T = TypeVar("T")


def _guard(label: str, func: Callable[[], T], default: T) -> T:
    """Run one analyser, substituting *default* if it raises."""
    try:
        return func()
    except Exception as exc:
        logger.error("Analysis '%s' failed: %s", label, exc, exc_info=True)
        return default


class WebsiteProfiler:
    """Build a :class:`WebsiteProfile` from the HTML of one page.

    Usage::

        profiler = WebsiteProfiler()
        profile = profiler.analyze("https://example.com", html)
        profile.to_dict()
    """

    def __init__(self, fetcher: Optional[PageFetcher] = None) -> None:
        self._fetcher = fetcher
        self.metadata_extractor = MetadataExtractor()
        self.technical_auditor = TechnicalSEOAuditor()
        self.content_analyzer = ContentReadabilityAnalyzer()
        self.link_analyzer = LinkGraphAnalyzer()
        self.local_detector = LocalSEOSignalDetector()
        self.classifier = CategoryClassifier()
        self.summary_generator = SummaryGenerator()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    @staticmethod
    def empty_profile(url: str) -> WebsiteProfile:
        """Neutral profile used when no usable HTML could be obtained."""
        is_https = normalise_input_url(url).lower().startswith("https://")
        return WebsiteProfile(
            detected_category=Category.OTHER,
            summary=FAILED_SUMMARY,
            technical_seo=TechnicalSeo.empty(is_https=is_https),
            content_metrics=ContentMetrics.empty(),
            link_metrics=LinkMetrics.empty(),
            local_seo_signals=LocalSeoSignals.empty(),
        )

    def build(self, fetch: FetchResult) -> WebsiteProfile:
        """Profile the result of a fetch, falling back on failure."""
        if not fetch.ok:
            logger.warning(
                "No usable HTML for %s (%s); returning empty profile",
                fetch.requested_url, fetch.error or f"HTTP {fetch.status}",
            )
            return self.empty_profile(fetch.requested_url)
        return self.analyze(fetch.final_url or fetch.requested_url, fetch.html)

    async def profile_url(self, url: str) -> WebsiteProfile:
        """Fetch *url* and profile it."""
        fetcher = self._fetcher or PageFetcher()
        return self.build(await fetcher.fetch(url))

    def analyze(self, url: str, html: Optional[str]) -> WebsiteProfile:
        """Run every analyser over *html* fetched from *url*.

        Args:
            url: Page URL; provides the origin and the HTTPS flag.
            html: Raw page markup. ``None`` means the fetch produced nothing
                and yields :meth:`empty_profile`.

        Returns:
            A complete :class:`WebsiteProfile`. Never raises.
        """
        if html is None:
            return self.empty_profile(url)

        start = time.monotonic()
        page_url = normalise_input_url(url)
        origin = origin_of(page_url)
        domain = site_domain(page_url)
        logger.info("Profiling %s (%d bytes of HTML)", page_url, len(html))

        soup = _guard("parse", lambda: parse_html(html), parse_html(""))
        full_text = _guard("text", lambda: normalize_text(html), "")
        body_text = _guard("body_text", lambda: normalize_text(html, strip_chrome=True), "")

        metadata = _guard(
            "metadata",
            lambda: self.metadata_extractor.extract(soup, html, origin, full_text),
            PageMetadata.empty(),
        )
        technical = _guard(
            "technical_seo",
            lambda: self.technical_auditor.audit(soup, html, page_url, domain),
            TechnicalSeo.empty(is_https=page_url.lower().startswith("https://")),
        )
        content = _guard(
            "content",
            lambda: self.content_analyzer.analyze(body_text, soup),
            ContentMetrics.empty(),
        )
        links = _guard(
            "links",
            lambda: self.link_analyzer.analyze(soup, origin, domain),
            LinkMetrics.empty(),
        )
        local = _guard(
            "local_seo",
            lambda: self.local_detector.detect(soup, html, full_text),
            LocalSeoSignals.empty(),
        )
        category = _guard(
            "category",
            lambda: self.classifier.classify(full_text, metadata.title, metadata.description),
            Category.OTHER,
        )
        summary = _guard(
            "summary",
            lambda: self.summary_generator.generate(
                metadata.title, metadata.description, category, full_text
            ),
            FAILED_SUMMARY,
        )

        local = replace(
            local,
            local_keywords=self.local_detector.local_keywords(
                metadata.title, metadata.description, summary
            ),
        )
        local = replace(local, overall_score=self.local_detector.overall_score(local))

        profile = WebsiteProfile(
            title=metadata.title,
            description=metadata.description,
            favicon_url=metadata.favicon_url,
            logo_url=metadata.logo_url,
            social_links=metadata.social_links,
            contact_info=metadata.contact_info,
            detected_category=category,
            summary=summary,
            technical_seo=technical,
            content_metrics=content,
            link_metrics=links,
            local_seo_signals=local,
        )
        logger.info(
            "Profiled %s as %s in %.3fs",
            page_url, category.value, time.monotonic() - start,
        )
        return profile
