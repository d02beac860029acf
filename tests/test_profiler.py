"""End-to-end tests for WebsiteProfiler.

Covers determinism, total coverage over malformed input, the failure
profile, link classification through the full pipeline, category
detection and summary composition.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from profile_engine.integrations.page_fetcher import FetchResult
from profile_engine.models import Category, ReadingLevel, WebsiteProfile
from profile_engine.modules.site_profile import WebsiteProfiler
from profile_engine.modules.site_profile.profiler import FAILED_SUMMARY

TOP_LEVEL_KEYS = {
    "title", "description", "faviconUrl", "logoUrl", "socialLinks",
    "contactInfo", "detectedCategory", "summary", "technicalSeo",
    "contentMetrics", "linkMetrics", "localSeoSignals",
}


def _walk_scalars(node, path=""):
    """Yield (path, value) for every leaf of a to_dict() document."""
    if isinstance(node, dict):
        for key, value in node.items():
            yield from _walk_scalars(value, f"{path}.{key}" if path else key)
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from _walk_scalars(value, f"{path}[{index}]")
    else:
        yield path, node


# ===========================================================================
# 1. Determinism and shape
# ===========================================================================
class TestDeterminism:
    """Same input, same output."""

    def test_repeat_analysis_is_identical(self, profiler, local_business_url, local_business_html):
        first = profiler.analyze(local_business_url, local_business_html)
        second = profiler.analyze(local_business_url, local_business_html)
        assert first == second
        assert json.dumps(first.to_dict(), sort_keys=True) == json.dumps(
            second.to_dict(), sort_keys=True
        )

    def test_separate_profilers_agree(self, local_business_url, local_business_html):
        a = WebsiteProfiler().analyze(local_business_url, local_business_html)
        b = WebsiteProfiler().analyze(local_business_url, local_business_html)
        assert a.to_dict() == b.to_dict()

    def test_to_dict_uses_camel_case_keys(self, local_business_profile):
        data = local_business_profile.to_dict()
        assert set(data) == TOP_LEVEL_KEYS
        assert "altCoverage" in data["technicalSeo"]
        assert "fleschKincaidScore" in data["contentMetrics"]
        assert "brokenLinkCandidates" in data["linkMetrics"]
        assert "napConsistent" in data["localSeoSignals"]

    def test_to_dict_is_json_serialisable(self, local_business_profile):
        json.dumps(local_business_profile.to_dict())


# ===========================================================================
# 2. Total coverage
# ===========================================================================
class TestTotalCoverage:
    """Any string input yields a complete, in-range profile."""

    @pytest.mark.parametrize("html", [
        "",
        "   ",
        "<<<>>>",
        "<html><body><h1>unclosed <p>dangling",
        "not html at all, just words.",
        "<script>alert('x')</script>",
        "<html><head><title></title></head><body></body></html>",
        "<a href=>empty</a><img><img alt=''>",
    ])
    def test_profile_is_complete(self, profiler, html):
        profile = profiler.analyze("https://example.com", html)
        assert isinstance(profile, WebsiteProfile)
        data = profile.to_dict()
        assert set(data) == TOP_LEVEL_KEYS
        assert 0 <= profile.technical_seo.alt_coverage <= 100
        assert 0.0 <= profile.content_metrics.flesch_kincaid_score <= 100.0
        assert profile.content_metrics.sentence_count >= 1
        assert profile.detected_category in set(Category)
        assert profile.summary

    def test_empty_string_is_analysed_not_failed(self, profiler):
        profile = profiler.analyze("https://example.com", "")
        assert profile.summary != FAILED_SUMMARY
        assert profile.favicon_url == "https://example.com/favicon.ico"
        assert profile.technical_seo.alt_coverage == 100
        assert profile.content_metrics.word_count == 0
        assert profile.content_metrics.flesch_kincaid_score == 0.0

    def test_malformed_url_still_profiles(self, profiler):
        profile = profiler.analyze("http://[bad", "<p>hello world</p>")
        assert set(profile.to_dict()) == TOP_LEVEL_KEYS
        assert profile.summary != FAILED_SUMMARY
        assert profile.favicon_url is None
        assert profile.technical_seo.is_https is False
        assert profile.content_metrics.word_count == 2

    def test_analyser_failure_is_contained(self, profiler, local_business_url, local_business_html):
        profiler.link_analyzer = MagicMock()
        profiler.link_analyzer.analyze.side_effect = RuntimeError("boom")
        profile = profiler.analyze(local_business_url, local_business_html)
        assert profile.link_metrics.total_internal_links == 0
        assert profile.technical_seo.h1_count == 1
        assert profile.detected_category == Category.HEALTHCARE


# ===========================================================================
# 3. Failure profile
# ===========================================================================
class TestFailureProfile:
    """Fetch failures map to the neutral profile."""

    def _assert_neutral(self, profile, is_https):
        assert profile.summary == FAILED_SUMMARY
        assert profile.detected_category == Category.OTHER
        assert profile.title is None
        assert profile.description is None
        assert profile.favicon_url is None
        assert profile.content_metrics.reading_level == ReadingLevel.DIFFICULT
        assert profile.content_metrics.reading_grade == "College Level"
        assert profile.technical_seo.is_https is is_https
        for path, value in _walk_scalars(profile.to_dict()):
            if path == "technicalSeo.isHttps":
                continue
            if isinstance(value, bool):
                assert value is False, path
            elif isinstance(value, (int, float)):
                assert value == 0, path

    def test_none_html(self, profiler):
        self._assert_neutral(profiler.analyze("https://example.com", None), is_https=True)

    def test_http_error(self, profiler):
        fetch = FetchResult(
            requested_url="https://example.com", final_url="https://example.com",
            status=500, error="HTTP 500",
        )
        self._assert_neutral(profiler.build(fetch), is_https=True)

    def test_network_error_on_plain_http(self, profiler):
        fetch = FetchResult(
            requested_url="http://example.com", final_url="http://example.com",
            error="timeout",
        )
        self._assert_neutral(profiler.build(fetch), is_https=False)

    def test_bare_domain_defaults_to_https(self):
        profile = WebsiteProfiler.empty_profile("example.com")
        assert profile.technical_seo.is_https is True

    def test_successful_fetch_is_analysed(self, profiler, local_business_url, local_business_html):
        fetch = FetchResult(
            requested_url="brightsmile.example", final_url=local_business_url,
            status=200, html=local_business_html,
        )
        assert profiler.build(fetch) == profiler.analyze(local_business_url, local_business_html)

    @pytest.mark.asyncio
    async def test_profile_url_uses_fetcher(self, local_business_url, local_business_html):
        fetcher = MagicMock()
        fetcher.fetch = AsyncMock(return_value=FetchResult(
            requested_url=local_business_url, final_url=local_business_url,
            status=200, html=local_business_html,
        ))
        profile = await WebsiteProfiler(fetcher=fetcher).profile_url(local_business_url)
        fetcher.fetch.assert_awaited_once_with(local_business_url)
        assert profile.detected_category == Category.HEALTHCARE

    @pytest.mark.asyncio
    async def test_profile_url_failed_fetch(self):
        fetcher = MagicMock()
        fetcher.fetch = AsyncMock(return_value=FetchResult(
            requested_url="https://down.example", final_url="https://down.example",
            error="Cannot connect",
        ))
        profile = await WebsiteProfiler(fetcher=fetcher).profile_url("https://down.example")
        assert profile.summary == FAILED_SUMMARY


# ===========================================================================
# 4. Full pipeline on a local business page
# ===========================================================================
class TestLocalBusinessPage:
    """Facet values for the dental practice fixture."""

    def test_metadata(self, local_business_profile):
        p = local_business_profile
        assert p.title == "Bright Smile Dental | Springfield Dentist"
        assert p.description.startswith("Family dentist in Springfield")
        assert p.favicon_url == "https://brightsmile.example/static/favicon.png"
        assert p.logo_url == "https://brightsmile.example/images/logo.png"
        assert p.social_links.facebook == "https://facebook.com/brightsmile"
        assert p.social_links.instagram == "https://www.instagram.com/brightsmile/"
        assert p.social_links.twitter is None
        assert p.contact_info.email == "hello@brightsmile.example"
        assert p.contact_info.phone == "+15551234567"
        assert p.contact_info.address == "123 Main Street"

    def test_category_and_summary(self, local_business_profile):
        p = local_business_profile
        assert p.detected_category == Category.HEALTHCARE
        assert p.summary.startswith(
            "Bright Smile Dental | Springfield Dentist is a healthcare website."
        )
        assert p.description in p.summary

    def test_technical(self, local_business_profile):
        tech = local_business_profile.technical_seo
        assert tech.is_https is True
        assert tech.h1_count == 1
        assert tech.has_proper_heading_hierarchy is True
        assert tech.h2_count == 2
        assert tech.total_images == 2
        assert tech.alt_coverage == 50
        assert tech.schema_types == ("Dentist",)
        assert tech.has_schema_markup is True
        assert tech.internal_links == 3
        assert tech.external_links == 3
        assert tech.lang_value == "en"

    def test_links(self, local_business_profile):
        links = local_business_profile.link_metrics
        assert links.unique_internal_links == 3
        assert links.broken_link_candidates == ("#", "javascript:void(0)")
        assert links.has_navigation_links is True
        assert links.has_footer_links is True
        assert links.max_link_depth == 2
        assert links.links_per_section == 1.0
        assert links.orphan_risk is True

    def test_local_signals(self, local_business_profile):
        local = local_business_profile.local_seo_signals
        assert local.local_schema_type == "Dentist"
        assert local.hours_text == "Mo-Fr 08:00-17:00, Sa 09:00-13:00"
        assert local.nap_consistent is True
        assert local.has_google_maps_embed is True
        assert local.has_gmb_link is True
        assert local.has_reviews_section is True
        assert "dental" in local.local_keywords
        assert "dentist" in local.local_keywords
        assert local.has_service_area is True
        assert local.service_area_text == "Springfield, Shelbyville and Capital City"
        assert local.overall_score == 100

    def test_content_ignores_scripts_and_chrome(self, local_business_profile):
        content = local_business_profile.content_metrics
        keywords = {k.keyword: k.count for k in content.keyword_density}
        assert keywords["dental"] == 3
        assert "tracking" not in keywords
        assert content.paragraph_count == 4
        assert content.thin_content is True


# ===========================================================================
# 5. Link classification through the pipeline
# ===========================================================================
class TestLinkClassification:

    def test_internal_external_and_placeholder(self, profiler):
        html = (
            '<a href="https://example.com/about">About</a>'
            '<a href="https://other.com">Other</a>'
            '<a href="#">Top</a>'
        )
        profile = profiler.analyze("https://example.com", html)
        assert profile.technical_seo.internal_links == 1
        assert profile.technical_seo.external_links == 1
        assert profile.link_metrics.total_internal_links == 1
        assert profile.link_metrics.total_external_links == 1
        assert profile.link_metrics.broken_link_candidates == ("#",)

    def test_protocol_relative_link_is_internal(self, profiler):
        profile = profiler.analyze("https://example.com", '<a href="//cdn.other.com/lib">cdn</a>')
        assert profile.technical_seo.internal_links == 1
        assert profile.technical_seo.external_links == 0


# ===========================================================================
# 6. Category and summary
# ===========================================================================
class TestCategoryAndSummary:

    def test_ecommerce_page(self, profiler):
        html = (
            "<html><body><p>Shop our store: add the product to your cart "
            "and checkout with free shipping.</p></body></html>"
        )
        profile = profiler.analyze("https://example.com", html)
        assert profile.detected_category == Category.ECOMMERCE

    def test_unmatched_page_is_other_with_padded_summary(self, profiler, plain_html):
        profile = profiler.analyze("https://example.com", plain_html)
        assert profile.detected_category == Category.OTHER
        assert profile.summary.startswith("This is a general business website.")
        assert len(profile.summary) >= 200
        assert profile.summary.endswith("can meet their needs.")
