"""Technical SEO auditor: deterministic on-page presence/absence checks.

Covers meta tags, Open Graph / Twitter cards, heading structure, image alt
coverage, schema.org markup, link classification, HTTPS, sitemap
references and the document language.
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from profile_engine.models import TechnicalSeo
from profile_engine.utils.helpers import classify_href
from profile_engine.utils.structured_data import has_microdata, jsonld_types
from profile_engine.utils.text_processing import collapse_whitespace

logger = logging.getLogger(__name__)

_SITEMAP_RE = re.compile(r"sitemap(?:_index)?\.xml", re.I)


def _meta(soup: BeautifulSoup, attr: str, value: str):
    return soup.find("meta", attrs={attr: re.compile(rf"^\s*{re.escape(value)}\s*$", re.I)})


def _meta_text(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    tag = _meta(soup, attr, value)
    if tag is None:
        return None
    return collapse_whitespace(str(tag.get("content") or ""))


def _link_with_rel(soup: BeautifulSoup, rel_value: str):
    for link in soup.find_all("link"):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if rel_value in (r.lower() for r in rel):
            return link
    return None


def alt_coverage(with_alt: int, total: int) -> int:
    """Percentage of images carrying alt text; a page without images scores 100."""
    if total <= 0:
        return 100
    return round(with_alt / total * 100)


class TechnicalSEOAuditor:
    """Run the technical SEO checks for one page."""

    def audit(self, soup: BeautifulSoup, html: str, url: str, domain: str) -> TechnicalSeo:
        """Audit a parsed page.

        Args:
            soup: Parsed page.
            html: Raw markup (sitemap references are matched on it).
            url: URL the page was requested from; drives ``is_https``.
            domain: Site domain used for internal/external link classification.

        Returns:
            A populated :class:`TechnicalSeo`.
        """
        # --- Meta tags ---
        title_tag = soup.find("title")
        title = collapse_whitespace(title_tag.get_text()) if title_tag else ""
        description = _meta_text(soup, "name", "description") or ""

        canonical_tag = _link_with_rel(soup, "canonical")
        canonical_url = (canonical_tag.get("href") or "").strip() if canonical_tag else ""

        robots_tag = _meta(soup, "name", "robots")
        robots_content = _meta_text(soup, "name", "robots") if robots_tag else None

        # --- Open Graph / Twitter ---
        has_og_title = _meta(soup, "property", "og:title") is not None
        has_og_description = _meta(soup, "property", "og:description") is not None
        has_og_image = _meta(soup, "property", "og:image") is not None
        has_og_url = _meta(soup, "property", "og:url") is not None
        has_twitter_card = (
            _meta(soup, "name", "twitter:card") is not None
            or _meta(soup, "property", "twitter:card") is not None
        )

        # --- Headings ---
        h1_tags = soup.find_all("h1")
        h1_text = tuple(
            text for text in (collapse_whitespace(h.get_text(" ")) for h in h1_tags) if text
        )

        # --- Images ---
        images = soup.find_all("img")
        with_alt = sum(1 for img in images if str(img.get("alt") or "").strip())

        # --- Structured data ---
        schema_types = tuple(jsonld_types(soup))
        has_jsonld = soup.find("script", attrs={"type": re.compile(r"application/ld\+json", re.I)}) is not None

        # --- Links ---
        internal = external = 0
        for anchor in soup.find_all("a", href=True):
            kind = classify_href(str(anchor["href"]), domain)
            if kind == "internal":
                internal += 1
            elif kind == "external":
                external += 1

        html_tag = soup.find("html")
        lang_value = str(html_tag.get("lang") or "").strip() if html_tag else ""

        result = TechnicalSeo(
            has_title=bool(title),
            title_length=len(title),
            has_meta_description=bool(description),
            description_length=len(description),
            has_canonical=bool(canonical_url),
            canonical_url=canonical_url or None,
            has_viewport=_meta(soup, "name", "viewport") is not None,
            has_robots_meta=robots_tag is not None,
            robots_content=robots_content or None,
            has_og_title=has_og_title,
            has_og_description=has_og_description,
            has_og_image=has_og_image,
            has_og_url=has_og_url,
            has_open_graph=has_og_title or has_og_description or has_og_image or has_og_url,
            has_twitter_card=has_twitter_card,
            h1_count=len(h1_tags),
            h1_text=h1_text,
            h2_count=len(soup.find_all("h2")),
            h3_count=len(soup.find_all("h3")),
            has_proper_heading_hierarchy=len(h1_tags) == 1,
            total_images=len(images),
            images_with_alt=with_alt,
            images_without_alt=len(images) - with_alt,
            alt_coverage=alt_coverage(with_alt, len(images)),
            has_schema_markup=has_jsonld or has_microdata(soup),
            schema_types=schema_types,
            internal_links=internal,
            external_links=external,
            is_https=url.strip().lower().startswith("https://"),
            has_sitemap_link=bool(_SITEMAP_RE.search(html)),
            has_lang_attribute=bool(lang_value),
            lang_value=lang_value or None,
        )
        logger.debug(
            "Technical audit: h1=%d images=%d alt=%d%% schema=%s links=%d/%d",
            result.h1_count, result.total_images, result.alt_coverage,
            list(schema_types), internal, external,
        )
        return result
