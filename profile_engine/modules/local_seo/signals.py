"""Local SEO signal detection for a single page.

Each signal is found through a prioritised list of pattern matches:
structured data first, then links, then free-text heuristics.
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from profile_engine.models import LocalSeoSignals
from profile_engine.utils.structured_data import jsonld_types, microdata_types, structured_value

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

LOCAL_SCHEMA_TYPES: tuple[str, ...] = (
    "LocalBusiness", "Restaurant", "Store", "MedicalBusiness", "Dentist",
    "Physician", "LegalService", "RealEstateAgent", "AutomotiveBusiness",
)

LOCAL_KEYWORDS: tuple[str, ...] = (
    "near", "local", "area", "city", "town", "region", "dental", "dentist", "clinic",
)

_SCORE_WEIGHTS: dict[str, int] = {
    "has_local_schema": 20,
    "has_phone": 15,
    "has_address": 15,
    "has_google_maps_embed": 15,
    "has_business_hours": 10,
    "has_reviews_section": 10,
    "has_gmb_link": 10,
    "local_keywords": 5,
}

_TEL_LINK_RE = re.compile(r"""href=["']?tel:([^"'\s>]+)""", re.I)
_PHONE_RE = re.compile(r"(?:\+?1[\s.\-]?)?\(?\d{3}\)?[\s.\-]?\d{3}[\s.\-]?\d{4}\b")
_STREET_RE = re.compile(
    r"\b\d{1,5}\s+(?:[A-Z0-9][\w.'\-]*\s+){1,4}"
    r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Drive|Dr|Lane|Ln|Way|"
    r"Court|Ct|Place|Pl|Circle|Cir|Parkway|Pkwy|Highway|Hwy|Suite)\b\.?"
    r"(?:[\s,]+(?:Suite|Ste|Unit|#)\s*\w+)?"
    r"(?:,\s*[A-Z][\w\s]{1,30},\s*[A-Z]{2}\s*\d{5}(?:-\d{4})?)?",
)
_DAY = r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*\.?"
_TIME = r"\d{1,2}(?::\d{2})?\s*(?:[ap]\.?m\.?)"
_HOURS_RE = re.compile(
    rf"{_DAY}(?:\s*(?:-|–|to|through|&|,)\s*{_DAY})*\s*:?\s*{_TIME}\s*(?:-|–|to)\s*{_TIME}",
    re.I,
)
_MAPS_IFRAME_RE = re.compile(r"google\.[a-z.]+/maps|maps\.google\.", re.I)
_MAPS_API_RE = re.compile(r"google\.com/maps/embed|maps\.googleapis\.com", re.I)
_SERVICE_AREA_RE = re.compile(
    r"\b(?:service\s+areas?|areas?\s+(?:we\s+)?serv(?:e|ed|ing))\b\s*:?\s*([^.!?]{0,150})",
    re.I,
)
_REVIEWS_RE = re.compile(r"\b(?:reviews?|testimonials?|ratings?|rated)\b", re.I)
_STAR_GLYPHS = ("★", "⭐", "☆")
_GMB_LINK_RE = re.compile(
    r"""https?://(?:www\.)?(?:google\.[a-z.]+/maps/place|maps\.app\.goo\.gl|g\.page|"""
    r"""goo\.gl/maps|business\.google\.com|maps\.google\.[a-z.]+/\?cid=)[^"'\s<>]*""",
    re.I,
)


def _first(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return " ".join(match.group(0).split()) if match else None


class LocalSEOSignalDetector:
    """Detect NAP, hours, schema, maps and review signals on a page.

    ``nap_consistent`` is an optimistic heuristic: it only reports that an
    address and a phone number were each found somewhere on the page, not
    that they describe the same business listing.
    """

    def detect(self, soup: BeautifulSoup, html: str, text: str) -> LocalSeoSignals:
        """Detect local signals.

        Args:
            soup: Parsed page.
            html: Raw markup.
            text: Plain-text rendering of the full page (footer included,
                since that is where NAP details usually live).
        """
        address = structured_value(html, soup, "streetAddress") or _first(_STREET_RE, text)
        phone = self._find_phone(soup, html, text)
        hours = self._find_hours(soup, html, text)
        schema_type = self._find_local_schema(soup)

        area_match = _SERVICE_AREA_RE.search(text)
        service_area_text = None
        if area_match:
            service_area_text = area_match.group(1).strip(" :,-") or None

        has_reviews = (
            bool(_REVIEWS_RE.search(text))
            or any(glyph in text for glyph in _STAR_GLYPHS)
            or '"aggregateRating"' in html
        )
        gmb_url = _first(_GMB_LINK_RE, html)

        signals = {
            "has_local_schema": schema_type is not None,
            "has_phone": phone is not None,
            "has_address": address is not None,
            "has_google_maps_embed": self._has_maps_embed(soup, html),
            "has_business_hours": hours is not None,
            "has_reviews_section": has_reviews,
            "has_gmb_link": gmb_url is not None,
        }
        result = LocalSeoSignals(
            address_text=address,
            phone_text=phone,
            hours_text=hours,
            local_schema_type=schema_type,
            has_service_area=area_match is not None,
            service_area_text=service_area_text,
            nap_consistent=signals["has_address"] and signals["has_phone"],
            gmb_url=gmb_url,
            **signals,
        )
        logger.debug("Local signals: %s", {k: v for k, v in signals.items() if v})
        return result

    @staticmethod
    def local_keywords(*texts: Optional[str]) -> tuple[str, ...]:
        """Local-intent terms present in the given texts (title, description, summary)."""
        combined = " ".join(t for t in texts if t).lower()
        return tuple(term for term in LOCAL_KEYWORDS if term in combined)

    @staticmethod
    def overall_score(signals: LocalSeoSignals) -> int:
        """Additive 0-100 local SEO readiness score."""
        score = 0
        for name, weight in _SCORE_WEIGHTS.items():
            if getattr(signals, name):
                score += weight
        return min(100, score)

    # ------------------------------------------------------------------
    # Individual signals
    # ------------------------------------------------------------------

    @staticmethod
    def _find_phone(soup: BeautifulSoup, html: str, text: str) -> Optional[str]:
        tel = _TEL_LINK_RE.search(html)
        if tel:
            return tel.group(1).strip()
        structured = structured_value(html, soup, "telephone")
        if structured:
            return structured
        return _first(_PHONE_RE, text)

    @staticmethod
    def _find_hours(soup: BeautifulSoup, html: str, text: str) -> Optional[str]:
        structured = structured_value(html, soup, "openingHours")
        if structured:
            return structured
        return _first(_HOURS_RE, text)

    @staticmethod
    def _has_maps_embed(soup: BeautifulSoup, html: str) -> bool:
        for iframe in soup.find_all("iframe"):
            if _MAPS_IFRAME_RE.search(str(iframe.get("src") or "")):
                return True
        return bool(_MAPS_API_RE.search(html))

    @staticmethod
    def _find_local_schema(soup: BeautifulSoup) -> Optional[str]:
        wanted = {t.lower(): t for t in LOCAL_SCHEMA_TYPES}
        for found in jsonld_types(soup) + microdata_types(soup):
            canonical = wanted.get(str(found).lower())
            if canonical:
                return canonical
        return None
