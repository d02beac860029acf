"""Page metadata extraction: title, description, icons, social and contact links."""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from profile_engine.models import ContactInfo, PageMetadata, SocialLinks
from profile_engine.utils.helpers import resolve_url
from profile_engine.utils.structured_data import structured_value
from profile_engine.utils.text_processing import collapse_whitespace

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_SOCIAL_PATTERNS: tuple[tuple[str, re.Pattern], ...] = tuple(
    (platform, re.compile(
        r"""(?:href|content)=["']?(https?://(?:www\.)?""" + hosts + r"""/[^"'\s>]+)""",
        re.I,
    ))
    for platform, hosts in (
        ("facebook", r"facebook\.com"),
        ("twitter", r"(?:twitter\.com|x\.com)"),
        ("linkedin", r"linkedin\.com"),
        ("instagram", r"instagram\.com"),
        ("youtube", r"youtube\.com"),
        ("tiktok", r"tiktok\.com"),
    )
)

_EMAIL_RE = re.compile(r"mailto:([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", re.I)
_TEL_RE = re.compile(r"tel:([\d\s\-+().]+)", re.I)
_ADDRESS_LABEL_RE = re.compile(r"\baddress\s*:\s*(.{5,160})", re.I)
_ADDRESS_STOP_RE = re.compile(
    r"\s+(?:phone|tel|telephone|call|email|e-mail|hours|open|fax)\b|[|•]", re.I
)


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    """Return the non-empty ``content`` of ``<meta {attr}="{value}">``."""
    tag = soup.find("meta", attrs={attr: re.compile(rf"^\s*{re.escape(value)}\s*$", re.I)})
    if tag is None:
        return None
    content = collapse_whitespace(str(tag.get("content") or ""))
    return content or None


def _title_text(soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find("title")
    if tag is None:
        return None
    return collapse_whitespace(tag.get_text()) or None


def _favicon_href(soup: BeautifulSoup) -> Optional[str]:
    for link in soup.find_all("link", href=True):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if "icon" in (r.lower() for r in rel):
            return link["href"]
    return None


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------

class MetadataExtractor:
    """Extract identity and contact metadata from a parsed page.

    Open Graph values win over their generic counterparts, and every
    relative URL is resolved against the page origin.
    """

    def extract(self, soup: BeautifulSoup, html: str, origin: str, text: str = "") -> PageMetadata:
        """Build a :class:`PageMetadata` for the page.

        Args:
            soup: Parsed page.
            html: Raw markup, used for pattern scans.
            origin: ``scheme://host`` of the page.
            text: Plain-text rendering, used for the inline address label.
        """
        title = _meta_content(soup, "property", "og:title") or _title_text(soup)
        description = (
            _meta_content(soup, "property", "og:description")
            or _meta_content(soup, "name", "description")
        )
        favicon = resolve_url(origin, _favicon_href(soup))
        if favicon is None and origin:
            favicon = f"{origin}/favicon.ico"
        logo = resolve_url(origin, _meta_content(soup, "property", "og:image"))
        logger.debug("Metadata: title=%r favicon=%s logo=%s", title, favicon, logo)

        return PageMetadata(
            title=title,
            description=description,
            favicon_url=favicon,
            logo_url=logo,
            social_links=self.extract_social_links(html),
            contact_info=self.extract_contact_info(soup, html, text),
        )

    @staticmethod
    def extract_social_links(html: str) -> SocialLinks:
        found: dict[str, Optional[str]] = {}
        for platform, pattern in _SOCIAL_PATTERNS:
            match = pattern.search(html)
            found[platform] = match.group(1) if match else None
        return SocialLinks(**found)

    @staticmethod
    def extract_contact_info(soup: BeautifulSoup, html: str, text: str = "") -> ContactInfo:
        email_match = _EMAIL_RE.search(html)
        phone_match = _TEL_RE.search(html)
        phone = phone_match.group(1).strip() if phone_match else None

        address = structured_value(html, soup, "streetAddress")
        if address is None:
            label = _ADDRESS_LABEL_RE.search(text)
            if label:
                candidate = _ADDRESS_STOP_RE.split(label.group(1), maxsplit=1)[0]
                address = candidate.strip(" ,;.") or None

        return ContactInfo(
            email=email_match.group(1) if email_match else None,
            phone=phone or None,
            address=address,
        )
