"""Internal/external link structure of a single page.

Walks every anchor, classifies its href, tallies anchor text and estimates
depth and orphan risk. Nothing is fetched: broken-link candidates are
placeholder hrefs, not verified HTTP failures.
"""

import logging
from collections import Counter

from bs4 import BeautifulSoup

from profile_engine.models import AnchorTextCount, LinkMetrics
from profile_engine.utils.helpers import (
    classify_href,
    is_placeholder_href,
    path_depth,
    resolve_url,
)
from profile_engine.utils.text_processing import collapse_whitespace

logger = logging.getLogger(__name__)

MAX_BROKEN_CANDIDATES = 5
MAX_ANCHOR_TEXTS = 10
MAX_ANCHOR_TEXT_CHARS = 100
ORPHAN_RISK_THRESHOLD = 5
_SECTION_TAGS = ["section", "article", "main"]


def link_equity_score(unique_internal: int, broken: int) -> int:
    """Rough 30-100 indicator of how well the page passes internal link equity."""
    return min(100, max(30, 50 + unique_internal * 3 - broken * 10))


class LinkGraphAnalyzer:
    """Compute :class:`LinkMetrics` for a parsed page."""

    def analyze(self, soup: BeautifulSoup, origin: str, domain: str) -> LinkMetrics:
        """Analyse every ``<a href>`` in *soup*.

        Args:
            soup: Parsed page.
            origin: ``scheme://host`` used to resolve relative links.
            domain: Site domain used for internal/external classification.
        """
        broken: list[str] = []
        internal: list[str] = []
        external: list[str] = []
        anchor_texts: Counter[str] = Counter()
        max_depth = 0

        for anchor in soup.find_all("a", href=True):
            href = str(anchor["href"]).strip()
            text = collapse_whitespace(anchor.get_text(" "))
            if text and len(text) < MAX_ANCHOR_TEXT_CHARS:
                anchor_texts[text] += 1

            if is_placeholder_href(href):
                if len(broken) < MAX_BROKEN_CANDIDATES:
                    broken.append(href)
                continue

            kind = classify_href(href, domain)
            absolute = (resolve_url(origin, href) or href).split("#", 1)[0]
            if kind == "internal":
                internal.append(absolute)
                max_depth = max(max_depth, path_depth(href, origin))
            elif kind == "external":
                external.append(absolute)

        unique_internal = len(set(internal))
        section_count = len(soup.find_all(_SECTION_TAGS))

        metrics = LinkMetrics(
            total_internal_links=len(internal),
            total_external_links=len(external),
            unique_internal_links=unique_internal,
            unique_external_links=len(set(external)),
            broken_link_candidates=tuple(broken),
            anchor_text_distribution=tuple(
                AnchorTextCount(text=text, count=count)
                for text, count in anchor_texts.most_common(MAX_ANCHOR_TEXTS)
            ),
            links_per_section=round(len(internal) / max(section_count, 1), 1),
            has_navigation_links=soup.select_one("nav a[href]") is not None,
            has_footer_links=soup.select_one("footer a[href]") is not None,
            max_link_depth=max_depth,
            orphan_risk=unique_internal < ORPHAN_RISK_THRESHOLD,
            link_equity_score=link_equity_score(unique_internal, len(broken)),
        )
        logger.debug(
            "Links: %d internal (%d unique), %d external, %d placeholder",
            len(internal), unique_internal, len(external), len(broken),
        )
        return metrics
