"""URL helpers shared by the metadata, technical and link analysers."""

import re
from typing import Optional
from urllib.parse import urljoin, urlparse

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.I)
_NON_WEB_SCHEMES = ("mailto:", "tel:", "sms:", "data:", "javascript:")


def normalise_input_url(url: str) -> str:
    """Prepend ``https://`` to a bare domain and strip surrounding space.

    Examples:
        >>> normalise_input_url(" example.com ")
        'https://example.com'
        >>> normalise_input_url("http://example.com/a")
        'http://example.com/a'
    """
    url = (url or "").strip()
    if url and not url.lower().startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


def extract_domain(url: str) -> str:
    """Extract the domain from a URL.

    Args:
        url: Full URL string.

    Returns:
        Domain name without protocol or path, or an empty string when
        the URL cannot be parsed.
    """
    try:
        parsed = urlparse(url if "://" in url else f"https://{url}")
        return (parsed.hostname or "").lower()
    except ValueError:
        return ""


def site_domain(url: str) -> str:
    """Domain used to recognise same-site links (``www.`` prefix removed)."""
    domain = extract_domain(url)
    return domain[4:] if domain.startswith("www.") else domain


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` for *url* (empty for unusable input)."""
    try:
        parsed = urlparse(normalise_input_url(url))
    except ValueError:
        return ""
    if not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def resolve_url(origin: str, href: Optional[str]) -> Optional[str]:
    """Resolve a possibly relative *href* against the page *origin*."""
    if not href:
        return None
    href = href.strip()
    if not href:
        return None
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("//"):
        return f"https:{href}"
    if not origin:
        return href
    try:
        return urljoin(origin.rstrip("/") + "/", href)
    except ValueError:
        return href


def is_placeholder_href(href: str) -> bool:
    """True for hrefs that go nowhere: empty, ``#`` or ``javascript:`` voids."""
    href = href.strip()
    return href in ("", "#") or href.lower().startswith("javascript:")


def classify_href(href: str, domain: str) -> Optional[str]:
    """Classify *href* as ``"internal"``, ``"external"`` or ``None``.

    A link is external only when it carries a scheme and does not mention
    the page's own *domain*. Root-relative, protocol-relative, schemeless
    and same-site absolute links are internal.
    Placeholders and non-web schemes (mailto:, tel:, ...) are neither.
    """
    href = href.strip()
    if is_placeholder_href(href):
        return None
    lowered = href.lower()
    if lowered.startswith(_NON_WEB_SCHEMES):
        return None
    if _SCHEME_RE.match(lowered):
        if domain and domain.lower() in lowered:
            return "internal"
        return "external"
    return "internal"


def path_depth(href: str, origin: str) -> int:
    """Number of non-empty path segments of *href* relative to *origin*."""
    absolute = resolve_url(origin, href) or ""
    try:
        path = urlparse(absolute).path
    except ValueError:
        return 0
    return len([seg for seg in path.split("/") if seg])


def check_page_url(url: str) -> tuple[bool, str]:
    """Check that *url* (bare domains allowed) can be fetched over http(s).

    Returns:
        Tuple of (is_valid, error_message). error_message is empty on success.
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "URL is empty."
    if "://" in url and not url.strip().lower().startswith(("http://", "https://")):
        return False, f"Unsupported scheme in {url!r}. Must be http or https."
    try:
        parsed = urlparse(normalise_input_url(url))
        hostname = parsed.hostname or ""
    except ValueError as exc:
        return False, f"URL parse error: {exc}"
    if parsed.scheme not in ("http", "https"):
        return False, f"Unsupported scheme {parsed.scheme!r}."
    if not hostname or len(hostname) > 253 or " " in hostname:
        return False, f"Invalid host in {url!r}."
    return True, ""
