"""Helpers for schema.org structured data embedded in a page.

JSON-LD blocks are parsed individually; a block that fails to parse is
skipped without affecting the others.
"""

import json
import logging
import re
from typing import Any, Iterator, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_JSONLD_TYPE_RE = re.compile(r"application/ld\+json", re.I)
_SCHEMA_ITEMTYPE_RE = re.compile(r"^https?://schema\.org/", re.I)


def iter_jsonld(soup: BeautifulSoup) -> Iterator[Any]:
    """Yield the parsed payload of every valid JSON-LD ``<script>`` block."""
    for script in soup.find_all("script", attrs={"type": _JSONLD_TYPE_RE}):
        raw = script.string if script.string is not None else script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            yield json.loads(raw)
        except (json.JSONDecodeError, ValueError) as exc:
            logger.debug("Skipping invalid JSON-LD block: %s", exc)


def _types_of(node: Any) -> list[str]:
    if isinstance(node, list):
        found: list[str] = []
        for item in node:
            found.extend(_types_of(item))
        return found
    if not isinstance(node, dict):
        return []
    found = []
    sd_type = node.get("@type")
    if isinstance(sd_type, str) and sd_type:
        found.append(sd_type)
    elif isinstance(sd_type, list):
        found.extend(str(t) for t in sd_type if t)
    if "@graph" in node:
        found.extend(_types_of(node["@graph"]))
    return found


def jsonld_types(soup: BeautifulSoup) -> list[str]:
    """Every ``@type`` value across all JSON-LD blocks, in document order."""
    types: list[str] = []
    for payload in iter_jsonld(soup):
        types.extend(_types_of(payload))
    return types


def microdata_types(soup: BeautifulSoup) -> list[str]:
    """Type names from inline ``itemtype="https://schema.org/..."`` attributes."""
    types: list[str] = []
    for elem in soup.find_all(attrs={"itemtype": _SCHEMA_ITEMTYPE_RE}):
        for itemtype in str(elem.get("itemtype", "")).split():
            name = itemtype.rstrip("/").rsplit("/", 1)[-1]
            if name:
                types.append(name)
    return types


def has_microdata(soup: BeautifulSoup) -> bool:
    return soup.find(attrs={"itemtype": _SCHEMA_ITEMTYPE_RE}) is not None


def structured_value(html: str, soup: BeautifulSoup, key: str) -> Optional[str]:
    """Look up a schema.org property such as ``streetAddress``.

    A JSON-style ``"key": "value"`` pair anywhere in the markup wins (this
    also catches blocks that are not strictly valid JSON); a list value is
    joined with ``", "``. Otherwise an ``itemprop="key"`` element is used.
    """
    match = re.search(rf'"{re.escape(key)}"\s*:\s*"([^"]{{1,300}})"', html)
    if match and match.group(1).strip():
        return match.group(1).strip()

    match = re.search(rf'"{re.escape(key)}"\s*:\s*\[([^\]]{{1,500}})\]', html)
    if match:
        values = [v.strip() for v in re.findall(r'"([^"]+)"', match.group(1)) if v.strip()]
        if values:
            return ", ".join(values)

    elem = soup.find(attrs={"itemprop": key})
    if elem is not None:
        value = elem.get("content") or elem.get_text(" ", strip=True)
        if value and str(value).strip():
            return " ".join(str(value).split())
    return None
