"""Text processing utilities shared by the page analysers."""

import math
import re

from bs4 import BeautifulSoup, Comment

_WS_RE = re.compile(r"\s+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_LETTERS_RE = re.compile(r"[^a-z]")

_ALWAYS_STRIPPED = ("script", "style", "noscript", "template")
_CHROME_TAGS = ("nav", "header", "footer")

MIN_SENTENCE_CHARS = 10


def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* with the lenient stdlib-backed tree builder."""
    return BeautifulSoup(html or "", "html.parser")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text.replace("\xa0", " ")).strip()


def normalize_text(html: str, strip_chrome: bool = False) -> str:
    """Render *html* as plain visible text.

    Script/style blocks and comments are always dropped. With
    *strip_chrome* the navigation, header and footer blocks are dropped
    too, which is what the readability analysis wants.

    Args:
        html: Raw HTML markup (may be malformed or empty).
        strip_chrome: Also remove ``<nav>``, ``<header>`` and ``<footer>``.

    Returns:
        Whitespace-collapsed text with entities decoded.
    """
    soup = parse_html(html)
    removed = _ALWAYS_STRIPPED + (_CHROME_TAGS if strip_chrome else ())
    for tag in soup(list(removed)):
        tag.decompose()
    for comment in soup.find_all(string=lambda t: isinstance(t, Comment)):
        comment.extract()
    return collapse_whitespace(soup.get_text(separator=" "))


def count_words(text: str) -> int:
    """Count whitespace-separated words in text.

    Args:
        text: Input text.

    Returns:
        Word count.
    """
    return len(text.split())


def split_sentences(text: str) -> list[str]:
    """Split text on terminal punctuation, dropping fragments under 10 chars."""
    parts = (s.strip() for s in _SENTENCE_SPLIT_RE.split(text))
    return [s for s in parts if len(s) >= MIN_SENTENCE_CHARS]


def count_syllables(word: str) -> int:
    """Rough syllable count for English words."""
    word = _NON_LETTERS_RE.sub("", word.lower())
    if len(word) <= 3:
        return 1
    word = re.sub(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$", "", word)
    word = re.sub(r"^y", "", word)
    vowel_groups = re.findall(r"[aeiouy]+", word)
    return max(1, len(vowel_groups))


def flesch_reading_ease(
    num_words: int, num_sentences: int, syllables_per_word: float
) -> float:
    """Flesch Reading Ease clamped to 0-100 (higher = easier)."""
    if num_words <= 0:
        return 0.0
    asl = num_words / max(num_sentences, 1)
    score = 206.835 - 1.015 * asl - 84.6 * syllables_per_word
    return max(0.0, min(100.0, score))


def calculate_reading_time(word_count: int, wpm: int = 238) -> int:
    """Estimate reading time in minutes (0 for an empty page, else at least 1)."""
    if word_count <= 0:
        return 0
    return max(1, math.ceil(word_count / wpm))
