"""Content readability analysis for the visible text of a page.

Produces word/sentence/paragraph statistics, a Flesch reading-ease score
with a three-level band, keyword density and long/short sentence counts.
"""

import logging
import re
from collections import Counter

from bs4 import BeautifulSoup

from profile_engine.models import ContentMetrics, KeywordDensity, ReadingLevel
from profile_engine.utils.text_processing import (
    calculate_reading_time,
    count_syllables,
    flesch_reading_ease,
    split_sentences,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SYLLABLE_SAMPLE_SIZE = 500
LONG_SENTENCE_WORDS = 25
SHORT_SENTENCE_WORDS = 10
THIN_CONTENT_WORDS = 300
MAX_KEYWORDS = 15
MIN_KEYWORD_OCCURRENCES = 2

STOP_WORDS: frozenset[str] = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "any", "can",
    "had", "her", "was", "one", "our", "out", "has", "have", "been", "were",
    "they", "this", "that", "with", "from", "your", "will", "what", "when",
    "where", "which", "while", "who", "whom", "why", "how", "their", "there",
    "these", "those", "them", "then", "than", "into", "onto", "upon", "about",
    "above", "below", "after", "before", "again", "further", "once", "here",
    "more", "most", "other", "some", "such", "only", "own", "same", "very",
    "just", "also", "each", "both", "few", "many", "much", "over", "under",
    "would", "could", "should", "shall", "might", "must", "does", "doing",
    "done", "being", "because", "until", "through", "during", "between",
    "against", "without", "within", "along", "among", "across", "every",
    "even", "still", "yet", "ever", "never", "always", "often", "really",
    "like", "make", "made", "get", "got", "its", "his", "him", "she", "hers",
    "ours", "yours", "theirs", "myself", "yourself", "itself", "ourselves",
    "themselves", "off", "per", "via", "let", "may", "use", "used", "using",
    "page", "click", "home", "menu", "read", "view", "learn",
})

# (min score, level, min score for first grade, first grade, second grade)
_READING_BANDS: tuple[tuple[float, ReadingLevel, float, str, str], ...] = (
    (60.0, ReadingLevel.EASY, 80.0, "5th Grade", "6th-7th Grade"),
    (30.0, ReadingLevel.STANDARD, 50.0, "8th-9th Grade", "10th-12th Grade"),
    (0.0, ReadingLevel.DIFFICULT, 0.0, "College Level", "College Level"),
)

_NON_LETTER_RE = re.compile(r"[^a-z]")


def reading_band(score: float) -> tuple[ReadingLevel, str]:
    """Map a reading-ease score to its level and grade label."""
    for floor, level, grade_floor, upper_grade, lower_grade in _READING_BANDS:
        if score >= floor:
            return level, upper_grade if score >= grade_floor else lower_grade
    return ReadingLevel.DIFFICULT, "College Level"


def keyword_density(words: list[str], word_count: int) -> tuple[KeywordDensity, ...]:
    """Top recurring content terms with their share of the total word count."""
    if word_count <= 0:
        return ()
    counter: Counter[str] = Counter()
    for word in words:
        term = _NON_LETTER_RE.sub("", word.lower())
        if len(term) <= 3 or term in STOP_WORDS:
            continue
        counter[term] += 1
    ranked = [(t, c) for t, c in counter.most_common() if c >= MIN_KEYWORD_OCCURRENCES]
    return tuple(
        KeywordDensity(keyword=term, count=count, percentage=round(count / word_count * 100, 2))
        for term, count in ranked[:MAX_KEYWORDS]
    )


class ContentReadabilityAnalyzer:
    """Compute :class:`ContentMetrics` for a page."""

    def analyze(self, text: str, soup: BeautifulSoup) -> ContentMetrics:
        """Analyse the plain *text* of a page.

        Args:
            text: Normalised visible text (navigation/footer removed).
            soup: Parsed original markup; paragraphs are counted from its
                ``<p>`` blocks rather than from the text.

        Returns:
            Populated :class:`ContentMetrics`. Empty text degrades to zero
            counts with a sentence count of 1.
        """
        words = text.split()
        word_count = len(words)

        sentences = split_sentences(text)
        sentence_count = max(1, len(sentences))
        sentence_lengths = [len(s.split()) for s in sentences]

        paragraph_count = len(soup.find_all("p"))

        sample = words[:SYLLABLE_SAMPLE_SIZE]
        syllables_per_word = (
            sum(count_syllables(w) for w in sample) / len(sample) if sample else 0.0
        )
        score = round(flesch_reading_ease(word_count, sentence_count, syllables_per_word), 1)
        level, grade = reading_band(score)

        metrics = ContentMetrics(
            word_count=word_count,
            sentence_count=sentence_count,
            paragraph_count=paragraph_count,
            avg_words_per_sentence=round(word_count / sentence_count, 1),
            avg_sentences_per_paragraph=round(sentence_count / max(paragraph_count, 1), 1),
            flesch_kincaid_score=score,
            reading_level=level,
            reading_grade=grade,
            keyword_density=keyword_density(words, word_count),
            long_sentences=sum(1 for n in sentence_lengths if n > LONG_SENTENCE_WORDS),
            short_sentences=sum(1 for n in sentence_lengths if n < SHORT_SENTENCE_WORDS),
            thin_content=word_count < THIN_CONTENT_WORDS,
            reading_time_minutes=calculate_reading_time(word_count),
        )
        logger.debug(
            "Content: %d words, %d sentences, %d paragraphs, reading ease %.1f (%s)",
            word_count, sentence_count, paragraph_count, score, level.value,
        )
        return metrics
