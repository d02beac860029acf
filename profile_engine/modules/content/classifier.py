"""Keyword-lexicon business category classifier."""

import logging
from typing import Optional

from profile_engine.models import Category

logger = logging.getLogger(__name__)

CLASSIFIER_TEXT_LIMIT = 10_000

# Evaluation order matters: on a tie the earlier category wins.
CATEGORY_LEXICON: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.ECOMMERCE, (
        "shop", "store", "cart", "buy", "product", "checkout", "price",
        "order", "shipping", "catalog", "marketplace",
    )),
    (Category.SAAS, (
        "software", "platform", "dashboard", "api", "integration", "cloud",
        "automation", "analytics", "subscription", "trial", "demo",
    )),
    (Category.LOCAL_BUSINESS, (
        "location", "directions", "hours", "appointment", "visit us", "local",
        "near me", "store locator",
    )),
    (Category.BLOG_MEDIA, (
        "blog", "article", "news", "story", "editorial", "magazine", "publish",
        "author", "read more",
    )),
    (Category.PROFESSIONAL_SERVICES, (
        "services", "consulting", "agency", "firm", "expertise", "solutions",
        "clients", "portfolio", "case study",
    )),
    (Category.HEALTHCARE, (
        "health", "medical", "doctor", "patient", "clinic", "hospital", "care",
        "treatment", "wellness", "therapy",
    )),
    (Category.FINANCE, (
        "finance", "banking", "investment", "insurance", "loan", "mortgage",
        "credit", "wealth", "trading",
    )),
    (Category.EDUCATION, (
        "learn", "course", "training", "education", "school", "university",
        "tutorial", "certificate", "student",
    )),
    (Category.REAL_ESTATE, (
        "property", "real estate", "homes", "listing", "rent", "buy",
        "mortgage", "agent", "realtor",
    )),
    (Category.HOSPITALITY, (
        "hotel", "restaurant", "booking", "reservation", "travel", "vacation",
        "rooms", "dining", "tourism",
    )),
    (Category.NONPROFIT, (
        "donate", "nonprofit", "charity", "mission", "volunteer", "foundation",
        "cause", "support",
    )),
    (Category.TECHNOLOGY, (
        "tech", "digital", "innovation", "startup", "developer", "engineering",
        "ai", "machine learning",
    )),
)


class CategoryClassifier:
    """Assign one :class:`Category` by counting lexicon hits."""

    def score(self, text: str) -> dict[Category, int]:
        """Number of distinct lexicon terms of each category found in *text*."""
        lowered = text.lower()
        return {
            category: sum(1 for term in terms if term in lowered)
            for category, terms in CATEGORY_LEXICON
        }

    def classify(
        self,
        body_text: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Category:
        """Classify a page from its body text, title and description.

        Only the first ``CLASSIFIER_TEXT_LIMIT`` characters of the body are
        considered. The strictly highest score wins; ``other`` is returned
        when nothing matches.
        """
        combined = " ".join(
            (body_text[:CLASSIFIER_TEXT_LIMIT], title or "", description or "")
        )
        best, best_score = Category.OTHER, 0
        for category, value in self.score(combined).items():
            if value > best_score:
                best, best_score = category, value
        logger.debug("Detected category %s (score=%d)", best.value, best_score)
        return best
