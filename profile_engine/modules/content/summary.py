"""Template-based narrative summary of a profiled page."""

import re
from typing import Optional

from profile_engine.models import Category
from profile_engine.utils.text_processing import collapse_whitespace

SUMMARY_TEXT_LIMIT = 3_000
MIN_SUMMARY_CHARS = 200
MAX_BODY_SENTENCES = 3

_SERVICE_MARKERS: tuple[str, ...] = (
    "we ", "our ", " provide", " offer", " specialize", " help",
    " service", " solution", " deliver",
)

CATEGORY_LABELS: dict[Category, str] = {
    Category.ECOMMERCE: "e-commerce",
    Category.SAAS: "SaaS and software",
    Category.LOCAL_BUSINESS: "local business",
    Category.BLOG_MEDIA: "blog and media",
    Category.PROFESSIONAL_SERVICES: "professional services",
    Category.HEALTHCARE: "healthcare",
    Category.FINANCE: "finance",
    Category.EDUCATION: "education",
    Category.REAL_ESTATE: "real estate",
    Category.HOSPITALITY: "hospitality",
    Category.NONPROFIT: "nonprofit",
    Category.TECHNOLOGY: "technology",
    Category.OTHER: "general business",
}

CATEGORY_CONTEXT: dict[Category, str] = {
    Category.ECOMMERCE: (
        "The website appears to offer products or services for online purchase, "
        "featuring e-commerce functionality for a seamless shopping experience."
    ),
    Category.SAAS: (
        "This platform provides software solutions designed to help businesses "
        "streamline their operations and improve productivity through digital tools."
    ),
    Category.LOCAL_BUSINESS: (
        "Serving the local community, this business offers in-person services and "
        "maintains a physical presence for customer convenience."
    ),
    Category.BLOG_MEDIA: (
        "The site publishes content and articles to inform, educate, or entertain "
        "its audience with regularly updated material."
    ),
    Category.PROFESSIONAL_SERVICES: (
        "This organization offers specialized expertise and consulting services to "
        "help clients achieve their goals."
    ),
    Category.HEALTHCARE: (
        "Focused on health and wellness, this provider offers medical services, "
        "treatments, or health-related information."
    ),
    Category.FINANCE: (
        "Operating in the financial sector, this entity provides services related to "
        "money management, investments, or financial planning."
    ),
    Category.EDUCATION: (
        "Dedicated to learning and development, this platform offers educational "
        "resources, courses, or training programs."
    ),
    Category.REAL_ESTATE: (
        "Specializing in property, this business helps clients buy, sell, rent, or "
        "manage real estate assets."
    ),
    Category.HOSPITALITY: (
        "In the hospitality industry, this business provides accommodation, dining, "
        "or travel-related services for guests."
    ),
    Category.NONPROFIT: (
        "As a mission-driven organization, this nonprofit works to create positive "
        "impact in its community or cause area."
    ),
    Category.TECHNOLOGY: (
        "At the forefront of innovation, this technology company develops digital "
        "solutions and technical products."
    ),
    Category.OTHER: (
        "This website serves its audience with information, products, or services "
        "tailored to their needs."
    ),
}


def _closing_sentence(label: str) -> str:
    return (
        "Visitors can explore the website to learn more about the offerings, get in "
        f"touch with the team, and discover how this {label} organization can meet "
        "their needs."
    )


class SummaryGenerator:
    """Compose a deterministic paragraph describing the page."""

    def generate(
        self,
        title: Optional[str],
        description: Optional[str],
        category: Category,
        body_text: str,
    ) -> str:
        label = CATEGORY_LABELS.get(category, "business")
        parts: list[str] = []

        if title:
            parts.append(f"{title} is a {label} website.")
        else:
            parts.append(f"This is a {label} website.")

        if description:
            parts.append(description)

        for sentence in self.service_sentences(body_text):
            if not any(sentence[:30] in part for part in parts):
                parts.append(sentence + ".")

        parts.append(CATEGORY_CONTEXT.get(category, CATEGORY_CONTEXT[Category.OTHER]))

        summary = collapse_whitespace(" ".join(parts))
        if len(summary) < MIN_SUMMARY_CHARS:
            summary += " " + _closing_sentence(label)
        return summary

    @staticmethod
    def service_sentences(body_text: str) -> list[str]:
        """Up to three body sentences that describe what the business does."""
        clean = collapse_whitespace(body_text)[:SUMMARY_TEXT_LIMIT]
        picked: list[str] = []
        for raw in re.split(r"[.!?]+", clean):
            sentence = raw.strip()
            if not 30 < len(sentence) < 200:
                continue
            lowered = sentence.lower()
            if any(marker in lowered for marker in _SERVICE_MARKERS):
                picked.append(sentence)
            if len(picked) >= MAX_BODY_SENTENCES:
                break
        return picked
