"""Content analysis: readability, category classification and summaries."""

from profile_engine.modules.content.classifier import CategoryClassifier
from profile_engine.modules.content.readability import ContentReadabilityAnalyzer
from profile_engine.modules.content.summary import SummaryGenerator

__all__ = ["CategoryClassifier", "ContentReadabilityAnalyzer", "SummaryGenerator"]
