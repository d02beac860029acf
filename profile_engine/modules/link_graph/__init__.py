"""Internal linking analysis module."""

from profile_engine.modules.link_graph.analyzer import LinkGraphAnalyzer

__all__ = ["LinkGraphAnalyzer"]
