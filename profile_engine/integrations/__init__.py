"""External collaborators of the profile engine."""

from profile_engine.integrations.page_fetcher import FetchResult, PageFetcher

__all__ = ["FetchResult", "PageFetcher"]
