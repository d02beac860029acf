"""Website profile assembly: metadata extraction and the profiler facade."""

from profile_engine.modules.site_profile.metadata import MetadataExtractor
from profile_engine.modules.site_profile.profiler import FAILED_SUMMARY, WebsiteProfiler

__all__ = ["FAILED_SUMMARY", "MetadataExtractor", "WebsiteProfiler"]
