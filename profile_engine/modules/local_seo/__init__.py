"""Local SEO signal detection.

Finds NAP details, business hours, local-business schema, map embeds,
service areas, reviews and business-listing links on a single page.
"""

from profile_engine.modules.local_seo.signals import LocalSEOSignalDetector

__all__ = ["LocalSEOSignalDetector"]
