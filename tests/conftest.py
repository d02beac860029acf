"""Shared pytest fixtures for the Website Profile Engine tests."""

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'profile_engine' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)


LOCAL_BUSINESS_URL = "https://brightsmile.example/"

LOCAL_BUSINESS_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>Bright Smile Dental</title>
  <meta name="description" content="Family dentist in Springfield offering cleanings, whitening and emergency care.">
  <meta property="og:title" content="Bright Smile Dental | Springfield Dentist">
  <meta property="og:image" content="/images/logo.png">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="twitter:card" content="summary">
  <link rel="canonical" href="https://brightsmile.example/">
  <link rel="shortcut icon" href="/static/favicon.png">
  <script type="application/ld+json">
  {"@context": "https://schema.org", "@type": "Dentist", "name": "Bright Smile Dental",
   "address": {"@type": "PostalAddress", "streetAddress": "123 Main Street", "addressLocality": "Springfield"},
   "telephone": "+1-555-123-4567",
   "openingHours": ["Mo-Fr 08:00-17:00", "Sa 09:00-13:00"]}
  </script>
  <script type="application/ld+json">{ this is not json }</script>
  <script>var tracking = "shop cart checkout";</script>
  <style>.hero { color: red; }</style>
</head>
<body>
  <header>
    <nav><a href="/">Home</a><a href="/services/cleaning">Cleaning</a><a href="/about">About</a></nav>
  </header>
  <main>
    <h1>Gentle dental care for the whole family</h1>
    <section>
      <h2>Our services</h2>
      <p>We provide gentle cleanings, whitening and emergency dental care for patients of every age.</p>
      <p>Our team has served the Springfield community for over twenty years with a smile.</p>
      <img src="/img/team.jpg" alt="Our dental team">
      <img src="/img/office.jpg">
    </section>
    <section>
      <h2>Reviews</h2>
      <p>Patients rate us &#9733;&#9733;&#9733;&#9733;&#9733; for friendly care and short waiting times at the clinic.</p>
      <a href="https://www.google.com/maps/place/Bright+Smile+Dental">See us on Google</a>
      <iframe src="https://www.google.com/maps/embed?pb=abc"></iframe>
    </section>
  </main>
  <footer>
    <p>Service area: Springfield, Shelbyville and Capital City.</p>
    <a href="mailto:hello@brightsmile.example">Email us</a>
    <a href="tel:+15551234567">Call (555) 123-4567</a>
    <a href="https://facebook.com/brightsmile">Facebook</a>
    <a href="https://www.instagram.com/brightsmile/">Instagram</a>
    <a href="#">Top</a>
    <a href="javascript:void(0)">Chat</a>
  </footer>
</body>
</html>
"""

PLAIN_HTML = (
    "<html><body><p>Lorem ipsum dolor sit amet consectetur adipiscing elit.</p></body></html>"
)


@pytest.fixture()
def local_business_html() -> str:
    return LOCAL_BUSINESS_HTML


@pytest.fixture()
def local_business_url() -> str:
    return LOCAL_BUSINESS_URL


@pytest.fixture()
def plain_html() -> str:
    return PLAIN_HTML


@pytest.fixture()
def profiler():
    from profile_engine.modules.site_profile import WebsiteProfiler
    return WebsiteProfiler()


@pytest.fixture()
def local_business_profile(profiler):
    return profiler.analyze(LOCAL_BUSINESS_URL, LOCAL_BUSINESS_HTML)


@pytest.fixture()
def soup_of():
    """Return a helper that parses HTML the way the engine does."""
    from profile_engine.utils.text_processing import parse_html
    return parse_html
