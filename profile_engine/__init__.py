"""Website profile engine: turns the HTML of one page into a structured profile."""

__version__ = "1.0.0"
