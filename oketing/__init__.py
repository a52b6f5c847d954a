"""Oketing: marketing content generation on top of Gemini."""

__version__ = "0.1.0"
