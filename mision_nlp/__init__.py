"""Gemini-backed text and sentiment analysis exercises."""

__version__ = "1.0.0"
