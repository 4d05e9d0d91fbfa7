# src/__init__.py — v1
"""ScripturAI: cached AI Bible content and a verse embedding scraper."""

from scripturai.version import __version__

__all__ = ["__version__"]
