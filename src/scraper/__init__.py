# src/scraper/__init__.py — v1
