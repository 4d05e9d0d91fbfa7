# src/rag/verse_store/__init__.py — v1
