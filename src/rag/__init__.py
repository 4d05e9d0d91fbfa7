# src/rag/__init__.py — v1
