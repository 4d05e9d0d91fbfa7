# src/rag/embeddings/__init__.py — v1
