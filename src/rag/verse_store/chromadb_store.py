# src/rag/verse_store/chromadb_store.py — v1
"""ChromaDB verse store.

Uses the chromadb SDK for local or remote storage. The collection is created
in cosine space; verse identity fields are stored as metadata so they can be
used in ``where`` filters.
Requires: pip install chromadb.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from scripturai.core.models import VerseRecord, make_verse_id
from scripturai.rag.verse_store.base_verse_store import BaseVerseStore

logger = logging.getLogger(__name__)

_INCLUDE = ["documents", "metadatas", "embeddings"]


class ChromaDBVerseStore(BaseVerseStore):
    """Verse store backed by a ChromaDB collection."""

    def __init__(
        self,
        collection: str = "bible_verses",
        persist_path: str | Path | None = None,
        host: str | None = None,
        port: int = 8000,
    ) -> None:
        try:
            import chromadb
        except ImportError as e:
            raise ImportError(
                "chromadb package required: pip install chromadb"
            ) from e

        if host:
            self._client = chromadb.HttpClient(host=host, port=port)
        elif persist_path:
            self._client = chromadb.PersistentClient(path=str(Path(persist_path).expanduser()))
        else:
            self._client = chromadb.Client()

        self._col = self._client.get_or_create_collection(
            collection,
            metadata={"hnsw:space": "cosine"},
            embedding_function=None,
        )

    async def get_verse(self, document_id: str, book: str) -> VerseRecord | None:
        result = self._col.get(ids=[document_id], include=_INCLUDE)
        records = _to_records(result)
        if not records or records[0].collection != book:
            return None
        return records[0]

    async def get_chapter(
        self, version: str, book: str, chapter: int
    ) -> list[VerseRecord]:
        result = self._col.get(
            where={"$and": [
                {"version": {"$eq": version}},
                {"collection": {"$eq": book}},
                {"chapter": {"$eq": chapter}},
            ]},
            include=_INCLUDE,
        )
        return sorted(_to_records(result), key=lambda r: r.verse)

    async def find_nearest(
        self,
        version: str,
        exclude_id: str,
        vector: list[float],
        limit: int,
        exclude_chapter: tuple[str, int] | None = None,
    ) -> list[VerseRecord]:
        if not vector or limit <= 0:
            return []

        clauses: list[dict[str, Any]] = [
            {"version": {"$eq": version}},
            {"doc_id": {"$ne": exclude_id}},
        ]
        if exclude_chapter is not None:
            book, chapter = exclude_chapter
            clauses.append({"$or": [
                {"book": {"$ne": book}},
                {"chapter": {"$ne": chapter}},
            ]})

        results = self._col.query(
            query_embeddings=[vector],
            n_results=limit,
            where={"$and": clauses},
            include=_INCLUDE,
        )

        records: list[VerseRecord] = []
        if results["ids"] and results["ids"][0]:
            row = {
                "ids": results["ids"][0],
                "documents": results["documents"][0] if results.get("documents") else None,
                "metadatas": results["metadatas"][0] if results.get("metadatas") else None,
                "embeddings": results["embeddings"][0] if results.get("embeddings") is not None else None,
            }
            records = _to_records(row)
        return records

    async def get_verse_versions(
        self, book: str, chapter: int, verse: int, exclude_version: str
    ) -> list[VerseRecord]:
        result = self._col.get(
            where={"$and": [
                {"verse_id": {"$eq": make_verse_id(book, chapter, verse)}},
                {"version": {"$ne": exclude_version}},
            ]},
            include=_INCLUDE,
        )
        return _to_records(result)

    async def upsert_verse(self, record: VerseRecord) -> None:
        if not record.has_vector:
            raise ValueError(f"Verse {record.id} has no vector; embed before storing")
        self._col.upsert(
            ids=[record.id],
            embeddings=[record.vector],
            documents=[record.text],
            metadatas=[{
                "doc_id": record.id,
                "verse_id": record.verse_id,
                "version": record.version,
                "collection": record.collection,
                "book": record.book,
                "chapter": record.chapter,
                "verse": record.verse,
            }],
        )

    @property
    def provider_name(self) -> str:
        return "chromadb"


def _to_records(result: dict[str, Any]) -> list[VerseRecord]:
    """Convert a chroma get/query row set into VerseRecords."""
    ids = result.get("ids") or []
    documents = result.get("documents")
    metadatas = result.get("metadatas")
    embeddings = result.get("embeddings")

    records: list[VerseRecord] = []
    for i, doc_id in enumerate(ids):
        meta = metadatas[i] if metadatas is not None else {}
        vector = embeddings[i] if embeddings is not None else []
        records.append(VerseRecord(
            id=doc_id,
            verse_id=meta.get("verse_id", ""),
            version=meta.get("version", ""),
            collection=meta.get("collection", meta.get("book", "")),
            book=meta.get("book", ""),
            chapter=int(meta.get("chapter", 0)),
            verse=int(meta.get("verse", 0)),
            text=documents[i] if documents is not None else "",
            vector=[float(x) for x in vector] if vector is not None else [],
        ))
    return records
