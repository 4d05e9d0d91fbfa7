# src/scraper/github_source.py — v1
"""Bible source files published in a GitHub repository.

Lists the repository's top-level files through the GitHub contents API and
parses book files in the aruljohn/Bible-kjv JSON layout::

    {"book": "Genesis",
     "chapters": [{"chapter": "1", "verses": [{"verse": "1", "text": "..."}]}]}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

import httpx

from scripturai.core.models import VerseRecord

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
USER_AGENT = "ScripturAI"


class SourceFormatError(ValueError):
    """A source book file does not match the expected JSON layout."""


@dataclass(frozen=True)
class SourceFile:
    """One downloadable file of the source repository."""

    name: str
    download_url: str

    @property
    def stem(self) -> str:
        return PurePosixPath(self.name).stem


class GitHubSource:
    """Read-only access to a repository's book files."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        api_url: str = GITHUB_API_URL,
        timeout_s: float = 30.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=httpx.Timeout(timeout_s),
            follow_redirects=True,
        )
        self._api_url = api_url.rstrip("/")

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> GitHubSource:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def list_files(
        self,
        repo: str,
        include_extensions: tuple[str, ...] = (".json",),
        exclude_files: tuple[str, ...] = (),
    ) -> list[SourceFile]:
        """Top-level files of ``repo`` ('owner/name') filtered by extension."""
        url = f"{self._api_url}/repos/{repo}/contents"
        response = await self._client.get(url, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()

        excluded = {name.lower() for name in exclude_files}
        extensions = tuple(ext.lower() for ext in include_extensions)
        files = []
        for entry in response.json():
            name = entry.get("name") or ""
            download_url = entry.get("download_url")
            if not name or not download_url:
                continue
            if name.lower() in excluded or not name.lower().endswith(extensions):
                continue
            files.append(SourceFile(name=name, download_url=download_url))

        logger.info("Found %d source files in %s", len(files), repo)
        return files

    async def load_book(self, url: str, filename: str, version: str = "KJV") -> list[VerseRecord]:
        """Download one book file and return its verses in order.

        Raises:
            httpx.HTTPError: Download failed.
            SourceFormatError: The JSON does not have the expected layout.
        """
        response = await self._client.get(url, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            raise SourceFormatError(f"{filename} is not valid JSON: {e}") from e
        verses = parse_book(data, filename, version)
        logger.info("Loaded %d verses from %s", len(verses), filename)
        return verses


def parse_book(data: Any, filename: str, version: str) -> list[VerseRecord]:
    """Convert a decoded book document into verse records."""
    if not isinstance(data, dict):
        raise SourceFormatError(f"{filename}: expected a JSON object")
    book = data.get("book")
    chapters = data.get("chapters")
    if not isinstance(book, str) or not book.strip():
        raise SourceFormatError(f"{filename}: missing book name")
    if not isinstance(chapters, list):
        raise SourceFormatError(f"{filename}: missing chapters list")

    verses: list[VerseRecord] = []
    for chapter in chapters:
        try:
            chapter_number = int(chapter["chapter"])
            for verse in chapter["verses"]:
                verses.append(VerseRecord.create(
                    book=book.strip(),
                    chapter=chapter_number,
                    verse=int(verse["verse"]),
                    version=version,
                    text=str(verse["text"]).strip(),
                ))
        except (KeyError, TypeError, ValueError) as e:
            raise SourceFormatError(f"{filename}: malformed chapter entry: {e}") from e
    return verses
