# src/api/app.py — v1
"""HTTP routes for the Bible reader.

Text endpoints answer 200 with the content, or an empty body when
generation failed. Missing verses and chapters answer 404 with a short
message. JSON endpoints answer 500 on unexpected errors.
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from scripturai.api.container import AppContainer
from scripturai.core.result import NotFoundError, Outcome, OutcomeKind
from scripturai.generation.modes import parse_mode
from scripturai.logging.context import set_request_context
from scripturai.version import __version__

logger = logging.getLogger(__name__)

VERSE_NOT_FOUND = "Verse not found, please try again later."
CHAPTER_NOT_FOUND = "Chapter not found, please try again later."
SERVER_ERROR = "An internal server error occurred, please try again later."


def create_app(container: AppContainer) -> FastAPI:
    """Build the FastAPI app around an already wired container."""
    app = FastAPI(
        title="ScripturAI API",
        description="Bible chapters, AI explanations, summaries and translations",
        version=__version__,
    )
    app.state.container = container

    @app.get("/bible/{version}/{book}/{chapter}/image", response_class=PlainTextResponse)
    async def chapter_image(
        version: str, book: str, chapter: int,
        c: AppContainer = Depends(get_container),
    ) -> Response:
        set_request_context("GenerateBibleChapterImage")
        return PlainTextResponse(await c.images.generate(version, book, chapter))

    @app.get("/bible/{version}/{book}/{chapter}/summarize/{mode}", response_class=PlainTextResponse)
    async def summarize_chapter(
        version: str, book: str, chapter: int, mode: str,
        c: AppContainer = Depends(get_container),
    ) -> Response:
        parsed = parse_mode(mode)
        set_request_context("SummarizeBibleChapter", parsed.value)
        outcome = await c.content.summarize_chapter(version, book, chapter, parsed)
        return _text_response(outcome, CHAPTER_NOT_FOUND)

    @app.get("/bible/{version}/{book}/{chapter}/{verse}/explain/{mode}", response_class=PlainTextResponse)
    async def explain_verse(
        version: str, book: str, chapter: int, verse: int, mode: str,
        c: AppContainer = Depends(get_container),
    ) -> Response:
        parsed = parse_mode(mode)
        set_request_context("ExplainBibleVerse", parsed.value)
        outcome = await c.content.explain_verse(version, book, chapter, verse, parsed)
        return _text_response(outcome, VERSE_NOT_FOUND)

    @app.get("/bible/{version}/{book}/{chapter}/{verse}/translate", response_class=PlainTextResponse)
    async def translate_verse(
        version: str, book: str, chapter: int, verse: int,
        c: AppContainer = Depends(get_container),
    ) -> Response:
        set_request_context("TranslateBibleVerseToModernEnglish")
        outcome = await c.content.translate_verse(version, book, chapter, verse)
        return _text_response(outcome, VERSE_NOT_FOUND)

    @app.get("/bible/{version}/{book}/{chapter}/{verse}/similar/{mode}")
    async def similar_verses(
        version: str, book: str, chapter: int, verse: int, mode: str,
        exclude_chapter: bool = False,
        c: AppContainer = Depends(get_container),
    ) -> Response:
        parsed = parse_mode(mode)
        set_request_context("FetchSimilarBibleVerses", parsed.value)
        outcome = await c.similar_finder.find(
            parsed, version, book, chapter, verse, exclude_chapter=exclude_chapter
        )
        if outcome.not_found:
            return PlainTextResponse(VERSE_NOT_FOUND, status_code=404)
        if outcome.kind is OutcomeKind.UNEXPECTED_FAILURE:
            return _server_error()
        return JSONResponse([s.model_dump() for s in outcome.value_or([])])

    @app.get("/bible/{version}/{book}/{chapter}/{verse}/versions")
    async def verse_versions(
        version: str, book: str, chapter: int, verse: int,
        c: AppContainer = Depends(get_container),
    ) -> Response:
        set_request_context("FetchBibleVerseVersions")
        try:
            versions = await c.content.get_verse_versions(version, book, chapter, verse)
        except Exception:
            logger.error("Failed to fetch versions of %s %s:%s", book, chapter, verse, exc_info=True)
            return _server_error()
        return JSONResponse([v.model_dump() for v in versions])

    @app.get("/bible/{version}/{book}/{chapter}")
    async def chapter_verses(
        version: str, book: str, chapter: int,
        c: AppContainer = Depends(get_container),
    ) -> Response:
        set_request_context("FetchBibleChapter")
        try:
            verses = await c.content.get_chapter(version, book, chapter)
        except NotFoundError:
            return PlainTextResponse(CHAPTER_NOT_FOUND, status_code=404)
        except Exception:
            logger.error("Failed to fetch %s %s (%s)", book, chapter, version, exc_info=True)
            return _server_error()
        return JSONResponse([v.model_dump() for v in verses])

    return app


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def _text_response(outcome: Outcome[str], not_found_message: str) -> Response:
    if outcome.not_found:
        return PlainTextResponse(not_found_message, status_code=404)
    return PlainTextResponse(outcome.value_or(""))


def _server_error() -> Response:
    return JSONResponse({"error": SERVER_ERROR}, status_code=500)
