# src/generation/prompts.py — v1
"""Prompt templates and cache addressing for generated content."""

from __future__ import annotations

from collections.abc import Iterable

from scripturai.core.models import make_document_id
from scripturai.generation.modes import Mode

# Version tag of the stored modern AI translation used as a fallback.
MODERN_TRANSLATION_VERSION = "MAIV"

TRANSLATION_INSTRUCTION = (
    "You are a Bible-believing translation assistant that always responds in "
    "GitHub-style Markdown.\n"
    "When given a verse from an older bible version, translate it into clear, "
    "natural modern English that accurately reflects the meaning of the original "
    "Hebrew, Aramaic, or Greek text.\n"
    "You may rephrase expressions to match their sense in the original languages "
    "while keeping the tone readable and faithful.\n"
    "Write in your own words with a style similar to modern translations like the "
    "NIV or NKJV, but do not copy from them.\n"
    "Return translated verse at the top of your response (no need to re-quote the "
    "original) and follow it with the reasoning behind your translation."
)

# Used by the scraper: plain text only, stored as the verse text.
SCRAPER_TRANSLATION_INSTRUCTION = (
    "You are a Bible translation assistant. When given a verse from the King James "
    "Version (KJV), translate it into clear, natural modern English that accurately "
    "reflects the meaning of the original Hebrew, Aramaic, or Greek text. You may "
    "rephrase expressions to match their sense in the original languages while "
    "keeping the tone readable and faithful. Write in your own words with a style "
    "similar to modern translations like the NIV or NKJV, but do not copy from them. "
    "Return only the translated text: no verse numbers, commentary, book names, or "
    "explanations."
)


# --- cache addresses ---

def verse_key(version: str, book: str, chapter: int, verse: int) -> str:
    return make_document_id(book, chapter, verse, version)


def chapter_key(version: str, book: str, chapter: int) -> str:
    return f"{book}:{chapter}:{version}"


def explanation_partition(book: str, mode: Mode) -> str:
    return f"{book}:Explanation:{mode.value}"


def summary_partition(book: str, mode: Mode) -> str:
    return f"{book}:Summary:{mode.value}"


def translation_partition(book: str) -> str:
    return f"{book}:Translation"


def similar_verses_partition(book: str, mode: Mode, exclude_chapter: bool = False) -> str:
    partition = f"{book}:SimilarVerses:{mode.value}"
    if exclude_chapter:
        partition += ":OtherChapters"
    return partition


# --- user prompts ---

def explain_prompt(version: str, book: str, chapter: int, verse: int) -> str:
    return (
        f"Explain {book}:{chapter}:{verse} from the {version} version of the Bible. "
        "Do not use a title with the verse reference or quote at the top of your "
        "GitHub markdown response. Just go right into your explanation."
    )


def summarize_prompt(version: str, book: str, chapter: int) -> str:
    return (
        f"Summarize {book} {chapter} from the {version} version of the Bible. "
        "At the top of your response (GitHub Markdown) use the following subtitle: "
        f"Summary of {book} {chapter} ({version})"
    )


def translate_prompt(version: str, book: str, chapter: int, verse: int, text: str) -> str:
    return f"{book} {chapter}:{verse} from the {version}: {text}."


def mode_prompt(mode: Mode) -> str:
    return f"Mode: {mode.display_name}. Focus level: {mode.focus_level}."


def context_block(title: str, lines: Iterable[tuple[str, str]]) -> str:
    """A system context message listing '{verse_id}: {text}' lines."""
    body = "\n".join(f"{verse_id}: {text}" for verse_id, text in lines)
    return f"{title}:\n{body}"


def image_prompt(book: str, chapter: int, summary: str = "") -> str:
    prompt = (
        f"Create a detailed, reverent, classical-style image representing the main "
        f"themes of {book} chapter {chapter} from the Bible.\n"
        "Avoid modern elements or text."
    )
    if summary:
        prompt += f"\nUse the following context to guide your composition:\n{summary}"
    return prompt
