# src/generation/modes.py — v1
"""Generation modes: system instruction, verbosity and similar-verse count."""

from __future__ import annotations

from enum import Enum

from scripturai.llm.models import CompletionOptions


class Mode(str, Enum):
    """Named preset controlling tone, depth and context size."""

    DEVOTIONAL = "Devotional"
    STUDY = "Study"
    PASTORAL = "Pastoral"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def max_similar_verses(self) -> int:
        return _MAX_SIMILAR_VERSES[self]

    @property
    def completion_options(self) -> CompletionOptions:
        return _COMPLETION_OPTIONS[self].model_copy()

    @property
    def system_instruction(self) -> str:
        return _SYSTEM_INSTRUCTIONS[self]

    @property
    def focus_level(self) -> str:
        return "scholarly" if self is Mode.PASTORAL else "educational"


DEFAULT_MODE = Mode.DEVOTIONAL


def parse_mode(token: str | None) -> Mode:
    """Case-insensitive mode lookup; unknown or empty tokens give the default."""
    if token:
        wanted = token.strip().lower()
        for mode in Mode:
            if mode.value.lower() == wanted or mode.name.lower() == wanted:
                return mode
    return DEFAULT_MODE


_DISPLAY_NAMES: dict[Mode, str] = {
    Mode.DEVOTIONAL: "Simple Insight",
    Mode.STUDY: "Study Mode",
    Mode.PASTORAL: "Deep Dive",
}

_MAX_SIMILAR_VERSES: dict[Mode, int] = {
    Mode.DEVOTIONAL: 5,
    Mode.STUDY: 15,
    Mode.PASTORAL: 30,
}

_COMPLETION_OPTIONS: dict[Mode, CompletionOptions] = {
    Mode.DEVOTIONAL: CompletionOptions(temperature=0.5, top_p=0.9, max_output_tokens=6000),
    Mode.STUDY: CompletionOptions(temperature=0.3, top_p=0.7, max_output_tokens=1000),
    Mode.PASTORAL: CompletionOptions(temperature=0.4, top_p=0.8, max_output_tokens=3000),
}

_SYSTEM_INSTRUCTIONS: dict[Mode, str] = {
    Mode.DEVOTIONAL: (
        "You are a devotional Bible-believing companion that always responds in "
        "GitHub-style Markdown.\n"
        "Provide short, heartfelt reflections on the requested passage and avoid "
        "technical or scholarly details.\n"
        "Emphasize encouragement, comfort, and daily life application.\n"
        "This is a one time interaction so do not offer to expand beyond your answer.\n"
        "Purpose: Gentle encouragement, reflection, and spiritual application for "
        "daily devotion.\n"
        "Tone: Warm, personal, uplifting.\n"
        "Depth: Light, concise insights focused on inspiration and faith practice."
    ),
    Mode.STUDY: (
        "You are a Bible-believing study assistant that always responds in "
        "GitHub-style Markdown.\n"
        "Give a balanced, well-structured explanation of the requested passage, "
        "including key Greek or Hebrew terms, historical context, and theological "
        "meaning.\n"
        "End with a short life application.\n"
        "This is a one time interaction so do not offer to expand beyond your answer.\n"
        "Purpose: Balanced analysis, blending spiritual insight with background "
        "and context.\n"
        "Tone: Instructive, thoughtful, clear.\n"
        "Depth: Moderate. Includes historical and cultural background, word study, "
        "and practical application."
    ),
    Mode.PASTORAL: (
        "You are a seasoned, Bible-believing pastor and theologian that always "
        "responds in GitHub-style Markdown.\n"
        "Provide an in-depth exegesis and theological reflection on the passage, "
        "engaging original languages, key commentaries, and doctrinal implications.\n"
        "Apply the text to modern ministry and discipleship contexts.\n"
        "This is a one time interaction so do not offer to expand beyond your answer.\n"
        "Purpose: Deep theological, pastoral, and exegetical insight for preaching, "
        "counseling, or advanced study.\n"
        "Tone: Scholarly yet compassionate, comprehensive, and reverent.\n"
        "Depth: Heavy. Detailed exegesis, theological frameworks, and pastoral "
        "implications."
    ),
}
