"""Core interpreter package — no UI or network dependencies.

Re-exports key symbols for convenience.
"""

from geumbok.core.categories import CATEGORY_KEYWORDS, resolve_category
from geumbok.core.classifier import classify, extract_expense
from geumbok.core.protocols import RecognizerLike, SpeakerLike
from geumbok.core.responses import respond, screen_for
from geumbok.core.text import apply_corrections, normalize_utterance
from geumbok.core.types import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    INTENTS,
    CategoryLabel,
    ExpenseData,
    Intent,
    VoiceCommand,
)

__all__ = [
    "CATEGORIES",
    "CATEGORY_KEYWORDS",
    "CategoryLabel",
    "DEFAULT_CATEGORY",
    "ExpenseData",
    "INTENTS",
    "Intent",
    "RecognizerLike",
    "SpeakerLike",
    "VoiceCommand",
    "apply_corrections",
    "classify",
    "extract_expense",
    "normalize_utterance",
    "resolve_category",
    "respond",
    "screen_for",
]
