"""Core data types shared across geumbok modules."""

from dataclasses import dataclass
from typing import Final, Literal

Intent = Literal[
    "expense",
    "view_expenses",
    "view_welfare",
    "view_stats",
    "help",
    "greeting",
    "unknown",
]

CategoryLabel = Literal[
    "식료품",
    "교통비",
    "의료비",
    "생활용품",
    "통신비",
    "공과금",
    "문화생활",
    "기타",
]

INTENTS: Final[tuple[Intent, ...]] = (
    "expense",
    "view_expenses",
    "view_welfare",
    "view_stats",
    "help",
    "greeting",
    "unknown",
)

# Display and aggregation order; 기타 is always last.
CATEGORIES: Final[tuple[CategoryLabel, ...]] = (
    "식료품",
    "교통비",
    "의료비",
    "생활용품",
    "통신비",
    "공과금",
    "문화생활",
    "기타",
)

DEFAULT_CATEGORY: Final[CategoryLabel] = "기타"


@dataclass(frozen=True, slots=True)
class ExpenseData:
    """Expense details extracted from an utterance."""

    description: str
    amount: int
    category: CategoryLabel = DEFAULT_CATEGORY


@dataclass(frozen=True, slots=True)
class VoiceCommand:
    """Immutable result of classifying one utterance.

    ``data`` is only set when ``intent == "expense"``.
    """

    intent: Intent = "unknown"
    data: ExpenseData | None = None
