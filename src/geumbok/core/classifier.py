"""Rule-based classifier for spoken or typed assistant commands.

Amount detection runs first and takes precedence over every keyword rule,
so "가계부 5000원" records an expense instead of opening the ledger.
"""

import re
from typing import Final

from geumbok.core.categories import resolve_category
from geumbok.core.types import ExpenseData, Intent, VoiceCommand

# Digits immediately followed by the won sign. "5,000" style grouping is
# accepted; the lookbehind keeps a match from starting mid-number.
_AMOUNT_RE: Final = re.compile(r"(?<!\d)(\d{1,3}(?:,\d{3})+|\d+)원")

_KEYWORD_RULES: Final[tuple[tuple[Intent, tuple[str, ...]], ...]] = (
    ("view_expenses", ("가계부", "지출")),
    ("view_welfare", ("복지", "혜택")),
    ("view_stats", ("통계", "분석")),
    ("help", ("도움", "사용법")),
    ("greeting", ("안녕", "금복")),
)


def extract_expense(text: str) -> ExpenseData | None:
    """Pull description, amount and category out of ``<description><digits>원``.

    The description is the text before the amount. When nothing precedes the
    amount ("5000원 커피"), the text after it is used instead. Returns None
    when no amount is present or no description can be found.

    Amounts may carry thousands separators: "커피 5,000원" yields 5000 with
    the description "커피". A plain digit-run reading would instead take
    "커피 5," as the description and 0 as the amount.
    """
    for m in _AMOUNT_RE.finditer(text):
        description = text[: m.start()].strip()
        if not description:
            description = text[m.end() :].strip()
        if not description:
            continue
        amount = int(m.group(1).replace(",", ""))
        return ExpenseData(
            description=description,
            amount=amount,
            category=resolve_category(description),
        )
    return None


def classify(text: str) -> VoiceCommand:
    """Classify *text* into a VoiceCommand. Never raises."""
    expense = extract_expense(text)
    if expense is not None:
        return VoiceCommand(intent="expense", data=expense)

    for intent, keywords in _KEYWORD_RULES:
        if any(k in text for k in keywords):
            return VoiceCommand(intent=intent)

    return VoiceCommand()
