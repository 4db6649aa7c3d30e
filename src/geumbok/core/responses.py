"""Canned responses for classified commands."""

from typing import Final

from geumbok.core.types import Intent, VoiceCommand

HELP_MESSAGE: Final = (
    '음성으로 "커피 5000원 샀어"라고 말하면 지출이 자동으로 등록됩니다. '
    "가계부 보기, 복지서비스 확인 등도 가능합니다."
)
UNKNOWN_MESSAGE: Final = "잘 이해하지 못했습니다. 다시 말씀해 주세요."

_FIXED_RESPONSES: Final[dict[Intent, str]] = {
    "view_expenses": "가계부 화면으로 이동합니다.",
    "view_welfare": "복지서비스 화면으로 이동합니다.",
    "view_stats": "통계 화면으로 이동합니다.",
    "help": HELP_MESSAGE,
    "greeting": "안녕하세요! 금복입니다. 무엇을 도와드릴까요?",
}

_SCREENS: Final[dict[Intent, str]] = {
    "view_expenses": "expenses",
    "view_welfare": "welfare",
    "view_stats": "stats",
}


def respond(command: VoiceCommand) -> str:
    """Return the response text for *command*."""
    if command.intent == "expense" and command.data is not None:
        d = command.data
        return f"{d.description} {d.amount}원이 {d.category} 항목으로 등록되었습니다."
    return _FIXED_RESPONSES.get(command.intent, UNKNOWN_MESSAGE)


def screen_for(intent: Intent) -> str | None:
    """Screen a caller should navigate to for *intent*, if any."""
    return _SCREENS.get(intent)
