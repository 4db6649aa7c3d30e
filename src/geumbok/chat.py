"""Conversational replies for the chat screen.

Free-form questions that are not assistant commands get a reply from an
LLM via litellm (Ollama, OpenAI, Claude, etc.) when one is configured,
and from a small keyword table otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from geumbok.core.constants import (
    DEFAULT_CHAT_MAX_TOKENS,
    DEFAULT_CHAT_PROMPT,
    DEFAULT_USER_NAME,
)
from geumbok.core.env import LOGGER

_KEYWORD_REPLIES: Final[tuple[tuple[tuple[str, ...], str], ...]] = (
    (
        ("가계부", "지출", "소비"),
        '가계부 관리에 대해 궁금하시군요! 음성으로 "커피 5000원 샀어"라고 말씀하시면 '
        "자동으로 지출이 기록됩니다. 또한 월별, 카테고리별 지출 분석도 제공해드립니다.",
    ),
    (
        ("복지", "혜택", "지원"),
        "복지서비스 정보를 찾아드릴게요. 고령자를 위한 다양한 복지혜택이 있습니다. "
        "기초연금, 노인돌봄서비스, 의료비 지원 등이 있는데, 어떤 분야가 궁금하신가요?",
    ),
    (
        ("안녕", "반가"),
        "안녕하세요! 만나서 반갑습니다. 오늘도 건강하게 지내고 계신가요? "
        "무엇을 도와드릴까요?",
    ),
    (
        ("고마워", "감사"),
        "천만에요! 언제든지 궁금한 것이 있으시면 말씀해 주세요. "
        "항상 도와드릴 준비가 되어 있습니다.",
    ),
)
_FALLBACK_REPLY: Final = (
    "네, 잘 들었습니다. 가계부 관리나 복지서비스에 대해 더 자세히 알고 싶으시면 "
    "언제든 말씀해 주세요. 구체적으로 어떤 도움이 필요하신가요?"
)


@dataclass(frozen=True, slots=True)
class ChatConfig:
    """LLM settings for chat replies; ``model=None`` disables the LLM."""

    model: str | None = None
    prompt: str | None = None
    max_tokens: int = DEFAULT_CHAT_MAX_TOKENS


@dataclass(frozen=True, slots=True)
class ChatReply:
    """Immutable result of a chat reply."""

    text: str
    model: str = ""
    error: str = ""


def welcome_message(user_name: str | None = None) -> str:
    name = user_name or DEFAULT_USER_NAME
    return (
        f"안녕하세요 {name}님! 저는 금복이입니다. "
        "가계부 관리나 복지서비스에 대해 궁금한 것이 있으시면 언제든 말씀해 주세요."
    )


def keyword_reply(text: str) -> str:
    """Canned reply chosen by the first keyword group found in *text*."""
    lowered = text.lower()
    for keywords, reply in _KEYWORD_REPLIES:
        if any(k in lowered for k in keywords):
            return reply
    return _FALLBACK_REPLY


def chat_reply(text: str, config: ChatConfig | None = None) -> ChatReply:
    """Reply to a free-form message.

    This is a blocking call designed to be run off the UI thread. The
    litellm import is deferred so that it is only paid for when a model
    is configured.

    Exceptions are captured in *result.error* and the keyword reply is
    returned instead, so the conversation never stalls on a model failure.
    """
    cfg = config or ChatConfig()
    if not cfg.model:
        return ChatReply(text=keyword_reply(text))

    from litellm import completion  # deferred import

    try:
        response = completion(
            model=cfg.model,
            messages=[
                {"role": "system", "content": cfg.prompt or DEFAULT_CHAT_PROMPT},
                {"role": "user", "content": text},
            ],
            max_tokens=cfg.max_tokens,
        )
        content = (response.choices[0].message.content or "").strip()
        if not content:
            return ChatReply(
                text=keyword_reply(text), model=cfg.model, error="empty response"
            )
        return ChatReply(text=content, model=cfg.model)
    except Exception as exc:
        LOGGER.warning("Chat model %s failed: %s", cfg.model, exc)
        return ChatReply(text=keyword_reply(text), model=cfg.model, error=str(exc))
