"""Default configuration values for geumbok."""

from typing import Final

DEFAULT_LANGUAGE: Final = "ko-KR"
DEFAULT_SPEECH_PITCH: Final = 1.0
DEFAULT_SPEECH_RATE: Final = 0.8

DEFAULT_API_BASE_URL: Final = "http://localhost:3000/api/v1"
DEFAULT_API_TIMEOUT: Final = 10.0
DEFAULT_API_TOKEN_ENV: Final = "GEUMBOK_API_TOKEN"

DEFAULT_CONFIG_DIR: Final = "~/.config/geumbok"
DEFAULT_CONFIG_DIR_ENV: Final = "GEUMBOK_CONFIG_DIR"
DEFAULT_CONFIG_FILE: Final = "config.json"

DEFAULT_USER_NAME: Final = "고객"
DEFAULT_RECENT_LIMIT: Final = 5
DEFAULT_PAGE_LIMIT: Final = 10

DEFAULT_CHAT_MAX_TOKENS: Final = 512
DEFAULT_CHAT_PROMPT: Final = (
    "당신은 어르신을 돕는 가계부·복지 도우미 '금복이'입니다. "
    "짧고 쉬운 존댓말로, 한두 문장 안에 답하세요. "
    "모르는 내용은 지어내지 말고 주민센터나 상담 전화를 안내하세요."
)

# Utterances a user might say to the assistant, replayed by `geumbok listen --demo`.
DEMO_UTTERANCES: Final = (
    "커피 5000원 샀어",
    "점심 12000원 지출",
    "버스카드 충전 10000원",
    "마트 장보기 45000원",
    "병원비 15000원",
    "가계부 보여줘",
    "복지서비스 알려줘",
    "이번 달 지출 얼마야",
    "금복아 안녕",
    "도움말",
)
