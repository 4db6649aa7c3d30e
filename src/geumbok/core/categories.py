"""Keyword table mapping expense descriptions to spending categories."""

from typing import Final

from geumbok.core.types import DEFAULT_CATEGORY, CategoryLabel

# Checked in this order; the first category with any substring hit wins.
CATEGORY_KEYWORDS: Final[tuple[tuple[CategoryLabel, tuple[str, ...]], ...]] = (
    ("식료품", ("커피", "음식", "식사", "마트", "장보기", "빵", "우유", "과일")),
    ("교통비", ("버스", "지하철", "택시", "주유", "버스카드", "교통카드")),
    ("의료비", ("병원", "약국", "의료", "치료", "진료", "약")),
    ("생활용품", ("세제", "화장지", "샴푸", "비누", "생활용품")),
    ("통신비", ("휴대폰", "인터넷", "전화", "통신")),
    ("공과금", ("전기", "가스", "수도", "관리비")),
    ("문화생활", ("영화", "책", "음악", "게임", "문화")),
)


def resolve_category(description: str) -> CategoryLabel:
    """Return the spending category for *description*, or 기타 if nothing matches."""
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in description for keyword in keywords):
            return category
    return DEFAULT_CATEGORY
