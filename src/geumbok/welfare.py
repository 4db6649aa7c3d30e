"""Bundled welfare-service catalog and peer spending statistics.

The backend is the source of truth for both; this data is served when it
cannot be reached so elderly users still get an answer offline.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Final, Sequence

from geumbok.core.types import CATEGORIES, CategoryLabel
from geumbok.ledger import SpendingSummary


@dataclass(frozen=True, slots=True)
class WelfareService:
    """One welfare programme as listed by the backend."""

    service_id: str
    title: str
    description: str
    category: str
    target: str
    amount: str
    application_method: str
    required_documents: str
    contact_info: str
    url: str
    is_eligible: bool = True

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "WelfareService":
        """Build from the backend's camelCase JSON object."""
        return cls(
            service_id=str(raw.get("serviceId", "")),
            title=str(raw.get("title", "")),
            description=str(raw.get("description", "")),
            category=str(raw.get("category", "")),
            target=str(raw.get("target", "")),
            amount=str(raw.get("amount", "")),
            application_method=str(raw.get("applicationMethod", "")),
            required_documents=str(raw.get("requiredDocuments", "")),
            contact_info=str(raw.get("contactInfo", "")),
            url=str(raw.get("url", "")),
            is_eligible=bool(raw.get("isEligible", True)),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "serviceId": self.service_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "target": self.target,
            "amount": self.amount,
            "applicationMethod": self.application_method,
            "requiredDocuments": self.required_documents,
            "contactInfo": self.contact_info,
            "url": self.url,
            "isEligible": self.is_eligible,
        }


DEFAULT_CATALOG: Final[tuple[WelfareService, ...]] = (
    WelfareService(
        service_id="WLF00000001",
        title="기초연금",
        description="만 65세 이상 어르신들의 안정된 노후생활을 위한 기초연금 지원",
        category="경제지원",
        target="만 65세 이상",
        amount="월 최대 334,810원",
        application_method="국민연금공단, 주민센터 방문 또는 온라인 신청",
        required_documents="신분증, 통장사본, 소득·재산 관련 서류",
        contact_info="국민연금공단 1355",
        url="https://basicpension.nps.or.kr",
    ),
    WelfareService(
        service_id="WLF00000002",
        title="노인장기요양보험",
        description="일상생활이 어려운 노인분들에게 신체활동 또는 가사활동 지원 서비스 제공",
        category="돌봄서비스",
        target="만 65세 이상 또는 65세 미만 노인성 질병자",
        amount="본인부담금 15-20%",
        application_method="국민건강보험공단 방문 또는 온라인 신청",
        required_documents="신청서, 의사소견서",
        contact_info="국민건강보험공단 1577-1000",
        url="https://www.longtermcare.or.kr",
    ),
    WelfareService(
        service_id="WLF00000003",
        title="치매안심센터 서비스",
        description="치매 예방, 진단, 치료, 돌봄까지 치매 관련 종합서비스 제공",
        category="건강의료",
        target="60세 이상 지역주민",
        amount="무료",
        application_method="해당 지역 치매안심센터 방문 또는 전화 신청",
        required_documents="신분증",
        contact_info="중앙치매센터 1899-9988",
        url="https://www.nid.or.kr",
    ),
    WelfareService(
        service_id="WLF00000004",
        title="노인일자리 및 사회활동 지원사업",
        description="어르신들의 활기찬 노후생활과 소득보장을 위한 일자리 및 사회활동 지원",
        category="사회참여",
        target="만 65세 이상",
        amount="월 27만원 ~ 71만원",
        application_method="시니어클럽, 대한노인회 등 수행기관 방문 신청",
        required_documents="신청서, 신분증, 건강진단서",
        contact_info="한국노인인력개발원 1544-3388",
        url="https://www.kordi.or.kr",
    ),
)


def search_services(
    keyword: str,
    services: Sequence[WelfareService] = DEFAULT_CATALOG,
) -> list[WelfareService]:
    """Services whose title or description contains *keyword* (case-insensitive)."""
    needle = keyword.strip().lower()
    if not needle:
        return list(services)
    return [
        s
        for s in services
        if needle in s.title.lower() or needle in s.description.lower()
    ]


def find_service(
    service_id: str,
    services: Sequence[WelfareService] = DEFAULT_CATALOG,
) -> WelfareService | None:
    return next((s for s in services if s.service_id == service_id), None)


# ---------------------------------------------------------------------------
# Peer statistics
# ---------------------------------------------------------------------------

_BASE_TOTAL_SPENDING: Final = 1_500_000
_BASE_SAMPLE_SIZE: Final = 1000
_BASE_AVERAGES: Final[dict[CategoryLabel, int]] = {
    "식료품": 450_000,
    "교통비": 150_000,
    "의료비": 200_000,
    "생활용품": 100_000,
    "통신비": 80_000,
    "공과금": 120_000,
    "문화생활": 100_000,
    "기타": 80_000,
}
_BASE_PERCENTAGES: Final[dict[CategoryLabel, int]] = {
    "식료품": 30,
    "교통비": 10,
    "의료비": 13,
    "생활용품": 7,
    "통신비": 5,
    "공과금": 8,
    "문화생활": 7,
    "기타": 5,
}
# (minimum age, per-category multipliers); first matching bracket applies.
_AGE_ADJUSTMENTS: Final[tuple[tuple[int, dict[CategoryLabel, float]], ...]] = (
    (65, {"의료비": 1.5, "문화생활": 0.7, "교통비": 0.8}),
    (50, {"의료비": 1.2, "생활용품": 1.1}),
)


@dataclass(frozen=True, slots=True)
class PeerStatistics:
    """Average monthly spending of users in the same age bracket."""

    total_spending: int
    category_averages: dict[CategoryLabel, int] = field(default_factory=dict)
    category_percentages: dict[CategoryLabel, int] = field(default_factory=dict)
    sample_size: int = 0

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "PeerStatistics":
        return cls(
            total_spending=int(raw.get("totalSpending", 0)),
            category_averages={
                c: int(v) for c, v in raw.get("categoryAverages", {}).items()
            },
            category_percentages={
                c: int(v) for c, v in raw.get("categoryPercentages", {}).items()
            },
            sample_size=int(raw.get("sampleSize", 0)),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "totalSpending": self.total_spending,
            "categoryAverages": dict(self.category_averages),
            "categoryPercentages": dict(self.category_percentages),
            "sampleSize": self.sample_size,
        }


def peer_statistics(age: int, gender: str | None = None) -> PeerStatistics:
    """Baseline peer spending, adjusted for the age bracket.

    *gender* is accepted for parity with the backend endpoint; the bundled
    baseline does not distinguish by it.
    """
    averages = dict(_BASE_AVERAGES)
    for min_age, multipliers in _AGE_ADJUSTMENTS:
        if age >= min_age:
            for category, factor in multipliers.items():
                averages[category] = round(averages[category] * factor)
            break
    return PeerStatistics(
        total_spending=_BASE_TOTAL_SPENDING,
        category_averages=averages,
        category_percentages=dict(_BASE_PERCENTAGES),
        sample_size=_BASE_SAMPLE_SIZE,
    )


def compare_with_peers(
    summary: SpendingSummary,
    stats: PeerStatistics,
) -> dict[CategoryLabel, int]:
    """User spending minus the peer average, for every category."""
    return {
        c: summary.by_category.get(c, 0) - stats.category_averages.get(c, 0)
        for c in CATEGORIES
    }


def services_as_dicts(services: Sequence[WelfareService]) -> list[dict[str, Any]]:
    """Snake-case dicts for JSON output."""
    return [asdict(s) for s in services]
