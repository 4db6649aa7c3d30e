"""Tests for geumbok.ui — pure render functions."""

from __future__ import annotations

import io

from rich.console import Console

from geumbok.api import interpret
from geumbok.assistant import Assistant, Turn
from geumbok.ledger import Ledger, SpendingSummary
from geumbok.ui import (
    UiState,
    intent_label,
    render_history_panel,
    render_layout,
    render_ledger_table,
    render_peer_table,
    render_status_panel,
    render_summary_table,
    render_turn,
    render_welfare_detail,
    render_welfare_table,
    won,
)
from geumbok.welfare import DEFAULT_CATALOG, peer_statistics


def _render(renderable: object, width: int = 120) -> str:
    console = Console(file=io.StringIO(), width=width, force_terminal=False)
    console.print(renderable)
    return console.file.getvalue()


class TestFormatting:
    def test_won(self) -> None:
        assert won(0) == "0원"
        assert won(1234567) == "1,234,567원"

    def test_intent_label(self) -> None:
        assert intent_label("expense") == "지출 등록"
        assert intent_label("something") == "something"


class TestTurn:
    def test_expense_turn(self) -> None:
        turn = Assistant().handle("커피 5000원 샀어")
        text = render_turn(turn).plain
        assert "> 커피 5000원 샀어" in text
        assert "지출 등록" in text
        assert "커피 5000원이 식료품 항목으로 등록되었습니다." in text

    def test_screen_and_error_shown(self) -> None:
        turn = Turn(
            utterance="가계부",
            result=interpret("가계부"),
            error="네트워크 연결을 확인해주세요.",
        )
        text = render_turn(turn).plain
        assert "→ expenses" in text
        assert "네트워크 연결을 확인해주세요." in text


class TestPanels:
    def test_history_placeholder(self) -> None:
        out = _render(render_history_panel(UiState()))
        assert "커피 5000원 샀어" in out

    def test_history_title_uses_name(self) -> None:
        out = _render(render_history_panel(UiState(user_name="김복순")))
        assert "김복순님" in out

    def test_history_is_capped(self) -> None:
        assistant = Assistant()
        for i in range(5):
            assistant.handle(f"메모 {i}")
        state = UiState(history=assistant.history, max_history=2)
        out = _render(render_history_panel(state))
        assert "메모 4" in out
        assert "메모 0" not in out

    def test_status_panel(self) -> None:
        state = UiState(
            summary=SpendingSummary(total=17000, by_category={"식료품": 17000}),
            speech_enabled=False,
        )
        out = _render(render_status_panel(state))
        assert "꺼짐" in out
        assert "17,000원" in out

    def test_layout_renders(self) -> None:
        out = _render(render_layout(UiState()), width=100)
        assert "상태" in out


class TestTables:
    def test_ledger_table(self, ledger: Ledger) -> None:
        out = _render(render_ledger_table(ledger.recent()))
        assert "2024-03-15" in out
        assert "5,000원" in out

    def test_empty_ledger_table(self) -> None:
        assert "지출 내역이 없습니다" in _render(render_ledger_table([]))

    def test_summary_table(self, ledger: Ledger) -> None:
        out = _render(render_summary_table(ledger.monthly_stats(2024, 3)))
        assert "17,000원" in out
        assert "71%" in out
        assert "100%" in out

    def test_empty_summary_table(self) -> None:
        assert "0%" in _render(render_summary_table(SpendingSummary()))

    def test_peer_table(self) -> None:
        out = _render(render_peer_table(peer_statistics(70)))
        assert "300,000원" in out
        assert "내 지출" not in out

    def test_peer_table_with_summary(self) -> None:
        summary = SpendingSummary(total=500_000, by_category={"식료품": 500_000})
        out = _render(render_peer_table(peer_statistics(40), summary), width=140)
        assert "내 지출" in out
        assert "+50,000원" in out
        assert "-200,000원" in out

    def test_welfare_table(self) -> None:
        out = _render(render_welfare_table(DEFAULT_CATALOG), width=200)
        assert "WLF00000001" in out
        assert "기초연금" in out

    def test_empty_welfare_table(self) -> None:
        assert "검색 결과가 없습니다" in _render(render_welfare_table([]))

    def test_welfare_detail(self) -> None:
        out = _render(render_welfare_detail(DEFAULT_CATALOG[2]), width=160)
        assert "치매안심센터 서비스" in out
        assert "중앙치매센터 1899-9988" in out

    def test_renderers_do_not_mutate(self, ledger: Ledger) -> None:
        before = ledger.expenses
        _render(render_ledger_table(ledger.recent()))
        _render(render_summary_table(ledger.monthly_stats(2024, 3)))
        assert ledger.expenses == before
