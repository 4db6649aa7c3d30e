"""Tests for geumbok.core.responses — canned response templates."""

from __future__ import annotations

import pytest

from geumbok.core.responses import HELP_MESSAGE, UNKNOWN_MESSAGE, respond, screen_for
from geumbok.core.types import ExpenseData, VoiceCommand


class TestRespond:
    def test_expense_template(self) -> None:
        cmd = VoiceCommand(
            intent="expense",
            data=ExpenseData(description="커피", amount=5000, category="식료품"),
        )
        assert respond(cmd) == "커피 5000원이 식료품 항목으로 등록되었습니다."

    def test_amount_is_not_grouped(self) -> None:
        cmd = VoiceCommand(
            intent="expense",
            data=ExpenseData(description="관리비", amount=150000, category="공과금"),
        )
        assert "150000원" in respond(cmd)

    @pytest.mark.parametrize(
        ("intent", "expected"),
        [
            ("view_expenses", "가계부 화면으로 이동합니다."),
            ("view_welfare", "복지서비스 화면으로 이동합니다."),
            ("view_stats", "통계 화면으로 이동합니다."),
            ("greeting", "안녕하세요! 금복입니다. 무엇을 도와드릴까요?"),
            ("unknown", "잘 이해하지 못했습니다. 다시 말씀해 주세요."),
        ],
    )
    def test_fixed_responses(self, intent: str, expected: str) -> None:
        assert respond(VoiceCommand(intent=intent)) == expected

    def test_help(self) -> None:
        assert respond(VoiceCommand(intent="help")) == HELP_MESSAGE
        assert '"커피 5000원 샀어"' in HELP_MESSAGE

    def test_expense_without_data_is_unknown(self) -> None:
        assert respond(VoiceCommand(intent="expense")) == UNKNOWN_MESSAGE


class TestScreenFor:
    def test_navigation_intents(self) -> None:
        assert screen_for("view_expenses") == "expenses"
        assert screen_for("view_welfare") == "welfare"
        assert screen_for("view_stats") == "stats"

    @pytest.mark.parametrize("intent", ["expense", "help", "greeting", "unknown"])
    def test_no_screen(self, intent: str) -> None:
        assert screen_for(intent) is None
