"""Tests for geumbok.chat_app — Textual chat window driven headless."""

from __future__ import annotations

import asyncio

from textual.widgets import Input

from geumbok.assistant import Assistant
from geumbok.chat_app import GeumbokChatApp, QuitConfirmScreen


def _run(app: GeumbokChatApp, scenario) -> None:
    async def main() -> None:
        async with app.run_test() as pilot:
            await scenario(app, pilot)

    asyncio.run(main())


class TestGeumbokChatApp:
    def test_expense_is_recorded(self) -> None:
        assistant = Assistant()
        app = GeumbokChatApp(assistant)

        async def scenario(app: GeumbokChatApp, pilot) -> None:
            app.query_one("#prompt", Input).value = "커피 5000원 샀어"
            await pilot.press("enter")
            await pilot.pause()

        _run(app, scenario)
        assert len(assistant.ledger) == 1
        assert assistant.history[0].intent == "expense"

    def test_unknown_goes_to_chat_worker(self) -> None:
        assistant = Assistant()
        app = GeumbokChatApp(assistant)

        async def scenario(app: GeumbokChatApp, pilot) -> None:
            app.query_one("#prompt", Input).value = "고마워"
            await pilot.press("enter")
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app._pending_replies == 0

        _run(app, scenario)
        assert assistant.history[0].intent == "unknown"
        assert len(assistant.ledger) == 0

    def test_toggle_speech(self) -> None:
        assistant = Assistant()
        app = GeumbokChatApp(assistant)

        async def scenario(app: GeumbokChatApp, pilot) -> None:
            await pilot.press("ctrl+t")
            await pilot.pause()

        _run(app, scenario)
        assert assistant.speech_enabled is False

    def test_quit_confirmation(self) -> None:
        app = GeumbokChatApp(Assistant())

        async def scenario(app: GeumbokChatApp, pilot) -> None:
            await pilot.press("ctrl+q")
            await pilot.pause()
            assert isinstance(app.screen, QuitConfirmScreen)
            await pilot.press("n")
            await pilot.pause()
            assert not isinstance(app.screen, QuitConfirmScreen)

        _run(app, scenario)

    def test_invisible_input_is_ignored(self) -> None:
        assistant = Assistant()
        app = GeumbokChatApp(assistant)

        async def scenario(app: GeumbokChatApp, pilot) -> None:
            app.query_one("#prompt", Input).value = "\u200b\u200b"
            await pilot.press("enter")
            await pilot.pause()
            assert app._pending_replies == 0

        _run(app, scenario)
        assert assistant.history == []
