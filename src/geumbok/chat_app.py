"""Textual TUI for chatting with the assistant.

Every submitted line goes through the Assistant first. Recognised commands
get their canned response (and the matching ledger/welfare view); anything
the classifier does not understand is answered as free conversation via
geumbok.chat in a worker thread.
"""

from __future__ import annotations

from datetime import date

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Header, Input, RichLog, Static

from geumbok.assistant import Assistant, Turn
from geumbok.chat import ChatConfig, ChatReply, chat_reply, welcome_message
from geumbok.ui import (
    render_ledger_table,
    render_peer_table,
    render_summary_table,
    render_welfare_table,
    won,
)
from geumbok.welfare import DEFAULT_CATALOG, PeerStatistics


class QuitConfirmScreen(ModalScreen[bool]):
    """Modal confirmation for quitting the app."""

    CSS = """
    QuitConfirmScreen {
        align: center middle;
    }
    #quit-dialog {
        width: 50;
        height: 5;
        border: thick $warning;
        background: $surface;
        padding: 1 2;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Yes", priority=True),
        Binding("n", "cancel", "No", priority=True),
        Binding("escape", "cancel", "Cancel", priority=True),
    ]

    def compose(self) -> ComposeResult:
        yield Static("대화를 마칠까요? (y/n)", id="quit-dialog")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class GeumbokChatApp(App):
    """Chat window: message log on top, input box and status bar below."""

    TITLE = "금복이"

    CSS = """
    #messages {
        height: 1fr;
        border: solid $primary;
        padding: 0 1;
    }
    #prompt {
        dock: bottom;
        margin-bottom: 1;
    }
    #status-bar {
        height: 1;
        dock: bottom;
        background: $surface;
        color: $text-muted;
        padding: 0 2;
    }
    """

    BINDINGS = [
        Binding("ctrl+t", "toggle_speech", "음성 켜기/끄기"),
        Binding("ctrl+l", "show_ledger", "가계부"),
        Binding("ctrl+q", "quit_app", "종료", priority=True),
    ]

    def __init__(
        self,
        assistant: Assistant,
        chat_config: ChatConfig | None = None,
        user_name: str | None = None,
        peers: PeerStatistics | None = None,
    ) -> None:
        super().__init__()
        self.assistant = assistant
        self._chat_config = chat_config or assistant.config.chat
        self._user_name = user_name or assistant.config.profile.name
        self._peers = peers
        self._pending_replies = 0

    def compose(self) -> ComposeResult:
        yield Header()
        yield RichLog(id="messages", wrap=True, markup=False)
        yield Static("", id="status-bar")
        yield Input(placeholder='예: "커피 5000원 샀어", "복지서비스 알려줘"', id="prompt")

    def on_mount(self) -> None:
        self._post_bot(welcome_message(self._user_name))
        self.query_one("#prompt", Input).focus()
        self._update_status_bar()

    # ── Message log ──────────────────────────────────────────────────

    def _log(self) -> RichLog:
        return self.query_one("#messages", RichLog)

    def _post_user(self, text: str) -> None:
        line = Text()
        line.append("나: ", style="bold green")
        line.append(text)
        self._log().write(line)

    def _post_bot(self, text: str) -> None:
        line = Text()
        line.append("금복이: ", style="bold cyan")
        line.append(text)
        self._log().write(line)

    def _update_status_bar(self) -> None:
        today = date.today()
        summary = self.assistant.ledger.monthly_stats(today.year, today.month)
        speech = "켜짐" if self.assistant.speech_enabled else "꺼짐"
        parts = [
            f"음성 응답 {speech}",
            f"이번 달 지출 {won(summary.total)}",
            f"기록 {len(self.assistant.ledger)}건",
        ]
        if self._pending_replies:
            parts.append("답변 준비 중…")
        self.query_one("#status-bar", Static).update(" │ ".join(parts))

    # ── Input handling ───────────────────────────────────────────────

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        event.input.value = ""
        if not text:
            return

        self._post_user(text)
        turn = self.assistant.handle(text, speak=False)
        if turn is None:
            return

        if turn.intent == "unknown":
            self._pending_replies += 1
            self._run_chat_reply(text)
        else:
            self._post_bot(turn.response)
            self.assistant.say(turn.response)
            self._show_screen(turn)

        if turn.error:
            self.notify(turn.error, severity="warning", timeout=3)
        self._update_status_bar()

    def _show_screen(self, turn: Turn) -> None:
        """Render the view a navigation command points at."""
        screen = turn.result.screen
        if screen == "expenses":
            self._log().write(render_ledger_table(self.assistant.ledger.recent()))
        elif screen == "stats":
            today = date.today()
            summary = self.assistant.ledger.monthly_stats(today.year, today.month)
            self._log().write(render_summary_table(summary))
            if self._peers is not None:
                self._log().write(render_peer_table(self._peers, summary))
        elif screen == "welfare":
            self._log().write(render_welfare_table(DEFAULT_CATALOG))

    @work(thread=True)
    def _run_chat_reply(self, text: str) -> None:
        reply = chat_reply(text, self._chat_config)
        self.call_from_thread(self._on_chat_reply, reply)

    def _on_chat_reply(self, reply: ChatReply) -> None:
        self._pending_replies = max(0, self._pending_replies - 1)
        self._post_bot(reply.text)
        self.assistant.say(reply.text)
        if reply.error:
            self.notify(
                "AI 응답에 실패해 기본 안내로 대신합니다.",
                severity="warning",
                timeout=3,
            )
        self._update_status_bar()

    # ── Actions ──────────────────────────────────────────────────────

    def action_toggle_speech(self) -> None:
        enabled = self.assistant.toggle_speech()
        self.notify(
            "음성 응답을 켰습니다." if enabled else "음성 응답을 껐습니다.",
            timeout=1,
        )
        self._update_status_bar()

    def action_show_ledger(self) -> None:
        today = date.today()
        self._log().write(render_ledger_table(self.assistant.ledger.recent()))
        self._log().write(
            render_summary_table(
                self.assistant.ledger.monthly_stats(today.year, today.month),
                title=f"{today.month}월 지출 요약",
            )
        )

    def action_quit_app(self) -> None:
        self.push_screen(QuitConfirmScreen(), callback=self._on_quit_confirmed)

    def _on_quit_confirmed(self, result: bool | None) -> None:
        if not result:
            return
        self.assistant.speaker.stop()
        self.exit()
