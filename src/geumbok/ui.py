"""Terminal rendering for geumbok.

All render functions are pure: they take data or a UiState snapshot and
return Rich renderables. No side effects, no mutation.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from geumbok.assistant import Turn
from geumbok.ledger import Expense, SpendingSummary, category_percentages
from geumbok.welfare import PeerStatistics, WelfareService, compare_with_peers

_INTENT_LABELS = {
    "expense": "지출 등록",
    "view_expenses": "가계부",
    "view_welfare": "복지서비스",
    "view_stats": "통계",
    "help": "도움말",
    "greeting": "인사",
    "unknown": "알 수 없음",
}


@dataclass(slots=True)
class UiState:
    """Snapshot of session state consumed by render functions."""

    history: list[Turn] = field(default_factory=list)
    max_history: int = 20
    recent: list[Expense] = field(default_factory=list)
    summary: SpendingSummary = field(default_factory=SpendingSummary)
    user_name: str = ""
    speech_enabled: bool = True


def won(amount: int) -> str:
    """Format an amount as Korean won, e.g. ``12,000원``."""
    return f"{amount:,}원"


def intent_label(intent: str) -> str:
    return _INTENT_LABELS.get(intent, intent)


def render_turn(turn: Turn) -> Text:
    """One exchange: user utterance, interpretation, response."""
    body = Text()
    body.append("> ", style="bold green")
    body.append(turn.utterance)
    body.append("\n")
    body.append("의도: ", style="cyan")
    body.append(intent_label(turn.intent))
    if turn.result.screen:
        body.append(f"  → {turn.result.screen}", style="dim")
    body.append("\n")
    body.append(turn.response, style="bold")
    if turn.expense is not None and turn.synced:
        body.append("  (서버 저장됨)", style="green")
    if turn.error:
        body.append("\n")
        body.append(turn.error, style="red")
    return body


def render_history_panel(state: UiState) -> Panel:
    """Render the recent conversation."""
    body = Text()
    for turn in state.history[-state.max_history :]:
        body.append_text(render_turn(turn))
        body.append("\n\n")
    if not body.plain:
        body.append('"커피 5000원 샀어"처럼 말씀해 보세요.', style="dim")
    title = f"금복이 · {state.user_name}님" if state.user_name else "금복이"
    return Panel(body, title=title, padding=(0, 1))


def render_ledger_table(expenses: Sequence[Expense], title: str = "최근 지출") -> Table:
    """Render expenses as a table, in the order given."""
    table = Table(title=title, expand=True)
    table.add_column("날짜", style="cyan", no_wrap=True)
    table.add_column("내용")
    table.add_column("분류", style="magenta")
    table.add_column("금액", justify="right", style="bold")
    for e in expenses:
        table.add_row(e.date.isoformat(), e.description, e.category, won(e.amount))
    if not expenses:
        table.add_row("--", "지출 내역이 없습니다", "", "")
    return table


def render_summary_table(summary: SpendingSummary, title: str = "지출 요약") -> Table:
    """Per-category totals with each category's share."""
    table = Table(title=title, expand=True)
    table.add_column("분류", style="magenta")
    table.add_column("금액", justify="right")
    table.add_column("비율", justify="right", style="dim")
    shares = category_percentages(summary)
    for category, amount in summary.by_category.items():
        table.add_row(category, won(amount), f"{shares.get(category, 0)}%")
    table.add_row(
        "합계", won(summary.total), "100%" if summary.total else "0%", style="bold"
    )
    return table


def render_peer_table(
    stats: PeerStatistics,
    summary: SpendingSummary | None = None,
    title: str = "또래 평균 지출",
) -> Table:
    """Peer averages per category, next to the user's own spending if given."""
    table = Table(title=title, expand=True)
    table.add_column("분류", style="magenta")
    table.add_column("또래 평균", justify="right", style="cyan")
    table.add_column("비율", justify="right", style="dim")
    diffs = compare_with_peers(summary, stats) if summary is not None else {}
    if summary is not None:
        table.add_column("내 지출", justify="right")
        table.add_column("차이", justify="right")
    for category, average in stats.category_averages.items():
        row = [category, won(average), f"{stats.category_percentages.get(category, 0)}%"]
        if summary is not None:
            diff = diffs.get(category, 0)
            style = "red" if diff > 0 else "green"
            row.append(won(summary.by_category.get(category, 0)))
            row.append(f"[{style}]{diff:+,}원[/{style}]")
        table.add_row(*row)
    return table


def render_welfare_table(services: Sequence[WelfareService]) -> Table:
    table = Table(title="복지서비스", expand=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("서비스", style="bold")
    table.add_column("대상")
    table.add_column("지원 내용", style="green")
    table.add_column("문의", style="cyan")
    for s in services:
        table.add_row(s.service_id, s.title, s.target, s.amount, s.contact_info)
    if not services:
        table.add_row("--", "검색 결과가 없습니다", "", "", "")
    return table


def render_welfare_detail(service: WelfareService) -> Panel:
    body = Text()
    body.append(service.description)
    body.append("\n\n")
    for label, value in (
        ("분류", service.category),
        ("대상", service.target),
        ("지원 내용", service.amount),
        ("신청 방법", service.application_method),
        ("구비 서류", service.required_documents),
        ("문의", service.contact_info),
        ("홈페이지", service.url),
    ):
        body.append(f"{label}: ", style="cyan")
        body.append(value)
        body.append("\n")
    return Panel(body, title=service.title, padding=(0, 1))


def render_status_panel(state: UiState) -> Panel:
    status = Text()
    status.append("음성 응답: ", style="bold")
    if state.speech_enabled:
        status.append("켜짐", style="green")
    else:
        status.append("꺼짐", style="yellow")
    status.append(" | ")
    status.append(f"이번 달 지출: {won(state.summary.total)}")
    status.append(" | ")
    status.append(f"대화: {len(state.history)}회")
    return Panel(status, title="상태", padding=(0, 1))


def render_layout(state: UiState) -> Layout:
    """Compose the full terminal layout from state."""
    layout = Layout()
    layout.split_column(
        Layout(render_status_panel(state), name="status", size=3),
        Layout(render_history_panel(state), name="history", ratio=2),
        Layout(render_ledger_table(state.recent), name="ledger", ratio=1),
    )
    return layout
