"""CLI entry point for geumbok.

Parses arguments, configures logging, and dispatches to a subcommand:

    classify  : interpret one utterance and print the result
    listen    : run the voice loop over typed, scripted or demo utterances
    chat      : Textual chat window
    welfare   : list, search or show welfare services
    stats     : peer spending statistics for an age bracket
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from geumbok.apps.config import GeumbokConfig
from geumbok.core.constants import DEMO_UTTERANCES

if TYPE_CHECKING:
    from geumbok.client import GeumbokClient


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommand support."""
    parser = argparse.ArgumentParser(
        prog="geumbok",
        description="금복이: voice-driven household ledger and welfare assistant",
    )
    parser.add_argument(
        "--config-file",
        default=None,
        help="JSON config file (default: ~/.config/geumbok/config.json)",
    )
    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    # `geumbok classify`
    classify_parser = subparsers.add_parser(
        "classify", help="Interpret a single utterance"
    )
    classify_parser.add_argument("text", nargs="+", help="Utterance to interpret")
    classify_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )

    # `geumbok listen`
    listen_parser = subparsers.add_parser(
        "listen", help="Handle utterances one after another"
    )
    source = listen_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--script",
        default=None,
        help="File with one utterance per line (default: type them in)",
    )
    source.add_argument(
        "--demo", action="store_true", help="Replay the built-in demo utterances"
    )
    listen_parser.add_argument(
        "--no-speech", action="store_true", help="Do not print spoken responses"
    )
    listen_parser.add_argument(
        "--no-ui", action="store_true", help="Disable the Rich live UI for replays"
    )
    listen_parser.add_argument(
        "--sync",
        action="store_true",
        help="Also store recorded expenses on the backend",
    )

    # `geumbok chat`
    subparsers.add_parser("chat", help="Open the chat window")

    # `geumbok welfare`
    welfare_parser = subparsers.add_parser("welfare", help="Welfare services")
    lookup = welfare_parser.add_mutually_exclusive_group()
    lookup.add_argument("--search", default=None, help="Keyword to search for")
    lookup.add_argument("--id", dest="service_id", default=None, help="Service ID")
    welfare_parser.add_argument(
        "--offline", action="store_true", help="Use the bundled catalog only"
    )
    welfare_parser.add_argument(
        "--json", action="store_true", help="Print services as JSON"
    )

    # `geumbok stats`
    stats_parser = subparsers.add_parser("stats", help="Peer spending statistics")
    stats_parser.add_argument("--age", type=int, default=None, help="Age (default: profile)")
    stats_parser.add_argument("--gender", default=None, help="Gender (default: profile)")
    stats_parser.add_argument(
        "--offline", action="store_true", help="Use the bundled baseline only"
    )
    return parser


def _make_client(config: GeumbokConfig) -> GeumbokClient:
    from geumbok.client import GeumbokClient

    return GeumbokClient(
        base_url=config.api.base_url,
        timeout=config.api.timeout,
        token=config.api.token,
    )


def _run_classify(args: argparse.Namespace, config: GeumbokConfig, console: Console) -> int:
    from geumbok.api import InterpretOptions, interpret
    from geumbok.ui import intent_label

    result = interpret(
        " ".join(args.text), InterpretOptions(corrections=config.corrections)
    )
    if args.json:
        payload = {
            "text": result.text,
            "intent": result.command.intent,
            "data": asdict(result.command.data) if result.command.data else None,
            "response": result.response,
            "screen": result.screen,
        }
        print(json.dumps(payload, ensure_ascii=False))
        return 0

    console.print(f"[cyan]의도:[/cyan] {intent_label(result.command.intent)}")
    if result.command.data is not None:
        d = result.command.data
        console.print(f"[cyan]내용:[/cyan] {d.description}")
        console.print(f"[cyan]금액:[/cyan] {d.amount:,}원")
        console.print(f"[cyan]분류:[/cyan] {d.category}")
    console.print(Text(result.response, style="bold"))
    return 0


def _run_listen(args: argparse.Namespace, config: GeumbokConfig, console: Console) -> int:
    from datetime import date

    from rich.live import Live

    from geumbok.assistant import Assistant, run_voice_loop
    from geumbok.speech import (
        ConsoleRecognizer,
        ConsoleSpeaker,
        ScriptedRecognizer,
        SilentSpeaker,
    )
    from geumbok.ui import UiState, render_layout, render_summary_table, render_turn

    scripted = args.demo or args.script is not None
    if args.demo:
        recognizer = ScriptedRecognizer(DEMO_UTTERANCES)
    elif args.script is not None:
        lines = Path(args.script).read_text(encoding="utf-8").splitlines()
        recognizer = ScriptedRecognizer(line for line in lines if line.strip())
    else:
        recognizer = ConsoleRecognizer(console)

    live_ui = scripted and not args.no_ui
    speaker = SilentSpeaker() if args.no_speech or live_ui else ConsoleSpeaker(console)
    client = _make_client(config) if args.sync else None
    assistant = Assistant(config=config, speaker=speaker, client=client)
    today = date.today()

    try:
        if live_ui:
            state = UiState(
                user_name=config.profile.name or "",
                speech_enabled=not args.no_speech,
            )

            with Live(render_layout(state), console=console, transient=False) as live:

                def on_turn(turn) -> None:
                    state.history = list(assistant.history)
                    state.recent = assistant.ledger.recent()
                    state.summary = assistant.ledger.monthly_stats(today.year, today.month)
                    live.update(render_layout(state))

                handled = run_voice_loop(assistant, recognizer, on_turn)
        else:
            handled = run_voice_loop(
                assistant, recognizer, lambda turn: console.print(render_turn(turn))
            )
    finally:
        if client is not None:
            client.close()

    console.print(f"[dim]{handled}개의 말씀을 처리했습니다.[/dim]")
    if len(assistant.ledger):
        console.print(
            render_summary_table(assistant.ledger.monthly_stats(today.year, today.month))
        )
    return 0


def _run_chat(args: argparse.Namespace, config: GeumbokConfig, console: Console) -> int:
    from geumbok.assistant import Assistant
    from geumbok.chat_app import GeumbokChatApp
    from geumbok.welfare import peer_statistics

    peers = peer_statistics(config.profile.age) if config.profile.age else None
    app = GeumbokChatApp(Assistant(config=config), peers=peers)
    app.run()
    return 0


def _run_welfare(args: argparse.Namespace, config: GeumbokConfig, console: Console) -> int:
    from geumbok.client import welfare_services_from
    from geumbok.ui import render_welfare_detail, render_welfare_table
    from geumbok.welfare import (
        DEFAULT_CATALOG,
        find_service,
        search_services,
        services_as_dicts,
    )

    if args.offline:
        if args.service_id:
            found = find_service(args.service_id)
            services = [found] if found else []
        elif args.search:
            services = search_services(args.search)
        else:
            services = list(DEFAULT_CATALOG)
    else:
        with _make_client(config) as client:
            if args.service_id:
                envelope = client.get_welfare_service(args.service_id)
            elif args.search:
                envelope = client.search_welfare_services(args.search)
            else:
                envelope = client.list_welfare_services()
        services = welfare_services_from(envelope)

    if args.json:
        print(json.dumps(services_as_dicts(services), ensure_ascii=False))
        return 0 if services else 1

    if args.service_id:
        if not services:
            console.print("[red]요청한 정보를 찾을 수 없습니다.[/red]")
            return 1
        console.print(render_welfare_detail(services[0]))
        return 0

    console.print(render_welfare_table(services))
    return 0


def _run_stats(args: argparse.Namespace, config: GeumbokConfig, console: Console) -> int:
    from geumbok.ui import render_peer_table
    from geumbok.welfare import PeerStatistics, peer_statistics

    age = args.age if args.age is not None else config.profile.age
    gender = args.gender or config.profile.gender
    if age is None:
        build_arg_parser().error(
            "no age given; use --age or set profile.age in config.json"
        )

    if args.offline:
        stats = peer_statistics(age, gender)
    else:
        with _make_client(config) as client:
            envelope = client.peer_statistics(age, gender)
        data = envelope.get("data")
        stats = PeerStatistics.from_api(data if isinstance(data, dict) else {})

    console.print(
        render_peer_table(
            stats,
            title=f"{age}세 또래 월평균 지출 (표본 {stats.sample_size:,}명)",
        )
    )
    return 0


_COMMANDS = {
    "classify": _run_classify,
    "listen": _run_listen,
    "chat": _run_chat,
    "welfare": _run_welfare,
    "stats": _run_stats,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code."""
    from geumbok.apps.config import load_config
    from geumbok.client import ApiError, describe_error
    from geumbok.core.env import setup_logging

    setup_logging()

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    console = Console()

    config = load_config(args.config_file)
    try:
        return _COMMANDS[args.subcommand](args, config, console)
    except ApiError as exc:
        Console(stderr=True).print(f"[red]{describe_error(exc)}[/red] [dim]({exc})[/dim]")
        return 1
