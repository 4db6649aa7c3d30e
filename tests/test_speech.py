"""Tests for geumbok.speech — recognizer and speaker adapters."""

from __future__ import annotations

import io

from rich.console import Console

from geumbok.core.constants import DEMO_UTTERANCES
from geumbok.speech import (
    ConsoleRecognizer,
    ConsoleSpeaker,
    ScriptedRecognizer,
    SilentSpeaker,
    SpeechOptions,
)


def _console() -> tuple[Console, io.StringIO]:
    out = io.StringIO()
    return Console(file=out, force_terminal=False, width=80), out


class TestSpeechOptions:
    def test_defaults(self) -> None:
        opts = SpeechOptions()
        assert opts.language == "ko-KR"
        assert opts.pitch == 1.0
        assert opts.rate == 0.8


class TestScriptedRecognizer:
    def test_replays_then_ends(self) -> None:
        rec = ScriptedRecognizer(["가계부", "안녕"])
        assert rec.listen() == "가계부"
        assert rec.listen() == "안녕"
        assert rec.listen() is None
        assert rec.listen() is None

    def test_demo_utterances(self) -> None:
        rec = ScriptedRecognizer(DEMO_UTTERANCES)
        heard = []
        while (text := rec.listen()) is not None:
            heard.append(text)
        assert heard == list(DEMO_UTTERANCES)


class TestConsoleRecognizer:
    def test_reads_typed_line(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("커피 5000원\n"))
        console, _ = _console()
        assert ConsoleRecognizer(console).listen() == "커피 5000원"

    def test_stop_word_ends_stream(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("종료\n"))
        console, _ = _console()
        assert ConsoleRecognizer(console).listen() is None

    def test_eof_ends_stream(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        console, _ = _console()
        assert ConsoleRecognizer(console).listen() is None


class TestSpeakers:
    def test_console_speaker_prints(self) -> None:
        console, out = _console()
        ConsoleSpeaker(console).speak("[bold]가계부[/bold] 화면")
        assert "[bold]가계부[/bold] 화면" in out.getvalue()

    def test_silent_speaker(self) -> None:
        speaker = SilentSpeaker()
        speaker.speak("hello", SpeechOptions())
        speaker.stop()
