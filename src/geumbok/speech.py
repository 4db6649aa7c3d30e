"""Speech input/output adapters.

Real speech-to-text and text-to-speech are provided by the platform the
assistant is embedded in; anything that satisfies the protocols in
geumbok.core.protocols plugs into the assistant. The adapters here cover
typed input, scripted replays and console output.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from rich.console import Console
from rich.text import Text

from geumbok.core.constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_SPEECH_PITCH,
    DEFAULT_SPEECH_RATE,
)

_STOP_WORDS: Final = frozenset({"종료", "그만", "quit", "exit"})


@dataclass(frozen=True, slots=True)
class SpeechOptions:
    """Voice settings passed to a speaker."""

    language: str = DEFAULT_LANGUAGE
    pitch: float = DEFAULT_SPEECH_PITCH
    rate: float = DEFAULT_SPEECH_RATE


class ScriptedRecognizer:
    """Replays a fixed sequence of utterances, then reports end of input."""

    def __init__(self, utterances: Iterable[str]) -> None:
        self._pending = list(utterances)
        self._index = 0

    def listen(self) -> str | None:
        if self._index >= len(self._pending):
            return None
        text = self._pending[self._index]
        self._index += 1
        return text


class ConsoleRecognizer:
    """Reads typed utterances from the terminal.

    End of input (Ctrl+D) or a stop word such as "종료" ends the stream.
    """

    def __init__(self, console: Console | None = None, prompt: str = "🎤 ") -> None:
        self._console = console or Console()
        self._prompt = prompt

    def listen(self) -> str | None:
        try:
            text = self._console.input(self._prompt)
        except (EOFError, KeyboardInterrupt):
            return None
        if text.strip().lower() in _STOP_WORDS:
            return None
        return text


class ConsoleSpeaker:
    """Prints what would be spoken."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def speak(self, text: str, options: SpeechOptions | None = None) -> None:
        self._console.print(Text(f"🔊 {text}", style="bold cyan"))

    def stop(self) -> None:
        pass


class SilentSpeaker:
    """Speaker that discards everything."""

    def speak(self, text: str, options: SpeechOptions | None = None) -> None:
        pass

    def stop(self) -> None:
        pass
