"""Assistant session: interpret utterances, keep the ledger, answer aloud.

An Assistant bundles everything one conversation needs (configuration,
ledger, speaker, optional backend client) as plain objects, so several
sessions can run side by side without shared state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from geumbok.api import InterpretOptions, InterpretResult, interpret
from geumbok.apps.config import GeumbokConfig
from geumbok.client import ApiError, GeumbokClient, describe_error
from geumbok.core.env import LOGGER
from geumbok.core.protocols import RecognizerLike, SpeakerLike
from geumbok.ledger import Expense, Ledger
from geumbok.speech import SilentSpeaker


@dataclass(frozen=True, slots=True)
class Turn:
    """One handled utterance.

    Attributes:
        utterance: Input as received, before pre-processing.
        result: Interpretation of the utterance.
        expense: Ledger entry created for an ``expense`` command.
        synced: True when the expense was also stored by the backend.
        error: User-facing message when syncing failed.
    """

    utterance: str
    result: InterpretResult
    expense: Expense | None = None
    synced: bool = False
    error: str = ""

    @property
    def response(self) -> str:
        return self.result.response

    @property
    def intent(self) -> str:
        return self.result.command.intent


class Assistant:
    """Per-session command handling around the interpreter."""

    def __init__(
        self,
        config: GeumbokConfig | None = None,
        ledger: Ledger | None = None,
        speaker: SpeakerLike | None = None,
        client: GeumbokClient | None = None,
    ) -> None:
        self.config = config or GeumbokConfig()
        self.ledger = ledger if ledger is not None else Ledger()
        self.speaker: SpeakerLike = speaker or SilentSpeaker()
        self.client = client
        self.speech_enabled = self.config.speech.enabled
        self.history: list[Turn] = []
        self._options = InterpretOptions(corrections=dict(self.config.corrections))

    def toggle_speech(self) -> bool:
        """Flip spoken responses on/off; stops any speech in progress."""
        self.speech_enabled = not self.speech_enabled
        self.speaker.stop()
        return self.speech_enabled

    def say(self, text: str) -> None:
        """Speak *text* if spoken responses are enabled."""
        if self.speech_enabled:
            self.speaker.speak(text, self.config.speech.options())

    def handle(self, text: str, speak: bool = True) -> Turn | None:
        """Interpret *text* and act on it.

        Input that is blank after normalization (whitespace or zero-width
        characters only) is ignored and returns None.

        *speak=False* leaves speaking to the caller, e.g. when it answers
        with something other than the canned response.
        """
        if not text or not text.strip():
            return None

        result = interpret(text, self._options)
        if not result.text:
            return None
        LOGGER.debug(
            "intent=%s screen=%s latency=%.2fms",
            result.command.intent,
            result.screen,
            result.latency_ms,
        )

        expense: Expense | None = None
        synced = False
        error = ""
        if result.command.intent == "expense":
            expense = self.ledger.record(result.command)
            if self.client is not None:
                try:
                    self.client.add_expense(expense)
                    synced = True
                except ApiError as exc:
                    error = describe_error(exc, "지출 동기화에 실패했습니다.")
                    LOGGER.warning(
                        "Expense %d kept locally, backend sync failed: %s",
                        expense.id,
                        exc,
                    )

        if speak:
            self.say(result.response)

        turn = Turn(
            utterance=text,
            result=result,
            expense=expense,
            synced=synced,
            error=error,
        )
        self.history.append(turn)
        return turn


def run_voice_loop(
    assistant: Assistant,
    recognizer: RecognizerLike,
    on_turn: Callable[[Turn], None] | None = None,
) -> int:
    """Feed utterances from *recognizer* to *assistant* until it runs dry.

    Returns the number of turns handled (blank utterances do not count).
    """
    handled = 0
    while True:
        text = recognizer.listen()
        if text is None:
            break
        turn = assistant.handle(text)
        if turn is None:
            continue
        handled += 1
        if on_turn is not None:
            on_turn(turn)
    return handled
