"""Structural type protocols for speech input and output."""

from typing import Any, Protocol


class RecognizerLike(Protocol):
    """Structural type for speech-to-text sources.

    ``listen`` blocks until one utterance is available and returns its
    transcript, or None once the source is exhausted.
    """

    def listen(self) -> str | None: ...


class SpeakerLike(Protocol):
    """Structural type for text-to-speech sinks."""

    def speak(self, text: str, options: Any = None) -> None: ...

    def stop(self) -> None: ...
