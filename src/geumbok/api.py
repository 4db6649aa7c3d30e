"""Public API for the geumbok command interpreter.

Nothing here touches the network, speech hardware or a UI, so
``import geumbok.api`` is cheap and safe anywhere.

Typical usage::

    from geumbok.api import interpret

    result = interpret("커피 5000원 샀어")
    print(result.command.intent, result.response)
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from geumbok.core.categories import resolve_category
from geumbok.core.classifier import classify
from geumbok.core.responses import respond, screen_for
from geumbok.core.text import apply_corrections, normalize_utterance
from geumbok.core.types import ExpenseData, VoiceCommand

__all__ = [
    "ExpenseData",
    "InterpretOptions",
    "InterpretResult",
    "VoiceCommand",
    "classify",
    "interpret",
    "resolve_category",
    "respond",
]


@dataclass(frozen=True, slots=True)
class InterpretOptions:
    """Options controlling utterance pre-processing.

    Attributes:
        corrections: Misrecognition → correction replacements applied
            before classification.
        normalize: Collapse whitespace and drop zero-width characters.
    """

    corrections: dict[str, str] = field(default_factory=dict)
    normalize: bool = True


@dataclass(frozen=True, slots=True)
class InterpretResult:
    """Immutable result of interpreting one utterance.

    Attributes:
        text: The utterance after pre-processing.
        command: Classified command.
        response: Canned response for *command*.
        screen: Screen to navigate to, or None.
        latency_ms: Wall-clock interpretation time in milliseconds.
    """

    text: str
    command: VoiceCommand
    response: str
    screen: str | None
    latency_ms: float


def interpret(text: str, options: InterpretOptions | None = None) -> InterpretResult:
    """Pre-process, classify and answer a single utterance.

    Args:
        text: Raw transcript or typed input.
        options: Pre-processing options (defaults to :class:`InterpretOptions`).

    Returns:
        An :class:`InterpretResult`. Unrecognised input yields the
        ``unknown`` intent, never an exception.
    """
    opts = options or InterpretOptions()

    start = time.perf_counter()
    if opts.normalize:
        text = normalize_utterance(text)
    if opts.corrections:
        text = apply_corrections(text, opts.corrections)
    command = classify(text)
    response = respond(command)
    elapsed_ms = (time.perf_counter() - start) * 1000

    return InterpretResult(
        text=text,
        command=command,
        response=response,
        screen=screen_for(command.intent),
        latency_ms=elapsed_ms,
    )
