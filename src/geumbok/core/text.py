"""Text clean-up applied to recognizer output before classification.

Speech engines emit odd whitespace and recurring misrecognitions
("가게부" for "가계부"); both are fixed here so the classifier only sees
ordinary text.
"""

import re

_WS_RE = re.compile(r"\s+")
_INVISIBLE = {
    "\u00a0": " ",
    "\u200b": "",
    "\u200e": "",
    "\ufeff": "",
}


def normalize_utterance(text: str) -> str:
    """Strip *text*, drop zero-width characters and collapse whitespace runs."""
    for src, dst in _INVISIBLE.items():
        text = text.replace(src, dst)
    return _WS_RE.sub(" ", text).strip()


def apply_corrections(text: str, corrections: dict[str, str]) -> str:
    """Apply user-configured misrecognition corrections to text.

    Each key in *corrections* is matched literally and case-insensitively
    and replaced with the corresponding value.
    """
    for wrong, correct in corrections.items():
        if not wrong:
            continue
        pattern = re.compile(re.escape(wrong), re.IGNORECASE)
        text = pattern.sub(correct, text)
    return text
