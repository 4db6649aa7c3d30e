__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy re-exports from geumbok.api for convenience."""
    _api_names = {
        "ExpenseData",
        "InterpretOptions",
        "InterpretResult",
        "VoiceCommand",
        "classify",
        "interpret",
        "resolve_category",
        "respond",
    }
    if name in _api_names:
        from geumbok import api

        return getattr(api, name)
    raise AttributeError(f"module 'geumbok' has no attribute {name!r}")
