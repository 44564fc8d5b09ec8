"""UI-agnostic document session core for a plain-text editor."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "files",
    "runtime",
    "session",
]

__version__ = "0.1.0"
