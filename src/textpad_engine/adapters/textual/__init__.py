"""Textual host for the session engine."""

from .controller import TextualSessionAdapter, TextualUIHooks

__all__ = ["TextualSessionAdapter", "TextualUIHooks"]
