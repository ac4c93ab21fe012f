"""Command vocabulary and phrase matching for synapse_voice.

``phrase_table`` declares the closed set of commands and the English phrases
that name them; ``phrase_matcher`` turns a transcript fragment into one of
those commands.
"""

from .phrase_table import (  # noqa: F401
    PHRASE_TABLE,
    WAKE_PHRASE,
    Command,
    CommandEvent,
    PhraseTable,
    phrases_for,
)
from .phrase_matcher import PhraseMatcher, clean_text, match  # noqa: F401

__all__ = [
    "PHRASE_TABLE",
    "WAKE_PHRASE",
    "Command",
    "CommandEvent",
    "PhraseTable",
    "PhraseMatcher",
    "clean_text",
    "match",
    "phrases_for",
]
