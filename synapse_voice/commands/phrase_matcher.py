"""
Phrase matching for voice commands.

A fragment of transcript is cleaned (lowercased, reduced to letters and
single spaces) and then looked up in a phrase table: an exact key wins
outright, otherwise the first key the text contains, in table order.  The
matcher holds no state beyond its table, so a single instance can be shared
freely.
"""
from __future__ import annotations

import re
from typing import Optional

from .phrase_table import PHRASE_TABLE, Command, PhraseTable

_NON_LETTERS = re.compile(r"[^a-z ]+")
_WHITESPACE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Lowercase ``text``, drop anything but letters and spaces, collapse whitespace."""
    lowered = _WHITESPACE.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", _NON_LETTERS.sub("", lowered)).strip()


class PhraseMatcher:
    """
    Matches cleaned text against a phrase table.

    Matching tries an exact key first, then falls back to the first key that
    appears anywhere in the text.  Keys are tried in the table's iteration
    order, so when two keys both occur in a transcript the earlier
    declaration wins.
    """

    def __init__(self, table: PhraseTable = PHRASE_TABLE) -> None:
        for phrase in table:
            if phrase != clean_text(phrase) or not phrase:
                raise ValueError(f"phrase table key {phrase!r} is not normalized")
        self._table = table

    @property
    def table(self) -> PhraseTable:
        return self._table

    def match(self, text: str) -> Optional[Command]:
        """Return the command ``text`` names, or ``None``."""
        cleaned = clean_text(text)
        if not cleaned:
            return None
        exact = self._table.get(cleaned)
        if exact is not None:
            return exact
        for phrase, command in self._table.items():
            if phrase in cleaned:
                return command
        return None

    __call__ = match


default_matcher = PhraseMatcher()


def match(text: str) -> Optional[Command]:
    """Match ``text`` against the built-in :data:`PHRASE_TABLE`."""
    return default_matcher.match(text)
