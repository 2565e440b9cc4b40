"""Turn a document's lines into term -> positions.

Positions count every non-blank word of the document, left to right, across
line boundaries. A word that is nothing but special characters (``--``,
``"``) still takes a position but is not indexed, so a phrase can never match
across it.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, Iterable, List

from .config import DEFAULT_SPECIAL_CHARACTERS


@lru_cache(maxsize=16)
def _strip_pattern(special_characters: str) -> "re.Pattern[str]":
    if not special_characters:
        # nothing to strip; matches nowhere
        return re.compile(r"(?!)")
    return re.compile("[" + re.escape(special_characters) + "]+")


def normalize_word(word: str, special_characters: str = DEFAULT_SPECIAL_CHARACTERS) -> str:
    """Strip special characters and lowercase. May return ''."""
    return _strip_pattern(special_characters).sub("", word).lower()


def tokenize(
    lines: Iterable[str],
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS,
) -> Dict[str, List[int]]:
    """Map each term of a document to the ascending list of its positions."""
    positions: Dict[str, List[int]] = {}
    pos = 0
    for line in lines:
        # str.split() collapses whitespace runs, so blank words never show up
        # and never consume a position
        for word in line.split():
            term = normalize_word(word, special_characters)
            if term:
                positions.setdefault(term, []).append(pos)
            pos += 1
    return positions
