"""
Term and phrase search over a built InvertedIndex.

Both functions do exact lookups: the caller is responsible for normalizing
the query the same way the corpus was normalized (see normalize_query).
Neither raises; "no match" is an empty mapping.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Set, Tuple

from .indexer import EMPTY_POSTINGS, InvertedIndex, Positions
from .tokenizer import normalize_word


def normalize_query(text: str, special_characters: str) -> str:
    """Apply the index-time word normalization to every word of a query."""
    words = (normalize_word(w, special_characters) for w in text.split())
    return " ".join(w for w in words if w)


# ---------------------------
# Term Search
# ---------------------------

def search_term(inv: InvertedIndex, term: str) -> Mapping[str, Positions]:
    """Return the stored {document -> positions} for a term."""
    if not term or not term.strip():
        return EMPTY_POSTINGS
    return inv.postings(term)


# ---------------------------
# Phrase Search (exact adjacency)
# ---------------------------

def _candidate_docs(inv: InvertedIndex, tokens: List[str]) -> Set[str]:
    """Documents that contain every token."""
    docs = set(inv.postings(tokens[0]))
    for t in tokens[1:]:
        docs.intersection_update(inv.postings(t))
        if not docs:
            break
    return docs


def _phrase_starts(first: Positions, rest: List[Set[int]]) -> Tuple[int, ...]:
    """Start positions p where rest[i] holds p + i + 1 for every i."""
    return tuple(
        p for p in first
        if all(p + offset in positions for offset, positions in enumerate(rest, start=1))
    )


def search_phrase(inv: InvertedIndex, phrase: str) -> Mapping[str, Positions]:
    """Return {document -> start positions} where the phrase occurs verbatim."""
    tokens = phrase.split() if phrase else []
    if not tokens:
        return EMPTY_POSTINGS
    if len(tokens) == 1:
        return search_term(inv, tokens[0])

    # any token missing from the whole corpus means no match anywhere
    if any(t not in inv for t in tokens):
        return EMPTY_POSTINGS

    out: Dict[str, Positions] = {}
    for doc in _candidate_docs(inv, tokens):
        first = inv.postings(tokens[0])[doc]
        rest = [set(inv.postings(t)[doc]) for t in tokens[1:]]
        starts = _phrase_starts(first, rest)
        if starts:
            out[doc] = starts
    return out
