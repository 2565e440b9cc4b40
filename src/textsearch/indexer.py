"""
Positional inverted index: term -> {document name -> positions}.

Build with IndexBuilder (or build_index for a whole corpus). The builder owns
the only mutable state; build() hands back an InvertedIndex that has no
mutating methods, stores posting lists as tuples and exposes its inner maps
as read-only proxies. Queries live in query.py.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Tuple

from .config import DEFAULT_SPECIAL_CHARACTERS
from .tokenizer import tokenize

log = logging.getLogger(__name__)

Positions = Tuple[int, ...]
Postings = Mapping[str, Positions]

EMPTY_POSTINGS: Postings = MappingProxyType({})


class DuplicateDocumentError(ValueError):
    """Raised when two documents in one build share a name."""

    def __init__(self, name: str):
        super().__init__(f"document {name!r} was already added to this index")
        self.name = name


# ---------------------------
# Built (read-only) index
# ---------------------------

class InvertedIndex:
    """term -> {document name -> ascending positions}. Read-only."""

    def __init__(
        self,
        postings: Dict[str, Dict[str, Positions]],
        documents: FrozenSet[str],
        special_characters: str,
    ):
        self._inv: Mapping[str, Postings] = MappingProxyType(
            {term: MappingProxyType(docs) for term, docs in postings.items()}
        )
        self._documents = documents
        self._special_characters = special_characters

    def postings(self, term: str) -> Postings:
        """Return {document -> positions} for a term, or an empty mapping."""
        return self._inv.get(term, EMPTY_POSTINGS)

    def terms(self) -> Iterator[str]:
        return iter(self._inv)

    @property
    def documents(self) -> FrozenSet[str]:
        """Every indexed document name, including ones with no terms."""
        return self._documents

    @property
    def special_characters(self) -> str:
        """Characters stripped from words when this index was built."""
        return self._special_characters

    def __contains__(self, term: object) -> bool:
        return term in self._inv

    def __len__(self) -> int:
        return len(self._inv)

    def __repr__(self) -> str:
        return f"<InvertedIndex terms={len(self)} documents={len(self._documents)}>"


# ---------------------------
# Builder
# ---------------------------

class IndexBuilder:
    """Accumulates documents, then freezes them into an InvertedIndex."""

    def __init__(self, special_characters: str = DEFAULT_SPECIAL_CHARACTERS):
        self.special_characters = special_characters
        self._inv: Dict[str, Dict[str, Positions]] = {}
        self._documents: set = set()

    def add_document(self, name: str, lines: Iterable[str]) -> int:
        """Tokenize one document and fold it in. Returns its number of distinct terms."""
        if name in self._documents:
            raise DuplicateDocumentError(name)

        # tokenize first: a failing line source must not leave partial postings
        doc_terms = tokenize(lines, self.special_characters)

        self._documents.add(name)
        for term, positions in doc_terms.items():
            self._inv.setdefault(term, {})[name] = tuple(positions)

        log.debug("indexed %s: %d distinct terms", name, len(doc_terms))
        return len(doc_terms)

    def build(self) -> InvertedIndex:
        """Snapshot everything added so far. Later adds do not affect it."""
        snapshot = {term: dict(docs) for term, docs in self._inv.items()}
        return InvertedIndex(snapshot, frozenset(self._documents), self.special_characters)


def build_index(
    corpus: Iterable[Tuple[str, List[str]]],
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS,
) -> InvertedIndex:
    """Build an index from (name, lines) pairs in one pass."""
    builder = IndexBuilder(special_characters)
    for name, lines in corpus:
        builder.add_document(name, lines)
    index = builder.build()
    log.info("Indexed %d documents, %d terms.", len(index.documents), len(index))
    return index
