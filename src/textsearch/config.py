"""Defaults shared by the indexer, the corpus readers and the launchers.

Everything here can be overridden per run from the command line; the
dataclass just bundles the values so the GUI and CLI pass one object around.
"""
from __future__ import annotations

import argparse
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

# ASCII punctuation plus the typographic quotes and dashes common in books
DEFAULT_SPECIAL_CHARACTERS = string.punctuation + "‘’“”–—…"

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".txt",)
HTML_EXTENSIONS: Tuple[str, ...] = (".html", ".htm")

DEFAULT_CORPUS = "Dataset"


@dataclass(frozen=True)
class SearchConfig:
    corpus_path: Path = Path(DEFAULT_CORPUS)
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS
    normalize_queries: bool = True

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SearchConfig":
        """Build a config from the launcher's parsed arguments."""
        exts = tuple(_dotted(e) for e in (args.ext or DEFAULT_EXTENSIONS))
        chars = args.special_chars if args.special_chars is not None else DEFAULT_SPECIAL_CHARACTERS
        return cls(
            corpus_path=Path(args.corpus),
            extensions=exts,
            special_characters=chars,
            normalize_queries=not args.no_normalize,
        )


def _dotted(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"
