"""textsearch launcher (GUI by default; CLI with --cli, one-shot with --term/--phrase)

Usage
-----
# GUI (default)
python -m textsearch.main Dataset

# interactive terminal loop
python -m textsearch.main Dataset --cli

# one query, then exit
python -m textsearch.main books.zip --phrase "recorded in my notebook"
python -m textsearch.main Dataset --term murder --ext txt --ext html

In the --cli loop a query wrapped in double quotes is a phrase search,
anything else is a single-term search. An empty line quits.
"""
from __future__ import annotations

import argparse
import logging
import zipfile
from typing import List, Mapping, Optional, Sequence

from .config import DEFAULT_CORPUS, SearchConfig
from .corpus import open_corpus
from .indexer import DuplicateDocumentError, InvertedIndex, build_index
from .query import normalize_query, search_phrase, search_term

log = logging.getLogger(__name__)


def load_index(config: SearchConfig) -> InvertedIndex:
    corpus = open_corpus(config.corpus_path, config.extensions)
    inv = build_index(corpus, config.special_characters)
    if corpus.skipped:
        log.warning("%d document(s) could not be read and were skipped.", len(corpus.skipped))
    return inv


def run_query(inv: InvertedIndex, query: str, phrase: bool, normalize: bool = True) -> Mapping[str, Sequence[int]]:
    if normalize:
        query = normalize_query(query, inv.special_characters)
    return search_phrase(inv, query) if phrase else search_term(inv, query)


def format_hits(hits: Mapping[str, Sequence[int]]) -> List[str]:
    """One 'name: p1, p2, ...' line per document, sorted by name."""
    if not hits:
        return ["no match"]
    return [f"{name}: {', '.join(str(p) for p in hits[name])}" for name in sorted(hits)]


def run_cli(inv: InvertedIndex, config: SearchConfig) -> None:
    print(f"Indexed {len(inv.documents)} documents ({len(inv)} terms).")
    while True:
        try:
            q = input("enter a search key=> ").strip()
        except EOFError:
            q = ""
        if q == "":
            print("Bye")
            break
        phrase = len(q) > 1 and q.startswith('"') and q.endswith('"')
        if phrase:
            q = q[1:-1]
        for line in format_hits(run_query(inv, q, phrase, config.normalize_queries)):
            print(line)


def run_gui(config: SearchConfig) -> None:
    # tkinter is only needed here; keep the CLI usable without it
    from .gui import TextSearchGUI

    app = TextSearchGUI(config)
    app.mainloop()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Positional full-text search over a folder or zip of documents")
    parser.add_argument("corpus", nargs="?", default=DEFAULT_CORPUS, help="folder or .zip to index (default: %(default)s)")
    parser.add_argument("--ext", action="append", help="file extension to index; repeatable (default: .txt)")
    parser.add_argument("--special-chars", default=None, help="characters stripped from every word")
    parser.add_argument("--no-normalize", action="store_true", help="look queries up exactly as typed")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--cli", action="store_true", help="run the interactive terminal loop instead of the GUI")
    mode.add_argument("--term", help="search one term and exit")
    mode.add_argument("--phrase", help="search one exact phrase and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    config = SearchConfig.from_args(args)

    if not (args.cli or args.term is not None or args.phrase is not None):
        run_gui(config)
        return 0

    try:
        inv = load_index(config)
    except (FileNotFoundError, NotADirectoryError, zipfile.BadZipFile, DuplicateDocumentError) as e:
        log.error("%s", e)
        return 1

    if args.cli:
        run_cli(inv, config)
    else:
        phrase = args.phrase is not None
        query = args.phrase if phrase else args.term
        for line in format_hits(run_query(inv, query, phrase, config.normalize_queries)):
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
