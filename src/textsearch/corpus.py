"""
Corpus readers: yield (document name, lines) pairs for the indexer.

- DirectoryCorpus walks a folder recursively.
- ZipCorpus reads the members of a .zip archive.

Only files whose suffix is in `extensions` are read. HTML files are reduced
to their visible text with BeautifulSoup first. A document is named by its
path relative to the corpus root, '/'-separated, without the suffix
(``books/hound.txt`` -> ``books/hound``).

A path that is neither a folder nor a zip archive is rejected up front
(NotADirectoryError, zipfile.BadZipFile). A file that cannot be read or
decoded is skipped: a warning is logged and (name, reason) is appended to
`skipped`. Iterating again re-reads the source.
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, List, Tuple, Union

from bs4 import BeautifulSoup, Comment

from .config import DEFAULT_EXTENSIONS, HTML_EXTENSIONS

log = logging.getLogger(__name__)

Document = Tuple[str, List[str]]


def _text_from_html(raw: bytes) -> str:
    """Visible text of an HTML page (scripts, styles and comments removed)."""
    soup = BeautifulSoup(raw, "html.parser")
    for s in soup.find_all(["script", "style", "noscript"]):
        s.extract()
    for c in soup.find_all(string=lambda it: isinstance(it, Comment)):
        c.extract()
    return soup.get_text(separator="\n")


def _lines_from_bytes(raw: bytes, suffix: str) -> List[str]:
    if suffix in HTML_EXTENSIONS:
        return _text_from_html(raw).splitlines()
    return raw.decode("utf-8-sig").splitlines()


def _doc_name(relative: PurePosixPath) -> str:
    return relative.with_suffix("").as_posix()


class _Corpus:
    def __init__(self, path: Union[str, Path], extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"[Errno 2] No such file or directory: {str(self.path)!r}")
        self.extensions = tuple(e.lower() for e in extensions)
        self.skipped: List[Tuple[str, str]] = []

    def _wanted(self, name: str) -> bool:
        return PurePosixPath(name).suffix.lower() in self.extensions

    def _skip(self, name: str, err: Exception) -> None:
        reason = f"{type(err).__name__}: {err}"
        log.warning("Skipping %s (%s)", name, reason)
        self.skipped.append((name, reason))


class DirectoryCorpus(_Corpus):
    """All matching files under a folder, visited in sorted path order."""

    def __init__(self, path: Union[str, Path], extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        super().__init__(path, extensions)
        if not self.path.is_dir():
            raise NotADirectoryError(f"[Errno 20] Not a directory: {str(self.path)!r}")

    def __iter__(self) -> Iterator[Document]:
        self.skipped = []
        for path in sorted(self.path.rglob("*")):
            if not path.is_file() or not self._wanted(path.name):
                continue
            name = _doc_name(PurePosixPath(path.relative_to(self.path).as_posix()))
            try:
                lines = _lines_from_bytes(path.read_bytes(), path.suffix.lower())
            except (OSError, UnicodeDecodeError) as e:
                self._skip(name, e)
                continue
            log.debug("read %s (%d lines)", path, len(lines))
            yield name, lines


class ZipCorpus(_Corpus):
    """All matching members of a .zip archive, in archive order."""

    def __init__(self, path: Union[str, Path], extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        super().__init__(path, extensions)
        if not zipfile.is_zipfile(self.path):
            raise zipfile.BadZipFile(f"File is not a zip file: {str(self.path)!r}")

    def __iter__(self) -> Iterator[Document]:
        self.skipped = []
        with zipfile.ZipFile(self.path, "r") as z:
            for member in z.infolist():
                if member.is_dir() or not self._wanted(member.filename):
                    continue
                rel = PurePosixPath(member.filename)
                name = _doc_name(rel)
                # corrupt deflate data, encrypted members and unknown compression
                # methods raise zlib.error, RuntimeError and NotImplementedError
                try:
                    with z.open(member) as f:
                        raw = f.read()
                    lines = _lines_from_bytes(raw, rel.suffix.lower())
                except (OSError, EOFError, UnicodeDecodeError, zipfile.BadZipFile,
                        zlib.error, RuntimeError, NotImplementedError) as e:
                    self._skip(name, e)
                    continue
                yield name, lines


def open_corpus(path: Union[str, Path], extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> _Corpus:
    """ZipCorpus for a .zip file, DirectoryCorpus for anything else."""
    p = Path(path)
    if p.suffix.lower() == ".zip" and p.is_file():
        return ZipCorpus(p, extensions)
    return DirectoryCorpus(p, extensions)
