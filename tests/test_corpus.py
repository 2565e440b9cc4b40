import struct
import zipfile

import pytest

from textsearch.corpus import DirectoryCorpus, ZipCorpus, open_corpus
from textsearch.indexer import DuplicateDocumentError, build_index
from textsearch.query import search_phrase

PAGE = (
    "<html><head><style>p { color: red }</style></head><body>"
    "<!-- hidden note --><p>Hello <b>World</b></p>"
    "<script>var secret = 1;</script></body></html>"
)


@pytest.fixture
def dataset(tmp_path):
    root = tmp_path / "Dataset"
    (root / "books").mkdir(parents=True)
    (root / "sample.txt").write_text("the quick fox\nthe lazy fox runs\n", encoding="utf-8")
    (root / "books" / "hound.txt").write_text("I had recorded in my notebook\n", encoding="utf-8")
    (root / "notes.md").write_text("ignored entirely\n", encoding="utf-8")
    (root / "page.html").write_text(PAGE, encoding="utf-8")
    (root / "bad.txt").write_bytes(b"\xff\xfe\xfa not utf-8")
    return root


def test_directory_corpus_reads_matching_files(dataset):
    corpus = DirectoryCorpus(dataset)
    docs = dict(corpus)
    assert sorted(docs) == ["books/hound", "sample"]
    assert docs["sample"] == ["the quick fox", "the lazy fox runs"]


def test_unreadable_document_is_skipped_and_recorded(dataset):
    corpus = DirectoryCorpus(dataset)
    inv = build_index(corpus)
    assert "bad" not in inv.documents
    assert [name for name, _ in corpus.skipped] == ["bad"]
    assert "UnicodeDecodeError" in corpus.skipped[0][1]
    assert dict(search_phrase(inv, "the quick fox")) == {"sample": (0,)}


def test_html_is_reduced_to_visible_text(dataset):
    inv = build_index(DirectoryCorpus(dataset, extensions=(".html",)))
    assert inv.documents == frozenset({"page"})
    assert dict(search_phrase(inv, "hello world")) == {"page": (0,)}
    assert "secret" not in inv
    assert "hidden" not in inv
    assert "color" not in inv


def test_missing_corpus_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        DirectoryCorpus(tmp_path / "nope")
    with pytest.raises(FileNotFoundError):
        open_corpus(tmp_path / "nope.zip")


def test_zip_corpus(tmp_path):
    zp = tmp_path / "books.zip"
    with zipfile.ZipFile(zp, "w") as z:
        z.writestr("Dataset/", "")
        z.writestr("Dataset/sample.txt", "the quick fox\nthe lazy fox runs\n")
        z.writestr("Dataset/page.html", PAGE)
        z.writestr("Dataset/readme.md", "skip me")

    corpus = open_corpus(zp, extensions=(".txt", ".html"))
    assert isinstance(corpus, ZipCorpus)
    inv = build_index(corpus)
    assert inv.documents == frozenset({"Dataset/sample", "Dataset/page"})
    assert dict(search_phrase(inv, "fox runs")) == {"Dataset/sample": (5,)}
    assert corpus.skipped == []


def test_same_name_with_two_extensions_is_a_duplicate(tmp_path):
    root = tmp_path / "c"
    root.mkdir()
    (root / "a.txt").write_text("one", encoding="utf-8")
    (root / "a.html").write_text("<p>two</p>", encoding="utf-8")
    with pytest.raises(DuplicateDocumentError):
        build_index(open_corpus(root, extensions=(".txt", ".html")))


def test_corpus_can_be_iterated_again(dataset):
    corpus = open_corpus(dataset)
    assert isinstance(corpus, DirectoryCorpus)
    assert [n for n, _ in corpus] == [n for n, _ in corpus]
    assert len(corpus.skipped) == 1


def _scramble_member(zp, member_name):
    """Flip every compressed byte of one member, leaving the archive index intact."""
    with zipfile.ZipFile(zp) as z:
        info = z.getinfo(member_name)
    data = bytearray(zp.read_bytes())
    name_len, extra_len = struct.unpack("<HH", data[info.header_offset + 26:info.header_offset + 30])
    start = info.header_offset + 30 + name_len + extra_len
    for i in range(start, start + info.compress_size):
        data[i] ^= 0xFF
    zp.write_bytes(bytes(data))


def test_corrupt_zip_member_is_skipped(tmp_path):
    zp = tmp_path / "books.zip"
    with zipfile.ZipFile(zp, "w", compression=zipfile.ZIP_DEFLATED) as z:
        z.writestr("good.txt", "the quick fox\nthe lazy fox runs\n")
        z.writestr("bad.txt", "it was the best of times, it was the worst of times\n" * 20)
    _scramble_member(zp, "bad.txt")

    corpus = open_corpus(zp)
    inv = build_index(corpus)
    assert inv.documents == frozenset({"good"})
    assert dict(search_phrase(inv, "fox runs")) == {"good": (5,)}
    assert [name for name, _ in corpus.skipped] == ["bad"]


def test_zip_suffix_on_a_non_archive_is_rejected(tmp_path):
    fake = tmp_path / "books.zip"
    fake.write_text("just text", encoding="utf-8")
    with pytest.raises(zipfile.BadZipFile):
        open_corpus(fake)


def test_plain_file_is_not_a_corpus(tmp_path):
    book = tmp_path / "book.txt"
    book.write_text("the quick fox", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        open_corpus(book)
    with pytest.raises(NotADirectoryError):
        DirectoryCorpus(book)
