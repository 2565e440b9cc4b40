import pytest

from textsearch.indexer import build_index

SAMPLE = ("sample", ["the quick fox", "the lazy fox runs"])


@pytest.fixture
def sample_index():
    return build_index([SAMPLE])


@pytest.fixture
def library_index():
    return build_index([
        SAMPLE,
        ("hound", ["I had recorded in my notebook", "the quick   fox", "", "jumped the fox"]),
        ("empty", ["", "   "]),
    ])
