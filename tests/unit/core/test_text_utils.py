"""Unit tests for core/utils/text.py"""

import hashlib

import pytest

from mdedit.core.commands import toggle_mark
from mdedit.core.models import empty_document
from mdedit.core.selection import select_all
from mdedit.core.serialize import serialize
from mdedit.core.utils.text import content_hash, plain_text, word_count


def test_plain_text_strips_markup(sample_doc):
    assert plain_text(sample_doc) == (
        "Chapter One\nIt was a dark and stormy night.\nrain\nwind\nthunder\nNevermore."
    )


@pytest.mark.parametrize("text,expected", [
    ("", 0),
    ("   \n\t", 0),
    ("one", 1),
    ("  two words  ", 2),
    ("# Title\n\nBody text here.", 5),
])
def test_word_count(text, expected):
    assert word_count(text) == expected


def test_content_hash_tracks_serialized_content(sample_doc):
    assert content_hash(sample_doc) == hashlib.sha256(serialize(sample_doc).encode("utf-8")).hexdigest()
    assert content_hash(empty_document()) == hashlib.sha256(b"").hexdigest()

    changed = toggle_mark(sample_doc, select_all(sample_doc), "italic")
    assert content_hash(changed) != content_hash(sample_doc)
