"""Shared fixtures for core unit tests"""

import pytest

from mdedit.core.value import from_value


SAMPLE_VALUE = [
    {"type": "heading-one", "children": [{"text": "Chapter One"}]},
    {"type": "paragraph", "children": [
        {"text": "It was a "},
        {"text": "dark", "bold": True},
        {"text": " and "},
        {"text": "stormy", "italic": True, "underline": True},
        {"text": " night."},
    ]},
    {"type": "bulleted-list", "children": [
        {"type": "list-item", "children": [{"text": "rain"}]},
        {"type": "list-item", "children": [{"text": "wind"}]},
        {"type": "list-item", "children": [{"text": "thunder"}]},
    ]},
    {"type": "block-quote", "children": [{"text": "Nevermore."}]},
]


@pytest.fixture(name="sample_value")
def sample_value_fixture():
    return SAMPLE_VALUE


@pytest.fixture(name="sample_doc")
def sample_doc_fixture():
    return from_value(SAMPLE_VALUE)
