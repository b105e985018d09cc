"""Unit tests for core/value.py"""

import json

import pytest

from mdedit.core.models import Mark
from mdedit.core.value import from_value, to_value
from mdedit.errors import InvalidValueError


PARAGRAPH = {"type": "paragraph", "children": [{"text": "x"}]}


def test_round_trip_is_lossless(sample_value):
    assert to_value(from_value(sample_value)) == sample_value


def test_round_trip_through_json(sample_doc):
    assert to_value(from_value(json.loads(json.dumps(to_value(sample_doc))))) == to_value(sample_doc)


def test_marks_become_run_flags():
    doc = from_value([{"type": "paragraph", "children": [
        {"text": "x", "bold": True, "underline": True, "italic": False},
    ]}])
    run = doc.leaves()[0].runs[0]
    assert run.marks == {Mark.bold, Mark.underline}
    assert to_value(doc)[0]["children"][0] == {"text": "x", "bold": True, "underline": True}


def test_empty_value_gives_empty_document():
    assert to_value(from_value([])) == [{"type": "paragraph", "children": [{"text": ""}]}]


@pytest.mark.parametrize("value", [
    {"type": "paragraph"},                                                         # not a list
    [{"type": "table", "children": [{"text": "x"}]}],                              # unknown type
    [{"type": "paragraph", "children": [{"text": "x", "strike": True}]}],          # unknown mark
    [{"type": "paragraph", "children": []}],                                       # no runs
    [{"type": "paragraph", "children": [PARAGRAPH]}],                              # element in text block
    [{"type": "list-item", "children": [{"text": "x"}]}],                          # item outside list
    [{"type": "bulleted-list", "children": [{"text": "x"}]}],                      # text in list
    [{"type": "bulleted-list", "children": [PARAGRAPH]}],                          # paragraph in list
    [{"type": "numbered-list", "children": []}],                                   # empty list
])
def test_rejects_malformed_values(value):
    with pytest.raises(InvalidValueError):
        from_value(value)


def test_invalid_value_error_is_value_error():
    with pytest.raises(ValueError):
        from_value("not a document")
