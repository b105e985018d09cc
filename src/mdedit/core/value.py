"""Structured (Slate-style) JSON value <-> Document.

The value is a list of element objects, `{"type": "paragraph", "children": [...]}`,
whose text leaves look like `{"text": "hi", "bold": true}`. Unlike the flat text
form this conversion is lossless.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from mdedit.core.models import BlockType, Document, Mark, TextRun, empty_document
from mdedit.errors import InvalidValueError


class TextValue(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def to_run(self) -> TextRun:
        return TextRun(text=self.text, marks=frozenset(m for m in Mark if getattr(self, m.value)))


class ElementValue(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: BlockType
    children: list[Union[ElementValue, TextValue]]


_VALUE_ADAPTER = TypeAdapter(list[ElementValue])


def _text_children(element: ElementValue) -> list[TextRun]:
    runs = []
    for child in element.children:
        if not isinstance(child, TextValue):
            raise InvalidValueError(f"{element.type.value} element may only contain text nodes")
        runs.append(child.to_run())
    if not runs:
        raise InvalidValueError(f"{element.type.value} element has no text nodes")
    return runs


def from_value(value: Any) -> Document:
    """Validate a structured value and build a Document from it."""
    try:
        elements = _VALUE_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise InvalidValueError(f"Invalid document value: {e}") from e
    if not elements:
        return empty_document()

    doc = Document()
    for element in elements:
        if element.type is BlockType.list_item:
            raise InvalidValueError("list-item element outside of a list")
        if not element.type.is_list:
            doc.roots.append(doc.add(element.type, runs=_text_children(element)).id)
            continue

        if not element.children:
            raise InvalidValueError(f"{element.type.value} element has no items")
        items = []
        for child in element.children:
            if not isinstance(child, ElementValue) or child.type is not BlockType.list_item:
                raise InvalidValueError(f"{element.type.value} element may only contain list-item elements")
            items.append(doc.add(BlockType.list_item, runs=_text_children(child)).id)
        doc.roots.append(doc.add(element.type, items=items).id)

    doc.check()
    return doc


def _run_value(run: TextRun) -> dict[str, Any]:
    node: dict[str, Any] = {"text": run.text}
    for mark in Mark:
        if mark in run.marks:
            node[mark.value] = True
    return node


def _block_value(doc: Document, block_id: int) -> dict[str, Any]:
    block = doc.block(block_id)
    if block.is_list:
        children = [_block_value(doc, item_id) for item_id in block.items]
    else:
        children = [_run_value(run) for run in block.runs]
    return {"type": block.type.value, "children": children}


def to_value(doc: Document) -> list[dict[str, Any]]:
    """Render a Document as a JSON-compatible structured value."""
    return [_block_value(doc, root_id) for root_id in doc.roots]
