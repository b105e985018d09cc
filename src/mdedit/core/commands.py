"""Mutating commands: mark toggling, block toggling, and text insertion.

Every command takes a document and returns a new one; the input is never modified.
Text-bearing blocks keep their ids and character offsets through every command, so
a selection that was valid before a command stays valid after it.
"""

from typing import Iterable, Optional, Union

from mdedit.core.models import (
    BlockType,
    Document,
    Mark,
    TextRun,
    normalize_runs,
    parse_block_format,
    parse_mark,
)
from mdedit.core.query import run_index_at, span_has_block, span_marks
from mdedit.core.selection import Point, Selection, resolve
from mdedit.core.utils.logging import get_logger
from mdedit.errors import StructureError


logger = get_logger(__name__)


def split_runs(runs: list[TextRun], cuts: Iterable[int]) -> list[TextRun]:
    """Split runs so that every cut offset falls on a run boundary."""
    result = list(runs)
    for cut in sorted(set(cuts)):
        pos = 0
        for i, run in enumerate(result):
            end = pos + len(run.text)
            if pos < cut < end:
                at = cut - pos
                result[i:i + 1] = [
                    TextRun(text=run.text[:at], marks=run.marks),
                    TextRun(text=run.text[at:], marks=run.marks),
                ]
                break
            pos = end
    return result


def toggle_mark(
    document: Document,
    selection: Selection,
    mark: Union[Mark, str],
    strict: bool = True,
    ) -> Document:
    """Add mark to the selected text, or remove it if every selected run already has it.

    Runs straddling a selection edge are split so only the selected part changes.
    A collapsed selection covers no text and returns an unchanged copy.
    """
    mark = parse_mark(mark)
    doc = document.model_copy(deep=True)
    span = resolve(doc, selection, strict)
    if span.collapsed:
        return doc

    active = mark in span_marks(doc, span)
    logger.debug("toggle_mark", mark=mark.value, active=active, blocks=len(span.leaves))

    for leaf_id in span.leaves:
        block = doc.block(leaf_id)
        lo, hi = span.bounds(block)
        if lo >= hi:
            continue
        runs, pos = [], 0
        for run in split_runs(block.runs, (lo, hi)):
            end = pos + len(run.text)
            if lo <= pos and end <= hi and run.text:
                run = run.with_mark(mark, not active)
            runs.append(run)
            pos = end
        block.runs = normalize_runs(runs)

    doc.check()
    return doc


def _unwrap_lists(doc: Document, leaf_ids: tuple[int, ...]) -> None:
    """Lift the selected items out of their lists, splitting lists around them.

    Items before and after the selected slice stay wrapped in lists of the original
    kind; a list left with no items is removed from the arena.
    """
    selected = set(leaf_ids)
    roots: list[int] = []
    for root_id in doc.roots:
        node = doc.block(root_id)
        if not node.is_list or selected.isdisjoint(node.items):
            roots.append(root_id)
            continue

        picked = [i for i, item_id in enumerate(node.items) if item_id in selected]
        head = node.items[:picked[0]]
        lifted = node.items[picked[0]:picked[-1] + 1]
        tail = node.items[picked[-1] + 1:]

        if head:
            node.items = head
            roots.append(node.id)
        else:
            del doc.nodes[node.id]
        roots.extend(lifted)
        if tail:
            roots.append(doc.add(node.type, items=tail).id)
    doc.roots = roots


def _wrap_list(doc: Document, leaf_ids: tuple[int, ...], list_type: BlockType) -> None:
    start = doc.roots.index(leaf_ids[0])
    stop = start + len(leaf_ids)
    if tuple(doc.roots[start:stop]) != leaf_ids:
        raise StructureError("Blocks to wrap are not consecutive top-level blocks")
    wrapper = doc.add(list_type, items=list(leaf_ids))
    doc.roots[start:stop] = [wrapper.id]


def toggle_block(
    document: Document,
    selection: Selection,
    block_type: Union[BlockType, str],
    strict: bool = True,
    ) -> Document:
    """Set every selected block to block_type, or back to paragraph if all already are.

    Selected list items are always lifted out of their lists first. A mixed selection
    is never active, so it is converted uniformly.
    """
    target = parse_block_format(block_type)
    doc = document.model_copy(deep=True)
    span = resolve(doc, selection, strict)

    active = span_has_block(doc, span, target)
    logger.debug("toggle_block", target=target.value, active=active, blocks=len(span.leaves))

    _unwrap_lists(doc, span.leaves)

    if active:
        new_type = BlockType.paragraph
    elif target.is_list:
        new_type = BlockType.list_item
    else:
        new_type = target
    for leaf_id in span.leaves:
        doc.block(leaf_id).type = new_type

    if target.is_list and not active:
        _wrap_list(doc, span.leaves, target)

    doc.check()
    return doc


def insert_text(
    document: Document,
    point: Point,
    text: str,
    marks: Optional[Iterable[Union[Mark, str]]] = None,
    strict: bool = True,
    ) -> Document:
    """Insert text at point.

    With marks=None the text joins the run at the caret and takes its marks; otherwise
    it becomes a run with exactly the given marks. Newlines are stored literally;
    this command never splits blocks.
    """
    doc = document.model_copy(deep=True)
    point = resolve(doc, Selection(anchor=point, focus=point), strict).start
    block = doc.block(point.block)

    index = run_index_at(block, point.offset)
    run_start = sum(len(run.text) for run in block.runs[:index])
    run = block.runs[index]
    at = point.offset - run_start

    if marks is None:
        block.runs[index] = TextRun(text=run.text[:at] + text + run.text[at:], marks=run.marks)
    else:
        new_run = TextRun(text=text, marks=frozenset(parse_mark(m) for m in marks))
        block.runs[index:index + 1] = [
            TextRun(text=run.text[:at], marks=run.marks),
            new_run,
            TextRun(text=run.text[at:], marks=run.marks),
        ]
    block.runs = normalize_runs(block.runs)

    doc.check()
    return doc
