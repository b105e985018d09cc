"""Read-only predicates over a document and a selection"""

from typing import Iterator, Union

from mdedit.core.models import Block, BlockType, Document, Mark, parse_block_format, parse_mark
from mdedit.core.selection import Selection, Span, resolve


def run_index_at(block: Block, offset: int) -> int:
    """Index of the run a caret at offset belongs to; on a boundary the left run wins."""
    pos = 0
    for i, run in enumerate(block.runs):
        end = pos + len(run.text)
        if offset <= end and (offset > pos or i == 0):
            return i
        pos = end
    return len(block.runs) - 1


def iter_selected_runs(doc: Document, span: Span) -> Iterator[tuple[Block, int]]:
    """Yield (block, run index) for every run sharing at least one character with span."""
    for leaf_id in span.leaves:
        block = doc.block(leaf_id)
        lo, hi = span.bounds(block)
        pos = 0
        for i, run in enumerate(block.runs):
            end = pos + len(run.text)
            if max(pos, lo) < min(end, hi):
                yield block, i
            pos = end


def span_marks(doc: Document, span: Span) -> frozenset[Mark]:
    if span.collapsed:
        block = doc.block(span.start.block)
        return block.runs[run_index_at(block, span.start.offset)].marks

    common = None
    for block, i in iter_selected_runs(doc, span):
        marks = block.runs[i].marks
        common = marks if common is None else common & marks
    return common or frozenset()


def span_has_block(doc: Document, span: Span, block_type: BlockType) -> bool:
    parents = doc.parents() if block_type.is_list else {}
    for leaf_id in span.leaves:
        if block_type.is_list:
            parent = parents.get(leaf_id)
            if parent is None or parent.type is not block_type:
                return False
        elif doc.block(leaf_id).type is not block_type:
            return False
    return True


def active_marks(doc: Document, selection: Selection, strict: bool = True) -> frozenset[Mark]:
    """Marks set on every run the selection covers (or on the run at a collapsed caret)."""
    return span_marks(doc, resolve(doc, selection, strict))


def is_mark_active(doc: Document, selection: Selection, mark: Union[Mark, str], strict: bool = True) -> bool:
    """True iff every run intersecting the selection carries mark.

    A selection that covers no characters at all (e.g. from the end of one block to
    the start of the next) spans zero runs and is never active.
    """
    return parse_mark(mark) in active_marks(doc, selection, strict)


def is_block_active(
    doc: Document,
    selection: Selection,
    block_type: Union[BlockType, str],
    strict: bool = True,
    ) -> bool:
    """True iff every block touched by the selection has block_type.

    For list kinds a block matches when it is an item of a list of that kind.
    """
    return span_has_block(doc, resolve(doc, selection, strict), parse_block_format(block_type))
