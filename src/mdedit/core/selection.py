"""Selection points and their resolution against a document"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from mdedit.core.models import Block, Document
from mdedit.core.utils.logging import get_logger
from mdedit.errors import SelectionError


logger = get_logger(__name__)


class Point(BaseModel):
    """A caret position: text-bearing block id plus character offset into its text."""
    model_config = ConfigDict(frozen=True)

    block: int
    offset: int = 0


class Selection(BaseModel):
    """Host-supplied anchor/focus pair; anchor may come after focus."""
    model_config = ConfigDict(frozen=True)

    anchor: Point
    focus: Point

    @property
    def collapsed(self) -> bool:
        return self.anchor == self.focus

    @classmethod
    def cursor(cls, block: int, offset: int = 0) -> "Selection":
        point = Point(block=block, offset=offset)
        return cls(anchor=point, focus=point)

    @classmethod
    def between(cls, anchor_block: int, anchor_offset: int, focus_block: int, focus_offset: int) -> "Selection":
        return cls(
            anchor=Point(block=anchor_block, offset=anchor_offset),
            focus=Point(block=focus_block, offset=focus_offset),
        )


@dataclass(frozen=True)
class Span:
    """A resolved selection: ordered endpoints and every text-bearing block between them."""
    start:  Point
    end:    Point
    leaves: tuple[int, ...]      # leaf ids from start.block to end.block inclusive

    @property
    def collapsed(self) -> bool:
        return self.start == self.end

    def bounds(self, block: Block) -> tuple[int, int]:
        """Return the [start, end) character range of this span inside block."""
        lo = self.start.offset if block.id == self.start.block else 0
        hi = self.end.offset if block.id == self.end.block else len(block.text)
        return lo, hi


def _check_point(doc: Document, point: Point, order: dict[int, int], strict: bool) -> Point:
    """Validate a point; in non-strict mode clamp it into the document instead of raising."""
    if point.block not in order:
        if strict:
            raise SelectionError(f"Block {point.block} is not a text block of this document")
        last = doc.block(doc.leaf_ids()[-1])
        logger.warning("selection_clamped", block=point.block, reason="unknown_block")
        return Point(block=last.id, offset=len(last.text))

    length = len(doc.block(point.block).text)
    if 0 <= point.offset <= length:
        return point
    if strict:
        raise SelectionError(f"Offset {point.offset} outside block {point.block} (length {length})")
    logger.warning("selection_clamped", block=point.block, offset=point.offset, length=length)
    return Point(block=point.block, offset=min(max(point.offset, 0), length))


def resolve(doc: Document, selection: Selection, strict: bool = True) -> Span:
    """Order a selection in document order and collect the blocks it touches."""
    leaf_ids = doc.leaf_ids()
    order = {leaf_id: i for i, leaf_id in enumerate(leaf_ids)}
    anchor = _check_point(doc, selection.anchor, order, strict)
    focus = _check_point(doc, selection.focus, order, strict)

    start, end = anchor, focus
    if (order[focus.block], focus.offset) < (order[anchor.block], anchor.offset):
        start, end = focus, anchor
    return Span(start=start, end=end, leaves=tuple(leaf_ids[order[start.block]:order[end.block] + 1]))


def select_leaves(doc: Document, first: int, last: int) -> Selection:
    """Select from the start of the first-th to the end of the last-th text block (0-based)."""
    leaves = doc.leaves()
    if not (0 <= first <= last < len(leaves)):
        raise SelectionError(f"Block range {first}..{last} outside 0..{len(leaves) - 1}")
    return Selection.between(leaves[first].id, 0, leaves[last].id, len(leaves[last].text))


def select_all(doc: Document) -> Selection:
    return select_leaves(doc, 0, len(doc.leaf_ids()) - 1)
