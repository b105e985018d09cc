"""Document tree: block arena, text runs, and format tokens"""

from enum import Enum
from typing import Iterable, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from mdedit.errors import StructureError, UnknownFormatError


class Mark(str, Enum):
    """Inline text attribute; marks are independent flags, never nested spans."""
    bold = "bold"
    italic = "italic"
    underline = "underline"


class BlockType(str, Enum):
    """Block tag, using the editor's format tokens as values."""
    paragraph = "paragraph"
    heading_one = "heading-one"
    heading_two = "heading-two"
    heading_three = "heading-three"
    block_quote = "block-quote"
    bulleted_list = "bulleted-list"
    numbered_list = "numbered-list"
    list_item = "list-item"

    @property
    def is_list(self) -> bool:
        return self in LIST_TYPES

    @property
    def heading_level(self) -> Optional[int]:
        """Heading level (1-3) for heading types, else None."""
        return HEADING_LEVELS.get(self)

    @classmethod
    def heading(cls, level: int) -> "BlockType":
        for block_type, lvl in HEADING_LEVELS.items():
            if lvl == level:
                return block_type
        raise UnknownFormatError(f"Unsupported heading level: {level}")


LIST_TYPES = frozenset({BlockType.bulleted_list, BlockType.numbered_list})
HEADING_LEVELS = {
    BlockType.heading_one:   1,
    BlockType.heading_two:   2,
    BlockType.heading_three: 3,
}


def parse_mark(mark: Union[Mark, str]) -> Mark:
    """Return the Mark for a token, rejecting anything outside the closed set."""
    try:
        return Mark(mark)
    except ValueError:
        raise UnknownFormatError(f"Unknown mark: {mark!r}") from None


def parse_block_format(block_type: Union[BlockType, str]) -> BlockType:
    """Return the BlockType for a toolbar format token (list-item is not a format)."""
    try:
        parsed = BlockType(block_type)
    except ValueError:
        raise UnknownFormatError(f"Unknown block type: {block_type!r}") from None
    if parsed is BlockType.list_item:
        raise UnknownFormatError("list-item is not a toggleable block type")
    return parsed


class TextRun(BaseModel):
    """A leaf span of text sharing one set of marks."""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    marks: frozenset[Mark] = frozenset()

    def has(self, mark: Mark) -> bool:
        return mark in self.marks

    def with_mark(self, mark: Mark, on: bool) -> "TextRun":
        marks = self.marks | {mark} if on else self.marks - {mark}
        return TextRun(text=self.text, marks=marks)


def normalize_runs(runs: Iterable[TextRun]) -> list[TextRun]:
    """Merge neighbouring runs with equal marks and drop empty runs, keeping at least one."""
    merged: list[TextRun] = []
    for run in runs:
        if merged and merged[-1].marks == run.marks:
            merged[-1] = TextRun(text=merged[-1].text + run.text, marks=run.marks)
        elif run.text or not merged:
            merged.append(run)
    if len(merged) > 1 and not merged[0].text:
        merged.pop(0)
    return merged or [TextRun()]


class Block(BaseModel):
    """A node in the document arena.

    Text-bearing blocks (paragraph, headings, block-quote, list-item) carry `runs`;
    list blocks carry `items`, the ids of their list-item children.
    """
    id: int
    type: BlockType
    runs: list[TextRun] = Field(default_factory=list)
    items: list[int] = Field(default_factory=list)

    @property
    def is_list(self) -> bool:
        return self.type.is_list

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


class Document(BaseModel):
    """An ordered, non-empty sequence of blocks stored as an arena of id-addressed nodes."""
    nodes: dict[int, Block] = Field(default_factory=dict)
    roots: list[int] = Field(default_factory=list)
    next_id: int = 0

    def add(
        self,
        block_type: BlockType,
        runs: Optional[list[TextRun]] = None,
        items: Optional[list[int]] = None,
        ) -> Block:
        """Allocate a new node in the arena. The caller decides where it is linked."""
        block = Block(id=self.next_id, type=block_type, runs=runs or [], items=items or [])
        self.nodes[block.id] = block
        self.next_id += 1
        return block

    def block(self, block_id: int) -> Block:
        return self.nodes[block_id]

    def iter_leaves(self) -> Iterator[Block]:
        """Yield text-bearing blocks in document order."""
        for root_id in self.roots:
            root = self.nodes[root_id]
            if root.is_list:
                for item_id in root.items:
                    yield self.nodes[item_id]
            else:
                yield root

    def leaves(self) -> list[Block]:
        return list(self.iter_leaves())

    def leaf_ids(self) -> list[int]:
        return [leaf.id for leaf in self.iter_leaves()]

    def parents(self) -> dict[int, Block]:
        """Map every list item id to its enclosing list in one pass over the roots."""
        parents: dict[int, Block] = {}
        for root_id in self.roots:
            root = self.nodes[root_id]
            if root.is_list:
                parents.update(dict.fromkeys(root.items, root))
        return parents

    def parent_of(self, block_id: int) -> Optional[Block]:
        """Return the list containing block_id, or None for top-level blocks."""
        return self.parents().get(block_id)

    def check(self) -> None:
        """Raise StructureError unless the tree is well-formed."""
        if not self.roots:
            raise StructureError("Document has no blocks")
        seen: set[int] = set()

        def visit(node_id: int) -> Block:
            if node_id not in self.nodes:
                raise StructureError(f"Dangling reference to node {node_id}")
            if node_id in seen:
                raise StructureError(f"Node {node_id} is referenced more than once")
            seen.add(node_id)
            return self.nodes[node_id]

        for root_id in self.roots:
            root = visit(root_id)
            if root.type is BlockType.list_item:
                raise StructureError(f"list-item {root_id} outside of a list")
            if root.is_list:
                if root.runs:
                    raise StructureError(f"List {root_id} holds text runs")
                if not root.items:
                    raise StructureError(f"List {root_id} is empty")
                for item_id in root.items:
                    item = visit(item_id)
                    if item.type is not BlockType.list_item:
                        raise StructureError(f"List {root_id} holds a {item.type.value} block")
                    _check_text_block(item)
            else:
                _check_text_block(root)

        orphans = set(self.nodes) - seen
        if orphans:
            raise StructureError(f"Unreachable nodes: {sorted(orphans)}")


def _check_text_block(block: Block) -> None:
    if block.items:
        raise StructureError(f"{block.type.value} block {block.id} holds child blocks")
    if not block.runs:
        raise StructureError(f"{block.type.value} block {block.id} has no text runs")


def empty_document() -> Document:
    """The minimal valid document: one paragraph holding one empty run."""
    doc = Document()
    doc.roots.append(doc.add(BlockType.paragraph, runs=[TextRun()]).id)
    return doc
