"""Document -> flat markdown-like text"""

from mdedit.core.models import Block, BlockType, Document, Mark, TextRun


BLOCK_SEPARATOR = "\n\n"
ITEM_SEPARATOR = "\n"

BLOCK_PREFIXES: dict[BlockType, str] = {
    BlockType.paragraph:     "",
    BlockType.heading_one:   "# ",
    BlockType.heading_two:   "## ",
    BlockType.heading_three: "### ",
    BlockType.block_quote:   "> ",
    BlockType.list_item:     "- ",
}

# Innermost first: a run with every mark renders as <u>***text***</u>
# (underline outside bold, bold outside italic).
MARK_DELIMITERS: list[tuple[Mark, str, str]] = [
    (Mark.italic,    "*",   "*"),
    (Mark.bold,      "**",  "**"),
    (Mark.underline, "<u>", "</u>"),
]


def serialize_run(run: TextRun) -> str:
    """Wrap run text in the delimiters of its marks, in fixed nesting order."""
    text = run.text
    for mark, open_, close in MARK_DELIMITERS:
        if mark in run.marks:
            text = f"{open_}{text}{close}"
    return text


def serialize_block(doc: Document, block: Block) -> str:
    """Render one block; list items are rendered one per line with a '- ' prefix."""
    if block.is_list:
        return ITEM_SEPARATOR.join(serialize_block(doc, doc.block(i)) for i in block.items)
    return BLOCK_PREFIXES[block.type] + "".join(serialize_run(run) for run in block.runs)


def serialize(doc: Document) -> str:
    """Render a document as flat text, blocks separated by a blank line."""
    return BLOCK_SEPARATOR.join(serialize_block(doc, doc.block(root_id)) for root_id in doc.roots)
