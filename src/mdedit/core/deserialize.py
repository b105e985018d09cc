"""Flat markdown-like text -> Document.

Line oriented and intentionally lossy: inline delimiters stay literal text and
'- ' lines become paragraphs, so deserialize(serialize(d)) only equals d for
documents without marks or lists.
"""

from mdedit.core.models import BlockType, Document, TextRun, empty_document


# Checked in order; the first matching prefix wins.
LINE_PREFIXES: list[tuple[str, BlockType]] = [
    ("### ", BlockType.heading_three),
    ("## ",  BlockType.heading_two),
    ("# ",   BlockType.heading_one),
    ("> ",   BlockType.block_quote),
    ("- ",   BlockType.paragraph),
]


def classify_line(line: str) -> tuple[BlockType, str]:
    """Return (block type, text) for one non-blank line."""
    for prefix, block_type in LINE_PREFIXES:
        if line.startswith(prefix):
            return block_type, line[len(prefix):]
    return BlockType.paragraph, line


def deserialize(text: str) -> Document:
    """Build a document with one block per non-blank line; never rejects input."""
    if not text or not text.strip():
        return empty_document()

    doc = Document()
    for line in text.split("\n"):
        if not line.strip():
            continue
        block_type, content = classify_line(line)
        doc.roots.append(doc.add(block_type, runs=[TextRun(text=content)]).id)
    return doc
