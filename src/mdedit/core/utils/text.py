"""Plain-text helpers: markup-free text, word counts, content hashes"""

import hashlib

from mdedit.core.models import Document
from mdedit.core.serialize import serialize


def plain_text(doc: Document) -> str:
    """Text of every text-bearing block in document order, one block per line."""
    return "\n".join(leaf.text for leaf in doc.iter_leaves())


def word_count(text: str) -> int:
    """Number of whitespace-separated words in text."""
    return len(text.split())


def content_hash(doc: Document) -> str:
    """Hex SHA-256 of the serialized document, for change detection."""
    return hashlib.sha256(serialize(doc).encode("utf-8")).hexdigest()
