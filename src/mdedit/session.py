"""Editing session: the host-side binding around one document.

Tracks the caret/selection, pending marks for a collapsed caret, keyboard
shortcuts and saved state. Persistence itself stays with the caller, who
receives serialized text through `on_save`.
"""

from typing import Callable, Optional, Union

from mdedit.config import Settings
from mdedit.core.commands import insert_text, toggle_block, toggle_mark
from mdedit.core.deserialize import deserialize
from mdedit.core.models import BlockType, Document, Mark, empty_document, parse_mark
from mdedit.core.query import active_marks, is_block_active
from mdedit.core.selection import Selection, resolve
from mdedit.core.serialize import serialize
from mdedit.core.utils.logging import get_logger
from mdedit.core.utils.text import content_hash, word_count


logger = get_logger(__name__)


class EditorSession:
    """One single-user editing session over a Document."""

    def __init__(
        self,
        document: Optional[Document] = None,
        settings: Optional[Settings] = None,
        on_save: Optional[Callable[[str], None]] = None,
        ):
        self.settings = settings or Settings()
        self.document = document if document is not None else empty_document()
        self.document.check()
        self.on_save = on_save
        self.selection = Selection.cursor(self.document.leaf_ids()[0], 0)
        self.pending_marks: Optional[frozenset[Mark]] = None
        self._saved_hash = content_hash(self.document)

    @classmethod
    def load(
        cls,
        text: str,
        settings: Optional[Settings] = None,
        on_save: Optional[Callable[[str], None]] = None,
        ) -> "EditorSession":
        """Start a session from persisted flat text."""
        return cls(deserialize(text), settings=settings, on_save=on_save)

    @property
    def strict(self) -> bool:
        return self.settings.strict_selection

    def select(self, selection: Selection) -> None:
        span = resolve(self.document, selection, self.strict)
        endpoints = (span.start, span.end)
        if selection.anchor not in endpoints or selection.focus not in endpoints:
            # clamped
            selection = Selection(anchor=span.start, focus=span.end)
        self.selection = selection
        self.pending_marks = None

    def is_mark_active(self, mark: Union[Mark, str]) -> bool:
        mark = parse_mark(mark)
        if self.selection.collapsed and self.pending_marks is not None:
            return mark in self.pending_marks
        return mark in active_marks(self.document, self.selection, self.strict)

    def toggle_mark(self, mark: Union[Mark, str]) -> None:
        """Toggle mark on the selection; on a collapsed caret toggle it for the next typed text."""
        mark = parse_mark(mark)
        if not self.selection.collapsed:
            self.document = toggle_mark(self.document, self.selection, mark, self.strict)
            return
        current = self.pending_marks
        if current is None:
            current = active_marks(self.document, self.selection, self.strict)
        self.pending_marks = current - {mark} if mark in current else current | {mark}

    def is_block_active(self, block_type: Union[BlockType, str]) -> bool:
        return is_block_active(self.document, self.selection, block_type, self.strict)

    def toggle_block(self, block_type: Union[BlockType, str]) -> None:
        self.document = toggle_block(self.document, self.selection, block_type, self.strict)

    def type_text(self, text: str) -> None:
        """Insert text at the caret (collapsing any range to its focus) and advance the caret."""
        caret = self.selection.focus
        self.document = insert_text(self.document, caret, text, self.pending_marks, self.strict)
        self.selection = Selection.cursor(caret.block, caret.offset + len(text))
        self.pending_marks = None

    def handle_key(self, key: str, ctrl: bool = False, meta: bool = False) -> bool:
        """Dispatch a primary-modifier shortcut. Returns True if the key was handled."""
        if not (ctrl or meta):
            return False
        key = key.lower()
        if key == self.settings.save_key:
            self.save()
            return True
        mark = self.settings.shortcuts.get(key)
        if mark is None:
            return False
        self.toggle_mark(mark)
        return True

    def save(self) -> str:
        content = serialize(self.document)
        self._saved_hash = content_hash(self.document)
        logger.info("document_saved", chars=len(content))
        if self.on_save is not None:
            self.on_save(content)
        return content

    @property
    def dirty(self) -> bool:
        return content_hash(self.document) != self._saved_hash

    @property
    def word_count(self) -> int:
        return word_count(serialize(self.document))
