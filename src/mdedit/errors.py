"""Exception types raised by the editing core"""


class EditorError(Exception):
    """Base class for every error raised by mdedit."""


class SelectionError(EditorError, ValueError):
    """A selection point does not address a position inside the document."""


class UnknownFormatError(EditorError, ValueError):
    """A mark or block-type token outside the supported set."""


class InvalidValueError(EditorError, ValueError):
    """A structured document value could not be converted into a Document."""


class StructureError(EditorError, RuntimeError):
    """The document tree violates a structural invariant. Always fatal."""
