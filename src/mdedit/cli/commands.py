"""CLI command implementations"""

import json
from collections import Counter
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdedit.config import Settings, load_config
from mdedit.core.commands import toggle_block, toggle_mark
from mdedit.core.deserialize import deserialize
from mdedit.core.models import Document
from mdedit.core.selection import Selection, select_leaves
from mdedit.core.serialize import serialize
from mdedit.core.utils.logging import configure_logging
from mdedit.core.utils.text import content_hash, word_count
from mdedit.core.value import from_value, to_value
from mdedit.errors import EditorError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and set up logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def _load(path: str) -> Document:
    """Read a .json structured value or flat text into a Document."""
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
        if p.suffix == ".json":
            return from_value(json.loads(raw))
        return deserialize(raw)
    except (OSError, ValueError) as e:
        _fail(f"Cannot load {path}", e)


def _emit(doc: Document, as_json: bool, out: Optional[str]) -> None:
    """Write the document as flat text or structured JSON to out, or echo it."""
    text = json.dumps(to_value(doc), indent=2, ensure_ascii=False) if as_json else serialize(doc)
    if out is None:
        typer.echo(text)
        return
    try:
        Path(out).write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot write {out}", e)
    typer.echo(f"  {out}")


def convert_cmd(
    path: Annotated[str, typer.Argument(help="Flat text or .json document")],
    as_json: Annotated[bool, typer.Option("--json", help="Emit the structured JSON value")] = False,
    out: Annotated[Optional[str], typer.Option("--out", help="Output file")] = None,
    ):
    """Load a document and write it back out as flat text or structured JSON."""
    _settings()
    _emit(_load(path), as_json, out)


def stats_cmd(
    path: Annotated[str, typer.Argument(help="Flat text or .json document")],
    ):
    """Print block counts by type, word count, and content hash."""
    _settings()
    doc = _load(path)
    counts = Counter(doc.block(i).type.value for i in doc.roots)
    for block_type, n in sorted(counts.items()):
        typer.echo(f"  {block_type}: {n}")
    typer.echo(f"Blocks: {len(doc.roots)}")
    typer.echo(f"Words: {word_count(serialize(doc))}")
    typer.echo(f"Hash: {content_hash(doc)}")


def toggle_block_cmd(
    path: Annotated[str, typer.Argument(help="Flat text or .json document")],
    block_type: Annotated[str, typer.Argument(help="paragraph, heading-one..three, block-quote, bulleted-list, numbered-list")],
    first: Annotated[int, typer.Option("--first", help="First text block (0-based)")] = 0,
    last: Annotated[Optional[int], typer.Option("--last", help="Last text block; defaults to --first")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit the structured JSON value")] = False,
    out: Annotated[Optional[str], typer.Option("--out", help="Output file")] = None,
    ):
    """Toggle a block type over a range of text blocks."""
    settings = _settings()
    doc = _load(path)
    try:
        selection = select_leaves(doc, first, first if last is None else last)
        doc = toggle_block(doc, selection, block_type, settings.strict_selection)
    except EditorError as e:
        _fail("toggle-block failed", e)
    _emit(doc, as_json, out)


def toggle_mark_cmd(
    path: Annotated[str, typer.Argument(help="Flat text or .json document")],
    mark: Annotated[str, typer.Argument(help="bold, italic, or underline")],
    leaf: Annotated[int, typer.Option("--leaf", help="Text block (0-based)")] = 0,
    start: Annotated[int, typer.Option("--start", help="Start offset in the block")] = 0,
    end: Annotated[Optional[int], typer.Option("--end", help="End offset; defaults to the end of the block")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit the structured JSON value")] = False,
    out: Annotated[Optional[str], typer.Option("--out", help="Output file")] = None,
    ):
    """Toggle a mark over a character range of one text block."""
    settings = _settings()
    doc = _load(path)
    try:
        block_end = select_leaves(doc, leaf, leaf).focus
        stop = block_end.offset if end is None else end
        selection = Selection.between(block_end.block, start, block_end.block, stop)
        doc = toggle_mark(doc, selection, mark, settings.strict_selection)
    except EditorError as e:
        _fail("toggle-mark failed", e)
    _emit(doc, as_json, out)
