"""
Formatting commands over (Document, Selection).

Every command is a pure function returning a new Document. A selection that
does not resolve against the document turns the command into a no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from ..exceptions import InvalidSelectionError
from .model import (
    LIST_TYPES,
    Block,
    BlockType,
    Document,
    InlineStyle,
    StyleRange,
    normalize_ranges,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """
    Caret or range. ``end_block_key`` is only set for selections spanning
    several blocks; ``end_offset`` then indexes into that block.
    """

    block_key: str
    start_offset: int
    end_offset: int
    end_block_key: Optional[str] = None

    @classmethod
    def caret(cls, block_key: str, offset: int) -> "Selection":
        return cls(block_key, offset, offset)

    @classmethod
    def whole_block(cls, block: Block) -> "Selection":
        return cls(block.key, 0, len(block.text))

    @classmethod
    def whole_document(cls, doc: Document) -> "Selection":
        first, last = doc.blocks[0], doc.blocks[-1]
        return cls(first.key, 0, len(last.text), end_block_key=last.key)

    @property
    def is_collapsed(self) -> bool:
        return (
            self.end_block_key in (None, self.block_key)
            and self.start_offset == self.end_offset
        )


# (block index, start, end) per selected block
_Segment = Tuple[int, int, int]


def _resolve(doc: Document, selection: Selection) -> List[_Segment]:
    first = doc.block_index(selection.block_key)
    if first is None:
        raise InvalidSelectionError(f"unknown block {selection.block_key!r}")
    end_key = selection.end_block_key or selection.block_key
    last = doc.block_index(end_key)
    if last is None:
        raise InvalidSelectionError(f"unknown block {end_key!r}")
    if last < first:
        raise InvalidSelectionError("selection ends before it starts")

    start, end = selection.start_offset, selection.end_offset
    first_len = len(doc.blocks[first].text)
    last_len = len(doc.blocks[last].text)
    if not 0 <= start <= first_len or not 0 <= end <= last_len:
        raise InvalidSelectionError(f"offsets {start}..{end} out of range")
    if first == last:
        if start > end:
            raise InvalidSelectionError(f"reversed offsets {start}..{end}")
        return [(first, start, end)]

    segments = [(first, start, first_len)]
    segments.extend((i, 0, len(doc.blocks[i].text)) for i in range(first + 1, last))
    segments.append((last, 0, end))
    return segments


def _covers(block: Block, style: InlineStyle, start: int, end: int) -> bool:
    # Ranges are normalized, so full coverage means a single range.
    return any(
        r.style == style and r.start <= start and r.end >= end
        for r in block.style_ranges
    )


def _without(
    ranges: Tuple[StyleRange, ...], style: InlineStyle, start: int, end: int
) -> List[StyleRange]:
    out: List[StyleRange] = []
    for r in ranges:
        if r.style != style or r.end <= start or r.start >= end:
            out.append(r)
            continue
        if r.start < start:
            out.append(StyleRange(r.start, start, style))
        if r.end > end:
            out.append(StyleRange(end, r.end, style))
    return out


# ------------------------------ Inline styles ---------------------------------


def toggle_inline_style(
    doc: Document, selection: Selection, style: Union[InlineStyle, str]
) -> Document:
    """
    Remove ``style`` if it covers the whole selection, otherwise apply it to
    the whole selection. Collapsed selections are left untouched.
    """
    style = InlineStyle(style)
    try:
        segments = _resolve(doc, selection)
    except InvalidSelectionError as e:
        LOGGER.warning("notes.commands.invalid_selection %s", e)
        return doc
    segments = [s for s in segments if s[1] < s[2]]
    if not segments:
        LOGGER.debug("notes.commands.collapsed style=%s", style.value)
        return doc

    present = all(_covers(doc.blocks[i], style, s, e) for i, s, e in segments)
    blocks = list(doc.blocks)
    for i, s, e in segments:
        block = blocks[i]
        if present:
            ranges = _without(block.style_ranges, style, s, e)
        else:
            ranges = list(block.style_ranges) + [StyleRange(s, e, style)]
        blocks[i] = replace(
            block, style_ranges=normalize_ranges(ranges, len(block.text))
        )
    LOGGER.debug(
        "notes.commands.inline style=%s %s blocks=%d",
        style.value,
        "removed" if present else "applied",
        len(segments),
    )
    return doc.replace_blocks(blocks)


def current_inline_styles(
    doc: Document, selection: Selection
) -> FrozenSet[InlineStyle]:
    """
    Styles active at the selection, for toolbar state. A range reports the
    styles covering all of it; a caret reports the character before it (or
    the first character at offset 0).
    """
    try:
        segments = _resolve(doc, selection)
    except InvalidSelectionError:
        return frozenset()

    non_empty = [s for s in segments if s[1] < s[2]]
    if non_empty:
        return frozenset(
            style
            for style in InlineStyle
            if all(_covers(doc.blocks[i], style, s, e) for i, s, e in non_empty)
        )

    block = doc.blocks[segments[0][0]]
    offset = selection.start_offset
    if offset > 0:
        return frozenset(block.styles_at(offset - 1))
    if block.text:
        return frozenset(block.styles_at(0))
    return frozenset()


# ------------------------------ Block types -----------------------------------


def toggle_block_type(
    doc: Document, selection: Selection, block_type: Union[BlockType, str]
) -> Document:
    """
    Set every selected block to ``block_type``, or back to ``unstyled`` when
    the first selected block already has it. Alignment and list variants
    share the single type field, so setting one replaces any other.
    """
    block_type = BlockType(block_type)
    try:
        segments = _resolve(doc, selection)
    except InvalidSelectionError as e:
        LOGGER.warning("notes.commands.invalid_selection %s", e)
        return doc

    first = doc.blocks[segments[0][0]]
    target = BlockType.UNSTYLED if first.type == block_type else block_type
    blocks = list(doc.blocks)
    for i, _, _ in segments:
        block = blocks[i]
        depth = block.depth if target in LIST_TYPES else 0
        blocks[i] = replace(block, type=target, depth=depth)
    LOGGER.debug(
        "notes.commands.block type=%s blocks=%d", target.value, len(segments)
    )
    return doc.replace_blocks(blocks)


def current_block_type(doc: Document, selection: Selection) -> Optional[BlockType]:
    block = doc.block_for_key(selection.block_key)
    return block.type if block is not None else None


# ------------------------------ Key commands ----------------------------------


class KeyCommandResult(str, Enum):
    HANDLED = "handled"
    NOT_HANDLED = "not-handled"


KEY_COMMANDS: Dict[str, InlineStyle] = {
    "bold": InlineStyle.BOLD,
    "italic": InlineStyle.ITALIC,
    "underline": InlineStyle.UNDERLINE,
}


def handle_key_command(
    doc: Document, selection: Selection, command: str
) -> Tuple[Document, KeyCommandResult]:
    """Run a keyboard shortcut; unknown commands are left to the editor."""
    style = KEY_COMMANDS.get(command)
    if style is None:
        return doc, KeyCommandResult.NOT_HANDLED
    return toggle_inline_style(doc, selection, style), KeyCommandResult.HANDLED
