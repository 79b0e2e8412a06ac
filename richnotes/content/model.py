"""
In-memory rich-text document model.

A Document is an ordered tuple of Blocks plus an opaque entity map. Blocks
carry plain text, one block type and a canonical list of inline style
ranges. All values are immutable; helpers return new Documents.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

BLOCK_SEPARATOR = "\n"


class BlockType(str, Enum):
    UNSTYLED = "unstyled"
    UNORDERED_LIST_ITEM = "unordered-list-item"
    ORDERED_LIST_ITEM = "ordered-list-item"
    LEFT_ALIGN = "left-align"
    CENTER_ALIGN = "center-align"
    RIGHT_ALIGN = "right-align"


ALIGNMENT_TYPES = frozenset(
    {BlockType.LEFT_ALIGN, BlockType.CENTER_ALIGN, BlockType.RIGHT_ALIGN}
)
LIST_TYPES = frozenset({BlockType.UNORDERED_LIST_ITEM, BlockType.ORDERED_LIST_ITEM})


class InlineStyle(str, Enum):
    BOLD = "BOLD"
    ITALIC = "ITALIC"
    UNDERLINE = "UNDERLINE"
    COLOR_RED = "COLOR-RED"
    COLOR_BLUE = "COLOR-BLUE"
    COLOR_GREEN = "COLOR-GREEN"
    COLOR_PURPLE = "COLOR-PURPLE"
    COLOR_ORANGE = "COLOR-ORANGE"

    @property
    def is_color(self) -> bool:
        return self.value.startswith("COLOR-")


# Palette order matches the color picker.
COLORS: Tuple[InlineStyle, ...] = (
    InlineStyle.COLOR_RED,
    InlineStyle.COLOR_BLUE,
    InlineStyle.COLOR_GREEN,
    InlineStyle.COLOR_PURPLE,
    InlineStyle.COLOR_ORANGE,
)


def color_style(name: str) -> InlineStyle:
    """Map a palette name such as ``"red"`` to its ``COLOR-RED`` style."""
    return InlineStyle(f"COLOR-{name.strip().upper()}")


@dataclass(frozen=True)
class StyleRange:
    start: int
    end: int  # exclusive
    style: InlineStyle

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Block:
    key: str
    type: BlockType = BlockType.UNSTYLED
    text: str = ""
    style_ranges: Tuple[StyleRange, ...] = ()
    depth: int = 0
    # Pass-through values from the serialized form
    entity_ranges: Tuple[Dict[str, Any], ...] = ()
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Ranges always lie within the text, in canonical form.
        object.__setattr__(
            self, "style_ranges", normalize_ranges(self.style_ranges, len(self.text))
        )

    def styles_at(self, index: int) -> List[InlineStyle]:
        return [r.style for r in self.style_ranges if r.start <= index < r.end]


@dataclass(frozen=True)
class Document:
    blocks: Tuple[Block, ...]
    entity_map: Dict[str, Any] = field(default_factory=dict)

    def block_index(self, key: str) -> Optional[int]:
        for i, block in enumerate(self.blocks):
            if block.key == key:
                return i
        return None

    def block_for_key(self, key: str) -> Optional[Block]:
        idx = self.block_index(key)
        return None if idx is None else self.blocks[idx]

    @property
    def keys(self) -> List[str]:
        return [b.key for b in self.blocks]

    def replace_blocks(self, blocks: Iterable[Block]) -> "Document":
        return Document(blocks=tuple(blocks), entity_map=dict(self.entity_map))


def generate_key(existing: Iterable[str] = ()) -> str:
    taken = set(existing)
    while True:
        key = uuid.uuid4().hex[:5]
        if key not in taken:
            return key


def normalize_ranges(
    ranges: Iterable[StyleRange], text_length: int
) -> Tuple[StyleRange, ...]:
    """
    Clip ranges to ``[0, text_length)``, drop empty ones and merge
    overlapping or touching ranges of the same style. The result is sorted
    by (start, end, style).
    """
    by_style: Dict[InlineStyle, List[Tuple[int, int]]] = {}
    for r in ranges:
        start = max(0, r.start)
        end = min(text_length, r.end)
        if start >= end:
            continue
        by_style.setdefault(r.style, []).append((start, end))

    out: List[StyleRange] = []
    for style, spans in by_style.items():
        spans.sort()
        cur_start, cur_end = spans[0]
        for start, end in spans[1:]:
            if start <= cur_end:
                cur_end = max(cur_end, end)
            else:
                out.append(StyleRange(cur_start, cur_end, style))
                cur_start, cur_end = start, end
        out.append(StyleRange(cur_start, cur_end, style))
    out.sort(key=lambda r: (r.start, r.end, r.style.value))
    return tuple(out)


# ------------------------------ Public helpers --------------------------------


def empty_document() -> Document:
    return Document(blocks=(Block(key=generate_key()),))


def document_from_text(text: str) -> Document:
    """Single unstyled block holding ``text`` verbatim."""
    return Document(blocks=(Block(key=generate_key(), text=text or ""),))


def get_plain_text(doc: Document) -> str:
    return BLOCK_SEPARATOR.join(block.text for block in doc.blocks)


def set_block_text(doc: Document, key: str, text: str) -> Document:
    """Replace a block's text, clipping its style ranges to the new length."""
    idx = doc.block_index(key)
    if idx is None:
        return doc
    block = doc.blocks[idx]
    updated = replace(
        block, text=text, style_ranges=normalize_ranges(block.style_ranges, len(text))
    )
    blocks = list(doc.blocks)
    blocks[idx] = updated
    return doc.replace_blocks(blocks)


def insert_block_after(
    doc: Document,
    key: Optional[str],
    text: str = "",
    block_type: BlockType = BlockType.UNSTYLED,
) -> Document:
    """Insert a new block after ``key``; ``None`` appends at the end."""
    blocks = list(doc.blocks)
    idx = doc.block_index(key) if key is not None else None
    position = len(blocks) if idx is None else idx + 1
    blocks.insert(
        position, Block(key=generate_key(doc.keys), type=block_type, text=text)
    )
    return doc.replace_blocks(blocks)


def remove_block(doc: Document, key: str) -> Document:
    """Remove a block. Removing the last block leaves one empty block."""
    blocks = [b for b in doc.blocks if b.key != key]
    if len(blocks) == len(doc.blocks):
        return doc
    if not blocks:
        blocks = [Block(key=generate_key())]
    return doc.replace_blocks(blocks)
