"""
Document <-> persisted content.

The persisted form is the compact JSON raw layout described in
``richnotes.content.raw``. Decoding is forgiving: anything that is not a
valid raw document (legacy plain-text notes, notes from other clients,
truncated JSON) becomes a single unstyled block holding the input verbatim.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional, Set

from pydantic import ValidationError

from ..exceptions import DecodeError
from .model import (
    Block,
    BlockType,
    Document,
    InlineStyle,
    StyleRange,
    document_from_text,
    empty_document,
    generate_key,
    get_plain_text,
    normalize_ranges,
)
from .raw import RawBlock, RawDocument, RawInlineStyleRange

LOGGER = logging.getLogger(__name__)


# ------------------------------ UTF-16 offsets --------------------------------


def _utf16_len(ch: str) -> int:
    return 2 if ord(ch) > 0xFFFF else 1


def _utf16_to_index(text: str, units: int) -> int:
    """Python string index for a UTF-16 code-unit offset (clamped)."""
    seen = 0
    for i, ch in enumerate(text):
        if seen >= units:
            return i
        seen += _utf16_len(ch)
    return len(text)


def _index_to_utf16(text: str, index: int) -> int:
    return sum(_utf16_len(ch) for ch in text[:index])


# ------------------------------ Encoding --------------------------------------


def _raw_block(block: Block) -> RawBlock:
    ranges = [
        RawInlineStyleRange(
            offset=_index_to_utf16(block.text, r.start),
            length=_index_to_utf16(block.text[r.start : r.end], r.end - r.start),
            style=r.style.value,
        )
        for r in block.style_ranges
    ]
    return RawBlock(
        key=block.key,
        text=block.text,
        type=block.type.value,
        depth=block.depth,
        inline_style_ranges=ranges,
        entity_ranges=[dict(e) for e in block.entity_ranges],
        data=dict(block.data),
    )


def serialize(doc: Document) -> str:
    raw = RawDocument(
        blocks=[_raw_block(b) for b in doc.blocks],
        entity_map=dict(doc.entity_map),
    )
    return json.dumps(raw.to_json_dict(), ensure_ascii=False, separators=(",", ":"))


# ------------------------------ Decoding --------------------------------------


def _parse(content: str) -> RawDocument:
    try:
        data = json.loads(content)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"not JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"expected object, got {type(data).__name__}")
    try:
        return RawDocument.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"schema mismatch ({e.error_count()} errors)") from e


def _block_type(value: str) -> BlockType:
    try:
        return BlockType(value)
    except ValueError:
        LOGGER.debug("notes.codec.unknown_block_type type=%s", value)
        return BlockType.UNSTYLED


def _style_ranges(raw: RawBlock) -> List[StyleRange]:
    out: List[StyleRange] = []
    for r in raw.inline_style_ranges:
        try:
            style = InlineStyle(r.style)
        except ValueError:
            LOGGER.debug("notes.codec.unknown_style style=%s", r.style)
            continue
        start = _utf16_to_index(raw.text, r.offset)
        end = _utf16_to_index(raw.text, r.offset + r.length)
        out.append(StyleRange(start, end, style))
    return out


def _from_raw(raw: RawDocument) -> Document:
    blocks: List[Block] = []
    seen: Set[str] = set()
    for rb in raw.blocks:
        key = rb.key
        if not key or key in seen:
            key = generate_key(seen)
        seen.add(key)
        blocks.append(
            Block(
                key=key,
                type=_block_type(rb.type),
                text=rb.text,
                style_ranges=normalize_ranges(_style_ranges(rb), len(rb.text)),
                depth=rb.depth,
                entity_ranges=tuple(rb.entity_ranges),
                data=dict(rb.data),
            )
        )
    return Document(blocks=tuple(blocks), entity_map=dict(raw.entity_map))


def deserialize(content: Optional[str]) -> Document:
    """
    Parse persisted content. Never raises: undecodable input becomes a
    single unstyled block containing it verbatim.
    """
    if not content:
        return empty_document()
    try:
        raw = _parse(content)
    except DecodeError as e:
        if content.lstrip().startswith(("{", "[")):
            LOGGER.warning("notes.codec.fallback reason=%s", e)
        else:
            LOGGER.debug("notes.codec.legacy_plain_text len=%d", len(content))
        return document_from_text(content)
    return _from_raw(raw)


def extract_preview_text(content: Optional[str]) -> str:
    """Plain text for list previews; degrades to the raw input on failure."""
    try:
        return get_plain_text(deserialize(content))
    except Exception as e:
        LOGGER.warning("notes.codec.preview_fail %s", e)
        return content or ""
