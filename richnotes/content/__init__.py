"""Rich-text content: document model, codec and formatting commands."""

from .codec import deserialize, extract_preview_text, serialize
from .commands import (
    KEY_COMMANDS,
    KeyCommandResult,
    Selection,
    current_block_type,
    current_inline_styles,
    handle_key_command,
    toggle_block_type,
    toggle_inline_style,
)
from .model import (
    ALIGNMENT_TYPES,
    COLORS,
    LIST_TYPES,
    Block,
    BlockType,
    Document,
    InlineStyle,
    StyleRange,
    color_style,
    document_from_text,
    empty_document,
    get_plain_text,
    insert_block_after,
    remove_block,
    set_block_text,
)

__all__ = [
    "ALIGNMENT_TYPES",
    "COLORS",
    "KEY_COMMANDS",
    "LIST_TYPES",
    "Block",
    "BlockType",
    "Document",
    "InlineStyle",
    "KeyCommandResult",
    "Selection",
    "StyleRange",
    "color_style",
    "current_block_type",
    "current_inline_styles",
    "deserialize",
    "document_from_text",
    "empty_document",
    "extract_preview_text",
    "get_plain_text",
    "handle_key_command",
    "insert_block_after",
    "remove_block",
    "serialize",
    "set_block_text",
    "toggle_block_type",
    "toggle_inline_style",
]
