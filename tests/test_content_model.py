"""Tests for the rich-text document model."""

import unittest

from richnotes.content import (
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
    serialize,
    set_block_text,
)
from richnotes.content.model import normalize_ranges


class DocumentModelTest(unittest.TestCase):
    """Tests for documents and plain-text helpers."""

    def test_empty_document(self):
        """An empty document has one empty unstyled block."""
        doc = empty_document()
        self.assertEqual(len(doc.blocks), 1)
        self.assertEqual(doc.blocks[0].type, BlockType.UNSTYLED)
        self.assertEqual(doc.blocks[0].text, "")
        self.assertEqual(doc.blocks[0].style_ranges, ())
        self.assertEqual(get_plain_text(doc), "")

    def test_plain_text_joins_blocks_with_newline(self):
        doc = Document(
            blocks=(
                Block(key="a", text="Milk"),
                Block(key="b", text="Eggs", type=BlockType.UNORDERED_LIST_ITEM),
                Block(
                    key="c",
                    text="Bread",
                    style_ranges=(StyleRange(0, 5, InlineStyle.BOLD),),
                ),
            )
        )
        self.assertEqual(get_plain_text(doc), "Milk\nEggs\nBread")

    def test_plain_text_is_pure(self):
        doc = document_from_text("hello")
        blocks = doc.blocks
        self.assertEqual(get_plain_text(doc), "hello")
        self.assertEqual(get_plain_text(doc), "hello")
        self.assertIs(doc.blocks, blocks)

    def test_set_block_text_clips_ranges(self):
        """Shortening a block clips its ranges and drops empty ones."""
        doc = Document(
            blocks=(
                Block(
                    key="a",
                    text="Hello world",
                    style_ranges=(
                        StyleRange(0, 5, InlineStyle.BOLD),
                        StyleRange(6, 11, InlineStyle.ITALIC),
                    ),
                ),
            )
        )
        updated = set_block_text(doc, "a", "Hel")
        self.assertEqual(updated.blocks[0].text, "Hel")
        self.assertEqual(
            updated.blocks[0].style_ranges, (StyleRange(0, 3, InlineStyle.BOLD),)
        )
        # Original is untouched
        self.assertEqual(doc.blocks[0].text, "Hello world")

    def test_block_keeps_ranges_within_text(self):
        block = Block(
            key="a",
            text="abc",
            style_ranges=(
                StyleRange(1, 10, InlineStyle.BOLD),
                StyleRange(0, 0, InlineStyle.ITALIC),
                StyleRange(0, 1, InlineStyle.BOLD),
            ),
        )
        self.assertEqual(block.style_ranges, (StyleRange(0, 3, InlineStyle.BOLD),))
        self.assertEqual(
            serialize(Document(blocks=(block,))),
            '{"blocks":[{"key":"a","text":"abc","type":"unstyled","depth":0,'
            '"inlineStyleRanges":[{"offset":0,"length":3,"style":"BOLD"}],'
            '"entityRanges":[],"data":{}}],"entityMap":{}}',
        )

    def test_set_block_text_unknown_key_is_noop(self):
        doc = document_from_text("x")
        self.assertIs(set_block_text(doc, "missing", "y"), doc)

    def test_insert_and_remove_blocks(self):
        doc = document_from_text("first")
        first_key = doc.blocks[0].key
        doc = insert_block_after(doc, first_key, "second", BlockType.ORDERED_LIST_ITEM)
        doc = insert_block_after(doc, None, "third")
        self.assertEqual(get_plain_text(doc), "first\nsecond\nthird")
        self.assertEqual(doc.blocks[1].type, BlockType.ORDERED_LIST_ITEM)
        self.assertEqual(len(set(doc.keys)), 3)

        doc = remove_block(doc, first_key)
        self.assertEqual(get_plain_text(doc), "second\nthird")

    def test_remove_last_block_leaves_empty_block(self):
        doc = document_from_text("only")
        doc = remove_block(doc, doc.blocks[0].key)
        self.assertEqual(len(doc.blocks), 1)
        self.assertEqual(doc.blocks[0].text, "")

    def test_color_style(self):
        self.assertEqual(color_style("red"), InlineStyle.COLOR_RED)
        self.assertTrue(InlineStyle.COLOR_ORANGE.is_color)
        self.assertFalse(InlineStyle.BOLD.is_color)
        with self.assertRaises(ValueError):
            color_style("magenta")


class NormalizeRangesTest(unittest.TestCase):
    """Tests for style range normalization."""

    def test_merges_overlapping_and_touching_same_style(self):
        ranges = [
            StyleRange(0, 3, InlineStyle.BOLD),
            StyleRange(2, 5, InlineStyle.BOLD),
            StyleRange(5, 7, InlineStyle.BOLD),
            StyleRange(9, 10, InlineStyle.BOLD),
        ]
        self.assertEqual(
            normalize_ranges(ranges, 20),
            (StyleRange(0, 7, InlineStyle.BOLD), StyleRange(9, 10, InlineStyle.BOLD)),
        )

    def test_distinct_styles_may_overlap(self):
        ranges = [
            StyleRange(0, 4, InlineStyle.COLOR_RED),
            StyleRange(0, 4, InlineStyle.BOLD),
        ]
        self.assertEqual(
            normalize_ranges(ranges, 4),
            (StyleRange(0, 4, InlineStyle.BOLD), StyleRange(0, 4, InlineStyle.COLOR_RED)),
        )

    def test_clips_and_drops_empty(self):
        ranges = [
            StyleRange(-2, 3, InlineStyle.ITALIC),
            StyleRange(4, 4, InlineStyle.BOLD),
            StyleRange(8, 12, InlineStyle.UNDERLINE),
        ]
        self.assertEqual(
            normalize_ranges(ranges, 5), (StyleRange(0, 3, InlineStyle.ITALIC),)
        )


if __name__ == "__main__":
    unittest.main()
