from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ..errors import StructuralError
from ..models import Options
from .stack import (
    ItemKind,
    StackItem,
    TableCell,
    TextState,
    TransformerStackItem,
    apply_transformer,
)
from .whitespace import WhitespaceProcessor


MIN_LINE_LENGTH = 20

TableToString = Callable[[List[List[TableCell]]], Optional[str]]


class BlockTextBuilder:
    """Builds the output text from a stack of nested blocks, lists and tables.

    Formatters drive it through balanced ``open_*``/``close_*`` calls. When a
    scope is closed its text is merged into the enclosing scope, separated
    from earlier content by the larger of the pending and requested line
    breaks.
    """

    def __init__(self, options: Options, metadata: Optional[Dict[str, str]] = None) -> None:
        self.options = options
        self.metadata = metadata
        self._whitespace = WhitespaceProcessor(options)
        self._stack_item = StackItem.new_block(options)
        self._word_transformer: Optional[TransformerStackItem] = None

    @property
    def current(self) -> StackItem:
        return self._stack_item

    # Word transforms ---------------------------------------------------
    def push_word_transform(self, transform: Callable[[str], str]) -> None:
        """Transform every following word (not literals) until popped."""
        self._word_transformer = TransformerStackItem(transform, self._word_transformer)

    def pop_word_transform(self) -> Optional[Callable[[str], str]]:
        if self._word_transformer is None:
            return None
        transform = self._word_transformer.transform
        self._word_transformer = self._word_transformer.next
        return transform

    def _combined_word_transform(self) -> Optional[Callable[[str], str]]:
        chain = self._word_transformer
        encode = self.options.encode_characters
        if chain is None:
            return encode
        if encode is None:
            return lambda word: apply_transformer(word, chain)
        return lambda word: encode(apply_transformer(word, chain))

    # Inline content ----------------------------------------------------
    def start_no_wrap(self) -> None:
        self._stack_item.is_no_wrap = True

    def stop_no_wrap(self) -> None:
        self._stack_item.is_no_wrap = False

    def add_line_break(self) -> None:
        state = self._stack_item.text
        if state is None:
            return
        if self._stack_item.is_pre:
            state.raw_text += "\n"
        else:
            state.inline.start_new_line()

    def add_word_break_opportunity(self) -> None:
        """Allow a line break right before the text that follows."""
        state = self._stack_item.text
        if state is not None:
            state.inline.word_break_opportunity = True

    def add_inline(self, text: str, no_word_transform: bool = False) -> None:
        """Add a text node to the current scope, collapsing its whitespace.

        ``no_word_transform`` bypasses word transforms and character encoding,
        which is what urls need.
        """
        state = self._stack_item.text
        if state is None:
            return
        if self._stack_item.is_pre:
            state.raw_text += text
            return
        if not text:
            return
        # pending line breaks make whitespace irrelevant
        if state.stashed_line_breaks > 0 and not self._whitespace.test_contains_words(text):
            return
        if self.options.preserve_newlines:
            newlines = self._whitespace.count_newlines_no_words(text)
            if newlines > 0:
                state.inline.start_new_line(newlines)
                return
        if state.stashed_line_breaks > 0:
            state.inline.start_new_line(state.stashed_line_breaks)
        self._whitespace.shrink_wrap_add(
            text,
            state.inline,
            None if no_word_transform else self._combined_word_transform(),
            self._stack_item.is_no_wrap,
        )
        state.stashed_line_breaks = 0

    def add_literal(self, text: str) -> None:
        """Add markup text that does not follow the whitespace rules."""
        state = self._stack_item.text
        if state is None or not text:
            return
        if self._stack_item.is_pre:
            state.raw_text += text
            return
        if state.stashed_line_breaks > 0:
            state.inline.start_new_line(state.stashed_line_breaks)
        self._whitespace.add_literal(text, state.inline, self._stack_item.is_no_wrap)
        state.stashed_line_breaks = 0

    # Blocks ------------------------------------------------------------
    def open_block(self, leading_line_breaks: int = 1, reserved_line_length: int = 0, is_pre: bool = False) -> None:
        parent = self._require_text("open_block")
        self._stack_item = StackItem.new_block(
            self.options,
            self._stack_item,
            leading_line_breaks=leading_line_breaks,
            max_line_length=max(MIN_LINE_LENGTH, parent.inline.max_line_length - reserved_line_length),
            is_pre=is_pre,
        )

    def close_block(
        self,
        trailing_line_breaks: int = 1,
        block_transform: Optional[Callable[[str], str]] = None,
    ) -> None:
        """Merge the current block into its parent.

        ``block_transform`` rewrites the wrapped text of the whole block, so it
        should be paired with ``reserved_line_length`` in ``open_block``.
        """
        block = self._pop(ItemKind.BLOCK, "close_block")
        state = block.text_state("close_block")
        text = self._get_text(state)
        if block_transform is not None:
            text = block_transform(text)
        self._add_text(
            self._stack_item.text_state("close_block"),
            text,
            state.leading_line_breaks,
            max(state.stashed_line_breaks, trailing_line_breaks),
        )

    # Lists -------------------------------------------------------------
    def open_list(
        self,
        max_prefix_length: int = 0,
        prefix_align: str = "left",
        inter_row_line_breaks: int = 1,
        leading_line_breaks: int = 2,
    ) -> None:
        parent = self._require_text("open_list")
        self._stack_item = StackItem.new_list(
            self.options,
            self._stack_item,
            max_line_length=parent.inline.max_line_length,
            max_prefix_length=max_prefix_length,
            prefix_align=prefix_align,
            inter_row_line_breaks=inter_row_line_breaks,
            leading_line_breaks=leading_line_breaks,
        )

    def open_list_item(self, prefix: str = "") -> None:
        current = self._stack_item
        if current.kind is not ItemKind.LIST:
            raise StructuralError("open_list_item", "a list")
        prefix_length = max(len(prefix), current.max_prefix_length)
        self._stack_item = StackItem.new_list_item(
            self.options,
            current,
            prefix=prefix,
            max_line_length=max(MIN_LINE_LENGTH, current.text_state("open_list_item").inline.max_line_length - prefix_length),
            leading_line_breaks=current.inter_row_line_breaks,
        )

    def close_list_item(self) -> None:
        item = self._pop(ItemKind.LIST_ITEM, "close_list_item")
        state = item.text_state("close_list_item")
        parent = self._stack_item
        prefix_length = max(len(item.prefix), parent.max_prefix_length)
        if parent.prefix_align == "right":
            prefix = item.prefix.rjust(prefix_length)
        else:
            prefix = item.prefix.ljust(prefix_length)
        text = prefix + self._get_text(state).replace("\n", "\n" + " " * prefix_length)
        self._add_text(
            parent.text_state("close_list_item"),
            text,
            state.leading_line_breaks,
            max(state.stashed_line_breaks, parent.inter_row_line_breaks),
        )

    def close_list(self, trailing_line_breaks: int = 2) -> None:
        item = self._pop(ItemKind.LIST, "close_list")
        state = item.text_state("close_list")
        self._add_text(
            self._stack_item.text_state("close_list"),
            self._get_text(state),
            state.leading_line_breaks,
            trailing_line_breaks,
        )

    # Tables ------------------------------------------------------------
    def open_table(self) -> None:
        self._require_text("open_table")
        self._stack_item = StackItem.new_table(self._stack_item)

    def open_table_row(self) -> None:
        if self._stack_item.kind is not ItemKind.TABLE:
            raise StructuralError("open_table_row", "a table")
        self._stack_item = StackItem.new_table_row(self._stack_item)

    def open_table_cell(self, max_column_width: int = 0) -> None:
        """Open a cell wrapping at ``max_column_width`` (0 means the global wordwrap)."""
        if self._stack_item.kind is not ItemKind.TABLE_ROW:
            raise StructuralError("open_table_cell", "a table row")
        self._stack_item = StackItem.new_table_cell(self.options, self._stack_item, max_column_width=max_column_width)

    def close_table_cell(self, colspan: int = 1, rowspan: int = 1) -> None:
        cell = self._pop(ItemKind.TABLE_CELL, "close_table_cell")
        text = self._get_text(cell.text_state("close_table_cell")).strip("\n")
        self._stack_item.cells.append(TableCell(text=text, colspan=colspan, rowspan=rowspan))

    def close_table_row(self) -> None:
        row = self._pop(ItemKind.TABLE_ROW, "close_table_row")
        self._stack_item.rows.append(row.cells)

    def close_table(
        self,
        table_to_string: TableToString,
        leading_line_breaks: int = 2,
        trailing_line_breaks: int = 2,
    ) -> None:
        table = self._pop(ItemKind.TABLE, "close_table")
        output = table_to_string(table.rows)
        if output is not None:
            self._add_text(
                self._stack_item.text_state("close_table"),
                output,
                leading_line_breaks,
                trailing_line_breaks,
            )

    # Output ------------------------------------------------------------
    def to_string(self) -> str:
        return self._get_text(self._stack_item.get_root().text_state("to_string"))

    def __str__(self) -> str:
        return self.to_string()

    # Internals ---------------------------------------------------------
    def _require_text(self, operation: str) -> TextState:
        return self._stack_item.text_state(operation)

    def _pop(self, kind: ItemKind, operation: str) -> StackItem:
        item = self._stack_item
        if item.kind is not kind or item.next is None:
            raise StructuralError(operation, f"an open {kind.value.replace('_', ' ')}")
        self._stack_item = item.next
        return item

    @staticmethod
    def _get_text(state: TextState) -> str:
        if state.inline.is_empty():
            return state.raw_text
        return state.raw_text + str(state.inline)

    def _add_text(self, parent: TextState, text: str, leading_line_breaks: int, trailing_line_breaks: int) -> None:
        parent_text = self._get_text(parent)
        line_breaks = max(parent.stashed_line_breaks, leading_line_breaks)
        parent.inline.clear()
        if parent_text.strip():
            parent.raw_text = parent_text + "\n" * line_breaks + text
        else:
            parent.raw_text = text
            parent.leading_line_breaks = line_breaks
        parent.stashed_line_breaks = trailing_line_breaks
