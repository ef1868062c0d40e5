from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from ..errors import StructuralError
from ..models import Options
from .inline import InlineTextBuilder


class ItemKind(Enum):
    BLOCK = "block"
    LIST = "list"
    LIST_ITEM = "list_item"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"


TEXT_KINDS = frozenset({ItemKind.BLOCK, ItemKind.LIST, ItemKind.LIST_ITEM, ItemKind.TABLE_CELL})


@dataclass
class TableCell:
    text: str = ""
    colspan: int = 1
    rowspan: int = 1
    lines: List[str] = field(default_factory=list)
    rendered: bool = False


@dataclass
class TextState:
    inline: InlineTextBuilder
    raw_text: str = ""
    stashed_line_breaks: int = 0
    leading_line_breaks: int = 0


@dataclass
class StackItem:
    kind: ItemKind
    next: Optional["StackItem"] = None
    is_pre: bool = False
    is_no_wrap: bool = False
    text: Optional[TextState] = None
    # lists
    max_prefix_length: int = 0
    prefix_align: str = "left"
    inter_row_line_breaks: int = 1
    # list items
    prefix: str = ""
    # tables and rows
    rows: List[List[TableCell]] = field(default_factory=list)
    cells: List[TableCell] = field(default_factory=list)

    @property
    def is_text(self) -> bool:
        return self.kind in TEXT_KINDS

    def text_state(self, operation: str) -> TextState:
        if self.text is None:
            raise StructuralError(operation, "a text-bearing scope")
        return self.text

    def get_root(self) -> "StackItem":
        item = self
        while item.next is not None:
            item = item.next
        return item

    @classmethod
    def new_block(
        cls,
        options: Options,
        parent: Optional["StackItem"] = None,
        *,
        leading_line_breaks: int = 1,
        max_line_length: int = 0,
        is_pre: bool = False,
    ) -> "StackItem":
        item = cls._inherit(ItemKind.BLOCK, parent)
        item.text = TextState(InlineTextBuilder(options, max_line_length), leading_line_breaks=leading_line_breaks)
        item.is_pre = item.is_pre or is_pre
        return item

    @classmethod
    def new_list(
        cls,
        options: Options,
        parent: "StackItem",
        *,
        max_line_length: int,
        max_prefix_length: int = 0,
        prefix_align: str = "left",
        inter_row_line_breaks: int = 1,
        leading_line_breaks: int = 1,
    ) -> "StackItem":
        item = cls._inherit(ItemKind.LIST, parent)
        item.text = TextState(InlineTextBuilder(options, max_line_length), leading_line_breaks=leading_line_breaks)
        item.max_prefix_length = max_prefix_length
        item.prefix_align = prefix_align
        item.inter_row_line_breaks = inter_row_line_breaks
        return item

    @classmethod
    def new_list_item(
        cls,
        options: Options,
        parent: "StackItem",
        *,
        prefix: str = "",
        max_line_length: int = 0,
        leading_line_breaks: int = 1,
    ) -> "StackItem":
        item = cls._inherit(ItemKind.LIST_ITEM, parent)
        item.text = TextState(InlineTextBuilder(options, max_line_length), leading_line_breaks=leading_line_breaks)
        item.prefix = prefix
        return item

    @classmethod
    def new_table(cls, parent: "StackItem") -> "StackItem":
        return cls._inherit(ItemKind.TABLE, parent)

    @classmethod
    def new_table_row(cls, parent: "StackItem") -> "StackItem":
        return cls._inherit(ItemKind.TABLE_ROW, parent)

    @classmethod
    def new_table_cell(cls, options: Options, parent: "StackItem", *, max_column_width: int = 0) -> "StackItem":
        item = cls._inherit(ItemKind.TABLE_CELL, parent)
        item.text = TextState(InlineTextBuilder(options, max_column_width))
        return item

    @classmethod
    def _inherit(cls, kind: ItemKind, parent: Optional["StackItem"]) -> "StackItem":
        if parent is None:
            return cls(kind)
        return cls(kind, next=parent, is_pre=parent.is_pre, is_no_wrap=parent.is_no_wrap)


@dataclass
class TransformerStackItem:
    transform: Callable[[str], str]
    next: Optional["TransformerStackItem"] = None


def apply_transformer(value: str, item: Optional[TransformerStackItem]) -> str:
    """Apply the newest transform first, then each older one."""
    while item is not None:
        value = item.transform(value)
        item = item.next
    return value
