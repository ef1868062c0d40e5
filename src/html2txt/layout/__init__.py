"""Text layout engine: whitespace handling, word wrapping, blocks, lists and tables."""

from .builder import BlockTextBuilder
from .inline import InlineTextBuilder
from .stack import ItemKind, StackItem, TableCell
from .table import table_to_string
from .whitespace import WhitespaceProcessor, characters_to_codes

__all__ = [
    "BlockTextBuilder",
    "InlineTextBuilder",
    "ItemKind",
    "StackItem",
    "TableCell",
    "WhitespaceProcessor",
    "characters_to_codes",
    "table_to_string",
]
