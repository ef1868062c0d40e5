"""Convert HTML into word-wrapped plain text."""

from .conversion import HtmlToTextConverter, convert
from .errors import StructuralError
from .layout import BlockTextBuilder, table_to_string
from .models import (
    BaseElementsOptions,
    BracketOptions,
    FormatOptions,
    LimitsOptions,
    LongWordSplitOptions,
    Options,
    Selector,
)

__version__ = "0.1.0"

__all__ = [
    "BaseElementsOptions",
    "BlockTextBuilder",
    "BracketOptions",
    "FormatOptions",
    "HtmlToTextConverter",
    "LimitsOptions",
    "LongWordSplitOptions",
    "Options",
    "Selector",
    "StructuralError",
    "convert",
    "table_to_string",
]
