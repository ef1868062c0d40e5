"""HTML parsing, selector matching and the tree walk."""

from .core import HtmlToTextConverter, Walker, convert, read_html
from .selectors import SelectorTable, specificity

__all__ = [
    "HtmlToTextConverter",
    "SelectorTable",
    "Walker",
    "convert",
    "read_html",
    "specificity",
]
