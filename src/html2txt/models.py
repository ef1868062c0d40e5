from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence, Union

if TYPE_CHECKING:
    from bs4 import Tag


DEFAULT_WHITESPACE_CHARACTERS = " \t\r\n\f\u200b"

PathRewriter = Callable[[str, Optional[Dict[str, str]], "Tag"], Optional[str]]


@dataclass
class BracketOptions:
    left: str = "["
    right: str = "]"


@dataclass
class FormatOptions:
    leading_line_breaks: Optional[int] = None
    trailing_line_breaks: Optional[int] = None
    # anchors and images
    base_url: Optional[str] = None
    hide_link_href_if_same_as_text: bool = False
    ignore_href: bool = False
    link_brackets: Optional[BracketOptions] = None
    no_anchor_url: bool = False
    path_rewrite: Optional[PathRewriter] = None
    # lists
    item_prefix: Optional[str] = None
    # headings, horizontal lines, blockquotes
    uppercase: bool = False
    length: Optional[int] = None
    trim_empty_lines: bool = False
    # tables
    uppercase_header_cells: bool = True
    max_column_width: int = 0
    col_spacing: Optional[int] = None
    row_spacing: Optional[int] = None
    # generic formatters
    string_literal: str = ""
    prefix: str = ""
    suffix: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Selector:
    selector: str
    format: str
    options: FormatOptions = field(default_factory=FormatOptions)


@dataclass
class BaseElementsOptions:
    selectors: List[str] = field(default_factory=lambda: ["body"])
    order_by: str = "selectors"
    return_dom_by_default: bool = True


@dataclass
class LimitsOptions:
    ellipsis: str = "..."
    max_base_elements: Optional[int] = None
    max_child_nodes: Optional[int] = None
    max_depth: Optional[int] = None
    max_input_length: int = 1 << 24


@dataclass
class LongWordSplitOptions:
    wrap_characters: Union[str, Sequence[str]] = ""
    force_wrap_on_limit: bool = False


def _block(leading: int, trailing: int, **kwargs: Any) -> FormatOptions:
    return FormatOptions(leading_line_breaks=leading, trailing_line_breaks=trailing, **kwargs)


def default_selectors() -> List[Selector]:
    selectors = [
        Selector("*", "inline"),
        Selector("a", "anchor", FormatOptions(link_brackets=BracketOptions(), no_anchor_url=True)),
    ]
    for name in ("article", "aside"):
        selectors.append(Selector(name, "block", _block(1, 1)))
    selectors.append(Selector("blockquote", "blockquote", _block(2, 2, trim_empty_lines=True)))
    selectors.append(Selector("br", "lineBreak"))
    for name in ("div", "footer", "form"):
        selectors.append(Selector(name, "block", _block(1, 1)))
    for name in ("h1", "h2", "h3"):
        selectors.append(Selector(name, "heading", _block(3, 2, uppercase=True)))
    for name in ("h4", "h5", "h6"):
        selectors.append(Selector(name, "heading", _block(2, 2, uppercase=True)))
    selectors.append(Selector("header", "block", _block(1, 1)))
    selectors.append(Selector("hr", "horizontalLine", _block(2, 2)))
    selectors.append(Selector("img", "image", FormatOptions(link_brackets=BracketOptions())))
    selectors.append(Selector("main", "block", _block(1, 1)))
    selectors.append(Selector("nav", "block", _block(1, 1)))
    selectors.append(Selector("ol", "orderedList", _block(2, 2)))
    selectors.append(Selector("p", "paragraph", _block(2, 2)))
    selectors.append(Selector("pre", "pre", _block(2, 2)))
    selectors.append(Selector("section", "block", _block(1, 1)))
    selectors.append(
        Selector(
            "table",
            "table",
            _block(2, 2, col_spacing=3, row_spacing=0, max_column_width=60, uppercase_header_cells=True),
        )
    )
    selectors.append(Selector("ul", "unorderedList", _block(2, 2, item_prefix=" * ")))
    selectors.append(Selector("wbr", "wbr"))
    selectors.append(Selector("head", "skip"))
    selectors.append(Selector("script", "skip"))
    selectors.append(Selector("style", "skip"))
    return selectors


@dataclass
class Options:
    base_elements: BaseElementsOptions = field(default_factory=BaseElementsOptions)
    encode_characters: Optional[Callable[[str], str]] = None
    formatters: Dict[str, Callable[..., None]] = field(default_factory=dict)
    limits: LimitsOptions = field(default_factory=LimitsOptions)
    long_word_split: LongWordSplitOptions = field(default_factory=LongWordSplitOptions)
    preserve_newlines: bool = False
    selectors: List[Selector] = field(default_factory=default_selectors)
    whitespace_characters: str = DEFAULT_WHITESPACE_CHARACTERS
    wordwrap: Optional[int] = 80

    def selector(self, identifier: str) -> Selector:
        for entry in self.selectors:
            if entry.selector == identifier:
                return entry
        raise KeyError(f"Selector '{identifier}' is not configured.")

    def set_format(self, identifier: str, format_name: str) -> Selector:
        """Point an existing selector at another format, or append a new one."""
        try:
            entry = self.selector(identifier)
        except KeyError:
            entry = Selector(identifier, format_name)
            self.selectors.append(entry)
            return entry
        entry.format = format_name
        return entry
