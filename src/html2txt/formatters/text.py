"""Formatters for the elements with a plain-text rendition of their own."""

from __future__ import annotations

import re
from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from bs4.element import NavigableString, PageElement, Tag

from ..layout.builder import BlockTextBuilder
from ..layout.table import table_to_string
from ..models import BracketOptions, FormatOptions, PathRewriter
from ..utils import number_to_letter_sequence, number_to_roman, parse_int
from .generic import leading_or, trailing_or

if TYPE_CHECKING:
    from ..conversion.core import Walker
    from . import FormatCallback


BLANK_RE = re.compile(r"^\s*$")
TABLE_SECTIONS = frozenset({"thead", "tbody", "tfoot", "center"})


def with_brackets(text: str, brackets: Optional[BracketOptions]) -> str:
    if brackets is None:
        return text
    return brackets.left + text + brackets.right


def rewrite_path(
    path: str,
    rewriter: Optional[PathRewriter],
    base_url: Optional[str],
    metadata: Optional[Dict[str, str]],
    elem: Tag,
) -> str:
    if rewriter is not None:
        rewritten = rewriter(path, metadata, elem)
        if rewritten is not None:
            path = rewritten
    if path.startswith("/") and base_url is not None:
        return base_url.rstrip("/") + path
    return path


def ordered_list_index_function(ol_type: str) -> Callable[[int], str]:
    if ol_type == "a":
        return lambda idx: number_to_letter_sequence(idx, "a")
    if ol_type == "A":
        return lambda idx: number_to_letter_sequence(idx, "A")
    if ol_type == "i":
        return lambda idx: number_to_roman(idx).lower()
    if ol_type == "I":
        return number_to_roman
    return str


def _attr(elem: Tag, name: str) -> str:
    value = elem.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value


def _walk_transformed(
    elem: Tag, walker: "Walker", builder: BlockTextBuilder, transform: Callable[[str], str]
) -> None:
    builder.push_word_transform(transform)
    try:
        walker.walk(elem.contents, builder)
    finally:
        builder.pop_word_transform()


def _anchor_href(elem: Tag, builder: BlockTextBuilder, options: FormatOptions) -> str:
    if options.ignore_href:
        return ""
    href = _attr(elem, "href")
    if not href:
        return ""
    href = href.replace("mailto:", "")
    if options.no_anchor_url and href.startswith("#"):
        return ""
    return rewrite_path(href, options.path_rewrite, options.base_url, builder.metadata, elem)


def format_anchor(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    href = _anchor_href(elem, builder, options)
    if not href:
        walker.walk(elem.contents, builder)
        return

    seen: List[str] = []

    def capture(word: str) -> str:
        if word:
            seen.append(word)
        return word

    _walk_transformed(elem, walker, builder, capture)
    text = "".join(seen)
    if options.hide_link_href_if_same_as_text and href == text:
        return
    builder.add_inline(" " + with_brackets(href, options.link_brackets) if text else href, no_word_transform=True)


def format_blockquote(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    def quote(text: str) -> str:
        if options.trim_empty_lines:
            text = text.strip("\n")
        return "\n".join("> " + line for line in text.split("\n"))

    builder.open_block(leading_line_breaks=leading_or(options, 2), reserved_line_length=2)
    walker.walk(elem.contents, builder)
    builder.close_block(trailing_line_breaks=trailing_or(options, 2), block_transform=quote)


def format_heading(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.open_block(leading_line_breaks=leading_or(options, 2))
    if options.uppercase:
        _walk_transformed(elem, walker, builder, str.upper)
    else:
        walker.walk(elem.contents, builder)
    builder.close_block(trailing_line_breaks=trailing_or(options, 2))


def format_horizontal_line(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    length = 40
    if options.length is not None:
        length = options.length
    elif builder.options.wordwrap is not None and builder.options.wordwrap > 0:
        length = builder.options.wordwrap
    builder.open_block(leading_line_breaks=leading_or(options, 2))
    builder.add_inline("-" * length)
    builder.close_block(trailing_line_breaks=trailing_or(options, 2))


def format_image(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    text = _attr(elem, "alt")
    src = _attr(elem, "src")
    if src:
        src = rewrite_path(src, options.path_rewrite, options.base_url, builder.metadata, elem)
        if text:
            text += " "
        text += with_brackets(src, options.link_brackets)
    builder.add_inline(text, no_word_transform=True)


def format_line_break(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.add_line_break()


def format_wbr(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.add_word_break_opportunity()


def format_paragraph(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.open_block(leading_line_breaks=leading_or(options, 2))
    walker.walk(elem.contents, builder)
    builder.close_block(trailing_line_breaks=trailing_or(options, 2))


def format_pre(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.open_block(leading_line_breaks=leading_or(options, 2), is_pre=True)
    walker.walk(elem.contents, builder)
    builder.close_block(trailing_line_breaks=trailing_or(options, 2))


def format_table(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    """Layout tables: no grid, the content just flows as a block."""
    builder.open_block(leading_line_breaks=leading_or(options, 1))
    walker.walk(elem.contents, builder)
    builder.close_block(trailing_line_breaks=trailing_or(options, 1))


# Lists ---------------------------------------------------------------
def _list_items(elem: Tag, next_prefix: Callable[[], str], nested: bool) -> Tuple[List[Tuple[PageElement, str]], int]:
    items: List[Tuple[PageElement, str]] = []
    max_prefix_length = 0
    for child in elem.contents:
        if isinstance(child, Tag):
            if child.name != "li":
                items.append((child, ""))
                continue
            prefix = next_prefix()
            if nested:
                prefix = prefix.lstrip()
            max_prefix_length = max(max_prefix_length, len(prefix))
            items.append((child, prefix))
        elif type(child) is NavigableString and not BLANK_RE.match(child):
            items.append((child, ""))
    return items, max_prefix_length


def format_list(
    elem: Tag,
    walker: "Walker",
    builder: BlockTextBuilder,
    options: FormatOptions,
    next_prefix: Callable[[], str],
) -> None:
    """Lay out list items, each behind the prefix handed out by ``next_prefix``.

    Lists nested directly in a list item drop the prefix's leading spaces
    and sit one line away from the surrounding text.
    """
    nested = isinstance(elem.parent, Tag) and elem.parent.name == "li"
    if not any(isinstance(child, Tag) for child in elem.contents):
        return
    items, max_prefix_length = _list_items(elem, next_prefix, nested)
    if not items:
        return

    builder.open_list(
        max_prefix_length=max_prefix_length,
        prefix_align="left",
        inter_row_line_breaks=1,
        leading_line_breaks=1 if nested else leading_or(options, 2),
    )
    for node, prefix in items:
        builder.open_list_item(prefix=prefix)
        walker.walk([node], builder)
        builder.close_list_item()
    builder.close_list(trailing_line_breaks=1 if nested else trailing_or(options, 2))


def format_ordered_list(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    index = parse_int(elem.get("start"), 1)
    index_function = ordered_list_index_function(_attr(elem, "type") or "1")

    def next_prefix() -> str:
        nonlocal index
        prefix = f" {index_function(index)}. "
        index += 1
        return prefix

    format_list(elem, walker, builder, options, next_prefix)


def format_unordered_list(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    prefix = " * " if options.item_prefix is None else options.item_prefix
    format_list(elem, walker, builder, options, lambda: prefix)


# Data tables ---------------------------------------------------------
def _format_cell(cell: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    colspan = max(1, parse_int(cell.get("colspan"), 1))
    rowspan = max(1, parse_int(cell.get("rowspan"), 1))
    builder.open_table_cell(max_column_width=options.max_column_width)
    walker.walk(cell.contents, builder)
    builder.close_table_cell(colspan=colspan, rowspan=rowspan)


def _walk_table(node: PageElement, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    if not isinstance(node, Tag):
        return
    name = node.name.lower()
    if name in TABLE_SECTIONS:
        for child in node.contents:
            _walk_table(child, walker, builder, options)
        return
    if name != "tr":
        return
    builder.open_table_row()
    for cell in node.contents:
        if not isinstance(cell, Tag):
            continue
        cell_name = cell.name.lower()
        if cell_name == "th" and options.uppercase_header_cells:
            builder.push_word_transform(str.upper)
            try:
                _format_cell(cell, walker, builder, options)
            finally:
                builder.pop_word_transform()
        elif cell_name in ("th", "td"):
            _format_cell(cell, walker, builder, options)
    builder.close_table_row()


def format_data_table(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.open_table()
    for child in elem.contents:
        _walk_table(child, walker, builder, options)
    builder.close_table(
        partial(
            table_to_string,
            row_spacing=options.row_spacing or 0,
            col_spacing=3 if options.col_spacing is None else options.col_spacing,
        ),
        leading_line_breaks=leading_or(options, 2),
        trailing_line_breaks=trailing_or(options, 2),
    )


TEXT_FORMATTERS: Dict[str, "FormatCallback"] = {
    "anchor": format_anchor,
    "blockquote": format_blockquote,
    "dataTable": format_data_table,
    "heading": format_heading,
    "horizontalLine": format_horizontal_line,
    "image": format_image,
    "lineBreak": format_line_break,
    "orderedList": format_ordered_list,
    "paragraph": format_paragraph,
    "pre": format_pre,
    "table": format_table,
    "unorderedList": format_unordered_list,
    "wbr": format_wbr,
}
