from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from bs4.element import Tag

from ..layout.builder import BlockTextBuilder
from ..models import FormatOptions

if TYPE_CHECKING:
    from ..conversion.core import Walker
    from . import FormatCallback


def render_open_tag(elem: Tag) -> str:
    attrs = []
    for name, value in elem.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        if value:
            escaped = value.replace('"', "&quot;")
            attrs.append(f' {name}="{escaped}"')
        else:
            attrs.append(f" {name}")
    return f"<{elem.name}{''.join(attrs)}>"


def render_close_tag(elem: Tag) -> str:
    return f"</{elem.name}>"


def _add_no_wrap_literal(builder: BlockTextBuilder, text: str) -> None:
    builder.start_no_wrap()
    builder.add_literal(text)
    builder.stop_no_wrap()


def format_skip(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    """Drop the element and everything inside it."""


def format_inline_string(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.add_literal(options.string_literal)


def format_block_string(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.open_block(leading_line_breaks=leading_or(options, 2))
    builder.add_literal(options.string_literal)
    builder.close_block(trailing_line_breaks=trailing_or(options, 2))


def format_inline(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    walker.walk(elem.contents, builder)


def format_block(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.open_block(leading_line_breaks=leading_or(options, 2))
    walker.walk(elem.contents, builder)
    builder.close_block(trailing_line_breaks=trailing_or(options, 2))


def format_inline_tag(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    """Keep the element's own tags around its converted content."""
    _add_no_wrap_literal(builder, render_open_tag(elem))
    walker.walk(elem.contents, builder)
    _add_no_wrap_literal(builder, render_close_tag(elem))


def format_block_tag(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.open_block(leading_line_breaks=leading_or(options, 2))
    _add_no_wrap_literal(builder, render_open_tag(elem))
    walker.walk(elem.contents, builder)
    _add_no_wrap_literal(builder, render_close_tag(elem))
    builder.close_block(trailing_line_breaks=trailing_or(options, 2))


def format_inline_html(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    _add_no_wrap_literal(builder, str(elem))


def format_block_html(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.open_block(leading_line_breaks=leading_or(options, 2))
    _add_no_wrap_literal(builder, str(elem))
    builder.close_block(trailing_line_breaks=trailing_or(options, 2))


def format_inline_surround(elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
    builder.add_literal(options.prefix)
    walker.walk(elem.contents, builder)
    builder.add_literal(options.suffix)


def leading_or(options: FormatOptions, default: int) -> int:
    return default if options.leading_line_breaks is None else options.leading_line_breaks


def trailing_or(options: FormatOptions, default: int) -> int:
    return default if options.trailing_line_breaks is None else options.trailing_line_breaks


GENERIC_FORMATTERS: Dict[str, "FormatCallback"] = {
    "skip": format_skip,
    "inlineString": format_inline_string,
    "blockString": format_block_string,
    "inline": format_inline,
    "block": format_block,
    "inlineTag": format_inline_tag,
    "blockTag": format_block_tag,
    "inlineHtml": format_inline_html,
    "blockHtml": format_block_html,
    "inlineSurround": format_inline_surround,
}
