from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from ..formatters import FormatterRegistry, build_formatter_registry
from ..layout.builder import BlockTextBuilder
from ..models import LimitsOptions, Options
from .selectors import SelectorTable


logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"
# the document root keeps whitespace-only strings from collapsing to one character
PRESERVE_WHITESPACE_TAGS = {BeautifulSoup.ROOT_TAG_NAME, "pre", "textarea"}


class Walker:
    """Walks DOM nodes, handing text to the builder and elements to their formatters."""

    def __init__(
        self,
        formatters: FormatterRegistry,
        selectors: SelectorTable,
        limits: LimitsOptions,
        max_depth: Optional[int] = None,
    ) -> None:
        self.formatters = formatters
        self._selectors = selectors
        self._ellipsis = limits.ellipsis or ""
        self._max_child_nodes = limits.max_child_nodes
        self._max_depth = max_depth
        self._depth = 0

    def walk(self, nodes: Iterable[PageElement], builder: BlockTextBuilder) -> None:
        self._depth += 1
        try:
            if self._max_depth is not None and self._depth > self._max_depth:
                logger.debug("Depth limit of %d reached, skipping nested content.", self._max_depth)
                builder.add_inline(self._ellipsis)
                return
            nodes = list(nodes)
            too_many = self._max_child_nodes is not None and len(nodes) > self._max_child_nodes
            if too_many:
                logger.debug("Walking %d of %d child nodes.", self._max_child_nodes, len(nodes))
                nodes = nodes[: self._max_child_nodes]
            for node in nodes:
                self._visit(node, builder)
            if too_many:
                builder.add_inline(self._ellipsis)
        finally:
            self._depth -= 1

    def _visit(self, node: PageElement, builder: BlockTextBuilder) -> None:
        if isinstance(node, Tag):
            if node.name == "body":
                self.walk(node.contents, builder)
                return
            selector = self._selectors.pick(node)
            if selector is None:
                logger.debug("No selector matches <%s>, skipping it.", node.name)
                return
            formatter = self.formatters.get(selector.format)
            formatter(node, self, builder, selector.options)
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            # comments, doctypes and the like carry no text
            builder.add_inline(str(node))


class HtmlToTextConverter:
    """Converts HTML to plain text with one fixed set of options.

    Formatters and selectors are resolved once here, so later changes to
    ``options`` are not picked up. One converter can serve many documents.
    """

    def __init__(self, options: Optional[Options] = None) -> None:
        self.options = options or Options()
        self.formatters: FormatterRegistry = build_formatter_registry(self.options.formatters)
        self.selectors = SelectorTable(self.options.selectors)
        for entry in self.options.selectors:
            self.formatters.get(entry.format)

    def convert(self, html: Optional[str], metadata: Optional[Dict[str, str]] = None) -> str:
        if html is None:
            return ""
        limits = self.options.limits
        if limits.max_input_length > 0 and len(html) > limits.max_input_length:
            logger.warning(
                "Input length %d is above allowed limit of %d. Truncating without ellipsis.",
                len(html),
                limits.max_input_length,
            )
            html = html[: limits.max_input_length]

        soup = BeautifulSoup(html, HTML_PARSER, preserve_whitespace_tags=PRESERVE_WHITESPACE_TAGS)
        builder = BlockTextBuilder(self.options, metadata)

        bases = self._find_base_elements(soup)
        if bases:
            # the base elements themselves count as one level
            max_depth = None if limits.max_depth is None else limits.max_depth + 1
            self._walker(max_depth).walk(bases, builder)
            return builder.to_string()

        if self.options.base_elements.return_dom_by_default:
            root = soup.body if soup.body is not None else soup
            self._walker(limits.max_depth).walk(root.contents, builder)
        return builder.to_string()

    def _walker(self, max_depth: Optional[int]) -> Walker:
        return Walker(self.formatters, self.selectors, self.options.limits, max_depth)

    def _find_base_elements(self, soup: BeautifulSoup) -> List[Tag]:
        base = self.options.base_elements
        if not base.selectors:
            return []
        if base.order_by != "selectors":
            found = soup.select(", ".join(base.selectors))
        else:
            found = []
            seen = set()
            for selector in base.selectors:
                for element in soup.select(selector):
                    if id(element) not in seen:
                        seen.add(id(element))
                        found.append(element)
        limit = self.options.limits.max_base_elements
        if limit is not None:
            found = found[:limit]
        logger.debug("Found %d base element(s) for %s.", len(found), base.selectors)
        return list(found)


def convert(html: Optional[str], options: Optional[Options] = None, metadata: Optional[Dict[str, str]] = None) -> str:
    """Convert ``html`` to plain text."""
    return HtmlToTextConverter(options).convert(html, metadata)


def read_html(path: Path) -> str:
    with path.open("r", encoding="utf-8") as handle:
        return handle.read()
