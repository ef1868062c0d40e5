"""Formatting callbacks turning elements into builder calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional, Protocol

from bs4.element import Tag

from ..layout.builder import BlockTextBuilder
from ..models import FormatOptions
from ..plugins.registry import PluginRegistry

if TYPE_CHECKING:
    from ..conversion.core import Walker


class FormatCallback(Protocol):
    def __call__(self, elem: Tag, walker: "Walker", builder: BlockTextBuilder, options: FormatOptions) -> None:
        ...


FormatterRegistry = PluginRegistry[FormatCallback]


def build_formatter_registry(overrides: Optional[Mapping[str, FormatCallback]] = None) -> FormatterRegistry:
    """Fresh registry of the bundled formatters, with ``overrides`` replacing same-named ones."""
    from .generic import GENERIC_FORMATTERS
    from .text import TEXT_FORMATTERS

    registry: FormatterRegistry = PluginRegistry()
    for name, formatter in {**GENERIC_FORMATTERS, **TEXT_FORMATTERS}.items():
        registry.register(name, formatter)
    if overrides:
        registry.update(overrides)
    return registry


__all__ = ["FormatCallback", "FormatterRegistry", "build_formatter_registry"]
