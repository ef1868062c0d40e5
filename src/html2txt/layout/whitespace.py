from __future__ import annotations

import re
from typing import Callable, Optional

from ..models import Options
from .inline import InlineTextBuilder


NEWLINE_OR_LINE_RE = re.compile(r"\n|[^\n]+")


def characters_to_codes(characters: str) -> str:
    """Escape every character as a regex code point, e.g. ``" \\n"`` -> ``"\\u0020\\u000a"``."""
    codes = []
    for char in characters:
        point = ord(char)
        codes.append(f"\\u{point:04x}" if point <= 0xFFFF else f"\\U{point:08x}")
    return "".join(codes)


class WhitespaceProcessor:
    """Collapse HTML whitespace while feeding words into an inline builder."""

    def __init__(self, options: Options) -> None:
        self.preserve_newlines = options.preserve_newlines
        chars = options.whitespace_characters
        if self.preserve_newlines:
            chars = chars.replace("\n", "")
        self.whitespace_characters = chars
        codes = characters_to_codes(chars)
        # an empty set must never match rather than produce an invalid class
        ws_class = f"[{codes}]" if codes else r"[^\s\S]"
        word_class = f"[^{codes}]" if codes else r"[\s\S]"
        self._leading_whitespace_re = re.compile(f"^{ws_class}")
        self._trailing_whitespace_re = re.compile(f"{ws_class}$")
        self._all_whitespace_or_empty_re = re.compile(f"^{ws_class}*$")
        self._newline_or_non_whitespace_re = re.compile(f"\n|[^\n{codes}]")
        if self.preserve_newlines:
            self._word_re = re.compile(f"\n|[^\n{codes}]+")
        else:
            self._word_re = re.compile(f"{word_class}+")

    def shrink_wrap_add(
        self,
        text: str,
        builder: InlineTextBuilder,
        transform: Optional[Callable[[str], str]] = None,
        no_wrap: bool = False,
    ) -> None:
        if not text:
            return
        if transform is None:
            transform = _identity
        previously_stashed_space = builder.stashed_space
        any_match = False
        for index, match in enumerate(self._word_re.finditer(text)):
            any_match = True
            token = match.group()
            if self.preserve_newlines and token == "\n":
                builder.start_new_line()
            elif index == 0 and not (previously_stashed_space or self._leading_whitespace_re.search(text)):
                builder.concat_word(transform(token), no_wrap)
            else:
                builder.push_word(transform(token), no_wrap)
        builder.stashed_space = (previously_stashed_space and not any_match) or bool(
            self._trailing_whitespace_re.search(text)
        )

    def add_literal(self, text: str, builder: InlineTextBuilder, no_wrap: bool = True) -> None:
        """Add text with minimal processing: every run between newlines is one word."""
        if not text:
            return
        previously_stashed_space = builder.stashed_space
        any_match = False
        for index, match in enumerate(NEWLINE_OR_LINE_RE.finditer(text)):
            any_match = True
            token = match.group()
            if token == "\n":
                builder.start_new_line()
            elif index == 0 and not previously_stashed_space:
                builder.concat_word(token, no_wrap)
            else:
                builder.push_word(token, no_wrap)
        builder.stashed_space = previously_stashed_space and not any_match

    def test_contains_words(self, text: str) -> bool:
        # a lone newline counts as a word when newlines do not collapse
        if text == "\n" and "\n" not in self.whitespace_characters:
            return True
        return not self._all_whitespace_or_empty_re.search(text)

    def count_newlines_no_words(self, text: str) -> int:
        """Number of newlines in ``text``, or 0 as soon as a word character shows up."""
        counter = 0
        for match in self._newline_or_non_whitespace_re.finditer(text):
            if match.group() != "\n":
                return 0
            counter += 1
        return counter


def _identity(value: str) -> str:
    return value
