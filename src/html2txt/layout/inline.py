from __future__ import annotations

import sys
from typing import List, Optional

from ..models import Options


UNLIMITED_LINE_LENGTH = sys.maxsize


class InlineTextBuilder:
    """Accumulate words into lines no longer than ``max_line_length``.

    When ``max_line_length`` is 0 the builder falls back to ``options.wordwrap``,
    and wraps nothing when that is unset or 0 as well.
    """

    def __init__(self, options: Options, max_line_length: int = 0) -> None:
        if max_line_length:
            self.max_line_length = max_line_length
        else:
            self.max_line_length = options.wordwrap or UNLIMITED_LINE_LENGTH
        self._lines: List[List[str]] = []
        self._next_line_words: List[str] = []
        self._next_line_available_chars = self.max_line_length
        self._wrap_characters = list(options.long_word_split.wrap_characters or "")
        self._force_wrap_on_limit = options.long_word_split.force_wrap_on_limit
        self.stashed_space = False
        self.word_break_opportunity = False

    def push_word(self, word: str, no_wrap: bool = False) -> None:
        if self._next_line_available_chars <= 0 and not no_wrap:
            self.start_new_line()
        is_line_start = not self._next_line_words
        cost = len(word) + (0 if is_line_start else 1)
        if cost <= self._next_line_available_chars or no_wrap:
            self._next_line_words.append(word)
            self._next_line_available_chars -= cost
            return
        # does not fit, move it to a new line and split if it is still too long
        parts = self.split_long_word(word)
        if not is_line_start:
            self.start_new_line()
        self._next_line_words.append(parts[0])
        self._next_line_available_chars -= len(parts[0])
        for part in parts[1:]:
            self.start_new_line()
            self._next_line_words.append(part)
            self._next_line_available_chars -= len(part)

    def pop_word(self) -> Optional[str]:
        if not self._next_line_words:
            return None
        last_word = self._next_line_words.pop()
        is_line_start = not self._next_line_words
        self._next_line_available_chars += len(last_word) + (0 if is_line_start else 1)
        return last_word

    def concat_word(self, word: str, no_wrap: bool = False) -> None:
        """Glue ``word`` onto the last word of the current line."""
        if self.word_break_opportunity and len(word) > self._next_line_available_chars:
            self.push_word(word, no_wrap)
            self.word_break_opportunity = False
            return
        last_word = self.pop_word()
        self.push_word(word if last_word is None else last_word + word, no_wrap)

    def start_new_line(self, n: int = 1) -> None:
        if n < 1:
            raise ValueError("start_new_line expects at least one line break.")
        self._lines.append(self._next_line_words)
        for _ in range(n - 1):
            self._lines.append([])
        self._next_line_words = []
        self._next_line_available_chars = self.max_line_length

    def is_empty(self) -> bool:
        return not self._lines and not self._next_line_words

    def clear(self) -> None:
        self._lines = []
        self._next_line_words = []
        self._next_line_available_chars = self.max_line_length

    def split_long_word(self, word: str) -> List[str]:
        """Split ``word`` into pieces that fit the line length.

        Looks back from the limit for the first wrap character (in priority
        order) and cuts after it. Once a wrap character fails it is not tried
        again for the rest of the word. With nothing left to try the word is
        either cut hard at the limit or kept whole.
        """
        parts: List[str] = []
        idx = 0
        limit = self.max_line_length
        while len(word) > limit:
            first_line = word[:limit]
            remaining = word[limit:]
            split_index = -1
            if idx < len(self._wrap_characters):
                split_index = first_line.rfind(self._wrap_characters[idx])
            if split_index > -1:
                word = first_line[split_index + 1 :] + remaining
                parts.append(first_line[: split_index + 1])
                continue
            idx += 1
            if idx < len(self._wrap_characters):
                continue
            if self._force_wrap_on_limit:
                parts.append(first_line)
                word = remaining
                if len(word) > limit:
                    continue
            break
        parts.append(word)
        return parts

    def __str__(self) -> str:
        lines = [" ".join(words) for words in self._lines]
        lines.append(" ".join(self._next_line_words))
        return "\n".join(lines)
