from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import soupsieve
from bs4 import Tag

from ..models import Selector


Specificity = Tuple[int, int, int]

IDENT_CHAR = r"(?:[\w-]|\\[0-9a-fA-F]{1,6}\s?|\\.|[^\x00-\x7f])"
TOKEN_RE = re.compile(
    rf"(?P<id>\#{IDENT_CHAR}+)"
    rf"|(?P<cls>\.{IDENT_CHAR}+)"
    r"|(?P<attr>\[(?:[^\]\"']|\"[^\"]*\"|'[^']*')*\])"
    rf"|(?P<pseudo_element>::{IDENT_CHAR}+)"
    rf"|(?P<pseudo>:{IDENT_CHAR}+\(?)"
    rf"|(?P<type>{IDENT_CHAR}+)"
    r"|(?P<other>.)",
    re.S,
)
SIMPLE_TYPE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")
LEGACY_PSEUDO_ELEMENTS = frozenset({"before", "after", "first-line", "first-letter"})
SELECTOR_LIST_PSEUDOS = frozenset({"not", "is", "has", "matches", "-webkit-any", "-moz-any"})


def split_selector_list(selector: str) -> List[str]:
    """Split ``"h1, h2 > a"`` into its complex selectors, ignoring commas in brackets, parens and strings."""
    parts: List[str] = []
    depth = 0
    quote: Optional[str] = None
    start = 0
    idx = 0
    while idx < len(selector):
        char = selector[idx]
        if char == "\\":
            idx += 2
            continue
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(selector[start:idx].strip())
            start = idx + 1
        idx += 1
    parts.append(selector[start:].strip())
    return [part for part in parts if part]


def _closing_paren(selector: str, start: int) -> int:
    depth = 1
    idx = start
    while idx < len(selector):
        char = selector[idx]
        if char == "\\":
            idx += 2
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return idx
        idx += 1
    return len(selector)


def _complex_specificity(selector: str) -> Specificity:
    ids = classes = types = 0
    pos = 0
    while pos < len(selector):
        match = TOKEN_RE.match(selector, pos)
        if match is None:
            break
        pos = match.end()
        if match.group("id"):
            ids += 1
        elif match.group("cls") or match.group("attr"):
            classes += 1
        elif match.group("pseudo_element") or match.group("type"):
            types += 1
        elif match.group("pseudo"):
            token = match.group("pseudo")
            if not token.endswith("("):
                if token[1:].lower() in LEGACY_PSEUDO_ELEMENTS:
                    types += 1
                else:
                    classes += 1
                continue
            name = token[1:-1].lower()
            close = _closing_paren(selector, pos)
            argument = selector[pos:close]
            pos = close + 1
            if name == "where":
                continue
            if name in SELECTOR_LIST_PSEUDOS:
                inner = specificity(argument)
            else:
                inner = (0, 1, 0)
                if name.startswith("nth-") and " of " in argument:
                    nested = specificity(argument.split(" of ", 1)[1])
                    inner = (nested[0], nested[1] + 1, nested[2])
            ids += inner[0]
            classes += inner[1]
            types += inner[2]
    return ids, classes, types


def specificity(selector: str) -> Specificity:
    """CSS specificity of ``selector`` as ``(ids, classes, types)``; lists use their most specific member."""
    return max((_complex_specificity(part) for part in split_selector_list(selector)), default=(0, 0, 0))


@dataclass
class _CompiledPart:
    specificity: Specificity
    type_name: Optional[str] = None
    matcher: Optional[soupsieve.SoupSieve] = None

    def match(self, tag: Tag) -> bool:
        if self.matcher is not None:
            return self.matcher.match(tag)
        return self.type_name == "*" or self.type_name == tag.name.lower()


@dataclass
class _Rule:
    selector: Selector
    parts: List[_CompiledPart]


class SelectorTable:
    """Compiled selectors picking the format for each element.

    The most specific matching selector wins, ties go to the one listed first.
    """

    def __init__(self, selectors: Sequence[Selector]) -> None:
        self._rules = [_Rule(entry, [_compile(part) for part in split_selector_list(entry.selector)]) for entry in selectors]

    def pick(self, tag: Tag) -> Optional[Selector]:
        best: Optional[Selector] = None
        best_specificity: Optional[Specificity] = None
        for rule in self._rules:
            matched = [part.specificity for part in rule.parts if part.match(tag)]
            if not matched:
                continue
            candidate = max(matched)
            if best_specificity is None or candidate > best_specificity:
                best = rule.selector
                best_specificity = candidate
        return best

    def __len__(self) -> int:
        return len(self._rules)


def _compile(selector: str) -> _CompiledPart:
    if selector == "*" or SIMPLE_TYPE_RE.match(selector):
        return _CompiledPart(specificity(selector), type_name=selector.lower())
    return _CompiledPart(specificity(selector), matcher=soupsieve.compile(selector))
