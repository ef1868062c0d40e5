from __future__ import annotations

from typing import List, Tuple


ROMAN_NUMERALS: List[Tuple[int, str]] = [
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
]


def number_to_letter_sequence(num: int, base_char: str = "a", base: int = 26) -> str:
    """1 -> a, 26 -> z, 27 -> aa, like spreadsheet columns."""
    if num < 1:
        return str(num)
    digits: List[int] = []
    while True:
        num -= 1
        digits.append(num % base)
        num //= base
        if num <= 0:
            break
    base_code = ord(base_char)
    return "".join(chr(base_code + digit) for digit in reversed(digits))


def number_to_roman(num: int) -> str:
    if num < 1:
        return str(num)
    result = []
    for value, numeral in ROMAN_NUMERALS:
        count, num = divmod(num, value)
        result.append(numeral * count)
    return "".join(result)


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default
