"""
Roman numeral conversion for the lexer's fallback rule.

Any alphabetic run the lexer cannot otherwise classify is read as a Roman
numeral. Matching is greedy from the front: the first table entry whose
symbol prefixes the remaining text is taken, and conversion stops at the
first remainder no symbol matches. Text with no matching prefix is worth 0.
"""

from typing import List, Tuple

# Largest values first; within a value the longer symbol comes first.
# A trailing 'k' multiplies by a thousand. 10,000 is spelled Xk only.
NUMERALS: List[Tuple[str, int]] = [
    ("Mk", 1_000_000),
    ("Dk", 500_000),
    ("Ck", 100_000),
    ("Lk", 50_000),
    ("Xk", 10_000),
    ("M", 1000),
    ("CM", 900),
    ("D", 500),
    ("CD", 400),
    ("C", 100),
    ("XC", 90),
    ("L", 50),
    ("XL", 40),
    ("X", 10),
    ("IX", 9),
    ("V", 5),
    ("IV", 4),
    ("I", 1),
]


def from_roman(text: str) -> int:
    """Sum the greedily matched numeral prefixes of `text`."""
    total = 0
    pos = 0
    while pos < len(text):
        for symbol, value in NUMERALS:
            if text.startswith(symbol, pos):
                total += value
                pos += len(symbol)
                break
        else:
            break
    return total
