"""Delimiter-depth scanning primitives.

Everything here works on raw source text with no tokenizer: string literals
and comments are not recognised, so a bracket inside a quoted string shifts
the depth like any other bracket. Callers accept that trade-off.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

DELIMITERS: Tuple[Tuple[str, str], ...] = (("{", "}"), ("[", "]"), ("(", ")"))
OPENERS = frozenset(o for o, _ in DELIMITERS)
CLOSERS = frozenset(c for _, c in DELIMITERS)
CLOSER_FOR: Dict[str, str] = dict(DELIMITERS)


def depth_profile(text: str) -> List[int]:
    """Return the nesting depth after consuming each character of *text*.

    All three delimiter kinds share one counter; only the net depth matters,
    so ``{`` closed by ``)`` is not detected.
    """
    depths: List[int] = []
    depth = 0
    for ch in text:
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            depth -= 1
        depths.append(depth)
    return depths


def split_top_level(span: str, separator: str = ",") -> List[str]:
    """Split *span* on *separator* where the running depth is zero.

    Items are trimmed and empty items dropped. An unbalanced tail is emitted
    as-is.
    """
    items: List[str] = []
    start = 0
    for i, (ch, depth) in enumerate(zip(span, depth_profile(span))):
        if ch == separator and depth == 0:
            items.append(span[start:i])
            start = i + 1
    items.append(span[start:])
    return [item.strip() for item in items if item.strip()]


def matching_close(text: str, open_index: int) -> Optional[int]:
    """Index of the delimiter balancing the opener at *open_index*, or None."""
    depth = 0
    for i in range(open_index, len(text)):
        ch = text[i]
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            depth -= 1
            if depth == 0:
                return i
    return None


def bracket_interior(text: str, open_index: int) -> Optional[str]:
    """Text strictly between the opener at *open_index* and its closer."""
    close = matching_close(text, open_index)
    if close is None:
        return None
    return text[open_index + 1:close]


class BalancedBlocks:
    """Maximal balanced ``opener ... closer`` substrings of *text*, in order.

    Only the chosen delimiter kind is counted. Iteration is lazy and each
    ``iter()`` restarts the scan from the beginning. A capture still open at
    end of input is discarded; a closer seen outside a capture is ignored.
    """

    def __init__(self, text: str, opener: str = "{") -> None:
        if opener not in CLOSER_FOR:
            raise ValueError(f"Unsupported opening delimiter: {opener!r}")
        self.text = text
        self.opener = opener
        self.closer = CLOSER_FOR[opener]

    def spans(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(start, end)`` offsets; ``text[start:end]`` is one block."""
        depth = 0
        start = 0
        for i, ch in enumerate(self.text):
            if ch == self.opener:
                if depth == 0:
                    start = i
                depth += 1
            elif ch == self.closer and depth > 0:
                depth -= 1
                if depth == 0:
                    yield start, i + 1

    def __iter__(self) -> Iterator[str]:
        for start, end in self.spans():
            yield self.text[start:end]


def balanced_blocks(text: str, opener: str = "{") -> List[str]:
    return list(BalancedBlocks(text, opener))
