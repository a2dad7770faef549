"""Text normalization shared by indexing and querying.

Tokens are lowercase runs of letters and digits. Every other character,
underscore included, separates tokens. Tokens shorter than
``MIN_TOKEN_LENGTH`` characters are dropped.
"""

import re
from typing import Final

MIN_TOKEN_LENGTH: Final = 2

_WORD_PATTERN: Final = re.compile(r"[^\W_]+")


def token_spans(text: str) -> list[tuple[str, int, int]]:
    """Tokenize text, keeping the offsets of each token in the original text.

    Args:
        text: The text to tokenize.

    Returns:
        List of (token, start, end) tuples in text order. Offsets are
        half-open and index into ``text``.
    """
    spans: list[tuple[str, int, int]] = []
    for match in _WORD_PATTERN.finditer(text):
        token = match.group().lower()
        if not _WORD_PATTERN.fullmatch(token):
            # Lowercasing can add combining marks, e.g. to a dotted capital I
            token = "".join(_WORD_PATTERN.findall(token))
        if len(token) >= MIN_TOKEN_LENGTH:
            spans.append((token, match.start(), match.end()))
    return spans


def tokens(text: str) -> list[str]:
    """Normalize text into index tokens.

    Lowercases, strips punctuation, splits on whitespace, and drops tokens
    shorter than two characters. Pure and idempotent.

    Args:
        text: The text to tokenize.

    Returns:
        Tokens in text order, duplicates preserved.

    Examples:
        >>> tokens("Implement a caching-layer!")
        ['implement', 'caching', 'layer']
    """
    return [token for token, _, _ in token_spans(text)]
