"""Snippet extraction and match highlighting."""

from collections.abc import Collection

from speckeep.search._tokenize import token_spans

DEFAULT_SNIPPET_WINDOW = 160

type Span = tuple[int, int]


def _densest_cluster(matches: list[Span], window: int) -> tuple[int, int]:
    """Find the run of matches with the most hits that fits in the window.

    Ties go to the shorter run, then to the earlier one.

    Returns:
        Indexes (first, last) into ``matches`` of the winning run.
    """
    best = (0, 0)
    best_key = (0, 0, 0)
    last = 0
    for first, (start, _) in enumerate(matches):
        last = max(last, first)
        while last + 1 < len(matches) and matches[last + 1][1] - start <= window:
            last += 1
        length = matches[last][1] - start
        key = (last - first + 1, -length, -start)
        if key > best_key:
            best_key = key
            best = (first, last)
    return best


def _is_word_char(text: str, index: int) -> bool:
    return 0 <= index < len(text) and text[index].isalnum()


def _widen(text: str, core_start: int, core_end: int, window: int) -> Span:
    """Grow a core range with surrounding context up to the window size.

    The range is widened evenly on both sides, then trimmed back so it
    neither starts nor ends in the middle of a word outside the core.
    """
    slack = max(window - (core_end - core_start), 0)
    start = max(core_start - slack // 2, 0)
    end = min(core_end + (slack - (core_start - start)), len(text))
    start = max(start - (window - (end - start)), 0)

    while start < core_start and _is_word_char(text, start - 1):
        start += 1
    while end > core_end and _is_word_char(text, end):
        end -= 1
    while start < core_start and text[start].isspace():
        start += 1
    while end > core_end and text[end - 1].isspace():
        end -= 1
    return start, end


def build_snippet(
    text: str,
    query_tokens: Collection[str],
    *,
    window: int = DEFAULT_SNIPPET_WINDOW,
) -> tuple[str, tuple[Span, ...]] | None:
    """Extract the excerpt of text with the highest density of query matches.

    Args:
        text: The text to excerpt.
        query_tokens: Normalized query tokens to highlight.
        window: Maximum snippet length in characters.

    Returns:
        Tuple of (snippet, highlight spans relative to the snippet), or None
        if the text contains no query token.
    """
    matches = [
        (start, end) for token, start, end in token_spans(text) if token in query_tokens
    ]
    if not matches:
        return None

    first, last = _densest_cluster(matches, window)
    core_start = matches[first][0]
    core_end = min(matches[last][1], core_start + window)
    start, end = _widen(text, core_start, core_end, window)

    spans = tuple(
        (max(match_start, start) - start, min(match_end, end) - start)
        for match_start, match_end in matches
        if match_start < end and match_end > start
    )
    return text[start:end], spans


def leading_snippet(text: str, *, window: int = DEFAULT_SNIPPET_WINDOW) -> str:
    """Return the start of the text, cut back to a word boundary."""
    stripped = text.strip()
    if len(stripped) <= window:
        return stripped
    end = window
    while end > 0 and _is_word_char(stripped, end) and _is_word_char(stripped, end - 1):
        end -= 1
    if end == 0:
        end = window
    return stripped[:end].rstrip()
