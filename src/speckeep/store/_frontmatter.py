"""YAML frontmatter parsing for markdown spec files."""

from typing import cast

import yaml

# Type aliases for YAML frontmatter data
type YAMLPrimitive = str | int | float | bool | None
type YAMLKey = str | int | float | bool
type YAMLValue = YAMLPrimitive | list[YAMLValue] | dict[YAMLKey, YAMLValue]
type YAMLFrontmatter = dict[str, YAMLValue]


def has_frontmatter(content: str) -> bool:
    """Return True if content opens with a frontmatter fence."""
    return content.startswith("---")


def parse_frontmatter(content: str) -> tuple[YAMLFrontmatter | None, str]:
    """Parse YAML frontmatter from markdown content.

    Args:
        content: The full markdown content including frontmatter.

    Returns:
        A tuple of (frontmatter dict or None, body content).
        Returns None for frontmatter if no valid frontmatter block is found.
    """
    if not has_frontmatter(content):
        return None, content

    # Find the closing ---
    end_marker = content.find("\n---", 3)
    if end_marker == -1:
        return None, content

    frontmatter_str = content[3:end_marker].strip()
    body = content[end_marker + 4 :].strip()

    try:
        frontmatter_data = yaml.safe_load(frontmatter_str)  # pyright: ignore[reportAny]
    except (yaml.YAMLError, ValueError):
        # Invalid scalars such as out-of-range dates raise ValueError
        return None, content

    if frontmatter_data is None:
        return {}, body
    if not isinstance(frontmatter_data, dict):
        return None, content

    # yaml.safe_load produces string keys at top level for mappings
    return cast("YAMLFrontmatter", frontmatter_data), body

