"""Regex filtering and extraction applied to raw values."""

import re
from dataclasses import dataclass
from functools import lru_cache

from webgrab.exceptions import PatternError

# Placeholder written to string fields when an extract pattern does not match
NO_MATCH = '(no match)'


@dataclass(frozen=True)
class ProcessedValue:
    """Result of post-processing one raw value.

    Attributes:
        value: Final trimmed string, or None if the extract pattern did not match
        matched: False if the value was rejected by the filter

    """

    value: str | None
    matched: bool = True

    @property
    def rejected(self) -> bool:
        return not self.matched


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile and cache a pattern.

    Raises:
        PatternError: If the pattern is not a valid regular expression

    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def matches_filter(value: str, pattern: str) -> bool:
    """Whether the value contains a match for the pattern."""
    return compile_pattern(pattern).search(value) is not None


def extract_group(value: str, pattern: str) -> str | None:
    """Return the first capture group of the first match, or None if nothing matches.

    Raises:
        PatternError: If the pattern has no capturing group

    """
    regex = compile_pattern(pattern)
    if regex.groups < 1:
        raise PatternError(pattern, 'extract pattern needs at least one capturing group')

    match = regex.search(value)
    if match is None:
        return None
    return match.group(1) or ''


def post_process(value: str, extract: str | None = None, filter: str | None = None) -> ProcessedValue:
    """Filter, extract and trim a raw value.

    Args:
        value: Raw value read from a node
        extract: Optional pattern whose first group replaces the value
        filter: Optional pattern the raw value must match

    Returns:
        A ProcessedValue. ``matched`` is False when the filter rejected the value.

    """
    if filter and not matches_filter(value, filter):
        return ProcessedValue(value=None, matched=False)

    if extract:
        group = extract_group(value, extract)
        if group is None:
            return ProcessedValue(value=None)
        value = group

    return ProcessedValue(value=value.strip())
