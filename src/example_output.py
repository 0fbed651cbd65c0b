"""
Example output parsing.

A record's exampleOutput field is either absent, a list of raw URLs, or a
free-form string that mixes dates, labels and links, e.g.

    "2024-05-01: Product demo https://x.com/a; Onboarding clip https://x.com/b"

parse_example_output() turns any of these into an ordered list of
ExampleLink(url, description). It never raises: text it cannot make sense
of comes back as a single description-only entry.
"""

import functools
import re
from dataclasses import dataclass
from typing import Any

# Literal values that mean "nothing to link to"
SENTINEL_OUTPUTS = frozenset({"N/A", "See BlurMantis app"})

MAX_DESCRIPTION_LENGTH = 99

URL_PATTERN = re.compile(r"https?://[^\s;,]+")
SEGMENT_SPLIT_PATTERN = re.compile(r"(?=https?://)|;|,")
DATE_STAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}:\s*")
LEADING_PUNCTUATION_PATTERN = re.compile(r"^[:\-\s]+")


@dataclass(frozen=True)
class ExampleLink:
    """One example output entry. url is None for description-only entries."""
    url: str | None
    description: str


def default_description(index: int) -> str:
    return f"Example {index + 1}"


def parse_example_output(example_output: Any) -> list[ExampleLink]:
    """
    Normalize a record's exampleOutput field into ExampleLink entries.

    Args:
        example_output: None, a sequence of URL strings, or free text.

    Returns:
        Entries in order of appearance. Empty for absent input.
    """
    if not example_output:
        return []

    if isinstance(example_output, (list, tuple)):
        return [
            ExampleLink(url=url if isinstance(url, str) else None, description=default_description(index))
            for index, url in enumerate(example_output)
        ]

    if isinstance(example_output, str):
        return list(_parse_text(example_output))

    return []


@functools.lru_cache(maxsize=512)
def _parse_text(text: str) -> tuple[ExampleLink, ...]:
    if text in SENTINEL_OUTPUTS:
        return (ExampleLink(url=None, description=text),)

    urls = URL_PATTERN.findall(text)
    if not urls:
        return (ExampleLink(url=None, description=text),)

    segments = SEGMENT_SPLIT_PATTERN.split(text)

    return tuple(
        ExampleLink(url=url, description=_describe(url, index, segments))
        for index, url in enumerate(urls)
    )


def _describe(url: str, index: int, segments: list[str]) -> str:
    """Label for a URL: the text before it in its segment, else 'Example N'."""
    segment = next((s for s in segments if url in s), None)
    if segment is None:
        return default_description(index)

    before = segment.split(url, 1)[0]
    if not before.strip():
        return default_description(index)

    label = DATE_STAMP_PATTERN.sub("", before).strip()
    label = LEADING_PUNCTUATION_PATTERN.sub("", label).strip()

    if 0 < len(label) <= MAX_DESCRIPTION_LENGTH:
        return label
    return default_description(index)
