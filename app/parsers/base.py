"""
Base interface and shared helpers for AI response parsers.

Parsers turn the raw text returned by the generative model into pydantic
records. They are best effort: ``parse`` never raises on odd input, it
returns sparse records instead. ``parse_strict`` is the variant for callers
that want a hard failure when the text yielded nothing usable.
"""

import random
import re
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")

BULLET_RE = re.compile(r"^\s*[-•*]+\s*")
NUMBER_RE = re.compile(r"(\d+,?\d*(?:\.\d+)?)")


class ParseError(Exception):
    """Raised by ``parse_strict`` when nothing could be extracted."""

    pass


class ResponseParser(ABC, Generic[T]):
    """
    Narrow ``raw text -> record`` interface.

    Services only talk to this interface, so a heuristic parser can be
    replaced by one reading schema-constrained (e.g. JSON) output without
    touching callers.
    """

    @abstractmethod
    def parse(self, text: str) -> T:
        """Parse text into a record, degrading to empty/placeholder values."""

    def is_empty(self, result: T) -> bool:
        """Whether a parse result carries no data extracted from the text."""
        return not result

    def parse_strict(self, text: str) -> T:
        """
        Parse text and fail when nothing was extracted.

        Raises:
            ParseError: If the result contains no extracted data
        """
        result = self.parse(text)
        if self.is_empty(result):
            raise ParseError(
                f"{type(self).__name__} could not extract any data "
                f"from {len(text or '')} chars of text"
            )
        return result


class SynthesizingParser(ResponseParser[T]):
    """Parser that may fill gaps with random plausible values."""

    def __init__(self, rng: Optional[random.Random] = None, synthesize: bool = True):
        self.rng = rng or random.Random()
        self.synthesize = synthesize


def clean_text(value: str) -> str:
    """Strip whitespace and markdown emphasis markers."""
    return value.strip().strip("*_").strip()


def strip_bullet(line: str) -> str:
    return BULLET_RE.sub("", line, count=1).strip()


def value_after_colon(line: str) -> str:
    """Text after the first colon, or an empty string."""
    index = line.find(":")
    if index == -1:
        return ""
    return clean_text(line[index + 1:])


def split_list(line: str) -> List[str]:
    """Split the value after the colon on commas and the word "and"."""
    index = line.find(":")
    if index == -1:
        return []
    items = re.split(r",|\band\b", line[index + 1:])
    return [clean_text(item) for item in items if clean_text(item)]


def parse_number(raw: str) -> float:
    return float(raw.replace(",", ""))


def pseudo_id(prefix: str, name: str) -> str:
    """
    Derive a short ID from a name with a 32-bit string hash.

    Not unique and not meant to be; records are never persisted.
    """
    h = 0
    for char in name:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return f"{prefix}_{abs(h):x}"


def dedupe(items: List[str]) -> List[str]:
    """Drop duplicates and empty strings, keeping first-seen order."""
    return [item for item in dict.fromkeys(items) if item]
