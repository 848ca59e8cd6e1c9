"""
Candidate sources for ingestion and bulk seeding.

Generators are lazy so that large cartesian products (e.g. every four-letter
string) are never materialized as lists; `unique` deduplicates the union of
sources before any name is resolved.
"""

from __future__ import annotations

import itertools
import json
from pathlib import Path
from typing import Iterable, Iterator, List

from ens_tracker.errors import MalformedInputError

LETTERS = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"


def generate_strings(alphabet: str, length: int) -> Iterator[str]:
    """Yield every string of `length` characters drawn from `alphabet`, in lexicographic order."""
    if length < 1:
        raise ValueError(f"length must be positive, got {length}")
    for chars in itertools.product(alphabet, repeat=length):
        yield "".join(chars)


def letter_strings(length: int) -> Iterator[str]:
    return generate_strings(LETTERS, length)


def digit_strings(length: int) -> Iterator[str]:
    return generate_strings(DIGITS, length)


def unique(*sources: Iterable[str]) -> Iterator[str]:
    """Yield each candidate of the combined sources once, keeping first-seen order."""
    seen: set[str] = set()
    for candidate in itertools.chain.from_iterable(sources):
        if candidate not in seen:
            seen.add(candidate)
            yield candidate


def load_word_list(path: Path | str) -> List[str]:
    """
    Read a JSON array of candidate strings.

    Raises
    ------
    MalformedInputError
        If the file is unreadable, is not valid JSON, or is not an array of strings.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedInputError(f"Cannot read word list '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"Word list '{path}' is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise MalformedInputError(f"Word list '{path}' does not contain a JSON array.")
    if not all(isinstance(word, str) for word in payload):
        raise MalformedInputError(f"Word list '{path}' contains non-string entries.")
    return payload


__all__ = [
    "DIGITS",
    "LETTERS",
    "digit_strings",
    "generate_strings",
    "letter_strings",
    "load_word_list",
    "unique",
]
