from __future__ import annotations

import itertools
import types
from pathlib import Path

import pytest

from ens_tracker.domain.candidates import (
    digit_strings,
    generate_strings,
    letter_strings,
    load_word_list,
    unique,
)
from ens_tracker.errors import MalformedInputError

THREE_LETTER_COUNT = 26**3
FOUR_DIGIT_COUNT = 10**4


def test_generate_strings_is_lazy_and_lexicographic():
    gen = generate_strings("ab", 2)

    assert isinstance(gen, types.GeneratorType)
    assert list(gen) == ["aa", "ab", "ba", "bb"]


def test_letter_and_digit_products_have_expected_size():
    assert sum(1 for _ in letter_strings(3)) == THREE_LETTER_COUNT
    assert sum(1 for _ in digit_strings(4)) == FOUR_DIGIT_COUNT


def test_large_product_can_be_sliced_without_materializing():
    first = list(itertools.islice(letter_strings(8), 3))

    assert first == ["aaaaaaaa", "aaaaaaab", "aaaaaaac"]


def test_non_positive_length_is_rejected():
    with pytest.raises(ValueError):
        list(generate_strings("abc", 0))


def test_unique_keeps_first_seen_order():
    assert list(unique(["b", "a"], iter(["a", "c"]), ["b"])) == ["b", "a", "c"]


def test_load_word_list_reads_json_array(write_json):
    assert load_word_list(write_json("words.json", ["apple", "pear"])) == ["apple", "pear"]


def test_load_word_list_rejects_object(write_json):
    with pytest.raises(MalformedInputError, match="array"):
        load_word_list(write_json("words.json", {"words": ["apple"]}))


def test_load_word_list_rejects_non_strings(write_json):
    with pytest.raises(MalformedInputError, match="non-string"):
        load_word_list(write_json("words.json", ["apple", 3]))


def test_load_word_list_rejects_invalid_json(tmp_path: Path):
    path = tmp_path / "words.json"
    path.write_text("apple\npear\n", encoding="utf-8")

    with pytest.raises(MalformedInputError, match="not valid JSON"):
        load_word_list(path)


def test_load_word_list_rejects_missing_file(tmp_path: Path):
    with pytest.raises(MalformedInputError):
        load_word_list(tmp_path / "missing.json")
