"""
Natural-language filter translation.

A bounded, two-stage phrase matcher rather than a parser:

* Stage 1 looks for a handful of fixed phrases and "the letter x" style
  mentions. The first fixed phrase that matches wins.
* Stage 2 only runs when stage 1 found nothing. Its rules are additive and
  look for loose keywords ("palindrom", "longer than", "one word", ...).

The result is an ordered mapping of filter key to value, the same shape the
structured listing endpoint accepts.
"""
import re
import string
from typing import Any, Dict, List, Optional

from app.errors import Unrecognized

LETTERS = string.ascii_lowercase
NUMBER = re.compile(r"\+?[0-9]+")

LETTER_TEMPLATES = (
    "strings that contain the letter {}",
    "the letter {}",
    "the vowel {}",
    "the consonant {}",
)

# checked top to bottom, first hit returns
FIXED_PHRASES = (
    ("all single word palindromic strings", {"is_palindrome": True, "word_count": 1}),
    ("strings longer than 10 characters", {"min_length": 11}),
    ("palindromic strings that contain the first vowel", {"is_palindrome": True, "contains_character": "a"}),
    ("palindromic strings that contain the last vowel", {"is_palindrome": True, "contains_character": "u"}),
)

# (phrase, character) fallbacks when no "letter x" token pair is present
CHARACTER_HINTS = (
    ("first vowel", "a"),
    ("last vowel", "u"),
    ("vowel", "a"),
    ("first consonant", "b"),
)


def first_stage(query: str) -> Optional[Dict[str, Any]]:
    lowered = query.lower()
    filters: Dict[str, Any] = {}

    # every letter is checked, so the last one mentioned in a-z order wins
    for letter in LETTERS:
        if any(t.format(letter) in lowered for t in LETTER_TEMPLATES):
            filters["contains_character"] = letter

    for phrase, parsed in FIXED_PHRASES:
        if phrase in lowered:
            filters.update(parsed)
            return filters

    return filters or None


def extract_number(words: List[str]) -> Optional[int]:
    for word in words:
        if NUMBER.fullmatch(word):
            return int(word)
    return None


def extract_letter(words: List[str]) -> Optional[str]:
    for i, word in enumerate(words[:-1]):
        if word == "letter" and words[i + 1][0] in LETTERS:
            return words[i + 1][0]
    return None


def second_stage(query: str) -> Dict[str, Any]:
    lowered = query.lower()
    words = lowered.split()
    filters: Dict[str, Any] = {}

    if "palindrom" in lowered:
        filters["is_palindrome"] = True

    if "longer than" in lowered:
        n = extract_number(words)
        if n is not None:
            filters["min_length"] = n + 1
    elif "shorter than" in lowered:
        n = extract_number(words)
        if n is not None:
            # "shorter than 0" cannot go below zero
            filters["max_length"] = max(n - 1, 0)

    if "single word" in lowered or "one word" in lowered:
        filters["word_count"] = 1
    elif "two words" in lowered or "double word" in lowered:
        filters["word_count"] = 2

    letter = extract_letter(words)
    if letter is None:
        letter = next((c for phrase, c in CHARACTER_HINTS if phrase in lowered), None)
    if letter is not None:
        filters["contains_character"] = letter

    return filters


def translate(query: str) -> Dict[str, Any]:
    """Resolve `query` into filters, raising Unrecognized when nothing matched."""
    filters = first_stage(query)
    if filters is None:
        filters = second_stage(query)
    if not filters:
        raise Unrecognized(query)
    return filters
