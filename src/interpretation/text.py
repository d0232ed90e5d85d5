from __future__ import annotations

import regex as re

ZERO_WIDTH = re.compile(r"[\u200B-\u200D\uFEFF]")
MULTI_SPACE = re.compile(r"\s{2,}")
ANY_SPACE = re.compile(r"\s+")

LETTER = re.compile(r"\p{L}")
DIGIT = re.compile(r"[0-9]")
NON_LETTER_OR_SPACE = re.compile(r"[^\p{L}\s]")

# Content made only of digits, punctuation, symbols and whitespace.
DIGITS_OR_PUNCTUATION_ONLY = re.compile(r"^[0-9\p{P}\p{S}\s]+$")
# Strict H:MM / HH:MM clock readout.
CLOCK_ONLY = re.compile(r"^[0-9]{1,2}:[0-9]{2}$")
# Single-space-delimited hyphen, en dash or em dash.
DASH_SEPARATOR = re.compile(r"\s[-\u2013\u2014]\s")


def normalize_text(text: str) -> str:
    return MULTI_SPACE.sub(" ", ZERO_WIDTH.sub("", text).strip())


def collapse_whitespace(text: str) -> str:
    return ANY_SPACE.sub(" ", text).strip()


def count_letters(text: str) -> int:
    return len(LETTER.findall(text))


def count_digits(text: str) -> int:
    return len(DIGIT.findall(text))


def letters_only(text: str) -> str:
    """Drop everything except letters and whitespace."""
    return NON_LETTER_OR_SPACE.sub("", text).strip()
