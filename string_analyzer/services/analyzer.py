import hashlib
import re
from collections import Counter
from typing import Dict

from string_analyzer.schemas.string_record import AnalyzedString, StringProperties

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_WHITESPACE = re.compile(r"\s")


def canonicalize(value: str) -> str:
    """Trim leading/trailing whitespace; every stored value is in this form"""
    return value.strip()


def hash_of(value: str) -> str:
    """SHA-256 of the canonical value, used as the record's primary key"""
    return hashlib.sha256(canonicalize(value).encode("utf-8")).hexdigest()


def is_palindrome(text: str) -> bool:
    """
    Check if text is a palindrome ignoring case and non-alphanumerics.
    Nothing left after cleaning (e.g. "!!!") is not a palindrome.
    """
    cleaned = _NON_ALNUM.sub("", text).lower()
    return len(cleaned) > 0 and cleaned == cleaned[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters, case-folded, whitespace excluded"""
    return len(set(_WHITESPACE.sub("", text).lower()))


def count_words(text: str) -> int:
    """Count runs of non-whitespace characters"""
    return len(text.split()) if text else 0


def get_character_frequency(text: str) -> Dict[str, int]:
    """Case-folded character counts; only the literal space is skipped"""
    return dict(Counter(ch for ch in text.lower() if ch != " "))


def analyze(value: str) -> AnalyzedString:
    """Analyze a string and return all computed properties"""
    trimmed = canonicalize(value)

    return AnalyzedString(
        value=trimmed,
        properties=StringProperties(
            length=len(trimmed),
            is_palindrome=is_palindrome(trimmed),
            unique_characters=count_unique_characters(trimmed),
            word_count=count_words(trimmed),
            sha256_hash=hash_of(trimmed),
            character_frequency=get_character_frequency(trimmed),
        ),
    )
