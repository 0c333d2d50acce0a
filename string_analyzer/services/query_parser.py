"""
Natural language query translation.

Turns free-form text such as "all single word palindromic strings" into the
same filter names the structured ``GET /strings`` endpoint accepts. Matching
is plain pattern matching over the lowercased query:

- rules run in the order of ``RULES``
- rules for different filters accumulate
- for the same filter, the last matching rule wins

Values are returned as strings ("true", "3"), exactly as they would arrive
in a query string; ``StringFilters`` does the typing and validation.
"""
import re
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, NamedTuple

Filters = Dict[str, str]


class Rule(NamedTuple):
    name: str
    pattern: re.Pattern
    effect: Callable[[re.Match], Filters]


def _constant(**assignments: str) -> Callable[[re.Match], Filters]:
    return lambda match: dict(assignments)


def _number(match: re.Match, group: int = 1, offset: int = 0) -> str:
    return str(int(match.group(group)) + offset)


_CONTAINS = r"\b(?:contains|containing|contain|with|having|includes|include|including)"

RULES: List[Rule] = [
    Rule(
        "palindrome",
        re.compile(r"palindrom(?:e|ic)|reads the same"),
        _constant(is_palindrome="true"),
    ),
    Rule("single word", re.compile(r"\b(?:single|one) word\b"), _constant(word_count="1")),
    Rule("two words", re.compile(r"\btwo words\b"), _constant(word_count="2")),
    Rule("three words", re.compile(r"\bthree words\b"), _constant(word_count="3")),
    Rule(
        "numeric word count",
        re.compile(r"(\d+)\s*words?\b"),
        lambda m: {"word_count": _number(m)},
    ),
    Rule(
        "longer than",
        re.compile(r"\b(?:longer|more|greater) than\s+(\d+)"),
        lambda m: {"min_length": _number(m, offset=1)},
    ),
    Rule(
        "shorter than",
        re.compile(r"\b(?:shorter|less|fewer) than\s+(\d+)"),
        lambda m: {"max_length": _number(m, offset=-1)},
    ),
    Rule("at least", re.compile(r"\bat least\s+(\d+)"), lambda m: {"min_length": _number(m)}),
    Rule("at most", re.compile(r"\bat most\s+(\d+)"), lambda m: {"max_length": _number(m)}),
    Rule(
        "between",
        re.compile(r"\bbetween\s+(\d+)\s+and\s+(\d+)"),
        lambda m: {"min_length": _number(m, 1), "max_length": _number(m, 2)},
    ),
    Rule(
        "contains character",
        re.compile(
            _CONTAINS + r"\s+(?:the\s+)?(?:letter|character)\s+['\"]?([a-z])['\"]?(?![a-z])"
        ),
        lambda m: {"contains_character": m.group(1)},
    ),
    # Proxies: any vowel is approximated by "a", any consonant by "b"
    Rule(
        "vowel",
        re.compile(_CONTAINS + r"\s+(?:an?\s+)?vowels?\b|\bfirst vowel\b"),
        _constant(contains_character="a"),
    ),
    Rule(
        "consonant",
        re.compile(_CONTAINS + r"\s+(?:an?\s+)?consonants?\b|\bfirst consonant\b"),
        _constant(contains_character="b"),
    ),
]


def translate(query: str) -> Mapping[str, str]:
    """
    Parse natural language query into filter parameters
    Examples:
    - "all single word palindromic strings" -> {word_count: "1", is_palindrome: "true"}
    - "strings longer than 10 characters" -> {min_length: "11"}
    - "strings containing the letter z" -> {contains_character: "z"}

    An empty result means nothing matched; callers must treat it as unparsable.
    """
    text = query.lower()
    filters: Filters = {}

    for rule in RULES:
        match = rule.pattern.search(text)
        if match:
            filters.update(rule.effect(match))

    return MappingProxyType(filters)
