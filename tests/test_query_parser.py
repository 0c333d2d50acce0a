import pytest

from string_analyzer.services.query_parser import RULES, translate


def test_keys_accumulate_across_rules():
    assert dict(translate("palindrome with letter a")) == {
        "is_palindrome": "true",
        "contains_character": "a",
    }


def test_numeric_word_count_overrides_phrased():
    assert dict(translate("single word, 3 words")) == {"word_count": "3"}


def test_between_sets_both_bounds():
    assert dict(translate("between 5 and 10")) == {"min_length": "5", "max_length": "10"}


def test_no_match_is_empty():
    result = translate("banana")
    assert len(result) == 0
    assert not result


@pytest.mark.parametrize("query, expected", [
    ("all single word palindromic strings", {"word_count": "1", "is_palindrome": "true"}),
    ("strings longer than 10 characters", {"min_length": "11"}),
    ("strings containing the letter z", {"contains_character": "z"}),
    ("palindromic strings that contain the first vowel", {"is_palindrome": "true", "contains_character": "a"}),
    ("text that reads the same backwards", {"is_palindrome": "true"}),
    ("one word strings", {"word_count": "1"}),
    ("strings with two words", {"word_count": "2"}),
    ("strings with three words", {"word_count": "3"}),
    ("strings with 4 words", {"word_count": "4"}),
    ("strings shorter than 5 characters", {"max_length": "4"}),
    ("strings with fewer than 8 characters", {"max_length": "7"}),
    ("strings with at most 7 characters", {"max_length": "7"}),
    ("strings with greater than 2 characters", {"min_length": "3"}),
    ("strings having the character 'Q'", {"contains_character": "q"}),
    ('strings that include the letter "k"', {"contains_character": "k"}),
    ("strings with a vowel", {"contains_character": "a"}),
    ("strings containing a consonant", {"contains_character": "b"}),
])
def test_rule_examples(query, expected):
    assert dict(translate(query)) == expected


def test_exclusive_and_inclusive_bounds_agree():
    assert translate("more than 9 characters")["min_length"] == "10"
    assert translate("at least 10 characters")["min_length"] == "10"


def test_inclusive_bound_overrides_exclusive():
    assert dict(translate("longer than 3 and at least 10 characters")) == {"min_length": "10"}


def test_range_overrides_single_bounds():
    result = translate("longer than 3, shorter than 50, between 5 and 8")
    assert dict(result) == {"min_length": "5", "max_length": "8"}


def test_vowel_proxy_overrides_explicit_letter():
    result = translate("containing the letter z with a vowel")
    assert result["contains_character"] == "a"


def test_letter_must_be_single():
    assert dict(translate("containing the letter ab")) == {}


def test_matching_is_case_insensitive():
    assert dict(translate("PALINDROME STRINGS LONGER THAN 2")) == {
        "is_palindrome": "true",
        "min_length": "3",
    }


def test_bounds_may_conflict_without_error():
    # Validation of the resulting filters is the caller's job
    assert dict(translate("longer than 10 and shorter than 5")) == {
        "min_length": "11",
        "max_length": "4",
    }


def test_result_is_read_only():
    result = translate("palindrome")
    with pytest.raises(TypeError):
        result["is_palindrome"] = "false"


def test_rules_are_ordered_by_category():
    names = [rule.name for rule in RULES]
    assert names.index("palindrome") < names.index("numeric word count")
    assert names.index("single word") < names.index("numeric word count")
    assert names.index("longer than") < names.index("at least") < names.index("between")
    assert names.index("contains character") < names.index("vowel")
