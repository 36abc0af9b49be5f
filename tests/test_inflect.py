import pytest

from weft.inflect import pluralize, singularize, title

ROUND_TRIP_WORDS = ["user", "post", "category", "box", "person", "child", "status"]


@pytest.mark.parametrize("word", ROUND_TRIP_WORDS)
def test_singularize_undoes_pluralize(word):
    assert singularize(pluralize(word)) == word


@pytest.mark.parametrize("word", ROUND_TRIP_WORDS)
def test_plural_differs_from_singular(word):
    assert pluralize(word) != word or singularize(word) == word
    assert len(pluralize(word)) >= len(word) - 2


def test_pinned_plurals():
    assert pluralize("category") == "categories"
    assert pluralize("person") == "people"


def test_pinned_singular():
    assert singularize("users") == "user"


@pytest.mark.parametrize("word", ["information", "sheep", "news", "equipment", "fish"])
def test_uncountable_words_unchanged(word):
    assert pluralize(word) == word
    assert singularize(word) == word


@pytest.mark.parametrize("word", ROUND_TRIP_WORDS)
def test_upper_case_is_kept(word):
    assert pluralize(word.upper()) == pluralize(word).upper()
    assert singularize(pluralize(word).upper()) == word.upper()


@pytest.mark.parametrize("word", ROUND_TRIP_WORDS)
def test_capitalised_is_kept(word):
    assert pluralize(word.capitalize()) == pluralize(word).capitalize()


def test_plural_of_plural_is_stable_for_regular_word():
    plural = pluralize("user")
    assert pluralize(plural) == plural


def test_empty_word():
    assert pluralize("") == ""
    assert singularize("") == ""


@pytest.mark.parametrize("text", ["user", "uSER", "user_profiles", "order items"])
def test_title_capitalises_each_word(text):
    result = title(text)
    for word in result.split():
        assert word[0].isupper()
        assert word[1:] == word[1:].lower()
    assert result.lower() == text.lower()


def test_title_ignores_input_case():
    assert title("hELLO wORLD") == title("hello world")