import dataclasses

import pytest

from jokeapi.models import (
    Category,
    ContentFlag,
    IdRange,
    Joke,
    JokeType,
    Language,
    PlainText,
    RequestOptions,
)


def test_category_lookup_is_case_sensitive():
    assert Category.from_name("Christmas") is Category.CHRISTMAS
    assert Category.from_name("christmas") is Category.MISC
    assert Category.from_name(None) is Category.MISC


@pytest.mark.parametrize(
    "code,lang",
    [("cs", Language.CZECH), ("en", Language.ENGLISH), ("de", Language.GERMAN),
     ("fr", Language.FRENCH), ("es", Language.SPANISH), ("pt", Language.PORTUGUESE)],
)
def test_language_codes(code, lang):
    assert Language.from_code(code) is lang
    if lang is not Language.ENGLISH:
        assert lang.code == code


def test_english_and_unknown_have_empty_code():
    assert Language.ENGLISH.code == ""
    assert Language.UNKNOWN.code == ""
    assert Language.from_code("EN") is Language.UNKNOWN


def test_flag_names_in_declaration_order():
    flags = ContentFlag.from_names(["explicit", "NSFW", "political"])
    assert ContentFlag.names(flags) == ["nsfw", "political", "explicit"]
    assert ContentFlag.names(ContentFlag(0)) == []
    with pytest.raises(ValueError):
        ContentFlag.from_names(["spicy"])


def test_id_range():
    assert IdRange(5, 1).render() is None
    assert IdRange(42, 42).render() == "42"
    assert IdRange(0, 100).render() == "0-100"


def test_request_options_defaults_and_immutability():
    opts = RequestOptions(categories=[Category.PUN, Category.PUN])
    assert opts.categories == frozenset({Category.PUN})
    assert opts.language is Language.ENGLISH
    assert not opts.blacklist
    assert opts.joke_type is JokeType.ANY
    with pytest.raises(dataclasses.FrozenInstanceError):
        opts.safe = True


def test_joke_type_follows_content():
    joke = Joke(Category.MISC, PlainText("hi"), ContentFlag(0), True, 1, Language.ENGLISH)
    assert joke.type is JokeType.SINGLE
    assert str(joke) == "hi"
