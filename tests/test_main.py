from unittest.mock import patch

from jokeapi import main as cli
from jokeapi.api import HttpStatusError
from jokeapi.models import (
    Category,
    ContentFlag,
    IdRange,
    Joke,
    JokeType,
    Language,
    PlainText,
    TwoPart,
)


def run(argv):
    return cli.main(argv)


def _joke(content, joke_id=1, flags=ContentFlag(0)):
    return Joke(Category.PROGRAMMING, content, flags, True, joke_id, Language.ENGLISH)


@patch("jokeapi.api.fetch_one", return_value=_joke(PlainText("Hello JokeAPI")))
def test_cli_one(mock_func, capsys):
    code = run(["one"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Hello JokeAPI" in out
    assert "#1 [Programming]" in out


@patch("jokeapi.api.fetch_one", return_value=_joke(PlainText("x")))
def test_cli_options_are_mapped(mock_func):
    run([
        "one", "--category", "Pun", "--category", "Dark", "--lang", "de",
        "--blacklist", "nsfw", "--safe", "--contains", "cat", "--type", "twopart",
        "--id-range", "3-9",
    ])
    opts = mock_func.call_args[0][0]
    assert opts.categories == frozenset({Category.PUN, Category.DARK})
    assert opts.language is Language.GERMAN
    assert opts.blacklist == ContentFlag.NSFW
    assert opts.safe is True
    assert opts.contains == "cat"
    assert opts.joke_type is JokeType.TWOPART
    assert opts.id_range == IdRange(3, 9)


@patch("jokeapi.api.fetch_many", return_value=[
    _joke(PlainText("a"), 1),
    _joke(TwoPart("b", "c"), 2, flags=ContentFlag.RACIST),
])
def test_cli_many(mock_func, capsys):
    code = run(["many", "2", "--id-range", "7"])
    out = capsys.readouterr().out
    assert code == 0
    assert mock_func.call_args[0][0] == 2
    assert mock_func.call_args[0][1].id_range == IdRange(7, 7)
    assert "a" in out and "b\nc" in out
    assert "(racist)" in out


@patch("jokeapi.api.fetch_many", return_value=[])
def test_cli_many_zero(mock_func, capsys):
    code = run(["many", "0"])
    assert code == 0
    assert "No results." in capsys.readouterr().out


@patch("jokeapi.api.fetch_one", side_effect=HttpStatusError(503, "https://v2.jokeapi.dev/joke/Any"))
def test_cli_reports_api_errors(mock_func, capsys):
    code = run(["one"])
    assert code == 1
    assert "HTTP 503" in capsys.readouterr().err
