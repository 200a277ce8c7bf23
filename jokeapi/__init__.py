"""Typed client for the JokeAPI."""
from .api import (
    APIError,
    DecodeError,
    HttpStatusError,
    JokeAPIError,
    MissingFieldError,
    TransportError,
    build_url,
    fetch_many,
    fetch_one,
    parse_joke,
    parse_jokes,
)
from .models import (
    Category,
    ContentFlag,
    IdRange,
    Joke,
    JokeType,
    Language,
    PlainText,
    RequestOptions,
    TwoPart,
)

__all__ = [
    "APIError",
    "Category",
    "ContentFlag",
    "DecodeError",
    "HttpStatusError",
    "IdRange",
    "Joke",
    "JokeAPIError",
    "JokeType",
    "Language",
    "MissingFieldError",
    "PlainText",
    "RequestOptions",
    "TransportError",
    "TwoPart",
    "build_url",
    "fetch_many",
    "fetch_one",
    "parse_joke",
    "parse_jokes",
]
