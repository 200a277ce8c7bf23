"""Client for the JokeAPI (https://v2.jokeapi.dev).

Requests are built from a RequestOptions value, sent with a single GET and
decoded into immutable Joke values. Every failure raises a subclass of
APIError. Network calls go through ``requests.get`` so they are easy to mock
in tests.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

import requests

from . import config
from .models import (
    Category,
    ContentFlag,
    FLAG_NAMES,
    Joke,
    JokeContent,
    JokeType,
    Language,
    PlainText,
    RequestOptions,
    TwoPart,
)

logger = logging.getLogger(__name__)

ANY_CATEGORY = "Any"

Payload = Union[bytes, str, Dict[str, Any]]


class APIError(Exception):
    """Raised when an API request fails or returns an invalid response."""


class TransportError(APIError):
    """The request never produced a response (DNS, connection, timeout...)."""


class HttpStatusError(APIError):
    def __init__(self, status_code: int, url: str, detail: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        self.detail = detail
        message = f"HTTP {status_code} for {url}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DecodeError(APIError):
    """The body is not valid JSON or does not have the expected shape."""


class MissingFieldError(DecodeError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field '{field}'")


class JokeAPIError(APIError):
    """The server answered with its error envelope (``"error": true``)."""

    def __init__(self, message: str, code: Optional[int] = None):
        self.code = code
        super().__init__(message)


# --- encoding ----------------------------------------------------------------

def encode_path(options: RequestOptions) -> str:
    """Category path segment, e.g. ``"Programming,Pun"`` or ``"Any"``."""
    selected = [c.value for c in Category if c in options.categories]
    return ",".join(selected) if selected else ANY_CATEGORY


def encode_params(options: RequestOptions, amount: int) -> List[Tuple[str, str]]:
    """Query parameters as ordered (key, value) pairs, values already encoded."""
    if amount < 0:
        raise ValueError(f"amount must be >= 0, got {amount}")

    params: List[Tuple[str, str]] = []
    if options.language.code:
        params.append(("lang", options.language.code))
    if options.blacklist:
        params.append(("blacklistFlags", ",".join(ContentFlag.names(options.blacklist))))
    if options.safe:
        params.append(("safe-mode", "true"))
    if options.contains:
        params.append(("contains", quote(options.contains, safe="")))
    if options.joke_type is not JokeType.ANY:
        params.append(("type", options.joke_type.value))
    if options.id_range is not None and options.id_range.is_valid:
        params.append(("idRange", options.id_range.render()))
    params.append(("amount", str(amount)))
    return params


def encode_query(options: RequestOptions, amount: int) -> str:
    """Query string. Always starts with ``?`` since ``amount`` is always sent."""
    params = encode_params(options, amount)
    return "?" + "&".join(f"{k}={v}" for k, v in params)


def build_url(options: RequestOptions, amount: int, base_url: Optional[str] = None) -> str:
    base = base_url if base_url is not None else config.BASE_URL
    return f"{base}{encode_path(options)}{encode_query(options, amount)}"


# --- decoding ----------------------------------------------------------------

def _load(payload: Payload) -> Dict[str, Any]:
    if isinstance(payload, dict):
        data = payload
    else:
        try:
            data = json.loads(payload)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    if data.get("error") is True:
        message = data.get("message") or "JokeAPI returned an error"
        info = data.get("additionalInfo")
        if info:
            message = f"{message}: {info}"
        raise JokeAPIError(message, code=data.get("code"))
    return data


def _require(data: Dict[str, Any], key: str, kind: type = object) -> Any:
    if data.get(key) is None:
        raise MissingFieldError(key)
    value = data[key]
    # bool is an int subclass; never accept it where a number is expected.
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(f"Field '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


def _parse_flags(raw: Any) -> ContentFlag:
    if not isinstance(raw, dict):
        raise DecodeError("Field 'flags' must be an object")
    flags = ContentFlag(0)
    for flag, name in FLAG_NAMES:
        if raw.get(name) is None:
            raise MissingFieldError(f"flags.{name}")
        if not isinstance(raw[name], bool):
            raise DecodeError(f"Field 'flags.{name}' must be bool, got {type(raw[name]).__name__}")
        if raw[name]:
            flags |= flag
    return flags


def _parse_content(data: Dict[str, Any], strict: bool) -> JokeContent:
    joke_type = _require(data, "type", str)
    if joke_type == JokeType.SINGLE.value:
        return PlainText(_require(data, "joke", str))
    if joke_type != JokeType.TWOPART.value:
        if strict:
            raise DecodeError(f"Unrecognised joke type {joke_type!r}")
        logger.warning("Unrecognised joke type %r; decoding as two-part", joke_type)
    return TwoPart(_require(data, "setup", str), _require(data, "delivery", str))


def _parse_item(data: Any, strict: bool) -> Joke:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a joke object, got {type(data).__name__}")
    content = _parse_content(data, strict)
    lang = data.get("lang")
    if lang is not None and not isinstance(lang, str):
        raise DecodeError(f"Field 'lang' must be str, got {type(lang).__name__}")
    return Joke(
        category=Category.from_name(_require(data, "category", str)),
        content=content,
        flags=_parse_flags(_require(data, "flags")),
        safe=_require(data, "safe", bool),
        id=_require(data, "id", int),
        language=Language.from_code(lang),
    )


def parse_joke(payload: Payload, strict: bool = False) -> Joke:
    """Decode the single-joke response shape.

    Args:
        payload: Raw JSON body (bytes or str) or an already parsed dict.
        strict: Reject ``type`` values other than "single"/"twopart" instead
            of decoding them as two-part jokes.

    Returns:
        The decoded Joke.

    Raises:
        DecodeError: On invalid JSON or an unexpected shape.
        MissingFieldError: When a field required by the declared type is absent.
        JokeAPIError: When the body is the API's error envelope.
    """
    return _parse_item(_load(payload), strict)


def parse_jokes(payload: Payload, strict: bool = False) -> List[Joke]:
    """Decode the multi-joke shape (``amount`` plus a ``jokes`` list).

    Each element is decoded independently and order is preserved.
    """
    data = _load(payload)
    amount = _require(data, "amount")
    items = _require(data, "jokes")
    if not isinstance(items, list):
        raise DecodeError("Field 'jokes' must be a list")
    if amount != len(items):
        raise DecodeError(f"Response declares amount={amount} but holds {len(items)} jokes")
    return [_parse_item(item, strict) for item in items]


# --- transport ---------------------------------------------------------------

def _error_detail(resp: requests.Response) -> Optional[str]:
    """Message from the API's error envelope, if the error body carries one."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict) or body.get("error") is not True:
        return None
    message = body.get("message")
    return str(message) if message else None


def _get_json(url: str, timeout: Optional[float] = None) -> Any:
    """Internal helper to perform a GET request and return parsed JSON.

    Raises:
        TransportError: When the request itself fails.
        HttpStatusError: On any status other than 200.
        DecodeError: When the body is not JSON.
    """
    logger.debug("GET %s", url)
    try:
        resp = requests.get(url, timeout=timeout if timeout is not None else config.TIMEOUT)
    except requests.RequestException as e:
        raise TransportError(f"Request failed for {url}: {e}") from e
    if resp.status_code != 200:
        raise HttpStatusError(resp.status_code, url, _error_detail(resp))
    try:
        return resp.json()
    except ValueError as e:
        raise DecodeError(f"Invalid JSON from {url}: {e}") from e


def fetch_one(
    options: Optional[RequestOptions] = None,
    *,
    timeout: Optional[float] = None,
    strict: bool = False,
) -> Joke:
    """Fetch a single joke matching the options.

    Args:
        options: Request filters; defaults to any joke.
        timeout: Request timeout in seconds (defaults to ``config.TIMEOUT``).
        strict: See ``parse_joke``.

    Returns:
        The joke.
    """
    url = build_url(options or RequestOptions(), 1)
    return parse_joke(_get_json(url, timeout), strict=strict)


def fetch_many(
    count: int,
    options: Optional[RequestOptions] = None,
    *,
    timeout: Optional[float] = None,
    strict: bool = False,
) -> List[Joke]:
    """Fetch ``count`` jokes in one request.

    A count of 0 returns an empty list without touching the network. A count
    of 1 goes through ``fetch_one`` since the API answers with the
    single-joke shape in that case.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if count == 0:
        return []
    if count == 1:
        return [fetch_one(options, timeout=timeout, strict=strict)]
    url = build_url(options or RequestOptions(), count)
    return parse_jokes(_get_json(url, timeout), strict=strict)
