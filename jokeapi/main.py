"""CLI entry point for the JokeAPI client.

Usage:
    python -m jokeapi.main one [--category Programming] [--type single]
    python -m jokeapi.main many 3 [--lang de] [--blacklist nsfw --blacklist racist]
    python -m jokeapi.main one --id-range 0-100 --contains debug --safe
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import api
from .models import Category, ContentFlag, IdRange, Joke, JokeType, Language, RequestOptions

_CATEGORY_CHOICES = [c.value for c in Category]
_LANG_CHOICES = ["en", "cs", "de", "es", "fr", "pt"]
_TYPE_CHOICES = ["any", "single", "twopart"]


def _id_range(value: str) -> IdRange:
    """Parse ``MIN-MAX`` or a single ``ID``."""
    lo, sep, hi = value.partition("-")
    try:
        return IdRange(int(lo), int(hi if sep else lo))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid id range: {value!r}")


def _add_filters(p: argparse.ArgumentParser) -> None:
    p.add_argument("--category", action="append", choices=_CATEGORY_CHOICES, default=[],
                   help="Joke category; repeat to select several (default: any)")
    p.add_argument("--lang", choices=_LANG_CHOICES, default="en", help="Joke language (default: en)")
    p.add_argument("--blacklist", action="append", default=[],
                   help="Content flag to exclude (nsfw, religious, political, racist, sexist, explicit)")
    p.add_argument("--safe", action="store_true", help="Only return jokes flagged safe")
    p.add_argument("--contains", default="", help="Only jokes containing this text")
    p.add_argument("--type", dest="joke_type", choices=_TYPE_CHOICES, default="any",
                   help="Joke shape (default: any)")
    p.add_argument("--id-range", type=_id_range, default=None, help="Id or MIN-MAX range")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jokeapi",
        description="Fetch jokes from the JokeAPI (v2.jokeapi.dev).",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log more (-v info, -vv debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_one = sub.add_parser("one", help="Print a single joke")
    _add_filters(p_one)

    p_many = sub.add_parser("many", help="Print several jokes")
    p_many.add_argument("count", type=int, help="How many jokes to fetch")
    _add_filters(p_many)

    return parser


def _options_from_args(args: argparse.Namespace) -> RequestOptions:
    return RequestOptions(
        categories=frozenset(Category(c) for c in args.category),
        language=Language.from_code(args.lang),
        blacklist=ContentFlag.from_names(args.blacklist),
        joke_type=JokeType.ANY if args.joke_type == "any" else JokeType(args.joke_type),
        contains=args.contains,
        id_range=args.id_range,
        safe=args.safe,
    )


def _print_joke(joke: Joke) -> None:
    header = f"#{joke.id} [{joke.category.value}]"
    flags = joke.flag_names()
    if flags:
        header += " (" + ", ".join(flags) + ")"
    print(header)
    print(joke)


def _cmd_one(options: RequestOptions) -> int:
    _print_joke(api.fetch_one(options))
    return 0


def _cmd_many(count: int, options: RequestOptions) -> int:
    jokes = api.fetch_many(count, options)
    if not jokes:
        print("No results.")
        return 0
    for i, joke in enumerate(jokes):
        if i:
            print()
        _print_joke(joke)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        options = _options_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        if args.command == "one":
            return _cmd_one(options)
        if args.command == "many":
            if args.count < 0:
                parser.error("count must be >= 0")
            return _cmd_many(args.count, options)
    except api.APIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
