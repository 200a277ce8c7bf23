"""Value types for JokeAPI requests and results.

Everything here is immutable. The enum <-> API string mappings live in
static tables so the ordering used when building queries never drifts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Dict, FrozenSet, Iterable, List, Optional, Union


class Category(Enum):
    """Joke category. Declaration order is the order used in request paths."""

    MISC = "Misc"
    PROGRAMMING = "Programming"
    DARK = "Dark"
    PUN = "Pun"
    SPOOKY = "Spooky"
    CHRISTMAS = "Christmas"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Category":
        """Exact, case-sensitive lookup. Unknown names fall back to MISC."""
        return _CATEGORY_BY_NAME.get(name or "", cls.MISC)


_CATEGORY_BY_NAME: Dict[str, Category] = {c.value: c for c in Category}


class Language(Enum):
    ENGLISH = "English"
    CZECH = "Czech"
    GERMAN = "German"
    SPANISH = "Spanish"
    FRENCH = "French"
    PORTUGUESE = "Portuguese"
    UNKNOWN = "Unknown"

    @property
    def code(self) -> str:
        """Two-letter query code; empty for English and Unknown (omit from query)."""
        return _QUERY_CODE_BY_LANGUAGE[self]

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Language":
        return _LANGUAGE_BY_CODE.get(code or "", cls.UNKNOWN)


_LANGUAGE_BY_CODE: Dict[str, Language] = {
    "cs": Language.CZECH,
    "en": Language.ENGLISH,
    "de": Language.GERMAN,
    "fr": Language.FRENCH,
    "es": Language.SPANISH,
    "pt": Language.PORTUGUESE,
}

_QUERY_CODE_BY_LANGUAGE: Dict[Language, str] = {
    Language.ENGLISH: "",
    Language.CZECH: "cs",
    Language.GERMAN: "de",
    Language.SPANISH: "es",
    Language.FRENCH: "fr",
    Language.PORTUGUESE: "pt",
    Language.UNKNOWN: "",
}


class ContentFlag(Flag):
    """Content warnings, used both as a request blacklist and on results."""

    NSFW = auto()
    RELIGIOUS = auto()
    POLITICAL = auto()
    RACIST = auto()
    SEXIST = auto()
    EXPLICIT = auto()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ContentFlag":
        """Build a flag set from API names (``"nsfw"``, ``"racist"``...).

        Raises:
            ValueError: On an unknown flag name.
        """
        out = cls(0)
        for name in names:
            key = str(name).strip().lower()
            if key not in _FLAG_BY_NAME:
                raise ValueError(f"Unknown content flag: {name!r}")
            out |= _FLAG_BY_NAME[key]
        return out

    @staticmethod
    def names(flags: "ContentFlag") -> List[str]:
        """API names of the flags present, in declaration order."""
        return [name for flag, name in FLAG_NAMES if flag in flags]


# (flag, API name) in declaration order; also the order of blacklistFlags.
FLAG_NAMES = (
    (ContentFlag.NSFW, "nsfw"),
    (ContentFlag.RELIGIOUS, "religious"),
    (ContentFlag.POLITICAL, "political"),
    (ContentFlag.RACIST, "racist"),
    (ContentFlag.SEXIST, "sexist"),
    (ContentFlag.EXPLICIT, "explicit"),
)

_FLAG_BY_NAME: Dict[str, ContentFlag] = {name: flag for flag, name in FLAG_NAMES}


class JokeType(Enum):
    """Request-side filter selecting the response shape."""

    ANY = ""
    SINGLE = "single"
    TWOPART = "twopart"


@dataclass(frozen=True)
class IdRange:
    """Inclusive id bounds. Ignored when min > max."""

    min: int
    max: int

    @property
    def is_valid(self) -> bool:
        return self.min <= self.max

    def render(self) -> Optional[str]:
        if not self.is_valid:
            return None
        if self.min == self.max:
            return str(self.min)
        return f"{self.min}-{self.max}"


@dataclass(frozen=True)
class RequestOptions:
    categories: FrozenSet[Category] = field(default_factory=frozenset)
    language: Language = Language.ENGLISH
    blacklist: ContentFlag = ContentFlag(0)
    joke_type: JokeType = JokeType.ANY
    contains: str = ""
    id_range: Optional[IdRange] = None
    safe: bool = False

    def __post_init__(self) -> None:
        # Accept any iterable of categories but store a frozenset.
        if not isinstance(self.categories, frozenset):
            object.__setattr__(self, "categories", frozenset(self.categories))


@dataclass(frozen=True)
class PlainText:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class TwoPart:
    setup: str
    delivery: str

    def __str__(self) -> str:
        return f"{self.setup}\n{self.delivery}"


JokeContent = Union[PlainText, TwoPart]


@dataclass(frozen=True)
class Joke:
    category: Category
    content: JokeContent
    flags: ContentFlag
    safe: bool
    id: int
    language: Language

    @property
    def type(self) -> JokeType:
        return JokeType.SINGLE if isinstance(self.content, PlainText) else JokeType.TWOPART

    def flag_names(self) -> List[str]:
        return ContentFlag.names(self.flags)

    def __str__(self) -> str:
        return str(self.content)
