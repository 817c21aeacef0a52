# resw/core/resource_base.py

import functools
from collections import namedtuple
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .lang import Lang


class IdRangeError(ValueError):
    """Raised when an integer cannot be stored as a 16-bit resource identifier."""
    pass


class BuilderConsumedError(RuntimeError):
    """Raised when a builder (or a serialized Build) is used again after being consumed."""
    pass


def check_int_range(value: int, low: int, high: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{what} out of range ({low}..{high}): {value}")
    return value


def check_word(value: int, what: str = "WORD value") -> int:
    return check_int_range(value, 0, 0xFFFF, what)


def check_dword(value: int, what: str = "DWORD value") -> int:
    return check_int_range(value, 0, 0xFFFFFFFF, what)


def check_c_int(value: int, what: str = "int value") -> int:
    return check_int_range(value, -0x80000000, 0x7FFFFFFF, what)


@functools.total_ordering
class Id:
    """
    A numeric resource identifier, stored as an unsigned 16-bit value.
    Accepts ints in [-1, 0xFFFF]; -1 is stored as 0xFFFF.
    """
    __slots__ = ("value",)

    def __init__(self, value: Union[int, "Id"]):
        if isinstance(value, Id):
            value = value.value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Id expects an int, got {value!r}")
        elif not -1 <= value <= 0xFFFF:
            raise IdRangeError(f"id out of bound, expected u16, actual value = {value}")
        self.value: int = value & 0xFFFF

    def __eq__(self, other):
        if not isinstance(other, Id): return NotImplemented
        return self.value == other.value

    def __lt__(self, other):
        if not isinstance(other, Id): return NotImplemented
        return self.value < other.value

    def __hash__(self):
        return hash(("Id", self.value))

    def __int__(self):
        return self.value

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return f"Id({self.value})"


# Filler for identifiers the output format ignores.
NOT_USEFUL_ID = Id(-1)


@functools.total_ordering
class IdOrName:
    """
    Either a numeric Id or a textual name. Numeric identifiers sort before all names.
    """
    __slots__ = ("id", "name")

    def __init__(self, value: Union[int, str, Id, "IdOrName"]):
        self.id: Optional[Id] = None
        self.name: Optional[str] = None
        if isinstance(value, IdOrName):
            self.id, self.name = value.id, value.name
        elif isinstance(value, str):
            self.name = value
        else:
            self.id = Id(value)

    @property
    def is_id(self) -> bool:
        return self.id is not None

    def _sort_key(self) -> Tuple[int, int, str]:
        if self.id is not None:
            return (0, self.id.value, "")
        return (1, 0, self.name)

    def __eq__(self, other):
        if not isinstance(other, IdOrName): return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other):
        if not isinstance(other, IdOrName): return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self):
        return hash(self._sort_key())

    def __repr__(self):
        return f"IdOrName(Id({self.id.value}))" if self.id is not None else f"IdOrName(Name({self.name!r}))"


class Rect(namedtuple("Rect", ["x", "y", "width", "height"])):
    """Dialog-unit rectangle; the compiled template stores each field as a signed 16-bit value."""
    __slots__ = ()

    def __new__(cls, x: int, y: int, width: int, height: int):
        for field_name, value in zip(cls._fields, (x, y, width, height)):
            check_int_range(value, -0x8000, 0x7FFF, f"Rect {field_name}")
        return super().__new__(cls, x, y, width, height)


class ExtraInfo(namedtuple("ExtraInfo", ["characteristics", "version"])):
    __slots__ = ()

    def __new__(cls, characteristics: Optional[int] = None, version: Optional[int] = None):
        if characteristics is not None: check_dword(characteristics, "characteristics")
        if version is not None: check_dword(version, "version")
        return super().__new__(cls, characteristics, version)


# --- Language resolution containers ---

class LangSpecific:
    """
    Maps "universal" (None) or a specific Lang to one value.
    Lookup for a language returns its own entry if present, else the universal entry.
    """

    def __init__(self):
        self._entries: Dict[Optional[Lang], Any] = {}

    def insert_specific(self, lang: Lang, value: Any):
        self._entries[lang] = value

    def insert_universal(self, value: Any):
        self._entries[None] = value

    def access_specific(self, lang: Lang, factory: Callable[[], Any]) -> Any:
        if lang not in self._entries:
            self._entries[lang] = factory()
        return self._entries[lang]

    def access_universal(self, factory: Callable[[], Any]) -> Any:
        if None not in self._entries:
            self._entries[None] = factory()
        return self._entries[None]

    def access(self, lang: Optional[Lang], factory: Callable[[], Any]) -> Any:
        if lang is None:
            return self.access_universal(factory)
        return self.access_specific(lang, factory)

    def insert(self, lang: Optional[Lang], value: Any):
        self._entries[lang] = value

    def get(self, lang: Lang) -> Optional[Any]:
        if lang in self._entries:
            return self._entries[lang]
        return self._entries.get(None)

    def copy(self) -> "LangSpecific":
        other = LangSpecific()
        other._entries = dict(self._entries)
        return other

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"LangSpecific({self._entries!r})"


class LangSpecificList:
    """
    Append-only sequence of (None or Lang, value) pairs.
    Iterating for a language yields universal and matching entries together, in insertion order.
    """

    def __init__(self):
        self._entries: List[Tuple[Optional[Lang], Any]] = []

    def insert_specific(self, lang: Lang, value: Any):
        self._entries.append((lang, value))

    def insert_universal(self, value: Any):
        self._entries.append((None, value))

    def insert(self, lang: Optional[Lang], value: Any):
        self._entries.append((lang, value))

    def iter(self, lang: Lang) -> Iterator[Any]:
        for key, value in self._entries:
            if key is None or key == lang:
                yield value

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"LangSpecificList({self._entries!r})"


class MultiLangText:
    """Display text with an optional universal value and per-language overrides."""

    def __init__(self, text: Optional[str] = None):
        self.texts = LangSpecific()
        if text is not None:
            self.texts.insert_universal(str(text))

    def lang(self, lang: Lang, text: str) -> "MultiLangText":
        self.texts.insert_specific(lang, str(text))
        return self

    def get(self, lang: Lang) -> Optional[str]:
        return self.texts.get(lang)

    def copy(self) -> "MultiLangText":
        other = MultiLangText()
        other.texts = self.texts.copy()
        return other

    @classmethod
    def coerce(cls, value: Union[str, "MultiLangText"]) -> "MultiLangText":
        """Returns a private MultiLangText; later edits to value do not reach it."""
        if isinstance(value, MultiLangText):
            return value.copy()
        if isinstance(value, str):
            return cls(value)
        raise TypeError(f"Expected str or MultiLangText, got {value!r}")

    def __repr__(self):
        return f"MultiLangText({self.texts._entries!r})"


# --- Resources and builders ---

class Resource:
    """
    Base class for everything that can be attached to a Build.
    Subclasses render themselves for one language; an empty string means "nothing for this language".
    """
    TYPE_KEYWORD: str = ""

    def to_rc_text(self, lang: Lang, id_or_name: IdOrName) -> str:
        raise NotImplementedError(f"{self.__class__.__name__} does not support RC text generation.")

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.TYPE_KEYWORD}>"


class ResourceBuilder:
    """
    Accumulates the data of one resource. Single use: build() hands the data to the
    resource and any later call on the builder raises BuilderConsumedError.
    """

    def __init__(self, data: Any, resource_factory: Callable[[Any], Resource]):
        self._data = data
        self._resource_factory = resource_factory

    @property
    def data(self) -> Any:
        if self._data is None:
            raise BuilderConsumedError(f"{self.__class__.__name__} was already consumed by build().")
        return self._data

    def build(self) -> Resource:
        data = self.data
        self._data = None
        return self._resource_factory(data)


class ExtraInfoBuilderMixin:
    """extra_info() / lang_specific_extra_info() for builders whose data has set_extra_info()."""

    def extra_info(self, characteristics: Optional[int] = None, version: Optional[int] = None):
        self.data.set_extra_info(None, ExtraInfo(characteristics, version))
        return self

    def lang_specific_extra_info(self, lang: Lang, characteristics: Optional[int] = None,
                                 version: Optional[int] = None):
        self.data.set_extra_info(lang, ExtraInfo(characteristics, version))
        return self


# Common Resource Type Constants (WinUser.h), usable as user-defined type identifiers.
RT_CURSOR = 1
RT_BITMAP = 2
RT_ICON = 3
RT_MENU = 4
RT_DIALOG = 5
RT_STRING = 6
RT_FONTDIR = 7
RT_FONT = 8
RT_ACCELERATOR = 9
RT_RCDATA = 10
RT_MESSAGETABLE = 11
RT_GROUP_CURSOR = 12
RT_GROUP_ICON = 14
RT_VERSION = 16
RT_DLGINCLUDE = 17
RT_PLUGPLAY = 19
RT_VXD = 20
RT_ANICURSOR = 21
RT_ANIICON = 22
RT_HTML = 23
RT_MANIFEST = 24
