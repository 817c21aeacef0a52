# resw/core/lang.py

from collections import namedtuple
from typing import Tuple

# Primary language IDs (winnt.h). Only the languages used by the presets below.
LANG_NEUTRAL = 0x00
LANG_CHINESE = 0x04
LANG_CZECH = 0x05
LANG_GERMAN = 0x07
LANG_ENGLISH = 0x09
LANG_SPANISH = 0x0a
LANG_FRENCH = 0x0c
LANG_ITALIAN = 0x10
LANG_JAPANESE = 0x11
LANG_KOREAN = 0x12
LANG_POLISH = 0x15
LANG_PORTUGUESE = 0x16
LANG_RUSSIAN = 0x19
LANG_TURKISH = 0x1f

# Sublanguage IDs
SUBLANG_NEUTRAL = 0x00
SUBLANG_DEFAULT = 0x01
SUBLANG_CHINESE_TRADITIONAL = 0x01
SUBLANG_CHINESE_SIMPLIFIED = 0x02
SUBLANG_CZECH_CZECH_REPUBLIC = 0x01
SUBLANG_GERMAN = 0x01
SUBLANG_ENGLISH_US = 0x01
SUBLANG_SPANISH = 0x01
SUBLANG_FRENCH = 0x01
SUBLANG_ITALIAN = 0x01
SUBLANG_JAPANESE_JAPAN = 0x01
SUBLANG_KOREAN = 0x01
SUBLANG_POLISH_POLAND = 0x01
SUBLANG_PORTUGUESE_BRAZILIAN = 0x01
SUBLANG_RUSSIAN_RUSSIA = 0x01
SUBLANG_TURKISH_TURKEY = 0x01


def MAKELANGID(primary_lang: int, sub_lang: int) -> int:
    return (sub_lang << 10) | primary_lang


class Lang(namedtuple("Lang", ["primary", "sub"])):
    """
    A (primary, sub) language pair as written in a LANGUAGE statement.
    Ordered lexicographically, so it can key sorted per-language tables.
    """
    __slots__ = ()

    def __new__(cls, primary: int, sub: int):
        for field_name, value in (("primary", primary), ("sub", sub)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Language {field_name} must be an int, got {value!r}")
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"Language {field_name} out of range (0..0xFFFF): {value}")
        return super().__new__(cls, primary, sub)

    @property
    def langid(self) -> int:
        return MAKELANGID(self.primary, self.sub)

    def __repr__(self):
        return f"Lang(0x{self.primary:x}, 0x{self.sub:x})"


LANG_ENU = Lang(LANG_ENGLISH, SUBLANG_ENGLISH_US)
PRESET_LANG_1: Tuple[Lang, ...] = (LANG_ENU,)

LANG_CHS = Lang(LANG_CHINESE, SUBLANG_CHINESE_SIMPLIFIED)
LANG_CHT = Lang(LANG_CHINESE, SUBLANG_CHINESE_TRADITIONAL)
LANG_DEU = Lang(LANG_GERMAN, SUBLANG_GERMAN)
LANG_ESN = Lang(LANG_SPANISH, SUBLANG_SPANISH)
LANG_FRA = Lang(LANG_FRENCH, SUBLANG_FRENCH)
LANG_ITA = Lang(LANG_ITALIAN, SUBLANG_ITALIAN)
LANG_JPN = Lang(LANG_JAPANESE, SUBLANG_JAPANESE_JAPAN)
LANG_KOR = Lang(LANG_KOREAN, SUBLANG_KOREAN)

PRESET_LANG_9: Tuple[Lang, ...] = (
    LANG_ENU, LANG_CHS, LANG_CHT, LANG_DEU, LANG_ESN, LANG_FRA, LANG_ITA, LANG_JPN, LANG_KOR,
)

LANG_RUS = Lang(LANG_RUSSIAN, SUBLANG_RUSSIAN_RUSSIA)

PRESET_LANG_10: Tuple[Lang, ...] = PRESET_LANG_9 + (LANG_RUS,)

LANG_CSY = Lang(LANG_CZECH, SUBLANG_CZECH_CZECH_REPUBLIC)
LANG_PLK = Lang(LANG_POLISH, SUBLANG_POLISH_POLAND)
LANG_PTB = Lang(LANG_PORTUGUESE, SUBLANG_PORTUGUESE_BRAZILIAN)
LANG_TRK = Lang(LANG_TURKISH, SUBLANG_TURKISH_TURKEY)

PRESET_LANG_14: Tuple[Lang, ...] = (
    LANG_ENU, LANG_CHS, LANG_CHT, LANG_CSY, LANG_DEU, LANG_ESN, LANG_FRA, LANG_ITA, LANG_JPN,
    LANG_KOR, LANG_PLK, LANG_PTB, LANG_RUS, LANG_TRK,
)
