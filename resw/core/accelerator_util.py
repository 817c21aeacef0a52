# resw/core/accelerator_util.py

import enum
import warnings
from typing import List, Optional, Tuple, Union

from .lang import Lang
from .resource_base import (Id, ExtraInfo, LangSpecific, ResourceBuilder, ExtraInfoBuilderMixin,
                            check_c_int)
from .rc_text_util import format_extra_info

# Windows VK codes: https://docs.microsoft.com/en-us/windows/win32/inputdev/virtual-key-codes
VK_NAME_TO_CODE_MAP = {
    "LBUTTON": 0x01, "RBUTTON": 0x02, "CANCEL": 0x03, "MBUTTON": 0x04, "XBUTTON1": 0x05, "XBUTTON2": 0x06,
    "BACK": 0x08, "TAB": 0x09, "CLEAR": 0x0C, "RETURN": 0x0D,
    "SHIFT": 0x10, "CONTROL": 0x11, "MENU": 0x12, "PAUSE": 0x13, "CAPITAL": 0x14,
    "KANA": 0x15, "HANGEUL": 0x15, "HANGUL": 0x15, "JUNJA": 0x17, "FINAL": 0x18, "HANJA": 0x19, "KANJI": 0x19,
    "ESCAPE": 0x1B, "CONVERT": 0x1C, "NONCONVERT": 0x1D, "ACCEPT": 0x1E, "MODECHANGE": 0x1F,
    "SPACE": 0x20, "PRIOR": 0x21, "NEXT": 0x22, "END": 0x23, "HOME": 0x24,
    "LEFT": 0x25, "UP": 0x26, "RIGHT": 0x27, "DOWN": 0x28,
    "SELECT": 0x29, "PRINT": 0x2A, "EXECUTE": 0x2B, "SNAPSHOT": 0x2C, "INSERT": 0x2D, "DELETE": 0x2E, "HELP": 0x2F,
    # Digits and letters share their ASCII codes
    **{f"NUM_{i}": 0x30 + i for i in range(10)},
    **{f"LETTER_{chr(ord('A') + i)}": 0x41 + i for i in range(26)},
    "LWIN": 0x5B, "RWIN": 0x5C, "APPS": 0x5D, "SLEEP": 0x5F,
    **{f"NUMPAD{i}": 0x60 + i for i in range(10)},
    "MULTIPLY": 0x6A, "ADD": 0x6B, "SEPARATOR": 0x6C, "SUBTRACT": 0x6D, "DECIMAL": 0x6E, "DIVIDE": 0x6F,
    **{f"F{i + 1}": 0x70 + i for i in range(24)},
    "NUMLOCK": 0x90, "SCROLL": 0x91,
    # NEC and Fujitsu keyboards reuse 0x92..0x96
    "OEM_NEC_EQUAL": 0x92, "OEM_FJ_JISHO": 0x92, "OEM_FJ_MASSHOU": 0x93, "OEM_FJ_TOUROKU": 0x94,
    "OEM_FJ_LOYA": 0x95, "OEM_FJ_ROYA": 0x96,
    "LSHIFT": 0xA0, "RSHIFT": 0xA1, "LCONTROL": 0xA2, "RCONTROL": 0xA3, "LMENU": 0xA4, "RMENU": 0xA5,
    "BROWSER_BACK": 0xA6, "BROWSER_FORWARD": 0xA7, "BROWSER_REFRESH": 0xA8, "BROWSER_STOP": 0xA9,
    "BROWSER_SEARCH": 0xAA, "BROWSER_FAVORITES": 0xAB, "BROWSER_HOME": 0xAC,
    "VOLUME_MUTE": 0xAD, "VOLUME_DOWN": 0xAE, "VOLUME_UP": 0xAF,
    "MEDIA_NEXT_TRACK": 0xB0, "MEDIA_PREV_TRACK": 0xB1, "MEDIA_STOP": 0xB2, "MEDIA_PLAY_PAUSE": 0xB3,
    "LAUNCH_MAIL": 0xB4, "LAUNCH_MEDIA_SELECT": 0xB5, "LAUNCH_APP1": 0xB6, "LAUNCH_APP2": 0xB7,
    "OEM_1": 0xBA, "OEM_PLUS": 0xBB, "OEM_COMMA": 0xBC, "OEM_MINUS": 0xBD, "OEM_PERIOD": 0xBE,
    "OEM_2": 0xBF, "OEM_3": 0xC0, "OEM_4": 0xDB, "OEM_5": 0xDC, "OEM_6": 0xDD, "OEM_7": 0xDE, "OEM_8": 0xDF,
    "OEM_AX": 0xE1, "OEM_102": 0xE2, "ICO_HELP": 0xE3, "ICO_00": 0xE4, "PROCESSKEY": 0xE5, "ICO_CLEAR": 0xE6,
    "PACKET": 0xE7,
    "OEM_RESET": 0xE9, "OEM_JUMP": 0xEA, "OEM_PA1": 0xEB, "OEM_PA2": 0xEC, "OEM_PA3": 0xED, "OEM_WSCTRL": 0xEE,
    "OEM_CUSEL": 0xEF, "OEM_ATTN": 0xF0, "OEM_FINISH": 0xF1, "OEM_COPY": 0xF2, "OEM_AUTO": 0xF3, "OEM_ENLW": 0xF4,
    "OEM_BACKTAB": 0xF5,
    "ATTN": 0xF6, "CRSEL": 0xF7, "EXSEL": 0xF8, "EREOF": 0xF9, "PLAY": 0xFA, "ZOOM": 0xFB,
    "NONAME": 0xFC, "PA1": 0xFD, "OEM_CLEAR": 0xFE,
}


class ASCIIKey:
    """A printable ASCII character (32..126), written as its decimal code."""
    __slots__ = ("code",)

    def __init__(self, value: Union[int, str]):
        if isinstance(value, str) and len(value) == 1:
            value = ord(value)
        if isinstance(value, bool) or not isinstance(value, int) or not 32 <= value <= 126:
            raise ValueError(f"provided value is not ascii key: {value!r}")
        self.code: int = value

    def __str__(self):
        return str(self.code)

    def __repr__(self):
        return f"ASCIIKey({chr(self.code)!r})"


class VirtKey:
    """A virtual-key code. Named codes are available as class attributes (VirtKey.F1, VirtKey.LETTER_A, ...)."""
    __slots__ = ("code",)

    def __init__(self, code: int):
        self.code: int = check_c_int(code, "virtual key code")

    def __str__(self):
        return str(self.code)

    def __repr__(self):
        return f"VirtKey(0x{self.code:02x})"


for _vk_name, _vk_code in VK_NAME_TO_CODE_MAP.items():
    setattr(VirtKey, _vk_name, VirtKey(_vk_code))
del _vk_name, _vk_code


class Modifier(enum.Enum):
    """Modifier combinations for VIRTKEY events; the value is the text appended after VIRTKEY."""
    NONE = ""
    CTRL = ", CONTROL"
    ALT = ", ALT"
    SHIFT = ", SHIFT"
    CTRL_ALT = ", CONTROL, ALT"
    CTRL_SHIFT = ", CONTROL, SHIFT"
    ALT_SHIFT = ", ALT, SHIFT"
    CTRL_ALT_SHIFT = ", CONTROL, ALT, SHIFT"


class ASCIIModifier(enum.Enum):
    """ASCII events cannot carry SHIFT (the character itself encodes case)."""
    NONE = ""
    CTRL = ", CONTROL"
    ALT = ", ALT"
    CTRL_ALT = ", CONTROL, ALT"


class Event:
    """One accelerator key event. Construct with virt_key_event() or ascii_key_event()."""

    def __init__(self, key: Union[ASCIIKey, VirtKey], modifier: Union[Modifier, ASCIIModifier],
                 noinvert: bool = False):
        if isinstance(key, ASCIIKey):
            if not isinstance(modifier, ASCIIModifier):
                raise TypeError(f"ASCII key events take an ASCIIModifier, got {modifier!r}")
        elif isinstance(key, VirtKey):
            if not isinstance(modifier, Modifier):
                raise TypeError(f"VIRTKEY events take a Modifier, got {modifier!r}")
        else:
            raise TypeError(f"Expected ASCIIKey or VirtKey, got {key!r}")
        self.key = key
        self.modifier = modifier
        self.is_noinvert: bool = noinvert

    @classmethod
    def virt_key_event(cls, virt_key: VirtKey, modifier: Modifier = Modifier.NONE) -> "Event":
        return cls(virt_key, modifier)

    @classmethod
    def ascii_key_event(cls, ascii_key: Union[ASCIIKey, int, str],
                        modifier: ASCIIModifier = ASCIIModifier.NONE) -> "Event":
        if not isinstance(ascii_key, ASCIIKey):
            ascii_key = ASCIIKey(ascii_key)
        return cls(ascii_key, modifier)

    def noinvert(self) -> "Event":
        """Legacy NOINVERT flag, kept for scripts that still expect it. Returns a new Event."""
        warnings.warn(DeprecationWarning("NOINVERT is obsolete and ignored by modern Windows versions."),
                      stacklevel=2)
        return Event(self.key, self.modifier, noinvert=True)

    @property
    def type_keyword(self) -> str:
        return "ASCII" if isinstance(self.key, ASCIIKey) else "VIRTKEY"

    def __repr__(self):
        return f"Event({self.key!r}, {self.modifier}, noinvert={self.is_noinvert})"


def format_accelerator_line(id_val: Id, event: Event) -> str:
    noinvert = ", NOINVERT" if event.is_noinvert else ""
    return f"\t{event.key}, {id_val}, {event.type_keyword}{event.modifier.value}{noinvert}"


class AcceleratorItems:
    def __init__(self):
        self.extra_info: Optional[ExtraInfo] = None
        self.events: List[Tuple[Id, Event]] = []


class AcceleratorData:
    def __init__(self):
        self.items = LangSpecific()

    def access_items(self, lang: Optional[Lang]) -> AcceleratorItems:
        return self.items.access(lang, AcceleratorItems)

    def set_extra_info(self, lang: Optional[Lang], extra_info: ExtraInfo):
        self.access_items(lang).extra_info = extra_info

    def add_event(self, lang: Optional[Lang], id_val: Id, event: Event):
        if not isinstance(event, Event):
            raise TypeError(f"Expected an accelerator Event, got {event!r}")
        self.access_items(lang).events.append((id_val, event))

    def is_missing_for_lang(self, lang: Lang) -> bool:
        return self.items.get(lang) is None

    def _items_for(self, lang: Lang) -> AcceleratorItems:
        items = self.items.get(lang)
        assert items is not None, f"accelerator table has no data for {lang!r}"
        return items

    def rc_header_extras(self, lang: Lang) -> str:
        return format_extra_info(self._items_for(lang).extra_info)

    def rc_body(self, lang: Lang) -> str:
        lines = ["{"]
        lines.extend(format_accelerator_line(id_val, event) for id_val, event in self._items_for(lang).events)
        lines.append("}")
        return "\n".join(lines) + "\n"


class AcceleratorBuilder(ExtraInfoBuilderMixin, ResourceBuilder):
    def __init__(self, resource_factory):
        super().__init__(AcceleratorData(), resource_factory)

    def event(self, id_val: Union[int, Id], event: Event) -> "AcceleratorBuilder":
        self.data.add_event(None, Id(id_val), event)
        return self

    def lang_specific_event(self, lang: Lang, id_val: Union[int, Id], event: Event) -> "AcceleratorBuilder":
        self.data.add_event(lang, Id(id_val), event)
        return self
