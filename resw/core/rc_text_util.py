# resw/core/rc_text_util.py

import logging
import os
from typing import Optional, Sequence, Union

from .lang import Lang
from .resource_base import Id, IdOrName, Rect, ExtraInfo, NOT_USEFUL_ID

logger = logging.getLogger(__name__)

RC_BANNER_LINES = (
    "// Resource script automatically generated by resw.",
    "// Do not edit this file manually.",
)
CP_UTF8 = 65001

ZERO_RECT = Rect(0, 0, 0, 0)

# Names the compiler would accept but that carry no meaning where an id is not written.
IGNORABLE_NAMES = ("", " ", "_")


def generate_header() -> str:
    return "\n".join(RC_BANNER_LINES) + "\n\n" + f"#pragma code_page({CP_UTF8})\n"


# --- String literals ---

def _needs_narrow_escape(char: str) -> bool:
    code = ord(char)
    return code <= 0x1F or code == 0x7F or char == "\\" or char == '"'


def escape_narrow_str(text: str) -> str:
    """
    Quotes text as a narrow RC string literal.
    Control characters, 0x7F, backslash and double quote become three-digit octal escapes;
    every other character (including non-ASCII, written out as UTF-8) passes through unchanged.
    """
    parts = ['"']
    for char in text:
        if _needs_narrow_escape(char):
            parts.append(f"\\{ord(char):03o}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def escape_wide_str(text: str) -> str:
    """
    Quotes text as a wide (L"...") RC string literal, working on UTF-16 code units.
    Printable ASCII passes through except backslash (doubled) and double quote;
    everything else becomes \\xHHHH.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    parts = ['L"']
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        if unit == 0x5C:
            parts.append("\\\\")
        elif 0x20 <= unit <= 0x7E and unit != 0x22:
            parts.append(chr(unit))
        else:
            parts.append(f"\\x{unit:04x}")
    parts.append('"')
    return "".join(parts)


def escape_str_prefer_narrow(text: str) -> str:
    if all(ord(char) < 0x80 for char in text):
        return escape_narrow_str(text)
    return escape_wide_str(text)


def resolve_resource_path(path: Union[str, os.PathLike]) -> str:
    """Relative paths are taken against the working directory at generation time."""
    return os.path.join(os.getcwd(), os.fspath(path))


def format_path_string(path: Union[str, os.PathLike]) -> str:
    return escape_str_prefer_narrow(resolve_resource_path(path))


# --- Numbers ---
# 32-bit quantities always carry the L suffix; 16-bit and smaller never do.

def format_word(value: int) -> str:
    return str(int(value))


def format_dword(value: int) -> str:
    return f"{int(value)}L"


def format_c_int(value: int) -> str:
    return f"{int(value)}L"


def format_rect(rect: Rect) -> str:
    return ", ".join(format_word(v) for v in rect)


def format_mandatory_rect(rect: Optional[Rect]) -> str:
    return format_rect(rect if rect is not None else ZERO_RECT)


def format_extra_info(extra_info: Optional[ExtraInfo]) -> str:
    if extra_info is None: return ""
    text = ""
    if extra_info.characteristics is not None:
        text += " " + format_dword(extra_info.characteristics)
    if extra_info.version is not None:
        text += " " + format_dword(extra_info.version)
    return text


def format_style_statement(style: Optional[int], ex_style: Optional[int]) -> str:
    statements = []
    if style is not None:
        statements.append(f"STYLE {format_dword(style)}")
    if ex_style is not None:
        statements.append(f"EXSTYLE {format_dword(ex_style)}")
    return "\n".join(statements)


def format_optional_fields(fields: Sequence[Optional[str]]) -> str:
    """
    Positional optional arguments: a ", " is written for every position up to the last
    present one, so absent middle fields leave an empty slot (e.g. ", , 2048L").
    """
    last = -1
    for i, field in enumerate(fields):
        if field is not None:
            last = i
    return "".join(", " + (field if field is not None else "") for field in fields[:last + 1])


# --- Identifiers and headers ---

def format_id_or_name(id_or_name: IdOrName) -> str:
    if id_or_name.is_id:
        return str(id_or_name.id)
    return escape_narrow_str(id_or_name.name)


def ensure_id_or_name_ignorable(id_or_name: IdOrName) -> bool:
    """Logs a warning when a meaningful identifier is about to be dropped."""
    if id_or_name.is_id:
        if id_or_name.id.value in (0, NOT_USEFUL_ID.value):
            return True
    elif id_or_name.name in IGNORABLE_NAMES:
        return True
    logger.warning("Expected ignorable id or name, found %r. Ignored.", id_or_name)
    return False


def format_language_statement(lang: Lang) -> str:
    return f"LANGUAGE 0x{lang.primary:x}, 0x{lang.sub:x}"


def format_resource_header(lang: Lang, id_or_name: IdOrName, type_keyword: str,
                           ignores_id: bool = False, fixed_id: Optional[Id] = None) -> str:
    """
    LANGUAGE line followed by "<id> <KEYWORD>".
    ignores_id: the kind has no identifier (STRINGTABLE); fixed_id: the kind always uses that id.
    """
    language_line = format_language_statement(lang) + "\n"
    if ignores_id:
        ensure_id_or_name_ignorable(id_or_name)
        return language_line + type_keyword
    if fixed_id is not None:
        if id_or_name != IdOrName(fixed_id):
            ensure_id_or_name_ignorable(id_or_name)
        return language_line + f"{fixed_id} {type_keyword}"
    return language_line + f"{format_id_or_name(id_or_name)} {type_keyword}"


def format_path_only_resource(lang: Lang, id_or_name: IdOrName, type_keyword: str,
                              path: Union[str, os.PathLike]) -> str:
    return format_resource_header(lang, id_or_name, type_keyword) + " " + format_path_string(path) + "\n"
