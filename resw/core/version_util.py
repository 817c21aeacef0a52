# resw/core/version_util.py

from collections import namedtuple
from typing import Dict, List, Optional

from .lang import Lang
from .resource_base import LangSpecific, ResourceBuilder, check_word, check_dword
from .rc_text_util import escape_narrow_str, format_word, format_dword

# --- VS_FIXEDFILEINFO Flags (dwFileFlags) ---
VS_FF_DEBUG = 0x00000001
VS_FF_PRERELEASE = 0x00000002
VS_FF_PATCHED = 0x00000004
VS_FF_PRIVATEBUILD = 0x00000008
VS_FF_INFOINFERRED = 0x00000010
VS_FF_SPECIALBUILD = 0x00000020
VS_FFI_FILEFLAGSMASK = 0x0000003F

# dwFileOS
VOS_UNKNOWN = 0x00000000
VOS_DOS = 0x00010000
VOS_NT = 0x00040000
VOS__WINDOWS32 = 0x00000004
VOS_DOS_WINDOWS32 = 0x00010004
VOS_NT_WINDOWS32 = 0x00040004

# dwFileType
VFT_UNKNOWN = 0x00000000
VFT_APP = 0x00000001
VFT_DLL = 0x00000002
VFT_DRV = 0x00000003
VFT_FONT = 0x00000004
VFT_VXD = 0x00000005
VFT_STATIC_LIB = 0x00000007

# StringFileInfo keys
SFI_PRODUCT_NAME = "ProductName"
SFI_PRODUCT_VERSION = "ProductVersion"
SFI_FILE_DESCRIPTION = "FileDescription"
SFI_FILE_VERSION = "FileVersion"
SFI_INTERNAL_NAME = "InternalName"
SFI_ORIGINAL_FILENAME = "OriginalFilename"
SFI_COMPANY_NAME = "CompanyName"
SFI_LEGAL_COPYRIGHT = "LegalCopyright"
SFI_LEGAL_TRADEMARKS = "LegalTrademarks"
SFI_PRIVATE_BUILD = "PrivateBuild"
SFI_SPECIAL_BUILD = "SpecialBuild"
SFI_COMMENTS = "Comments"

# Always written, in this order.
BASE_STRING_KEYS = (
    SFI_PRODUCT_NAME, SFI_PRODUCT_VERSION, SFI_FILE_DESCRIPTION, SFI_FILE_VERSION,
    SFI_INTERNAL_NAME, SFI_ORIGINAL_FILENAME, SFI_COMPANY_NAME,
)
# Written only once declared.
OPTIONAL_STRING_KEYS = (
    SFI_LEGAL_COPYRIGHT, SFI_LEGAL_TRADEMARKS, SFI_PRIVATE_BUILD, SFI_SPECIAL_BUILD, SFI_COMMENTS,
)

CP_UNICODE = 1200  # the only string block charset we write


class Version(namedtuple("Version", ["major", "minor", "patch", "build"])):
    __slots__ = ()

    def __new__(cls, major: int, minor: int = 0, patch: int = 0, build: int = 0):
        for field_name, value in zip(cls._fields, (major, minor, patch, build)):
            check_word(value, f"version {field_name}")
        return super().__new__(cls, major, minor, patch, build)

    def to_rc_text(self) -> str:
        return ", ".join(format_word(v) for v in self)


class VersionInfoData:
    def __init__(self):
        self.fixed_file_version: Optional[Version] = None
        self.fixed_product_version: Optional[Version] = None
        self.fixed_file_flags: Optional[int] = None
        self.fixed_file_os: Optional[int] = None
        self.fixed_file_type: Optional[int] = None
        self.strings: Dict[str, LangSpecific] = {key: LangSpecific() for key in BASE_STRING_KEYS}

    def set_string(self, lang: Optional[Lang], key: str, value: str):
        if key not in BASE_STRING_KEYS and key not in OPTIONAL_STRING_KEYS:
            raise ValueError(f"Unknown version string key: {key!r}")
        if key not in self.strings:
            self.strings[key] = LangSpecific()
        self.strings[key].insert(lang, str(value))

    def _participating_keys(self) -> List[str]:
        return [key for key in BASE_STRING_KEYS + OPTIONAL_STRING_KEYS if key in self.strings]

    def _has_fixed_info(self) -> bool:
        return any(value is not None for value in (
            self.fixed_file_version, self.fixed_product_version, self.fixed_file_flags,
            self.fixed_file_os, self.fixed_file_type))

    def is_missing_for_lang(self, lang: Lang) -> bool:
        if self._has_fixed_info():
            return False
        return all(values.get(lang) is None for values in self.strings.values())

    def rc_header_extras(self, lang: Lang) -> str:
        statements: List[str] = []
        if self.fixed_file_version is not None:
            statements.append(f"FILEVERSION {self.fixed_file_version.to_rc_text()}")
        if self.fixed_product_version is not None:
            statements.append(f"PRODUCTVERSION {self.fixed_product_version.to_rc_text()}")
        if self.fixed_file_flags is not None:
            statements.append(f"FILEFLAGSMASK {format_dword(VS_FFI_FILEFLAGSMASK)}")
            statements.append(f"FILEFLAGS {format_dword(self.fixed_file_flags)}")
        if self.fixed_file_os is not None:
            statements.append(f"FILEOS {format_dword(self.fixed_file_os)}")
        if self.fixed_file_type is not None:
            statements.append(f"FILETYPE {format_dword(self.fixed_file_type)}")
        return "".join("\n" + statement for statement in statements)

    def rc_body(self, lang: Lang) -> str:
        lines: List[str] = ["{"]
        lines.append('\tBLOCK "StringFileInfo"'); lines.append("\t{")
        lines.append(f'\t\tBLOCK "{lang.langid:04x}{CP_UNICODE:04x}"'); lines.append("\t\t{")
        for key in self._participating_keys():
            value = self.strings[key].get(lang)
            lines.append(f'\t\t\tVALUE "{key}", {escape_narrow_str(value if value is not None else "")}')
        lines.append("\t\t}")
        lines.append("\t}")
        lines.append('\tBLOCK "VarFileInfo"'); lines.append("\t{")
        lines.append(f'\t\tVALUE "Translation", 0x{lang.langid:04x}, {CP_UNICODE}')
        lines.append("\t}")
        lines.append("}")
        return "\n".join(lines) + "\n"


class VersionInfoBuilder(ResourceBuilder):
    def __init__(self, resource_factory):
        super().__init__(VersionInfoData(), resource_factory)

    # --- VS_FIXEDFILEINFO ---
    def file_version(self, major: int, minor: int = 0, patch: int = 0, build: int = 0) -> "VersionInfoBuilder":
        self.data.fixed_file_version = Version(major, minor, patch, build); return self

    def product_version(self, major: int, minor: int = 0, patch: int = 0, build: int = 0) -> "VersionInfoBuilder":
        self.data.fixed_product_version = Version(major, minor, patch, build); return self

    def file_flags(self, flags: int) -> "VersionInfoBuilder":
        self.data.fixed_file_flags = check_dword(flags, "file flags"); return self

    def file_os(self, file_os: int) -> "VersionInfoBuilder":
        self.data.fixed_file_os = check_dword(file_os, "file OS"); return self

    def file_type(self, file_type: int) -> "VersionInfoBuilder":
        self.data.fixed_file_type = check_dword(file_type, "file type"); return self

    # --- StringFileInfo ---
    def string(self, key: str, value: str) -> "VersionInfoBuilder":
        """Sets a StringFileInfo value (key is one of the SFI_* names) for every language."""
        self.data.set_string(None, key, value); return self

    def lang_specific_string(self, lang: Lang, key: str, value: str) -> "VersionInfoBuilder":
        self.data.set_string(lang, key, value); return self
