# resw/core/resource_types.py
import os
from typing import Any, Optional, Sequence, Tuple, Union

from .lang import Lang
from .resource_base import Id, IdOrName, Resource, RT_BITMAP, RT_CURSOR, RT_FONT, RT_HTML, RT_ICON, \
    RT_MESSAGETABLE, RT_STRING, RT_ACCELERATOR, RT_MENU, RT_DIALOG, RT_VERSION, RT_RCDATA
from .rc_text_util import format_resource_header, format_path_only_resource, format_id_or_name
from .stringtable_util import StringTableBuilder
from .accelerator_util import AcceleratorBuilder
from .menu_util import MenuBuilder
from .dialog_util import DialogBuilder
from .version_util import VersionInfoBuilder
from .rcdata_util import RcInlineBuilder, RcInlineData
from ..utils.image_utils import convert_image_to_icon, convert_image_to_bitmap

PathLike = Union[str, os.PathLike]


# --- Path-only resources ---

class PathResource(Resource):
    """A resource whose content is an external file; written the same way for every language."""

    def __init__(self, path: PathLike):
        self.path: str = os.fspath(path)

    @classmethod
    def from_file(cls, path: PathLike) -> "PathResource":
        return cls(path)

    def to_rc_text(self, lang: Lang, id_or_name: IdOrName) -> str:
        return format_path_only_resource(lang, id_or_name, self.TYPE_KEYWORD, self.path)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.path!r}>"


class Bitmap(PathResource):
    TYPE_KEYWORD = "BITMAP"; RT_TYPE_ID = RT_BITMAP

    @classmethod
    def from_image(cls, source_path: PathLike, bmp_path: PathLike) -> "Bitmap":
        """Converts any image Pillow can read into a .bmp and references the result."""
        return cls(convert_image_to_bitmap(source_path, bmp_path))


class Cursor(PathResource):
    TYPE_KEYWORD = "CURSOR"; RT_TYPE_ID = RT_CURSOR


class Font(PathResource):
    TYPE_KEYWORD = "FONT"; RT_TYPE_ID = RT_FONT


class HTML(PathResource):
    TYPE_KEYWORD = "HTML"; RT_TYPE_ID = RT_HTML


class Icon(PathResource):
    TYPE_KEYWORD = "ICON"; RT_TYPE_ID = RT_ICON

    @classmethod
    def from_image(cls, source_path: PathLike, ico_path: PathLike,
                   sizes: Optional[Sequence[Tuple[int, int]]] = None) -> "Icon":
        """Converts any image Pillow can read into a multi-size .ico and references the result."""
        return cls(convert_image_to_icon(source_path, ico_path, sizes))


class MessageTable(PathResource):
    TYPE_KEYWORD = "MESSAGETABLE"; RT_TYPE_ID = RT_MESSAGETABLE


# --- Builder-generated resources ---

class BuilderResource(Resource):
    """
    Resource whose data was accumulated by a builder. Each language either gets the full
    block (header, header extras, braces-delimited body) or nothing at all.
    """
    BUILDER_CLASS: Any = None
    IGNORES_ID: bool = False
    FIXED_ID: Optional[Id] = None

    def __init__(self, data: Any):
        self.data = data

    @classmethod
    def from_builder(cls):
        return cls.BUILDER_CLASS(cls)

    def to_rc_text(self, lang: Lang, id_or_name: IdOrName) -> str:
        if self.data.is_missing_for_lang(lang):
            return ""
        header = format_resource_header(lang, id_or_name, self.TYPE_KEYWORD,
                                        ignores_id=self.IGNORES_ID, fixed_id=self.FIXED_ID)
        return header + self.data.rc_header_extras(lang) + "\n" + self.data.rc_body(lang)


class StringTable(BuilderResource):
    TYPE_KEYWORD = "STRINGTABLE"; RT_TYPE_ID = RT_STRING
    BUILDER_CLASS = StringTableBuilder
    IGNORES_ID = True


class Accelerators(BuilderResource):
    TYPE_KEYWORD = "ACCELERATORS"; RT_TYPE_ID = RT_ACCELERATOR
    BUILDER_CLASS = AcceleratorBuilder


class Menu(BuilderResource):
    TYPE_KEYWORD = "MENUEX"; RT_TYPE_ID = RT_MENU
    BUILDER_CLASS = MenuBuilder


class Dialog(BuilderResource):
    TYPE_KEYWORD = "DIALOGEX"; RT_TYPE_ID = RT_DIALOG
    BUILDER_CLASS = DialogBuilder


class VersionInfo(BuilderResource):
    TYPE_KEYWORD = "VERSIONINFO"; RT_TYPE_ID = RT_VERSION
    BUILDER_CLASS = VersionInfoBuilder
    FIXED_ID = Id(1)


class RcInline(BuilderResource):
    TYPE_KEYWORD = "RCDATA"; RT_TYPE_ID = RT_RCDATA
    BUILDER_CLASS = RcInlineBuilder


class UserDefined(Resource):
    """
    A resource of an application-defined type: either inline items (like RCDATA)
    or the contents of an external file.
    """

    def __init__(self, type_id: Union[int, str, Id, IdOrName], data: Optional[RcInlineData] = None,
                 path: Optional[PathLike] = None):
        if (data is None) == (path is None):
            raise ValueError("UserDefined takes either inline data or a file path.")
        self.type_id: IdOrName = IdOrName(type_id)
        self.data: Optional[RcInlineData] = data
        self.path: Optional[str] = os.fspath(path) if path is not None else None

    @property
    def TYPE_KEYWORD(self) -> str:
        return format_id_or_name(self.type_id)

    @classmethod
    def from_builder(cls, type_id: Union[int, str, Id, IdOrName]) -> RcInlineBuilder:
        type_id = IdOrName(type_id)
        return RcInlineBuilder(lambda data: cls(type_id, data=data))

    @classmethod
    def from_file(cls, type_id: Union[int, str, Id, IdOrName], path: PathLike) -> "UserDefined":
        return cls(type_id, path=path)

    def to_rc_text(self, lang: Lang, id_or_name: IdOrName) -> str:
        if self.path is not None:
            return format_path_only_resource(lang, id_or_name, self.TYPE_KEYWORD, self.path)
        if self.data.is_missing_for_lang(lang):
            return ""
        header = format_resource_header(lang, id_or_name, self.TYPE_KEYWORD)
        return header + self.data.rc_header_extras(lang) + "\n" + self.data.rc_body(lang)


RESOURCE_TYPE_MAP = {
    cls.RT_TYPE_ID: cls for cls in (
        Bitmap, Cursor, Font, HTML, Icon, MessageTable,
        StringTable, Accelerators, Menu, Dialog, VersionInfo, RcInline,
    )
}


def get_resource_keyword(type_id: Union[int, str]) -> str:
    """RC keyword for a numeric RT_* type, or the type itself (quoted if it is a name)."""
    resource_class = RESOURCE_TYPE_MAP.get(type_id) if isinstance(type_id, int) else None
    if resource_class is not None:
        return resource_class.TYPE_KEYWORD
    return format_id_or_name(IdOrName(type_id))
