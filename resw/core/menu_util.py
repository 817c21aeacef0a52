# resw/core/menu_util.py

import enum
from typing import Callable, List, Optional, Union

from .lang import Lang
from .resource_base import Id, MultiLangText, ResourceBuilder, check_c_int
from .rc_text_util import escape_narrow_str, format_dword, format_c_int, format_optional_fields

# --- Windows API Menu Flags (MENUEX) ---
# dwType
MFT_STRING = 0x00000000
MFT_BITMAP = 0x00000004
MFT_MENUBARBREAK = 0x00000020
MFT_MENUBREAK = 0x00000040
MFT_OWNERDRAW = 0x00000100
MFT_RADIOCHECK = 0x00000200
MFT_SEPARATOR = 0x00000800
MFT_RIGHTORDER = 0x00002000
MFT_RIGHTJUSTIFY = 0x00004000

# dwState
MFS_ENABLED = 0x00000000
MFS_GRAYED = 0x00000003
MFS_DISABLED = MFS_GRAYED
MFS_CHECKED = 0x00000008
MFS_HILITE = 0x00000080
MFS_DEFAULT = 0x00001000


class MenuType(enum.IntFlag):
    STRING = MFT_STRING
    BITMAP = MFT_BITMAP
    MENUBAR_BREAK = MFT_MENUBARBREAK
    MENU_BREAK = MFT_MENUBREAK
    OWNER_DRAW = MFT_OWNERDRAW
    RADIO_CHECK = MFT_RADIOCHECK
    SEPARATOR = MFT_SEPARATOR
    RIGHT_ORDER = MFT_RIGHTORDER
    RIGHT_JUSTIFY = MFT_RIGHTJUSTIFY


class MenuState(enum.IntFlag):
    ENABLED = MFS_ENABLED
    DISABLED = MFS_DISABLED
    CHECKED = MFS_CHECKED
    HIGHLIGHTED = MFS_HILITE
    DEFAULT_ITEM = MFS_DEFAULT


class PopupData:
    def __init__(self):
        self.help_id: Optional[int] = None
        self.items: List["MenuItemEntry"] = []


class MenuItemEntry:
    """One MENUITEM or, when popup is set, one POPUP with its nested items."""

    def __init__(self, id_val: Optional[Id], text: MultiLangText,
                 menu_type: MenuType = MenuType.STRING, state: MenuState = MenuState.ENABLED,
                 popup: Optional[PopupData] = None):
        self.id_val: Optional[Id] = id_val
        self.text: MultiLangText = text
        self.menu_type: MenuType = MenuType(menu_type)
        self.state: MenuState = MenuState(state)
        self.popup: Optional[PopupData] = popup

    def __repr__(self):
        kind = "POPUP" if self.popup is not None else "MENUITEM"
        return (f"MenuItemEntry({kind}, id={self.id_val}, text={self.text!r}, "
                f"type=0x{int(self.menu_type):X}, state=0x{int(self.state):X})")


def _format_menu_item_line(item: MenuItemEntry, text: str, indent: str) -> str:
    kind = "POPUP" if item.popup is not None else "MENUITEM"
    help_id = item.popup.help_id if item.popup is not None else None
    optional_fields = [
        str(item.id_val) if item.id_val is not None else None,
        format_dword(item.menu_type) if item.menu_type != MenuType.STRING else None,
        format_dword(item.state) if item.state != MenuState.ENABLED else None,
        format_c_int(help_id) if help_id is not None else None,
    ]
    return f"{indent}{kind} {escape_narrow_str(text)}{format_optional_fields(optional_fields)}"


def _generate_menu_items_rc(items: List[MenuItemEntry], lang: Lang, indent_level: int) -> List[str]:
    rc_lines: List[str] = []; indent = "\t" * indent_level
    for item in items:
        text = item.text.get(lang)
        if text is None: continue  # item does not exist in this language

        rc_lines.append(_format_menu_item_line(item, text, indent))
        if item.popup is not None:
            rc_lines.append(f"{indent}{{")
            rc_lines.extend(_generate_menu_items_rc(item.popup.items, lang, indent_level + 1))
            rc_lines.append(f"{indent}}}")
    return rc_lines


def generate_menu_rc_body(items: List[MenuItemEntry], lang: Lang) -> str:
    lines = ["{"]
    lines.extend(_generate_menu_items_rc(items, lang, 1))
    lines.append("}")
    return "\n".join(lines) + "\n"


class MenuData:
    def __init__(self):
        self.items: List[MenuItemEntry] = []

    def is_missing_for_lang(self, lang: Lang) -> bool:
        return all(item.text.get(lang) is None for item in self.items)

    def rc_header_extras(self, lang: Lang) -> str:
        return ""

    def rc_body(self, lang: Lang) -> str:
        return generate_menu_rc_body(self.items, lang)


# --- Builders ---

class MenuItemsBuilderMixin:
    """Item-adding methods shared by the top-level menu and by popups. Subclasses provide _items()."""

    def _items(self) -> List[MenuItemEntry]:
        raise NotImplementedError

    def _build_popup(self, popup_building: Callable[["PopupBuilder"], Optional["PopupBuilder"]]) -> PopupData:
        popup_builder = PopupBuilder()
        result = popup_building(popup_builder)
        return (result if result is not None else popup_builder).popup_data

    def item(self, id_val: Union[int, Id], text: Union[str, MultiLangText]):
        self._items().append(MenuItemEntry(Id(id_val), MultiLangText.coerce(text)))
        return self

    def popup(self, text: Union[str, MultiLangText],
              popup_building: Callable[["PopupBuilder"], Optional["PopupBuilder"]]):
        self._items().append(MenuItemEntry(None, MultiLangText.coerce(text),
                                           popup=self._build_popup(popup_building)))
        return self

    def separator(self):
        # An empty universal text keeps separators visible in every language.
        self._items().append(MenuItemEntry(None, MultiLangText(""), menu_type=MenuType.SEPARATOR))
        return self

    def complex_item(self, id_val: Optional[Union[int, Id]], text: Union[str, MultiLangText],
                     menu_type: MenuType = MenuType.STRING, state: MenuState = MenuState.ENABLED):
        id_val = Id(id_val) if id_val is not None else None
        self._items().append(MenuItemEntry(id_val, MultiLangText.coerce(text), menu_type, state))
        return self

    def complex_popup(self, id_val: Optional[Union[int, Id]], text: Union[str, MultiLangText],
                      menu_type: MenuType, state: MenuState,
                      popup_building: Callable[["PopupBuilder"], Optional["PopupBuilder"]]):
        id_val = Id(id_val) if id_val is not None else None
        self._items().append(MenuItemEntry(id_val, MultiLangText.coerce(text), menu_type, state,
                                           popup=self._build_popup(popup_building)))
        return self


class PopupBuilder(MenuItemsBuilderMixin):
    def __init__(self):
        self.popup_data = PopupData()

    def _items(self) -> List[MenuItemEntry]:
        return self.popup_data.items

    def help_id(self, help_id: int) -> "PopupBuilder":
        self.popup_data.help_id = check_c_int(help_id, "popup help id")
        return self


class MenuBuilder(MenuItemsBuilderMixin, ResourceBuilder):
    def __init__(self, resource_factory):
        super().__init__(MenuData(), resource_factory)

    def _items(self) -> List[MenuItemEntry]:
        return self.data.items
