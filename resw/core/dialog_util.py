# resw/core/dialog_util.py

import copy
from collections import namedtuple
from typing import List, Optional, Tuple, Union

from .lang import Lang
from .resource_base import (Id, IdOrName, Rect, ExtraInfo, LangSpecific, LangSpecificList, MultiLangText,
                            ResourceBuilder, ExtraInfoBuilderMixin, check_word, check_dword, check_int_range)
from .rc_text_util import (escape_narrow_str, format_word, format_dword, format_mandatory_rect,
                           format_extra_info, format_style_statement, format_optional_fields,
                           format_id_or_name)

# --- Window Styles (WS_, from WinUser.h) - Common subset ---
WS_OVERLAPPED = 0x00000000
WS_POPUP = 0x80000000
WS_CHILD = 0x40000000
WS_VISIBLE = 0x10000000
WS_DISABLED = 0x08000000
WS_CLIPSIBLINGS = 0x04000000
WS_CLIPCHILDREN = 0x02000000
WS_CAPTION = 0x00C00000
WS_BORDER = 0x00800000
WS_DLGFRAME = 0x00400000
WS_VSCROLL = 0x00200000
WS_HSCROLL = 0x00100000
WS_SYSMENU = 0x00080000
WS_THICKFRAME = 0x00040000
WS_GROUP = 0x00020000
WS_TABSTOP = 0x00010000
WS_MINIMIZEBOX = 0x00020000
WS_MAXIMIZEBOX = 0x00010000

WS_EX_DLGMODALFRAME = 0x00000001
WS_EX_NOPARENTNOTIFY = 0x00000004
WS_EX_TOPMOST = 0x00000008
WS_EX_ACCEPTFILES = 0x00000010
WS_EX_TRANSPARENT = 0x00000020
WS_EX_TOOLWINDOW = 0x00000080
WS_EX_WINDOWEDGE = 0x00000100
WS_EX_CLIENTEDGE = 0x00000200
WS_EX_CONTEXTHELP = 0x00000400
WS_EX_RIGHT = 0x00001000
WS_EX_RTLREADING = 0x00002000
WS_EX_LEFTSCROLLBAR = 0x00004000
WS_EX_CONTROLPARENT = 0x00010000
WS_EX_STATICEDGE = 0x00020000
WS_EX_APPWINDOW = 0x00040000
WS_EX_LAYOUTRTL = 0x00400000

# Dialog Styles (DS_)
DS_ABSALIGN = 0x01
DS_SYSMODAL = 0x02
DS_3DLOOK = 0x04
DS_FIXEDSYS = 0x08
DS_NOFAILCREATE = 0x10
DS_LOCALEDIT = 0x20
DS_SETFONT = 0x40
DS_MODALFRAME = 0x80
DS_NOIDLEMSG = 0x100
DS_SETFOREGROUND = 0x200
DS_CONTROL = 0x0400
DS_CENTER = 0x0800
DS_CENTERMOUSE = 0x1000
DS_CONTEXTHELP = 0x2000
DS_SHELLFONT = DS_SETFONT | DS_FIXEDSYS

# Control styles most often passed to CONTROL statements
BS_PUSHBUTTON = 0x0000; BS_DEFPUSHBUTTON = 0x0001; BS_CHECKBOX = 0x0002; BS_AUTOCHECKBOX = 0x0003
BS_RADIOBUTTON = 0x0004; BS_3STATE = 0x0005; BS_AUTO3STATE = 0x0006; BS_GROUPBOX = 0x0007
BS_AUTORADIOBUTTON = 0x0009; BS_OWNERDRAW = 0x000B; BS_SPLITBUTTON = 0x000C; BS_COMMANDLINK = 0x000E
ES_LEFT = 0x0000; ES_CENTER = 0x0001; ES_RIGHT = 0x0002; ES_MULTILINE = 0x0004; ES_PASSWORD = 0x0020
ES_AUTOVSCROLL = 0x0040; ES_AUTOHSCROLL = 0x0080; ES_READONLY = 0x0800; ES_WANTRETURN = 0x1000
ES_NUMBER = 0x2000
SS_LEFT = 0x0000; SS_CENTER = 0x0001; SS_RIGHT = 0x0002; SS_ICON = 0x0003; SS_BITMAP = 0x000E
SS_ETCHEDHORZ = 0x0010; SS_ETCHEDVERT = 0x0011; SS_NOTIFY = 0x0100; SS_CENTERIMAGE = 0x0200
SS_REALSIZEIMAGE = 0x0800; SS_SUNKEN = 0x1000
LBS_NOTIFY = 0x0001; LBS_SORT = 0x0002; LBS_MULTIPLESEL = 0x0008; LBS_HASSTRINGS = 0x0040
LBS_NOINTEGRALHEIGHT = 0x0100; LBS_EXTENDEDSEL = 0x0800
CBS_SIMPLE = 0x0001; CBS_DROPDOWN = 0x0002; CBS_DROPDOWNLIST = 0x0003; CBS_AUTOHSCROLL = 0x0040
CBS_SORT = 0x0100; CBS_HASSTRINGS = 0x0200
SBS_HORZ = 0x0000; SBS_VERT = 0x0001

# Common control class names for CONTROL statements
WC_BUTTON = "Button"
WC_EDIT = "Edit"
WC_STATIC = "Static"
WC_LISTBOX = "ListBox"
WC_COMBOBOX = "ComboBox"
WC_SCROLLBAR = "ScrollBar"
WC_LISTVIEW = "SysListView32"
WC_TREEVIEW = "SysTreeView32"
WC_TABCONTROL = "SysTabControl32"
WC_PROGRESS = "msctls_progress32"
WC_TRACKBAR = "msctls_trackbar32"
WC_UPDOWN = "msctls_updown32"
WC_DATETIMEPICK = "SysDateTimePick32"
WC_MONTHCAL = "SysMonthCal32"
WC_IPADDRESS = "SysIPAddress32"
WC_LINK = "SysLink"

# --- Fonts (WinGDI.h) ---
FW_DONTCARE = 0
FW_THIN = 100
FW_EXTRALIGHT = 200
FW_LIGHT = 300
FW_NORMAL = 400
FW_MEDIUM = 500
FW_SEMIBOLD = 600
FW_BOLD = 700
FW_EXTRABOLD = 800
FW_HEAVY = 900

ANSI_CHARSET = 0
DEFAULT_CHARSET = 1
SYMBOL_CHARSET = 2
MAC_CHARSET = 77
SHIFTJIS_CHARSET = 128
HANGEUL_CHARSET = 129
HANGUL_CHARSET = 129
JOHAB_CHARSET = 130
GB2312_CHARSET = 134
CHINESEBIG5_CHARSET = 136
GREEK_CHARSET = 161
TURKISH_CHARSET = 162
VIETNAMESE_CHARSET = 163
HEBREW_CHARSET = 177
ARABIC_CHARSET = 178
BALTIC_CHARSET = 186
RUSSIAN_CHARSET = 204
THAI_CHARSET = 222
EASTEUROPE_CHARSET = 238
OEM_CHARSET = 255


class DialogFont(namedtuple("DialogFont", ["pointsize", "typeface", "weight", "italic", "charset"])):
    """FONT statement of a DIALOGEX: point size, typeface, weight, italic flag, charset."""
    __slots__ = ()

    def __new__(cls, pointsize: int, typeface: str, weight: int = FW_DONTCARE, italic: bool = False,
                charset: int = DEFAULT_CHARSET):
        check_word(pointsize, "font point size")
        check_word(weight, "font weight")
        check_int_range(charset, 0, 0xFF, "font charset")
        return super().__new__(cls, pointsize, str(typeface), weight, bool(italic), charset)

    def to_rc_text(self) -> str:
        return (f"FONT {format_word(self.pointsize)}, {escape_narrow_str(self.typeface)}, "
                f"{format_word(self.weight)}, {int(self.italic)}, {format_word(self.charset)}")


# --- Control templates ---

class ControlTemplate(namedtuple("ControlTemplate", ["name", "use_text", "use_size", "class_keyword"])):
    """
    The statement keyword a control is written with.
    class_keyword is the window class the keyword implies; None means the generic CONTROL
    statement, which spells out class name and style explicitly.
    """
    __slots__ = ()


ControlTemplate.CONTROL = ControlTemplate("CONTROL", True, True, None)
ControlTemplate.AUTO3STATE = ControlTemplate("AUTO3STATE", True, True, "BUTTON")
ControlTemplate.AUTOCHECKBOX = ControlTemplate("AUTOCHECKBOX", True, True, "BUTTON")
ControlTemplate.AUTORADIOBUTTON = ControlTemplate("AUTORADIOBUTTON", True, True, "BUTTON")
ControlTemplate.CHECKBOX = ControlTemplate("CHECKBOX", True, True, "BUTTON")
ControlTemplate.COMBOBOX = ControlTemplate("COMBOBOX", False, True, "COMBOBOX")
ControlTemplate.CTEXT = ControlTemplate("CTEXT", True, True, "STATIC")
ControlTemplate.DEFPUSHBUTTON = ControlTemplate("DEFPUSHBUTTON", True, True, "BUTTON")
ControlTemplate.EDITTEXT = ControlTemplate("EDITTEXT", False, True, "EDIT")
ControlTemplate.GROUPBOX = ControlTemplate("GROUPBOX", True, True, "BUTTON")
ControlTemplate.ICON = ControlTemplate("ICON", True, False, "STATIC")
ControlTemplate.LISTBOX = ControlTemplate("LISTBOX", False, True, "LISTBOX")
ControlTemplate.LTEXT = ControlTemplate("LTEXT", True, True, "STATIC")
ControlTemplate.PUSHBOX = ControlTemplate("PUSHBOX", True, True, "BUTTON")
ControlTemplate.PUSHBUTTON = ControlTemplate("PUSHBUTTON", True, True, "BUTTON")
ControlTemplate.RADIOBUTTON = ControlTemplate("RADIOBUTTON", True, True, "BUTTON")
ControlTemplate.RTEXT = ControlTemplate("RTEXT", True, True, "STATIC")
ControlTemplate.SCROLLBAR = ControlTemplate("SCROLLBAR", False, True, "SCROLLBAR")
ControlTemplate.STATE3 = ControlTemplate("STATE3", True, True, "BUTTON")


def _coerce_rect(rect) -> Optional[Rect]:
    if rect is None or isinstance(rect, Rect): return rect
    return Rect(*rect)


class DialogControl:
    """
    One control of a dialog. The text is either display text (str / MultiLangText, resolved per
    language) or, for image statics such as ICON, the identifier of the image resource.
    """

    def __init__(self, template: ControlTemplate,
                 text: Optional[Union[str, MultiLangText]] = None,
                 rect: Optional[Union[Rect, Tuple[int, int, int, int]]] = None,
                 class_name: Optional[str] = None,
                 style: Optional[int] = None, ex_style: Optional[int] = None,
                 resource_id: Optional[Union[int, str, Id, IdOrName]] = None):
        if not isinstance(template, ControlTemplate):
            raise TypeError(f"Expected a ControlTemplate, got {template!r}")
        if text is not None and resource_id is not None:
            raise ValueError("A control takes either text or a resource id, not both.")
        if not template.use_text and (text is not None or resource_id is not None):
            raise ValueError(f"{template.name} controls carry no text.")
        if template.class_keyword is None and class_name is None:
            raise ValueError("CONTROL statements need an explicit class name.")
        if template.class_keyword is not None and class_name is not None:
            raise ValueError(f"{template.name} controls always use the {template.class_keyword} class.")

        self.template: ControlTemplate = template
        self.text: Optional[MultiLangText] = MultiLangText.coerce(text) if text is not None else None
        self.resource_id: Optional[IdOrName] = IdOrName(resource_id) if resource_id is not None else None
        self.rect: Optional[Rect] = _coerce_rect(rect)
        self.class_name: Optional[str] = class_name
        self.style: Optional[int] = check_dword(style, "control style") if style is not None else None
        self.ex_style: Optional[int] = check_dword(ex_style, "control extended style") if ex_style is not None else None

    def _text_field(self, lang: Lang) -> str:
        if self.resource_id is not None:
            return format_id_or_name(self.resource_id)
        text = self.text.get(lang) if self.text is not None else None
        return escape_narrow_str(text if text is not None else "")

    def to_rc_line(self, lang: Lang, id_val: Id) -> str:
        template = self.template
        fields: List[str] = []
        if template.use_text:
            fields.append(self._text_field(lang))
        fields.append(str(id_val))

        if template.class_keyword is None:
            # CONTROL text, id, class, style, x, y, cx, cy[, exstyle]
            fields.append(escape_narrow_str(self.class_name))
            fields.append(format_dword(self.style if self.style is not None else 0))
            trailing = [format_dword(self.ex_style) if self.ex_style is not None else None]
        else:
            trailing = [format_dword(self.style) if self.style is not None else None,
                        format_dword(self.ex_style) if self.ex_style is not None else None]

        rect = self.rect
        if template.use_size or any(field is not None for field in trailing):
            fields.append(format_mandatory_rect(rect))
        else:
            fields.append(f"{format_word(rect.x if rect else 0)}, {format_word(rect.y if rect else 0)}")

        return f"\t{template.name} {', '.join(fields)}{format_optional_fields(trailing)}"

    def copy(self) -> "DialogControl":
        other = copy.copy(self)
        if self.text is not None:
            other.text = self.text.copy()
        return other

    def __repr__(self):
        return f"DialogControl({self.template.name}, text={self.text!r}, rect={self.rect})"


# --- Dialog data ---

class DialogData:
    """
    Per-language fields follow the override rule; controls follow the merge rule
    (universal and language-specific controls are written together, in declaration order).
    """

    def __init__(self):
        self.rect = LangSpecific()
        self.help_id = LangSpecific()
        self.extra_info = LangSpecific()
        self.caption = LangSpecific()
        self.font = LangSpecific()
        self.dialog_class: Optional[IdOrName] = None
        self.menu: Optional[IdOrName] = None
        self.style: Optional[int] = None
        self.ex_style: Optional[int] = None
        self.controls = LangSpecificList()

    def set_extra_info(self, lang: Optional[Lang], extra_info: ExtraInfo):
        self.extra_info.insert(lang, extra_info)

    def is_missing_for_lang(self, lang: Lang) -> bool:
        for field in (self.rect, self.help_id, self.extra_info, self.caption, self.font):
            if field.get(lang) is not None:
                return False
        if any(True for _ in self.controls.iter(lang)):
            return False
        return (self.dialog_class is None and self.menu is None
                and self.style is None and self.ex_style is None)

    def rc_header_extras(self, lang: Lang) -> str:
        text = " " + format_mandatory_rect(self.rect.get(lang))
        help_id = self.help_id.get(lang)
        if help_id is not None:
            text += ", " + format_dword(help_id)
        text += format_extra_info(self.extra_info.get(lang))

        statements: List[str] = []
        caption = self.caption.get(lang)
        if caption is not None:
            statements.append(f"CAPTION {escape_narrow_str(caption)}")
        if self.dialog_class is not None:
            statements.append(f"CLASS {format_id_or_name(self.dialog_class)}")
        font = self.font.get(lang)
        if font is not None:
            statements.append(font.to_rc_text())
        if self.menu is not None:
            statements.append(f"MENU {format_id_or_name(self.menu)}")
        style_statement = format_style_statement(self.style, self.ex_style)
        if style_statement:
            statements.append(style_statement)

        for statement in statements:
            text += "\n" + statement
        return text

    def rc_body(self, lang: Lang) -> str:
        lines = ["{"]
        lines.extend(control.to_rc_line(lang, id_val) for id_val, control in self.controls.iter(lang))
        lines.append("}")
        return "\n".join(lines) + "\n"


class DialogBuilder(ExtraInfoBuilderMixin, ResourceBuilder):
    def __init__(self, resource_factory):
        super().__init__(DialogData(), resource_factory)

    # Language-resolved header fields
    def rect(self, x: int, y: int, width: int, height: int) -> "DialogBuilder":
        self.data.rect.insert_universal(Rect(x, y, width, height)); return self

    def lang_specific_rect(self, lang: Lang, x: int, y: int, width: int, height: int) -> "DialogBuilder":
        self.data.rect.insert_specific(lang, Rect(x, y, width, height)); return self

    def help_id(self, help_id: int) -> "DialogBuilder":
        self.data.help_id.insert_universal(check_dword(help_id, "dialog help id")); return self

    def lang_specific_help_id(self, lang: Lang, help_id: int) -> "DialogBuilder":
        self.data.help_id.insert_specific(lang, check_dword(help_id, "dialog help id")); return self

    def caption(self, text: str) -> "DialogBuilder":
        self.data.caption.insert_universal(str(text)); return self

    def lang_specific_caption(self, lang: Lang, text: str) -> "DialogBuilder":
        self.data.caption.insert_specific(lang, str(text)); return self

    def font(self, font: DialogFont) -> "DialogBuilder":
        self.data.font.insert_universal(font); return self

    def lang_specific_font(self, lang: Lang, font: DialogFont) -> "DialogBuilder":
        self.data.font.insert_specific(lang, font); return self

    # Fields shared by every language
    def dialog_class(self, class_id_or_name: Union[int, str, Id, IdOrName]) -> "DialogBuilder":
        self.data.dialog_class = IdOrName(class_id_or_name); return self

    def menu(self, menu_id_or_name: Union[int, str, Id, IdOrName]) -> "DialogBuilder":
        self.data.menu = IdOrName(menu_id_or_name); return self

    def style(self, style: Optional[int] = None, ex_style: Optional[int] = None) -> "DialogBuilder":
        if style is not None: self.data.style = check_dword(style, "dialog style")
        if ex_style is not None: self.data.ex_style = check_dword(ex_style, "dialog extended style")
        return self

    # Controls
    @staticmethod
    def _checked_control(control: DialogControl) -> DialogControl:
        if not isinstance(control, DialogControl):
            raise TypeError(f"Expected a DialogControl, got {control!r}")
        return control.copy()

    def control(self, id_val: Union[int, Id], control: DialogControl) -> "DialogBuilder":
        self.data.controls.insert_universal((Id(id_val), self._checked_control(control))); return self

    def lang_specific_control(self, lang: Lang, id_val: Union[int, Id], control: DialogControl) -> "DialogBuilder":
        self.data.controls.insert_specific(lang, (Id(id_val), self._checked_control(control))); return self
