# resw/core/rcdata_util.py

from typing import List, Optional

from .lang import Lang
from .resource_base import ExtraInfo, LangSpecific, ResourceBuilder, ExtraInfoBuilderMixin, check_word, check_dword
from .rc_text_util import escape_narrow_str, escape_wide_str, format_word, format_dword, format_extra_info


# --- Inline items ---

class RcInlineItem:
    def to_rc_text(self) -> str:
        raise NotImplementedError


class U16(RcInlineItem):
    def __init__(self, value: int):
        self.value = check_word(value, "U16 item")

    def to_rc_text(self) -> str:
        return format_word(self.value)

    def __repr__(self):
        return f"U16({self.value})"


class U32(RcInlineItem):
    def __init__(self, value: int):
        self.value = check_dword(value, "U32 item")

    def to_rc_text(self) -> str:
        return format_dword(self.value)

    def __repr__(self):
        return f"U32({self.value})"


class Str(RcInlineItem):
    """Narrow string; the compiler stores it without a terminating NUL."""

    def __init__(self, text: str):
        self.text = str(text)

    def to_rc_text(self) -> str:
        return escape_narrow_str(self.text)

    def __repr__(self):
        return f"Str({self.text!r})"


class WStr(RcInlineItem):
    def __init__(self, text: str):
        self.text = str(text)

    def to_rc_text(self) -> str:
        return escape_wide_str(self.text)

    def __repr__(self):
        return f"WStr({self.text!r})"


class RcInlineData:
    """extra_info and items both follow the override rule: a language's own item list replaces the universal one."""

    def __init__(self):
        self.extra_info = LangSpecific()
        self.items = LangSpecific()

    def set_extra_info(self, lang: Optional[Lang], extra_info: ExtraInfo):
        self.extra_info.insert(lang, extra_info)

    def add_item(self, lang: Optional[Lang], item: RcInlineItem):
        if not isinstance(item, RcInlineItem):
            raise TypeError(f"Expected U16, U32, Str or WStr, got {item!r}")
        self.items.access(lang, list).append(item)

    def is_missing_for_lang(self, lang: Lang) -> bool:
        return self.items.get(lang) is None

    def rc_header_extras(self, lang: Lang) -> str:
        return format_extra_info(self.extra_info.get(lang))

    def rc_body(self, lang: Lang) -> str:
        items: Optional[List[RcInlineItem]] = self.items.get(lang)
        assert items is not None, f"inline data has no items for {lang!r}"
        lines = ["{"]
        if items:
            lines.append(",\n".join("\t" + item.to_rc_text() for item in items))
        lines.append("}")
        return "\n".join(lines) + "\n"


class RcInlineBuilder(ExtraInfoBuilderMixin, ResourceBuilder):
    def __init__(self, resource_factory):
        super().__init__(RcInlineData(), resource_factory)

    def item(self, item: RcInlineItem) -> "RcInlineBuilder":
        self.data.add_item(None, item); return self

    def items(self, *items: RcInlineItem) -> "RcInlineBuilder":
        for item in items: self.data.add_item(None, item)
        return self

    def lang_specific_item(self, lang: Lang, item: RcInlineItem) -> "RcInlineBuilder":
        self.data.add_item(lang, item); return self

    def lang_specific_items(self, lang: Lang, *items: RcInlineItem) -> "RcInlineBuilder":
        for item in items: self.data.add_item(lang, item)
        return self
