# resw/core/stringtable_util.py

from typing import List, Optional, Union

from .lang import Lang
from .resource_base import Id, ExtraInfo, LangSpecific, ResourceBuilder, ExtraInfoBuilderMixin
from .rc_text_util import escape_narrow_str, format_extra_info


class StringTableEntry:
    def __init__(self, id_val: Id, value_str: str):
        self.id_val: Id = id_val
        self.value_str: str = value_str

    def __repr__(self):
        return f"StringTableEntry(id={self.id_val}, value='{self.value_str[:30]}...')"


class StringTableItems:
    """All strings (and extra info) declared for one language, or universally."""

    def __init__(self):
        self.extra_info: Optional[ExtraInfo] = None
        self.entries: List[StringTableEntry] = []


class StringTableData:
    def __init__(self):
        # A language-specific block replaces the universal one entirely.
        self.items = LangSpecific()

    def access_items(self, lang: Optional[Lang]) -> StringTableItems:
        return self.items.access(lang, StringTableItems)

    def set_extra_info(self, lang: Optional[Lang], extra_info: ExtraInfo):
        self.access_items(lang).extra_info = extra_info

    def add_string(self, lang: Optional[Lang], id_val: Id, text: str):
        self.access_items(lang).entries.append(StringTableEntry(id_val, text))

    def is_missing_for_lang(self, lang: Lang) -> bool:
        return self.items.get(lang) is None

    def _items_for(self, lang: Lang) -> StringTableItems:
        items = self.items.get(lang)
        assert items is not None, f"string table has no data for {lang!r}"
        return items

    def rc_header_extras(self, lang: Lang) -> str:
        return format_extra_info(self._items_for(lang).extra_info)

    def rc_body(self, lang: Lang) -> str:
        return generate_stringtable_rc_body(self._items_for(lang).entries)


def generate_stringtable_rc_body(entries: List[StringTableEntry]) -> str:
    lines = ["{"]
    for entry in entries:
        lines.append(f"\t{entry.id_val}, {escape_narrow_str(entry.value_str)}")
    lines.append("}")
    return "\n".join(lines) + "\n"


class StringTableBuilder(ExtraInfoBuilderMixin, ResourceBuilder):
    def __init__(self, resource_factory):
        super().__init__(StringTableData(), resource_factory)

    def string(self, id_val: Union[int, Id], text: str) -> "StringTableBuilder":
        self.data.add_string(None, Id(id_val), str(text))
        return self

    def lang_specific_string(self, lang: Lang, id_val: Union[int, Id], text: str) -> "StringTableBuilder":
        self.data.add_string(lang, Id(id_val), str(text))
        return self
