import os
import unittest

from resw.core import rc_text_util
from resw.core.lang import LANG_ENU, LANG_DEU
from resw.core.resource_base import Id, IdOrName, MultiLangText, NOT_USEFUL_ID, RT_ICON, RT_RCDATA
from resw.core.rc_text_util import escape_str_prefer_narrow
from resw.core.accelerator_util import ASCIIKey, VirtKey, Modifier, ASCIIModifier, Event
from resw.core.menu_util import MenuType, MenuState
from resw.core.dialog_util import (
    DialogFont, ControlTemplate, DialogControl, FW_NORMAL, DEFAULT_CHARSET,
    WS_POPUP, WS_CAPTION, WS_SYSMENU, WS_CHILD, WS_VISIBLE, WS_BORDER, WS_EX_CLIENTEDGE,
    DS_MODALFRAME, ES_AUTOHSCROLL, SS_ICON, WC_LISTVIEW,
)
from resw.core.version_util import (
    SFI_PRODUCT_NAME, SFI_COMMENTS, VOS_NT_WINDOWS32, VFT_APP,
)
from resw.core.rcdata_util import U16, U32, Str, WStr
from resw.core.resource_types import (
    Icon, Bitmap, StringTable, Accelerators, Menu, Dialog, VersionInfo, RcInline, UserDefined,
    get_resource_keyword,
)

ENU_HEADER = "LANGUAGE 0x9, 0x1\n"
DEU_HEADER = "LANGUAGE 0x7, 0x1\n"


class PathResourceTests(unittest.TestCase):
    def test_icon(self) -> None:
        expected_path = escape_str_prefer_narrow(os.path.join(os.getcwd(), "app.ico"))
        self.assertEqual(Icon.from_file("app.ico").to_rc_text(LANG_ENU, IdOrName(1)),
                         ENU_HEADER + f"1 ICON {expected_path}\n")

    def test_same_output_for_every_language(self) -> None:
        bitmap = Bitmap.from_file("logo.bmp")
        self.assertEqual(bitmap.to_rc_text(LANG_ENU, IdOrName("LOGO")).split("\n", 1)[1],
                         bitmap.to_rc_text(LANG_DEU, IdOrName("LOGO")).split("\n", 1)[1])

    def test_keywords(self) -> None:
        self.assertEqual(get_resource_keyword(RT_ICON), "ICON")
        self.assertEqual(get_resource_keyword(RT_RCDATA), "RCDATA")
        self.assertEqual(get_resource_keyword(256), "256")
        self.assertEqual(get_resource_keyword("MYTYPE"), '"MYTYPE"')


class StringTableTests(unittest.TestCase):
    def test_basic(self) -> None:
        table = StringTable.from_builder().string(1, "OK").string(2, 'Say "hi"').build()
        self.assertEqual(table.to_rc_text(LANG_ENU, IdOrName(NOT_USEFUL_ID)),
                         ENU_HEADER + 'STRINGTABLE\n{\n\t1, "OK"\n\t2, "Say \\042hi\\042"\n}\n')

    def test_language_block_replaces_universal(self) -> None:
        table = (StringTable.from_builder()
                 .string(1, "OK").string(2, "Cancel")
                 .lang_specific_string(LANG_DEU, 1, "Ja")
                 .build())
        self.assertEqual(table.to_rc_text(LANG_DEU, IdOrName(NOT_USEFUL_ID)),
                         DEU_HEADER + 'STRINGTABLE\n{\n\t1, "Ja"\n}\n')
        self.assertIn('\t2, "Cancel"', table.to_rc_text(LANG_ENU, IdOrName(NOT_USEFUL_ID)))

    def test_missing_language(self) -> None:
        table = StringTable.from_builder().lang_specific_string(LANG_DEU, 1, "Ja").build()
        self.assertEqual(table.to_rc_text(LANG_ENU, IdOrName(NOT_USEFUL_ID)), "")

    def test_extra_info(self) -> None:
        table = StringTable.from_builder().extra_info(characteristics=3).string(1, "x").build()
        self.assertTrue(table.to_rc_text(LANG_ENU, IdOrName(0)).startswith(ENU_HEADER + "STRINGTABLE 3L\n{"))

    def test_meaningful_id_is_dropped_with_warning(self) -> None:
        table = StringTable.from_builder().string(1, "OK").build()
        with self.assertLogs(rc_text_util.logger, level="WARNING"):
            text = table.to_rc_text(LANG_ENU, IdOrName(5))
        self.assertEqual(text, ENU_HEADER + 'STRINGTABLE\n{\n\t1, "OK"\n}\n')


class AcceleratorTests(unittest.TestCase):
    def test_events(self) -> None:
        table = (Accelerators.from_builder()
                 .event(100, Event.virt_key_event(VirtKey.F5, Modifier.CTRL_SHIFT))
                 .event(101, Event.ascii_key_event("A", ASCIIModifier.ALT))
                 .event(102, Event.virt_key_event(VirtKey.LETTER_S, Modifier.CTRL))
                 .build())
        self.assertEqual(table.to_rc_text(LANG_ENU, IdOrName(10)), ENU_HEADER + (
            "10 ACCELERATORS\n"
            "{\n"
            "\t116, 100, VIRTKEY, CONTROL, SHIFT\n"
            "\t65, 101, ASCII, ALT\n"
            "\t83, 102, VIRTKEY, CONTROL\n"
            "}\n"
        ))

    def test_ascii_key_range(self) -> None:
        self.assertEqual(str(ASCIIKey(" ")), "32")
        self.assertEqual(str(ASCIIKey(126)), "126")
        for bad in (31, 127, "ab", "é"):
            with self.subTest(value=bad):
                with self.assertRaises(ValueError):
                    ASCIIKey(bad)

    def test_modifier_must_match_key_kind(self) -> None:
        with self.assertRaises(TypeError):
            Event(ASCIIKey("a"), Modifier.SHIFT)
        with self.assertRaises(TypeError):
            Event(VirtKey.F1, ASCIIModifier.CTRL)

    def test_noinvert_is_deprecated(self) -> None:
        with self.assertWarns(DeprecationWarning) as cm:
            event = Event.virt_key_event(VirtKey.DELETE).noinvert()
        self.assertEqual(os.path.basename(cm.filename), os.path.basename(__file__))
        table = Accelerators.from_builder().event(7, event).build()
        self.assertIn("\t46, 7, VIRTKEY, NOINVERT\n", table.to_rc_text(LANG_ENU, IdOrName(1)))

    def test_oem_key_names(self) -> None:
        self.assertEqual(VirtKey.OEM_NEC_EQUAL.code, 0x92)
        self.assertEqual(VirtKey.OEM_FJ_ROYA.code, 0x96)
        self.assertEqual(VirtKey.OEM_AX.code, 0xE1)
        self.assertEqual(VirtKey.ICO_CLEAR.code, 0xE6)
        self.assertEqual(VirtKey.OEM_BACKTAB.code, 0xF5)
        table = Accelerators.from_builder().event(1, Event.virt_key_event(VirtKey.OEM_PA1)).build()
        self.assertIn("\t235, 1, VIRTKEY\n", table.to_rc_text(LANG_ENU, IdOrName(1)))

    def test_language_override(self) -> None:
        table = (Accelerators.from_builder()
                 .event(1, Event.virt_key_event(VirtKey.F1))
                 .lang_specific_event(LANG_DEU, 2, Event.virt_key_event(VirtKey.F2))
                 .build())
        self.assertNotIn("\t112, 1, VIRTKEY", table.to_rc_text(LANG_DEU, IdOrName(1)))
        self.assertIn("\t113, 2, VIRTKEY", table.to_rc_text(LANG_DEU, IdOrName(1)))


class MenuTests(unittest.TestCase):
    def build_menu(self) -> Menu:
        return (Menu.from_builder()
                .popup("&File", lambda p: p
                       .item(100, "&Open")
                       .separator()
                       .item(101, MultiLangText("E&xit").lang(LANG_DEU, "&Beenden")))
                .complex_item(None, "Help", MenuType.RIGHT_JUSTIFY, MenuState.ENABLED)
                .build())

    def test_menu(self) -> None:
        self.assertEqual(self.build_menu().to_rc_text(LANG_ENU, IdOrName(1)), ENU_HEADER + (
            "1 MENUEX\n"
            "{\n"
            '\tPOPUP "&File"\n'
            "\t{\n"
            '\t\tMENUITEM "&Open", 100\n'
            '\t\tMENUITEM "", , 2048L\n'
            '\t\tMENUITEM "E&xit", 101\n'
            "\t}\n"
            '\tMENUITEM "Help", , 16384L\n'
            "}\n"
        ))

    def test_item_text_override(self) -> None:
        self.assertIn('\t\tMENUITEM "&Beenden", 101\n', self.build_menu().to_rc_text(LANG_DEU, IdOrName(1)))

    def test_complex_popup(self) -> None:
        def build_view(popup):
            popup.help_id(42)
            popup.complex_item(2, "Status bar", MenuType.STRING, MenuState.CHECKED | MenuState.DISABLED)

        menu = Menu.from_builder().complex_popup(5, "View", MenuType.STRING, MenuState.ENABLED, build_view).build()
        self.assertEqual(menu.to_rc_text(LANG_ENU, IdOrName("MAIN")), ENU_HEADER + (
            '"MAIN" MENUEX\n'
            "{\n"
            '\tPOPUP "View", 5, , , 42L\n'
            "\t{\n"
            '\t\tMENUITEM "Status bar", 2, , 11L\n'
            "\t}\n"
            "}\n"
        ))

    def test_item_missing_in_language(self) -> None:
        menu = (Menu.from_builder()
                .item(1, "Everywhere")
                .item(2, MultiLangText().lang(LANG_DEU, "Nur Deutsch"))
                .build())
        self.assertNotIn("Nur Deutsch", menu.to_rc_text(LANG_ENU, IdOrName(1)))
        self.assertIn('\tMENUITEM "Nur Deutsch", 2\n', menu.to_rc_text(LANG_DEU, IdOrName(1)))

    def test_text_edited_after_build_is_ignored(self) -> None:
        text = MultiLangText("Open")
        menu = Menu.from_builder().item(1, text).build()
        before = menu.to_rc_text(LANG_DEU, IdOrName(1))
        text.lang(LANG_DEU, "Oeffnen")
        self.assertEqual(menu.to_rc_text(LANG_DEU, IdOrName(1)), before)
        self.assertIn('\tMENUITEM "Open", 1\n', before)

    def test_menu_without_items_for_language(self) -> None:
        menu = Menu.from_builder().item(2, MultiLangText().lang(LANG_DEU, "Nur Deutsch")).build()
        self.assertEqual(menu.to_rc_text(LANG_ENU, IdOrName(1)), "")
        self.assertNotEqual(menu.to_rc_text(LANG_DEU, IdOrName(1)), "")


class DialogTests(unittest.TestCase):
    STYLE = WS_POPUP | WS_CAPTION | WS_SYSMENU | DS_MODALFRAME

    def build_dialog(self) -> Dialog:
        return (Dialog.from_builder()
                .rect(0, 0, 200, 100)
                .caption("About")
                .lang_specific_caption(LANG_DEU, "Info")
                .font(DialogFont(8, "MS Shell Dlg", FW_NORMAL, False, DEFAULT_CHARSET))
                .style(self.STYLE)
                .control(1, DialogControl(ControlTemplate.DEFPUSHBUTTON, "OK", (140, 80, 50, 14)))
                .lang_specific_control(LANG_DEU, 2, DialogControl(ControlTemplate.LTEXT, "Hallo", (10, 10, 100, 8)))
                .control(3, DialogControl(ControlTemplate.EDITTEXT, rect=(10, 30, 100, 12), style=ES_AUTOHSCROLL))
                .build())

    def test_dialog(self) -> None:
        self.assertEqual(self.build_dialog().to_rc_text(LANG_ENU, IdOrName(100)), ENU_HEADER + (
            "100 DIALOGEX 0, 0, 200, 100\n"
            'CAPTION "About"\n'
            'FONT 8, "MS Shell Dlg", 400, 0, 1\n'
            f"STYLE {self.STYLE}L\n"
            "{\n"
            '\tDEFPUSHBUTTON "OK", 1, 140, 80, 50, 14\n'
            "\tEDITTEXT 3, 10, 30, 100, 12, 128L\n"
            "}\n"
        ))

    def test_controls_merge_in_declaration_order(self) -> None:
        text = self.build_dialog().to_rc_text(LANG_DEU, IdOrName(100))
        self.assertIn('CAPTION "Info"\n', text)
        self.assertTrue(text.endswith(
            "{\n"
            '\tDEFPUSHBUTTON "OK", 1, 140, 80, 50, 14\n'
            '\tLTEXT "Hallo", 2, 10, 10, 100, 8\n'
            "\tEDITTEXT 3, 10, 30, 100, 12, 128L\n"
            "}\n"
        ))

    def test_header_statements(self) -> None:
        dialog = (Dialog.from_builder()
                  .help_id(7)
                  .extra_info(version=2)
                  .dialog_class("MyClass")
                  .menu(200)
                  .style(ex_style=WS_EX_CLIENTEDGE)
                  .build())
        self.assertEqual(dialog.to_rc_text(LANG_ENU, IdOrName(5)), ENU_HEADER + (
            "5 DIALOGEX 0, 0, 0, 0, 7L 2L\n"
            'CLASS "MyClass"\n'
            "MENU 200\n"
            "EXSTYLE 512L\n"
            "{\n"
            "}\n"
        ))

    def test_generic_control(self) -> None:
        style = WS_CHILD | WS_VISIBLE | WS_BORDER
        control = DialogControl(ControlTemplate.CONTROL, "", (10, 50, 100, 50), class_name=WC_LISTVIEW,
                                style=style, ex_style=WS_EX_CLIENTEDGE)
        self.assertEqual(control.to_rc_line(LANG_ENU, Id(4)),
                         f'\tCONTROL "", 4, "SysListView32", {style}L, 10, 50, 100, 50, 512L')

    def test_icon_control(self) -> None:
        icon = DialogControl(ControlTemplate.ICON, rect=(10, 10, 0, 0), resource_id=101)
        self.assertEqual(icon.to_rc_line(LANG_ENU, Id(5)), "\tICON 101, 5, 10, 10")
        styled = DialogControl(ControlTemplate.ICON, rect=(10, 10, 0, 0), resource_id="APP", style=SS_ICON)
        self.assertEqual(styled.to_rc_line(LANG_ENU, Id(5)), '\tICON "APP", 5, 10, 10, 0, 0, 3L')

    def test_control_validation(self) -> None:
        with self.assertRaises(ValueError):
            DialogControl(ControlTemplate.CONTROL, "x", (0, 0, 1, 1))
        with self.assertRaises(ValueError):
            DialogControl(ControlTemplate.LTEXT, "x", (0, 0, 1, 1), class_name="Static")
        with self.assertRaises(ValueError):
            DialogControl(ControlTemplate.EDITTEXT, "x", (0, 0, 1, 1))
        with self.assertRaises(TypeError):
            Dialog.from_builder().control(1, "not a control")

    def test_language_resolved_header_fields(self) -> None:
        dialog = (Dialog.from_builder()
                  .rect(0, 0, 10, 10)
                  .lang_specific_rect(LANG_DEU, 1, 1, 20, 20)
                  .help_id(3)
                  .lang_specific_help_id(LANG_DEU, 4)
                  .extra_info(characteristics=5)
                  .lang_specific_extra_info(LANG_DEU, characteristics=6, version=7)
                  .font(DialogFont(8, "A"))
                  .lang_specific_font(LANG_DEU, DialogFont(9, "B"))
                  .build())
        self.assertEqual(dialog.to_rc_text(LANG_ENU, IdOrName(1)), ENU_HEADER + (
            "1 DIALOGEX 0, 0, 10, 10, 3L 5L\n"
            'FONT 8, "A", 0, 0, 1\n'
            "{\n"
            "}\n"
        ))
        self.assertEqual(dialog.to_rc_text(LANG_DEU, IdOrName(1)), DEU_HEADER + (
            "1 DIALOGEX 1, 1, 20, 20, 4L 6L 7L\n"
            'FONT 9, "B", 0, 0, 1\n'
            "{\n"
            "}\n"
        ))

    def test_control_edited_after_build_is_ignored(self) -> None:
        text = MultiLangText("Name")
        control = DialogControl(ControlTemplate.LTEXT, text, (0, 0, 10, 10))
        dialog = Dialog.from_builder().control(1, control).lang_specific_control(LANG_DEU, 2, control).build()
        before = dialog.to_rc_text(LANG_DEU, IdOrName(1))
        text.lang(LANG_DEU, "Vorname")
        control.text.lang(LANG_DEU, "Nachname")
        control.rect = None
        self.assertEqual(dialog.to_rc_text(LANG_DEU, IdOrName(1)), before)
        self.assertIn('\tLTEXT "Name", 1, 0, 0, 10, 10\n\tLTEXT "Name", 2, 0, 0, 10, 10\n', before)

    def test_empty_dialog_is_missing(self) -> None:
        self.assertEqual(Dialog.from_builder().build().to_rc_text(LANG_ENU, IdOrName(1)), "")

    def test_language_only_control(self) -> None:
        dialog = Dialog.from_builder().lang_specific_control(
            LANG_DEU, 1, DialogControl(ControlTemplate.LTEXT, "Hallo", (0, 0, 10, 10))).build()
        self.assertEqual(dialog.to_rc_text(LANG_ENU, IdOrName(1)), "")
        self.assertIn('\tLTEXT "Hallo", 1, 0, 0, 10, 10\n', dialog.to_rc_text(LANG_DEU, IdOrName(1)))


class VersionInfoTests(unittest.TestCase):
    def build_version_info(self) -> VersionInfo:
        return (VersionInfo.from_builder()
                .file_version(1, 2, 3, 4)
                .product_version(1, 2)
                .file_flags(0)
                .file_os(VOS_NT_WINDOWS32)
                .file_type(VFT_APP)
                .string(SFI_PRODUCT_NAME, "Demo")
                .lang_specific_string(LANG_DEU, SFI_PRODUCT_NAME, "Demo DE")
                .string(SFI_COMMENTS, "hi")
                .build())

    def test_version_info(self) -> None:
        self.assertEqual(self.build_version_info().to_rc_text(LANG_ENU, IdOrName(1)), ENU_HEADER + (
            "1 VERSIONINFO\n"
            "FILEVERSION 1, 2, 3, 4\n"
            "PRODUCTVERSION 1, 2, 0, 0\n"
            "FILEFLAGSMASK 63L\n"
            "FILEFLAGS 0L\n"
            "FILEOS 262148L\n"
            "FILETYPE 1L\n"
            "{\n"
            '\tBLOCK "StringFileInfo"\n'
            "\t{\n"
            '\t\tBLOCK "040904b0"\n'
            "\t\t{\n"
            '\t\t\tVALUE "ProductName", "Demo"\n'
            '\t\t\tVALUE "ProductVersion", ""\n'
            '\t\t\tVALUE "FileDescription", ""\n'
            '\t\t\tVALUE "FileVersion", ""\n'
            '\t\t\tVALUE "InternalName", ""\n'
            '\t\t\tVALUE "OriginalFilename", ""\n'
            '\t\t\tVALUE "CompanyName", ""\n'
            '\t\t\tVALUE "Comments", "hi"\n'
            "\t\t}\n"
            "\t}\n"
            '\tBLOCK "VarFileInfo"\n'
            "\t{\n"
            '\t\tVALUE "Translation", 0x0409, 1200\n'
            "\t}\n"
            "}\n"
        ))

    def test_language_strings(self) -> None:
        text = self.build_version_info().to_rc_text(LANG_DEU, IdOrName(1))
        self.assertIn('\t\tBLOCK "040704b0"\n', text)
        self.assertIn('\t\t\tVALUE "ProductName", "Demo DE"\n', text)
        self.assertIn('\t\tVALUE "Translation", 0x0407, 1200\n', text)

    def test_id_is_always_one(self) -> None:
        with self.assertLogs(rc_text_util.logger, level="WARNING"):
            text = self.build_version_info().to_rc_text(LANG_ENU, IdOrName(7))
        self.assertTrue(text.startswith(ENU_HEADER + "1 VERSIONINFO\n"))

    def test_empty_is_missing(self) -> None:
        self.assertEqual(VersionInfo.from_builder().build().to_rc_text(LANG_ENU, IdOrName(1)), "")

    def test_unknown_key(self) -> None:
        with self.assertRaises(ValueError):
            VersionInfo.from_builder().string("Homepage", "x")

    def test_version_fields_are_words(self) -> None:
        with self.assertRaises(ValueError):
            VersionInfo.from_builder().file_version(0x10000)


class RcInlineTests(unittest.TestCase):
    def test_items(self) -> None:
        data = RcInline.from_builder().items(U16(1), U32(2), Str("a"), WStr("é")).build()
        self.assertEqual(data.to_rc_text(LANG_ENU, IdOrName(300)), ENU_HEADER + (
            "300 RCDATA\n"
            "{\n"
            "\t1,\n"
            "\t2L,\n"
            '\t"a",\n'
            '\tL"\\x00e9"\n'
            "}\n"
        ))

    def test_language_override(self) -> None:
        data = (RcInline.from_builder()
                .item(U16(1))
                .lang_specific_items(LANG_DEU, U16(2), U16(3))
                .lang_specific_extra_info(LANG_DEU, characteristics=9)
                .build())
        self.assertEqual(data.to_rc_text(LANG_DEU, IdOrName(1)),
                         DEU_HEADER + "1 RCDATA 9L\n{\n\t2,\n\t3\n}\n")
        self.assertEqual(data.to_rc_text(LANG_ENU, IdOrName(1)),
                         ENU_HEADER + "1 RCDATA\n{\n\t1\n}\n")

    def test_item_ranges(self) -> None:
        with self.assertRaises(ValueError):
            U16(0x10000)
        with self.assertRaises(ValueError):
            U32(-1)
        with self.assertRaises(TypeError):
            RcInline.from_builder().item(5)


class UserDefinedTests(unittest.TestCase):
    def test_inline(self) -> None:
        resource = UserDefined.from_builder(256).item(U16(7)).build()
        self.assertEqual(resource.to_rc_text(LANG_ENU, IdOrName(5)),
                         ENU_HEADER + "5 256\n{\n\t7\n}\n")

    def test_file(self) -> None:
        resource = UserDefined.from_file("MYTYPE", "data.bin")
        expected_path = escape_str_prefer_narrow(os.path.join(os.getcwd(), "data.bin"))
        self.assertEqual(resource.to_rc_text(LANG_ENU, IdOrName(5)),
                         ENU_HEADER + f'5 "MYTYPE" {expected_path}\n')

    def test_needs_exactly_one_source(self) -> None:
        with self.assertRaises(ValueError):
            UserDefined(256)


if __name__ == "__main__":
    unittest.main()
