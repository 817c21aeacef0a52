# resw/core/pe_parser.py

import logging
from collections import namedtuple
from typing import List, Union

import pefile # External library for PE parsing

from .lang import Lang

logger = logging.getLogger(__name__)

PeResourceEntry = namedtuple("PeResourceEntry", ["type_id", "name_id", "lang", "size"])


def _entry_id(entry) -> Union[int, str]:
    # Named entries carry a UnicodeStringWrapperPostProcessor; numbered ones only an id.
    if entry.name is not None:
        return str(entry.name)
    return int(entry.id)


def list_pe_resources(pe_filepath: str) -> List[PeResourceEntry]:
    """
    Lists the resources compiled into a PE (Portable Executable) file, e.g. to check that a
    generated script ended up in the binary with the expected languages.

    Returns one PeResourceEntry (type id or name, resource id or name, Lang, data size) per
    language entry of the resource directory, in directory order.
    Raises pefile.PEFormatError for files that are not PE images.
    """
    pe = pefile.PE(pe_filepath, fast_load=True)
    try:
        pe.parse_data_directories(directories=[pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_RESOURCE"]])
        if not hasattr(pe, "DIRECTORY_ENTRY_RESOURCE"):
            logger.info("No resource directory found in '%s'.", pe_filepath)
            return []

        entries: List[PeResourceEntry] = []
        for rt_entry in pe.DIRECTORY_ENTRY_RESOURCE.entries:
            if getattr(rt_entry, "directory", None) is None: continue
            res_type_id = _entry_id(rt_entry)

            for name_entry in rt_entry.directory.entries:
                if getattr(name_entry, "directory", None) is None: continue
                res_name_id = _entry_id(name_entry)

                for lang_entry in name_entry.directory.entries:
                    if lang_entry.data is None: continue
                    lang = Lang(lang_entry.data.lang, lang_entry.data.sublang)
                    entries.append(PeResourceEntry(res_type_id, res_name_id, lang, lang_entry.data.struct.Size))
        return entries
    finally:
        pe.close()
