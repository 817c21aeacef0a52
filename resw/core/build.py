# resw/core/build.py

import io
import logging
import os
from typing import Dict, Iterable, List, Optional, TextIO, Tuple, Union

from .lang import Lang, LANG_ENU, PRESET_LANG_1, PRESET_LANG_9
from .resource_base import Id, IdOrName, Resource, ResourceBuilder, BuilderConsumedError
from .rc_text_util import generate_header
from ..utils.external_tools import get_tool_path, run_windres_compile

logger = logging.getLogger(__name__)

RC_FILENAME = "resource.rc"
RES_FILENAME = "resource.res"
OUT_DIR_ENV_VAR = "OUT_DIR"

PathLike = Union[str, os.PathLike]


class Build:
    """
    The resource document: for every configured language, the (identifier, resource) pairs
    in declaration order. Languages are written in sorted order.

    Serializing freezes the document; it can be serialized again, but no longer extended.
    """

    def __init__(self, languages: Iterable[Lang]):
        langs = sorted(set(languages))
        if not langs:
            raise ValueError("A Build needs at least one language.")
        for lang in langs:
            if not isinstance(lang, Lang):
                raise TypeError(f"Expected Lang, got {lang!r}")
        self.resources: Dict[Lang, List[Tuple[IdOrName, Resource]]] = {lang: [] for lang in langs}
        self._frozen = False

    # --- Presets ---
    @classmethod
    def with_one_language(cls) -> "Build":
        return cls(PRESET_LANG_1)

    @classmethod
    def with_two_languages(cls, lang: Lang) -> "Build":
        assert lang != LANG_ENU, "the second language must differ from English (US)"
        return cls([LANG_ENU, lang])

    @classmethod
    def with_one_or_two_languages(cls, lang: Lang) -> "Build":
        if lang == LANG_ENU:
            return cls.with_one_language()
        return cls.with_two_languages(lang)

    @classmethod
    def with_nine_languages(cls) -> "Build":
        return cls(PRESET_LANG_9)

    @property
    def languages(self) -> List[Lang]:
        return list(self.resources.keys())

    # --- Declaring resources ---
    def _check_open(self):
        if self._frozen:
            raise BuilderConsumedError("This Build was already serialized; resources can no longer be added.")

    @staticmethod
    def _check_resource(resource: Resource) -> Resource:
        if isinstance(resource, ResourceBuilder):
            raise TypeError(f"Got a {resource.__class__.__name__}; call build() on it first.")
        if not isinstance(resource, Resource):
            raise TypeError(f"Expected a Resource, got {resource!r}")
        return resource

    def resource(self, id_or_name: Union[int, str, Id, IdOrName], resource: Resource) -> "Build":
        """Declares a resource for every configured language."""
        self._check_open()
        id_or_name = IdOrName(id_or_name)
        resource = self._check_resource(resource)
        for resource_list in self.resources.values():
            resource_list.append((id_or_name, resource))
        return self

    def lang_specific_resource(self, lang: Lang, id_or_name: Union[int, str, Id, IdOrName],
                               resource: Resource) -> "Build":
        """Declares a resource for one configured language only."""
        self._check_open()
        if lang not in self.resources:
            raise ValueError(f"{lang!r} is not one of the languages of this Build: {self.languages}")
        self.resources[lang].append((IdOrName(id_or_name), self._check_resource(resource)))
        return self

    # --- Serialization ---
    def write_rc(self, stream: TextIO):
        """Writes the whole script to a text stream. Errors raised by the stream propagate unchanged."""
        self._frozen = True
        stream.write(generate_header())
        for lang, resource_list in self.resources.items():
            for id_or_name, resource in resource_list:
                stream.write(resource.to_rc_text(lang, id_or_name))

    def generate_rc_text(self) -> str:
        buffer = io.StringIO()
        self.write_rc(buffer)
        return buffer.getvalue()

    def generate_rc_file(self, path: PathLike) -> str:
        # newline="\n": the script is byte-identical on every platform.
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            self.write_rc(f)
        logger.info("Resource script written to %s", os.fspath(path))
        return os.fspath(path)

    # --- Compilation ---
    @staticmethod
    def compile_rc_file(rc_path: PathLike, res_path: Optional[PathLike] = None,
                        windres_path: Optional[str] = None,
                        include_paths: Optional[List[str]] = None) -> str:
        """
        Compiles an existing script with windres. res_path defaults to rc_path with a .res extension.
        Returns the path of the compiled file. Raises WindresError on failure.
        """
        rc_path = os.fspath(rc_path)
        if res_path is None:
            res_path = os.path.splitext(rc_path)[0] + ".res"
        res_path = os.fspath(res_path)
        if windres_path is None:
            windres_path = get_tool_path("windres")
        run_windres_compile(rc_path, res_path, windres_path, include_paths=include_paths)
        logger.info("Compiled %s to %s", rc_path, res_path)
        return res_path

    def compile(self, out_dir: Optional[PathLike] = None, windres_path: Optional[str] = None) -> str:
        """
        Writes resource.rc into out_dir (default: the OUT_DIR environment variable) and
        compiles it to resource.res next to it. Returns the path of resource.res.
        """
        if out_dir is None:
            out_dir = os.environ.get(OUT_DIR_ENV_VAR)
            if not out_dir:
                raise ValueError(f"No output directory given and {OUT_DIR_ENV_VAR} is not set.")
        rc_path = os.path.join(os.fspath(out_dir), RC_FILENAME)
        self.generate_rc_file(rc_path)
        return self.compile_rc_file(rc_path, os.path.join(os.fspath(out_dir), RES_FILENAME),
                                    windres_path=windres_path)
