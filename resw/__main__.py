# resw/__main__.py

import argparse
import logging
import os
import runpy
import sys
import typing

import pefile

from .core.build import Build
from .core.pe_parser import list_pe_resources
from .core.resource_types import get_resource_keyword
from .utils.external_tools import get_tool_path, run_windres_compile, WindresError
from .utils.image_utils import ImageConversionError

BUILD_FUNCTION_NAME = "build_resources"


def load_build(description_path: str) -> Build:
    """Runs a description script and returns the Build produced by its build_resources() function."""
    namespace = runpy.run_path(description_path, run_name="__resw_description__")
    build_function = namespace.get(BUILD_FUNCTION_NAME)
    if not callable(build_function):
        raise ValueError(f"{description_path} does not define a {BUILD_FUNCTION_NAME}() function")
    build = build_function()
    if not isinstance(build, Build):
        raise TypeError(f"{BUILD_FUNCTION_NAME}() in {description_path} returned {type(build).__name__}, not a Build")
    return build


def resolve_windres(explicit_path: typing.Optional[str]) -> str:
    windres_path = explicit_path or get_tool_path("windres")
    if os.path.exists(windres_path):
        print(f"INFO: Using windres from: {os.path.abspath(windres_path)}")
    else:
        print("WARNING: windres not found in RESW_WINDRES, data/bin or system PATH. Compiling to .res might fail.")
    return windres_path


def do_generate(ns: argparse.Namespace) -> typing.NoReturn:
    try:
        build = load_build(ns.description)
    except (OSError, ValueError, TypeError, ImageConversionError) as e:
        print(f"resw: Cannot load {ns.description}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        rc_path = build.generate_rc_file(ns.output)
    except OSError as e:
        print(f"resw: Cannot write {ns.output}: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"INFO: Wrote {rc_path} ({len(build.languages)} language(s))")

    if ns.compile is not None:
        windres_path = resolve_windres(ns.windres)
        try:
            run_windres_compile(rc_path, ns.compile, windres_path, include_paths=ns.include, language=ns.lang)
        except (WindresError, FileNotFoundError) as e:
            print(f"resw: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"INFO: Compiled {ns.compile}")

    sys.exit(0)


def do_inspect(ns: argparse.Namespace) -> typing.NoReturn:
    try:
        entries = list_pe_resources(ns.pe_file)
    except (OSError, pefile.PEFormatError) as e:
        print(f"resw: Cannot read {ns.pe_file}: {e}", file=sys.stderr)
        sys.exit(1)

    if not entries:
        print("No resources.")
    for entry in entries:
        name = entry.name_id if isinstance(entry.name_id, int) else repr(entry.name_id)
        print(f"{get_resource_keyword(entry.type_id)} {name}: LANGUAGE 0x{entry.lang.primary:x}, 0x{entry.lang.sub:x}, {entry.size} bytes")

    sys.exit(0)


def main() -> typing.NoReturn:
    """Entry point of the resw command. Always ends with sys.exit."""

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    ap = argparse.ArgumentParser(
        add_help=False,
        fromfile_prefix_chars="@",
        description="Generate Windows resource scripts (.rc) from Python resource descriptions.",
        allow_abbrev=False,
    )
    ap.add_argument("--help", action="help", help="Display this help message and exit.")

    subs = ap.add_subparsers(dest="subcommand", metavar="SUBCOMMAND")
    subs.required = True

    ap_generate = subs.add_parser("generate", add_help=False, help="Write the resource script of a description file, optionally compiling it.")
    ap_generate.add_argument("--help", action="help", help="Display this help message and exit.")
    ap_generate.add_argument("-o", "--output", default="resource.rc", help="The .rc file to write. Default: %(default)s")
    ap_generate.add_argument("--compile", metavar="RES_FILE", help="Also compile the script with windres into this .res file.")
    ap_generate.add_argument("--windres", metavar="PATH", help="The windres executable to use. Default: $RESW_WINDRES, data/bin or PATH.")
    ap_generate.add_argument("-I", "--include", metavar="DIR", action="append", default=[], help="Include directory for windres. Can be given multiple times.")
    ap_generate.add_argument("--lang", metavar="ID", type=lambda s: int(s, 0), help="Default language id passed to windres (e.g. 0x409).")
    ap_generate.add_argument("description", help="A Python file defining build_resources() -> Build.")

    ap_inspect = subs.add_parser("inspect", add_help=False, help="List the resources compiled into a PE file.")
    ap_inspect.add_argument("--help", action="help", help="Display this help message and exit.")
    ap_inspect.add_argument("pe_file", help="The .exe or .dll to inspect.")

    ns = ap.parse_args()

    if ns.subcommand == "generate":
        do_generate(ns)
    elif ns.subcommand == "inspect":
        do_inspect(ns)
    else:
        print(f"Unhandled subcommand: {ns.subcommand}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
