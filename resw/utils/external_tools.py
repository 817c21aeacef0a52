# resw/utils/external_tools.py
import logging
import os
import shutil
import subprocess
from typing import Dict, Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)

# Environment variables that point straight at a tool binary.
TOOL_ENV_VARS: Dict[str, str] = {
    "windres": "RESW_WINDRES",
}

# <project root>/data/bin, where a development checkout can keep its own toolchain.
DATA_BIN_DIR = os.path.abspath(os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", "data", "bin"))


class WindresError(Exception):
    """windres could not be started or rejected the resource script."""
    pass


def _tool_candidates(tool_filename: str) -> Iterator[str]:
    env_var = TOOL_ENV_VARS.get(os.path.splitext(os.path.basename(tool_filename))[0].lower())
    env_path = os.environ.get(env_var) if env_var else None
    if env_path:
        if os.path.exists(env_path):
            yield env_path
        else:
            logger.warning("%s points to '%s', which does not exist. Ignoring it.", env_var, env_path)

    dev_path = os.path.join(DATA_BIN_DIR, tool_filename)
    if os.path.exists(dev_path):
        yield dev_path

    on_path = shutil.which(tool_filename)
    if on_path:
        yield on_path


def get_tool_path(tool_filename: str) -> str:
    """
    Locates an external tool: its environment variable (RESW_WINDRES for windres) first,
    then data/bin of the project, then PATH.
    Falls back to the bare tool_filename, so callers must still check that it exists.
    """
    return next(_tool_candidates(tool_filename), tool_filename)


def _windres_command(windres_path: str, rc_filepath: str, res_filepath: str,
                     include_paths: Sequence[str], language: Optional[int]) -> List[str]:
    command = [windres_path, "-i", rc_filepath, "-o", res_filepath, "--input-format=rc", "--output-format=res"]
    if language is not None:
        command += ["--language", str(language)]
    for include_dir in include_paths:
        if not os.path.isdir(include_dir):
            logger.warning("Include path '%s' does not exist. Skipping.", include_dir)
            continue
        command += ["-I", include_dir]
    return command


def run_windres_compile(rc_filepath: str, res_filepath: str, windres_path: str,
                        include_paths: Optional[List[str]] = None,
                        language: Optional[int] = None) -> bool:
    """
    Compiles a resource script into a .res file.

    language is the numeric LANGID handed to windres --language (e.g. 0x409);
    windres reads the script as UTF-8 because of its code_page pragma.

    Raises FileNotFoundError when the script is missing and WindresError when windres is
    missing, cannot be run, or exits with an error. Messages windres prints on success
    are logged as warnings.
    """
    if not os.path.exists(rc_filepath):
        raise FileNotFoundError(f"Resource script not found: {rc_filepath}")
    if not (os.path.exists(windres_path) and os.access(windres_path, os.X_OK)):
        raise WindresError(f"windres is missing or not executable: '{windres_path}'. "
                           f"Set RESW_WINDRES or put windres on PATH.")

    command = _windres_command(windres_path, rc_filepath, res_filepath, include_paths or [], language)
    command_line = " ".join(command)
    logger.info("Running %s", command_line)
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except OSError as e:
        raise WindresError(f"Cannot run '{command_line}': {e}") from e

    if result.returncode != 0:
        raise WindresError(
            f"windres failed with return code {result.returncode}.\n"
            f"Command: {command_line}\n"
            f"Stderr: {result.stderr.strip()}\n"
            f"Stdout: {result.stdout.strip()}"
        )
    if result.stderr:
        logger.warning("windres reported:\n%s", result.stderr.strip())
    return True
