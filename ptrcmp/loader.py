"""
ptrcmp/loader.py
════════════════

Getting compilation units out of Cppcheck.

  * :func:`load_cppcheckdata` finds the ``cppcheckdata`` module that ships
    with Cppcheck (it is not published on PyPI);
  * :func:`generate_dump` runs ``cppcheck --dump`` on one source file;
  * :func:`load_dump` parses a ``.dump`` file into its configurations;
  * :func:`discover` expands files and directories into inputs.

Every failure surfaces as :class:`DumpLoadError` or
:class:`DumpGenerationError`; callers decide whether to skip the file.
"""

from __future__ import annotations

import importlib.util
import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable, List, Optional, Sequence, Union

from ptrcmp.config import DEFAULT_SOURCE_SUFFIXES, DUMP_SUFFIX
from ptrcmp.errors import DumpGenerationError, DumpLoadError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Where Cppcheck installations keep their addon support files.
ADDON_DIRS: Sequence[str] = (
    "/usr/share/cppcheck/addons",
    "/usr/lib/cppcheck/addons",
    "/usr/local/share/cppcheck/addons",
    "/opt/homebrew/share/cppcheck/addons",
)

_cppcheckdata: Optional[ModuleType] = None


# ---------------------------------------------------------------------------
# Bootstrap: locate cppcheckdata
# ---------------------------------------------------------------------------

def _candidate_paths() -> List[Path]:
    dirs: List[str] = []
    env_dir = os.environ.get("CPPCHECK_ADDONS_DIR")
    if env_dir:
        dirs.append(env_dir)
    dirs.extend(ADDON_DIRS)
    return [Path(d) / "cppcheckdata.py" for d in dirs]


def load_cppcheckdata() -> ModuleType:
    """
    Return Cppcheck's ``cppcheckdata`` module.

    A regular import is tried first; otherwise the module is loaded from
    the addon directory of a Cppcheck installation (``$CPPCHECK_ADDONS_DIR``
    first, then the usual system locations).

    Raises
    ------
    DumpLoadError
        When no installation provides the module, or the module found
        fails to execute.
    """
    global _cppcheckdata
    if _cppcheckdata is not None:
        return _cppcheckdata

    try:
        import cppcheckdata  # type: ignore[import-not-found]
        _cppcheckdata = cppcheckdata
        return cppcheckdata
    except ImportError:
        pass

    for candidate in _candidate_paths():
        if not candidate.is_file():
            continue
        spec = importlib.util.spec_from_file_location("cppcheckdata", candidate)
        if spec is None or spec.loader is None:
            continue
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise DumpLoadError(
                f"cannot load cppcheckdata: {exc}", candidate
            ) from exc
        logger.debug("Loaded cppcheckdata from %s", candidate)
        _cppcheckdata = module
        return module

    raise DumpLoadError(
        "cannot locate cppcheckdata.py; install Cppcheck or set "
        "CPPCHECK_ADDONS_DIR to its addons directory"
    )


# ---------------------------------------------------------------------------
# Dump files
# ---------------------------------------------------------------------------

@dataclass
class DumpFile:
    """A parsed dump: its path and its preprocessor configurations."""
    path: Path
    configurations: List[Any] = field(default_factory=list)


def load_dump(path: PathLike) -> DumpFile:
    """
    Parse a Cppcheck dump file.

    Raises
    ------
    DumpLoadError
        The file is missing, cppcheckdata is unavailable, or parsing fails.
    """
    dump_path = Path(path)
    if not dump_path.is_file():
        raise DumpLoadError("dump file not found", dump_path)

    cppcheckdata = load_cppcheckdata()
    try:
        data = cppcheckdata.parsedump(str(dump_path))
    except Exception as exc:
        raise DumpLoadError(f"cannot parse dump: {exc}", dump_path) from exc

    configurations = list(getattr(data, "configurations", None) or [])
    logger.info("Loaded %s (%d configurations)", dump_path, len(configurations))
    return DumpFile(path=dump_path, configurations=configurations)


def dump_path_for(source: PathLike) -> Path:
    """Path cppcheck writes the dump of ``source`` to."""
    source = Path(source)
    return source.with_name(source.name + DUMP_SUFFIX)


def generate_dump(
    source: PathLike,
    cppcheck: str = "cppcheck",
    timeout: float = 60.0,
    extra_args: Sequence[str] = (),
) -> Path:
    """
    Run ``cppcheck --dump`` on one source file.

    Returns
    -------
    Path of the written dump (``<source>.dump``).

    Raises
    ------
    DumpGenerationError
        Cppcheck is missing, times out, fails, or writes no dump.
    """
    source = Path(source)
    dump_path = dump_path_for(source)
    cmd = [cppcheck, "--dump", "--quiet", *extra_args, str(source)]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise DumpGenerationError(
            f"cppcheck executable not found: {cppcheck}", source
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise DumpGenerationError(
            f"cppcheck timed out after {timeout:g}s", source
        ) from exc

    if result.returncode != 0:
        raise DumpGenerationError(
            f"cppcheck exited with status {result.returncode}",
            source,
            returncode=result.returncode,
            stderr=result.stderr or "",
        )
    if not dump_path.is_file():
        raise DumpGenerationError(
            "cppcheck did not produce a dump", source,
            returncode=result.returncode, stderr=result.stderr or "",
        )
    return dump_path


# ---------------------------------------------------------------------------
# Input discovery
# ---------------------------------------------------------------------------

def _is_input(path: Path, source_suffixes: Iterable[str]) -> bool:
    if path.name.endswith(DUMP_SUFFIX):
        return True
    return path.suffix.lower() in source_suffixes


def discover(
    paths: Iterable[PathLike],
    source_suffixes: Iterable[str] = DEFAULT_SOURCE_SUFFIXES,
) -> List[Path]:
    """
    Expand ``paths`` into dump files and C/C++ sources.

    Files are kept in the order given; directories are walked recursively
    with entries sorted so the result is deterministic.  A missing path
    is logged and skipped.
    """
    suffixes = frozenset(s.lower() for s in source_suffixes)
    found: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for root, dirs, files in os.walk(path):
                dirs.sort()
                for name in sorted(files):
                    candidate = Path(root) / name
                    if _is_input(candidate, suffixes):
                        found.append(candidate)
        elif path.is_file():
            found.append(path)
        else:
            logger.warning("No such file or directory: %s", path)
    return found


__all__ = [
    "ADDON_DIRS",
    "DumpFile",
    "load_cppcheckdata",
    "load_dump",
    "dump_path_for",
    "generate_dump",
    "discover",
]
