"""Version and build information for the command line."""

from __future__ import annotations

import importlib.metadata
from typing import NamedTuple, Optional


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    date: Optional[str]


def _from_embedded_file() -> tuple[Optional[str], Optional[str]]:
    # Generated at build time by hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return (None, None)
    return (getattr(_build_info, "COMMIT", None), getattr(_build_info, "DATE", None))


def get_build_info() -> BuildInfo:
    try:
        version = importlib.metadata.version("flowmark")
    except importlib.metadata.PackageNotFoundError:
        version = None
    commit, date = _from_embedded_file()
    return BuildInfo(version=version, commit=commit, date=date)


def get_version_string() -> str:
    info = get_build_info()
    # Use short (7-character) git hashes when available
    commit = info.commit[:7] if info.commit else "unknown"
    return f"flowmark {info.version or 'unknown'} ({commit} {info.date or 'unknown'})"
