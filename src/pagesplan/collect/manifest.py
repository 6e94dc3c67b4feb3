from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from ..constants import LOCKFILES, MANIFEST_FILENAME, YARN_BERRY_MARKERS
from ..errors import ManifestParseError
from .fs import present_names, safe_read_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestInfo:
    package_manager: str | None
    build_script_present: bool
    name: str | None
    version: str | None


def _opt_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_manifest(path: Path) -> ManifestInfo:
    """Extract the fields pagesplan cares about from a package.json.

    Raises ManifestParseError when the document is not a JSON object.
    """
    try:
        # npm accepts a leading UTF-8 BOM.
        d = json.loads(safe_read_text(path).lstrip("\ufeff"))
    except json.JSONDecodeError as exc:
        raise ManifestParseError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(d, dict):
        raise ManifestParseError(path, "top-level value is not an object")

    scripts = d.get("scripts") or {}
    build = scripts.get("build") if isinstance(scripts, dict) else None

    return ManifestInfo(
        package_manager=_opt_str(d.get("packageManager")),
        build_script_present=bool(_opt_str(build)),
        name=_opt_str(d.get("name")),
        version=_opt_str(d.get("version")),
    )


def read_manifest(repo: Path) -> tuple[bool, ManifestInfo | None, str | None]:
    """Returns (present, info, error). A parse failure degrades to (True, None, message)."""
    p = repo / MANIFEST_FILENAME
    if not p.is_file():
        return False, None, None
    try:
        return True, parse_manifest(p), None
    except ManifestParseError as exc:
        logger.info("Could not parse %s: %s", p, exc.reason)
        return True, None, str(exc)


def detect_lockfiles(repo: Path) -> tuple[frozenset[str], list[str]]:
    found = [(name, kind) for name, kind in LOCKFILES if (repo / name).is_file()]
    for name, kind in found:
        logger.debug("lockfile %s -> %s", name, kind)
    return frozenset(kind for _, kind in found), [name for name, _ in found]


def detect_yarn_berry_markers(repo: Path) -> list[str]:
    return present_names(repo, YARN_BERRY_MARKERS)
