from __future__ import annotations

from pathlib import Path

from ..constants import FRAMEWORK_CONFIG_FILES, OUTPUT_DIRS
from .fs import present_dirs, present_files


def detect_framework_configs(repo: Path) -> frozenset[str]:
    return frozenset(present_files(repo, FRAMEWORK_CONFIG_FILES))


def detect_output_dirs(repo: Path) -> frozenset[str]:
    return frozenset(present_dirs(repo, OUTPUT_DIRS))
