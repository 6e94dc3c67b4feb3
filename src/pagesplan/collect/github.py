from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..constants import WORKFLOW_SUFFIXES, WORKFLOWS_DIR


@dataclass(frozen=True)
class CiInfo:
    ci_dir: str
    workflows: list[str]


def detect_github_actions(repo: Path) -> CiInfo | None:
    d = repo / WORKFLOWS_DIR
    if not d.is_dir():
        return None
    workflows = sorted(
        str(p.relative_to(repo)).replace("\\", "/")
        for p in d.iterdir()
        if p.is_file() and p.suffix in WORKFLOW_SUFFIXES
    )
    return CiInfo(ci_dir=f"{WORKFLOWS_DIR}/", workflows=workflows)
