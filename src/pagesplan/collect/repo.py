from __future__ import annotations

from pathlib import Path

from ..constants import CNAME_FILENAME, DEPENDENCY_DIR, GITIGNORE_FILENAME
from .fs import safe_read_text


def is_git_repo(p: Path) -> bool:
    # Supports normal .git directory and worktrees/submodules where .git can be a file.
    g = p / ".git"
    return g.is_dir() or g.is_file()


def ignores_dir(gitignore_text: str, dirname: str = DEPENDENCY_DIR) -> bool:
    for raw in gitignore_text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith("!"):
            continue
        for prefix in ("**/", "/"):
            if line.startswith(prefix):
                line = line[len(prefix):]
        # dir/, dir/* and dir/** all ignore the whole directory.
        for suffix in ("/**", "/*", "/"):
            if line.endswith(suffix):
                line = line[: -len(suffix)]
                break
        if line == dirname:
            return True
    return False


def read_gitignore(repo: Path) -> tuple[bool, bool]:
    """Returns (present, ignores the dependency dir)."""
    p = repo / GITIGNORE_FILENAME
    if not p.is_file():
        return False, False
    return True, ignores_dir(safe_read_text(p))


def read_cname(repo: Path) -> tuple[bool, str | None]:
    p = repo / CNAME_FILENAME
    if not p.is_file():
        return False, None
    lines = safe_read_text(p, max_bytes=1024).strip().splitlines()
    domain = lines[0].strip() if lines else ""
    return True, domain or None
