from __future__ import annotations

import shutil
from pathlib import Path

import pytest


FIXTURES = Path(__file__).parent / "fixtures"


def copy_fixture(name: str, dst: Path, *, git: bool = True) -> Path:
    """Copy a fixture project into dst.

    Fixtures keep their ignore file as gitignore.txt so it does not apply to
    this repository; it is renamed to .gitignore in the copy.
    """
    shutil.copytree(FIXTURES / name, dst, dirs_exist_ok=True)
    gi = dst / "gitignore.txt"
    if gi.exists():
        gi.rename(dst / ".gitignore")
    if git:
        (dst / ".git").mkdir(exist_ok=True)
    return dst


@pytest.fixture
def project(tmp_path: Path):
    def make(name: str, *, git: bool = True) -> Path:
        return copy_fixture(name, tmp_path / name, git=git)

    return make
