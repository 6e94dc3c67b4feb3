from __future__ import annotations

from pathlib import Path


def safe_read_text(path: Path, *, max_bytes: int = 256 * 1024) -> str:
    with path.open("rb") as f:
        data = f.read(max_bytes)
    return data.decode("utf-8", errors="replace")


def present_names(target: Path, names: list[str]) -> list[str]:
    return [n for n in names if (target / n).exists()]


def present_files(target: Path, names: list[str]) -> list[str]:
    return [n for n in names if (target / n).is_file()]


def present_dirs(target: Path, names: list[str]) -> list[str]:
    return [n for n in names if (target / n).is_dir()]
