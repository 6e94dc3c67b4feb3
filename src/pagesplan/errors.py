from __future__ import annotations

from pathlib import Path


class PagesPlanError(Exception):
    """Base class for errors raised by pagesplan."""


class AccessError(PagesPlanError):
    """The project root is missing or unreadable. No plan can be computed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ManifestParseError(PagesPlanError):
    """package.json exists but could not be parsed. Recovered by the collector."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path.name}: {reason}")
        self.path = path
        self.reason = reason
