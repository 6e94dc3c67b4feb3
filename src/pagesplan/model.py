from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Diagnostic:
    severity: str  # error|warning|info
    code: str
    message: str

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.severity, self.code, self.message)


def error(code: str, message: str) -> Diagnostic:
    return Diagnostic("error", code, message)


def warning(code: str, message: str) -> Diagnostic:
    return Diagnostic("warning", code, message)


def info(code: str, message: str) -> Diagnostic:
    return Diagnostic("info", code, message)


@dataclass(frozen=True)
class DeploymentPlan:
    package_manager: str  # npm|yarn-classic|yarn-berry|pnpm|bun|unknown
    install_command: str
    build_command: str
    cache_key: str
    cache_paths: tuple[str, ...]
    setup_steps: tuple[str, ...]
    confidence: str  # certain|inferred|default-fallback
    output_directory_guess: str | None = None
    output_directory_source: str = ""  # framework|present|config
    framework_hint: str | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "package_manager": self.package_manager,
            "install_command": self.install_command,
            "build_command": self.build_command,
            "cache_key": self.cache_key,
            "cache_paths": list(self.cache_paths),
            "setup_steps": list(self.setup_steps),
            "output_directory": self.output_directory_guess,
            "output_directory_source": self.output_directory_source,
            "framework_hint": self.framework_hint,
            "confidence": self.confidence,
        }
