from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .constants import CONFIG_FILENAME
from .errors import PagesPlanError
from .export import SEPARATORS
from .io_utils import read_json
from .model import DeploymentPlan


class ConfigError(PagesPlanError):
    pass


@dataclass
class ToolConfig:
    version: int = 1
    cache_paths_separator: str = "newline"  # newline|comma
    strict: bool = False
    # Replaces the resolver's best-effort guess when set.
    output_directory: str = ""

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "cache_paths_separator": self.cache_paths_separator,
            "strict": self.strict,
            "output_directory": self.output_directory,
        }

    @staticmethod
    def from_json(d: dict[str, Any]) -> "ToolConfig":
        if not isinstance(d, dict):
            raise ConfigError(f"{CONFIG_FILENAME}: expected a JSON object")
        cfg = ToolConfig()
        try:
            cfg.version = int(d.get("version", 1))
        except (TypeError, ValueError):
            raise ConfigError(f"{CONFIG_FILENAME}: version must be an integer") from None
        if cfg.version != 1:
            raise ConfigError(f"{CONFIG_FILENAME}: unsupported version {cfg.version}")
        cfg.cache_paths_separator = str(d.get("cache_paths_separator", "newline")).strip().lower()
        if cfg.cache_paths_separator not in SEPARATORS:
            raise ConfigError(
                f"{CONFIG_FILENAME}: cache_paths_separator must be one of {', '.join(SEPARATORS)}"
            )
        cfg.strict = bool(d.get("strict", False))
        cfg.output_directory = str(d.get("output_directory", "") or "").strip().strip("/")
        return cfg


def apply_config(plan: DeploymentPlan, cfg: ToolConfig) -> DeploymentPlan:
    if not cfg.output_directory:
        return plan
    return replace(plan, output_directory_guess=cfg.output_directory, output_directory_source="config")


def load_tool_config(target: Path) -> ToolConfig:
    """Read `.pagesplan.json` from the project root; defaults when absent."""
    cfg_path = target / CONFIG_FILENAME
    if not cfg_path.is_file():
        return ToolConfig()
    try:
        d = read_json(cfg_path)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"{CONFIG_FILENAME}: {exc}") from exc
    return ToolConfig.from_json(d)
