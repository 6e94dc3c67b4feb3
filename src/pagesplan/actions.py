from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .collect import EvidenceRecord, collect_evidence
from .config import ToolConfig, apply_config, load_tool_config
from .export import SerializedPlan, export
from .model import DeploymentPlan, Diagnostic
from .resolve import resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    evidence: EvidenceRecord
    plan: DeploymentPlan
    diagnostics: list[Diagnostic]
    serialized: SerializedPlan


def run_pipeline(
    target: Path,
    cfg: ToolConfig | None = None,
    *,
    separator: str | None = None,
    strict: bool | None = None,
) -> PipelineResult:
    """Collect -> resolve -> export for one project root.

    `cfg` defaults to the project's `.pagesplan.json`; explicit keyword
    arguments win over it. Raises AccessError when the root is unreadable.
    """
    evidence = collect_evidence(target)
    if cfg is None:
        cfg = load_tool_config(target)

    plan, diagnostics = resolve(evidence)
    plan = apply_config(plan, cfg)
    logger.debug("plan for %s: %s", target, plan.to_json())

    serialized = export(
        plan,
        diagnostics,
        separator=separator or cfg.cache_paths_separator,
        strict=cfg.strict if strict is None else strict,
    )
    return PipelineResult(evidence, plan, diagnostics, serialized)
