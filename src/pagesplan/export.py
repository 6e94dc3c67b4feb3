from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .constants import SEVERITIES, VARIABLE_KEYS
from .model import DeploymentPlan, Diagnostic

SEPARATORS = {"newline": "\n", "comma": ","}

SEVERITY_MARKS = {"error": "✗", "warning": "⚠", "info": "i"}


@dataclass(frozen=True)
class SerializedPlan:
    variables: dict[str, str]
    diagnostics: tuple[tuple[str, str, str], ...]
    passed: bool
    error_count: int
    warning_count: int
    info_count: int

    def grouped(self) -> dict[str, list[tuple[str, str]]]:
        """Diagnostics by severity (error, warning, info), each keeping check order."""
        out: dict[str, list[tuple[str, str]]] = {s: [] for s in SEVERITIES}
        for severity, code, message in self.diagnostics:
            out[severity].append((code, message))
        return out

    def summary(self) -> str:
        if self.error_count == 0 and self.warning_count == 0:
            return "All checks passed! Ready for deployment"
        if self.error_count == 0:
            return f"Found {self.warning_count} warning(s). Review before deployment"
        return f"Found {self.error_count} error(s) and {self.warning_count} warning(s)"

    def to_json(self) -> dict[str, Any]:
        return {
            "version": 1,
            "pass": self.passed,
            "summary": self.summary(),
            "counts": {
                "error": self.error_count,
                "warning": self.warning_count,
                "info": self.info_count,
            },
            "variables": dict(self.variables),
            "diagnostics": [
                {"severity": s, "code": c, "message": m} for s, c, m in self.diagnostics
            ],
        }

    def render_report(self) -> str:
        lines: list[str] = []
        for severity, items in self.grouped().items():
            if not items:
                continue
            lines.append(f"{severity.upper()} ({len(items)})")
            for code, message in items:
                lines.append(f"  {SEVERITY_MARKS[severity]} [{code}] {message}")
            lines.append("")
        lines.append("━" * 40)
        lines.append(("PASS: " if self.passed else "FAIL: ") + self.summary())
        return "\n".join(lines) + "\n"


def plan_variables(plan: DeploymentPlan, *, separator: str = "newline") -> dict[str, str]:
    try:
        sep = SEPARATORS[separator]
    except KeyError:
        raise ValueError(f"unknown separator {separator!r} (expected newline|comma)") from None
    values = {
        "package_manager": plan.package_manager,
        "install_command": plan.install_command,
        "build_command": plan.build_command,
        "cache_key": plan.cache_key,
        "cache_paths": sep.join(plan.cache_paths),
        "setup_steps": ",".join(plan.setup_steps),
        "output_directory": plan.output_directory_guess or "",
        "output_directory_source": plan.output_directory_source,
        "framework_hint": plan.framework_hint or "",
        "confidence": plan.confidence,
    }
    return {k: values[k] for k in VARIABLE_KEYS}


def export(
    plan: DeploymentPlan,
    diagnostics: Iterable[Diagnostic],
    *,
    separator: str = "newline",
    strict: bool = False,
) -> SerializedPlan:
    """Flatten a plan into template variables and build the diagnostic report.

    The report fails when any error-severity diagnostic exists, or with
    `strict=True` when any warning exists too.
    """
    diags = tuple(d.as_tuple() for d in diagnostics)
    errors = sum(1 for d in diags if d[0] == "error")
    warnings = sum(1 for d in diags if d[0] == "warning")
    infos = sum(1 for d in diags if d[0] == "info")
    passed = errors == 0 and not (strict and warnings)
    return SerializedPlan(
        variables=plan_variables(plan, separator=separator),
        diagnostics=diags,
        passed=passed,
        error_count=errors,
        warning_count=warnings,
        info_count=infos,
    )


def format_github_output(variables: Mapping[str, str], *, delimiter: str | None = None) -> str:
    """Render variables in the `$GITHUB_OUTPUT` file format.

    Multi-line values use the `name<<DELIMITER` block form.
    """
    lines: list[str] = []
    for name, value in variables.items():
        if "\n" in value:
            delim = delimiter or f"ghadelimiter_{secrets.token_hex(8)}"
            lines.append(f"{name}<<{delim}")
            lines.append(value)
            lines.append(delim)
        else:
            lines.append(f"{name}={value}")
    return "\n".join(lines) + "\n"
