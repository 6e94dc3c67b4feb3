"""Evidence -> deployment plan.

Package-manager precedence is an ordered tuple of rules. The first rule
whose predicate holds decides the manager; everything else (commands,
cache, setup steps) is looked up in the manager table.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from .collect.model import EvidenceRecord
from .constants import LOCKFILE_TIE_BREAK
from .frameworks import match_framework
from .managers import FIELD_NAMES, MANAGERS, manager_for_kind, setup_steps_for
from .model import DeploymentPlan, Diagnostic, info, warning
from .validate import validate

logger = logging.getLogger(__name__)

# name@version, optionally followed by a corepack hash (yarn@4.0.2+sha512.abc).
FIELD_RE = re.compile(
    r"^(?P<name>[a-z][a-z0-9._-]*)@(?P<version>(?P<major>\d+)(?:\.\d+)*(?:-[0-9A-Za-z.-]+)?)"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)


@dataclass(frozen=True)
class PackageManagerField:
    name: str
    version: str
    major: int


def parse_package_manager_field(value: str | None) -> PackageManagerField | None:
    if not value:
        return None
    m = FIELD_RE.match(value.strip())
    if not m:
        return None
    return PackageManagerField(name=m["name"], version=m["version"], major=int(m["major"]))


@dataclass(frozen=True)
class ManagerDecision:
    manager: str
    confidence: str  # certain|inferred|default-fallback
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class PackageManagerRule:
    name: str
    applies: Callable[[EvidenceRecord], bool]
    decide: Callable[[EvidenceRecord], ManagerDecision]


def _known_field(ev: EvidenceRecord) -> PackageManagerField | None:
    f = parse_package_manager_field(ev.package_manager_field)
    if f is None or f.name not in FIELD_NAMES:
        return None
    return f


def _decide_from_field(ev: EvidenceRecord) -> ManagerDecision:
    f = _known_field(ev)
    if f is None:
        raise ValueError("package-manager-field rule applied without a known packageManager field")
    if f.name == "yarn":
        manager = "yarn-berry" if f.major >= 2 else "yarn-classic"
    else:
        manager = f.name

    diags: list[Diagnostic] = []
    locks = ev.lock_files_present
    others = [k for k in LOCKFILE_TIE_BREAK if k in locks and k != f.name]
    if others:
        diags.append(
            warning(
                "package-manager-mismatch",
                f"packageManager declares {ev.package_manager_field} but other lockfiles exist: "
                + ", ".join(others)
                + f". Using {manager}.",
            )
        )
    elif f.name == "yarn" and "yarn" in locks:
        markers = ev.yarn_berry_markers_present
        if (manager == "yarn-berry") != markers:
            diags.append(
                warning(
                    "package-manager-mismatch",
                    f"packageManager declares {ev.package_manager_field} but yarn berry markers are "
                    + ("present" if markers else "absent")
                    + f". Using {manager}.",
                )
            )
    return ManagerDecision(manager, "certain", tuple(diags))


def _decide_single_lockfile(ev: EvidenceRecord) -> ManagerDecision:
    (kind,) = ev.lock_files_present
    return ManagerDecision(manager_for_kind(kind, ev.yarn_berry_markers_present), "certain")


def _decide_tie_break(ev: EvidenceRecord) -> ManagerDecision:
    found = [k for k in LOCKFILE_TIE_BREAK if k in ev.lock_files_present]
    kind = found[0]
    manager = manager_for_kind(kind, ev.yarn_berry_markers_present)
    d = warning(
        "conflicting-lockfiles",
        f"Multiple lockfiles found ({', '.join(found)}). Using {manager}; remove the others.",
    )
    return ManagerDecision(manager, "inferred", (d,))


def _decide_default(ev: EvidenceRecord) -> ManagerDecision:
    d = warning(
        "no-lockfile-found",
        "No lockfile or packageManager field found. Defaulting to npm.",
    )
    return ManagerDecision("npm", "default-fallback", (d,))


PACKAGE_MANAGER_RULES: tuple[PackageManagerRule, ...] = (
    PackageManagerRule("package-manager-field", lambda ev: _known_field(ev) is not None, _decide_from_field),
    PackageManagerRule("single-lockfile", lambda ev: len(ev.lock_files_present) == 1, _decide_single_lockfile),
    PackageManagerRule("multiple-lockfiles", lambda ev: len(ev.lock_files_present) > 1, _decide_tie_break),
    PackageManagerRule("default-npm", lambda ev: True, _decide_default),
)


def decide_package_manager(ev: EvidenceRecord) -> ManagerDecision:
    for rule in PACKAGE_MANAGER_RULES:
        if rule.applies(ev):
            decision = rule.decide(ev)
            logger.debug("rule %s chose %s (%s)", rule.name, decision.manager, decision.confidence)
            return decision
    raise AssertionError("default-npm rule always applies")


def _field_diagnostics(ev: EvidenceRecord) -> list[Diagnostic]:
    raw = ev.package_manager_field
    if not raw:
        return []
    f = parse_package_manager_field(raw)
    if f is None:
        return [
            warning(
                "invalid-package-manager-field",
                f"packageManager value {raw!r} is not of the form name@version; ignoring it.",
            )
        ]
    if f.name not in FIELD_NAMES:
        return [
            warning(
                "unknown-package-manager",
                f"packageManager names {f.name!r}, which is not one of {', '.join(FIELD_NAMES)}; ignoring it.",
            )
        ]
    return []


def _output_directory(ev: EvidenceRecord) -> tuple[str | None, str, str | None, list[Diagnostic]]:
    """Returns (guess, source, framework hint, diagnostics)."""
    diags: list[Diagnostic] = []
    fw = match_framework(ev.framework_config_files)
    hint = fw.hint if fw else None

    if fw and fw.hint == "nextjs":
        diags.append(
            info(
                "next-static-export",
                "Next.js needs output: 'export' in next.config to produce a static site in out/",
            )
        )
    if fw and fw.output_dir:
        return fw.output_dir, "framework", hint, diags

    dirs = sorted(ev.output_dirs_present)
    if len(dirs) == 1:
        return dirs[0], "present", hint, diags
    if dirs:
        msg = f"Several build output directories exist ({', '.join(dirs)}); set the output directory explicitly."
    else:
        msg = "No build output directory found and no framework default applies; run the build or set it explicitly."
    diags.append(info("output-directory-ambiguous", msg))
    return None, "", hint, diags


def resolve(ev: EvidenceRecord) -> tuple[DeploymentPlan, list[Diagnostic]]:
    """Derive a deployment plan plus diagnostics. Never raises for bad evidence."""
    diagnostics: list[Diagnostic] = []

    if ev.manifest_error:
        diagnostics.append(
            warning("manifest-unparsable", f"Could not parse {ev.manifest_error}; manifest fields ignored.")
        )
    diagnostics.extend(_field_diagnostics(ev))

    decision = decide_package_manager(ev)
    diagnostics.extend(decision.diagnostics)

    spec = MANAGERS[decision.manager]
    lock_present = spec.lockfile_kind in ev.lock_files_present

    build_command = ""
    if ev.build_script_present:
        build_command = spec.build_command("build")
    elif ev.manifest_present:
        diagnostics.append(
            warning("missing-build-script", "No build script in package.json; no build command will run.")
        )

    guess, source, hint, out_diags = _output_directory(ev)
    diagnostics.extend(out_diags)

    diagnostics.extend(validate(ev))

    plan = DeploymentPlan(
        package_manager=decision.manager,
        install_command=spec.install_command(lock_present),
        build_command=build_command,
        cache_key=spec.cache_key(lock_present),
        cache_paths=spec.cache_paths,
        setup_steps=setup_steps_for(decision.manager),
        confidence=decision.confidence,
        output_directory_guess=guess,
        output_directory_source=source,
        framework_hint=hint,
    )
    return plan, diagnostics
