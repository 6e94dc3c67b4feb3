from __future__ import annotations

from typing import Callable, Optional

from .collect.model import EvidenceRecord
from .constants import DEPENDENCY_DIR, WORKFLOWS_DIR
from .model import Diagnostic, error, info, warning

Check = Callable[[EvidenceRecord], Optional[Diagnostic]]


def check_git_repo(ev: EvidenceRecord) -> Diagnostic | None:
    if ev.git_repo_present:
        return None
    return error("not-a-git-repo", "Not a Git repository. Run: git init")


def check_manifest(ev: EvidenceRecord) -> Diagnostic | None:
    if ev.manifest_present:
        return None
    return warning(
        "no-manifest",
        "No package.json found. Static sites may not need one; no build step will run.",
    )


def check_workflows(ev: EvidenceRecord) -> Diagnostic | None:
    if ev.workflow_files_present > 0:
        return None
    if ev.workflows_dir_present:
        msg = f"{WORKFLOWS_DIR}/ exists but contains no .yml/.yaml files"
    else:
        msg = f"No {WORKFLOWS_DIR}/ directory. Create a deployment workflow to enable CI/CD"
    return error("no-workflows", msg)


def check_cname(ev: EvidenceRecord) -> Diagnostic | None:
    if ev.cname_present:
        return None
    return info("no-cname", "No CNAME file. Add one to serve the site from a custom domain")


def check_gitignore(ev: EvidenceRecord) -> Diagnostic | None:
    if not ev.gitignore_present:
        return error(
            "no-gitignore", "No .gitignore file. Create one to exclude dependencies and build artifacts"
        )
    if not ev.ignores_dependency_dir:
        return warning("dependency-dir-not-ignored", f"{DEPENDENCY_DIR} is not in .gitignore")
    return None


# Same order as the pre-deployment checklist.
CHECKS: tuple[Check, ...] = (
    check_git_repo,
    check_manifest,
    check_workflows,
    check_cname,
    check_gitignore,
)


def validate(ev: EvidenceRecord) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    for check in CHECKS:
        d = check(ev)
        if d is not None:
            out.append(d)
    return out
