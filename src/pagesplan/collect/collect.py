from __future__ import annotations

import logging
import os
from pathlib import Path

from ..constants import CNAME_FILENAME, GITIGNORE_FILENAME, MANIFEST_FILENAME
from ..errors import AccessError
from .frameworks import detect_framework_configs, detect_output_dirs
from .github import detect_github_actions
from .manifest import detect_lockfiles, detect_yarn_berry_markers, read_manifest
from .model import EvidenceRecord
from .repo import is_git_repo, read_cname, read_gitignore

logger = logging.getLogger(__name__)


def _check_root(root: Path) -> Path:
    if not root.exists():
        raise AccessError(root, "does not exist")
    if not root.is_dir():
        raise AccessError(root, "is not a directory")
    if not os.access(root, os.R_OK | os.X_OK):
        raise AccessError(root, "is not readable")
    try:
        next(root.iterdir(), None)
    except OSError as exc:
        raise AccessError(root, exc.strerror or str(exc)) from exc
    return root.resolve()


def collect_evidence(root: Path) -> EvidenceRecord:
    """Read the fixed set of deployment signals from a project root.

    Only files directly at the root (plus `.github/workflows/` and the yarn
    berry directories) are looked at. Raises AccessError if the root cannot
    be read; every other anomaly is recorded on the returned record.
    """
    repo = _check_root(Path(root))
    sources: list[str] = []

    try:
        lock_kinds, lock_names = detect_lockfiles(repo)
        sources.extend(lock_names)

        berry_markers = detect_yarn_berry_markers(repo)
        sources.extend(berry_markers)

        manifest_present, manifest, manifest_error = read_manifest(repo)
        if manifest_present:
            sources.append(MANIFEST_FILENAME)

        configs = detect_framework_configs(repo)
        sources.extend(sorted(configs))

        ci = detect_github_actions(repo)
        workflows = ci.workflows if ci else []
        sources.extend(workflows)

        gitignore_present, ignores_deps = read_gitignore(repo)
        if gitignore_present:
            sources.append(GITIGNORE_FILENAME)

        cname_present, cname_domain = read_cname(repo)
        if cname_present:
            sources.append(CNAME_FILENAME)

        git_present = is_git_repo(repo)
        output_dirs = detect_output_dirs(repo)
    except PermissionError as exc:
        raise AccessError(repo, f"cannot read {exc.filename or 'file'}") from exc

    rec = EvidenceRecord(
        lock_files_present=lock_kinds,
        yarn_berry_markers_present=bool(berry_markers),
        package_manager_field=manifest.package_manager if manifest else None,
        manifest_present=manifest_present,
        build_script_present=manifest.build_script_present if manifest else False,
        manifest_name=manifest.name if manifest else None,
        manifest_version=manifest.version if manifest else None,
        manifest_error=manifest_error,
        framework_config_files=configs,
        workflow_files_present=len(workflows),
        workflow_files=tuple(workflows),
        workflows_dir_present=ci is not None,
        cname_present=cname_present,
        cname_domain=cname_domain,
        git_repo_present=git_present,
        gitignore_present=gitignore_present,
        ignores_dependency_dir=ignores_deps,
        output_dirs_present=output_dirs,
        sources=tuple(sources),
    )
    logger.debug("collected evidence for %s: %s", repo, rec.to_json())
    return rec
