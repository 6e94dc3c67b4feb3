from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EvidenceRecord:
    lock_files_present: frozenset[str] = frozenset()  # npm|yarn|pnpm|bun
    yarn_berry_markers_present: bool = False
    package_manager_field: str | None = None
    manifest_present: bool = False
    build_script_present: bool = False
    manifest_name: str | None = None
    manifest_version: str | None = None
    manifest_error: str | None = None
    framework_config_files: frozenset[str] = frozenset()
    workflow_files_present: int = 0
    workflow_files: tuple[str, ...] = ()
    workflows_dir_present: bool = False
    cname_present: bool = False
    cname_domain: str | None = None
    git_repo_present: bool = False
    gitignore_present: bool = False
    ignores_dependency_dir: bool = False
    output_dirs_present: frozenset[str] = frozenset()
    # Which files produced the facts above, for `pagesplan detect`.
    sources: tuple[str, ...] = field(default=(), compare=False)

    def to_json(self) -> dict[str, Any]:
        return {
            "lock_files_present": sorted(self.lock_files_present),
            "yarn_berry_markers_present": self.yarn_berry_markers_present,
            "package_manager_field": self.package_manager_field,
            "manifest": {
                "present": self.manifest_present,
                "build_script_present": self.build_script_present,
                "name": self.manifest_name,
                "version": self.manifest_version,
                "error": self.manifest_error,
            },
            "framework_config_files": sorted(self.framework_config_files),
            "workflows": {
                "dir_present": self.workflows_dir_present,
                "count": self.workflow_files_present,
                "files": list(self.workflow_files),
            },
            "cname": {"present": self.cname_present, "domain": self.cname_domain},
            "git_repo_present": self.git_repo_present,
            "gitignore": {
                "present": self.gitignore_present,
                "ignores_dependency_dir": self.ignores_dependency_dir,
            },
            "output_dirs_present": sorted(self.output_dirs_present),
            "sources": list(self.sources),
        }
