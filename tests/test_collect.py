from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

from pagesplan.collect import collect_evidence
from pagesplan.collect.repo import ignores_dir
from pagesplan.errors import AccessError
from pagesplan.resolve import resolve


skip_if_root = pytest.mark.skipif(
    sys.platform == "win32" or os.geteuid() == 0,
    reason="root (and Windows) ignore POSIX permission bits",
)


def test_collect_vite_npm(project) -> None:
    ev = collect_evidence(project("vite_npm"))
    assert ev.lock_files_present == frozenset({"npm"})
    assert ev.yarn_berry_markers_present is False
    assert ev.package_manager_field is None
    assert ev.manifest_present is True
    assert ev.build_script_present is True
    assert ev.manifest_name == "vite-site"
    assert ev.manifest_version == "1.2.0"
    assert ev.framework_config_files == frozenset({"vite.config.ts"})
    assert ev.workflow_files_present == 1
    assert ev.workflow_files == (".github/workflows/deploy.yml",)
    assert ev.cname_present is True
    assert ev.cname_domain == "docs.example.com"
    assert ev.git_repo_present is True
    assert ev.gitignore_present is True
    assert ev.ignores_dependency_dir is True
    assert ev.output_dirs_present == frozenset()


def test_collect_yarn_berry_next(project) -> None:
    ev = collect_evidence(project("yarn_berry_next"))
    assert ev.lock_files_present == frozenset({"yarn"})
    assert ev.yarn_berry_markers_present is True
    assert ev.package_manager_field == "yarn@4.0.2"
    assert ev.framework_config_files == frozenset({"next.config.js"})
    assert ev.workflow_files == (".github/workflows/pages.yaml",)
    assert ev.ignores_dependency_dir is True
    assert ev.cname_present is False


def test_collect_all_lockfile_kinds(project) -> None:
    ev = collect_evidence(project("conflicting_lockfiles"))
    assert ev.lock_files_present == frozenset({"npm", "pnpm", "yarn"})


def test_collect_static_site_without_git(project) -> None:
    ev = collect_evidence(project("static_site", git=False))
    assert ev.manifest_present is False
    assert ev.build_script_present is False
    assert ev.git_repo_present is False
    assert ev.gitignore_present is False
    assert ev.workflows_dir_present is False
    assert ev.workflow_files_present == 0
    assert ev.output_dirs_present == frozenset({"dist"})


def test_unparsable_manifest_is_not_fatal(project) -> None:
    ev = collect_evidence(project("bad_manifest"))
    assert ev.manifest_present is True
    assert ev.manifest_error is not None
    assert "package.json" in ev.manifest_error
    assert ev.package_manager_field is None
    assert ev.build_script_present is False
    assert ev.manifest_name is None
    # The rest of the evidence is still collected.
    assert ev.lock_files_present == frozenset({"pnpm"})


def test_manifest_not_an_object(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("[1, 2]", encoding="utf-8")
    ev = collect_evidence(tmp_path)
    assert ev.manifest_present is True
    assert "not an object" in (ev.manifest_error or "")


def test_non_string_fields_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"packageManager": 3, "scripts": {"build": ""}, "name": "x"}),
        encoding="utf-8",
    )
    ev = collect_evidence(tmp_path)
    assert ev.manifest_error is None
    assert ev.package_manager_field is None
    assert ev.build_script_present is False
    assert ev.manifest_name == "x"


def test_bun_text_lockfile_and_git_file(tmp_path: Path) -> None:
    (tmp_path / "bun.lock").write_text("{}", encoding="utf-8")
    # Worktrees and submodules have a .git file instead of a directory.
    (tmp_path / ".git").write_text("gitdir: ../.git/worktrees/site\n", encoding="utf-8")
    ev = collect_evidence(tmp_path)
    assert ev.lock_files_present == frozenset({"bun"})
    assert ev.git_repo_present is True


def test_empty_workflows_dir(tmp_path: Path) -> None:
    wf = tmp_path / ".github" / "workflows"
    wf.mkdir(parents=True)
    (wf / "README.md").write_text("not a workflow", encoding="utf-8")
    ev = collect_evidence(tmp_path)
    assert ev.workflows_dir_present is True
    assert ev.workflow_files_present == 0


def test_nested_files_are_not_scanned(tmp_path: Path) -> None:
    sub = tmp_path / "packages" / "web"
    sub.mkdir(parents=True)
    (sub / "yarn.lock").write_text("", encoding="utf-8")
    (sub / "vite.config.ts").write_text("", encoding="utf-8")
    ev = collect_evidence(tmp_path)
    assert ev.lock_files_present == frozenset()
    assert ev.framework_config_files == frozenset()


def test_output_dir_must_be_a_directory(tmp_path: Path) -> None:
    (tmp_path / "build").write_text("a file, not the output dir", encoding="utf-8")
    (tmp_path / "out").mkdir()
    ev = collect_evidence(tmp_path)
    assert ev.output_dirs_present == frozenset({"out"})


def test_missing_root_raises_access_error(tmp_path: Path) -> None:
    with pytest.raises(AccessError) as exc:
        collect_evidence(tmp_path / "nope")
    assert "does not exist" in str(exc.value)


def test_file_root_raises_access_error(tmp_path: Path) -> None:
    f = tmp_path / "package.json"
    f.write_text("{}", encoding="utf-8")
    with pytest.raises(AccessError):
        collect_evidence(f)


def test_collect_is_repeatable(project) -> None:
    root = project("yarn_berry_next")
    assert collect_evidence(root) == collect_evidence(root)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("node_modules\n", True),
        ("/node_modules/\n", True),
        ("**/node_modules\n", True),
        ("# node_modules\n", False),
        ("node_modules_backup\n", False),
        ("dist\n.env\n", False),
        ("!node_modules\n", False),
        ("node_modules/**\n", True),
        ("node_modules/*\n", True),
        ("**/node_modules/**\n", True),
        ("/node_modules/**\n", True),
        ("node_modules/.cache\n", False),
    ],
)
def test_ignores_dependency_dir(text: str, expected: bool) -> None:
    assert ignores_dir(text) is expected


def test_manifest_with_utf8_bom(tmp_path: Path) -> None:
    data = {"name": "bom-site", "packageManager": "pnpm@9.0.0", "scripts": {"build": "vite build"}}
    (tmp_path / "package.json").write_bytes(b"\xef\xbb\xbf" + json.dumps(data).encode("utf-8"))
    ev = collect_evidence(tmp_path)
    assert ev.manifest_error is None
    assert ev.package_manager_field == "pnpm@9.0.0"
    assert ev.build_script_present is True
    assert ev.manifest_name == "bom-site"

    plan, diags = resolve(ev)
    assert plan.package_manager == "pnpm"
    assert plan.confidence == "certain"
    assert "manifest-unparsable" not in [d.code for d in diags]


@skip_if_root
def test_unreadable_root_raises_access_error(tmp_path: Path) -> None:
    root = tmp_path / "site"
    root.mkdir()
    root.chmod(0o000)
    try:
        with pytest.raises(AccessError) as exc:
            collect_evidence(root)
        assert "not readable" in str(exc.value)
    finally:
        root.chmod(0o755)


@skip_if_root
def test_unreadable_manifest_raises_access_error(tmp_path: Path) -> None:
    pkg = tmp_path / "package.json"
    pkg.write_text('{"name": "locked"}', encoding="utf-8")
    pkg.chmod(0o000)
    try:
        with pytest.raises(AccessError) as exc:
            collect_evidence(tmp_path)
        assert "package.json" in str(exc.value)
    finally:
        pkg.chmod(0o644)
