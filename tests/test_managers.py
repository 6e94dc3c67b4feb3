from __future__ import annotations

import pytest

from pagesplan.constants import FRAMEWORK_CONFIG_FILES, PACKAGE_MANAGERS
from pagesplan.frameworks import FRAMEWORKS, match_framework
from pagesplan.managers import MANAGERS, setup_steps_for


def test_every_manager_has_a_table_entry() -> None:
    assert set(MANAGERS) == set(PACKAGE_MANAGERS)


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        MANAGERS["npm"] = MANAGERS["pnpm"]  # type: ignore[index]


def test_cache_key_hashes_lockfile_or_manifest() -> None:
    pnpm = MANAGERS["pnpm"]
    assert pnpm.cache_key(True) == "pnpm-${{ hashFiles('pnpm-lock.yaml') }}"
    assert pnpm.cache_key(False) == "pnpm-${{ hashFiles('package.json') }}"
    assert MANAGERS["bun"].cache_key(True) == "bun-${{ hashFiles('bun.lock*') }}"


def test_setup_steps_order() -> None:
    assert setup_steps_for("npm") == ()
    assert setup_steps_for("yarn-classic") == ()
    assert setup_steps_for("yarn-berry") == ("enable-corepack",)
    assert setup_steps_for("pnpm") == ("install-pnpm-cli",)
    assert setup_steps_for("bun") == ("install-bun-cli",)


def test_framework_config_names_are_collected() -> None:
    for spec in FRAMEWORKS:
        for name in spec.config_files:
            assert name in FRAMEWORK_CONFIG_FILES
            assert match_framework(frozenset({name})) == spec


def test_no_framework_match() -> None:
    assert match_framework(frozenset()) is None
