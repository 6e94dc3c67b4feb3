from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class ManagerSpec:
    lockfile_kind: str | None
    lockfile: str | None
    frozen_install: str
    install: str
    run_script: str
    cache_prefix: str
    cache_paths: tuple[str, ...]
    setup_steps: tuple[str, ...] = ()

    def install_command(self, lockfile_present: bool) -> str:
        return self.frozen_install if lockfile_present else self.install

    def cache_key(self, lockfile_present: bool) -> str:
        hashed = self.lockfile if (lockfile_present and self.lockfile) else "package.json"
        return f"{self.cache_prefix}-${{{{ hashFiles('{hashed}') }}}}"

    def build_command(self, script: str = "build") -> str:
        return f"{self.run_script} {script}"


MANAGERS: MappingProxyType[str, ManagerSpec] = MappingProxyType(
    {
        "npm": ManagerSpec(
            lockfile_kind="npm",
            lockfile="package-lock.json",
            frozen_install="npm ci",
            install="npm install",
            run_script="npm run",
            cache_prefix="npm",
            cache_paths=("~/.npm",),
        ),
        "yarn-classic": ManagerSpec(
            lockfile_kind="yarn",
            lockfile="yarn.lock",
            frozen_install="yarn install --frozen-lockfile",
            install="yarn install",
            run_script="yarn run",
            cache_prefix="yarn",
            cache_paths=("~/.cache/yarn",),
        ),
        "yarn-berry": ManagerSpec(
            lockfile_kind="yarn",
            lockfile="yarn.lock",
            frozen_install="yarn install --immutable",
            install="yarn install",
            run_script="yarn run",
            cache_prefix="yarn-berry",
            cache_paths=(".yarn/cache",),
        ),
        "pnpm": ManagerSpec(
            lockfile_kind="pnpm",
            lockfile="pnpm-lock.yaml",
            frozen_install="pnpm install --frozen-lockfile",
            install="pnpm install",
            run_script="pnpm run",
            cache_prefix="pnpm",
            cache_paths=("~/.local/share/pnpm/store",),
            setup_steps=("install-pnpm-cli",),
        ),
        "bun": ManagerSpec(
            lockfile_kind="bun",
            lockfile="bun.lock*",
            frozen_install="bun install --frozen-lockfile",
            install="bun install",
            run_script="bun run",
            cache_prefix="bun",
            cache_paths=("~/.bun/install/cache",),
            setup_steps=("install-bun-cli",),
        ),
        "unknown": ManagerSpec(
            lockfile_kind=None,
            lockfile=None,
            frozen_install="",
            install="",
            run_script="",
            cache_prefix="deps",
            cache_paths=(),
        ),
    }
)

# packageManager field name -> manager family.
FIELD_NAMES = ("npm", "yarn", "pnpm", "bun")

# Steps that must run before any other setup step.
BERRY_SETUP_STEPS = ("enable-corepack",)


def manager_for_kind(kind: str, yarn_berry: bool) -> str:
    if kind == "yarn":
        return "yarn-berry" if yarn_berry else "yarn-classic"
    return kind


def setup_steps_for(manager: str) -> tuple[str, ...]:
    steps = MANAGERS[manager].setup_steps
    if manager == "yarn-berry":
        return BERRY_SETUP_STEPS + steps
    return steps
