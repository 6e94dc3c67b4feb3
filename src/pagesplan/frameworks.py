from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FrameworkSpec:
    hint: str
    config_files: tuple[str, ...]
    output_dir: str | None


# Priority order: meta-frameworks first since they usually wrap a bundler
# (a Nuxt or Astro project often ships a vite config too).
FRAMEWORKS: tuple[FrameworkSpec, ...] = (
    FrameworkSpec("nextjs", ("next.config.js", "next.config.mjs", "next.config.ts"), "out"),
    FrameworkSpec("nuxt", ("nuxt.config.ts", "nuxt.config.js"), ".output/public"),
    FrameworkSpec("astro", ("astro.config.mjs", "astro.config.js", "astro.config.ts"), "dist"),
    # SvelteKit writes build/, plain Svelte on vite writes dist/.
    FrameworkSpec("svelte", ("svelte.config.js",), None),
    FrameworkSpec("gatsby", ("gatsby-config.js", "gatsby-config.ts"), "public"),
    FrameworkSpec("angular", ("angular.json",), "dist"),
    FrameworkSpec("vue-cli", ("vue.config.js",), "dist"),
    FrameworkSpec("create-react-app", ("craco.config.js",), "build"),
    FrameworkSpec("vite", ("vite.config.js", "vite.config.ts", "vite.config.mjs"), "dist"),
)


def match_framework(config_files: frozenset[str]) -> FrameworkSpec | None:
    for spec in FRAMEWORKS:
        if any(f in config_files for f in spec.config_files):
            return spec
    return None
