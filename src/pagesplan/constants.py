from __future__ import annotations

CONFIG_FILENAME = ".pagesplan.json"

MANIFEST_FILENAME = "package.json"
DEPENDENCY_DIR = "node_modules"

# Lockfile name -> lockfile kind. A kind can have several filenames.
LOCKFILES = [
    ("package-lock.json", "npm"),
    ("npm-shrinkwrap.json", "npm"),
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
]

# Only yarn 2+ writes these.
YARN_BERRY_MARKERS = [".yarnrc.yml", ".yarn/releases", ".yarn/cache", ".pnp.cjs"]

FRAMEWORK_CONFIG_FILES = [
    "next.config.js",
    "next.config.mjs",
    "next.config.ts",
    "nuxt.config.js",
    "nuxt.config.ts",
    "astro.config.mjs",
    "astro.config.js",
    "astro.config.ts",
    "svelte.config.js",
    "gatsby-config.js",
    "gatsby-config.ts",
    "angular.json",
    "vue.config.js",
    "craco.config.js",
    "vite.config.js",
    "vite.config.ts",
    "vite.config.mjs",
]

OUTPUT_DIRS = ["dist", "build", "out", ".next", ".output"]

WORKFLOWS_DIR = ".github/workflows"
WORKFLOW_SUFFIXES = (".yml", ".yaml")

CNAME_FILENAME = "CNAME"
GITIGNORE_FILENAME = ".gitignore"

SEVERITIES = ("error", "warning", "info")
PACKAGE_MANAGERS = ("npm", "yarn-classic", "yarn-berry", "pnpm", "bun", "unknown")

# Order used to pick a manager when several lockfile kinds coexist.
LOCKFILE_TIE_BREAK = ("npm", "pnpm", "bun", "yarn")

VARIABLE_KEYS = [
    "package_manager",
    "install_command",
    "build_command",
    "cache_key",
    "cache_paths",
    "setup_steps",
    "output_directory",
    "output_directory_source",
    "framework_hint",
    "confidence",
]
