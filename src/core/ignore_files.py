"""Files and extensions skipped during review.

Metadata, lock files, build artifacts and tool configuration for common
ecosystems. Entries match a file's basename exactly or as a suffix.
"""

from typing import Iterable

IGNORED_FILES: tuple[str, ...] = (
    # Node.js / JavaScript
    "package.json",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "node_modules",
    ".npmrc",
    ".nvmrc",
    ".node-version",
    # TypeScript
    "tsconfig.json",
    "tsconfig.app.json",
    "tsconfig.spec.json",
    "tsconfig.lib.json",
    "tsconfig.build.json",
    ".tsbuildinfo",
    # Linters & formatters
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.mjs",
    ".eslintrc.json",
    ".eslintrc.yml",
    ".eslintrc.yaml",
    "eslint.config.js",
    "eslint.config.mjs",
    "eslint.config.cjs",
    ".prettierrc",
    ".prettierrc.js",
    ".prettierrc.cjs",
    ".prettierrc.json",
    ".prettierrc.yml",
    ".prettierrc.yaml",
    "prettier.config.js",
    "prettier.config.cjs",
    ".editorconfig",
    ".stylelintrc",
    ".stylelintrc.json",
    "stylelint.config.js",
    # Bundlers & build tools
    "vite.config.js",
    "vite.config.ts",
    "vite.config.mts",
    "webpack.config.js",
    "webpack.config.ts",
    "webpack.config.cjs",
    "rollup.config.js",
    "rollup.config.ts",
    "esbuild.config.js",
    "esbuild.config.ts",
    "swc.config.js",
    ".swcrc",
    ".babelrc",
    ".babelrc.js",
    ".babelrc.json",
    "babel.config.js",
    "babel.config.cjs",
    "babel.config.ts",
    # Test config
    "jest.config.js",
    "jest.config.ts",
    "jest.config.cjs",
    "jest.config.mjs",
    "vitest.config.js",
    "vitest.config.ts",
    "playwright.config.js",
    "playwright.config.ts",
    "karma.conf.js",
    "cypress.config.js",
    "cypress.config.ts",
    # CSS / Tailwind / PostCSS
    "tailwind.config.js",
    "tailwind.config.ts",
    "tailwind.config.cjs",
    "postcss.config.js",
    "postcss.config.cjs",
    ".browserslistrc",
    # Next.js
    "next.config.js",
    "next.config.ts",
    "next.config.mjs",
    "next-env.d.ts",
    # Angular
    "angular.json",
    ".angular",
    # Monorepo tools
    "nx.json",
    "workspace.json",
    "lerna.json",
    "turbo.json",
    ".turbo",
    "rush.json",
    # Minified / generated assets
    ".min.js",
    ".min.css",
    ".map",
    ".chunk.js",
    # Python
    "requirements.txt",
    "requirements-dev.txt",
    "requirements-test.txt",
    "Pipfile",
    "Pipfile.lock",
    "poetry.lock",
    "uv.lock",
    "uv.toml",
    "pyproject.toml",
    "setup.py",
    "setup.cfg",
    "MANIFEST.in",
    "tox.ini",
    "pytest.ini",
    ".pytest.ini",
    ".flake8",
    "mypy.ini",
    ".mypy.ini",
    ".python-version",
    ".pyc",
    ".pyo",
    "__pycache__",
    # C# / .NET
    ".csproj",
    ".vbproj",
    ".fsproj",
    ".sln",
    ".user",
    ".suo",
    "App.config",
    "packages.config",
    "Web.config",
    ".nupkg",
    "NuGet.Config",
    "global.json",
    "Directory.Build.props",
    "Directory.Build.targets",
    "Directory.Packages.props",
    ".props",
    ".targets",
    # C++
    ".vcxproj",
    ".filters",
    ".o",
    ".obj",
    ".out",
    ".pdb",
    ".lib",
    ".a",
    # General config & metadata
    ".env",
    "env.example",
    ".env.example",
    ".env.local",
    ".env.development",
    ".env.production",
    ".env.test",
    ".gitignore",
    ".gitattributes",
    ".funcignore",
    ".dockerignore",
    "Dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    "LICENSE",
    "README.md",
    "CHANGELOG.md",
    "CONTRIBUTING.md",
    ".DS_Store",
)


def should_ignore_file(path: str, ignored: Iterable[str] = IGNORED_FILES) -> bool:
    """Check whether a file is skipped, by exact basename or suffix match."""
    file_name = path.rsplit("/", 1)[-1].lower()
    if not file_name:
        return False
    return any(
        file_name == entry.lower() or file_name.endswith(entry.lower())
        for entry in ignored
    )
