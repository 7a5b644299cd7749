"""
Markdown file discovery for the CLI.

Expands a mix of files, directories, and glob patterns into a sorted,
deduplicated list of Markdown files. Directory walks skip common build and
vendor directories and honor `.gitignore` files and a `.headnumignore` file
found in the walked directory or any parent, all in gitignore syntax via
`pathspec`.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

DEFAULT_INCLUDES: list[str] = ["*.md", "*.markdown"]

# Never worth descending into; pruned during the walk.
DEFAULT_EXCLUDES: list[str] = [
    ".git/",
    ".hg/",
    ".svn/",
    ".venv/",
    "venv/",
    "__pycache__/",
    ".tox/",
    ".mypy_cache/",
    ".pytest_cache/",
    "*.egg-info/",
    "build/",
    "dist/",
    "node_modules/",
    ".obsidian/",
    ".idea/",
    ".vscode/",
    "vendor/",
]

IGNORE_FILENAME = ".headnumignore"

_GLOB_CHARS = frozenset("*?[")


@dataclass
class FileResolverConfig:
    """
    `exclude=None` means use `DEFAULT_EXCLUDES`; a list replaces them entirely.
    `files_max_size=0` disables the size limit.
    """

    include: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDES))
    extend_include: list[str] = field(default_factory=list)
    exclude: list[str] | None = None
    extend_exclude: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    files_max_size: int = 1_048_576  # 1 MiB

    @property
    def effective_include(self) -> list[str]:
        return self.include + self.extend_include

    @property
    def effective_exclude(self) -> list[str]:
        base = self.exclude if self.exclude is not None else list(DEFAULT_EXCLUDES)
        return base + self.extend_exclude


def _read_ignore_lines(path: Path) -> pathspec.PathSpec | None:
    if not path.is_file():
        return None
    lines = [
        line
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


def find_ignore_file(start_dir: Path) -> pathspec.PathSpec | None:
    """Closest `.headnumignore` at or above `start_dir`, compiled."""
    current = start_dir.resolve()
    while True:
        candidate = current / IGNORE_FILENAME
        if candidate.is_file():
            return _read_ignore_lines(candidate)
        if current.parent == current:
            return None
        current = current.parent


class FileResolver:
    """Resolves CLI path arguments to Markdown files."""

    def __init__(self, config: FileResolverConfig | None = None) -> None:
        self.config: FileResolverConfig = config or FileResolverConfig()
        self._include = pathspec.PathSpec.from_lines("gitignore", self.config.effective_include)
        self._exclude = pathspec.PathSpec.from_lines("gitignore", self.config.effective_exclude)
        self._gitignores: dict[Path, pathspec.PathSpec | None] = {}

    def resolve(self, paths: Sequence[str | Path]) -> list[Path]:
        """
        Resolve paths: files are taken as given, directories are walked, and glob
        patterns are expanded. Raises `FileNotFoundError` for anything else.
        """
        found: set[Path] = set()
        for raw_path in paths:
            path = Path(raw_path)
            if path.is_file():
                candidates: Iterator[Path] = iter([path] if not self._too_large(path) else [])
            elif path.is_dir():
                candidates = self._walk(path)
            elif any(c in str(raw_path) for c in _GLOB_CHARS):
                candidates = self._glob(str(raw_path))
            else:
                raise FileNotFoundError(f"Path not found: {raw_path}")
            found.update(p.resolve() for p in candidates)
        return sorted(found)

    def _walk(self, root: Path) -> Iterator[Path]:
        tool_ignore = find_ignore_file(root)
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_dir = current.relative_to(root)
            ignores = self._ignore_chain(root, current)
            if tool_ignore is not None:
                ignores.append(tool_ignore)

            dirnames[:] = sorted(
                d for d in dirnames if not self._dir_excluded(d, rel_dir / d, ignores)
            )
            for filename in filenames:
                path = current / filename
                if not self._include.match_file(filename) or self._too_large(path):
                    continue
                rel_file = str(rel_dir / filename)
                if any(spec.match_file(filename) or spec.match_file(rel_file) for spec in ignores):
                    continue
                yield path

    def _dir_excluded(self, name: str, rel_path: Path, ignores: list[pathspec.PathSpec]) -> bool:
        candidates = [name + "/", f"{rel_path}/"]
        if any(self._exclude.match_file(c) for c in candidates):
            return True
        return any(spec.match_file(c) for spec in ignores for c in candidates)

    def _ignore_chain(self, root: Path, directory: Path) -> list[pathspec.PathSpec]:
        """Gitignore specs from `root` down to `directory`, inclusive."""
        if not self.config.respect_gitignore:
            return []
        specs: list[pathspec.PathSpec] = []
        current = root
        for part in (None, *directory.relative_to(root).parts):
            if part is not None:
                current = current / part
            if current not in self._gitignores:
                self._gitignores[current] = _read_ignore_lines(current / ".gitignore")
            spec = self._gitignores[current]
            if spec is not None:
                specs.append(spec)
        return specs

    def _glob(self, pattern: str) -> Iterator[Path]:
        parts = Path(pattern).parts
        for i, part in enumerate(parts):
            if any(c in part for c in _GLOB_CHARS):
                root = Path(*parts[:i]) if i > 0 else Path(".")
                glob_part = str(Path(*parts[i:]))
                break
        else:
            root, glob_part = Path("."), pattern
        for path in root.glob(glob_part):
            if path.is_file() and self._include.match_file(path.name) and not self._too_large(path):
                yield path

    def _too_large(self, path: Path) -> bool:
        if self.config.files_max_size == 0:
            return False
        try:
            return path.stat().st_size > self.config.files_max_size
        except OSError:
            return False
