"""Discovery of Java source files under the configured source roots."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .emitter.paths import JAVA_SUFFIX, declaration_path

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".gradle",
    ".idea",
    "build",
    "out",
    "node_modules",
    "__pycache__",
}

_SKIPPED_FILES = {"package-info.java", "module-info.java"}


@dataclass(frozen=True)
class SourceFile:
    """A Java file together with the source root it was found under."""

    root: Path
    path: Path

    @property
    def relative_path(self) -> str:
        return self.path.relative_to(self.root).as_posix()

    @property
    def dts_path(self) -> str:
        return declaration_path(self.relative_path)


@dataclass
class ExcludeRule:
    """Glob pattern matched against root-relative POSIX paths."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_exclude_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return ExcludeRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _is_excluded(rel_path: str, is_dir: bool, rules: Sequence[ExcludeRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def _iter_java_files(root: Path, rules: Sequence[ExcludeRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_excluded(rel_path, True, rules):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            if not filename.endswith(JAVA_SUFFIX) or filename in _SKIPPED_FILES:
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _is_excluded(rel_path, False, rules):
                continue
            yield current_dir / filename


class SourceScanner:
    """Walks source roots and lists the Java files to convert."""

    def __init__(self, exclude_paths: Sequence[str] = ()) -> None:
        self.rules: List[ExcludeRule] = [
            rule for rule in (build_exclude_rule(pattern) for pattern in exclude_paths) if rule
        ]

    def scan(self, root: Path) -> List[SourceFile]:
        """Return the Java files under ``root`` in sorted path order."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Source directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {root}")

        files = [SourceFile(root=root_path, path=path) for path in _iter_java_files(root_path, self.rules)]
        files.sort(key=lambda source: source.relative_path)
        return files

    def scan_all(self, roots: Sequence[Path]) -> List[SourceFile]:
        """Scan every existing root in the given order."""
        files: List[SourceFile] = []
        for root in roots:
            if Path(root).is_dir():
                files.extend(self.scan(root))
        return files


__all__ = ["ExcludeRule", "SourceFile", "SourceScanner", "build_exclude_rule"]
