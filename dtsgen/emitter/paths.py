"""Module-relative path algebra for generated declaration files."""

from __future__ import annotations

from pathlib import PurePath

JAVA_SUFFIX = ".java"
DTS_SUFFIX = ".d.ts"


def declaration_path(relative_source: PurePath | str) -> str:
    """Map a source path relative to its root onto its output path."""
    posix = PurePath(relative_source).as_posix()
    if posix.endswith(JAVA_SUFFIX):
        posix = posix[: -len(JAVA_SUFFIX)]
    return posix + DTS_SUFFIX


def type_declaration_path(full_type: str) -> str:
    """Output path of a fully qualified type, e.g. ``a.b.C`` -> ``a/b/C.d.ts``."""
    return full_type.replace(".", "/") + DTS_SUFFIX


def strip_dts_suffix(path: str) -> str:
    if path.endswith(DTS_SUFFIX):
        return path[: -len(DTS_SUFFIX)]
    return path


def relative_module_path(from_path: str, to_path: str) -> str:
    """Relative import specifier from one declaration file to another.

    Both arguments are ``/``-separated paths under the same output root.
    The result always starts with ``./`` or ``../`` and carries no
    declaration extension.
    """
    from_parts = from_path.split("/")
    to_parts = to_path.split("/")

    common = 0
    while (
        common < len(from_parts) - 1
        and common < len(to_parts)
        and from_parts[common] == to_parts[common]
    ):
        common += 1

    ups = len(from_parts) - common - 1
    prefix = "./" if ups == 0 else "../" * ups
    return strip_dts_suffix(prefix + "/".join(to_parts[common:]))


__all__ = [
    "DTS_SUFFIX",
    "JAVA_SUFFIX",
    "declaration_path",
    "relative_module_path",
    "strip_dts_suffix",
    "type_declaration_path",
]
