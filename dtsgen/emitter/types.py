"""Java to TypeScript type conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional, Tuple

from ..models import ParsedJavaFile
from ..parser.scanning import split_top_level
from .paths import relative_module_path, type_declaration_path

PRIMITIVE_MAPPINGS = {
    "void": "void",
    "boolean": "boolean",
    "byte": "number",
    "short": "number",
    "int": "number",
    "long": "number",
    "float": "number",
    "double": "number",
    "char": "string",
    "String": "string",
    "Object": "any",
    "Boolean": "boolean",
    "Byte": "number",
    "Short": "number",
    "Integer": "number",
    "Long": "number",
    "Float": "number",
    "Double": "number",
    "Character": "string",
    "Number": "number",
}

COLLECTION_TYPES = frozenset(
    {"List", "ArrayList", "LinkedList", "Collection", "Set", "HashSet", "Queue"}
)
MAP_TYPES = frozenset({"Map", "HashMap", "LinkedHashMap"})
FUNCTIONAL_TYPES = frozenset(
    {
        "Consumer",
        "Supplier",
        "Function",
        "Predicate",
        "BiConsumer",
        "BiFunction",
        "Runnable",
        "Callable",
    }
)

_WILDCARD = re.compile(r"^\?\s+(?:extends|super)\s+(.+)$", re.DOTALL)
# Single capital letter, optionally numbered: T, K, V, T2.
_TYPE_VARIABLE = re.compile(r"^[A-Z]\d?$")


def type_parameter_names(type_params: Optional[str]) -> FrozenSet[str]:
    """Names declared by a raw ``<...>`` parameter list such as ``K, V extends X``."""
    if not type_params:
        return frozenset()
    names = set()
    for part in split_top_level(type_params):
        tokens = part.split()
        if tokens:
            names.add(tokens[0])
    return frozenset(names)


@dataclass(frozen=True)
class ConversionContext:
    """Where a type reference appears: its file, output path and type variables."""

    parsed: ParsedJavaFile
    current_path: str
    type_vars: FrozenSet[str] = field(default_factory=frozenset)

    def with_type_params(self, type_params: Optional[str]) -> "ConversionContext":
        names = type_parameter_names(type_params)
        if not names:
            return self
        return replace(self, type_vars=self.type_vars | names)


class TypeConverter:
    """Converts raw Java type text to TypeScript type text."""

    def __init__(self, api_packages: Iterable[str]) -> None:
        self.api_packages = tuple(prefix for prefix in api_packages if prefix)

    def convert(self, java_type: Optional[str], context: ConversionContext) -> str:
        if java_type is None or not java_type.strip():
            return "any"
        java_type = java_type.strip()

        if java_type in PRIMITIVE_MAPPINGS:
            return PRIMITIVE_MAPPINGS[java_type]

        if java_type == "?":
            return "any"
        wildcard = _WILDCARD.match(java_type)
        if wildcard:
            return self.convert(wildcard.group(1), context)

        if java_type.endswith("[]"):
            element = self.convert(java_type[:-2], context)
            return f"{_parenthesize(element)}[]"

        if "<" in java_type:
            return self._convert_generic(java_type, context)

        if java_type == "Runnable":
            return "() => void"
        if java_type in FUNCTIONAL_TYPES:
            return "Function"

        if java_type in context.type_vars or _TYPE_VARIABLE.match(java_type):
            return java_type

        outer, member = self._locate(java_type, context.parsed)
        if self.is_api_type(outer):
            target = type_declaration_path(outer)
            specifier = relative_module_path(context.current_path, target)
            return f"import('{specifier}').{member}"

        full_type = _qualify(outer, member)
        if full_type.startswith("java."):
            return f"Java.{full_type}"

        return java_type

    def convert_for_nested(
        self, java_type: Optional[str], enclosing: str, context: ConversionContext
    ) -> str:
        """Convert a nested type's supertype, keeping the enclosing name local."""
        if java_type is None or not java_type.strip():
            return "any"
        java_type = java_type.strip()
        if java_type == enclosing:
            return enclosing
        return self.convert(java_type, context)

    def is_api_type(self, full_type: str) -> bool:
        return any(full_type.startswith(prefix) for prefix in self.api_packages)

    def resolve_full_type(self, type_name: str, parsed: ParsedJavaFile) -> str:
        """Fully qualified name for ``type_name`` as seen from ``parsed``."""
        return _qualify(*self._locate(type_name, parsed))

    def _convert_generic(self, java_type: str, context: ConversionContext) -> str:
        open_index = java_type.index("<")
        close_index = java_type.rfind(">")
        base = java_type[:open_index].strip()
        if close_index > open_index:
            inner = java_type[open_index + 1 : close_index].strip()
        else:
            inner = java_type[open_index + 1 :].strip()
        args = split_top_level(inner)

        def arg(index: int) -> str:
            return self.convert(args[index], context)

        if base in COLLECTION_TYPES:
            return f"{_parenthesize(self.convert(inner, context))}[]"

        if base in MAP_TYPES:
            if len(args) >= 2:
                return f"Record<{arg(0)}, {arg(1)}>"
            return "Record<any, any>"

        if base == "Optional":
            return f"{self.convert(inner, context)} | null"

        if base == "Consumer":
            return f"(arg: {self.convert(inner, context)}) => void"

        if base in ("Supplier", "Callable"):
            return f"() => {self.convert(inner, context)}"

        if base == "Function":
            if len(args) >= 2:
                return f"(arg: {arg(0)}) => {arg(1)}"
            return "(arg: any) => any"

        if base == "Predicate":
            return f"(arg: {self.convert(inner, context)}) => boolean"

        if base == "BiConsumer":
            if len(args) >= 2:
                return f"(arg1: {arg(0)}, arg2: {arg(1)}) => void"
            return "(arg1: any, arg2: any) => void"

        if base == "BiFunction":
            if len(args) >= 3:
                return f"(arg1: {arg(0)}, arg2: {arg(1)}) => {arg(2)}"
            return "(arg1: any, arg2: any) => any"

        converted_base = self.convert(base, context)
        # An import('...') reference cannot take trailing type arguments here.
        if converted_base.startswith("import("):
            return converted_base
        converted_args = ", ".join(self.convert(item, context) for item in args)
        return f"{converted_base}<{converted_args}>"

    @staticmethod
    def _locate(java_type: str, parsed: ParsedJavaFile) -> Tuple[str, str]:
        """Return the outer type's qualified name and the name to reference in its module."""
        segments = java_type.split(".")
        if len(segments) > 1 and segments[0][:1].islower():
            for index, segment in enumerate(segments):
                if segment[:1].isupper():
                    return ".".join(segments[: index + 1]), ".".join(segments[index:])
            return java_type, segments[-1]

        head = segments[0]
        for imported in parsed.imports:
            if imported.endswith(f".{head}"):
                return imported, java_type
        # Wildcard imports are not expanded; assume the current package.
        if parsed.package_name:
            return f"{parsed.package_name}.{head}", java_type
        return head, java_type


def _qualify(outer: str, member: str) -> str:
    """Join a located outer type with the nested part of ``member``."""
    if "." in member:
        return f"{outer}.{member.split('.', 1)[1]}"
    return outer


def _parenthesize(ts_type: str) -> str:
    if " | " in ts_type or "=>" in ts_type:
        return f"({ts_type})"
    return ts_type


__all__ = [
    "COLLECTION_TYPES",
    "ConversionContext",
    "FUNCTIONAL_TYPES",
    "MAP_TYPES",
    "PRIMITIVE_MAPPINGS",
    "TypeConverter",
    "type_parameter_names",
]
