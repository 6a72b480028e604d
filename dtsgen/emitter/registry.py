"""Cross-file registries accumulated while emitting one batch."""

from __future__ import annotations

from typing import Dict, Iterator, List

from ..logging import get_logger
from ..models import HookRecord, ParsedJavaFile, TypeRecord

EVENT_SUFFIX = "Event"

RESERVED_WORDS = frozenset(
    {
        "break",
        "case",
        "catch",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "finally",
        "for",
        "function",
        "if",
        "in",
        "instanceof",
        "new",
        "return",
        "switch",
        "this",
        "throw",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "class",
        "const",
        "enum",
        "export",
        "extends",
        "import",
        "super",
        "implements",
        "interface",
        "let",
        "package",
        "private",
        "protected",
        "public",
        "static",
        "yield",
    }
)

logger = get_logger("emitter.registry")


def derive_hook_name(type_name: str) -> str:
    """Hook function name for an event sub-type, e.g. ``InitEvent`` -> ``init``.

    A reserved word gets an ``on`` prefix on the original-case stem
    (``Break`` -> ``onBreak``).
    """
    stem = type_name
    if stem.endswith(EVENT_SUFFIX):
        stem = stem[: -len(EVENT_SUFFIX)]
    if not stem:
        return stem
    hook_name = stem[:1].lower() + stem[1:]
    if hook_name in RESERVED_WORDS:
        hook_name = "on" + stem
    return hook_name


class TypeIndex:
    """Every generated top-level and first-level nested type of a batch."""

    def __init__(self) -> None:
        self._records: List[TypeRecord] = []

    def register(self, parsed: ParsedJavaFile, file_path: str) -> None:
        for java_type in parsed.types:
            self._records.append(
                TypeRecord(
                    name=java_type.name,
                    package_name=parsed.package_name,
                    file_path=file_path,
                    is_class=java_type.is_class,
                    is_interface=java_type.is_interface,
                    extends_type=java_type.extends_type,
                )
            )
            for nested in java_type.nested_types:
                self._records.append(
                    TypeRecord(
                        name=f"{java_type.name}.{nested.name}",
                        package_name=parsed.package_name,
                        file_path=file_path,
                        is_class=nested.is_class,
                        is_interface=nested.is_interface,
                        extends_type=nested.extends_type,
                        parent_type=java_type.name,
                    )
                )

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TypeRecord]:
        return iter(self._records)

    def top_level(self) -> List[TypeRecord]:
        """Distinct top-level records sorted by name; the first path wins on a clash."""
        ordered = sorted(
            (record for record in self._records if not record.is_nested),
            key=lambda record: (record.name, record.file_path),
        )
        distinct: List[TypeRecord] = []
        seen: Dict[str, TypeRecord] = {}
        for record in ordered:
            kept = seen.get(record.name)
            if kept is not None:
                logger.warning(
                    "Type %s declared in both %s and %s; indexing %s",
                    record.name,
                    kept.file_path,
                    record.file_path,
                    kept.file_path,
                )
                continue
            seen[record.name] = record
            distinct.append(record)
        return distinct


class HookIndex:
    """Hook overloads keyed by derived hook name, in first-seen order."""

    def __init__(self) -> None:
        self._hooks: Dict[str, List[HookRecord]] = {}

    def collect(self, parsed: ParsedJavaFile) -> None:
        for java_type in parsed.types:
            if not (java_type.is_interface and java_type.name.endswith(EVENT_SUFFIX)):
                continue
            for nested in java_type.nested_types:
                hook_name = derive_hook_name(nested.name)
                if not hook_name:
                    logger.debug("Skipping %s.%s: no hook name", java_type.name, nested.name)
                    continue
                self._hooks.setdefault(hook_name, []).append(
                    HookRecord(
                        name=hook_name,
                        event_type=java_type.name,
                        sub_event=nested.name,
                        full_type=f"{java_type.name}.{nested.name}",
                        package_name=parsed.package_name,
                    )
                )

    def __len__(self) -> int:
        return sum(len(records) for records in self._hooks.values())

    def names(self) -> List[str]:
        return list(self._hooks)

    def overloads(self, hook_name: str) -> List[HookRecord]:
        return list(self._hooks.get(hook_name, []))

    def entries(self) -> List[HookRecord]:
        """All hook overloads grouped by name in accumulation order."""
        return [record for records in self._hooks.values() for record in records]


__all__ = [
    "EVENT_SUFFIX",
    "HookIndex",
    "RESERVED_WORDS",
    "TypeIndex",
    "derive_hook_name",
]
