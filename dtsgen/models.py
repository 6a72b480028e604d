"""Core data models shared across dtsgen components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class JavaParameter:
    """One method parameter."""

    name: str
    type: str
    is_varargs: bool = False


@dataclass
class JavaMethod:
    """Method signature extracted from a type body."""

    name: str
    return_type: str
    parameters: List[JavaParameter] = field(default_factory=list)
    jsdoc: Optional[str] = None


@dataclass
class JavaField:
    """Field declaration; only classes carry fields."""

    name: str
    type: str
    jsdoc: Optional[str] = None


@dataclass
class JavaType:
    """Interface or class declaration, top-level or nested."""

    name: str
    is_interface: bool = False
    is_class: bool = False
    is_abstract: bool = False
    type_params: Optional[str] = None
    extends_type: Optional[str] = None
    implements_types: List[str] = field(default_factory=list)
    jsdoc: Optional[str] = None
    methods: List[JavaMethod] = field(default_factory=list)
    fields: List[JavaField] = field(default_factory=list)
    nested_types: List["JavaType"] = field(default_factory=list)

    @property
    def is_marker(self) -> bool:
        """True for an empty sub-type that only names its supertype."""
        return (
            not self.methods
            and not self.fields
            and not self.nested_types
            and bool(self.extends_type)
        )


@dataclass
class ParsedJavaFile:
    """Structural view of one Java compilation unit."""

    package_name: str = ""
    imports: List[str] = field(default_factory=list)
    types: List[JavaType] = field(default_factory=list)


@dataclass
class TypeRecord:
    """Index entry for a generated top-level or dotted nested type."""

    name: str
    package_name: str
    file_path: str
    is_class: bool = False
    is_interface: bool = False
    extends_type: Optional[str] = None
    parent_type: Optional[str] = None

    @property
    def is_nested(self) -> bool:
        return "." in self.name

    @property
    def module_path(self) -> str:
        """Output path without the declaration extension."""
        # Imported here: the emitter package imports this module.
        from .emitter.paths import strip_dts_suffix

        return strip_dts_suffix(self.file_path)


@dataclass
class HookRecord:
    """Event sub-type exposed as a global hook function."""

    name: str
    event_type: str
    sub_event: str
    full_type: str
    package_name: str


@dataclass
class GenerationResult:
    """Summary of one generator run."""

    output_dir: Optional[Path] = None
    files_written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    types: int = 0
    hooks: int = 0

    @property
    def empty(self) -> bool:
        return not self.files_written
