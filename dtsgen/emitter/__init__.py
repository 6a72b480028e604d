"""TypeScript declaration emission."""

from .core import (
    HOOKS_FILENAME,
    INDEX_FILENAME,
    RAW_DECLARATION_FILES,
    DeclarationEmitter,
)
from .paths import declaration_path, relative_module_path
from .registry import HookIndex, TypeIndex, derive_hook_name
from .render import DeclarationRenderer, reindent_doc
from .types import ConversionContext, TypeConverter

__all__ = [
    "ConversionContext",
    "DeclarationEmitter",
    "DeclarationRenderer",
    "HOOKS_FILENAME",
    "HookIndex",
    "INDEX_FILENAME",
    "RAW_DECLARATION_FILES",
    "TypeConverter",
    "TypeIndex",
    "declaration_path",
    "derive_hook_name",
    "reindent_doc",
    "relative_module_path",
]
