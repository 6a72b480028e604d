"""Batch-scoped declaration emitter."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Sequence

from jinja2 import Environment, FileSystemLoader

from ..logging import get_logger
from ..models import ParsedJavaFile
from .registry import HookIndex, TypeIndex
from .render import DeclarationRenderer
from .types import TypeConverter

INDEX_FILENAME = "index.d.ts"
HOOKS_FILENAME = "hooks.d.ts"
RAW_DECLARATION_FILES = ("minecraft-raw.d.ts", "forge-events-raw.d.ts")

_TEMPLATES_DIR = Path(__file__).with_name("templates")

logger = get_logger("emitter")


class DeclarationEmitter:
    """Renders parsed files and accumulates the index and hook registries.

    One instance covers one batch: call :meth:`emit` per source file, then
    :meth:`flush` once to obtain the aggregate files.
    """

    def __init__(
        self,
        api_packages: Iterable[str],
        *,
        header_title: str = "Java API",
        hook_references: Sequence[str] = RAW_DECLARATION_FILES,
    ) -> None:
        self.converter = TypeConverter(api_packages)
        self.renderer = DeclarationRenderer(self.converter, header_title=header_title)
        self.header_title = header_title
        self.hook_references = list(hook_references)
        self.types = TypeIndex()
        self.hooks = HookIndex()
        self._env = Environment(
            loader=FileSystemLoader(str(_TEMPLATES_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def emit(self, parsed: ParsedJavaFile, dts_path: str) -> str:
        """Return the declaration text for ``parsed`` and register its types and hooks."""
        text = self.renderer.render(parsed, dts_path)
        self.types.register(parsed, dts_path)
        self.hooks.collect(parsed)
        logger.debug("Emitted %s (%d types)", dts_path, len(parsed.types))
        return text

    def render_index(self) -> str:
        template = self._env.get_template("index.d.ts.j2")
        return template.render(title=self.header_title, records=self.types.top_level())

    def render_hooks(self) -> str:
        template = self._env.get_template("hooks.d.ts.j2")
        return template.render(
            title=self.header_title,
            references=self.hook_references,
            hooks=self.hooks.entries(),
        )

    def flush(self) -> Dict[str, str]:
        """Aggregate files keyed by their name under the output root."""
        return {
            INDEX_FILENAME: self.render_index(),
            HOOKS_FILENAME: self.render_hooks(),
        }


__all__ = [
    "DeclarationEmitter",
    "HOOKS_FILENAME",
    "INDEX_FILENAME",
    "RAW_DECLARATION_FILES",
]
