"""Pipeline orchestration for declaration generation runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .config import GeneratorConfig, load_config
from .emitter import DeclarationEmitter
from .logging import get_logger, log_banner
from .models import GenerationResult
from .output import clean_output, copy_patches, write_text
from .parser import JavaSourceParser
from .source_scanner import SourceFile, SourceScanner


@dataclass
class ConversionOutcome:
    """Declaration text for a single in-memory conversion."""

    declaration: str
    types: int
    hooks: int


class Orchestrator:
    """Coordinates scan, parse, emit and write for one generation run."""

    def __init__(
        self,
        scanner: SourceScanner | None = None,
        parser: JavaSourceParser | None = None,
    ) -> None:
        self._scanner_override = scanner
        self.parser = parser or JavaSourceParser()
        self.logger = get_logger("orchestrator")

    def generate(self, path: str, **overrides: Any) -> GenerationResult:
        """Load ``.dtsgen.yml`` from ``path`` and run the generator."""
        target = Path(path).expanduser()
        if not target.exists():
            raise FileNotFoundError(f"Path not found: {path}")
        config = load_config(target)
        if overrides:
            config = config.with_overrides(**overrides)
        return self.run(config)

    def run(self, config: GeneratorConfig) -> GenerationResult:
        output_dir = config.output_dir or config.root
        result = GenerationResult(output_dir=output_dir)

        log_banner(self.logger, "Generating TypeScript declarations from Java sources")
        self.logger.info("Source: %s", ", ".join(str(path) for path in config.source_dirs) or "(none)")
        self.logger.info("Output: %s", output_dir)
        self.logger.info("API Packages: %s", ", ".join(config.api_packages) or "(none)")

        if not config.source_dirs:
            self.logger.warning("No source directories configured; nothing to generate")
            return result

        source_dirs = self._existing_source_dirs(config.source_dirs)
        if not source_dirs:
            self.logger.error("No valid source directories found")
            return result

        if config.clean_output_first and output_dir.exists():
            clean_output(output_dir)

        scanner = self._scanner_override or SourceScanner(config.exclude_paths)
        sources = scanner.scan_all(source_dirs)
        self.logger.debug("Scanner discovered %d Java file(s)", len(sources))

        emitter = DeclarationEmitter(config.api_packages, header_title=config.header_title)
        for source in sources:
            written = self._process(source, emitter, output_dir)
            if written is None:
                result.skipped.append(source.path)
            else:
                result.files_written.append(written)

        for filename, text in emitter.flush().items():
            result.files_written.append(write_text(output_dir / filename, text))

        if config.patches_dir is not None:
            copy_patches(config.patches_dir, output_dir)

        result.types = len(emitter.types)
        result.hooks = len(emitter.hooks)
        self.logger.info(
            "Generated %d declaration file(s) with %d type(s) and %d hook(s)",
            len(result.files_written),
            result.types,
            result.hooks,
        )
        if result.skipped and self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("Skipped %d file(s) without public types", len(result.skipped))
        return result

    def convert_source(
        self,
        text: str,
        dts_path: str,
        api_packages: Sequence[str] = (),
        *,
        header_title: Optional[str] = None,
    ) -> ConversionOutcome:
        """Render one Java source in memory with a throwaway emitter."""
        kwargs = {"header_title": header_title} if header_title else {}
        emitter = DeclarationEmitter(api_packages, **kwargs)
        parsed = self.parser.parse(text)
        declaration = emitter.emit(parsed, dts_path) if parsed.types else ""
        return ConversionOutcome(
            declaration=declaration,
            types=len(emitter.types),
            hooks=len(emitter.hooks),
        )

    def _existing_source_dirs(self, source_dirs: Sequence[Path]) -> List[Path]:
        existing: List[Path] = []
        for source_dir in source_dirs:
            if source_dir.is_dir():
                existing.append(source_dir)
            else:
                self.logger.warning("Source directory not found: %s", source_dir)
        return existing

    def _process(
        self, source: SourceFile, emitter: DeclarationEmitter, output_dir: Path
    ) -> Path | None:
        try:
            text = source.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Unable to read %s: %s", source.path, exc)
            return None

        parsed = self.parser.parse(text)
        if not parsed.types:
            self.logger.debug("No public types in %s; skipping", source.relative_path)
            return None

        dts_path = source.dts_path
        declaration = emitter.emit(parsed, dts_path)
        self.logger.debug("Writing %s", dts_path)
        return write_text(output_dir / dts_path, declaration)


__all__ = ["ConversionOutcome", "Orchestrator"]
