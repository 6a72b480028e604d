"""CLI entrypoints for dtsgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_api_package_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--api-package",
        dest="api_packages",
        action="append",
        default=[],
        metavar="PREFIX",
        help="Dotted package prefix eligible for cross-file imports (repeatable).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dtsgen",
        description="Generate TypeScript declaration files from Java API sources.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Convert every Java source under the configured source directories.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory holding .dtsgen.yml (defaults to current directory).",
    )
    generate_parser.add_argument(
        "--source",
        dest="source_dirs",
        action="append",
        default=[],
        metavar="DIR",
        help="Java source root to scan (repeatable; overrides source_dirs).",
    )
    generate_parser.add_argument(
        "--output",
        dest="output_dir",
        metavar="DIR",
        help="Directory receiving generated declarations.",
    )
    _add_api_package_option(generate_parser)
    generate_parser.add_argument(
        "--clean",
        dest="clean_output_first",
        action="store_true",
        default=None,
        help="Delete previously generated .d.ts files before generating.",
    )
    generate_parser.add_argument(
        "--patches",
        dest="patches_dir",
        metavar="DIR",
        help="Directory of hand-written declarations copied to <output>/patches.",
    )
    generate_parser.add_argument(
        "--exclude",
        dest="exclude_paths",
        action="append",
        default=[],
        metavar="GLOB",
        help="Glob pattern of source paths to skip (repeatable).",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Print the declaration generated for a single Java file.",
    )
    _add_verbose_option(convert_parser, suppress_default=True)
    convert_parser.add_argument("file", help="Java source file to convert.")
    _add_api_package_option(convert_parser)
    convert_parser.add_argument(
        "--dts-path",
        help="Output path used to resolve relative imports (defaults to the file name).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dtsgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    orchestrator = Orchestrator()

    if args.command == "generate":
        try:
            config = load_config(Path(args.path).expanduser()).with_overrides(
                source_dirs=args.source_dirs,
                output_dir=args.output_dir,
                api_packages=args.api_packages,
                clean_output_first=args.clean_output_first,
                patches_dir=args.patches_dir,
                exclude_paths=args.exclude_paths,
            )
            result = orchestrator.run(config)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"dtsgen generate failed: {exc}\nRun with --verbose for more details.\n")
        if result.empty:
            print("No declarations generated")
        else:
            rel_path = _relativize(result.output_dir or Path.cwd())
            print(
                f"Wrote {len(result.files_written)} file(s) to {rel_path} "
                f"({result.types} types, {result.hooks} hooks)"
            )
    elif args.command == "convert":
        source_path = Path(args.file).expanduser()
        try:
            text = source_path.read_text(encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"{exc}\n")
        dts_path = args.dts_path or source_path.with_suffix("").name + ".d.ts"
        outcome = orchestrator.convert_source(text, dts_path, args.api_packages)
        if not outcome.declaration:
            parser.exit(1, f"No public interface or class found in {args.file}\n")
        sys.stdout.write(outcome.declaration)
    elif args.command == "serve":
        from .service.app import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
