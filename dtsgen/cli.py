"""CLI entrypoints for dtsgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .models import ModuleConfig
from .orchestrator import Orchestrator
from .registry import UnknownModuleError
from .translate import translate


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


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .dtsgen.yml or the directory containing it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dtsgen",
        description="Generate TypeScript declarations from LuaCATS annotation files.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records, with timestamps, to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate declaration files for every registered module (or one).",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument(
        "module",
        nargs="?",
        default=None,
        help="Logical module name, e.g. common/modules/buff_manager.",
    )

    list_parser = subparsers.add_parser("list", help="List registered modules.")
    _add_verbose_option(list_parser, suppress_default=True)
    _add_config_option(list_parser)

    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate a single annotation file without the module registry.",
    )
    _add_verbose_option(translate_parser, suppress_default=True)
    translate_parser.add_argument("file", help="Annotated Lua file to translate.")
    translate_parser.add_argument(
        "--module-name",
        default=None,
        help="Module path for the `declare module` binding (defaults to the file stem).",
    )
    translate_parser.add_argument("--main-export", default=None, help="Interface exported by default.")
    translate_parser.add_argument(
        "--filter",
        action="append",
        default=[],
        dest="filters",
        help="Only include matching classes; trailing * matches a prefix. Repeatable.",
    )
    translate_parser.add_argument(
        "--global-var",
        action="store_true",
        help="Also declare the main export as a global variable.",
    )
    translate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the declaration to this path instead of stdout.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP translation service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dtsgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "generate":
        try:
            config = load_config(Path(args.config))
            summary = Orchestrator(config).run(args.module)
        except (ConfigError, UnknownModuleError) as exc:
            parser.exit(1, f"{exc}\n")
        print(f"Done! {summary.describe()}")
        if summary.exit_code:
            parser.exit(summary.exit_code)
    elif args.command == "list":
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        for module in config.registry:
            print(f"{module.name}\t{module.source_file}\t{module.describe_flags()}")
    elif args.command == "translate":
        _run_translate(parser, args)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_translate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    source = Path(args.file)
    if not source.exists():
        parser.exit(1, f"API file not found: {source}\n")
    module = ModuleConfig(
        name=args.module_name or source.stem,
        source_file=source.name,
        main_export=args.main_export,
        filter_classes=tuple(args.filters),
        declare_global_var=bool(args.global_var),
    )
    try:
        source_text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        parser.exit(1, f"Failed to read {source}: {exc}\n")
    outcome = translate(source_text, module)
    if outcome.declaration is None:
        parser.exit(1, f"{outcome.status}: {outcome.reason}\n")
    if args.output:
        target = Path(args.output)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(outcome.declaration, encoding="utf-8")
        print(f"Declaration written to {_relativize(target)}")
    else:
        sys.stdout.write(outcome.declaration)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
