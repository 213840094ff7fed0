"""CLI: jnibind <command> ... → JNI symbol names and exported Rust declarations."""

from __future__ import annotations

import argparse
import copy
import dataclasses
import json
import sys
from pathlib import Path
from typing import Optional

from .codegen.declaration import Hook, Namespaced
from .codegen.emitter import render_result, result_to_dict
from .codegen.namespace import namespace_problems, validate_namespace
from .codegen.naming import mangle, mangle_hook
from .codegen.transformer import DeclarationTransformer, TransformResult
from .frontend.expander import SourceExpander
from .frontend.parser import parse_item
from .utils.config import OUTPUT_FORMATS, JnibindConfig, get_config, load_config, set_config
from .utils.constants import HookKind
from .utils.diagnostics import format_diagnostic
from .utils.exceptions import ParseError
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_DIAGNOSTIC = 1
EXIT_USAGE = 2

_HOOK_COMMANDS = {"on-load": HookKind.ON_LOAD, "on-unload": HookKind.ON_UNLOAD}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jnibind",
        description="Generate JNI symbol names and exported Rust declarations.",
    )
    parser.add_argument("--config", help="Path to a JSON or YAML configuration file")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="Output format")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("mangle", help="Print the JNI symbol for a method")
    p.add_argument("namespace", help="Package namespace, e.g. com.example.Foo")
    p.add_argument("function", help="Method name")

    p = sub.add_parser("hook", help="Print a lifecycle hook symbol")
    p.add_argument("kind", choices=sorted(_HOOK_COMMANDS))
    p.add_argument("--lib", help="Library name for statically linked libraries")

    p = sub.add_parser("check", help="Validate a package namespace")
    p.add_argument("namespace")

    p = sub.add_parser("export", help="Export one function under a namespace")
    p.add_argument("namespace")
    p.add_argument("file", nargs="?", default="-", help="Rust source with one fn item (default: stdin)")

    for command in sorted(_HOOK_COMMANDS):
        p = sub.add_parser(command, help=f"Export one function as the {_HOOK_COMMANDS[command].symbol} hook")
        p.add_argument("--lib", help="Library name for statically linked libraries")
        p.add_argument("file", nargs="?", default="-", help="Rust source with one fn item (default: stdin)")

    p = sub.add_parser("expand", help="Expand every export attribute in a source file")
    p.add_argument("file", help="Rust source file ('-' for stdin)")
    p.add_argument("-o", "--output", help="Write the expanded source here instead of stdout")

    sub.add_parser("info", help="Show version and environment information")
    return parser


def _read_source(path: str) -> tuple[str, str]:
    if path == "-":
        return sys.stdin.read(), "<stdin>"
    return Path(path).read_text(encoding="utf-8"), path


def _write(text: str, config: JnibindConfig, stream=None) -> None:
    stream = stream or sys.stdout
    if config.output.trailing_newline and not text.endswith("\n"):
        text += "\n"
    stream.write(text)


def _report(diagnostics: list, source: Optional[str], config: JnibindConfig) -> None:
    shown = source if config.diagnostics.show_source else None
    for diagnostic in diagnostics:
        print(format_diagnostic(diagnostic, shown), file=sys.stderr)


def _emit_result(result: TransformResult, source: str, config: JnibindConfig) -> int:
    if config.output.format == "json":
        _write(json.dumps(result_to_dict(result), indent=2), config)
        return EXIT_OK if result.ok else EXIT_DIAGNOSTIC

    if result.ok or config.diagnostics.emit_compile_error:
        _write(render_result(result), config)
        return EXIT_OK

    _report([result.diagnostic], source, config)
    return EXIT_DIAGNOSTIC


def _cmd_mangle(args, config: JnibindConfig) -> int:
    if not validate_namespace(args.namespace):
        problems = "; ".join(namespace_problems(args.namespace))
        print(f"error: invalid package namespace '{args.namespace}': {problems}", file=sys.stderr)
        return EXIT_USAGE
    _write(mangle(args.namespace, args.function), config)
    return EXIT_OK


def _cmd_hook(args, config: JnibindConfig) -> int:
    _write(mangle_hook(_HOOK_COMMANDS[args.kind], args.lib), config)
    return EXIT_OK


def _cmd_check(args, config: JnibindConfig) -> int:
    problems = namespace_problems(args.namespace)
    if not problems:
        _write(f"{args.namespace}: ok", config)
        return EXIT_OK
    for problem in problems:
        print(f"{args.namespace}: {problem}", file=sys.stderr)
    return EXIT_DIAGNOSTIC


def _cmd_transform(args, config: JnibindConfig) -> int:
    source, name = _read_source(args.file)
    item = parse_item(source, name)
    transformer = DeclarationTransformer()

    if args.command == "export":
        export = Namespaced(args.namespace)
    else:
        export = Hook(_HOOK_COMMANDS[args.command], args.lib)

    return _emit_result(transformer.transform(item, export), source, config)


def _cmd_expand(args, config: JnibindConfig) -> int:
    source, name = _read_source(args.file)
    expansion = SourceExpander().expand(source, name)

    if config.output.format == "json":
        _write(json.dumps({
            "ok": expansion.ok,
            "symbols": expansion.symbols,
            "results": [result_to_dict(r) for r in expansion.results],
        }, indent=2), config)
        return EXIT_OK if expansion.ok else EXIT_DIAGNOSTIC

    if not expansion.ok:
        _report(expansion.diagnostics, source, config)
        if not config.diagnostics.emit_compile_error:
            return EXIT_DIAGNOSTIC

    if args.output:
        Path(args.output).write_text(expansion.source, encoding="utf-8")
        logger.info(f"Wrote {args.output}")
    else:
        sys.stdout.write(expansion.source)
    return EXIT_OK


def _cmd_info(args, config: JnibindConfig) -> int:
    from .utils.info import print_info

    print_info()
    return EXIT_OK


_COMMANDS = {
    "mangle": _cmd_mangle,
    "hook": _cmd_hook,
    "check": _cmd_check,
    "export": _cmd_transform,
    "on-load": _cmd_transform,
    "on-unload": _cmd_transform,
    "expand": _cmd_expand,
    "info": _cmd_info,
}


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config) if args.config else get_config()
    if args.config:
        set_config(config)
    if args.format:
        # Command-line overrides never reach the global config.
        config = copy.copy(config)
        config.output = dataclasses.replace(config.output, format=args.format)

    level = args.log_level or config.logging.level
    setup_logging(level, config.logging.log_file if config.logging.enable_file_logging else None)

    try:
        return _COMMANDS[args.command](args, config)
    except ParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
