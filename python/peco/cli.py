from __future__ import annotations

import importlib
import json
import logging
import os
import sys
from typing import Any, Optional

from .accessor import AttributeAccessor
from .errors import PecoError

_USAGE = "peco [options] [module:Class]"
_DESCRIPTION = "Print the cataloged attributes of a class instance"
_DEFAULT_TARGET = "peco.demo:Cls"
_OUTPUT_FLAGS = {"--names": "names", "--types": "types", "--json": "json"}


class _Args:
    def __init__(self) -> None:
        self.target: Optional[str] = None
        self.assignments: list[tuple[str, str]] = []
        self.paths: list[str] = []
        self.outputs: list[str] = []
        self.verbose = False
        self.version = False
        self.help = False


def _print_help(file=None) -> None:
    if file is None:
        file = sys.stdout
    print(f"usage: {_USAGE}", file=file)
    print("", file=file)
    print(_DESCRIPTION, file=file)
    print(f"(default target: {_DEFAULT_TARGET})", file=file)
    print("", file=file)
    print("options:", file=file)
    print(
        "  -s, --set <name=value>  assign an attribute before printing (repeatable);",
        file=file,
    )
    print("                          value is parsed as JSON, else kept as text", file=file)
    print("  -p, --path <dir>        prepend a directory to sys.path (repeatable)", file=file)
    print("  --names                 print attribute names in catalog order", file=file)
    print("  --types                 print 'name: type' per attribute", file=file)
    print("  --json                  print a JSON object of name -> value", file=file)
    print("  --verbose               enable debug logging", file=file)
    print("  -v, --version           show version and exit", file=file)
    print("  -h, --help              show this help message and exit", file=file)


def _split_assignment(text: str) -> tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise ValueError(f"expected name=value, got {text!r}")
    return name, value


def _parse_args(argv: list[str]) -> _Args:
    args = _Args()
    idx = 0
    while idx < len(argv):
        token = argv[idx]
        if token in ("-h", "--help"):
            args.help = True
            return args
        if token in ("-v", "--version"):
            args.version = True
            idx += 1
            continue
        if token == "--verbose":
            args.verbose = True
            idx += 1
            continue
        if token in _OUTPUT_FLAGS:
            args.outputs.append(_OUTPUT_FLAGS[token])
            idx += 1
            continue
        if token in ("-s", "--set"):
            if idx + 1 >= len(argv):
                raise ValueError(f"option {token} requires an argument")
            args.assignments.append(_split_assignment(argv[idx + 1]))
            idx += 2
            continue
        if token in ("-p", "--path"):
            if idx + 1 >= len(argv):
                raise ValueError(f"option {token} requires an argument")
            args.paths.append(argv[idx + 1])
            idx += 2
            continue
        if token.startswith("-"):
            raise ValueError(f"unknown option: {token}")
        if args.target is not None:
            raise ValueError(f"unexpected argument: {token}")
        args.target = token
        idx += 1
    return args


def _get_version() -> str:
    from . import __version__ as version

    return version


def _format_python_runtime() -> str:
    version = (
        f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    )
    executable = sys.executable or "<unknown>"
    if executable != "<unknown>":
        executable = os.path.abspath(executable)
    return f"Python {version} ({executable})"


def _load_class(target: str) -> type:
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"target must look like module:Class, got {target!r}")
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    if not isinstance(obj, type):
        raise TypeError(f"{target} is not a class")
    return obj


def _parse_value(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _assign(acc: AttributeAccessor, name: str, text: str) -> None:
    value = _parse_value(text)
    descriptor = acc.catalog.descriptor_by_name(name)
    if value is not text and not descriptor.accepts(value) and descriptor.accepts(text):
        # e.g. --set Name=123 on a str attribute
        value = text
    acc.set(name, value)


def _format_type(declared: Any) -> str:
    if isinstance(declared, type):
        return declared.__qualname__
    return repr(declared).replace("typing.", "")


def _render(acc: AttributeAccessor, output: str) -> None:
    if output == "names":
        for descriptor in acc.catalog:
            print(descriptor.name)
    elif output == "types":
        for descriptor in acc.catalog:
            print(f"{descriptor.name}: {_format_type(descriptor.declared_type)}")
    elif output == "json":
        print(json.dumps(dict(acc.items()), default=str, ensure_ascii=False))
    else:
        for value in acc.iterate():
            print(value)


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        namespace = _parse_args(argv)
    except ValueError as exc:
        _print_help(file=sys.stderr)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if namespace.help:
        _print_help()
        return 0
    if namespace.version:
        version = _get_version()
        print(f"peco {version if version.startswith('v') else 'v' + version}")
        print(_format_python_runtime())
        return 0

    if len(namespace.outputs) > 1:
        flags = " and ".join(f"--{name}" for name in namespace.outputs)
        print(f"error: {flags} cannot be used together", file=sys.stderr)
        return 2

    if namespace.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    for path in reversed(namespace.paths):
        sys.path.insert(0, path)

    target = namespace.target or _DEFAULT_TARGET
    try:
        cls = _load_class(target)
    except (ImportError, AttributeError, TypeError, ValueError) as exc:
        print(f"failed to load {target}: {exc}", file=sys.stderr)
        return 1

    try:
        instance = cls()
    except TypeError as exc:
        print(f"failed to instantiate {target}: {exc}", file=sys.stderr)
        return 1

    try:
        acc = AttributeAccessor(instance)
        for name, text in namespace.assignments:
            _assign(acc, name, text)
        _render(acc, namespace.outputs[0] if namespace.outputs else "values")
    except PecoError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
