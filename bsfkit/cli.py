"""Command-line entry point for the bsf tool."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from bsfkit.attestation import (
    Statement,
    get_relevant_statements,
    validate_in_toto_statement,
)
from bsfkit.config import pre_check_conf
from bsfkit.styles import ERROR_STYLE, HINT_STYLE, SUCCESS_STYLE

VALID_PREDICATE_ARGS = (
    "provenance",
    "vulnerability",
    "vsa",
    "test-result",
    "spdx",
    "scai",
    "runtime-trace",
    "release",
    "link",
    "cdx",
)

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class _JsonlError(ValueError):
    """Raised when a file is not valid JSON Lines."""


def _read(path: str | Path) -> bytes:
    return Path(path).read_bytes()


def _check_jsonl(data: bytes) -> None:
    text = data.decode("utf-8")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for number, line in enumerate(lines, start=1):
        try:
            json.loads(line.removesuffix("\r"))
        except json.JSONDecodeError as exc:
            raise _JsonlError(f"line {number}: {exc}") from exc


def validate_file(path: str | Path) -> dict[str, list[Statement]]:
    """Check that a file is JSONL of in-toto statements; group them by predicate."""
    data = _read(path)
    _check_jsonl(data)
    return validate_in_toto_statement(data)


def predicate_subject_rows(
    ps_map: Mapping[str, Iterable[Statement]],
) -> list[tuple[str, str]]:
    """One row per statement: its predicate type and its subject names."""
    return [
        (statement.predicate_type, ", ".join(s.name for s in statement.subject))
        for statements in ps_map.values()
        for statement in statements
    ]


def format_table(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render an ASCII table with an upper-cased header row."""
    head = [str(cell).upper() for cell in header]
    body = [[str(cell) for cell in row] for row in rows]
    widths = [len(cell) for cell in head]
    for row in body:
        for column, cell in enumerate(row):
            if column < len(widths):
                widths[column] = max(widths[column], len(cell))
            else:
                widths.append(len(cell))

    def line(cells: Sequence[str]) -> str:
        padded = list(cells) + [""] * (len(widths) - len(cells))
        return "| " + " | ".join(c.ljust(w) for c, w in zip(padded, widths)) + " |"

    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    out = [rule, line(head), rule]
    out.extend(line(row) for row in body)
    out.append(rule)
    return "\n".join(out)


def _sorted_maps(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted_maps(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted_maps(item) for item in value]
    return value


def _statement_document(statement: Statement) -> dict[str, Any]:
    return {
        "_type": statement.type,
        "subject": [
            {"name": s.name, "digest": _sorted_maps(s.digest)} for s in statement.subject
        ],
        "predicateType": statement.predicate_type,
        "predicate": _sorted_maps(statement.predicate),
    }


def _marshal_indent(data: Any) -> str:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    for raw, escaped in _HTML_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text.replace("\n", "\n ")


def _att_ls(args: argparse.Namespace) -> int:
    if not args.path:
        print(HINT_STYLE.render("hint: bsf att ls <path.to.JSONL_file>"))
        return 1
    try:
        data = _read(args.path)
        _check_jsonl(data)
    except (OSError, ValueError) as exc:
        print(ERROR_STYLE.render("error parsing JSONL:", str(exc)))
        return 1
    print(SUCCESS_STYLE.render("✅ JSONL is valid"))

    try:
        ps_map = validate_in_toto_statement(data)
    except ValueError as exc:
        print(ERROR_STYLE.render("error validating intoto attestation:", str(exc)))
        return 1
    print(SUCCESS_STYLE.render("✅ intoto attestations are valid"))

    print(format_table(("Predicate", "Subjects"), predicate_subject_rows(ps_map)))
    return 0


def _att_cat(args: argparse.Namespace) -> int:
    if not args.path or not args.predicate_type:
        print(
            HINT_STYLE.render(
                "hint: bsf att cat <path-to-file> --predicate-type <predicate-type"
            )
        )
        return 1
    if args.predicate_type not in VALID_PREDICATE_ARGS:
        sys.stdout.write(
            HINT_STYLE.render(
                "Hint: validate predicate types:", ", ".join(VALID_PREDICATE_ARGS)
            )
        )
        return 1

    try:
        data = _read(args.path)
        _check_jsonl(data)
    except (OSError, ValueError) as exc:
        print(ERROR_STYLE.render("error parsing JSONL:", str(exc)))
        return 1
    try:
        ps_map = validate_in_toto_statement(data)
    except ValueError as exc:
        print(ERROR_STYLE.render("error validating intoto attestation:", str(exc)))
        return 1

    statements = get_relevant_statements(ps_map, args.predicate_type, args.subject)
    if not statements:
        print(ERROR_STYLE.render("no relevant statements found"))
        return 1

    for statement in statements:
        document = (
            _sorted_maps(statement.predicate)
            if args.predicate
            else _statement_document(statement)
        )
        text = _marshal_indent(document)
        if args.output:
            try:
                Path(args.output).write_text(text, encoding="utf-8")
                os.chmod(args.output, 0o644)
            except OSError as exc:
                print(exc)
                return 1
        else:
            print(text)
    return 0


def _configure(args: argparse.Namespace) -> int:
    try:
        pre_check_conf()
    except (OSError, ValueError) as exc:
        print(ERROR_STYLE.render("error:", str(exc)))
        return 1
    return 0


def _build_parser(debug_mode: bool) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bsf",
        description="bsf CLI lets you manage OS dependencies of your application seamlessly",
    )
    commands = parser.add_subparsers(dest="command")

    att = commands.add_parser(
        "att",
        help="perform attestation ops",
        description="used to perform various operations on your attestations",
    )
    att_commands = att.add_subparsers(dest="att_command")

    ls = att_commands.add_parser("ls", help="lists predicate types")
    ls.add_argument("path", nargs="?", default="")
    ls.set_defaults(handler=_att_ls)

    cat = att_commands.add_parser("cat", help="prints out the predicate type in JSON")
    cat.add_argument("path", nargs="?", default="")
    cat.add_argument("-t", "--predicate-type", default="", help="type of the predicate")
    cat.add_argument("-s", "--subject", default="", help="subject of the predicate")
    cat.add_argument("-o", "--output", default="", help="name of the output file")
    cat.add_argument("-p", "--predicate", action="store_true", help="print predicate")
    cat.set_defaults(handler=_att_cat)

    if debug_mode:
        configure = commands.add_parser(
            "configure", help="configures global settings for bsf"
        )
        configure.set_defaults(handler=_configure)
    return parser


def _execute(argv: Sequence[str]) -> int:
    debug_dir = os.environ.get("BSF_DEBUG_DIR", "")
    if debug_dir:
        try:
            os.chdir(debug_dir)
        except OSError as exc:
            print(ERROR_STYLE.render("error:", str(exc)))
            return 1

    parser = _build_parser(os.environ.get("BSF_DEBUG_MODE") == "true")
    args = parser.parse_args(argv)
    if args.command == "att" and not getattr(args, "att_command", None):
        print(HINT_STYLE.render("hint: use bsf att with a subcomand"))
        return 1
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    arguments = list(sys.argv[1:] if argv is None else argv)
    if os.environ.get("BSF_DEBUG") == "true":
        return _execute(arguments)
    try:
        return _execute(arguments)
    except (SystemExit, KeyboardInterrupt):
        raise
    except Exception as exc:
        print("Something went wrong, please reach out to the maintainers:", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())