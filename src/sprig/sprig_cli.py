"""
SPRIG CLI Entrypoint.

Reads SPRIG source, lexes and parses it, and prints the resulting syntax tree.

Features:
    - Read source from `.sprig` files or inline strings.
    - Render the tree as JSON (`to_dict()`) or as a compact S-expression.
    - Output to console or file.
    - Report syntax errors as `source:line:col: message` on stderr with exit status 1.

Example usage:
    sprig hello.sprig
    sprig -s "fn add(a, b) { a + b }" -f sexpr
    sprig prog.sprig -o prog.ast.json --strict
    sprig prog.sprig --verbose

Functions:
    run_sprig(source: str, is_string: bool = False, fmt: str = "json", out: str | None = None,
              strict: bool = False) -> str:
        Executes the pipeline (lex -> parse -> render -> output) and returns the rendering.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, configures logging and invokes `run_sprig`.
"""

import argparse
import json
import logging
import sys

from sprig.sprig_ast import Unit, format_sexpr
from sprig.sprig_lexer import tokenize
from sprig.sprig_parser import Parser
from sprig.sprig_stream import SprigSyntaxError

logger = logging.getLogger(__name__)

FORMATS = ("json", "sexpr")


def render(unit: Unit, fmt: str = "json") -> str:
    """Render a parsed unit in one of `FORMATS`.

    Raises:
        ValueError: If `fmt` is not a known format.
    """
    if fmt == "json":
        return json.dumps(unit.to_dict(), indent=2)
    if fmt == "sexpr":
        return format_sexpr(unit)
    raise ValueError(f"Unknown output format: {fmt!r}")


def run_sprig(
    source: str,
    is_string: bool = False,
    fmt: str = "json",
    out: str | None = None,
    strict: bool = False,
) -> str:
    """
    Run the SPRIG front end: lex, parse, render, and print or write the result.

    Args:
        source (str): SPRIG source code or path to a `.sprig` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        fmt (str): Output format, 'json' or 'sexpr'. Defaults to 'json'.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        strict (bool): Reject unrecognized top-level tokens instead of skipping them.

    Returns:
        str: The rendered tree.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.sprig'.
        SyntaxError: If the source cannot be lexed or parsed.
    """
    if not is_string and not source.endswith(".sprig"):
        raise ValueError("Only .sprig files are supported.")
    # 1. Read source
    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing
    tokens = tokenize(source)
    logger.debug("lexed %d tokens", len(tokens))

    # 3. Parsing
    unit = Parser(tokens, strict=strict).parse()

    # 4. Rendering
    text = render(unit, fmt)

    # 5. Output
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("wrote %s", out)
    else:
        print(text)
    return text


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sprig", description="Parse SPRIG source and print its syntax tree.")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject unrecognized top-level tokens instead of skipping them",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the SPRIG CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-f`, `--format`: Output format ('json' or 'sexpr'), default is 'json'.
        - `-o`, `--out`: Write output to a file.
        - `--strict`: Reject unrecognized top-level tokens.
        - `--verbose`: Log debug details to stderr.

    Returns:
        int: Process exit status; 0 on success, 1 on a syntax or input error.
    """
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    label = "<string>" if args.string else args.source
    try:
        run_sprig(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            strict=args.strict,
        )
    except SprigSyntaxError as e:
        print(f"{label}:{e.line}:{e.col}: {e.msg}", file=sys.stderr)
        return 1
    except SyntaxError as e:
        print(f"{label}: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"{label}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
