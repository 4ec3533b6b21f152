"""
Zermelo CLI Entrypoint.

This module provides the command-line interface for running Zermelo source code.
It supports transpilation, execution, AST dumps, and interactive REPL mode.

Features:
    - Read source from `.zer` files or inline strings.
    - Lex, parse, and transpile code into Python.
    - Output to console or file, or print the AST as JSON.
    - Optionally execute the transpiled program.
    - Load sugar aliases from a JSON file (`--sugar` or `ZERMELO_SUGAR`).
    - Launch an interactive REPL with optional verbosity.

Example usage:
    zermelo hello.zer
    zermelo -s '* 3 "a"' -e
    zermelo hello.zer -o hello.py
    zermelo hello.zer --ast
    zermelo --repl --verbose
"""

import argparse
import json
import logging
import sys

from zermelo.zermelo_ast import ASTNode
from zermelo.zermelo_constants import SOURCE_SUFFIX
from zermelo.zermelo_lexer import CharacterStream, Lexer
from zermelo.zermelo_parser import Parser
from zermelo.zermelo_transpile import Transpiler
from zermelo.zermelo_uimap import UserInterfaceMapper

logger = logging.getLogger(__name__)


def parse_source(source: str, uimap: UserInterfaceMapper | None = None) -> ASTNode:
    """Lex and parse Zermelo source text into its `program` node.

    Raises:
        SyntaxError: If the source is lexically or grammatically invalid.
    """
    lexer = Lexer(CharacterStream(source, 0, 1, 1), uimap)
    program = Parser(lexer).parse()
    logger.debug("parsed %d top-level statement(s)", len(program.children))
    return program


def run_zermelo(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    execute: bool = False,
    pretty: bool = False,
    dump_ast: bool = False,
    uimap: UserInterfaceMapper | None = None,
) -> None:
    """
    Run the Zermelo toolchain: lex, parse, transpile, and optionally execute or write output.

    Args:
        source (str): The Zermelo source code or path to a `.zer` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        out (str | None): Optional path to write the transpiled output. If None, prints to stdout.
        execute (bool): If True, executes the transpiled program.
        pretty (bool): If True, prints formatted banners and structured output.
        dump_ast (bool): If True, prints the AST as JSON instead of transpiling.
        uimap (UserInterfaceMapper | None): Sugar aliases; canonical ones if None.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.zer'.
        SyntaxError: If the program does not lex or parse.
    """
    if not is_string and not source.endswith(SOURCE_SUFFIX):
        raise ValueError(f"Only {SOURCE_SUFFIX} files are supported.")
    if not is_string:
        logger.info("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    if uimap is None:
        uimap = UserInterfaceMapper.from_canonical()
    program = parse_source(source, uimap)

    if dump_ast:
        print(json.dumps(program.to_dict(), indent=2 if pretty else None, ensure_ascii=False))
        return

    code = Transpiler("py").transpile(program)

    if pretty:
        banner = "=" * 20
        print(f"{banner}\nTranspiled Python\n{banner}\n{code}\n{banner}\n")
    elif not out and not execute:
        print(code)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(code + "\n")
        logger.info("wrote %s", out)
        if pretty:
            print(f"(wrote to {out})")

    if execute:
        if pretty:
            print("<<< OUTPUT >>>")
        try:
            exec(code, {"__name__": "__zermelo__"})  # nosec B102
        finally:
            sys.stdout.flush()


def main() -> None:
    """
    Entry point for the Zermelo CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified;
    otherwise runs the full toolchain.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-o`, `--out`: Write transpiled output to a file.
        - `-e`, `--exec`: Execute the transpiled program.
        - `-p`, `--pretty`: Show pretty-printed banners and output sections.
        - `--ast`: Print the parsed AST as JSON.
        - `--sugar`: JSON file of extra sugar aliases.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Enable verbose REPL mode.
        - `--log-level`: Logging level (default: warning).
    """
    if len(sys.argv) == 1:
        from zermelo.zermelo_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="zermelo")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-e",
        "--exec",
        dest="execute",
        action="store_true",
        help="Execute the transpiled program",
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show code/output with banners"
    )
    parser.add_argument(
        "--ast", dest="dump_ast", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument(
        "--sugar", metavar="JSONFILE", help="Load extra sugar aliases from a JSON file"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of transpiling",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    uimap = UserInterfaceMapper.from_env()
    if args.sugar:
        uimap.load_from_json(args.sugar)
        logger.info("loaded sugar aliases from %s", args.sugar)

    if args.repl or args.source is None:
        from zermelo.zermelo_repl import start_repl

        start_repl(verbose=args.verbose, uimap=uimap)
    else:
        run_zermelo(
            source=args.source,
            is_string=args.string,
            out=args.out,
            execute=args.execute,
            pretty=args.pretty,
            dump_ast=args.dump_ast,
            uimap=uimap,
        )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
