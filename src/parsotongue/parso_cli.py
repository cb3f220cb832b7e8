"""
ParsoTongue CLI Entrypoint.

This module provides the command-line interface for the ParsoTongue front end.
It lexes and parses a source file or inline string and prints the result.

Features:
    - Read source from `.pt` files or inline strings.
    - Print the AST as an indented tree (default) or as JSON.
    - Print the token stream instead of the AST.
    - Output to console or file.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    parsotongue program.pt
    parsotongue -s "var x = 1 + 2;" --json
    parsotongue program.pt --tokens -o tokens.txt
    parsotongue --repl --verbose

Exit status:
    0 on success, 1 on a lex or parse error or unreadable input, 2 on invalid
    arguments.
"""

import argparse
import io
import json
import sys
from typing import Any

from parsotongue.parso_ast import count_nodes, dump_ast
from parsotongue.parso_lexer import Lexer
from parsotongue.parso_parser import Parser
from parsotongue.parso_tokens import Token


def format_tokens(tokens: list[Token]) -> str:
    return "\n".join(
        f"{tok.line}:{tok.column}\t{tok.type}\t{tok.lexeme!r}" for tok in tokens
    )


_END = object()


def format_json(data: Any, indent: int = 2) -> str:
    """
    Renders nested dicts and lists exactly as `json.dumps(data, indent=indent)`.

    Containers are walked with an explicit stack, so nesting depth is not bound
    by the recursion limit; only scalars go through `json.dumps`.
    """
    parts: list[str] = []
    # each frame: [items iterator, closing bracket, level, is_dict, is_first]
    frames: list[list[Any]] = []

    def open_value(value: Any, level: int) -> None:
        if isinstance(value, dict) and value:
            parts.append("{")
            frames.append([iter(value.items()), "}", level, True, True])
        elif isinstance(value, list) and value:
            parts.append("[")
            frames.append([iter(value), "]", level, False, True])
        else:
            parts.append(json.dumps(value))

    open_value(data, 0)
    while frames:
        frame = frames[-1]
        items, closer, level, is_dict, is_first = frame
        item = next(items, _END)
        if item is _END:
            frames.pop()
            parts.append("\n" + " " * (indent * level) + closer)
            continue
        frame[4] = False
        parts.append(("\n" if is_first else ",\n") + " " * (indent * (level + 1)))
        if is_dict:
            key, item = item
            parts.append(json.dumps(key) + ": ")
        open_value(item, level + 1)
    return "".join(parts)


def run_parso(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    as_json: bool = False,
    out: str | None = None,
    pretty: bool = False,
    verbose: bool = False,
) -> str:
    """
    Run the ParsoTongue front end: lex, parse, render, and print or write the output.

    Args:
        source (str): The ParsoTongue source code or path to a `.pt` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        show_tokens (bool): If True, renders the token stream instead of the AST.
        as_json (bool): If True, renders the AST as JSON.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        pretty (bool): If True, prints formatted banners around the output.
        verbose (bool): If True, also reports token and node counts.

    Returns:
        str: The rendered output.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.pt'.
        LexError, ParseError, InvalidOperatorError: On malformed source.
    """
    if not is_string and not source.endswith(".pt"):
        raise ValueError("Only .pt files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing
    tokens = Lexer(source).tokenize()
    if verbose:
        print(f"[tokens] >>> {len(tokens)} tokens")

    # 3. Parsing (skipped when only the token stream is wanted)
    if show_tokens:
        output = format_tokens(tokens)
        title = "Tokens"
    else:
        program = Parser(tokens).parse()
        if verbose:
            print(f"[ast] >>> {count_nodes(program)} nodes")
        if as_json:
            output = format_json(program.to_dict())
        else:
            buf = io.StringIO()
            dump_ast(program, file=buf)
            output = buf.getvalue().rstrip()
        title = "AST"

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        banner = "=" * 20
        print(f"{banner}\n{title}\n{banner}\n{output}\n{banner}\n")
    else:
        print(output)

    return output


def main() -> None:
    """
    Entry point for the ParsoTongue CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, runs the front end on the given file or string.

    Lex and parse errors are printed to stderr and end the process with status 1.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from parsotongue.parso_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="parsotongue")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    output_mode = parser.add_mutually_exclusive_group()
    output_mode.add_argument(
        "--tokens", action="store_true", help="Print the token stream instead of the AST"
    )
    output_mode.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Report token and node counts"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from parsotongue.parso_repl import start_repl

        start_repl(verbose=args.verbose, show_tokens=args.tokens)
        return

    try:
        run_parso(
            source=args.source,
            is_string=args.string,
            show_tokens=args.tokens,
            as_json=args.as_json,
            out=args.out,
            pretty=args.pretty,
            verbose=args.verbose,
        )
    except (SyntaxError, ValueError, OSError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
