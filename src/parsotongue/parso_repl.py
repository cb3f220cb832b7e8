"""
Interactive read-parse-print loop for ParsoTongue.

Each input is lexed and parsed as a program; if that fails, it is retried as a
single bare expression (so `1 + 2` works without a trailing `;`). The resulting
tree is printed. Input spanning several lines is collected while braces
outside string literals are unbalanced.

Commands:
    exit, quit      Leave the REPL.
    verbose-mode    Toggle token/node counts.
    tokens-mode     Toggle printing of the token stream.
"""

from parsotongue.parso_ast import ASTNode, count_nodes, dump_ast
from parsotongue.parso_cli import format_tokens
from parsotongue.parso_errors import ParseError
from parsotongue.parso_lexer import Lexer
from parsotongue.parso_parser import Parser


def brace_balance(line: str, in_string: bool = False) -> tuple[int, bool]:
    """Net `{` minus `}` in `line`, ignoring braces inside string literals.

    `in_string` says whether the line starts inside a string left open by a
    previous line; the returned flag says whether it ends inside one.
    """
    balance = 0
    for ch in line:
        if ch == '"':
            in_string = not in_string
        elif not in_string and ch == "{":
            balance += 1
        elif not in_string and ch == "}":
            balance -= 1
    return balance, in_string


def read_source() -> str | None:
    """Reads one (possibly multi-line) input; returns None on `exit`/`quit`."""
    src_lines: list[str] = []
    brace_count = 0
    in_string = False
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        balance, in_string = brace_balance(line, in_string)
        brace_count += balance
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def parse_input(src: str, verbose: bool = False, show_tokens: bool = False) -> ASTNode:
    """Parses one REPL input as a program, falling back to a bare expression.

    Raises:
        LexError: If the input cannot be tokenized.
        ParseError: The program-level error, when neither reading succeeds.
    """
    tokens = Lexer(src).tokenize()
    if verbose:
        print(f"[tokens] >>> {len(tokens)} tokens")
    if show_tokens:
        print(format_tokens(tokens))

    parser = Parser(tokens)
    try:
        return parser.parse()
    except ParseError as program_error:
        try:
            return parser.parse_expression_entrypoint()
        except SyntaxError:
            raise program_error from None


def start_repl(verbose: bool = False, show_tokens: bool = False) -> None:
    print("ParsoTongue REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_source()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting ParsoTongue REPL.")
            return
        if src is None:
            print("Exiting ParsoTongue REPL.")
            return
        if not src:
            continue
        if src.lower() == "verbose-mode":
            verbose = not verbose
            print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
            continue
        if src.lower() == "tokens-mode":
            show_tokens = not show_tokens
            print(f"[mode] >>> Tokens mode {'ON' if show_tokens else 'OFF'}")
            continue

        try:
            node = parse_input(src, verbose=verbose, show_tokens=show_tokens)
        except SyntaxError as e:
            print("[error] >>>")
            print(e)
            continue

        if verbose:
            print(f"[ast] >>> {count_nodes(node)} nodes")
        dump_ast(node)


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
