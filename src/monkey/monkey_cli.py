"""
Monkey CLI Entrypoint.

This module provides the command-line interface for checking Monkey source code.
It runs the front end only: nothing is evaluated.

Features:
    - Read source from `.monkey` files or inline strings.
    - Lex and parse the source, then print the canonical rendering of the tree.
    - Dump the token stream or the tree as JSON instead.
    - Print parser diagnostics to stderr and exit with status 1 when there are any.
    - Launch an interactive read-parse-print loop.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "-a * b" --json
    monkey hello.monkey -o hello.txt -p
    monkey --repl --verbose

Functions:
    run_monkey(source: str, is_string: bool = False, tokens: bool = False,
               as_json: bool = False, out: str | None = None, pretty: bool = False) -> int:
        Runs the pipeline (lex → parse → output) and returns the exit status.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or check).
"""

import argparse
import json
import sys

from monkey.monkey_lexer import Lexer, tokenize
from monkey.monkey_parser import Parser


def run_monkey(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
    out: str | None = None,
    pretty: bool = False,
) -> int:
    """
    Run the Monkey front end on a file or a source string.

    Args:
        source (str): The Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        tokens (bool): If True, prints the token stream instead of the tree. Defaults to False.
        as_json (bool): If True, prints the tree serialized as JSON. Defaults to False.
        out (str | None): Optional path to write the output to. If None, prints to stdout.
        pretty (bool): If True, prints banners around each output section. Defaults to False.

    Returns:
        int: 0 when the source parsed without diagnostics, 1 otherwise.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing (token dump only)
    if tokens:
        text = "\n".join(
            f"{tok.line}:{tok.col}\t{tok.type.value}\t{tok.literal!r}"
            for tok in tokenize(source)
        )
        title = "Tokens"
        errors: list[str] = []
    # 3. Parsing
    else:
        parser = Parser(Lexer(source))
        program = parser.parse_program()
        errors = parser.get_errors()
        if as_json:
            text = json.dumps(program.to_dict(), indent=2)
            title = "Syntax Tree"
        else:
            text = str(program)
            title = "Program"

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text)
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        banner = "=" * 20
        print(f"{banner}\n{title}\n{banner}\n{text}\n{banner}\n")
    else:
        print(text)

    # 5. Diagnostics
    if errors:
        if pretty:
            print(f"<<< {len(errors)} PARSER ERRORS >>>", file=sys.stderr)
        for err in errors:
            print(f"\t{err}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    """
    Entry point for the Monkey CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, runs the front end on the given file or string and exits
      with the status returned by `run_monkey`.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-t`, `--tokens`: Print the token stream instead of the tree.
        - `-j`, `--json`: Print the tree as JSON.
        - `-o`, `--out`: Write output to a file.
        - `-p`, `--pretty`: Show banners around output sections.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Also print tokens in the REPL.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from monkey.monkey_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-t", "--tokens", action="store_true", help="Print tokens instead of the tree"
    )
    parser.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Print tree as JSON"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of checking a source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(verbose=args.verbose)
    else:
        sys.exit(
            run_monkey(
                source=args.source,
                is_string=args.string,
                tokens=args.tokens,
                as_json=args.as_json,
                out=args.out,
                pretty=args.pretty,
            )
        )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
