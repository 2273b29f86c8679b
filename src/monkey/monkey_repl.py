import io
import traceback

from monkey.monkey_lexer import Lexer, tokenize
from monkey.monkey_parser import Parser

PROMPT = ">> "
CONTINUATION = ".. "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_source() -> str | None:
    """Read one REPL entry, continuing on new lines while braces are open.

    Returns None when the user asks to leave.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        line = input(PROMPT if not src_lines else CONTINUATION)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            return "\n".join(src_lines).strip()


def eval_source(src: str, verbose: bool = False) -> None:
    """Parse one entry and print its rendering, or the parser diagnostics."""
    if verbose:
        for tok in tokenize(src):
            print(f"[token] >>> {tok.type.value} {tok.literal!r}")

    parser = Parser(Lexer(src))
    program = parser.parse_program()
    errors = parser.get_errors()
    if errors:
        print("[error] >>> parser errors:")
        for err in errors:
            print(f"\t{err}")
        return
    print(f"[ok] >>> {program}")


def start_repl(verbose: bool = False) -> None:
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")
    while True:
        try:
            src = read_source()
            if src is None:
                print("Exiting Monkey REPL.")
                return
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            eval_source(src, verbose=verbose)
        except (EOFError, KeyboardInterrupt):
            print("\nExiting Monkey REPL.")
            return
        except Exception:
            print_traceback()
