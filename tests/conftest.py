from collections.abc import Callable

import pytest

from monkey.monkey_ast import Program
from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser


def parse_checked(source: str) -> Program:
    """Parse `source` and fail the test if the parser reported anything."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    errors = parser.get_errors()
    if errors:
        pytest.fail("parser has errors:\n" + "\n".join(errors))
    return program


@pytest.fixture  # type: ignore[misc]
def parse_ok() -> Callable[[str], Program]:
    return parse_checked
