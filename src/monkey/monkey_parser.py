"""
Monkey Language Parser

Parses the token stream of a `Lexer` into a `Program` syntax tree.

Statements are parsed by recursive descent with two tokens of lookahead
(`cur_token` and `peek_token`). Expressions are parsed with top-down operator
precedence ("Pratt" parsing): every token kind that can start an expression
has a prefix handler, every binary operator has an infix handler, and the
`Precedence` table decides how far an expression extends to the right.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return <expr>;`
    * expression statements, with an optional trailing `;`
    * `{ ... }` blocks inside `if` and `fn`
- Expressions:
    * identifiers, integer literals, `true` / `false`
    * prefix `!` and `-`
    * infix `+ - * / < > == !=` (all left-associative)
    * grouping with `( ... )`
    * `if (<cond>) { ... } else { ... }`
    * `fn(<params>) { ... }`

Parser Behavior
---------------
- Never raises on malformed input. Every problem is appended to `errors` as a
  human-readable message and parsing continues with the next token.
- Always returns a `Program`. Nodes whose parts failed to parse keep those
  slots empty (`None`).
- Always moves forward through the token stream, so it terminates on any input.

Diagnostics
-----------
- `expected next token to be <KIND>, got <KIND> instead`
- `no prefix parse function for <KIND> found`
- `could not parse <LITERAL> as integer`

Entry Points
------------
- `Parser(lexer).parse_program()`: parse a whole program; read `errors` afterwards.
- `parse(source)`: convenience wrapper returning `(program, errors)`.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_lexer import Lexer
from monkey.monkey_token import Token, TokenKind

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class Precedence(IntEnum):
    """Binding power of operators. Higher binds tighter."""

    LOWEST = 0
    EQUALS = 1  # ==, !=
    LESSGREATER = 2  # <, >
    SUM = 3  # +, -
    PRODUCT = 4  # *, /
    PREFIX = 5  # -x, !x
    CALL = 6  # reserved for call expressions


precedences: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
}


class Parser:
    """
    Monkey Parser Class

    Pulls tokens from a `Lexer` and builds a `Program`. A Parser is single-use:
    call `parse_program()` once, then inspect `errors`.

    Attributes
    ----------
    lexer : Lexer
        The token source.
    cur_token : Token
        The token under examination.
    peek_token : Token
        The token after `cur_token`.
    errors : list[str]
        Diagnostics accumulated during the parse, in the order they occurred.
    prefix_parse_fns : dict[TokenKind, PrefixParseFn]
        Handlers for tokens that can start an expression.
    infix_parse_fns : dict[TokenKind, InfixParseFn]
        Handlers for binary operator tokens.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors: list[str] = []

        self.prefix_parse_fns: dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }

        self.infix_parse_fns: dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression for kind in precedences
        }

        # Fill cur_token and peek_token
        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.type == kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the next token is `kind`; otherwise record an error and stay put."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_error(self, kind: TokenKind) -> None:
        self.errors.append(
            f"expected next token to be {kind.value}, "
            f"got {self.peek_token.type.value} instead"
        )

    def no_prefix_parse_fn_error(self, kind: TokenKind) -> None:
        self.errors.append(f"no prefix parse function for {kind.value} found")

    def get_errors(self) -> list[str]:
        return list(self.errors)

    def peek_precedence(self) -> Precedence:
        return precedences.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return precedences.get(self.cur_token.type, Precedence.LOWEST)

    # Statements

    def parse_program(self) -> Program:
        """Parse statements until EOF. Statements are collected in source order."""
        statements: list[Statement] = []
        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Program(statements)

    def parse_statement(self) -> Statement | None:
        if self.cur_token.type == TokenKind.LET:
            return self.parse_let_statement()
        if self.cur_token.type == TokenKind.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        let_tok = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            return LetStatement(let_tok)

        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            return LetStatement(let_tok, name)

        self.next_token()
        return LetStatement(let_tok, name, self.parse_value_until_semicolon())

    def parse_return_statement(self) -> ReturnStatement:
        return_tok = self.cur_token
        self.next_token()
        return ReturnStatement(return_tok, self.parse_value_until_semicolon())

    def parse_value_until_semicolon(self) -> Expression | None:
        """Parse the value of a let/return statement, up to its `;`.

        Anything between the first expression and the `;` is parsed again as
        an expression, and the last one parsed wins. Stops at EOF when the
        statement has no `;`.
        """
        value = self.parse_expression(Precedence.LOWEST)
        while not self.cur_token_is(TokenKind.SEMICOLON) and not self.cur_token_is(
            TokenKind.EOF
        ):
            self.next_token()
            if self.cur_token_is(TokenKind.SEMICOLON) or self.cur_token_is(
                TokenKind.EOF
            ):
                break
            value = self.parse_expression(Precedence.LOWEST)
        return value

    def parse_expression_statement(self) -> ExpressionStatement:
        first_tok = self.cur_token
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()

        return ExpressionStatement(first_tok, value)

    def parse_block_statement(self) -> BlockStatement:
        block_tok = self.cur_token
        statements: list[Statement] = []
        self.next_token()

        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(
            TokenKind.EOF
        ):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        return BlockStatement(block_tok, statements)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None

        left = prefix()
        if left is None:
            return None

        while (
            not self.peek_token_is(TokenKind.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)
            if left is None:
                return None

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        literal = self.cur_token.literal
        try:
            value = int(literal, 10)
        except ValueError:
            self.errors.append(f"could not parse {literal} as integer")
            return None
        return IntegerLiteral(self.cur_token, value)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> Expression:
        op_tok = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(op_tok, op_tok.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression:
        op_tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(op_tok, left, op_tok.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()
        exp = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return exp

    def parse_if_expression(self) -> Expression | None:
        if_tok = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None

        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return IfExpression(if_tok, condition, consequence, alternative)

    def parse_function_literal(self) -> Expression | None:
        fn_tok = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None

        return FunctionLiteral(fn_tok, parameters, self.parse_block_statement())

    def parse_function_parameters(self) -> list[Identifier] | None:
        """Parse `a, b, c)` after the `(`; leaves `cur_token` on the `)`."""
        identifiers: list[Identifier] = []

        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenKind.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None

        return identifiers


def parse(source: str) -> tuple[Program, list[str]]:
    """Lex and parse `source`, returning the program and its diagnostics."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.get_errors()


__all__ = ["Parser", "Precedence", "parse", "precedences"]
