"""
Token model for the Monkey language.

Defines the closed set of lexical categories, the keyword table and the
immutable `Token` value produced by the lexer.

Classes:
    TokenKind: Enumeration of every token category. Each member's value is the
        display name used in parser diagnostics (e.g. `IDENT`, `=`, `;`).
    Token: A single lexical token with its kind, literal text and optional
        source location.

Functions:
    lookup_ident(ident): Map a word to its keyword kind, or `IDENT`.

Example:
    >>> lookup_ident("fn")
    <TokenKind.FUNCTION: 'FUNCTION'>
    >>> Token(TokenKind.INT, "5")
    Token(INT, '5')

Exports:
    - TokenKind
    - Token
    - keywords
    - lookup_ident
"""

from enum import Enum
from typing import Any


class TokenKind(str, Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


keywords: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}


def lookup_ident(ident: str) -> TokenKind:
    """Return the keyword kind for `ident`, or `TokenKind.IDENT` for any other word."""
    return keywords.get(ident, TokenKind.IDENT)


class Token:
    """Represents a single lexical token in the Monkey language.

    Equality and hashing only consider `type` and `literal`; the source
    location is carried along for diagnostics and never changes identity.

    Attributes:
        type (TokenKind): The token's category.
        literal (str): The exact source text of the token (empty for EOF).
        line (int): The 1-based line number where the token starts (0 if unknown).
        col (int): The 1-based column number where the token starts (0 if unknown).
    """

    __slots__ = ("type", "literal", "line", "col")

    def __init__(self, type_: TokenKind, literal: str, line: int = 0, col: int = 0):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable, cannot set '{name}'")

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.literal!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.literal == other.literal
        )

    def __hash__(self) -> int:
        return hash((self.type, self.literal))


__all__ = ["Token", "TokenKind", "keywords", "lookup_ident"]
