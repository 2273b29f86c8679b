"""
Lexical analyzer for the Monkey programming language.

This module turns raw source text into a forward-only stream of tokens:

Classes:
    CharacterStream: Cursor over the source with a one-character lookahead and
        line/column tracking.
    Lexer: Produces `Token` values from a source string, one per `next_token()` call.

Functions:
    tokenize(source): Lex a whole string into a list of tokens ending with EOF.

Features:
    - Skips spaces, tabs, newlines and carriage returns
    - Two-character operators `==` and `!=`
    - Single-character operators and delimiters `= + - ! * / < > , ; ( ) { }`
    - Identifiers and keywords (runs of ASCII letters and underscores)
    - Integer literals (runs of ASCII digits; conversion is left to the parser)
    - Any other character becomes an `ILLEGAL` token carrying that character

The lexer never raises on bad input. Once the source is exhausted it keeps
returning the EOF token (with an empty literal) on every call.

Example:
    >>> lexer = Lexer("let five = 5;")
    >>> lexer.next_token()
    Token(LET, 'let')

Exports:
    - CharacterStream
    - Lexer
    - Token
    - tokenize
"""

from collections.abc import Callable, Iterator

from monkey.monkey_token import Token, TokenKind, lookup_ident

WHITESPACE = " \t\n\r"

single_char_tokens: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

# first character -> (kind alone, kind when followed by "=")
two_char_tokens: dict[str, tuple[TokenKind, TokenKind]] = {
    "=": (TokenKind.ASSIGN, TokenKind.EQ),
    "!": (TokenKind.BANG, TokenKind.NOT_EQ),
}


def is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class CharacterStream:
    """
    A cursor over a source string with one character of lookahead.

    The stream always exposes the character under the cursor as `ch` (an empty
    string once the end of the source is reached) and keeps the 1-based line
    and column of that character for token positions.

    Attributes:
        source (str): The input source string.
        position (int): Index of `ch` in the source.
        ch (str): Current character, or "" at end of input.
        line (int): Line number of `ch` (1-indexed).
        column (int): Column number of `ch` (1-indexed).
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1
        self.ch = source[0] if source else ""

    def read_char(self) -> None:
        """Moves the cursor one character forward. Does nothing at end of input."""
        if self.end_of_file():
            return
        if self.ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        self.ch = (
            self.source[self.position] if self.position < len(self.source) else ""
        )

    def peek_char(self) -> str:
        """Returns the character after `ch` without consuming anything ("" if none)."""
        index = self.position + 1
        return self.source[index] if index < len(self.source) else ""

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Lexer:
    """Lexical analyzer for the Monkey language.

    A Lexer is single-use: it scans its source once, front to back. Build a
    new Lexer to scan the same text again.

    Attributes:
        stream (CharacterStream): Cursor over the source being tokenized.
    """

    def __init__(self, source: str) -> None:
        self.stream = CharacterStream(source)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens until (not including) EOF."""
        while True:
            tok = self.next_token()
            if tok.type == TokenKind.EOF:
                return
            yield tok

    def skip_whitespace(self) -> None:
        while self.stream.ch != "" and self.stream.ch in WHITESPACE:
            self.stream.read_char()

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consumes the maximal run of characters satisfying `predicate`."""
        start = self.stream.position
        while self.stream.ch != "" and predicate(self.stream.ch):
            self.stream.read_char()
        return self.stream.source[start : self.stream.position]

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the source.

        Returns:
            Token: The next token; `EOF` with an empty literal once the input is exhausted.
        """
        self.skip_whitespace()

        ch = self.stream.ch
        line, col = self.stream.line, self.stream.column

        if ch == "":
            return Token(TokenKind.EOF, "", line, col)

        # Identifiers, keywords and integers leave the cursor on the next character
        if is_letter(ch):
            ident = self.read_while(is_letter)
            return Token(lookup_ident(ident), ident, line, col)

        if is_digit(ch):
            return Token(TokenKind.INT, self.read_while(is_digit), line, col)

        if ch in two_char_tokens:
            single, double = two_char_tokens[ch]
            if self.stream.peek_char() == "=":
                self.stream.read_char()
                tok = Token(double, ch + self.stream.ch, line, col)
            else:
                tok = Token(single, ch, line, col)
        elif ch in single_char_tokens:
            tok = Token(single_char_tokens[ch], ch, line, col)
        else:
            tok = Token(TokenKind.ILLEGAL, ch, line, col)

        self.stream.read_char()
        return tok


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely. The returned list always ends with one EOF token."""
    lexer = Lexer(source)
    tokens = list(lexer)
    tokens.append(lexer.next_token())
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
