"""
Lexical analyzer for the SPRIG language.

This module turns raw source text into the located tokens the parser consumes.

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with kind, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace and single-line comments (`//`)
    - Longest-match recognition of operators and punctuation
    - Recognizes identifiers, keywords, and decimal numbers

Raises:
    SyntaxError: If a malformed number (e.g. `1.2.3`) is encountered.

Example:
    >>> tokenize("var x = 1;")
    [Token(VAR, var), Token(IDENT, x), Token(ASSIGN, =), Token(NUMBER, 1), Token(SEMICOLON, ;)]
"""

from typing import Any

from sprig.sprig_constants import KEYWORDS, MAX_SYMBOL_LEN, TokenKind, token_hashmap


class CharacterStream:
    """
    Reads characters from a string source while tracking line and column.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` from the cursor, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """A single lexical token.

    Tokens are treated as immutable values: they hash and compare by all four fields.

    Attributes:
        kind (TokenKind): The token's kind.
        value (str | None): Text payload (identifier name, number text, or symbol).
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("kind", "value", "line", "col")

    def __init__(
        self, kind: TokenKind, value: str | None = None, line: int = 0, col: int = 0
    ):
        self.kind = kind
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for SPRIG.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and `//` comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n":
                self.advance()
            elif self.peek() == "/" and self.peek(1) == "/":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid symbol from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(MAX_SYMBOL_LEN):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an EOF token once the source is exhausted.

        Raises:
            SyntaxError: If a malformed number is encountered.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(TokenKind.EOF, None, self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch.isalpha() or ch == "_":
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isalnum() or self.peek() == "_"
            ):
                ident += self.advance()
            if ident in KEYWORDS:
                return Token(KEYWORDS[ident], ident, line, col)
            return Token(TokenKind.IDENT, ident, line, col)

        # 2. Number
        if ch.isdigit():
            num = ""
            has_dot = False
            while not self.stream.end_of_file() and (
                self.peek().isdigit() or self.peek() == "."
            ):
                if self.peek() == ".":
                    if has_dot:
                        raise SyntaxError(
                            f"Invalid number format at line {line}, col {col}"
                        )
                    has_dot = True
                num += self.advance()
            return Token(TokenKind.NUMBER, num, line, col)

        # 3. Operator or punctuation
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character
        return Token(TokenKind.ERROR, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely.

    The trailing EOF token is not included; the token stream supplies its own
    end-of-stream sentinel.
    """
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        if tok.kind == TokenKind.EOF:
            break
        tokens.append(tok)
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
