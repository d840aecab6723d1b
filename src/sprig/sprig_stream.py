"""
Token stream for the SPRIG parser.

The stream owns a finished, ordered sequence of tokens and a cursor. The parser
inspects the current token, peeks ahead, and consumes required tokens through
`advance_with()`, which is the only checked way to move past a token.

Classes:
    SprigSyntaxError: The single error raised for grammar violations.
    TokenStream: Cursor over a token list with an end-of-stream sentinel.
"""

from collections.abc import Iterable

from sprig.sprig_constants import TokenKind
from sprig.sprig_lexer import Token

SENTINEL_LINE = -1
SENTINEL_COL = -1


class SprigSyntaxError(SyntaxError):
    """Raised when the token sequence diverges from the grammar.

    Attributes:
        token_kind (TokenKind): Kind of the offending token.
        line (int): Line of the offending token (-1 for end of stream).
        col (int): Column of the offending token (-1 for end of stream).

    `msg` holds the message without the location; `lineno` and `offset`
    mirror `line` and `col`.

    Example:
        raise SprigSyntaxError("unexpected token: LPAREN", token)
    """

    def __init__(self, message: str, token: Token):
        super().__init__(message, (None, token.line, token.col, None))
        self.token_kind = token.kind
        self.line = token.line
        self.col = token.col


def end_of_stream() -> Token:
    """Builds the synthetic EOF token returned past the end of the stream."""
    return Token(TokenKind.EOF, None, SENTINEL_LINE, SENTINEL_COL)


class TokenStream:
    """Reads tokens from a pre-scanned token list.

    The cursor only moves forward and stays within `0 <= position <= len(tokens)`.
    Once it passes the last real token, the current token is the EOF sentinel.

    Attributes:
        position (int): Index of the current token (read-only).
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self._index: int = 0

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def position(self) -> int:
        return self._index

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._tokens)

    def current_token(self) -> Token:
        """Returns the token at the cursor, or the EOF sentinel at the end."""
        if self.at_end:
            return end_of_stream()
        return self._tokens[self._index]

    def current_kind(self) -> TokenKind:
        return self.current_token().kind

    def advance(self) -> None:
        """Moves the cursor to the next token. Does nothing at the end."""
        if not self.at_end:
            self._index += 1

    def lookahead(self, offset: int) -> Token:
        """Returns the token `offset` positions ahead without moving the cursor.

        `lookahead(0)` is the current token. Out-of-range offsets yield the
        EOF sentinel.

        Raises:
            ValueError: If `offset` is negative.
        """
        if offset < 0:
            raise ValueError(f"lookahead offset must be non-negative, got {offset}")
        index = self._index + offset
        if index < len(self._tokens):
            return self._tokens[index]
        return end_of_stream()

    def expect(self, kind: TokenKind) -> None:
        """Checks the current token's kind without consuming it.

        Raises:
            SprigSyntaxError: If the current token is not of `kind`.
        """
        if self.current_kind() != kind:
            token = self.current_token()
            raise SprigSyntaxError(
                f"unexpected token: {token.kind} (expected {kind})", token
            )

    def advance_with(self, kind: TokenKind) -> None:
        """Checks the current token's kind, then moves past it.

        Raises:
            SprigSyntaxError: If the current token is not of `kind`. The cursor
                is left where it was.
        """
        self.expect(kind)
        self.advance()


__all__ = ["SprigSyntaxError", "TokenStream", "end_of_stream"]
