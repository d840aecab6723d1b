import os

import pytest
from hypothesis import settings

from sprig.sprig_constants import TokenKind
from sprig.sprig_lexer import Token

# CI runs the property tests with more examples
settings.register_profile("ci", max_examples=500)
settings.register_profile("dev", max_examples=100)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def make_tokens(*kinds_vals: TokenKind | tuple[TokenKind, str]) -> list[Token]:
    """Builds tokens on line 1, one column apart, from kinds or (kind, value) pairs."""
    tokens = []
    for col, item in enumerate(kinds_vals, start=1):
        if isinstance(item, tuple):
            kind, value = item
        else:
            kind, value = item, None
        tokens.append(Token(kind, value, 1, col))
    return tokens


@pytest.fixture  # type: ignore[misc]
def abc_tokens() -> list[Token]:
    return make_tokens(
        (TokenKind.IDENT, "a"), (TokenKind.IDENT, "b"), (TokenKind.IDENT, "c")
    )
