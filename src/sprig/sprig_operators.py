"""
Static operator table for the SPRIG expression parser.

Every operator is one of three shapes:

    prefix  (token, bp)        -- appears before its operand (`-x`, `!x`)
    infix   (token, lbp, rbp)  -- appears between two operands (`a + b`)
    postfix (token, bp)        -- follows its operand (`f(x)`, `a[i]`)

Higher binding power binds tighter. Every infix entry has `rbp = lbp + 1`,
so all binary operators are left-associative.

A token may appear in more than one shape (`+` and `-` are both prefix and
infix; `(` is both a grouping atom and the call suffix) but never twice in
the same shape.
"""

from dataclasses import dataclass

from sprig.sprig_ast import BinaryMode, UnaryMode
from sprig.sprig_constants import TokenKind


@dataclass(frozen=True)
class PrefixInfo:
    token: TokenKind
    bp: int
    mode: UnaryMode


@dataclass(frozen=True)
class InfixInfo:
    token: TokenKind
    lbp: int
    rbp: int
    mode: BinaryMode


@dataclass(frozen=True)
class PostfixInfo:
    token: TokenKind
    bp: int


OpInfo = PrefixInfo | InfixInfo | PostfixInfo


def prefix_op(token: TokenKind, bp: int, mode: UnaryMode) -> PrefixInfo:
    return PrefixInfo(token, bp, mode)


def infix_op(token: TokenKind, lbp: int, mode: BinaryMode) -> InfixInfo:
    return InfixInfo(token, lbp, lbp + 1, mode)


def postfix_op(token: TokenKind, bp: int) -> PostfixInfo:
    return PostfixInfo(token, bp)


OPERATORS: tuple[OpInfo, ...] = (
    postfix_op(TokenKind.LPAREN, 90),
    postfix_op(TokenKind.LBRACK, 90),
    prefix_op(TokenKind.NOT, 80, "not"),
    prefix_op(TokenKind.PLUS, 80, "plus"),
    prefix_op(TokenKind.SUB, 80, "minus"),
    infix_op(TokenKind.MULT, 70, "mul"),
    infix_op(TokenKind.DIV, 70, "div"),
    infix_op(TokenKind.MOD, 70, "rem"),
    infix_op(TokenKind.PLUS, 60, "add"),
    infix_op(TokenKind.SUB, 60, "sub"),
    infix_op(TokenKind.LT, 50, "lt"),
    infix_op(TokenKind.LE, 50, "lte"),
    infix_op(TokenKind.GT, 50, "gt"),
    infix_op(TokenKind.GE, 50, "gte"),
    infix_op(TokenKind.EQ, 40, "eq"),
    infix_op(TokenKind.NE, 40, "neq"),
    infix_op(TokenKind.AND, 30, "and"),
    infix_op(TokenKind.OR, 20, "or"),
)


def _index(shape: type) -> dict:
    table: dict = {}
    for info in OPERATORS:
        if isinstance(info, shape):
            if info.token in table:
                raise ValueError(
                    f"duplicate {shape.__name__} entry for {info.token}"
                )  # pragma: no cover
            table[info.token] = info
    return table


PREFIX_OPS: dict[TokenKind, PrefixInfo] = _index(PrefixInfo)
INFIX_OPS: dict[TokenKind, InfixInfo] = _index(InfixInfo)
POSTFIX_OPS: dict[TokenKind, PostfixInfo] = _index(PostfixInfo)


def find_prefix(kind: TokenKind) -> PrefixInfo | None:
    return PREFIX_OPS.get(kind)


def find_infix(kind: TokenKind) -> InfixInfo | None:
    return INFIX_OPS.get(kind)


def find_postfix(kind: TokenKind) -> PostfixInfo | None:
    return POSTFIX_OPS.get(kind)


__all__ = [
    "INFIX_OPS",
    "OPERATORS",
    "POSTFIX_OPS",
    "PREFIX_OPS",
    "InfixInfo",
    "OpInfo",
    "PostfixInfo",
    "PrefixInfo",
    "find_infix",
    "find_postfix",
    "find_prefix",
]
