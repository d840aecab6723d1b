from sprig.sprig_constants import TokenKind
from sprig.sprig_operators import (
    INFIX_OPS,
    OPERATORS,
    POSTFIX_OPS,
    PREFIX_OPS,
    InfixInfo,
    PostfixInfo,
    PrefixInfo,
    find_infix,
    find_postfix,
    find_prefix,
)


def test_binding_power_tiers() -> None:
    assert {i.bp for i in POSTFIX_OPS.values()} == {90}
    assert {i.bp for i in PREFIX_OPS.values()} == {80}
    tiers = {
        70: {"mul", "div", "rem"},
        60: {"add", "sub"},
        50: {"lt", "lte", "gt", "gte"},
        40: {"eq", "neq"},
        30: {"and"},
        20: {"or"},
    }
    for lbp, modes in tiers.items():
        assert {i.mode for i in INFIX_OPS.values() if i.lbp == lbp} == modes


def test_all_infix_operators_left_associative() -> None:
    assert all(i.rbp == i.lbp + 1 for i in INFIX_OPS.values())


def test_each_token_unique_per_shape() -> None:
    for shape in (PrefixInfo, InfixInfo, PostfixInfo):
        tokens = [i.token for i in OPERATORS if isinstance(i, shape)]
        assert len(tokens) == len(set(tokens))


def test_plus_minus_are_prefix_and_infix() -> None:
    assert find_prefix(TokenKind.SUB) == PrefixInfo(TokenKind.SUB, 80, "minus")
    assert find_infix(TokenKind.SUB) == InfixInfo(TokenKind.SUB, 60, 61, "sub")
    assert find_prefix(TokenKind.PLUS).mode == "plus"  # type: ignore[union-attr]
    assert find_infix(TokenKind.PLUS).mode == "add"  # type: ignore[union-attr]


def test_lookup_misses() -> None:
    assert find_prefix(TokenKind.MULT) is None
    assert find_infix(TokenKind.NOT) is None
    assert find_postfix(TokenKind.LBRACE) is None
    assert find_postfix(TokenKind.LPAREN) == PostfixInfo(TokenKind.LPAREN, 90)
