"""
Token kinds and lexical tables for the SPRIG language.

Exports:
    TokenKind: Closed enumeration of every token kind the lexer can produce.
    token_hashmap: Maps source text (keywords and symbols) to its TokenKind.
    KEYWORDS: The reserved words of the language.
"""

from enum import Enum


class TokenKind(str, Enum):
    """Enumerated token tags. The string value is the canonical token name."""

    EOF = "EOF"
    ERROR = "ERROR"

    IDENT = "IDENT"
    NUMBER = "NUMBER"

    # Keywords
    FN = "FN"
    VAR = "VAR"
    IF = "IF"
    ELSE = "ELSE"
    WHILE = "WHILE"
    DO = "DO"

    # Punctuation
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACK = "LBRACK"
    RBRACK = "RBRACK"
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"

    # Operators
    PLUS = "PLUS"
    SUB = "SUB"
    MULT = "MULT"
    DIV = "DIV"
    MOD = "MOD"
    LT = "LT"
    LE = "LE"
    GT = "GT"
    GE = "GE"
    EQ = "EQ"
    NE = "NE"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    ASSIGN = "ASSIGN"

    def __str__(self) -> str:
        return self.value


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FN,
    "var": TokenKind.VAR,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
    "do": TokenKind.DO,
}

SYMBOLS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACK,
    "]": TokenKind.RBRACK,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "+": TokenKind.PLUS,
    "-": TokenKind.SUB,
    "*": TokenKind.MULT,
    "/": TokenKind.DIV,
    "%": TokenKind.MOD,
    "<": TokenKind.LT,
    "<=": TokenKind.LE,
    ">": TokenKind.GT,
    ">=": TokenKind.GE,
    "==": TokenKind.EQ,
    "!=": TokenKind.NE,
    "&&": TokenKind.AND,
    "||": TokenKind.OR,
    "!": TokenKind.NOT,
    "=": TokenKind.ASSIGN,
}

token_hashmap: dict[str, TokenKind] = {**KEYWORDS, **SYMBOLS}

# Longest symbol in the table; bounds the operator match window.
MAX_SYMBOL_LEN = max(len(s) for s in SYMBOLS)

__all__ = ["KEYWORDS", "MAX_SYMBOL_LEN", "SYMBOLS", "TokenKind", "token_hashmap"]
