"""
SPRIG Language Parser

Parses SPRIG tokens into an abstract syntax tree.

This module implements the recursive-descent grammar for declarations, blocks and
control flow, together with a precedence-climbing (Pratt) sub-parser for
expressions driven by the static table in `sprig_operators`.

Supported Constructs
--------------------
- Declarations:
    * Functions: `fn name(a, b) { ... }`
    * Variables: `var x;`, `var x = expr;`

- Statements (inside blocks):
    * Assignments: `x = expr;`
    * Loops: `while (cond) { ... }`, `do { ... } while (cond)`
    * Expression statements: `f(x);`
    * A trailing expression as the block's value: `{ a + b }`

- Expressions:
    * Binary: `* / %`, `+ -`, `< <= > >=`, `== !=`, `&&`, `||` (all left-associative)
    * Unary prefix: `! + -`
    * Postfix: calls `f(a, b)` and index access `a[i]`
    * Grouping: `(a + b) * c`
    * Conditionals: `if (c) { a } else if (d) { b } else { c }`

Parser Behavior
---------------
- Fail-fast: the first grammar violation raises `SprigSyntaxError`; nothing is recovered.
- Tokens that start no declaration at the top level are skipped with a warning,
  unless the parser is strict, in which case they are rejected.

Entry Points
------------
- `Parser(tokens).parse()`: Parse a token list into a `Unit`.
- `parse_tokens(tokens)`: Shorthand for the above.
- `parse_source(text)`: Lex and parse source text.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from sprig.sprig_ast import (
    Assign,
    Binary,
    Block,
    Call,
    Declaration,
    Expression,
    ExprStmt,
    FunctionDecl,
    If,
    IndexAccess,
    NumberLiteral,
    Reference,
    Step,
    Unary,
    Unit,
    VariableDecl,
    While,
)
from sprig.sprig_constants import TokenKind
from sprig.sprig_lexer import Token, tokenize
from sprig.sprig_operators import (
    InfixInfo,
    PostfixInfo,
    PrefixInfo,
    find_infix,
    find_postfix,
    find_prefix,
)
from sprig.sprig_stream import SprigSyntaxError, TokenStream

logger = logging.getLogger(__name__)

# Decimal text as the lexer produces it: digits with an optional fraction.
NUMBER_TEXT = re.compile(r"[0-9]+(\.[0-9]*)?")


def to_number(token: Token) -> int | float:
    """Converts a NUMBER token's text: `int` for integers, `float` otherwise.

    Raises:
        SprigSyntaxError: If the payload is not decimal number text.
    """
    text = token.value or ""
    if not NUMBER_TEXT.fullmatch(text):
        raise SprigSyntaxError(f"invalid number literal: {text!r}", token)
    if "." in text:
        return float(text)
    return int(text)


class Parser:
    """
    SPRIG Parser Class

    Consumes tokens through a `TokenStream` and builds AST nodes. Each grammar
    production is a method; the methods call each other recursively and hand
    finished nodes back to their caller.

    Attributes
    ----------
    stream : TokenStream
        The token stream being parsed. Owned by this parser.
    strict : bool
        If True, unrecognized top-level tokens raise instead of being skipped.

    Methods
    -------
    parse() -> Unit
        Parse a complete program.
    parse_function_decl() -> FunctionDecl
        Parse `fn name(params) { ... }`.
    parse_variable_decl() -> VariableDecl
        Parse `var name [= expr];`.
    parse_block() -> Block
        Parse a `{}`-enclosed sequence of steps.
    parse_step() -> Step
        Parse one block step (declaration, statement, or trailing expression).
    parse_if() -> If
        Parse an `if`/`else if`/`else` chain.
    parse_while() -> While
        Parse a `while` or `do`-`while` loop.
    parse_expression(min_bp: int = 0) -> Expression
        Parse an expression whose operators bind at least as tightly as `min_bp`.

    Raises
    ------
    SprigSyntaxError
        When an unexpected token is encountered.
    """

    def __init__(self, tokens: Iterable[Token] | TokenStream, strict: bool = False) -> None:
        self.stream: TokenStream = (
            tokens if isinstance(tokens, TokenStream) else TokenStream(tokens)
        )
        self.strict: bool = strict

    def parse(self) -> Unit:
        """Parse a full SPRIG program and return its `Unit`."""
        s = self.stream
        first = s.current_token()
        line, col = (first.line, first.col) if not s.at_end else (1, 1)
        logger.debug("parsing %d tokens", len(s))

        decls: list[Declaration] = []
        while s.current_kind() != TokenKind.EOF:
            kind = s.current_kind()
            if kind == TokenKind.FN:
                decls.append(self.parse_function_decl())
            elif kind == TokenKind.VAR:
                decls.append(self.parse_variable_decl())
            else:
                tok = s.current_token()
                if self.strict:
                    raise SprigSyntaxError(
                        f"unexpected token at top level: {tok.kind}", tok
                    )
                logger.warning(
                    "skipping top-level token %s at line %d, col %d",
                    tok.kind,
                    tok.line,
                    tok.col,
                )
                s.advance()

        logger.debug("parsed %d top-level declarations", len(decls))
        return Unit(decls, line, col)

    def parse_identifier(self) -> str:
        """Consume an IDENT token and return its name."""
        s = self.stream
        s.expect(TokenKind.IDENT)
        name = s.current_token().value
        assert name is not None  # for mypy
        s.advance()
        return name

    def parse_function_decl(self) -> FunctionDecl:
        s = self.stream
        tok = s.current_token()
        s.advance_with(TokenKind.FN)

        name = self.parse_identifier()
        params = self.parse_params()
        body = self.parse_block()

        return FunctionDecl(name, params, body, tok.line, tok.col)

    def parse_params(self) -> list[str]:
        """Parse `(a, b, ...)`. No trailing comma; duplicates are not checked."""
        s = self.stream
        s.advance_with(TokenKind.LPAREN)
        params: list[str] = []
        while s.current_kind() != TokenKind.RPAREN:
            if params:
                s.advance_with(TokenKind.COMMA)
            params.append(self.parse_identifier())
        s.advance_with(TokenKind.RPAREN)
        return params

    def parse_variable_decl(self) -> VariableDecl:
        s = self.stream
        tok = s.current_token()
        s.advance_with(TokenKind.VAR)

        name = self.parse_identifier()

        value = None
        if s.current_kind() == TokenKind.ASSIGN:
            s.advance()
            value = self.parse_expression()

        s.advance_with(TokenKind.SEMICOLON)
        return VariableDecl(name, value, tok.line, tok.col)

    def parse_block(self) -> Block:
        """Parse a `{}`-enclosed block of steps."""
        s = self.stream
        tok = s.current_token()
        s.advance_with(TokenKind.LBRACE)

        steps: list[Step] = []
        while s.current_kind() != TokenKind.RBRACE:
            steps.append(self.parse_step())

        s.advance_with(TokenKind.RBRACE)
        return Block(steps, tok.line, tok.col)

    def parse_step(self) -> Step:
        """Parse one step of a block.

        The step's shape is decided from the current token (and, for
        assignments, the one after it):

            fn / var            -> declaration
            while / do          -> loop
            IDENT "="           -> assignment
            if                  -> conditional; a statement unless it closes the block
            anything else       -> expression, then `;` makes it a statement;
                                   without `;` it must be the block's last step
        """
        s = self.stream
        kind = s.current_kind()

        if kind == TokenKind.FN:
            return self.parse_function_decl()
        if kind == TokenKind.VAR:
            return self.parse_variable_decl()
        if kind in (TokenKind.WHILE, TokenKind.DO):
            return self.parse_while()
        if kind == TokenKind.IDENT and s.lookahead(1).kind == TokenKind.ASSIGN:
            return self.parse_assign()

        tok = s.current_token()
        if kind == TokenKind.IF:
            # Statement position: `if` is not continued by operators.
            expr: Expression = self.parse_if()
            if s.current_kind() == TokenKind.SEMICOLON:
                s.advance()
                return ExprStmt(expr, tok.line, tok.col)
            if s.current_kind() != TokenKind.RBRACE:
                return ExprStmt(expr, tok.line, tok.col)
            return expr

        expr = self.parse_expression()
        if s.current_kind() == TokenKind.SEMICOLON:
            s.advance()
            return ExprStmt(expr, tok.line, tok.col)

        # Trailing value of the block.
        s.expect(TokenKind.RBRACE)
        return expr

    def parse_assign(self) -> Assign:
        s = self.stream
        tok = s.current_token()
        name = self.parse_identifier()
        s.advance_with(TokenKind.ASSIGN)
        value = self.parse_expression()
        s.advance_with(TokenKind.SEMICOLON)
        return Assign(name, value, tok.line, tok.col)

    def parse_cond(self) -> Expression:
        """Parse a parenthesized condition `( expr )`."""
        s = self.stream
        s.advance_with(TokenKind.LPAREN)
        expr = self.parse_expression()
        s.advance_with(TokenKind.RPAREN)
        return expr

    def parse_if(self) -> If:
        """Parse an IF condition with optional ELSE block or ELSE IF chain."""
        s = self.stream
        tok = s.current_token()
        s.advance_with(TokenKind.IF)

        cond = self.parse_cond()
        then_block = self.parse_block()

        else_block: Block | If | None = None
        if s.current_kind() == TokenKind.ELSE:
            s.advance()
            if s.current_kind() == TokenKind.IF:
                else_block = self.parse_if()
            else:
                else_block = self.parse_block()

        return If(cond, then_block, else_block, tok.line, tok.col)

    def parse_while(self) -> While:
        """Parse `while (cond) { ... }` or `do { ... } while (cond)`."""
        s = self.stream
        tok = s.current_token()

        if s.current_kind() == TokenKind.WHILE:
            s.advance_with(TokenKind.WHILE)
            cond = self.parse_cond()
            body = self.parse_block()
            return While("while", cond, body, tok.line, tok.col)

        s.advance_with(TokenKind.DO)
        body = self.parse_block()
        s.advance_with(TokenKind.WHILE)
        cond = self.parse_cond()
        return While("do-while", cond, body, tok.line, tok.col)

    # Pratt parsing

    def parse_expression(self, min_bp: int = 0) -> Expression:
        """Parse an expression by precedence climbing.

        Operators whose (left) binding power is below `min_bp` are left for
        an enclosing call to consume.
        """
        s = self.stream

        prefix = find_prefix(s.current_kind())
        left: Expression
        if prefix is not None:
            left = self.parse_prefix(prefix)
        else:
            left = self.parse_atom()

        while True:
            kind = s.current_kind()

            postfix = find_postfix(kind)
            if postfix is not None:
                if postfix.bp < min_bp:
                    break
                left = self.parse_postfix(left, postfix)
                continue

            infix = find_infix(kind)
            if infix is not None:
                if infix.lbp < min_bp:
                    break
                left = self.parse_infix(left, infix)
                continue

            break

        return left

    def parse_prefix(self, info: PrefixInfo) -> Unary:
        s = self.stream
        tok = s.current_token()
        s.advance()
        operand = self.parse_expression(info.bp)
        return Unary(info.mode, operand, tok.line, tok.col)

    def parse_infix(self, left: Expression, info: InfixInfo) -> Binary:
        s = self.stream
        tok = s.current_token()
        s.advance()
        right = self.parse_expression(info.rbp)
        return Binary(info.mode, left, right, tok.line, tok.col)

    def parse_postfix(self, left: Expression, info: PostfixInfo) -> Call | IndexAccess:
        s = self.stream
        tok = s.current_token()
        s.advance()

        if info.token == TokenKind.LBRACK:
            index = self.parse_expression()
            s.advance_with(TokenKind.RBRACK)
            return IndexAccess(left, index, tok.line, tok.col)

        # call; a trailing comma is allowed
        args: list[Expression] = []
        if s.current_kind() != TokenKind.RPAREN:
            args.append(self.parse_expression())
            while s.current_kind() == TokenKind.COMMA:
                s.advance()
                if s.current_kind() == TokenKind.RPAREN:
                    break
                args.append(self.parse_expression())
        s.advance_with(TokenKind.RPAREN)
        return Call(left, args, tok.line, tok.col)

    def parse_atom(self) -> Expression:
        """
        ```text
        <Atom> = <NumberLiteral> / <Identifier> / <IfExpr> / "(" <Expr> ")"
        ```
        """
        s = self.stream
        tok = s.current_token()
        kind = tok.kind

        if kind == TokenKind.NUMBER:
            s.advance()
            return NumberLiteral(to_number(tok), tok.line, tok.col)

        if kind == TokenKind.IDENT:
            return Reference(self.parse_identifier(), tok.line, tok.col)

        if kind == TokenKind.IF:
            return self.parse_if()

        if kind == TokenKind.LPAREN:
            s.advance()
            expr = self.parse_expression()
            s.advance_with(TokenKind.RPAREN)
            return expr

        raise SprigSyntaxError(f"unexpected token: {kind}", tok)


def parse_tokens(tokens: Iterable[Token], strict: bool = False) -> Unit:
    """Parse a token sequence into a `Unit`."""
    return Parser(tokens, strict=strict).parse()


def parse_source(source: str, strict: bool = False) -> Unit:
    """Lex and parse SPRIG source text into a `Unit`."""
    return parse_tokens(tokenize(source), strict=strict)


__all__ = ["Parser", "parse_source", "parse_tokens", "to_number"]
