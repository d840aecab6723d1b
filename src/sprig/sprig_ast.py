"""
Defines the abstract syntax tree (AST) node family for the SPRIG language.

Classes:
    ASTNode:
        Base class of every node. Tracks the source location of the node's first
        token and provides structural equality, a debugging repr, `to_dict()`
        serialization and an S-expression rendering.

    ASTDict:
        TypedDict shape of the common keys of a serialized node.

    Unit, FunctionDecl, VariableDecl, Block, If, While, Assign, ExprStmt,
    Binary, Unary, Call, IndexAccess, NumberLiteral, Reference:
        The closed set of concrete nodes produced by the parser.

Each node tracks:
    kind (str): The node's variant name (e.g. "Binary", "If").
    line (int): Source line of the node's first token.
    col (int): Source column of the node's first token.

Usage:
    The parser builds these bottom-up; every composite node owns its children.
    Tests and the CLI use `format_sexpr()` to check and display tree shape.

Example:
    node = Binary("add", Reference("a", 1, 1), NumberLiteral(1, 1, 5), line=1, col=3)
    format_sexpr(node)  # "(add a 1)"
"""

from typing import Any, Literal, TypedDict, Union

BinaryMode = Literal[
    "mul", "div", "rem", "add", "sub", "lt", "lte", "gt", "gte", "eq", "neq", "and", "or"
]
UnaryMode = Literal["not", "plus", "minus"]
LoopMode = Literal["while", "do-while"]


class ASTDict(TypedDict, total=False):
    """
    Common keys of a serialized ASTNode.

    Fields:
        kind (str): The node variant (e.g. "FunctionDecl", "Binary").
        line (int): Line number in the source code where the node originates.
        col (int): Column number in the source code where the node originates.

    Variant-specific fields (e.g. "name", "left", "steps") are added alongside.
    """

    kind: str
    line: int
    col: int


def _serialize(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


class ASTNode:
    """
    Base class for SPRIG AST nodes.

    Subclasses list their payload attributes in `_fields`; equality,
    serialization and repr are driven by that list.

    Attributes:
        line (int): Line number in the source file.
        col (int): Column number in the source file.
    """

    _fields: tuple[str, ...] = ()

    def __init__(self, line: int = 0, col: int = 0) -> None:
        self.line = line
        self.col = col

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        parts = [f"{name}={getattr(self, name)!r}" for name in self._fields]
        return f"{self.kind}({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        return (
            self.line == other.line
            and self.col == other.col
            and all(getattr(self, f) == getattr(other, f) for f in self._fields)
        )

    def to_dict(self) -> ASTDict:
        data: dict[str, Any] = {"kind": self.kind, "line": self.line, "col": self.col}
        for name in self._fields:
            data[name] = _serialize(getattr(self, name))
        return data  # type: ignore[return-value]

    def sexpr(self) -> str:
        raise NotImplementedError(f"{self.kind} has no S-expression form")


# Expressions


class NumberLiteral(ASTNode):
    _fields = ("value",)

    def __init__(self, value: int | float, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col)
        self.value = value

    def sexpr(self) -> str:
        return repr(self.value)


class Reference(ASTNode):
    _fields = ("name",)

    def __init__(self, name: str, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col)
        self.name = name

    def sexpr(self) -> str:
        return self.name


class Unary(ASTNode):
    _fields = ("mode", "operand")

    def __init__(
        self, mode: UnaryMode, operand: "Expression", line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col)
        self.mode = mode
        self.operand = operand

    def sexpr(self) -> str:
        return f"({self.mode} {self.operand.sexpr()})"


class Binary(ASTNode):
    _fields = ("mode", "left", "right")

    def __init__(
        self,
        mode: BinaryMode,
        left: "Expression",
        right: "Expression",
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col)
        self.mode = mode
        self.left = left
        self.right = right

    def sexpr(self) -> str:
        return f"({self.mode} {self.left.sexpr()} {self.right.sexpr()})"


class Call(ASTNode):
    """Postfix call `callee(args...)`. Located at the opening parenthesis."""

    _fields = ("callee", "args")

    def __init__(
        self,
        callee: "Expression",
        args: list["Expression"] | None = None,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col)
        self.callee = callee
        self.args: list[Expression] = args or []

    def sexpr(self) -> str:
        parts = [self.callee.sexpr()] + [a.sexpr() for a in self.args]
        return f"(call {' '.join(parts)})"


class IndexAccess(ASTNode):
    """Postfix index `target[index]`. Located at the opening bracket."""

    _fields = ("target", "index")

    def __init__(
        self, target: "Expression", index: "Expression", line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col)
        self.target = target
        self.index = index

    def sexpr(self) -> str:
        return f"(index {self.target.sexpr()} {self.index.sexpr()})"


class Block(ASTNode):
    _fields = ("steps",)

    def __init__(
        self, steps: list["Step"] | None = None, line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col)
        self.steps: list[Step] = steps or []

    def sexpr(self) -> str:
        return "(block" + "".join(" " + s.sexpr() for s in self.steps) + ")"


class If(ASTNode):
    """Conditional; usable both as a statement and as an expression.

    `else_block` is None, a Block, or a nested If for `else if` chains.
    """

    _fields = ("cond", "then_block", "else_block")

    def __init__(
        self,
        cond: "Expression",
        then_block: Block,
        else_block: Union[Block, "If", None] = None,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col)
        self.cond = cond
        self.then_block = then_block
        self.else_block = else_block

    def sexpr(self) -> str:
        parts = [self.cond.sexpr(), self.then_block.sexpr()]
        if self.else_block is not None:
            parts.append(self.else_block.sexpr())
        return f"(if {' '.join(parts)})"


# Statements


class While(ASTNode):
    _fields = ("mode", "cond", "body")

    def __init__(
        self,
        mode: LoopMode,
        cond: "Expression",
        body: Block,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col)
        self.mode = mode
        self.cond = cond
        self.body = body

    def sexpr(self) -> str:
        return f"({self.mode} {self.cond.sexpr()} {self.body.sexpr()})"


class Assign(ASTNode):
    _fields = ("name", "value")

    def __init__(
        self, name: str, value: "Expression", line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col)
        self.name = name
        self.value = value

    def sexpr(self) -> str:
        return f"(assign {self.name} {self.value.sexpr()})"


class ExprStmt(ASTNode):
    """An expression evaluated for its effect; its value is discarded."""

    _fields = ("expr",)

    def __init__(self, expr: "Expression", line: int = 0, col: int = 0) -> None:
        super().__init__(line, col)
        self.expr = expr

    def sexpr(self) -> str:
        return f"(expr {self.expr.sexpr()})"


# Declarations


class VariableDecl(ASTNode):
    _fields = ("name", "value")

    def __init__(
        self,
        name: str,
        value: "Expression | None" = None,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col)
        self.name = name
        self.value = value

    def sexpr(self) -> str:
        if self.value is None:
            return f"(var {self.name})"
        return f"(var {self.name} {self.value.sexpr()})"


class FunctionDecl(ASTNode):
    _fields = ("name", "params", "body")

    def __init__(
        self,
        name: str,
        params: list[str],
        body: Block,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col)
        self.name = name
        self.params = params
        self.body = body

    def sexpr(self) -> str:
        return f"(fn {self.name} ({' '.join(self.params)}) {self.body.sexpr()})"


class Unit(ASTNode):
    _fields = ("decls",)

    def __init__(
        self, decls: list["Declaration"] | None = None, line: int = 1, col: int = 1
    ) -> None:
        super().__init__(line, col)
        self.decls: list[Declaration] = decls or []

    def sexpr(self) -> str:
        return "(unit" + "".join(" " + d.sexpr() for d in self.decls) + ")"


Expression = Union[NumberLiteral, Reference, Unary, Binary, Call, IndexAccess, If]
Declaration = Union[FunctionDecl, VariableDecl]
Statement = Union[Declaration, While, Assign, ExprStmt]
Step = Union[Statement, Expression]


def format_sexpr(node: ASTNode) -> str:
    """Renders `node` as a compact S-expression, e.g. `(mul (add a b) c)`."""
    return node.sexpr()


__all__ = [
    "ASTDict",
    "ASTNode",
    "Assign",
    "Binary",
    "BinaryMode",
    "Block",
    "Call",
    "Declaration",
    "ExprStmt",
    "Expression",
    "FunctionDecl",
    "If",
    "IndexAccess",
    "LoopMode",
    "NumberLiteral",
    "Reference",
    "Statement",
    "Step",
    "Unary",
    "UnaryMode",
    "Unit",
    "VariableDecl",
    "While",
    "format_sexpr",
]
