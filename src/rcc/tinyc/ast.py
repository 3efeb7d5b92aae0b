"""
Tiny-C Abstract Syntax Tree (AST) Definitions
=============================================

This module defines the AST node types built by the parser and walked
by the code generator.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root, exactly one FunctionNode
├── FunctionNode - named function, exactly one StatementNode
├── StatementNode - a return statement, exactly one Expression
└── Expression
    └── ConstantNode - unsigned 32-bit integer leaf

Design Notes
------------
- All nodes are frozen dataclasses; children are stored as tuples
- Child counts are checked when a node is constructed, so a consumer
  never has to re-check arity (ArityError on violation)
- Location is optional and excluded from equality, so trees built by
  hand compare equal to parsed ones
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from rcc.errors import SourceLocation
from rcc.tinyc.errors import ArityError, IntegerOverflowError

UINT32_MAX = 0xFFFFFFFF


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts (optional)
    """
    location: Optional[SourceLocation] = field(default=None, compare=False, kw_only=True)

    def __repr__(self) -> str:
        if self.location is None:
            return self.__class__.__name__
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass(frozen=True)
class ParentNode(ASTNode):
    """
    Node with an ordered, fixed-size tuple of children.

    Subclasses set ARITY to the number of children their grammar rule
    produces.
    """
    ARITY: ClassVar[int] = 1

    children: tuple[ASTNode, ...] = ()

    def __post_init__(self):
        children = tuple(self.children)
        object.__setattr__(self, "children", children)
        if len(children) != self.ARITY:
            raise ArityError(self.__class__.__name__, self.ARITY, len(children))


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for expression nodes."""
    pass


# =============================================================================
# Concrete Nodes
# =============================================================================

@dataclass(frozen=True)
class ConstantNode(Expression):
    """
    Integer constant.

    Attributes:
        value: Numeric value, 0 to 4294967295
    """
    value: int = 0

    def __post_init__(self):
        if not 0 <= self.value <= UINT32_MAX:
            raise IntegerOverflowError(str(self.value), self.location)

    def __repr__(self) -> str:
        return f"ConstantNode({self.value})"


@dataclass(frozen=True)
class StatementNode(ParentNode):
    """A return statement; its single child is the returned expression."""

    @property
    def expression(self) -> ASTNode:
        return self.children[0]


@dataclass(frozen=True)
class FunctionNode(ParentNode):
    """
    Function definition.

    Attributes:
        id: Function name, used as the assembly symbol
        children: The function body, exactly one StatementNode
    """
    id: str = ""

    @property
    def statement(self) -> ASTNode:
        return self.children[0]


@dataclass(frozen=True)
class ProgramNode(ParentNode):
    """Root of the tree; the single child is the program's function."""

    @property
    def function(self) -> ASTNode:
        return self.children[0]


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they handle:

        class Counter(ASTVisitor):
            def visit_ConstantNode(self, node):
                return 1
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to visit_<ClassName>, falling back to generic_visit."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all children of a node."""
        for child in getattr(node, "children", ()):
            self.visit(child)


# =============================================================================
# AST Pretty Printer (for debugging)
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Render an AST as an indented tree, one node per line.

        >>> print(ASTPrinter().print(ast))
        Program
          Function main
            Statement return
              Constant 2
    """

    def __init__(self):
        self._lines: list[str] = []
        self._depth = 0

    def print(self, node: ASTNode) -> str:
        self._lines = []
        self._depth = 0
        self.visit(node)
        return "\n".join(self._lines)

    def _emit(self, text: str) -> None:
        self._lines.append("  " * self._depth + text)

    def _children(self, node: ParentNode) -> None:
        self._depth += 1
        self.generic_visit(node)
        self._depth -= 1

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        self._children(node)

    def visit_FunctionNode(self, node: FunctionNode):
        self._emit(f"Function {node.id}")
        self._children(node)

    def visit_StatementNode(self, node: StatementNode):
        self._emit("Statement return")
        self._children(node)

    def visit_ConstantNode(self, node: ConstantNode):
        self._emit(f"Constant {node.value}")
