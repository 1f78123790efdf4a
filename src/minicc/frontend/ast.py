"""
minicc Abstract Syntax Tree (AST) Definitions
=============================================

The AST produced by the parser and handed to the code generator.

Node Hierarchy
--------------
ASTNode (base, owns an ordered list of children)
├── ProgramNode - root; children are FunctionNode
├── FunctionNode(name) - children are StatementNode
├── StatementNode(keyword) - children are ExpressionNode
└── ExpressionNode(value) - signed 64-bit integer, no children

Design Notes
------------
- Each node owns its children; there are no back references.
- Child order is source order.
- add_child() only accepts the variant the parent allows, so a tree
  built through it always has the shape above.
- Locations are excluded from equality: two trees built from different
  spellings of the same program compare equal.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from minicc.errors import SourceLocation
from minicc.frontend.errors import ASTInvariantError


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# =============================================================================
# AST Node Classes
# =============================================================================

@dataclass(kw_only=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        children: Child nodes in source order
        location: Source location where this node starts
    """
    children: list["ASTNode"] = field(default_factory=list)
    location: Optional[SourceLocation] = field(default=None, compare=False)

    # Concrete node class accepted by add_child(); None means leaf
    child_type: ClassVar[Optional[type]] = None

    def add_child(self, child: "ASTNode") -> None:
        """
        Append a child node.

        Raises:
            TypeError: If this node does not accept that kind of child
        """
        if self.child_type is None or not isinstance(child, self.child_type):
            raise TypeError(
                f"{type(self).__name__} cannot own a {type(child).__name__}"
            )
        self.children.append(child)

    def num_children(self) -> int:
        return len(self.children)


@dataclass(kw_only=True)
class ExpressionNode(ASTNode):
    """
    Integer constant expression.

    Attributes:
        value: The literal's value as a signed 64-bit integer
    """
    value: int = 0


@dataclass(kw_only=True)
class StatementNode(ASTNode):
    """
    Statement introduced by a keyword.

    Attributes:
        keyword: The statement keyword ("return" is the only one so far)
    """
    keyword: str = "return"

    child_type: ClassVar[Optional[type]] = ExpressionNode


@dataclass(kw_only=True)
class FunctionNode(ASTNode):
    """
    Function definition.

    Attributes:
        name: Function name
    """
    name: str = ""

    child_type: ClassVar[Optional[type]] = StatementNode

    @property
    def statements(self) -> list[StatementNode]:
        return self.children


@dataclass(kw_only=True)
class ProgramNode(ASTNode):
    """Root node; owns every function in the translation unit."""

    child_type: ClassVar[Optional[type]] = FunctionNode

    @property
    def functions(self) -> list[FunctionNode]:
        return self.children


# =============================================================================
# AST Container
# =============================================================================

@dataclass
class AST:
    """
    A complete tree, always rooted at a ProgramNode.

    The root is created empty; the parser attaches functions to it once
    each one is complete.
    """
    root: ProgramNode = field(default_factory=ProgramNode)

    def validate(self) -> None:
        """
        Check the contract the code generator relies on.

        Each level must hold only the variant its parent accepts, even when
        children were appended to the list directly. Every function must
        have at least one statement, every statement at least one
        expression, and every expression must be a leaf whose value is an
        int that fits in a signed 64-bit integer.

        Raises:
            ASTInvariantError: On the first violation found
        """
        if not isinstance(self.root, ProgramNode):
            raise ASTInvariantError(
                f"root must be a ProgramNode, not {type(self.root).__name__}"
            )

        for function in self.root.children:
            _check_child(self.root, function)
            if function.num_children() == 0:
                raise ASTInvariantError(
                    f"function '{function.name}' has no statements",
                    location=function.location,
                )
            for statement in function.children:
                _check_child(function, statement)
                if statement.num_children() == 0:
                    raise ASTInvariantError(
                        f"'{statement.keyword}' statement in '{function.name}' has no expression",
                        location=statement.location,
                    )
                for expression in statement.children:
                    _check_child(statement, expression)
                    _check_expression(expression)


def _check_child(parent: ASTNode, child: Any) -> None:
    if not isinstance(child, parent.child_type):
        raise ASTInvariantError(
            f"{type(parent).__name__} children must be {parent.child_type.__name__}, "
            f"not {type(child).__name__}",
            location=getattr(child, "location", None),
        )


def _check_expression(expression: ExpressionNode) -> None:
    if expression.num_children() != 0:
        raise ASTInvariantError(
            "expression must not have children",
            location=expression.location,
        )
    # bool is an int subclass but never a literal value
    if not isinstance(expression.value, int) or isinstance(expression.value, bool):
        raise ASTInvariantError(
            f"expression value must be an int, not {type(expression.value).__name__}",
            location=expression.location,
        )
    if not INT64_MIN <= expression.value <= INT64_MAX:
        raise ASTInvariantError(
            f"expression value {expression.value} does not fit in 64 bits",
            location=expression.location,
        )


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care
    about; anything else falls through to generic_visit, which visits
    the children in order.

    Usage:
        class FunctionNames(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_FunctionNode(self, node):
                self.names.append(node.name)

        collector = FunctionNames()
        collector.visit(ast.root)
    """

    def visit(self, node: ASTNode) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        for child in node.children:
            self.visit(child)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Indented dump of an AST, used by `mcc --ast`.

    Usage:
        printer = ASTPrinter()
        print(printer.print(ast.root))

    Output:
        Program
          Function: main
            Statement: return
              Expression: 3
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the tree under node and return it as a string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _visit_children(self, node: ASTNode) -> None:
        self.indent_level += 1
        self.generic_visit(node)
        self.indent_level -= 1

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        self._visit_children(node)

    def visit_FunctionNode(self, node: FunctionNode):
        self._emit(f"Function: {node.name}")
        self._visit_children(node)

    def visit_StatementNode(self, node: StatementNode):
        self._emit(f"Statement: {node.keyword}")
        self._visit_children(node)

    def visit_ExpressionNode(self, node: ExpressionNode):
        self._emit(f"Expression: {node.value}")
