"""
Base classes for language parsers.

Parsers turn source text into a tree of ``GenericNode`` objects. The
rest of the package only ever sees this view: a kind tag, an optional
source span and an ordered sequence of children.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class NodeKind(str, Enum):
    """
    Canonical kind tags for the constructs complexity analysis cares about.

    Names follow ESTree. Nodes that are not listed here keep the raw type
    string reported by the underlying parser.
    """
    PROGRAM = "Program"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    FUNCTION_EXPRESSION = "FunctionExpression"
    ARROW_FUNCTION = "ArrowFunctionExpression"
    METHOD_DEFINITION = "MethodDefinition"
    IF_STATEMENT = "IfStatement"
    FOR_STATEMENT = "ForStatement"
    FOR_IN_STATEMENT = "ForInStatement"
    WHILE_STATEMENT = "WhileStatement"
    DO_WHILE_STATEMENT = "DoWhileStatement"
    SWITCH_CASE = "SwitchCase"
    LOGICAL_EXPRESSION = "LogicalExpression"
    CONDITIONAL_EXPRESSION = "ConditionalExpression"

    def __str__(self) -> str:
        return self.value


FUNCTION_KINDS = frozenset({
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.ARROW_FUNCTION,
    NodeKind.METHOD_DEFINITION,
})


@dataclass(frozen=True)
class Span:
    """Source range of a node: 1-based lines, 0-based character offsets."""
    start_line: int
    end_line: int
    start_offset: int
    end_offset: int

    def contains(self, offset: int) -> bool:
        return self.start_offset <= offset <= self.end_offset


class GenericNode(ABC):
    """
    Immutable view over one AST node.

    ``children()`` returns a fresh iterator on every call, in source order.
    """

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the node's kind tag."""
        pass

    @property
    @abstractmethod
    def span(self) -> Optional[Span]:
        """Return the node's source span, or None for synthetic nodes."""
        pass

    @abstractmethod
    def children(self) -> Iterator["GenericNode"]:
        """Iterate over direct children in source order."""
        pass

    @property
    def name(self) -> Optional[str]:
        """Best-effort function name; None when anonymous."""
        return None

    @property
    def is_function(self) -> bool:
        return self.kind in FUNCTION_KINDS

    def walk(self) -> Iterator["GenericNode"]:
        """Depth-first, pre-order traversal of the subtree rooted here."""
        stack = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(list(current.children())))

    def __repr__(self) -> str:
        line = self.span.start_line if self.span else None
        return f"{type(self).__name__}(kind={str(self.kind)!r}, line={line})"


@dataclass(frozen=True, repr=False)
class StaticNode(GenericNode):
    """
    A node held entirely in memory.

    Used for synthetic trees, where there is no parser behind the node
    and the span may be absent.
    """
    node_kind: str
    node_span: Optional[Span] = None
    nodes: Tuple[GenericNode, ...] = ()
    node_name: Optional[str] = None

    @property
    def kind(self) -> str:
        return self.node_kind

    @property
    def span(self) -> Optional[Span]:
        return self.node_span

    @property
    def name(self) -> Optional[str]:
        return self.node_name

    def children(self) -> Iterator[GenericNode]:
        return iter(self.nodes)


class BaseParser(ABC):
    """
    Base class for language-specific parsers.

    Each parser turns source text into the root ``GenericNode`` of a
    normalized tree, or raises ``ParseError``.
    """

    @property
    @abstractmethod
    def language(self) -> str:
        """Return the language tag this parser handles."""
        pass

    @abstractmethod
    def parse(self, source: str) -> GenericNode:
        """
        Parse source code into a tree.

        Args:
            source: The full document text.

        Returns:
            The root node of the tree.

        Raises:
            ParseError: If the source is not syntactically valid.
        """
        pass
