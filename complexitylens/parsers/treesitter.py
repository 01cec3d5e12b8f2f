"""
tree-sitter backed implementation of the generic node view.

Concrete grammars subclass ``TreeSitterParser`` and supply the
language object plus a table mapping grammar node types onto
``NodeKind`` tags.
"""

import logging
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional

from tree_sitter import Language, Node, Parser

from complexitylens.errors import ParseError
from complexitylens.parsers.base import BaseParser, GenericNode, NodeKind, Span

logger = logging.getLogger(__name__)


# Parent node types that give an anonymous function its name, and the
# field holding that name.
BINDING_NAME_FIELDS: Dict[str, tuple] = {
    "variable_declarator": ("name",),
    "pair": ("key",),
    "assignment_expression": ("left",),
    "field_definition": ("property", "name"),
    "public_field_definition": ("name",),
}


def _char_offset_table(data: bytes, text: str) -> Optional[List[int]]:
    """Map UTF-8 byte offsets to character offsets; None when they coincide."""
    if len(data) == len(text):
        return None
    table: List[int] = []
    for index, char in enumerate(text):
        table.extend([index] * len(char.encode("utf-8", errors="replace")))
    table.append(len(text))
    return table


@dataclass(frozen=True)
class SourceDocument:
    """The parsed text shared by every node of one tree."""
    text: str
    data: bytes
    kind_map: Dict[str, str]
    logical_operators: FrozenSet[str]
    offsets: Optional[List[int]] = field(default=None, repr=False)

    @classmethod
    def create(
        cls,
        text: str,
        kind_map: Dict[str, str],
        logical_operators: FrozenSet[str],
    ) -> "SourceDocument":
        data = text.encode("utf-8", errors="replace")
        return cls(
            text=text,
            data=data,
            kind_map=kind_map,
            logical_operators=logical_operators,
            offsets=_char_offset_table(data, text),
        )

    def char_offset(self, byte_offset: int) -> int:
        if self.offsets is None:
            return byte_offset
        return self.offsets[min(byte_offset, len(self.offsets) - 1)]

    def node_text(self, node: Node) -> str:
        return self.data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


@dataclass(frozen=True, eq=False, repr=False)
class TreeSitterNode(GenericNode):
    """Wraps a tree-sitter node; children are wrapped lazily on demand."""
    node: Node
    document: SourceDocument

    @property
    def kind(self) -> str:
        node_type = self.node.type
        if node_type == "binary_expression":
            operator = self.node.child_by_field_name("operator")
            if operator is not None and operator.type in self.document.logical_operators:
                return NodeKind.LOGICAL_EXPRESSION
            return node_type
        return self.document.kind_map.get(node_type, node_type)

    @property
    def span(self) -> Optional[Span]:
        return Span(
            start_line=self.node.start_point[0] + 1,
            end_line=self.node.end_point[0] + 1,
            start_offset=self.document.char_offset(self.node.start_byte),
            end_offset=self.document.char_offset(self.node.end_byte),
        )

    def children(self) -> Iterator[GenericNode]:
        for child in self.node.named_children:
            yield TreeSitterNode(child, self.document)

    @property
    def name(self) -> Optional[str]:
        if not self.is_function:
            return None
        name_node = self.node.child_by_field_name("name")
        if name_node is None and self.node.parent is not None:
            parent = self.node.parent
            for field_name in BINDING_NAME_FIELDS.get(parent.type, ()):
                name_node = parent.child_by_field_name(field_name)
                if name_node is not None:
                    break
        if name_node is None:
            return None
        return self.document.node_text(name_node)


def find_first_error(node: Node) -> Optional[Node]:
    """Return the first ERROR or MISSING node in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(reversed([child for child in current.children if child.has_error or child.is_missing]))
    return None


class TreeSitterParser(BaseParser):
    """
    Base class for parsers built on a tree-sitter grammar.

    Subclasses set ``kind_map`` and ``logical_operators`` and implement
    ``get_language``.
    """

    kind_map: Dict[str, str] = {}
    logical_operators: FrozenSet[str] = frozenset()

    def __init__(self):
        self._parser = Parser(self.get_language())

    @abstractmethod
    def get_language(self) -> Language:
        """Return the grammar this parser is built on."""

    def parse(self, source: str) -> GenericNode:
        document = SourceDocument.create(source, self.kind_map, self.logical_operators)
        tree = self._parser.parse(document.data)
        root = tree.root_node
        if root.has_error:
            error = find_first_error(root)
            if error is None:
                raise ParseError(f"Invalid {self.language} source")
            line, column = error.start_point[0] + 1, error.start_point[1] + 1
            what = f"missing '{error.type}'" if error.is_missing else "syntax error"
            logger.debug("%s parse failed: %s at %d:%d", self.language, what, line, column)
            raise ParseError(f"Invalid {self.language} source: {what}", line=line, column=column)
        return TreeSitterNode(root, document)
