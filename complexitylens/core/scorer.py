"""
Cyclomatic complexity scoring.

A function scores 1 plus one for every branch point in its subtree.
The walk is unrestricted: branch points inside a nested function also
count toward every function that encloses it.
"""

from typing import FrozenSet

from complexitylens.core.results import MISSING_LINE, FunctionSpan
from complexitylens.parsers.base import GenericNode, NodeKind


BRANCH_KINDS: FrozenSet[str] = frozenset({
    NodeKind.IF_STATEMENT,
    NodeKind.FOR_STATEMENT,
    NodeKind.WHILE_STATEMENT,
    NodeKind.DO_WHILE_STATEMENT,
    NodeKind.SWITCH_CASE,
})

LOGICAL_KINDS: FrozenSet[str] = frozenset({
    NodeKind.LOGICAL_EXPRESSION,
})


def branch_kinds(count_logical_operators: bool = False) -> FrozenSet[str]:
    """Return the node kinds that add a path through a function."""
    if count_logical_operators:
        return BRANCH_KINDS | LOGICAL_KINDS
    return BRANCH_KINDS


def complexity_of(node: GenericNode, count_logical_operators: bool = False) -> int:
    kinds = branch_kinds(count_logical_operators)
    complexity = 1
    for child in node.walk():
        if child.kind in kinds:
            complexity += 1
    return complexity


def score(node: GenericNode, count_logical_operators: bool = False) -> FunctionSpan:
    """
    Score a function node.

    Lines in the result are zero-based: both bounds are the parser's
    1-based line minus one. A node without a span reports both lines
    as -1.
    """
    span = node.span
    if span is None:
        start_line = end_line = MISSING_LINE
    else:
        start_line, end_line = span.start_line - 1, span.end_line - 1
    return FunctionSpan(
        complexity=complexity_of(node, count_logical_operators),
        start_line=start_line,
        end_line=end_line,
        name=node.name,
    )
