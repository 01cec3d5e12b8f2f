"""
JavaScript / TypeScript parsers.

Both grammars share the same node vocabulary for functions and control
flow, so one kind table serves all three variants.
"""

from typing import Dict

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language

from complexitylens.parsers import register_parser
from complexitylens.parsers.base import NodeKind
from complexitylens.parsers.treesitter import TreeSitterParser


JS_LANGUAGE = Language(tsjavascript.language())
TS_LANGUAGE = Language(tstypescript.language_typescript())
TSX_LANGUAGE = Language(tstypescript.language_tsx())


ECMASCRIPT_KINDS: Dict[str, str] = {
    "program": NodeKind.PROGRAM,
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    # Older grammar releases name function expressions plain "function".
    "function": NodeKind.FUNCTION_EXPRESSION,
    "generator_function": NodeKind.FUNCTION_EXPRESSION,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "method_definition": NodeKind.METHOD_DEFINITION,
    "if_statement": NodeKind.IF_STATEMENT,
    "for_statement": NodeKind.FOR_STATEMENT,
    "for_in_statement": NodeKind.FOR_IN_STATEMENT,
    "while_statement": NodeKind.WHILE_STATEMENT,
    "do_statement": NodeKind.DO_WHILE_STATEMENT,
    "switch_case": NodeKind.SWITCH_CASE,
    "switch_default": NodeKind.SWITCH_CASE,
    "ternary_expression": NodeKind.CONDITIONAL_EXPRESSION,
}

LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})


@register_parser("javascript")
class JavaScriptParser(TreeSitterParser):
    """Parser for JavaScript, including JSX."""

    kind_map = ECMASCRIPT_KINDS
    logical_operators = LOGICAL_OPERATORS

    @property
    def language(self) -> str:
        return "javascript"

    def get_language(self) -> Language:
        return JS_LANGUAGE


@register_parser("typescript")
class TypeScriptParser(TreeSitterParser):
    """Parser for TypeScript without JSX."""

    kind_map = ECMASCRIPT_KINDS
    logical_operators = LOGICAL_OPERATORS

    @property
    def language(self) -> str:
        return "typescript"

    def get_language(self) -> Language:
        return TS_LANGUAGE


@register_parser("tsx")
class TSXParser(TypeScriptParser):

    @property
    def language(self) -> str:
        return "tsx"

    def get_language(self) -> Language:
        return TSX_LANGUAGE
