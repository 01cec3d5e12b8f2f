"""
Language parsers producing the generic node view.

Unsupported languages are not an error: ``get_parser`` returns None and
callers treat that as "nothing to analyze".
"""

from typing import Dict, List, Optional, Type

from complexitylens.parsers.base import BaseParser

# Registry of available parsers
_parsers: Dict[str, Type[BaseParser]] = {}

LANGUAGE_ALIASES: Dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "javascriptreact": "javascript",
    "ts": "typescript",
    "mts": "typescript",
    "cts": "typescript",
    "typescriptreact": "tsx",
}


def register_parser(language: str):
    """Decorator to register a parser for a language."""
    def decorator(cls: Type[BaseParser]) -> Type[BaseParser]:
        _parsers[language.lower()] = cls
        return cls
    return decorator


def normalize_language(language: str) -> str:
    language = language.strip().lower()
    return LANGUAGE_ALIASES.get(language, language)


def get_parser(language: str) -> Optional[BaseParser]:
    """Get a parser instance for a language, or None if unsupported."""
    parser_cls = _parsers.get(normalize_language(language))
    if parser_cls is None:
        return None
    return parser_cls()


def list_supported_languages() -> List[str]:
    """List all languages with registered parsers."""
    return sorted(_parsers.keys())


# Import parsers to register them
from complexitylens.parsers.javascript_parser import (  # noqa: E402
    JavaScriptParser,
    TypeScriptParser,
    TSXParser,
)

__all__ = [
    "BaseParser",
    "get_parser",
    "register_parser",
    "normalize_language",
    "list_supported_languages",
    "JavaScriptParser",
    "TypeScriptParser",
    "TSXParser",
]
