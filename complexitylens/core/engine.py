"""
Analysis engine for complexitylens.

This module runs analysis passes: parse a document, locate functions,
score them and build presentation records. Every failure on the way
(unsupported language, invalid source, unreadable file) degrades to an
empty result instead of an exception.
"""

import fnmatch
import logging
import os
import time
from pathlib import Path
from typing import Dict, Generator, List, Optional, Union

from complexitylens.config import ConfigStore, ScanConfig
from complexitylens.core.locator import locate_all, locate_enclosing
from complexitylens.core.presentation import Highlight, InlineHint, build_highlight, build_hints
from complexitylens.core.results import FileReport, FunctionSpan, ScanResult
from complexitylens.core.scorer import score
from complexitylens.errors import ParseError
from complexitylens.parsers import get_parser
from complexitylens.parsers.base import GenericNode

logger = logging.getLogger(__name__)


# Language detection by file extension
LANGUAGE_EXTENSIONS: Dict[str, List[str]] = {
    "javascript": [".js", ".jsx", ".mjs", ".cjs"],
    "typescript": [".ts", ".mts", ".cts"],
    "tsx": [".tsx"],
}

# Reverse mapping for quick lookup
EXTENSION_TO_LANGUAGE: Dict[str, str] = {}
for lang, exts in LANGUAGE_EXTENSIONS.items():
    for ext in exts:
        EXTENSION_TO_LANGUAGE[ext] = lang


class AnalysisEngine:
    """
    Runs complexity analysis passes.

    Each call is an independent pass. The only state kept between calls
    is the config store, which is consulted afresh on every pass so
    configuration changes apply without restarting.
    """

    def __init__(self, config: Optional[Union[ScanConfig, ConfigStore]] = None):
        if isinstance(config, ConfigStore):
            self.config_store = config
        else:
            self.config_store = ConfigStore.static(config or ScanConfig())

    @property
    def config(self) -> ScanConfig:
        return self.config_store.current()

    def parse(self, text: str, language: str) -> Optional[GenericNode]:
        """
        Parse a document, or return None when there is nothing to analyze.
        """
        parser = get_parser(language)
        if parser is None:
            logger.debug("No parser for language %r", language)
            return None
        try:
            return parser.parse(text)
        except ParseError as e:
            logger.debug("Skipping %s document: %s", language, e)
            return None

    def analyze_document(self, text: str, language: str) -> List[FunctionSpan]:
        """Score every function in a document, in document order."""
        root = self.parse(text, language)
        if root is None:
            return []
        count_logical = self.config.complexity.count_logical_operators
        return [score(node, count_logical) for node in locate_all(root)]

    def analyze_at_offset(self, text: str, language: str, offset: int) -> Optional[FunctionSpan]:
        """Score the innermost function enclosing a character offset."""
        if offset < 0 or offset > len(text):
            logger.debug("Offset %d outside document of length %d", offset, len(text))
            return None
        root = self.parse(text, language)
        if root is None:
            return None
        node = locate_enclosing(root, offset)
        if node is None:
            return None
        return score(node, self.config.complexity.count_logical_operators)

    def hints(self, text: str, language: str) -> List[InlineHint]:
        return build_hints(self.analyze_document(text, language))

    def highlight(self, text: str, language: str, offset: int) -> Optional[Highlight]:
        span = self.analyze_at_offset(text, language, offset)
        if span is None or not span.has_location:
            return None
        return build_highlight(span, self.config.complexity)

    def detect_language(self, file_path: str) -> Optional[str]:
        """Detect the language of a file from its extension."""
        ext = os.path.splitext(file_path)[1].lower()
        return EXTENSION_TO_LANGUAGE.get(ext)

    def should_ignore(self, file_path: str, base_path: str) -> bool:
        """Check if a file should be ignored based on patterns."""
        config = self.config
        rel_path = os.path.relpath(file_path, base_path)
        name = os.path.basename(file_path)

        for pattern in config.exclude_patterns:
            if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(name, pattern):
                return True
            # "dir/**" also excludes the directory itself
            if pattern.endswith("/**") and fnmatch.fnmatch(rel_path, pattern[:-3]):
                return True

        if config.include_patterns and os.path.isfile(file_path):
            return not any(
                fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(name, pattern)
                for pattern in config.include_patterns
            )

        return False

    def discover_files(self, target_path: str) -> Generator[str, None, None]:
        """Discover all files to analyze in the target path."""
        target = Path(target_path)

        if target.is_file():
            yield str(target)
            return

        max_file_size = self.config.max_file_size
        for root, dirs, files in os.walk(target):
            dirs[:] = sorted(d for d in dirs if not self.should_ignore(os.path.join(root, d), target_path))

            for file in sorted(files):
                file_path = os.path.join(root, file)

                if not self.detect_language(file_path):
                    continue
                if self.should_ignore(file_path, target_path):
                    continue

                try:
                    if os.path.getsize(file_path) > max_file_size:
                        logger.debug("Skipping %s: larger than %d bytes", file_path, max_file_size)
                        continue
                except OSError:
                    continue

                yield file_path

    def scan_file(self, file_path: str, language: Optional[str] = None) -> FileReport:
        """Analyze a single file."""
        language = language or self.detect_language(file_path)
        report = FileReport(file_path=file_path, language=language)
        if language is None:
            report.error = "Unsupported file type"
            return report

        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            logger.warning("Error reading %s: %s", file_path, e)
            report.error = f"Error reading file: {e}"
            return report

        parser = get_parser(language)
        if parser is None:
            report.error = f"Unsupported language: {language}"
            return report
        try:
            root = parser.parse(content)
        except ParseError as e:
            logger.debug("Parse error in %s: %s", file_path, e)
            report.error = str(e)
            return report

        count_logical = self.config.complexity.count_logical_operators
        report.functions = [score(node, count_logical) for node in locate_all(root)]
        return report

    def scan(self, target_path: str) -> ScanResult:
        """
        Scan a target path and return results.

        Args:
            target_path: Path to a file or directory to scan.

        Returns:
            ScanResult with one FileReport per discovered file.
        """
        start_time = time.time()
        reports: List[FileReport] = []
        errors: List[str] = []

        if not os.path.exists(target_path):
            raise FileNotFoundError(f"Target not found: {target_path}")

        for file_path in self.discover_files(target_path):
            report = self.scan_file(file_path)
            reports.append(report)
            if report.error:
                errors.append(f"{file_path}: {report.error}")

        elapsed_time = time.time() - start_time
        logger.debug("Scanned %d files in %.3fs", len(reports), elapsed_time)

        return ScanResult(
            files=reports,
            scan_time_seconds=round(elapsed_time, 3),
            errors=errors,
        )


def create_engine(config_path: Optional[str] = None, start_dir: str = ".") -> AnalysisEngine:
    """
    Create an engine whose configuration tracks a config file.

    Args:
        config_path: Optional path to a configuration file. When omitted,
            one is searched for upward from ``start_dir``.

    Returns:
        Configured AnalysisEngine instance.
    """
    from complexitylens.config import find_config

    if config_path is None:
        config_path = find_config(start_dir)
    return AnalysisEngine(ConfigStore(path=config_path))
