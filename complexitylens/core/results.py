"""
Result data structures.

``FunctionSpan`` is produced once per function per analysis pass and
never mutated. ``FileReport`` and ``ScanResult`` aggregate spans when
whole files or directories are scanned.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json


# Line value reported for nodes without location data.
MISSING_LINE = -1


@dataclass(frozen=True)
class FunctionSpan:
    """Complexity of one function and its zero-based line range."""
    complexity: int
    start_line: int
    end_line: int
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return f"Complexity: {self.complexity}"

    @property
    def has_location(self) -> bool:
        return self.start_line != MISSING_LINE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "complexity": self.complexity,
            "start_line": self.start_line,
            "end_line": self.end_line,
        }


@dataclass
class FileReport:
    """Functions found in a single file."""
    file_path: str
    language: Optional[str]
    functions: List[FunctionSpan] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def max_complexity(self) -> int:
        return max((f.complexity for f in self.functions), default=0)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "file_path": self.file_path,
            "language": self.language,
            "functions": [f.to_dict() for f in self.functions],
        }
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class ScanResult:
    """Results from scanning a file or directory."""
    files: List[FileReport]
    scan_time_seconds: float
    errors: List[str] = field(default_factory=list)

    @property
    def files_scanned(self) -> int:
        return len(self.files)

    @property
    def total_functions(self) -> int:
        return sum(len(f.functions) for f in self.files)

    @property
    def max_complexity(self) -> int:
        return max((f.max_complexity for f in self.files), default=0)

    @property
    def languages_detected(self) -> List[str]:
        return sorted({f.language for f in self.files if f.language})

    def functions_at_or_above(self, threshold: int) -> List[FunctionSpan]:
        return [
            func
            for report in self.files
            for func in report.functions
            if func.complexity >= threshold
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {
                "files_scanned": self.files_scanned,
                "scan_time_seconds": self.scan_time_seconds,
                "languages_detected": self.languages_detected,
                "total_functions": self.total_functions,
                "max_complexity": self.max_complexity,
            },
            "files": [f.to_dict() for f in self.files],
            "errors": self.errors,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
