"""
Configuration system for complexitylens.

Supports YAML and JSON configuration files for the complexity scale,
file discovery and output settings.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field, asdict

import yaml

from complexitylens.errors import ConfigError

logger = logging.getLogger(__name__)


# Default configuration file names to search for
CONFIG_FILE_NAMES = [
    ".complexitylens.yaml",
    ".complexitylens.yml",
    ".complexitylens.json",
    "complexitylens.yaml",
    "complexitylens.yml",
    "complexitylens.json",
]

DEFAULT_START_COMPLEXITY = 11
DEFAULT_MAX_COMPLEXITY = 51

DEFAULT_EXCLUDE_PATTERNS = [
    "node_modules/**",
    ".git/**",
    "vendor/**",
    "dist/**",
    "build/**",
    "coverage/**",
    "*.min.js",
    "*.bundle.js",
]

# Editor-style setting names accepted alongside the snake_case ones
KEY_ALIASES = {
    "startComplexity": "start_complexity",
    "maxComplexity": "max_complexity",
    "countLogicalOperators": "count_logical_operators",
}


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class ComplexityConfig:
    """
    The complexity scale.

    Scores at or below ``start_complexity`` get no tint; scores at or
    above ``max_complexity`` get the darkest tint. A range that is empty
    or inverted is accepted, with every score above ``start_complexity``
    mapping to full intensity.
    """
    start_complexity: int = DEFAULT_START_COMPLEXITY
    max_complexity: int = DEFAULT_MAX_COMPLEXITY
    count_logical_operators: bool = False

    def __post_init__(self):
        _require_int("start_complexity", self.start_complexity)
        _require_int("max_complexity", self.max_complexity)
        if self.max_complexity <= self.start_complexity:
            logger.warning(
                "max_complexity (%d) is not greater than start_complexity (%d); "
                "all scores above %d will use full intensity",
                self.max_complexity,
                self.start_complexity,
                self.start_complexity,
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComplexityConfig":
        data = {KEY_ALIASES.get(k, k): v for k, v in data.items()}
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        return cls(**{k: v for k, v in data.items() if k in known_fields})


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: str = "text"  # text, json
    color: bool = True
    verbose: bool = False


@dataclass
class ScanConfig:
    """
    Main configuration for complexitylens.

    Example YAML config:

    ```yaml
    scan:
      exclude:
        - "node_modules/**"
      max_file_size: 10485760

    complexity:
      start_complexity: 11
      max_complexity: 51
      count_logical_operators: false

    output:
      format: text
      color: true
    ```
    """
    exclude_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    include_patterns: Optional[List[str]] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB

    complexity: ComplexityConfig = field(default_factory=ComplexityConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanConfig":
        """Create config from a dictionary."""
        data = dict(data)

        # Handle nested 'scan' section
        if isinstance(data.get("scan"), dict):
            data.update(data.pop("scan"))

        # Top-level scale settings, as an editor would store them
        scale = {k: data.pop(k) for k in list(data) if KEY_ALIASES.get(k, k) in ComplexityConfig.__dataclass_fields__}
        if isinstance(data.get("complexity"), dict):
            scale.update(data["complexity"])
        data["complexity"] = ComplexityConfig.from_dict(scale)

        if isinstance(data.get("output"), dict):
            output_fields = OutputConfig.__dataclass_fields__
            data["output"] = OutputConfig(**{k: v for k, v in data["output"].items() if k in output_fields})

        # Map some common alternative names
        if "exclude" in data:
            data["exclude_patterns"] = data.pop("exclude")
        if "include" in data:
            data["include_patterns"] = data.pop("include")

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        return cls(**filtered_data)


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    content = path.read_text(encoding="utf-8")

    if path.suffix == ".json":
        data = json.loads(content)
    else:
        data = yaml.safe_load(content) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_scan_config(path: Optional[str] = None, start_dir: str = ".") -> ScanConfig:
    """
    Load a ScanConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return ScanConfig()

    logger.debug("Loading configuration from %s", path)
    return ScanConfig.from_dict(load_config(path))


class ConfigStore:
    """
    Holds the current ScanConfig and reloads it when its file changes.

    ``current()`` is meant to be called on every analysis pass, so a
    changed file takes effect on the next pass. A file that disappears
    or no longer loads leaves the last good configuration in place
    (defaults if there never was one).
    """

    def __init__(self, path: Optional[str] = None, config: Optional[ScanConfig] = None):
        self.path = path
        self._config = config
        self._mtime: Optional[float] = None

    @classmethod
    def static(cls, config: ScanConfig) -> "ConfigStore":
        return cls(config=config)

    def current(self) -> ScanConfig:
        if self.path is None:
            if self._config is None:
                self._config = ScanConfig()
            return self._config

        try:
            mtime = os.path.getmtime(self.path)
        except OSError as e:
            return self._keep_last(e)
        if self._config is None or mtime != self._mtime:
            self._mtime = mtime
            try:
                self._config = load_scan_config(self.path)
            except (OSError, yaml.YAMLError, json.JSONDecodeError, ConfigError) as e:
                return self._keep_last(e)
            logger.debug("Configuration reloaded from %s", self.path)
        return self._config

    def _keep_last(self, error: Exception) -> ScanConfig:
        logger.warning("Could not load configuration from %s: %s", self.path, error)
        if self._config is None:
            self._config = ScanConfig()
        return self._config

    def complexity(self) -> ComplexityConfig:
        return self.current().complexity


def create_default_config() -> str:
    """
    Create a default configuration file content.
    """
    config = {
        "scan": {
            "exclude": list(DEFAULT_EXCLUDE_PATTERNS),
            "max_file_size": 10485760,
        },
        "complexity": {
            "start_complexity": DEFAULT_START_COMPLEXITY,
            "max_complexity": DEFAULT_MAX_COMPLEXITY,
            "count_logical_operators": False,
        },
        "output": {
            "format": "text",
            "color": True,
        },
    }

    return yaml.dump(config, default_flow_style=False, sort_keys=False)
