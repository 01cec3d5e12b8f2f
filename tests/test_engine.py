"""
Tests for the analysis engine.
"""

import os

import pytest

from complexitylens.config import ComplexityConfig, ConfigStore, ScanConfig
from complexitylens.core.engine import AnalysisEngine, create_engine


SOURCE = (
    "function a(x) {\n"
    "  if (x) { return 1; }\n"
    "  return 0;\n"
    "}\n"
    "\n"
    "const b = (y) => y && y.z;\n"
)


class TestAnalyzeDocument:
    """Batch mode."""

    def test_every_function(self, engine):
        spans = engine.analyze_document(SOURCE, "javascript")
        assert [(s.name, s.complexity, s.start_line, s.end_line) for s in spans] == [
            ("a", 2, 0, 3),
            ("b", 1, 5, 5),
        ]

    def test_language_alias(self, engine):
        assert len(engine.analyze_document(SOURCE, "js")) == 2

    def test_unsupported_language(self, engine):
        assert engine.analyze_document(SOURCE, "python") == []

    def test_invalid_source(self, engine):
        assert engine.analyze_document("function f( {", "javascript") == []

    def test_empty_document(self, engine):
        assert engine.analyze_document("", "typescript") == []

    def test_count_logical_from_config(self):
        config = ScanConfig(complexity=ComplexityConfig(count_logical_operators=True))
        spans = AnalysisEngine(config).analyze_document(SOURCE, "javascript")
        assert [s.complexity for s in spans] == [2, 2]

    def test_example_file(self, engine, example_file):
        spans = engine.analyze_document(example_file.read_text(), "javascript")
        assert [(s.name, s.complexity) for s in spans] == [
            ("greet", 1),
            ("classify", 6),
            ("sumPositive", 2),
            ("drain", 2),
        ]
        assert spans[0].start_line == 2

    def test_hints(self, engine):
        hints = engine.hints(SOURCE, "javascript")
        assert [(h.line, h.column, h.label) for h in hints] == [
            (0, 0, "Complexity: 2"),
            (5, 0, "Complexity: 1"),
        ]


class TestAnalyzeAtOffset:
    """Interactive mode."""

    def test_enclosing_function(self, engine):
        span = engine.analyze_at_offset(SOURCE, "javascript", SOURCE.index("return 1"))
        assert (span.name, span.complexity) == ("a", 2)

    def test_between_functions(self, engine):
        assert engine.analyze_at_offset(SOURCE, "javascript", SOURCE.index("\n\n") + 1) is None

    def test_offset_out_of_range(self, engine):
        assert engine.analyze_at_offset(SOURCE, "javascript", -1) is None
        assert engine.analyze_at_offset(SOURCE, "javascript", len(SOURCE) + 1) is None

    def test_unsupported_language(self, engine):
        assert engine.analyze_at_offset(SOURCE, "python", 5) is None

    def test_highlight(self, engine):
        highlight = engine.highlight(SOURCE, "javascript", SOURCE.index("if"))
        assert highlight.tooltip == "Function complexity: 2"
        assert (highlight.start_line, highlight.end_line) == (0, 3)
        assert highlight.intensity.factor == 0.0
        assert highlight.intensity.rgb == (255, 200, 200)

    def test_highlight_intensity(self):
        config = ScanConfig(complexity=ComplexityConfig(start_complexity=1, max_complexity=3))
        highlight = AnalysisEngine(config).highlight(SOURCE, "javascript", SOURCE.index("if"))
        assert highlight.intensity.factor == pytest.approx(0.5)
        assert highlight.to_dict()["color"] == highlight.intensity.hex

    def test_no_highlight_outside_functions(self, engine):
        assert engine.highlight(SOURCE, "javascript", SOURCE.index("\n\n") + 1) is None


class TestScan:
    """Directory and file scans."""

    @pytest.fixture
    def project(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "app.ts").write_text("export function run(n: number) { while (n) { n--; } }\n")
        (tmp_path / "src" / "view.jsx").write_text("const View = () => <div />;\n")
        (tmp_path / "node_modules" / "lib").mkdir(parents=True)
        (tmp_path / "node_modules" / "lib" / "index.js").write_text("function dep() {}\n")
        (tmp_path / "bad.js").write_text("function f( {")
        (tmp_path / "README.md").write_text("# readme\n")
        return tmp_path

    def test_language_detection(self, engine):
        assert engine.detect_language("app.js") == "javascript"
        assert engine.detect_language("App.JSX") == "javascript"
        assert engine.detect_language("mod.mjs") == "javascript"
        assert engine.detect_language("main.ts") == "typescript"
        assert engine.detect_language("App.tsx") == "tsx"
        assert engine.detect_language("README.md") is None

    def test_scan_directory(self, engine, project):
        result = engine.scan(str(project))
        scanned = sorted(os.path.relpath(r.file_path, project) for r in result.files)
        assert scanned == ["bad.js", os.path.join("src", "app.ts"), os.path.join("src", "view.jsx")]
        assert result.total_functions == 2
        assert result.max_complexity == 2
        assert result.languages_detected == ["javascript", "typescript"]

    def test_parse_errors_recorded(self, engine, project):
        result = engine.scan(str(project))
        assert len(result.errors) == 1
        assert "bad.js" in result.errors[0]
        bad = next(r for r in result.files if r.file_path.endswith("bad.js"))
        assert bad.functions == []
        assert "error" in bad.to_dict()

    def test_include_patterns(self, project):
        engine = AnalysisEngine(ScanConfig(include_patterns=["*.ts"]))
        result = engine.scan(str(project))
        assert [os.path.basename(r.file_path) for r in result.files] == ["app.ts"]

    def test_max_file_size(self, project):
        engine = AnalysisEngine(ScanConfig(max_file_size=20))
        result = engine.scan(str(project))
        assert [os.path.basename(r.file_path) for r in result.files] == ["bad.js"]

    def test_scan_single_file(self, engine, example_file):
        result = engine.scan(str(example_file))
        assert result.files_scanned == 1
        assert result.total_functions == 4
        assert [f.complexity for f in result.functions_at_or_above(2)] == [6, 2, 2]

    def test_missing_target(self, engine, tmp_path):
        with pytest.raises(FileNotFoundError):
            engine.scan(str(tmp_path / "missing"))


class TestConfigReload:
    """Configuration changes apply on the next pass."""

    def test_reload_between_passes(self, tmp_path):
        config_path = tmp_path / ".complexitylens.yaml"
        config_path.write_text("count_logical_operators: false\n")
        engine = AnalysisEngine(ConfigStore(path=str(config_path)))
        assert [s.complexity for s in engine.analyze_document(SOURCE, "javascript")] == [2, 1]

        config_path.write_text("count_logical_operators: true\n")
        mtime = os.path.getmtime(config_path) + 10
        os.utime(config_path, (mtime, mtime))
        assert [s.complexity for s in engine.analyze_document(SOURCE, "javascript")] == [2, 2]

    def test_deleted_config_keeps_last_good(self, tmp_path, caplog):
        config_path = tmp_path / ".complexitylens.yaml"
        config_path.write_text("count_logical_operators: true\n")
        engine = create_engine(str(config_path))
        assert [s.complexity for s in engine.analyze_document(SOURCE, "javascript")] == [2, 2]

        config_path.unlink()
        assert [s.complexity for s in engine.analyze_document(SOURCE, "javascript")] == [2, 2]
        assert engine.highlight(SOURCE, "javascript", SOURCE.index("if")).complexity == 2
        assert "Could not load configuration" in caplog.text

    def test_malformed_config_keeps_last_good(self, tmp_path):
        config_path = tmp_path / ".complexitylens.yaml"
        config_path.write_text("count_logical_operators: true\n")
        engine = create_engine(str(config_path))
        engine.analyze_document(SOURCE, "javascript")

        config_path.write_text("complexity: [unclosed\n")
        mtime = os.path.getmtime(config_path) + 10
        os.utime(config_path, (mtime, mtime))
        assert [s.complexity for s in engine.analyze_document(SOURCE, "javascript")] == [2, 2]
        assert engine.analyze_at_offset(SOURCE, "javascript", SOURCE.index("y.z")).complexity == 2

    def test_invalid_value_keeps_last_good(self, tmp_path):
        config_path = tmp_path / ".complexitylens.yaml"
        config_path.write_text("start_complexity: 1\nmax_complexity: 3\n")
        engine = create_engine(str(config_path))
        assert engine.config.complexity.max_complexity == 3

        config_path.write_text("start_complexity: one\n")
        mtime = os.path.getmtime(config_path) + 10
        os.utime(config_path, (mtime, mtime))
        assert engine.config.complexity.max_complexity == 3
        assert len(engine.hints(SOURCE, "javascript")) == 2

    def test_broken_config_from_the_start_uses_defaults(self, tmp_path):
        config_path = tmp_path / ".complexitylens.json"
        config_path.write_text("{not json")
        engine = create_engine(str(config_path))
        assert engine.config == ScanConfig()
        assert [s.complexity for s in engine.analyze_document(SOURCE, "javascript")] == [2, 1]

    def test_create_engine_finds_config(self, tmp_path):
        (tmp_path / "complexitylens.yml").write_text("startComplexity: 1\nmaxComplexity: 3\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        engine = create_engine(start_dir=str(nested))
        assert engine.config.complexity.start_complexity == 1
        assert engine.config.complexity.max_complexity == 3
