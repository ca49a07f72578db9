"""Tests for ramlgen.generator.runner -- the end-to-end pipeline."""

from __future__ import annotations

from pathlib import Path

import pytest

from ramlgen.exceptions import ConfigError, RamlParseError
from ramlgen.generator.diagnostics import CollectingDiagnostics
from ramlgen.generator.runner import build_code_model, run, run_document
from ramlgen.models import Configuration, RamlDocument

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class TestRun:
    def test_writes_one_file_per_type(
        self, configuration: Configuration, output_dir: Path
    ) -> None:
        paths = run(str(FIXTURES_DIR / "users.raml"), configuration, CollectingDiagnostics())

        assert [p.relative_to(output_dir).as_posix() for p in paths] == [
            "com/example/api/resource/Users.java",
            "com/example/api/support/PATCH.java",
            "com/example/api/resource/Health.java",
        ]
        assert all(p.is_file() for p in paths)

    def test_configuration_checked_before_loading(self, tmp_path: Path) -> None:
        configuration = Configuration(
            output_directory=tmp_path / "missing", base_package_name="com.example"
        )
        with pytest.raises(ConfigError, match="is not a pre-existing directory"):
            run(str(tmp_path / "missing.raml"), configuration, CollectingDiagnostics())

    def test_invalid_raml_writes_nothing(
        self, configuration: Configuration, output_dir: Path
    ) -> None:
        with pytest.raises(RamlParseError, match="Invalid RAML definition"):
            run(str(FIXTURES_DIR / "invalid.raml"), configuration, CollectingDiagnostics())
        assert list(output_dir.iterdir()) == []

    def test_non_empty_output_directory_warns(
        self, configuration: Configuration, output_dir: Path
    ) -> None:
        (output_dir / "stale.txt").write_text("old")
        diagnostics = CollectingDiagnostics()

        run(str(FIXTURES_DIR / "users.raml"), configuration, diagnostics)

        assert any("is not empty" in w for w in diagnostics.warnings)

    def test_templates_fixture(self, configuration: Configuration, output_dir: Path) -> None:
        paths = run(str(FIXTURES_DIR / "templates.raml"), configuration, CollectingDiagnostics())
        names = sorted(p.name for p in paths)
        assert names == ["Authors.java", "Books.java"]
        books = (output_dir / "com/example/api/resource/Books.java").read_text(encoding="utf-8")
        assert "getBooksByBookId" in books
        assert "deleteBooksByBookId" not in books
        assert '@HeaderParam("X-Trace-get")' in books


class TestRunDocument:
    def test_generates_from_parsed_document(
        self, users_document: RamlDocument, configuration: Configuration
    ) -> None:
        paths = run_document(users_document, configuration, CollectingDiagnostics())
        assert len(paths) == 3

    def test_validates_configuration(self, users_document: RamlDocument) -> None:
        with pytest.raises(ConfigError, match="outputDirectory can't be null"):
            run_document(users_document, Configuration(base_package_name="a.b"))


class TestBuildCodeModel:
    def test_no_output_directory_needed(self, users_document: RamlDocument) -> None:
        code_model = build_code_model(
            users_document, Configuration(base_package_name="api"), CollectingDiagnostics()
        )
        assert [c.fqn for c in code_model.classes()] == [
            "api.resource.Users",
            "api.support.PATCH",
            "api.resource.Health",
        ]
