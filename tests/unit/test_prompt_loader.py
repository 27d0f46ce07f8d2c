"""Tests for prompt template and JSON schema loading."""

import json
from pathlib import Path

import pytest

from docscan.content.exceptions import ContentScoringError
from docscan.content.prompt_loader import load_json_schema, load_prompt_template


class TestLoadPromptTemplate:
    def test_loads_default_template(self) -> None:
        template = load_prompt_template()
        assert "{document_text}" in template
        assert "{json_schema}" in template

    def test_default_template_formats_cleanly(self) -> None:
        rendered = load_prompt_template().format(document_text="TEXT", json_schema="SCHEMA")
        assert "TEXT" in rendered
        assert "SCHEMA" in rendered

    def test_loads_custom_template(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Check {document_text}")
        assert load_prompt_template(custom) == "Check {document_text}"

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ContentScoringError, match="Failed to load prompt"):
            load_prompt_template(Path("/nonexistent/file.txt"))


class TestLoadJsonSchema:
    def test_default_schema_requires_assessment_fields(self) -> None:
        schema = json.loads(load_json_schema())
        assert set(schema["required"]) == {"score", "risks", "recommendation", "analysis"}

    def test_loads_custom_schema(self, tmp_path: Path) -> None:
        custom = tmp_path / "schema.json"
        custom.write_text('{"type": "object"}')
        assert load_json_schema(custom) == '{"type": "object"}'

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ContentScoringError, match="Failed to load JSON schema"):
            load_json_schema(Path("/nonexistent/schema.json"))
