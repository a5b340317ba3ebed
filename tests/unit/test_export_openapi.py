"""Tests for the OpenAPI export script."""

import json

from scripts.export_openapi import export_openapi


class TestExportOpenapi:
    """Tests for export_openapi()."""

    def test_writes_schema(self, tmp_path):
        """The written file should contain the API paths."""
        output = export_openapi(tmp_path / "openapi.json")

        schema = json.loads(output.read_text(encoding="utf-8"))
        assert schema["info"]["title"] == "Account Service API"
        assert "/api/users/{user_id}" in schema["paths"]
        assert "/api/profile" in schema["paths"]
