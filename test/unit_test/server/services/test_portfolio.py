"""Unit tests for the portfolio JSON loader."""

import json

from sassify.server.services.portfolio import UTF8_BOM, empty_projects_data, get_projects_data


class TestGetProjectsData:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "saas.json"
        path.write_text(json.dumps({"saas": [{"name": "A"}], "technologies": ["Python"]}), encoding="utf-8")

        assert get_projects_data(path) == {"saas": [{"name": "A"}], "technologies": ["Python"]}

    def test_strips_utf8_bom(self, tmp_path):
        path = tmp_path / "saas.json"
        path.write_text(UTF8_BOM + json.dumps({"saas": [], "technologies": ["PHP"]}), encoding="utf-8")

        assert get_projects_data(path)["technologies"] == ["PHP"]

    def test_missing_file(self, tmp_path):
        assert get_projects_data(tmp_path / "missing.json") == empty_projects_data()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "saas.json"
        path.write_text("{not json", encoding="utf-8")

        assert get_projects_data(path) == {"saas": [], "technologies": []}

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "saas.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert get_projects_data(path) == empty_projects_data()

    def test_scalar_saas_entry_is_returned_as_is(self, tmp_path):
        path = tmp_path / "saas.json"
        path.write_text(json.dumps({"saas": 5, "technologies": []}), encoding="utf-8")

        assert get_projects_data(path) == {"saas": 5, "technologies": []}

    def test_bundled_sample_file_is_valid(self):
        from pathlib import Path

        sample = Path(__file__).resolve().parents[4] / "public" / "assets" / "data" / "saas.json"

        data = get_projects_data(sample)

        assert data["saas"]
        assert data["technologies"]
