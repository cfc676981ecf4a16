"""
Tests for the property catalog: loading, validation and search.
"""

import json

import pytest

from generator.catalog import (
    DEFAULT_CATALOG_PATH,
    CatalogEntry,
    CatalogError,
    describe,
    filter_catalog,
    load_catalog,
)

SAMPLE = [
    CatalogEntry("server.port", "Server HTTP port."),
    CatalogEntry("spring.datasource.url", "JDBC URL of the database."),
    CatalogEntry("spring.datasource.username", "Login username of the database."),
]


class TestLoadCatalog:
    """Test reading catalogs from JSON."""

    def test_bundled_catalog_loads(self):
        """The bundled Spring Boot catalog is used when no path is given."""
        entries = load_catalog()
        assert DEFAULT_CATALOG_PATH.exists()
        names = [e.name for e in entries]
        assert "server.port" in names
        assert "spring.datasource.hikari.maximum-pool-size" in names
        assert len(names) == len(set(names))

    def test_custom_catalog_keeps_order(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps(
                [
                    {"name": "b.x", "description": "second"},
                    {"name": "a.y", "description": "first"},
                ]
            )
        )
        entries = load_catalog(path)
        assert entries == [CatalogEntry("b.x", "second"), CatalogEntry("a.y", "first")]

    def test_missing_description_defaults_to_empty(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"name": "server.port"}]))
        assert load_catalog(path) == [CatalogEntry("server.port", "")]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json")
        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)

    def test_non_array_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"name": "server.port"}))
        with pytest.raises(CatalogError, match="JSON array"):
            load_catalog(path)

    def test_entry_without_name_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"description": "orphan"}]))
        with pytest.raises(CatalogError, match=r"\[0\]\.name"):
            load_catalog(path)


class TestFilterCatalog:
    """Test the search filter applied before tree construction."""

    def test_case_insensitive_substring(self):
        result = filter_catalog(SAMPLE, "DataSource")
        assert [e.name for e in result] == ["spring.datasource.url", "spring.datasource.username"]

    def test_blank_term_keeps_everything(self):
        assert filter_catalog(SAMPLE, "") == SAMPLE
        assert filter_catalog(SAMPLE, None) == SAMPLE
        assert filter_catalog(SAMPLE, "   ") == SAMPLE

    def test_no_match(self):
        assert filter_catalog(SAMPLE, "kafka") == []

    def test_returns_new_list(self):
        result = filter_catalog(SAMPLE, None)
        assert result is not SAMPLE


def test_describe():
    assert describe(SAMPLE, "server.port") == "Server HTTP port."
    assert describe(SAMPLE, "server.unknown") is None
