"""
Tests for folding, flattening and YAML rendering.
"""

import datetime
import logging

import yaml
from yaml.representer import RepresenterError

from generator.codec import (
    EMPTY_PLACEHOLDER,
    ERROR_PLACEHOLDER,
    flatten_mapping,
    fold_selection,
    parse_yaml,
    render_yaml,
    scalar_text,
)
from generator.selection import SelectedProperty, Selection


class TestFoldSelection:
    def test_nests_dotted_names(self):
        selection = Selection.of(
            [
                {"name": "server.port", "value": "8080"},
                {"name": "server.address", "value": "0.0.0.0"},
                {"name": "spring.application.name", "value": "demo"},
            ]
        )
        assert fold_selection(selection) == {
            "server": {"port": "8080", "address": "0.0.0.0"},
            "spring": {"application": {"name": "demo"}},
        }

    def test_deeper_name_overwrites_leaf(self):
        """Known lossy case: the shallower leaf value is discarded."""
        selection = Selection.of([{"name": "a", "value": "x"}, {"name": "a.b", "value": "y"}])
        assert fold_selection(selection) == {"a": {"b": "y"}}

    def test_later_leaf_overwrites_mapping(self):
        selection = Selection.of([{"name": "a.b", "value": "y"}, {"name": "a", "value": "x"}])
        assert fold_selection(selection) == {"a": "x"}

    def test_empty_selection(self):
        assert fold_selection(Selection()) == {}


class TestFlattenMapping:
    def test_scalars_become_text(self):
        data = {"port": 8080, "ratio": 0.5, "on": True, "off": False, "nothing": None}
        assert [(p.name, p.value) for p in flatten_mapping(data)] == [
            ("port", "8080"),
            ("ratio", "0.5"),
            ("on", "true"),
            ("off", "false"),
            ("nothing", "null"),
        ]

    def test_mapping_inside_sequence_is_flow_yaml(self):
        assert flatten_mapping({"d": [{"x": 1}]}) == [SelectedProperty("d", "{x: 1}")]

    def test_nested_mappings_use_dotted_prefix(self):
        data = {"spring": {"datasource": {"url": "jdbc:h2:mem:test", "hikari": {"pool-name": "p"}}}}
        assert flatten_mapping(data) == [
            SelectedProperty("spring.datasource.url", "jdbc:h2:mem:test"),
            SelectedProperty("spring.datasource.hikari.pool-name", "p"),
        ]

    def test_sequences_are_opaque_leaves(self):
        data = {"spring": {"profiles": {"active": ["dev", "local"]}}}
        assert flatten_mapping(data) == [SelectedProperty("spring.profiles.active", "dev,local")]

    def test_empty_mapping_contributes_nothing(self):
        assert flatten_mapping({"a": {}, "b": "1"}) == [SelectedProperty("b", "1")]

    def test_non_string_keys(self):
        assert flatten_mapping({1: "one", None: {"x": 2}}) == [
            SelectedProperty("1", "one"),
            SelectedProperty("null.x", "2"),
        ]

    def test_top_level_sequence_keyed_by_index(self):
        assert flatten_mapping(["a", {"b": 1}]) == [
            SelectedProperty("0", "a"),
            SelectedProperty("1.b", "1"),
        ]

    def test_dates_use_iso_text(self):
        assert scalar_text(datetime.date(2024, 1, 31)) == "2024-01-31"

    def test_round_trip_of_non_colliding_names(self):
        selection = Selection.of(
            [
                {"name": "server.port", "value": "8080"},
                {"name": "server.ssl.key-store", "value": "classpath:ks.p12"},
                {"name": "logging.level.root", "value": "INFO"},
                {"name": "spring.jpa.show-sql", "value": ""},
            ]
        )
        flattened = flatten_mapping(fold_selection(selection))
        assert set(flattened) == set(selection)


class TestRenderYaml:
    def test_empty_selection_placeholder(self):
        assert render_yaml(Selection()) == EMPTY_PLACEHOLDER
        assert render_yaml(Selection(), empty_placeholder="# nothing") == "# nothing"

    def test_block_style_in_insertion_order(self):
        selection = Selection.of(
            [
                {"name": "spring.application.name", "value": "demo"},
                {"name": "server.port", "value": "8080"},
            ]
        )
        assert render_yaml(selection) == (
            "spring:\n"
            "  application:\n"
            "    name: demo\n"
            "server:\n"
            "  port: '8080'\n"
        )

    def test_values_stay_strings(self):
        selection = Selection.of(
            [
                {"name": "spring.jpa.show-sql", "value": "true"},
                {"name": "server.address", "value": ""},
            ]
        )
        assert yaml.safe_load(render_yaml(selection)) == {
            "spring": {"jpa": {"show-sql": "true"}},
            "server": {"address": ""},
        }

    def test_dump_failure_returns_error_placeholder(self, monkeypatch, caplog):
        def boom(*args, **kwargs):
            raise RepresenterError("cannot represent")

        monkeypatch.setattr(yaml, "safe_dump", boom)
        selection = Selection().add("server.port")
        with caplog.at_level(logging.ERROR):
            assert render_yaml(selection) == ERROR_PLACEHOLDER
        assert "Failed to generate YAML" in caplog.text


def test_parse_yaml():
    assert parse_yaml("server:\n  port: 8080") == {"server": {"port": 8080}}
    assert parse_yaml("") is None


def test_parse_yaml_types_only_core_schema_scalars():
    assert parse_yaml("t: 1:30") == {"t": "1:30"}
    assert parse_yaml("b: yes") == {"b": "yes"}
    assert parse_yaml("o: 0755") == {"o": "0755"}
    assert parse_yaml("u: 1_000") == {"u": "1_000"}
    assert parse_yaml("d: 2024-01-01") == {"d": "2024-01-01"}
    assert parse_yaml("n: 8080") == {"n": 8080}
    assert parse_yaml("f: 0.5") == {"f": 0.5}
    assert parse_yaml("x: true") == {"x": True}
    assert parse_yaml("z: ~") == {"z": None}
