"""Tests for configuration loading."""

import pytest

from crawlopts.config import (
    DEFAULT_CONFIG,
    config_exists,
    entries_from_config,
    init_config,
    load_config,
    merge_config,
)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_returns_defaults(self, tmp_path):
        """A missing config file gives the defaults without creating it."""
        path = tmp_path / "missing.yml"
        assert load_config(path) == DEFAULT_CONFIG
        assert not path.exists()

    def test_file_values_override_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("headers:\n  - 'a:b'\noutput_format: json\n", encoding="utf-8")
        config = load_config(path)
        assert config["headers"] == ["a:b"]
        assert config["output_format"] == "json"
        assert config["cookies"] == []

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML raises ValueError."""
        path = tmp_path / "config.yml"
        path.write_text("headers: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_invalid_output_format(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("output_format: xml\n", encoding="utf-8")
        with pytest.raises(ValueError, match="output_format"):
            load_config(path)

    @pytest.mark.parametrize(
        "body, key",
        [
            ("cookie_file: 5\n", "cookie_file"),
            ("cookie_file: true\n", "cookie_file"),
            ("headers: 5\n", "headers"),
            ("headless_options: {a: b}\n", "headless_options"),
            ("cookies:\n  - 1\n", "cookies"),
        ],
    )
    def test_invalid_value_types(self, tmp_path, body, key):
        """Values of the wrong type raise ValueError naming the key."""
        path = tmp_path / "config.yml"
        path.write_text(body, encoding="utf-8")
        with pytest.raises(ValueError, match=key):
            load_config(path)

    def test_defaults_are_not_shared(self, tmp_path):
        """Mutating a loaded config leaves the defaults untouched."""
        config = load_config(tmp_path / "missing.yml")
        config["headers"].append("a:b")
        assert DEFAULT_CONFIG["headers"] == []
        assert load_config(tmp_path / "missing.yml")["headers"] == []

    def test_default_template_loads(self, tmp_path):
        """The generated config file loads to the defaults."""
        path = init_config(tmp_path / "config.yml")
        assert load_config(path) == DEFAULT_CONFIG


class TestInitConfig:
    """Tests for init_config()."""

    def test_creates_file(self, tmp_path):
        path = tmp_path / "config.yml"
        assert not config_exists(path)
        assert init_config(path) == path
        assert config_exists(path)

    def test_refuses_to_overwrite(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("headers: []\n", encoding="utf-8")
        with pytest.raises(FileExistsError):
            init_config(path)


class TestHelpers:
    """Tests for merge_config() and entries_from_config()."""

    def test_merge_config_overrides(self):
        assert merge_config({"a": 1, "b": {"c": 1}}, {"b": {"d": 2}}) == {
            "a": 1,
            "b": {"c": 1, "d": 2},
        }

    @pytest.mark.parametrize(
        "value, expected",
        [(None, []), ("a:b", ["a:b"]), (["a:b", None, "c:d"], ["a:b", "c:d"])],
    )
    def test_entries_from_config(self, value, expected):
        """Entries may be a list, a single string or missing."""
        assert entries_from_config({"headers": value}, "headers") == expected
