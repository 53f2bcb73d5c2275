"""
Tests for YAML configuration loading and validation.
"""

import pytest

from matchcore.configs import load_config, validate_config, get_config_value

from conftest import DEFAULT_CONFIG


def test_shipped_config_is_valid():
    config = load_config(str(DEFAULT_CONFIG))
    assert validate_config(config) == []
    assert get_config_value(config, "scoring.weights.personality") == 0.5
    assert get_config_value(config, "scoring.lifestyle") == {}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ValueError, match="empty"):
        load_config(str(path))


def test_missing_sections_reported():
    issues = validate_config({})
    assert len(issues) == 5
    assert "Missing required section: scoring" in issues


def test_bad_values_reported():
    config = {
        "global": {},
        "data": {"profiles": {"format": "xml"}},
        "pair_generation": {"max_pairs": 0},
        "scoring": {"weights": {"personality": 0.5, "interests_values": 0.5, "lifestyle": 0.5}},
        "evaluation": {},
    }
    issues = validate_config(config)
    assert "Missing data.profiles.path" in issues
    assert "Unsupported data.profiles.format: xml" in issues
    assert any("max_pairs" in issue for issue in issues)
    assert any("don't sum to 1" in issue for issue in issues)
    assert any("random_seed" in issue for issue in issues)


def test_get_config_value_default():
    assert get_config_value({"a": {"b": 1}}, "a.b") == 1
    assert get_config_value({"a": {"b": 1}}, "a.c", default="x") == "x"
    assert get_config_value({"a": 1}, "a.b") is None
