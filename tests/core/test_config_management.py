# tests/core/test_config_management.py
import json

import pytest

from accessibility_checker.config import Configuration
from accessibility_checker.errors import ConfigurationError

IMG_PATH = ("perceivable", "textAlternatives")
IMG_ALT = "img element missing alt attribute"

MOCK_SETTINGS_CONTENT = {
    "perceivable": {
        "textAlternatives": {
            IMG_ALT: True,
        }
    },
    "deprecated": {
        "elements": {
            "<center> tag is deprecated": False,
        }
    }
}


@pytest.fixture
def settings_file(tmp_path):
    """A small settings file in an isolated location."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    return path


def test_bundled_settings_cover_every_rule(config, rules):
    """The shipped settings.json must enumerate every rule in the library."""
    config.validate_rules(rules)
    assert config.enabled_count() == len(rules)


def test_load_from_file(settings_file):
    config = Configuration.load(settings_file)
    assert config.is_enabled(IMG_PATH, IMG_ALT) is True
    assert config.is_enabled(("deprecated", "elements"), "<center> tag is deprecated") is False


def test_partial_configuration_is_fatal(settings_file, rules):
    config = Configuration.load(settings_file)
    with pytest.raises(ConfigurationError) as exc_info:
        config.validate_rules(rules)

    assert len(exc_info.value.missing) == len(rules) - 2
    assert "robust.compatible.broken ARIA menu" in exc_info.value.missing


def test_unknown_lookup_is_fatal(settings_file):
    config = Configuration.load(settings_file)
    with pytest.raises(ConfigurationError):
        config.is_enabled(IMG_PATH, "no such rule")
    with pytest.raises(ConfigurationError):
        config.is_enabled(("operable", "navigable"), "Anchor contains no text.")


def test_values_must_be_booleans():
    with pytest.raises(ConfigurationError):
        Configuration.from_mapping({"perceivable": {"textAlternatives": {IMG_ALT: "yes"}}})


def test_missing_or_invalid_file(tmp_path):
    with pytest.raises(ConfigurationError):
        Configuration.load(tmp_path / "absent.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigurationError):
        Configuration.load(broken)


def test_with_rule_returns_new_configuration(settings_file):
    config = Configuration.load(settings_file)
    changed = config.with_rule(IMG_PATH, IMG_ALT, False)

    assert changed.is_enabled(IMG_PATH, IMG_ALT) is False
    # The source configuration is untouched
    assert config.is_enabled(IMG_PATH, IMG_ALT) is True

    with pytest.raises(ConfigurationError):
        config.with_rule(IMG_PATH, "no such rule", True)


def test_configuration_is_read_only(settings_file):
    config = Configuration.load(settings_file)
    with pytest.raises(Exception):
        config.rules = {}


def test_unknown_entries_are_only_warned(config, rules, caplog):
    data = {category: {sub: dict(entries) for sub, entries in subs.items()} for category, subs in config.rules.items()}
    data["robust"]["compatible"]["retired rule"] = True

    Configuration.from_mapping(data).validate_rules(rules)
    assert "retired rule" in caplog.text
