# tests/conftest.py
import pytest

from accessibility_checker.config import Configuration
from accessibility_checker.dom.builder import DOMBuilder
from accessibility_checker.dom.engine import AuditEngine
from accessibility_checker.dom.registry import RuleRegistry


@pytest.fixture
def rules():
    return RuleRegistry.get_all_rules()


@pytest.fixture
def config():
    """The bundled settings.json, with every rule enabled."""
    return Configuration.load()


@pytest.fixture
def builder():
    return DOMBuilder()


@pytest.fixture
def only_rules(rules):
    """
    Factory for a configuration in which only the named rules are enabled.
    """
    def factory(*names):
        known = {r.name: r for r in rules}
        cfg = Configuration.all_enabled(rules, enabled=False)
        for name in names:
            rule = known[name]
            cfg = cfg.with_rule(rule.config_path, rule.name, True)
        return cfg
    return factory


@pytest.fixture
def audit(builder, only_rules, config):
    """
    Parses an HTML snippet and returns the diagnostics it produces.
    Without rule names the full default configuration is used.
    """
    def run(html, *rule_names):
        cfg = only_rules(*rule_names) if rule_names else config
        doc = builder.parse_doc(html, path="test.html")
        return AuditEngine(cfg).traverse(doc)
    return run
