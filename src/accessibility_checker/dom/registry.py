# src/accessibility_checker/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Optional

from .core import RuleDefinition, RuleSetDefinition

logger = logging.getLogger(__name__)

RULES_PACKAGE = "accessibility_checker.dom.rules"


class RuleRegistry:
    """
    Central registry for the accessibility rule library.

    Dynamically discovers RuleSetDefinition modules from the
    'accessibility_checker.dom.rules' package. Rules are kept in declaration
    order: modules by name, then the order of each module's DEFINITION.
    """

    _rules: List[RuleDefinition] = []
    _by_name: Dict[str, RuleDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all rule sets found in the rules package.

        Each module exposing a `DEFINITION` attribute (instance of
        `RuleSetDefinition`) contributes its rules. Rule names must be unique
        across the whole library since they double as configuration keys.
        """
        if cls._loaded:
            return

        rules_pkg = importlib.import_module(RULES_PACKAGE)
        rule_sets: List[RuleSetDefinition] = []

        for _, name, _ in sorted(pkgutil.iter_modules(rules_pkg.__path__), key=lambda m: m[1]):
            full_name = f"{RULES_PACKAGE}.{name}"
            try:
                module = importlib.import_module(full_name)
            except Exception as e:
                logger.error(f"Error loading rule module {name}: {e}", exc_info=True)
                continue

            definition = getattr(module, "DEFINITION", None)
            if isinstance(definition, RuleSetDefinition):
                rule_sets.append(definition)
                logger.debug(f"Rule set loaded: {definition.name} ({len(definition.rules)} rules)")

        by_name: Dict[str, RuleDefinition] = {}
        rules: List[RuleDefinition] = []
        for rule_set in rule_sets:
            for rule in rule_set.rules:
                if rule.name in by_name:
                    raise ValueError(f"Rule '{rule.name}' is declared more than once")
                by_name[rule.name] = rule
                rules.append(rule)

        cls._rules = rules
        cls._by_name = by_name
        cls._loaded = True

    @classmethod
    def get_all_rules(cls) -> List[RuleDefinition]:
        """Returns every registered rule in declaration order."""
        cls.discover()
        return list(cls._rules)

    @classmethod
    def get_rule(cls, name: str) -> Optional[RuleDefinition]:
        cls.discover()
        return cls._by_name.get(name)

