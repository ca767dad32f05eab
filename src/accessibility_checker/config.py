# src/accessibility_checker/config.py
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError

from accessibility_checker.errors import ConfigurationError
from accessibility_checker.utils.path_utils import PathUtils

if TYPE_CHECKING:
    from accessibility_checker.dom.core import RuleDefinition

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = PathUtils.get_package_root() / "settings.json"

# category -> subcategory -> rule name -> enabled
RuleTable = Dict[str, Dict[str, Dict[str, StrictBool]]]


class Configuration(BaseModel):
    """
    Read-only rule gate: a nested table of booleans, one per rule.

    Every rule shipped by the library must have an entry; there is no default
    fallback. A configuration is an explicit value handed to the engine. To
    change it, build a new one and hand that over instead.
    """
    model_config = ConfigDict(frozen=True)

    rules: RuleTable

    # --- Construction ---

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Configuration":
        try:
            return cls(rules=data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid rule configuration: {e}") from e

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "Configuration":
        """Loads the configuration from a JSON file (the bundled settings.json by default)."""
        config_path = Path(path) if path else DEFAULT_SETTINGS_PATH
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file not found: {config_path}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Configuration file {config_path} is not valid JSON: {e}") from e

        config = cls.from_mapping(data)
        logger.info("Rule configuration loaded from %s", config_path)
        return config

    @classmethod
    def all_enabled(cls, rules: Iterable["RuleDefinition"], enabled: bool = True) -> "Configuration":
        """Builds a configuration listing every given rule with the same state."""
        table: Dict[str, Dict[str, Dict[str, bool]]] = {}
        for rule in rules:
            category, subcategory = rule.config_path
            table.setdefault(category, {}).setdefault(subcategory, {})[rule.name] = enabled
        return cls(rules=table)

    # --- Validation ---

    def validate_rules(self, rules: Iterable["RuleDefinition"]) -> None:
        """
        Ensures every rule has an entry. Raises ConfigurationError listing all
        missing entries; unknown entries are only logged.
        """
        rules = list(rules)
        missing: List[str] = []
        for rule in rules:
            if not self._has_entry(rule.config_path, rule.name):
                missing.append(f"{'.'.join(rule.config_path)}.{rule.name}")

        if missing:
            raise ConfigurationError(
                f"Rule configuration is incomplete, {len(missing)} rule(s) missing: {', '.join(missing)}",
                missing=missing
            )

        known = {(tuple(r.config_path), r.name) for r in rules}
        for category, subcategories in self.rules.items():
            for subcategory, entries in subcategories.items():
                for name in entries:
                    if ((category, subcategory), name) not in known:
                        logger.warning("Unknown rule in configuration: %s.%s.%s", category, subcategory, name)

    def _has_entry(self, path: Sequence[str], name: str) -> bool:
        category, subcategory = path
        return name in self.rules.get(category, {}).get(subcategory, {})

    # --- Gate ---

    def is_enabled(self, path: Sequence[str], name: str) -> bool:
        category, subcategory = path
        try:
            return self.rules[category][subcategory][name]
        except KeyError as e:
            raise ConfigurationError(
                f"No configuration entry for rule '{name}' at '{category}.{subcategory}'",
                missing=[f"{category}.{subcategory}.{name}"]
            ) from e

    def with_rule(self, path: Sequence[str], name: str, enabled: bool) -> "Configuration":
        """Returns a new configuration with one rule switched; this instance is left untouched."""
        if not self._has_entry(path, name):
            raise ConfigurationError(f"Cannot set unknown rule '{name}' at '{'.'.join(path)}'")
        category, subcategory = path
        table = copy.deepcopy(self.rules)
        table[category][subcategory][name] = enabled
        return Configuration(rules=table)

    def enabled_count(self) -> int:
        return sum(
            1 for subcategories in self.rules.values()
            for entries in subcategories.values()
            for value in entries.values() if value
        )
