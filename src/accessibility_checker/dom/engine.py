# src/accessibility_checker/dom/engine.py
import logging
from typing import List, Optional

from accessibility_checker.config import Configuration
from accessibility_checker.model import Diagnostic
from .core import ElementNode, RuleDefinition
from .models import DocumentIndex, HTMLDocument
from .registry import RuleRegistry

logger = logging.getLogger(__name__)


class AuditEngine:
    """
    Traversal engine for auditing HTML documents.

    Walks the element tree depth-first in document order and applies the
    full rule library to every element. The configuration is validated
    against the rule library once, when the engine is created.
    """

    def __init__(self, config: Configuration, rules: Optional[List[RuleDefinition]] = None):
        self.rules = list(rules) if rules is not None else RuleRegistry.get_all_rules()
        config.validate_rules(self.rules)
        self.config = config

    def check_element(self, index: DocumentIndex, element: ElementNode) -> List[Diagnostic]:
        """Runs every rule against one element, in declaration order."""
        findings: List[Diagnostic] = []
        for rule in self.rules:
            findings.extend(rule(index, element, self.config))
        return findings

    def traverse(self, doc: HTMLDocument) -> List[Diagnostic]:
        """
        Runs the full rule set on every element of the document.

        Args:
            doc (HTMLDocument): The parsed document.

        Returns:
            List[Diagnostic]: Findings in traversal order (element pre-order,
            then rule declaration order).
        """
        index = doc.index
        findings: List[Diagnostic] = []

        # Explicit stack keeps pre-order without recursion on deep trees
        stack = list(reversed(doc.roots))
        while stack:
            node = stack.pop()
            findings.extend(self.check_element(index, node))
            stack.extend(reversed(node.element_children()))

        logger.debug(f"Audited {len(index)} elements in '{doc.path or doc.title}': {len(findings)} finding(s)")
        return findings
