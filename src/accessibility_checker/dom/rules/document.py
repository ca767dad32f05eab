from typing import List

from accessibility_checker.utils.languages import is_valid_language_code
from ..core import ElementNode, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

READABLE = ("understandable", "readable")
NAVIGABLE = ("operable", "navigable")


# --- RULES ---

@audit_rule(
    "document language not identified", READABLE, tags=["html"], code="3.1.1",
    message="Include a lang attribute to provide the page's language."
)
def check_lang_present(index: DocumentIndex, node: ElementNode):
    return not node.get("lang")


@audit_rule("document has invalid language code", READABLE, tags=["html"], code="3.1.1")
def check_lang_valid(index: DocumentIndex, node: ElementNode) -> List[str]:
    lang = node.get("lang")
    # A missing lang is reported by the presence rule
    if not lang:
        return []
    if not is_valid_language_code(lang):
        return [f"Document has invalid language code: '{lang}'"]
    return []


@audit_rule("Document missing title element", NAVIGABLE, tags=["head"], code="2.4.2")
def check_head_title(index: DocumentIndex, node: ElementNode) -> List[str]:
    """A <head> must contain exactly one <title>."""
    titles = [child for child in node.element_children() if child.name == "title"]
    if not titles:
        return ["Include a title for each page."]
    if len(titles) > 1:
        return [f"Include only one title for each page (found {len(titles)})."]
    return []


@audit_rule("title element is empty", NAVIGABLE, tags=["title"], code="2.4.2", message="Title element is empty.")
def check_title_text(index: DocumentIndex, node: ElementNode):
    return not node.has_text()


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="document",
    rules=[check_lang_present, check_lang_valid, check_head_title, check_title_text]
)
