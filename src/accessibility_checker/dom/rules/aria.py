from typing import List

from ..core import ElementNode, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

COMPATIBLE = ("robust", "compatible")

# Attributes holding a space separated list of id references
ID_REFERENCE_ATTRS = ["aria-labelledby", "aria-describedby", "aria-controls", "aria-owns", "aria-activedescendant"]
MENU_ITEM_ROLES = {"menuitem", "menuitemcheckbox", "menuitemradio"}


def roles(node: ElementNode) -> List[str]:
    return (node.get("role") or "").lower().split()


# --- RULES ---

@audit_rule("id attribute is not unique", COMPATIBLE, code="4.1.1")
def check_unique_id(index: DocumentIndex, node: ElementNode) -> List[str]:
    """Every element sharing an id is reported, not only the later ones."""
    el_id = node.get("id")
    if el_id is None:
        return []
    count = index.count_id(el_id)
    if count > 1:
        return [f"id attribute is not unique: '{el_id}' is used by {count} elements"]
    return []


@audit_rule("broken ARIA reference", COMPATIBLE, code="4.1.2")
def check_aria_references(index: DocumentIndex, node: ElementNode) -> List[str]:
    messages = []
    for attr in ID_REFERENCE_ATTRS:
        value = node.get(attr)
        if value is None:
            continue
        for ref in value.split():
            if index.count_id(ref) == 0:
                messages.append(f"Broken ARIA reference: {attr} points to missing id '{ref}'")
    return messages


@audit_rule(
    "broken ARIA menu", COMPATIBLE, code="4.1.2",
    message="Broken ARIA menu: an element with role 'menu' must contain menu items."
)
def check_aria_menu(index: DocumentIndex, node: ElementNode):
    if "menu" not in roles(node) and "menubar" not in roles(node):
        return False
    return not any(MENU_ITEM_ROLES.intersection(roles(el)) for el in node.iter_descendants())


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="aria",
    rules=[check_unique_id, check_aria_references, check_aria_menu]
)
