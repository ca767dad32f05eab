from ..core import ElementNode, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

NAVIGABLE = ("operable", "navigable")


# --- RULES ---

@audit_rule(
    "Include an href attribute to make text a hyperlink", NAVIGABLE, tags=["a"], code="2.4.4",
    message="Include an href attribute to make text a hyperlink."
)
def check_href(index: DocumentIndex, node: ElementNode):
    href = node.get("href")
    return href is None or not href.strip()


@audit_rule("Anchor contains no text.", NAVIGABLE, tags=["a"], code="2.4.4")
def check_anchor_text(index: DocumentIndex, node: ElementNode):
    """Link text, or an image standing in for it, names the link's purpose."""
    return not node.has_text() and not node.images()


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="links",
    rules=[check_href, check_anchor_text]
)
