from ..core import ElementNode, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

ADAPTABLE = ("perceivable", "adaptable")


# --- RULES ---

@audit_rule("Include a caption for each table.", ADAPTABLE, tags=["table"], code="1.3.1")
def check_caption(index: DocumentIndex, node: ElementNode):
    """Tables need a <caption> child describing them."""
    return not any(child.name == "caption" for child in node.element_children())


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="tables",
    rules=[check_caption]
)
