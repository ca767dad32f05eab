from accessibility_checker.model import Severity
from ..core import ElementNode, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

DISTINGUISHABLE = ("perceivable", "distinguishable")


# --- RULES ---
# Presentational markup conveys emphasis visually only. These are suggestions.

@audit_rule(
    "b (bold) element used", DISTINGUISHABLE, tags=["b"], code="1.4.1", severity=Severity.WARNING,
    message="b (bold) element used; use <strong> to convey emphasis."
)
def check_bold(index: DocumentIndex, node: ElementNode):
    return True


@audit_rule(
    "i (italic) element used", DISTINGUISHABLE, tags=["i"], code="1.4.1", severity=Severity.WARNING,
    message="i (italic) element used; use <em> to convey emphasis."
)
def check_italic(index: DocumentIndex, node: ElementNode):
    return True


@audit_rule(
    "font used", DISTINGUISHABLE, tags=["font"], code="1.4.1", severity=Severity.WARNING,
    message="font element used; use CSS for presentation."
)
def check_font(index: DocumentIndex, node: ElementNode):
    return True


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="presentation",
    rules=[check_bold, check_italic, check_font]
)
