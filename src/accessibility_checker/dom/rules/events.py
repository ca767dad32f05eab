from ..core import ElementNode, RuleDefinition, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

KEYBOARD_ACCESSIBLE = ("operable", "keyboardAccessible")

# (rule name, mouse handler, required keyboard handler)
EVENT_PAIRS = [
    ("onmouseover event handler missing onfocus event handler", "onmouseover", "onfocus"),
    ("script not keyboard accessible - onmouseout missing onblur", "onmouseout", "onblur"),
    ("script not keyboard accessible - onmouse missing onblur", "onmouseleave", "onblur"),
    ("onmousedown event missing onkeydown event", "onmousedown", "onkeydown"),
]


def make_pairing_rule(name: str, mouse_event: str, keyboard_event: str) -> RuleDefinition:
    """Each mouse handler is paired on its own, so one element can yield several findings."""

    @audit_rule(
        name, KEYBOARD_ACCESSIBLE, code="2.1.1",
        message=f"Element with an {mouse_event} handler must also have an {keyboard_event} handler."
    )
    def check(index: DocumentIndex, node: ElementNode):
        return node.has_attr(mouse_event) and not node.has_attr(keyboard_event)

    return check


# --- RULES ---

@audit_rule(
    "Video and audio tags should have control attribute for pausing and volume",
    KEYBOARD_ACCESSIBLE, tags=["video", "audio"], code="2.1.1"
)
def check_media_controls(index: DocumentIndex, node: ElementNode):
    return not node.has_attr("controls")


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="events",
    rules=[make_pairing_rule(*pair) for pair in EVENT_PAIRS] + [check_media_controls]
)
