import re

from ..core import ElementNode, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

ENOUGH_TIME = ("operable", "enoughTime")

# content="5; url=..." -> delay of 5 seconds
_REFRESH_DELAY = re.compile(r"^\s*(\d+(?:\.\d+)?)")


# --- RULES ---

@audit_rule(
    "Meta refresh with a time-out is used", ENOUGH_TIME, tags=["meta"], code="2.2.1",
    message="Meta refresh with a time-out is used; users cannot control the time limit."
)
def check_meta_refresh(index: DocumentIndex, node: ElementNode):
    if (node.get("http-equiv") or "").strip().lower() != "refresh":
        return False
    match = _REFRESH_DELAY.match(node.get("content") or "")
    return bool(match) and float(match.group(1)) > 0


@audit_rule(
    "Marquee element used", ENOUGH_TIME, tags=["marquee"], code="2.2.2",
    message="Marquee element used; moving content must be pausable."
)
def check_marquee(index: DocumentIndex, node: ElementNode):
    return True


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="timing",
    rules=[check_meta_refresh, check_marquee]
)
