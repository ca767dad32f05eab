from accessibility_checker.model import Severity
from ..core import ElementNode, RuleDefinition, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

DEPRECATED = ("deprecated", "elements")

# Obsolete tags and the replacement to suggest, if any
OBSOLETE_TAGS = {
    "acronym": "use <abbr> tag instead",
    "applet": "use <object> tag instead",
    "basefont": None,
    "big": None,
    "blink": None,
    "center": None,
    "dir": "use <ul> tag instead",
    "embed": None,
    "frame": None,
    "frameset": None,
    "isindex": None,
    "menu": None,
    "noframes": None,
    "plaintext": "use <pre> tag instead",
    "s": None,
    "strike": "use <del> or <s> with CSS instead",
    "tt": "use <code> tag instead",
    "u": None,
}


def _always(index: DocumentIndex, node: ElementNode):
    return True


def make_deprecated_rule(tag: str, suggestion=None) -> RuleDefinition:
    """
    Deprecated tags have no success criterion assigned, so the code stays
    empty. The aggregator counts these separately.
    """
    message = f"<{tag}> tag is deprecated"
    if suggestion:
        message = f"{message}, {suggestion}."
    return audit_rule(
        f"<{tag}> tag is deprecated", DEPRECATED, tags=[tag], code="", severity=Severity.WARNING, message=message
    )(_always)


def make_semantic_suggestion(tag: str, preferred: str) -> RuleDefinition:
    return audit_rule(
        f"Consider using the <{preferred}> tag instead of <{tag}>", DEPRECATED, tags=[tag], code="",
        severity=Severity.WARNING
    )(_always)


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="deprecated",
    rules=[make_deprecated_rule(tag, suggestion) for tag, suggestion in OBSOLETE_TAGS.items()]
    + [make_semantic_suggestion("b", "strong"), make_semantic_suggestion("i", "em")]
)
