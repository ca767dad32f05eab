from typing import List

from accessibility_checker.model import Severity
from ..core import ElementNode, RuleSetDefinition, audit_rule, has_alt_text
from ..models import DocumentIndex

TEXT_ALTERNATIVES = ("perceivable", "textAlternatives")


# --- RULES ---

@audit_rule(
    "img element missing alt attribute", TEXT_ALTERNATIVES, tags=["img"], code="1.1.1",
    message="Include an alt attribute on every image"
)
def check_img_alt(index: DocumentIndex, node: ElementNode):
    # alt="" is a valid marker for decorative images, only absence is reported
    return not node.has_attr("alt")


@audit_rule(
    "Image used as anchor is missing valid Alt text.", TEXT_ALTERNATIVES, tags=["a"], code="1.1.1"
)
def check_anchor_image_alt(index: DocumentIndex, node: ElementNode):
    """An image-only link needs alt text to name the link."""
    if node.has_text():
        return False
    images = node.images()
    return bool(images) and not any(has_alt_text(img) for img in images)


@audit_rule(
    "input element has alt attribute", TEXT_ALTERNATIVES, tags=["input"], code="1.1.1",
    severity=Severity.WARNING,
    message="The alt attribute is only valid on inputs of type 'image'."
)
def check_input_alt(index: DocumentIndex, node: ElementNode):
    input_type = (node.get("type") or "text").strip().lower()
    return input_type != "image" and node.has_attr("alt")


@audit_rule(
    "Image button missing alt text", TEXT_ALTERNATIVES, tags=["input"], code="1.1.1",
    message="Include alt text on inputs of type 'image'."
)
def check_image_input_alt(index: DocumentIndex, node: ElementNode):
    input_type = (node.get("type") or "").strip().lower()
    return input_type == "image" and not has_alt_text(node)


@audit_rule(
    "Table header tags should have associated text or image with alternative text",
    TEXT_ALTERNATIVES, tags=["th"], code="1.1.1"
)
def check_table_header_content(index: DocumentIndex, node: ElementNode) -> List[str]:
    if node.has_text():
        return []
    if any(has_alt_text(img) for img in node.images()):
        return []
    return ["Table header tags should have associated text or image with alternative text"]


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="images",
    rules=[
        check_img_alt,
        check_anchor_image_alt,
        check_input_alt,
        check_image_input_alt,
        check_table_header_content
    ]
)
