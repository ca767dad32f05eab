from typing import List

from ..core import ElementNode, RuleDefinition, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

NAVIGABLE = ("operable", "navigable")
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def heading_level(node: ElementNode) -> int:
    return int(node.name[1])


def out_of_order_headings(index: DocumentIndex, node: ElementNode) -> List[str]:
    """
    Finds deeper headings that start before this heading.

    The n-th heading of level N is compared with the n-th and later headings
    of every level M > N; each one starting earlier in the source is one
    violation.
    """
    if node.source_range is None:
        return []

    level = heading_level(node)
    same_level = index.by_tag(node.name)
    position = next((i for i, el in enumerate(same_level) if el is node), None)
    if position is None:
        return []
    start = node.source_range.start

    messages = []
    for deeper in range(level + 1, 7):
        for other in index.by_tag(f"h{deeper}")[position:]:
            if other.source_range is not None and other.source_range.start < start:
                messages.append(
                    f"Header nesting - <h{deeper}> appears before <h{level}>; "
                    f"header following h{level} is incorrect."
                )
    return messages


def make_nesting_rule(level: int) -> RuleDefinition:
    return audit_rule(
        f"Header nesting - header following h{level} is incorrect.",
        NAVIGABLE,
        tags=[f"h{level}"],
        code="2.4.6"
    )(out_of_order_headings)


# --- RULES ---

@audit_rule("There should only be one <h1> per page", NAVIGABLE, tags=["h1"], code="2.4.6")
def check_single_h1(index: DocumentIndex, node: ElementNode):
    first = index.by_tag("h1")[0]
    return first is not node


@audit_rule(
    "Heading contains no text.", NAVIGABLE, tags=HEADING_TAGS, code="2.4.6",
    message="Heading is empty (contains no text or image content)."
)
def check_heading_text(index: DocumentIndex, node: ElementNode):
    # An image (e.g. a logo) counts as heading content
    return not node.has_text() and not node.images()


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="headings",
    rules=[make_nesting_rule(level) for level in range(1, 6)] + [check_single_h1, check_heading_text]
)
