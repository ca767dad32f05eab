from collections import defaultdict
from typing import Dict, List

from ..core import ElementNode, RuleDefinition, RuleSetDefinition, audit_rule
from ..models import DocumentIndex

ADAPTABLE = ("perceivable", "adaptable")
NAVIGABLE = ("operable", "navigable")
INPUT_ASSISTANCE = ("understandable", "inputAssistance")

LABELLED_INPUT_TYPES = ["text", "password", "radio", "checkbox", "file"]
BUTTON_INPUT_TYPES = {"submit", "reset", "button"}


def input_type(node: ElementNode) -> str:
    # Browsers treat a missing type as a text field
    return (node.get("type") or "text").strip().lower()


def associated_labels(index: DocumentIndex, node: ElementNode) -> List[ElementNode]:
    """Labels bound to the element through <label for="...">."""
    return index.labels_for(node.get("id") or None)


def labels_without_text(labels: List[ElementNode]) -> bool:
    return bool(labels) and not any(label.has_text() for label in labels)


# --- RULE FACTORIES (one rule per input type) ---

def make_missing_label_rule(type_name: str) -> RuleDefinition:
    @audit_rule(
        f"input element, type of '{type_name}', missing an associated label.",
        ADAPTABLE, tags=["input"], code="1.3.1"
    )
    def check(index: DocumentIndex, node: ElementNode):
        return input_type(node) == type_name and not associated_labels(index, node)

    return check


def make_empty_label_rule(type_name: str) -> RuleDefinition:
    @audit_rule(
        f"input element, type of '{type_name}', has no text in label.",
        ADAPTABLE, tags=["input"], code="1.3.1"
    )
    def check(index: DocumentIndex, node: ElementNode):
        return input_type(node) == type_name and labels_without_text(associated_labels(index, node))

    return check


# --- RULES ---

@audit_rule("input element has more than one associated label", INPUT_ASSISTANCE, tags=["input"], code="3.3.2")
def check_input_multiple_labels(index: DocumentIndex, node: ElementNode):
    return input_type(node) in LABELLED_INPUT_TYPES and len(associated_labels(index, node)) > 1


@audit_rule("select element missing an associated label.", ADAPTABLE, tags=["select"], code="1.3.1")
def check_select_label(index: DocumentIndex, node: ElementNode):
    return not associated_labels(index, node)


@audit_rule("Select elements should only have one associated label", ADAPTABLE, tags=["select"], code="1.3.1")
def check_select_multiple_labels(index: DocumentIndex, node: ElementNode):
    return len(associated_labels(index, node)) > 1


@audit_rule("Label text is empty for select statement.", ADAPTABLE, tags=["select"], code="1.3.1")
def check_select_label_text(index: DocumentIndex, node: ElementNode):
    return labels_without_text(associated_labels(index, node))


@audit_rule("textarea element missing an associated label.", ADAPTABLE, tags=["textarea"], code="1.3.1")
def check_textarea_label(index: DocumentIndex, node: ElementNode):
    return not associated_labels(index, node)


@audit_rule("Textarea elements should only have one associated label", ADAPTABLE, tags=["textarea"], code="1.3.1")
def check_textarea_multiple_labels(index: DocumentIndex, node: ElementNode):
    return len(associated_labels(index, node)) > 1


@audit_rule("button has no text in label.", ADAPTABLE, tags=["button"], code="1.3.1")
def check_button_label_text(index: DocumentIndex, node: ElementNode):
    return labels_without_text(associated_labels(index, node))


@audit_rule(
    "Form missing fieldset and legend to group multiple radio buttons", ADAPTABLE, tags=["form"], code="1.3.1"
)
def check_radio_grouping(index: DocumentIndex, node: ElementNode) -> List[str]:
    """Radio buttons sharing a name must sit in a <fieldset> that has a <legend>."""
    groups: Dict[str, List[ElementNode]] = defaultdict(list)
    for el in node.iter_descendants():
        if el.name == "input" and input_type(el) == "radio":
            groups[el.get("name") or ""].append(el)

    messages = []
    for name, radios in groups.items():
        if len(radios) < 2:
            continue
        ungrouped = [r for r in radios if not _in_fieldset_with_legend(index, r, node)]
        if ungrouped:
            label = f"'{name}'" if name else "(unnamed)"
            messages.append(
                f"Form missing fieldset and legend to group multiple radio buttons: group {label} "
                f"has {len(radios)} radio buttons"
            )
    return messages


def _in_fieldset_with_legend(index: DocumentIndex, radio: ElementNode, form: ElementNode) -> bool:
    for ancestor in index.ancestors(radio):
        if ancestor is form:
            return False
        if ancestor.name == "fieldset":
            return any(child.name == "legend" for child in ancestor.element_children())
    return False


@audit_rule(
    "Give input element a value attribute", NAVIGABLE, tags=["input"], code="2.4.6",
    message="Give input element a value attribute to label the button."
)
def check_button_input_value(index: DocumentIndex, node: ElementNode):
    return input_type(node) in BUTTON_INPUT_TYPES and not node.get("value")


@audit_rule("Place text content within the <button> element", NAVIGABLE, tags=["button"], code="2.4.6")
def check_button_text(index: DocumentIndex, node: ElementNode):
    return not node.has_text() and not node.images()


@audit_rule("label text is empty", INPUT_ASSISTANCE, tags=["label"], code="3.3.2", message="Label text is empty.")
def check_label_text(index: DocumentIndex, node: ElementNode):
    return not node.has_text()


# --- DEFINITION ---
DEFINITION = RuleSetDefinition(
    name="forms",
    rules=[make_missing_label_rule(t) for t in LABELLED_INPUT_TYPES]
    + [make_empty_label_rule(t) for t in LABELLED_INPUT_TYPES]
    + [
        check_input_multiple_labels,
        check_select_label,
        check_select_multiple_labels,
        check_select_label_text,
        check_textarea_label,
        check_textarea_multiple_labels,
        check_button_label_text,
        check_radio_grouping,
        check_button_input_value,
        check_button_text,
        check_label_text
    ]
)
