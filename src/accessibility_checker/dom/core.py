import logging
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from accessibility_checker.model import Diagnostic, Severity, SourceRange

if TYPE_CHECKING:
    from accessibility_checker.config import Configuration
    from accessibility_checker.dom.models import DocumentIndex

logger = logging.getLogger(__name__)


class TextNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.data.strip()


class CommentNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: str = ""


class ElementNode(BaseModel):
    """
    One tag instance in the parsed document tree.

    Attribute lookups distinguish an absent attribute (None) from an empty one ("").
    Parent/ancestor queries go through the DocumentIndex, which holds the
    back-references for the whole tree.
    """
    model_config = ConfigDict(frozen=True)

    tag: str
    attrs: Dict[str, str] = Field(default_factory=dict)
    children: List[Union["ElementNode", TextNode, CommentNode]] = Field(default_factory=list)
    source_range: Optional[SourceRange] = None

    @property
    def name(self) -> str:
        return self.tag.lower()

    def get(self, attr: str) -> Optional[str]:
        return self.attrs.get(attr)

    def has_attr(self, attr: str) -> bool:
        return attr in self.attrs

    def element_children(self) -> List["ElementNode"]:
        return [c for c in self.children if isinstance(c, ElementNode)]

    def iter_nodes(self) -> Iterator[Union["ElementNode", "TextNode", "CommentNode"]]:
        """Yields every descendant node in document order, without recursion."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, ElementNode):
                stack.extend(reversed(node.children))

    def iter_descendants(self) -> Iterator["ElementNode"]:
        """Yields descendant elements in document order (pre-order)."""
        return (node for node in self.iter_nodes() if isinstance(node, ElementNode))

    def text_content(self) -> str:
        return "".join(node.data for node in self.iter_nodes() if isinstance(node, TextNode))

    def has_text(self) -> bool:
        """True when the element (or any descendant) holds non-whitespace text."""
        return any(isinstance(node, TextNode) and not node.is_blank for node in self.iter_nodes())

    def images(self) -> List["ElementNode"]:
        return [el for el in self.iter_descendants() if el.name == "img"]


ElementNode.model_rebuild()

Node = Union[ElementNode, TextNode, CommentNode]


def has_alt_text(image: ElementNode) -> bool:
    alt = image.get("alt")
    return alt is not None and bool(alt.strip())


# The config path is (category, subcategory), e.g. ('perceivable', 'textAlternatives')
ConfigPath = Tuple[str, str]
RuleCheck = Callable[["DocumentIndex", ElementNode], List[str]]


class RuleDefinition:
    """
    A named, configurable accessibility check.

    The wrapped check only runs when the element's tag matches and the
    configuration enables the rule. It returns the messages to report for the
    element; each one becomes a Diagnostic at the element's start tag.
    """

    def __init__(
            self,
            name: str,
            config_path: ConfigPath,
            check: RuleCheck,
            tags: Optional[Iterable[str]] = None,
            code: str = "",
            severity: Severity = Severity.ERROR,
            message: Optional[str] = None
    ):
        self.name = name
        self.config_path = tuple(config_path)
        self.check = check
        # None means the rule inspects every element
        self.tags: Optional[FrozenSet[str]] = frozenset(t.lower() for t in tags) if tags is not None else None
        self.code = code
        self.severity = severity
        self.message = message or name

    def applies_to(self, element: ElementNode) -> bool:
        return self.tags is None or element.name in self.tags

    def __call__(self, index: "DocumentIndex", element: ElementNode, config: "Configuration") -> List[Diagnostic]:
        if not self.applies_to(element):
            return []
        if not config.is_enabled(self.config_path, self.name):
            return []

        messages = self.check(index, element)
        if not messages:
            return []

        if element.source_range is None:
            logger.debug(f"No start tag location for <{element.tag}>, skipping '{self.name}'")
            return []

        return [
            Diagnostic(
                code=self.code,
                message=msg,
                severity=self.severity,
                range=element.source_range,
                rule=self.name
            )
            for msg in messages
        ]

    def __repr__(self) -> str:
        return f"RuleDefinition({self.name!r}, path={'.'.join(self.config_path)})"


def audit_rule(
        name: str,
        path: ConfigPath,
        tags: Optional[Iterable[str]] = None,
        code: str = "",
        severity: Severity = Severity.ERROR,
        message: Optional[str] = None
) -> Callable[[RuleCheck], RuleDefinition]:
    """
    Decorator turning a check function into a RuleDefinition.

    The check may return `True` as a shorthand for "report the default message once".
    """
    def decorator(func: RuleCheck) -> RuleDefinition:
        default = message or name

        def check(index, element):
            result = func(index, element)
            if result is True:
                return [default]
            return list(result or [])

        check.__name__ = func.__name__
        check.__doc__ = func.__doc__
        return RuleDefinition(name, path, check, tags=tags, code=code, severity=severity, message=default)

    return decorator


class RuleSetDefinition:
    """
    Groups the rules declared by one module of the rule library.
    The RuleRegistry discovers these through a module-level DEFINITION.
    """

    def __init__(self, name: str, rules: List[RuleDefinition]):
        self.name = name
        self.rules = list(rules)

        duplicates = {r.name for r in self.rules if sum(1 for o in self.rules if o.name == r.name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate rule names in rule set '{name}': {sorted(duplicates)}")
