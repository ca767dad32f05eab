from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

DIAGNOSTIC_SOURCE = "Accessibility Checker"

# Index 0-3, selected by the first character of a success-criterion code
CATEGORIES = ["Perceivable", "Operable", "Understandable", "Robust"]


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Position(BaseModel):
    """Zero-based line/character position in the source document."""
    model_config = ConfigDict(frozen=True)

    line: int
    character: int

    def __lt__(self, other: "Position") -> bool:
        return (self.line, self.character) < (other.line, other.character)


class SourceRange(BaseModel):
    """Range covering the opening tag of an element."""
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def from_coords(cls, start_line: int, start_char: int, end_line: int, end_char: int) -> "SourceRange":
        return cls(
            start=Position(line=start_line, character=start_char),
            end=Position(line=end_line, character=end_char)
        )


class Diagnostic(BaseModel):
    """
    A single accessibility finding.

    Value object: two diagnostics are equal when all fields are equal.
    The range always points at the start tag of the offending element.
    """
    model_config = ConfigDict(frozen=True)

    code: str  # Success criterion, e.g. '1.1.1'. Empty for unmapped rules.
    message: str
    severity: Severity
    range: SourceRange
    source: str = DIAGNOSTIC_SOURCE
    rule: str = ""  # Name of the rule (configuration key) that produced it


class Statistics(BaseModel):
    """
    Aggregated view over a set of diagnostics.

    `guidelines`, `amount` and `messages` are parallel lists. `message_codes`
    maps message text to its code and is the authoritative lookup; in merged
    statistics `messages` is best-effort only.
    """
    tallies: List[int] = Field(default_factory=lambda: [0, 0, 0, 0])
    guidelines: List[str] = Field(default_factory=list)
    amount: List[int] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)
    message_codes: Dict[str, str] = Field(default_factory=dict)
    uncoded: int = 0

    @property
    def total(self) -> int:
        """Number of coded diagnostics counted in these statistics."""
        return sum(self.amount)

    def category_breakdown(self) -> Dict[str, int]:
        return dict(zip(CATEGORIES, self.tallies))

    def occurrences(self) -> Dict[str, int]:
        """Maps each distinct code to its occurrence count."""
        return dict(zip(self.guidelines, self.amount))


class FileResult(BaseModel):
    """Per-document outcome, retained for drill-down by the reporting layer."""
    title: str
    path: str
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    statistics: Statistics = Field(default_factory=Statistics)


class AuditSummary(BaseModel):
    """Result of auditing a set of documents."""
    results: List[FileResult] = Field(default_factory=list)
    overall: Statistics = Field(default_factory=Statistics)
    failed: List[str] = Field(default_factory=list)

    @property
    def total_diagnostics(self) -> int:
        return sum(len(r.diagnostics) for r in self.results)
