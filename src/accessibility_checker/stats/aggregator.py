# src/accessibility_checker/stats/aggregator.py
import logging
from typing import Dict, Iterable, List

from accessibility_checker.errors import AggregationError
from accessibility_checker.model import Diagnostic, Statistics

logger = logging.getLogger(__name__)

# First character of a success-criterion code -> tally index
CATEGORY_INDEX = {"1": 0, "2": 1, "3": 2, "4": 3}


def _require_codes(diagnostics: List[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        if not isinstance(getattr(diagnostic, "code", None), str):
            raise AggregationError(
                f"Cannot aggregate diagnostic without a code: {getattr(diagnostic, 'message', diagnostic)!r}"
            )


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    """
    Stable sort by code (plain string comparison). Diagnostics sharing a code
    keep their input order.
    """
    diagnostics = list(diagnostics)
    _require_codes(diagnostics)
    return sorted(diagnostics, key=lambda d: d.code)


def aggregate(diagnostics: Iterable[Diagnostic]) -> Statistics:
    """
    Converts the diagnostics of one document into Statistics.

    Uncoded diagnostics (empty code) are only counted in `uncoded`; they take
    no part in sorting, tallies or the code tables.

    Raises:
        AggregationError: if any diagnostic has no code at all.
    """
    diagnostics = list(diagnostics)
    _require_codes(diagnostics)

    coded = [d for d in diagnostics if d.code]
    uncoded = len(diagnostics) - len(coded)

    tallies = [0, 0, 0, 0]
    guidelines: List[str] = []
    amount: List[int] = []
    messages: List[str] = []
    message_codes: Dict[str, str] = {}
    positions: Dict[str, int] = {}

    for diagnostic in sort_diagnostics(coded):
        code = diagnostic.code

        category = CATEGORY_INDEX.get(code[0])
        if category is not None:
            tallies[category] += 1

        if code not in positions:
            positions[code] = len(guidelines)
            guidelines.append(code)
            amount.append(1)
            messages.append(diagnostic.message)
        else:
            amount[positions[code]] += 1

        # First occurrence wins
        message_codes.setdefault(diagnostic.message, code)

    logger.debug(f"Aggregated {len(coded)} coded and {uncoded} uncoded diagnostic(s) into {len(guidelines)} code(s)")

    return Statistics(
        tallies=tallies,
        guidelines=guidelines,
        amount=amount,
        messages=messages,
        message_codes=message_codes,
        uncoded=uncoded
    )
