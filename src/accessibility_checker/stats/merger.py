# src/accessibility_checker/stats/merger.py
import logging
from typing import Dict, Iterable, List

from accessibility_checker.model import Statistics

logger = logging.getLogger(__name__)


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def merge(stats: Iterable[Statistics]) -> Statistics:
    """
    Folds per-document statistics into one summary, in input order.

    Tallies and occurrence counts are summed, so they do not depend on the
    input order. The merged `messages` list is deduplicated and cut to the
    number of distinct codes; it only lines up with `guidelines` when codes
    and messages map one to one. Use `message_codes` for lookups.
    The result can itself be merged again.
    """
    tallies = [0, 0, 0, 0]
    guidelines: List[str] = []
    amount: List[int] = []
    message_codes: Dict[str, str] = {}
    accumulated_messages: List[str] = []
    positions: Dict[str, int] = {}
    uncoded = 0
    documents = 0

    for doc_stats in stats:
        documents += 1
        for i, count in enumerate(doc_stats.tallies):
            tallies[i] += count

        for code, count in zip(doc_stats.guidelines, doc_stats.amount):
            if code in positions:
                amount[positions[code]] += count
            else:
                positions[code] = len(guidelines)
                guidelines.append(code)
                amount.append(count)

        # Later documents overwrite the code for an identical message
        message_codes.update(doc_stats.message_codes)
        accumulated_messages.extend(doc_stats.messages)
        uncoded += doc_stats.uncoded

    messages = _dedupe(accumulated_messages)[:len(guidelines)]

    logger.debug(f"Merged statistics of {documents} document(s): {len(guidelines)} distinct code(s)")

    return Statistics(
        tallies=tallies,
        guidelines=guidelines,
        amount=amount,
        messages=messages,
        message_codes=message_codes,
        uncoded=uncoded
    )
