# tower_profile/engine/priority_focus.py
# Detail-phase tokens -> instinctual priority percentages and stack.

import logging
from typing import Dict, List, Sequence

from .definitions import INSTINCT_PRECEDENCE, InstinctCategory, StackType, apportion_percentages
from .models import PriorityFocusResult, PriorityStackEntry

logger = logging.getLogger(__name__)

DOMINANT_THRESHOLD = 60
BALANCED_GAP = 10
POLARIZED_FLOOR = 10
MIN_CLARITY = 0.3


def rank_categories(percentages: Dict[InstinctCategory, int]) -> List[InstinctCategory]:
    # Stable sort over the fixed precedence: equal percentages rank sp > so > sx.
    return sorted(INSTINCT_PRECEDENCE, key=lambda category: -percentages[category])


def classify_stack(ordered_pcts: Sequence[int]) -> StackType:
    """Shape of the stack from its percentages, highest first."""
    first, second, third = ordered_pcts
    if first >= DOMINANT_THRESHOLD:
        return StackType.DOMINANT
    if first - second <= BALANCED_GAP:
        return StackType.BALANCED
    if third <= POLARIZED_FLOOR:
        return StackType.POLARIZED
    return StackType.INTEGRATED


def distribution_clarity(ordered_pcts: Sequence[int]) -> float:
    first, second, third = ordered_pcts
    clarity = min(((first - second) + (second - third)) / 80, 1.0)
    return round(max(clarity, MIN_CLARITY), 4)


def analyze_priority_focus(tokens: Sequence[InstinctCategory]) -> PriorityFocusResult:
    counts = {category: 0 for category in INSTINCT_PRECEDENCE}
    for token in tokens:
        counts[token] += 1

    shares = apportion_percentages([counts[category] for category in INSTINCT_PRECEDENCE])
    percentages = dict(zip(INSTINCT_PRECEDENCE, shares))
    ranked = rank_categories(percentages)
    ordered_pcts = [percentages[category] for category in ranked]

    if not tokens:
        logger.debug("No detail tokens; stack falls back to the fixed precedence")

    return PriorityFocusResult(
        counts=counts,
        percentages=percentages,
        stack=[PriorityStackEntry(category=c, percentage=percentages[c]) for c in ranked],
        dominant=ranked[0] if tokens else None,
        stack_type=classify_stack(ordered_pcts),
        clarity=distribution_clarity(ordered_pcts),
    )
