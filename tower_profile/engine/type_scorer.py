"""
Foundation-phase type scoring.
"""
import logging
from typing import Dict, List, Sequence, Tuple

from .definitions import DEFAULT_PRIMARY_TYPE, TYPE_IDS, round_half_up
from .models import PrimaryTypeResult, RankedType, ReferenceTables

logger = logging.getLogger(__name__)


def compute_type_scores(foundation_choices: Sequence[int], tables: ReferenceTables) -> Dict[int, int]:
    """Sums the weight table entries for each (set, choice) pair into a score per type."""
    scores = {type_id: 0 for type_id in TYPE_IDS}
    for set_index, choice in enumerate(foundation_choices[:len(tables.foundation_weights)]):
        for type_id, weight in tables.foundation_weights[set_index][choice].items():
            scores[type_id] += weight
    return scores


def rank_types(scores: Dict[int, int]) -> List[Tuple[int, int]]:
    """Highest score first; equal scores keep ascending type order."""
    return sorted(scores.items(), key=lambda item: (-item[1], item[0]))


def calculate_confidence(top_score: int, second_score: int) -> int:
    total = top_score + second_score
    if total <= 0:
        return 0
    return max(0, min(100, round_half_up(100 * top_score / total)))


def determine_primary_type(foundation_choices: Sequence[int], tables: ReferenceTables) -> PrimaryTypeResult:
    """
    Scores the foundation choices and picks the primary type.

    Args:
        foundation_choices: Normalized choices, either empty or nine ints in {0, 1, 2}.
        tables: Validated reference tables.

    Returns:
        PrimaryTypeResult. With no choices at all every score is zero and the
        result is the default type with confidence 0, listed first in top_three.
    """
    scores = compute_type_scores(foundation_choices, tables)
    ranked = rank_types(scores)
    (top_type, top_score), (_, second_score) = ranked[0], ranked[1]

    if top_score == 0:
        logger.debug(f"No foundation scores; falling back to default type {DEFAULT_PRIMARY_TYPE}")
        top_type = DEFAULT_PRIMARY_TYPE
        # The default type leads the ranking when nothing scored.
        ranked = [(DEFAULT_PRIMARY_TYPE, 0)] + [item for item in ranked if item[0] != DEFAULT_PRIMARY_TYPE]

    confidence = calculate_confidence(top_score, second_score)
    logger.debug(f"Type scores: {scores}; primary={top_type} confidence={confidence}")

    return PrimaryTypeResult(
        number=top_type,
        name=tables.type_names[top_type].name,
        confidence=confidence,
        scores=scores,
        top_three=[RankedType(type_id=t, score=s) for t, s in ranked[:3]],
    )
