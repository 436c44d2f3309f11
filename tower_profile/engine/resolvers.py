# tower_profile/engine/resolvers.py
# Wing (influence) and mood-shift (arrow) resolution from building-block choices.

import logging
from typing import Optional, Sequence

from .definitions import BlockSide, ShiftStrength
from .models import InfluenceResult, MoodShiftResult, ReferenceTables

logger = logging.getLogger(__name__)

MOOD_SHIFT_MIN_BLOCKS = 4


def _strength(side: BlockSide) -> ShiftStrength:
    return ShiftStrength.STRONG if side == BlockSide.LEFT else ShiftStrength.MODERATE


def resolve_influence(
    primary_type: int,
    block_choices: Sequence[BlockSide],
    tables: ReferenceTables,
) -> Optional[InfluenceResult]:
    """
    Picks one of the two wings fixed for the primary type. The first block
    selects the wing, the second (if present) only sets its strength.
    """
    if not block_choices:
        return None

    left_wing, right_wing = tables.wing_pairs[primary_type]
    wing = left_wing if block_choices[0] == BlockSide.LEFT else right_wing
    strength = _strength(block_choices[1]) if len(block_choices) > 1 else ShiftStrength.MODERATE

    return InfluenceResult(
        adjacent_type=wing,
        strength=strength,
        label=f"{primary_type}w{wing}",
    )


def resolve_mood_shift(
    primary_type: int,
    block_choices: Sequence[BlockSide],
    tables: ReferenceTables,
) -> Optional[MoodShiftResult]:
    """Arrow targets come from the table alone; blocks 3 and 4 set the strengths."""
    if len(block_choices) < MOOD_SHIFT_MIN_BLOCKS:
        logger.debug(f"Mood shift needs {MOOD_SHIFT_MIN_BLOCKS} blocks, got {len(block_choices)}")
        return None

    arrow = tables.arrows[primary_type]
    return MoodShiftResult(
        integration_type=arrow.integration,
        disintegration_type=arrow.disintegration,
        integration_strength=_strength(block_choices[2]),
        disintegration_strength=_strength(block_choices[3]),
    )
