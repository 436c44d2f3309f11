# tower_profile/engine/activation.py
# Colour-palette selections -> activation percentage and band distribution.

import logging
from typing import Dict, List, Sequence

from .definitions import (
    ACTIVATION_BANDS,
    ActivationBand,
    apportion_percentages,
    clamp_pct,
    round_half_up,
)
from .models import ActivationDistribution, ActivationResult, ReferenceTables

logger = logging.getLogger(__name__)

# Used when no colours were selected: everything sits in the average band.
NEUTRAL_ACTIVATION_PCT = 50
NEUTRAL_DISTRIBUTION = ActivationDistribution(healthy_pct=0, average_pct=100, unhealthy_pct=0)


def activation_level_name(activation_pct: int, tables: ReferenceTables) -> str:
    for level in sorted(tables.activation_levels, key=lambda lvl: lvl.min_pct, reverse=True):
        if activation_pct >= level.min_pct:
            return level.name
    return tables.activation_levels[-1].name


def rank_bands(counts: Dict[ActivationBand, int]) -> List[ActivationBand]:
    # sorted() is stable, so equal counts keep healthy > average > unhealthy.
    return sorted(ACTIVATION_BANDS, key=lambda band: -counts[band])


def calculate_activation_pct(color_categories: Sequence[int], tables: ReferenceTables) -> int:
    """Weighted share of the maximum possible activation, 0-100."""
    if not color_categories:
        return NEUTRAL_ACTIVATION_PCT
    weights = tables.activation_weights
    max_weight = max(weights.values())
    weighted_sum = sum(weights[category] for category in color_categories)
    return round_half_up(clamp_pct(100 * weighted_sum / (len(color_categories) * max_weight)))


def analyze_activation(color_categories: Sequence[int], tables: ReferenceTables) -> ActivationResult:
    """
    Builds the activation profile from normalized colour categories
    (0 = healthy, 1 = average, 2 = unhealthy).
    """
    counts = {band: 0 for band in ACTIVATION_BANDS}
    for category in color_categories:
        counts[ACTIVATION_BANDS[category]] += 1

    if not color_categories:
        logger.debug("No colour selections; using the neutral activation default")
        return ActivationResult(
            activation_pct=NEUTRAL_ACTIVATION_PCT,
            distribution=NEUTRAL_DISTRIBUTION,
            counts=counts,
            dominant_band=ActivationBand.AVERAGE,
            secondary_band=ActivationBand.HEALTHY,
            level_name=activation_level_name(NEUTRAL_ACTIVATION_PCT, tables),
            is_default=True,
        )

    healthy, average, unhealthy = apportion_percentages([counts[band] for band in ACTIVATION_BANDS])
    activation_pct = calculate_activation_pct(color_categories, tables)
    ranked = rank_bands(counts)

    return ActivationResult(
        activation_pct=activation_pct,
        distribution=ActivationDistribution(
            healthy_pct=healthy,
            average_pct=average,
            unhealthy_pct=unhealthy,
        ),
        counts=counts,
        dominant_band=ranked[0],
        secondary_band=ranked[1],
        level_name=activation_level_name(activation_pct, tables),
    )
