# tower_profile/engine/life_domains.py
# Per-domain activation scores, impact texts and trajectory labels.

import logging
from typing import Optional

from .definitions import LIFE_DOMAIN_IDS, InstinctCategory, Timeframe, Trend, clamp_pct, round_half_up
from .models import LifeDomainEntry, LifeDomainProfile, ReferenceTables

logger = logging.getLogger(__name__)

DECLINING_BELOW = 40
IMPROVING_FROM = 60


def classify_trend(score: int) -> Trend:
    if score < DECLINING_BELOW:
        return Trend.DECLINING
    if score < IMPROVING_FROM:
        return Trend.STABLE
    return Trend.IMPROVING


def type_domain_bonus(primary_type: int, domain_id: str, tables: ReferenceTables) -> int:
    # Types or domains absent from the sensitivity table contribute nothing.
    return tables.domain_sensitivity.get(primary_type, {}).get(domain_id, 0)


def domain_activation_score(
    domain_id: str,
    primary_type: int,
    activation_pct: int,
    dominant_priority: Optional[InstinctCategory],
    tables: ReferenceTables,
) -> int:
    priority_bonus = 0
    if dominant_priority is not None and domain_id in tables.priority_domains.get(dominant_priority, ()):
        priority_bonus = tables.priority_bonus
    type_bonus = type_domain_bonus(primary_type, domain_id, tables)
    return round_half_up(clamp_pct(activation_pct + priority_bonus + type_bonus))


def calculate_life_domains(
    primary_type: int,
    activation_pct: int,
    dominant_priority: Optional[InstinctCategory],
    tables: ReferenceTables,
) -> LifeDomainProfile:
    """
    Scores the eight life domains for one profile.

    Args:
        primary_type: Primary type id (1-9).
        activation_pct: Overall activation from the activation analyzer.
        dominant_priority: Top instinct of the priority stack, or None when
            no tokens were placed (no domain gets the priority bonus).
        tables: Validated reference tables.

    Returns:
        LifeDomainProfile with the domains in the fixed report order.
    """
    impacts = tables.domain_impacts[primary_type]
    domains = []
    # Report order is fixed here, not by the key order of the YAML mapping.
    for domain_id in LIFE_DOMAIN_IDS:
        domain_name = tables.life_domains[domain_id]
        score = domain_activation_score(domain_id, primary_type, activation_pct, dominant_priority, tables)
        trend = classify_trend(score)
        labels = tables.trajectory_labels[trend]
        impact = impacts[domain_id]
        domains.append(LifeDomainEntry(
            domain_id=domain_id,
            name=domain_name,
            activation_score=score,
            trend=trend,
            short_term_label=labels[Timeframe.SHORT],
            medium_term_label=labels[Timeframe.MEDIUM],
            long_term_label=labels[Timeframe.LONG],
            current_impact_text=impact.high if score >= tables.impact_threshold else impact.low,
        ))

    overall = round_half_up(sum(d.activation_score for d in domains) / len(domains))
    primary_domains = list(tables.priority_domains.get(dominant_priority, ())) if dominant_priority else []
    logger.debug(f"Life domain scores for type {primary_type}: {[d.activation_score for d in domains]}")

    return LifeDomainProfile(
        domains=domains,
        overall_activation=overall,
        primary_domains=primary_domains,
    )
