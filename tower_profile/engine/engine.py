import logging
from typing import Any, Optional

from .activation import analyze_activation
from .life_domains import calculate_life_domains
from .loader import get_reference_tables
from .models import ProfileResult, ReferenceTables
from .normalizer import normalize_selections
from .priority_focus import analyze_priority_focus
from .resolvers import resolve_influence, resolve_mood_shift
from .type_scorer import determine_primary_type

logger = logging.getLogger(__name__)


class ProfileEngine:
    """
    Turns one assessment's selections into a typed profile. Holds nothing
    but the immutable reference tables, so one instance can serve any
    number of concurrent callers.
    """
    def __init__(self, tables: Optional[ReferenceTables] = None):
        """
        Args:
            tables: Validated reference tables. Defaults to the process-wide
                tables from the configured YAML file; loading them raises
                ReferenceDataError if they are inconsistent.
        """
        self.tables = tables if tables is not None else get_reference_tables()

    def build_profile(self, selections: Any) -> ProfileResult:
        """
        Runs every scoring stage in dependency order.

        Args:
            selections: A SelectionSet, a raw mapping of the four selection
                lists (snake_case or camelCase keys), or None.

        Returns:
            ProfileResult. Missing phases fall back to their documented
            defaults; influence and mood shift are None when too few
            building blocks were chosen.
        """
        selection_set = normalize_selections(selections)

        primary = determine_primary_type(selection_set.foundation_choices, self.tables)
        influence = resolve_influence(primary.number, selection_set.building_block_choices, self.tables)
        mood_shift = resolve_mood_shift(primary.number, selection_set.building_block_choices, self.tables)
        activation = analyze_activation(selection_set.color_selections, self.tables)
        priority_focus = analyze_priority_focus(selection_set.detail_selections)
        life_domains = calculate_life_domains(
            primary.number,
            activation.activation_pct,
            priority_focus.dominant,
            self.tables,
        )

        logger.info(
            f"Built profile: type {primary.number} ({primary.name}), confidence {primary.confidence}, "
            f"activation {activation.activation_pct}%, dominant focus "
            f"{priority_focus.dominant.value if priority_focus.dominant else 'none'}"
        )

        return ProfileResult(
            primary_type=primary,
            influence=influence,
            mood_shift=mood_shift,
            activation=activation,
            priority_focus=priority_focus,
            life_domains=life_domains,
        )


def build_profile(selections: Any, tables: Optional[ReferenceTables] = None) -> ProfileResult:
    """Convenience wrapper around ProfileEngine.build_profile."""
    return ProfileEngine(tables).build_profile(selections)
