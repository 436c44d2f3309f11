import functools
import logging
import yaml
from pathlib import Path
from pydantic import ValidationError
from typing import Dict, Any, Optional

from tower_profile.core.config import engine_settings
from tower_profile.engine.definitions import (
    FOUNDATION_CHOICE_COUNT,
    FOUNDATION_SET_COUNT,
    INSTINCT_PRECEDENCE,
    LIFE_DOMAIN_IDS,
    TYPE_IDS,
    Timeframe,
    Trend,
)
from tower_profile.engine.models import ReferenceDataError, ReferenceTables

logger = logging.getLogger(__name__)

DEFAULT_TABLES_PATH = Path(__file__).parent / "assets" / "reference_tables.yml"


def load_reference_tables_data(data: Dict[str, Any]) -> ReferenceTables:
    """
    Validates the raw dictionary against the ReferenceTables model and
    performs the cross-table consistency checks pydantic cannot express.
    """
    try:
        tables = ReferenceTables.model_validate(data)
    except ValidationError as e:
        raise ReferenceDataError(f"Reference tables failed schema validation: {e}") from e

    _validate_type_keyed_tables(tables)
    _validate_foundation_weights(tables)
    _validate_activation_tables(tables)
    _validate_domain_tables(tables)
    return tables


def _validate_type_keyed_tables(tables: ReferenceTables) -> None:
    for table_name in ("type_names", "wing_pairs", "arrows", "domain_impacts"):
        table = getattr(tables, table_name)
        missing = [t for t in TYPE_IDS if t not in table]
        if missing:
            raise ReferenceDataError(f"Table '{table_name}' is missing primary types: {missing}")
        unknown = sorted(set(table) - set(TYPE_IDS))
        if unknown:
            raise ReferenceDataError(f"Table '{table_name}' has unknown type ids: {unknown}")

    for type_id, pair in tables.wing_pairs.items():
        left, right = pair
        if left == right or type_id in pair or not set(pair) <= set(TYPE_IDS):
            raise ReferenceDataError(f"Invalid wing pair {list(pair)} for type {type_id}")

    for type_id, arrow in tables.arrows.items():
        targets = (arrow.integration, arrow.disintegration)
        if type_id in targets or not set(targets) <= set(TYPE_IDS):
            raise ReferenceDataError(f"Invalid arrow targets {list(targets)} for type {type_id}")

    unknown_sensitivity = sorted(set(tables.domain_sensitivity) - set(TYPE_IDS))
    if unknown_sensitivity:
        raise ReferenceDataError(f"Table 'domain_sensitivity' has unknown type ids: {unknown_sensitivity}")


def _validate_foundation_weights(tables: ReferenceTables) -> None:
    weights = tables.foundation_weights
    if len(weights) != FOUNDATION_SET_COUNT:
        raise ReferenceDataError(
            f"Expected {FOUNDATION_SET_COUNT} foundation sets, found {len(weights)}"
        )
    for set_index, choices in enumerate(weights):
        if len(choices) != FOUNDATION_CHOICE_COUNT:
            raise ReferenceDataError(
                f"Foundation set {set_index} must have {FOUNDATION_CHOICE_COUNT} choices, found {len(choices)}"
            )
        for choice_index, type_weights in enumerate(choices):
            if not type_weights:
                raise ReferenceDataError(f"Foundation set {set_index} choice {choice_index} assigns no weights")
            for type_id, weight in type_weights.items():
                if type_id not in TYPE_IDS:
                    raise ReferenceDataError(
                        f"Foundation set {set_index} choice {choice_index} references unknown type {type_id}"
                    )
                if weight <= 0:
                    raise ReferenceDataError(
                        f"Foundation set {set_index} choice {choice_index} has non-positive weight {weight} for type {type_id}"
                    )


def _validate_activation_tables(tables: ReferenceTables) -> None:
    if sorted(tables.activation_weights) != [0, 1, 2]:
        raise ReferenceDataError("activation_weights must define categories 0, 1 and 2")
    if any(w < 0 for w in tables.activation_weights.values()) or max(tables.activation_weights.values()) <= 0:
        raise ReferenceDataError("activation_weights must be non-negative with a positive maximum")
    if not tables.activation_levels or min(level.min_pct for level in tables.activation_levels) != 0:
        raise ReferenceDataError("activation_levels must include a level starting at 0")


def _validate_domain_tables(tables: ReferenceTables) -> None:
    if set(tables.life_domains) != set(LIFE_DOMAIN_IDS):
        raise ReferenceDataError(f"life_domains must name exactly {list(LIFE_DOMAIN_IDS)}")

    for category in INSTINCT_PRECEDENCE:
        if category not in tables.priority_domains:
            raise ReferenceDataError(f"priority_domains is missing category '{category.value}'")
        for domain_id in tables.priority_domains[category]:
            if domain_id not in tables.life_domains:
                raise ReferenceDataError(f"priority_domains['{category.value}'] references unknown domain '{domain_id}'")

    for type_id, bonuses in tables.domain_sensitivity.items():
        for domain_id in bonuses:
            if domain_id not in tables.life_domains:
                raise ReferenceDataError(f"domain_sensitivity[{type_id}] references unknown domain '{domain_id}'")

    for type_id, impacts in tables.domain_impacts.items():
        missing = [d for d in LIFE_DOMAIN_IDS if d not in impacts]
        if missing:
            raise ReferenceDataError(f"domain_impacts[{type_id}] is missing domains: {missing}")

    for trend in Trend:
        labels = tables.trajectory_labels.get(trend, {})
        missing = [tf.value for tf in Timeframe if tf not in labels]
        if missing:
            raise ReferenceDataError(f"trajectory_labels['{trend.value}'] is missing timeframes: {missing}")


def load_reference_tables_from_file(file_path) -> ReferenceTables:
    """
    Loads the reference tables from a YAML file, validates them,
    and returns a ReferenceTables object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ReferenceDataError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise ReferenceDataError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise ReferenceDataError(f"YAML file is empty or invalid: {file_path}")

    tables = load_reference_tables_data(data)
    logger.info(f"Loaded reference tables version {tables.version} from {file_path}")
    return tables


@functools.lru_cache(maxsize=None)
def get_reference_tables(file_path: Optional[str] = None) -> ReferenceTables:
    """Process-wide reference tables; the configured path is read once."""
    path = file_path or engine_settings.reference_tables_path or DEFAULT_TABLES_PATH
    return load_reference_tables_from_file(path)
