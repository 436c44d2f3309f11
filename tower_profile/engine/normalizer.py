# tower_profile/engine/normalizer.py
# Coerces raw per-phase selections into a canonical SelectionSet.
# Nothing in here raises on malformed input; unreadable entries degrade to
# the documented defaults and are logged at debug level.

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple

from .definitions import (
    FOUNDATION_CHOICE_COUNT,
    FOUNDATION_SET_COUNT,
    BlockSide,
    InstinctCategory,
)
from .models import SelectionSet

logger = logging.getLogger(__name__)

# Accepted spellings for each field, canonical name first.
FIELD_ALIASES = {
    "foundation_choices": ("foundation_choices", "foundationChoices", "foundationSelections"),
    "building_block_choices": ("building_block_choices", "buildingBlockChoices", "buildingBlockSelections"),
    "color_selections": ("color_selections", "colorSelections", "colorPaletteSelections"),
    "detail_selections": ("detail_selections", "detailSelections"),
}


def _as_sequence(value: Any) -> Tuple[Any, ...]:
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return ()
    try:
        return tuple(value)
    except TypeError:
        return ()


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass; a stray True must not read as choice 1.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def normalize_foundation(raw: Any) -> Tuple[int, ...]:
    """
    Absent or empty input stays empty. Anything else is padded or cut to
    nine positions; unreadable or out-of-range positions become choice 0.
    """
    entries = _as_sequence(raw)
    if not entries:
        return ()
    choices = []
    for position in range(FOUNDATION_SET_COUNT):
        value = _as_int(entries[position]) if position < len(entries) else 0
        if value is None or not 0 <= value < FOUNDATION_CHOICE_COUNT:
            logger.debug(f"Foundation position {position}: {entries[position]!r} treated as choice 0")
            value = 0
        choices.append(value)
    return tuple(choices)


def _block_side(entry: Any) -> Optional[BlockSide]:
    if isinstance(entry, BlockSide):
        return entry
    if isinstance(entry, Mapping):
        entry = entry.get("id", entry.get("side"))
    number = _as_int(entry)
    if number in (0, 1):
        return BlockSide.LEFT if number == 0 else BlockSide.RIGHT
    if isinstance(entry, str):
        text = entry.lower()
        if "left" in text:
            return BlockSide.LEFT
        if "right" in text:
            return BlockSide.RIGHT
    return None


def normalize_building_blocks(raw: Any) -> Tuple[BlockSide, ...]:
    sides = []
    for entry in _as_sequence(raw):
        side = _block_side(entry)
        if side is None:
            logger.debug(f"Dropping unreadable building block choice {entry!r}")
            continue
        sides.append(side)
    return tuple(sides)


def normalize_colors(raw: Any) -> Tuple[int, ...]:
    categories = []
    for entry in _as_sequence(raw):
        value = _as_int(entry.get("category") if isinstance(entry, Mapping) else entry)
        if value is None or value not in (0, 1, 2):
            logger.debug(f"Dropping colour selection without a valid category: {entry!r}")
            continue
        categories.append(value)
    return tuple(categories)


def _instinct(entry: Any) -> Optional[InstinctCategory]:
    if isinstance(entry, InstinctCategory):
        return entry
    candidates: Iterable[Any] = (entry,)
    if isinstance(entry, Mapping):
        token_id = entry.get("id")
        prefix = token_id.split("-", 1)[0] if isinstance(token_id, str) else None
        candidates = (entry.get("category"), prefix)
    for candidate in candidates:
        if isinstance(candidate, str):
            try:
                return InstinctCategory(candidate.strip().lower())
            except ValueError:
                continue
    return None


def normalize_details(raw: Any) -> Tuple[InstinctCategory, ...]:
    tokens = []
    for entry in _as_sequence(raw):
        category = _instinct(entry)
        if category is None:
            logger.debug(f"Dropping detail token without a valid category: {entry!r}")
            continue
        tokens.append(category)
    return tuple(tokens)


def _field(raw: Mapping, name: str) -> Any:
    for key in FIELD_ALIASES[name]:
        if key in raw:
            return raw[key]
    return None


def normalize_selections(raw: Any) -> SelectionSet:
    """Returns a fully populated SelectionSet for any input, including None."""
    if isinstance(raw, SelectionSet):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning(f"Unsupported selection payload of type {type(raw).__name__}; using defaults")
        raw = {}

    return SelectionSet(
        foundation_choices=normalize_foundation(_field(raw, "foundation_choices")),
        building_block_choices=normalize_building_blocks(_field(raw, "building_block_choices")),
        color_selections=normalize_colors(_field(raw, "color_selections")),
        detail_selections=normalize_details(_field(raw, "detail_selections")),
    )
