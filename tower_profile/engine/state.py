# tower_profile/engine/state.py
# Immutable assessment progress plus a pure transition function.
# The UI dispatches actions; every call to apply_action returns a new state.

from enum import IntEnum
from typing import Optional, Tuple, Union

from .definitions import FOUNDATION_CHOICE_COUNT, FOUNDATION_SET_COUNT, BlockSide, InstinctCategory
from .models import FrozenModel, InvalidActionError, SelectionSet

BUILDING_BLOCK_COUNT = 5
TOKEN_POOL_SIZE = 10


class AssessmentPhase(IntEnum):
    FOUNDATION = 1
    BUILDING_BLOCKS = 2
    COLOR_PALETTE = 3
    DETAILS = 4
    RESULTS = 5


class AssessmentState(FrozenModel):
    phase: AssessmentPhase = AssessmentPhase.FOUNDATION
    foundation_choices: Tuple[int, ...] = ()
    building_block_choices: Tuple[BlockSide, ...] = ()
    color_selections: Tuple[int, ...] = ()
    detail_selections: Tuple[InstinctCategory, ...] = ()

    def to_selection_set(self) -> SelectionSet:
        return SelectionSet(
            foundation_choices=self.foundation_choices,
            building_block_choices=self.building_block_choices,
            color_selections=self.color_selections,
            detail_selections=self.detail_selections,
        )


# --- Actions ---

class SetPhase(FrozenModel):
    phase: AssessmentPhase


class SelectFoundationStone(FrozenModel):
    set_index: int
    choice: int


class SelectBuildingBlock(FrozenModel):
    index: int
    side: BlockSide


class UpdateColorSelections(FrozenModel):
    categories: Tuple[int, ...]


class PlaceToken(FrozenModel):
    category: InstinctCategory


class RemoveToken(FrozenModel):
    category: InstinctCategory


class MoveToken(FrozenModel):
    """Moves one token between containers; None on either side is the pool."""
    category: Optional[InstinctCategory] = None
    destination: Optional[InstinctCategory] = None


class GenerateResult(FrozenModel):
    pass


class ResetAssessment(FrozenModel):
    pass


AssessmentAction = Union[
    SetPhase,
    SelectFoundationStone,
    SelectBuildingBlock,
    UpdateColorSelections,
    PlaceToken,
    RemoveToken,
    MoveToken,
    GenerateResult,
    ResetAssessment,
]


def _set_at(values: tuple, index: int, value, limit: int, label: str) -> tuple:
    """Replaces an existing entry or appends the next one; no gaps allowed."""
    if not 0 <= index < limit:
        raise InvalidActionError(f"{label} index {index} is outside 0-{limit - 1}")
    if index > len(values):
        raise InvalidActionError(f"{label} index {index} skips unanswered position {len(values)}")
    return values[:index] + (value,) + values[index + 1:]


def _place_token(tokens: tuple, category: InstinctCategory) -> tuple:
    if len(tokens) >= TOKEN_POOL_SIZE:
        raise InvalidActionError(f"All {TOKEN_POOL_SIZE} tokens are already placed")
    return tokens + (category,)


def _remove_token(tokens: tuple, category: InstinctCategory) -> tuple:
    if category not in tokens:
        raise InvalidActionError(f"No '{category.value}' token to remove")
    # Drop the most recently placed token of that category.
    index = len(tokens) - 1 - tokens[::-1].index(category)
    return tokens[:index] + tokens[index + 1:]


def apply_action(state: AssessmentState, action: AssessmentAction) -> AssessmentState:
    """Returns the state that results from applying action to state."""
    if isinstance(action, ResetAssessment):
        return AssessmentState()

    if isinstance(action, SetPhase):
        return state.model_copy(update={"phase": action.phase})

    if isinstance(action, SelectFoundationStone):
        if not 0 <= action.choice < FOUNDATION_CHOICE_COUNT:
            raise InvalidActionError(f"Foundation choice {action.choice} is outside 0-{FOUNDATION_CHOICE_COUNT - 1}")
        choices = _set_at(state.foundation_choices, action.set_index, action.choice,
                          FOUNDATION_SET_COUNT, "Foundation set")
        phase = state.phase
        if len(choices) == FOUNDATION_SET_COUNT and phase == AssessmentPhase.FOUNDATION:
            phase = AssessmentPhase.BUILDING_BLOCKS
        return state.model_copy(update={"foundation_choices": choices, "phase": phase})

    if isinstance(action, SelectBuildingBlock):
        blocks = _set_at(state.building_block_choices, action.index, action.side,
                         BUILDING_BLOCK_COUNT, "Building block")
        return state.model_copy(update={"building_block_choices": blocks})

    if isinstance(action, UpdateColorSelections):
        invalid = [c for c in action.categories if c not in (0, 1, 2)]
        if invalid:
            raise InvalidActionError(f"Colour categories must be 0, 1 or 2, got {invalid}")
        return state.model_copy(update={"color_selections": tuple(action.categories)})

    if isinstance(action, PlaceToken):
        return state.model_copy(update={"detail_selections": _place_token(state.detail_selections, action.category)})

    if isinstance(action, RemoveToken):
        return state.model_copy(update={"detail_selections": _remove_token(state.detail_selections, action.category)})

    if isinstance(action, MoveToken):
        if action.category is None and action.destination is None:
            raise InvalidActionError("A token move needs a source or a destination category")
        tokens = state.detail_selections
        if action.category is not None:
            tokens = _remove_token(tokens, action.category)
        if action.destination is not None:
            tokens = _place_token(tokens, action.destination)
        return state.model_copy(update={"detail_selections": tokens})

    if isinstance(action, GenerateResult):
        return state.model_copy(update={"phase": AssessmentPhase.RESULTS})

    raise InvalidActionError(f"Unsupported action: {type(action).__name__}")
