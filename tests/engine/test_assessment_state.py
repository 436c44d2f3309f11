import pytest

from tower_profile.engine.definitions import BlockSide, InstinctCategory
from tower_profile.engine.engine import build_profile
from tower_profile.engine.models import InvalidActionError
from tower_profile.engine.state import (
    AssessmentPhase,
    AssessmentState,
    GenerateResult,
    MoveToken,
    PlaceToken,
    RemoveToken,
    ResetAssessment,
    SelectBuildingBlock,
    SelectFoundationStone,
    SetPhase,
    UpdateColorSelections,
    apply_action,
)

SP, SO, SX = InstinctCategory.SELF_PRESERVATION, InstinctCategory.SOCIAL, InstinctCategory.ONE_TO_ONE


def _run(state, *actions):
    for action in actions:
        state = apply_action(state, action)
    return state


def test_completing_the_foundation_advances_the_phase():
    choices = [0, 0, 0, 1, 0, 0, 1, 0, 1]
    state = AssessmentState()
    for set_index, choice in enumerate(choices[:8]):
        state = apply_action(state, SelectFoundationStone(set_index=set_index, choice=choice))
    assert state.phase == AssessmentPhase.FOUNDATION

    state = apply_action(state, SelectFoundationStone(set_index=8, choice=choices[8]))
    assert state.phase == AssessmentPhase.BUILDING_BLOCKS
    assert state.foundation_choices == tuple(choices)


def test_apply_action_does_not_mutate_the_input():
    before = AssessmentState()
    after = apply_action(before, SelectFoundationStone(set_index=0, choice=2))
    assert before.foundation_choices == ()
    assert after.foundation_choices == (2,)


def test_reselecting_a_stone_replaces_it():
    state = _run(
        AssessmentState(),
        SelectFoundationStone(set_index=0, choice=2),
        SelectFoundationStone(set_index=1, choice=1),
        SelectFoundationStone(set_index=0, choice=0),
    )
    assert state.foundation_choices == (0, 1)


def test_skipping_a_foundation_set_is_rejected():
    with pytest.raises(InvalidActionError):
        apply_action(AssessmentState(), SelectFoundationStone(set_index=2, choice=0))


@pytest.mark.parametrize("set_index, choice", [(0, 3), (0, -1), (9, 0)])
def test_out_of_range_foundation_actions_are_rejected(set_index, choice):
    with pytest.raises(InvalidActionError):
        apply_action(AssessmentState(), SelectFoundationStone(set_index=set_index, choice=choice))


def test_building_blocks_are_limited_to_five():
    state = AssessmentState()
    for index in range(5):
        state = apply_action(state, SelectBuildingBlock(index=index, side=BlockSide.LEFT))
    assert len(state.building_block_choices) == 5
    with pytest.raises(InvalidActionError):
        apply_action(state, SelectBuildingBlock(index=5, side=BlockSide.RIGHT))


def test_colour_selections_replace_the_previous_set():
    state = _run(
        AssessmentState(),
        UpdateColorSelections(categories=(0, 1)),
        UpdateColorSelections(categories=(2,)),
    )
    assert state.color_selections == (2,)


def test_invalid_colour_category_is_rejected():
    with pytest.raises(InvalidActionError):
        apply_action(AssessmentState(), UpdateColorSelections(categories=(0, 3)))


def test_tokens_place_and_remove():
    state = _run(
        AssessmentState(),
        PlaceToken(category=SP),
        PlaceToken(category=SO),
        PlaceToken(category=SP),
        RemoveToken(category=SP),
    )
    assert state.detail_selections == (SP, SO)


def test_removing_an_absent_token_is_rejected():
    with pytest.raises(InvalidActionError):
        apply_action(AssessmentState(), RemoveToken(category=SX))


def test_token_pool_is_limited_to_ten():
    state = _run(AssessmentState(), *[PlaceToken(category=SX)] * 10)
    with pytest.raises(InvalidActionError):
        apply_action(state, PlaceToken(category=SP))


def test_move_token_between_containers():
    state = _run(
        AssessmentState(),
        PlaceToken(category=SP),
        PlaceToken(category=SO),
        MoveToken(category=SP, destination=SX),
    )
    assert sorted(state.detail_selections) == sorted((SO, SX))


def test_move_token_from_and_to_the_pool():
    state = _run(AssessmentState(), MoveToken(category=None, destination=SO))
    assert state.detail_selections == (SO,)
    state = apply_action(state, MoveToken(category=SO, destination=None))
    assert state.detail_selections == ()


def test_move_token_works_with_a_full_pool():
    state = _run(AssessmentState(), *[PlaceToken(category=SP)] * 10)
    state = apply_action(state, MoveToken(category=SP, destination=SX))
    assert state.detail_selections.count(SP) == 9
    assert state.detail_selections.count(SX) == 1


def test_move_token_from_an_empty_container_is_rejected():
    with pytest.raises(InvalidActionError):
        apply_action(AssessmentState(), MoveToken(category=SX, destination=SP))


def test_move_token_needs_a_source_or_destination():
    with pytest.raises(InvalidActionError):
        apply_action(AssessmentState(), MoveToken())


def test_generate_and_reset():
    state = _run(AssessmentState(), SetPhase(phase=AssessmentPhase.DETAILS), GenerateResult())
    assert state.phase == AssessmentPhase.RESULTS
    assert apply_action(state, ResetAssessment()) == AssessmentState()


def test_state_feeds_the_engine(tables):
    actions = [SelectFoundationStone(set_index=i, choice=c) for i, c in enumerate([0, 0, 0, 1, 0, 0, 1, 0, 1])]
    actions += [SelectBuildingBlock(index=i, side=BlockSide.LEFT) for i in range(5)]
    actions += [UpdateColorSelections(categories=(0, 0, 1, 1, 2, 2))]
    actions += [PlaceToken(category=SP)] * 6 + [PlaceToken(category=SO)] * 2 + [PlaceToken(category=SX)] * 2
    state = _run(AssessmentState(), *actions, GenerateResult())

    result = build_profile(state.to_selection_set(), tables)
    assert result.primary_type.number == 1
    assert result.influence.label == "1w9"
    assert result.priority_focus.dominant == SP
