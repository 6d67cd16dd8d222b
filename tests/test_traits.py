import pytest

from courtforge.traits import (
    TRAIT_NAMES,
    EmotionalState,
    Traits,
    describe_emotional_state,
    describe_trait,
)


def test_traits_adjust_clamps_to_bounds():
    traits = Traits(ambition=95, loyalty=10)
    traits.adjust(ambition=20, loyalty=-30)
    assert traits.ambition == 100
    assert traits.loyalty == 0


def test_traits_adjust_respects_custom_floor():
    traits = Traits(courage=11)
    traits.adjust(floor=10, courage=-2)
    assert traits.courage == 10


def test_traits_adjust_rejects_unknown_names():
    with pytest.raises(ValueError):
        Traits().adjust(charm=5)


def test_traits_round_trip_keeps_ruler_extras():
    traits = Traits(ambition=70, justice=60, strength=40)
    data = traits.to_dict()
    assert set(TRAIT_NAMES) <= set(data)
    assert data["justice"] == 60 and "vigilance" not in data
    assert Traits.from_dict(data) == traits


def test_traits_from_dict_clamps_out_of_range_values():
    traits = Traits.from_dict({"ambition": 140, "greed": -3})
    assert traits.ambition == 100
    assert traits.greed == 0


def test_emotional_state_mutation_is_additive_and_clamped():
    state = EmotionalState(hope=98, rage=3)
    state.adjust(hope=10, rage=-10, fear=5)
    assert state.hope == 100
    assert state.rage == 0
    assert state.fear == 25


def test_emotional_state_rejects_unknown_emotion():
    with pytest.raises(ValueError):
        EmotionalState().adjust(joy=3)


def test_describe_trait_bands():
    assert describe_trait("cunning", 10) == "simple and direct"
    assert describe_trait("cunning", 50) == "reasonably shrewd"
    assert describe_trait("cunning", 65) == "masterfully cunning"
    assert describe_trait("luck", 50) == "unknown"


def test_describe_emotional_state():
    assert describe_emotional_state(EmotionalState(hope=80, rage=70)) == "hopeful, angry"
    assert describe_emotional_state(EmotionalState(contentment=60)) == "stable"
    assert describe_emotional_state(EmotionalState(contentment=40)) == "troubled"
