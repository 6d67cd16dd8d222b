import pytest

from courtforge.characters import (
    MAX_DEEDS,
    NAME_POOL,
    TICKS_PER_YEAR,
    TITLES,
    Character,
    build_character,
    convert_to_rebel_leader,
    demote_to_rival,
    generate_secret_goal,
    generate_traits,
    promote_to_ruler,
)
from courtforge.court import Court
from courtforge.errors import CharacterNotFound, InvalidRoleTransition
from courtforge.rng import CourtRandom
from courtforge.traits import EmotionalState, Traits
from courtforge.types import Plot, Role, SecretGoal


class FixedRandom(CourtRandom):
    """Every float roll returns `value`; integer rolls return the low bound."""

    def __init__(self, value: float = 0.5) -> None:
        super().__init__(seed=0)
        self.value = value

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        return a

    def choice(self, seq):
        return list(seq)[0]


def _character(role=Role.ADVISOR, **traits) -> Character:
    return Character(
        territory_id=1,
        name="Test",
        title="Lord",
        role=role,
        birth_tick=0,
        age=40,
        traits=Traits(**traits),
        emotional_state=EmotionalState(),
    )


def test_create_ruler_round_trip():
    court = Court(rng=CourtRandom(seed=42))
    cid = court.create_character(1, "ruler", 0, name="Ada")
    ada = court.store.require(cid)

    assert ada.name == "Ada"
    assert ada.role is Role.RULER
    assert ada.title in TITLES[Role.RULER]
    assert ada.is_alive is True
    assert ada.coronation_tick == 0
    assert ada.secret_goal is SecretGoal.NONE
    assert 30 <= ada.age <= 59
    assert ada.birth_tick == -ada.age * TICKS_PER_YEAR
    for value in ada.traits.to_dict().values():
        assert 0 <= value <= 100


def test_generated_name_comes_from_pool_and_ids_increase():
    court = Court(rng=CourtRandom(seed=1))
    first = court.create_character(1, Role.GENERAL, 10)
    second = court.create_character(1, Role.ADVISOR, 10)
    assert second > first
    assert court.store.require(first).name in NAME_POOL
    assert court.store.require(first).coronation_tick is None


def test_age_bands_per_role():
    rng = CourtRandom(seed=3)
    bands = {
        Role.RULER: (30, 59),
        Role.HEIR: (15, 29),
        Role.GENERAL: (35, 54),
        Role.ADVISOR: (40, 64),
        Role.RIVAL: (25, 49),
        Role.REBEL_LEADER: (25, 44),
    }
    for role, (lo, hi) in bands.items():
        for _ in range(30):
            character = build_character(1, role, 100, rng)
            assert lo <= character.age <= hi
            assert character.birth_tick == 100 - character.age * TICKS_PER_YEAR


def test_role_boosts_apply_and_clamp():
    low = FixedRandom()
    ruler = generate_traits(Role.RULER, low)
    assert ruler.ambition == 40  # 20 + 20
    assert ruler.charisma == 35
    assert ruler.cruelty == 10
    assert ruler.paranoia == 10

    rebel = generate_traits(Role.REBEL_LEADER, low)
    assert rebel.loyalty == 0  # 20 - 30 floors at 0
    assert rebel.courage == 40
    assert rebel.ambition == 45


def test_emotional_baseline_ranges():
    rng = CourtRandom(seed=11)
    for _ in range(25):
        state = build_character(1, Role.HEIR, 0, rng).emotional_state
        assert 40 <= state.hope <= 70
        assert 10 <= state.fear <= 40
        assert 0 <= state.shame <= 20
        assert 0 <= state.despair <= 20
        assert 40 <= state.contentment <= 70
        assert 0 <= state.rage <= 30


def test_secret_goal_cascade():
    schemer = Traits(ambition=80, loyalty=30)
    assert generate_secret_goal(Role.RIVAL, schemer, FixedRandom(0.0)) is SecretGoal.SEIZE_THRONE
    assert generate_secret_goal(Role.RIVAL, schemer, FixedRandom(0.9)) is SecretGoal.INDEPENDENCE
    assert generate_secret_goal(Role.ADVISOR, Traits(greed=80), FixedRandom()) is SecretGoal.ACCUMULATE_WEALTH
    assert generate_secret_goal(Role.GENERAL, Traits(wrath=70), FixedRandom(0.1)) is SecretGoal.REVENGE
    assert generate_secret_goal(Role.HEIR, Traits(compassion=80), FixedRandom(0.9)) is SecretGoal.PROTECT_FAMILY
    assert generate_secret_goal(Role.HEIR, Traits(pride=80, courage=70), FixedRandom(0.9)) is SecretGoal.GLORY
    assert generate_secret_goal(Role.HEIR, Traits(), FixedRandom(0.1)) is SecretGoal.NONE
    # falls through to the uniform pick; FixedRandom picks the first fallback
    assert generate_secret_goal(Role.HEIR, Traits(), FixedRandom(0.9)) is SecretGoal.ACCUMULATE_WEALTH
    assert generate_secret_goal(Role.RULER, schemer, FixedRandom(0.0)) is SecretGoal.NONE


def test_deeds_are_bounded():
    character = _character()
    for tick in range(MAX_DEEDS + 5):
        character.add_deed(tick, f"deed {tick}", "neutral")
    assert len(character.deeds) == MAX_DEEDS
    assert character.deeds[0].tick == 5
    assert character.deeds[-1].tick == MAX_DEEDS + 4


def test_kill_is_idempotent():
    character = _character()
    character.kill(10, "fever")
    character.kill(12, "assassinated")
    assert character.is_alive is False
    assert character.death_tick == 10
    assert character.death_cause == "fever"


def test_promote_to_ruler_clears_plots():
    heir = _character(role=Role.HEIR)
    heir.active_plots["coup"] = Plot(plot_type="coup", start_tick=0)
    promote_to_ruler(heir, 50, title="Queen", dynasty_generation=3)
    assert heir.role is Role.RULER
    assert heir.title == "Queen"
    assert heir.coronation_tick == 50
    assert heir.dynasty_generation == 3
    assert heir.active_plots == {}


def test_invalid_role_transitions_raise():
    ruler = _character(role=Role.RULER)
    with pytest.raises(InvalidRoleTransition):
        promote_to_ruler(ruler, 1, title="King")
    with pytest.raises(InvalidRoleTransition):
        convert_to_rebel_leader(ruler)
    with pytest.raises(InvalidRoleTransition):
        demote_to_rival(_character(role=Role.GENERAL))

    dead = _character(role=Role.HEIR)
    dead.kill(3, "fever")
    with pytest.raises(InvalidRoleTransition):
        promote_to_ruler(dead, 4, title="King")

    demote_to_rival(ruler)
    assert ruler.role is Role.RIVAL and ruler.title == "Exile"


def test_store_queries_and_deeds():
    court = Court(rng=CourtRandom(seed=5))
    ruler_id = court.create_character(1, Role.RULER, 0)
    heir_id = court.create_character(1, Role.HEIR, 0)
    court.create_character(2, Role.RULER, 0)

    assert court.store.get_ruler(1).id == ruler_id
    assert court.store.get_heir(1).id == heir_id
    assert court.store.get_heir(2) is None
    assert [c.territory_id for c in court.store.living(1)] == [1, 1]

    assert court.add_deed(heir_id, 3, "Won a tourney", "heroic").success is True
    missing = court.add_deed(999, 3, "Nothing", "neutral")
    assert missing.success is False and missing.error == "Character not found"
    with pytest.raises(CharacterNotFound):
        court.store.require(999)


def test_update_emotional_state_clamps():
    court = Court(rng=CourtRandom(seed=5))
    cid = court.create_character(1, Role.GENERAL, 0)
    assert court.store.update_emotional_state(cid, rage=500, hope=-500).success is True
    state = court.store.require(cid).emotional_state
    assert state.rage == 100 and state.hope == 0
    assert court.store.update_emotional_state(cid, joy=1).success is False


def test_put_plot_keeps_one_plot_per_type():
    character = _character()
    character.put_plot(Plot(plot_type="coup", start_tick=1))
    character.put_plot(Plot(plot_type="sabotage", start_tick=2))
    advanced = character.put_plot(Plot(plot_type="coup", start_tick=1, progress_percent=30))

    assert sorted(character.active_plots) == ["coup", "sabotage"]
    assert character.active_plots[advanced.key] is advanced
    assert character.active_plots["coup"].progress_percent == 30
