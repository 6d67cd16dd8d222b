import pytest

from courtforge.characters import Character
from courtforge.court import Court
from courtforge.errors import NotARulerError
from courtforge.logging_utils import ListNarrativeSink
from courtforge.rng import CourtRandom
from courtforge.traits import EmotionalState, Traits
from courtforge.types import Role, Severity, SuccessionType


class FixedRandom(CourtRandom):
    def __init__(self, value: float) -> None:
        super().__init__(seed=0)
        self.value = value

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        return a

    def choice(self, seq):
        return list(seq)[0]


def _court(rng=None) -> Court:
    return Court(rng=rng or FixedRandom(0.5), narrative=ListNarrativeSink())


def _add(court: Court, role: Role, name: str = "Someone", title: str = "Lord", territory_id: int = 1, **traits) -> Character:
    character = Character(
        territory_id=territory_id,
        name=name,
        title=title,
        role=role,
        birth_tick=-480,
        age=40,
        traits=Traits(**traits),
        emotional_state=EmotionalState(),
        dynasty_name="House Aldren" if role is Role.RULER else None,
        dynasty_generation=1 if role is Role.RULER else None,
        coronation_tick=0 if role is Role.RULER else None,
    )
    court.store.add(character)
    return character


def test_peaceful_succession_to_loyal_heir():
    court = _court()
    ruler = _add(court, Role.RULER, name="Odin", title="King")
    heir = _add(court, Role.HEIR, name="Freya", title="Princess", loyalty=80)
    _add(court, Role.GENERAL, ambition=90)

    result = court.handle_ruler_death(ruler.id, 120, "illness")

    assert result.success is True
    assert result.succession_type is SuccessionType.PEACEFUL
    assert result.new_ruler_id == heir.id
    assert result.civil_war_casualties is None
    assert heir.role is Role.RULER
    assert heir.title == "King"
    assert heir.coronation_tick == 120
    assert heir.dynasty_generation == 2
    assert heir.dynasty_name == "House Aldren"

    assert ruler.is_alive is False
    assert ruler.death_cause == "illness"
    assert ruler.reign_summary.years_reigned == 10
    assert ruler.reign_summary.obituary == "King Odin ruled for 10 years before illness."

    (event,) = court.store.succession_events
    assert event.succession_type is SuccessionType.PEACEFUL
    assert event.narrative == (
        "Following the illness of King Odin, King Freya ascended to power in a peaceful transition."
    )
    assert court.feed[-1].event_type == "succession"
    assert court.feed[-1].severity is Severity.CRITICAL
    assert court.narrative.memories[-1]["type"] == "crisis"


def test_election_when_no_heir_and_no_ambitious_candidates():
    court = _court()
    ruler = _add(court, Role.RULER, name="Odin", title="King")
    _add(court, Role.ADVISOR, ambition=40)

    result = court.handle_ruler_death(ruler.id, 120, "fever")

    assert result.succession_type is SuccessionType.ELECTION
    chief = court.store.require(result.new_ruler_id)
    assert chief.role is Role.RULER
    assert chief.age == 35
    assert chief.title == "Chief"
    assert chief.coronation_tick == 120
    assert chief.birth_tick == 120 - 35 * 12
    assert chief.id != ruler.id
    assert "the people chose" in court.store.succession_events[0].narrative


def test_single_ambitious_candidate_seizes_power():
    court = _court()
    ruler = _add(court, Role.RULER)
    heir = _add(court, Role.HEIR, loyalty=30)
    general = _add(court, Role.GENERAL, name="Magnus", ambition=75)

    result = court.handle_ruler_death(ruler.id, 36, "assassinated")

    assert result.succession_type is SuccessionType.COUP
    assert result.new_ruler_id == general.id
    assert general.title == "Usurper"
    assert general.role is Role.RULER
    assert heir.role is Role.HEIR
    assert "declaring themselves Usurper" in court.store.succession_events[0].narrative


def test_disloyal_heir_inherits_when_nobody_contests():
    court = _court()
    ruler = _add(court, Role.RULER, title="Queen")
    heir = _add(court, Role.HEIR, loyalty=20, ambition=50)

    result = court.handle_ruler_death(ruler.id, 12, "old age")

    assert result.succession_type is SuccessionType.PEACEFUL
    assert result.new_ruler_id == heir.id
    assert heir.title == "Queen"
    assert heir.dynasty_generation == 2


def test_civil_war_first_strongest_candidate_wins():
    court = _court(FixedRandom(0.0))
    ruler = _add(court, Role.RULER)
    weak = _add(court, Role.GENERAL, ambition=70, courage=50, cunning=50)
    first_best = _add(court, Role.RIVAL, ambition=70, courage=60, cunning=60)
    tied = _add(court, Role.ADVISOR, ambition=70, courage=60, cunning=60)

    result = court.handle_ruler_death(ruler.id, 48, "fever")

    assert result.succession_type is SuccessionType.CIVIL_WAR
    assert result.new_ruler_id == first_best.id
    assert result.civil_war_casualties == 500
    assert first_best.title == "Lord Protector"
    # rng always rolls 0.0, so every loser falls
    assert weak.is_alive is False and weak.death_cause == "killed in succession war"
    assert tied.is_alive is False
    assert first_best.is_alive is True
    assert "After 500 casualties" in court.store.succession_events[0].narrative
    assert court.store.succession_events[0].civil_war_casualties == 500


def test_civil_war_losers_can_survive():
    court = _court(FixedRandom(0.5))
    ruler = _add(court, Role.RULER)
    a = _add(court, Role.GENERAL, ambition=70)
    b = _add(court, Role.RIVAL, ambition=70)

    result = court.handle_ruler_death(ruler.id, 48, "fever")

    assert result.new_ruler_id == a.id
    assert b.is_alive is True


def test_civil_war_casualties_stay_in_range():
    for seed in range(20):
        court = _court(CourtRandom(seed=seed))
        ruler = _add(court, Role.RULER)
        _add(court, Role.GENERAL, ambition=70)
        _add(court, Role.RIVAL, ambition=70)
        result = court.handle_ruler_death(ruler.id, 48, "fever")
        assert 500 <= result.civil_war_casualties < 1500


def test_other_territories_are_not_candidates():
    court = _court()
    ruler = _add(court, Role.RULER)
    _add(court, Role.RIVAL, ambition=90, territory_id=2)

    result = court.handle_ruler_death(ruler.id, 24, "fever")
    assert result.succession_type is SuccessionType.ELECTION


def test_non_ruler_raises():
    court = _court()
    general = _add(court, Role.GENERAL)
    with pytest.raises(NotARulerError):
        court.handle_ruler_death(general.id, 1, "fever")


def test_missing_character_is_a_soft_failure():
    court = _court()
    result = court.handle_ruler_death(404, 1, "fever")
    assert result.success is False
    assert result.error == "Character not found"
    assert court.store.succession_events == []


class ScriptedRandom(FixedRandom):
    def __init__(self, rolls) -> None:
        super().__init__(0.5)
        self.rolls = list(rolls)

    def random(self) -> float:
        return self.rolls.pop(0)


def test_each_civil_war_loser_rolls_independently():
    court = _court(ScriptedRandom([0.1, 0.9, 0.2]))
    ruler = _add(court, Role.RULER)
    losers = [
        _add(court, Role.GENERAL, name="Magnus", ambition=70),
        _add(court, Role.RIVAL, name="Ilse", ambition=70),
    ]
    winner = _add(court, Role.ADVISOR, name="Corvin", ambition=70, courage=90, cunning=90)
    losers.append(_add(court, Role.RIVAL, name="Bram", ambition=70))

    result = court.handle_ruler_death(ruler.id, 48, "fever")

    assert result.new_ruler_id == winner.id
    assert [c.is_alive for c in losers] == [False, True, False]
    assert court.store.living_rulers(1) == [winner]

    deaths = [e for e in court.feed if e.event_type == "death"]
    assert [e.character_id for e in deaths] == [losers[0].id, losers[2].id]
    assert all(e.severity is Severity.CRITICAL for e in deaths)
    assert deaths[0].description == "Lord Magnus was killed in the succession war."
    assert court.feed[-1].event_type == "succession"
