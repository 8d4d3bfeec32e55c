"""Tests for the roll resolution rules."""

import random

import pytest

from engine.rules import (
    AttributeNotFoundError,
    classify_outcome,
    count_curse_resistance,
    curse_roll_allowed,
    describe_roll,
    encumbrance_penalty,
    resolve_roll,
    restrict_roll_type,
    spend_curse_resistance,
)
from models.rolls import DieSource, Outcome, RollRequest, RollType

FULL = {"1": True, "2": True, "3": True, "4": True}
TWO_LEFT = {"1": False, "2": True, "3": True, "4": False}
NONE_LEFT = {"1": False, "2": False, "3": False, "4": False}


def _request(
    attribute: str = "courage",
    roll_type: RollType = RollType.NORMAL,
    curse_roll: bool = False,
    bonus: int = 0,
) -> RollRequest:
    """Helper to build a roll request."""
    return RollRequest(
        attribute=attribute,
        roll_type=roll_type,
        curse_roll=curse_roll,
        equipment_bonus=bonus,
    )


class TestEncumbrancePenalty:
    """Tests for encumbrance_penalty()."""

    def test_eight_items_free(self):
        assert encumbrance_penalty("courage", 8) == 0

    def test_each_item_past_eight(self):
        assert encumbrance_penalty("courage", 9) == 1
        assert encumbrance_penalty("self_control", 12) == 4

    def test_only_courage_and_self_control(self):
        assert encumbrance_penalty("wisdom", 12) == 0
        assert encumbrance_penalty("sharpness", 12) == 0

    def test_no_items(self):
        assert encumbrance_penalty("courage", 0) == 0


class TestClassifyOutcome:
    """Tests for classify_outcome()."""

    def test_ten_succeeds(self):
        assert classify_outcome(10) == Outcome.SUCCESS

    def test_high_succeeds(self):
        assert classify_outcome(17) == Outcome.SUCCESS

    def test_nine_is_bad_omen(self):
        assert classify_outcome(9) == Outcome.BAD_OMEN

    def test_eight_fails(self):
        assert classify_outcome(8) == Outcome.FAILURE

    def test_negative_fails(self):
        assert classify_outcome(-3) == Outcome.FAILURE


class TestCurseResistance:
    """Tests for counting and spending resistance slots."""

    def test_count(self):
        assert count_curse_resistance(FULL) == 4
        assert count_curse_resistance(TWO_LEFT) == 2
        assert count_curse_resistance(NONE_LEFT) == 0

    def test_spend_lowest_checked_slot(self):
        assert spend_curse_resistance(TWO_LEFT) == {
            "1": False, "2": False, "3": True, "4": False,
        }

    def test_spend_does_not_mutate(self):
        before = dict(FULL)
        spend_curse_resistance(FULL)
        assert FULL == before

    def test_spend_with_nothing_left(self):
        assert spend_curse_resistance(NONE_LEFT) is None

    def test_curse_roll_needs_normal_roll(self):
        assert curse_roll_allowed(RollType.NORMAL, FULL)
        assert not curse_roll_allowed(RollType.ADVANTAGE, FULL)
        assert not curse_roll_allowed(RollType.DISADVANTAGE, FULL)

    def test_curse_roll_needs_resistance(self):
        assert not curse_roll_allowed(RollType.NORMAL, NONE_LEFT)

    def test_restrict_roll_type(self):
        assert restrict_roll_type(RollType.ADVANTAGE, FULL) == RollType.ADVANTAGE
        assert restrict_roll_type(RollType.NORMAL, NONE_LEFT) == RollType.DISADVANTAGE
        assert restrict_roll_type(RollType.ADVANTAGE, NONE_LEFT) == RollType.DISADVANTAGE


class TestResolveRoll:
    """Tests for resolve_roll()."""

    def test_encumbered_courage_scenario(self, loaded_dice):
        """Courage 3, ten items, normal roll of 4 and 2: total 7, failure."""
        result = resolve_roll(3, _request(), item_count=10, curse_resistance=FULL,
                              rng=loaded_dice([4, 2]))
        assert result.encumbrance_penalty == 2
        assert result.attribute_contribution == 1
        assert result.dice_total == 6
        assert result.equipment_bonus == 0
        assert result.total == 7
        assert result.outcome == Outcome.FAILURE
        assert result.updated_curse_resistance is None

    def test_curse_roll_scenario(self, loaded_dice):
        """Base 5 and 3, curse die 8, two slots left: 3 dropped, curse falls."""
        result = resolve_roll(0, _request(curse_roll=True), item_count=0,
                              curse_resistance=TWO_LEFT, rng=loaded_dice([5, 3, 8]))
        assert result.curse_roll
        assert [face.value for face in result.dice] == [3, 5, 8]
        assert [face.discarded for face in result.dice] == [True, False, False]
        assert result.dice[2].source == DieSource.CURSE
        assert result.dice_total == 13
        assert result.curse_fallen
        assert result.updated_curse_resistance == {
            "1": False, "2": False, "3": True, "4": False,
        }

    def test_curse_die_not_above_resistance(self, loaded_dice):
        """A curse die equal to the slots left does not spend one."""
        result = resolve_roll(2, _request(curse_roll=True), item_count=0,
                              curse_resistance=FULL, rng=loaded_dice([6, 6, 4]))
        assert not result.curse_fallen
        assert result.updated_curse_resistance is None
        assert result.dice_total == 12

    def test_curse_die_can_be_discarded(self, loaded_dice):
        result = resolve_roll(1, _request(curse_roll=True), item_count=0,
                              curse_resistance=FULL, rng=loaded_dice([4, 5, 1]))
        discarded = [face for face in result.dice if face.discarded]
        assert len(discarded) == 1
        assert discarded[0].source == DieSource.CURSE
        assert result.dice_total == 9

    def test_tie_discards_base_die_first(self, loaded_dice):
        """On a tied lowest value, the base die is dropped, not the curse die."""
        result = resolve_roll(0, _request(curse_roll=True), item_count=0,
                              curse_resistance=FULL, rng=loaded_dice([2, 6, 2]))
        assert result.dice[0].discarded
        assert result.dice[0].source == DieSource.BASE
        assert not result.dice[1].discarded
        assert result.dice[1].source == DieSource.CURSE

    def test_curse_roll_without_resistance_is_normal(self, loaded_dice):
        result = resolve_roll(2, _request(curse_roll=True), item_count=0,
                              curse_resistance=NONE_LEFT, rng=loaded_dice([3, 3]))
        assert not result.curse_roll
        assert len(result.dice) == 2
        assert not any(face.discarded for face in result.dice)
        assert result.total == 8

    def test_curse_roll_ignored_with_advantage(self, loaded_dice):
        result = resolve_roll(0, _request(roll_type=RollType.ADVANTAGE, curse_roll=True),
                              item_count=0, curse_resistance=FULL,
                              rng=loaded_dice([1, 6, 5]))
        assert not result.curse_roll
        assert all(face.source == DieSource.BASE for face in result.dice)
        assert result.dice_total == 11

    def test_advantage_keeps_highest(self, loaded_dice):
        result = resolve_roll(1, _request(roll_type=RollType.ADVANTAGE), item_count=0,
                              curse_resistance=FULL, rng=loaded_dice([2, 5, 4]))
        assert result.dice_total == 9
        assert result.total == 10
        assert result.outcome == Outcome.SUCCESS

    def test_disadvantage_keeps_lowest(self, loaded_dice):
        result = resolve_roll(3, _request(roll_type=RollType.DISADVANTAGE), item_count=0,
                              curse_resistance=FULL, rng=loaded_dice([2, 5, 4]))
        assert result.dice_total == 6
        assert result.total == 9
        assert result.outcome == Outcome.BAD_OMEN

    def test_equipment_bonus_added(self, loaded_dice):
        result = resolve_roll(2, _request(attribute="wisdom", bonus=2), item_count=12,
                              curse_resistance=FULL, rng=loaded_dice([3, 3]))
        assert result.encumbrance_penalty == 0
        assert result.total == 10

    def test_negative_equipment_bonus(self, loaded_dice):
        result = resolve_roll(2, _request(bonus=-1), item_count=0,
                              curse_resistance=FULL, rng=loaded_dice([3, 3]))
        assert result.total == 7

    def test_missing_attribute_draws_no_dice(self, loaded_dice):
        rng = loaded_dice([])
        with pytest.raises(AttributeNotFoundError):
            resolve_roll(None, _request(attribute="wisdom"), item_count=0,
                         curse_resistance=FULL, rng=rng)

    def test_zero_attribute_still_rolls(self, loaded_dice):
        result = resolve_roll(0, _request(), item_count=0, curse_resistance=FULL,
                              rng=loaded_dice([1, 1]))
        assert result.total == 2

    def test_does_not_mutate_resistance(self, loaded_dice):
        resistance = dict(TWO_LEFT)
        resolve_roll(0, _request(curse_roll=True), item_count=0,
                     curse_resistance=resistance, rng=loaded_dice([5, 3, 8]))
        assert resistance == TWO_LEFT

    def test_dice_total_is_sum_of_kept_dice(self):
        """Over many seeded rolls, the total only counts undiscarded dice."""
        rng = random.Random(2024)
        for roll_type in RollType:
            for curse in (False, True):
                for _ in range(50):
                    result = resolve_roll(2, _request(roll_type=roll_type, curse_roll=curse),
                                          item_count=9, curse_resistance=FULL, rng=rng)
                    kept = [face.value for face in result.dice if not face.discarded]
                    assert result.dice_total == sum(kept)
                    assert result.total == sum(kept) + 2 - 1
                    discarded = sum(face.discarded for face in result.dice)
                    if result.curse_roll:
                        assert discarded == 1
                    elif roll_type == RollType.NORMAL:
                        assert discarded == 0

    def test_resistance_drops_by_at_most_one(self):
        rng = random.Random(99)
        resistance = dict(FULL)
        while count_curse_resistance(resistance) > 0:
            before = count_curse_resistance(resistance)
            result = resolve_roll(0, _request(curse_roll=True), item_count=0,
                                  curse_resistance=resistance, rng=rng)
            curse_die = next(f.value for f in result.dice if f.source == DieSource.CURSE)
            if result.updated_curse_resistance is not None:
                assert curse_die > before
                resistance = result.updated_curse_resistance
                assert count_curse_resistance(resistance) == before - 1
            else:
                assert curse_die <= before


class TestDescribeRoll:
    """Tests for describe_roll()."""

    def test_mentions_every_part(self, loaded_dice):
        result = resolve_roll(3, _request(bonus=1), item_count=10, curse_resistance=FULL,
                              rng=loaded_dice([4, 2]))
        text = describe_roll("Aiko", result, locale="en")
        assert text.startswith("Aiko: Roll of Courage (Normal): 4 2")
        assert "Encumbrance Penalty -2" in text
        assert "Equipment +1" in text
        assert "Total 8: Failure" in text

    def test_curse_fallen_and_discards(self, loaded_dice):
        result = resolve_roll(0, _request(curse_roll=True), item_count=0,
                              curse_resistance=TWO_LEFT, rng=loaded_dice([5, 3, 8]))
        text = describe_roll("Aiko", result, locale="en")
        assert "[3] 5 8" in text
        assert "Curse Roll" in text
        assert text.endswith("The curse has fallen!")

    def test_spanish(self, loaded_dice):
        result = resolve_roll(5, _request(attribute="wisdom"), item_count=0,
                              curse_resistance=FULL, rng=loaded_dice([6, 6]))
        text = describe_roll("Aiko", result, locale="es")
        assert "Sabiduría" in text
        assert "Éxito" in text
