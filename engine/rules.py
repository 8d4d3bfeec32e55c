"""Yokai Hunters Society roll rules: dice pools, curse rolls, encumbrance, outcomes."""

from __future__ import annotations

import logging
import random

from config import (
    BAD_OMEN_TOTAL,
    CURSE_DIE_SIDES,
    CURSE_RESISTANCE_SLOTS,
    ENCUMBERED_ATTRIBUTES,
    ENCUMBRANCE_FREE_ITEMS,
    SUCCESS_ABOVE,
)
from engine.dice import roll, roll_die
from engine.i18n import attribute_label, localize
from models.rolls import (
    DieFace,
    DieSource,
    Outcome,
    RollRequest,
    RollResult,
    RollType,
)

logger = logging.getLogger(__name__)

BASE_DICE = {
    RollType.NORMAL: "2d6",
    RollType.ADVANTAGE: "3d6kh2",
    RollType.DISADVANTAGE: "3d6kl2",
}

OUTCOME_LABELS = {
    Outcome.SUCCESS: "Success",
    Outcome.BAD_OMEN: "BadOmen",
    Outcome.FAILURE: "Failure",
}


class AttributeNotFoundError(ValueError):
    """Raised when a roll names an attribute the actor has no value for."""

    def __init__(self, attribute: str) -> None:
        self.attribute = attribute
        super().__init__(
            localize("ErrorAttributeNotFound", attribute=attribute_label(attribute))
        )


def count_curse_resistance(curse_resistance: dict[str, bool]) -> int:
    """Count the curse resistance slots still checked."""
    return sum(1 for filled in curse_resistance.values() if filled)


def encumbrance_penalty(attribute: str, item_count: int) -> int:
    """Penalty for carrying more than eight pieces of equipment.

    Only courage and self-control suffer; each item past the eighth costs one
    point of the attribute's contribution.

    Args:
        attribute: The attribute being rolled.
        item_count: Number of equipment items the actor carries.

    Returns:
        The penalty, never negative.
    """
    if attribute not in ENCUMBERED_ATTRIBUTES:
        return 0
    return max(0, item_count - ENCUMBRANCE_FREE_ITEMS)


def classify_outcome(total: int) -> Outcome:
    """Classify a final total: 10+ succeeds, 9 is a bad omen, 8 or less fails."""
    if total > SUCCESS_ABOVE:
        return Outcome.SUCCESS
    if total == BAD_OMEN_TOTAL:
        return Outcome.BAD_OMEN
    return Outcome.FAILURE


def curse_roll_allowed(roll_type: RollType, curse_resistance: dict[str, bool]) -> bool:
    """A curse roll needs a normal roll and at least one resistance left."""
    return roll_type == RollType.NORMAL and count_curse_resistance(curse_resistance) > 0


def restrict_roll_type(roll_type: RollType, curse_resistance: dict[str, bool]) -> RollType:
    """Roll type actually offered to an actor.

    A hunter with no curse resistance left may only roll with disadvantage.
    """
    if count_curse_resistance(curse_resistance) == 0:
        return RollType.DISADVANTAGE
    return roll_type


def spend_curse_resistance(curse_resistance: dict[str, bool]) -> dict[str, bool] | None:
    """Uncheck the lowest-numbered checked slot.

    Returns:
        A new mapping with one slot cleared, or None if no slot was checked.
    """
    updated = dict(curse_resistance)
    for slot in CURSE_RESISTANCE_SLOTS:
        if updated.get(slot):
            updated[slot] = False
            return updated
    return None


def resolve_roll(
    attribute_value: int | None,
    request: RollRequest,
    item_count: int,
    curse_resistance: dict[str, bool],
    rng: random.Random | None = None,
) -> RollResult:
    """Resolve an attribute roll.

    Base dice depend on the roll type. A curse roll (normal rolls only, and
    only while resistance remains) adds a d8 to the pool and drops the lowest
    die; if the d8 beats the number of checked resistance slots, one slot is
    spent. The total adds the attribute, less any encumbrance penalty, and the
    selected equipment bonus.

    Args:
        attribute_value: The actor's value for ``request.attribute``, or None
            if the actor has no such attribute.
        request: What to roll and how.
        item_count: Number of equipment items carried.
        curse_resistance: The actor's current resistance slots (not mutated).
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        RollResult with every die, the total, and the outcome. When a slot was
        spent, ``updated_curse_resistance`` holds the state to write back.

    Raises:
        AttributeNotFoundError: If ``attribute_value`` is None. No dice are
            drawn in that case.
    """
    if attribute_value is None:
        raise AttributeNotFoundError(request.attribute)

    rng = rng or random.Random()
    resistance_left = count_curse_resistance(curse_resistance)
    use_curse = request.curse_roll and curse_roll_allowed(request.roll_type, curse_resistance)

    base = roll(BASE_DICE[request.roll_type], rng=rng)
    logger.debug("Base dice %s drew %s", base.notation, base.rolls)
    dice = [DieFace(value=die.result, discarded=die.discarded) for die in base.dice]

    curse_fallen = False
    updated_resistance = None

    if use_curse:
        curse_value = roll_die(CURSE_DIE_SIDES, rng=rng)
        dice.append(DieFace(value=curse_value, source=DieSource.CURSE))
        # Stable sort: on a tie the base dice sit ahead of the curse die
        dice.sort(key=lambda face: face.value)
        dice[0].discarded = True

        if curse_value > resistance_left:
            updated_resistance = spend_curse_resistance(curse_resistance)
            curse_fallen = updated_resistance is not None

    dice_total = sum(face.value for face in dice if not face.discarded)
    penalty = encumbrance_penalty(request.attribute, item_count)
    contribution = attribute_value - penalty
    total = dice_total + contribution + request.equipment_bonus
    outcome = classify_outcome(total)

    logger.info(
        "Rolled %s (%s%s): dice=%s total=%d outcome=%s",
        request.attribute,
        request.roll_type.value,
        ", curse" if use_curse else "",
        [face.value for face in dice],
        total,
        outcome.value,
    )
    if curse_fallen:
        logger.info("Curse has fallen on %s roll, %d resistance left",
                    request.attribute, resistance_left - 1)

    return RollResult(
        attribute=request.attribute,
        roll_type=request.roll_type,
        curse_roll=use_curse,
        dice=dice,
        dice_total=dice_total,
        attribute_value=attribute_value,
        encumbrance_penalty=penalty,
        attribute_contribution=contribution,
        equipment_bonus=request.equipment_bonus,
        total=total,
        outcome=outcome,
        curse_fallen=curse_fallen,
        updated_curse_resistance=updated_resistance,
    )


def describe_roll(speaker: str, result: RollResult, locale: str | None = None) -> str:
    """Build the chat line for a resolved roll.

    Discarded dice are shown in square brackets.
    """
    label = attribute_label(result.attribute, locale)
    if result.curse_roll:
        mode = localize("CurseRoll", locale)
    elif result.roll_type == RollType.ADVANTAGE:
        mode = localize("WithAdvantage", locale)
    elif result.roll_type == RollType.DISADVANTAGE:
        mode = localize("WithDisadvantage", locale)
    else:
        mode = localize("Normal", locale)

    faces = " ".join(
        f"[{face.value}]" if face.discarded else str(face.value)
        for face in result.dice
    )
    parts = [
        f"{speaker}: {localize('RollOf', locale)} {label} ({mode}): {faces}",
        f"{localize('Attribute', locale)} {result.attribute_value}",
    ]
    if result.encumbrance_penalty:
        parts.append(f"{localize('EncumbrancePenalty', locale)} -{result.encumbrance_penalty}")
    if result.equipment_bonus:
        parts.append(f"{localize('Equipment', locale)} {result.equipment_bonus:+d}")
    parts.append(
        f"{localize('TotalResult', locale)} {result.total}: "
        f"{localize(OUTCOME_LABELS[result.outcome], locale)}"
    )

    description = " | ".join(parts)
    if result.curse_fallen:
        description += " " + localize("CurseHasFallen", locale)
    return description
