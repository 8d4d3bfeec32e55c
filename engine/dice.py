"""Dice rolling utilities for the sheet server."""

import random
import re

from pydantic import BaseModel


class DieRoll(BaseModel):
    """A single die face drawn during a roll."""
    sides: int
    result: int
    discarded: bool = False         # Dropped by a keep-highest/keep-lowest rule


class DiceResult(BaseModel):
    """Result of a dice roll."""
    total: int
    dice: list[DieRoll]
    modifier: int
    notation: str

    @property
    def rolls(self) -> list[int]:
        """Raw face values in the order they were drawn."""
        return [die.result for die in self.dice]

    @property
    def kept(self) -> list[int]:
        """Face values that count toward the total."""
        return [die.result for die in self.dice if not die.discarded]


def roll_die(sides: int, rng: random.Random | None = None) -> int:
    """Roll one die with the given number of sides."""
    rng = rng or random.Random()
    return rng.randint(1, sides)


def roll(notation: str, rng: random.Random | None = None) -> DiceResult:
    """Parse and roll dice notation like '2d6', '3d6kh2', '3d6kl2', '1d8+1'.

    ``khN`` keeps the N highest dice and ``klN`` the N lowest; the rest are
    marked discarded. Ties keep the die drawn first.

    Args:
        notation: Dice notation string (e.g. "3d6kh2").
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        DiceResult with total, individual dice, modifier, and notation.
    """
    rng = rng or random.Random()
    notation = notation.strip().lower()

    match = re.match(r"^(\d+)d(\d+)(?:k([hl])(\d+))?([+-]\d+)?$", notation)
    if not match:
        raise ValueError(f"Invalid dice notation: {notation}")

    num_dice = int(match.group(1))
    die_size = int(match.group(2))
    keep_mode = match.group(3)
    keep_count = int(match.group(4)) if match.group(4) else num_dice
    modifier = int(match.group(5)) if match.group(5) else 0

    if num_dice < 1 or die_size < 1:
        raise ValueError(f"Invalid dice notation: {notation}")
    if keep_count > num_dice:
        raise ValueError(f"Cannot keep {keep_count} of {num_dice} dice")

    dice = [DieRoll(sides=die_size, result=rng.randint(1, die_size)) for _ in range(num_dice)]

    if keep_mode is not None:
        # sorted() is stable, so equal faces keep their draw order
        order = sorted(
            range(num_dice),
            key=lambda i: dice[i].result,
            reverse=keep_mode == "h",
        )
        for i in order[keep_count:]:
            dice[i].discarded = True

    total = sum(die.result for die in dice if not die.discarded) + modifier

    return DiceResult(
        total=total,
        dice=dice,
        modifier=modifier,
        notation=notation,
    )
