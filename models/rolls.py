"""Roll request and result models for the sheet server."""

from enum import Enum

from pydantic import BaseModel


class RollType(str, Enum):
    """How many base dice are drawn and which are kept."""
    NORMAL = "normal"               # 2d6
    ADVANTAGE = "advantage"         # 3d6, keep highest 2
    DISADVANTAGE = "disadvantage"   # 3d6, keep lowest 2


class Outcome(str, Enum):
    """Classification of a roll's final total."""
    SUCCESS = "success"
    BAD_OMEN = "bad_omen"
    FAILURE = "failure"


class DieSource(str, Enum):
    BASE = "base"
    CURSE = "curse"


class DieFace(BaseModel):
    """One die as shown in the roll message."""
    value: int
    discarded: bool = False
    source: DieSource = DieSource.BASE


class RollRequest(BaseModel):
    """A hunter's request to roll one of their attributes."""
    attribute: str
    roll_type: RollType = RollType.NORMAL
    curse_roll: bool = False
    equipment_bonus: int = 0
    equipment_id: str | None = None     # Looks up the bonus from a carried item


class RollResult(BaseModel):
    """Everything needed to render one roll message."""
    attribute: str
    roll_type: RollType
    curse_roll: bool                    # Whether the curse die was actually drawn
    dice: list[DieFace]
    dice_total: int                     # Sum of dice that were not discarded
    attribute_value: int
    encumbrance_penalty: int
    attribute_contribution: int
    equipment_bonus: int
    total: int
    outcome: Outcome
    curse_fallen: bool = False
    updated_curse_resistance: dict[str, bool] | None = None
