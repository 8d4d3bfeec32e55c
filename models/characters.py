"""Actor and item data models for the sheet server."""

from enum import Enum

from pydantic import BaseModel, Field

from config import ATTRIBUTE_NAMES, CURSE_RESISTANCE_SLOTS


class ActorType(str, Enum):
    """Kinds of actor a sheet can describe."""
    HUNTER = "hunter"
    NPC_YOKAI = "npc_yokai"


class ItemType(str, Enum):
    """Kinds of item an actor can carry."""
    EQUIPMENT = "equipment"         # Counts toward encumbrance, may add a bonus
    GEAR = "gear"
    MOVE = "move"                   # A yokai's signature move, no bonus


def blank_attributes() -> dict[str, int]:
    """All hunter attributes at zero."""
    return {name: 0 for name in ATTRIBUTE_NAMES}


def curse_resistance(filled: bool) -> dict[str, bool]:
    """A full set of curse resistance slots, all set to ``filled``."""
    return {slot: filled for slot in CURSE_RESISTANCE_SLOTS}


class Item(BaseModel):
    """Something an actor carries or can do."""
    id: str
    name: str
    type: ItemType = ItemType.EQUIPMENT
    description: str = ""
    bonus: int | None = 0           # None for moves


class Health(BaseModel):
    """Current and maximum health; 0 <= value <= max <= 15."""
    value: int = 0
    max: int = 0


class Actor(BaseModel):
    """A hunter or an NPC/Yokai at the table."""
    id: str
    name: str
    type: ActorType = ActorType.HUNTER
    attributes: dict[str, int] = Field(default_factory=dict)
    health: Health = Health()
    curse_resistance: dict[str, bool] = Field(default_factory=lambda: curse_resistance(False))
    items: list[Item] = []
    description: str = ""
    level: int = 0

    @property
    def equipment(self) -> list[Item]:
        """Items that weigh the actor down and can be used on a roll."""
        return [item for item in self.items if item.type == ItemType.EQUIPMENT]

    @property
    def moves(self) -> list[Item]:
        return [item for item in self.items if item.type == ItemType.MOVE]
