"""Sheet rules: actor defaults, clamped writes, items, and the sheet view."""

from __future__ import annotations

import logging
import math
import re
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, field_validator

from config import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_NAMES,
    CURSE_RESISTANCE_SLOTS,
    ENCUMBERED_ATTRIBUTES,
    HEALTH_MAX,
)
from engine.i18n import attribute_label, localize
from engine.rules import count_curse_resistance, curse_roll_allowed, encumbrance_penalty
from engine.tiers import allocate_tiers, enforce_tiers
from models.characters import (
    Actor,
    ActorType,
    Health,
    Item,
    ItemType,
    blank_attributes,
    curse_resistance,
)
from models.rolls import RollType
from models.table import Notification, NotificationLevel

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class SheetError(ValueError):
    """Raised when a write makes no sense for the actor at all."""


class ItemNotFoundError(LookupError):
    """Raised when an item id does not belong to the actor."""

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(localize("ItemNotFound"))


def coerce_int(value: Any) -> int:
    """Read user input as an integer the way a sheet field does.

    Leading digits win ("3 pts" is 3); anything without them is 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def _notify(level: NotificationLevel, key: str, **params: object) -> Notification:
    """Build a localized notification at the given level."""
    return Notification(level=level, message=localize(key, **params))


def warn(key: str, **params: object) -> Notification:
    """Build a localized warning."""
    return _notify(NotificationLevel.WARNING, key, **params)


def inform(key: str, **params: object) -> Notification:
    """Build a localized informational notice."""
    return _notify(NotificationLevel.INFO, key, **params)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


class HealthUpdate(BaseModel):
    """Health fields as typed into the sheet."""
    value: int | None = None
    max: int | None = None

    @field_validator("value", "max", mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> int | None:
        return None if v is None else coerce_int(v)


class ActorUpdate(BaseModel):
    """A partial update to an actor, as submitted by the sheet."""
    name: str | None = None
    attributes: dict[str, int] | None = None
    health: HealthUpdate | None = None
    curse_resistance: dict[str, bool] | None = None
    description: str | None = None
    level: int | None = None

    @field_validator("attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, v: Any) -> dict[str, int] | None:
        if v is None:
            return None
        if not isinstance(v, dict):
            raise ValueError("attributes must be an object")
        unknown = sorted(set(v) - set(ATTRIBUTE_NAMES))
        if unknown:
            raise ValueError(f"Unknown attributes: {', '.join(unknown)}")
        return {name: coerce_int(value) for name, value in v.items()}

    @field_validator("curse_resistance")
    @classmethod
    def _known_slots(cls, v: dict[str, bool] | None) -> dict[str, bool] | None:
        if v is not None:
            unknown = sorted(set(v) - set(CURSE_RESISTANCE_SLOTS))
            if unknown:
                raise ValueError(f"Unknown curse resistance slots: {', '.join(unknown)}")
        return v

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, v: Any) -> int | None:
        return None if v is None else coerce_int(v)


def new_actor(
    name: str,
    actor_type: ActorType = ActorType.HUNTER,
    description: str = "",
    level: int = 0,
) -> Actor:
    """Create an actor with the defaults for its type.

    Hunters start with every attribute at 0 and all four curse resistance
    slots checked. NPC/Yokai have no attributes and no resistance.
    """
    hunter = actor_type == ActorType.HUNTER
    return Actor(
        id=str(uuid4()),
        name=name,
        type=actor_type,
        attributes=blank_attributes() if hunter else {},
        health=Health(),
        curse_resistance=curse_resistance(hunter),
        description=description,
        level=max(0, level),
    )


def apply_update(actor: Actor, update: ActorUpdate) -> list[Notification]:
    """Apply a sheet update, clamping out-of-range values.

    Args:
        actor: The actor to update (mutated in place).
        update: The requested changes.

    Returns:
        Warnings for every value that had to be clamped or reverted.

    Raises:
        SheetError: If attributes are written on an NPC/Yokai.
    """
    if update.attributes is not None and actor.type != ActorType.HUNTER:
        raise SheetError(localize("NpcHasNoAttributes"))

    notifications: list[Notification] = []

    if update.name is not None:
        actor.name = update.name
    if update.description is not None:
        actor.description = update.description
    if update.level is not None:
        actor.level = max(0, update.level)
    if update.attributes is not None:
        notifications += _apply_attributes(actor, update.attributes)
    if update.health is not None:
        notifications += _apply_health(actor, update.health)
    if update.curse_resistance is not None:
        actor.curse_resistance.update(update.curse_resistance)

    for note in notifications:
        logger.info("Sheet warning for %s: %s", actor.id, note.message)
    return notifications


def _apply_attributes(actor: Actor, changes: dict[str, int]) -> list[Notification]:
    """Clamp each attribute to 0..5, then enforce the scarce tiers."""
    notifications = []
    proposed = dict(actor.attributes)
    for name, value in changes.items():
        label = attribute_label(name)
        if value > ATTRIBUTE_MAX:
            value = ATTRIBUTE_MAX
            notifications.append(warn("AttributeCapWarning", attribute=label))
        elif value < 0:
            value = 0
            notifications.append(warn("AttributeFloorWarning", attribute=label))
        proposed[name] = value

    allocation = enforce_tiers(proposed, actor.attributes)
    for name, cap in allocation.rejected.items():
        notifications.append(
            warn("AttributeTierWarning", attribute=attribute_label(name), cap=cap)
        )
    actor.attributes = allocation.values
    return notifications


def _apply_health(actor: Actor, changes: HealthUpdate) -> list[Notification]:
    """Keep 0 <= value <= max <= 15.

    A new max in the same update is the one the value is checked against.
    Lowering max below the current value drags the value down with it.
    """
    notifications = []

    if changes.max is not None:
        new_max = changes.max
        if new_max > HEALTH_MAX:
            new_max = HEALTH_MAX
            notifications.append(warn("MaxHealthCapWarning"))
        elif new_max < 0:
            new_max = 0
            notifications.append(warn("HealthFloorWarning"))
        actor.health.max = new_max

    effective_max = actor.health.max

    if changes.value is not None:
        value = changes.value
        if value > effective_max:
            value = effective_max
            notifications.append(warn("HealthCapWarning"))
        elif value < 0:
            value = 0
            notifications.append(warn("HealthFloorWarning"))
        actor.health.value = value
    elif actor.health.value > effective_max:
        actor.health.value = effective_max
        notifications.append(warn("HealthCapWarning"))

    return notifications


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


class ItemCreate(BaseModel):
    """Request body for adding an item; everything is optional."""
    name: str | None = None
    type: ItemType | None = None
    description: str = ""
    bonus: int | None = None

    @field_validator("bonus", mode="before")
    @classmethod
    def _coerce_bonus(cls, v: Any) -> int | None:
        return None if v is None else coerce_int(v)


class ItemUpdate(BaseModel):
    """Partial update to an item."""
    name: str | None = None
    description: str | None = None
    bonus: int | None = None

    @field_validator("bonus", mode="before")
    @classmethod
    def _coerce_bonus(cls, v: Any) -> int | None:
        return None if v is None else coerce_int(v)


def _item_bonus(item_type: ItemType, bonus: int | None) -> int | None:
    """Moves carry no bonus; equipment and gear default to +0."""
    if item_type == ItemType.MOVE:
        return None
    return bonus if bonus is not None else 0


def add_item(actor: Actor, data: ItemCreate) -> Item:
    """Add an item to the actor.

    Hunters get equipment by default, NPC/Yokai get a move.
    """
    default_type = ItemType.EQUIPMENT if actor.type == ActorType.HUNTER else ItemType.MOVE
    item_type = data.type or default_type
    item = Item(
        id=str(uuid4()),
        name=data.name or localize("NewItem"),
        type=item_type,
        description=data.description,
        bonus=_item_bonus(item_type, data.bonus),
    )
    actor.items.append(item)
    return item


def find_item(actor: Actor, item_id: str) -> Item:
    """Look up one of the actor's items.

    Raises:
        ItemNotFoundError: If the actor has no such item.
    """
    for item in actor.items:
        if item.id == item_id:
            return item
    raise ItemNotFoundError(item_id)


def find_equipment(actor: Actor, item_id: str) -> Item:
    """Look up one of the actor's equipment items for a roll.

    Gear and moves are not offered as roll equipment.

    Raises:
        ItemNotFoundError: If the actor carries no such equipment.
    """
    for item in actor.equipment:
        if item.id == item_id:
            return item
    raise ItemNotFoundError(item_id)


def update_item(actor: Actor, item_id: str, changes: ItemUpdate) -> Item:
    """Apply the given changes to one of the actor's items."""
    item = find_item(actor, item_id)
    if changes.name is not None:
        item.name = changes.name
    if changes.description is not None:
        item.description = changes.description
    if changes.bonus is not None:
        item.bonus = _item_bonus(item.type, changes.bonus)
    return item


def remove_item(actor: Actor, item_id: str) -> Notification:
    """Delete an item and report it.

    Raises:
        ItemNotFoundError: If the actor has no such item.
    """
    item = find_item(actor, item_id)
    actor.items.remove(item)
    logger.info("Removed item %s from %s", item.name, actor.id)
    return inform("ItemDeleted", item=item.name)


# ---------------------------------------------------------------------------
# Sheet view
# ---------------------------------------------------------------------------


class SheetView(BaseModel):
    """An actor plus everything derived for display and the roll dialog."""
    actor: Actor
    equipment: list[Item]
    moves: list[Item]
    encumbrance_penalty: int        # Applies to courage and self-control only
    attribute_caps: dict[str, int]
    curse_resistance_left: int
    roll_types: list[RollType]
    curse_roll_available: bool


def prepare_sheet(actor: Actor) -> SheetView:
    """Derive the read-only parts of a sheet."""
    resistance_left = count_curse_resistance(actor.curse_resistance)
    if actor.type == ActorType.HUNTER:
        caps = allocate_tiers(actor.attributes, actor.attributes)
    else:
        caps = {}

    if resistance_left == 0:
        roll_types = [RollType.DISADVANTAGE]
    else:
        roll_types = list(RollType)

    return SheetView(
        actor=actor,
        equipment=actor.equipment,
        moves=actor.moves,
        encumbrance_penalty=encumbrance_penalty(ENCUMBERED_ATTRIBUTES[0], len(actor.equipment)),
        attribute_caps=caps,
        curse_resistance_left=resistance_left,
        roll_types=roll_types,
        curse_roll_available=curse_roll_allowed(RollType.NORMAL, actor.curse_resistance),
    )
