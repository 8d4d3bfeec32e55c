"""Table orchestration: actor registry, chat log, and curse write-back."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from config import CHAT_LOG_LIMIT
from engine.i18n import localize
from engine.rules import describe_roll
from models.characters import Actor
from models.rolls import RollResult
from models.table import ChatMessage, TableState

logger = logging.getLogger(__name__)


class ActorNotFoundError(LookupError):
    """Raised when an actor id is not at the table."""

    def __init__(self, actor_id: str) -> None:
        self.actor_id = actor_id
        super().__init__(localize("ActorNotFound"))


def create_table(name: str = "Yokai Hunters Society") -> TableState:
    """Start an empty table."""
    return TableState(name=name)


def add_actor(table: TableState, actor: Actor) -> Actor:
    """Seat an actor at the table.

    Raises:
        ValueError: If an actor with the same id is already seated.
    """
    if actor.id in table.actors:
        raise ValueError(f"Actor '{actor.id}' is already at the table")
    table.actors[actor.id] = actor
    logger.info("Added %s %s (%s)", actor.type.value, actor.name, actor.id)
    return actor


def get_actor(table: TableState, actor_id: str) -> Actor:
    """Look up an actor.

    Raises:
        ActorNotFoundError: If the id is unknown.
    """
    actor = table.actors.get(actor_id)
    if actor is None:
        raise ActorNotFoundError(actor_id)
    return actor


def remove_actor(table: TableState, actor_id: str) -> Actor:
    actor = get_actor(table, actor_id)
    del table.actors[actor_id]
    logger.info("Removed %s (%s)", actor.name, actor_id)
    return actor


def post_roll(table: TableState, actor: Actor, result: RollResult) -> ChatMessage:
    """Append a roll message to the chat log, keeping only the newest entries."""
    message = ChatMessage(
        id=str(uuid4()),
        speaker=actor.name,
        actor_id=actor.id,
        content=describe_roll(actor.name, result),
        result=result,
        timestamp=datetime.now(timezone.utc),
    )
    table.chat_log.append(message)
    if len(table.chat_log) > CHAT_LOG_LIMIT:
        del table.chat_log[:-CHAT_LOG_LIMIT]
    return message


def persist_curse_resistance(
    table: TableState,
    actor_id: str,
    curse_resistance: dict[str, bool],
) -> None:
    """Write a spent curse resistance back to the actor.

    Runs after the roll message has gone out. If the actor has left the table
    in the meantime the write is dropped; it is not retried.
    """
    actor = table.actors.get(actor_id)
    if actor is None:
        logger.warning("Curse resistance write-back dropped: actor %s is gone", actor_id)
        return
    actor.curse_resistance = dict(curse_resistance)
    logger.info("Curse resistance for %s is now %s", actor_id, curse_resistance)
