"""Roll submission and chat log endpoints."""

import logging

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from pydantic import BaseModel

from api.ws import notify_chat_message, notify_curse_fallen
from engine.rules import AttributeNotFoundError, resolve_roll, restrict_roll_type
from engine.sheet import ItemNotFoundError, find_equipment, inform
from engine.table import ActorNotFoundError, get_actor, persist_curse_resistance, post_roll
from models.rolls import RollRequest, RollResult
from models.table import ChatMessage, Notification, TableState

logger = logging.getLogger(__name__)

router = APIRouter()


class RollResponse(BaseModel):
    """A resolved roll and the chat message it produced."""
    result: RollResult
    message: ChatMessage
    notifications: list[Notification] = []


def _get_table(request: Request) -> TableState:
    """Get the singleton table from app state."""
    return request.app.state.table


@router.post("/actors/{actor_id}/roll", response_model=RollResponse)
def roll_attribute(
    actor_id: str,
    body: RollRequest,
    request: Request,
    background_tasks: BackgroundTasks,
) -> RollResponse:
    """Roll one of an actor's attributes.

    An actor with no curse resistance left always rolls with disadvantage.
    When the curse falls, the spent resistance is written back after the
    response is sent.
    """
    table = _get_table(request)
    try:
        actor = get_actor(table, actor_id)
    except ActorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    notifications = []

    roll_type = restrict_roll_type(body.roll_type, actor.curse_resistance)
    if roll_type != body.roll_type:
        notifications.append(inform("NoCurseResistanceLeft"))

    bonus = body.equipment_bonus
    if body.equipment_id is not None:
        try:
            bonus = find_equipment(actor, body.equipment_id).bonus or 0
        except ItemNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    roll_request = body.model_copy(update={"roll_type": roll_type, "equipment_bonus": bonus})

    try:
        result = resolve_roll(
            actor.attributes.get(body.attribute),
            roll_request,
            item_count=len(actor.equipment),
            curse_resistance=actor.curse_resistance,
            rng=request.app.state.rng,
        )
    except AttributeNotFoundError as e:
        logger.warning("Roll refused for %s: %s", actor_id, e)
        raise HTTPException(status_code=400, detail=str(e))

    message = post_roll(table, actor, result)

    if result.updated_curse_resistance is not None:
        background_tasks.add_task(
            persist_curse_resistance, table, actor.id, result.updated_curse_resistance,
        )
        background_tasks.add_task(
            notify_curse_fallen, actor.id, result.updated_curse_resistance,
        )
    background_tasks.add_task(notify_chat_message, message)

    return RollResponse(result=result, message=message, notifications=notifications)


@router.get("/chat")
def get_chat_log(request: Request) -> list[dict]:
    """Get the roll messages posted at the table, oldest first."""
    table = _get_table(request)
    return [message.model_dump(mode="json") for message in table.chat_log]
