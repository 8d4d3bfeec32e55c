"""Actor sheet and item endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from engine.sheet import (
    ActorUpdate,
    ItemCreate,
    ItemNotFoundError,
    ItemUpdate,
    SheetError,
    SheetView,
    add_item,
    apply_update,
    new_actor,
    prepare_sheet,
    remove_item,
    update_item,
)
from engine.table import ActorNotFoundError, add_actor, get_actor, remove_actor
from models.characters import Actor, ActorType, Item
from models.table import Notification, TableState

router = APIRouter()


class CreateActorRequest(BaseModel):
    """Request body for creating a hunter or an NPC/Yokai."""
    name: str
    type: ActorType = ActorType.HUNTER
    description: str = ""
    level: int = 0
    attributes: dict[str, Any] | None = None
    health: dict[str, Any] | None = None


class ActorResponse(BaseModel):
    """An actor after a write, with any warnings raised on the way."""
    actor: Actor
    notifications: list[Notification] = []


class ItemResponse(BaseModel):
    item: Item
    notifications: list[Notification] = []


class DeleteResponse(BaseModel):
    notifications: list[Notification]


def _get_table(request: Request) -> TableState:
    """Get the singleton table from app state."""
    return request.app.state.table


def _get_actor(request: Request, actor_id: str) -> Actor:
    try:
        return get_actor(_get_table(request), actor_id)
    except ActorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=ActorResponse)
def create_actor(body: CreateActorRequest, request: Request) -> ActorResponse:
    """Create an actor with its type's defaults, then apply any starting values.

    Starting attributes and health go through the same clamping as edits.
    """
    actor = new_actor(body.name, body.type, description=body.description, level=body.level)
    notifications = []
    if body.attributes is not None or body.health is not None:
        try:
            update = ActorUpdate(attributes=body.attributes, health=body.health)
            notifications = apply_update(actor, update)
        except ValueError as e:
            # SheetError, or a ValidationError from the starting values
            raise HTTPException(status_code=400, detail=str(e))

    add_actor(_get_table(request), actor)
    return ActorResponse(actor=actor, notifications=notifications)


@router.get("")
def list_actors(request: Request) -> list[dict]:
    """Summaries of every actor at the table."""
    return [
        {
            "id": actor.id,
            "name": actor.name,
            "type": actor.type.value,
            "health": actor.health.model_dump(),
        }
        for actor in _get_table(request).actors.values()
    ]


@router.get("/{actor_id}", response_model=SheetView)
def get_sheet(actor_id: str, request: Request) -> SheetView:
    """The actor's sheet with derived values for display and rolling."""
    return prepare_sheet(_get_actor(request, actor_id))


@router.patch("/{actor_id}", response_model=ActorResponse)
def update_actor(actor_id: str, body: ActorUpdate, request: Request) -> ActorResponse:
    """Update sheet fields. Out-of-range values are clamped, not refused."""
    actor = _get_actor(request, actor_id)
    try:
        notifications = apply_update(actor, body)
    except SheetError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ActorResponse(actor=actor, notifications=notifications)


@router.delete("/{actor_id}")
def delete_actor(actor_id: str, request: Request) -> dict:
    try:
        actor = remove_actor(_get_table(request), actor_id)
    except ActorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"deleted": actor.id}


@router.post("/{actor_id}/items", response_model=ItemResponse)
def create_item(actor_id: str, body: ItemCreate, request: Request) -> ItemResponse:
    """Add an item; hunters get equipment and NPC/Yokai get a move by default."""
    actor = _get_actor(request, actor_id)
    return ItemResponse(item=add_item(actor, body))


@router.patch("/{actor_id}/items/{item_id}", response_model=ItemResponse)
def edit_item(actor_id: str, item_id: str, body: ItemUpdate, request: Request) -> ItemResponse:
    actor = _get_actor(request, actor_id)
    try:
        item = update_item(actor, item_id, body)
    except ItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ItemResponse(item=item)


@router.delete("/{actor_id}/items/{item_id}", response_model=DeleteResponse)
def delete_item(actor_id: str, item_id: str, request: Request) -> DeleteResponse:
    actor = _get_actor(request, actor_id)
    try:
        notification = remove_item(actor, item_id)
    except ItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return DeleteResponse(notifications=[notification])
