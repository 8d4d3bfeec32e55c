"""Table state, chat, and notification models for the sheet server."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from models.characters import Actor
from models.rolls import RollResult


class NotificationLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """A message to show the user alongside a response."""
    level: NotificationLevel
    message: str


class ChatMessage(BaseModel):
    """A roll posted to the table's chat."""
    id: str
    speaker: str                    # Name of the rolling actor
    actor_id: str
    content: str                    # Human-readable roll summary
    result: RollResult
    timestamp: datetime


class TableState(BaseModel):
    """Everything the server keeps in memory for one table."""
    name: str = "Yokai Hunters Society"
    actors: dict[str, Actor] = {}   # actor_id -> Actor
    chat_log: list[ChatMessage] = []
