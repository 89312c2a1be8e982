from dataclasses import dataclass, field
from uuid import UUID

from fastapi import WebSocket
from uuid6 import uuid7

from territory.domain.board import PlayerColor


@dataclass(eq=False)
class Participant:
    """One connected player: its websocket, stable id and assigned color."""

    connection: WebSocket
    participant_id: UUID = field(default_factory=uuid7)
    color: PlayerColor | None = None
    connected: bool = True
