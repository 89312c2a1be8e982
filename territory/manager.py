from asyncio import Lock
from fastapi import WebSocket
from starlette.websockets import WebSocketState
from typing import Dict, List, Tuple
from uuid import UUID
import logging

from territory.models.messages import IncorrectRequestMessage
from territory.participant import Participant


class ConnectionManager:
    def __init__(self):
        self.active_connections: Dict[UUID, Participant] = {}
        self.waiting: List[Participant] = []  # participants not yet paired, in arrival order
        self.lock = Lock()

    async def connect(self, websocket: WebSocket) -> Participant:
        """Accepts a websocket and puts its participant in the waiting queue

        Args:
            websocket (WebSocket): Connection of the new player

        Returns:
            Participant: The participant created for this connection
        """
        await websocket.accept()
        participant = Participant(connection=websocket)
        async with self.lock:
            self.active_connections[participant.participant_id] = participant
            self.waiting.append(participant)
            logging.info(
                f"Participant {participant.participant_id} joined the lobby. Waiting: {len(self.waiting)}"
            )
        return participant

    async def pop_pair(self) -> Tuple[Participant, Participant] | None:
        """Takes the two longest waiting participants out of the queue

        Returns:
            Tuple[Participant, Participant] | None: First and second seat, or None if fewer than two wait
        """
        async with self.lock:
            if len(self.waiting) < 2:
                return None
            first = self.waiting.pop(0)
            second = self.waiting.pop(0)
            logging.info(f"Paired {first.participant_id} with {second.participant_id}")
            return first, second

    async def disconnect(self, participant_id: UUID):
        """Forgets a participant whose connection closed

        Args:
            participant_id (UUID): Participant to remove from the lobby
        """
        async with self.lock:
            participant = self.active_connections.pop(participant_id, None)
            if participant is not None:
                participant.connected = False
                logging.info(f"Participant {participant_id} left the server")
            self.waiting = [p for p in self.waiting if p.participant_id != participant_id]

    async def send_personal_message(self, message: IncorrectRequestMessage, participant: Participant):
        try:
            await participant.connection.send_json(message.model_dump(mode="json"))
        except Exception as e:
            logging.error(f"Send to waiting participant {participant.participant_id} failed: {e}")

    async def sweep(self) -> int:
        """Drops waiting participants whose websocket is no longer connected

        Returns:
            int: Number of participants removed from the queue
        """
        async with self.lock:
            stale = [
                p
                for p in self.waiting
                if not p.connected or p.connection.client_state != WebSocketState.CONNECTED
            ]
            for participant in stale:
                participant.connected = False
                self.active_connections.pop(participant.participant_id, None)
            self.waiting = [p for p in self.waiting if p not in stale]
        if stale:
            logging.info(f"Lobby sweep removed {len(stale)} stale participant(s)")
        logging.debug(
            f"Lobby: {len(self.waiting)} waiting, {len(self.active_connections)} connected"
        )
        return len(stale)
