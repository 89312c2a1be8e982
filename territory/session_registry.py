import logging
from asyncio import Lock
from typing import Dict, List
from uuid import UUID

from territory.services.game_session import GameSession


class SessionRegistry:
    def __init__(self):
        self.sessions: Dict[UUID, GameSession] = {}  # session_id -> session
        self.participant_sessions: Dict[UUID, UUID] = {}  # participant_id -> session_id
        self.lock = Lock()  # protects both maps

    async def register(self, session: GameSession):
        """Register a session and index it by each of its participants

        Args:
            session (GameSession): Newly paired session
        """
        async with self.lock:
            self.sessions[session.session_id] = session
            for participant in session.participants:
                self.participant_sessions[participant.participant_id] = session.session_id
            logging.info(f"Session {session.session_id} registered. Active: {len(self.sessions)}")

    async def get(self, session_id: UUID) -> GameSession | None:
        async with self.lock:
            return self.sessions.get(session_id)

    async def get_by_participant(self, participant_id: UUID) -> GameSession | None:
        """Get the session the participant plays in

        Args:
            participant_id (UUID): ID assigned to the participant on connect

        Returns:
            GameSession | None: The session, or None while the participant is still waiting
        """
        async with self.lock:
            session_id = self.participant_sessions.get(participant_id)
            if session_id is None:
                return None
            return self.sessions.get(session_id)

    async def list_sessions(self) -> List[GameSession]:
        async with self.lock:
            return list(self.sessions.values())

    async def cleanup(self, session_id: UUID):
        """Delete the session and its participant index; calling it twice is harmless

        Args:
            session_id (UUID): ID to identify the session
        """
        async with self.lock:
            session = self.sessions.pop(session_id, None)
            if session is None:
                return
            for participant in session.participants:
                self.participant_sessions.pop(participant.participant_id, None)
            logging.info(f"Session {session_id} removed. Active: {len(self.sessions)}")
