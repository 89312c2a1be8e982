import logging
from uuid import UUID

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from territory.manager import ConnectionManager
from territory.models.messages import IncorrectRequestMessage
from territory.participant import Participant
from territory.services.game_session import GameSession
from territory.session_registry import SessionRegistry

match_router = APIRouter()
connect_manager = ConnectionManager()
session_registry = SessionRegistry()


async def start_session_if_paired():
    """Create and start a session when two participants are waiting"""
    pair = await connect_manager.pop_pair()
    if pair is None:
        return
    session = GameSession(*pair)
    await session_registry.register(session)

    # One of the pair may have left between pairing and registration.
    gone = [participant for participant in session.participants if not participant.connected]
    if gone:
        logging.info(f"Session {session.session_id} lost a participant before starting")
        await session.destroy(gone[0].participant_id)
        await session_registry.cleanup(session.session_id)
        return
    await session.start()


async def leave(participant: Participant):
    """Remove a participant from the lobby and tear down its session, if any

    Args:
        participant (Participant): Participant whose connection closed
    """
    participant_id: UUID = participant.participant_id
    await connect_manager.disconnect(participant_id)
    session = await session_registry.get_by_participant(participant_id)
    if session is not None:
        await session.destroy(participant_id)
        await session_registry.cleanup(session.session_id)


class BaseServer:
    @staticmethod
    @match_router.websocket("/ws")
    async def play(websocket: WebSocket):
        """Connect a player, pair it with an opponent and relay its messages

        Args:
            websocket (WebSocket): Connector with the connected client
        """
        participant = await connect_manager.connect(websocket)
        try:
            await start_session_if_paired()
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    logging.info(f"WebSocket close: {participant.participant_id}")
                    break
                data = message.get("text")
                if data is None:
                    data = message.get("bytes")

                session = await session_registry.get_by_participant(participant.participant_id)
                if session is None:
                    await connect_manager.send_personal_message(
                        IncorrectRequestMessage(message="Waiting for an opponent"), participant
                    )
                    continue
                await session.handle_message(participant.participant_id, data)
        except WebSocketDisconnect:
            logging.info(f"WebSocket disconnected: {participant.participant_id}")
        except Exception as e:
            logging.error(f"Unexpected error for {participant.participant_id}: {e}")
        finally:
            await leave(participant)
