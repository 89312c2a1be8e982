"""Session coordinator for one pair of participants.

- The session owns the Board and the score map; nothing else mutates them.
- Inbound messages are handled one at a time under the session lock.
- Outbound sends never roll back game state: a failed send is only logged.
- A send that does not complete within `send_timeout` seconds counts as failed,
  so a stalled peer cannot hold the lock for long.
"""

import asyncio
import json
import logging
from typing import Dict, List
from uuid import UUID

from pydantic import BaseModel, ValidationError
from uuid6 import uuid7

from territory.converter import DataConverter
from territory.domain.board import Board, CellState, Corner, PlayerColor
from territory.domain.corner_tracker import resolve_anchor
from territory.domain.move_rules import RuleViolation, is_legal_move
from territory.load_config import send_timeout as default_send_timeout
from territory.models.messages import (
    ChangePlayerMessage,
    GameAbortedMessage,
    GameResultMessage,
    GameStartedMessage,
    IncorrectRequestMessage,
    MoveModel,
    PlayerMoveMessage,
    RepeatGameMessage,
    client_message_adapter,
)
from territory.models.session_models import SessionStateModel, SessionSummaryModel
from territory.participant import Participant
from territory.score_utils import ScoreUtils

data_converter = DataConverter()
score_utils = ScoreUtils()

KNOWN_MESSAGE_TYPES = ("playerMove", "repeatGame")


class GameSession:
    def __init__(
        self, first: Participant, second: Participant, send_timeout: float = default_send_timeout
    ):
        """Pair two participants and initialize a fresh board.

        Args:
            first (Participant): First seated participant, plays red and moves first
            second (Participant): Second seated participant, plays blue
            send_timeout (float): Seconds a single outbound send may take
        """
        self.session_id: UUID = uuid7()
        self.participants: List[Participant] = [first, second]
        self.board = Board()
        self.scores: Dict[UUID, int] = {}
        self.current_turn: UUID = first.participant_id
        self.anchors: Dict[PlayerColor, Corner] = {}
        self.state = SessionStateModel.idle
        self.lock = asyncio.Lock()
        self.send_timeout = send_timeout
        self._destroyed = False
        self._reset()

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def _reset(self) -> None:
        first, second = self.participants
        self.board.reset()
        self.scores = {participant.participant_id: 0 for participant in self.participants}
        first.color = PlayerColor.red
        second.color = PlayerColor.blue
        self.current_turn = first.participant_id
        self.anchors.clear()

    def _participant(self, participant_id: UUID) -> Participant | None:
        for participant in self.participants:
            if participant.participant_id == participant_id:
                return participant
        return None

    def _opponent(self, participant: Participant) -> Participant:
        first, second = self.participants
        return second if participant is first else first

    async def _send(self, participant: Participant, message: BaseModel) -> bool:
        """Send a message to one participant, logging instead of raising on failure

        Args:
            participant (Participant): Recipient
            message (BaseModel): Outbound protocol message

        Returns:
            bool: True if the transport accepted the message
        """
        if not participant.connected:
            logging.debug(
                f"[Session {self.session_id}] Skip {message.type} to closed participant {participant.participant_id}"
            )
            return False
        try:
            await asyncio.wait_for(
                participant.connection.send_json(message.model_dump(mode="json")),
                timeout=self.send_timeout,
            )
            return True
        except asyncio.TimeoutError:
            logging.error(
                f"[Session {self.session_id}] Send {message.type} to {participant.participant_id} timed out"
            )
            return False
        except Exception as e:
            logging.error(
                f"[Session {self.session_id}] Send {message.type} to {participant.participant_id} failed: {e}"
            )
            return False

    async def start(self) -> None:
        """Reset the board and scores and send the start state to both participants"""
        async with self.lock:
            await self._start()

    async def _start(self) -> None:
        if self._destroyed:
            return
        self._reset()
        self.state = SessionStateModel.active
        field = data_converter.convert_board_to_field(self.board)
        logging.info(f"[Session {self.session_id}] Game started")
        await asyncio.gather(
            *(
                self._send(
                    participant,
                    GameStartedMessage(
                        myTurn=participant.participant_id == self.current_turn,
                        field=field,
                        color=participant.color,
                    ),
                )
                for participant in self.participants
            )
        )

    def _parse_message(self, data: object) -> BaseModel:
        """Parse a raw inbound payload into a client message

        Args:
            data (object): Payload of one websocket frame

        Returns:
            BaseModel: The parsed client message, or the IncorrectRequestMessage to send back
        """
        if not isinstance(data, str):
            return IncorrectRequestMessage(message="Wrong data type")
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            return IncorrectRequestMessage(message=f"Can't parse JSON data: {e}")
        try:
            return client_message_adapter.validate_python(payload)
        except ValidationError as e:
            message_type = payload.get("type") if isinstance(payload, dict) else None
            if message_type not in KNOWN_MESSAGE_TYPES:
                return IncorrectRequestMessage(message=f'Unknown message type: "{message_type}"')
            return IncorrectRequestMessage(
                message=f"Invalid {message_type} message: {e.error_count()} validation error(s)"
            )

    async def handle_message(self, participant_id: UUID, data: object) -> None:
        """Process one inbound frame from a participant of this session

        Args:
            participant_id (UUID): Sender of the frame
            data (object): Raw payload, expected to be a JSON text frame
        """
        async with self.lock:
            if self._destroyed:
                logging.debug(f"[Session {self.session_id}] Ignore message after teardown")
                return
            participant = self._participant(participant_id)
            if participant is None:
                logging.error(
                    f"[Session {self.session_id}] Message from unknown participant {participant_id}"
                )
                return

            message = self._parse_message(data)
            if isinstance(message, IncorrectRequestMessage):
                logging.info(f"[Session {self.session_id}] Incorrect request: {message.message}")
                await self._send(participant, message)
            elif isinstance(message, PlayerMoveMessage):
                await self._on_player_move(participant, message.move)
            elif isinstance(message, RepeatGameMessage):
                logging.info(
                    f"[Session {self.session_id}] Restart requested by {participant.color.value}"
                )
                await self._start()
            else:
                raise TypeError(f"Unhandled message type: {message.type}")

    async def _on_player_move(self, participant: Participant, move: MoveModel) -> None:
        if self.state == SessionStateModel.idle:
            await self._send(participant, IncorrectRequestMessage(message="Game has not started"))
            return
        if self.state == SessionStateModel.finished:
            await self._send(participant, IncorrectRequestMessage(message="Game is over"))
            return
        if participant.participant_id != self.current_turn:
            await self._send(participant, IncorrectRequestMessage(message="Not your turn"))
            return
        if move.color != participant.color:
            await self._send(participant, IncorrectRequestMessage(message="Wrong color"))
            return

        start, end = data_converter.convert_move_model_to_rectangle(move)
        dice_sum = score_utils.get_move_score(move.dices)
        try:
            corner = resolve_anchor(
                self.board, participant.color, start, self.anchors.get(participant.color)
            )
            if not is_legal_move(self.board, start, end, corner.signs, dice_sum):
                raise RuleViolation(
                    f"{tuple(start)} -> {tuple(end)} is not a free rectangle for dice sum {dice_sum}"
                )
        except RuleViolation as e:
            logging.info(
                f"[Session {self.session_id}] Rejected move of {participant.color.value}: {e}"
            )
            await self._send(participant, IncorrectRequestMessage(message="wrong move"))
            return

        claimed = self.board.claim(start, end, participant.color)
        self.anchors.setdefault(participant.color, corner)
        participant_id = participant.participant_id
        self.scores[participant_id] = score_utils.add_move_score(
            self.scores[participant_id], move.dices
        )
        opponent = self._opponent(participant)
        self.current_turn = opponent.participant_id
        logging.info(
            f"[Session {self.session_id}] {participant.color.value} claimed {claimed} cells, "
            f"score {self.scores[participant_id]}"
        )

        if not any(score_utils.is_winner(score) for score in self.scores.values()):
            field = data_converter.convert_board_to_field(self.board)
            await asyncio.gather(
                self._send(
                    opponent,
                    ChangePlayerMessage(myTurn=True, field=field, color=opponent.color),
                ),
                self._send(
                    participant,
                    ChangePlayerMessage(myTurn=False, field=field, color=participant.color),
                ),
            )
            return

        self.state = SessionStateModel.finished
        logging.info(f"[Session {self.session_id}] Game finished")
        await asyncio.gather(
            *(
                self._send(
                    player,
                    GameResultMessage(win=score_utils.is_winner(self.scores[player.participant_id])),
                )
                for player in self.participants
            )
        )

    async def destroy(self, disconnected_id: UUID | None = None) -> None:
        """Tear the session down; only the first call has any effect

        Args:
            disconnected_id (UUID | None): Participant whose connection already closed, if any
        """
        if self._destroyed:
            return
        self._destroyed = True
        for participant in self.participants:
            if participant.participant_id == disconnected_id:
                participant.connected = False

        async with self.lock:
            logging.info(f"[Session {self.session_id}] Tearing down session")
            remaining = [participant for participant in self.participants if participant.connected]
            await asyncio.gather(
                *(self._send(participant, GameAbortedMessage()) for participant in remaining)
            )
            for participant in remaining:
                participant.connected = False
                try:
                    await participant.connection.close()
                except Exception as e:
                    logging.error(
                        f"[Session {self.session_id}] Closing {participant.participant_id} failed: {e}"
                    )
            self.scores.clear()

    def summary(self) -> SessionSummaryModel:
        colors = {participant.participant_id: participant.color for participant in self.participants}
        next_turn = self._participant(self.current_turn)
        return SessionSummaryModel(
            session_id=self.session_id,
            state=self.state,
            next_turn_color=next_turn.color if self.state == SessionStateModel.active else None,
            scores=data_converter.convert_scores_to_colors(self.scores, colors),
            claimed_cells={
                PlayerColor.red: self.board.count(CellState.RED),
                PlayerColor.blue: self.board.count(CellState.BLUE),
            },
        )
