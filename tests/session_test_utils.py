"""Helpers shared by the session and lobby tests.

`FakeConnection` stands in for a websocket: it records every JSON payload
the server sends and can be told to fail sends like a closing socket, or to
never finish them like a peer stuck on backpressure.
"""

import asyncio
import json

from starlette.websockets import WebSocketState

from territory.participant import Participant
from territory.services.game_session import GameSession


class FakeConnection:
    def __init__(self, fail_sends: bool = False, stall_sends: bool = False) -> None:
        self.sent: list[dict] = []
        self.accepted = False
        self.closed = False
        self.fail_sends = fail_sends
        self.stall_sends = stall_sends
        self.client_state = WebSocketState.CONNECTED

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, data: dict) -> None:
        if self.fail_sends:
            raise RuntimeError("socket is closing")
        if self.stall_sends:
            await asyncio.Event().wait()
        self.sent.append(data)

    async def close(self, code: int = 1000) -> None:
        self.closed = True
        self.client_state = WebSocketState.DISCONNECTED

    def of_type(self, message_type: str) -> list[dict]:
        return [message for message in self.sent if message["type"] == message_type]

    @property
    def last(self) -> dict:
        return self.sent[-1]


def make_session(
    fail_second: bool = False, stall_second: bool = False, send_timeout: float = 1.0
) -> tuple[GameSession, Participant, Participant]:
    first = Participant(connection=FakeConnection())
    second = Participant(connection=FakeConnection(fail_sends=fail_second, stall_sends=stall_second))
    return GameSession(first, second, send_timeout=send_timeout), first, second


def move_frame(start: tuple[int, int], end: tuple[int, int], color: str, dices: list[int]) -> str:
    return json.dumps(
        {
            "type": "playerMove",
            "move": {
                "from": {"row": start[0], "col": start[1]},
                "to": {"row": end[0], "col": end[1]},
                "color": color,
                "dices": dices,
                "moved": False,
                "sum": 0,
            },
        }
    )
