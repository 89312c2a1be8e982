from pydantic import BaseModel, Field, TypeAdapter, conint, conlist
from typing import Annotated, List, Literal, Union

from territory.domain.board import BOARD_SIZE, Coordinate, PlayerColor

DiceFace = conint(ge=1, le=6)


class CoordinateModel(BaseModel):
    row: int = Field(ge=0, lt=BOARD_SIZE)
    col: int = Field(ge=0, lt=BOARD_SIZE)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.row, self.col)


class MoveModel(BaseModel):
    from_: CoordinateModel = Field(alias="from")
    to: CoordinateModel
    color: PlayerColor
    dices: conlist(DiceFace, min_length=2, max_length=2)

    class Config:
        populate_by_name = True


# ==== Inbound (participant -> server) ==========================================


class PlayerMoveMessage(BaseModel):
    type: Literal["playerMove"]
    move: MoveModel


class RepeatGameMessage(BaseModel):
    type: Literal["repeatGame"]


ClientMessage = Annotated[
    Union[PlayerMoveMessage, RepeatGameMessage], Field(discriminator="type")
]
client_message_adapter = TypeAdapter(ClientMessage)


# ==== Outbound (server -> participant) =========================================


class GameStartedMessage(BaseModel):
    type: Literal["gameStarted"] = "gameStarted"
    myTurn: bool
    field: List[List[str]]
    color: PlayerColor
    sum: int = 0


class ChangePlayerMessage(BaseModel):
    type: Literal["changePlayer"] = "changePlayer"
    myTurn: bool
    field: List[List[str]]
    color: PlayerColor


class GameResultMessage(BaseModel):
    type: Literal["gameResult"] = "gameResult"
    win: bool


class GameAbortedMessage(BaseModel):
    type: Literal["gameAborted"] = "gameAborted"


class IncorrectRequestMessage(BaseModel):
    type: Literal["incorrectRequest"] = "incorrectRequest"
    message: str

