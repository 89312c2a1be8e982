from pydantic import BaseModel
from enum import Enum
from uuid import UUID
from typing import Dict, Optional

from territory.domain.board import PlayerColor


class SessionStateModel(str, Enum):
    idle = "idle"  # created, start messages not sent yet
    active = "active"
    finished = "finished"  # someone reached the winning score


class SessionSummaryModel(BaseModel):
    session_id: UUID
    state: SessionStateModel
    next_turn_color: Optional[PlayerColor] = None
    scores: Dict[PlayerColor, int]
    claimed_cells: Dict[PlayerColor, int]
