from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from territory.models.session_models import SessionSummaryModel
from territory.routers.match import session_registry

rest_router = APIRouter()


class SessionAPI:
    @staticmethod
    @rest_router.get("/sessions", response_model=List[SessionSummaryModel])
    async def list_sessions():
        sessions = await session_registry.list_sessions()
        return [session.summary() for session in sessions]

    @staticmethod
    @rest_router.get("/sessions/{session_id}", response_model=SessionSummaryModel)
    async def get_session(session_id: UUID):
        session = await session_registry.get(session_id)
        if session is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Session not found.",
            )
        return session.summary()
