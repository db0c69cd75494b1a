from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """
        Find session by exact refresh token value.

        Revocation and expiry are judged by the caller so that expired rows
        can be deleted on use.
        """
        stmt = select(Session).where(Session.refresh_token == refresh_token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def rotate_refresh_token(
        self,
        session_id: UUID,
        old_refresh_token: str,
        new_refresh_token: str,
        expires_at: datetime,
    ) -> bool:
        """Conditional update: only the request still holding the old token wins"""
        stmt = (
            update(Session)
            .where(Session.id == session_id, Session.refresh_token == old_refresh_token)
            .values(refresh_token=new_refresh_token, expires_at=expires_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a specific session by ID"""
        stmt = delete(Session).where(Session.id == session_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_refresh_token(self, refresh_token: str) -> int:
        """Delete the session holding this refresh token"""
        stmt = delete(Session).where(Session.refresh_token == refresh_token)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete all sessions for a user"""
        stmt = delete(Session).where(Session.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
