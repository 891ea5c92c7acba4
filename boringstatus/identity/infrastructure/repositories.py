"""
Identity Infrastructure Repositories
====================================

SQLAlchemy implementations of the identity repositories.
"""

from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.core.timeutils import utcnow
from boringstatus.identity.application.dto import ApiKeyCreateDTO
from boringstatus.identity.application.services import IApiKeyRepository, ISessionRepository
from boringstatus.identity.infrastructure.models import ApiKeyModel, SessionModel


class SQLAlchemySessionRepository(ISessionRepository):
    """Read-only access to sessions issued by the auth service."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_token(self, token: str) -> Optional[SessionModel]:
        stmt = select(SessionModel).where(SessionModel.token == token)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()


class SQLAlchemyApiKeyRepository(IApiKeyRepository):
    """SQLAlchemy implementation of API key storage."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, organization_id: UUID, key: str, data: ApiKeyCreateDTO) -> ApiKeyModel:
        model = ApiKeyModel(
            id=uuid4(),
            organization_id=organization_id,
            key=key,
            name=data.name,
            tags=list(data.tags),
            scopes=list(data.scopes),
            is_active=True,
            created_at=utcnow()
        )

        self._session.add(model)
        await self._session.flush()

        return model

    async def list_by_organization(self, organization_id: UUID) -> List[ApiKeyModel]:
        stmt = (
            select(ApiKeyModel)
            .where(ApiKeyModel.organization_id == organization_id)
            .order_by(ApiKeyModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_key(self, key: str) -> Optional[ApiKeyModel]:
        stmt = select(ApiKeyModel).where(ApiKeyModel.key == key)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def deactivate(self, organization_id: UUID, key_id: UUID) -> bool:
        stmt = select(ApiKeyModel).where(
            ApiKeyModel.id == key_id,
            ApiKeyModel.organization_id == organization_id
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return False

        model.is_active = False
        await self._session.flush()
        return True

    async def touch(self, key_id: UUID) -> None:
        stmt = (
            update(ApiKeyModel)
            .where(ApiKeyModel.id == key_id)
            .values(last_used_at=utcnow())
        )
        await self._session.execute(stmt)
