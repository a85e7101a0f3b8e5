from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
import uuid

from videohub.core.errors import ConflictError
from videohub.db.models.user import User as UserModel


class UserRepository:
    """Репозиторий пользователей. Пользователей создает внешний провайдер идентификации"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        username: str,
        full_name: str = "",
        avatar_url: str = "",
        user_id: Optional[uuid.UUID] = None
    ) -> UserModel:
        """Регистрация профиля, выданного провайдером"""
        db_user = UserModel(
            id=user_id or uuid.uuid4(),
            username=username,
            full_name=full_name,
            avatar_url=avatar_url
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return db_user
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("User with this username already exists")

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()
