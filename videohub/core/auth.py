import uuid
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from videohub.core.config import settings
from videohub.core.errors import ApiError, ValidationError
from videohub.core.identity import canonical_id

security = HTTPBearer(auto_error=False)


class UnauthorizedError(ApiError):
    status_code = 401
    default_message = "Could not validate credentials"


def actor_id_from_token(token: str) -> uuid.UUID:
    """Идентификатор пользователя из claim 'sub' токена внешнего провайдера"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise UnauthorizedError("Invalid token")

    subject = payload.get("sub")
    if not subject:
        raise UnauthorizedError("Token has no subject")

    try:
        return canonical_id(subject, "sub")
    except ValidationError:
        raise UnauthorizedError("Token subject is not a valid user id")


async def get_optional_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[uuid.UUID]:
    """Зритель для чтения: без токена запрос анонимный"""
    if credentials is None:
        return None
    return actor_id_from_token(credentials.credentials)


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> uuid.UUID:
    """Обязательная аутентификация для мутаций"""
    if credentials is None:
        raise UnauthorizedError("You must be authenticated")
    return actor_id_from_token(credentials.credentials)
