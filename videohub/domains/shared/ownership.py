from typing import Any, Optional

import structlog

from videohub.core.errors import ForbiddenError, NotFoundError
from videohub.core.identity import canonical_id

logger = structlog.get_logger(__name__)


def is_owner(actor_id: Any, resource_owner_id: Any) -> bool:
    """Проверка владения по каноническому значению идентификатора"""
    if actor_id is None or resource_owner_id is None:
        return False
    return canonical_id(actor_id, "actor_id") == canonical_id(resource_owner_id, "owner_id")


def authorize(actor_id: Any, resource_owner_id: Any, action: str = "modify this resource") -> None:
    """Разрешает мутацию только владельцу, иначе ForbiddenError"""
    if not is_owner(actor_id, resource_owner_id):
        logger.info(
            "ownership_denied",
            actor_id=str(actor_id),
            owner_id=str(resource_owner_id),
            action=action,
        )
        raise ForbiddenError(f"You can't {action} as you are not the owner")


def ensure_owner(resource: Optional[Any], actor_id: Any, name: str, action: str = None) -> Any:
    """Сначала существование ресурса (NotFound), затем владение (Forbidden)"""
    if resource is None:
        raise NotFoundError(f"{name} not found")
    authorize(actor_id, resource.owner_id, action or f"modify this {name.lower()}")
    return resource
