import uuid
from typing import Any

from videohub.core.errors import ValidationError


def canonical_id(value: Any, field: str = "id") -> uuid.UUID:
    """Приведение идентификатора к каноническому uuid.UUID.

    Принимает как uuid.UUID, так и строковое представление в любом регистре,
    с дефисами или без. Все сравнения владельцев идут только через эту функцию.
    """
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, str):
        try:
            return uuid.UUID(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid {field}", errors=[{"field": field, "value": str(value)}])
