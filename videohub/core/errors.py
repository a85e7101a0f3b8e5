from typing import Any, List, Optional


class ApiError(Exception):
    """Базовая ошибка ядра, переводится в конверт ошибки на транспортном уровне"""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class ValidationError(ApiError):
    """Отсутствующие или некорректные входные данные"""

    status_code = 400
    default_message = "Invalid input"


class ForbiddenError(ApiError):
    """Пользователь не является владельцем ресурса"""

    status_code = 403
    default_message = "You are not the owner of this resource"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    """Нарушение уникальности, пойманное ограничением хранилища"""

    status_code = 409
    default_message = "Conflicting concurrent update"


class DependencyError(ApiError):
    """Хранилище или blob storage недоступны"""

    status_code = 503
    default_message = "A dependency is unavailable"
