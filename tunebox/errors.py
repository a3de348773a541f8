"""Помилки обробників та їх перетворення на уніфіковану JSON-відповідь."""
import functools
import logging

from tunebox.init import db

logger = logging.getLogger(__name__)


class HandlerError(Exception):
    """
    Доменна помилка, яка не зупиняє сервер.

    Обробник повертає її клієнту у вигляді ``{"success": False, "message": ...}``.
    """
    message = "request failed"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def as_result(self):
        return {"success": False, "message": self.message}


class ValidationError(HandlerError):
    """Відсутнє або некоректне поле запиту."""

    @classmethod
    def required(cls, field):
        return cls(f"`{field}` is required")


class DuplicateUser(HandlerError):
    message = "`username` existed"


class InvalidCredentials(HandlerError):
    # one text for unknown user, inactive account and wrong password
    message = "invalid username/password"


class NotFound(HandlerError):
    message = "not found"


class PermissionDenied(HandlerError):
    message = "not musician"


class Unauthenticated(HandlerError):
    message = "please login first"


class MethodNotAllowed(Exception):
    """Дію викликано не тим HTTP-методом. Фреймворк відповідає 404."""


class RelationMismatch(Exception):
    """Кількість стовпців у рядку не збігається зі схемою відображення."""


def reported(func):
    """
    Перетворює ``HandlerError`` на результат ``{"success": False, ...}``.

    Незавершена транзакція відкочується. ``MethodNotAllowed`` та інші
    винятки не перехоплюються.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HandlerError as e:
            db.session.rollback()
            logger.info("%s: %s", func.__name__, e.message)
            return e.as_result()
    return wrapper
