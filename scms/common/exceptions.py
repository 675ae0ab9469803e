# scms/common/exceptions.py
"""
Исключения доменного слоя.
"""

from __future__ import annotations


class SCMSError(Exception):
    """Базовая ошибка приложения."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(SCMSError):
    """Запись не найдена в хранилище."""

    status_code = 404
