"""
Домен водителей.
Модели, репозиторий и сервис водителей.
"""

from scms.core.drivers.models import Driver, DriverCreateDTO, DriverUpdateDTO
from scms.core.drivers.repository import DriverRepository
from scms.core.drivers.service import DriverService

__all__ = [
    "Driver",
    "DriverCreateDTO",
    "DriverUpdateDTO",
    "DriverRepository",
    "DriverService",
]
