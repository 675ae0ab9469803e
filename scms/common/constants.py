# scms/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ShipmentStatus(str, Enum):
    """Статусы отправки."""
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class TransportType(str, Enum):
    """Типы транспорта."""
    TRUCK = "truck"
    VAN = "van"
    TRAILER = "trailer"
    CAR = "car"
