"""
Домен транспорта.
Транспорт адресуется ядром только по id.
"""

from scms.core.transports.models import Transport, TransportCreateDTO
from scms.core.transports.repository import TransportRepository

__all__ = [
    "Transport",
    "TransportCreateDTO",
    "TransportRepository",
]
