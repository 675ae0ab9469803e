"""
Доменный слой (Core Domain).
Репозитории записей и сервисы водителей и отправок.
"""

from scms.core.drivers import Driver, DriverService
from scms.core.shipments import Shipment, ShipmentService
from scms.core.transports import Transport

__all__ = [
    "Driver",
    "DriverService",
    "Shipment",
    "ShipmentService",
    "Transport",
]
