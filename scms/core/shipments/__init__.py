"""
Домен отправок.
"""

from scms.core.shipments.models import Shipment, ShipmentCreateDTO, ShipmentUpdateDTO
from scms.core.shipments.repository import ShipmentRepository
from scms.core.shipments.service import ShipmentService

__all__ = [
    "Shipment",
    "ShipmentCreateDTO",
    "ShipmentUpdateDTO",
    "ShipmentRepository",
    "ShipmentService",
]
