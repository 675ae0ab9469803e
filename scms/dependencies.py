# scms/dependencies.py
"""
Фабрики сервисов поверх глобального DatabaseManager.
"""

from __future__ import annotations

from scms.core.drivers.repository import DriverRepository
from scms.core.drivers.service import DriverService
from scms.core.shipments.repository import ShipmentRepository
from scms.core.shipments.service import ShipmentService
from scms.core.transports.repository import TransportRepository
from scms.infra.database import DatabaseManager, get_db


def get_database() -> DatabaseManager:
    return get_db()


def get_driver_service(db: DatabaseManager | None = None) -> DriverService:
    db = db or get_database()
    return DriverService(DriverRepository(db), TransportRepository(db))


def get_shipment_service(db: DatabaseManager | None = None) -> ShipmentService:
    db = db or get_database()
    return ShipmentService(
        ShipmentRepository(db, DriverRepository(db), TransportRepository(db)),
    )
