# scms/core/shipments/repository.py
"""
Репозиторий отправок со связями driver и transport.
"""

from __future__ import annotations

from scms.core.drivers.repository import DriverRepository
from scms.core.records import RecordRepository
from scms.core.shipments.models import Shipment
from scms.core.transports.repository import TransportRepository
from scms.infra.database import DatabaseManager


class ShipmentRepository(RecordRepository[Shipment]):
    """Репозиторий отправок."""

    table = "shipments"
    model = Shipment
    columns = (
        "driver_id",
        "transport_id",
        "origin",
        "destination",
        "description",
        "weight",
        "status",
        "pickup_date",
        "delivery_date",
    )
    relations = ("driver", "transport")

    def __init__(
        self,
        db: DatabaseManager,
        driver_repo: DriverRepository | None = None,
        transport_repo: TransportRepository | None = None,
    ) -> None:
        super().__init__(db)
        self._driver_repo = driver_repo or DriverRepository(db)
        self._transport_repo = transport_repo or TransportRepository(db)

    async def _load_relation(self, record: Shipment, name: str) -> Shipment:
        if name == "driver":
            if record.driver_id is not None:
                record.driver = await self._driver_repo.get_by_id(record.driver_id)
        elif name == "transport":
            if record.transport_id is not None:
                record.transport = await self._transport_repo.get_by_id(record.transport_id)
        return record
