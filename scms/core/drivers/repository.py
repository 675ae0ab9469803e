# scms/core/drivers/repository.py
"""
Репозиторий водителей.
Связь водитель-транспорт хранится явной таблицей пар driver_transports.
"""

from __future__ import annotations

from scms.core.drivers.models import Driver
from scms.core.records import RecordRepository
from scms.core.transports.models import Transport


class DriverRepository(RecordRepository[Driver]):
    """Репозиторий водителей со связью transports (многие-ко-многим)."""

    table = "drivers"
    model = Driver
    columns = (
        "name",
        "contact_number",
        "license_number",
        "availability",
        "address",
        "email",
        "password",
        "vehicle_id",
        "notes",
        "photo",
    )
    relations = ("transports",)

    async def _load_relation(self, record: Driver, name: str) -> Driver:
        """Загружает транспорт водителя в порядке назначения."""
        rows = await self._db.fetch(
            """
            SELECT t.id, t.name, t.transport_type, t.plate_number, t.capacity
            FROM driver_transports dt
            JOIN transports t ON t.id = dt.transport_id
            WHERE dt.driver_id = $1
            ORDER BY dt.id
            """,
            record.id,
        )
        record.transports = [Transport(**dict(row)) for row in rows]
        return record

    async def save(self, record: Driver) -> Driver:
        """
        Сохраняет водителя.

        Если связь transports загружена, пары driver_transports
        перезаписываются в той же транзакции в порядке списка.
        Повторяющиеся пары сохраняются как есть.
        """
        if record.transports is None:
            return await self._save_row(record)

        transports = list(record.transports)

        async with self._db.transaction() as conn:
            stored = await self._save_row(record, conn)
            await conn.execute(
                "DELETE FROM driver_transports WHERE driver_id = $1",
                stored.id,
            )
            if transports:
                await conn.executemany(
                    "INSERT INTO driver_transports (driver_id, transport_id) VALUES ($1, $2)",
                    [(stored.id, transport.id) for transport in transports],
                )

        stored.transports = transports
        return stored
