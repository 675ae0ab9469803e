# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Iterable, Mapping, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")

from scms.common.exceptions import NotFoundError
from scms.core.drivers.models import Driver
from scms.core.drivers.repository import DriverRepository
from scms.core.drivers.service import DriverService
from scms.core.records import RecordRepository
from scms.core.shipments.repository import ShipmentRepository
from scms.core.shipments.service import ShipmentService
from scms.core.transports.models import Transport
from scms.core.transports.repository import TransportRepository


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_conn() -> MagicMock:
    """Мок соединения asyncpg внутри транзакции."""
    conn = MagicMock()
    conn.fetchrow = AsyncMock(return_value=None)
    conn.execute = AsyncMock(return_value="DELETE 0")
    conn.executemany = AsyncMock(return_value=None)
    return conn


@pytest.fixture
def mock_db(mock_conn: MagicMock) -> MagicMock:
    """Мок менеджера базы данных."""
    db = MagicMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.execute = AsyncMock(return_value="DELETE 1")
    db.fetchval = AsyncMock(return_value=None)

    @asynccontextmanager
    async def transaction() -> AsyncGenerator[MagicMock, None]:
        yield mock_conn

    db.transaction = MagicMock(side_effect=transaction)
    return db


# =============================================================================
# IN-MEMORY ХРАНИЛИЩЕ ЗАПИСЕЙ
# =============================================================================

class InMemoryRepository(RecordRepository):
    """
    Подменяет обращения к БД словарём в памяти.
    create/merge/get_by_id/remove и загрузка связей остаются настоящими.
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(db=None, **kwargs)
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    def _ordered(self) -> list[dict[str, Any]]:
        return [self.rows[key] for key in sorted(self.rows)]

    async def find(self, where: Mapping[str, Any] | None = None) -> list:
        where = dict(where or {})
        for field in where:
            self._check_field(field)
        return [
            self._to_model(row)
            for row in self._ordered()
            if all(row.get(k) == self._to_db(v) for k, v in where.items())
        ]

    async def find_one(self, where: Mapping[str, Any], relations: Iterable[str] = ()) -> Optional[Any]:
        relations = self._check_relations(relations)
        found = await self.find(where)
        if not found:
            return None
        return await self._load_relations(found[0], relations)

    async def find_one_ci(self, field: str, value: str) -> Optional[Any]:
        self._check_field(field)
        for row in self._ordered():
            stored = row.get(field)
            if stored is not None and stored.lower() == value.lower():
                return self._to_model(row)
        return None

    async def _save_row(self, record: Any, conn: Any = None) -> Any:
        values = dict(zip(self.columns, self._column_values(record)))
        if record.id is None:
            record_id = self._next_id
            self._next_id += 1
        else:
            record_id = record.id
            if record_id not in self.rows:
                raise NotFoundError(f"Record {record_id} not found in {self.table}")
        self.rows[record_id] = {"id": record_id, **values}
        return self._to_model(self.rows[record_id])

    async def delete(self, record_id: int) -> int:
        return 1 if self.rows.pop(record_id, None) is not None else 0


class FakeTransportRepository(InMemoryRepository, TransportRepository):
    """Транспорт в памяти."""


class FakeDriverRepository(InMemoryRepository, DriverRepository):
    """Водители в памяти; связь хранится списком пар (driver_id, transport_id)."""

    def __init__(self, transport_repo: FakeTransportRepository) -> None:
        super().__init__()
        self.transport_repo = transport_repo
        self.pairs: list[tuple[int, int]] = []

    async def _load_relation(self, record: Driver, name: str) -> Driver:
        record.transports = [
            self.transport_repo._to_model(self.transport_repo.rows[transport_id])
            for driver_id, transport_id in self.pairs
            if driver_id == record.id
        ]
        return record

    async def save(self, record: Driver) -> Driver:
        stored = await self._save_row(record)
        if record.transports is not None:
            self.pairs = [p for p in self.pairs if p[0] != stored.id]
            self.pairs.extend((stored.id, t.id) for t in record.transports)
            stored.transports = list(record.transports)
        return stored


class FakeShipmentRepository(InMemoryRepository, ShipmentRepository):
    """Отправки в памяти; связи загружаются через фейковые репозитории."""


@pytest.fixture
def transport_repo() -> FakeTransportRepository:
    return FakeTransportRepository()


@pytest.fixture
def driver_repo(transport_repo: FakeTransportRepository) -> FakeDriverRepository:
    return FakeDriverRepository(transport_repo)


@pytest.fixture
def shipment_repo(
    driver_repo: FakeDriverRepository,
    transport_repo: FakeTransportRepository,
) -> FakeShipmentRepository:
    return FakeShipmentRepository(driver_repo=driver_repo, transport_repo=transport_repo)


@pytest.fixture
def driver_service(
    driver_repo: FakeDriverRepository,
    transport_repo: FakeTransportRepository,
) -> DriverService:
    return DriverService(driver_repo, transport_repo)


@pytest.fixture
def shipment_service(shipment_repo: FakeShipmentRepository) -> ShipmentService:
    return ShipmentService(shipment_repo)


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

@pytest.fixture
def sample_driver_data() -> dict[str, Any]:
    """Пример данных водителя."""
    return {
        "name": "Jane Doe",
        "contact_number": "+380501234567",
        "license_number": "LIC-123456",
        "availability": True,
        "address": "Kyiv, Khreshchatyk 1",
        "email": "jane@example.com",
        "password": "secret",
        "vehicle_id": 7,
        "notes": "Night shifts only",
        "photo": "https://cdn.example.com/jane.png",
    }


@pytest.fixture
def sample_driver_row(sample_driver_data: dict[str, Any]) -> dict[str, Any]:
    """Строка водителя из БД."""
    return {"id": 1, **sample_driver_data}


@pytest.fixture
def sample_transport_row() -> dict[str, Any]:
    """Строка транспорта из БД."""
    return {
        "id": 10,
        "name": "Volvo FH16",
        "transport_type": "truck",
        "plate_number": "AA1234BB",
        "capacity": 20000.0,
    }


@pytest.fixture
def sample_shipment_row() -> dict[str, Any]:
    """Строка отправки из БД."""
    return {
        "id": 100,
        "driver_id": 1,
        "transport_id": 10,
        "origin": "Kyiv",
        "destination": "Lviv",
        "description": "Pallets",
        "weight": 1200.5,
        "status": "pending",
        "pickup_date": None,
        "delivery_date": None,
    }


@pytest.fixture
def make_transport(transport_repo: FakeTransportRepository):
    """Фабрика сохранённого транспорта."""

    async def _make(name: str = "Volvo FH16", **fields: Any) -> Transport:
        return await transport_repo.save(transport_repo.create({"name": name, **fields}))

    return _make
