# scms/core/shipments/service.py
"""
Сервис для работы с отправками.
CRUD и переход к связанным водителю и транспорту.
"""

from __future__ import annotations

from typing import Optional

from scms.common.constants import TypeMsg
from scms.common.exceptions import NotFoundError
from scms.common.logger import log_info, log_warning
from scms.core.drivers.models import Driver
from scms.core.shipments.models import Shipment, ShipmentCreateDTO, ShipmentUpdateDTO
from scms.core.shipments.repository import ShipmentRepository
from scms.core.transports.models import Transport


def _not_found(shipment_id: int) -> NotFoundError:
    return NotFoundError(f"Shipment with ID {shipment_id} not found")


class ShipmentService:
    """Сервис отправок."""

    def __init__(self, shipment_repo: ShipmentRepository) -> None:
        self._shipment_repo = shipment_repo

    async def create(self, dto: ShipmentCreateDTO) -> Shipment:
        """Создаёт и сохраняет отправку."""
        shipment = self._shipment_repo.create(dto)
        shipment = await self._shipment_repo.save(shipment)
        await log_info(f"Отправка {shipment.id} создана", type_msg=TypeMsg.DEBUG)
        return shipment

    async def get_all(self) -> list[Shipment]:
        return await self._shipment_repo.find()

    async def get_by_id(self, shipment_id: int) -> Shipment:
        """
        Получает отправку по ID.

        Raises:
            NotFoundError: Если отправка не найдена
        """
        shipment = await self._shipment_repo.get_by_id(shipment_id)
        if shipment is None:
            await log_warning(f"Отправка {shipment_id} не найдена")
            raise _not_found(shipment_id)
        return shipment

    async def update(self, shipment_id: int, dto: ShipmentUpdateDTO) -> Shipment:
        """
        Обновляет отправку слиянием полей.
        Любое переданное поле перезаписывает текущее, в том числе None.
        """
        shipment = await self.get_by_id(shipment_id)
        self._shipment_repo.merge(shipment, dto)
        return await self._shipment_repo.save(shipment)

    async def delete(self, shipment_id: int) -> None:
        shipment = await self.get_by_id(shipment_id)
        await self._shipment_repo.remove(shipment)
        await log_info(f"Отправка {shipment_id} удалена", type_msg=TypeMsg.INFO)

    async def get_for_driver(self, driver_id: int) -> list[Shipment]:
        """Все отправки водителя."""
        return await self._shipment_repo.find({"driver_id": driver_id})

    async def get_for_transport(self, transport_id: int) -> list[Shipment]:
        """Все отправки на транспорте."""
        return await self._shipment_repo.find({"transport_id": transport_id})

    async def _get_with(self, shipment_id: int, relation: str) -> Shipment:
        shipment = await self._shipment_repo.get_by_id(shipment_id, relations=(relation,))
        if shipment is None:
            await log_warning(f"Отправка {shipment_id} не найдена")
            raise _not_found(shipment_id)
        return shipment

    async def get_driver_for(self, shipment_id: int) -> Optional[Driver]:
        """
        Водитель отправки.

        Returns:
            Водитель или None, если водитель не назначен

        Raises:
            NotFoundError: Если отправка не найдена
        """
        shipment = await self._get_with(shipment_id, "driver")
        return shipment.driver

    async def get_transport_for(self, shipment_id: int) -> Optional[Transport]:
        """
        Транспорт отправки.

        Raises:
            NotFoundError: Если отправка не найдена
        """
        shipment = await self._get_with(shipment_id, "transport")
        return shipment.transport
