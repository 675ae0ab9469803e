# scms/core/shipments/models.py
"""
Модели данных отправок.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from scms.common.constants import ShipmentStatus
from scms.core.drivers.models import Driver
from scms.core.transports.models import Transport


class Shipment(BaseModel):
    """Модель отправки."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, description="ID отправки")
    driver_id: Optional[int] = Field(None, description="ID водителя (FK)")
    transport_id: Optional[int] = Field(None, description="ID транспорта (FK)")

    origin: Optional[str] = Field(None, description="Пункт отправления")
    destination: Optional[str] = Field(None, description="Пункт назначения")
    description: Optional[str] = Field(None, description="Описание груза")
    weight: Optional[float] = Field(None, ge=0.0, description="Вес, кг")
    status: ShipmentStatus = Field(ShipmentStatus.PENDING, description="Статус")
    pickup_date: Optional[datetime] = Field(None, description="Дата забора")
    delivery_date: Optional[datetime] = Field(None, description="Дата доставки")

    # Заполняются только при загрузке соответствующей связи
    driver: Optional[Driver] = Field(None, description="Водитель")
    transport: Optional[Transport] = Field(None, description="Транспорт")


class ShipmentCreateDTO(BaseModel):
    """DTO для создания отправки."""

    driver_id: Optional[int] = None
    transport_id: Optional[int] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    description: Optional[str] = None
    weight: Optional[float] = Field(None, ge=0.0)
    status: ShipmentStatus = ShipmentStatus.PENDING
    pickup_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None


class ShipmentUpdateDTO(BaseModel):
    """
    DTO для обновления отправки.
    Применяются все явно переданные поля, включая None.
    """

    driver_id: Optional[int] = None
    transport_id: Optional[int] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    description: Optional[str] = None
    weight: Optional[float] = Field(None, ge=0.0)
    status: ShipmentStatus = ShipmentStatus.PENDING
    pickup_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
