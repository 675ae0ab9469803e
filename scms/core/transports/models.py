# scms/core/transports/models.py
"""
Модели данных транспорта.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from scms.common.constants import TransportType


class Transport(BaseModel):
    """Транспортное средство."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, description="ID транспорта")
    name: str = Field(..., description="Название")
    transport_type: TransportType = Field(TransportType.TRUCK, description="Тип транспорта")
    plate_number: Optional[str] = Field(None, description="Госномер")
    capacity: Optional[float] = Field(None, ge=0.0, description="Грузоподъёмность, кг")


class TransportCreateDTO(BaseModel):
    """DTO для создания транспорта."""

    name: str
    transport_type: TransportType = TransportType.TRUCK
    plate_number: Optional[str] = None
    capacity: Optional[float] = Field(None, ge=0.0)
