# scms/core/drivers/models.py
"""
Модели данных водителей.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from scms.core.transports.models import Transport


class Driver(BaseModel):
    """Модель водителя."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, description="ID водителя")
    name: str = Field(..., description="Имя")
    contact_number: Optional[str] = Field(None, description="Контактный телефон")
    license_number: Optional[str] = Field(None, description="Номер водительского удостоверения")
    availability: Optional[bool] = Field(True, description="Доступен ли водитель")
    address: Optional[str] = Field(None, description="Адрес")
    email: Optional[str] = Field(None, description="E-mail (логин)")
    # Хранится как есть, без хеширования
    password: Optional[str] = Field(None, description="Пароль")
    vehicle_id: Optional[int] = Field(None, description="Закреплённое ТС")
    notes: Optional[str] = Field(None, description="Заметки")
    photo: Optional[str] = Field(None, description="Ссылка на фото")

    # None: связь не загружена. Список может содержать дубликаты
    transports: Optional[list[Transport]] = Field(None, description="Назначенный транспорт")

    @property
    def transport_ids(self) -> list[int]:
        """ID назначенного транспорта в порядке назначения."""
        return [t.id for t in self.transports or [] if t.id is not None]


class DriverCreateDTO(BaseModel):
    """DTO для создания водителя."""

    name: str
    contact_number: Optional[str] = None
    license_number: Optional[str] = None
    availability: bool = True
    address: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    vehicle_id: Optional[int] = None
    notes: Optional[str] = None
    photo: Optional[str] = None


class DriverUpdateDTO(BaseModel):
    """
    DTO для частичного обновления водителя.
    Переданные поля видны в model_fields_set: так отличаются
    "поле не передано" и "поле передано пустым/False/None".
    """

    name: Optional[str] = None
    contact_number: Optional[str] = None
    license_number: Optional[str] = None
    availability: Optional[bool] = None
    address: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    vehicle_id: Optional[int] = None
    notes: Optional[str] = None
    photo: Optional[str] = None
