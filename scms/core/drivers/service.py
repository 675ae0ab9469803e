# scms/core/drivers/service.py
"""
Сервис для работы с водителями.
CRUD, назначение транспорта и вход по e-mail/паролю.
"""

from __future__ import annotations

from typing import Optional

from scms.common.constants import TypeMsg
from scms.common.exceptions import NotFoundError
from scms.common.logger import log_info, log_warning
from scms.core.drivers.models import Driver, DriverCreateDTO, DriverUpdateDTO
from scms.core.drivers.repository import DriverRepository
from scms.core.transports.models import Transport
from scms.core.transports.repository import TransportRepository

DRIVER_NOT_FOUND = "Driver not found"
TRANSPORT_NOT_FOUND = "Transport not found"
NO_TRANSPORTS_ASSIGNED = "No transports are assigned to this driver"

# Порядок применения полей при обновлении.
# Поля из ALWAYS_APPLIED_FIELDS применяются, если переданы (даже False/0/None),
# остальные только при истинном значении: пустая строка имя не затирает.
UPDATE_FIELDS = (
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
ALWAYS_APPLIED_FIELDS = frozenset({"availability", "vehicle_id"})


class DriverService:
    """
    Сервис водителей.
    Каждая операция: один запрос к хранилищу или две зависимые
    выборки с последующей записью (без общей транзакции).
    """

    def __init__(
        self,
        driver_repo: DriverRepository,
        transport_repo: TransportRepository,
    ) -> None:
        """
        Инициализация сервиса.

        Args:
            driver_repo: Репозиторий водителей
            transport_repo: Репозиторий транспорта
        """
        self._driver_repo = driver_repo
        self._transport_repo = transport_repo

    # =========================================================================
    # ЧТЕНИЕ
    # =========================================================================

    async def get_all(self) -> list[Driver]:
        """Возвращает всех водителей."""
        return await self._driver_repo.find()

    async def get_by_id(self, driver_id: int) -> Optional[Driver]:
        """Получает водителя по ID (None, если нет)."""
        return await self._driver_repo.get_by_id(driver_id)

    async def get_by_name(self, name: str, case_sensitive: bool = False) -> Optional[Driver]:
        """
        Ищет водителя по имени.

        Args:
            name: Имя
            case_sensitive: Учитывать ли регистр (по умолчанию нет)
        """
        if case_sensitive:
            return await self._driver_repo.find_one({"name": name})
        return await self._driver_repo.find_one_ci("name", name)

    async def get_by_email(self, email: str, case_sensitive: bool = False) -> Optional[Driver]:
        """Ищет водителя по e-mail (по умолчанию без учёта регистра)."""
        if case_sensitive:
            return await self._driver_repo.find_one({"email": email})
        return await self._driver_repo.find_one_ci("email", email)

    # =========================================================================
    # ЗАПИСЬ
    # =========================================================================

    async def create(self, dto: DriverCreateDTO) -> Driver:
        """
        Создаёт водителя.

        Returns:
            Сохранённый водитель с присвоенным id
        """
        driver = await self._driver_repo.save(self._driver_repo.create(dto))
        await log_info(f"Водитель {driver.id} создан", type_msg=TypeMsg.DEBUG)
        return driver

    async def delete(self, driver_id: int) -> None:
        """
        Удаляет водителя.

        Raises:
            NotFoundError: Если ни одна запись не удалена
        """
        affected = await self._driver_repo.delete(driver_id)
        if affected == 0:
            await log_warning(f"Удаление: водитель {driver_id} не найден")
            raise NotFoundError(DRIVER_NOT_FOUND)

        await log_info(f"Водитель {driver_id} удалён", type_msg=TypeMsg.INFO)

    async def update(self, driver_id: int, dto: DriverUpdateDTO) -> Driver:
        """
        Частично обновляет водителя.

        Текстовые поля перезаписываются только непустыми значениями,
        availability и vehicle_id применяются любым явно переданным значением.

        Raises:
            NotFoundError: Если водитель не найден
        """
        driver = await self._driver_repo.get_by_id(driver_id)
        if driver is None:
            await log_warning(f"Обновление: водитель {driver_id} не найден")
            raise NotFoundError(DRIVER_NOT_FOUND)

        supplied = dto.model_fields_set
        for field in UPDATE_FIELDS:
            if field not in supplied:
                continue
            value = getattr(dto, field)
            if field in ALWAYS_APPLIED_FIELDS or value:
                setattr(driver, field, value)

        return await self._driver_repo.save(driver)

    # =========================================================================
    # ТРАНСПОРТ
    # =========================================================================

    async def get_assigned_transports(self, driver_id: int) -> Driver:
        """
        Возвращает водителя с загруженным списком транспорта.

        Raises:
            NotFoundError: Водитель не найден или транспорт не назначен
        """
        driver = await self._driver_repo.get_by_id(driver_id, relations=("transports",))
        if driver is None:
            await log_warning(f"Водитель {driver_id} не найден")
            raise NotFoundError(DRIVER_NOT_FOUND)

        if not driver.transports:
            await log_warning(f"У водителя {driver_id} нет назначенного транспорта")
            raise NotFoundError(NO_TRANSPORTS_ASSIGNED)

        return driver

    async def _load_pair(self, driver_id: int, transport_id: int) -> tuple[Driver, Transport]:
        """Загружает водителя (с транспортом) и транспорт независимо друг от друга."""
        driver = await self._driver_repo.get_by_id(driver_id, relations=("transports",))
        if driver is None:
            await log_warning(f"Водитель {driver_id} не найден")
            raise NotFoundError(DRIVER_NOT_FOUND)

        transport = await self._transport_repo.get_by_id(transport_id)
        if transport is None:
            await log_warning(f"Транспорт {transport_id} не найден")
            raise NotFoundError(TRANSPORT_NOT_FOUND)

        return driver, transport

    async def assign_transport(self, driver_id: int, transport_id: int) -> Driver:
        """
        Назначает транспорт водителю.
        Повторное назначение добавляет ещё одну запись (без проверки дубликатов).
        """
        driver, transport = await self._load_pair(driver_id, transport_id)

        driver.transports = [*(driver.transports or []), transport]
        driver = await self._driver_repo.save(driver)

        await log_info(
            f"Транспорт {transport_id} назначен водителю {driver_id}",
            type_msg=TypeMsg.INFO,
        )
        return driver

    async def unassign_transport(self, driver_id: int, transport_id: int) -> Driver:
        """Снимает с водителя все назначения транспорта с указанным ID."""
        driver, _ = await self._load_pair(driver_id, transport_id)

        driver.transports = [t for t in driver.transports or [] if t.id != transport_id]
        driver = await self._driver_repo.save(driver)

        await log_info(
            f"Транспорт {transport_id} снят с водителя {driver_id}",
            type_msg=TypeMsg.INFO,
        )
        return driver

    # =========================================================================
    # ВХОД
    # =========================================================================

    async def login(self, email: str, password: str) -> bool:
        """
        Проверяет пароль водителя.
        Сравнение открытым текстом, токены и сессии не выдаются.

        Raises:
            NotFoundError: Если водитель с таким e-mail не найден
        """
        driver = await self._driver_repo.find_one({"email": email})
        if driver is None:
            await log_warning(f"Вход: водитель с e-mail {email} не найден")
            raise NotFoundError(DRIVER_NOT_FOUND)

        return password == driver.password
