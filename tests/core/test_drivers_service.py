# tests/core/test_drivers_service.py
"""
Тесты для сервиса водителей (поверх in-memory хранилища).
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio

from scms.common.exceptions import NotFoundError
from scms.core.drivers.models import Driver, DriverCreateDTO, DriverUpdateDTO
from scms.core.drivers.service import DriverService


@pytest_asyncio.fixture
async def driver(driver_service: DriverService, sample_driver_data: dict[str, Any]) -> Driver:
    """Сохранённый водитель."""
    return await driver_service.create(DriverCreateDTO(**sample_driver_data))


class TestDriverServiceRead:
    """Чтение водителей."""

    @pytest.mark.asyncio
    async def test_get_all(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет получение всех водителей."""
        other = await driver_service.create(DriverCreateDTO(name="John"))

        result = await driver_service.get_all()

        assert [d.id for d in result] == [driver.id, other.id]

    @pytest.mark.asyncio
    async def test_get_all_empty(self, driver_service: DriverService) -> None:
        """Проверяет пустой список водителей."""
        assert await driver_service.get_all() == []

    @pytest.mark.asyncio
    async def test_get_by_id(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет, что возвращается запись с запрошенным id."""
        result = await driver_service.get_by_id(driver.id)

        assert result is not None
        assert result.id == driver.id
        assert result.name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, driver_service: DriverService) -> None:
        """Проверяет, что для отсутствующего id возвращается None."""
        assert await driver_service.get_by_id(999) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["jane doe", "JANE DOE", "Jane Doe"])
    async def test_get_by_name_case_insensitive(
        self,
        driver_service: DriverService,
        driver: Driver,
        query: str,
    ) -> None:
        """Проверяет поиск по имени без учёта регистра."""
        result = await driver_service.get_by_name(query)

        assert result is not None
        assert result.id == driver.id

    @pytest.mark.asyncio
    async def test_get_by_name_case_sensitive(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет точный поиск по имени."""
        assert await driver_service.get_by_name("jane doe", case_sensitive=True) is None
        result = await driver_service.get_by_name("Jane Doe", case_sensitive=True)
        assert result is not None and result.id == driver.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["jane@example.com", "JANE@EXAMPLE.COM", "Jane@Example.com"])
    async def test_get_by_email_case_insensitive(
        self,
        driver_service: DriverService,
        driver: Driver,
        query: str,
    ) -> None:
        """Проверяет поиск по e-mail без учёта регистра."""
        result = await driver_service.get_by_email(query)

        assert result is not None
        assert result.email == "jane@example.com"

    @pytest.mark.asyncio
    async def test_get_by_email_case_sensitive(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет точный поиск по e-mail."""
        assert await driver_service.get_by_email("JANE@EXAMPLE.COM", case_sensitive=True) is None


class TestDriverServiceWrite:
    """Создание, удаление и обновление водителей."""

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, driver: Driver) -> None:
        """Проверяет, что созданный водитель получает id."""
        assert driver.id is not None
        assert driver.password == "secret"
        assert driver.transports is None

    @pytest.mark.asyncio
    async def test_delete(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет удаление водителя."""
        await driver_service.delete(driver.id)

        assert await driver_service.get_by_id(driver.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing(self, driver_service: DriverService) -> None:
        """Проверяет NotFoundError при удалении несуществующего водителя."""
        with pytest.raises(NotFoundError, match="Driver not found") as exc_info:
            await driver_service.delete(999)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_update_missing(self, driver_service: DriverService) -> None:
        """Проверяет NotFoundError при обновлении несуществующего водителя."""
        with pytest.raises(NotFoundError, match="Driver not found"):
            await driver_service.update(999, DriverUpdateDTO(name="Nobody"))

    @pytest.mark.asyncio
    async def test_update_applies_false_availability(
        self,
        driver_service: DriverService,
        driver: Driver,
    ) -> None:
        """Проверяет, что availability=False применяется."""
        result = await driver_service.update(driver.id, DriverUpdateDTO(availability=False))

        assert result.availability is False
        stored = await driver_service.get_by_id(driver.id)
        assert stored.availability is False

    @pytest.mark.asyncio
    async def test_update_ignores_empty_name(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет, что пустое имя не затирает текущее."""
        result = await driver_service.update(driver.id, DriverUpdateDTO(name=""))

        assert result.name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_update_ignores_none_text_fields(
        self,
        driver_service: DriverService,
        driver: Driver,
    ) -> None:
        """Проверяет, что None в текстовых полях не применяется."""
        result = await driver_service.update(
            driver.id,
            DriverUpdateDTO(email=None, password=None, notes=None),
        )

        assert result.email == "jane@example.com"
        assert result.password == "secret"
        assert result.notes == "Night shifts only"

    @pytest.mark.asyncio
    async def test_update_applies_zero_and_none_vehicle(
        self,
        driver_service: DriverService,
        driver: Driver,
    ) -> None:
        """Проверяет, что vehicle_id применяется при любом переданном значении."""
        result = await driver_service.update(driver.id, DriverUpdateDTO(vehicle_id=0))
        assert result.vehicle_id == 0

        result = await driver_service.update(driver.id, DriverUpdateDTO(vehicle_id=None))
        assert result.vehicle_id is None

    @pytest.mark.asyncio
    async def test_update_omitted_fields_untouched(
        self,
        driver_service: DriverService,
        driver: Driver,
    ) -> None:
        """Проверяет, что не переданные поля не меняются."""
        result = await driver_service.update(driver.id, DriverUpdateDTO(notes="Day shifts"))

        assert result.notes == "Day shifts"
        assert result.availability is True
        assert result.vehicle_id == 7
        assert result.name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_update_from_dict_payload(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет разбор частичного payload через model_validate."""
        dto = DriverUpdateDTO.model_validate({"name": "Janet", "availability": False, "photo": ""})

        result = await driver_service.update(driver.id, dto)

        assert result.name == "Janet"
        assert result.availability is False
        assert result.photo == "https://cdn.example.com/jane.png"


class TestDriverServiceTransports:
    """Назначение транспорта."""

    @pytest.mark.asyncio
    async def test_assign_then_list(self, driver_service: DriverService, driver: Driver, make_transport) -> None:
        """Проверяет, что назначенный транспорт виден в списке водителя."""
        transport = await make_transport()

        await driver_service.assign_transport(driver.id, transport.id)
        result = await driver_service.get_assigned_transports(driver.id)

        assert transport.id in result.transport_ids

    @pytest.mark.asyncio
    async def test_assign_twice_duplicates(
        self,
        driver_service: DriverService,
        driver: Driver,
        make_transport,
    ) -> None:
        """Проверяет, что повторное назначение создаёт дубликат."""
        transport = await make_transport()

        await driver_service.assign_transport(driver.id, transport.id)
        await driver_service.assign_transport(driver.id, transport.id)
        result = await driver_service.get_assigned_transports(driver.id)

        assert result.transport_ids == [transport.id, transport.id]

    @pytest.mark.asyncio
    async def test_assign_missing_driver(self, driver_service: DriverService, make_transport) -> None:
        """Проверяет NotFoundError для несуществующего водителя."""
        transport = await make_transport()

        with pytest.raises(NotFoundError, match="Driver not found"):
            await driver_service.assign_transport(999, transport.id)

    @pytest.mark.asyncio
    async def test_assign_missing_transport(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет NotFoundError для несуществующего транспорта."""
        with pytest.raises(NotFoundError, match="Transport not found"):
            await driver_service.assign_transport(driver.id, 999)

    @pytest.mark.asyncio
    async def test_unassign_removes_all_occurrences(
        self,
        driver_service: DriverService,
        driver: Driver,
        make_transport,
    ) -> None:
        """Проверяет, что снятие удаляет все вхождения транспорта."""
        first = await make_transport("Volvo FH16")
        second = await make_transport("MAN TGX")
        await driver_service.assign_transport(driver.id, first.id)
        await driver_service.assign_transport(driver.id, second.id)
        await driver_service.assign_transport(driver.id, first.id)

        result = await driver_service.unassign_transport(driver.id, first.id)

        assert result.transport_ids == [second.id]
        listed = await driver_service.get_assigned_transports(driver.id)
        assert listed.transport_ids == [second.id]

    @pytest.mark.asyncio
    async def test_unassign_missing_transport(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет NotFoundError при снятии несуществующего транспорта."""
        with pytest.raises(NotFoundError, match="Transport not found"):
            await driver_service.unassign_transport(driver.id, 999)

    @pytest.mark.asyncio
    async def test_assigned_transports_missing_driver(self, driver_service: DriverService) -> None:
        """Проверяет NotFoundError для несуществующего водителя."""
        with pytest.raises(NotFoundError, match="Driver not found"):
            await driver_service.get_assigned_transports(999)

    @pytest.mark.asyncio
    async def test_assigned_transports_empty(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет отдельную ошибку, если транспорт не назначен."""
        with pytest.raises(NotFoundError, match="No transports are assigned to this driver"):
            await driver_service.get_assigned_transports(driver.id)

    @pytest.mark.asyncio
    async def test_unassign_last_transport_empties_list(
        self,
        driver_service: DriverService,
        driver: Driver,
        make_transport,
    ) -> None:
        """Проверяет, что после снятия последнего транспорта список пуст."""
        transport = await make_transport()
        await driver_service.assign_transport(driver.id, transport.id)
        await driver_service.unassign_transport(driver.id, transport.id)

        with pytest.raises(NotFoundError, match="No transports"):
            await driver_service.get_assigned_transports(driver.id)


class TestDriverServiceLogin:
    """Вход водителя."""

    @pytest.mark.asyncio
    async def test_login_correct_password(self, driver_service: DriverService, driver: Driver) -> None:
        assert await driver_service.login("jane@example.com", "secret") is True

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, driver_service: DriverService, driver: Driver) -> None:
        assert await driver_service.login("jane@example.com", "wrong") is False

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, driver_service: DriverService, driver: Driver) -> None:
        with pytest.raises(NotFoundError, match="Driver not found"):
            await driver_service.login("nobody@example.com", "secret")

    @pytest.mark.asyncio
    async def test_login_email_is_exact(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет, что вход ищет e-mail с учётом регистра."""
        with pytest.raises(NotFoundError):
            await driver_service.login("JANE@EXAMPLE.COM", "secret")


class TestDriverServiceWarnings:
    """Предупреждения в лог перед NotFoundError."""

    @pytest.mark.asyncio
    async def test_assigned_transports_missing_driver_logged(self, driver_service: DriverService) -> None:
        with patch("scms.core.drivers.service.log_warning", new_callable=AsyncMock) as mock_warning:
            with pytest.raises(NotFoundError):
                await driver_service.get_assigned_transports(999)

        mock_warning.assert_awaited_once()
        assert "999" in mock_warning.call_args.args[0]

    @pytest.mark.asyncio
    async def test_assigned_transports_empty_logged(self, driver_service: DriverService, driver: Driver) -> None:
        with patch("scms.core.drivers.service.log_warning", new_callable=AsyncMock) as mock_warning:
            with pytest.raises(NotFoundError, match="No transports"):
                await driver_service.get_assigned_transports(driver.id)

        mock_warning.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_login_unknown_email_logged(self, driver_service: DriverService, driver: Driver) -> None:
        """Проверяет предупреждение при входе с неизвестным e-mail."""
        with patch("scms.core.drivers.service.log_warning", new_callable=AsyncMock) as mock_warning:
            with pytest.raises(NotFoundError):
                await driver_service.login("nobody@example.com", "secret")

        mock_warning.assert_awaited_once()
        assert "nobody@example.com" in mock_warning.call_args.args[0]
