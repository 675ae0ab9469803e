# scms/core/records.py
"""
Базовый репозиторий записей (Record Store).
Реализует паттерн Repository поверх DatabaseManager: поиск по id и по
условию, регистронезависимый поиск по текстовому полю, создание,
сохранение (insert/update), слияние полей и удаление.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Generic, Iterable, Mapping, Optional, TypeVar

from asyncpg import Connection, Record
from pydantic import BaseModel

from scms.common.exceptions import NotFoundError
from scms.infra.database import DatabaseManager

ModelT = TypeVar("ModelT", bound=BaseModel)


def affected_rows(status: str) -> int:
    """Количество затронутых строк из статуса команды asyncpg ("DELETE 3" -> 3)."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return 0


class RecordRepository(Generic[ModelT]):
    """
    Репозиторий одной таблицы.

    Наследники задают имя таблицы, модель, список колонок (без id) и
    поддерживаемые связи. Имена полей в условиях проверяются по списку
    колонок, поэтому в SQL попадают только известные идентификаторы.
    """

    table: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    columns: ClassVar[tuple[str, ...]]
    relations: ClassVar[tuple[str, ...]] = ()

    def __init__(self, db: DatabaseManager) -> None:
        """
        Инициализация репозитория.

        Args:
            db: Менеджер базы данных (Dependency Injection)
        """
        self._db = db

    # =========================================================================
    # ВСПОМОГАТЕЛЬНЫЕ МЕТОДЫ
    # =========================================================================

    @property
    def _select_list(self) -> str:
        return ", ".join(("id", *self.columns))

    def _check_field(self, field: str) -> str:
        if field != "id" and field not in self.columns:
            raise ValueError(f"Неизвестное поле {field!r} для таблицы {self.table}")
        return field

    def _check_relations(self, relations: Iterable[str]) -> tuple[str, ...]:
        relations = tuple(relations)
        for name in relations:
            if name not in self.relations:
                raise ValueError(f"Неизвестная связь {name!r} для таблицы {self.table}")
        return relations

    def _build_where(self, where: Mapping[str, Any] | None) -> tuple[str, list[Any]]:
        """Строит WHERE по равенству полей; None превращается в IS NULL."""
        if not where:
            return "", []

        clauses: list[str] = []
        args: list[Any] = []
        for field, value in where.items():
            self._check_field(field)
            if value is None:
                clauses.append(f"{field} IS NULL")
            else:
                args.append(self._to_db(value))
                clauses.append(f"{field} = ${len(args)}")

        return " WHERE " + " AND ".join(clauses), args

    @staticmethod
    def _to_db(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    def _to_model(self, row: Record | Mapping[str, Any]) -> ModelT:
        return self.model(**dict(row))  # type: ignore[return-value]

    def _column_values(self, record: ModelT) -> list[Any]:
        return [self._to_db(getattr(record, column)) for column in self.columns]

    async def _load_relation(self, record: ModelT, name: str) -> ModelT:
        """Заполняет одну связь записи. Переопределяется наследниками."""
        raise ValueError(f"Связь {name!r} не поддерживается таблицей {self.table}")

    async def _load_relations(self, record: ModelT, relations: Iterable[str]) -> ModelT:
        for name in self._check_relations(relations):
            record = await self._load_relation(record, name)
        return record

    # =========================================================================
    # ЧТЕНИЕ
    # =========================================================================

    async def get_by_id(self, record_id: int, relations: Iterable[str] = ()) -> Optional[ModelT]:
        """
        Получает запись по ID.

        Args:
            record_id: ID записи
            relations: Связи, которые нужно загрузить вместе с записью

        Returns:
            Запись или None
        """
        return await self.find_one({"id": record_id}, relations=relations)

    async def find_one(
        self,
        where: Mapping[str, Any],
        relations: Iterable[str] = (),
    ) -> Optional[ModelT]:
        """
        Получает первую запись, удовлетворяющую условию равенства полей.

        Args:
            where: Условие вида {"поле": значение}
            relations: Связи для загрузки

        Returns:
            Запись или None
        """
        relations = self._check_relations(relations)
        clause, args = self._build_where(where)
        row = await self._db.fetchrow(
            f"SELECT {self._select_list} FROM {self.table}{clause} ORDER BY id LIMIT 1",
            *args,
        )
        if row is None:
            return None

        return await self._load_relations(self._to_model(row), relations)

    async def find_one_ci(self, field: str, value: str) -> Optional[ModelT]:
        """
        Регистронезависимый поиск по текстовому полю:
        LOWER(field) = LOWER(value).
        """
        self._check_field(field)
        row = await self._db.fetchrow(
            f"SELECT {self._select_list} FROM {self.table} "
            f"WHERE LOWER({field}) = LOWER($1) ORDER BY id LIMIT 1",
            value,
        )
        return self._to_model(row) if row is not None else None

    async def find(self, where: Mapping[str, Any] | None = None) -> list[ModelT]:
        """Возвращает все записи, удовлетворяющие условию (или все записи таблицы)."""
        clause, args = self._build_where(where)
        rows = await self._db.fetch(
            f"SELECT {self._select_list} FROM {self.table}{clause} ORDER BY id",
            *args,
        )
        return [self._to_model(row) for row in rows]

    # =========================================================================
    # ЗАПИСЬ
    # =========================================================================

    def create(self, data: BaseModel | Mapping[str, Any]) -> ModelT:
        """
        Создаёт несохранённую запись из набора полей.
        Поля, которых нет среди колонок таблицы, отбрасываются.
        """
        fields = data.model_dump() if isinstance(data, BaseModel) else dict(data)
        known = {k: v for k, v in fields.items() if k in self.columns}
        return self.model(**known)  # type: ignore[return-value]

    def merge(self, record: ModelT, fields: BaseModel | Mapping[str, Any]) -> ModelT:
        """
        Поверхностно перезаписывает поля записи переданными значениями.
        Для pydantic-модели берутся только явно переданные поля.
        """
        if isinstance(fields, BaseModel):
            fields = fields.model_dump(exclude_unset=True)

        for key, value in fields.items():
            if key in self.columns:
                setattr(record, key, value)
        return record

    async def _save_row(self, record: ModelT, conn: Connection | None = None) -> ModelT:
        """INSERT для записи без id, UPDATE для записи с id."""
        values = self._column_values(record)
        fetchrow = conn.fetchrow if conn is not None else self._db.fetchrow

        if record.id is None:  # type: ignore[attr-defined]
            placeholders = ", ".join(f"${i}" for i in range(1, len(values) + 1))
            row = await fetchrow(
                f"INSERT INTO {self.table} ({', '.join(self.columns)}) "
                f"VALUES ({placeholders}) RETURNING {self._select_list}",
                *values,
            )
        else:
            assignments = ", ".join(
                f"{column} = ${i}" for i, column in enumerate(self.columns, start=2)
            )
            row = await fetchrow(
                f"UPDATE {self.table} SET {assignments} WHERE id = $1 RETURNING {self._select_list}",
                record.id,  # type: ignore[attr-defined]
                *values,
            )
            if row is None:
                raise NotFoundError(f"Record {record.id} not found in {self.table}")  # type: ignore[attr-defined]

        return self._to_model(row)

    async def save(self, record: ModelT) -> ModelT:
        """
        Сохраняет запись: вставляет новую или обновляет существующую.

        Returns:
            Сохранённая запись (с присвоенным id)
        """
        return await self._save_row(record)

    async def delete(self, record_id: int) -> int:
        """
        Удаляет запись по ID.

        Returns:
            Количество удалённых строк
        """
        status = await self._db.execute(f"DELETE FROM {self.table} WHERE id = $1", record_id)
        return affected_rows(status)

    async def remove(self, record: ModelT) -> None:
        """Удаляет переданную запись."""
        await self.delete(record.id)  # type: ignore[attr-defined]
