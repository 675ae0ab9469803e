# scms/core/transports/repository.py
"""
Репозиторий транспорта.
"""

from __future__ import annotations

from scms.core.records import RecordRepository
from scms.core.transports.models import Transport


class TransportRepository(RecordRepository[Transport]):
    """Репозиторий транспорта. Связей не имеет, адресуется только по id."""

    table = "transports"
    model = Transport
    columns = ("name", "transport_type", "plate_number", "capacity")
