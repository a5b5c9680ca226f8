"""
In-memory storage.

Records are kept as validated ``*Out`` schemas in plain dictionaries. Each
repository allocates ids from its own counter, starting at 1.
"""

import itertools
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Type

from freelanceflow.schemas.client import ClientOut
from freelanceflow.schemas.expense import ExpenseOut
from freelanceflow.schemas.invoice import InvoiceOut
from freelanceflow.schemas.payment import PaymentOut
from freelanceflow.storage.interface import (
    CreateT,
    Patch,
    RecordT,
    Repository,
    Storage,
    patch_values,
)


class MemoryRepository(Repository[RecordT, CreateT]):

    def __init__(
        self,
        schema: Type[RecordT],
        sort_key: Optional[Callable[[RecordT], object]] = None,
        newest_first: bool = False,
    ):
        self.schema = schema
        self.sort_key = sort_key or (lambda record: record.id)
        self.newest_first = newest_first
        self.records: Dict[int, RecordT] = {}
        self._ids = itertools.count(1)

    async def list(self, user_id: int) -> List[RecordT]:
        owned = [record for record in self.records.values() if record.user_id == user_id]
        return sorted(owned, key=self.sort_key, reverse=self.newest_first)

    async def get(self, record_id: int, user_id: int) -> Optional[RecordT]:
        record = self.records.get(record_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    async def create(self, user_id: int, data: CreateT) -> RecordT:
        record = self.schema.model_validate({
            **data.model_dump(),
            "id": next(self._ids),
            "user_id": user_id,
            "created_at": datetime.now(timezone.utc),
        })
        self.records[record.id] = record
        return record

    async def update(self, record_id: int, user_id: int, patch: Patch) -> Optional[RecordT]:
        record = await self.get(record_id, user_id)
        if record is None:
            return None

        values = patch_values(patch)
        # Identity and ownership are not patchable
        for field in ("id", "user_id", "created_at"):
            values.pop(field, None)

        updated = self.schema.model_validate({**record.model_dump(), **values})
        self.records[record_id] = updated
        return updated

    async def delete(self, record_id: int, user_id: int) -> bool:
        if await self.get(record_id, user_id) is None:
            return False
        del self.records[record_id]
        return True


class MemoryStorage(Storage):
    """
    Process-local storage used by tests and local demos.
    """

    def __init__(self):
        self.clients = MemoryRepository(ClientOut)
        self.invoices = MemoryRepository(
            InvoiceOut,
            sort_key=lambda invoice: (invoice.created_at, invoice.id),
            newest_first=True,
        )
        self.expenses = MemoryRepository(
            ExpenseOut,
            sort_key=lambda expense: (expense.date, expense.id),
            newest_first=True,
        )
        self.payments = MemoryRepository(
            PaymentOut,
            sort_key=lambda payment: (payment.created_at, payment.id),
            newest_first=True,
        )
