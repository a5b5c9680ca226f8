"""
SQLAlchemy-backed storage.

One ``DatabaseStorage`` wraps the request's ``AsyncSession``. Every write
commits immediately; there is no transaction spanning several entities.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from pydantic_core import to_jsonable_python
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freelanceflow.models.client import Client
from freelanceflow.models.expense import Expense
from freelanceflow.models.invoice import Invoice
from freelanceflow.models.payment import Payment
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

logger = logging.getLogger(__name__)

PROTECTED_COLUMNS = ("id", "user_id", "created_at")


class SQLRepository(Repository[RecordT, CreateT]):

    def __init__(
        self,
        session: AsyncSession,
        model: Type[Any],
        schema: Type[RecordT],
        order_by: Sequence[Any],
        json_columns: Tuple[str, ...] = (),
    ):
        self.session = session
        self.model = model
        self.schema = schema
        self.order_by = order_by
        self.json_columns = json_columns

    def _column_values(self, values: Dict[str, Any]) -> Dict[str, Any]:
        for column in self.json_columns:
            if values.get(column) is not None:
                values[column] = to_jsonable_python(values[column])
        return values

    async def _get_row(self, record_id: int, user_id: int):
        result = await self.session.execute(
            select(self.model).where(
                self.model.id == record_id,
                self.model.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def list(self, user_id: int) -> List[RecordT]:
        result = await self.session.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(*self.order_by)
        )
        return [self.schema.model_validate(row) for row in result.scalars().all()]

    async def get(self, record_id: int, user_id: int) -> Optional[RecordT]:
        row = await self._get_row(record_id, user_id)
        if row is None:
            return None
        return self.schema.model_validate(row)

    async def create(self, user_id: int, data: CreateT) -> RecordT:
        row = self.model(**self._column_values(data.model_dump()), user_id=user_id)
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)

        logger.info(f"Created {self.model.__tablename__} id={row.id} for user {user_id}")
        return self.schema.model_validate(row)

    async def update(self, record_id: int, user_id: int, patch: Patch) -> Optional[RecordT]:
        row = await self._get_row(record_id, user_id)
        if row is None:
            return None

        values = self._column_values(patch_values(patch))
        for field, value in values.items():
            if field not in PROTECTED_COLUMNS:
                setattr(row, field, value)

        await self.session.commit()
        await self.session.refresh(row)
        return self.schema.model_validate(row)

    async def delete(self, record_id: int, user_id: int) -> bool:
        row = await self._get_row(record_id, user_id)
        if row is None:
            return False

        await self.session.delete(row)
        await self.session.commit()

        logger.info(f"Deleted {self.model.__tablename__} id={record_id} for user {user_id}")
        return True


class DatabaseStorage(Storage):

    def __init__(self, session: AsyncSession):
        self.session = session
        self.clients = SQLRepository(session, Client, ClientOut, order_by=[Client.id])
        self.invoices = SQLRepository(
            session, Invoice, InvoiceOut,
            order_by=[Invoice.created_at.desc(), Invoice.id.desc()],
            json_columns=("items",),
        )
        self.expenses = SQLRepository(
            session, Expense, ExpenseOut,
            order_by=[Expense.date.desc(), Expense.id.desc()],
        )
        self.payments = SQLRepository(
            session, Payment, PaymentOut,
            order_by=[Payment.created_at.desc(), Payment.id.desc()],
        )
