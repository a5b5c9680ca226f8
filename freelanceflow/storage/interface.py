"""
Abstract storage interface.

Every entity (clients, invoices, expenses, payments) is reached through a
``Repository`` with the same five owner-scoped operations. A ``Storage``
bundles one repository per entity, so the dashboard and the API never need to
know whether records live in PostgreSQL or in memory.

Ownership rules shared by all implementations:
- ``get``/``update``/``delete`` behave as if the record did not exist when it
  belongs to another user.
- ``delete`` never cascades to other entities.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel

from freelanceflow.schemas.client import ClientCreate, ClientOut
from freelanceflow.schemas.expense import ExpenseCreate, ExpenseOut
from freelanceflow.schemas.invoice import InvoiceCreate, InvoiceOut
from freelanceflow.schemas.payment import PaymentCreate, PaymentOut

RecordT = TypeVar("RecordT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)

Patch = Union[BaseModel, Dict[str, Any]]


def patch_values(patch: Patch) -> Dict[str, Any]:
    """Fields to change. For schemas, only the fields the caller actually sent."""
    if isinstance(patch, BaseModel):
        return patch.model_dump(exclude_unset=True)
    return dict(patch)


class Repository(ABC, Generic[RecordT, CreateT]):
    """
    Owner-scoped CRUD for one entity type.
    """

    @abstractmethod
    async def list(self, user_id: int) -> List[RecordT]:
        """
        All records owned by a user, in the entity's listing order.
        """
        pass

    @abstractmethod
    async def get(self, record_id: int, user_id: int) -> Optional[RecordT]:
        """
        Retrieve one record.

        Returns:
            The record, or None when it is missing or owned by someone else
        """
        pass

    @abstractmethod
    async def create(self, user_id: int, data: CreateT) -> RecordT:
        """
        Store a new record for a user.

        A new id is allocated and created_at is stamped.

        Returns:
            The stored record
        """
        pass

    @abstractmethod
    async def update(self, record_id: int, user_id: int, patch: Patch) -> Optional[RecordT]:
        """
        Merge patch fields into an existing record.

        Returns:
            The updated record, or None when not found
        """
        pass

    @abstractmethod
    async def delete(self, record_id: int, user_id: int) -> bool:
        """
        Remove a record.

        Returns:
            True if a record was removed
        """
        pass


class Storage(ABC):
    """
    One repository per entity.
    """
    clients: Repository[ClientOut, ClientCreate]
    invoices: Repository[InvoiceOut, InvoiceCreate]
    expenses: Repository[ExpenseOut, ExpenseCreate]
    payments: Repository[PaymentOut, PaymentCreate]
