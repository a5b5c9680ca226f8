"""
Expenses API Endpoints

CRUD for the current user's expenses.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from freelanceflow.api.dependencies import get_current_user_id, get_storage
from freelanceflow.schemas.expense import ExpenseCreate, ExpenseOut, ExpenseUpdate
from freelanceflow.storage.interface import Storage

router = APIRouter()

EXPENSE_NOT_FOUND = "Expense not found"


@router.get("/", response_model=List[ExpenseOut])
async def list_expenses(
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    """List expenses, most recent date first."""
    return await storage.expenses.list(user_id)


@router.post("/", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    return await storage.expenses.create(user_id, expense_data)


@router.get("/{expense_id}", response_model=ExpenseOut)
async def get_expense(
    expense_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    expense = await storage.expenses.get(expense_id, user_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=EXPENSE_NOT_FOUND)
    return expense


@router.put("/{expense_id}", response_model=ExpenseOut)
@router.patch("/{expense_id}", response_model=ExpenseOut)
async def update_expense(
    expense_id: int,
    expense_update: ExpenseUpdate,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    expense = await storage.expenses.update(expense_id, user_id, expense_update)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=EXPENSE_NOT_FOUND)
    return expense


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    if not await storage.expenses.delete(expense_id, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=EXPENSE_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
