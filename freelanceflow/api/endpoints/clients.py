"""
Clients API Endpoints

CRUD for the current user's clients, plus a listing with invoice-derived
figures (billed revenue, invoice count, last invoice date).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from freelanceflow.api.dependencies import get_current_user_id, get_storage
from freelanceflow.schemas.client import ClientCreate, ClientOut, ClientUpdate, ClientWithStats
from freelanceflow.services.dashboard import get_clients_with_stats
from freelanceflow.storage.interface import Storage

router = APIRouter()

CLIENT_NOT_FOUND = "Client not found"


@router.get("/", response_model=List[ClientOut])
async def list_clients(
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    return await storage.clients.list(user_id)


@router.get("/with-stats", response_model=List[ClientWithStats])
async def list_clients_with_stats(
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    """
    List clients with totalRevenue, projectCount and lastInvoiceDate.

    totalRevenue counts every invoice of the client, paid or not.
    """
    return await get_clients_with_stats(storage, user_id)


@router.post("/", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    return await storage.clients.create(user_id, client_data)


@router.get("/{client_id}", response_model=ClientOut)
async def get_client(
    client_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    client = await storage.clients.get(client_id, user_id)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=CLIENT_NOT_FOUND)
    return client


@router.put("/{client_id}", response_model=ClientOut)
@router.patch("/{client_id}", response_model=ClientOut)
async def update_client(
    client_id: int,
    client_update: ClientUpdate,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    """
    Update a client. Only the fields present in the body change.
    """
    client = await storage.clients.update(client_id, user_id, client_update)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=CLIENT_NOT_FOUND)
    return client


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    """
    Delete a client.

    The client's invoices and payments are kept; they keep counting in the
    dashboard totals.
    """
    if not await storage.clients.delete(client_id, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=CLIENT_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
