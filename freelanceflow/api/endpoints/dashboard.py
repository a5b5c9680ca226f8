from fastapi import APIRouter, Depends

from freelanceflow.api.dependencies import get_current_user_id, get_storage
from freelanceflow.schemas.dashboard import DashboardStats
from freelanceflow.services.dashboard import get_dashboard_stats
from freelanceflow.storage.interface import Storage

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage)
):
    """
    Summary figures for the dashboard.

    - totalEarnings: Paid invoices
    - pendingPayments: Sent and Overdue invoices
    - monthlyExpenses: expenses dated in the current month
    - activeClients: clients with status Active
    - monthlyRevenue: Paid invoices per issue month, last 6 months
    - topClients: up to 5 clients by billed revenue
    """
    return await get_dashboard_stats(storage, user_id)
