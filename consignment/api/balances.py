from fastapi import APIRouter, Depends, Query, Response
from typing import List, Optional

from consignment.services.client_service import ClientService
from consignment.services.export import balances_csv
from consignment.services.reconciliation import calculate_balance, client_balance
from consignment.services.search import ClientFilter
from consignment.utils.storage import StorageService, get_storage
from consignment.schemas.client import BalanceListResponse, ClientSummary

router = APIRouter(prefix="/balances", tags=["Balances"])


@router.get(
    "/",
    response_model=BalanceListResponse,
    summary="Outstanding balances",
    description="Outstanding balance of every client matching the search and filters."
)
def list_balances(
    search: Optional[str] = Query(None, description="Search by client name or code"),
    filters: List[ClientFilter] = Query([], description="Balance filters, any of them may match"),
    storage: StorageService = Depends(get_storage)
):
    """
    Get the balance overview.

    Balances are always computed from the held products, never stored.
    """
    clients = ClientService(storage).search(search, filters)

    return BalanceListResponse(
        items=[
            ClientSummary(
                id=c.id,
                name=c.name,
                code=c.code,
                product_count=len(c.products),
                balance=round(client_balance(c), 2)
            )
            for c in clients
        ],
        total=len(clients),
        total_balance=round(calculate_balance(p for c in clients for p in c.products), 2)
    )


@router.get(
    "/export",
    summary="Export balances as CSV",
    description="Export the balance overview for the clients matching the search and filters."
)
def export_balances(
    search: Optional[str] = Query(None, description="Search by client name or code"),
    filters: List[ClientFilter] = Query([], description="Balance filters, any of them may match"),
    storage: StorageService = Depends(get_storage)
):
    """Export the balance overview."""
    clients = ClientService(storage).search(search, filters)
    return Response(
        content=balances_csv(clients),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="balances.csv"'}
    )
