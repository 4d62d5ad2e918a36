from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List, Optional

from consignment.services.client_service import ClientService, ClientNotFoundError
from consignment.services.export import clients_csv
from consignment.services.product_service import ProductNotFoundError
from consignment.services.search import ClientFilter
from consignment.utils.storage import StorageService, get_storage
from consignment.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
    AttachProductRequest,
    AdjustQuantityRequest
)

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post(
    "/",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new client",
    description="Register a client. New clients hold no products."
)
def create_client(
    client_data: ClientCreate,
    storage: StorageService = Depends(get_storage)
):
    """
    Create a new client.

    - **name**: Client name, at least 2 characters (required)
    - **code**: Client code, at least 2 characters (required)
    - **address**: Address, at least 5 characters (required)
    - **phone**: Phone, at least 5 characters (required)
    """
    service = ClientService(storage)
    return ClientResponse.from_client(service.create(client_data))


@router.get(
    "/",
    response_model=ClientListResponse,
    summary="List all clients",
    description="Get a paginated list of clients with optional search and balance filters."
)
def list_clients(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(None, description="Search by client name or code"),
    filters: List[ClientFilter] = Query([], description="Balance filters, any of them may match"),
    storage: StorageService = Depends(get_storage)
):
    """Get paginated list of clients."""
    service = ClientService(storage)
    clients, total, total_pages = service.get_all(page, page_size, search, filters)

    return ClientListResponse(
        items=[ClientResponse.from_client(c) for c in clients],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages
    )


@router.get(
    "/export",
    summary="Export clients as CSV",
    description="Export the clients matching the search and filters, with balances and held products."
)
def export_clients(
    search: Optional[str] = Query(None, description="Search by client name or code"),
    filters: List[ClientFilter] = Query([], description="Balance filters, any of them may match"),
    storage: StorageService = Depends(get_storage)
):
    """Export the filtered client list."""
    service = ClientService(storage)
    return Response(
        content=clients_csv(service.search(search, filters)),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="clients.csv"'}
    )


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Get client by ID",
    description="Get a client with its held products and outstanding balance."
)
def get_client(
    client_id: int,
    storage: StorageService = Depends(get_storage)
):
    """Get a client by ID."""
    service = ClientService(storage)
    client = service.get_by_id(client_id)

    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client with ID {client_id} not found"
        )

    return ClientResponse.from_client(client)


@router.put(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Update a client",
    description="Update client contact details. Only provided fields will be updated."
)
def update_client(
    client_id: int,
    client_data: ClientUpdate,
    storage: StorageService = Depends(get_storage)
):
    """Update a client. Held products are left unchanged."""
    service = ClientService(storage)

    try:
        return ClientResponse.from_client(service.update(client_id, client_data))
    except ClientNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a client",
    description="Delete a client together with the products it holds."
)
def delete_client(
    client_id: int,
    storage: StorageService = Depends(get_storage)
):
    """Delete a client."""
    service = ClientService(storage)

    try:
        service.delete(client_id)
    except ClientNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return None


@router.post(
    "/{client_id}/products",
    response_model=ClientResponse,
    summary="Attach a product to a client",
    description="""
    Hand a catalog product to a client.

    If the client already holds the product the quantities are added
    together and the purchase date refreshed; otherwise a copy of the
    catalog product is appended to the client's holdings.
    """
)
def attach_product(
    client_id: int,
    attach_data: AttachProductRequest,
    storage: StorageService = Depends(get_storage)
):
    """
    Attach a product.

    - **product_id**: ID of the catalog product (required)
    - **quantity**: Units to hand over, default is 1 (optional)
    """
    service = ClientService(storage)

    try:
        client = service.attach_product(client_id, attach_data.product_id, attach_data.quantity)
    except (ClientNotFoundError, ProductNotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return ClientResponse.from_client(client)


@router.patch(
    "/{client_id}/products/{product_id}",
    response_model=ClientResponse,
    summary="Adjust a held quantity",
    description="Shift the quantity of a held product by a signed delta. Quantities never go below zero."
)
def adjust_quantity(
    client_id: int,
    product_id: int,
    adjust_data: AdjustQuantityRequest,
    storage: StorageService = Depends(get_storage)
):
    """Adjust a held quantity. Unknown product ids leave the client unchanged."""
    service = ClientService(storage)

    try:
        client = service.adjust_quantity(client_id, product_id, adjust_data.delta)
    except ClientNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return ClientResponse.from_client(client)


@router.delete(
    "/{client_id}/products/{product_id}",
    response_model=ClientResponse,
    summary="Remove a held product",
    description="Drop a product from the client's holdings."
)
def remove_product(
    client_id: int,
    product_id: int,
    storage: StorageService = Depends(get_storage)
):
    """Remove a held product."""
    service = ClientService(storage)

    try:
        client = service.remove_product(client_id, product_id)
    except ClientNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return ClientResponse.from_client(client)
