from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List, Optional

from consignment.schemas.client import ClientResponse
from consignment.services.export import products_csv
from consignment.services.product_service import ProductService, ProductNotFoundError
from consignment.services.search import ProductFilter
from consignment.utils.storage import StorageService, get_storage
from consignment.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ProductImportRequest,
    ProductImportResponse
)

router = APIRouter(prefix="/products", tags=["Products"])


@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Add a product to the end of the catalog."
)
def create_product(
    product_data: ProductCreate,
    storage: StorageService = Depends(get_storage)
):
    """
    Create a new product.

    - **code**: Product code (required)
    - **name**: Product name, at least 2 characters (required)
    - **price**: Unit price, must be positive (required)
    - **inventory**: Units held by the shop, must be non-negative (required)
    """
    service = ProductService(storage)
    return service.create(product_data)


@router.get(
    "/",
    response_model=ProductListResponse,
    summary="List all products",
    description="Get a paginated list of catalog products with optional search and stock filters."
)
def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(None, description="Search by product name or code"),
    filters: List[ProductFilter] = Query([], description="Stock filters, any of them may match"),
    storage: StorageService = Depends(get_storage)
):
    """Get paginated list of products."""
    service = ProductService(storage)
    products, total, total_pages = service.get_all(page, page_size, search, filters)

    return ProductListResponse(
        items=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages
    )


@router.get(
    "/export",
    summary="Export products as CSV",
    description="Export the catalog, as filtered by search and stock filters, with the clients holding each product."
)
def export_products(
    search: Optional[str] = Query(None, description="Search by product name or code"),
    filters: List[ProductFilter] = Query([], description="Stock filters, any of them may match"),
    storage: StorageService = Depends(get_storage)
):
    """Export the filtered catalog."""
    service = ProductService(storage)
    content = products_csv(service.search(search, filters), storage.load_clients())
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="products.csv"'}
    )


@router.post(
    "/import",
    response_model=ProductImportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Bulk import products",
    description="Import products from tab-separated rows: code, name, inventory, price."
)
def import_products(
    import_data: ProductImportRequest,
    storage: StorageService = Depends(get_storage)
):
    """
    Import products pasted from a spreadsheet.

    Invalid lines are skipped. If no line yields a product the request
    fails with 400 and nothing is stored.
    """
    service = ProductService(storage)
    imported = service.import_products(import_data.data)

    if not imported:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid products found to import"
        )

    return ProductImportResponse(
        imported=len(imported),
        items=[ProductResponse.model_validate(p) for p in imported]
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Get detailed information about a specific product."
)
def get_product(
    product_id: int,
    storage: StorageService = Depends(get_storage)
):
    """Get a product by ID."""
    service = ProductService(storage)
    product = service.get_by_id(product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )

    return product


@router.get(
    "/{product_id}/clients",
    response_model=List[ClientResponse],
    summary="Clients holding a product",
    description="List the clients that currently hold a copy of the product."
)
def get_product_clients(
    product_id: int,
    storage: StorageService = Depends(get_storage)
):
    """Get the clients holding a product."""
    service = ProductService(storage)

    try:
        clients = service.holders(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return [ClientResponse.from_client(c) for c in clients]


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update a product",
    description="Update product details. Only provided fields will be updated."
)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    storage: StorageService = Depends(get_storage)
):
    """
    Update a product.

    Partial updates are supported - only include fields you want to change.
    Copies already held by clients keep their original details.
    """
    service = ProductService(storage)

    try:
        return service.update(product_id, product_data)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
    description="Delete a product from the catalog. Clients holding it keep their copy."
)
def delete_product(
    product_id: int,
    storage: StorageService = Depends(get_storage)
):
    """Delete a product."""
    service = ProductService(storage)

    try:
        service.delete(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return None
