"""
Product (inventory) API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from retail_ledger.api.dependencies import get_store
from retail_ledger.schemas.inventory import Product
from retail_ledger.services import reporting_service
from retail_ledger.services.store import SnapshotStore

router = APIRouter(prefix="/products", tags=["Inventory"])


@router.get("", response_model=list[Product])
def list_products(
    search: str | None = None,
    store: SnapshotStore = Depends(get_store),
):
    """List products, optionally filtered by name or SKU."""
    products = store.snapshot.products
    if search:
        needle = search.lower()
        products = [
            p for p in products
            if needle in p.name.lower() or needle in p.sku.lower()
        ]
    return products


@router.get("/low-stock", response_model=list[Product])
def list_low_stock(store: SnapshotStore = Depends(get_store)):
    """Products at or below their reorder threshold."""
    return reporting_service.low_stock_products(store.snapshot)


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: str,
    store: SnapshotStore = Depends(get_store),
):
    product = store.snapshot.find_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return product


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    request: Product,
    store: SnapshotStore = Depends(get_store),
):
    """
    Edit a product directly.

    This is a manual correction: stock set here does not create
    a transaction and no party balance moves.
    """
    if request.id != product_id:
        raise HTTPException(
            status_code=400,
            detail=f"Product id {request.id} does not match path {product_id}",
        )
    try:
        store.update_product(request)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return request
