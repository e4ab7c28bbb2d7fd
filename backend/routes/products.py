# backend/routes/products.py
from typing import Optional, List
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from database import get_product_store
from models.product import ProductStore
from utils.audit import write_log
from utils.ids import parse_id
import schemas.product as product_schemas

router = APIRouter(prefix="/api/products", tags=["Products"])

# ---- HELPERS ----
def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=List[product_schemas.Product])
async def list_products(
    request: Request,
    limit: Optional[int] = Query(None, description="Return only the first N products"),
    store: ProductStore = Depends(get_product_store),
):
    products = await store.get_all_products(limit)

    write_log(
        action="PRODUCTS_LIST", resource="products", ip=_client_ip(request),
        meta={"limit": limit, "returned": len(products)},
    )
    return products


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/{product_id}", response_model=product_schemas.Product)
async def get_product(product_id: str, store: ProductStore = Depends(get_product_store)):
    pid = parse_id(product_id)
    product = await store.get_product_by_id(pid) if pid is not None else None
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# CREATE PRODUCT
# =========================
@router.post("", response_model=product_schemas.Product, status_code=status.HTTP_201_CREATED)
async def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    store: ProductStore = Depends(get_product_store),
):
    product = await store.add_product(
        title=payload.title, description=payload.description, code=payload.code,
        price=payload.price, stock=payload.stock, category=payload.category,
        thumbnails=payload.thumbnails,
    )

    write_log(
        action="PRODUCT_CREATE", resource="products", ip=_client_ip(request),
        meta={"id": product.id, "code": product.code},
    )
    return product


# =========================
# ADD OR RESTOCK BY TITLE
# =========================
@router.post("/upsert", response_model=product_schemas.Product)
async def upsert_product(
    payload: product_schemas.ProductUpsert,
    request: Request,
    store: ProductStore = Depends(get_product_store),
):
    product = await store.add_or_update_product(
        title=payload.title, description=payload.description, code=payload.code,
        price=payload.price, status=payload.status, stock=payload.stock,
        category=payload.category, thumbnails=payload.thumbnails,
    )

    write_log(
        action="PRODUCT_UPSERT", resource="products", ip=_client_ip(request),
        meta={"id": product.id, "stock": product.stock},
    )
    return product


# =========================
# PARTIAL UPDATE
# =========================
@router.put("/{product_id}", response_model=product_schemas.Product)
async def update_product(
    product_id: str,
    request: Request,
    payload: dict = Body(...),
    store: ProductStore = Depends(get_product_store),
):
    if "id" in payload:
        raise HTTPException(status_code=400, detail="Product id cannot be updated")

    try:
        patch = product_schemas.ProductUpdate.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e

    pid = parse_id(product_id)
    product = await store.update_product(pid, patch) if pid is not None else None
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    write_log(
        action="PRODUCT_UPDATE", resource="products", ip=_client_ip(request),
        meta={"id": product.id, "fields": sorted(patch.changes())},
    )
    return product


# =========================
# DELETE
# =========================
@router.delete("/{product_id}")
async def delete_product(
    product_id: str, request: Request, store: ProductStore = Depends(get_product_store),
):
    pid = parse_id(product_id)
    deleted = await store.delete_product(pid) if pid is not None else False
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")

    write_log(action="PRODUCT_DELETE", resource="products", ip=_client_ip(request), meta={"id": pid})
    return {"deleted": True, "detail": f"Product {pid} deleted"}
