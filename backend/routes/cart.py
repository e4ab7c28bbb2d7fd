# backend/routes/cart.py
from fastapi import APIRouter, Depends, HTTPException, status, Request

from database import get_cart_store
from models.cart import CartStore
from utils.audit import write_log
from utils.ids import parse_id
from schemas.cart import Cart

router = APIRouter(prefix="/api/carts", tags=["Cart"])

@router.post("", response_model=Cart, status_code=status.HTTP_201_CREATED)
async def create_cart(request: Request, store: CartStore = Depends(get_cart_store)):
    cart = await store.create_cart()

    write_log(
        action="CART_CREATE",
        resource="cart",
        ip=request.client.host if request.client else None,
        meta={"cart_id": cart.id},
    )
    return cart

@router.get("/{cart_id}", response_model=Cart)
async def get_cart(cart_id: str, store: CartStore = Depends(get_cart_store)):
    cid = parse_id(cart_id)
    cart = await store.get_cart_by_id(cid) if cid is not None else None
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return cart

@router.post("/{cart_id}/product/{product_id}", response_model=Cart)
async def add_to_cart(
    cart_id: str,
    product_id: str,
    request: Request,
    store: CartStore = Depends(get_cart_store),
):
    cid = parse_id(cart_id)
    pid = parse_id(product_id)
    # A product id that is not a number can never reference a product
    if pid is None:
        raise HTTPException(status_code=404, detail="Product not found")

    cart = await store.add_product_to_cart(cid, pid) if cid is not None else None
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")

    write_log(
        action="CART_ADD",
        resource="cart",
        ip=request.client.host if request.client else None,
        meta={"cart_id": cart.id, "product_id": pid, "cart_items": len(cart.products)},
    )
    return cart
