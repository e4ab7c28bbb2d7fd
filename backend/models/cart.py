# backend/models/cart.py
import logging
from pathlib import Path
from typing import Optional, Union

from database import CollectionFile
from schemas.cart import Cart, CartLineItem

logger = logging.getLogger(__name__)

# Owns the cart collection document
class CartStore:
    def __init__(self, path: Union[str, Path]):
        self.collection = CollectionFile(path, Cart)

    async def create_cart(self) -> Cart:
        async with self.collection.transaction() as carts:
            cart = Cart(id=self.collection.next_id(carts), products=[])
            carts.append(cart)

        logger.info("Cart %s created", cart.id)
        return cart

    async def get_cart_by_id(self, cart_id: int) -> Optional[Cart]:
        carts = await self.collection.load_all()
        return next((c for c in carts if c.id == cart_id), None)

    async def add_product_to_cart(self, cart_id: int, product_id: int) -> Optional[Cart]:
        # The product id is not checked against the catalog
        async with self.collection.transaction() as carts:
            cart = next((c for c in carts if c.id == cart_id), None)
            if cart is None:
                return None

            item = next((it for it in cart.products if it.product == product_id), None)
            if item:
                item.quantity += 1
            else:
                cart.products.append(CartLineItem(product=product_id, quantity=1))

        logger.info("Product %s added to cart %s", product_id, cart_id)
        return cart
