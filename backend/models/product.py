# backend/models/product.py
import logging
from pathlib import Path
from typing import List, Optional, Union

from database import CollectionFile
from schemas.product import Product, ProductUpdate

logger = logging.getLogger(__name__)

# ProductStore
# Owns the product collection document. Every operation re-reads the file,
# mutating operations rewrite it in full inside a collection transaction.
class ProductStore:
    def __init__(self, path: Union[str, Path]):
        self.collection = CollectionFile(path, Product)

    async def add_product(
        self,
        title: str,
        description: str,
        code: str,
        price: float,
        stock: int,
        category: str,
        thumbnails: Optional[List[str]] = None,
    ) -> Product:
        """Always inserts a new active product, even if the title already exists."""
        async with self.collection.transaction() as products:
            product = Product(
                id=self.collection.next_id(products),
                title=title, description=description, code=code,
                price=price, status=True, stock=stock,
                category=category, thumbnails=thumbnails or [],
            )
            products.append(product)

        logger.info("Product %s created (title=%r)", product.id, product.title)
        return product

    async def add_or_update_product(
        self,
        title: str,
        description: str,
        code: str,
        price: float,
        status: bool,
        stock: int,
        category: str,
        thumbnails: Optional[List[str]] = None,
    ) -> Product:
        """
        Restock by title. If a product with exactly this title exists, only
        its stock grows by ``stock`` and every other argument is ignored.
        Otherwise a new product is inserted with the given status.
        """
        async with self.collection.transaction() as products:
            existing = next((p for p in products if p.title == title), None)
            if existing:
                existing.stock += stock
                product = existing
            else:
                product = Product(
                    id=self.collection.next_id(products),
                    title=title, description=description, code=code,
                    price=price, status=status, stock=stock,
                    category=category, thumbnails=thumbnails or [],
                )
                products.append(product)

        logger.info("Product %s upserted (stock=%s)", product.id, product.stock)
        return product

    async def update_product(self, product_id: int, patch: ProductUpdate) -> Optional[Product]:
        async with self.collection.transaction() as products:
            product = next((p for p in products if p.id == product_id), None)
            if product is None:
                return None
            for key, value in patch.changes().items():
                setattr(product, key, value)

        logger.info("Product %s updated", product_id)
        return product

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        products = await self.collection.load_all()
        return next((p for p in products if p.id == product_id), None)

    async def get_all_products(self, limit: Optional[int] = None) -> List[Product]:
        products = await self.collection.load_all()
        if limit and limit > 0:
            return products[:limit]
        return products

    async def delete_product(self, product_id: int) -> bool:
        async with self.collection.transaction() as products:
            remaining = [p for p in products if p.id != product_id]
            removed = len(remaining) != len(products)
            products[:] = remaining

        if removed:
            logger.info("Product %s deleted", product_id)
        return removed
