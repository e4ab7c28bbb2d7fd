import asyncio
import os
import sys

# Add 'backend' folder to Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from config import settings
from models.product import ProductStore

# Demo catalog. The last entry repeats "Producto 1" so its stock is merged (10 + 5)
DEMO_PRODUCTS = [
    {"title": "Producto 1", "description": "Desc. prod 1", "code": "Code-Prod1", "price": 1000, "status": True, "stock": 10, "category": "Hardware", "thumbnails": ["/"]},
    {"title": "Producto 2", "description": "Desc. prod 2", "code": "Code-Prod2", "price": 100, "status": True, "stock": 100, "category": "Software", "thumbnails": ["/"]},
    {"title": "Producto 3", "description": "Desc. prod 3", "code": "Code-Prod3", "price": 200, "status": True, "stock": 20, "category": "Software", "thumbnails": ["/"]},
    {"title": "Producto 4", "description": "Desc. prod 4", "code": "Code-Prod4", "price": 350, "status": True, "stock": 32, "category": "Software", "thumbnails": ["/"]},
    {"title": "Producto 5", "description": "Desc. prod 5", "code": "Code-Prod5", "price": 2000, "status": True, "stock": 8, "category": "Hardware", "thumbnails": ["/"]},
    {"title": "Producto 1", "description": "Desc. prod 1", "code": "Code-Prod1", "price": 1000, "status": True, "stock": 5, "category": "Hardware", "thumbnails": ["/"]},
]

async def load_all_data(store: ProductStore, products=DEMO_PRODUCTS):
    """Adds or restocks every demo product and returns the resulting records."""
    results = []
    for item in products:
        product = await store.add_or_update_product(**item)
        print(f"Product added or updated: {product.model_dump()}")
        results.append(product)
    return results

if __name__ == "__main__":
    asyncio.run(load_all_data(ProductStore(settings.products_path)))
