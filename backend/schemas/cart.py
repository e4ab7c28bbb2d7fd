from pydantic import BaseModel, Field
from typing import List

# A single (product id, quantity) entry within a cart
class CartLineItem(BaseModel):
    product: int
    quantity: int = Field(1, ge=1)

# Stored cart record, one element of the carts document
class Cart(BaseModel):
    id: int = Field(gt=0)
    products: List[CartLineItem] = Field(default_factory=list)
