# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Union


# Catalog fields shared by stored records and creation payloads
class ProductBase(BaseModel):
    title: str
    description: str
    code: str
    price: Union[int, float]
    stock: int = Field(ge=0)
    category: str
    thumbnails: List[str] = Field(default_factory=list)


# Stored product record, one element of the products document
class Product(ProductBase):
    id: int = Field(gt=0)
    status: bool = True


# Schema for creating a new product (status is always active)
class ProductCreate(ProductBase):
    pass


# Schema for add-or-update by title
class ProductUpsert(ProductBase):
    status: bool = True


# Schema for partial product updates
class ProductUpdate(BaseModel):
    """Patch payload - all fields optional. There is no id field, ids never change."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    price: Optional[Union[int, float]] = None
    status: Optional[bool] = None
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    thumbnails: Optional[List[str]] = None

    def changes(self) -> dict:
        # Only fields the caller actually sent
        return self.model_dump(exclude_unset=True, exclude_none=True)
