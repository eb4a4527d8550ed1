# backend/storefront/schemas/product_schema.py
from typing import Optional
from pydantic import BaseModel, Field
from pydantic import ConfigDict

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    category: str
    price: int
    display_price: str
    image: Optional[str] = None
    description: Optional[str] = None
    stock: int

class ProductIn(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    category: str = ""
    price: int = Field(..., ge=0)
    image: Optional[str] = None
    description: Optional[str] = None
    stock: int = Field(0, ge=0)

class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1)
