from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import datetime

class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

class CategoryCreate(CategoryBase):
    pass

class Category(CategoryBase):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ProductBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: float = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    category_id: int
    images: List[str] = Field(default_factory=list)

class ProductCreate(ProductBase):
    pass

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = None
    images: Optional[List[str]] = None

class Product(ProductBase):
    id: int
    category: Optional[str] = Field(None, validation_alias="category_name")

    class Config:
        from_attributes = True
        populate_by_name = True

class PriceRange(BaseModel):
    """Inclusive price bounds parsed out of a search query."""
    min: Optional[int] = None
    max: Optional[int] = None

    @model_validator(mode="after")
    def check_has_bound(self):
        if self.min is None and self.max is None:
            raise ValueError("A price range needs at least one bound")
        return self

class SearchParams(BaseModel):
    query: str
    price_range: Optional[PriceRange] = Field(None, alias="priceRange")
    materials: List[str] = Field(default_factory=list)
    product_types: List[str] = Field(default_factory=list, alias="productTypes")

    class Config:
        populate_by_name = True

class SearchResult(BaseModel):
    id: int
    name: str
    description: str
    price: float
    category: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    stock: int
    relevance: int = 0

class SearchResponse(BaseModel):
    success: bool = True
    message: str
    count: int
    search_params: SearchParams = Field(..., alias="searchParams")
    products: List[SearchResult]

    class Config:
        populate_by_name = True
