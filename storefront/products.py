from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional

from .database import get_db
from .models import Product
from .schemas import ProductCreate, ProductUpdate, Product as ProductSchema
from .categories import get_category_or_404
from .config import Settings, get_settings
from .exceptions import ResourceNotFoundError
from .logging_config import audit_log, error_log

product_router = APIRouter()

def get_product_or_404(db: Session, product_id: int) -> Product:
    product = (
        db.query(Product)
        .options(joinedload(Product.category))
        .filter(Product.id == product_id)
        .first()
    )
    if not product:
        raise ResourceNotFoundError("Product", product_id)
    return product

@product_router.post("", response_model=ProductSchema, status_code=201)
async def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db)
):
    get_category_or_404(db, payload.category_id)

    try:
        product = Product(**payload.model_dump())
        db.add(product)
        db.commit()
        db.refresh(product)
    except Exception as e:
        db.rollback()
        error_log(e, {"context": "create_product", "name": payload.name})
        raise HTTPException(status_code=400, detail=str(e))

    audit_log(action="product_created", product_id=product.id, category_id=product.category_id)
    return product

@product_router.get("", response_model=List[ProductSchema])
async def get_products(
    skip: int = 0,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    query = db.query(Product).options(joinedload(Product.category)).order_by(Product.id)
    return query.offset(skip).limit(limit or settings.DEFAULT_PAGE_SIZE).all()

@product_router.get("/category/{category_id}", response_model=List[ProductSchema])
async def get_products_by_category(
    category_id: int,
    db: Session = Depends(get_db)
):
    get_category_or_404(db, category_id)
    return (
        db.query(Product)
        .options(joinedload(Product.category))
        .filter(Product.category_id == category_id)
        .order_by(Product.id)
        .all()
    )

@product_router.get("/{product_id}", response_model=ProductSchema)
async def get_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    return get_product_or_404(db, product_id)

@product_router.put("/{product_id}", response_model=ProductSchema)
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db)
):
    product = get_product_or_404(db, product_id)

    updates = payload.model_dump(exclude_unset=True)
    if updates.get("category_id") is not None:
        get_category_or_404(db, updates["category_id"])

    try:
        # An explicit null leaves the column unchanged
        for field, value in updates.items():
            if value is not None:
                setattr(product, field, value)
        db.commit()
        db.refresh(product)
    except Exception as e:
        db.rollback()
        error_log(e, {"context": "update_product", "product_id": product_id})
        raise HTTPException(status_code=400, detail=str(e))

    audit_log(action="product_updated", product_id=product_id, fields=sorted(updates))
    return product

@product_router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    product = get_product_or_404(db, product_id)

    try:
        db.delete(product)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Error deleting product: {str(e)}")

    audit_log(action="product_deleted", product_id=product_id)
    return {"message": "Product deleted successfully"}
